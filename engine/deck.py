"""Deck creation and dealing for Last Trick."""

from __future__ import annotations

from random import Random
from typing import Iterable, List, Optional, Sequence

from .cards import Card, Suit, RANK_ORDER

DECK_SIZE = 52


class DeckError(RuntimeError):
    """Raised when the deck cannot satisfy a deal."""


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck."""
    return [Card(suit, rank) for suit in Suit for rank in RANK_ORDER]


def stack_deck(top_cards: Iterable[Card]) -> List[Card]:
    """Return a full deck order with ``top_cards`` dealt first, in order."""
    top = list(top_cards)
    if len(set(top)) != len(top):
        raise ValueError("Stacked cards must be distinct.")
    rest = [card for card in build_deck() if card not in top]
    return top + rest


class Deck:
    """The round's deck; dealt from the front."""

    def __init__(self, order: Optional[Sequence[Card]] = None) -> None:
        self.cards: List[Card] = []
        if order is None:
            self.initialize()
        else:
            self.load(order)

    def initialize(self) -> None:
        self.cards = build_deck()

    def load(self, order: Sequence[Card]) -> None:
        cards = list(order)
        if len(cards) != DECK_SIZE or len(set(cards)) != DECK_SIZE:
            raise ValueError("Deck must contain exactly 52 distinct cards.")
        self.cards = cards

    def shuffle(self, rng: Optional[Random] = None) -> None:
        # Random.shuffle is an in-place Fisher-Yates shuffle.
        (rng or Random()).shuffle(self.cards)

    def deal(self, count: int) -> List[Card]:
        if count > len(self.cards):
            raise DeckError(f"Cannot deal {count} cards from {len(self.cards)} remaining.")
        dealt = self.cards[:count]
        del self.cards[:count]
        return dealt

    def __len__(self) -> int:
        return len(self.cards)
