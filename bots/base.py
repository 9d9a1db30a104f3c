"""Common bot strategy interfaces and card-picking helpers."""

from __future__ import annotations

from typing import Dict, List, Sequence, Set

from engine.cards import Card, Suit
from engine.state import TRICKS_PER_ROUND, GameState
from engine.trick import Player


class BotStrategy:
    """Base class for AI policies.

    Strategies only read what the deciding side can observe: its own hand,
    the card on the table, the trick number and the resolved tricks.
    """

    name: str = "BaseBot"

    def choose_card(self, state: GameState, player: Player) -> Card:
        legal = state.get_valid_cards(player)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return legal[0]


def lowest_card(cards: Sequence[Card]) -> Card:
    # min/max keep the first card on value ties.
    return min(cards, key=lambda c: c.value())


def highest_card(cards: Sequence[Card]) -> Card:
    return max(cards, key=lambda c: c.value())


def group_by_suit(cards: Sequence[Card]) -> Dict[Suit, List[Card]]:
    """Group cards by suit, keeping first-seen suit order."""
    groups: Dict[Suit, List[Card]] = {}
    for card in cards:
        groups.setdefault(card.suit, []).append(card)
    return groups


def is_final_trick(state: GameState) -> bool:
    return state.trick_number == TRICKS_PER_ROUND


def lead_on_table(state: GameState) -> Card:
    if state.is_leading or state.lead_card is None:
        raise RuntimeError("No lead card to follow.")
    return state.lead_card


def higher_played_count(card: Card, played: Sequence[Card]) -> int:
    return sum(1 for c in played if c.suit is card.suit and c.value() > card.value())


def opponent_voids(state: GameState, player: Player) -> Set[Suit]:
    """Suits the opponent showed out of when ``player`` led."""
    voids: Set[Suit] = set()
    for record in state.trick_history:
        if record.lead_player is player and record.follow_card.suit is not record.lead_card.suit:
            voids.add(record.lead_card.suit)
    return voids


def best_card_to_win(state: GameState, legal: Sequence[Card]) -> Card:
    """Final-trick play: lead the highest card, or follow as cheaply as possible."""
    if state.is_leading:
        return highest_card(legal)

    lead = lead_on_table(state)
    same_suit = [card for card in legal if card.suit is lead.suit]
    if not same_suit:
        return lowest_card(legal)
    winners = [card for card in same_suit if card.value() > lead.value()]
    if winners:
        return lowest_card(winners)
    return lowest_card(same_suit)
