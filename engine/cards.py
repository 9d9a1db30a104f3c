"""Card-related data structures and helpers for Last Trick."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

CARD_FRONTS_DIR = "assets/cards/fronts"
CARD_BACKS_DIR = "assets/cards/backs"


class Suit(Enum):
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "jack"
    QUEEN = "queen"
    KING = "king"
    ACE = "ace"

    def __str__(self) -> str:
        return self.value


# Rank order from lowest to highest.
RANK_ORDER: list[Rank] = list(Rank)

# Comparison values: 2 -> 2 ... ace -> 14.
RANK_VALUES: dict[Rank, int] = {rank: index + 2 for index, rank in enumerate(RANK_ORDER)}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    suit: Suit
    rank: Rank

    def value(self) -> int:
        return RANK_VALUES[self.rank]

    def __str__(self) -> str:
        return card_label(self)


def rank_value(rank: Rank) -> int:
    return RANK_VALUES[rank]


def card_key(card: Card) -> str:
    """Return the ``{suit}_{rank}`` key used for assets and logs."""
    return f"{card.suit.value}_{card.rank.value}"


def parse_card_key(key: str) -> Card:
    suit_name, sep, rank_name = key.partition("_")
    if not sep:
        raise ValueError(f"Malformed card key: {key!r}")
    return Card(Suit(suit_name), Rank(rank_name))


def card_asset_path(card: Card) -> str:
    return f"{CARD_FRONTS_DIR}/{card_key(card)}.svg"


def card_back_path(back: str) -> str:
    return f"{CARD_BACKS_DIR}/{back}"


def serialize_card(card: Card) -> dict[str, str]:
    return {"suit": card.suit.value, "rank": card.rank.value}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    try:
        return Card(Suit(str(payload["suit"]).lower()), Rank(str(payload["rank"]).lower()))
    except KeyError as exc:
        raise ValueError(f"Card payload missing field {exc}") from exc


def card_label(card: Card) -> str:
    return f"{card.rank.value} of {card.suit.value}"
