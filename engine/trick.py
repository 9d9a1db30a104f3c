"""Trick records and resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .cards import Card


class Player(Enum):
    PLAYER = "player"
    AI = "ai"

    @property
    def other(self) -> "Player":
        return Player.AI if self is Player.PLAYER else Player.PLAYER

    def __str__(self) -> str:
        return self.value


def follow_beats_lead(lead_card: Card, follow_card: Card) -> bool:
    """Return True if the follow card takes the trick.

    There is no trump: an off-suit follow card never wins.
    """
    if follow_card.suit is not lead_card.suit:
        return False
    return follow_card.value() > lead_card.value()


def trick_winner(lead_player: Player, lead_card: Card, follow_card: Card) -> Player:
    if follow_beats_lead(lead_card, follow_card):
        return lead_player.other
    return lead_player


@dataclass(frozen=True)
class TrickRecord:
    trick_number: int
    lead_card: Card
    follow_card: Card
    lead_player: Player
    winner: Player
