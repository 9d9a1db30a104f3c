"""Legal move generation and the redeal rule for Last Trick."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cards import Card

# A hand whose best card is at most this value may be redealt.
REDEAL_MAX_VALUE = 9


def legal_moves(hand: Iterable[Card], lead_card: Optional[Card]) -> List[Card]:
    """Return the subset of cards that are legal to play given the lead card.

    The leader may play anything. The follower must match the lead suit when
    holding it, otherwise any card is legal. Hand order is preserved.
    """
    cards = list(hand)
    if lead_card is None:
        return cards

    same_suit = [card for card in cards if card.suit is lead_card.suit]
    return same_suit if same_suit else cards


def hand_qualifies_for_redeal(hand: Iterable[Card]) -> bool:
    values = [card.value() for card in hand]
    if not values:
        return False
    return max(values) <= REDEAL_MAX_VALUE
