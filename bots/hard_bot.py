"""Hard difficulty: short-suit leads and a played-card estimate on trick 5."""

from __future__ import annotations

from typing import Optional, Sequence

from engine.cards import Card
from engine.state import GameState
from engine.trick import Player

from .base import (
    BotStrategy,
    best_card_to_win,
    group_by_suit,
    higher_played_count,
    highest_card,
    is_final_trick,
    lead_on_table,
    lowest_card,
)


def lead_strength(card: Card, played: Sequence[Card]) -> int:
    """Card value plus two for every higher card of its suit already gone."""
    return card.value() + 2 * higher_played_count(card, played)


class HardBot(BotStrategy):
    name = "Hard"

    def choose_card(self, state: GameState, player: Player) -> Card:
        legal = state.get_valid_cards(player)

        if is_final_trick(state):
            if state.is_leading:
                return self._final_lead(state, legal)
            return best_card_to_win(state, legal)

        if state.is_leading:
            return self._short_suit_lead(legal)
        return self._follow(state, legal)

    def _final_lead(self, state: GameState, legal: Sequence[Card]) -> Card:
        played = state.played_cards()
        best: Optional[Card] = None
        best_score = -1
        for cards in group_by_suit(legal).values():
            candidate = highest_card(cards)
            score = lead_strength(candidate, played)
            if score > best_score:
                best, best_score = candidate, score
        return best if best is not None else highest_card(legal)

    def _short_suit_lead(self, legal: Sequence[Card]) -> Card:
        groups = group_by_suit(legal)
        shortest = min(groups.values(), key=len)
        return lowest_card(shortest)

    def _follow(self, state: GameState, legal: Sequence[Card]) -> Card:
        lead = lead_on_table(state)
        same_suit = [card for card in legal if card.suit is lead.suit]
        if not same_suit:
            return lowest_card(legal)
        losing = [card for card in same_suit if card.value() < lead.value()]
        if losing:
            return highest_card(losing)
        return lowest_card(same_suit)
