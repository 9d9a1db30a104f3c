"""Grandmaster difficulty: suit draining, lead control and void exploitation.

Tricks 1-4 are played for position. Singletons are led first to create
voids, multi-card suits are drained from the top, and any trick that can be
won while following is taken so the bot keeps choosing the suit. On trick 5
a suit the opponent has shown out of is a guaranteed win.
"""

from __future__ import annotations

from typing import Optional, Sequence, Set

from engine.cards import Card, Rank, Suit
from engine.state import GameState
from engine.trick import Player

from .base import (
    BotStrategy,
    group_by_suit,
    higher_played_count,
    highest_card,
    is_final_trick,
    lead_on_table,
    lowest_card,
    opponent_voids,
)

VOID_BONUS = 20
RANK_BONUS = {Rank.ACE: 5, Rank.KING: 3}


def winning_chance(card: Card, played: Sequence[Card], voids: Set[Suit]) -> int:
    score = card.value() + 3 * higher_played_count(card, played)
    if card.suit in voids:
        score += VOID_BONUS
    score += RANK_BONUS.get(card.rank, 0)
    return score


class GrandmasterBot(BotStrategy):
    name = "Grandmaster"

    def choose_card(self, state: GameState, player: Player) -> Card:
        legal = state.get_valid_cards(player)
        voids = opponent_voids(state, player)

        if is_final_trick(state):
            if state.is_leading:
                return self._final_lead(state, legal, voids)
            return self._follow_to_win(state, legal)

        if state.is_leading:
            return self._drain_lead(state.hands[player], legal, state.trick_number)
        return self._follow_to_win(state, legal)

    def _final_lead(self, state: GameState, legal: Sequence[Card], voids: Set[Suit]) -> Card:
        void_cards = [card for card in legal if card.suit in voids]
        if void_cards:
            return lowest_card(void_cards)

        played = state.played_cards()
        best: Optional[Card] = None
        best_score = -1
        for cards in group_by_suit(legal).values():
            candidate = highest_card(cards)
            score = winning_chance(candidate, played, voids)
            if score > best_score:
                best, best_score = candidate, score
        return best if best is not None else highest_card(legal)

    def _drain_lead(self, hand: Sequence[Card], legal: Sequence[Card], trick_number: int) -> Card:
        hand_groups = group_by_suit(hand)
        for suit in group_by_suit(legal):
            if len(hand_groups.get(suit, [])) == 1:
                return hand_groups[suit][0]

        multi = [cards for cards in hand_groups.values() if len(cards) >= 2]
        if not multi:
            return highest_card(legal)
        if trick_number <= 2:
            suit_cards = min(multi, key=lambda cards: highest_card(cards).value())
        else:
            suit_cards = max(multi, key=lambda cards: highest_card(cards).value())
        return highest_card(suit_cards)

    def _follow_to_win(self, state: GameState, legal: Sequence[Card]) -> Card:
        lead = lead_on_table(state)
        same_suit = [card for card in legal if card.suit is lead.suit]
        if not same_suit:
            return lowest_card(legal)
        winners = [card for card in same_suit if card.value() > lead.value()]
        if winners:
            return lowest_card(winners)
        if is_final_trick(state):
            return lowest_card(same_suit)
        return highest_card(same_suit)
