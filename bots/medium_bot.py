"""Medium difficulty: shed low cards early, save the big ones for trick 5."""

from __future__ import annotations

from engine.cards import Card
from engine.state import GameState
from engine.trick import Player

from .base import BotStrategy, best_card_to_win, is_final_trick, lead_on_table, lowest_card


class MediumBot(BotStrategy):
    name = "Medium"

    def choose_card(self, state: GameState, player: Player) -> Card:
        legal = state.get_valid_cards(player)

        if is_final_trick(state):
            return best_card_to_win(state, legal)

        if state.is_leading:
            return lowest_card(legal)

        lead = lead_on_table(state)
        same_suit = [card for card in legal if card.suit is lead.suit]
        if not same_suit:
            return lowest_card(legal)

        # Duck under the lead when possible; otherwise the cheapest card wins anyway.
        losing = [card for card in same_suit if card.value() < lead.value()]
        return lowest_card(losing or same_suit)
