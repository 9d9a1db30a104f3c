"""Easy difficulty: uniformly random legal plays."""

from __future__ import annotations

import random
from typing import Optional

from engine.cards import Card
from engine.state import GameState
from engine.trick import Player

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_card(self, state: GameState, player: Player) -> Card:
        legal = state.get_valid_cards(player)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return self._rng.choice(legal)
