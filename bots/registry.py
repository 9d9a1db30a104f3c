"""Difficulty to strategy mapping."""

from __future__ import annotations

from typing import Dict, Optional

from engine.settings import Difficulty

from .base import BotStrategy
from .grandmaster_bot import GrandmasterBot
from .hard_bot import HardBot
from .medium_bot import MediumBot
from .random_bot import RandomBot

BOT_REGISTRY: Dict[Difficulty, type[BotStrategy]] = {
    Difficulty.EASY: RandomBot,
    Difficulty.MEDIUM: MediumBot,
    Difficulty.HARD: HardBot,
    Difficulty.GRANDMASTER: GrandmasterBot,
}


def create_bot(difficulty: Difficulty, seed: Optional[int] = None) -> BotStrategy:
    bot_cls = BOT_REGISTRY[Difficulty(difficulty)]
    if bot_cls is RandomBot:
        return RandomBot(seed=seed)
    return bot_cls()
