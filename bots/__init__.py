"""Bot strategies for Last Trick."""

from .grandmaster_bot import GrandmasterBot
from .hard_bot import HardBot
from .medium_bot import MediumBot
from .random_bot import RandomBot
from .registry import BOT_REGISTRY, create_bot

__all__ = ["RandomBot", "MediumBot", "HardBot", "GrandmasterBot", "BOT_REGISTRY", "create_bot"]
