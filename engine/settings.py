"""User settings for Last Trick, validated at the storage boundary."""

from __future__ import annotations

import json
import logging
from enum import Enum

from pydantic import BaseModel, Field, StrictInt, ValidationError, field_validator

from .state import DEFAULT_SCORE_GOAL
from .storage import Storage

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"

MIN_SCORE_GOAL = 1
MAX_SCORE_GOAL = 20

CARD_BACKS = (
    "abstract.svg",
    "abstract_clouds.svg",
    "abstract_scene.svg",
    "astronaut.svg",
    "blue.svg",
    "castle.svg",
    "fish.svg",
    "frog.svg",
    "red.svg",
    "red2.svg",
)
DEFAULT_CARD_BACK = "blue.svg"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    GRANDMASTER = "grandmaster"


class Settings(BaseModel):
    difficulty: Difficulty = Field(Difficulty.MEDIUM, description="Which AI strategy the opponent uses.")
    score_goal: StrictInt = Field(
        DEFAULT_SCORE_GOAL,
        ge=MIN_SCORE_GOAL,
        le=MAX_SCORE_GOAL,
        description="Match points needed to win the match.",
    )
    card_back: str = Field(DEFAULT_CARD_BACK, description="File name of the card back design.")
    sound_enabled: bool = Field(True, description="Whether the front-end plays sound effects.")

    @field_validator("card_back")
    @classmethod
    def validate_card_back(cls, value: str) -> str:
        if value not in CARD_BACKS:
            raise ValueError(f"Unknown card back: {value!r}")
        return value

    def apply(self, **changes) -> "Settings":
        """Return a copy with the valid changes applied.

        Invalid values keep the last valid value; unknown names are ignored.
        """
        current = self
        for name, value in changes.items():
            if name not in Settings.model_fields:
                logger.warning("Ignoring unknown setting %r", name)
                continue
            try:
                current = Settings.model_validate({**current.model_dump(), name: value})
            except ValidationError:
                logger.warning("Rejected %s=%r, keeping %r", name, value, getattr(current, name))
        return current


def load_settings(storage: Storage) -> Settings:
    try:
        raw = storage.read(SETTINGS_KEY)
        if raw is None:
            return Settings()
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("Stored settings are unreadable; using defaults")
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Stored settings are not an object; using defaults")
        return Settings()
    known = {name: value for name, value in data.items() if name in Settings.model_fields}
    return Settings().apply(**known)


def save_settings(storage: Storage, settings: Settings) -> None:
    storage.write(SETTINGS_KEY, settings.model_dump_json())
