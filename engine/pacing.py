"""Presentation-layer sequencing.

The state machine never waits. Front-ends ask ``next_step`` what to do after
each mutation and apply the returned cosmetic delay themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .state import GameState, TrickPhase
from .trick import Player


class StepKind(Enum):
    IDLE = "idle"
    AWAIT_REDEAL = "await_redeal"
    AWAIT_PLAYER = "await_player"
    AI_TURN = "ai_turn"
    CLEAR_TRICK = "clear_trick"
    ROUND_OVER = "round_over"
    MATCH_OVER = "match_over"


@dataclass(frozen=True)
class PacingConfig:
    ai_think_delay: float = 1.0
    trick_display_delay: float = 2.0
    round_over_delay: float = 2.0


@dataclass(frozen=True)
class ScheduledStep:
    kind: StepKind
    delay: float
    message: str


DEFAULT_PACING = PacingConfig()


def _side_name(player: Player) -> str:
    return "You" if player is Player.PLAYER else "AI"


def next_step(
    state: GameState,
    *,
    redeal_pending: bool = False,
    config: PacingConfig = DEFAULT_PACING,
) -> ScheduledStep:
    phase = state.phase

    if phase is TrickPhase.NOT_STARTED:
        return ScheduledStep(StepKind.IDLE, 0.0, "Click 'New Game' to start")

    if phase is TrickPhase.ROUND_OVER:
        winner = state.match_winner
        if winner is not None:
            text = "You won the match!" if winner is Player.PLAYER else "AI won the match"
            return ScheduledStep(StepKind.MATCH_OVER, config.round_over_delay, text)
        assert state.last_trick is not None
        return ScheduledStep(
            StepKind.ROUND_OVER,
            config.round_over_delay,
            f"{_side_name(state.last_trick.winner)} won the final trick!",
        )

    if redeal_pending:
        return ScheduledStep(
            StepKind.AWAIT_REDEAL,
            0.0,
            "Your highest card is 9 or lower. Would you like to redeal your hand?",
        )

    if phase is TrickPhase.TRICK_RESOLVED:
        assert state.last_trick is not None
        record = state.last_trick
        return ScheduledStep(
            StepKind.CLEAR_TRICK,
            config.trick_display_delay,
            f"{_side_name(record.winner)} won trick {record.trick_number}!",
        )

    if state.current_player is Player.PLAYER:
        return ScheduledStep(StepKind.AWAIT_PLAYER, 0.0, "Your turn! Play a card.")

    text = "AI is leading..." if phase is TrickPhase.LEAD_PENDING else "AI is thinking..."
    return ScheduledStep(StepKind.AI_TURN, config.ai_think_delay, text)
