"""Convenience service layer for UI and HTTP consumers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from random import Random
from typing import Mapping, Optional, Sequence

from bots.base import BotStrategy
from bots.registry import create_bot

from .cards import (
    Card,
    card_asset_path,
    card_back_path,
    card_label,
    deserialize_card,
    serialize_card,
)
from .pacing import DEFAULT_PACING, PacingConfig, next_step
from .play_log import PlayLog
from .settings import Settings, load_settings, save_settings
from .state import GameState, TrickPhase
from .storage import MemoryStorage, Storage
from .trick import Player, TrickRecord

logger = logging.getLogger(__name__)


@dataclass
class TrickRecordView:
    trick_number: int
    lead_player: str
    winner: str
    lead_card: dict
    follow_card: dict
    labels: list[str]


@dataclass
class StepView:
    kind: str
    delay: float
    message: str


@dataclass
class GameView:
    phase: str
    round_active: bool
    current_player: Optional[str]
    lead_player: Optional[str]
    trick_number: int
    round_number: int
    match_number: int
    scores: dict[str, int]
    score_goal: int
    hand: list[dict]
    hand_labels: list[str]
    hand_images: list[str]
    valid_cards: list[dict]
    ai_card_count: int
    card_back: str
    lead_card: Optional[dict]
    follow_card: Optional[dict]
    last_trick: Optional[TrickRecordView]
    trick_history: list[TrickRecordView]
    redeal_offer: bool
    match_over: bool
    match_winner: Optional[str]
    difficulty: str
    next_step: StepView


@dataclass
class PlayResult:
    accepted: bool
    view: GameView


class GameService:
    """Facade around GameState, the AI and settings for UI consumers."""

    def __init__(
        self,
        storage: Optional[Storage] = None,
        *,
        rng: Optional[Random] = None,
        bot_seed: Optional[int] = None,
        pacing: PacingConfig = DEFAULT_PACING,
    ) -> None:
        self.storage = storage or MemoryStorage()
        self.settings = load_settings(self.storage)
        self.state = GameState(score_goal=self.settings.score_goal, rng=rng or Random())
        self.bot_seed = bot_seed
        self.bot: BotStrategy = create_bot(self.settings.difficulty, seed=bot_seed)
        self.play_log = PlayLog(self.storage)
        self.pacing = pacing
        self.redeal_pending = False

    # Session lifecycle -------------------------------------------------

    def start_new_match(self) -> GameView:
        self.state.score_goal = self.settings.score_goal
        self.state.start_new_match()
        self._after_deal()
        return self.get_view()

    def start_new_round(
        self,
        *,
        deck: Optional[Sequence[Card]] = None,
        leader: Optional[Player] = None,
    ) -> GameView:
        if self.state.is_match_over:
            logger.info("Match is over; start a new match to keep playing")
            return self.get_view()
        self.state.start_new_round(deck=deck, leader=leader)
        self._after_deal()
        return self.get_view()

    def respond_to_redeal(self, accept: bool) -> GameView:
        if not self.redeal_pending:
            return self.get_view()
        if accept:
            self.state.redeal_hand(Player.PLAYER)
        self.redeal_pending = False
        self._finish_redeals()
        return self.get_view()

    def update_settings(self, **changes) -> Settings:
        updated = self.settings.apply(**changes)
        if updated.difficulty is not self.settings.difficulty:
            self.bot = create_bot(updated.difficulty, seed=self.bot_seed)
            logger.info("Opponent switched to %s", self.bot.name)
        self.settings = updated
        self.state.score_goal = updated.score_goal
        save_settings(self.storage, updated)
        return updated

    # Actions -----------------------------------------------------------

    def play_card(self, card_payload: Mapping[str, str]) -> PlayResult:
        card = deserialize_card(card_payload)
        if self.redeal_pending:
            return PlayResult(accepted=False, view=self.get_view())

        state = self.state
        trick_number = state.trick_number
        is_leading = state.is_leading
        lead_card = None if is_leading else state.lead_card
        hand = list(state.player_hand)
        valid = state.get_valid_cards(Player.PLAYER)
        played = state.played_cards()

        accepted = state.play_card(card, Player.PLAYER)
        if accepted:
            self.play_log.log_decision(
                trick_number=trick_number,
                is_leading=is_leading,
                lead_card=lead_card,
                player_hand=hand,
                valid_cards=valid,
                cards_played=played,
                chosen=card,
            )
            self._record_resolution()
        return PlayResult(accepted=accepted, view=self.get_view())

    def ai_turn(self) -> PlayResult:
        state = self.state
        if self.redeal_pending or not state.round_active or state.current_player is not Player.AI:
            return PlayResult(accepted=False, view=self.get_view())
        card = self.bot.choose_card(state, Player.AI)
        logger.debug("%s bot plays %s", self.bot.name, card)
        accepted = state.play_card(card, Player.AI)
        if accepted:
            self._record_resolution()
        return PlayResult(accepted=accepted, view=self.get_view())

    def clear_trick(self) -> GameView:
        self.state.clear_trick()
        return self.get_view()

    # Views -------------------------------------------------------------

    def get_view(self) -> GameView:
        state = self.state
        hand = list(state.player_hand)
        valid = state.get_valid_cards(Player.PLAYER) if state.current_player is Player.PLAYER else []
        if self.redeal_pending:
            valid = []
        step = next_step(state, redeal_pending=self.redeal_pending, config=self.pacing)
        history = [self._trick_view(record) for record in state.trick_history]
        winner = state.match_winner

        return GameView(
            phase=state.phase.name.lower(),
            round_active=state.round_active,
            current_player=state.current_player.value if state.current_player else None,
            lead_player=state.lead_player.value if state.lead_player else None,
            trick_number=state.trick_number,
            round_number=state.round_number,
            match_number=state.match_number,
            scores={player.value: score for player, score in state.scores.items()},
            score_goal=state.score_goal,
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            hand_images=[card_asset_path(card) for card in hand],
            valid_cards=[serialize_card(card) for card in valid],
            ai_card_count=len(state.ai_hand),
            card_back=card_back_path(self.settings.card_back),
            lead_card=serialize_card(state.lead_card) if state.lead_card else None,
            follow_card=serialize_card(state.follow_card) if state.follow_card else None,
            last_trick=history[-1] if history else None,
            trick_history=history,
            redeal_offer=self.redeal_pending,
            match_over=winner is not None,
            match_winner=winner.value if winner else None,
            difficulty=self.settings.difficulty.value,
            next_step=StepView(kind=step.kind.value, delay=step.delay, message=step.message),
        )

    # Helpers -----------------------------------------------------------

    def _after_deal(self) -> None:
        self.redeal_pending = self.state.can_redeal(Player.PLAYER)
        if not self.redeal_pending:
            self._finish_redeals()

    def _finish_redeals(self) -> None:
        # The AI always takes a redeal it qualifies for.
        self.state.redeal_hand(Player.AI)
        self.play_log.start_round(self.state.player_hand, self.state.ai_hand)

    def _record_resolution(self) -> None:
        phase = self.state.phase
        if phase not in (TrickPhase.TRICK_RESOLVED, TrickPhase.ROUND_OVER):
            return
        record = self.state.last_trick
        assert record is not None
        self.play_log.log_trick_result(record.trick_number, record.winner)
        if phase is TrickPhase.ROUND_OVER:
            self.play_log.end_round(record.winner)

    def _trick_view(self, record: TrickRecord) -> TrickRecordView:
        return TrickRecordView(
            trick_number=record.trick_number,
            lead_player=record.lead_player.value,
            winner=record.winner.value,
            lead_card=serialize_card(record.lead_card),
            follow_card=serialize_card(record.follow_card),
            labels=[card_label(record.lead_card), card_label(record.follow_card)],
        )
