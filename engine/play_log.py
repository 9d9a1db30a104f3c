"""Decision log of the human player's card choices.

Every card the human plays is stored with its context (hand, legal options,
cards already seen) plus a few derived features, so that playing style can be
summarised later. Rounds are persisted through a ``Storage`` port.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .cards import Card, Suit, card_key
from .storage import Storage
from .trick import Player

logger = logging.getLogger(__name__)

PLAY_LOG_KEY = "play_log"
MIN_ROUNDS_FOR_ANALYSIS = 10


class InsufficientData(ValueError):
    """Raised when too few rounds are logged for pattern analysis."""


@dataclass
class DecisionFeatures:
    trick_number: int
    is_leading: bool
    valid_card_count: int
    relative_rank: float
    played_highest: bool
    played_lowest: bool
    chosen_value: int
    could_win: Optional[bool]
    did_win: Optional[bool]
    chosen_suit: str


@dataclass
class Decision:
    trick_number: int
    is_leading: bool
    lead_card: Optional[str]
    player_hand: List[str]
    valid_cards: List[str]
    cards_played_this_round: List[str]
    chosen_card: str
    features: DecisionFeatures
    trick_winner: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Decision":
        data = dict(payload)
        data["features"] = DecisionFeatures(**data["features"])
        return cls(**data)


@dataclass
class RoundLog:
    timestamp: float
    session_id: int
    initial_player_hand: List[str]
    initial_ai_hand: List[str]
    decisions: List[Decision] = field(default_factory=list)
    round_winner: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RoundLog":
        data = dict(payload)
        data["decisions"] = [Decision.from_dict(item) for item in data.get("decisions", [])]
        return cls(**data)


def compute_features(
    *,
    trick_number: int,
    is_leading: bool,
    lead_card: Optional[Card],
    valid_cards: Sequence[Card],
    chosen: Card,
) -> DecisionFeatures:
    values = sorted(card.value() for card in valid_cards)
    chosen_value = chosen.value()
    if len(values) > 1:
        relative_rank = values.index(chosen_value) / (len(values) - 1)
    else:
        relative_rank = 0.5

    could_win: Optional[bool] = None
    did_win: Optional[bool] = None
    if not is_leading and lead_card is not None:
        same_suit = [card for card in valid_cards if card.suit is lead_card.suit]
        if same_suit:
            could_win = any(card.value() > lead_card.value() for card in same_suit)
            did_win = chosen.suit is lead_card.suit and chosen_value > lead_card.value()

    return DecisionFeatures(
        trick_number=trick_number,
        is_leading=is_leading,
        valid_card_count=len(valid_cards),
        relative_rank=round(relative_rank, 2),
        played_highest=chosen_value == values[-1],
        played_lowest=chosen_value == values[0],
        chosen_value=chosen_value,
        could_win=could_win,
        did_win=did_win,
        chosen_suit=chosen.suit.value,
    )


def _average(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _percent(value: float) -> int:
    return round(value * 100)


class PlayLog:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage
        self.session_id = int(time.time() * 1000)
        self.current_round: Optional[RoundLog] = None
        self.rounds: List[RoundLog] = self._load()

    def _load(self) -> List[RoundLog]:
        try:
            raw = self.storage.read(PLAY_LOG_KEY)
            if raw is None:
                return []
            return [RoundLog.from_dict(item) for item in json.loads(raw)]
        except (ValueError, TypeError, KeyError):
            logger.warning("Stored play log is malformed; starting empty")
            return []

    def _save(self) -> None:
        self.storage.write(PLAY_LOG_KEY, json.dumps([asdict(entry) for entry in self.rounds]))

    # Recording -----------------------------------------------------------

    def start_round(self, player_hand: Sequence[Card], ai_hand: Sequence[Card]) -> None:
        self.current_round = RoundLog(
            timestamp=time.time(),
            session_id=self.session_id,
            initial_player_hand=[card_key(card) for card in player_hand],
            initial_ai_hand=[card_key(card) for card in ai_hand],
        )

    def log_decision(
        self,
        *,
        trick_number: int,
        is_leading: bool,
        lead_card: Optional[Card],
        player_hand: Sequence[Card],
        valid_cards: Sequence[Card],
        cards_played: Sequence[Card],
        chosen: Card,
    ) -> None:
        if self.current_round is None:
            return
        self.current_round.decisions.append(
            Decision(
                trick_number=trick_number,
                is_leading=is_leading,
                lead_card=card_key(lead_card) if lead_card is not None else None,
                player_hand=[card_key(card) for card in player_hand],
                valid_cards=[card_key(card) for card in valid_cards],
                cards_played_this_round=[card_key(card) for card in cards_played],
                chosen_card=card_key(chosen),
                features=compute_features(
                    trick_number=trick_number,
                    is_leading=is_leading,
                    lead_card=lead_card,
                    valid_cards=valid_cards,
                    chosen=chosen,
                ),
            )
        )

    def log_trick_result(self, trick_number: int, winner: Player) -> None:
        if self.current_round is None:
            return
        for decision in self.current_round.decisions:
            if decision.trick_number == trick_number:
                decision.trick_winner = winner.value
                break

    def end_round(self, winner: Player) -> None:
        if self.current_round is None:
            return
        self.current_round.round_winner = winner.value
        self.rounds.append(self.current_round)
        self.current_round = None
        self._save()
        logger.info("Round logged. Total logged rounds: %d", len(self.rounds))

    # Reporting -----------------------------------------------------------

    def stats(self) -> Dict[str, int]:
        total_rounds = len(self.rounds)
        player_wins = sum(1 for entry in self.rounds if entry.round_winner == Player.PLAYER.value)
        return {
            "total_rounds": total_rounds,
            "total_decisions": sum(len(entry.decisions) for entry in self.rounds),
            "player_wins": player_wins,
            "ai_wins": total_rounds - player_wins,
            "win_rate": round(player_wins / total_rounds * 100) if total_rounds else 0,
        }

    def analyze_patterns(self) -> Dict[str, Any]:
        if len(self.rounds) < MIN_ROUNDS_FOR_ANALYSIS:
            raise InsufficientData(
                f"Need at least {MIN_ROUNDS_FOR_ANALYSIS} rounds of data for analysis"
            )

        decisions = [d for entry in self.rounds for d in entry.decisions]
        leading = [d for d in decisions if d.features.is_leading]
        following = [d for d in decisions if not d.features.is_leading]
        early = [d for d in decisions if d.trick_number <= 2]
        final = [d for d in decisions if d.trick_number == 5]
        final_leading = [d for d in final if d.features.is_leading]

        avg_lead = _average([d.features.relative_rank for d in leading])
        avg_follow = _average([d.features.relative_rank for d in following])

        could_win = [d for d in following if d.features.could_win]
        win_when_can = (
            sum(1 for d in could_win if d.features.did_win) / len(could_win) if could_win else 0.0
        )

        early_lead_avg = _average([d.features.relative_rank for d in early if d.features.is_leading])
        final_lead_avg = _average([d.features.relative_rank for d in final_leading])

        if avg_lead < 0.3:
            leading_style = "Conservative (leads low)"
        elif avg_lead > 0.7:
            leading_style = "Aggressive (leads high)"
        else:
            leading_style = "Balanced"

        if win_when_can > 0.7:
            following_style = "Aggressive (takes tricks when possible)"
        elif win_when_can < 0.3:
            following_style = "Conservative (ducks often)"
        else:
            following_style = "Selective"

        return {
            "data_points": len(decisions),
            "rounds_analyzed": len(self.rounds),
            "leading_style": {
                "avg_relative_rank": _percent(avg_lead),
                "interpretation": leading_style,
            },
            "following_style": {
                "avg_relative_rank": _percent(avg_follow),
                "win_when_can_rate": _percent(win_when_can),
                "interpretation": following_style,
            },
            "final_trick_style": {
                "leads_high": sum(1 for d in final_leading if d.features.played_highest),
                "total_leads": len(final_leading),
                "avg_rank_on_final": _percent(_average([d.features.relative_rank for d in final])),
            },
            "phase_comparison": {
                "early_avg_rank": _percent(early_lead_avg),
                "final_avg_rank": _percent(final_lead_avg),
                "saves_high_cards": final_lead_avg > early_lead_avg + 0.2,
            },
            "suit_preferences": self._suit_preferences(leading),
        }

    def _suit_preferences(self, leading: Sequence[Decision]) -> List[Dict[str, Any]]:
        counts = {suit.value: 0 for suit in Suit}
        for decision in leading:
            if decision.features.chosen_suit in counts:
                counts[decision.features.chosen_suit] += 1
        total = sum(counts.values())
        return [
            {
                "suit": suit,
                "count": count,
                "percentage": round(count / total * 100) if total else 0,
            }
            for suit, count in counts.items()
        ]

    # Import / export -------------------------------------------------------

    def export_logs(self) -> str:
        try:
            analysis: Any = self.analyze_patterns()
        except InsufficientData as exc:
            analysis = {"error": str(exc)}
        payload = {
            "export_date": datetime.now(timezone.utc).isoformat(),
            "stats": self.stats(),
            "analysis": analysis,
            "logs": [asdict(entry) for entry in self.rounds],
        }
        return json.dumps(payload, indent=2)

    def import_logs(self, text: str) -> int:
        try:
            data = json.loads(text)
            entries = data["logs"]
            if not isinstance(entries, list):
                raise ValueError("'logs' must be a list.")
            imported = [RoundLog.from_dict(item) for item in entries]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Invalid play log format: {exc}") from exc
        self.rounds.extend(imported)
        self._save()
        return len(imported)

    def clear(self) -> None:
        self.rounds = []
        self._save()
        logger.info("Play log cleared")
