"""Simple bot arena for Last Trick."""

from __future__ import annotations

import argparse
import logging
from random import Random
from typing import Dict, Iterable, Mapping, Optional

from engine.settings import Difficulty
from engine.state import GameState
from engine.trick import Player

from .base import BotStrategy
from .registry import create_bot

logger = logging.getLogger(__name__)


def _apply_redeals(state: GameState) -> None:
    for player in Player:
        state.redeal_hand(player)


def play_round(state: GameState, bots: Mapping[Player, BotStrategy]) -> Player:
    """Play one dealt round to completion and return the trick-5 winner."""
    _apply_redeals(state)
    while state.round_active:
        player = state.current_player
        assert player is not None
        card = bots[player].choose_card(state, player)
        if not state.play_card(card, player):
            raise RuntimeError(f"{bots[player].name} chose illegal card {card}.")
    record = state.last_trick
    assert record is not None
    return record.winner


def run_match(
    bot_a: BotStrategy,
    bot_b: BotStrategy,
    *,
    n_rounds: int = 10,
    seed: Optional[int] = None,
) -> dict:
    """Play ``n_rounds`` rounds with ``bot_a`` on the player side and ``bot_b`` as the AI."""
    state = GameState(score_goal=n_rounds + 1, rng=Random(seed))
    bots = {Player.PLAYER: bot_a, Player.AI: bot_b}
    state.start_new_match()
    history = []
    for idx in range(n_rounds):
        if idx:
            state.start_new_round()
        starter = state.round_starter
        winner = play_round(state, bots)
        history.append(
            {
                "round": state.round_number,
                "starter": starter.value if starter else None,
                "winner": winner.value,
            }
        )
    scores = [state.scores[Player.PLAYER], state.scores[Player.AI]]
    logger.info("%s vs %s after %d rounds: %s", bot_a.name, bot_b.name, n_rounds, scores)
    return {"scores": scores, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    names: Dict[str, Difficulty] = {difficulty.value: difficulty for difficulty in Difficulty}
    parser = argparse.ArgumentParser(description="Run a bot match.")
    parser.add_argument("--bot-a", default="hard", choices=names.keys())
    parser.add_argument("--bot-b", default="grandmaster", choices=names.keys())
    parser.add_argument("--n", type=int, default=100, help="Number of rounds to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper()), format="%(levelname)s %(name)s: %(message)s")

    bot_a = create_bot(names[args.bot_a], seed=args.seed)
    bot_b = create_bot(names[args.bot_b], seed=args.seed + 1)
    results = run_match(bot_a, bot_b, n_rounds=args.n, seed=args.seed)

    print(f"Scores after {args.n} rounds: {args.bot_a} {results['scores'][0]} - {results['scores'][1]} {args.bot_b}")


if __name__ == "__main__":
    main()
