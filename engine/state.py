"""Game state management for Last Trick."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from random import Random
from typing import Dict, List, Optional, Sequence, Set

from .cards import Card
from .deck import Deck
from .mechanics import hand_qualifies_for_redeal, legal_moves
from .trick import Player, TrickRecord, trick_winner

logger = logging.getLogger(__name__)

HAND_SIZE = 5
TRICKS_PER_ROUND = 5
DEFAULT_SCORE_GOAL = 5


class TrickPhase(Enum):
    NOT_STARTED = auto()
    LEAD_PENDING = auto()
    FOLLOW_PENDING = auto()
    TRICK_RESOLVED = auto()
    ROUND_OVER = auto()


@dataclass
class GameState:
    """Aggregate root for one human-versus-AI session.

    ``play_card`` is the only mutation entry point while a round is running.
    Resolved tricks stay on the table (``lead_card``/``follow_card``) until
    ``clear_trick`` is called or the next lead is played.
    """

    score_goal: int = DEFAULT_SCORE_GOAL
    rng: Random = field(default_factory=Random)
    deck: Deck = field(init=False)
    hands: Dict[Player, List[Card]] = field(init=False)
    scores: Dict[Player, int] = field(init=False)
    trick_number: int = field(init=False, default=0)
    lead_card: Optional[Card] = field(init=False, default=None)
    follow_card: Optional[Card] = field(init=False, default=None)
    lead_player: Optional[Player] = field(init=False, default=None)
    current_player: Optional[Player] = field(init=False, default=None)
    trick_history: List[TrickRecord] = field(init=False, default_factory=list)
    round_active: bool = field(init=False, default=False)
    round_number: int = field(init=False, default=0)
    match_number: int = field(init=False, default=0)
    round_starter: Optional[Player] = field(init=False, default=None)
    redealt: Set[Player] = field(init=False, default_factory=set)

    def __post_init__(self) -> None:
        self.deck = Deck()
        self.hands = {Player.PLAYER: [], Player.AI: []}
        self.scores = {Player.PLAYER: 0, Player.AI: 0}

    # Convenience accessors --------------------------------------------

    @property
    def player_hand(self) -> List[Card]:
        return self.hands[Player.PLAYER]

    @property
    def ai_hand(self) -> List[Card]:
        return self.hands[Player.AI]

    @property
    def player_score(self) -> int:
        return self.scores[Player.PLAYER]

    @property
    def ai_score(self) -> int:
        return self.scores[Player.AI]

    @property
    def is_leading(self) -> bool:
        """True when the next card played opens a trick."""
        return self.lead_card is None or self.follow_card is not None

    @property
    def phase(self) -> TrickPhase:
        if not self.round_active:
            if len(self.trick_history) == TRICKS_PER_ROUND:
                return TrickPhase.ROUND_OVER
            return TrickPhase.NOT_STARTED
        if self.follow_card is not None:
            return TrickPhase.TRICK_RESOLVED
        if self.lead_card is not None:
            return TrickPhase.FOLLOW_PENDING
        return TrickPhase.LEAD_PENDING

    @property
    def is_match_over(self) -> bool:
        return self.match_winner is not None

    @property
    def match_winner(self) -> Optional[Player]:
        for player in Player:
            if self.scores[player] >= self.score_goal:
                return player
        return None

    @property
    def last_trick(self) -> Optional[TrickRecord]:
        return self.trick_history[-1] if self.trick_history else None

    def played_cards(self) -> List[Card]:
        """Cards visible to both sides so far this round."""
        cards: List[Card] = []
        for record in self.trick_history:
            cards.append(record.lead_card)
            cards.append(record.follow_card)
        if not self.is_leading and self.lead_card is not None:
            cards.append(self.lead_card)
        return cards

    # Match and round lifecycle ----------------------------------------

    def start_new_match(self) -> None:
        self.reset_scores()
        self.match_number += 1
        self.round_number = 0
        self.round_starter = None
        logger.info("Starting match %d (goal %d)", self.match_number, self.score_goal)
        self.start_new_round()

    def start_new_round(
        self,
        *,
        deck: Optional[Sequence[Card]] = None,
        leader: Optional[Player] = None,
    ) -> None:
        """Deal a fresh round, keeping the scores.

        The first round of a match picks its leader at random; later rounds
        alternate. ``deck`` and ``leader`` override both for scripted games.
        """
        if deck is None:
            self.deck.initialize()
            self.deck.shuffle(self.rng)
        else:
            self.deck.load(deck)

        self.hands = {
            Player.PLAYER: self.deck.deal(HAND_SIZE),
            Player.AI: self.deck.deal(HAND_SIZE),
        }

        if leader is None:
            if self.round_starter is None:
                leader = self.rng.choice(list(Player))
            else:
                leader = self.round_starter.other

        self.round_starter = leader
        self.round_number += 1
        self.trick_number = 1
        self.lead_card = None
        self.follow_card = None
        self.lead_player = leader
        self.current_player = leader
        self.trick_history = []
        self.redealt = set()
        self.round_active = True
        logger.info("Round %d dealt, %s leads", self.round_number, leader)

    def reset_scores(self) -> None:
        self.scores = {Player.PLAYER: 0, Player.AI: 0}

    # Redeal -------------------------------------------------------------

    def hand_qualifies_for_redeal(self, hand: Sequence[Card]) -> bool:
        return hand_qualifies_for_redeal(hand)

    def can_redeal(self, player: Player) -> bool:
        if not self.round_active or player in self.redealt:
            return False
        if self.trick_number != 1 or self.lead_card is not None or self.trick_history:
            return False
        if len(self.deck) < HAND_SIZE:
            return False
        return hand_qualifies_for_redeal(self.hands[player])

    def redeal_hand(self, player: Player) -> bool:
        """Replace a weak opening hand with five cards from the remaining deck."""
        if not self.can_redeal(player):
            return False
        self.hands[player] = self.deck.deal(HAND_SIZE)
        self.redealt.add(player)
        logger.info("%s redealt their hand", player)
        return True

    # Play ---------------------------------------------------------------

    def get_valid_cards(self, player: Player) -> List[Card]:
        lead = None if self.is_leading else self.lead_card
        return legal_moves(self.hands[player], lead)

    def can_play_card(self, card: Card, player: Player) -> bool:
        if not self.round_active or player is not self.current_player:
            return False
        if card not in self.hands[player]:
            return False
        return card in self.get_valid_cards(player)

    def play_card(self, card: Card, player: Player) -> bool:
        if not self.can_play_card(card, player):
            logger.debug("Rejected %s from %s", card, player)
            return False

        leading = self.is_leading
        self.hands[player].remove(card)
        if leading:
            self.clear_trick()
            self.lead_card = card
            self.lead_player = player
            self.current_player = player.other
        else:
            self.follow_card = card
            self.evaluate_trick()
        return True

    def evaluate_trick(self) -> TrickRecord:
        if self.lead_card is None or self.follow_card is None or self.lead_player is None:
            raise RuntimeError("Cannot evaluate an incomplete trick.")

        winner = trick_winner(self.lead_player, self.lead_card, self.follow_card)
        record = TrickRecord(
            trick_number=self.trick_number,
            lead_card=self.lead_card,
            follow_card=self.follow_card,
            lead_player=self.lead_player,
            winner=winner,
        )
        self.trick_history.append(record)
        logger.debug(
            "Trick %d: %s led %s, %s followed, %s wins",
            record.trick_number,
            record.lead_player,
            record.lead_card,
            record.follow_card,
            winner,
        )

        if self.trick_number == TRICKS_PER_ROUND:
            self.scores[winner] += 1
            self.round_active = False
            self.current_player = None
            logger.info(
                "Round %d won by %s (player %d - ai %d)",
                self.round_number,
                winner,
                self.player_score,
                self.ai_score,
            )
            return record

        self.lead_player = winner
        self.current_player = winner
        self.trick_number += 1
        return record

    def clear_trick(self) -> None:
        self.lead_card = None
        self.follow_card = None
