from random import Random

from bots.hard_bot import HardBot, lead_strength
from bots.medium_bot import MediumBot
from bots.random_bot import RandomBot
from bots.registry import BOT_REGISTRY, create_bot
from engine.cards import Card, Rank, Suit
from engine.settings import Difficulty
from engine.state import GameState
from engine.trick import Player, TrickRecord


def C(suit: Suit, rank: Rank) -> Card:
    return Card(suit, rank)


def ai_to_act(ai_hand, *, lead=None, trick_number=1, history=()) -> GameState:
    """Build a state where the AI acts next, optionally after a player lead."""
    state = GameState(rng=Random(0))
    leader = Player.AI if lead is None else Player.PLAYER
    state.start_new_round(leader=leader)
    player_hand = [lead] if lead is not None else [C(Suit.SPADES, Rank.TWO)]
    state.hands = {Player.PLAYER: player_hand, Player.AI: list(ai_hand)}
    state.trick_number = trick_number
    state.trick_history = list(history)
    if lead is not None:
        assert state.play_card(lead, Player.PLAYER)
    return state


def test_registry_covers_every_difficulty():
    assert set(BOT_REGISTRY) == set(Difficulty)
    assert isinstance(create_bot(Difficulty.EASY), RandomBot)
    assert isinstance(create_bot("hard"), HardBot)


def test_random_bot_plays_legal_cards_deterministically():
    hand = [C(Suit.CLUBS, Rank.NINE), C(Suit.CLUBS, Rank.TWO), C(Suit.HEARTS, Rank.KING)]
    picks = []
    for _ in range(2):
        bot = RandomBot(seed=4)
        state = ai_to_act(hand, lead=C(Suit.CLUBS, Rank.FIVE))
        picks.append(bot.choose_card(state, Player.AI))
    assert picks[0] == picks[1]
    assert picks[0].suit is Suit.CLUBS


def test_medium_leads_lowest_card():
    state = ai_to_act([C(Suit.CLUBS, Rank.KING), C(Suit.HEARTS, Rank.FOUR), C(Suit.DIAMONDS, Rank.NINE)])
    assert MediumBot().choose_card(state, Player.AI) == C(Suit.HEARTS, Rank.FOUR)


def test_medium_ducks_under_the_lead():
    state = ai_to_act(
        [C(Suit.CLUBS, Rank.KING), C(Suit.CLUBS, Rank.SEVEN), C(Suit.CLUBS, Rank.THREE), C(Suit.DIAMONDS, Rank.TWO)],
        lead=C(Suit.CLUBS, Rank.EIGHT),
    )
    assert MediumBot().choose_card(state, Player.AI) == C(Suit.CLUBS, Rank.THREE)


def test_medium_wins_cheaply_when_it_cannot_duck():
    state = ai_to_act(
        [C(Suit.CLUBS, Rank.KING), C(Suit.CLUBS, Rank.NINE)],
        lead=C(Suit.CLUBS, Rank.TWO),
    )
    assert MediumBot().choose_card(state, Player.AI) == C(Suit.CLUBS, Rank.NINE)


def test_medium_dumps_lowest_off_suit():
    state = ai_to_act(
        [C(Suit.DIAMONDS, Rank.KING), C(Suit.HEARTS, Rank.FOUR)],
        lead=C(Suit.CLUBS, Rank.EIGHT),
    )
    assert MediumBot().choose_card(state, Player.AI) == C(Suit.HEARTS, Rank.FOUR)


def test_medium_final_trick():
    leading = ai_to_act([C(Suit.CLUBS, Rank.THREE), C(Suit.HEARTS, Rank.QUEEN)], trick_number=5)
    assert MediumBot().choose_card(leading, Player.AI) == C(Suit.HEARTS, Rank.QUEEN)

    following = ai_to_act(
        [C(Suit.CLUBS, Rank.KING), C(Suit.CLUBS, Rank.TEN), C(Suit.CLUBS, Rank.TWO)],
        lead=C(Suit.CLUBS, Rank.EIGHT),
        trick_number=5,
    )
    assert MediumBot().choose_card(following, Player.AI) == C(Suit.CLUBS, Rank.TEN)

    losing = ai_to_act(
        [C(Suit.CLUBS, Rank.SEVEN), C(Suit.CLUBS, Rank.TWO)],
        lead=C(Suit.CLUBS, Rank.EIGHT),
        trick_number=5,
    )
    assert MediumBot().choose_card(losing, Player.AI) == C(Suit.CLUBS, Rank.TWO)


def test_hard_leads_lowest_of_shortest_suit():
    state = ai_to_act(
        [
            C(Suit.CLUBS, Rank.TWO),
            C(Suit.CLUBS, Rank.FIVE),
            C(Suit.DIAMONDS, Rank.KING),
            C(Suit.HEARTS, Rank.NINE),
            C(Suit.HEARTS, Rank.TEN),
        ]
    )
    assert HardBot().choose_card(state, Player.AI) == C(Suit.DIAMONDS, Rank.KING)


def test_hard_follows_with_highest_losing_card():
    state = ai_to_act(
        [C(Suit.CLUBS, Rank.NINE), C(Suit.CLUBS, Rank.FOUR), C(Suit.CLUBS, Rank.ACE)],
        lead=C(Suit.CLUBS, Rank.TEN),
    )
    assert HardBot().choose_card(state, Player.AI) == C(Suit.CLUBS, Rank.NINE)


def test_hard_wins_with_lowest_card_when_forced():
    state = ai_to_act(
        [C(Suit.CLUBS, Rank.ACE), C(Suit.CLUBS, Rank.JACK), C(Suit.HEARTS, Rank.TWO)],
        lead=C(Suit.CLUBS, Rank.TEN),
    )
    assert HardBot().choose_card(state, Player.AI) == C(Suit.CLUBS, Rank.JACK)


def test_hard_final_lead_counts_higher_cards_already_played():
    history = [
        TrickRecord(1, C(Suit.CLUBS, Rank.ACE), C(Suit.CLUBS, Rank.KING), Player.PLAYER, Player.PLAYER),
        TrickRecord(2, C(Suit.DIAMONDS, Rank.TWO), C(Suit.DIAMONDS, Rank.THREE), Player.PLAYER, Player.AI),
    ]
    state = ai_to_act(
        [C(Suit.DIAMONDS, Rank.KING), C(Suit.CLUBS, Rank.QUEEN)],
        trick_number=5,
        history=history,
    )
    played = state.played_cards()
    assert lead_strength(C(Suit.CLUBS, Rank.QUEEN), played) == 16
    assert lead_strength(C(Suit.DIAMONDS, Rank.KING), played) == 13
    assert HardBot().choose_card(state, Player.AI) == C(Suit.CLUBS, Rank.QUEEN)


def test_every_bot_only_chooses_valid_cards():
    for difficulty in Difficulty:
        for seed in range(5):
            state = GameState(rng=Random(seed))
            state.start_new_match()
            bots = {Player.PLAYER: create_bot(difficulty, seed=seed), Player.AI: create_bot(difficulty, seed=seed)}
            while state.round_active:
                player = state.current_player
                card = bots[player].choose_card(state, player)
                assert card in state.get_valid_cards(player)
                assert state.play_card(card, player)
