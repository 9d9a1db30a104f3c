from random import Random

from bots.random_bot import RandomBot
from engine.state import GameState, TrickPhase
from engine.trick import Player


def autoplay_round(state: GameState, seed: int = 0) -> None:
    bots = {Player.PLAYER: RandomBot(seed=seed), Player.AI: RandomBot(seed=seed + 1)}
    while state.round_active:
        player = state.current_player
        assert state.play_card(bots[player].choose_card(state, player), player)


def cards_accounted_for(state: GameState) -> int:
    in_flight = 0 if state.is_leading else 1
    return len(state.player_hand) + len(state.ai_hand) + 2 * len(state.trick_history) + in_flight


def test_new_game_starts_idle():
    state = GameState(rng=Random(0))
    assert state.phase is TrickPhase.NOT_STARTED
    assert not state.round_active
    assert state.current_player is None


def test_start_new_match_deals_five_each():
    state = GameState(rng=Random(0))
    state.start_new_match()
    assert len(state.player_hand) == 5
    assert len(state.ai_hand) == 5
    assert len(state.deck) == 42
    assert not set(state.player_hand) & set(state.ai_hand)
    assert state.trick_number == 1
    assert state.phase is TrickPhase.LEAD_PENDING
    assert state.current_player is state.lead_player
    assert state.round_number == 1
    assert state.match_number == 1


def test_card_count_invariant_holds_through_rounds():
    for seed in range(10):
        state = GameState(rng=Random(seed))
        state.start_new_match()
        bots = {Player.PLAYER: RandomBot(seed=seed), Player.AI: RandomBot(seed=seed + 50)}
        assert cards_accounted_for(state) == 10
        while state.round_active:
            player = state.current_player
            state.play_card(bots[player].choose_card(state, player), player)
            assert cards_accounted_for(state) == 10
        assert len(state.trick_history) == 5
        assert [record.trick_number for record in state.trick_history] == [1, 2, 3, 4, 5]


def test_trick_numbers_only_advance():
    state = GameState(rng=Random(4))
    state.start_new_match()
    seen = [state.trick_number]
    bots = {Player.PLAYER: RandomBot(seed=1), Player.AI: RandomBot(seed=2)}
    while state.round_active:
        player = state.current_player
        state.play_card(bots[player].choose_card(state, player), player)
        seen.append(state.trick_number)
    assert seen == sorted(seen)
    assert seen[-1] == 5


def test_exactly_one_point_per_round():
    state = GameState(score_goal=20, rng=Random(9))
    state.start_new_match()
    for round_index in range(6):
        if round_index:
            state.start_new_round()
        autoplay_round(state, seed=round_index)
        assert state.player_score + state.ai_score == round_index + 1
        assert state.scores[state.last_trick.winner] >= 1


def test_scores_are_kept_between_rounds_and_reset_by_new_match():
    state = GameState(score_goal=20, rng=Random(2))
    state.start_new_match()
    autoplay_round(state)
    state.start_new_round()
    assert state.player_score + state.ai_score == 1
    state.start_new_match()
    assert state.player_score == 0 and state.ai_score == 0
    assert state.round_number == 1
    assert state.match_number == 2


def test_round_leaders_alternate_after_random_first_round():
    state = GameState(score_goal=20, rng=Random(5))
    state.start_new_match()
    first = state.round_starter
    assert state.current_player is first
    leaders = [first]
    for _ in range(3):
        autoplay_round(state)
        state.start_new_round()
        leaders.append(state.current_player)
    assert leaders == [first, first.other, first, first.other]


def test_first_leader_of_a_match_is_random():
    starters = set()
    for seed in range(20):
        state = GameState(rng=Random(seed))
        state.start_new_match()
        starters.add(state.round_starter)
    assert starters == {Player.PLAYER, Player.AI}


def test_goal_of_one_ends_match_after_first_round():
    state = GameState(score_goal=1, rng=Random(8))
    state.start_new_match()
    autoplay_round(state)
    assert state.is_match_over
    assert state.player_score >= 1 or state.ai_score >= 1
    assert state.match_winner is state.last_trick.winner
    assert not state.round_active
    assert state.round_number == 1
    assert state.phase is TrickPhase.ROUND_OVER


def test_no_play_after_round_over():
    state = GameState(rng=Random(3))
    state.start_new_match()
    autoplay_round(state)
    for player in Player:
        assert state.get_valid_cards(player) == []
    assert not state.play_card(state.trick_history[0].lead_card, Player.PLAYER)


def test_played_cards_include_the_card_on_the_table():
    state = GameState(rng=Random(6))
    state.start_new_match()
    leader = state.current_player
    card = state.get_valid_cards(leader)[0]
    state.play_card(card, leader)
    assert state.played_cards() == [card]
    follower = state.current_player
    follow = state.get_valid_cards(follower)[0]
    state.play_card(follow, follower)
    assert state.played_cards() == [card, follow]
