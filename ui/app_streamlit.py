"""Streamlit front-end for Last Trick."""

from __future__ import annotations

import time
from pathlib import Path

import streamlit as st

from engine.cards import card_label, deserialize_card
from engine.service import GameService, GameView
from engine.settings import CARD_BACKS, MAX_SCORE_GOAL, MIN_SCORE_GOAL, Difficulty
from engine.storage import JsonFileStorage

DATA_DIR = Path("data")


def get_service() -> GameService:
    if "game_service" not in st.session_state:
        st.session_state["game_service"] = GameService(JsonFileStorage(DATA_DIR))
    return st.session_state["game_service"]


def rerun() -> None:
    st.rerun()


def render_settings(service: GameService) -> None:
    st.sidebar.header("Settings")
    settings = service.settings
    difficulties = [difficulty.value for difficulty in Difficulty]
    difficulty = st.sidebar.selectbox(
        "AI difficulty", difficulties, index=difficulties.index(settings.difficulty.value)
    )
    goal = st.sidebar.number_input(
        "Score goal", min_value=MIN_SCORE_GOAL, max_value=MAX_SCORE_GOAL, value=settings.score_goal
    )
    back = st.sidebar.selectbox("Card back", CARD_BACKS, index=CARD_BACKS.index(settings.card_back))
    sound = st.sidebar.checkbox("Sound effects", value=settings.sound_enabled)
    changes = {"difficulty": difficulty, "score_goal": int(goal), "card_back": back, "sound_enabled": sound}
    if any(getattr(settings, name) != value for name, value in changes.items()):
        service.update_settings(**changes)


def render_table(view: GameView) -> None:
    cols = st.columns(3)
    cols[0].metric("You", view.scores["player"])
    cols[1].metric("AI", view.scores["ai"])
    cols[2].metric("Goal", view.score_goal)

    st.write(f"Round {view.round_number} · Trick {view.trick_number} of 5")
    st.write(f"AI cards: {view.ai_card_count}")

    slots = st.columns(2)
    lead = card_label(deserialize_card(view.lead_card)) if view.lead_card else "-"
    follow = card_label(deserialize_card(view.follow_card)) if view.follow_card else "-"
    slots[0].write(f"Lead card: {lead}")
    slots[1].write(f"Follow card: {follow}")


def render_hand(service: GameService, view: GameView) -> None:
    st.subheader("Your hand")
    cols = st.columns(max(len(view.hand), 1))
    for idx, (payload, label) in enumerate(zip(view.hand, view.hand_labels)):
        playable = payload in view.valid_cards
        if cols[idx].button(label, key=f"card-{idx}-{label}", disabled=not playable):
            result = service.play_card(payload)
            if not result.accepted:
                st.warning("You must follow suit if you can!")
            rerun()


def render_redeal(service: GameService, view: GameView) -> None:
    st.info(view.next_step.message)
    cols = st.columns(2)
    if cols[0].button("Yes, Redeal"):
        service.respond_to_redeal(True)
        rerun()
    if cols[1].button("No, Keep Hand"):
        service.respond_to_redeal(False)
        rerun()


def advance(service: GameService, view: GameView) -> None:
    """Run the next timed step the presentation owns."""
    step = view.next_step
    if step.kind == "ai_turn":
        time.sleep(step.delay)
        service.ai_turn()
        rerun()
    elif step.kind == "clear_trick":
        time.sleep(step.delay)
        service.clear_trick()
        rerun()


def main() -> None:
    st.set_page_config(page_title="Last Trick", layout="wide")
    st.title("Last Trick")

    service = get_service()
    render_settings(service)

    if st.sidebar.button("New Game"):
        service.start_new_match()
        rerun()

    view = service.get_view()
    st.write(view.next_step.message)

    if view.phase == "not_started":
        return

    render_table(view)

    if view.redeal_offer:
        render_redeal(service, view)
        return

    render_hand(service, view)

    if view.match_over:
        st.success(f"Final score: You {view.scores['player']} - {view.scores['ai']} AI")
        if st.button("Play again"):
            service.start_new_match()
            rerun()
        return
    if view.phase == "round_over":
        if st.button("Next round"):
            service.start_new_round()
            rerun()
        return

    advance(service, view)


if __name__ == "__main__":
    main()
