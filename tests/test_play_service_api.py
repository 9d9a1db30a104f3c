from fastapi.testclient import TestClient

from engine.storage import MemoryStorage
from server.play_service import create_app


def make_client() -> TestClient:
    return TestClient(create_app(MemoryStorage()))


def test_start_and_fetch_session():
    client = make_client()
    response = client.post("/session/start", json={"seed": 3, "difficulty": "hard"})
    assert response.status_code == 200
    body = response.json()
    state = body["state"]
    assert len(state["hand"]) == 5
    assert state["ai_card_count"] == 5
    assert state["difficulty"] == "hard"

    fetched = client.get(f"/session/{body['session_id']}")
    assert fetched.status_code == 200
    assert fetched.json()["state"]["hand"] == state["hand"]


def test_unknown_session_is_404():
    client = make_client()
    assert client.get("/session/missing").status_code == 404
    assert client.post("/session/missing/ai-turn").status_code == 404


def test_bad_card_payload_is_400():
    client = make_client()
    session_id = client.post("/session/start", json={"seed": 1}).json()["session_id"]
    response = client.post(f"/session/{session_id}/play", json={"card": {"suit": "stars", "rank": "2"}})
    assert response.status_code == 400


def test_play_a_round_over_http():
    client = make_client()
    body = client.post("/session/start", json={"seed": 9, "score_goal": 3}).json()
    session_id = body["session_id"]
    state = body["state"]
    assert state["score_goal"] == 3

    for _ in range(40):
        step = state["next_step"]["kind"]
        if step in ("round_over", "match_over"):
            break
        if step == "await_redeal":
            state = client.post(f"/session/{session_id}/redeal", json={"accept": False}).json()["state"]
        elif step == "await_player":
            response = client.post(f"/session/{session_id}/play", json={"card": state["valid_cards"][0]}).json()
            assert response["accepted"]
            state = response["state"]
        elif step == "ai_turn":
            response = client.post(f"/session/{session_id}/ai-turn").json()
            assert response["accepted"]
            state = response["state"]
        elif step == "clear_trick":
            state = client.post(f"/session/{session_id}/clear-trick").json()["state"]

    assert state["next_step"]["kind"] == "round_over"
    assert sum(state["scores"].values()) == 1
    assert len(state["trick_history"]) == 5

    state = client.post(f"/session/{session_id}/new-round").json()["state"]
    assert state["round_number"] == 2
    assert sum(state["scores"].values()) == 1

    state = client.post(f"/session/{session_id}/new-match").json()["state"]
    assert state["scores"] == {"player": 0, "ai": 0}
    assert state["match_number"] == 2


def test_out_of_turn_play_is_not_accepted():
    client = make_client()
    for seed in range(10):
        body = client.post("/session/start", json={"seed": seed}).json()
        state = body["state"]
        if state["current_player"] == "ai" and not state["redeal_offer"]:
            break
    else:
        raise AssertionError("no seed gave the AI the first lead")
    response = client.post(f"/session/{body['session_id']}/play", json={"card": state["hand"][0]})
    assert response.status_code == 200
    assert response.json()["accepted"] is False


def test_settings_endpoint_reverts_invalid_values():
    client = make_client()
    assert client.get("/settings").json()["score_goal"] == 5
    updated = client.put("/settings", json={"score_goal": 50, "difficulty": "grandmaster"}).json()
    assert updated["score_goal"] == 5
    assert updated["difficulty"] == "grandmaster"
    assert client.get("/settings").json()["difficulty"] == "grandmaster"


def test_log_stats_start_empty():
    client = make_client()
    assert client.get("/logs/stats").json()["total_rounds"] == 0


def test_new_round_after_match_over_keeps_the_final_table():
    client = make_client()
    body = client.post("/session/start", json={"seed": 2, "score_goal": 1}).json()
    session_id = body["session_id"]
    state = body["state"]
    while not state["match_over"]:
        step = state["next_step"]["kind"]
        if step == "await_redeal":
            state = client.post(f"/session/{session_id}/redeal", json={"accept": False}).json()["state"]
        elif step == "await_player":
            state = client.post(f"/session/{session_id}/play", json={"card": state["valid_cards"][0]}).json()["state"]
        elif step == "ai_turn":
            state = client.post(f"/session/{session_id}/ai-turn").json()["state"]
        else:
            state = client.post(f"/session/{session_id}/clear-trick").json()["state"]

    after = client.post(f"/session/{session_id}/new-round").json()["state"]
    assert after["round_active"] is False
    assert after["match_over"] is True
    assert after["round_number"] == state["round_number"]
    assert after["next_step"]["kind"] == "match_over"
