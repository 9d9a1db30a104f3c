"""REST service to play Last Trick against the computer opponent."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict
from pathlib import Path
from random import Random
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from engine.play_log import PlayLog
from engine.service import GameService, PlayResult
from engine.settings import Difficulty, load_settings, save_settings
from engine.storage import JsonFileStorage, Storage

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"
STATIC_DIR = Path(__file__).parent.parent / "ui" / "web" / "dist"


class StartRequest(BaseModel):
    difficulty: Optional[Difficulty] = None
    score_goal: Optional[int] = None
    seed: Optional[int] = None


class CardPayload(BaseModel):
    suit: str
    rank: str


class PlayRequest(BaseModel):
    card: CardPayload


class RedealRequest(BaseModel):
    accept: bool


class SettingsUpdate(BaseModel):
    # Loosely typed so that bad values are reverted by Settings.apply, not rejected.
    difficulty: Any = None
    score_goal: Any = None
    card_back: Any = None
    sound_enabled: Any = None


def serialize_result(result: PlayResult) -> Dict[str, object]:
    return {"accepted": result.accepted, "state": asdict(result.view)}


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    store = storage or JsonFileStorage(DATA_DIR)
    sessions: Dict[str, GameService] = {}

    app = FastAPI(title="Last Trick Play Service")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def ensure_session(session_id: str) -> GameService:
        service = sessions.get(session_id)
        if service is None:
            raise HTTPException(status_code=404, detail="Session not found")
        return service

    @app.post("/session/start")
    def start_session(request: StartRequest) -> Dict[str, object]:
        rng = Random(request.seed) if request.seed is not None else None
        service = GameService(store, rng=rng, bot_seed=request.seed)
        changes = {}
        if request.difficulty is not None:
            changes["difficulty"] = request.difficulty
        if request.score_goal is not None:
            changes["score_goal"] = request.score_goal
        if changes:
            service.update_settings(**changes)
        view = service.start_new_match()
        session_id = uuid.uuid4().hex
        sessions[session_id] = service
        logger.info("Session %s started against %s", session_id, service.bot.name)
        return {"session_id": session_id, "state": asdict(view)}

    @app.get("/session/{session_id}")
    def get_state(session_id: str) -> Dict[str, object]:
        service = ensure_session(session_id)
        return {"state": asdict(service.get_view())}

    @app.post("/session/{session_id}/play")
    def play_card(session_id: str, request: PlayRequest) -> Dict[str, object]:
        service = ensure_session(session_id)
        try:
            result = service.play_card(request.card.model_dump())
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return serialize_result(result)

    @app.post("/session/{session_id}/ai-turn")
    def ai_turn(session_id: str) -> Dict[str, object]:
        service = ensure_session(session_id)
        return serialize_result(service.ai_turn())

    @app.post("/session/{session_id}/clear-trick")
    def clear_trick(session_id: str) -> Dict[str, object]:
        service = ensure_session(session_id)
        return {"state": asdict(service.clear_trick())}

    @app.post("/session/{session_id}/redeal")
    def redeal(session_id: str, request: RedealRequest) -> Dict[str, object]:
        service = ensure_session(session_id)
        return {"state": asdict(service.respond_to_redeal(request.accept))}

    @app.post("/session/{session_id}/new-round")
    def new_round(session_id: str) -> Dict[str, object]:
        service = ensure_session(session_id)
        return {"state": asdict(service.start_new_round())}

    @app.post("/session/{session_id}/new-match")
    def new_match(session_id: str) -> Dict[str, object]:
        service = ensure_session(session_id)
        return {"state": asdict(service.start_new_match())}

    @app.get("/settings")
    def get_settings() -> Dict[str, object]:
        return load_settings(store).model_dump(mode="json")

    @app.put("/settings")
    def update_settings(request: SettingsUpdate) -> Dict[str, object]:
        changes = {name: value for name, value in request.model_dump().items() if value is not None}
        updated = load_settings(store).apply(**changes)
        save_settings(store, updated)
        for service in sessions.values():
            service.update_settings(**changes)
        return updated.model_dump(mode="json")

    @app.get("/logs/stats")
    def log_stats() -> Dict[str, int]:
        return PlayLog(store).stats()

    if STATIC_DIR.exists():
        app.mount("/assets", StaticFiles(directory=STATIC_DIR / "assets"), name="assets")

        @app.get("/")
        def serve_index():
            return FileResponse(STATIC_DIR / "index.html")

    return app


app = create_app()
