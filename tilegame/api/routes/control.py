"""POST /api/v1/save, /load and /reset — session lifecycle."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tilegame.api.dependencies import get_session, http_errors
from tilegame.api.schemas import ControlResponse, PersistenceResponse
from tilegame.api.session import GameSession

router = APIRouter()


@router.post("/save", response_model=PersistenceResponse)
def save(session: GameSession = Depends(get_session)) -> PersistenceResponse:
    with session.command() as game, http_errors():
        game.save_game_state(session.store)
        count = len(game.goodies) + len(game.players)
    return PersistenceResponse(status="ok", message="Game state saved.", entities=count)


@router.post("/load", response_model=PersistenceResponse)
def load(session: GameSession = Depends(get_session)) -> PersistenceResponse:
    with session.command() as game, http_errors():
        placed = game.load_game_state(session.store)
    if placed == 0:
        return PersistenceResponse(status="noop", message="No saved game or empty snapshot.", entities=0)
    return PersistenceResponse(status="ok", message="Game state loaded.", entities=placed)


@router.post("/reset", response_model=ControlResponse)
def reset(session: GameSession = Depends(get_session)) -> ControlResponse:
    session.reset()
    return ControlResponse(status="ok", message="Game reset.")
