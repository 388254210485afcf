"""POST /api/v1/board and /goodies — board setup."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tilegame.api.dependencies import get_session, http_errors
from tilegame.api.routes.state import serialize_game, serialize_goodie
from tilegame.api.schemas import BoardRequest, GameStateResponse, GoodiesRequest, GoodiesResponse
from tilegame.api.session import GameSession

router = APIRouter()


@router.post("/board", response_model=GameStateResponse)
def create_board(body: BoardRequest, session: GameSession = Depends(get_session)) -> GameStateResponse:
    with session.command() as game, http_errors():
        game.create_board(body.width, body.height)
        return serialize_game(game)


@router.post("/goodies", response_model=GoodiesResponse)
def add_goodies(body: GoodiesRequest, session: GameSession = Depends(get_session)) -> GoodiesResponse:
    with session.command() as game, http_errors():
        placed = game.add_goodies(body.count, type=body.type, visual=body.visual, energy=body.energy, sound=body.sound)
        return GoodiesResponse(requested=body.count, placed=[serialize_goodie(g) for g in placed])
