"""POST /api/v1/players and PUT /players/active/{index}."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tilegame.api.dependencies import get_session, http_errors
from tilegame.api.routes.state import serialize_player
from tilegame.api.schemas import PlayerRequest, PlayerSchema
from tilegame.api.session import GameSession
from tilegame.core.models import Vector2

router = APIRouter()


@router.post("/players", response_model=PlayerSchema)
def add_player(body: PlayerRequest, session: GameSession = Depends(get_session)) -> PlayerSchema:
    position = Vector2(body.x, body.y) if body.x is not None and body.y is not None else None
    with session.command() as game, http_errors():
        player = game.add_player(body.name, body.type, position)
        return serialize_player(game.active_index, player)


@router.put("/players/active/{index}", response_model=PlayerSchema)
def set_active_player(index: int, session: GameSession = Depends(get_session)) -> PlayerSchema:
    with session.command() as game, http_errors():
        player = game.set_active_player(index)
        return serialize_player(index, player)
