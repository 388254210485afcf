"""POST /api/v1/move/{direction} and /move-to — the input layer."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from tilegame.api.dependencies import get_session, http_errors
from tilegame.api.routes.state import serialize_player
from tilegame.api.schemas import MoveResponse, MoveToRequest
from tilegame.api.session import GameSession
from tilegame.core.enums import Direction, MoveOutcome
from tilegame.core.game import Game

router = APIRouter()


class MoveDirection(str, Enum):
    up = "up"
    right = "right"
    down = "down"
    left = "left"


def _response(game: Game, outcome: MoveOutcome) -> MoveResponse:
    player = game.active_player
    return MoveResponse(
        outcome=outcome.name.lower(),
        applied=outcome.applied,
        player=serialize_player(game.active_index, player) if player is not None else None,
    )


@router.post("/move/{direction}", response_model=MoveResponse)
def move(direction: MoveDirection, session: GameSession = Depends(get_session)) -> MoveResponse:
    with session.command() as game, http_errors():
        outcome = game.move(Direction[direction.name.upper()])
        return _response(game, outcome)


@router.post("/move-to", response_model=MoveResponse)
def move_to(body: MoveToRequest, session: GameSession = Depends(get_session)) -> MoveResponse:
    with session.command() as game, http_errors():
        outcome = game.move_player_to(body.x, body.y)
        return _response(game, outcome)
