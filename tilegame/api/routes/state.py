"""GET /api/v1/state — board, players and goodies (polled by the UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from tilegame.api.dependencies import get_session
from tilegame.api.schemas import EventSchema, GameStateResponse, GoodieSchema, PlayerSchema
from tilegame.api.session import GameSession
from tilegame.core.game import Game
from tilegame.core.models import Goodie, Player

router = APIRouter()


def serialize_player(index: int, p: Player) -> PlayerSchema:
    return PlayerSchema(
        index=index,
        name=p.name,
        type=p.type,
        x=p.pos.x,
        y=p.pos.y,
        health=p.health,
        active=p.active,
        defeated=p.defeated,
        direction=p.direction.name.lower() if p.direction is not None else None,
    )


def serialize_goodie(g: Goodie) -> GoodieSchema:
    return GoodieSchema(x=g.pos.x, y=g.pos.y, type=g.type.value, visual=g.visual, value=g.value, sound=g.sound)


def serialize_game(game: Game) -> GameStateResponse:
    return GameStateResponse(
        status=game.status.name.lower(),
        width=game.width,
        height=game.height,
        tilesize=game.config.tilesize,
        active_index=game.active_index,
        players=[serialize_player(i, p) for i, p in enumerate(game.players)],
        goodies=[serialize_goodie(g) for g in game.goodies],
    )


@router.get("/state", response_model=GameStateResponse)
def get_state(session: GameSession = Depends(get_session)) -> GameStateResponse:
    with session.command() as game:
        return serialize_game(game)


@router.get("/events", response_model=list[EventSchema])
def get_events(
    since: int = Query(0, ge=0, description="Return events after this sequence number"),
    limit: int = Query(100, ge=1, le=1000),
    session: GameSession = Depends(get_session),
) -> list[EventSchema]:
    events = session.events.since(since)[:limit]
    return [EventSchema(seq=e.seq, category=e.category, message=e.message, data=e.data) for e in events]
