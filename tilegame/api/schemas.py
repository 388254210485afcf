"""Pydantic request and response models for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from tilegame.core.enums import GoodieType


# --- Requests ---

class BoardRequest(BaseModel):
    width: int = Field(gt=0, le=500, description="Board width in tiles")
    height: int = Field(gt=0, le=500, description="Board height in tiles")


class GoodiesRequest(BaseModel):
    count: int = Field(1, ge=0, le=10_000)
    type: GoodieType = GoodieType.FOOD
    visual: str = ""
    energy: int | None = Field(None, description="Energy delta; config default when omitted")
    sound: str | None = None


class PlayerRequest(BaseModel):
    name: str = Field(min_length=1)
    type: str = "hero"
    x: int | None = None
    y: int | None = None


class MoveToRequest(BaseModel):
    x: int
    y: int


# --- Entities ---

class PlayerSchema(BaseModel):
    index: int
    name: str
    type: str
    x: int
    y: int
    health: int
    active: bool
    defeated: bool
    direction: str | None = None


class GoodieSchema(BaseModel):
    x: int
    y: int
    type: str
    visual: str = ""
    value: int
    sound: str | None = None


# --- Responses ---

class GameStateResponse(BaseModel):
    status: str
    width: int
    height: int
    tilesize: int
    active_index: int | None = None
    players: list[PlayerSchema] = Field(default_factory=list)
    goodies: list[GoodieSchema] = Field(default_factory=list)


class MoveResponse(BaseModel):
    outcome: str
    applied: bool
    player: PlayerSchema | None = None


class GoodiesResponse(BaseModel):
    requested: int
    placed: list[GoodieSchema]


class EventSchema(BaseModel):
    seq: int
    category: str
    message: str
    data: dict[str, Any] = Field(default_factory=dict)


class PersistenceResponse(BaseModel):
    status: str
    message: str
    entities: int = 0


class ControlResponse(BaseModel):
    status: str
    message: str


class GameConfigResponse(BaseModel):
    tilesize: int
    board_width: int
    board_height: int
    move_energy: int
    start_energy: int
    goodie_energy: int
    seed: int
    strict_moves: bool
    consume_delay_ms: int
