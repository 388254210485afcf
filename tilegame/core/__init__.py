"""Core game model: grid, entities and the Game controller."""

from tilegame.core.enums import Direction, Domain, GameStatus, GoodieType, ItemKind, MoveOutcome
from tilegame.core.errors import (
    BoardNotReady,
    GameError,
    GameStateError,
    GridFull,
    IndexOutOfRange,
    InvalidDimensions,
    MissingTileSize,
    MoveRejected,
    SnapshotError,
)
from tilegame.core.models import DIRECTION_OFFSETS, Goodie, Player, Vector2
from tilegame.core.grid import Grid
from tilegame.core.game import Game

__all__ = [
    "BoardNotReady",
    "DIRECTION_OFFSETS",
    "Direction",
    "Domain",
    "Game",
    "GameError",
    "GameStateError",
    "GameStatus",
    "Goodie",
    "GoodieType",
    "Grid",
    "GridFull",
    "IndexOutOfRange",
    "InvalidDimensions",
    "ItemKind",
    "MissingTileSize",
    "MoveOutcome",
    "MoveRejected",
    "Player",
    "SnapshotError",
    "Vector2",
]
