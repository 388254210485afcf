"""Enumerations used throughout the game model."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class Direction(IntEnum):
    """Cardinal movement directions."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


@unique
class ItemKind(str, Enum):
    """Descriptor kind written into a snapshot tile."""

    PLAYER = "player"
    BLOCK = "block"


@unique
class GoodieType(str, Enum):
    """Goodie categories. Only FOOD is consumable today."""

    FOOD = "food"
    ROCK = "rock"


@unique
class GameStatus(IntEnum):
    """Lifecycle of a Game controller."""

    UNINITIALIZED = 0
    BOARD_READY = 1
    IN_PROGRESS = 2


@unique
class MoveOutcome(IntEnum):
    """Result of a move request, observed by presentation adapters."""

    MOVED = 0
    CONSUMED = 1
    NO_PLAYER = 2
    OUT_OF_BOUNDS = 3
    DEFEATED = 4
    BLOCKED = 5

    @property
    def applied(self) -> bool:
        return self in (MoveOutcome.MOVED, MoveOutcome.CONSUMED)


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    GOODIE_PLACEMENT = 0
    PLAYER_PLACEMENT = 1
