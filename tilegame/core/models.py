"""Core data models: Vector2, Player, Goodie."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tilegame.core.enums import Direction, GoodieType, ItemKind
from tilegame.core.errors import MissingTileSize

DEFAULT_TILESIZE = 50


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Direction offsets mapped to Direction enum values (y grows downwards)
DIRECTION_OFFSETS: dict[Direction, Vector2] = {
    Direction.UP: Vector2(0, -1),
    Direction.RIGHT: Vector2(1, 0),
    Direction.DOWN: Vector2(0, 1),
    Direction.LEFT: Vector2(-1, 0),
}


def _pixel(pos: Vector2, tilesize: int) -> tuple[int, int]:
    return pos.x * tilesize, pos.y * tilesize


@dataclass(slots=True, eq=False)
class Player:
    """A named, movable entity whose health doubles as energy."""

    name: str
    type: str
    pos: Vector2 = field(default_factory=Vector2)
    health: int = 100
    tilesize: int = DEFAULT_TILESIZE
    direction: Direction | None = None
    active: bool = False
    _defeat_reported: bool = field(default=False, repr=False, compare=False)

    @classmethod
    def create(
        cls,
        name: str,
        type: str,
        tilesize: int | None = None,
        start_position: Vector2 | None = None,
        start_health: int = 100,
    ) -> Player:
        return cls(
            name=name,
            type=type,
            pos=start_position or Vector2(0, 0),
            health=start_health,
            tilesize=tilesize or DEFAULT_TILESIZE,
        )

    @property
    def defeated(self) -> bool:
        return self.health <= 0

    @property
    def pixel_pos(self) -> tuple[int, int]:
        return _pixel(self.pos, self.tilesize)

    def move_to(self, pos: Vector2) -> None:
        # Every position change goes through here.
        self.pos = pos

    def apply_energy_delta(self, amount: int) -> None:
        """Add *amount* to health. Health is not clamped; <= 0 means defeated."""
        self.health += amount

    def face(self, direction: Direction) -> None:
        self.direction = direction

    def to_json(self) -> dict[str, Any]:
        return {
            "item": ItemKind.PLAYER.value,
            "name": self.name,
            "type": self.type,
            "health": self.health,
            "active": self.active,
        }


@dataclass(slots=True, eq=False)
class Goodie:
    """A consumable block occupying one tile until a player eats it."""

    type: GoodieType
    tilesize: int
    visual: str = ""
    value: int = 40
    sound: str | None = None
    pos: Vector2 = field(default_factory=Vector2)
    consumed: bool = False

    @classmethod
    def create(
        cls,
        type: GoodieType | str,
        tilesize: Any,
        visual: str = "",
        energy: int = 40,
        sound: str | None = None,
    ) -> Goodie:
        if isinstance(tilesize, bool) or not isinstance(tilesize, (int, float)) or tilesize <= 0:
            raise MissingTileSize(f"goodie needs a positive tile size, got {tilesize!r}")
        return cls(
            type=GoodieType(type),
            tilesize=int(tilesize),
            visual=visual or "",
            value=energy,
            sound=sound,
        )

    @property
    def edible(self) -> bool:
        return self.type == GoodieType.FOOD and not self.consumed

    @property
    def pixel_pos(self) -> tuple[int, int]:
        return _pixel(self.pos, self.tilesize)

    def consume(self) -> None:
        self.consumed = True

    def to_json(self) -> dict[str, Any]:
        return {
            "item": ItemKind.BLOCK.value,
            "type": self.type.value,
            "visual": self.visual,
            "value": self.value,
            "sound": self.sound,
        }
