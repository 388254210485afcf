"""Tile grid: occupancy of every cell on the board."""

from __future__ import annotations

from typing import TYPE_CHECKING, Collection, Iterator, Union

from tilegame.core.enums import Domain
from tilegame.core.errors import GridFull, InvalidDimensions
from tilegame.core.models import Goodie, Player, Vector2

if TYPE_CHECKING:
    from tilegame.systems.rng import DeterministicRNG

Occupant = Union[Player, Goodie]


class Grid:
    """2D tile grid backed by a flat list; ``None`` marks an empty tile."""

    __slots__ = ("width", "height", "_tiles")

    def __init__(self, width: int, height: int) -> None:
        self.width = 0
        self.height = 0
        self._tiles: list[Occupant | None] = []
        self.create(width, height)

    def create(self, width: int, height: int) -> None:
        """Replace all tile state with a fresh, empty *width* x *height* grid."""
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"board must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self._tiles = [None] * (width * height)

    # -- access --

    def _idx(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"tile ({x}, {y}) outside {self.width}x{self.height} board")
        return y * self.width + x

    def in_bounds(self, pos: Vector2) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def in_bounds_xy(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, pos: Vector2) -> Occupant | None:
        return self._tiles[self._idx(pos.x, pos.y)]

    def get_xy(self, x: int, y: int) -> Occupant | None:
        return self._tiles[self._idx(x, y)]

    def set(self, pos: Vector2, value: Occupant | None) -> None:
        self._tiles[self._idx(pos.x, pos.y)] = value

    def clear(self, pos: Vector2) -> None:
        self.set(pos, None)

    def is_free(self, pos: Vector2) -> bool:
        return self.get(pos) is None

    # -- queries --

    def free_tiles(self, exclude: Collection[Vector2] = ()) -> list[Vector2]:
        """All empty tiles in row-major order, minus any in *exclude*."""
        w = self.width
        free = [Vector2(i % w, i // w) for i, tile in enumerate(self._tiles) if tile is None]
        if exclude:
            free = [pos for pos in free if pos not in exclude]
        return free

    def free_count(self) -> int:
        return sum(1 for tile in self._tiles if tile is None)

    def occupied(self) -> Iterator[tuple[Vector2, Occupant]]:
        w = self.width
        for i, tile in enumerate(self._tiles):
            if tile is not None:
                yield Vector2(i % w, i // w), tile

    def random_free_tile(
        self,
        rng: DeterministicRNG,
        salt: int,
        domain: Domain = Domain.GOODIE_PLACEMENT,
        exclude: Collection[Vector2] = (),
    ) -> Vector2:
        """Pick uniformly among the currently empty tiles.

        Enumerates the free set instead of retry sampling, so a nearly full
        board costs one pass and a full board fails with GridFull.
        """
        free = self.free_tiles(exclude)
        if not free:
            raise GridFull(f"no free tile on {self.width}x{self.height} board")
        return free[rng.choice_index(domain, len(free), salt, len(free))]
