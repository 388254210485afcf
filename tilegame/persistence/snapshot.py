"""Snapshot codec: grid contents <-> JSON text.

Layout (keys are strings because JSON object keys are strings)::

    {"version": 1, "width": W, "height": H,
     "tiles": {"<x>": {"<y>": false | {"item": "block", ...}
                                     | {"item": "player", ...}}}}

Snapshots without a ``version`` field are the legacy format: a bare
``tiles`` mapping (or the mapping itself) whose dimensions are inferred
from its keys.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Any, Iterable, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tilegame.core.enums import GoodieType
from tilegame.core.errors import SnapshotError
from tilegame.core.models import Player, Vector2

if TYPE_CHECKING:
    from tilegame.core.grid import Grid

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class BlockItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: Literal["block"]
    type: GoodieType = GoodieType.FOOD
    visual: str = ""
    value: Optional[int] = None
    sound: Optional[str] = None


class PlayerItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: Literal["player"]
    name: str
    type: str
    health: Optional[int] = None
    active: bool = False


TileItem = Annotated[Union[BlockItem, PlayerItem], Field(discriminator="item")]
TileValue = Union[Literal[False], None, TileItem]


class SnapshotModel(BaseModel):
    version: int = Field(SNAPSHOT_VERSION, ge=1)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    tiles: dict[str, dict[str, TileValue]] = Field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DecodedSnapshot:
    """Validated snapshot: dimensions plus occupied tiles in x-then-y order."""

    version: int
    width: int
    height: int
    entries: tuple[tuple[Vector2, Union[BlockItem, PlayerItem]], ...]

    @property
    def blocks(self) -> list[tuple[Vector2, BlockItem]]:
        return [(p, i) for p, i in self.entries if isinstance(i, BlockItem)]

    @property
    def players(self) -> list[tuple[Vector2, PlayerItem]]:
        return [(p, i) for p, i in self.entries if isinstance(i, PlayerItem)]


def encode(grid: Grid, players: Iterable[Player] = ()) -> dict[str, Any]:
    """Build the snapshot mapping for *grid*.

    Players are not grid occupants; their descriptors are written into the
    leaf of the tile they stand on.
    """
    standing = {(p.pos.x, p.pos.y): p for p in players}
    tiles: dict[str, dict[str, Any]] = {}
    for x in range(grid.width):
        column: dict[str, Any] = {}
        for y in range(grid.height):
            occupant = grid.get_xy(x, y)
            if occupant is None:
                occupant = standing.get((x, y))
            column[str(y)] = occupant.to_json() if occupant is not None else False
        tiles[str(x)] = column
    return {
        "version": SNAPSHOT_VERSION,
        "width": grid.width,
        "height": grid.height,
        "tiles": tiles,
    }


def dumps(grid: Grid, players: Iterable[Player] = ()) -> str:
    return json.dumps(encode(grid, players), separators=(",", ":"))


def _coord(key: str, limit: int, axis: str) -> int:
    try:
        value = int(key)
    except (TypeError, ValueError):
        raise SnapshotError(f"non-integer {axis} key {key!r}") from None
    if key != str(value):
        raise SnapshotError(f"{axis} key {key!r} is not written as {value}")
    if not 0 <= value < limit:
        raise SnapshotError(f"{axis}={value} outside board size {limit}")
    return value


def _upgrade_legacy(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Give an unversioned snapshot explicit dimensions."""
    tiles = raw.get("tiles", raw)
    if not isinstance(tiles, Mapping) or not tiles:
        raise SnapshotError("legacy snapshot has no tiles")
    width = len(tiles)
    heights = {len(col) for col in tiles.values() if isinstance(col, Mapping)}
    if len(heights) != 1:
        raise SnapshotError("legacy snapshot columns differ in height")
    return {"version": SNAPSHOT_VERSION, "width": width, "height": heights.pop(), "tiles": tiles}


def decode(data: str | bytes | Mapping[str, Any]) -> DecodedSnapshot:
    """Parse and validate a snapshot. Raises SnapshotError on any problem."""
    if isinstance(data, (str, bytes)):
        try:
            raw = json.loads(data)
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"snapshot is not valid JSON: {exc}") from exc
    else:
        raw = data
    if not isinstance(raw, Mapping):
        raise SnapshotError("snapshot must be a JSON object")
    if "version" not in raw:
        logger.info("Upgrading unversioned snapshot")
        raw = _upgrade_legacy(raw)

    try:
        model = SnapshotModel.model_validate(raw)
    except ValidationError as exc:
        raise SnapshotError(f"invalid snapshot: {exc.error_count()} error(s)\n{exc}") from exc
    if model.version > SNAPSHOT_VERSION:
        raise SnapshotError(f"snapshot version {model.version} is newer than supported {SNAPSHOT_VERSION}")

    entries: list[tuple[Vector2, Union[BlockItem, PlayerItem]]] = []
    seen: set[Vector2] = set()
    for xk, column in model.tiles.items():
        x = _coord(xk, model.width, "x")
        for yk, value in column.items():
            y = _coord(yk, model.height, "y")
            pos = Vector2(x, y)
            if pos in seen:
                raise SnapshotError(f"tile {pos} appears more than once")
            seen.add(pos)
            if value is not None and value is not False:
                entries.append((pos, value))
    entries.sort(key=lambda e: (e[0].x, e[0].y))
    return DecodedSnapshot(model.version, model.width, model.height, tuple(entries))
