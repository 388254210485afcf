"""Game controller — owns the grid, the players and the goodies.

All mutations of the board happen here. Presentation layers observe the
model through the MoveOutcome returned by movement calls and through the
``events`` feed; the model never touches a renderer.

Invalid moves (no active player, target off the board, defeated player,
unhandled occupant) are silent no-ops that return the reason. With
``GameConfig.strict_moves`` the same cases raise MoveRejected instead.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from tilegame.config import GameConfig
from tilegame.core.enums import Direction, Domain, GameStatus, GoodieType, MoveOutcome
from tilegame.core.errors import (
    BoardNotReady,
    GameStateError,
    GridFull,
    IndexOutOfRange,
    MoveRejected,
    SnapshotError,
)
from tilegame.core.grid import Grid
from tilegame.core.models import DIRECTION_OFFSETS, Goodie, Player, Vector2
from tilegame.persistence import snapshot as snapshot_codec
from tilegame.persistence.store import KeyValueStore
from tilegame.systems.rng import DeterministicRNG
from tilegame.utils.event_log import EventLog

logger = logging.getLogger(__name__)

DEFAULT_EVENT_HISTORY = 1000


def _xy(pos: Vector2) -> list[int]:
    return [pos.x, pos.y]


class Game:
    """The single source of truth for a game session."""

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: DeterministicRNG | None = None,
        events: EventLog | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or DeterministicRNG(self.config.seed)
        self.events = events if events is not None else EventLog(maxlen=DEFAULT_EVENT_HISTORY)

        self.players: list[Player] = []
        self.goodies: list[Goodie] = []

        self._grid: Grid | None = None
        self._active_index: int | None = None
        self._status = GameStatus.UNINITIALIZED
        self._draws = 0

    # -- public properties --

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def grid(self) -> Grid:
        return self._require_board()

    @property
    def width(self) -> int:
        return self._grid.width if self._grid else 0

    @property
    def height(self) -> int:
        return self._grid.height if self._grid else 0

    @property
    def move_energy(self) -> int:
        return self.config.move_energy

    @property
    def start_energy(self) -> int:
        return self.config.start_energy

    @property
    def active_index(self) -> int | None:
        return self._active_index

    @property
    def active_player(self) -> Player | None:
        if self._active_index is None:
            return None
        return self.players[self._active_index]

    def is_defeated(self, index: int | None = None) -> bool:
        player = self.active_player if index is None else self.players[index]
        return player is not None and player.defeated

    # -- internals --

    def _require_board(self) -> Grid:
        if self._grid is None:
            raise BoardNotReady("create_board() must be called first")
        return self._grid

    def _player_at(self, pos: Vector2) -> Player | None:
        for player in self.players:
            if player.pos == pos:
                return player
        return None

    def _standing(self) -> set[Vector2]:
        return {p.pos for p in self.players}

    def _is_vacant(self, pos: Vector2) -> bool:
        grid = self._require_board()
        return grid.in_bounds(pos) and grid.is_free(pos) and self._player_at(pos) is None

    def _draw_free_tile(self, domain: Domain) -> Vector2:
        self._draws += 1
        return self._require_board().random_free_tile(self.rng, self._draws, domain, exclude=self._standing())

    def _activate(self, index: int) -> None:
        for player in self.players:
            player.active = False
        self.players[index].active = True
        self._active_index = index

    def _reject(self, outcome: MoveOutcome, message: str) -> MoveOutcome:
        logger.debug("Move ignored (%s): %s", outcome.name, message)
        if self.config.strict_moves:
            raise MoveRejected(outcome, message)
        return outcome

    # -- board --

    def create_board(self, width: int, height: int) -> Grid:
        """Create a fresh board of *width* x *height* tiles (not pixels)."""
        if self._status == GameStatus.IN_PROGRESS:
            raise GameStateError("cannot recreate the board once players have joined; reset() first")
        grid = Grid(width, height)
        self._grid = grid
        self.goodies.clear()
        self._status = GameStatus.BOARD_READY
        logger.info("Board created: %dx%d tiles (tilesize=%dpx)", width, height, self.config.tilesize)
        self.events.emit("board_created", f"Board {width}x{height}", width=width, height=height)
        return grid

    def add_goodies(
        self,
        count: int,
        type: GoodieType | str = GoodieType.FOOD,
        visual: str = "",
        energy: int | None = None,
        sound: str | None = None,
    ) -> list[Goodie]:
        """Place up to *count* goodies on random free tiles.

        Places as many as there is room for and returns the ones placed.
        In strict mode a batch that cannot fit raises GridFull and places
        nothing.
        """
        grid = self._require_board()
        if energy is None:
            energy = self.config.goodie_energy

        if self.config.strict_moves:
            room = len(grid.free_tiles(self._standing()))
            if room < count:
                raise GridFull(f"{count} goodies requested but only {room} free tiles")

        placed: list[Goodie] = []
        for _ in range(max(count, 0)):
            goodie = Goodie.create(type, self.config.tilesize, visual=visual, energy=energy, sound=sound)
            try:
                pos = self._draw_free_tile(Domain.GOODIE_PLACEMENT)
            except GridFull:
                logger.warning("Board full: placed %d of %d goodies", len(placed), count)
                break
            goodie.pos = pos
            grid.set(pos, goodie)
            self.goodies.append(goodie)
            placed.append(goodie)

        self.events.emit(
            "goodies_added",
            f"Placed {len(placed)}/{count} goodies",
            requested=count,
            placed=[_xy(g.pos) for g in placed],
        )
        return placed

    def place_goodie(
        self,
        position: Vector2,
        type: GoodieType | str = GoodieType.FOOD,
        visual: str = "",
        energy: int | None = None,
        sound: str | None = None,
    ) -> Goodie:
        """Put one goodie on a specific empty tile."""
        if not self._is_vacant(position):
            raise GameStateError(f"tile {position} is off the board or occupied")
        goodie = Goodie.create(
            type,
            self.config.tilesize,
            visual=visual,
            energy=self.config.goodie_energy if energy is None else energy,
            sound=sound,
        )
        goodie.pos = position
        self._require_board().set(position, goodie)
        self.goodies.append(goodie)
        self.events.emit("goodies_added", f"Placed goodie at {position}", requested=1, placed=[_xy(position)])
        return goodie

    # -- players --

    def add_player(self, name: str, type: str, position: Vector2 | None = None) -> Player:
        """Add a player and make it the active one.

        A missing, off-board or occupied *position* is replaced by a random
        free tile.
        """
        self._require_board()
        if position is None or not self._is_vacant(position):
            position = self._draw_free_tile(Domain.PLAYER_PLACEMENT)

        player = Player.create(name, type, self.config.tilesize, position, self.config.start_energy)
        self.players.append(player)
        self._activate(len(self.players) - 1)
        self._status = GameStatus.IN_PROGRESS
        logger.info("Player %r (%s) joined at %s", name, type, position)
        self.events.emit(
            "player_added",
            f"{name} joined",
            index=self._active_index,
            name=name,
            pos=_xy(position),
            health=player.health,
        )
        return player

    def set_active_player(self, index: int) -> Player:
        if not 0 <= index < len(self.players):
            raise IndexOutOfRange(f"player index {index} outside 0..{len(self.players) - 1}")
        self._activate(index)
        player = self.players[index]
        self.events.emit("active_changed", f"{player.name} is active", index=index)
        return player

    # -- movement --

    def move_player(self, dx: int, dy: int) -> MoveOutcome:
        """Move the active player by a tile delta (-1 left/up, 1 right/down)."""
        player = self.active_player
        if player is None:
            return self._reject(MoveOutcome.NO_PLAYER, "no active player")
        return self.move_player_to(player.pos.x + dx, player.pos.y + dy)

    def move_player_to(self, x: int, y: int) -> MoveOutcome:
        """Move the active player to tile (*x*, *y*) and resolve what is there."""
        player = self.active_player
        if player is None:
            return self._reject(MoveOutcome.NO_PLAYER, "no active player")
        if self._grid is None or not self._grid.in_bounds_xy(x, y):
            return self._reject(MoveOutcome.OUT_OF_BOUNDS, f"({x}, {y}) is off the board")
        if player.health <= 0:
            return self._reject(MoveOutcome.DEFEATED, f"{player.name} has no energy left")

        target = Vector2(x, y)
        block = self._grid.get(target)
        other = self._player_at(target)
        if other is player:
            other = None

        if block is None and other is None:
            player.apply_energy_delta(-self.move_energy)
            player.move_to(target)
            outcome = MoveOutcome.MOVED
        elif isinstance(block, Goodie) and block.edible and other is None:
            player.apply_energy_delta(-self.move_energy)
            player.apply_energy_delta(block.value)
            player.move_to(target)
            self._consume(block)
            outcome = MoveOutcome.CONSUMED
        else:
            return self._reject(MoveOutcome.BLOCKED, f"{target} holds {type(block or other).__name__}")

        self.events.emit(
            "player_moved",
            f"{player.name} -> {target}",
            index=self._active_index,
            pos=_xy(target),
            health=player.health,
            direction=player.direction.name.lower() if player.direction is not None else None,
        )
        if player.defeated and not player._defeat_reported:
            player._defeat_reported = True
            logger.info("Player %r is out of energy (%d)", player.name, player.health)
            self.events.emit("player_defeated", f"{player.name} is defeated", index=self._active_index)
        return outcome

    def _consume(self, goodie: Goodie) -> None:
        # Tile, flag and collection change together before control returns.
        self._require_board().clear(goodie.pos)
        goodie.consume()
        self.goodies.remove(goodie)
        self.events.emit(
            "goodie_consumed",
            f"Goodie at {goodie.pos} eaten (+{goodie.value})",
            pos=_xy(goodie.pos),
            value=goodie.value,
            sound=goodie.sound,
            remove_after_ms=self.config.consume_delay_ms,
        )

    def move(self, direction: Direction) -> MoveOutcome:
        """Face *direction* and step one tile that way."""
        player = self.active_player
        if player is not None:
            player.face(direction)
        offset = DIRECTION_OFFSETS[direction]
        return self.move_player(offset.x, offset.y)

    def move_right(self) -> MoveOutcome:
        return self.move(Direction.RIGHT)

    def move_left(self) -> MoveOutcome:
        return self.move(Direction.LEFT)

    def move_up(self) -> MoveOutcome:
        return self.move(Direction.UP)

    def move_down(self) -> MoveOutcome:
        return self.move(Direction.DOWN)

    # -- persistence --

    def save_game_state(self, store: KeyValueStore | None = None) -> str:
        """Serialize the board; also write it to *store* when one is given."""
        grid = self._require_board()
        text = snapshot_codec.dumps(grid, self.players)
        if store is not None:
            store.set_item(self.config.state_key, text)
        logger.info("Game state saved (%d goodies, %d players)", len(self.goodies), len(self.players))
        self.events.emit("state_saved", "Game state saved", size=len(text))
        return text

    def load_game_state(self, source: KeyValueStore | str | bytes | Mapping[str, Any]) -> int:
        """Replace the board contents with a saved snapshot.

        *source* is a store (read under ``config.state_key``), JSON text or
        an already-parsed mapping. The snapshot must match the current board
        dimensions. Returns the number of entities placed; a store without a
        saved game leaves everything untouched and returns 0.
        """
        grid = self._require_board()
        if isinstance(source, KeyValueStore):
            data = source.get_item(self.config.state_key)
            if data is None:
                logger.info("No saved game under %r", self.config.state_key)
                return 0
        else:
            data = source

        decoded = snapshot_codec.decode(data)
        if (decoded.width, decoded.height) != (grid.width, grid.height):
            raise SnapshotError(
                f"snapshot is {decoded.width}x{decoded.height}, board is {grid.width}x{grid.height}"
            )

        # Build everything first so a bad entry leaves the current game intact.
        fresh = Grid(grid.width, grid.height)
        goodies: list[Goodie] = []
        for pos, item in decoded.blocks:
            value = self.config.goodie_energy if item.value is None else item.value
            goodie = Goodie.create(item.type, self.config.tilesize, visual=item.visual, energy=value, sound=item.sound)
            goodie.pos = pos
            fresh.set(pos, goodie)
            goodies.append(goodie)

        players: list[Player] = []
        active: int | None = None
        for pos, item in decoded.players:
            health = self.config.start_energy if item.health is None else item.health
            player = Player.create(item.name, item.type, self.config.tilesize, pos, health)
            player._defeat_reported = player.defeated
            if item.active and active is None:
                active = len(players)
            players.append(player)
        if active is None and players:
            active = len(players) - 1

        self._grid = fresh
        self.goodies = goodies
        self.players = players
        self._active_index = None
        if active is not None:
            self._activate(active)
        self._status = GameStatus.IN_PROGRESS if players else GameStatus.BOARD_READY

        placed = len(goodies) + len(players)
        logger.info("Game state loaded: %d goodies, %d players", len(goodies), len(players))
        self.events.emit("state_loaded", f"Loaded {placed} entities", goodies=len(goodies), players=len(players))
        return placed

    def reset(self) -> None:
        """Drop the board and every entity; back to UNINITIALIZED."""
        self._grid = None
        self.players = []
        self.goodies = []
        self._active_index = None
        self._status = GameStatus.UNINITIALIZED
        self.events.emit("reset", "Game reset")
