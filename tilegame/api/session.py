"""GameSession — serializes every request against the one Game instance.

HTTP handlers may run on several threads; each command takes the session
lock so at most one move is resolved against a given board at a time.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from tilegame.core.game import DEFAULT_EVENT_HISTORY, Game
from tilegame.persistence.store import FileStore, KeyValueStore, MemoryStore
from tilegame.systems.rng import DeterministicRNG
from tilegame.utils.event_log import EventLog

if TYPE_CHECKING:
    from tilegame.config import GameConfig

logger = logging.getLogger(__name__)


class GameSession:
    """Owns the Game, its event feed and the save-game store."""

    def __init__(self, config: GameConfig, store: KeyValueStore | None = None) -> None:
        self.config = config
        self.store: KeyValueStore = store if store is not None else FileStore(config.state_file)
        self._lock = threading.RLock()
        self._events = EventLog(maxlen=DEFAULT_EVENT_HISTORY)
        self.game = self._build()

    def _build(self) -> Game:
        return Game(self.config, rng=DeterministicRNG(self.config.seed), events=self._events)

    @property
    def events(self) -> EventLog:
        return self._events

    @contextmanager
    def command(self) -> Iterator[Game]:
        """Exclusive access to the game for one request."""
        with self._lock:
            yield self.game

    def reset(self) -> None:
        with self._lock:
            self.game.reset()
            self.game = self._build()
        logger.info("GameSession reset.")

    @classmethod
    def in_memory(cls, config: GameConfig) -> GameSession:
        return cls(config, store=MemoryStore())
