"""Thread-safe log of model changes, read by presentation adapters."""

from __future__ import annotations

import itertools
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single change notification emitted by the Game controller."""

    seq: int
    category: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)


class EventLog:
    """Append-only event log. Writers append; readers copy a slice.

    Keeps at most *maxlen* events (unbounded when None). Sequence numbers
    keep increasing across ``clear()`` so readers polling with ``since()``
    never see a number twice.
    """

    __slots__ = ("_buffer", "_lock", "_counter")

    def __init__(self, maxlen: int | None = None) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()
        self._counter = itertools.count(1)

    def emit(self, category: str, message: str, **data: Any) -> GameEvent:
        with self._lock:
            event = GameEvent(next(self._counter), category, message, data)
            self._buffer.append(event)
        return event

    def since(self, seq: int) -> list[GameEvent]:
        """Return all events with sequence number > *seq*."""
        with self._lock:
            return [e for e in self._buffer if e.seq > seq]

    def latest(self, count: int = 50) -> list[GameEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:] if count > 0 else []

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
