"""FastAPI dependency injection — provides the GameSession singleton."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException

from tilegame.api.session import GameSession
from tilegame.core.errors import (
    BoardNotReady,
    GameError,
    GameStateError,
    GridFull,
    IndexOutOfRange,
    MoveRejected,
)

_session: GameSession | None = None

_STATUS_BY_ERROR: tuple[tuple[type[GameError], int], ...] = (
    (IndexOutOfRange, 404),
    (BoardNotReady, 409),
    (GameStateError, 409),
    (GridFull, 409),
    (MoveRejected, 409),
)


def set_session(session: GameSession) -> None:
    global _session
    _session = session


def get_session() -> GameSession:
    if _session is None:
        raise RuntimeError("GameSession not initialized — server not started correctly.")
    return _session


@contextmanager
def http_errors() -> Iterator[None]:
    """Turn GameError into an HTTPException with a fitting status code."""
    try:
        yield
    except GameError as exc:
        status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 422)
        raise HTTPException(status_code=status, detail=f"{type(exc).__name__}: {exc}") from exc
