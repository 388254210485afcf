"""Error taxonomy for the game model.

Invalid moves are not errors: they are silent no-ops unless the game runs
with ``strict_moves`` enabled, in which case ``MoveRejected`` is raised.
"""

from __future__ import annotations


class GameError(ValueError):
    pass


class GridFull(GameError):
    """No free tile is available where one is required."""


class MissingTileSize(GameError):
    """A goodie was built without a positive tile size."""


class IndexOutOfRange(GameError, IndexError):
    """Active-player index outside the players collection."""


class InvalidDimensions(GameError):
    pass


class BoardNotReady(GameError):
    """Operation needs a board but create_board() was never called."""


class GameStateError(GameError):
    pass


class SnapshotError(GameError):
    """Snapshot is malformed or does not fit the current board."""


class MoveRejected(GameError):
    """Raised in strict mode where the default policy is a silent no-op."""

    def __init__(self, outcome, message: str = "") -> None:
        self.outcome = outcome
        super().__init__(message or f"move rejected: {outcome.name}")
