"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game session."""

    # Board
    tilesize: int = 50                 # Pixel size of a tile, for renderers
    board_width: int = 20
    board_height: int = 10

    # Energy
    move_energy: int = 20              # Health cost per successful move
    start_energy: int = 100            # Initial player health
    goodie_energy: int = 40            # Default goodie value

    # Randomness
    seed: int = 42

    # Rules
    strict_moves: bool = False         # Raise MoveRejected instead of silent no-op

    # Presentation hints
    consume_delay_ms: int = 300        # Cosmetic delay before a consumed goodie disappears

    # Persistence
    state_key: str = "gameState"
    state_file: str = "game_state.json"

    # Logging
    log_level: str = "INFO"
