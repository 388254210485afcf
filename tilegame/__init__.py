"""tilegame — a tile-grid game model with goodies, energy and saved games."""

from tilegame.config import GameConfig
from tilegame.core import Game

__all__ = ["Game", "GameConfig"]
__version__ = "0.1.0"
