"""HTTP surface: FastAPI app exposing the Game controller."""

from tilegame.api.app import create_app

__all__ = ["create_app"]
