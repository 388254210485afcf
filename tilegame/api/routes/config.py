"""GET /api/v1/config — expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tilegame.api.dependencies import get_session
from tilegame.api.schemas import GameConfigResponse
from tilegame.api.session import GameSession

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(session: GameSession = Depends(get_session)) -> GameConfigResponse:
    cfg = session.config
    return GameConfigResponse(
        tilesize=cfg.tilesize,
        board_width=cfg.board_width,
        board_height=cfg.board_height,
        move_energy=cfg.move_energy,
        start_energy=cfg.start_energy,
        goodie_energy=cfg.goodie_energy,
        seed=cfg.seed,
        strict_moves=cfg.strict_moves,
        consume_delay_ms=cfg.consume_delay_ms,
    )
