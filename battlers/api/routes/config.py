"""GET /api/v1/config — expose simulation configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from battlers.api.dependencies import get_engine_manager
from battlers.api.engine_manager import EngineManager
from battlers.api.schemas import SimulationConfigResponse

router = APIRouter()


@router.get("/config", response_model=SimulationConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationConfigResponse:
    cfg = manager.config
    snapshot = manager.get_snapshot()
    return SimulationConfigResponse(
        seed=snapshot.seed if snapshot else (cfg.seed or 0),
        max_turns=cfg.max_turns,
        max_players=cfg.max_players,
        player_count=snapshot.live_count if snapshot else cfg.player_count,
        arena_min=cfg.arena_min,
        arena_max=cfg.arena_max,
        max_log_entries=cfg.max_log_entries,
        roster_file=cfg.roster_file,
        tick_rate=manager.tick_rate,
    )
