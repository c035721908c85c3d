"""GET /api/v1/state — battle state and log (polled by the UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from battlers.api.dependencies import get_engine_manager
from battlers.api.engine_manager import EngineManager
from battlers.api.schemas import (
    AttributeSchema,
    BattleStateResponse,
    EventSchema,
    LocationSchema,
    PlayerSchema,
)
from battlers.core.models import Player, PlayerAttribute

router = APIRouter()


def _serialize_attr(a: PlayerAttribute) -> AttributeSchema:
    return AttributeSchema(base=a.base, curr=a.curr, bonus=a.bonus())


def _serialize_player(p: Player) -> PlayerSchema:
    return PlayerSchema(
        name=p.name,
        attack=_serialize_attr(p.attack),
        defense=_serialize_attr(p.defense),
        armor=_serialize_attr(p.armor),
        power=_serialize_attr(p.power),
        speed=_serialize_attr(p.speed),
        range=_serialize_attr(p.range),
        loc=LocationSchema(x=p.loc.x, y=p.loc.y, z=p.loc.z),
        health_ratio=round(p.health_ratio, 4),
    )


@router.get("/state", response_model=BattleStateResponse)
def get_state(
    since_turn: int = Query(0, ge=0, description="Only return events since this turn"),
    manager: EngineManager = Depends(get_engine_manager),
) -> BattleStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    return BattleStateResponse(
        state=snapshot.state.name,
        turn=snapshot.turn,
        max_turns=snapshot.max_turns,
        seed=snapshot.seed,
        auto_advance=snapshot.auto_advance,
        alive_count=snapshot.live_count,
        players=[_serialize_player(p) for p in snapshot.players],
        winner=_serialize_player(snapshot.winner) if snapshot.winner else None,
        events=[
            EventSchema(turn=e.turn, category=e.event_type.name.lower(), message=e.message)
            for e in snapshot.events_since(since_turn)
        ],
    )
