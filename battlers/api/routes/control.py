"""POST /api/v1/control/{action} — battle lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query

from battlers.api.dependencies import get_engine_manager
from battlers.api.engine_manager import EngineManager
from battlers.api.schemas import ControlResponse
from battlers.core.enums import AppState

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    reset = "reset"
    quit = "quit"
    auto = "auto"


def _response(manager: EngineManager, status: str, message: str) -> ControlResponse:
    snapshot = manager.get_snapshot()
    turn = snapshot.turn if snapshot else 0
    return ControlResponse(status=status, message=message, turn=turn, state=manager.state.name)


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    state = manager.state

    match action:
        case ControlAction.start:
            if state == AppState.QUIT:
                raise HTTPException(status_code=409, detail="Battle has been quit.")
            if state == AppState.FINISHED:
                return _response(manager, "noop", "Battle already finished. Reset to fight again.")
            if state != AppState.SETUP:
                return _response(manager, "noop", "Battle already started.")
            if not manager.start():
                raise HTTPException(status_code=409, detail="Cannot start a battle without players.")
            return _response(manager, "ok", "Battle started.")

        case ControlAction.pause:
            if state != AppState.RUNNING:
                raise HTTPException(status_code=409, detail=f"Cannot pause while {state.name}.")
            manager.pause()
            return _response(manager, "ok", "Battle paused.")

        case ControlAction.resume:
            if state != AppState.PAUSED:
                raise HTTPException(status_code=409, detail=f"Cannot resume while {state.name}.")
            manager.resume()
            return _response(manager, "ok", "Battle resumed.")

        case ControlAction.step:
            if state not in (AppState.RUNNING, AppState.PAUSED):
                raise HTTPException(status_code=409, detail=f"Cannot step while {state.name}.")
            cont = manager.step()
            return _response(manager, "ok", "Turn executed." if cont else "Battle finished.")

        case ControlAction.reset:
            if not manager.reset():
                raise HTTPException(status_code=409, detail="Cannot reset a battle that has been quit.")
            return _response(manager, "ok", "Battle reset.")

        case ControlAction.quit:
            manager.quit()
            return _response(manager, "ok", "Battle quit.")

        case ControlAction.auto:
            enabled = manager.toggle_auto_advance()
            return _response(manager, "ok", f"Auto-advance {'enabled' if enabled else 'disabled'}.")


@router.post("/speed", response_model=ControlResponse)
def set_speed(
    seconds: float = Query(0.5, ge=0.01, le=5.0, description="Seconds between auto-advanced turns"),
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    manager.tick_rate = seconds
    return _response(manager, "ok", f"Turn interval set to {manager.tick_rate:.2f}s.")
