"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Players ---

class AttributeSchema(BaseModel):
    base: int
    curr: int
    bonus: int


class LocationSchema(BaseModel):
    x: float
    y: float
    z: float = 0.0


class PlayerSchema(BaseModel):
    name: str
    attack: AttributeSchema
    defense: AttributeSchema
    armor: AttributeSchema
    power: AttributeSchema
    speed: AttributeSchema
    range: AttributeSchema
    loc: LocationSchema
    health_ratio: float = Field(description="Remaining armor as a fraction of its base value")


# --- Battle State ---

class EventSchema(BaseModel):
    turn: int
    category: str
    message: str


class BattleStateResponse(BaseModel):
    state: str
    turn: int
    max_turns: int
    seed: int
    auto_advance: bool
    alive_count: int
    players: list[PlayerSchema]
    winner: PlayerSchema | None = None
    events: list[EventSchema] = Field(default_factory=list)


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    turn: int = 0
    state: str = "SETUP"


# --- Config ---

class SimulationConfigResponse(BaseModel):
    seed: int
    max_turns: int
    max_players: int
    player_count: int
    arena_min: int
    arena_max: int
    max_log_entries: int
    roster_file: str | None = None
    tick_rate: float
