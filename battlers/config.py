"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for a battle run."""

    # Randomness (None = draw a fresh seed from the OS and log it)
    seed: int | None = None

    # Battle
    max_turns: int = 256
    max_players: int = 20
    player_count: int = 2

    # Arena: random placement bounds on the x/y plane (inclusive)
    arena_min: int = 1
    arena_max: int = 60

    # Optional YAML roster; players are randomized when unset
    roster_file: str | None = None

    # Interactive stepping
    max_log_entries: int = 50
    tick_rate: float = 0.5                  # seconds between auto-advanced turns

    # Logging
    log_level: str = "INFO"
