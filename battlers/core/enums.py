"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class AttributeKind(IntEnum):
    """The six statistics every player carries."""

    ATTACK = 0
    DEFENSE = 1
    ARMOR = 2
    POWER = 3
    SPEED = 4
    RANGE = 5


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    SPAWN = 0       # attribute generation
    LOCATION = 1    # arena placement
    ATTACK = 2      # to-hit rolls
    DAMAGE = 3      # damage rolls
    NAMES = 4       # name generation


@unique
class TurnAction(IntEnum):
    """What the active player did with its turn."""

    MOVE = 0
    ATTACK = 1


@unique
class BattleEventType(IntEnum):
    """Classification of battle log entries."""

    MOVEMENT = 0
    ATTACK = 1
    HIT = 2
    MISS = 3
    DEATH = 4
    INFO = 5


@unique
class AppState(IntEnum):
    """Lifecycle states of the interactive stepper."""

    SETUP = 0
    RUNNING = 1
    PAUSED = 2
    FINISHED = 3
    QUIT = 4


@unique
class OutcomeKind(IntEnum):
    """How a battle ended."""

    WINNER = 0
    NO_SURVIVORS = 1
    TURN_CAP = 2
    UNFINISHED = 3
