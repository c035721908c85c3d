"""Engine layer: the battle loop and its single-step driver."""

from battlers.engine.game import BattleOutcome, Game, TurnResult, simulate
from battlers.engine.stepper import Stepper

__all__ = ["BattleOutcome", "Game", "Stepper", "TurnResult", "simulate"]
