"""battlers — a deterministic, dice-driven, turn-based arena combat simulator."""

__version__ = "0.2.0"
