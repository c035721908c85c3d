"""Exceptions raised by the simulator."""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """A roster file could not be read, parsed or validated."""

    def __init__(self, path: str | Path, cause: Exception | str) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Invalid battle configuration {self.path}: {cause}")


class BattleInvariantError(RuntimeError):
    """The battle state contradicts itself; indicates a defect, never recovered."""
