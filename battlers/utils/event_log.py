"""Bounded ring buffer of battle events for interactive drivers."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator

from battlers.core.enums import BattleEventType


@dataclass(frozen=True, slots=True)
class BattleEvent:
    """A single narrated battle event."""

    turn: int
    message: str
    event_type: BattleEventType = BattleEventType.INFO


class BattleLog:
    """FIFO of the most recent events. Once full, the oldest entry is evicted.

    Not thread-safe: the owning Stepper is its only writer, and the API layer
    reads it through snapshots taken under the manager's lock.
    """

    __slots__ = ("_buffer",)

    def __init__(self, max_entries: int = 50) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._buffer: deque[BattleEvent] = deque(maxlen=max_entries)

    @property
    def max_entries(self) -> int:
        return self._buffer.maxlen or 0

    def append(self, event: BattleEvent) -> None:
        self._buffer.append(event)

    def since_turn(self, turn: int) -> list[BattleEvent]:
        """Return all retained events with turn >= *turn*."""
        return [e for e in self._buffer if e.turn >= turn]

    def latest(self, count: int = 50) -> list[BattleEvent]:
        """Return the *count* most recent events, oldest first."""
        if count <= 0:
            return []
        return list(self._buffer)[-count:]

    def clear(self) -> None:
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)

    def __iter__(self) -> Iterator[BattleEvent]:
        return iter(self._buffer)
