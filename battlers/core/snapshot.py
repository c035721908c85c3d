"""Immutable snapshot of a battle for readers outside the stepping thread."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from battlers.core.enums import AppState
from battlers.core.models import Player
from battlers.utils.event_log import BattleEvent

if TYPE_CHECKING:
    from battlers.engine.stepper import Stepper


@dataclass(frozen=True, slots=True)
class BattleSnapshot:
    """Read-only view of a Stepper, safe to hand to API handlers.

    Players are deep-copied so later turns cannot mutate a published snapshot.
    """

    state: AppState
    turn: int
    max_turns: int
    seed: int
    auto_advance: bool
    players: tuple[Player, ...]
    winner: Player | None
    events: tuple[BattleEvent, ...]

    @classmethod
    def from_stepper(cls, stepper: Stepper) -> BattleSnapshot:
        winner = stepper.winner()
        return cls(
            state=stepper.state,
            turn=stepper.current_turn,
            max_turns=stepper.max_turns,
            seed=stepper.game.rng.seed,
            auto_advance=stepper.auto_advance,
            players=tuple(p.copy() for p in stepper.game.players),
            winner=winner.copy() if winner is not None else None,
            events=tuple(stepper.battle_log),
        )

    @property
    def live_count(self) -> int:
        return len(self.players)

    def events_since(self, turn: int) -> list[BattleEvent]:
        return [e for e in self.events if e.turn >= turn]
