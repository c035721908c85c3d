"""Stepper — drives a Game one turn at a time for paced or interactive drivers.

Lifecycle::

    SETUP ──start──▶ RUNNING ◀──toggle──▶ PAUSED
                        │                    │
                        └──────▶ FINISHED ◀──┘

    quit() moves to QUIT from any state.

Every turn is narrated into a bounded BattleLog tagged with the turn number at
which the event occurred.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from battlers.config import SimulationConfig
from battlers.core.enums import AppState, BattleEventType, TurnAction
from battlers.engine.game import BattleOutcome, Game
from battlers.systems.rng import DiceRNG
from battlers.utils.event_log import BattleEvent, BattleLog

if TYPE_CHECKING:
    from battlers.core.models import Player

logger = logging.getLogger(__name__)

_STEPPABLE = (AppState.RUNNING, AppState.PAUSED)


class Stepper:
    """Single-turn wrapper around :class:`Game` with a battle log."""

    def __init__(self, config: SimulationConfig | None = None, rng: DiceRNG | None = None) -> None:
        self.config = config or SimulationConfig()
        self.state: AppState = AppState.SETUP
        self.game = Game(self.config, rng)
        self.battle_log = BattleLog(self.config.max_log_entries)
        self.current_turn: int = 0
        self.auto_advance: bool = False
        self.tick_rate: float = self.config.tick_rate
        self._roster: list[Player] = []

    # -- queries --

    @property
    def max_turns(self) -> int:
        return self.config.max_turns

    @property
    def live_count(self) -> int:
        return len(self.game.players)

    @property
    def players(self) -> list[Player]:
        return list(self.game.players)

    def winner(self) -> Player | None:
        if len(self.game.players) == 1:
            return self.game.players[0]
        return None

    def outcome(self) -> BattleOutcome:
        return self.game.outcome(cap_reached=self.current_turn >= self.max_turns)

    def should_quit(self) -> bool:
        return self.state == AppState.QUIT

    # -- setup --

    def add_players(self, players: Iterable[Player]) -> None:
        for player in players:
            self._roster.append(player.copy())
            self.game.add_player(player)

    def reset(self) -> bool:
        """Restore the roster as it was added and return to SETUP.

        QUIT is terminal: a quit battle cannot be reset.
        """
        if self.state == AppState.QUIT:
            return False
        self.game = Game(self.config, self.game.rng, (p.copy() for p in self._roster))
        self.battle_log.clear()
        self.current_turn = 0
        self.auto_advance = False
        self.state = AppState.SETUP
        logger.info("Battle reset with %d players", len(self._roster))
        return True

    # -- lifecycle --

    def start_battle(self) -> bool:
        if self.state != AppState.SETUP or not self.game.players:
            return False
        self.state = AppState.RUNNING
        self.add_battle_event("Battle begins!", BattleEventType.INFO)
        return True

    def pause_battle(self) -> None:
        if self.state == AppState.RUNNING:
            self.state = AppState.PAUSED

    def resume_battle(self) -> None:
        if self.state == AppState.PAUSED:
            self.state = AppState.RUNNING

    def toggle_pause(self) -> None:
        if self.state == AppState.RUNNING:
            self.pause_battle()
        elif self.state == AppState.PAUSED:
            self.resume_battle()

    def toggle_auto_advance(self) -> None:
        self.auto_advance = not self.auto_advance

    def quit(self) -> None:
        self.state = AppState.QUIT

    # -- stepping --

    def step_battle(self) -> bool:
        """Play exactly one turn. Returns True while the battle continues."""
        if self.state not in _STEPPABLE:
            return False

        if self.game.live_count <= 1:
            self.finish_battle()
            return False

        if self.current_turn >= self.max_turns:
            self.add_battle_event(f"Battle reached maximum turns: {self.max_turns}", BattleEventType.INFO)
            self.finish_battle()
            return False

        result = self.game.take_turn()
        actor, target = result.actor.name, result.target.name
        if result.action == TurnAction.MOVE:
            self.add_battle_event(
                f"{actor} moves towards {target} (distance: {result.distance:.1f})",
                BattleEventType.MOVEMENT,
            )
        else:
            self.add_battle_event(f"{actor} is in range of {target}", BattleEventType.ATTACK)
            if result.hit:
                self.add_battle_event(f"{actor} hit {target} for {result.damage} damage", BattleEventType.HIT)
                if result.killed:
                    self.add_battle_event(f"{actor} defeated {target}", BattleEventType.DEATH)
            else:
                self.add_battle_event(f"{actor} missed", BattleEventType.MISS)

        self.current_turn += 1
        self.game.turns = self.current_turn

        if self.game.live_count <= 1:
            self.finish_battle()
            return False

        if self.current_turn >= self.max_turns:
            self.add_battle_event(f"Battle reached maximum turns: {self.max_turns}", BattleEventType.INFO)
            self.finish_battle()
            return False

        return True

    def finish_battle(self) -> None:
        self.state = AppState.FINISHED
        winner = self.winner()
        if winner is not None:
            message = (
                f"{winner.name} is the winner with {winner.armor.curr}/{winner.armor.base} health remaining!"
            )
        else:
            message = "Battle ended inconclusively"
        logger.info("%s", message)
        self.add_battle_event(message, BattleEventType.INFO)

    def add_battle_event(self, message: str, event_type: BattleEventType) -> None:
        self.battle_log.append(BattleEvent(turn=self.current_turn, message=message, event_type=event_type))
