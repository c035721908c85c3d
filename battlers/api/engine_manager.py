"""EngineManager — singleton wrapper that paces a Stepper for the API.

The API reads from an atomically-swapped immutable BattleSnapshot; the
Stepper is only ever mutated while holding ``_lock`` (single writer at a
time), either by a control request or by the auto-advance thread.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from battlers.core.enums import AppState
from battlers.core.names import random_players
from battlers.core.snapshot import BattleSnapshot
from battlers.engine.stepper import Stepper
from battlers.systems.loader import load_simulation_config, players_from_config
from battlers.systems.rng import DiceRNG

if TYPE_CHECKING:
    from battlers.config import SimulationConfig
    from battlers.core.models import Player

logger = logging.getLogger(__name__)


class EngineManager:
    """Manages the battle lifecycle and an optional auto-advance thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - control commands (start / pause / resume / step / reset / quit / auto)
    """

    def __init__(self, config: SimulationConfig, players: list[Player] | None = None) -> None:
        self.config = config

        self._lock = threading.Lock()
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: BattleSnapshot | None = None

        self._thread: threading.Thread | None = None
        self._stop_requested = threading.Event()

        self._stepper = self._build(players)
        self._publish()

    # -- public properties --

    @property
    def state(self) -> AppState:
        return self._stepper.state

    @property
    def tick_rate(self) -> float:
        return self._stepper.tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._stepper.tick_rate = max(0.01, min(value, 5.0))

    @property
    def auto_advance(self) -> bool:
        return self._stepper.auto_advance

    # -- snapshot access --

    def get_snapshot(self) -> BattleSnapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    def _publish(self) -> None:
        snap = BattleSnapshot.from_stepper(self._stepper)
        with self._snapshot_lock:
            self._latest_snapshot = snap

    # -- control --

    def start(self) -> bool:
        with self._lock:
            started = self._stepper.start_battle()
            self._publish()
        if started:
            logger.info("Battle started with %d players", self._stepper.live_count)
        return started

    def pause(self) -> None:
        with self._lock:
            self._stepper.pause_battle()
            self._publish()
        logger.info("Battle paused at turn %d", self._stepper.current_turn)

    def resume(self) -> None:
        with self._lock:
            self._stepper.resume_battle()
            self._publish()
        logger.info("Battle resumed at turn %d", self._stepper.current_turn)

    def step(self) -> bool:
        """Execute exactly one turn. Returns whether the battle continues."""
        with self._lock:
            cont = self._stepper.step_battle()
            self._publish()
        return cont

    def toggle_auto_advance(self) -> bool:
        with self._lock:
            self._stepper.toggle_auto_advance()
            enabled = self._stepper.auto_advance
            self._publish()
        if enabled:
            self._start_thread()
        logger.info("Auto-advance %s", "enabled" if enabled else "disabled")
        return enabled

    def quit(self) -> None:
        with self._lock:
            self._stepper.quit()
            self._publish()
        self.stop()

    def reset(self) -> bool:
        """Restore the original roster, leaving the battle in SETUP.

        Returns False once the battle has been quit.
        """
        self.stop()
        with self._lock:
            done = self._stepper.reset()
            self._publish()
        if done:
            logger.info("EngineManager reset.")
        return done

    def stop(self) -> None:
        self._stop_requested.set()
        thread = self._thread
        if thread and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=5.0)
        self._thread = None

    # -- internals --

    def _build(self, players: list[Player] | None) -> Stepper:
        cfg = self.config
        rng = DiceRNG.from_seed(cfg.seed)
        if players is None:
            if cfg.roster_file:
                players = players_from_config(load_simulation_config(cfg.roster_file))
            else:
                players = random_players(cfg.player_count, rng, cfg.arena_min, cfg.arena_max)
        stepper = Stepper(cfg, rng)
        stepper.add_players(players)
        return stepper

    def _start_thread(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop_requested.clear()
        self._thread = threading.Thread(target=self._run_loop, name="battle-loop", daemon=True)
        self._thread.start()

    def _run_loop(self) -> None:
        """Auto-advance turns at ``tick_rate`` while enabled and RUNNING."""
        while not self._stop_requested.wait(self._stepper.tick_rate):
            with self._lock:
                if not self._stepper.auto_advance or self._stepper.state in (AppState.FINISHED, AppState.QUIT):
                    break
                if self._stepper.state == AppState.RUNNING:
                    self._stepper.step_battle()
                    self._publish()
        logger.debug("Auto-advance loop exited at turn %d", self._stepper.current_turn)
