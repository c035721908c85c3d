"""Tests for the Stepper state machine and its battle narration."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from battlers.config import SimulationConfig
from battlers.core.enums import AppState, BattleEventType, OutcomeKind
from battlers.engine.stepper import Stepper
from battlers.systems.rng import DiceRNG
from tests.helpers.battle_arena import ScriptedRNG, make_player


def _stepper(players, rng=None, **config_overrides) -> Stepper:
    stepper = Stepper(SimulationConfig(seed=0, **config_overrides), rng or ScriptedRNG())
    stepper.add_players(players)
    return stepper


def _messages(stepper: Stepper) -> list[str]:
    return [e.message for e in stepper.battle_log]


class TestLifecycle:

    def test_starts_in_setup(self):
        assert Stepper(SimulationConfig(seed=0)).state == AppState.SETUP

    def test_cannot_start_without_players(self):
        stepper = Stepper(SimulationConfig(seed=0))
        assert not stepper.start_battle()
        assert stepper.state == AppState.SETUP
        assert len(stepper.battle_log) == 0

    def test_start_announces_battle(self):
        stepper = _stepper([make_player("A"), make_player("B", pos=(1, 0))])
        assert stepper.start_battle()
        assert stepper.state == AppState.RUNNING
        event = stepper.battle_log.latest(1)[0]
        assert event.message == "Battle begins!"
        assert event.event_type == BattleEventType.INFO
        assert event.turn == 0

    def test_start_only_from_setup(self):
        stepper = _stepper([make_player("A"), make_player("B", pos=(1, 0))])
        stepper.start_battle()
        assert not stepper.start_battle()
        assert len(stepper.battle_log) == 1

    def test_pause_resume_toggle(self):
        stepper = _stepper([make_player("A"), make_player("B", pos=(1, 0))])
        stepper.pause_battle()
        assert stepper.state == AppState.SETUP
        stepper.start_battle()
        stepper.pause_battle()
        assert stepper.state == AppState.PAUSED
        stepper.resume_battle()
        assert stepper.state == AppState.RUNNING
        stepper.toggle_pause()
        assert stepper.state == AppState.PAUSED
        stepper.toggle_pause()
        assert stepper.state == AppState.RUNNING

    def test_quit_from_any_state(self):
        def finish(s):
            s.start_battle()
            s.step_battle()

        preparations = (
            lambda s: None,
            Stepper.start_battle,
            lambda s: (s.start_battle(), s.pause_battle()),
            finish,
        )
        for prepare in preparations:
            stepper = _stepper(
                [make_player("A"), make_player("B", pos=(1, 0), armor=1)], ScriptedRNG([20, 8]),
            )
            prepare(stepper)
            stepper.quit()
            assert stepper.should_quit()
            assert not stepper.step_battle()

    def test_quit_is_terminal(self):
        stepper = _stepper([make_player("A"), make_player("B", pos=(30, 0), range=1)])
        stepper.start_battle()
        stepper.quit()
        assert not stepper.reset()
        assert stepper.state == AppState.QUIT
        assert not stepper.start_battle()
        assert not stepper.step_battle()
        assert stepper.current_turn == 0

    def test_step_rejected_in_setup(self):
        stepper = _stepper([make_player("A"), make_player("B", pos=(1, 0))])
        assert not stepper.step_battle()
        assert stepper.current_turn == 0
        assert stepper.state == AppState.SETUP

    def test_toggle_auto_advance(self):
        stepper = _stepper([make_player("A")])
        assert not stepper.auto_advance
        stepper.toggle_auto_advance()
        assert stepper.auto_advance


class TestStepping:

    def test_kill_narration(self):
        a = make_player("A", pos=(0, 0), armor=10)
        b = make_player("B", pos=(1, 0), armor=1)
        stepper = _stepper([a, b], ScriptedRNG([20, 8]))
        stepper.start_battle()
        assert not stepper.step_battle()
        assert stepper.state == AppState.FINISHED
        assert stepper.current_turn == 1
        assert stepper.winner() is a
        events = list(stepper.battle_log)
        assert [(e.turn, e.event_type, e.message) for e in events] == [
            (0, BattleEventType.INFO, "Battle begins!"),
            (0, BattleEventType.ATTACK, "A is in range of B"),
            (0, BattleEventType.HIT, "A hit B for 8 damage"),
            (0, BattleEventType.DEATH, "A defeated B"),
            (1, BattleEventType.INFO, "A is the winner with 10/10 health remaining!"),
        ]

    def test_miss_narration(self):
        a = make_player("A", pos=(0, 0))
        b = make_player("B", pos=(1, 0), defense=18)
        stepper = _stepper([a, b], ScriptedRNG([3]))
        stepper.start_battle()
        assert stepper.step_battle()
        assert _messages(stepper)[-2:] == ["A is in range of B", "A missed"]
        assert stepper.battle_log.latest(1)[0].event_type == BattleEventType.MISS

    def test_movement_narration(self):
        a = make_player("A", pos=(0, 0), range=1)
        b = make_player("B", pos=(30, 40), range=1)
        stepper = _stepper([a, b])
        stepper.start_battle()
        assert stepper.step_battle()
        event = stepper.battle_log.latest(1)[0]
        assert event.event_type == BattleEventType.MOVEMENT
        assert event.message == "A moves towards B (distance: 50.0)"
        assert event.turn == 0
        assert stepper.current_turn == 1

    def test_zero_damage_hit_is_still_a_hit(self):
        a = make_player("A", pos=(0, 0), power=3)  # bonus -3
        b = make_player("B", pos=(1, 0), armor=5)
        stepper = _stepper([a, b], ScriptedRNG([20, 2]))
        stepper.start_battle()
        assert stepper.step_battle()
        assert _messages(stepper)[-1] == "A hit B for 0 damage"
        assert b.armor.curr == 5

    def test_step_while_paused(self):
        a = make_player("A", pos=(0, 0), range=1)
        b = make_player("B", pos=(30, 0), range=1)
        stepper = _stepper([a, b])
        stepper.start_battle()
        stepper.pause_battle()
        assert stepper.step_battle()
        assert stepper.current_turn == 1
        assert stepper.state == AppState.PAUSED

    def test_single_player_finishes_immediately(self):
        solo = make_player("Solo", armor=7)
        stepper = _stepper([solo])
        stepper.start_battle()
        assert not stepper.step_battle()
        assert stepper.current_turn == 0
        assert stepper.state == AppState.FINISHED
        assert _messages(stepper)[-1] == "Solo is the winner with 7/7 health remaining!"

    def test_turn_cap_is_inconclusive(self):
        a = make_player("A", pos=(0, 0), defense=40)
        b = make_player("B", pos=(1, 0), defense=40)
        stepper = _stepper([a, b], DiceRNG(3), max_turns=3)
        stepper.start_battle()
        assert stepper.step_battle()
        assert stepper.step_battle()
        assert not stepper.step_battle()
        assert stepper.current_turn == 3
        assert stepper.state == AppState.FINISHED
        assert stepper.winner() is None
        assert _messages(stepper)[-2:] == ["Battle reached maximum turns: 3", "Battle ended inconclusively"]

    def test_finished_battle_does_not_step_again(self):
        a = make_player("A", pos=(0, 0))
        b = make_player("B", pos=(1, 0), armor=1)
        stepper = _stepper([a, b], ScriptedRNG([20, 8]))
        stepper.start_battle()
        stepper.step_battle()
        logged = len(stepper.battle_log)
        assert not stepper.step_battle()
        assert len(stepper.battle_log) == logged

    def test_game_turns_track_current_turn(self):
        a = make_player("A", pos=(0, 0), range=1)
        b = make_player("B", pos=(50, 0), range=1)
        stepper = _stepper([a, b])
        stepper.start_battle()
        stepper.step_battle()
        stepper.step_battle()
        assert stepper.game.turns == stepper.current_turn == 2


class TestLogAndReset:

    def test_log_is_bounded(self):
        stepper = _stepper([make_player("A")], max_log_entries=5)
        for i in range(5 + 4):
            stepper.add_battle_event(f"event {i}", BattleEventType.INFO)
        assert len(stepper.battle_log) == 5
        assert _messages(stepper) == [f"event {i}" for i in range(4, 9)]

    def test_reset_restores_roster(self):
        a = make_player("A", pos=(0, 0))
        b = make_player("B", pos=(1, 0), armor=1)
        stepper = _stepper([a, b], ScriptedRNG([20, 8]))
        stepper.start_battle()
        stepper.step_battle()
        assert stepper.live_count == 1

        assert stepper.reset()
        assert stepper.state == AppState.SETUP
        assert stepper.current_turn == 0
        assert len(stepper.battle_log) == 0
        assert [p.name for p in stepper.players] == ["A", "B"]
        assert stepper.players[1].armor.curr == 1
        assert stepper.players[0].loc.x == 0.0

    def test_outcome_at_turn_cap(self):
        a = make_player("A", pos=(0, 0), defense=40)
        b = make_player("B", pos=(1, 0), defense=40)
        stepper = _stepper([a, b], DiceRNG(3), max_turns=2)
        stepper.start_battle()
        assert stepper.outcome().kind == OutcomeKind.UNFINISHED
        stepper.step_battle()
        stepper.step_battle()
        assert stepper.state == AppState.FINISHED
        assert stepper.outcome().kind == OutcomeKind.TURN_CAP
