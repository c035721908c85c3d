"""Tests for the headless command line runner."""

import sys
import os
import logging

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from battlers.__main__ import EXIT_CONFIG_ERROR, main


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestCli:

    def test_random_battle(self, capsys):
        assert main(["cli", "--seed", "7", "--players", "3", "--log-level", "WARNING"]) == 0
        out = capsys.readouterr().out
        assert "Seed: 7" in out
        assert "Turns elapsed:" in out
        assert ("is the winner" in out) or ("inconclusively" in out)

    def test_same_seed_same_report(self, capsys):
        main(["cli", "--seed", "11", "--log-level", "WARNING"])
        first = capsys.readouterr().out
        main(["cli", "--seed", "11", "--log-level", "WARNING"])
        second = capsys.readouterr().out
        report = lambda out: [line for line in out.splitlines() if " | " not in line]
        assert report(first) == report(second)

    def test_roster_and_save(self, tmp_path, capsys):
        saved = tmp_path / "saved.yaml"
        assert main(["cli", "--seed", "5", "--save-roster", str(saved), "--log-level", "WARNING"]) == 0
        assert saved.exists()
        capsys.readouterr()
        assert main(["cli", "--seed", "5", "--roster", str(saved), "--log-level", "WARNING"]) == 0
        assert "Turns elapsed:" in capsys.readouterr().out

    def test_missing_roster_is_a_config_error(self, tmp_path):
        assert main(["cli", "--roster", str(tmp_path / "missing.yaml"), "--log-level", "WARNING"]) == EXIT_CONFIG_ERROR

    def test_player_count_is_bounded(self):
        with pytest.raises(SystemExit):
            main(["cli", "--players", "0"])
        with pytest.raises(SystemExit):
            main(["cli", "--players", "999"])

    def test_zero_turn_cap(self, capsys):
        assert main(["cli", "--seed", "1", "--max-turns", "0", "--log-level", "WARNING"]) == 0
        out = capsys.readouterr().out
        assert "Turns elapsed: 1" in out
