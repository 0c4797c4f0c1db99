# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0", "pytest>=7.0"]
# ///
"""Tests for the command line entry point and environment configuration."""

import logging
import sys
from pathlib import Path

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

import config
from data.store import LeagueStore
from franchise import main


@pytest.fixture
def cli(tmp_path):
    def run(*args):
        return main([*args, "--data-dir", str(tmp_path), "--key", "cli"])
    return run


@pytest.fixture
def store(tmp_path):
    return LeagueStore(tmp_path)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

class TestCli:
    def test_new_creates_league(self, cli, store, capsys):
        assert cli("new", "--seed", "1") == 0
        assert "5 teams" in capsys.readouterr().out
        state = store.load("cli")
        assert state.year == 1
        assert len(state.schedule) == 40

    def test_sim_plays_games(self, cli, store, capsys):
        cli("new", "--seed", "1")
        assert cli("sim", "--games", "3", "--seed", "2") == 0
        out = capsys.readouterr().out
        assert out.count(" - ") >= 3
        state = store.load("cli")
        assert state.game_index == 3
        assert store.load_document("cli")["last_game_result"]["home"] in state.teams

    def test_standings(self, cli, capsys):
        cli("new", "--seed", "1")
        capsys.readouterr()
        assert cli("standings") == 0
        out = capsys.readouterr().out
        assert "Year 1 standings" in out
        assert "Metro City Meteors" in out
        assert "Games played: 0/40" in out

    def test_season_crowns_champion(self, cli, store, capsys):
        cli("new", "--seed", "1")
        assert cli("season", "--seed", "3") == 0
        out = capsys.readouterr().out
        assert "Champions:" in out
        assert store.load("cli").year == 2

    def test_missing_league(self, cli, capsys):
        assert cli("sim") == 1
        assert "no league saved" in capsys.readouterr().err

    def test_games_must_be_positive(self, cli, capsys):
        cli("new", "--seed", "1")
        assert cli("sim", "--games", "0") == 1
        assert "--games" in capsys.readouterr().err

    def test_unreadable_league(self, cli, store, capsys):
        cli("new", "--seed", "1")
        path = store.root_dir / next(p.name for p in store.root_dir.glob("*.json"))
        path.write_text("garbage")
        assert cli("standings") == 1
        assert "Error:" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class TestConfig:
    def test_seed_unset(self, monkeypatch):
        monkeypatch.delenv(config.SEED_ENV, raising=False)
        assert config.get_seed() is None

    def test_seed_from_env(self, monkeypatch):
        monkeypatch.setenv(config.SEED_ENV, "42")
        assert config.get_seed() == 42

    def test_bad_seed_exits(self, monkeypatch):
        monkeypatch.setenv(config.SEED_ENV, "abc")
        with pytest.raises(SystemExit):
            config.get_seed()

    def test_data_dir_default(self, monkeypatch):
        monkeypatch.delenv(config.DATA_DIR_ENV, raising=False)
        assert config.get_data_dir() == config.DEFAULT_DATA_DIR

    def test_log_level(self, monkeypatch):
        monkeypatch.setenv(config.LOG_LEVEL_ENV, "debug")
        assert config.get_log_level() == logging.DEBUG
        monkeypatch.setenv(config.LOG_LEVEL_ENV, "nonsense")
        assert config.get_log_level() == logging.WARNING
