# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0", "pytest>=7.0"]
# ///
"""Tests for folding per-game deltas into season stats."""

import logging
import sys
from pathlib import Path

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from models import Player, PlayerStatDelta, Position, Ratings, Stats
from stats import apply_stat_deltas, reset_stats


def make_player(pid, position=Position.CF, **stats):
    return Player(
        id=pid, name=pid, age=2, team_id="T1", position=position,
        ratings=Ratings(), stats=Stats(**stats),
    )


def players_map(*players):
    return {p.id: p for p in players}


def test_batting_counters_added():
    players = players_map(make_player("b", at_bats=10, hits=3))
    delta = PlayerStatDelta(player_id="b", at_bats=4, hits=2, home_runs=1, runs_batted_in=3)
    updated = apply_stat_deltas(players, [delta])
    stats = updated["b"].stats
    assert (stats.at_bats, stats.hits, stats.home_runs, stats.runs_batted_in) == (14, 5, 1, 3)
    assert stats.avg == pytest.approx(5 / 14)


def test_pitching_counters_only_for_pitchers():
    players = players_map(make_player("p", Position.P), make_player("b"))
    deltas = [
        PlayerStatDelta(player_id="p", at_bats_faced=20, hits_allowed=5, innings_pitched=6, saves=1),
        PlayerStatDelta(player_id="b", at_bats_faced=3, hits_allowed=1, hits=1, at_bats=1),
    ]
    updated = apply_stat_deltas(players, deltas)
    assert updated["p"].stats.baa == pytest.approx(0.25)
    assert updated["p"].stats.saves == 1
    assert updated["b"].stats.at_bats_faced == 0
    assert updated["b"].stats.hits_allowed == 0
    assert updated["b"].stats.hits == 1


def test_fielding_counters_for_everyone():
    players = players_map(make_player("p", Position.P), make_player("c", Position.C))
    deltas = [
        PlayerStatDelta(player_id="p", plays_attempted=2, exceptional_plays=1),
        PlayerStatDelta(player_id="c", errors=1, plays_attempted=1),
    ]
    updated = apply_stat_deltas(players, deltas)
    assert updated["p"].stats.exceptional_plays == 1
    assert updated["c"].stats.errors == 1


def test_multiple_deltas_for_same_player_accumulate():
    players = players_map(make_player("b"))
    deltas = [PlayerStatDelta(player_id="b", walks=1), PlayerStatDelta(player_id="b", walks=2)]
    assert apply_stat_deltas(players, deltas)["b"].stats.walks == 3


def test_input_not_modified():
    players = players_map(make_player("b", hits=1))
    apply_stat_deltas(players, [PlayerStatDelta(player_id="b", hits=1)])
    assert players["b"].stats.hits == 1


def test_unknown_player_skipped(caplog):
    players = players_map(make_player("b"))
    with caplog.at_level(logging.WARNING):
        updated = apply_stat_deltas(players, [PlayerStatDelta(player_id="ghost", hits=1)])
    assert updated == players
    assert "unknown player ghost" in caplog.text


def test_rates_zero_without_denominator():
    stats = Stats()
    assert stats.avg == 0.0
    assert stats.baa == 0.0


def test_reset_stats():
    stats = reset_stats()
    assert all(v == 0 for v in stats.model_dump().values())


def test_delta_merge():
    a = PlayerStatDelta(player_id="x", hits=1, errors=1)
    b = PlayerStatDelta(player_id="x", hits=2, saves=1)
    merged = a.merge(b)
    assert (merged.hits, merged.errors, merged.saves) == (3, 1, 1)
    assert merged.player_id == "x"
    assert a.hits == 1
