# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0", "pytest>=7.0"]
# ///
"""Tests for new franchise creation and lineup editing."""

import random
import sys
from pathlib import Path

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from league import DEFAULT_TEAMS, LineupError, create_league, set_lineup
from models import LeagueState, Position
from ratings import overall_batter_rating, overall_pitcher_rating
from simulation import build_lineup


@pytest.fixture(scope="module")
def league() -> LeagueState:
    return create_league(random.Random(21))


def lineup_ids(state, team_id):
    players = state.team_players(team_id)
    batters = sorted((p for p in players if p.lineup_slot is not None), key=lambda p: p.lineup_slot)
    pitcher = next(p for p in players if p.is_starting_pitcher)
    return [p.id for p in batters], pitcher.id


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------

class TestCreateLeague:
    def test_teams_and_rosters(self, league):
        assert list(league.teams) == [team_id for team_id, _ in DEFAULT_TEAMS]
        assert league.teams["T1"].name == "Metro City Meteors"
        for team in league.teams.values():
            roster = league.team_players(team.id)
            assert len(roster) == 16
            assert sorted(team.roster) == sorted(p.id for p in roster)
            assert sum(p.position is Position.P for p in roster) == 4

    def test_player_ids_and_ages(self, league):
        for player in league.players.values():
            if player.position is Position.P:
                assert player.id.startswith(f"{player.team_id}_P")
                assert 20 <= player.age <= 34
            else:
                assert player.id.startswith(f"{player.team_id}_NP")
                assert 1 <= player.age <= 5

    def test_best_pitcher_starts(self, league):
        for team_id in league.teams:
            pitchers = [p for p in league.team_players(team_id) if p.position is Position.P]
            starters = [p for p in pitchers if p.is_starting_pitcher]
            assert len(starters) == 1
            best = min(overall_pitcher_rating(p.ratings) for p in pitchers)
            assert overall_pitcher_rating(starters[0].ratings) == best

    def test_top_nine_batters_slotted(self, league):
        for team_id in league.teams:
            hitters = [p for p in league.team_players(team_id) if p.position is not Position.P]
            slotted = sorted((p for p in hitters if p.lineup_slot is not None), key=lambda p: p.lineup_slot)
            assert [p.lineup_slot for p in slotted] == list(range(9))
            ratings = [overall_batter_rating(p.ratings) for p in slotted]
            assert ratings == sorted(ratings, reverse=True)
            bench = [overall_batter_rating(p.ratings) for p in hitters if p.lineup_slot is None]
            assert max(bench) <= min(ratings)

    def test_season_setup(self, league):
        assert league.year == 1
        assert len(league.schedule) == 40
        assert league.game_index == 0
        assert [(s.wins, s.losses) for s in league.standings] == [(0, 0)] * 5
        assert not league.is_postseason

    def test_lineups_valid(self, league):
        for team_id in league.teams:
            assert build_lineup(team_id, league.players).is_valid

    def test_seeded_creation_reproducible(self):
        a = create_league(random.Random(5))
        b = create_league(random.Random(5))
        assert a.model_dump() == b.model_dump()

    def test_custom_teams(self):
        state = create_league(random.Random(1), teams=[("X", "Xs"), ("Y", "Ys")])
        assert set(state.teams) == {"X", "Y"}
        assert len(state.schedule) == 4


# ---------------------------------------------------------------------------
# Lineup editing
# ---------------------------------------------------------------------------

class TestSetLineup:
    def test_apply_lineup(self, league):
        batters, _ = lineup_ids(league, "T1")
        pitchers = [p.id for p in league.team_players("T1") if p.position is Position.P]
        new_pitcher = next(pid for pid in pitchers if not league.players[pid].is_starting_pitcher)
        new_order = list(reversed(batters))

        updated = set_lineup(league, "T1", new_order, new_pitcher)
        assert lineup_ids(updated, "T1") == (new_order, new_pitcher)
        lineup = build_lineup("T1", updated.players)
        assert [b.id for b in lineup.batters] == new_order
        assert lineup.pitcher.id == new_pitcher
        # input state untouched
        assert lineup_ids(league, "T1")[0] == batters

    def test_bench_player_can_be_slotted(self, league):
        batters, pitcher = lineup_ids(league, "T2")
        bench = next(p.id for p in league.team_players("T2")
                     if p.position is not Position.P and p.lineup_slot is None)
        new_order = [bench] + batters[1:]
        updated = set_lineup(league, "T2", new_order, pitcher)
        assert updated.players[bench].lineup_slot == 0
        assert updated.players[batters[0]].lineup_slot is None

    def test_wrong_size(self, league):
        batters, pitcher = lineup_ids(league, "T1")
        with pytest.raises(LineupError, match="exactly 9"):
            set_lineup(league, "T1", batters[:8], pitcher)

    def test_duplicate_batter(self, league):
        batters, pitcher = lineup_ids(league, "T1")
        with pytest.raises(LineupError, match="twice"):
            set_lineup(league, "T1", batters[:8] + [batters[0]], pitcher)

    def test_other_teams_player(self, league):
        batters, pitcher = lineup_ids(league, "T1")
        other, _ = lineup_ids(league, "T2")
        with pytest.raises(LineupError, match="not on team"):
            set_lineup(league, "T1", batters[:8] + [other[0]], pitcher)

    def test_pitcher_cannot_bat(self, league):
        batters, pitcher = lineup_ids(league, "T1")
        with pytest.raises(LineupError, match="cannot bat"):
            set_lineup(league, "T1", batters[:8] + [pitcher], pitcher)

    def test_starter_must_pitch(self, league):
        batters, _ = lineup_ids(league, "T1")
        with pytest.raises(LineupError, match="not a pitcher"):
            set_lineup(league, "T1", batters, batters[0])

    def test_unknown_team(self, league):
        with pytest.raises(LineupError, match="Unknown team"):
            set_lineup(league, "T9", [], "x")

    def test_lineup_error_is_value_error(self):
        assert issubclass(LineupError, ValueError)
