"""New franchise creation and lineup editing."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from config import LINEUP_SIZE
from models import NON_PITCHER_POSITIONS, LeagueState, Player, Position, StandingEntry, Team
from ratings import generate_player_name, generate_ratings, overall_batter_rating, overall_pitcher_rating
from schedule import generate_schedule

logger = logging.getLogger(__name__)

DEFAULT_TEAMS: list[tuple[str, str]] = [
    ("T1", "Metro City Meteors"),
    ("T2", "Coastal Sharks"),
    ("T3", "Red Mountain Rovers"),
    ("T4", "Northern Pikes"),
    ("T5", "Golden Griffins"),
]

PITCHERS_PER_TEAM = 4
NON_PITCHERS_PER_TEAM = 12
PITCHER_AGE_RANGE = (20, 34)
NON_PITCHER_AGE_RANGE = (1, 5)


class LineupError(ValueError):
    """Raised when a requested lineup cannot be applied."""


def _generate_roster(team_id: str, rng: random.Random) -> list[Player]:
    players = []
    for i in range(PITCHERS_PER_TEAM):
        players.append(Player(
            id=f"{team_id}_P{i}",
            name=generate_player_name(rng),
            age=rng.randint(*PITCHER_AGE_RANGE),
            team_id=team_id,
            position=Position.P,
            ratings=generate_ratings(is_pitcher=True, rng=rng),
        ))
    for i in range(NON_PITCHERS_PER_TEAM):
        players.append(Player(
            id=f"{team_id}_NP{i}",
            name=generate_player_name(rng),
            age=rng.randint(*NON_PITCHER_AGE_RANGE),
            team_id=team_id,
            position=rng.choice(NON_PITCHER_POSITIONS),
            ratings=generate_ratings(is_pitcher=False, rng=rng),
        ))
    return players


def _assign_default_lineup(roster: list[Player]) -> list[Player]:
    """Best pitcher starts; the top nine hitters fill slots 0-8."""
    pitchers = sorted(
        (p for p in roster if p.position is Position.P),
        key=lambda p: overall_pitcher_rating(p.ratings),
    )
    batters = sorted(
        (p for p in roster if p.position is not Position.P),
        key=lambda p: overall_batter_rating(p.ratings),
        reverse=True,
    )
    starter_id = pitchers[0].id if pitchers else None
    slots = {p.id: i for i, p in enumerate(batters[:LINEUP_SIZE])}
    return [
        p.model_copy(update={"is_starting_pitcher": p.id == starter_id, "lineup_slot": slots.get(p.id)})
        for p in roster
    ]


def create_league(rng: random.Random | None = None,
                  teams: Sequence[tuple[str, str]] = DEFAULT_TEAMS) -> LeagueState:
    """Create a year-1 league with generated rosters, lineups and schedule."""
    rng = rng or random.Random()
    players: dict[str, Player] = {}
    team_models: dict[str, Team] = {}

    for team_id, name in teams:
        roster = _assign_default_lineup(_generate_roster(team_id, rng))
        players.update({p.id: p for p in roster})
        team_models[team_id] = Team(id=team_id, name=name, roster=[p.id for p in roster])

    team_ids = [team_id for team_id, _ in teams]
    state = LeagueState(
        players=players,
        teams=team_models,
        schedule=generate_schedule(team_ids, rng),
        standings=[StandingEntry(team_id=t) for t in team_ids],
    )
    logger.info("Created league with %d teams and %d players", len(team_models), len(players))
    return state


def set_lineup(state: LeagueState, team_id: str, batter_ids: Sequence[str], pitcher_id: str) -> LeagueState:
    """Return a new state with *team_id*'s batting order and starter replaced.

    Raises:
        LineupError: unknown team, wrong number of batters, duplicates,
            players from another team, a pitcher in the batting order, or a
            starter who is not a pitcher.
    """
    if team_id not in state.teams:
        raise LineupError(f"Unknown team: {team_id}")
    if len(batter_ids) != LINEUP_SIZE:
        raise LineupError(f"Lineup needs exactly {LINEUP_SIZE} batters, got {len(batter_ids)}")
    if len(set(batter_ids)) != len(batter_ids):
        raise LineupError("Lineup contains the same player twice")

    for player_id in [*batter_ids, pitcher_id]:
        player = state.players.get(player_id)
        if player is None or player.team_id != team_id:
            raise LineupError(f"Player {player_id} is not on team {team_id}")
    if any(state.players[pid].position is Position.P for pid in batter_ids):
        raise LineupError("Pitchers cannot bat in the lineup")
    if state.players[pitcher_id].position is not Position.P:
        raise LineupError(f"Player {pitcher_id} is not a pitcher")

    slots = {pid: i for i, pid in enumerate(batter_ids)}
    new_state = state.model_copy(deep=True)
    for player in state.team_players(team_id):
        new_state.players[player.id] = player.model_copy(update={
            "lineup_slot": slots.get(player.id),
            "is_starting_pitcher": player.id == pitcher_id,
        })
    return new_state
