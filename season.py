# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Season orchestration: regular season, postseason series and year rollover.

Every entry point takes a ``LeagueState`` snapshot and returns a new one;
the input is never modified.

Usage:
    engine = SimulationEngine(seed=42)
    state, result = simulate_next_game(state, engine)
"""

from __future__ import annotations

import logging
import random

from config import SERIES_WINS_NEEDED
from models import SKILL_KEYS, GameResult, LeagueState, Player, ScheduleEntry, StandingEntry
from ratings import clamp_rating
from schedule import generate_schedule
from simulation import SimulationEngine
from stats import apply_stat_deltas, reset_stats

logger = logging.getLogger(__name__)

AGING_DELTA_SCALE = 10
INJURY_DRIFT_MAX = 5
INJURY_DRIFT_MIN_AGE = 4


# ---------------------------------------------------------------------------
# Standings
# ---------------------------------------------------------------------------

def standings_order(state: LeagueState) -> list[StandingEntry]:
    """Standings sorted by wins descending, then losses ascending."""
    return sorted(state.standings, key=lambda s: (-s.wins, s.losses))


def _record_result(state: LeagueState, result: GameResult) -> None:
    for entry in state.standings:
        if entry.team_id == result.winner:
            entry.wins += 1
        elif entry.team_id == result.loser:
            entry.losses += 1
    if result.winner in state.teams:
        state.teams[result.winner].wins += 1
    if result.loser in state.teams:
        state.teams[result.loser].losses += 1


def _team_name(state: LeagueState, team_id: str) -> str:
    team = state.teams.get(team_id)
    return team.name if team else team_id


# ---------------------------------------------------------------------------
# Aging
# ---------------------------------------------------------------------------

def _age_factor(age: int) -> float:
    if age <= 2:
        return 1.5
    if 4 <= age <= 5:
        return 0.8
    if age >= 6:
        return 0.5
    return 1.0


def age_player(player: Player, rng: random.Random) -> Player:
    """Return *player* one year older with drifted ratings and zeroed stats.

    Each skill moves by ``U(-0.5, 0.5) * 10``; the move is compounded by
    the potential factor scaled by age, then by the injury factor. Players
    aged 4 and up also get more injury prone.
    """
    age = player.age + 1
    ratings = player.ratings
    potential_factor = (ratings.potential - 50) / 100
    injury_factor = (ratings.injury - 50) / 100
    age_factor = _age_factor(age)

    updates: dict[str, int] = {}
    for key in SKILL_KEYS:
        change = (rng.random() - 0.5) * AGING_DELTA_SCALE
        change += change * potential_factor * age_factor
        change += change * injury_factor
        updates[key] = clamp_rating(getattr(ratings, key) + round(change))

    injury = ratings.injury
    if age >= INJURY_DRIFT_MIN_AGE:
        injury += round(rng.uniform(0, INJURY_DRIFT_MAX))
    updates["injury"] = clamp_rating(injury)

    return player.model_copy(update={
        "age": age,
        "ratings": ratings.model_copy(update=updates),
        "stats": reset_stats(),
    })


# ---------------------------------------------------------------------------
# Year rollover
# ---------------------------------------------------------------------------

def advance_year(state: LeagueState, rng: random.Random | None = None) -> LeagueState:
    """Start the next season: new schedule, clean records, aged players."""
    rng = rng or random.Random()
    new_state = state.model_copy(deep=True)
    champion = state.championship_winner_id

    new_state.year = state.year + 1
    new_state.game_index = 0
    new_state.schedule = generate_schedule(list(state.teams), rng)
    new_state.standings = [StandingEntry(team_id=s.team_id) for s in state.standings]
    for team in new_state.teams.values():
        team.wins = 0
        team.losses = 0

    new_state.players = {pid: age_player(p, rng) for pid, p in state.players.items()}

    new_state.is_postseason = False
    new_state.postseason_series = []
    new_state.postseason_game_index = 0
    new_state.postseason_series_scores = {}
    new_state.championship_winner_id = None

    new_state.game_log = [f"--- Year {new_state.year} begins ---"]
    if champion:
        new_state.game_log.append(f"Defending champions: {_team_name(state, champion)}")

    logger.info("Advanced to year %d (%d games scheduled)", new_state.year, len(new_state.schedule))
    return new_state


# ---------------------------------------------------------------------------
# Postseason
# ---------------------------------------------------------------------------

def start_postseason(state: LeagueState, rng: random.Random | None = None) -> LeagueState:
    """Seed the top two teams into a best-of-3 series.

    With fewer than two teams there is no series and the year rolls over.
    """
    seeds = [s.team_id for s in standings_order(state)[:2]]
    if len(seeds) < 2:
        logger.warning("Not enough teams for a postseason; advancing to next year")
        return advance_year(state, rng)

    top, second = seeds
    new_state = state.model_copy(deep=True)
    new_state.is_postseason = True
    new_state.postseason_game_index = 0
    new_state.postseason_series = [
        ScheduleEntry(home=top, away=second, game_number=1),
        ScheduleEntry(home=second, away=top, game_number=2),
        ScheduleEntry(home=top, away=second, game_number=3),
    ]
    new_state.postseason_series_scores = {top: 0, second: 0}
    new_state.championship_winner_id = None
    new_state.game_log.append("--- Postseason Begins! ---")
    new_state.game_log.append(
        f"{_team_name(state, top)} vs. {_team_name(state, second)} in the Championship Series!"
    )
    logger.info("Postseason begins: %s vs %s", top, second)
    return new_state


def _series_line(state: LeagueState) -> str:
    first = state.postseason_series[0]
    top, second = first.home, first.away
    scores = state.postseason_series_scores
    return (
        f"Series: {_team_name(state, top)} {scores.get(top, 0)}"
        f"-{scores.get(second, 0)} {_team_name(state, second)}"
    )


# ---------------------------------------------------------------------------
# Game sequencing
# ---------------------------------------------------------------------------

def next_fixture(state: LeagueState) -> ScheduleEntry | None:
    """The game the league is waiting on, or None between phases."""
    if not state.is_regular_season_over:
        return state.schedule[state.game_index]
    if state.is_postseason and state.postseason_game_index < len(state.postseason_series):
        return state.postseason_series[state.postseason_game_index]
    return None


def record_game(state: LeagueState, result: GameResult, rng: random.Random | None = None) -> LeagueState:
    """Fold a finished game into the league and return the new state.

    Works for games played in one call or stepped one plate appearance at a
    time. Regular-season games update standings and move the schedule on;
    postseason games update the series score and, once a team has won the
    series, crown the champion and roll the year over.

    Raises:
        ValueError: no game is pending, or *result* is not for the pending
            fixture.
    """
    fixture = next_fixture(state)
    if fixture is None:
        raise ValueError("No game is pending in the current phase")
    if (result.home, result.away) != (fixture.home, fixture.away):
        raise ValueError(
            f"Result {result.away} @ {result.home} does not match pending game "
            f"{fixture.away} @ {fixture.home}"
        )

    new_state = state.model_copy(deep=True)
    new_state.players = apply_stat_deltas(new_state.players, result.player_stat_deltas)

    if not state.is_postseason:
        _record_result(new_state, result)
        new_state.game_index += 1
        logger.debug(
            "Game %d: %s %d - %d %s", new_state.game_index,
            result.away, result.away_score, result.home_score, result.home,
        )
        return new_state

    scores = new_state.postseason_series_scores
    scores[result.winner] = scores.get(result.winner, 0) + 1
    new_state.game_log.append(
        f"{_team_name(state, result.away)} {result.away_score} - "
        f"{result.home_score} {_team_name(state, result.home)}"
    )
    new_state.game_log.append(
        f"{_team_name(state, result.winner)} wins game {new_state.postseason_game_index + 1}! "
        + _series_line(new_state)
    )
    new_state.postseason_game_index += 1

    if scores[result.winner] >= SERIES_WINS_NEEDED:
        new_state.championship_winner_id = result.winner
        new_state.game_log.append(f"--- {_team_name(state, result.winner)} are the Champions! ---")
        logger.info("Year %d champion: %s", state.year, result.winner)
        return advance_year(new_state, rng)

    return new_state


def simulate_next_game(state: LeagueState, engine: SimulationEngine) -> tuple[LeagueState, GameResult | None]:
    """Advance the league by one step.

    Plays the next regular-season game, starts the postseason once the
    schedule is exhausted, plays the next series game, or rolls the year
    over. Returns the new state and the game result when a game was played.
    """
    fixture = next_fixture(state)
    if fixture is None:
        if not state.is_postseason:
            return start_postseason(state, engine.rng), None
        return advance_year(state, engine.rng), None

    result = engine.simulate_full_game(fixture, state, is_postseason=state.is_postseason)
    return record_game(state, result, engine.rng), result



def simulate_season(state: LeagueState, engine: SimulationEngine) -> tuple[LeagueState, list[GameResult], str | None]:
    """Play from the current point until the year rolls over.

    Returns the new year's state, every game played and the champion id
    (None if the year ended without a series).
    """
    start_year = state.year
    results: list[GameResult] = []
    champion = None
    while state.year == start_year:
        was_postseason = state.is_postseason
        state, result = simulate_next_game(state, engine)
        if result is None:
            continue
        results.append(result)
        if was_postseason and state.year != start_year:
            champion = result.winner
    return state, results, champion
