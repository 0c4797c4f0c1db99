# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Data models for the franchise season simulator.

Everything that is persisted between simulation calls lives here as a
pydantic model. A whole franchise is a single ``LeagueState`` document.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


RATING_MIN = 30
RATING_MAX = 99


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Hand(str, Enum):
    R = "R"
    L = "L"
    S = "S"  # switch-hitter


class Position(str, Enum):
    P = "P"
    C = "C"
    FIRST = "1B"
    SECOND = "2B"
    THIRD = "3B"
    SS = "SS"
    LF = "LF"
    CF = "CF"
    RF = "RF"

    @property
    def is_outfield(self) -> bool:
        return self in (Position.LF, Position.CF, Position.RF)


NON_PITCHER_POSITIONS: list[Position] = [p for p in Position if p is not Position.P]


class Outcome(str, Enum):
    """Result of a single plate appearance."""
    STRIKEOUT = "STRIKEOUT"
    WALK = "WALK"
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    TRIPLE = "TRIPLE"
    HOME_RUN = "HOME_RUN"
    OUT = "OUT"

    @property
    def is_hit(self) -> bool:
        return self in _HIT_LADDER

    @property
    def is_out(self) -> bool:
        return self in (Outcome.OUT, Outcome.STRIKEOUT)

    def upgraded(self) -> Outcome:
        """One level better for the batter (fielding error)."""
        if self in _HIT_LADDER[:-1]:
            return _HIT_LADDER[_HIT_LADDER.index(self) + 1]
        return self

    def downgraded(self) -> Outcome:
        """One level worse for the batter (exceptional play)."""
        if self is Outcome.SINGLE:
            return Outcome.OUT
        if self in (Outcome.DOUBLE, Outcome.TRIPLE):
            return _HIT_LADDER[_HIT_LADDER.index(self) - 1]
        return self


_HIT_LADDER: list[Outcome] = [Outcome.SINGLE, Outcome.DOUBLE, Outcome.TRIPLE, Outcome.HOME_RUN]


# ---------------------------------------------------------------------------
# Player data models
# ---------------------------------------------------------------------------

def _rating(description: str):
    return Field(default=RATING_MIN, ge=RATING_MIN, le=RATING_MAX, description=description)


class Ratings(BaseModel):
    """Player attributes on the 30-99 scale."""
    potential: int = _rating("Development ceiling")
    injury: int = _rating("Injury proneness (higher is worse)")
    contact: int = _rating("Contact ability")
    power: int = _rating("Power")
    eye: int = _rating("Plate discipline")
    speed: int = _rating("Speed")
    fielding: int = _rating("Fielding")
    accuracy: int = _rating("Pitch accuracy")
    heat: int = _rating("Pitch velocity")
    movement: int = _rating("Pitch movement")
    handedness: Hand = Hand.R


SKILL_KEYS: tuple[str, ...] = (
    "contact", "power", "eye", "speed", "fielding", "accuracy", "heat", "movement",
)


class StatCounters(BaseModel):
    """Counters shared by season stats and per-game deltas."""
    # Batting
    at_bats: int = Field(default=0, ge=0)
    hits: int = Field(default=0, ge=0)
    home_runs: int = Field(default=0, ge=0)
    walks: int = Field(default=0, ge=0)
    strikeouts: int = Field(default=0, ge=0)
    runs_scored: int = Field(default=0, ge=0)
    runs_batted_in: int = Field(default=0, ge=0)
    # Pitching
    at_bats_faced: int = Field(default=0, ge=0)
    strikeouts_allowed: int = Field(default=0, ge=0)
    walks_allowed: int = Field(default=0, ge=0)
    hits_allowed: int = Field(default=0, ge=0)
    home_runs_allowed: int = Field(default=0, ge=0)
    innings_pitched: int = Field(default=0, ge=0)
    saves: int = Field(default=0, ge=0)
    # Fielding
    errors: int = Field(default=0, ge=0)
    exceptional_plays: int = Field(default=0, ge=0)
    plays_attempted: int = Field(default=0, ge=0)
    bases_robbed: int = Field(default=0, ge=0)


BATTING_KEYS: tuple[str, ...] = (
    "at_bats", "hits", "home_runs", "walks", "strikeouts", "runs_scored", "runs_batted_in",
)
PITCHING_KEYS: tuple[str, ...] = (
    "at_bats_faced", "strikeouts_allowed", "walks_allowed", "hits_allowed",
    "home_runs_allowed", "innings_pitched", "saves",
)
FIELDING_KEYS: tuple[str, ...] = ("errors", "exceptional_plays", "plays_attempted", "bases_robbed")


class Stats(StatCounters):
    """Season totals for one player."""

    @computed_field
    @property
    def avg(self) -> float:
        return self.hits / self.at_bats if self.at_bats > 0 else 0.0

    @computed_field
    @property
    def baa(self) -> float:
        return self.hits_allowed / self.at_bats_faced if self.at_bats_faced > 0 else 0.0


class PlayerStatDelta(StatCounters):
    """One player's contribution from a single game."""
    player_id: str

    def merge(self, other: StatCounters) -> PlayerStatDelta:
        """Return a new delta with *other*'s counters added."""
        updates = {
            key: getattr(self, key) + getattr(other, key)
            for key in StatCounters.model_fields
        }
        return self.model_copy(update=updates)


class Player(BaseModel):
    """A franchise player. Never deleted, only updated between seasons."""
    id: str
    name: str
    age: int = Field(ge=0)
    team_id: str
    position: Position
    ratings: Ratings
    stats: Stats = Field(default_factory=Stats)
    lineup_slot: Optional[int] = Field(default=None, ge=0, le=8, description="Batting order slot, None if unassigned")
    is_starting_pitcher: bool = False

    @property
    def handedness(self) -> Hand:
        return self.ratings.handedness


# ---------------------------------------------------------------------------
# League data models
# ---------------------------------------------------------------------------

class Team(BaseModel):
    id: str
    name: str
    roster: list[str] = Field(default_factory=list)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)


class ScheduleEntry(BaseModel):
    home: str
    away: str
    game_number: Optional[int] = Field(default=None, ge=1, description="Postseason series game number")


class StandingEntry(BaseModel):
    team_id: str
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)


class LeagueState(BaseModel):
    """Aggregate root: one document per franchise."""
    year: int = Field(default=1, ge=1)
    players: dict[str, Player] = Field(default_factory=dict)
    teams: dict[str, Team] = Field(default_factory=dict)
    schedule: list[ScheduleEntry] = Field(default_factory=list)
    game_index: int = Field(default=0, ge=0)
    standings: list[StandingEntry] = Field(default_factory=list)
    is_postseason: bool = False
    postseason_series: list[ScheduleEntry] = Field(default_factory=list)
    postseason_game_index: int = Field(default=0, ge=0)
    postseason_series_scores: dict[str, int] = Field(default_factory=dict)
    championship_winner_id: Optional[str] = None
    game_log: list[str] = Field(default_factory=list)

    @property
    def is_regular_season_over(self) -> bool:
        return self.game_index >= len(self.schedule)

    def team_players(self, team_id: str) -> list[Player]:
        return [p for p in self.players.values() if p.team_id == team_id]


# ---------------------------------------------------------------------------
# Game output
# ---------------------------------------------------------------------------

class GameResult(BaseModel):
    """Final result of one simulated game."""
    home: str
    away: str
    winner: str
    loser: str
    home_score: int = Field(ge=0)
    away_score: int = Field(ge=0)
    innings: int = Field(default=0, ge=0)
    forfeit: bool = False
    player_stat_deltas: list[PlayerStatDelta] = Field(default_factory=list)
