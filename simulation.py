# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Baseball game simulation engine.

Resolves plate appearances from player ratings, runs the half-inning state
machine, and accumulates per-player stat deltas for one game.

A game is a ``GameSession`` snapshot. ``advance_one_plate_appearance``
takes a snapshot and returns a new one plus the ``PlayEvent`` describing
what happened, so a presentation layer can animate play by play.
``simulate_full_game`` drives the same machine to completion.

All randomness flows through the engine's seeded ``random.Random``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from config import LINEUP_SIZE, REGULAR_SEASON_MAX_INNINGS, SAVE_MAX_MARGIN
from fielding import NO_CREDIT, FieldingCredit, resolve_fielding
from models import (
    GameResult,
    Hand,
    LeagueState,
    Outcome,
    Player,
    PlayerStatDelta,
    Position,
    ScheduleEntry,
)
from ratings import overall_batter_rating, overall_pitcher_rating

logger = logging.getLogger(__name__)

WILD_THROW_ACCURACY_WEIGHT = 0.05
WILD_THROW_FIELDING_WEIGHT = 0.07
MATCHUP_MODIFIER = 0.05
ANGLE_MEAN_RIGHT = 33.0
ANGLE_MEAN_LEFT = 57.0
ANGLE_STDDEV = 18.0


# ---------------------------------------------------------------------------
# Base occupancy
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Empty:
    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Occupied:
    player_id: str


@dataclass(frozen=True)
class GhostRunner:
    """Placed on second to start regular-season extra innings."""


Occupant = Empty | Occupied | GhostRunner

EMPTY = Empty()
GHOST = GhostRunner()
GHOST_RUNNER_ID = "GHOST_RUNNER"


@dataclass(frozen=True)
class Bases:
    first: Occupant = EMPTY
    second: Occupant = EMPTY
    third: Occupant = EMPTY

    def __post_init__(self) -> None:
        ids = self.runner_ids()
        if len(ids) != len(set(ids)):
            raise ValueError(f"Player on two bases at once: {ids}")

    def slots(self) -> tuple[Occupant, Occupant, Occupant]:
        return (self.first, self.second, self.third)

    def is_empty(self) -> bool:
        return not any(self.slots())

    def occupied(self) -> list[Occupant]:
        """Non-empty slots from first to third."""
        return [s for s in self.slots() if s]

    def with_ghost_on_second(self) -> Bases:
        return replace(self, second=GHOST)

    def runner_ids(self) -> list[str]:
        return [s.player_id for s in self.slots() if isinstance(s, Occupied)]

    def to_list(self) -> list[str | None]:
        def dump(slot: Occupant) -> str | None:
            if isinstance(slot, Occupied):
                return slot.player_id
            if isinstance(slot, GhostRunner):
                return GHOST_RUNNER_ID
            return None
        return [dump(s) for s in self.slots()]


EMPTY_BASES = Bases()


def scored_runners(before: Bases, after: Bases) -> list[Occupant]:
    """Runners present in *before* who are no longer on base in *after*.

    Runners only ever move forward, so anyone who disappeared crossed the
    plate.
    """
    remaining = set(after.runner_ids())
    scored: list[Occupant] = []
    for slot in before.slots():
        if isinstance(slot, Occupied) and slot.player_id not in remaining:
            scored.append(slot)
    ghosts_before = sum(isinstance(s, GhostRunner) for s in before.slots())
    ghosts_after = sum(isinstance(s, GhostRunner) for s in after.slots())
    scored.extend(GHOST for _ in range(ghosts_before - ghosts_after))
    return scored


def advance_runners(bases: Bases, outcome: Outcome, batter_id: str) -> Bases:
    """Return the base state after *outcome*; outs leave the runners in place."""
    first, second, third = bases.slots()
    batter = Occupied(batter_id)

    if outcome is Outcome.HOME_RUN:
        return EMPTY_BASES
    if outcome is Outcome.TRIPLE:
        return Bases(EMPTY, EMPTY, batter)
    if outcome is Outcome.DOUBLE:
        return Bases(EMPTY, batter, first)
    if outcome is Outcome.SINGLE:
        return Bases(batter, first, second)
    if outcome is Outcome.WALK:
        # Only runners forced by the batter move up
        if not first:
            return Bases(batter, second, third)
        if not second:
            return Bases(batter, first, third)
        return Bases(batter, first, second)
    return bases


# ---------------------------------------------------------------------------
# Lineups
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Lineup:
    team_id: str
    batters: tuple[Player, ...] = ()
    pitcher: Player | None = None

    @property
    def is_valid(self) -> bool:
        return self.pitcher is not None and len(self.batters) >= LINEUP_SIZE


def build_lineup(team_id: str, players: dict[str, Player]) -> Lineup:
    """Derive a team's batting order and starting pitcher.

    The assigned starter and slotted batters are used when complete.
    Otherwise the gaps are filled with the best available players: the
    pitcher with the lowest overall pitcher rating, then non-pitchers by
    overall batter rating.
    """
    roster = [p for p in players.values() if p.team_id == team_id]
    pitcher = next((p for p in roster if p.is_starting_pitcher), None)
    batters = sorted(
        (p for p in roster if p.position is not Position.P and p.lineup_slot is not None),
        key=lambda p: p.lineup_slot,
    )

    if pitcher is None or len(batters) < LINEUP_SIZE:
        if pitcher is None:
            pitchers = sorted(
                (p for p in roster if p.position is Position.P),
                key=lambda p: overall_pitcher_rating(p.ratings),
            )
            if pitchers:
                pitcher = pitchers[0]
            elif roster:
                logger.warning("No pitchers on team %s; using best batter as pitcher", team_id)
                pitcher = max(roster, key=lambda p: overall_batter_rating(p.ratings))
            else:
                logger.error("Team %s has no players; cannot form a lineup", team_id)
                return Lineup(team_id=team_id)

        batters = [b for b in batters if b.id != pitcher.id]
        taken = {b.id for b in batters}
        bench = sorted(
            (p for p in roster if p.position is not Position.P and p.id not in taken and p.id != pitcher.id),
            key=lambda p: overall_batter_rating(p.ratings),
            reverse=True,
        )
        batters.extend(bench[: max(0, LINEUP_SIZE - len(batters))])

    return Lineup(team_id=team_id, batters=tuple(batters[:LINEUP_SIZE]), pitcher=pitcher)


def find_catcher(team_id: str, players: dict[str, Player]) -> Player | None:
    return next(
        (p for p in players.values() if p.team_id == team_id and p.position is Position.C),
        None,
    )


# ---------------------------------------------------------------------------
# At-bat probabilities
# ---------------------------------------------------------------------------

def effective_handedness(batter: Player, pitcher: Player) -> Hand:
    """Switch-hitters bat from the side opposite the pitcher's arm."""
    if batter.handedness is Hand.S:
        return Hand.L if pitcher.handedness is Hand.R else Hand.R
    return batter.handedness


def matchup_modifier(batter_hand: Hand, pitcher_hand: Hand) -> float:
    return -MATCHUP_MODIFIER if batter_hand is pitcher_hand else MATCHUP_MODIFIER


def at_bat_probabilities(batter: Player, pitcher: Player) -> dict[str, float]:
    """Stage probabilities for one plate appearance.

    ``strikeout`` and ``walk`` share the first draw; ``hit`` is the contact
    check; ``home_run``, ``triple`` and ``double`` share the hit-type draw
    with the remainder falling to a single.
    """
    contact = batter.ratings.contact / 100
    power = batter.ratings.power / 100
    eye = batter.ratings.eye / 100
    speed = batter.ratings.speed / 100
    accuracy = pitcher.ratings.accuracy / 100
    heat = pitcher.ratings.heat / 100
    movement = pitcher.ratings.movement / 100
    modifier = matchup_modifier(effective_handedness(batter, pitcher), pitcher.handedness)

    return {
        "strikeout": max(0.0, (heat * 0.4 + movement * 0.3 + (1 - eye) * 0.3) / 1.5),
        "walk": max(0.0, (eye * 0.4 + (1 - accuracy) * 0.6) / 2),
        "hit": max(0.0, (contact * 0.6 + eye * 0.2 + (1 - accuracy) * 0.2) / 1.2 + modifier),
        "home_run": max(0.0, (power * 0.7 + (1 - heat) * 0.3) / 3),
        "triple": max(0.0, (speed * 0.4 + contact * 0.1) / 4),
        "double": max(0.0, (power * 0.3 + contact * 0.3) / 2),
    }


def wild_throw_probability(pitcher: Player, catcher: Player) -> float:
    return (
        (1 - pitcher.ratings.accuracy / 100) * WILD_THROW_ACCURACY_WEIGHT
        + (1 - catcher.ratings.fielding / 100) * WILD_THROW_FIELDING_WEIGHT
    )


# ---------------------------------------------------------------------------
# Resolver results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PreAtBatEvent:
    wild_throw: bool
    bases: Bases
    scored: tuple[Occupant, ...] = ()
    credit: FieldingCredit = NO_CREDIT
    description: str = ""


@dataclass(frozen=True)
class AtBatResult:
    outcome: Outcome
    bases: Bases
    hit_angle: float
    scored: tuple[Occupant, ...] = ()
    credit: FieldingCredit = NO_CREDIT
    description: str = ""


# ---------------------------------------------------------------------------
# Game session
# ---------------------------------------------------------------------------

class Half(str, Enum):
    TOP = "TOP"
    BOTTOM = "BOTTOM"


class GamePhase(str, Enum):
    TOP_BATTING = "TOP_BATTING"
    BOTTOM_BATTING = "BOTTOM_BATTING"
    INNING_ADVANCE = "INNING_ADVANCE"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class PlayEvent:
    inning: int
    half: Half
    batter_id: str
    pitcher_id: str
    outcome: Outcome
    hit_angle: float
    fielder_credit: FieldingCredit
    wild_throws: int
    runs_scored: int
    home_score: int
    away_score: int
    outs: int
    bases: Bases
    half_inning_over: bool
    game_over: bool
    description: str

    def to_dict(self) -> dict:
        return {
            "inning": self.inning,
            "half": self.half.value,
            "batter_id": self.batter_id,
            "pitcher_id": self.pitcher_id,
            "outcome": self.outcome.value,
            "hit_angle": round(self.hit_angle, 2),
            "fielder_credit": self.fielder_credit.to_dict(),
            "wild_throws": self.wild_throws,
            "runs_scored": self.runs_scored,
            "score": {"home": self.home_score, "away": self.away_score},
            "outs": self.outs,
            "bases": self.bases.to_list(),
            "half_inning_over": self.half_inning_over,
            "game_over": self.game_over,
            "description": self.description,
        }


@dataclass(frozen=True)
class GameSession:
    """Snapshot of one game in progress. Never mutated in place."""
    fixture: ScheduleEntry
    home_lineup: Lineup
    away_lineup: Lineup
    home_defenders: tuple[Player, ...] = ()
    away_defenders: tuple[Player, ...] = ()
    home_catcher: Optional[Player] = None
    away_catcher: Optional[Player] = None
    is_postseason: bool = False
    phase: GamePhase = GamePhase.TOP_BATTING
    inning: int = 1
    outs: int = 0
    bases: Bases = EMPTY_BASES
    home_score: int = 0
    away_score: int = 0
    home_batting_index: int = 0
    away_batting_index: int = 0
    plate_appearances: int = 0
    forfeit: bool = False
    deltas: dict[str, PlayerStatDelta] = field(default_factory=dict)

    @property
    def half(self) -> Half:
        return Half.BOTTOM if self.phase is GamePhase.BOTTOM_BATTING else Half.TOP

    @property
    def game_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER


def _with_delta(deltas: dict[str, PlayerStatDelta], player_id: str, **counters: int) -> None:
    current = deltas.get(player_id) or PlayerStatDelta(player_id=player_id)
    deltas[player_id] = current.merge(PlayerStatDelta(player_id=player_id, **counters))


def _credit_fielder(deltas: dict[str, PlayerStatDelta], credit: FieldingCredit) -> None:
    if credit.player_id is None:
        return
    _with_delta(
        deltas, credit.player_id,
        errors=credit.errors,
        exceptional_plays=credit.exceptional_plays,
        plays_attempted=credit.plays_attempted,
        bases_robbed=credit.bases_robbed,
    )


def _credit_runs(deltas: dict[str, PlayerStatDelta], scored: list[Occupant] | tuple[Occupant, ...]) -> None:
    for runner in scored:
        if isinstance(runner, Occupied):
            _with_delta(deltas, runner.player_id, runs_scored=1)


_OUTCOME_TEXT = {
    Outcome.STRIKEOUT: "strikes out",
    Outcome.WALK: "walks",
    Outcome.SINGLE: "singles",
    Outcome.DOUBLE: "doubles",
    Outcome.TRIPLE: "triples",
    Outcome.HOME_RUN: "homers",
    Outcome.OUT: "is out",
}


# ---------------------------------------------------------------------------
# Simulation engine
# ---------------------------------------------------------------------------

class SimulationEngine:
    """Resolves plate appearances and drives games.

    Uses player ratings to compute probabilities for:
    - Wild throws before an at-bat
    - Strikeout / walk / hit / out and the type of hit
    - Batted-ball angle and the fielder who plays it
    - Errors and exceptional plays
    """

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

    # -------------------------------------------------------------------
    # Resolvers
    # -------------------------------------------------------------------

    def resolve_pre_at_bat(self, bases: Bases, pitcher: Player,
                           catcher: Player | None) -> PreAtBatEvent:
        """Check for a wild throw by the catcher before the next pitch.

        Only possible with a catcher on the defending team and at least one
        runner (ghost runner included) on base. Every runner moves up one.
        """
        if catcher is None or bases.is_empty():
            return PreAtBatEvent(wild_throw=False, bases=bases)

        if self.rng.random() >= wild_throw_probability(pitcher, catcher):
            return PreAtBatEvent(wild_throw=False, bases=bases)

        first, second, third = bases.slots()
        scored = (third,) if third else ()
        return PreAtBatEvent(
            wild_throw=True,
            bases=Bases(EMPTY, first, second),
            scored=scored,
            credit=FieldingCredit(player_id=catcher.id, errors=1, plays_attempted=1),
            description=f"Wild throw by {catcher.name}!",
        )

    def resolve_at_bat(self, batter: Player, pitcher: Player,
                       defenders: tuple[Player, ...] | list[Player],
                       bases: Bases) -> AtBatResult:
        """Resolve one plate appearance to a final outcome and base state."""
        probs = at_bat_probabilities(batter, pitcher)

        roll = self.rng.random()
        if roll < probs["strikeout"]:
            outcome = Outcome.STRIKEOUT
        elif roll < probs["strikeout"] + probs["walk"]:
            outcome = Outcome.WALK
        elif self.rng.random() < probs["hit"]:
            hit_roll = self.rng.random()
            if hit_roll < probs["home_run"]:
                outcome = Outcome.HOME_RUN
            elif hit_roll < probs["home_run"] + probs["triple"]:
                outcome = Outcome.TRIPLE
            elif hit_roll < probs["home_run"] + probs["triple"] + probs["double"]:
                outcome = Outcome.DOUBLE
            else:
                outcome = Outcome.SINGLE
        else:
            outcome = Outcome.OUT

        # Right-handed hitters pull toward third, lefties toward first
        hand = effective_handedness(batter, pitcher)
        mean_angle = ANGLE_MEAN_RIGHT if hand is Hand.R else ANGLE_MEAN_LEFT
        angle = min(90.0, max(0.0, self.rng.gauss(mean_angle, ANGLE_STDDEV)))

        fielding = resolve_fielding(outcome, angle, defenders, self.rng)
        final = fielding.outcome
        after = advance_runners(bases, final, batter.id)
        scored = scored_runners(bases, after)
        if final is Outcome.HOME_RUN:
            scored.append(Occupied(batter.id))
        return AtBatResult(
            outcome=final,
            bases=after,
            hit_angle=angle,
            scored=tuple(scored),
            credit=fielding.credit,
            description=fielding.description,
        )

    # -------------------------------------------------------------------
    # Game setup
    # -------------------------------------------------------------------

    def start_game(self, fixture: ScheduleEntry, league: LeagueState,
                   is_postseason: bool = False) -> GameSession:
        """Create the opening snapshot for *fixture*.

        If either side cannot field nine batters and a pitcher the game is
        forfeited to the home team 1-0 and the session starts finished.
        """
        players = league.players
        home_lineup = build_lineup(fixture.home, players)
        away_lineup = build_lineup(fixture.away, players)

        if not home_lineup.is_valid or not away_lineup.is_valid:
            logger.warning(
                "Could not form a valid lineup for %s vs %s; forfeiting to home team",
                fixture.away, fixture.home,
            )
            return GameSession(
                fixture=fixture,
                home_lineup=home_lineup,
                away_lineup=away_lineup,
                is_postseason=is_postseason,
                phase=GamePhase.GAME_OVER,
                home_score=1,
                forfeit=True,
            )

        return GameSession(
            fixture=fixture,
            home_lineup=home_lineup,
            away_lineup=away_lineup,
            home_defenders=tuple(league.team_players(fixture.home)),
            away_defenders=tuple(league.team_players(fixture.away)),
            home_catcher=find_catcher(fixture.home, players),
            away_catcher=find_catcher(fixture.away, players),
            is_postseason=is_postseason,
        )

    def _half_inning_bases(self, inning: int, is_postseason: bool) -> Bases:
        if inning > REGULAR_SEASON_MAX_INNINGS and not is_postseason:
            return EMPTY_BASES.with_ghost_on_second()
        return EMPTY_BASES

    # -------------------------------------------------------------------
    # Stepped play
    # -------------------------------------------------------------------

    def advance_one_plate_appearance(self, session: GameSession) -> tuple[GameSession, PlayEvent | None]:
        """Play exactly one plate appearance and return the new snapshot.

        Wild throws are resolved first, as many as occur, then the at-bat.
        Returns ``(session, None)`` unchanged once the game is over.
        """
        if session.game_over:
            return session, None

        if session.phase is GamePhase.INNING_ADVANCE:
            inning = session.inning + 1
            session = replace(
                session,
                phase=GamePhase.TOP_BATTING,
                inning=inning,
                outs=0,
                bases=self._half_inning_bases(inning, session.is_postseason),
            )

        top = session.phase is GamePhase.TOP_BATTING
        batting = session.away_lineup if top else session.home_lineup
        fielding = session.home_lineup if top else session.away_lineup
        defenders = session.home_defenders if top else session.away_defenders
        catcher = session.home_catcher if top else session.away_catcher
        batting_index = session.away_batting_index if top else session.home_batting_index

        batter = batting.batters[batting_index % LINEUP_SIZE]
        pitcher = fielding.pitcher
        deltas = dict(session.deltas)
        bases = session.bases
        runs = 0
        notes: list[str] = []

        # Wild throws can repeat for the same batter
        wild_throws = 0
        while True:
            pre = self.resolve_pre_at_bat(bases, pitcher, catcher)
            if not pre.wild_throw:
                break
            wild_throws += 1
            bases = pre.bases
            runs += len(pre.scored)
            _credit_fielder(deltas, pre.credit)
            _credit_runs(deltas, pre.scored)
            notes.append(pre.description)

        result = self.resolve_at_bat(batter, pitcher, defenders, bases)
        outcome = result.outcome
        runs_batted_in = len(result.scored)
        runs += runs_batted_in

        _credit_runs(deltas, result.scored)
        _credit_fielder(deltas, result.credit)
        _with_delta(
            deltas, batter.id,
            at_bats=0 if outcome is Outcome.WALK else 1,
            hits=1 if outcome.is_hit else 0,
            home_runs=1 if outcome is Outcome.HOME_RUN else 0,
            walks=1 if outcome is Outcome.WALK else 0,
            strikeouts=1 if outcome is Outcome.STRIKEOUT else 0,
            runs_batted_in=runs_batted_in,
        )
        _with_delta(
            deltas, pitcher.id,
            at_bats_faced=1,
            hits_allowed=1 if outcome.is_hit else 0,
            home_runs_allowed=1 if outcome is Outcome.HOME_RUN else 0,
            walks_allowed=1 if outcome is Outcome.WALK else 0,
            strikeouts_allowed=1 if outcome is Outcome.STRIKEOUT else 0,
        )

        outs = session.outs + (1 if outcome.is_out else 0)
        home_score = session.home_score + (0 if top else runs)
        away_score = session.away_score + (runs if top else 0)

        description = f"{batter.name} {_OUTCOME_TEXT[outcome]}"
        if result.description:
            description += f" ({result.description})"
        if notes:
            description = " ".join(notes) + " " + description
        if runs:
            description += f" [{runs} run{'s' if runs != 1 else ''} score]"

        next_session = replace(
            session,
            outs=outs,
            bases=result.bases,
            home_score=home_score,
            away_score=away_score,
            away_batting_index=(batting_index + 1) % LINEUP_SIZE if top else session.away_batting_index,
            home_batting_index=session.home_batting_index if top else (batting_index + 1) % LINEUP_SIZE,
            plate_appearances=session.plate_appearances + 1,
            deltas=deltas,
        )
        next_session, half_over = self._resolve_transitions(next_session, pitcher)

        event = PlayEvent(
            inning=session.inning,
            half=session.half,
            batter_id=batter.id,
            pitcher_id=pitcher.id,
            outcome=outcome,
            hit_angle=result.hit_angle,
            fielder_credit=result.credit,
            wild_throws=wild_throws,
            runs_scored=runs,
            home_score=home_score,
            away_score=away_score,
            outs=outs,
            bases=result.bases,
            half_inning_over=half_over,
            game_over=next_session.game_over,
            description=description,
        )
        return next_session, event

    def _resolve_transitions(self, session: GameSession, pitcher: Player) -> tuple[GameSession, bool]:
        """Apply walk-off, half-inning and game-end rules after a plate appearance."""
        past_limit = session.inning >= REGULAR_SEASON_MAX_INNINGS
        bottom = session.phase is GamePhase.BOTTOM_BATTING

        if bottom and past_limit and session.home_score > session.away_score:
            session = self._credit_inning_pitched(session, pitcher)
            return self._finish_game(session), True

        if session.outs < 3:
            return session, False

        session = self._credit_inning_pitched(session, pitcher)
        if not bottom:
            return replace(
                session,
                phase=GamePhase.BOTTOM_BATTING,
                outs=0,
                bases=self._half_inning_bases(session.inning, session.is_postseason),
            ), True

        if past_limit and session.home_score != session.away_score:
            return self._finish_game(session), True
        return replace(session, phase=GamePhase.INNING_ADVANCE, outs=0, bases=EMPTY_BASES), True

    def _credit_inning_pitched(self, session: GameSession, pitcher: Player) -> GameSession:
        if session.outs <= 0:
            return session
        deltas = dict(session.deltas)
        _with_delta(deltas, pitcher.id, innings_pitched=1)
        return replace(session, deltas=deltas)

    def _finish_game(self, session: GameSession) -> GameSession:
        home_won = session.home_score > session.away_score
        margin = abs(session.home_score - session.away_score)
        deltas = dict(session.deltas)
        winning_pitcher = (session.home_lineup if home_won else session.away_lineup).pitcher
        if margin <= SAVE_MAX_MARGIN and winning_pitcher is not None:
            _with_delta(deltas, winning_pitcher.id, saves=1)
        return replace(session, phase=GamePhase.GAME_OVER, deltas=deltas)

    # -------------------------------------------------------------------
    # Batch play
    # -------------------------------------------------------------------

    def game_result(self, session: GameSession) -> GameResult:
        """Summarize a finished session."""
        fixture = session.fixture
        home_won = session.home_score > session.away_score
        return GameResult(
            home=fixture.home,
            away=fixture.away,
            winner=fixture.home if home_won else fixture.away,
            loser=fixture.away if home_won else fixture.home,
            home_score=session.home_score,
            away_score=session.away_score,
            innings=0 if session.forfeit else session.inning,
            forfeit=session.forfeit,
            player_stat_deltas=[] if session.forfeit else list(session.deltas.values()),
        )

    def simulate_full_game(self, fixture: ScheduleEntry, league: LeagueState,
                           is_postseason: bool = False) -> GameResult:
        """Simulate a complete game by stepping the session until it ends."""
        session = self.start_game(fixture, league, is_postseason)
        while not session.game_over:
            session, _ = self.advance_one_plate_appearance(session)
        return self.game_result(session)

    def play_by_play(self, fixture: ScheduleEntry, league: LeagueState,
                     is_postseason: bool = False) -> tuple[GameResult, list[PlayEvent]]:
        """Like :meth:`simulate_full_game` but also returns every play."""
        session = self.start_game(fixture, league, is_postseason)
        events: list[PlayEvent] = []
        while not session.game_over:
            session, event = self.advance_one_plate_appearance(session)
            if event is not None:
                events.append(event)
        return self.game_result(session), events


# ---------------------------------------------------------------------------
# Serialization support
# ---------------------------------------------------------------------------

def session_to_dict(session: GameSession) -> dict:
    """Serialize a game session for a presentation layer."""
    def lineup_to_dict(lineup: Lineup) -> dict:
        return {
            "team_id": lineup.team_id,
            "batters": [b.id for b in lineup.batters],
            "pitcher": lineup.pitcher.id if lineup.pitcher else None,
        }

    return {
        "home": session.fixture.home,
        "away": session.fixture.away,
        "phase": session.phase.value,
        "inning": session.inning,
        "half": session.half.value,
        "outs": session.outs,
        "bases": session.bases.to_list(),
        "score": {"home": session.home_score, "away": session.away_score},
        "batting_index": {"home": session.home_batting_index, "away": session.away_batting_index},
        "is_postseason": session.is_postseason,
        "forfeit": session.forfeit,
        "home_lineup": lineup_to_dict(session.home_lineup),
        "away_lineup": lineup_to_dict(session.away_lineup),
        "player_stat_deltas": {pid: d.model_dump() for pid, d in session.deltas.items()},
    }
