# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Fielding resolution for batted balls.

The field is split into angular zones measured from the third-base foul
line (0 degrees) to the first-base foul line (90 degrees). Infield and
outfield zones each cover the whole range. A batted ball is assigned to a
fielder whose zone contains its angle; that fielder may then commit an
error (the hit grows by one base) or make an exceptional play (the hit
shrinks by one base).
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Sequence

from models import Outcome, Player, Position

logger = logging.getLogger(__name__)

ERROR_BASE_PROBABILITY = 0.10  # error chance at fielding 0
EXCEPTIONAL_PLAY_BASE_PROBABILITY = 0.03  # exceptional-play chance at fielding 100
HR_ROBBERY_CHANCE = 0.02  # share of home runs that are catchable at the wall
OUTFIELD_SPEED_WEIGHT = 0.5
INFIELD_SPEED_WEIGHT = 0.2

FIELDER_ZONES: dict[Position, tuple[float, float]] = {
    Position.THIRD: (0.0, 21.25),
    Position.SS: (21.25, 42.5),
    Position.P: (42.5, 47.5),
    Position.SECOND: (47.5, 68.75),
    Position.FIRST: (68.75, 90.0),
    Position.LF: (0.0, 30.0),
    Position.CF: (30.0, 60.0),
    Position.RF: (60.0, 90.0),
}


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldingCredit:
    """Fielding stat changes for the one player involved in a play."""
    player_id: str | None = None
    errors: int = 0
    exceptional_plays: int = 0
    plays_attempted: int = 0
    bases_robbed: int = 0

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "errors": self.errors,
            "exceptional_plays": self.exceptional_plays,
            "plays_attempted": self.plays_attempted,
            "bases_robbed": self.bases_robbed,
        }


NO_CREDIT = FieldingCredit()


@dataclass(frozen=True)
class FieldingResult:
    outcome: Outcome
    credit: FieldingCredit = NO_CREDIT
    description: str = ""


# ---------------------------------------------------------------------------
# Zone lookup
# ---------------------------------------------------------------------------

def _in_zone(player: Player, angle: float) -> bool:
    zone = FIELDER_ZONES.get(player.position)
    if zone is None:
        return False
    low, high = zone
    return low <= angle <= high


def eligible_fielders(angle: float, defenders: Sequence[Player], outcome: Outcome) -> list[Player]:
    """Return the defenders who can play a ball hit at *angle*.

    Catchers never field batted balls. Singles and outs can be played by
    anyone whose zone covers the angle; extra-base hits only by outfielders.
    """
    if outcome in (Outcome.SINGLE, Outcome.OUT):
        return [p for p in defenders if p.position is not Position.C and _in_zone(p, angle)]
    if outcome in (Outcome.DOUBLE, Outcome.TRIPLE, Outcome.HOME_RUN):
        return [p for p in defenders if p.position.is_outfield and _in_zone(p, angle)]
    return []


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def _resolve_home_run(angle: float, defenders: Sequence[Player], rng: random.Random) -> FieldingResult:
    if rng.random() >= HR_ROBBERY_CHANCE:
        return FieldingResult(Outcome.HOME_RUN, description="Home run!")

    outfielders = eligible_fielders(angle, defenders, Outcome.HOME_RUN)
    if not outfielders:
        return FieldingResult(Outcome.HOME_RUN, description="Home run!")

    fielder = outfielders[0]
    robbery_chance = fielder.ratings.fielding / 100 * 0.8 + fielder.ratings.speed / 100 * 0.2
    if rng.random() < robbery_chance:
        return FieldingResult(
            Outcome.OUT,
            FieldingCredit(player_id=fielder.id, plays_attempted=1, exceptional_plays=1, bases_robbed=4),
            f"HR robbed by {fielder.name}!",
        )
    return FieldingResult(
        Outcome.HOME_RUN,
        FieldingCredit(player_id=fielder.id, plays_attempted=1),
        "HR ball hit deep!",
    )


def resolve_fielding(outcome: Outcome, angle: float, defenders: Sequence[Player],
                     rng: random.Random) -> FieldingResult:
    """Assign a batted ball to a fielder and apply error / exceptional-play modifiers.

    Strikeouts and walks never reach a fielder and pass through unchanged.
    At most one modifier applies per play; the error roll comes first.
    """
    if outcome is Outcome.HOME_RUN:
        return _resolve_home_run(angle, defenders, rng)
    if outcome not in (Outcome.OUT, Outcome.SINGLE, Outcome.DOUBLE, Outcome.TRIPLE):
        return FieldingResult(outcome)

    candidates = eligible_fielders(angle, defenders, outcome)
    if not candidates:
        logger.warning(
            "No eligible fielders for angle %.1f and outcome %s; falling back to any non-catcher",
            angle, outcome.value,
        )
        candidates = [p for p in defenders if p.position is not Position.C]
    if not candidates:
        return FieldingResult(outcome)

    fielder = rng.choice(candidates)
    ratings = fielder.ratings

    error_chance = (100 - ratings.fielding) / 100 * ERROR_BASE_PROBABILITY
    if rng.random() < error_chance:
        new_outcome = outcome.upgraded()
        description = f"Error by {fielder.name}"
        if new_outcome is not outcome:
            description += f" makes it a {new_outcome.value.replace('_', ' ').title()}!"
        return FieldingResult(
            new_outcome,
            FieldingCredit(player_id=fielder.id, plays_attempted=1, errors=1),
            description,
        )

    speed_weight = OUTFIELD_SPEED_WEIGHT if fielder.position.is_outfield else INFIELD_SPEED_WEIGHT
    exceptional_chance = (
        ratings.fielding / 100 * EXCEPTIONAL_PLAY_BASE_PROBABILITY + ratings.speed / 100 * speed_weight
    )
    if rng.random() < exceptional_chance:
        new_outcome = outcome.downgraded()
        robbed = 1 if new_outcome is not outcome else 0
        description = f"Exceptional play by {fielder.name}"
        if robbed:
            description += " takes away the hit!" if new_outcome is Outcome.OUT else " holds the runner!"
        return FieldingResult(
            new_outcome,
            FieldingCredit(player_id=fielder.id, plays_attempted=1, exceptional_plays=1, bases_robbed=robbed),
            description,
        )

    return FieldingResult(outcome, FieldingCredit(player_id=fielder.id, plays_attempted=1))
