# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Player rating generation and overall-rating helpers.

Ratings live on a 30-99 scale. Each applicable attribute is drawn from a
normal distribution (mean 75, sd 10); attributes a role does not use are
pinned to the 30 floor.
"""

from __future__ import annotations

import random

from models import RATING_MAX, RATING_MIN, Hand, Ratings

RATING_MEAN = 75.0
RATING_STDDEV = 10.0

PITCHER_RIGHT_SHARE = 0.75
BATTER_RIGHT_SHARE = 0.65
BATTER_LEFT_SHARE = 0.25

FIRST_NAMES = [
    "Jake", "Mike", "Chris", "Matt", "Alex", "David", "Juan", "Jose", "Ken", "Ryu",
    "Bob", "Steve", "Tony", "Peter", "Leo", "Sam", "Ben", "Charlie", "Daniel", "Ethan",
    "Frank", "George", "Henry", "Isaac", "Jack",
]
LAST_NAMES = [
    "Smith", "Jones", "Miller", "Garcia", "Rodriguez", "Sato", "Suzuki", "Tanaka",
    "Kim", "Lee", "Stark", "Parker", "Banner", "Williams", "Brown", "Davis", "Wilson",
    "Moore", "Taylor", "Anderson", "Thomas", "Jackson", "White", "Harris",
]


def clamp_rating(value: float) -> int:
    """Round and clamp a raw value to the rating scale."""
    return min(RATING_MAX, max(RATING_MIN, round(value)))


def _sample(rng: random.Random) -> int:
    return clamp_rating(rng.gauss(RATING_MEAN, RATING_STDDEV))


def _handedness(is_pitcher: bool, rng: random.Random) -> Hand:
    roll = rng.random()
    if is_pitcher:
        return Hand.R if roll < PITCHER_RIGHT_SHARE else Hand.L
    if roll < BATTER_RIGHT_SHARE:
        return Hand.R
    if roll < BATTER_RIGHT_SHARE + BATTER_LEFT_SHARE:
        return Hand.L
    return Hand.S


def generate_ratings(is_pitcher: bool, rng: random.Random | None = None) -> Ratings:
    """Generate a fresh set of ratings for a pitcher or a position player."""
    rng = rng or random.Random()
    values = {
        "potential": _sample(rng),
        "injury": _sample(rng),
    }
    if is_pitcher:
        values.update(
            accuracy=_sample(rng),
            heat=_sample(rng),
            movement=_sample(rng),
            contact=RATING_MIN,
            power=RATING_MIN,
            eye=RATING_MIN,
        )
    else:
        values.update(
            contact=_sample(rng),
            power=_sample(rng),
            eye=_sample(rng),
            accuracy=RATING_MIN,
            heat=RATING_MIN,
            movement=RATING_MIN,
        )
    # Everyone runs and fields
    values["speed"] = _sample(rng)
    values["fielding"] = _sample(rng)
    return Ratings(**values, handedness=_handedness(is_pitcher, rng))


def overall_batter_rating(ratings: Ratings) -> float:
    """Weighted offensive score; higher is better."""
    return ratings.contact * 0.4 + ratings.power * 0.3 + ratings.eye * 0.3


def overall_pitcher_rating(ratings: Ratings) -> float:
    """Weighted pitching score used for ranking; lower sorts first."""
    return ratings.accuracy * 0.4 + ratings.heat * 0.3 + ratings.movement * 0.3


def generate_player_name(rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
