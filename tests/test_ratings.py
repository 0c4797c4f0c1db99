# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0", "pytest>=7.0"]
# ///
"""Tests for player rating generation.

Covers:
  1. Every generated attribute stays within [30, 99]
  2. Attributes a role does not use are pinned to 30
  3. Handedness thresholds per role (pitchers never switch-hit)
  4. Overall batter / pitcher rating formulas
  5. Seeded generation is reproducible
"""

import random
import sys
from pathlib import Path

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from models import RATING_MAX, RATING_MIN, Hand, Ratings
from ratings import (
    FIRST_NAMES,
    LAST_NAMES,
    clamp_rating,
    generate_player_name,
    generate_ratings,
    overall_batter_rating,
    overall_pitcher_rating,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class FixedRng:
    """Returns the mean for every gauss draw and a fixed uniform draw."""

    def __init__(self, uniform: float):
        self.uniform = uniform

    def gauss(self, mu, sigma):
        return mu

    def random(self):
        return self.uniform


ALL_KEYS = ("potential", "injury", "contact", "power", "eye", "speed",
            "fielding", "accuracy", "heat", "movement")


# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("is_pitcher", [True, False])
def test_ratings_within_bounds(is_pitcher):
    rng = random.Random(1)
    for _ in range(500):
        ratings = generate_ratings(is_pitcher, rng)
        for key in ALL_KEYS:
            assert RATING_MIN <= getattr(ratings, key) <= RATING_MAX


def test_pitcher_batting_attributes_pinned_to_floor():
    rng = random.Random(2)
    for _ in range(100):
        ratings = generate_ratings(True, rng)
        assert (ratings.contact, ratings.power, ratings.eye) == (30, 30, 30)


def test_batter_pitching_attributes_pinned_to_floor():
    rng = random.Random(3)
    for _ in range(100):
        ratings = generate_ratings(False, rng)
        assert (ratings.accuracy, ratings.heat, ratings.movement) == (30, 30, 30)


def test_mean_draw_gives_75_for_applicable_attributes():
    ratings = generate_ratings(False, FixedRng(0.1))
    assert ratings.contact == ratings.power == ratings.eye == 75
    assert ratings.speed == ratings.fielding == ratings.potential == ratings.injury == 75


def test_clamp_rating():
    assert clamp_rating(120) == 99
    assert clamp_rating(-4) == 30
    assert clamp_rating(75.4) == 75
    assert clamp_rating(75.6) == 76


# ---------------------------------------------------------------------------
# Handedness
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("roll, expected", [(0.1, Hand.R), (0.74, Hand.R), (0.8, Hand.L), (0.99, Hand.L)])
def test_pitcher_handedness(roll, expected):
    assert generate_ratings(True, FixedRng(roll)).handedness is expected


@pytest.mark.parametrize("roll, expected", [(0.1, Hand.R), (0.7, Hand.L), (0.89, Hand.L), (0.95, Hand.S)])
def test_batter_handedness(roll, expected):
    assert generate_ratings(False, FixedRng(roll)).handedness is expected


def test_pitchers_never_switch_hit():
    rng = random.Random(4)
    hands = {generate_ratings(True, rng).handedness for _ in range(300)}
    assert Hand.S not in hands


# ---------------------------------------------------------------------------
# Overall ratings
# ---------------------------------------------------------------------------

def test_overall_batter_rating():
    ratings = Ratings(contact=80, power=60, eye=70)
    assert overall_batter_rating(ratings) == pytest.approx(80 * 0.4 + 60 * 0.3 + 70 * 0.3)


def test_overall_pitcher_rating():
    ratings = Ratings(accuracy=90, heat=50, movement=40)
    assert overall_pitcher_rating(ratings) == pytest.approx(90 * 0.4 + 50 * 0.3 + 40 * 0.3)


def test_ratings_model_rejects_out_of_range():
    with pytest.raises(ValueError):
        Ratings(contact=100)
    with pytest.raises(ValueError):
        Ratings(speed=29)


# ---------------------------------------------------------------------------
# Names and determinism
# ---------------------------------------------------------------------------

def test_player_name_from_pools():
    first, last = generate_player_name(random.Random(5)).split(" ")
    assert first in FIRST_NAMES
    assert last in LAST_NAMES


def test_seeded_generation_is_reproducible():
    a = [generate_ratings(i % 2 == 0, random.Random(9)) for i in range(4)]
    b = [generate_ratings(i % 2 == 0, random.Random(9)) for i in range(4)]
    assert a == b
