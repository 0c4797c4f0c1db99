"""Round-robin schedule generation."""

from __future__ import annotations

import logging
import random
from itertools import combinations
from typing import Sequence

from config import GAMES_PER_MATCHUP
from models import ScheduleEntry

logger = logging.getLogger(__name__)


def generate_schedule(team_ids: Sequence[str], rng: random.Random | None = None) -> list[ScheduleEntry]:
    """Build a shuffled schedule where every pair of teams meets four times.

    Each pair plays half its games in either park, so a league of N teams
    yields ``4 * C(N, 2)`` entries.
    """
    rng = rng or random.Random()
    if len(team_ids) < 2:
        logger.warning("Cannot build a schedule for %d team(s)", len(team_ids))
        return []

    schedule: list[ScheduleEntry] = []
    for first, second in combinations(team_ids, 2):
        for _ in range(GAMES_PER_MATCHUP // 2):
            schedule.append(ScheduleEntry(home=first, away=second))
            schedule.append(ScheduleEntry(home=second, away=first))
    rng.shuffle(schedule)
    return schedule
