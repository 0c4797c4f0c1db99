"""Fold per-game stat deltas into season totals."""

from __future__ import annotations

import logging
from typing import Iterable

from models import BATTING_KEYS, FIELDING_KEYS, PITCHING_KEYS, Player, PlayerStatDelta, Position, Stats

logger = logging.getLogger(__name__)


def reset_stats() -> Stats:
    return Stats()


def apply_stat_deltas(players: dict[str, Player], deltas: Iterable[PlayerStatDelta]) -> dict[str, Player]:
    """Return a new players map with *deltas* added to season stats.

    Batting and fielding counters apply to everyone. Pitching counters are
    only kept for players listed at pitcher. The input map is not modified.
    """
    updated = dict(players)
    for delta in deltas:
        player = updated.get(delta.player_id)
        if player is None:
            logger.warning("Stat delta for unknown player %s skipped", delta.player_id)
            continue

        keys = BATTING_KEYS + FIELDING_KEYS
        if player.position is Position.P:
            keys += PITCHING_KEYS
        totals = player.stats.model_dump(exclude={"avg", "baa"})
        for key in keys:
            totals[key] += getattr(delta, key)
        updated[player.id] = player.model_copy(update={"stats": Stats(**totals)})
    return updated
