# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Command line entry point for the franchise simulator.

Usage:
    uv run franchise.py new --key me --seed 7
    uv run franchise.py sim --key me --games 10
    uv run franchise.py season --key me
    uv run franchise.py standings --key me
"""

from __future__ import annotations

import argparse
import logging
import random
import sys

from config import get_data_dir, get_log_level, get_seed
from data.store import LeagueStore, PersistenceError
from league import create_league
from models import GameResult, LeagueState
from season import simulate_next_game, simulate_season, standings_order
from simulation import SimulationEngine

DEFAULT_KEY = "default"


def format_result(state: LeagueState, result: GameResult) -> str:
    home = state.teams[result.home].name
    away = state.teams[result.away].name
    line = f"{away} {result.away_score} - {result.home_score} {home}"
    if result.forfeit:
        line += " (forfeit)"
    elif result.innings > 6:
        line += f" ({result.innings} inn)"
    return line


def format_standings(state: LeagueState) -> str:
    lines = [f"Year {state.year} standings", f"{'Team':<24}{'W':>4}{'L':>4}"]
    for entry in standings_order(state):
        name = state.teams[entry.team_id].name if entry.team_id in state.teams else entry.team_id
        lines.append(f"{name:<24}{entry.wins:>4}{entry.losses:>4}")
    played = state.game_index
    lines.append(f"Games played: {played}/{len(state.schedule)}")
    if state.is_postseason and state.postseason_series:
        lines.append("Postseason in progress: " + ", ".join(
            f"{state.teams[t].name} {w}" for t, w in state.postseason_series_scores.items()
        ))
    return "\n".join(lines)


def _load(store: LeagueStore, key: str) -> LeagueState | None:
    state = store.load(key)
    if state is None:
        print(f"Error: no league saved under key {key!r}. Run 'new' first.", file=sys.stderr)
    return state


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Simulate a multi-season baseball franchise."
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--key", default=DEFAULT_KEY,
        help=f"League document key (default: {DEFAULT_KEY!r}).",
    )
    common.add_argument(
        "--seed", type=int, default=None,
        help="Random seed (default: FRANCHISE_SEED or random).",
    )
    common.add_argument(
        "--data-dir", default=None,
        help="Directory league documents are stored in.",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("new", parents=[common], help="Create a new league.")
    sim = sub.add_parser("sim", parents=[common], help="Simulate the next games.")
    sim.add_argument(
        "--games", type=int, default=1, metavar="N",
        help="Number of league steps to simulate (default: 1).",
    )
    sub.add_parser("season", parents=[common], help="Play through the championship.")
    sub.add_parser("standings", parents=[common], help="Show the current standings.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_log_level(),
        format="%(levelname)s: %(message)s",
    )

    seed = args.seed if args.seed is not None else get_seed()
    store = LeagueStore(args.data_dir or get_data_dir())

    try:
        if args.command == "new":
            state = create_league(random.Random(seed))
            store.save(args.key, state)
            print(f"Created league {args.key!r}: {len(state.teams)} teams, "
                  f"{len(state.schedule)} games scheduled.")
            return 0

        state = _load(store, args.key)
        if state is None:
            return 1

        if args.command == "standings":
            print(format_standings(state))
            return 0

        engine = SimulationEngine(seed)
        if args.command == "sim":
            if args.games < 1:
                print("Error: --games must be at least 1.", file=sys.stderr)
                return 1
            last_result = None
            for _ in range(args.games):
                before = state
                state, result = simulate_next_game(state, engine)
                if result is not None:
                    last_result = result
                    print(format_result(before, result))
                new_lines = state.game_log if state.year != before.year else state.game_log[len(before.game_log):]
                for line in new_lines:
                    print(line)
            extra = {"last_game_result": last_result.model_dump(mode="json")} if last_result else None
            store.save(args.key, state, extra=extra)
            return 0

        if args.command == "season":
            year = state.year
            state, results, champion = simulate_season(state, engine)
            print(f"Year {year}: {len(results)} games played.")
            if champion:
                print(f"Champions: {state.teams[champion].name}")
            extra = {"last_game_result": results[-1].model_dump(mode="json")} if results else None
            store.save(args.key, state, extra=extra)
            return 0
    except PersistenceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())
