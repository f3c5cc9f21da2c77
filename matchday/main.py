# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Command-line entry point for simulated matches and fixture runs."""
import argparse
import asyncio
import random
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from matchday.engine.match_simulator import MatchResult, create_match_simulator
from matchday.models.team import Team
from matchday.scheduling.event_bus import EventBus
from matchday.scheduling.timeline import Moment, Timeline
from matchday.utils.debug import MatchDebugger
from matchday.utils.generator import PlayerGenerator, generate_team
from matchday.utils.roster import load_teams_from_json

KEY_EVENT_TYPES = ("goal", "save", "half_time", "full_time")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns
    -------
    argparse.ArgumentParser
        Parser accepting roster, seed, density, debug, and fixture options.
    """
    parser = argparse.ArgumentParser(description="Simulate football matches minute by minute.")
    parser.add_argument("--roster", type=Path, default=Path("data/teams.json"), help="JSON roster with home/away teams")
    parser.add_argument("--events-per-minute", type=int, default=None, help="Upper bound on events drawn per minute")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible matches")
    parser.add_argument("--debug-dir", type=str, default=None, help="Directory for match debug logs")
    parser.add_argument(
        "--fixtures",
        type=int,
        default=0,
        help="Schedule this many weekly fixtures on a timeline instead of a single match",
    )
    return parser


def load_or_generate_teams(roster: Path, seed: Optional[int] = None) -> Tuple[Team, Team]:
    """Load teams from ``roster`` or fall back to generated squads.

    Parameters
    ----------
    roster : Path
        JSON roster file to try first.
    seed : int | None
        Seed for generated squads.

    Returns
    -------
    Tuple[Team, Team]
        ``(home, away)`` teams.
    """
    if roster.exists():
        try:
            return load_teams_from_json(roster)
        except (KeyError, ValueError) as e:
            print(f"Error loading teams from {roster}: {e}")
            print("Falling back to generated teams...")
    else:
        print(f"No roster file found at {roster}")
        print("Using generated teams...")

    generator = PlayerGenerator(rng=random.Random(seed))
    home = generate_team("home", formation="4-3-3", generator=generator)
    away = generate_team("away", formation="4-4-2", generator=generator)
    return home, away


def print_match_report(result: MatchResult) -> None:
    """Print the score, headline statistics, and key events of a match.

    Parameters
    ----------
    result : MatchResult
        Completed match to describe.
    """
    state = result.final_state
    stats = result.statistics
    home, away = state.home_team.name, state.away_team.name

    print(f"\nFinal Score: {state.score_line}")
    print("\nMatch Statistics:")
    print(f"Possession: {home} {stats.possession.home}% - {stats.possession.away}% {away}")
    print(f"Shots: {home} {stats.shots.home} - {stats.shots.away} {away}")
    print(f"Shots on Target: {home} {stats.shots_on_target.home} - {stats.shots_on_target.away} {away}")

    print("\nKey Events:")
    for event in result.events:
        if event.type in KEY_EVENT_TYPES:
            print(f"{event.minute}' - {event.description}")

    print(f"\nTotal Events Generated: {len(result.events)}")


def schedule_fixtures(
    timeline: Timeline,
    bus: EventBus,
    home: Team,
    away: Team,
    count: int,
    args: argparse.Namespace,
    debugger: Optional[MatchDebugger] = None,
) -> List[Moment]:
    """Register ``count`` weekly fixtures that alternate home advantage.

    Each fixture's callback simulates the match and emits ``"match_completed"``
    on ``bus`` with the :class:`MatchResult`.

    Parameters
    ----------
    timeline : Timeline
        Calendar to register the fixtures on.
    bus : EventBus
        Bus that receives completed results.
    home : Team
        Team at home in the first fixture.
    away : Team
        Team away in the first fixture.
    count : int
        Number of fixtures.
    args : argparse.Namespace
        Parsed CLI options (seed and event density).
    debugger : MatchDebugger | None
        Telemetry sink shared by every fixture.

    Returns
    -------
    List[Moment]
        The registered fixture moments.
    """
    start = timeline.get_current_date()
    moments: List[Moment] = []

    for index in range(count):
        fixture_home, fixture_away = (home, away) if index % 2 == 0 else (away, home)
        seed = None if args.seed is None else args.seed + index

        def play(h: Team = fixture_home, a: Team = fixture_away, s: Optional[int] = seed) -> None:
            simulator = create_match_simulator(
                h, a, events_per_minute=args.events_per_minute, seed=s, debugger=debugger
            )
            bus.emit("match_completed", simulator.simulate())

        moment = Moment(
            id=f"fixture-{index + 1}",
            name=f"{fixture_home.name} vs {fixture_away.name}",
            date=start + timedelta(days=7 * (index + 1)),
            callback=play,
            description=f"Matchweek {index + 1}",
            tags=["fixture"],
        )
        timeline.register_moment(moment)
        moments.append(moment)

    return moments


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a single match or a run of weekly fixtures.

    Parameters
    ----------
    argv : Sequence[str] | None
        Command-line arguments; ``sys.argv`` is used when ``None``.

    Returns
    -------
    int
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    home_team, away_team = load_or_generate_teams(args.roster, args.seed)
    debugger = MatchDebugger(args.debug_dir) if args.debug_dir else None

    try:
        if args.fixtures <= 0:
            simulator = create_match_simulator(
                home_team,
                away_team,
                events_per_minute=args.events_per_minute,
                seed=args.seed,
                debugger=debugger,
            )
            print(f"{home_team.name} vs {away_team.name}")
            print_match_report(simulator.simulate())
            return 0

        timeline = Timeline(date.today(), debugger=debugger)
        bus = EventBus(debugger=debugger)
        bus.on("match_completed", print_match_report)
        schedule_fixtures(timeline, bus, home_team, away_team, args.fixtures, args, debugger)

        due = timeline.advance_time(7 * args.fixtures)
        failed = asyncio.run(timeline.fire_moments(due))
        failed_ids = {m.id for m in failed}
        timeline.resolve_moments(m for m in due if m.id not in failed_ids)
        print(f"\nFixtures played: {len(due) - len(failed)} of {len(due)}")
        return 1 if failed else 0
    finally:
        if debugger:
            debugger.close()


if __name__ == "__main__":
    raise SystemExit(main())
