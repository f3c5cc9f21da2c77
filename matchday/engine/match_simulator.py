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
"""Minute-by-minute match simulator built on the event engine."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field, replace
from typing import List, Optional

from matchday.engine.config import ENGINE_CONFIG
from matchday.engine.event_engine import EventEngine
from matchday.engine.events import MatchEvent
from matchday.engine.state import BallPosition, Bookings, Lineups, MatchState, opponent
from matchday.models.team import Team
from matchday.utils.debug import MatchDebugger


@dataclass
class MatchConfig:
    """Per-match settings handed to :class:`MatchSimulator`.

    Parameters
    ----------
    home_team : Team
        Home squad; its starters take the pitch.
    away_team : Team
        Away squad; its starters take the pitch.
    match_duration : int, default=90
        Nominal length of the match in minutes, kept for reporting. The
        phase minutes always come from :data:`ENGINE_CONFIG` (45, 46, and 90).
    events_per_minute : int, default=3
        Upper bound on event draws per minute; each minute draws between 1
        and this many. Values below 1 silently thin out or stop event draws.
    seed : int | None, optional
        Seed for a dedicated random source; ignored when ``rng`` is given.
    rng : Random | None, optional
        Random source shared by the simulator, engine, and generators.
    debugger : MatchDebugger | None, optional
        Receives every applied event and phase change.
    """

    home_team: Team
    away_team: Team
    match_duration: int = field(default_factory=lambda: ENGINE_CONFIG.simulation.match_duration)
    events_per_minute: int = field(default_factory=lambda: ENGINE_CONFIG.simulation.events_per_minute)
    seed: Optional[int] = None
    rng: Optional[random.Random] = None
    debugger: Optional[MatchDebugger] = None


@dataclass(frozen=True)
class TeamSplit:
    """A home/away pair of numbers.

    Parameters
    ----------
    home : int
        Value for the home side.
    away : int
        Value for the away side.
    """

    home: int
    away: int


@dataclass(frozen=True)
class CardCounts:
    """Cards shown to each side.

    Parameters
    ----------
    yellow : TeamSplit
        Yellow cards per side.
    red : TeamSplit
        Red cards per side.
    """

    yellow: TeamSplit
    red: TeamSplit


@dataclass(frozen=True)
class MatchStatistics:
    """End-of-match totals derived from the event log.

    Parameters
    ----------
    possession : TeamSplit
        Share of logged events credited to each side, in percent; always sums to 100.
    shots : TeamSplit
        Shots plus goals per side.
    shots_on_target : TeamSplit
        Goals per side plus the saves made by the opponent.
    corners : TeamSplit
        Corner events per side.
    fouls : TeamSplit
        Foul events per side.
    cards : CardCounts
        Bookings per side.
    """

    possession: TeamSplit
    shots: TeamSplit
    shots_on_target: TeamSplit
    corners: TeamSplit
    fouls: TeamSplit
    cards: CardCounts


@dataclass(frozen=True)
class MatchResult:
    """Terminal snapshot returned by :meth:`MatchSimulator.simulate`.

    Parameters
    ----------
    events : List[MatchEvent]
        Every applied event, chained follow-ups included, in order.
    final_state : MatchState
        State at full time.
    statistics : MatchStatistics
        Totals derived from ``events``.
    """

    events: List[MatchEvent]
    final_state: MatchState
    statistics: MatchStatistics


class MatchSimulator:
    """Drive a match from kickoff to full time one simulated minute at a time.

    Each simulator owns its engine, event log, and state, so separate
    instances never share anything mutable.

    Parameters
    ----------
    config : MatchConfig
        Teams and tuning for the match.
    """

    def __init__(self, config: MatchConfig) -> None:
        """Wire the engine and build the kickoff state.

        Parameters
        ----------
        config : MatchConfig
            Teams and tuning for the match.
        """
        self.config = config
        self.rng = config.rng if config.rng is not None else random.Random(config.seed)
        self.debugger = config.debugger
        self.event_engine = EventEngine(self.rng)
        self.event_engine.register_default_generators()
        self._events: List[MatchEvent] = []
        self._current_state = self._create_initial_state()

    def simulate(self) -> MatchResult:
        """Play a full match from a fresh kickoff state.

        Calling this again discards the previous log and starts over.

        Returns
        -------
        MatchResult
            Event log, final state, and statistics.
        """
        self._reset_simulation()

        while self._current_state.phase != "full_time":
            self._simulate_minute()
            self._advance_time()

        return MatchResult(
            events=list(self._events),
            final_state=replace(self._current_state),
            statistics=self._calculate_statistics(),
        )

    def get_current_state(self) -> MatchState:
        """Return a copy of the current state.

        Returns
        -------
        MatchState
            The latest state.
        """
        return replace(self._current_state)

    def get_events(self) -> List[MatchEvent]:
        """Return a copy of the event log.

        Returns
        -------
        List[MatchEvent]
            Applied events in order.
        """
        return list(self._events)

    def _create_initial_state(self) -> MatchState:
        """Build the kickoff state with a random side starting in possession.

        Returns
        -------
        MatchState
            Minute zero of the first half.
        """
        home_team = replace(self.config.home_team)
        away_team = replace(self.config.away_team)
        return MatchState(
            minute=0,
            home_score=0,
            away_score=0,
            possession="home" if self.rng.random() < 0.5 else "away",
            ball_position=_kickoff_position(),
            phase="first_half",
            home_team=home_team,
            away_team=away_team,
            current_players=Lineups(home=tuple(home_team.starters), away=tuple(away_team.starters)),
            bookings=Bookings(),
        )

    def _reset_simulation(self) -> None:
        """Clear the log and return to the kickoff state."""
        self._events = []
        self._current_state = self._create_initial_state()

    def _simulate_minute(self) -> None:
        """Draw and apply this minute's events."""
        events_this_minute = math.floor(self.rng.random() * self.config.events_per_minute) + 1

        for _ in range(events_this_minute):
            event = self.event_engine.generate_event(self._current_state)
            if event is not None:
                self._process_event(event)

    def _process_event(self, event: MatchEvent) -> None:
        """Append ``event``, adopt its state, then do the same for its chain.

        Parameters
        ----------
        event : MatchEvent
            Event to apply.
        """
        self._events.append(event)
        self._current_state = event.resulting_state
        if self.debugger:
            self.debugger.log_match_event(event.minute, event.type, event.description, event.team)

        if event.chained_event is not None:
            self._process_event(event.chained_event)

    def _advance_time(self) -> None:
        """Tick the clock by one minute and handle phase boundaries."""
        state = self._current_state.evolve(minute=self._current_state.minute + 1)
        self._current_state = state
        clock = ENGINE_CONFIG.simulation

        if state.phase == "first_half" and state.minute >= clock.half_time_minute:
            self._enter_phase(self._create_half_time_event())
        elif state.phase == "half_time" and state.minute >= clock.second_half_minute:
            self._enter_phase(self._create_second_half_event())
        elif state.phase == "second_half" and state.minute >= clock.full_time_minute:
            self._enter_phase(self._create_full_time_event())

    def _enter_phase(self, event: MatchEvent) -> None:
        """Record a phase event and adopt its state.

        Parameters
        ----------
        event : MatchEvent
            Half time, second-half kickoff, or full time event.
        """
        self._events.append(event)
        self._current_state = event.resulting_state
        if self.debugger:
            self.debugger.log_phase(event.minute, event.resulting_state.phase, event.resulting_state.score_line)

    def _create_half_time_event(self) -> MatchEvent:
        """Build the half time whistle.

        Returns
        -------
        MatchEvent
            A ``half_time`` event credited to the home side.
        """
        new_state = self._current_state.evolve(phase="half_time")
        return MatchEvent(
            id=self.event_engine.generate_id(),
            type="half_time",
            minute=new_state.minute,
            team="home",
            description="Half Time",
            resulting_state=new_state,
        )

    def _create_second_half_event(self) -> MatchEvent:
        """Build the second-half kickoff, taken by the side that did not start in possession.

        Returns
        -------
        MatchEvent
            A ``kickoff`` event credited to the new side in possession.
        """
        new_state = self._current_state.evolve(
            phase="second_half",
            possession=opponent(self._current_state.possession),
            ball_position=_kickoff_position(),
        )
        return MatchEvent(
            id=self.event_engine.generate_id(),
            type="kickoff",
            minute=new_state.minute,
            team=new_state.possession,
            description="Second Half begins",
            resulting_state=new_state,
        )

    def _create_full_time_event(self) -> MatchEvent:
        """Build the final whistle.

        Returns
        -------
        MatchEvent
            A ``full_time`` event whose description carries the score line.
        """
        new_state = self._current_state.evolve(phase="full_time")
        return MatchEvent(
            id=self.event_engine.generate_id(),
            type="full_time",
            minute=new_state.minute,
            team="home",
            description=f"Full Time: {new_state.score_line}",
            resulting_state=new_state,
        )

    def _calculate_statistics(self) -> MatchStatistics:
        """Derive totals from the event log.

        Returns
        -------
        MatchStatistics
            Possession, shots, shots on target, corners, fouls, and cards.
        """
        home_events = [e for e in self._events if e.team == "home"]
        away_events = [e for e in self._events if e.team == "away"]

        def count(events: List[MatchEvent], *types: str) -> int:
            return sum(1 for e in events if e.type in types)

        if self._events:
            home_possession = math.floor(len(home_events) / len(self._events) * 100 + 0.5)
        else:
            home_possession = 50

        bookings = self._current_state.bookings
        return MatchStatistics(
            possession=TeamSplit(home_possession, 100 - home_possession),
            shots=TeamSplit(count(home_events, "shot", "goal"), count(away_events, "shot", "goal")),
            shots_on_target=TeamSplit(
                count(home_events, "goal") + count(away_events, "save"),
                count(away_events, "goal") + count(home_events, "save"),
            ),
            corners=TeamSplit(count(home_events, "corner"), count(away_events, "corner")),
            fouls=TeamSplit(count(home_events, "foul"), count(away_events, "foul")),
            cards=CardCounts(
                yellow=TeamSplit(
                    sum(1 for b in bookings.yellow if b.team == "home"),
                    sum(1 for b in bookings.yellow if b.team == "away"),
                ),
                red=TeamSplit(
                    sum(1 for b in bookings.red if b.team == "home"),
                    sum(1 for b in bookings.red if b.team == "away"),
                ),
            ),
        )


def _kickoff_position() -> BallPosition:
    """Return the configured kickoff ball position.

    Returns
    -------
    BallPosition
        Centre-circle position from :data:`ENGINE_CONFIG`.
    """
    cfg = ENGINE_CONFIG.simulation
    return BallPosition(cfg.kickoff_zone, cfg.kickoff_side)


def create_match_simulator(
    home_team: Team,
    away_team: Team,
    *,
    match_duration: Optional[int] = None,
    events_per_minute: Optional[int] = None,
    seed: Optional[int] = None,
    debugger: Optional[MatchDebugger] = None,
) -> MatchSimulator:
    """Build a simulator, filling unset options from :data:`ENGINE_CONFIG`.

    Parameters
    ----------
    home_team : Team
        Home squad.
    away_team : Team
        Away squad.
    match_duration : int | None, optional
        Match length in minutes.
    events_per_minute : int | None, optional
        Upper bound on event draws per minute.
    seed : int | None, optional
        Seed for reproducible matches.
    debugger : MatchDebugger | None, optional
        Telemetry sink for the match.

    Returns
    -------
    MatchSimulator
        A simulator ready for :meth:`MatchSimulator.simulate`.
    """
    sim_cfg = ENGINE_CONFIG.simulation
    config = MatchConfig(
        home_team=home_team,
        away_team=away_team,
        match_duration=match_duration if match_duration is not None else sim_cfg.match_duration,
        events_per_minute=events_per_minute if events_per_minute is not None else sim_cfg.events_per_minute,
        seed=seed,
        debugger=debugger,
    )
    return MatchSimulator(config)
