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
"""Event domain models for the match engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Literal, Optional, Tuple

from matchday.engine.state import MatchState, Side
from matchday.models.player import Player

EventType = Literal[
    "kickoff",
    "pass",
    "dribble",
    "shot",
    "goal",
    "save",
    "corner",
    "throw_in",
    "free_kick",
    "penalty",
    "offside",
    "foul",
    "yellow_card",
    "red_card",
    "substitution",
    "half_time",
    "full_time",
]


@dataclass
class MatchEvent:
    """Snapshot of a noteworthy moment during a simulation.

    Parameters
    ----------
    id : str
        Engine-scoped identifier of the form ``"event-<n>"``.
    type : str
        Category of event (for example ``"goal"`` or ``"shot"``).
    minute : int
        Match minute when the event occurred.
    team : str
        Side the event is credited to.
    description : str
        Human-readable summary of what happened.
    resulting_state : MatchState
        Authoritative state after the event.
    player_id : str | None, optional
        Identifier of the player involved, when there is one.
    chained_event : MatchEvent | None, optional
        Immediate follow-up at the same minute, for example the shot that
        comes straight after a completed pass.
    """

    id: str
    type: EventType
    minute: int
    team: Side
    description: str
    resulting_state: MatchState
    player_id: Optional[str] = None
    chained_event: Optional["MatchEvent"] = None

    def iter_chain(self) -> Iterator["MatchEvent"]:
        """Yield this event followed by every event chained after it.

        Returns
        -------
        Iterator[MatchEvent]
            The chain in the order the events happened.
        """
        event: Optional[MatchEvent] = self
        while event is not None:
            yield event
            event = event.chained_event


@dataclass(frozen=True)
class EventContext:
    """Inputs handed to an event generator for a single sub-tick.

    Parameters
    ----------
    current_state : MatchState
        State the generator reacts to.
    probability : float
        Scalar drawn once per engine call, in ``[0, 1)``.
    involved_players : Tuple[Player, ...]
        On-pitch players of the side in possession.
    next_id : Callable[[], str]
        Issues the identifier for the next event; owned by the engine.
    """

    current_state: MatchState
    probability: float
    involved_players: Tuple[Player, ...]
    next_id: Callable[[], str]
