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
"""Value types describing the authoritative state of a simulated match.

Every type here is frozen. Generators and the simulator never mutate a
state in place; they derive a successor with :func:`dataclasses.replace`,
so an event's ``resulting_state`` stays exactly as it was when the event was
produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal, Optional, Tuple

from matchday.models.player import Player
from matchday.models.team import Team

Side = Literal["home", "away"]
Zone = Literal["home_box", "home_third", "middle_third", "away_third", "away_box"]
Channel = Literal["left", "center", "right"]
Phase = Literal["first_half", "half_time", "second_half", "full_time"]

ZONES: Tuple[str, ...] = ("home_box", "home_third", "middle_third", "away_third", "away_box")
PHASES: Tuple[str, ...] = ("first_half", "half_time", "second_half", "full_time")
ACTIVE_PHASES: Tuple[str, ...] = ("first_half", "second_half")


def opponent(side: Side) -> Side:
    """Return the side facing ``side``.

    Parameters
    ----------
    side : str
        ``"home"`` or ``"away"``.

    Returns
    -------
    str
        ``"away"`` for ``"home"`` and ``"home"`` for anything else.
    """
    return "away" if side == "home" else "home"


@dataclass(frozen=True, slots=True)
class BallPosition:
    """Coarse location of the ball on the five-zone track.

    Parameters
    ----------
    zone : str
        One of :data:`ZONES`, ordered from the home box to the away box.
    side : str | None, optional
        Channel the ball is in: ``"left"``, ``"center"``, or ``"right"``.
    """

    zone: Zone
    side: Optional[Channel] = None

    @property
    def zone_index(self) -> int:
        """Return the position of :attr:`zone` on the ordered track."""
        return ZONES.index(self.zone)


@dataclass(frozen=True, slots=True)
class Booking:
    """Disciplinary record for a single card.

    Parameters
    ----------
    player_id : str
        Identifier of the booked player.
    team : str
        Side the player belongs to.
    minute : int
        Match minute of the booking.
    """

    player_id: str
    team: Side
    minute: int


@dataclass(frozen=True, slots=True)
class Bookings:
    """Cards shown during the match, split by colour.

    Parameters
    ----------
    yellow : Tuple[Booking, ...], default=()
        Yellow cards in the order they were shown.
    red : Tuple[Booking, ...], default=()
        Red cards in the order they were shown.
    """

    yellow: Tuple[Booking, ...] = ()
    red: Tuple[Booking, ...] = ()


@dataclass(frozen=True, slots=True)
class Lineups:
    """Players currently on the pitch for each side.

    Parameters
    ----------
    home : Tuple[Player, ...]
        Home players on the pitch.
    away : Tuple[Player, ...]
        Away players on the pitch.
    """

    home: Tuple[Player, ...]
    away: Tuple[Player, ...]

    def for_side(self, side: str) -> Tuple[Player, ...]:
        """Return the players on the pitch for ``side``.

        Parameters
        ----------
        side : str
            ``"home"`` or ``"away"``.

        Returns
        -------
        Tuple[Player, ...]
            The home line-up for ``"home"``, otherwise the away line-up.
        """
        return self.home if side == "home" else self.away


@dataclass(frozen=True, slots=True)
class MatchState:
    """Snapshot of a match between two events.

    Parameters
    ----------
    minute : int
        Current match minute; never decreases.
    home_score : int
        Goals scored by the home side.
    away_score : int
        Goals scored by the away side.
    possession : str
        Side currently in possession.
    ball_position : BallPosition
        Where the ball is.
    phase : str
        One of :data:`PHASES`; only ever moves forward.
    home_team : Team
        Home squad as supplied at kickoff.
    away_team : Team
        Away squad as supplied at kickoff.
    current_players : Lineups
        Players on the pitch, seeded from the starters.
    bookings : Bookings, default=Bookings()
        Cards shown so far.
    """

    minute: int
    home_score: int
    away_score: int
    possession: Side
    ball_position: BallPosition
    phase: Phase
    home_team: Team
    away_team: Team
    current_players: Lineups
    bookings: Bookings = field(default_factory=Bookings)

    @property
    def is_active_play(self) -> bool:
        """Return ``True`` while either half is being played."""
        return self.phase in ACTIVE_PHASES

    @property
    def possessing_players(self) -> Tuple[Player, ...]:
        """Return the on-pitch players of the side in possession."""
        return self.current_players.for_side(self.possession)

    @property
    def defending_players(self) -> Tuple[Player, ...]:
        """Return the on-pitch players of the side without the ball."""
        return self.current_players.for_side(opponent(self.possession))

    def evolve(self, **changes: object) -> "MatchState":
        """Return a copy of this state with ``changes`` applied.

        Parameters
        ----------
        **changes : object
            Field values to override in the successor state.

        Returns
        -------
        MatchState
            A new state; ``self`` is left untouched.
        """
        return replace(self, **changes)

    def with_possession_flipped(self, ball_position: Optional[BallPosition] = None) -> "MatchState":
        """Return a successor where the other side has the ball.

        Parameters
        ----------
        ball_position : BallPosition | None, optional
            New ball position; the current one is kept when omitted.

        Returns
        -------
        MatchState
            A new state with possession handed to the opponent.
        """
        return replace(
            self,
            possession=opponent(self.possession),
            ball_position=ball_position if ball_position is not None else self.ball_position,
        )

    @property
    def score_line(self) -> str:
        """Return a ``"Home 1 - 0 Away"`` style summary of the score."""
        return f"{self.home_team.name} {self.home_score} - {self.away_score} {self.away_team.name}"
