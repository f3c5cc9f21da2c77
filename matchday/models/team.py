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
"""Team, tactics, and formation domain models."""
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

from matchday.models.player import Player

Formation = Literal["4-4-2", "4-3-3", "3-5-2", "4-2-3-1", "5-3-2", "4-5-1", "3-4-3"]

# Outfield positions for each supported shape; the goalkeeper is implied.
FORMATION_POSITIONS: Dict[str, Tuple[str, ...]] = {
    "4-4-2": ("LB", "CB", "CB", "RB", "LM", "CM", "CM", "RM", "ST", "ST"),
    "4-3-3": ("LB", "CB", "CB", "RB", "CM", "CDM", "CM", "LW", "ST", "RW"),
    "3-5-2": ("CB", "CB", "CB", "LM", "CM", "CDM", "CM", "RM", "ST", "ST"),
    "4-2-3-1": ("LB", "CB", "CB", "RB", "CDM", "CDM", "LW", "CAM", "RW", "ST"),
    "5-3-2": ("LB", "CB", "CB", "CB", "RB", "CM", "CDM", "CM", "ST", "ST"),
    "4-5-1": ("LB", "CB", "CB", "RB", "LM", "CM", "CDM", "CM", "RM", "ST"),
    "3-4-3": ("CB", "CB", "CB", "LM", "CM", "CM", "RM", "LW", "ST", "RW"),
}


@dataclass
class TeamTactics:
    """High-level instructions describing how a side wants to play.

    The current match engine carries tactics through the match state but does
    not weight outcomes by them.

    Parameters
    ----------
    attacking_mentality : str, default="balanced"
        One of ``"defensive"``, ``"balanced"``, or ``"attacking"``.
    passing_style : str, default="mixed"
        One of ``"short"``, ``"mixed"``, or ``"long"``.
    tempo : str, default="medium"
        One of ``"slow"``, ``"medium"``, or ``"fast"``.
    width : str, default="balanced"
        One of ``"narrow"``, ``"balanced"``, or ``"wide"``.
    """

    attacking_mentality: Literal["defensive", "balanced", "attacking"] = "balanced"
    passing_style: Literal["short", "mixed", "long"] = "mixed"
    tempo: Literal["slow", "medium", "fast"] = "medium"
    width: Literal["narrow", "balanced", "wide"] = "balanced"


@dataclass
class Team:
    """Container representing a club, its starting eleven, and its bench.

    The engine does not enforce a full eleven or a goalkeeper; sparse rosters
    simply produce sparser match logs.

    Parameters
    ----------
    id : str
        Unique identifier for the team.
    name : str
        Display name for the squad.
    formation : str
        Tactical shape, for example ``"4-4-2"``.
    starters : List[Player]
        Players on the pitch at kickoff.
    substitutes : List[Player]
        Bench players; never used by the engine.
    tactics : TeamTactics | None, optional
        Optional tactical instructions.
    """

    id: str
    name: str
    formation: Formation
    starters: List[Player] = field(default_factory=list)
    substitutes: List[Player] = field(default_factory=list)
    tactics: Optional[TeamTactics] = None

    def get_players_by_position(self, position: str) -> List[Player]:
        """Get all starters rostered in a given position.

        Parameters
        ----------
        position : str
            Position code to filter by (for example ``"CB"``).

        Returns
        -------
        List[Player]
            Starters whose position matches ``position``.
        """
        return [p for p in self.starters if p.position == position]

    def find_player(self, player_id: str) -> Optional[Player]:
        """Look up a starter or substitute by identifier.

        Parameters
        ----------
        player_id : str
            Identifier of the player to find.

        Returns
        -------
        Optional[Player]
            The matching player, or ``None`` when the id is not on the squad.
        """
        for player in (*self.starters, *self.substitutes):
            if player.id == player_id:
                return player
        return None
