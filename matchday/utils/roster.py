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
"""Load squads from JSON roster documents.

A roster document holds a ``home`` and an ``away`` team section. Player
entries only need an ``id``; any rating left out is filled with
:data:`DEFAULT_ATTRIBUTE`, and tactics keys are accepted in camelCase as well
as snake_case.
"""
import json
from pathlib import Path
from typing import Tuple, Union

from matchday.models.player import ATTRIBUTE_NAMES, Player, PlayerAttributes
from matchday.models.team import Team, TeamTactics

DEFAULT_ATTRIBUTE = 10


def player_from_dict(d: dict) -> Player:
    """Build a ``Player`` from a plain dictionary payload.

    Parameters
    ----------
    d
        A mapping containing the serialized player information. Supported keys
        include ``id``, ``name``, ``position`` (or ``role``), and an
        ``attributes`` mapping keyed by attribute name.

    Returns
    -------
    Player
        A fully initialised player with defaults for any missing values.
    """
    attrs = d.get("attributes", {}) or {}
    attributes = PlayerAttributes(**{name: attrs.get(name, DEFAULT_ATTRIBUTE) for name in ATTRIBUTE_NAMES})

    player_id = str(d.get("id", ""))
    return Player(
        id=player_id,
        name=d.get("name", f"player_{player_id}"),
        position=d.get("position") or d.get("role", "CM"),
        attributes=attributes,
    )


def team_from_dict(d: dict, default_id: str = "team") -> Team:
    """Build a ``Team`` from a plain dictionary payload.

    Parameters
    ----------
    d
        Mapping with ``id``, ``name``, ``formation``, ``starters``,
        ``substitutes``, and an optional ``tactics`` mapping.
    default_id
        Identifier used when the payload has none.

    Returns
    -------
    Team
        The assembled team; no roster size or goalkeeper checks are applied.
    """
    tactics_data = d.get("tactics")
    tactics = None
    if tactics_data:
        tactics = TeamTactics(
            attacking_mentality=tactics_data.get("attackingMentality", tactics_data.get("attacking_mentality", "balanced")),
            passing_style=tactics_data.get("passingStyle", tactics_data.get("passing_style", "mixed")),
            tempo=tactics_data.get("tempo", "medium"),
            width=tactics_data.get("width", "balanced"),
        )

    team_id = str(d.get("id", default_id))
    return Team(
        id=team_id,
        name=d.get("name", f"Team_{team_id}"),
        formation=d.get("formation", "4-4-2"),
        starters=[player_from_dict(p) for p in d.get("starters", [])],
        substitutes=[player_from_dict(p) for p in d.get("substitutes", [])],
        tactics=tactics,
    )


def load_teams_from_json(path: Union[str, Path]) -> Tuple[Team, Team]:
    """Load home and away teams from a roster document.

    Parameters
    ----------
    path
        The filesystem path to a JSON document with ``home`` and ``away``
        team sections.

    Returns
    -------
    Tuple[Team, Team]
        ``(home, away)``.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    KeyError
        If the document lacks a ``home`` or ``away`` section.
    """
    roster_path = Path(path)
    if not roster_path.is_file():
        raise FileNotFoundError(f"Roster file not found: {roster_path}")

    document = json.loads(roster_path.read_text(encoding="utf-8"))
    return (
        team_from_dict(document["home"], default_id="home"),
        team_from_dict(document["away"], default_id="away"),
    )
