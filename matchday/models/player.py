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
"""Domain models representing football players and their attributes."""
from dataclasses import dataclass
from typing import Dict, Literal, Tuple

Position = Literal["GK", "CB", "LB", "RB", "CDM", "CM", "CAM", "LM", "RM", "LW", "RW", "ST", "CF"]

POSITIONS: Tuple[str, ...] = ("GK", "CB", "LB", "RB", "CDM", "CM", "CAM", "LM", "RM", "LW", "RW", "ST", "CF")

ATTRIBUTE_NAMES: Tuple[str, ...] = (
    "speed",
    "strength",
    "agility",
    "passing",
    "finishing",
    "technique",
    "defending",
    "stamina",
    "awareness",
    "composure",
)


@dataclass(frozen=True)
class PlayerAttributes:
    """Collection of physical, technical, and mental attribute ratings.

    Ratings are conventionally on a 1-20 scale for generated players, but the
    match engine only consumes them as weights and never validates the range,
    so fixtures on a 1-100 scale work as well.

    Parameters
    ----------
    speed : float
        Acceleration and sprint speed.
    strength : float
        Power in duels and when shielding the ball.
    agility : float
        Quick turns, balance, and goalkeeper mobility.
    passing : float
        Short and long passing, crossing, and set-piece delivery.
    finishing : float
        Shooting and converting chances.
    technique : float
        Ball control, dribbling, and first touch.
    defending : float
        Tackling, marking, and interceptions.
    stamina : float
        Fitness over the course of a match.
    awareness : float
        Positioning and reading of the game.
    composure : float
        Handling of pressure in big moments.
    """

    # Physical
    speed: float
    strength: float
    agility: float

    # Technical
    passing: float
    finishing: float
    technique: float
    defending: float
    stamina: float

    # Mental
    awareness: float
    composure: float

    def as_dict(self) -> Dict[str, float]:
        """Return the ratings keyed by attribute name.

        Returns
        -------
        Dict[str, float]
            Mapping from attribute name to rating, in declaration order.
        """
        return {name: getattr(self, name) for name in ATTRIBUTE_NAMES}


@dataclass(frozen=True)
class Player:
    """Immutable squad member consumed by the match engine.

    Parameters
    ----------
    id : str
        Unique identifier for the player.
    name : str
        Human-readable player name.
    position : str
        Preferred position code, for example ``"ST"`` or ``"GK"``.
    attributes : PlayerAttributes
        Attribute ratings used to weight match outcomes.
    """

    id: str
    name: str
    position: Position
    attributes: PlayerAttributes

    @property
    def is_goalkeeper(self) -> bool:
        """Return ``True`` when the player is rostered as a goalkeeper."""
        return self.position == "GK"
