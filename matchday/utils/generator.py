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
"""Utilities that synthesise players and squads for quick simulations."""
import random
import uuid
from typing import Dict, List, Optional

from matchday.engine.config import ENGINE_CONFIG
from matchday.models.player import ATTRIBUTE_NAMES, POSITIONS, Player, PlayerAttributes
from matchday.models.team import FORMATION_POSITIONS, Team, TeamTactics
from matchday.utils.names import NameGenerator

# Flat rating boosts applied on top of the random draw for each position.
POSITION_BOOSTS: Dict[str, Dict[str, int]] = {
    "GK": {"agility": 3, "composure": 2, "awareness": 2},
    "CB": {"defending": 4, "strength": 2, "awareness": 2},
    "LB": {"defending": 2, "speed": 2, "stamina": 2},
    "RB": {"defending": 2, "speed": 2, "stamina": 2},
    "CDM": {"defending": 3, "passing": 2, "awareness": 2},
    "CM": {"passing": 3, "stamina": 3, "technique": 2},
    "CAM": {"passing": 3, "technique": 3, "composure": 2},
    "LM": {"speed": 3, "passing": 2, "stamina": 3},
    "RM": {"speed": 3, "passing": 2, "stamina": 3},
    "LW": {"speed": 4, "technique": 2, "agility": 2},
    "RW": {"speed": 4, "technique": 2, "agility": 2},
    "ST": {"finishing": 4, "speed": 2, "composure": 2},
    "CF": {"finishing": 3, "technique": 3, "composure": 2},
}


class PlayerGenerator:
    """Create players with random, position-weighted attributes.

    Parameters
    ----------
    gender : str, default="all"
        Gender selection forwarded to :class:`NameGenerator`.
    country : str, default="all"
        Country selection forwarded to :class:`NameGenerator`.
    rng : random.Random | None, optional
        Random source shared with the name generator.
    """

    def __init__(self, gender: str = "all", country: str = "all", rng: Optional[random.Random] = None) -> None:
        """Set up the name generator.

        Parameters
        ----------
        gender : str
            Gender selection for generated names.
        country : str
            Country selection for generated names.
        rng : random.Random | None
            Random source for attributes and names.
        """
        self.rng = rng if rng is not None else random.Random()
        self.name_generator = NameGenerator(gender, country, rng=self.rng)

    def generate_player(
        self,
        position: str,
        min_attribute: Optional[int] = None,
        max_attribute: Optional[int] = None,
    ) -> Player:
        """Generate a player for ``position``.

        Parameters
        ----------
        position : str
            Position code, for example ``"ST"``.
        min_attribute : int | None, optional
            Lowest rating drawn; defaults to the configured minimum.
        max_attribute : int | None, optional
            Highest rating drawn and the cap for position boosts; defaults to
            the configured maximum.

        Returns
        -------
        Player
            A new player with a UUID4 identifier and a generated name.
        """
        cfg = ENGINE_CONFIG.players
        low = cfg.min_attribute if min_attribute is None else min_attribute
        high = cfg.max_attribute if max_attribute is None else max_attribute

        return Player(
            id=str(uuid.uuid4()),
            name=self.name_generator.generate_name(),
            position=position,
            attributes=self._generate_attributes(position, low, high),
        )

    def _generate_attributes(self, position: str, low: int, high: int) -> PlayerAttributes:
        """Draw every attribute in ``[low, high]`` and apply position boosts.

        Parameters
        ----------
        position : str
            Position whose boosts apply.
        low : int
            Lowest rating drawn.
        high : int
            Highest rating drawn; boosted ratings are capped here.

        Returns
        -------
        PlayerAttributes
            The finished ratings.
        """
        ratings = {name: self.rng.randint(low, high) for name in ATTRIBUTE_NAMES}
        for name, boost in POSITION_BOOSTS.get(position, {}).items():
            ratings[name] = min(high, ratings[name] + boost)
        return PlayerAttributes(**ratings)


def generate_team(
    team_id: str,
    name: Optional[str] = None,
    formation: str = "4-4-2",
    generator: Optional[PlayerGenerator] = None,
) -> Team:
    """Generate a squad for ``formation`` with a goalkeeper and a bench.

    Parameters
    ----------
    team_id : str
        Identifier assigned to the team.
    name : str | None
        Squad name; synthesised when ``None``.
    formation : str
        One of the keys of :data:`~matchday.models.team.FORMATION_POSITIONS`.
    generator : PlayerGenerator | None
        Player source; a default generator is created when omitted.

    Returns
    -------
    Team
        Eleven starters in formation order (goalkeeper first) and the
        configured number of substitutes, the first of them a goalkeeper.

    Raises
    ------
    ValueError
        If ``formation`` is not supported.
    """
    if formation not in FORMATION_POSITIONS:
        raise ValueError(f"Unsupported formation: {formation}")

    generator = generator if generator is not None else PlayerGenerator()
    rng = generator.rng

    if name is None:
        prefixes = ["FC", "United", "City", "Athletic", "Sporting"]
        cities = ["Bergen", "Leeds", "Oslo", "Bristol", "Tromsø"]
        name = f"{rng.choice(cities)} {rng.choice(prefixes)}"

    starters = [generator.generate_player("GK")]
    starters.extend(generator.generate_player(position) for position in FORMATION_POSITIONS[formation])

    substitutes: List[Player] = []
    outfield = [p for p in POSITIONS if p != "GK"]
    for index in range(ENGINE_CONFIG.players.substitutes):
        position = "GK" if index == 0 else rng.choice(outfield)
        substitutes.append(generator.generate_player(position))

    return Team(
        id=team_id,
        name=name,
        formation=formation,
        starters=starters,
        substitutes=substitutes,
        tactics=TeamTactics(),
    )
