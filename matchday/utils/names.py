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
"""Pseudo-random player names drawn from small per-country corpora."""
import random
from typing import Dict, List, Optional, Sequence, Union

NameEntry = Union[str, Sequence[str]]

# Entries given as a list are spelling variants of the same name.
NAME_DATA: Dict[str, Dict[str, List[NameEntry]]] = {
    "norway": {
        "male": [
            "Anders", "Bjørn", ["Carl", "Karl"], ["Christian", "Kristian"], "Eirik", "Erling", "Fredrik", "Håkon",
            "Jonas", "Kjetil", "Lars", "Magnus", "Martin", "Ola", "Ole", "Petter", "Sindre", "Sverre", "Tor", "Øyvind",
        ],
        "female": [
            "Ada", "Astrid", "Camilla", "Ingrid", "Kari", "Marit", "Nora", "Ragnhild", "Sigrid", "Silje",
            "Solveig", "Thea", "Tuva", "Vilde",
        ],
        "last": [
            "Andersen", "Berg", "Dahl", "Eriksen", "Haaland", "Hansen", "Johansen", "Larsen", "Lie", "Moen",
            "Nilsen", "Olsen", "Pedersen", "Solberg", "Strand", "Ødegaard",
        ],
    },
    "england": {
        "male": [
            "Alfie", "Callum", "Charlie", "Daniel", "Harry", "Jack", ["Jon", "John"], "Kieran", "Liam", "Marcus",
            "Oliver", "Reece", ["Stephen", "Steven"], "Theo", "Tom", "Wayne",
        ],
        "female": [
            "Amelia", "Beth", "Chloe", "Ella", "Georgia", "Jess", "Leah", "Lucy", "Millie", "Rachel", "Sophie",
        ],
        "last": [
            "Baker", "Brown", "Clarke", "Davies", "Evans", "Green", "Hughes", "Jones", "Kane", "Rice", "Robinson",
            "Saka", "Smith", "Taylor", "Walker", "Wright",
        ],
    },
}

GENDERS = ("male", "female", "all")
COUNTRIES = ("norway", "england", "all")


class NameGenerator:
    """Generate "First Last" names for a country and gender selection.

    Parameters
    ----------
    gender : str, default="all"
        ``"male"``, ``"female"``, or ``"all"`` for either.
    country : str, default="all"
        ``"norway"``, ``"england"``, or ``"all"``; each name draws one country
        and takes both its parts from it.
    rng : random.Random | None, optional
        Random source; a fresh unseeded generator is used when omitted.

    Raises
    ------
    ValueError
        If ``gender`` or ``country`` is unsupported, or the selection leaves
        no first or last names to draw from.
    """

    def __init__(self, gender: str = "all", country: str = "all", rng: Optional[random.Random] = None) -> None:
        """Validate the selection and prepare the corpora.

        Parameters
        ----------
        gender : str
            ``"male"``, ``"female"``, or ``"all"``.
        country : str
            ``"norway"``, ``"england"``, or ``"all"``.
        rng : random.Random | None
            Random source for the draws.
        """
        if gender not in GENDERS:
            raise ValueError(f"Unsupported gender: {gender}")
        if country not in COUNTRIES:
            raise ValueError(f"Unsupported country: {country}")

        self.gender = gender
        self.country = country
        self.rng = rng if rng is not None else random.Random()
        self._countries = list(NAME_DATA.values()) if country == "all" else [NAME_DATA[country]]

        if not any(self._first_names(data) and data["last"] for data in self._countries):
            raise ValueError(f"No names available for country: {country}, gender: {gender}")

    def generate_name(self) -> str:
        """Draw one full name.

        Returns
        -------
        str
            First and last name separated by a space.
        """
        country_data = self.rng.choice(self._countries)
        first = self._resolve(self.rng.choice(self._first_names(country_data)))
        last = self._resolve(self.rng.choice(country_data["last"]))
        return f"{first} {last}"

    def generate_names(self, count: int) -> List[str]:
        """Draw ``count`` names, duplicates allowed.

        Parameters
        ----------
        count : int
            Number of names to draw.

        Returns
        -------
        List[str]
            The drawn names.
        """
        return [self.generate_name() for _ in range(count)]

    def generate_unique_names(self, count: int) -> List[str]:
        """Draw up to ``count`` distinct names.

        Gives up after ``count * 10`` draws, so small corpora may return fewer
        names than requested.

        Parameters
        ----------
        count : int
            Number of distinct names wanted.

        Returns
        -------
        List[str]
            Distinct names in the order they were first drawn.
        """
        names: Dict[str, None] = {}
        attempts = 0
        while len(names) < count and attempts < count * 10:
            names[self.generate_name()] = None
            attempts += 1
        return list(names)

    def get_config(self) -> Dict[str, str]:
        """Return the selection this generator was built with.

        Returns
        -------
        Dict[str, str]
            ``{"country": ..., "gender": ...}``.
        """
        return {"country": self.country, "gender": self.gender}

    def _first_names(self, country_data: Dict[str, List[NameEntry]]) -> List[NameEntry]:
        """Return the first-name pool for the configured gender.

        Parameters
        ----------
        country_data : Dict[str, List[NameEntry]]
            Corpus for one country.

        Returns
        -------
        List[NameEntry]
            Male, female, or combined first names.
        """
        if self.gender == "all":
            return [*country_data["male"], *country_data["female"]]
        return country_data[self.gender]

    def _resolve(self, entry: NameEntry) -> str:
        """Pick a spelling when ``entry`` lists variants.

        Parameters
        ----------
        entry : NameEntry
            A name or a list of spelling variants.

        Returns
        -------
        str
            The chosen spelling.
        """
        if isinstance(entry, str):
            return entry
        return self.rng.choice(list(entry))
