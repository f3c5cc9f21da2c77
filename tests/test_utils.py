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
"""Tests for utility modules (names, generator, roster, debug)."""

import json
import random
from pathlib import Path

import pytest

from matchday.models.team import FORMATION_POSITIONS, TeamTactics
from matchday.utils.debug import MatchDebugger
from matchday.utils.generator import PlayerGenerator, generate_team
from matchday.utils.names import NAME_DATA, NameGenerator
from matchday.utils.roster import DEFAULT_ATTRIBUTE, load_teams_from_json, player_from_dict, team_from_dict


class TestNameGenerator:
    """Tests for the name generator."""

    @pytest.mark.parametrize(("gender", "country"), [("robot", "all"), ("male", "atlantis")])
    def test_rejects_unknown_selection(self, gender: str, country: str) -> None:
        """Unsupported genders and countries fail fast."""
        with pytest.raises(ValueError):
            NameGenerator(gender, country)

    def test_name_parts_come_from_one_country(self) -> None:
        """Both halves of a name are drawn from the selected corpus."""
        generator = NameGenerator("female", "england", rng=random.Random(4))
        first, last = generator.generate_name().split(" ")

        assert first in NAME_DATA["england"]["female"]
        assert last in NAME_DATA["england"]["last"]

    def test_seeded_names_repeat(self) -> None:
        """The same seed draws the same names."""
        first = NameGenerator(rng=random.Random(99)).generate_names(5)
        second = NameGenerator(rng=random.Random(99)).generate_names(5)
        assert first == second

    def test_unique_names(self) -> None:
        """Unique draws never repeat a name."""
        names = NameGenerator(rng=random.Random(1)).generate_unique_names(20)

        assert len(names) == 20
        assert len(set(names)) == 20

    def test_get_config(self) -> None:
        """The selection is reported back unchanged."""
        assert NameGenerator("male", "norway").get_config() == {"country": "norway", "gender": "male"}


class TestPlayerGenerator:
    """Tests for player and squad generation."""

    def test_attributes_within_range(self) -> None:
        """Generated ratings stay inside the requested bounds."""
        player = PlayerGenerator(rng=random.Random(3)).generate_player("CB", min_attribute=5, max_attribute=12)

        assert player.position == "CB"
        assert all(5 <= value <= 12 for value in player.attributes.as_dict().values())

    def test_position_boosts_apply(self) -> None:
        """Strikers always get at least their finishing boost."""
        generator = PlayerGenerator(rng=random.Random(8))
        for _ in range(20):
            assert generator.generate_player("ST").attributes.finishing >= 5

    def test_boosts_capped_at_maximum(self) -> None:
        """Boosted ratings never exceed the maximum."""
        player = PlayerGenerator(rng=random.Random(2)).generate_player("CB", min_attribute=20, max_attribute=20)
        assert player.attributes.defending == 20

    def test_generated_ids_are_unique(self) -> None:
        """Each player gets its own identifier."""
        generator = PlayerGenerator(rng=random.Random(6))
        ids = {generator.generate_player("CM").id for _ in range(30)}
        assert len(ids) == 30

    @pytest.mark.parametrize("formation", ["4-4-2", "4-3-3", "3-5-2"])
    def test_generate_team(self, formation: str) -> None:
        """A generated squad has a goalkeeper, ten outfielders in shape, and a bench."""
        team = generate_team("home", "Test FC", formation, PlayerGenerator(rng=random.Random(10)))

        assert team.id == "home"
        assert team.name == "Test FC"
        assert len(team.starters) == 11
        assert team.starters[0].position == "GK"
        assert tuple(p.position for p in team.starters[1:]) == FORMATION_POSITIONS[formation]
        assert len(team.substitutes) == 7
        assert team.substitutes[0].position == "GK"
        assert team.tactics == TeamTactics()

    def test_generated_team_name(self) -> None:
        """Teams without a name get a synthesised one."""
        team = generate_team("away", generator=PlayerGenerator(rng=random.Random(12)))
        assert len(team.name.split(" ")) == 2

    def test_unsupported_formation(self) -> None:
        """Unknown formations are rejected."""
        with pytest.raises(ValueError):
            generate_team("home", formation="2-3-5")


class TestRoster:
    """Tests for loading rosters from plain data."""

    def test_player_defaults(self) -> None:
        """Missing fields fall back to defaults."""
        player = player_from_dict({"id": 7, "attributes": {"finishing": 18}})

        assert player.id == "7"
        assert player.name == "player_7"
        assert player.position == "CM"
        assert player.attributes.finishing == 18
        assert player.attributes.speed == DEFAULT_ATTRIBUTE

    def test_player_role_alias(self) -> None:
        """``role`` is accepted in place of ``position``."""
        assert player_from_dict({"id": "gk", "role": "GK"}).position == "GK"

    def test_team_tactics_accept_camel_case(self) -> None:
        """Tactics keys may be camelCase or snake_case."""
        team = team_from_dict(
            {"id": "h", "name": "Home", "tactics": {"attackingMentality": "attacking", "passing_style": "long"}}
        )

        assert team.tactics.attacking_mentality == "attacking"
        assert team.tactics.passing_style == "long"
        assert team.tactics.tempo == "medium"

    def test_team_without_tactics(self) -> None:
        """A team payload with no tactics leaves them unset."""
        team = team_from_dict({}, default_id="away")

        assert team.id == "away"
        assert team.name == "Team_away"
        assert team.tactics is None
        assert team.starters == []

    def test_load_teams_from_json(self, tmp_path: Path) -> None:
        """Home and away sections are loaded in order."""
        payload = {
            "home": {"name": "Bergen", "starters": [{"id": 1, "name": "Keeper", "position": "GK"}]},
            "away": {"id": "leeds", "name": "Leeds", "formation": "4-3-3"},
        }
        path = tmp_path / "teams.json"
        path.write_text(json.dumps(payload), encoding="utf-8")

        home, away = load_teams_from_json(path)

        assert (home.id, home.name) == ("home", "Bergen")
        assert home.starters[0].name == "Keeper"
        assert (away.id, away.formation) == ("leeds", "4-3-3")

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing roster file is reported as such."""
        with pytest.raises(FileNotFoundError):
            load_teams_from_json(tmp_path / "nope.json")

    def test_missing_section(self, tmp_path: Path) -> None:
        """A roster without an away section is rejected."""
        path = tmp_path / "teams.json"
        path.write_text(json.dumps({"home": {}}), encoding="utf-8")

        with pytest.raises(KeyError):
            load_teams_from_json(path)


class TestMatchDebugger:
    """Tests for the match debugger."""

    def test_writes_session_file(self, tmp_path: Path) -> None:
        """Entries are appended to the session log on disk."""
        debugger = MatchDebugger(output_dir=tmp_path / "logs")
        debugger.log_match_event(12, "goal", "GOAL! Someone scores!", "home")
        debugger.log_phase(45, "half_time", "Home 1 - 0 Away")
        debugger.close()

        text = debugger.log_path.read_text(encoding="utf-8")

        assert text.startswith("=== Match Debug Session:")
        assert "MATCH_EVENT: Minute: 12' | Event: goal | Team: home | Details: GOAL! Someone scores!" in text
        assert "PHASE: Minute: 45' | Phase: half_time | Score: Home 1 - 0 Away" in text

    def test_memory_only(self) -> None:
        """Without an output directory nothing touches the filesystem."""
        debugger = MatchDebugger(output_dir=None)
        debugger.log_error("roster", "missing keeper")

        assert debugger.log_path is None
        assert debugger.get_recent_events()[0].startswith("00001 ")
        assert "ERROR: Type: roster | Details: missing keeper" in debugger.get_recent_events()[0]

    def test_recent_events_limit(self) -> None:
        """Only the newest entries are returned, with running line numbers."""
        debugger = MatchDebugger(output_dir=None, history=3)
        for minute in range(5):
            debugger.log_match_event(minute, "pass", f"pass {minute}")

        recent = debugger.get_recent_events(limit=2)

        assert [line[:5] for line in recent] == ["00004", "00005"]
        assert recent[-1].endswith("Details: pass 4")
        assert len(debugger.get_recent_events(limit=10)) == 3

    def test_match_events_filter(self) -> None:
        """Logged match events can be filtered by type."""
        debugger = MatchDebugger(output_dir=None)
        debugger.log_match_event(1, "pass", "a")
        debugger.log_match_event(2, "shot", "b")
        debugger.log_match_event(3, "pass", "c")

        assert [e.details for e in debugger.get_match_events("pass")] == ["a", "c"]
        assert len(debugger.get_match_events()) == 3

    def test_match_events_are_bounded_by_history(self) -> None:
        """A long-lived debugger keeps only the newest match events."""
        debugger = MatchDebugger(output_dir=None, history=3)
        for minute in range(10):
            debugger.log_match_event(minute, "pass", f"pass {minute}")

        assert [e.minute for e in debugger.get_match_events()] == [7, 8, 9]
