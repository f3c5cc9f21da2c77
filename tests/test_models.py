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
"""Tests for player, team, state, and event models."""

from dataclasses import FrozenInstanceError
from typing import get_args, get_type_hints

import pytest
from factories import make_player, make_state, make_team

from matchday.engine.events import EventType, MatchEvent
from matchday.engine.state import ZONES, BallPosition, MatchState, Phase, Side, Zone, opponent
from matchday.models.player import ATTRIBUTE_NAMES, POSITIONS, Player, PlayerAttributes, Position
from matchday.models.team import FORMATION_POSITIONS, Formation, Team


class TestPlayer:
    """Tests for players and their attributes."""

    def test_attributes_as_dict(self) -> None:
        """Ratings are exposed in declaration order."""
        attrs = PlayerAttributes(*range(1, 11))
        as_dict = attrs.as_dict()

        assert tuple(as_dict) == ATTRIBUTE_NAMES
        assert as_dict["speed"] == 1
        assert as_dict["composure"] == 10

    def test_attributes_accept_any_scale(self) -> None:
        """Ratings outside the generated range are stored as given."""
        assert make_player("p1", "ST", finishing=95).attributes.finishing == 95

    def test_player_is_frozen(self) -> None:
        """Players cannot be changed once built."""
        player = make_player("p1", "CM")
        with pytest.raises(FrozenInstanceError):
            player.name = "Someone Else"  # type: ignore[misc]

    def test_is_goalkeeper(self) -> None:
        """Only the GK position counts as a goalkeeper."""
        assert make_player("g", "GK").is_goalkeeper
        assert not make_player("s", "ST").is_goalkeeper


class TestTeam:
    """Tests for squads and formations."""

    def test_players_by_position(self) -> None:
        """Position lookup filters the starters."""
        team = make_team("home")
        assert [p.id for p in team.get_players_by_position("ST")] == ["home-9", "home-10"]
        assert team.get_players_by_position("CAM") == []

    def test_find_player_searches_bench(self) -> None:
        """Substitutes can be found by id as well as starters."""
        team = make_team("home")

        assert team.find_player("home-0").position == "GK"
        assert team.find_player("home-sub2").position == "ST"
        assert team.find_player("nobody") is None

    @pytest.mark.parametrize("formation", sorted(FORMATION_POSITIONS))
    def test_formations_have_ten_outfield_slots(self, formation: str) -> None:
        """Every formation lists ten outfield positions."""
        positions = FORMATION_POSITIONS[formation]
        assert len(positions) == 10
        assert "GK" not in positions


class TestMatchState:
    """Tests for the immutable match state."""

    def test_opponent(self) -> None:
        """Each side faces the other."""
        assert opponent("home") == "away"
        assert opponent("away") == "home"

    def test_zone_index(self) -> None:
        """Zones are ordered from the home box to the away box."""
        assert BallPosition("home_box").zone_index == 0
        assert BallPosition("away_box", "left").zone_index == 4

    def test_evolve_leaves_original(self) -> None:
        """Deriving a successor never mutates the source state."""
        state = make_state(minute=10)
        later = state.evolve(minute=11, home_score=1)

        assert (state.minute, state.home_score) == (10, 0)
        assert (later.minute, later.home_score) == (11, 1)

    def test_state_is_frozen(self) -> None:
        """States cannot be changed in place."""
        state = make_state()
        with pytest.raises(FrozenInstanceError):
            state.minute = 99  # type: ignore[misc]

    def test_possession_flip(self) -> None:
        """Flipping possession swaps the side and optionally moves the ball."""
        state = make_state(possession="home", zone="away_box")

        kept = state.with_possession_flipped()
        moved = state.with_possession_flipped(BallPosition("middle_third", "center"))

        assert kept.possession == "away"
        assert kept.ball_position == state.ball_position
        assert moved.ball_position.zone == "middle_third"

    def test_players_follow_possession(self) -> None:
        """Possessing and defending players track the side on the ball."""
        state = make_state(possession="away")

        assert state.possessing_players == state.current_players.away
        assert state.defending_players == state.current_players.home

    @pytest.mark.parametrize(
        ("phase", "active"),
        [("first_half", True), ("half_time", False), ("second_half", True), ("full_time", False)],
    )
    def test_is_active_play(self, phase: str, active: bool) -> None:
        """Only the two halves count as active play."""
        assert make_state(phase=phase).is_active_play is active

    def test_score_line(self) -> None:
        """The score line names both teams."""
        state = make_state(make_team("home", "Bergen FC"), make_team("away", "Leeds City")).evolve(home_score=2, away_score=1)
        assert state.score_line == "Bergen FC 2 - 1 Leeds City"


class TestMatchEvent:
    """Tests for match events."""

    def test_iter_chain(self) -> None:
        """Walking a chain yields each event once in order."""
        state = make_state()
        goal = MatchEvent("event-3", "goal", 10, "home", "GOAL!", state)
        shot = MatchEvent("event-2", "shot", 10, "home", "Shot", state, chained_event=goal)
        pass_ = MatchEvent("event-1", "pass", 10, "home", "Pass", state, chained_event=shot)

        assert [e.id for e in pass_.iter_chain()] == ["event-1", "event-2", "event-3"]
        assert list(goal.iter_chain()) == [goal]


class TestVocabularies:
    """Tests tying model fields to their string vocabularies."""

    def test_fields_are_annotated_with_vocabularies(self) -> None:
        """Coded fields carry their ``Literal`` vocabulary as the annotation."""
        assert get_type_hints(Player)["position"] == Position
        assert get_type_hints(Team)["formation"] == Formation
        assert get_type_hints(MatchEvent)["type"] == EventType
        assert get_type_hints(MatchEvent)["team"] == Side
        assert get_type_hints(BallPosition)["zone"] == Zone
        assert get_type_hints(MatchState)["phase"] == Phase

    def test_vocabularies_match_lookup_tables(self) -> None:
        """The runtime tables list exactly the values the aliases allow."""
        assert get_args(Position) == POSITIONS
        assert get_args(Zone) == ZONES
        assert set(get_args(Formation)) == set(FORMATION_POSITIONS)
