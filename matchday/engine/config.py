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
"""Central configuration for engine tuning parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(slots=True)
class SimulationConfig:
    """Timing and density controls for the minute-by-minute loop.

    Parameters
    ----------
    match_duration : int, default=90
        Nominal match length in minutes; recorded on each match but the
        phase minutes below drive the clock.
    half_time_minute : int, default=45
        Minute at which the first half ends.
    second_half_minute : int, default=46
        Minute at which the second half kicks off.
    full_time_minute : int, default=90
        Minute at which the match ends.
    events_per_minute : int, default=3
        Upper bound on event draws per simulated minute.
    kickoff_zone : str, default="middle_third"
        Ball zone used at kickoff and after goals.
    kickoff_side : str, default="center"
        Ball channel used at kickoff and after goals.
    """

    match_duration: int = 90
    half_time_minute: int = 45
    second_half_minute: int = 46
    full_time_minute: int = 90
    events_per_minute: int = 3
    kickoff_zone: str = "middle_third"
    kickoff_side: str = "center"


@dataclass(slots=True)
class PassConfig:
    """Weights governing pass completion and ball progression.

    Parameters
    ----------
    passing_scale : float, default=150.0
        Divisor normalising ``passing + technique * technique_weight``.
    technique_weight : float, default=0.5
        Contribution of technique to the pass rating.
    box_modifier : float, default=0.8
        Completion multiplier when the ball is already in the opponent's box.
    open_play_modifier : float, default=1.0
        Completion multiplier everywhere else.
    composure_scale : float, default=100.0
        Divisor turning composure into a pressure multiplier.
    advance_probability : float, default=0.6
        Chance that a completed pass moves the ball one zone forward.
    shot_chain_probability : float, default=0.3
        Chance that a completed pass is immediately followed by a shot.
    left_threshold : float, default=0.33
        Draw below which the ball ends up on the left channel.
    centre_threshold : float, default=0.5
        Second draw below which the ball ends up central rather than right.
    """

    passing_scale: float = 150.0
    technique_weight: float = 0.5
    box_modifier: float = 0.8
    open_play_modifier: float = 1.0
    composure_scale: float = 100.0
    advance_probability: float = 0.6
    shot_chain_probability: float = 0.3
    left_threshold: float = 0.33
    centre_threshold: float = 0.5


@dataclass(slots=True)
class ShotConfig:
    """Shot quality weighting and follow-up thresholds.

    Parameters
    ----------
    finishing_scale : float, default=130.0
        Divisor normalising ``finishing + technique * technique_weight``.
    technique_weight : float, default=0.3
        Contribution of technique to shot quality.
    box_modifier : float, default=1.2
        Quality multiplier for shots taken inside the box.
    outside_box_modifier : float, default=0.8
        Quality multiplier for shots from the attacking third.
    composure_scale : float, default=100.0
        Divisor turning composure into a pressure multiplier.
    goal_threshold : float, default=0.8
        Follow-up draw above which the shot becomes a goal.
    save_threshold : float, default=0.5
        Follow-up draw above which (and up to ``goal_threshold``) the shot is saved.
    attacking_positions : Tuple[str, ...], default=("ST", "CF", "LW", "RW", "CAM")
        Positions preferred when picking a shooter or goalscorer.
    """

    finishing_scale: float = 130.0
    technique_weight: float = 0.3
    box_modifier: float = 1.2
    outside_box_modifier: float = 0.8
    composure_scale: float = 100.0
    goal_threshold: float = 0.8
    save_threshold: float = 0.5
    attacking_positions: Tuple[str, ...] = ("ST", "CF", "LW", "RW", "CAM")


@dataclass(slots=True)
class PlayerGenerationConfig:
    """Ranges used when synthesising players and squads.

    Parameters
    ----------
    min_attribute : int, default=1
        Lowest rating a generated attribute can take.
    max_attribute : int, default=20
        Highest rating a generated attribute can take; position boosts are capped here.
    substitutes : int, default=7
        Number of bench players added to generated squads.
    """

    min_attribute: int = 1
    max_attribute: int = 20
    substitutes: int = 7


@dataclass(slots=True)
class EngineConfig:
    """Top-level container for all engine tuning structures.

    Parameters
    ----------
    simulation : SimulationConfig, default=SimulationConfig()
        Match timing parameters.
    passing : PassConfig, default=PassConfig()
        Pass generator tuning.
    shooting : ShotConfig, default=ShotConfig()
        Shot, goal, and save tuning.
    players : PlayerGenerationConfig, default=PlayerGenerationConfig()
        Player and squad generation ranges.
    """

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    passing: PassConfig = field(default_factory=PassConfig)
    shooting: ShotConfig = field(default_factory=ShotConfig)
    players: PlayerGenerationConfig = field(default_factory=PlayerGenerationConfig)


ENGINE_CONFIG = EngineConfig()
"""Singleton-style access to the engine configuration."""
