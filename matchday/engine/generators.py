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
"""Event generators that turn a match state into the next match event.

Each generator answers two questions for the :class:`~matchday.engine.event_engine.EventEngine`:
whether it is eligible for the current state (:meth:`EventGenerator.can_generate`)
and, once picked, what actually happens (:meth:`EventGenerator.generate`).
Generators may also offer a single follow-up event through
:meth:`EventGenerator.get_chained_events`; the engine keeps only the first.
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import List, Optional, Sequence

from matchday.engine.config import ENGINE_CONFIG
from matchday.engine.events import EventContext, MatchEvent
from matchday.engine.state import ZONES, BallPosition, MatchState, opponent
from matchday.models.player import Player



class EventGenerator:
    """Base behaviour shared by every event generator.

    Parameters
    ----------
    rng : Random | None, optional
        Random source used for every draw; a fresh unseeded generator is used
        when omitted.
    """

    event_type: str = ""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """Bind the generator to a random source.

        Parameters
        ----------
        rng : Random | None, optional
            Random source used for every draw.
        """
        self.rng = rng if rng is not None else random.Random()

    def can_generate(self, context: EventContext) -> bool:
        """Return whether this generator is eligible for ``context``.

        Must not mutate anything; the engine calls it speculatively on every
        registered generator for every sub-tick.

        Parameters
        ----------
        context : EventContext
            Current state and the scalar drawn for this sub-tick.

        Returns
        -------
        bool
            ``True`` when the generator could produce an event.
        """
        raise NotImplementedError

    def generate(self, context: EventContext) -> Optional[MatchEvent]:
        """Produce an event for ``context``.

        Parameters
        ----------
        context : EventContext
            Current state and the scalar drawn for this sub-tick.

        Returns
        -------
        Optional[MatchEvent]
            The event with its successor state, or ``None`` when no eligible
            player exists.
        """
        raise NotImplementedError

    def get_chained_events(self, event: MatchEvent, context: EventContext) -> List[MatchEvent]:
        """Return follow-up events triggered by ``event``.

        Parameters
        ----------
        event : MatchEvent
            Event just produced by :meth:`generate`.
        context : EventContext
            Context ``event`` was generated from.

        Returns
        -------
        List[MatchEvent]
            Follow-up events; empty by default.
        """
        return []

    def _pick(self, players: Sequence[Player]) -> Optional[Player]:
        """Pick one player uniformly at random.

        Parameters
        ----------
        players : Sequence[Player]
            Candidates to choose from.

        Returns
        -------
        Optional[Player]
            The chosen player, or ``None`` when ``players`` is empty.
        """
        if not players:
            return None
        return players[int(self.rng.random() * len(players))]

    def _make_event(
        self,
        context: EventContext,
        team: str,
        description: str,
        resulting_state: MatchState,
        player: Optional[Player] = None,
    ) -> MatchEvent:
        """Build an event of this generator's type at the context minute.

        Parameters
        ----------
        context : EventContext
            Context supplying the minute and the id sequence.
        team : str
            Side the event is credited to.
        description : str
            Human-readable summary.
        resulting_state : MatchState
            Successor state.
        player : Player | None, optional
            Player involved in the event.

        Returns
        -------
        MatchEvent
            The assembled event.
        """
        return MatchEvent(
            id=context.next_id(),
            type=self.event_type,
            minute=context.current_state.minute,
            team=team,
            description=description,
            resulting_state=resulting_state,
            player_id=player.id if player is not None else None,
        )


def _chained_context(context: EventContext, event: MatchEvent) -> EventContext:
    """Return ``context`` re-pointed at the state left behind by ``event``.

    Parameters
    ----------
    context : EventContext
        Context the triggering event was generated from.
    event : MatchEvent
        Event whose resulting state the follow-up starts from.

    Returns
    -------
    EventContext
        Copy of ``context`` with ``current_state`` replaced.
    """
    return replace(context, current_state=event.resulting_state)


class PassGenerator(EventGenerator):
    """Open-play pass between two players of the side in possession.

    Parameters
    ----------
    rng : Random | None, optional
        Random source used for every draw.
    shot_generator : ShotGenerator | None, optional
        Generator used for the shot that may follow a completed pass.
    """

    event_type = "pass"

    def __init__(self, rng: Optional[random.Random] = None, shot_generator: Optional["ShotGenerator"] = None) -> None:
        """Bind the generator and its follow-up shot generator.

        Parameters
        ----------
        rng : Random | None, optional
            Random source used for every draw.
        shot_generator : ShotGenerator | None, optional
            Generator used for the shot that may follow a completed pass.
        """
        super().__init__(rng)
        self.shot_generator = shot_generator if shot_generator is not None else ShotGenerator(rng)

    def can_generate(self, context: EventContext) -> bool:
        """Passes happen in either half.

        Parameters
        ----------
        context : EventContext
            Current state and the scalar drawn for this sub-tick.

        Returns
        -------
        bool
            ``True`` during ``first_half`` and ``second_half``.
        """
        return context.current_state.is_active_play

    def generate(self, context: EventContext) -> Optional[MatchEvent]:
        """Attempt a pass from a random outfield player.

        Parameters
        ----------
        context : EventContext
            Current state and the scalar drawn for this sub-tick.

        Returns
        -------
        Optional[MatchEvent]
            The pass, or ``None`` when the side has no outfield players.
        """
        state = context.current_state
        passer = self._select_passer(state.possessing_players)
        if passer is None:
            return None

        success = self._calculate_pass_success(passer, state.ball_position)
        if success:
            new_state = state.evolve(ball_position=self._next_ball_position(state.ball_position))
            description = f"{passer.name} completes a pass"
        else:
            new_state = state.with_possession_flipped()
            description = f"{passer.name}'s pass is intercepted"

        return self._make_event(context, state.possession, description, new_state, passer)

    def get_chained_events(self, event: MatchEvent, context: EventContext) -> List[MatchEvent]:
        """Sometimes follow a completed pass with a shot.

        The shot is generated from the pass's resulting state without
        re-checking shot eligibility. The shot carries no follow-up of its own;
        goals and saves only follow a shot the engine picks directly.

        Parameters
        ----------
        event : MatchEvent
            The pass just produced.
        context : EventContext
            Context the pass was generated from.

        Returns
        -------
        List[MatchEvent]
            A single shot, or nothing.
        """
        completed = event.resulting_state.possession == context.current_state.possession
        if event.type != self.event_type or not completed:
            return []
        if self.rng.random() >= ENGINE_CONFIG.passing.shot_chain_probability:
            return []

        shot = self.shot_generator.generate(_chained_context(context, event))
        return [shot] if shot is not None else []

    def _select_passer(self, players: Sequence[Player]) -> Optional[Player]:
        """Choose a random non-goalkeeper.

        Parameters
        ----------
        players : Sequence[Player]
            On-pitch players of the side in possession.

        Returns
        -------
        Optional[Player]
            The passer, or ``None`` when only goalkeepers (or nobody) remain.
        """
        return self._pick([p for p in players if not p.is_goalkeeper])

    def _calculate_pass_success(self, player: Player, ball_position: BallPosition) -> bool:
        """Roll whether the pass reaches a teammate.

        Parameters
        ----------
        player : Player
            Player making the pass.
        ball_position : BallPosition
            Where the pass is played from.

        Returns
        -------
        bool
            ``True`` when the pass is completed.
        """
        cfg = ENGINE_CONFIG.passing
        attrs = player.attributes
        base_success = (attrs.passing + attrs.technique * cfg.technique_weight) / cfg.passing_scale
        position_modifier = cfg.box_modifier if ball_position.zone == "away_box" else cfg.open_play_modifier
        pressure_modifier = attrs.composure / cfg.composure_scale
        return self.rng.random() < base_success * position_modifier * pressure_modifier

    def _next_ball_position(self, current: BallPosition) -> BallPosition:
        """Move the ball one zone after a completed pass and pick a new channel.

        Parameters
        ----------
        current : BallPosition
            Ball position before the pass.

        Returns
        -------
        BallPosition
            Position after the pass.
        """
        cfg = ENGINE_CONFIG.passing
        index = current.zone_index
        move_forward = self.rng.random() < cfg.advance_probability

        if move_forward and index < len(ZONES) - 1:
            index += 1
        elif not move_forward and index > 0:
            index -= 1

        # Two independent draws, so the split is not an even thirds.
        if self.rng.random() < cfg.left_threshold:
            side = "left"
        elif self.rng.random() < cfg.centre_threshold:
            side = "center"
        else:
            side = "right"

        return BallPosition(ZONES[index], side)


class ShotGenerator(EventGenerator):
    """Attempt on goal from the attacking third or the box.

    Parameters
    ----------
    rng : Random | None, optional
        Random source used for every draw.
    goal_generator : GoalGenerator | None, optional
        Generator used when the follow-up roll produces a goal.
    save_generator : SaveGenerator | None, optional
        Generator used when the follow-up roll produces a save.
    """

    event_type = "shot"

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        goal_generator: Optional["GoalGenerator"] = None,
        save_generator: Optional["SaveGenerator"] = None,
    ) -> None:
        """Bind the generator and its follow-up generators.

        Parameters
        ----------
        rng : Random | None, optional
            Random source used for every draw.
        goal_generator : GoalGenerator | None, optional
            Generator used when the follow-up roll produces a goal.
        save_generator : SaveGenerator | None, optional
            Generator used when the follow-up roll produces a save.
        """
        super().__init__(rng)
        self.goal_generator = goal_generator if goal_generator is not None else GoalGenerator(rng)
        self.save_generator = save_generator if save_generator is not None else SaveGenerator(rng)

    def can_generate(self, context: EventContext) -> bool:
        """Shots need the ball in the attacking third or the box.

        Parameters
        ----------
        context : EventContext
            Current state and the scalar drawn for this sub-tick.

        Returns
        -------
        bool
            ``True`` in active play with the ball in ``away_third`` or ``away_box``.
        """
        state = context.current_state
        return state.ball_position.zone in ("away_box", "away_third") and state.is_active_play

    def generate(self, context: EventContext) -> Optional[MatchEvent]:
        """Take a shot; the ball always returns to the centre circle afterwards.

        Parameters
        ----------
        context : EventContext
            Current state and the scalar drawn for this sub-tick.

        Returns
        -------
        Optional[MatchEvent]
            The shot, or ``None`` when the side has no outfield players.
        """
        state = context.current_state
        shooter = self._select_shooter(state.possessing_players)
        if shooter is None:
            return None

        new_state = state.with_possession_flipped(_restart_position())
        return self._make_event(context, state.possession, f"{shooter.name} takes a shot", new_state, shooter)

    def get_chained_events(self, event: MatchEvent, context: EventContext) -> List[MatchEvent]:
        """Roll whether the shot ends in a goal, a save, or nothing.

        The follow-up generator runs against the shot's resulting state, in
        which possession has already flipped.

        Parameters
        ----------
        event : MatchEvent
            The shot just produced.
        context : EventContext
            Context the shot was generated from.

        Returns
        -------
        List[MatchEvent]
            A goal or a save, or nothing.
        """
        if event.type != self.event_type:
            return []

        cfg = ENGINE_CONFIG.shooting
        outcome = self.rng.random()
        follow_up_context = _chained_context(context, event)

        if outcome > cfg.goal_threshold:
            follow_up = self.goal_generator.generate(follow_up_context)
        elif outcome > cfg.save_threshold:
            follow_up = self.save_generator.generate(follow_up_context)
        else:
            return []
        return [follow_up] if follow_up is not None else []

    def calculate_shot_quality(self, player: Player, ball_position: BallPosition) -> float:
        """Rate how good a chance ``player`` has from ``ball_position``.

        The follow-up roll in :meth:`get_chained_events` does not use this
        rating; it is exposed for callers that want to grade chances.

        Parameters
        ----------
        player : Player
            Player taking the shot.
        ball_position : BallPosition
            Where the shot is taken from.

        Returns
        -------
        float
            Quality in ``[0, 1]`` for non-negative attributes.
        """
        cfg = ENGINE_CONFIG.shooting
        attrs = player.attributes
        base_finishing = (attrs.finishing + attrs.technique * cfg.technique_weight) / cfg.finishing_scale
        position_modifier = cfg.box_modifier if ball_position.zone == "away_box" else cfg.outside_box_modifier
        composure_modifier = attrs.composure / cfg.composure_scale
        return min(base_finishing * position_modifier * composure_modifier, 1.0)

    def _select_shooter(self, players: Sequence[Player]) -> Optional[Player]:
        """Prefer a random attacker, falling back to any outfield player.

        Parameters
        ----------
        players : Sequence[Player]
            On-pitch players of the side in possession.

        Returns
        -------
        Optional[Player]
            The shooter, or ``None`` when no outfield player exists.
        """
        attacking_positions = ENGINE_CONFIG.shooting.attacking_positions
        attackers = [p for p in players if p.position in attacking_positions]
        if attackers:
            return self._pick(attackers)
        return self._pick([p for p in players if not p.is_goalkeeper])


class GoalGenerator(EventGenerator):
    """Goal for the side in possession.

    Parameters
    ----------
    rng : Random | None, optional
        Random source; goals involve no draws of their own.
    """

    event_type = "goal"

    def can_generate(self, context: EventContext) -> bool:
        """Goals need the ball in the box.

        Parameters
        ----------
        context : EventContext
            Current state and the scalar drawn for this sub-tick.

        Returns
        -------
        bool
            ``True`` in active play with the ball in ``away_box``.
        """
        state = context.current_state
        return state.ball_position.zone == "away_box" and state.is_active_play

    def generate(self, context: EventContext) -> Optional[MatchEvent]:
        """Score for the side in possession and restart from the centre.

        Parameters
        ----------
        context : EventContext
            Current state and the scalar drawn for this sub-tick.

        Returns
        -------
        Optional[MatchEvent]
            The goal, or ``None`` when the scoring side has nobody on the pitch.
        """
        state = context.current_state
        scoring_players = state.possessing_players
        attacking_positions = ENGINE_CONFIG.shooting.attacking_positions
        scorer = next((p for p in scoring_players if p.position in attacking_positions), None)
        if scorer is None and scoring_players:
            scorer = scoring_players[0]
        if scorer is None:
            return None

        if state.possession == "home":
            scored = state.evolve(home_score=state.home_score + 1)
        else:
            scored = state.evolve(away_score=state.away_score + 1)
        new_state = scored.with_possession_flipped(_restart_position())

        return self._make_event(context, state.possession, f"GOAL! {scorer.name} scores!", new_state, scorer)


class SaveGenerator(EventGenerator):
    """Goalkeeper save by the side without the ball.

    Parameters
    ----------
    rng : Random | None, optional
        Random source; saves involve no draws of their own.
    """

    event_type = "save"

    def can_generate(self, context: EventContext) -> bool:
        """Saves need the ball in the box.

        Parameters
        ----------
        context : EventContext
            Current state and the scalar drawn for this sub-tick.

        Returns
        -------
        bool
            ``True`` in active play with the ball in ``away_box``.
        """
        state = context.current_state
        return state.ball_position.zone == "away_box" and state.is_active_play

    def generate(self, context: EventContext) -> Optional[MatchEvent]:
        """Credit the defending goalkeeper and hand them the ball.

        Parameters
        ----------
        context : EventContext
            Current state and the scalar drawn for this sub-tick.

        Returns
        -------
        Optional[MatchEvent]
            The save, or ``None`` when the defending side has no ``GK``.
        """
        state = context.current_state
        goalkeeper = next((p for p in state.defending_players if p.is_goalkeeper), None)
        if goalkeeper is None:
            return None

        new_state = state.with_possession_flipped(BallPosition("away_third", "center"))
        return self._make_event(
            context,
            opponent(state.possession),
            f"Great save by {goalkeeper.name}!",
            new_state,
            goalkeeper,
        )


def _restart_position() -> BallPosition:
    """Return the kickoff ball position.

    Returns
    -------
    BallPosition
        The configured kickoff zone and channel.
    """
    cfg = ENGINE_CONFIG.simulation
    return BallPosition(cfg.kickoff_zone, cfg.kickoff_side)
