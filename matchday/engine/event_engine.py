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
"""Registry that picks and resolves the next match event."""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Tuple

from matchday.engine.events import EventContext, MatchEvent
from matchday.engine.generators import EventGenerator, GoalGenerator, PassGenerator, SaveGenerator, ShotGenerator
from matchday.engine.state import MatchState
from matchday.models.player import Player


class EventEngine:
    """Hold one generator per event type and draw single events from them.

    The engine owns the ``event-<n>`` id sequence. It starts at 1 for every
    new engine and is shared by all events the engine's generators produce,
    including chained follow-ups and the simulator's phase events.

    Parameters
    ----------
    rng : Random | None, optional
        Random source for the per-call probability scalar and the choice
        between eligible event types; a fresh unseeded generator is used when
        omitted.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """Create an empty registry.

        Parameters
        ----------
        rng : Random | None, optional
            Random source for the engine's own draws.
        """
        self.rng = rng if rng is not None else random.Random()
        self._generators: Dict[str, EventGenerator] = {}
        self._event_id_counter = 0

    @property
    def registered_types(self) -> Tuple[str, ...]:
        """Return the registered event types in registration order."""
        return tuple(self._generators)

    def register_generator(self, event_type: str, generator: EventGenerator) -> None:
        """Register ``generator`` for ``event_type``, replacing any previous one.

        Parameters
        ----------
        event_type : str
            Event type the generator produces.
        generator : EventGenerator
            Generator to consult for that type.
        """
        self._generators[event_type] = generator

    def register_default_generators(self) -> None:
        """Register the pass, shot, goal, and save generators.

        All four share the engine's random source, and the pass and shot
        generators chain into the registered shot, goal, and save instances.
        """
        goal = GoalGenerator(self.rng)
        save = SaveGenerator(self.rng)
        shot = ShotGenerator(self.rng, goal_generator=goal, save_generator=save)
        self.register_generator("pass", PassGenerator(self.rng, shot_generator=shot))
        self.register_generator("shot", shot)
        self.register_generator("goal", goal)
        self.register_generator("save", save)

    def create_context(self, state: MatchState, probability: Optional[float] = None) -> EventContext:
        """Build the context handed to generators for ``state``.

        Parameters
        ----------
        state : MatchState
            State the next event starts from.
        probability : float | None, optional
            Scalar to expose to generators; drawn from the engine's random
            source when omitted.

        Returns
        -------
        EventContext
            Context bound to this engine's id sequence.
        """
        if probability is None:
            probability = self.rng.random()
        return EventContext(
            current_state=state,
            probability=probability,
            involved_players=self._get_available_players(state),
            next_id=self.generate_id,
        )

    def generate_event(self, state: MatchState) -> Optional[MatchEvent]:
        """Draw at most one event (plus its chain) for ``state``.

        A ``None`` result means nothing happened on this sub-tick, not that the
        match is over. When the chosen generator declines to produce an event
        the engine does not retry another eligible type.

        Parameters
        ----------
        state : MatchState
            State the event starts from.

        Returns
        -------
        Optional[MatchEvent]
            The event with at most one ``chained_event`` attached, or ``None``.
        """
        context = self.create_context(state)

        possible_events = self._get_possible_events(context)
        if not possible_events:
            return None

        generator = self._generators[self._select_random_event(possible_events)]
        event = generator.generate(context)
        if event is None:
            return None

        chained_events = generator.get_chained_events(event, context)
        if chained_events:
            event.chained_event = chained_events[0]

        return event

    def generate_id(self) -> str:
        """Issue the next event identifier.

        Returns
        -------
        str
            ``"event-<n>"`` with ``n`` starting at 1 for each engine.
        """
        self._event_id_counter += 1
        return f"event-{self._event_id_counter}"

    def _get_possible_events(self, context: EventContext) -> List[str]:
        """List the event types whose generator accepts ``context``.

        Parameters
        ----------
        context : EventContext
            Context for this sub-tick.

        Returns
        -------
        List[str]
            Eligible event types in registration order.
        """
        return [event_type for event_type, gen in self._generators.items() if gen.can_generate(context)]

    def _select_random_event(self, event_types: List[str]) -> str:
        """Choose uniformly among ``event_types``.

        Parameters
        ----------
        event_types : List[str]
            Non-empty list of eligible types.

        Returns
        -------
        str
            The selected event type.
        """
        return event_types[int(self.rng.random() * len(event_types))]

    def _get_available_players(self, state: MatchState) -> Tuple[Player, ...]:
        """Return the on-pitch players of the side in possession.

        Parameters
        ----------
        state : MatchState
            State to read the line-ups from.

        Returns
        -------
        Tuple[Player, ...]
            Players of the possessing side.
        """
        return state.possessing_players
