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
"""Tiny in-process publish/subscribe bus."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from matchday.utils.debug import MatchDebugger

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventBus:
    """Route named events to the listeners subscribed to them.

    Listeners run synchronously in subscription order. A listener that raises
    is logged and skipped so the others still hear the event.

    Parameters
    ----------
    debugger : MatchDebugger | None, optional
        Receives listener failures in addition to :mod:`logging`.
    """

    def __init__(self, debugger: Optional[MatchDebugger] = None) -> None:
        """Create a bus with no subscribers.

        Parameters
        ----------
        debugger : MatchDebugger | None, optional
            Receives listener failures.
        """
        self._listeners: Dict[str, List[Listener]] = {}
        self.debugger = debugger

    def on(self, event: str, callback: Listener) -> None:
        """Subscribe ``callback`` to ``event``.

        Parameters
        ----------
        event : str
            Event name.
        callback : Callable[[Any], None]
            Called with the payload of each emission.
        """
        self._listeners.setdefault(event, []).append(callback)

    def off(self, event: str, callback: Listener) -> None:
        """Unsubscribe the first registration of ``callback`` from ``event``.

        Unknown events and callbacks are ignored.

        Parameters
        ----------
        event : str
            Event name.
        callback : Callable[[Any], None]
            Listener to remove.
        """
        listeners = self._listeners.get(event)
        if listeners and callback in listeners:
            listeners.remove(callback)

    def emit(self, event: str, data: Any = None) -> int:
        """Deliver ``data`` to every listener of ``event``.

        Parameters
        ----------
        event : str
            Event name.
        data : Any, optional
            Payload passed to each listener.

        Returns
        -------
        int
            Number of listeners that completed without raising.
        """
        delivered = 0
        for callback in list(self._listeners.get(event, [])):
            try:
                callback(data)
            except Exception as exc:
                logger.exception("Error in event listener for %s", event)
                if self.debugger:
                    self.debugger.log_error("event_listener", f"Listener for {event} failed: {exc!r}")
            else:
                delivered += 1
        return delivered

    def listener_count(self, event: str) -> int:
        """Return how many listeners ``event`` has.

        Parameters
        ----------
        event : str
            Event name.

        Returns
        -------
        int
            Number of subscribed listeners.
        """
        return len(self._listeners.get(event, []))


event_bus = EventBus()
"""Shared default bus."""
