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
"""Tests for the in-process event bus."""

import logging
from typing import Any, List

import pytest

from matchday.scheduling.event_bus import EventBus, event_bus
from matchday.utils.debug import MatchDebugger


class TestEventBus:
    """Tests for subscribing, emitting, and unsubscribing."""

    def test_emit_reaches_listeners_in_order(self) -> None:
        """Listeners receive the payload in subscription order."""
        received: List[Any] = []
        bus = EventBus()
        bus.on("goal", lambda data: received.append(("first", data)))
        bus.on("goal", lambda data: received.append(("second", data)))

        assert bus.emit("goal", {"minute": 12}) == 2
        assert received == [("first", {"minute": 12}), ("second", {"minute": 12})]

    def test_emit_without_listeners(self) -> None:
        """Emitting an unknown event delivers to nobody."""
        assert EventBus().emit("nothing") == 0

    def test_off_removes_listener(self) -> None:
        """An unsubscribed listener no longer hears the event."""
        received: List[Any] = []
        bus = EventBus()
        bus.on("save", received.append)
        bus.off("save", received.append)

        bus.emit("save", 1)

        assert received == []
        assert bus.listener_count("save") == 0

    def test_off_unknown_is_ignored(self) -> None:
        """Unsubscribing something never subscribed is a no-op."""
        bus = EventBus()
        bus.on("save", print)
        bus.off("save", len)
        bus.off("missing", len)

        assert bus.listener_count("save") == 1

    def test_failing_listener_is_isolated(self, caplog: pytest.LogCaptureFixture) -> None:
        """A raising listener is logged and later listeners still run."""
        received: List[Any] = []
        debugger = MatchDebugger(output_dir=None)
        bus = EventBus(debugger=debugger)

        def explode(_: Any) -> None:
            raise RuntimeError("boom")

        bus.on("full_time", explode)
        bus.on("full_time", received.append)

        with caplog.at_level(logging.ERROR, logger="matchday.scheduling.event_bus"):
            delivered = bus.emit("full_time", "2-1")

        assert delivered == 1
        assert received == ["2-1"]
        assert "Error in event listener for full_time" in caplog.text
        assert "event_listener" in debugger.get_recent_events()[0]

    def test_listener_may_unsubscribe_during_emit(self) -> None:
        """Listeners removed mid-emit do not disturb the current delivery."""
        received: List[str] = []
        bus = EventBus()

        def once(_: Any) -> None:
            received.append("once")
            bus.off("tick", once)

        bus.on("tick", once)
        bus.on("tick", lambda _: received.append("always"))

        bus.emit("tick")
        bus.emit("tick")

        assert received == ["once", "always", "always"]

    def test_shared_bus_exists(self) -> None:
        """A module-level bus is available for application wiring."""
        assert isinstance(event_bus, EventBus)
