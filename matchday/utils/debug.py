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
"""Match telemetry: a line-numbered trace of events, phase changes, and errors.

Every entry lands in an in-memory ring buffer and, when an output directory is
configured, in a per-session text file::

    [14:02:11] MATCH_EVENT: Minute: 12' | Event: goal | Team: home | Details: GOAL! ...
    [14:02:11] PHASE: Minute: 45' | Phase: half_time | Score: Bergen 1 - 0 Leeds
    [14:02:12] ERROR: Type: moment_callback | Details: ...
"""
import time
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Deque, List, Optional, TextIO, Tuple, Union


@dataclass(frozen=True)
class LoggedMatchEvent:
    """A match event as the debugger recorded it.

    Parameters
    ----------
    minute : int
        Match minute of the event.
    event_type : str
        Event category, for example ``"goal"``.
    details : str
        Event description.
    team : str | None, optional
        Side credited with the event.
    """

    minute: int
    event_type: str
    details: str
    team: Optional[str] = None


class MatchDebugger:
    """Collect match telemetry in memory and optionally on disk.

    Safe to share between a simulator, a timeline, and an event bus; writes
    are serialised by a lock.

    Parameters
    ----------
    output_dir : str | Path | None, default="debug_logs"
        Directory for session files, created on demand. ``None`` keeps
        everything in memory.
    history : int, default=200
        How many trace lines and match events are kept; older entries are
        dropped first.
    """

    def __init__(self, output_dir: Union[str, Path, None] = "debug_logs", history: int = 200) -> None:
        """Prepare the buffers and open the first session file if needed.

        Parameters
        ----------
        output_dir : str | Path | None
            Directory for session files, or ``None``.
        history : int
            Number of trace lines and match events kept.
        """
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.session_start = time.strftime("%Y%m%d_%H%M%S")
        self._stream: Optional[TextIO] = None
        self._lock = Lock()
        self._next_line = 1
        self._trace: Deque[Tuple[int, str]] = deque(maxlen=history)
        self._match_events: Deque[LoggedMatchEvent] = deque(maxlen=history)
        if self.output_dir is not None:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.start_new_session()

    @property
    def log_path(self) -> Optional[Path]:
        """Return the session file path, or ``None`` when logging to memory only."""
        if self.output_dir is None:
            return None
        return self.output_dir / f"match_debug_{self.session_start}.txt"

    def start_new_session(self) -> None:
        """Close any open session file and start appending to the current one."""
        self.close()
        path = self.log_path
        if path is None:
            return
        self._stream = path.open("a", encoding="utf-8")
        self._stream.write(f"=== Match Debug Session: {time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")

    def log_match_event(self, minute: int, event_type: str, description: str, team: Optional[str] = None) -> None:
        """Record an applied match event.

        Parameters
        ----------
        minute : int
            Match minute of the event.
        event_type : str
            Event category.
        description : str
            Event description.
        team : str | None
            Side credited with the event.
        """
        with self._lock:
            self._match_events.append(LoggedMatchEvent(minute, event_type, description, team))
        team_part = f" | Team: {team}" if team else ""
        self._append("MATCH_EVENT", f"Minute: {minute}' | Event: {event_type}{team_part} | Details: {description}")

    def log_phase(self, minute: int, phase: str, score_line: str) -> None:
        """Record a move to a new match phase.

        Parameters
        ----------
        minute : int
            Minute of the transition.
        phase : str
            Phase entered.
        score_line : str
            Score at that point.
        """
        self._append("PHASE", f"Minute: {minute}' | Phase: {phase} | Score: {score_line}")

    def log_error(self, error_type: str, description: str) -> None:
        """Record a failure that was caught and isolated.

        Parameters
        ----------
        error_type : str
            Where the failure came from, for example ``"moment_callback"``.
        description : str
            What went wrong.
        """
        self._append("ERROR", f"Type: {error_type} | Details: {description}")

    def get_recent_events(self, limit: int = 20) -> List[str]:
        """Return the newest trace lines prefixed with their line numbers.

        Parameters
        ----------
        limit : int
            Maximum number of lines.

        Returns
        -------
        List[str]
            Lines such as ``"00042 [12:00:00] PHASE: ..."``, oldest first.
        """
        with self._lock:
            tail = list(self._trace)[-limit:]
        return [f"{number:05d} {line}" for number, line in tail]

    def get_match_events(self, event_type: Optional[str] = None) -> List[LoggedMatchEvent]:
        """Return the retained match events, oldest first.

        Parameters
        ----------
        event_type : str | None
            Restrict the result to this category.

        Returns
        -------
        List[LoggedMatchEvent]
            Events in the order they were logged.
        """
        with self._lock:
            events = list(self._match_events)
        if event_type is None:
            return events
        return [e for e in events if e.event_type == event_type]

    def close(self) -> None:
        """Flush and close the session file, if one is open."""
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def _append(self, category: str, message: str) -> None:
        """Add a timestamped line to the trace and the session file.

        Parameters
        ----------
        category : str
            Entry kind: ``MATCH_EVENT``, ``PHASE``, or ``ERROR``.
        message : str
            Formatted entry body.
        """
        line = f"[{time.strftime('%H:%M:%S')}] {category}: {message}"
        with self._lock:
            self._trace.append((self._next_line, line))
            self._next_line += 1
            if self._stream is not None:
                self._stream.write(line + "\n")
                self._stream.flush()
