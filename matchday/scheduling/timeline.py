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
"""Date-keyed scheduler for deferred moments on a synthetic calendar.

Moments are bucketed by calendar day (time of day is ignored). Advancing the
timeline walks the cursor one day at a time and hands back every moment
registered on each day it passes, in registration order. Triggering a moment
does not resolve it and does not run its callback; callers decide when to
:meth:`Timeline.fire_moments` and :meth:`Timeline.resolve_moments`.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Awaitable, Callable, Dict, Iterable, Iterator, List, Optional, Union

from matchday.utils.debug import MatchDebugger

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]
MomentCallback = Callable[[], Union[None, Awaitable[None]]]


@dataclass
class Moment:
    """Something scheduled to happen on a given day.

    Parameters
    ----------
    id : str
        Caller-assigned identifier; must be unique for removal and resolution
        to target the right moment.
    name : str
        Short label.
    date : date | datetime
        Day the moment is due; any time component is ignored.
    callback : Callable[[], None | Awaitable[None]]
        Work to run when the moment is fired; may be a coroutine function.
    resolved : bool, default=False
        Whether the moment has been dealt with.
    payload : Any, optional
        Arbitrary data for the callback's owner.
    description : str | None, optional
        Longer description, used in error reports.
    tags : List[str], optional
        Labels for :meth:`Timeline.get_moments_by_tag`.
    """

    id: str
    name: str
    date: DateLike
    callback: MomentCallback
    resolved: bool = False
    payload: Any = None
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)


class Timeline:
    """Calendar of moments with a movable "today" cursor.

    Parameters
    ----------
    start_date : date | datetime | None, optional
        Initial cursor position; today when omitted.
    debugger : MatchDebugger | None, optional
        Receives callback failures in addition to :mod:`logging`.
    """

    def __init__(self, start_date: Optional[DateLike] = None, debugger: Optional[MatchDebugger] = None) -> None:
        """Create an empty timeline positioned at ``start_date``.

        Parameters
        ----------
        start_date : date | datetime | None, optional
            Initial cursor position; today when omitted.
        debugger : MatchDebugger | None, optional
            Receives callback failures.
        """
        self._moments: Dict[date, List[Moment]] = {}
        self._current_date: DateLike = start_date if start_date is not None else date.today()
        self.debugger = debugger

    def register_moment(self, moment: Moment) -> None:
        """Add ``moment`` to the bucket for its day.

        Parameters
        ----------
        moment : Moment
            Moment to schedule; same-day moments keep registration order.
        """
        self._moments.setdefault(self._date_key(moment.date), []).append(moment)

    def remove_moment(self, moment_id: str) -> bool:
        """Remove the first moment with ``moment_id``.

        Parameters
        ----------
        moment_id : str
            Identifier to look for.

        Returns
        -------
        bool
            ``True`` when a moment was removed.
        """
        for key, bucket in self._moments.items():
            for index, moment in enumerate(bucket):
                if moment.id == moment_id:
                    del bucket[index]
                    if not bucket:
                        del self._moments[key]
                    return True
        return False

    def resolve_moment(self, moment_id: str) -> bool:
        """Mark the first moment with ``moment_id`` as resolved.

        Parameters
        ----------
        moment_id : str
            Identifier to look for.

        Returns
        -------
        bool
            ``True`` when a moment was found.
        """
        moment = next((m for m in self._iter_moments() if m.id == moment_id), None)
        if moment is None:
            return False
        moment.resolved = True
        return True

    def resolve_moments(self, moments: Iterable[Moment]) -> int:
        """Mark every moment in ``moments`` as resolved.

        Parameters
        ----------
        moments : Iterable[Moment]
            Moments to resolve, typically the result of :meth:`advance_time`.

        Returns
        -------
        int
            Number of moments that were not already resolved.
        """
        newly_resolved = 0
        for moment in moments:
            if not moment.resolved:
                newly_resolved += 1
            moment.resolved = True
        return newly_resolved

    def get_moments_for_date(self, day: DateLike) -> List[Moment]:
        """Return every moment scheduled on ``day``.

        Parameters
        ----------
        day : date | datetime
            Day to look up; time of day is ignored.

        Returns
        -------
        List[Moment]
            Moments in registration order.
        """
        return list(self._moments.get(self._date_key(day), []))

    def get_unresolved_moments_for_date(self, day: DateLike) -> List[Moment]:
        """Return the moments on ``day`` that are still pending.

        Parameters
        ----------
        day : date | datetime
            Day to look up; time of day is ignored.

        Returns
        -------
        List[Moment]
            Unresolved moments in registration order.
        """
        return [m for m in self.get_moments_for_date(day) if not m.resolved]

    def get_moments_by_tag(self, tag: str) -> List[Moment]:
        """Return every moment carrying ``tag``.

        Parameters
        ----------
        tag : str
            Tag to match.

        Returns
        -------
        List[Moment]
            Matching moments, grouped by the order their days were first registered.
        """
        return [m for m in self._iter_moments() if tag in (m.tags or ())]

    def get_unresolved_moments(self) -> List[Moment]:
        """Return every pending moment on the timeline.

        Returns
        -------
        List[Moment]
            Unresolved moments, grouped by the order their days were first registered.
        """
        return [m for m in self._iter_moments() if not m.resolved]

    def get_current_date(self) -> DateLike:
        """Return the cursor position.

        Returns
        -------
        date | datetime
            Current day of the timeline.
        """
        return self._current_date

    def advance_time(self, days: int) -> List[Moment]:
        """Move the cursor forward ``days`` days and collect what falls due.

        Resolved moments are returned too, and nothing is resolved or fired.

        Parameters
        ----------
        days : int
            Number of days to advance; zero or negative advances nothing.

        Returns
        -------
        List[Moment]
            Moments dated on each day passed, in chronological order and,
            within a day, in registration order.
        """
        triggered: List[Moment] = []
        for _ in range(days):
            self._current_date = self._current_date + timedelta(days=1)
            triggered.extend(self.get_moments_for_date(self._current_date))
        return triggered

    async def fire_moments(self, moments: Iterable[Moment]) -> List[Moment]:
        """Run each moment's callback in turn, awaiting coroutine callbacks.

        A failing callback is logged and skipped; the remaining callbacks still
        run. Firing does not resolve anything.

        Parameters
        ----------
        moments : Iterable[Moment]
            Moments to fire, in the order given.

        Returns
        -------
        List[Moment]
            Moments whose callback raised.
        """
        failed: List[Moment] = []
        for moment in moments:
            try:
                result = moment.callback()
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                failed.append(moment)
                details = f"Error firing moment {moment.id}: {moment.description or 'No description'}"
                logger.exception(details)
                if self.debugger:
                    self.debugger.log_error("moment_callback", f"{details} ({exc!r})")
        return failed

    def _iter_moments(self) -> Iterator[Moment]:
        """Yield every registered moment bucket by bucket.

        Returns
        -------
        Iterator[Moment]
            All moments in bucket order.
        """
        for bucket in self._moments.values():
            yield from bucket

    @staticmethod
    def _date_key(day: DateLike) -> date:
        """Reduce ``day`` to its calendar date.

        Parameters
        ----------
        day : date | datetime
            Value to normalise.

        Returns
        -------
        date
            The year, month, and day of ``day``.
        """
        return date(day.year, day.month, day.day)
