"""Per-day rollup of skiing time.

Qualifying segments are attributed to the calendar date of their later
sample, in the aggregator's timezone. Totals are kept up to date as samples
are added, so date queries do not rescan the buffer.
"""

import logging
from datetime import date, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional

from trackstats.core import constants
from trackstats.core.config import settings as default_settings
from trackstats.core.errors import OutOfOrderSampleError
from trackstats.core.time_utils import Clock, local_date, resolve_timezone, utc_now
from trackstats.segments.classifier import SegmentClassifier


logger = logging.getLogger(__name__)


class DailyAggregator:
    def __init__(
        self,
        track_points: Iterable = (),
        classifier: Optional[SegmentClassifier] = None,
        tz: Optional[tzinfo] = None,
        clock: Clock = utc_now,
        recent_window: timedelta = timedelta(seconds=constants.RECENT_WINDOW_S),
    ):
        """
        Args:
            track_points: samples in time order
            classifier: decides which segments count; thresholds from settings by default
            tz: timezone that defines calendar days; None is the system local zone
            clock: returns the current time, used for "today"
            recent_window: default trailing window for filter_recent_track_points
        """
        self.classifier = classifier or SegmentClassifier.from_settings(default_settings)
        self.tz = tz
        self.clock = clock
        self.recent_window = recent_window
        self._track_points: List = []
        self._by_date: Dict[date, timedelta] = {}
        for point in track_points:
            self.add(point)

    @classmethod
    def from_settings(cls, track_points: Iterable = (), settings=default_settings, clock: Clock = utc_now):
        return cls(
            track_points,
            classifier=SegmentClassifier.from_settings(settings),
            tz=resolve_timezone(settings.timezone),
            clock=clock,
            recent_window=timedelta(seconds=settings.recent_window_s),
        )

    @property
    def track_points(self) -> List:
        return list(self._track_points)

    def add(self, track_point) -> None:
        if self._track_points:
            previous = self._track_points[-1]
            if track_point.time < previous.time:
                raise OutOfOrderSampleError(previous.time, track_point.time)
            if self.classifier.is_qualifying(previous, track_point):
                day = local_date(track_point.time, self.tz)
                self._by_date[day] = self._by_date.get(day, timedelta(0)) + (track_point.time - previous.time)
        self._track_points.append(track_point)

    def total_duration(self, day: date) -> timedelta:
        return self._by_date.get(day, timedelta(0))

    def total_skiing_duration(self, day: Optional[date] = None) -> timedelta:
        """Skiing time on ``day``; today (per the clock, in this zone) when omitted."""
        if day is None:
            day = local_date(self.clock(), self.tz)
        return self.total_duration(day)

    def durations_by_date(self) -> Dict[date, timedelta]:
        return dict(sorted(self._by_date.items()))

    def filter_recent_track_points(self, reference_point, window: Optional[timedelta] = None) -> List:
        """Buffered samples at most ``window`` older than ``reference_point``, and not newer.

        ``window`` defaults to the aggregator's ``recent_window``.
        """
        if window is None:
            window = self.recent_window
        recent = []
        for point in self._track_points:
            age = reference_point.time - point.time
            if timedelta(0) <= age <= window:
                recent.append(point)
        logger.debug("%d of %d samples within %s of %s", len(recent), len(self._track_points), window, reference_point.time)
        return recent
