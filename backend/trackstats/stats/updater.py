"""Fill a ``TrackStatistics`` from a time-ordered stream of samples."""

import logging
import math
from datetime import timedelta
from typing import Iterable, Optional

from trackstats.core.config import Settings, settings as default_settings
from trackstats.core.errors import OutOfOrderSampleError
from trackstats.segments.classifier import SegmentClassifier
from trackstats.segments.lift_waiting import ChairliftWaitingDetector
from trackstats.stats.geo import haversine
from trackstats.stats.track_statistics import TrackStatistics


logger = logging.getLogger(__name__)


class TrackStatisticsUpdater:
    """Per-sample bookkeeping for one track.

    - Distance and moving time only accrue on segments at or above the moving speed
    - Max speed ignores speeds above the plausibility ceiling
    - Average heart rate is weighted by segment duration
    - Skiing time comes from the segment classifier, waiting time from the lift detector
    """

    def __init__(
        self,
        settings: Settings = default_settings,
        classifier: Optional[SegmentClassifier] = None,
        lift_detector: Optional[ChairliftWaitingDetector] = None,
    ):
        self.settings = settings
        self.classifier = classifier or SegmentClassifier.from_settings(settings)
        self.lift_detector = lift_detector or ChairliftWaitingDetector.from_settings(settings)
        self._current = TrackStatistics()
        self._last_point = None
        self._hr_weighted_sum = 0.0
        self._hr_seconds = 0.0

    @property
    def statistics(self) -> TrackStatistics:
        """A snapshot; later samples do not change the returned object."""
        return self._current.copy()

    @property
    def last_track_point(self):
        return self._last_point

    def add_track_points(self, track_points: Iterable) -> TrackStatistics:
        count = 0
        for point in track_points:
            self.add_track_point(point)
            count += 1
        logger.debug("Processed %d samples: %s", count, self._current)
        return self.statistics

    def add_track_point(self, track_point) -> None:
        stats = self._current
        last = self._last_point
        if last is not None and track_point.time < last.time:
            raise OutOfOrderSampleError(last.time, track_point.time)
        if not stats.is_initialized():
            stats.reset(track_point.time)

        stats.set_stop_time(track_point.time)
        stats.set_total_time(stats.stop_time - stats.start_time)

        altitude = track_point.altitude
        if altitude is not None and math.isnan(altitude):
            logger.warning("Ignoring NaN altitude at %s", track_point.time)
            altitude = None
        stats.update_altitude_extremities(altitude)

        if last is None:
            self._update_heart_rate(track_point, timedelta(0))
            self._last_point = track_point
            return

        elapsed = track_point.time - last.time
        elapsed_s = elapsed.total_seconds()

        distance_m = 0.0
        if track_point.has_location() and last.has_location():
            distance_m = haversine(last.latitude, last.longitude, track_point.latitude, track_point.longitude)

        if track_point.speed is not None:
            speed = track_point.speed
        elif elapsed_s > 0:
            speed = distance_m / elapsed_s
        else:
            speed = 0.0

        last_altitude = last.altitude
        if last_altitude is not None and math.isnan(last_altitude):
            last_altitude = None
        if altitude is not None and last_altitude is not None:
            de = altitude - last_altitude
            stats.add_total_altitude_gain(max(de, 0.0))
            stats.add_total_altitude_loss(max(-de, 0.0))
            if distance_m > 0:
                stats.set_slope_percent(de / distance_m * 100.0)

        moving = speed >= self.settings.moving_speed_mps
        if moving:
            stats.add_total_distance(distance_m)
            stats.add_moving_time_between(track_point, last)
            if speed <= self.settings.max_speed_mps:
                stats.update_max_speed(speed)
            else:
                logger.warning("Ignoring implausible speed %.1f m/s at %s", speed, track_point.time)
        stats.set_idle(not moving)

        self._update_heart_rate(track_point, elapsed)

        if self.classifier.is_qualifying(last, track_point):
            stats.add_skiing_time(elapsed)
        self.lift_detector.update(stats, last, track_point, speed)

        self._last_point = track_point

    def _update_heart_rate(self, track_point, elapsed: timedelta) -> None:
        if track_point.heart_rate is None:
            return
        seconds = elapsed.total_seconds()
        if self._hr_seconds + seconds == 0:
            # First reading, nothing to weight against yet
            self._current.set_average_heart_rate(track_point.heart_rate)
            return
        self._hr_weighted_sum += track_point.heart_rate * seconds
        self._hr_seconds += seconds
        self._current.set_average_heart_rate(self._hr_weighted_sum / self._hr_seconds)
