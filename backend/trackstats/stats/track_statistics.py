"""Mergeable statistics about a single track or a group of tracks.

A ``TrackStatistics`` is filled sample by sample (see
``trackstats.stats.updater``) and can be merged with statistics covering a
different, non-overlapping period. All values are SI: meters, seconds,
meters per second, beats per minute.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from trackstats.core.errors import NegativeDurationError, StopTimeBeforeStartError
from trackstats.core.time_utils import ensure_aware
from trackstats.stats.extremity_monitor import ExtremityMonitor


logger = logging.getLogger(__name__)


class TrackStatistics:
    def __init__(self):
        # The min and max altitude (meters) seen on this track.
        self._altitude_extremities = ExtremityMonitor()
        self.reset()

    @classmethod
    def of(
        cls,
        start_time: str,
        stop_time: str,
        total_distance_m: float,
        total_time_s: int,
        moving_time_s: int,
        max_speed_mps: float,
        total_altitude_gain_m: Optional[float] = None,
        total_altitude_loss_m: Optional[float] = None,
    ) -> "TrackStatistics":
        """Build statistics directly from ISO timestamps and plain numbers."""
        stats = cls()
        stats._start_time = ensure_aware(datetime.fromisoformat(start_time.replace("Z", "+00:00")))
        stats._stop_time = ensure_aware(datetime.fromisoformat(stop_time.replace("Z", "+00:00")))
        stats._total_distance = float(total_distance_m)
        stats._total_time = timedelta(seconds=total_time_s)
        stats._moving_time = timedelta(seconds=moving_time_s)
        stats._max_speed = float(max_speed_mps)
        stats._total_altitude_gain = total_altitude_gain_m
        stats._total_altitude_loss = total_altitude_loss_m
        return stats

    def copy(self) -> "TrackStatistics":
        other = TrackStatistics()
        other._start_time = self._start_time
        other._stop_time = self._stop_time
        other._total_distance = self._total_distance
        other._total_time = self._total_time
        other._moving_time = self._moving_time
        other._max_speed = self._max_speed
        other._altitude_extremities.set(self._altitude_extremities.min, self._altitude_extremities.max)
        other._total_altitude_gain = self._total_altitude_gain
        other._total_altitude_loss = self._total_altitude_loss
        other._avg_heart_rate = self._avg_heart_rate
        other._idle = self._idle
        other._slope_percent = self._slope_percent
        other._total_chairlift_waiting_time = self._total_chairlift_waiting_time
        other._end_of_run_counter = self._end_of_run_counter
        other._total_skiing_time = self._total_skiing_time
        return other

    def merge(self, other: "TrackStatistics") -> None:
        """Combine these statistics with those of another object.

        Assumes the time periods covered by the two do not intersect; this is
        not checked.
        """
        if self._start_time is None:
            self._start_time = other._start_time
        elif other._start_time is not None:
            self._start_time = min(self._start_time, other._start_time)
        if self._stop_time is None:
            self._stop_time = other._stop_time
        elif other._stop_time is not None:
            self._stop_time = max(self._stop_time, other._stop_time)

        if self._avg_heart_rate is None:
            self._avg_heart_rate = other._avg_heart_rate
        elif other._avg_heart_rate is not None:
            # Total times are the weights, so this must run before they are summed.
            self_s = self._total_time.total_seconds()
            other_s = other._total_time.total_seconds()
            if self_s + other_s > 0:
                self._avg_heart_rate = (
                    self_s * self._avg_heart_rate + other_s * other._avg_heart_rate
                ) / (self_s + other_s)
            else:
                self._avg_heart_rate = (self._avg_heart_rate + other._avg_heart_rate) / 2

        self._total_distance += other._total_distance
        self._total_time += other._total_time
        self._moving_time += other._moving_time
        self._max_speed = max(self._max_speed, other._max_speed)
        if other._altitude_extremities.has_data():
            self._altitude_extremities.update(other._altitude_extremities.min)
            self._altitude_extremities.update(other._altitude_extremities.max)
        if other._total_altitude_gain is not None:
            self._total_altitude_gain = (self._total_altitude_gain or 0.0) + other._total_altitude_gain
        if other._total_altitude_loss is not None:
            self._total_altitude_loss = (self._total_altitude_loss or 0.0) + other._total_altitude_loss
        if self._slope_percent is None:
            self._slope_percent = other._slope_percent

        self._total_chairlift_waiting_time += other._total_chairlift_waiting_time
        self._total_skiing_time += other._total_skiing_time
        self._end_of_run_counter += other._end_of_run_counter
        logger.debug("Merged statistics: %s", self)

    def is_initialized(self) -> bool:
        return self._start_time is not None

    def reset(self, start_time: Optional[datetime] = None) -> None:
        self._start_time = None
        self._stop_time = None

        self._total_distance = 0.0
        # Updated when new points are received, may be stale.
        self._total_time = timedelta(0)
        # Based on when we believe the user is traveling.
        self._moving_time = timedelta(0)
        # The maximum speed (m/s) that we believe is valid.
        self._max_speed = 0.0
        self._altitude_extremities.reset()
        self._total_altitude_gain: Optional[float] = None
        self._total_altitude_loss: Optional[float] = None
        self._avg_heart_rate: Optional[float] = None
        self._idle = False
        # Slope % between the last two points
        self._slope_percent: Optional[float] = None

        self._total_chairlift_waiting_time = timedelta(0)
        # Consecutive stagnant points near the base of the track
        self._end_of_run_counter = 0
        self._total_skiing_time = timedelta(0)

        if start_time is not None:
            self.set_start_time(start_time)

    # --- time range ---

    @property
    def start_time(self) -> Optional[datetime]:
        return self._start_time

    def set_start_time(self, start_time: datetime) -> None:
        """Should only be called on start."""
        self._start_time = ensure_aware(start_time)
        self.set_stop_time(start_time)

    @property
    def stop_time(self) -> Optional[datetime]:
        return self._stop_time

    def set_stop_time(self, stop_time: datetime) -> None:
        stop_time = ensure_aware(stop_time)
        # Events from different sensors may share a timestamp, so equal is fine.
        if self._start_time is not None and stop_time < self._start_time:
            raise StopTimeBeforeStartError(self._start_time, stop_time)
        self._stop_time = stop_time

    # --- distance and durations ---

    @property
    def total_distance(self) -> float:
        return self._total_distance

    def set_total_distance(self, distance_m: float) -> None:
        self._total_distance = distance_m

    def add_total_distance(self, distance_m: float) -> None:
        self._total_distance += distance_m

    @property
    def total_time(self) -> timedelta:
        """Time this track has been active, as of the last sample accounted for."""
        return self._total_time

    def set_total_time(self, total_time: timedelta) -> None:
        self._total_time = total_time

    @property
    def moving_time(self) -> timedelta:
        return self._moving_time

    def set_moving_time(self, moving_time: timedelta) -> None:
        self._moving_time = moving_time

    def add_moving_time(self, duration: timedelta) -> None:
        if duration < timedelta(0):
            raise NegativeDurationError(duration)
        self._moving_time += duration

    def add_moving_time_between(self, track_point, last_track_point) -> None:
        self.add_moving_time(track_point.time - last_track_point.time)

    @property
    def stopped_time(self) -> timedelta:
        return self._total_time - self._moving_time

    @property
    def idle(self) -> bool:
        return self._idle

    def set_idle(self, idle: bool) -> None:
        self._idle = idle

    # --- speed ---

    @property
    def average_speed(self) -> float:
        """Total distance over total time; 0 when no time has elapsed."""
        seconds = self._total_time.total_seconds()
        if seconds == 0:
            return 0.0
        return self._total_distance / seconds

    @property
    def average_moving_speed(self) -> float:
        seconds = self._moving_time.total_seconds()
        if seconds == 0:
            return 0.0
        return self._total_distance / seconds

    @property
    def max_speed(self) -> float:
        # The recorded max can be lower than the average if fast samples were filtered out.
        return max(self._max_speed, self.average_moving_speed)

    def set_max_speed(self, speed_mps: float) -> None:
        self._max_speed = speed_mps

    def update_max_speed(self, speed_mps: float) -> None:
        if speed_mps > self._max_speed:
            self._max_speed = speed_mps

    # --- heart rate ---

    def has_average_heart_rate(self) -> bool:
        return self._avg_heart_rate is not None

    @property
    def average_heart_rate(self) -> Optional[float]:
        return self._avg_heart_rate

    def set_average_heart_rate(self, heart_rate: Optional[float]) -> None:
        if heart_rate is not None:
            self._avg_heart_rate = heart_rate

    # --- altitude ---

    def has_altitude_min(self) -> bool:
        return self._altitude_extremities.min != float("inf")

    @property
    def min_altitude(self) -> float:
        return self._altitude_extremities.min

    def set_min_altitude(self, altitude_m: float) -> None:
        self._altitude_extremities.set_min(altitude_m)

    def has_altitude_max(self) -> bool:
        return self._altitude_extremities.max != float("-inf")

    @property
    def max_altitude(self) -> float:
        return self._altitude_extremities.max

    def set_max_altitude(self, altitude_m: float) -> None:
        self._altitude_extremities.set_max(altitude_m)

    def update_altitude_extremities(self, altitude_m: Optional[float]) -> None:
        if altitude_m is not None:
            self._altitude_extremities.update(altitude_m)

    def has_total_altitude_gain(self) -> bool:
        return self._total_altitude_gain is not None

    @property
    def total_altitude_gain(self) -> Optional[float]:
        return self._total_altitude_gain

    def set_total_altitude_gain(self, gain_m: Optional[float]) -> None:
        self._total_altitude_gain = gain_m

    def add_total_altitude_gain(self, gain_m: float) -> None:
        if self._total_altitude_gain is None:
            self._total_altitude_gain = 0.0
        self._total_altitude_gain += gain_m

    def has_total_altitude_loss(self) -> bool:
        return self._total_altitude_loss is not None

    @property
    def total_altitude_loss(self) -> Optional[float]:
        return self._total_altitude_loss

    def set_total_altitude_loss(self, loss_m: Optional[float]) -> None:
        self._total_altitude_loss = loss_m

    def add_total_altitude_loss(self, loss_m: float) -> None:
        if self._total_altitude_loss is None:
            self._total_altitude_loss = 0.0
        self._total_altitude_loss += loss_m

    def has_slope(self) -> bool:
        return self._slope_percent is not None

    @property
    def slope_percent(self) -> Optional[float]:
        return self._slope_percent

    def set_slope_percent(self, slope_percent: Optional[float]) -> None:
        self._slope_percent = slope_percent

    # --- skiing ---

    @property
    def total_chairlift_waiting_time(self) -> timedelta:
        """Total time spent waiting for a chairlift."""
        return self._total_chairlift_waiting_time

    def set_total_chairlift_waiting_time(self, waiting_time: timedelta) -> None:
        self._total_chairlift_waiting_time = waiting_time

    def add_chairlift_waiting_time(self, duration: timedelta) -> None:
        if duration < timedelta(0):
            raise NegativeDurationError(duration)
        self._total_chairlift_waiting_time += duration

    @property
    def end_of_run_counter(self) -> int:
        return self._end_of_run_counter

    def increment_end_of_run_counter(self) -> None:
        self._end_of_run_counter += 1

    def reset_end_of_run_counter(self) -> None:
        self._end_of_run_counter = 0

    @property
    def total_skiing_time(self) -> timedelta:
        return self._total_skiing_time

    def add_skiing_time(self, duration: timedelta) -> None:
        if duration < timedelta(0):
            raise NegativeDurationError(duration)
        self._total_skiing_time += duration

    # --- comparison ---

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, TrackStatistics):
            return NotImplemented
        return str(self) == str(other)

    __hash__ = None

    def __str__(self):
        start = self._start_time.isoformat() if self._start_time else None
        stop = self._stop_time.isoformat() if self._stop_time else None
        return (
            f"TrackStatistics {{ Start Time: {start}; Stop Time: {stop}"
            f"; Total Distance: {self._total_distance}; Total Time: {self._total_time}"
            f"; Moving Time: {self._moving_time}; Max Speed: {self.max_speed}"
            f"; Min Altitude: {self.min_altitude}; Max Altitude: {self.max_altitude}"
            f"; Altitude Gain: {self._total_altitude_gain}"
            f"; Altitude Loss: {self._total_altitude_loss}"
            f"; Avg Heart Rate: {self._avg_heart_rate}; Idle: {self._idle}"
            f"; Slope%: {self._slope_percent}"
            f"; Chairlift Waiting Time: {self._total_chairlift_waiting_time}"
            f"; End Of Run Counter: {self._end_of_run_counter}"
            f"; Skiing Time: {self._total_skiing_time} }}"
        )

    __repr__ = __str__
