import math
from typing import Optional

from trackstats.core import constants
from trackstats.core.config import Settings
from trackstats.stats.geo import haversine


class SegmentClassifier:
    """Decides whether the interval between two samples was spent skiing.

    Only the altitude change and the elapsed time gate the decision. The
    speed threshold is kept configurable and ``average_speed`` is available
    to callers, but neither is consulted by ``is_qualifying``.
    """

    def __init__(
        self,
        altitude_change_threshold_m: float = constants.SKIING_ALTITUDE_CHANGE_M,
        min_duration_s: float = constants.SKIING_MIN_DURATION_S,
        speed_threshold_mps: Optional[float] = constants.SKIING_SPEED_THRESHOLD_MPS,
    ):
        self.altitude_change_threshold_m = altitude_change_threshold_m
        self.min_duration_s = min_duration_s
        self.speed_threshold_mps = speed_threshold_mps

    @classmethod
    def from_settings(cls, settings: Settings) -> "SegmentClassifier":
        return cls(
            altitude_change_threshold_m=settings.skiing_altitude_change_m,
            min_duration_s=settings.skiing_min_duration_s,
            speed_threshold_mps=settings.skiing_speed_threshold_mps,
        )

    def is_qualifying(self, start_point, end_point) -> bool:
        # Without a usable altitude on both ends there is nothing to judge the descent by
        if not (_usable_altitude(start_point.altitude) and _usable_altitude(end_point.altitude)):
            return False
        altitude_change = abs(start_point.altitude - end_point.altitude)
        if altitude_change < self.altitude_change_threshold_m:
            return False

        elapsed_s = (end_point.time - start_point.time).total_seconds()
        return elapsed_s >= self.min_duration_s

    def average_speed(self, start_point, end_point) -> Optional[float]:
        """Ground speed (m/s) between two positioned samples, or None."""
        if not (start_point.has_location() and end_point.has_location()):
            return None
        elapsed_s = (end_point.time - start_point.time).total_seconds()
        if elapsed_s <= 0:
            return None
        distance_m = haversine(
            start_point.latitude, start_point.longitude, end_point.latitude, end_point.longitude
        )
        return distance_m / elapsed_s


def _usable_altitude(altitude) -> bool:
    return altitude is not None and not math.isnan(altitude)
