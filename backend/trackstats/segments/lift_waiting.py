from datetime import timedelta
from enum import Enum

from trackstats.core import constants


class LiftState(str, Enum):
    active = "active"
    waiting = "waiting"
    on_lift = "on_lift"


class ChairliftWaitingDetector:
    """Counts time spent standing at the bottom of the slope.

    Each stagnant sample close to the lowest altitude of the track bumps the
    statistics' end-of-run counter. Once the counter reaches
    ``stagnant_points_threshold`` every further stagnant segment is added to
    the chairlift waiting time. Moving uphill (riding the lift) or any other
    movement resets the counter.
    """

    def __init__(
        self,
        moving_speed_mps: float = constants.MOVING_SPEED_MPS,
        stagnant_points_threshold: int = constants.LIFT_STAGNANT_POINTS,
        base_altitude_margin_m: float = constants.LIFT_BASE_ALTITUDE_MARGIN_M,
    ):
        self.moving_speed_mps = moving_speed_mps
        self.stagnant_points_threshold = stagnant_points_threshold
        self.base_altitude_margin_m = base_altitude_margin_m
        self.state = LiftState.active

    @classmethod
    def from_settings(cls, settings) -> "ChairliftWaitingDetector":
        return cls(
            moving_speed_mps=settings.moving_speed_mps,
            stagnant_points_threshold=settings.lift_stagnant_points,
            base_altitude_margin_m=settings.lift_base_altitude_margin_m,
        )

    def _near_base(self, statistics, track_point) -> bool:
        if track_point.altitude is None or not statistics.has_altitude_min():
            return False
        return track_point.altitude - statistics.min_altitude <= self.base_altitude_margin_m

    def update(self, statistics, last_track_point, track_point, speed_mps: float) -> LiftState:
        """Feed one segment; returns the state the segment was classified as."""
        moving = speed_mps >= self.moving_speed_mps
        ascending = (
            track_point.altitude is not None
            and last_track_point.altitude is not None
            and track_point.altitude > last_track_point.altitude
        )

        if not moving and self._near_base(statistics, track_point):
            statistics.increment_end_of_run_counter()
            if statistics.end_of_run_counter >= self.stagnant_points_threshold:
                duration = track_point.time - last_track_point.time
                if duration > timedelta(0):
                    statistics.add_chairlift_waiting_time(duration)
                self.state = LiftState.waiting
            else:
                self.state = LiftState.active
            return self.state

        statistics.reset_end_of_run_counter()
        self.state = LiftState.on_lift if moving and ascending else LiftState.active
        return self.state
