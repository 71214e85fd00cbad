import datetime as dt
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from trackstats.schemas.track_point import TrackPoint
from trackstats.stats.track_statistics import TrackStatistics


class TrackRequest(BaseModel):
    """Samples of one track, in time order."""

    activity_type: str = "unknown"
    points: List[TrackPoint] = Field(default_factory=list)


class AggregateRequest(BaseModel):
    tracks: List[TrackRequest]


class DailySkiingRequest(BaseModel):
    points: List[TrackPoint]
    date: Optional[dt.date] = None  # today when omitted
    timezone: Optional[str] = None  # settings.timezone when omitted


class TrackStatisticsRead(BaseModel):
    """Statistics in SI units; formatting is up to the client."""

    start_time: Optional[dt.datetime] = None
    stop_time: Optional[dt.datetime] = None
    total_distance_m: float
    total_time_s: float
    moving_time_s: float
    stopped_time_s: float
    average_speed_mps: float
    average_moving_speed_mps: float
    max_speed_mps: float
    min_altitude_m: Optional[float] = None
    max_altitude_m: Optional[float] = None
    total_altitude_gain_m: Optional[float] = None
    total_altitude_loss_m: Optional[float] = None
    average_heart_rate_bpm: Optional[float] = None
    slope_percent: Optional[float] = None
    idle: bool = False
    chairlift_waiting_time_s: float = 0.0
    skiing_time_s: float = 0.0

    @classmethod
    def from_statistics(cls, stats: TrackStatistics) -> "TrackStatisticsRead":
        return cls(
            start_time=stats.start_time,
            stop_time=stats.stop_time,
            total_distance_m=stats.total_distance,
            total_time_s=stats.total_time.total_seconds(),
            moving_time_s=stats.moving_time.total_seconds(),
            stopped_time_s=stats.stopped_time.total_seconds(),
            average_speed_mps=stats.average_speed,
            average_moving_speed_mps=stats.average_moving_speed,
            max_speed_mps=stats.max_speed,
            min_altitude_m=stats.min_altitude if stats.has_altitude_min() else None,
            max_altitude_m=stats.max_altitude if stats.has_altitude_max() else None,
            total_altitude_gain_m=stats.total_altitude_gain,
            total_altitude_loss_m=stats.total_altitude_loss,
            average_heart_rate_bpm=stats.average_heart_rate,
            slope_percent=stats.slope_percent,
            idle=stats.idle,
            chairlift_waiting_time_s=stats.total_chairlift_waiting_time.total_seconds(),
            skiing_time_s=stats.total_skiing_time.total_seconds(),
        )


class AggregatedStatisticRead(BaseModel):
    activity_type: str
    count_tracks: int
    statistics: TrackStatisticsRead


class DailySkiingRead(BaseModel):
    date: dt.date
    timezone: str
    skiing_duration_s: float
    by_date: Dict[dt.date, float]
