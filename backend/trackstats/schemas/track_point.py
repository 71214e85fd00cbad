from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from trackstats.core.time_utils import ensure_aware


class TrackPoint(BaseModel):
    """One timestamped GPS/sensor reading.

    Everything except the timestamp is optional; consumers check for None
    before using a value.
    """

    model_config = ConfigDict(frozen=True)

    time: datetime
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    altitude: Optional[float] = None  # meters
    speed: Optional[float] = None  # m/s, as reported by the device
    heart_rate: Optional[float] = None  # bpm

    # Naive timestamps are assumed to be UTC
    @field_validator("time")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        return ensure_aware(v)

    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def has_altitude(self) -> bool:
        return self.altitude is not None

    def has_speed(self) -> bool:
        return self.speed is not None

    def has_heart_rate(self) -> bool:
        return self.heart_rate is not None
