from pydantic_settings import BaseSettings
from pydantic import field_validator

from trackstats.core import constants


class Settings(BaseSettings):
    # Timezone used to decide which calendar day a sample belongs to.
    # Examples: "America/New_York", "Europe/Zurich", or "local" to use system tz.
    timezone: str = "local"

    # Below this speed (m/s) a segment counts as stopped
    moving_speed_mps: float = constants.MOVING_SPEED_MPS
    # Instantaneous speeds above this (m/s) are treated as GPS glitches
    max_speed_mps: float = 100.0

    # Skiing segment thresholds
    skiing_altitude_change_m: float = constants.SKIING_ALTITUDE_CHANGE_M
    skiing_min_duration_s: int = constants.SKIING_MIN_DURATION_S
    skiing_speed_threshold_mps: float | None = constants.SKIING_SPEED_THRESHOLD_MPS  # not enforced

    # Trailing window used when filtering recent samples
    recent_window_s: int = constants.RECENT_WINDOW_S

    # Chairlift waiting heuristic
    lift_stagnant_points: int = constants.LIFT_STAGNANT_POINTS
    lift_base_altitude_margin_m: float = constants.LIFT_BASE_ALTITUDE_MARGIN_M

    log_level: str = "INFO"

    # Allow empty env strings for optional fields
    @field_validator("skiing_speed_threshold_mps", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v in ("", None, "null", "None"):
            return None
        return v

    class Config:
        env_file = ".env"


settings = Settings()
