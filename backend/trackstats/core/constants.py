"""Shared constants.

Centralizes values used across the statistics and segment code so we can
document and adjust them in one place. Tunable thresholds live in
``trackstats.core.config``.
"""

# Mean earth radius used by the haversine distance (meters)
EARTH_RADIUS_M = 6371000.0

# Default thresholds for skiing segment classification
SKIING_ALTITUDE_CHANGE_M = 10.0
SKIING_MIN_DURATION_S = 50
SKIING_SPEED_THRESHOLD_MPS = 5.0

# Minimum speed considered "moving" (m/s). ~1.1 mph.
MOVING_SPEED_MPS = 0.5

# Trailing window for near-real-time duration updates (seconds)
RECENT_WINDOW_S = 20

# Consecutive stagnant samples near the base before waiting time accrues
LIFT_STAGNANT_POINTS = 3
# How far above the lowest altitude of the track still counts as "the base"
LIFT_BASE_ALTITUDE_MARGIN_M = 20.0
