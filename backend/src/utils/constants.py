"""Shared constants for the surf ranking engine."""

# Composite score weights. Must sum to 1.0 so the composite stays in [0, 1].
WAVE_WEIGHT: float = 0.4
WIND_WEIGHT: float = 0.3
SKILL_WEIGHT: float = 0.2
DISTANCE_WEIGHT: float = 0.1

# Wind composite: speed vs. direction
WIND_SPEED_WEIGHT: float = 0.6
WIND_DIRECTION_WEIGHT: float = 0.4

# Partial credit band around the preferred wave range (30% of the boundary)
WAVE_TOLERANCE: float = 0.3

# Ordinal skill levels
SKILL_RANKS: dict[str, int] = {"beginner": 1, "intermediate": 2, "advanced": 3}

# Composite score bands, highest first
SCORE_BANDS: list[tuple[float, str]] = [
    (0.8, "excellent"),
    (0.6, "good"),
    (0.4, "fair"),
]
LOWEST_SCORE_BAND = "poor"

# Number of upcoming samples attached to each ranked spot
FORECAST_PREVIEW_SAMPLES = 24

# Unit conversions
METERS_TO_FEET = 3.28084
MS_TO_MPH = 2.23694
