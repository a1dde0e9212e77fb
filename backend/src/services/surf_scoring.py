"""Surf condition scoring.

Pure functions that turn current conditions and a preference profile into
per-factor scores in [0, 1] and a weighted composite. Nothing here touches
the network or shared state, so identical inputs always give identical
scores.
"""

from dataclasses import dataclass
from datetime import datetime

from models.forecast import ConditionSample
from models.preferences import PreferenceProfile
from models.spot import SkillLevel, SurfSpot
from utils.constants import (
    DISTANCE_WEIGHT,
    LOWEST_SCORE_BAND,
    SCORE_BANDS,
    SKILL_RANKS,
    SKILL_WEIGHT,
    WAVE_TOLERANCE,
    WAVE_WEIGHT,
    WIND_DIRECTION_WEIGHT,
    WIND_SPEED_WEIGHT,
    WIND_WEIGHT,
)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Component and composite scores for one spot."""

    wave: float
    wind: float
    skill: float
    distance: float
    composite: float

    @classmethod
    def zero(cls) -> "ScoreBreakdown":
        return cls(wave=0.0, wind=0.0, skill=0.0, distance=0.0, composite=0.0)


def wave_height_score(wave_height: float, min_height: float, max_height: float) -> float:
    """
    Score a wave height against the preferred range.

    Inside [min, max] the score is a triangle peaking at 1.0 on the midpoint
    and reaching 0 at either boundary. Just outside the range, up to 30% of
    the nearer boundary, partial credit falls linearly from 0.5 to 0.
    Anything further out scores 0.
    """
    if wave_height < min_height * (1 - WAVE_TOLERANCE):
        return 0.0
    if wave_height > max_height * (1 + WAVE_TOLERANCE):
        return 0.0

    if min_height <= wave_height <= max_height:
        mid_point = (min_height + max_height) / 2
        half_range = (max_height - min_height) / 2
        if half_range <= 0:
            return 1.0
        return max(0.0, 1 - abs(wave_height - mid_point) / half_range)

    if wave_height < min_height:
        deficit = min_height - wave_height
        return max(0.0, 0.5 * (1 - deficit / (min_height * WAVE_TOLERANCE)))

    excess = wave_height - max_height
    return max(0.0, 0.5 * (1 - excess / (max_height * WAVE_TOLERANCE)))


def wind_direction_score(direction: float) -> float:
    """
    Score the compass bearing the wind blows from.

    - 45-135 (offshore for the west-facing coast): 1.0
    - 315-45 (north): 0.8
    - 135-180 (south): 0.7
    - 180-225 (southwest): 0.4
    - 225-315 (onshore): 0.1 at due west rising to 0.4 at the arc ends
    """
    bearing = direction % 360

    if 45 <= bearing <= 135:
        return 1.0
    if bearing >= 315 or bearing <= 45:
        return 0.8
    if bearing <= 180:
        return 0.7
    if bearing <= 225:
        return 0.4

    distance_from_worst = min(abs(bearing - 270), 45)
    return 0.1 + (distance_from_worst / 45) * 0.3


def wind_score(wind_speed: float, wind_direction: float, max_wind_speed: float) -> float:
    """Combine wind speed and direction; 0 when speed exceeds the maximum."""
    if max_wind_speed <= 0 or wind_speed > max_wind_speed:
        return 0.0

    speed_score = max(0.0, 1 - wind_speed / max_wind_speed)
    return (
        WIND_SPEED_WEIGHT * speed_score
        + WIND_DIRECTION_WEIGHT * wind_direction_score(wind_direction)
    )


def skill_score(spot_difficulty: SkillLevel | str, user_skill: SkillLevel | str) -> float:
    """Score how well a spot's difficulty suits the surfer."""
    spot_level = SKILL_RANKS[SkillLevel(spot_difficulty).value]
    user_level = SKILL_RANKS[SkillLevel(user_skill).value]

    if spot_level == user_level:
        return 1.0
    # Beginner at an advanced spot is unsafe
    if user_level == 1 and spot_level == 3:
        return 0.0
    if user_level == 3 and spot_level == 1:
        return 0.6
    return 0.7


def distance_score(distance_km: float, max_distance_km: float) -> float:
    """Linear decay from 1.0 at the origin to 0 at the maximum distance."""
    if max_distance_km <= 0 or distance_km > max_distance_km:
        return 0.0
    return max(0.0, 1 - distance_km / max_distance_km)


def composite_score(wave: float, wind: float, skill: float, distance: float) -> float:
    """Weighted sum of the component scores."""
    return (
        WAVE_WEIGHT * wave
        + WIND_WEIGHT * wind
        + SKILL_WEIGHT * skill
        + DISTANCE_WEIGHT * distance
    )


def current_conditions(
    series: list[ConditionSample], at: datetime
) -> ConditionSample | None:
    """Return the sample closest in time to ``at`` (first wins on ties)."""
    if not series:
        return None
    return min(series, key=lambda sample: abs(sample.time - at))


def score_conditions(
    spot: SurfSpot,
    distance_km: float,
    conditions: ConditionSample | None,
    profile: PreferenceProfile,
) -> ScoreBreakdown:
    """
    Score one spot for a profile.

    Missing conditions are scored as all-zero input rather than skipped.
    """
    sample = conditions or ConditionSample.empty()

    wave = wave_height_score(
        sample.wave_height_ft, profile.min_wave_height_ft, profile.max_wave_height_ft
    )
    wind = wind_score(
        sample.wind_speed_mph, sample.wind_direction_deg, profile.max_wind_speed_mph
    )
    skill = skill_score(spot.difficulty, profile.skill_level)
    distance = distance_score(distance_km, profile.max_distance_km)

    return ScoreBreakdown(
        wave=wave,
        wind=wind,
        skill=skill,
        distance=distance,
        composite=composite_score(wave, wind, skill, distance),
    )


def score_band(composite: float) -> str:
    """Label a composite score: excellent, good, fair or poor."""
    for threshold, label in SCORE_BANDS:
        if composite >= threshold:
            return label
    return LOWEST_SCORE_BAND
