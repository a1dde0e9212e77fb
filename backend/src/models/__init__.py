"""Data models for the surf spot ranking engine."""

from .forecast import ConditionSample, sort_series
from .preferences import PreferenceProfile
from .spot import BreakType, Coordinate, SkillLevel, SurfSpot

__all__ = [
    "BreakType",
    "ConditionSample",
    "Coordinate",
    "PreferenceProfile",
    "SkillLevel",
    "SurfSpot",
    "sort_series",
]
