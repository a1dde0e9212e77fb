"""Tests for data models."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from models.forecast import NO_DATA_SOURCE, ConditionSample, sort_series
from models.preferences import PreferenceProfile
from models.spot import BreakType, Coordinate, SkillLevel, SurfSpot


class TestSurfSpot:
    """Test cases for SurfSpot model."""

    def test_defaults(self):
        spot = SurfSpot(
            spot_id="x", name="X", latitude=33.0, longitude=-117.0, region="Test"
        )
        assert spot.break_type == BreakType.OTHER
        assert spot.difficulty == SkillLevel.INTERMEDIATE
        assert spot.coordinate == Coordinate(latitude=33.0, longitude=-117.0)

    def test_rejects_out_of_range_latitude(self):
        with pytest.raises(ValidationError):
            SurfSpot(spot_id="x", name="X", latitude=91, longitude=0, region="Test")

    def test_rejects_empty_id(self):
        with pytest.raises(ValidationError):
            SurfSpot(spot_id="", name="X", latitude=0, longitude=0, region="Test")

    def test_is_frozen(self, sample_spot):
        with pytest.raises(ValidationError):
            sample_spot.name = "Renamed"


class TestPreferenceProfile:
    """Test cases for PreferenceProfile model."""

    def _profile(self, **overrides):
        data = {
            "session_id": "s",
            "skill_level": "beginner",
            "min_wave_height_ft": 2,
            "max_wave_height_ft": 4,
            "max_wind_speed_mph": 15,
            "max_distance_km": 50,
        }
        data.update(overrides)
        return PreferenceProfile(**data)

    def test_valid_profile(self):
        profile = self._profile()
        assert profile.skill_level == SkillLevel.BEGINNER
        assert profile.home is None

    def test_min_must_be_below_max(self):
        with pytest.raises(ValidationError):
            self._profile(min_wave_height_ft=4, max_wave_height_ft=4)

    @pytest.mark.parametrize(
        "field", ["max_wave_height_ft", "max_wind_speed_mph", "max_distance_km"]
    )
    def test_maximums_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            self._profile(**{field: 0})

    def test_unknown_skill_level(self):
        with pytest.raises(ValidationError):
            self._profile(skill_level="expert")

    def test_home_requires_both_coordinates(self):
        with pytest.raises(ValidationError):
            self._profile(home_latitude=33.0)

    def test_home_coordinate(self):
        profile = self._profile(home_latitude=33.0, home_longitude=-117.0)
        assert profile.home == Coordinate(latitude=33.0, longitude=-117.0)


class TestConditionSample:
    """Test cases for ConditionSample model."""

    def test_naive_time_is_utc(self):
        sample = ConditionSample(time=datetime(2026, 7, 1, 12), source="x")
        assert sample.time.tzinfo is not None
        assert sample.time == datetime(2026, 7, 1, 12, tzinfo=UTC)

    def test_offset_time_is_converted_to_utc(self):
        pacific = timezone(timedelta(hours=-7))
        sample = ConditionSample(time=datetime(2026, 7, 1, 5, tzinfo=pacific), source="x")
        assert sample.time == datetime(2026, 7, 1, 12, tzinfo=UTC)
        assert sample.time.utcoffset() == timedelta(0)

    def test_wind_direction_wraps(self):
        assert ConditionSample(time=datetime.now(UTC), wind_direction_deg=370, source="x").wind_direction_deg == 10

    def test_rejects_negative_wave_height(self):
        with pytest.raises(ValidationError):
            ConditionSample(time=datetime.now(UTC), wave_height_ft=-1, source="x")

    def test_empty_sentinel(self, fixed_now):
        sample = ConditionSample.empty(fixed_now)
        assert sample.time == fixed_now
        assert sample.source == NO_DATA_SOURCE
        assert sample.wave_height_ft == sample.wind_speed_mph == 0.0

    def test_sort_series(self, hourly_series):
        assert sort_series(list(reversed(hourly_series))) == hourly_series

    def test_to_dict(self, sample_condition):
        data = sample_condition.to_dict()
        assert data["time"] == "2026-07-01T12:00:00+00:00"
        assert data["source"] == "stormglass"
