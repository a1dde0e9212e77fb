"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest

from models.forecast import ConditionSample
from models.preferences import PreferenceProfile
from models.spot import BreakType, SkillLevel, SurfSpot

FIXED_NOW = datetime(2026, 7, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def fixed_now():
    """A fixed evaluation instant."""
    return FIXED_NOW


@pytest.fixture
def sample_spot():
    """Create a sample beginner spot for testing."""
    return SurfSpot(
        spot_id="linda-mar",
        name="Linda Mar",
        latitude=37.5946,
        longitude=-122.5030,
        region="San Mateo County",
        break_type=BreakType.BEACH,
        difficulty=SkillLevel.BEGINNER,
        description="Sheltered beach break in Pacifica",
    )


@pytest.fixture
def sample_spots():
    """Create sample spots at different distances from Pacifica."""
    return [
        SurfSpot(
            spot_id="linda-mar",
            name="Linda Mar",
            latitude=37.5946,
            longitude=-122.5030,
            region="San Mateo County",
            break_type=BreakType.BEACH,
            difficulty=SkillLevel.BEGINNER,
        ),
        SurfSpot(
            spot_id="ocean-beach-sf",
            name="Ocean Beach",
            latitude=37.7594,
            longitude=-122.5107,
            region="San Francisco",
            break_type=BreakType.BEACH,
            difficulty=SkillLevel.ADVANCED,
        ),
        SurfSpot(
            spot_id="mavericks",
            name="Mavericks",
            latitude=37.4949,
            longitude=-122.4996,
            region="San Mateo County",
            break_type=BreakType.REEF,
            difficulty=SkillLevel.ADVANCED,
        ),
    ]


@pytest.fixture
def beginner_profile():
    """Create a beginner preference profile."""
    return PreferenceProfile(
        session_id="session-123",
        skill_level=SkillLevel.BEGINNER,
        min_wave_height_ft=2.0,
        max_wave_height_ft=4.0,
        max_wind_speed_mph=15.0,
        max_distance_km=50.0,
    )


@pytest.fixture
def sample_condition(fixed_now):
    """Create a clean, small-wave condition sample."""
    return ConditionSample(
        time=fixed_now,
        wave_height_ft=3.0,
        wave_period_s=12.0,
        wind_speed_mph=5.0,
        wind_direction_deg=90.0,
        source="stormglass",
    )


@pytest.fixture
def hourly_series(fixed_now):
    """Create a 48 hour series starting 12 hours before the fixed instant."""
    start = fixed_now - timedelta(hours=12)
    return [
        ConditionSample(
            time=start + timedelta(hours=h),
            wave_height_ft=3.0,
            wave_period_s=11.0,
            wind_speed_mph=5.0,
            wind_direction_deg=90.0,
            source="open-meteo",
        )
        for h in range(48)
    ]


@pytest.fixture
def mock_dynamodb_table():
    """Create a mock DynamoDB table."""
    table = Mock()
    table.put_item.return_value = {}
    table.get_item.return_value = {}
    table.scan.return_value = {"Items": []}
    table.query.return_value = {"Items": []}
    return table
