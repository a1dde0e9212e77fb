"""Tests for PreferenceService."""

from decimal import Decimal

import pytest
from botocore.exceptions import ClientError

from models.spot import SkillLevel
from services.preference_service import PreferenceService


class TestPreferenceService:
    """Test cases for PreferenceService."""

    @pytest.fixture
    def preference_service(self, mock_dynamodb_table):
        return PreferenceService(mock_dynamodb_table)

    def test_get_preferences_not_found(self, preference_service):
        assert preference_service.get_preferences("session-123") is None

    def test_get_preferences(self, preference_service, mock_dynamodb_table):
        mock_dynamodb_table.get_item.return_value = {
            "Item": {
                "session_id": "session-123",
                "skill_level": "intermediate",
                "min_wave_height_ft": Decimal("3"),
                "max_wave_height_ft": Decimal("6.5"),
                "max_wind_speed_mph": Decimal("12"),
                "max_distance_km": Decimal("80"),
                "home_latitude": Decimal("33.66"),
                "home_longitude": Decimal("-118.0"),
                "created_at": "2026-06-01T00:00:00+00:00",
            }
        }

        profile = preference_service.get_preferences("session-123")

        assert profile.skill_level == SkillLevel.INTERMEDIATE
        assert profile.max_wave_height_ft == 6.5
        assert profile.home.latitude == pytest.approx(33.66)
        mock_dynamodb_table.get_item.assert_called_once_with(
            Key={"session_id": "session-123"}
        )

    def test_get_preferences_wraps_client_error(self, preference_service, mock_dynamodb_table):
        mock_dynamodb_table.get_item.side_effect = ClientError(
            {"Error": {"Code": "InternalServerError", "Message": "boom"}}, "GetItem"
        )

        with pytest.raises(Exception, match="Failed to retrieve preferences"):
            preference_service.get_preferences("session-123")

    def test_first_save_sets_timestamps(
        self, preference_service, mock_dynamodb_table, beginner_profile
    ):
        saved = preference_service.save_preferences(beginner_profile)

        assert saved.created_at is not None
        assert saved.created_at == saved.updated_at
        item = mock_dynamodb_table.put_item.call_args.kwargs["Item"]
        assert item["session_id"] == "session-123"
        assert item["skill_level"] == "beginner"
        assert item["max_wave_height_ft"] == Decimal("4.0")
        assert "home_latitude" not in item

    def test_update_keeps_created_at(
        self, preference_service, mock_dynamodb_table, beginner_profile
    ):
        mock_dynamodb_table.get_item.return_value = {
            "Item": {
                **beginner_profile.model_dump(mode="json", exclude_none=True),
                "created_at": "2026-06-01T00:00:00+00:00",
            }
        }

        saved = preference_service.save_preferences(
            beginner_profile.model_copy(update={"max_wave_height_ft": 5.0})
        )

        assert saved.created_at == "2026-06-01T00:00:00+00:00"
        assert saved.updated_at != saved.created_at
        assert saved.max_wave_height_ft == 5.0

    def test_save_wraps_client_error(
        self, preference_service, mock_dynamodb_table, beginner_profile
    ):
        mock_dynamodb_table.put_item.side_effect = ClientError(
            {"Error": {"Code": "InternalServerError", "Message": "boom"}}, "PutItem"
        )

        with pytest.raises(Exception, match="Failed to save preferences"):
            preference_service.save_preferences(beginner_profile)
