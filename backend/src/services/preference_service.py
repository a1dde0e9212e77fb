"""Preference profile storage service."""

from datetime import UTC, datetime

from botocore.exceptions import ClientError

from models.preferences import PreferenceProfile
from utils.dynamodb_utils import from_dynamodb, to_dynamodb


class PreferenceService:
    """Service for saving and loading preference profiles by session id."""

    def __init__(self, table):
        """Initialize the service with a DynamoDB table."""
        self.table = table

    def get_preferences(self, session_id: str) -> PreferenceProfile | None:
        """Get the preference profile for a session."""
        try:
            response = self.table.get_item(Key={"session_id": session_id})
        except ClientError as e:
            raise Exception(
                f"Failed to retrieve preferences for {session_id}: {str(e)}"
            )

        item = response.get("Item")
        if not item:
            return None
        return PreferenceProfile(**from_dynamodb(item))

    def save_preferences(self, profile: PreferenceProfile) -> PreferenceProfile:
        """
        Create or update the profile for a session.

        The first save sets ``created_at``; later saves keep it and refresh
        ``updated_at``.
        """
        now = datetime.now(UTC).isoformat()
        existing = self.get_preferences(profile.session_id)
        created_at = (
            existing.created_at if existing and existing.created_at else profile.created_at
        )

        saved = profile.model_copy(
            update={"created_at": created_at or now, "updated_at": now}
        )

        try:
            self.table.put_item(Item=to_dynamodb(saved.model_dump(mode="json")))
        except ClientError as e:
            raise Exception(f"Failed to save preferences: {str(e)}")

        return saved
