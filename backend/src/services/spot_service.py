"""Surf spot catalog service."""

import logging

from botocore.exceptions import ClientError

from models.spot import Coordinate, SurfSpot
from utils.dynamodb_utils import from_dynamodb, scan_all, to_dynamodb
from utils.geo_utils import find_within_radius

logger = logging.getLogger(__name__)


class SpotService:
    """Service for reading and seeding surf spot data."""

    def __init__(self, table):
        """Initialize the service with a DynamoDB table."""
        self.table = table

    def get_all_spots(self) -> list[SurfSpot]:
        """Get all spots from the database, sorted by name."""
        try:
            items = scan_all(self.table)
        except ClientError as e:
            raise Exception(f"Failed to retrieve spots from database: {str(e)}")

        spots = []
        for item in items:
            try:
                spots.append(SurfSpot(**item))
            except ValueError as e:
                logger.warning(f"Skipping malformed spot {item.get('spot_id')}: {e}")

        return sorted(spots, key=lambda s: s.name)

    def get_spot(self, spot_id: str) -> SurfSpot | None:
        """Get a specific spot by ID."""
        try:
            response = self.table.get_item(Key={"spot_id": spot_id})
        except ClientError as e:
            raise Exception(f"Failed to retrieve spot {spot_id}: {str(e)}")

        item = response.get("Item")
        if not item:
            return None
        return SurfSpot(**from_dynamodb(item))

    def create_spot(self, spot: SurfSpot) -> SurfSpot:
        """Create a new spot; an existing spot id is rejected."""
        item = to_dynamodb(spot.model_dump(mode="json"))
        try:
            self.table.put_item(
                Item=item, ConditionExpression="attribute_not_exists(spot_id)"
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise Exception(f"Spot {spot.spot_id} already exists")
            raise Exception(f"Failed to create spot: {str(e)}")
        return spot

    def find_within_radius(
        self, center: Coordinate, radius_km: float
    ) -> list[tuple[SurfSpot, float]]:
        """
        Get spots within a radius of a point, nearest first.

        Candidates come from get_all_spots, so spots at the same distance are
        ordered by name.

        Args:
            center: Search origin
            radius_km: Search radius in kilometers (inclusive)

        Returns:
            List of (SurfSpot, distance_km) tuples; empty for a non-positive
            radius or when nothing is in range

        Raises:
            Exception: If the spots table cannot be read
        """
        if radius_km <= 0:
            return []
        return find_within_radius(
            center.latitude, center.longitude, radius_km, self.get_all_spots()
        )
