"""Spot data seeder for populating the spots table from the bundled catalog."""

import logging
from typing import Any

from services.spot_service import SpotService

from .spot_loader import SpotLoader

logger = logging.getLogger(__name__)


class SpotSeeder:
    """Service for seeding catalog spots into the database."""

    def __init__(self, spot_service: SpotService, loader: SpotLoader | None = None):
        """Initialize the seeder with a spot service and catalog loader."""
        self.spot_service = spot_service
        self.loader = loader or SpotLoader()

    def seed_spots(self, region: str | None = None) -> dict[str, Any]:
        """
        Create every catalog spot that is not in the table yet.

        Args:
            region: Optional region filter

        Returns:
            Dictionary with seeding results and statistics.
        """
        logger.info("Starting spot data seeding...")

        results = {
            "spots_created": 0,
            "spots_skipped": 0,
            "errors": [],
            "created_spots": [],
        }

        for spot in self.loader.get_spots(region):
            try:
                if self.spot_service.get_spot(spot.spot_id):
                    logger.info(f"Spot {spot.spot_id} already exists, skipping")
                    results["spots_skipped"] += 1
                    continue

                created = self.spot_service.create_spot(spot)
                logger.info(f"Successfully created spot: {created.name}")
                results["spots_created"] += 1
                results["created_spots"].append(created.spot_id)

            except Exception as e:
                error_msg = f"Failed to create spot {spot.spot_id}: {str(e)}"
                logger.error(error_msg)
                results["errors"].append(error_msg)

        logger.info(
            f"Spot seeding completed. Created: {results['spots_created']}, "
            f"Skipped: {results['spots_skipped']}, Errors: {len(results['errors'])}"
        )
        return results

    def get_spot_summary(self) -> dict[str, Any]:
        """Get a summary of the spots currently in the database."""
        spots = self.spot_service.get_all_spots()

        summary = {
            "total_spots": len(spots),
            "spots_by_region": {},
            "spots_by_difficulty": {},
        }

        for spot in spots:
            by_region = summary["spots_by_region"]
            by_region[spot.region] = by_region.get(spot.region, 0) + 1

            difficulty = spot.difficulty.value
            by_difficulty = summary["spots_by_difficulty"]
            by_difficulty[difficulty] = by_difficulty.get(difficulty, 0) + 1

        return summary
