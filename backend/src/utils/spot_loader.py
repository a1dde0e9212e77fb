"""Load surf spot data from the bundled JSON catalog."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from models.spot import SurfSpot

logger = logging.getLogger(__name__)

# Path to spot data JSON
DATA_FILE = Path(__file__).parent.parent.parent / "data" / "spots.json"


class SpotLoader:
    """Load and validate spot data from a JSON file."""

    def __init__(self, data_file: Path = DATA_FILE):
        self.data_file = data_file
        self._data: dict[str, Any] | None = None

    def load(self) -> dict[str, Any]:
        """Load data from JSON file."""
        if self._data is None:
            if not self.data_file.exists():
                raise FileNotFoundError(f"Spot data file not found: {self.data_file}")

            with open(self.data_file, "r", encoding="utf-8") as f:
                self._data = json.load(f)

            logger.info(
                f"Loaded {len(self._data.get('spots', []))} spots from {self.data_file}"
            )

        return self._data

    def get_spots(self, region: str | None = None) -> list[SurfSpot]:
        """
        Get all spots as SurfSpot model objects.

        Rows that fail validation are skipped with a warning.

        Args:
            region: Optional region filter (e.g., 'Orange County')
        """
        raw_spots = self.load().get("spots", [])
        if region:
            raw_spots = [s for s in raw_spots if s.get("region") == region]

        spots = []
        for raw in raw_spots:
            try:
                spots.append(SurfSpot(**raw))
            except ValidationError as e:
                logger.warning(
                    f"Skipping invalid spot {raw.get('spot_id', 'unknown')}: {e}"
                )
        return spots


def load_spots(region: str | None = None) -> list[SurfSpot]:
    """Load spots from the bundled JSON file."""
    return SpotLoader().get_spots(region)
