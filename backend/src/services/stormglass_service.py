"""Stormglass marine forecast provider."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from models.forecast import ConditionSample
from models.spot import Coordinate
from utils.config import STORMGLASS_API_KEY
from utils.constants import METERS_TO_FEET, MS_TO_MPH

from .forecast_provider import (
    DEFAULT_WINDOW,
    ForecastProvider,
    ProviderConfigurationError,
    ProviderError,
    safe_float,
)

logger = logging.getLogger(__name__)

STORMGLASS_PARAMS = ["waveHeight", "wavePeriod", "windSpeed", "windDirection"]


class StormglassService(ForecastProvider):
    """Wave and wind forecasts from the Stormglass point API.

    Stormglass reports each quantity per upstream model; only the blended
    ``sg`` value is used. Heights are metres and speeds m/s.
    """

    name = "stormglass"

    def __init__(self, api_key: str | None = STORMGLASS_API_KEY, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = "https://api.stormglass.io/v2/weather/point"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def fetch(
        self, coordinate: Coordinate, window: timedelta = DEFAULT_WINDOW
    ) -> list[ConditionSample]:
        if not self.api_key:
            raise ProviderConfigurationError("Stormglass API key not configured")

        start = datetime.now(UTC)
        params = {
            "lat": coordinate.latitude,
            "lng": coordinate.longitude,
            "params": ",".join(STORMGLASS_PARAMS),
            "start": int(start.timestamp()),
            "end": int((start + window).timestamp()),
        }
        data = self._get_json(
            self.base_url, params=params, headers={"Authorization": self.api_key}
        )

        hours = data.get("hours") if isinstance(data, dict) else None
        if hours is None:
            raise ProviderError("Stormglass response missing 'hours'")

        try:
            return [self._to_sample(hour) for hour in hours]
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Unexpected Stormglass response format: {e}") from e

    def _to_sample(self, hour: dict[str, Any]) -> ConditionSample:
        return ConditionSample(
            time=datetime.fromisoformat(hour["time"]),
            wave_height_ft=_sg_value(hour, "waveHeight") * METERS_TO_FEET,
            wave_period_s=_sg_value(hour, "wavePeriod"),
            wind_speed_mph=_sg_value(hour, "windSpeed") * MS_TO_MPH,
            wind_direction_deg=_sg_value(hour, "windDirection"),
            source=self.name,
        )


def _sg_value(hour: dict[str, Any], key: str) -> float:
    """Read the Stormglass blended ('sg') value of a quantity, 0 if missing."""
    value = hour.get(key) or {}
    return safe_float(value.get("sg") if isinstance(value, dict) else None)
