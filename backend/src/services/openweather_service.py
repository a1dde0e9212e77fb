"""OpenWeatherMap wind forecast provider."""

import logging
from datetime import UTC, datetime, timedelta

from models.forecast import ConditionSample
from models.spot import Coordinate
from utils.config import OPENWEATHERMAP_API_KEY
from utils.constants import MS_TO_MPH

from .forecast_provider import (
    DEFAULT_WINDOW,
    ForecastProvider,
    ProviderConfigurationError,
    ProviderError,
    safe_float,
)

logger = logging.getLogger(__name__)


class OpenWeatherService(ForecastProvider):
    """Wind forecasts from the OpenWeatherMap 5 day / 3 hour forecast.

    The free tier has no wave data, so wave height and period are reported
    as 0.
    """

    name = "openweathermap"

    def __init__(self, api_key: str | None = OPENWEATHERMAP_API_KEY, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = "https://api.openweathermap.org/data/2.5/forecast"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def fetch(
        self, coordinate: Coordinate, window: timedelta = DEFAULT_WINDOW
    ) -> list[ConditionSample]:
        if not self.api_key:
            raise ProviderConfigurationError("OpenWeatherMap API key not configured")

        params = {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "appid": self.api_key,
            "units": "metric",
        }
        data = self._get_json(self.base_url, params=params)

        items = data.get("list") if isinstance(data, dict) else None
        if items is None:
            raise ProviderError("OpenWeatherMap response missing 'list'")

        window_end = datetime.now(UTC) + window
        samples = []
        try:
            for item in items:
                wind = item.get("wind") or {}
                sample = ConditionSample(
                    time=datetime.fromtimestamp(int(item["dt"]), tz=UTC),
                    wave_height_ft=0.0,
                    wave_period_s=0.0,
                    wind_speed_mph=safe_float(wind.get("speed")) * MS_TO_MPH,
                    wind_direction_deg=safe_float(wind.get("deg")),
                    source=self.name,
                )
                if sample.time <= window_end:
                    samples.append(sample)
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Unexpected OpenWeatherMap response format: {e}") from e
        return samples
