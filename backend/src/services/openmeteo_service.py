"""Open-Meteo wave and wind forecast provider."""

import logging
import math
from datetime import UTC, datetime, timedelta
from typing import Any

from models.forecast import ConditionSample
from models.spot import Coordinate
from utils.constants import METERS_TO_FEET

from .forecast_provider import DEFAULT_WINDOW, ForecastProvider, ProviderError, safe_float

logger = logging.getLogger(__name__)

# Open-Meteo serves at most 16 forecast days
MAX_FORECAST_DAYS = 16


class OpenMeteoService(ForecastProvider):
    """Service for fetching wave and wind forecasts from Open-Meteo.

    Open-Meteo provides:
    - Free API (no key required)
    - Hourly wave height and period from the marine API
    - Hourly 10 m wind from the weather forecast API

    The two hourly series are joined on their timestamps. An hour present in
    the marine series but missing from the wind series gets zero wind. When
    only the marine request fails, samples follow the wind series with zero
    waves. The fetch fails only when neither series is available.
    """

    name = "open-meteo"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.marine_url = "https://marine-api.open-meteo.com/v1/marine"
        self.base_url = "https://api.open-meteo.com/v1/forecast"

    def fetch(
        self, coordinate: Coordinate, window: timedelta = DEFAULT_WINDOW
    ) -> list[ConditionSample]:
        forecast_days = max(1, min(MAX_FORECAST_DAYS, math.ceil(window / timedelta(days=1))))
        common = {
            "latitude": coordinate.latitude,
            "longitude": coordinate.longitude,
            "forecast_days": forecast_days,
            "timezone": "GMT",  # Use GMT so timestamps match datetime.now(UTC)
        }

        marine_hourly: dict[str, Any] = {}
        marine_error = None
        try:
            marine = self._get_json(
                self.marine_url, params={**common, "hourly": "wave_height,wave_period"}
            )
            marine_hourly = (marine or {}).get("hourly") or {}
        except ProviderError as e:
            marine_error = e

        try:
            weather = self._get_json(
                self.base_url,
                params={
                    **common,
                    "hourly": "wind_speed_10m,wind_direction_10m",
                    "wind_speed_unit": "mph",
                },
            )
            wind_hourly = (weather or {}).get("hourly") or {}
        except ProviderError:
            if marine_error is not None:
                raise
            logger.warning("Open-Meteo wind request failed, using zero wind")
            wind_hourly = {}

        times = marine_hourly.get("time")
        wave_heights = marine_hourly.get("wave_height") or []
        wave_periods = marine_hourly.get("wave_period") or []
        if not times:
            # Wind-only samples; waves stay at zero
            times = wind_hourly.get("time")
            if not times:
                raise ProviderError("Open-Meteo responses missing hourly data") from marine_error
            logger.warning(
                f"Open-Meteo marine data unavailable, using wind only: "
                f"{marine_error or 'no hourly data'}"
            )
            wave_heights, wave_periods = [], []

        wind_by_time = self._index_wind(wind_hourly)

        window_end = datetime.now(UTC) + window
        samples = []
        try:
            for i, time_str in enumerate(times):
                wind_speed, wind_direction = wind_by_time.get(time_str, (0.0, 0.0))
                sample = ConditionSample(
                    time=datetime.fromisoformat(time_str),
                    wave_height_ft=_at(wave_heights, i) * METERS_TO_FEET,
                    wave_period_s=_at(wave_periods, i),
                    wind_speed_mph=wind_speed,
                    wind_direction_deg=wind_direction,
                    source=self.name,
                )
                if sample.time <= window_end:
                    samples.append(sample)
        except (TypeError, ValueError) as e:
            raise ProviderError(f"Unexpected Open-Meteo response format: {e}") from e

        return samples

    def _index_wind(self, hourly: dict[str, Any]) -> dict[str, tuple[float, float]]:
        """Map each hourly timestamp string to (wind speed mph, direction)."""
        speeds = hourly.get("wind_speed_10m") or []
        directions = hourly.get("wind_direction_10m") or []
        return {
            time_str: (_at(speeds, i), _at(directions, i))
            for i, time_str in enumerate(hourly.get("time") or [])
        }


def _at(values: list[Any], index: int) -> float:
    """Value at index as float; 0 when the list is short or the value is null."""
    if index >= len(values):
        return 0.0
    return safe_float(values[index])
