"""Base class for external forecast providers.

Every provider translates its native response into ConditionSamples in the
same units (feet, seconds, mph, degrees). Failures are reported by raising
ProviderError; the aggregator decides what to do with them.
"""

import logging
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any

import requests

from models.forecast import ConditionSample
from models.spot import Coordinate
from utils.config import FORECAST_WINDOW_HOURS, PROVIDER_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = timedelta(hours=FORECAST_WINDOW_HOURS)


class ProviderError(Exception):
    """A provider could not produce a forecast."""


class ProviderConfigurationError(ProviderError):
    """A provider is missing required configuration, e.g. its API key."""


class ForecastProvider(ABC):
    """A source of ocean/wind forecast samples."""

    name: str = "provider"

    def __init__(self, timeout: float = PROVIDER_TIMEOUT_SECONDS):
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        """Whether the provider has everything it needs to make requests."""
        return True

    @abstractmethod
    def fetch(
        self, coordinate: Coordinate, window: timedelta = DEFAULT_WINDOW
    ) -> list[ConditionSample]:
        """
        Fetch forecast samples for a coordinate.

        Args:
            coordinate: Point to forecast
            window: How far ahead of now to forecast

        Returns:
            Normalized samples, possibly empty

        Raises:
            ProviderError: On missing configuration, network failure,
                timeout, non-2xx status or an unreadable payload
        """

    def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET a JSON document, converting every failure into ProviderError."""
        try:
            response = requests.get(
                url, params=params, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout as e:
            raise ProviderError(f"{self.name} request timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"{self.name} request failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"{self.name} returned invalid JSON: {e}") from e


def safe_float(value: Any, default: float = 0.0) -> float:
    """Coerce a payload value to float, using the default when absent."""
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
