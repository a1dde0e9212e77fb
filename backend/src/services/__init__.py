"""Services for Surf Spot Ranker backend."""

from .forecast_cache import DynamoDBForecastCache, InMemoryForecastCache
from .forecast_provider import ForecastProvider, ProviderConfigurationError, ProviderError
from .forecast_service import ForecastService
from .openmeteo_service import OpenMeteoService
from .openweather_service import OpenWeatherService
from .preference_service import PreferenceService
from .ranking_service import RankingService, ScoredCandidate
from .spot_service import SpotService
from .stormglass_service import StormglassService

__all__ = [
    "ForecastProvider",
    "ProviderError",
    "ProviderConfigurationError",
    "StormglassService",
    "OpenWeatherService",
    "OpenMeteoService",
    "InMemoryForecastCache",
    "DynamoDBForecastCache",
    "ForecastService",
    "SpotService",
    "PreferenceService",
    "RankingService",
    "ScoredCandidate",
]
