"""Runtime configuration read from environment variables.

Provider credentials are optional: a missing key disables that provider
instead of failing startup.
"""

import os

ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")

# DynamoDB tables
SPOTS_TABLE = os.environ.get("SPOTS_TABLE", f"surf-ranker-spots-{ENVIRONMENT}")
PREFERENCES_TABLE = os.environ.get(
    "PREFERENCES_TABLE", f"surf-ranker-preferences-{ENVIRONMENT}"
)
FORECAST_CACHE_TABLE = os.environ.get(
    "FORECAST_CACHE_TABLE", f"surf-ranker-forecast-cache-{ENVIRONMENT}"
)
# "memory" keeps the forecast cache in-process, "dynamodb" shares it
FORECAST_CACHE_BACKEND = os.environ.get("FORECAST_CACHE_BACKEND", "dynamodb")

# Forecast freshness window: 2 hours
FORECAST_CACHE_DURATION_SECONDS = float(
    os.environ.get("FORECAST_CACHE_DURATION_SECONDS", "7200")
)
# How far ahead providers are asked to forecast
FORECAST_WINDOW_HOURS = int(os.environ.get("FORECAST_WINDOW_HOURS", "72"))

# Per-request HTTP timeout for provider calls
PROVIDER_TIMEOUT_SECONDS = float(os.environ.get("PROVIDER_TIMEOUT_SECONDS", "10"))
# Number of candidates scored concurrently; kept small to spare the providers
RANKING_MAX_WORKERS = int(os.environ.get("RANKING_MAX_WORKERS", "4"))

# Radius used by the nearby spot listing when the request gives none
DEFAULT_SEARCH_RADIUS_KM = float(os.environ.get("DEFAULT_SEARCH_RADIUS_KM", "50"))

STORMGLASS_API_KEY = os.environ.get("STORMGLASS_API_KEY")
OPENWEATHERMAP_API_KEY = os.environ.get("OPENWEATHERMAP_API_KEY")
