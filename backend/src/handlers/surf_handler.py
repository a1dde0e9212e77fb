"""Lambda handler for the surf spot ranking API.

Events carry an ``action`` and its parameters, either at the top level or in
a JSON ``body``. Ranking actions are ``rank``, ``forecast`` and
``conditions``; catalog actions are ``spots``, ``nearby`` and ``spot``;
``preferences`` reads or saves a session's profile.
"""

import json
import logging
from typing import Any

import boto3

from models.preferences import PreferenceProfile
from models.spot import Coordinate
from services.forecast_cache import DynamoDBForecastCache, InMemoryForecastCache
from services.forecast_service import ForecastService
from services.openmeteo_service import OpenMeteoService
from services.openweather_service import OpenWeatherService
from services.preference_service import PreferenceService
from services.ranking_service import RankingService
from services.spot_service import SpotService
from services.stormglass_service import StormglassService
from utils.config import (
    DEFAULT_SEARCH_RADIUS_KM,
    FORECAST_CACHE_BACKEND,
    FORECAST_CACHE_TABLE,
    PREFERENCES_TABLE,
    SPOTS_TABLE,
)

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

_dynamodb = None
_spot_service: SpotService | None = None
_ranking_service: RankingService | None = None
_preference_service: PreferenceService | None = None


class NotFoundError(Exception):
    """Raised when a requested spot or profile does not exist."""


def get_dynamodb():
    """Get the DynamoDB resource, created on first use."""
    global _dynamodb
    if _dynamodb is None:
        _dynamodb = boto3.resource("dynamodb")
    return _dynamodb


def get_spot_service() -> SpotService:
    """Get the shared SpotService."""
    global _spot_service
    if _spot_service is None:
        _spot_service = SpotService(get_dynamodb().Table(SPOTS_TABLE))
    return _spot_service


def get_ranking_service() -> RankingService:
    """Get the shared RankingService, wiring providers and cache on first use."""
    global _ranking_service
    if _ranking_service is None:
        dynamodb = get_dynamodb()
        if FORECAST_CACHE_BACKEND == "memory":
            cache = InMemoryForecastCache()
        else:
            cache = DynamoDBForecastCache(dynamodb.Table(FORECAST_CACHE_TABLE))

        forecast_service = ForecastService(
            providers=[StormglassService(), OpenWeatherService(), OpenMeteoService()],
            cache=cache,
        )
        _ranking_service = RankingService(forecast_service, spot_service=get_spot_service())
    return _ranking_service


def get_preference_service() -> PreferenceService:
    """Get the shared PreferenceService."""
    global _preference_service
    if _preference_service is None:
        _preference_service = PreferenceService(get_dynamodb().Table(PREFERENCES_TABLE))
    return _preference_service


def _response(status_code: int, body: Any) -> dict[str, Any]:
    return {"statusCode": status_code, "body": json.dumps(body, default=str)}


def _parse_params(event: dict[str, Any]) -> dict[str, Any]:
    params = {k: v for k, v in event.items() if k != "body"}
    body = event.get("body")
    if isinstance(body, str) and body:
        try:
            body = json.loads(body)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON body: {e}")
    if isinstance(body, dict):
        params.update(body)
    return params


def _optional_float(params: dict[str, Any], key: str) -> float | None:
    value = params.get(key)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number")


def _resolve_profile(params: dict[str, Any]) -> PreferenceProfile:
    """Use inline preferences when given, otherwise the saved profile."""
    inline = params.get("preferences")
    if inline:
        data = dict(inline)
        data.setdefault("session_id", params.get("session_id") or "anonymous")
        return PreferenceProfile(**data)

    session_id = params.get("session_id")
    if not session_id:
        raise ValueError("session_id or preferences is required")

    profile = get_preference_service().get_preferences(session_id)
    if profile is None:
        raise NotFoundError(f"No preferences found for session {session_id}")
    return profile


def handle_rank(params: dict[str, Any]) -> dict[str, Any]:
    profile = _resolve_profile(params)
    ranked = get_ranking_service().rank_nearby(
        profile,
        latitude=_optional_float(params, "latitude"),
        longitude=_optional_float(params, "longitude"),
        radius_km=_optional_float(params, "radius_km"),
    )
    return {"spots": [c.to_dict() for c in ranked], "count": len(ranked)}


def handle_forecast(params: dict[str, Any]) -> dict[str, Any]:
    spot_id = params.get("spot_id")
    if not spot_id:
        raise ValueError("spot_id is required")

    series = get_ranking_service().forecast_for_spot(spot_id)
    if series is None:
        raise NotFoundError(f"Spot {spot_id} not found")
    return {"spot_id": spot_id, "forecast": [s.to_dict() for s in series]}


def handle_conditions(params: dict[str, Any]) -> dict[str, Any]:
    spot_ids = params.get("spot_ids")
    if isinstance(spot_ids, str):
        spot_ids = [s.strip() for s in spot_ids.split(",") if s.strip()]
    if not spot_ids:
        raise ValueError("spot_ids is required")

    conditions = get_ranking_service().current_conditions_for(spot_ids)
    return {"conditions": conditions, "count": len(conditions)}


def handle_spots(params: dict[str, Any]) -> dict[str, Any]:
    spots = get_spot_service().get_all_spots()
    return {"spots": [s.model_dump(mode="json") for s in spots], "count": len(spots)}


def handle_nearby(params: dict[str, Any]) -> dict[str, Any]:
    """List catalog spots around a point, nearest first, without scoring them."""
    latitude = _optional_float(params, "latitude")
    longitude = _optional_float(params, "longitude")
    if latitude is None or longitude is None:
        raise ValueError("Latitude and longitude are required")

    radius_km = _optional_float(params, "radius_km")
    if radius_km is None:
        radius_km = DEFAULT_SEARCH_RADIUS_KM
    if radius_km <= 0:
        raise ValueError("radius_km must be positive")

    center = Coordinate(latitude=latitude, longitude=longitude)
    nearby = get_spot_service().find_within_radius(center, radius_km)
    spots = [
        {**spot.model_dump(mode="json"), "distance_km": round(distance, 1)}
        for spot, distance in nearby
    ]
    return {"spots": spots, "count": len(spots)}


def handle_spot(params: dict[str, Any]) -> dict[str, Any]:
    spot_id = params.get("spot_id")
    if not spot_id:
        raise ValueError("spot_id is required")

    spot = get_spot_service().get_spot(spot_id)
    if spot is None:
        raise NotFoundError(f"Spot {spot_id} not found")
    return spot.model_dump(mode="json")


def handle_preferences(params: dict[str, Any]) -> dict[str, Any]:
    session_id = params.get("session_id")
    if not session_id:
        raise ValueError("session_id is required")

    service = get_preference_service()
    if params.get("method", "get").lower() == "save":
        data = dict(params.get("preferences") or {})
        data["session_id"] = session_id
        saved = service.save_preferences(PreferenceProfile(**data))
        return saved.model_dump(mode="json")

    profile = service.get_preferences(session_id)
    if profile is None:
        raise NotFoundError(f"No preferences found for session {session_id}")
    return profile.model_dump(mode="json")


ACTIONS = {
    "rank": handle_rank,
    "forecast": handle_forecast,
    "conditions": handle_conditions,
    "spots": handle_spots,
    "nearby": handle_nearby,
    "spot": handle_spot,
    "preferences": handle_preferences,
}


def handler(event: dict[str, Any], context) -> dict[str, Any]:
    """
    Lambda entry point.

    Returns:
        {"statusCode": ..., "body": json}: 200 on success, 400 for invalid
        input, 404 for an unknown spot or profile, 500 otherwise
    """
    try:
        params = _parse_params(event or {})
        action = params.get("action")
        action_handler = ACTIONS.get(action)
        if action_handler is None:
            return _response(400, {"error": f"Unknown action: {action}"})

        logger.info(f"Handling {action} request")
        return _response(200, action_handler(params))

    except NotFoundError as e:
        return _response(404, {"error": str(e)})
    except ValueError as e:
        # pydantic ValidationError is a ValueError
        return _response(400, {"error": str(e)})
    except Exception as e:
        logger.exception(f"Error handling request: {e}")
        return _response(500, {"error": "Internal server error"})
