"""Ranking service for ordering nearby surf spots against a user's preferences."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from models.forecast import ConditionSample
from models.preferences import PreferenceProfile
from models.spot import Coordinate, SurfSpot
from utils.config import RANKING_MAX_WORKERS
from utils.constants import FORECAST_PREVIEW_SAMPLES

from .forecast_service import ForecastService
from .spot_service import SpotService
from .surf_scoring import (
    ScoreBreakdown,
    current_conditions,
    score_band,
    score_conditions,
)

logger = logging.getLogger(__name__)


@dataclass
class ScoredCandidate:
    """A spot with its current conditions and scoring details."""

    spot: SurfSpot
    distance_km: float
    conditions: ConditionSample
    wave_score: float
    wind_score: float
    skill_score: float
    distance_score: float
    composite_score: float
    forecast: list[ConditionSample] = field(default_factory=list)

    @property
    def band(self) -> str:
        return score_band(self.composite_score)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "spot": self.spot.model_dump(mode="json"),
            "distance_km": round(self.distance_km, 1),
            "conditions": self.conditions.to_dict(),
            "scores": {
                "wave": round(self.wave_score, 3),
                "wind": round(self.wind_score, 3),
                "skill": round(self.skill_score, 3),
                "distance": round(self.distance_score, 3),
            },
            "score": round(self.composite_score, 3),
            "band": self.band,
            "forecast": [sample.to_dict() for sample in self.forecast],
        }


class RankingService:
    """Service for scoring and ordering candidate spots."""

    def __init__(
        self,
        forecast_service: ForecastService,
        spot_service: SpotService | None = None,
        max_workers: int = RANKING_MAX_WORKERS,
    ):
        """Initialize the ranking service.

        Args:
            forecast_service: ForecastService for fetching each spot's series
            spot_service: SpotService for catalog lookups (needed by
                rank_nearby, forecast_for_spot and current_conditions_for)
            max_workers: Number of candidates processed concurrently
        """
        self.forecast_service = forecast_service
        self.spot_service = spot_service
        self.max_workers = max(1, max_workers)

    def rank(
        self,
        profile: PreferenceProfile,
        candidates: list[tuple[SurfSpot, float]],
        at: datetime | None = None,
    ) -> list[ScoredCandidate]:
        """
        Score candidates and order them best first.

        Every candidate appears exactly once in the result. A candidate whose
        processing fails is kept with zero scores and zero conditions.
        Candidates with equal scores keep their input order.

        Args:
            profile: Preferences to score against
            candidates: (SurfSpot, distance_km) pairs
            at: Evaluation instant for picking current conditions (default now,
                naive values are taken as UTC)

        Returns:
            List of ScoredCandidate sorted by composite score, descending
        """
        if not candidates:
            return []

        at = _evaluation_instant(at)
        start_time = time.time()

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(candidates))) as executor:
            scored = list(
                executor.map(
                    lambda candidate: self._score_candidate(profile, *candidate, at),
                    candidates,
                )
            )

        # sorted() is stable, also with reverse=True
        ranked = sorted(scored, key=lambda c: c.composite_score, reverse=True)

        logger.info(
            f"[PERF] rank took {time.time() - start_time:.2f}s for {len(candidates)} candidates"
        )
        return ranked

    def rank_nearby(
        self,
        profile: PreferenceProfile,
        latitude: float | None = None,
        longitude: float | None = None,
        radius_km: float | None = None,
    ) -> list[ScoredCandidate]:
        """
        Rank the spots around a location.

        Falls back to the profile's home coordinate and maximum distance when
        the location or radius is not given.

        Raises:
            ValueError: If no location is available, the coordinate is out of
                range or the radius is not positive
            Exception: If the spot catalog cannot be read
        """
        if latitude is None and longitude is None:
            home = profile.home
            if home is None:
                raise ValueError("Location is required")
            center = home
        elif latitude is None or longitude is None:
            raise ValueError("latitude and longitude must be given together")
        else:
            center = Coordinate(latitude=latitude, longitude=longitude)

        radius = radius_km if radius_km is not None else profile.max_distance_km
        if radius <= 0:
            raise ValueError("radius_km must be positive")

        candidates = self._require_spot_service().find_within_radius(center, radius)
        logger.info(
            f"Found {len(candidates)} spots within {radius}km of "
            f"({center.latitude}, {center.longitude})"
        )
        return self.rank(profile, candidates)

    def forecast_for_spot(self, spot_id: str) -> list[ConditionSample] | None:
        """Get the forecast series for a catalog spot; None if the spot is unknown."""
        if not spot_id:
            raise ValueError("spot_id is required")
        spot = self._require_spot_service().get_spot(spot_id)
        if spot is None:
            return None
        return self.forecast_service.forecast_for(spot)

    def current_conditions_for(
        self, spot_ids: list[str], at: datetime | None = None
    ) -> list[dict[str, Any]]:
        """
        Get current conditions for several spots.

        Unknown spots are skipped, as are spots whose lookup fails.
        """
        at = _evaluation_instant(at)
        spot_service = self._require_spot_service()
        results = []

        for spot_id in spot_ids:
            try:
                spot = spot_service.get_spot(spot_id)
                if spot is None:
                    continue
                series = self.forecast_service.forecast_for(spot)
                sample = current_conditions(series, at) or ConditionSample.empty(at)
                results.append(
                    {
                        "spot_id": spot.spot_id,
                        "spot_name": spot.name,
                        "conditions": sample.to_dict(),
                        "last_updated": datetime.now(UTC).isoformat(),
                    }
                )
            except Exception as e:
                logger.error(f"Error getting conditions for spot {spot_id}: {e}")

        return results

    def _score_candidate(
        self,
        profile: PreferenceProfile,
        spot: SurfSpot,
        distance_km: float,
        at: datetime,
    ) -> ScoredCandidate:
        try:
            series = self.forecast_service.forecast_for(spot)
            conditions = current_conditions(series, at)
            scores = score_conditions(spot, distance_km, conditions, profile)
            return _build_candidate(
                spot,
                distance_km,
                conditions or ConditionSample.empty(at),
                scores,
                [s for s in series if s.time >= at][:FORECAST_PREVIEW_SAMPLES],
            )
        except Exception as e:
            logger.error(
                f"Error ranking spot {getattr(spot, 'spot_id', spot)}: {e}",
                exc_info=True,
            )
            return _build_candidate(
                spot, distance_km, ConditionSample.empty(at), ScoreBreakdown.zero(), []
            )

    def _require_spot_service(self) -> SpotService:
        if self.spot_service is None:
            raise RuntimeError("RankingService was created without a SpotService")
        return self.spot_service


def _build_candidate(
    spot: SurfSpot,
    distance_km: float,
    conditions: ConditionSample,
    scores: ScoreBreakdown,
    forecast: list[ConditionSample],
) -> ScoredCandidate:
    return ScoredCandidate(
        spot=spot,
        distance_km=distance_km,
        conditions=conditions,
        wave_score=scores.wave,
        wind_score=scores.wind,
        skill_score=scores.skill,
        distance_score=scores.distance,
        composite_score=scores.composite,
        forecast=forecast,
    )


def _evaluation_instant(at: datetime | None) -> datetime:
    """Default to now; naive datetimes are taken as UTC."""
    if at is None:
        return datetime.now(UTC)
    if at.tzinfo is None:
        return at.replace(tzinfo=UTC)
    return at.astimezone(UTC)
