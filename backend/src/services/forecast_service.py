"""Forecast aggregation across providers with read-through caching."""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import timedelta

from models.forecast import ConditionSample, sort_series
from models.spot import SurfSpot
from utils.config import PROVIDER_TIMEOUT_SECONDS

from .forecast_cache import ForecastCache, InMemoryForecastCache
from .forecast_provider import (
    DEFAULT_WINDOW,
    ForecastProvider,
    ProviderConfigurationError,
    ProviderError,
)

logger = logging.getLogger(__name__)


class ForecastService:
    """Service for getting a spot's forecast series.

    On a cache hit the cached series is returned without calling any
    provider. On a miss every usable provider is queried concurrently and
    the successful series are concatenated, cached and returned. Provider
    failures never escape: if all providers fail the result is an empty
    list, meaning conditions are unknown.

    A provider that is unconfigured, or reports a configuration error, is
    logged once and left out of every later fetch.
    """

    def __init__(
        self,
        providers: list[ForecastProvider],
        cache: ForecastCache | None = None,
        window: timedelta = DEFAULT_WINDOW,
        fanout_timeout: float | None = None,
    ):
        """Initialize the forecast service.

        Args:
            providers: Provider clients to fan out to
            cache: Forecast cache (defaults to an in-process cache)
            window: How far ahead providers are asked to forecast
            fanout_timeout: Upper bound on waiting for all providers; defaults
                to a little over two provider HTTP timeouts
        """
        self.cache = cache if cache is not None else InMemoryForecastCache()
        self.window = window
        self.fanout_timeout = (
            fanout_timeout
            if fanout_timeout is not None
            else PROVIDER_TIMEOUT_SECONDS * 2 + 5
        )
        self._lock = threading.Lock()
        self._disabled: set[str] = set()
        self.providers: list[ForecastProvider] = []

        for provider in providers:
            if provider.is_configured:
                self.providers.append(provider)
            else:
                self._disable(provider, "not configured")

    @property
    def active_providers(self) -> list[ForecastProvider]:
        with self._lock:
            return [p for p in self.providers if p.name not in self._disabled]

    def forecast_for(self, spot: SurfSpot) -> list[ConditionSample]:
        """
        Get the forecast series for a spot.

        Args:
            spot: Spot to forecast

        Returns:
            Samples ordered by time; empty when no provider succeeded

        Raises:
            ValueError: If no spot is given
        """
        if spot is None or not getattr(spot, "spot_id", None):
            raise ValueError("A spot with a spot_id is required")

        cached = self.cache.get(spot.spot_id)
        if cached is not None:
            logger.debug(f"Forecast cache hit for {spot.spot_id}")
            return cached

        start_time = time.time()
        samples = self._fetch_all(spot)
        logger.info(
            f"[PERF] provider fan-out for {spot.spot_id} took "
            f"{time.time() - start_time:.2f}s, got {len(samples)} samples"
        )

        if samples:
            self.cache.put(spot.spot_id, samples)
        return sort_series(samples)

    def _fetch_all(self, spot: SurfSpot) -> list[ConditionSample]:
        providers = self.active_providers
        if not providers:
            logger.warning("No forecast providers available")
            return []

        coordinate = spot.coordinate
        samples: list[ConditionSample] = []

        executor = ThreadPoolExecutor(max_workers=len(providers))
        try:
            futures = {
                executor.submit(provider.fetch, coordinate, self.window): provider
                for provider in providers
            }
            done, not_done = wait(futures, timeout=self.fanout_timeout)

            for future, provider in futures.items():
                if future in not_done:
                    logger.error(
                        f"Provider {provider.name} timed out for {spot.spot_id}"
                    )
                    continue
                try:
                    result = future.result()
                except ProviderConfigurationError as e:
                    self._disable(provider, str(e))
                    continue
                except ProviderError as e:
                    logger.error(f"Provider {provider.name} failed for {spot.spot_id}: {e}")
                    continue
                except Exception as e:
                    logger.exception(
                        f"Unexpected error from provider {provider.name} for {spot.spot_id}: {e}"
                    )
                    continue
                samples.extend(result)
        finally:
            # Don't block on stragglers; their results are discarded
            executor.shutdown(wait=False, cancel_futures=True)

        return samples

    def _disable(self, provider: ForecastProvider, reason: str) -> None:
        with self._lock:
            if provider.name in self._disabled:
                return
            self._disabled.add(provider.name)
        logger.warning(f"Forecast provider {provider.name} disabled: {reason}")
