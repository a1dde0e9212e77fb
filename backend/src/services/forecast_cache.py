"""Read-through cache for forecast series, keyed by spot.

A cached series is served only while it is fresh. Writes are append-style
and idempotent per (spot, source, forecast time): storing the same sample
twice keeps a single copy.
"""

import logging
import threading
import time
from typing import Any, Callable, Protocol

from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError
from cachetools import TTLCache
from pydantic import ValidationError

from models.forecast import ConditionSample, sort_series
from utils.config import FORECAST_CACHE_DURATION_SECONDS
from utils.dynamodb_utils import query_all, to_dynamodb

logger = logging.getLogger(__name__)

# Expired rows linger this long before DynamoDB TTL deletes them
DYNAMODB_TTL_GRACE_SECONDS = 86400


class ForecastCache(Protocol):
    """Storage interface used by the forecast aggregator."""

    def get(self, spot_id: str) -> list[ConditionSample] | None:
        """Return the fresh series for a spot, or None on a miss."""
        ...

    def put(self, spot_id: str, samples: list[ConditionSample]) -> None:
        """Append samples to a spot's series, ignoring ones already stored."""
        ...


class InMemoryForecastCache:
    """Process-local cache backed by a cachetools TTLCache.

    Each spot maps to a dict of samples keyed by (source, time). The TTL
    starts when the spot's entry is first created; appending to a live entry
    does not extend it.
    """

    def __init__(
        self,
        freshness_seconds: float = FORECAST_CACHE_DURATION_SECONDS,
        maxsize: int = 5000,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.freshness_seconds = freshness_seconds
        self._cache: TTLCache = TTLCache(
            maxsize=maxsize, ttl=freshness_seconds, timer=timer
        )
        self._lock = threading.Lock()

    def get(self, spot_id: str) -> list[ConditionSample] | None:
        with self._lock:
            entry = self._cache.get(spot_id)
            if not entry:
                return None
            return sort_series(list(entry.values()))

    def put(self, spot_id: str, samples: list[ConditionSample]) -> None:
        if not samples:
            return
        with self._lock:
            entry = self._cache.get(spot_id)
            if entry is None:
                entry = {}
                self._cache[spot_id] = entry
            for sample in samples:
                entry.setdefault(sample.cache_key, sample)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


class DynamoDBForecastCache:
    """Cache shared across processes, stored in a DynamoDB table.

    Table layout: partition key ``spot_id``, sort key ``sample_key``
    (``"{source}#{iso time}"``). Every row records ``cached_at`` (epoch
    seconds) and a ``ttl`` attribute for DynamoDB expiry. Freshness is
    checked on read, so rows that DynamoDB has not yet deleted are still
    treated as absent once stale.

    Store errors never propagate: a failed read is a miss and a failed write
    is skipped.
    """

    def __init__(
        self,
        table,
        freshness_seconds: float = FORECAST_CACHE_DURATION_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.table = table
        self.freshness_seconds = freshness_seconds
        self._clock = clock

    def get(self, spot_id: str) -> list[ConditionSample] | None:
        cutoff = self._clock() - self.freshness_seconds
        try:
            items = query_all(
                self.table, KeyConditionExpression=Key("spot_id").eq(spot_id)
            )
        except ClientError as e:
            logger.error(f"Error reading cached forecast for {spot_id}: {e}")
            return None

        samples = []
        for item in items:
            if item.get("cached_at", 0) <= cutoff:
                continue
            try:
                samples.append(self._to_sample(item))
            except (KeyError, ValidationError) as e:
                logger.debug(f"Skipping cached row {item.get('sample_key')}: {e}")

        return sort_series(samples) or None

    def put(self, spot_id: str, samples: list[ConditionSample]) -> None:
        now = self._clock()
        unique: dict[tuple, ConditionSample] = {}
        for sample in samples:
            unique.setdefault(sample.cache_key, sample)
        written = 0

        for sample in unique.values():
            item = to_dynamodb(
                {
                    "spot_id": spot_id,
                    "sample_key": f"{sample.source}#{sample.time.isoformat()}",
                    "forecast_time": sample.time,
                    "source": sample.source,
                    "wave_height_ft": sample.wave_height_ft,
                    "wave_period_s": sample.wave_period_s,
                    "wind_speed_mph": sample.wind_speed_mph,
                    "wind_direction_deg": sample.wind_direction_deg,
                    "cached_at": now,
                    "ttl": int(now + self.freshness_seconds + DYNAMODB_TTL_GRACE_SECONDS),
                }
            )
            try:
                # A live duplicate is left alone; a stale one is replaced
                self.table.put_item(
                    Item=item,
                    ConditionExpression="attribute_not_exists(sample_key) OR cached_at <= :cutoff",
                    ExpressionAttributeValues={
                        ":cutoff": to_dynamodb(now - self.freshness_seconds)
                    },
                )
                written += 1
            except ClientError as e:
                if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                    continue
                logger.error(f"Error caching forecast for {spot_id}: {e}")
                return

        logger.debug(f"Cached {written} new samples for {spot_id}")

    def _to_sample(self, item: dict[str, Any]) -> ConditionSample:
        return ConditionSample(
            time=item["forecast_time"],
            wave_height_ft=item.get("wave_height_ft", 0.0),
            wave_period_s=item.get("wave_period_s", 0.0),
            wind_speed_mph=item.get("wind_speed_mph", 0.0),
            wind_direction_deg=item.get("wind_direction_deg", 0.0),
            source=item["source"],
        )
