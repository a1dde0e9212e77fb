"""Tests for the forecast caches."""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

from models.forecast import ConditionSample
from services.forecast_cache import DynamoDBForecastCache, InMemoryForecastCache


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def _client_error(code: str, operation: str = "PutItem") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class TestInMemoryForecastCache:
    """Test cases for the in-process cache."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def cache(self, clock):
        return InMemoryForecastCache(freshness_seconds=7200, timer=clock)

    def test_miss_returns_none(self, cache):
        assert cache.get("linda-mar") is None

    def test_put_then_get(self, cache, hourly_series):
        cache.put("linda-mar", hourly_series)
        assert cache.get("linda-mar") == hourly_series

    def test_put_is_idempotent(self, cache, hourly_series):
        cache.put("linda-mar", hourly_series)
        cache.put("linda-mar", hourly_series)
        assert len(cache.get("linda-mar")) == len(hourly_series)

    def test_put_appends_new_samples(self, cache, hourly_series):
        cache.put("linda-mar", hourly_series[:10])
        cache.put("linda-mar", hourly_series[5:20])
        assert cache.get("linda-mar") == hourly_series[:20]

    def test_same_time_from_different_sources_kept(self, cache, sample_condition):
        other = sample_condition.model_copy(update={"source": "openweathermap"})
        cache.put("linda-mar", [sample_condition, other])
        assert len(cache.get("linda-mar")) == 2

    def test_get_returns_time_ordered_series(self, cache, hourly_series):
        cache.put("linda-mar", list(reversed(hourly_series)))
        times = [s.time for s in cache.get("linda-mar")]
        assert times == sorted(times)

    def test_entry_expires_after_freshness_window(self, cache, clock, hourly_series):
        cache.put("linda-mar", hourly_series)
        clock.advance(7199)
        assert cache.get("linda-mar") is not None
        clock.advance(2)
        assert cache.get("linda-mar") is None

    def test_empty_put_is_ignored(self, cache):
        cache.put("linda-mar", [])
        assert cache.get("linda-mar") is None

    def test_spots_are_independent(self, cache, hourly_series):
        cache.put("linda-mar", hourly_series)
        assert cache.get("mavericks") is None

    def test_clear(self, cache, hourly_series):
        cache.put("linda-mar", hourly_series)
        cache.clear()
        assert cache.get("linda-mar") is None


class TestDynamoDBForecastCache:
    """Test cases for the DynamoDB-backed cache."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def cache(self, mock_dynamodb_table, clock):
        return DynamoDBForecastCache(
            mock_dynamodb_table, freshness_seconds=7200, clock=clock
        )

    def _row(self, sample: ConditionSample, cached_at: float) -> dict:
        return {
            "spot_id": "linda-mar",
            "sample_key": f"{sample.source}#{sample.time.isoformat()}",
            "forecast_time": sample.time.isoformat(),
            "source": sample.source,
            "wave_height_ft": Decimal(str(sample.wave_height_ft)),
            "wave_period_s": Decimal(str(sample.wave_period_s)),
            "wind_speed_mph": Decimal(str(sample.wind_speed_mph)),
            "wind_direction_deg": Decimal(str(sample.wind_direction_deg)),
            "cached_at": Decimal(str(cached_at)),
        }

    def test_miss_returns_none(self, cache):
        assert cache.get("linda-mar") is None

    def test_fresh_rows_returned_in_time_order(
        self, cache, mock_dynamodb_table, clock, hourly_series
    ):
        rows = [self._row(s, clock.now - 60) for s in reversed(hourly_series[:3])]
        mock_dynamodb_table.query.return_value = {"Items": rows}

        result = cache.get("linda-mar")

        assert result == hourly_series[:3]

    def test_stale_rows_are_skipped(self, cache, mock_dynamodb_table, clock, hourly_series):
        mock_dynamodb_table.query.return_value = {
            "Items": [
                self._row(hourly_series[0], clock.now - 7300),
                self._row(hourly_series[1], clock.now - 100),
            ]
        }

        assert cache.get("linda-mar") == [hourly_series[1]]

    def test_all_stale_is_a_miss(self, cache, mock_dynamodb_table, clock, hourly_series):
        mock_dynamodb_table.query.return_value = {
            "Items": [self._row(hourly_series[0], clock.now - 7200)]
        }
        assert cache.get("linda-mar") is None

    def test_read_error_is_a_miss(self, cache, mock_dynamodb_table):
        mock_dynamodb_table.query.side_effect = _client_error("InternalServerError", "Query")
        assert cache.get("linda-mar") is None

    def test_malformed_row_is_skipped(self, cache, mock_dynamodb_table, clock, hourly_series):
        good = self._row(hourly_series[0], clock.now)
        bad = {"spot_id": "linda-mar", "sample_key": "x", "cached_at": clock.now}
        mock_dynamodb_table.query.return_value = {"Items": [bad, good]}

        assert cache.get("linda-mar") == [hourly_series[0]]

    def test_put_writes_one_row_per_unique_sample(
        self, cache, mock_dynamodb_table, clock, hourly_series
    ):
        cache.put("linda-mar", hourly_series[:3] + hourly_series[:3])

        assert mock_dynamodb_table.put_item.call_count == 3
        item = mock_dynamodb_table.put_item.call_args_list[0].kwargs["Item"]
        assert item["spot_id"] == "linda-mar"
        assert item["sample_key"] == f"open-meteo#{hourly_series[0].time.isoformat()}"
        assert item["wave_height_ft"] == Decimal("3.0")
        assert item["cached_at"] == Decimal(str(clock.now))
        assert item["ttl"] > clock.now + 7200

    def test_put_is_conditional(self, cache, mock_dynamodb_table, hourly_series):
        cache.put("linda-mar", hourly_series[:1])

        kwargs = mock_dynamodb_table.put_item.call_args.kwargs
        assert "attribute_not_exists(sample_key)" in kwargs["ConditionExpression"]
        assert ":cutoff" in kwargs["ExpressionAttributeValues"]

    def test_existing_sample_is_skipped(self, cache, mock_dynamodb_table, hourly_series):
        mock_dynamodb_table.put_item.side_effect = [
            _client_error("ConditionalCheckFailedException"),
            {},
        ]

        cache.put("linda-mar", hourly_series[:2])

        assert mock_dynamodb_table.put_item.call_count == 2

    def test_write_error_stops_put_without_raising(
        self, cache, mock_dynamodb_table, hourly_series
    ):
        mock_dynamodb_table.put_item.side_effect = _client_error(
            "ProvisionedThroughputExceededException"
        )

        cache.put("linda-mar", hourly_series[:5])

        assert mock_dynamodb_table.put_item.call_count == 1

    def test_query_uses_spot_partition(self, cache, mock_dynamodb_table):
        cache.get("linda-mar")
        assert "KeyConditionExpression" in mock_dynamodb_table.query.call_args.kwargs

    def test_expiry_with_advancing_clock(self, mock_dynamodb_table, hourly_series):
        clock = FakeClock()
        cache = DynamoDBForecastCache(mock_dynamodb_table, freshness_seconds=60, clock=clock)
        row = {
            "spot_id": "linda-mar",
            "sample_key": "k",
            "forecast_time": hourly_series[0].time.isoformat(),
            "source": "open-meteo",
            "cached_at": clock.now,
        }
        mock_dynamodb_table.query.return_value = {"Items": [row]}

        assert cache.get("linda-mar") is not None
        clock.advance(timedelta(minutes=2).total_seconds())
        assert cache.get("linda-mar") is None
