"""Forecast condition data models."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Source tag used by the zero sentinel sample
NO_DATA_SOURCE = "none"


class ConditionSample(BaseModel):
    """One time-stamped ocean/wind observation from a forecast provider.

    Units follow the preference profile: feet for waves, mph for wind.
    A list of samples ordered by time is a forecast series.
    """

    time: datetime = Field(..., description="Forecast valid time (UTC)")
    wave_height_ft: float = Field(default=0.0, ge=0)
    wave_period_s: float = Field(default=0.0, ge=0)
    wind_speed_mph: float = Field(default=0.0, ge=0)
    wind_direction_deg: float = Field(
        default=0.0, description="Compass bearing the wind blows from, [0, 360)"
    )
    source: str = Field(..., description="Provider that produced the sample")

    model_config = ConfigDict(frozen=True)

    @field_validator("time")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # Naive timestamps from providers are UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @field_validator("wind_direction_deg")
    @classmethod
    def _wrap_bearing(cls, value: float) -> float:
        return value % 360

    @property
    def cache_key(self) -> tuple[str, datetime]:
        """Identity of the sample within one spot's series."""
        return (self.source, self.time)

    @classmethod
    def empty(cls, at: datetime | None = None) -> "ConditionSample":
        """Zero sentinel used when no conditions are known."""
        return cls(time=at or datetime.now(UTC), source=NO_DATA_SOURCE)

    def to_dict(self) -> dict:
        return {
            "time": self.time.isoformat(),
            "wave_height_ft": self.wave_height_ft,
            "wave_period_s": self.wave_period_s,
            "wind_speed_mph": self.wind_speed_mph,
            "wind_direction_deg": self.wind_direction_deg,
            "source": self.source,
        }


def sort_series(samples: list[ConditionSample]) -> list[ConditionSample]:
    """Return samples ordered by time ascending (stable for equal times)."""
    return sorted(samples, key=lambda s: s.time)
