"""User preference data models."""

from pydantic import BaseModel, Field, model_validator

from .spot import Coordinate, SkillLevel


class PreferenceProfile(BaseModel):
    """Surf preferences saved against an anonymous session."""

    session_id: str = Field(..., min_length=1, description="Owning session id")
    skill_level: SkillLevel = Field(..., description="Surfer skill level")
    min_wave_height_ft: float = Field(
        ..., ge=0, description="Smallest acceptable wave height (feet)"
    )
    max_wave_height_ft: float = Field(
        ..., gt=0, description="Largest acceptable wave height (feet)"
    )
    max_wind_speed_mph: float = Field(
        ..., gt=0, description="Strongest acceptable wind (mph)"
    )
    max_distance_km: float = Field(
        ..., gt=0, description="Maximum travel distance (km)"
    )
    home_latitude: float | None = Field(None, ge=-90, le=90)
    home_longitude: float | None = Field(None, ge=-180, le=180)
    created_at: str | None = Field(
        None, description="ISO timestamp when preferences were created"
    )
    updated_at: str | None = Field(
        None, description="ISO timestamp when preferences were last updated"
    )

    @model_validator(mode="after")
    def _check_ranges(self) -> "PreferenceProfile":
        if self.min_wave_height_ft >= self.max_wave_height_ft:
            raise ValueError("min_wave_height_ft must be less than max_wave_height_ft")
        if (self.home_latitude is None) != (self.home_longitude is None):
            raise ValueError("home_latitude and home_longitude must be set together")
        return self

    @property
    def home(self) -> Coordinate | None:
        """Saved home coordinate, if any."""
        if self.home_latitude is None or self.home_longitude is None:
            return None
        return Coordinate(latitude=self.home_latitude, longitude=self.home_longitude)
