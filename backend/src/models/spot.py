"""Surf spot data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SkillLevel(str, Enum):
    """Surfer skill level, also used to classify spot difficulty."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class BreakType(str, Enum):
    """How a spot's waves break."""

    BEACH = "beach"
    REEF = "reef"
    POINT = "point"
    OTHER = "other"


class Coordinate(BaseModel):
    """A WGS84 point."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(
        ..., ge=-180, le=180, description="Longitude in degrees"
    )

    model_config = ConfigDict(frozen=True)


class SurfSpot(BaseModel):
    """Surf spot reference data.

    Spots are seeded administratively and treated as read-only at request
    time, so the model is frozen.
    """

    spot_id: str = Field(..., min_length=1, description="Unique identifier")
    name: str = Field(..., description="Display name")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(
        ..., ge=-180, le=180, description="Longitude coordinate"
    )
    region: str = Field(..., description="Region label, e.g. 'Orange County'")
    break_type: BreakType = Field(default=BreakType.OTHER)
    difficulty: SkillLevel = Field(default=SkillLevel.INTERMEDIATE)
    description: str | None = Field(None, description="Short spot description")

    model_config = ConfigDict(frozen=True)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)
