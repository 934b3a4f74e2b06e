"""
API schemas (Pydantic models) for request/response validation.
"""

from datetime import datetime, time
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


# ============================================================================
# Channel Schemas
# ============================================================================

class ChannelSchema(BaseModel):
    """A channel as written in the [header] section."""
    name: str = Field(min_length=1)
    unit: Optional[str] = None


# ============================================================================
# Value Schemas
# ============================================================================

class SatellitesValue(BaseModel):
    kind: Literal["satellites"]
    value: int = Field(ge=0, le=255)


class TimeValue(BaseModel):
    """UTC time of day, e.g. "17:05:38.19"."""
    kind: Literal["time"]
    value: time


class CoordinatesValue(BaseModel):
    """Latitude or longitude as degrees, minutes, seconds and bearing."""
    kind: Literal["coordinates"]
    degrees: int = Field(ge=0, le=180)
    minutes: int = Field(ge=0, lt=60)
    seconds: float = Field(ge=0.0, lt=60.0)
    bearing: Literal["N", "S", "E", "W"]


class VelocityValue(BaseModel):
    kind: Literal["velocity"]
    value: float  # km/h


class HeadingValue(BaseModel):
    kind: Literal["heading"]
    value: float  # degrees


class HeightValue(BaseModel):
    kind: Literal["height"]
    value: float  # meters


ValueSchema = Annotated[
    Union[
        SatellitesValue,
        TimeValue,
        CoordinatesValue,
        VelocityValue,
        HeadingValue,
        HeightValue,
    ],
    Field(discriminator="kind"),
]


# ============================================================================
# Document Schemas
# ============================================================================

class DocumentRequest(BaseModel):
    """A complete VBOX document to render."""
    created_at: Optional[datetime] = None
    comment: Optional[str] = None
    channels: list[ChannelSchema] = Field(default_factory=list)
    samples: list[list[ValueSchema]] = Field(default_factory=list)
    strict: bool = False


# ============================================================================
# Error Schemas
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
    code: Optional[str] = None
