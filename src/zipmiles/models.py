from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SourceTier(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    ESTIMATE = "estimate"


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class GeocodeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    postal_code: str
    coordinate: Coordinate
    city: str = ""
    region_code: str | None = None
    source_tier: SourceTier
    resolved_at: float = Field(default_factory=time.time)

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude


class DistanceResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    postal_codes: tuple[str, str]
    miles: float = Field(ge=0.0)
    computed_at: float = Field(default_factory=time.time)


@dataclass(slots=True)
class ProviderFailure:
    postal_code: str
    tier: SourceTier
    reason: str


@dataclass(slots=True)
class ResolutionFailure:
    postal_code: str
    reasons: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"could not resolve {self.postal_code}: " + "; ".join(self.reasons)


@dataclass(slots=True)
class DistanceFailure:
    origin: str
    destination: str
    reasons: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"could not resolve distance {self.origin} -> {self.destination}: "
            + "; ".join(self.reasons)
        )


@dataclass(slots=True)
class ValidationOutcome:
    """Accumulating result of a validation call. Errors invalidate, warnings don't."""

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    @property
    def first_error(self) -> str | None:
        return self.errors[0] if self.errors else None

    def __str__(self) -> str:
        if not self.is_valid:
            return "Invalid: " + ", ".join(self.errors)
        if self.warnings:
            return "Valid with warnings: " + ", ".join(self.warnings)
        return "Valid"


@dataclass(slots=True)
class CacheStatistics:
    count: int
    average: float
    minimum: float
    maximum: float
