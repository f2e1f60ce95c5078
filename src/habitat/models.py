# src/habitat/models.py
from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)


class RoomCategory(str, Enum):
    ESSENTIAL = "essential"
    OPTIONAL = "optional"


class NoiseLevel(str, Enum):
    QUIET = "quiet"
    MODERATE = "moderate"
    HIGH = "high"


class Destination(str, Enum):
    MOON = "moon"
    MARS = "mars"
    ORBIT = "orbit"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ---------------------------------------------------------------------- #
# Catalog
# ---------------------------------------------------------------------- #


class Footprint(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: float = Field(gt=0, description="Width in m (x axis)")
    length: float = Field(gt=0, description="Length in m (y axis)")
    height: float = Field(gt=0, description="Ceiling height in m")


class DistanceRule(BaseModel):
    """Spatial preference of one room type towards another."""

    model_config = ConfigDict(frozen=True)

    min_distance: Optional[float] = Field(default=None, gt=0)
    max_distance: Optional[float] = Field(default=None, gt=0)
    adjacency_bonus: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_range(self) -> "DistanceRule":
        if (
            self.min_distance is not None
            and self.max_distance is not None
            and self.min_distance > self.max_distance
        ):
            raise ValueError("min_distance must not exceed max_distance")
        return self


class RoomTypeDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: RoomCategory
    footprint: Footprint
    noise_level: NoiseLevel = NoiseLevel.MODERATE
    multiple_allowed: bool = True
    color: tuple[int, int, int] = (200, 200, 200)
    constraints: dict[str, DistanceRule] = Field(default_factory=dict)
    description: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def area(self) -> float:
        return self.footprint.width * self.footprint.length

    @computed_field  # type: ignore[prop-decorator]
    @property
    def volume(self) -> float:
        return self.area * self.footprint.height


# ---------------------------------------------------------------------- #
# Mission and layout
# ---------------------------------------------------------------------- #


class MissionParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    crew_size: int = Field(ge=1, le=12)
    duration_days: int = Field(ge=1)
    destination: Destination = Destination.MOON


class Position(BaseModel):
    x: float
    y: float


class ModuleBounds(BaseModel):
    width: float = Field(gt=0, description="Available footprint along x in m")
    length: float = Field(gt=0, description="Available footprint along y in m")


class PlacedRoom(BaseModel):
    instance_id: str
    type_id: str
    position: Position


class Layout(BaseModel):
    module: ModuleBounds
    rooms: list[PlacedRoom] = Field(default_factory=list)
    next_instance: int = Field(default=1, ge=1)

    @field_validator("rooms")
    @classmethod
    def unique_instance_ids(cls, v: list[PlacedRoom]) -> list[PlacedRoom]:
        ids = [r.instance_id for r in v]
        if len(ids) != len(set(ids)):
            raise ValueError("instance_id values must be unique")
        return v

    @model_validator(mode="after")
    def advance_instance_counter(self) -> "Layout":
        # Loaded documents may omit the counter; never hand out a used suffix
        suffixes = [
            int(m.group(1))
            for m in (re.fullmatch(r"room_(\d+)", r.instance_id) for r in self.rooms)
            if m
        ]
        if suffixes and self.next_instance <= max(suffixes):
            self.next_instance = max(suffixes) + 1
        return self


class HabitatDesign(BaseModel):
    """Persisted document: a layout together with its mission."""

    mission: MissionParameters
    layout: Layout


# ---------------------------------------------------------------------- #
# Results
# ---------------------------------------------------------------------- #


class ValidationResult(BaseModel):
    valid: bool
    score: float = 0.0
    violations: list[str] = Field(default_factory=list)
    bonuses: list[str] = Field(default_factory=list)


class CategoryResult(BaseModel):
    name: str
    label: str
    current: float = 0.0
    required: float = 0.0
    passed: bool = False
    raw_score: float = 0.0
    max_score: float
    message: str = ""
    details: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def percentage(self) -> float:
        if self.max_score <= 0:
            return 0.0
        return round(100.0 * self.raw_score / self.max_score, 1)


class Recommendation(BaseModel):
    category: str
    priority: Priority
    message: str
    actions: list[str] = Field(default_factory=list)


class ComplianceReport(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    categories: dict[str, CategoryResult]
    recommendations: list[Recommendation] = Field(default_factory=list)

    @property
    def passed(self) -> list[str]:
        return [k for k, c in self.categories.items() if c.passed]

    @property
    def failed(self) -> list[str]:
        return [k for k, c in self.categories.items() if not c.passed]
