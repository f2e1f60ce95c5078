# src/habitat/mission.py
"""Mission-derived requirements: volume tiers, room counts, module sizing."""
from __future__ import annotations

import math
from dataclasses import dataclass

from habitat.errors import MalformedMissionParametersError
from habitat.models import Destination, MissionParameters, ModuleBounds

HABITABLE_FRACTION = 0.70
STANDARD_HEIGHT = 2.5  # m
OPTIMAL_RATIO = 1.5  # module length / width
CREW_PER_HYGIENE_STATION = 3

# (max duration in days, required m^3 per person); longer missions use the last tier
VOLUME_TIERS: list[tuple[float, float]] = [
    (30, 20.0),
    (90, 25.0),
    (180, 30.0),
    (math.inf, 40.0),
]


@dataclass(frozen=True)
class DestinationFactors:
    gravity: float  # fraction of Earth gravity
    radiation_shielding: float
    thermal_requirement: float


DESTINATION_FACTORS: dict[Destination, DestinationFactors] = {
    Destination.MOON: DestinationFactors(0.167, 1.2, 1.1),
    Destination.MARS: DestinationFactors(0.378, 1.1, 1.05),
    Destination.ORBIT: DestinationFactors(0.0, 1.0, 1.0),
}


def ensure_crew(crew_size: int) -> int:
    if crew_size < 1:
        raise MalformedMissionParametersError(
            f"crew_size must be at least 1, got {crew_size}"
        )
    return crew_size


def required_volume_per_person(duration_days: float) -> float:
    for max_days, volume in VOLUME_TIERS:
        if duration_days <= max_days:
            return volume
    return VOLUME_TIERS[-1][1]


def required_hygiene_stations(crew_size: int) -> int:
    return math.ceil(ensure_crew(crew_size) / CREW_PER_HYGIENE_STATION)


def required_rooms(crew_size: int) -> dict[str, int]:
    """Room counts a crew of ``crew_size`` needs."""
    crew = ensure_crew(crew_size)
    return {
        "crew_quarters": crew,
        "hygiene": required_hygiene_stations(crew),
        "galley": 1,
        "diningroom": 1,
        "exercise": 1,
        "workstation": math.ceil(crew / 2),
        "medical": 1,
        "storage": max(1, math.ceil(crew / 4)),
        "airlock": 1,
    }


@dataclass(frozen=True)
class StorageRequirements:
    personal_items: float
    food: float
    water: float
    equipment: float

    @property
    def total(self) -> float:
        return self.personal_items + self.food + self.water + self.equipment


def storage_requirements(
    crew_size: int, duration_days: int, emergency_days: int = 30
) -> StorageRequirements:
    """Storage volume in m^3; food and water are taken as 1 kg per litre."""
    crew = ensure_crew(crew_size)
    return StorageRequirements(
        personal_items=crew * 0.5,
        food=crew * 1.8 * (duration_days + emergency_days) / 1000,
        water=crew * 3.0 * emergency_days / 1000,
        equipment=crew * 0.5,
    )


@dataclass(frozen=True)
class ModuleDimensions:
    width: float
    length: float
    height: float
    efficiency: float
    shielding_factor: float
    thermal_factor: float

    @property
    def base_area(self) -> float:
        return self.width * self.length

    @property
    def total_volume(self) -> float:
        return self.base_area * self.height

    @property
    def habitable_volume(self) -> float:
        return self.total_volume * self.efficiency

    def volume_per_person(self, crew_size: int) -> float:
        return self.habitable_volume / ensure_crew(crew_size)

    def bounds(self) -> ModuleBounds:
        return ModuleBounds(width=self.width, length=self.length)


def recommend_module_dimensions(mission: MissionParameters) -> ModuleDimensions:
    """Size a rectangular module that meets the volume tier for ``mission``."""
    crew = ensure_crew(mission.crew_size)
    factors = DESTINATION_FACTORS[mission.destination]

    per_person = required_volume_per_person(mission.duration_days)
    habitable = crew * per_person * factors.thermal_requirement
    module_volume = habitable / HABITABLE_FRACTION
    base_area = module_volume / STANDARD_HEIGHT

    width = math.sqrt(base_area / OPTIMAL_RATIO)
    length = width * OPTIMAL_RATIO

    return ModuleDimensions(
        width=math.ceil(round(width * 10, 6)) / 10,
        length=math.ceil(round(length * 10, 6)) / 10,
        height=STANDARD_HEIGHT,
        efficiency=HABITABLE_FRACTION,
        shielding_factor=factors.radiation_shielding,
        thermal_factor=factors.thermal_requirement,
    )
