# src/habitat/structures.py
"""Habitat structure shapes offered before interior design."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StructureSpec:
    name: str
    floor_area: float  # m^2
    volume: float  # m^3
    crew_capacity: int
    efficiency: float  # percent
    description: str


STRUCTURE_SPECS: dict[str, StructureSpec] = {
    "dome":     StructureSpec("Dome Module", 78.5, 261.8, 6, 85,
                              "Optimal pressure distribution, spherical design"),
    "torus":    StructureSpec("Torus Module", 157.1, 394.8, 8, 70,
                              "Artificial gravity via rotation, ring-shaped"),
    "cube":     StructureSpec("Cube Module", 100.0, 250.0, 10, 95,
                              "Maximum volume efficiency, rectangular design"),
    "cylinder": StructureSpec("Cylinder Module", 70.7, 176.7, 5, 80,
                              "Traditional cylindrical space habitat"),
}


@dataclass(frozen=True)
class StructureTotals:
    floor_area: float
    volume: float
    crew_capacity: int
    efficiency: int


def structure_totals(selection: dict[str, int]) -> StructureTotals:
    """Sum a {shape: quantity} selection; efficiency is volume-weighted."""
    floor_area = volume = weighted = 0.0
    crew = 0
    for shape, quantity in selection.items():
        spec = STRUCTURE_SPECS.get(shape)
        if spec is None:
            raise ValueError(f"Unknown structure shape: {shape!r}")
        if quantity <= 0:
            continue
        floor_area += spec.floor_area * quantity
        volume += spec.volume * quantity
        crew += spec.crew_capacity * quantity
        weighted += spec.efficiency * spec.volume * quantity

    efficiency = round(weighted / volume) if volume > 0 else 0
    return StructureTotals(floor_area, volume, crew, efficiency)
