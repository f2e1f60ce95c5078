# src/habitat/catalog.py
"""Room catalog with footprints and spatial preferences based on NASA-STD-3001."""
from __future__ import annotations

import logging
from typing import Optional, Union

from habitat.errors import UnknownRoomTypeError
from habitat.models import (
    DistanceRule,
    Footprint,
    NoiseLevel,
    RoomCategory,
    RoomTypeDefinition,
)

logger = logging.getLogger(__name__)

STANDARD_HEIGHT = 2.5  # m

R = DistanceRule


def _room(
    id: str,
    name: str,
    category: RoomCategory,
    size: tuple[float, float],
    noise: NoiseLevel,
    color: tuple[int, int, int],
    constraints: dict[str, DistanceRule],
    description: str,
    multiple_allowed: bool = True,
) -> RoomTypeDefinition:
    width, length = size
    return RoomTypeDefinition(
        id=id,
        name=name,
        category=category,
        footprint=Footprint(width=width, length=length, height=STANDARD_HEIGHT),
        noise_level=noise,
        multiple_allowed=multiple_allowed,
        color=color,
        constraints=constraints,
        description=description,
    )


ESSENTIAL = RoomCategory.ESSENTIAL
OPTIONAL = RoomCategory.OPTIONAL

_DEFINITIONS: list[RoomTypeDefinition] = [
    _room(
        "crew_quarters", "Crew Quarters", ESSENTIAL, (2.0, 2.5),
        NoiseLevel.QUIET, (76, 175, 80),
        {
            "exercise":    R(min_distance=3.0),
            "galley":      R(min_distance=2.0),
            "hygiene":     R(min_distance=1.0, max_distance=8.0, adjacency_bonus=10),
            "medical":     R(max_distance=12.0),
            "workstation": R(adjacency_bonus=5),
        },
        "Individual sleeping quarters providing privacy and rest space.",
    ),
    _room(
        "hygiene", "Hygiene Station", ESSENTIAL, (1.2, 1.2),
        NoiseLevel.MODERATE, (33, 150, 243),
        {
            "galley":        R(min_distance=2.0),
            "workstation":   R(min_distance=1.0),
            "crew_quarters": R(max_distance=8.0, adjacency_bonus=15),
            "medical":       R(adjacency_bonus=8),
        },
        "Personal hygiene facilities including waste management.",
    ),
    _room(
        "galley", "Galley", ESSENTIAL, (2.0, 1.5),
        NoiseLevel.MODERATE, (255, 152, 0),
        {
            "hygiene":     R(min_distance=2.0),
            "exercise":    R(min_distance=2.0),
            "diningroom":  R(max_distance=3.0, adjacency_bonus=20),
            "storage":     R(max_distance=5.0, adjacency_bonus=15),
            "workstation": R(adjacency_bonus=5),
        },
        "Food preparation area with heating, storage and cleaning facilities.",
        multiple_allowed=False,
    ),
    _room(
        "diningroom", "Dining Room", ESSENTIAL, (3.0, 2.0),
        NoiseLevel.MODERATE, (255, 193, 7),
        {
            "galley":        R(max_distance=3.0, adjacency_bonus=25),
            "crew_quarters": R(max_distance=10.0),
            "workstation":   R(adjacency_bonus=10),
            "recreation":    R(adjacency_bonus=15),
        },
        "Dining and social area where the crew gathers for meals and meetings.",
        multiple_allowed=False,
    ),
    _room(
        "exercise", "Exercise Area", ESSENTIAL, (3.0, 2.0),
        NoiseLevel.HIGH, (233, 30, 99),
        {
            "crew_quarters": R(min_distance=3.0),
            "medical":       R(min_distance=2.0, max_distance=8.0, adjacency_bonus=10),
            "workstation":   R(min_distance=2.0),
            "hygiene":       R(max_distance=6.0, adjacency_bonus=12),
            "storage":       R(adjacency_bonus=8),
        },
        "Fitness area with exercise equipment for crew health maintenance.",
    ),
    _room(
        "workstation", "Work Station", ESSENTIAL, (2.0, 1.5),
        NoiseLevel.QUIET, (156, 39, 176),
        {
            "exercise":      R(min_distance=2.0),
            "galley":        R(min_distance=1.0),
            "storage":       R(max_distance=5.0, adjacency_bonus=12),
            "crew_quarters": R(max_distance=8.0),
            "medical":       R(adjacency_bonus=8),
            "diningroom":    R(adjacency_bonus=10),
        },
        "Research and operations workspace with computers and instruments.",
    ),
    _room(
        "medical", "Medical Bay", ESSENTIAL, (2.0, 1.5),
        NoiseLevel.QUIET, (244, 67, 54),
        {
            "crew_quarters": R(max_distance=12.0),
            "exercise":      R(max_distance=8.0),
            "workstation":   R(max_distance=10.0, adjacency_bonus=8),
            "hygiene":       R(adjacency_bonus=10),
            "storage":       R(adjacency_bonus=15),
        },
        "Medical care facility for health monitoring and emergency treatment.",
    ),
    _room(
        "storage", "Storage", ESSENTIAL, (4.0, 2.0),
        NoiseLevel.QUIET, (121, 85, 72),
        {
            "galley":      R(max_distance=5.0, adjacency_bonus=15),
            "workstation": R(max_distance=5.0, adjacency_bonus=12),
            "medical":     R(max_distance=6.0, adjacency_bonus=10),
            "exercise":    R(adjacency_bonus=8),
        },
        "Storage for supplies, equipment and personal items.",
    ),
    _room(
        "airlock", "Airlock/EVA Prep", ESSENTIAL, (2.5, 2.5),
        NoiseLevel.MODERATE, (96, 125, 139),
        {
            "crew_quarters": R(min_distance=3.0),
            "galley":        R(min_distance=2.0),
            "medical":       R(min_distance=2.0, max_distance=8.0, adjacency_bonus=10),
            "storage":       R(max_distance=4.0, adjacency_bonus=20),
            "workstation":   R(adjacency_bonus=12),
        },
        "Airlock and EVA preparation area for surface operations.",
        multiple_allowed=False,
    ),
    _room(
        "recreation", "Recreation Area", OPTIONAL, (2.5, 2.5),
        NoiseLevel.MODERATE, (0, 188, 212),
        {
            "medical":       R(min_distance=2.0),
            "workstation":   R(min_distance=1.0),
            "diningroom":    R(adjacency_bonus=15),
            "crew_quarters": R(adjacency_bonus=10),
            "storage":       R(adjacency_bonus=8),
        },
        "Recreation area for relaxation, games and social activities.",
    ),
    _room(
        "greenhouse", "Greenhouse", OPTIONAL, (3.0, 2.5),
        NoiseLevel.QUIET, (139, 195, 74),
        {
            "exercise":    R(min_distance=2.0),
            "hygiene":     R(min_distance=2.0),
            "workstation": R(adjacency_bonus=12),
            "galley":      R(adjacency_bonus=10),
            "storage":     R(adjacency_bonus=8),
        },
        "Growing area for fresh food production and psychological benefit.",
    ),
]

ROOM_CATALOG: dict[str, RoomTypeDefinition] = {d.id: d for d in _DEFINITIONS}

# Filter tabs offered next to the essential/optional split
ROOM_GROUPS: dict[str, list[str]] = {
    "habitation": ["crew_quarters", "hygiene", "recreation"],
    "operations": ["workstation", "medical", "airlock", "storage"],
    "social":     ["galley", "diningroom", "recreation", "exercise"],
}

NOISY_ROOM_TYPES: frozenset[str] = frozenset(
    d.id for d in _DEFINITIONS if d.noise_level == NoiseLevel.HIGH
)
QUIET_ROOM_TYPES: frozenset[str] = frozenset({"crew_quarters"})


def get_room_type_definition(type_id: str) -> Optional[RoomTypeDefinition]:
    """Return the definition for ``type_id`` or None if it is not cataloged."""
    return ROOM_CATALOG.get(type_id)


def require_room_type(type_id: str) -> RoomTypeDefinition:
    definition = ROOM_CATALOG.get(type_id)
    if definition is None:
        raise UnknownRoomTypeError(type_id)
    return definition


def room_name(type_id: str) -> str:
    definition = ROOM_CATALOG.get(type_id)
    return definition.name if definition else type_id


def list_room_types(
    filter: Union[RoomCategory, str, None] = None,
) -> list[RoomTypeDefinition]:
    """List room types, optionally filtered by category or room group."""
    if filter is None or filter == "all":
        return list(_DEFINITIONS)

    try:
        category = RoomCategory(filter)
    except ValueError:
        category = None
    if category is not None:
        return [d for d in _DEFINITIONS if d.category == category]

    group = ROOM_GROUPS.get(str(filter))
    if group is None:
        logger.error("Unknown room type filter: %s", filter)
        return []
    return [d for d in _DEFINITIONS if d.id in group]
