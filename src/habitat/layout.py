# src/habitat/layout.py
"""Helpers over a caller-owned Layout: resolution, integrity and removal."""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterator, Mapping, Sequence, Union

from habitat.catalog import get_room_type_definition
from habitat.geometry import Rect, overlaps
from habitat.models import Layout, PlacedRoom, Position, RoomTypeDefinition

logger = logging.getLogger(__name__)

PositionLike = Union[Position, Sequence[float], Mapping[str, float]]


@dataclass(frozen=True)
class ResolvedRoom:
    """A placed room joined with its catalog definition and bounds."""

    room: PlacedRoom
    definition: RoomTypeDefinition
    rect: Rect

    @property
    def type_id(self) -> str:
        return self.definition.id


def as_position(value: PositionLike) -> Position:
    if isinstance(value, Position):
        return value
    if isinstance(value, Mapping):
        return Position(x=value["x"], y=value["y"])
    x, y = value
    return Position(x=x, y=y)


def room_rect(definition: RoomTypeDefinition, position: Position) -> Rect:
    fp = definition.footprint
    return Rect(position.x, position.y, fp.width, fp.length)


def resolve_rooms(layout: Layout) -> list[ResolvedRoom]:
    """Resolve every room of known type; unknown type ids are skipped."""
    resolved: list[ResolvedRoom] = []
    for room in layout.rooms:
        definition = get_room_type_definition(room.type_id)
        if definition is None:
            logger.warning(
                "Skipping %s: unknown room type %r", room.instance_id, room.type_id
            )
            continue
        resolved.append(
            ResolvedRoom(room, definition, room_rect(definition, room.position))
        )
    return resolved


def iter_type(rooms: Sequence[ResolvedRoom], type_id: str) -> Iterator[ResolvedRoom]:
    return (r for r in rooms if r.type_id == type_id)


def count_rooms(layout: Layout) -> Counter[str]:
    return Counter(r.type_id for r in resolve_rooms(layout))


def total_volume(layout: Layout) -> float:
    return sum(r.definition.volume for r in resolve_rooms(layout))


def find_conflicts(layout: Layout) -> list[tuple[str, str]]:
    """Return instance id pairs whose bounds overlap."""
    rooms = resolve_rooms(layout)
    conflicts = []
    for i in range(len(rooms)):
        for j in range(i + 1, len(rooms)):
            if overlaps(rooms[i].rect, rooms[j].rect):
                conflicts.append(
                    (rooms[i].room.instance_id, rooms[j].room.instance_id)
                )
    return conflicts


def remove_room(layout: Layout, instance_id: str) -> bool:
    """Remove a placed room; returns False if no room has that id."""
    for idx, room in enumerate(layout.rooms):
        if room.instance_id == instance_id:
            del layout.rooms[idx]
            logger.debug("Removed %s (%s)", instance_id, room.type_id)
            return True
    return False


def clear_layout(layout: Layout) -> None:
    """Remove all rooms. The instance counter is kept so ids are never reused."""
    layout.rooms.clear()
