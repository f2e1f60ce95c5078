# src/habitat/geometry.py
"""Axis-aligned rectangle helpers used by placement and scoring.

Coordinates are metres in the module's local frame: x grows to the right,
y grows downwards, and a rectangle is anchored at its top-left corner.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
from shapely.geometry import Polygon, box as shapely_box
from shapely.ops import unary_union

Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    length: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.length

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2.0, self.y + self.length / 2.0)

    def to_polygon(self) -> Polygon:
        return create_rectangle(self.x, self.y, self.width, self.length)


def create_rectangle(x: float, y: float, width: float, length: float) -> Polygon:
    """Create a rectangle polygon at (x, y) with given dimensions."""
    return shapely_box(x, y, x + width, y + length)


def overlaps(a: Rect, b: Rect) -> bool:
    """Check if two rectangles overlap (sharing an edge is NOT overlap)."""
    return not (
        a.right <= b.left
        or b.right <= a.left
        or a.bottom <= b.top
        or b.bottom <= a.top
    )


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(p2[0] - p1[0], p2[1] - p1[1]))


def center_distance(a: Rect, b: Rect) -> float:
    """Distance between rectangle centres; all distance rules use this."""
    return distance(a.center, b.center)


def adjacent(a: Rect, b: Rect, tolerance: float = 0.1) -> bool:
    """True if the rectangles share an edge within ``tolerance`` metres.

    The projections on the axis along the shared edge must overlap by a
    positive length, so corner-to-corner contact is not adjacency.
    """
    x_overlap = min(a.right, b.right) - max(a.left, b.left)
    y_overlap = min(a.bottom, b.bottom) - max(a.top, b.top)

    vertical_edge = (
        abs(a.right - b.left) <= tolerance or abs(b.right - a.left) <= tolerance
    )
    horizontal_edge = (
        abs(a.bottom - b.top) <= tolerance or abs(b.bottom - a.top) <= tolerance
    )
    return (vertical_edge and y_overlap > 0) or (horizontal_edge and x_overlap > 0)


def snap_to_grid(point: Point, grid_size: float) -> Point:
    """Snap a point to the nearest grid intersection."""
    x, y = point
    return (round(x / grid_size) * grid_size, round(y / grid_size) * grid_size)


def within_bounds(rect: Rect, width: float, length: float) -> bool:
    """Check that ``rect`` lies inside a module footprint anchored at the origin."""
    module = create_rectangle(0, 0, width, length)
    return module.covers(rect.to_polygon())


def covered_area(rects: Iterable[Rect]) -> float:
    """Floor area covered by the union of the rectangles."""
    polys = [r.to_polygon() for r in rects]
    if not polys:
        return 0.0
    return float(unary_union(polys).area)
