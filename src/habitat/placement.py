# src/habitat/placement.py
"""Placement validation: hard gate plus soft constraint-satisfaction score."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from habitat.catalog import get_room_type_definition, room_name
from habitat.errors import InvalidPlacementError
from habitat.geometry import Rect, center_distance, overlaps, snap_to_grid, within_bounds
from habitat.layout import PositionLike, ResolvedRoom, as_position, resolve_rooms, room_rect
from habitat.models import (
    Layout,
    ModuleBounds,
    PlacedRoom,
    Position,
    RoomCategory,
    RoomTypeDefinition,
    ValidationResult,
)

logger = logging.getLogger(__name__)


@dataclass
class PlacementConfig:
    """Penalty and bonus constants shared by every distance rule."""

    min_distance_penalty: float = 5.0
    max_distance_penalty: float = 8.0
    adjacency_window: float = 3.0


@dataclass
class PlacementOutcome:
    result: ValidationResult
    room: Optional[PlacedRoom] = None

    @property
    def placed(self) -> bool:
        return self.room is not None


@dataclass
class PositionSuggestion:
    position: Position
    score: float
    reasons: list[str] = field(default_factory=list)


class PlacementValidator:
    """Decides whether a room may be placed and how well it fits."""

    def __init__(self, config: PlacementConfig | None = None) -> None:
        self.config = config or PlacementConfig()

    def validate(
        self,
        type_id: str,
        position: PositionLike,
        layout: Layout,
        module_bounds: ModuleBounds | None = None,
    ) -> ValidationResult:
        definition = get_room_type_definition(type_id)
        if definition is None:
            logger.warning("Placement requested for unknown room type %r", type_id)
            return ValidationResult(
                valid=False, violations=[f"Unknown room type '{type_id}'"]
            )

        bounds = module_bounds or layout.module
        candidate = room_rect(definition, as_position(position))
        placed = resolve_rooms(layout)

        violations = self._hard_gate(definition, candidate, placed, bounds)
        if violations:
            return ValidationResult(valid=False, violations=violations)

        return self._soft_score(definition, candidate, placed)

    # ------------------------------------------------------------------ #
    # Hard gate
    # ------------------------------------------------------------------ #

    def _hard_gate(
        self,
        definition: RoomTypeDefinition,
        candidate: Rect,
        placed: list[ResolvedRoom],
        bounds: ModuleBounds,
    ) -> list[str]:
        violations: list[str] = []

        if not definition.multiple_allowed and any(
            p.type_id == definition.id for p in placed
        ):
            violations.append(
                f"{definition.name}: only one instance permitted per habitat"
            )

        if not within_bounds(candidate, bounds.width, bounds.length):
            violations.append(
                f"{definition.name} extends outside the module footprint "
                f"({bounds.width:g} x {bounds.length:g} m)"
            )

        for other in placed:
            if overlaps(candidate, other.rect):
                violations.append(
                    f"Overlaps {other.definition.name} ({other.room.instance_id})"
                )

        return violations

    # ------------------------------------------------------------------ #
    # Soft score
    # ------------------------------------------------------------------ #

    def _soft_score(
        self,
        definition: RoomTypeDefinition,
        candidate: Rect,
        placed: list[ResolvedRoom],
    ) -> ValidationResult:
        cfg = self.config
        result = ValidationResult(valid=True)

        for target_id, rule in definition.constraints.items():
            if target_id == definition.id:
                continue

            target = get_room_type_definition(target_id)
            target_name = room_name(target_id)
            nearest = min(
                (center_distance(candidate, p.rect) for p in placed if p.type_id == target_id),
                default=None,
            )

            if rule.min_distance is not None and nearest is not None:
                if nearest < rule.min_distance:
                    result.violations.append(
                        f"Too close to {target_name} "
                        f"({nearest:.1f}m < {rule.min_distance:g}m required)"
                    )
                    result.score -= cfg.min_distance_penalty

            if rule.max_distance is not None:
                if nearest is None:
                    # Absent optional rooms are not a requirement of this one
                    if target is not None and target.category == RoomCategory.ESSENTIAL:
                        result.violations.append(
                            f"No {target_name} within {rule.max_distance:g}m "
                            f"(none placed yet)"
                        )
                        result.score -= cfg.max_distance_penalty
                elif nearest > rule.max_distance:
                    result.violations.append(
                        f"Too far from {target_name} "
                        f"({nearest:.1f}m > {rule.max_distance:g}m maximum)"
                    )
                    result.score -= cfg.max_distance_penalty

            if rule.adjacency_bonus is not None and nearest is not None:
                if nearest <= cfg.adjacency_window:
                    result.score += rule.adjacency_bonus
                    result.bonuses.append(
                        f"Great placement near {target_name}! "
                        f"(+{rule.adjacency_bonus:g} points)"
                    )

        return result


def validate_placement(
    type_id: str,
    position: PositionLike,
    layout: Layout,
    module_bounds: ModuleBounds | None = None,
    config: PlacementConfig | None = None,
) -> ValidationResult:
    """Validate a candidate placement without modifying ``layout``."""
    return PlacementValidator(config).validate(type_id, position, layout, module_bounds)


def add_room(
    layout: Layout,
    type_id: str,
    position: PositionLike,
    module_bounds: ModuleBounds | None = None,
    config: PlacementConfig | None = None,
    snap: float | None = None,
    strict: bool = False,
) -> PlacementOutcome:
    """Validate and, only if the hard gate passes, commit a room to ``layout``.

    Args:
        layout: The layout to extend. Left untouched on rejection.
        type_id: Catalog id of the room type.
        position: Top-left corner in module coordinates.
        module_bounds: Overrides ``layout.module`` for the bounds check.
        config: Placement penalties and bonus window.
        snap: Grid size to snap the position to before validating.
        strict: Raise InvalidPlacementError instead of returning a rejection.

    Returns:
        A PlacementOutcome; ``room`` is None when the placement was rejected.
    """
    pos = as_position(position)
    if snap:
        x, y = snap_to_grid((pos.x, pos.y), snap)
        pos = Position(x=x, y=y)

    result = validate_placement(type_id, pos, layout, module_bounds, config)
    if not result.valid:
        logger.debug("Rejected %s at (%.2f, %.2f): %s", type_id, pos.x, pos.y, result.violations)
        if strict:
            raise InvalidPlacementError(result)
        return PlacementOutcome(result=result)

    taken = {r.instance_id for r in layout.rooms}
    while f"room_{layout.next_instance:03d}" in taken:
        layout.next_instance += 1

    room = PlacedRoom(
        instance_id=f"room_{layout.next_instance:03d}",
        type_id=type_id,
        position=pos,
    )
    layout.rooms.append(room)
    layout.next_instance += 1
    logger.debug("Placed %s as %s (score %+g)", type_id, room.instance_id, result.score)
    return PlacementOutcome(result=result, room=room)


def scan_positions(
    type_id: str,
    layout: Layout,
    grid_size: float = 0.5,
    config: PlacementConfig | None = None,
) -> list[PositionSuggestion]:
    """Validate every grid position for ``type_id`` and keep the legal ones."""
    definition = get_room_type_definition(type_id)
    if definition is None:
        return []

    validator = PlacementValidator(config)
    bounds = layout.module
    fp = definition.footprint
    xs = np.arange(0.0, bounds.width - fp.width + 1e-9, grid_size)
    ys = np.arange(0.0, bounds.length - fp.length + 1e-9, grid_size)

    found: list[PositionSuggestion] = []
    for x in xs:
        for y in ys:
            pos = Position(x=round(float(x), 6), y=round(float(y), 6))
            result = validator.validate(type_id, pos, layout)
            if result.valid:
                found.append(PositionSuggestion(pos, result.score, result.bonuses))
    return found


def suggest_positions(
    type_id: str,
    layout: Layout,
    grid_size: float = 0.5,
    limit: int = 5,
    config: PlacementConfig | None = None,
) -> list[PositionSuggestion]:
    """Return the best positive-score positions for ``type_id``, best first."""
    candidates = [
        s for s in scan_positions(type_id, layout, grid_size, config) if s.score > 0
    ]
    candidates.sort(key=lambda s: s.score, reverse=True)
    return candidates[:limit]
