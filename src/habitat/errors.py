# src/habitat/errors.py
"""Exceptions raised by the habitat core."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from habitat.models import ValidationResult


class HabitatError(Exception):
    """Base class for habitat core errors."""


class InvalidPlacementError(HabitatError):
    """A placement failed the hard gate (bounds, overlap or uniqueness)."""

    def __init__(self, result: "ValidationResult") -> None:
        self.result = result
        reason = "; ".join(result.violations) or "invalid placement"
        super().__init__(f"Cannot place room here: {reason}")


class UnknownRoomTypeError(HabitatError, KeyError):
    """A room type id is not present in the catalog."""

    def __init__(self, type_id: str) -> None:
        self.type_id = type_id
        super().__init__(type_id)

    def __str__(self) -> str:
        return f"Unknown room type: {self.type_id!r}"


class MalformedMissionParametersError(HabitatError, ValueError):
    """Mission parameters that would make ratio computations meaningless."""
