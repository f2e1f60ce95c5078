# tests/conftest.py
import pytest

from habitat.models import Layout, ModuleBounds, PlacedRoom, Position


@pytest.fixture
def make_layout():
    """Build a Layout directly from (type_id, x, y) tuples, bypassing validation."""

    def _make(rooms=(), width=30.0, length=30.0):
        placed = [
            PlacedRoom(instance_id=f"room_{i:03d}", type_id=t, position=Position(x=x, y=y))
            for i, (t, x, y) in enumerate(rooms, start=1)
        ]
        return Layout(
            module=ModuleBounds(width=width, length=length),
            rooms=placed,
            next_instance=len(placed) + 1,
        )

    return _make
