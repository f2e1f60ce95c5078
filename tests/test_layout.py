# tests/test_layout.py
import pytest

from habitat.layout import (
    as_position,
    clear_layout,
    count_rooms,
    find_conflicts,
    remove_room,
    resolve_rooms,
    total_volume,
)
from habitat.models import Position


def test_as_position_accepts_several_forms():
    assert as_position((1.0, 2.0)) == Position(x=1.0, y=2.0)
    assert as_position({"x": 1.0, "y": 2.0}) == Position(x=1.0, y=2.0)
    p = Position(x=3, y=4)
    assert as_position(p) is p


def test_resolve_rooms_skips_unknown_types(make_layout):
    layout = make_layout([("storage", 0, 0), ("ballroom", 5, 5)])
    resolved = resolve_rooms(layout)
    assert [r.type_id for r in resolved] == ["storage"]
    assert resolved[0].rect.right == 4.0


def test_count_and_volume(make_layout):
    layout = make_layout([
        ("crew_quarters", 0, 0), ("crew_quarters", 3, 0), ("storage", 0, 5),
    ])
    counts = count_rooms(layout)
    assert counts["crew_quarters"] == 2
    assert counts["storage"] == 1
    assert total_volume(layout) == pytest.approx(2 * 12.5 + 20.0)


def test_find_conflicts(make_layout):
    layout = make_layout([
        ("storage", 0, 0), ("storage", 2, 1), ("storage", 10, 10),
    ])
    assert find_conflicts(layout) == [("room_001", "room_002")]


def test_remove_room(make_layout):
    layout = make_layout([("storage", 0, 0), ("galley", 5, 5)])
    assert remove_room(layout, "room_001") is True
    assert [r.instance_id for r in layout.rooms] == ["room_002"]
    assert remove_room(layout, "room_001") is False


def test_clear_layout_keeps_counter(make_layout):
    layout = make_layout([("storage", 0, 0), ("galley", 5, 5)])
    clear_layout(layout)
    assert layout.rooms == []
    assert layout.next_instance == 3
