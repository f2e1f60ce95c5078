# tests/test_tips.py
import pytest

from habitat.tips import EDUCATIONAL_TIPS, check_educational_tips


def test_tip_table():
    assert len(EDUCATIONAL_TIPS) == 7
    assert any(t.points < 0 for t in EDUCATIONAL_TIPS)


def test_kitchen_dining_tip(make_layout):
    layout = make_layout([("galley", 0, 0), ("diningroom", 2, 0)])
    tips = check_educational_tips(layout)
    assert [t.tip.title for t in tips] == ["Excellent Kitchen-Dining Layout!"]
    assert tips[0].rooms == ("room_001", "room_002")
    assert tips[0].distance == pytest.approx(2.512, abs=1e-3)


def test_tip_out_of_range(make_layout):
    layout = make_layout([("galley", 0, 0), ("diningroom", 5, 0)])
    assert check_educational_tips(layout) == []


def test_tip_needs_both_types(make_layout):
    assert check_educational_tips(make_layout([("galley", 0, 0)])) == []


def test_closest_pair_is_used(make_layout):
    layout = make_layout([
        ("workstation", 0, 0),
        ("crew_quarters", 20, 20),
        ("crew_quarters", 3, 0),
    ])
    tips = check_educational_tips(layout)
    assert [t.tip.category for t in tips] == ["psychology"]
    assert tips[0].rooms == ("room_001", "room_003")
