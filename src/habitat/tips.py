# src/habitat/tips.py
"""Proximity-triggered design tips shown while a layout is being edited."""
from __future__ import annotations

from dataclasses import dataclass
from itertools import product

from habitat.geometry import center_distance
from habitat.layout import iter_type, resolve_rooms
from habitat.models import Layout


@dataclass(frozen=True)
class EducationalTip:
    trigger: tuple[str, str]
    proximity: float  # m, centre to centre
    title: str
    message: str
    points: int
    category: str


@dataclass(frozen=True)
class TriggeredTip:
    tip: EducationalTip
    distance: float
    rooms: tuple[str, str]  # instance ids of the closest pair


EDUCATIONAL_TIPS: tuple[EducationalTip, ...] = (
    EducationalTip(
        ("galley", "diningroom"), 3.0,
        "Excellent Kitchen-Dining Layout!",
        "Placing the galley next to the dining room shortens meal service and "
        "food transport, following the galley design principles used on the ISS.",
        20, "efficiency",
    ),
    EducationalTip(
        ("exercise", "hygiene"), 4.0,
        "Smart Exercise-Hygiene Placement!",
        "Hygiene facilities near the exercise area let the crew wash right after "
        "workouts, which keeps odours out of the rest of the habitat.",
        15, "hygiene",
    ),
    EducationalTip(
        ("crew_quarters", "exercise"), 2.0,
        "Consider Noise Impact",
        "Exercise equipment produces noise and vibration. Sleeping quarters this "
        "close may disturb crew rest; add distance or sound insulation.",
        -10, "noise",
    ),
    EducationalTip(
        ("medical", "storage"), 3.0,
        "Medical Supply Access",
        "Medical bays need quick access to supplies and emergency equipment. "
        "This layout supports an efficient emergency response.",
        12, "safety",
    ),
    EducationalTip(
        ("workstation", "crew_quarters"), 5.0,
        "Work-Life Balance",
        "Workstations should be reachable from crew quarters without blurring "
        "the boundary between work and personal space.",
        8, "psychology",
    ),
    EducationalTip(
        ("greenhouse", "workstation"), 3.0,
        "Research Integration",
        "A greenhouse next to the work stations makes it easier to monitor plant "
        "growth and collect research data.",
        15, "research",
    ),
    EducationalTip(
        ("airlock", "medical"), 6.0,
        "EVA Safety Protocol",
        "Medical bay access from the airlock allows immediate treatment of "
        "EVA-related injuries.",
        18, "safety",
    ),
)


def check_educational_tips(
    layout: Layout, tips: tuple[EducationalTip, ...] = EDUCATIONAL_TIPS
) -> list[TriggeredTip]:
    """Return tips whose closest trigger pair is within the tip's proximity."""
    rooms = resolve_rooms(layout)
    triggered = []
    for tip in tips:
        first, second = tip.trigger
        pairs = [
            (center_distance(a.rect, b.rect), a.room.instance_id, b.room.instance_id)
            for a, b in product(iter_type(rooms, first), iter_type(rooms, second))
        ]
        if not pairs:
            continue
        dist, a_id, b_id = min(pairs)
        if dist <= tip.proximity:
            triggered.append(TriggeredTip(tip, dist, (a_id, b_id)))
    return triggered
