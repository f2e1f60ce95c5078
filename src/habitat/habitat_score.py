# src/habitat/habitat_score.py
"""Four-category habitat score with a letter grade.

The compliance battery answers "does this layout meet the rules"; this score
answers "how good is it to live and work in". Each category is scored out of
its own maximum, normalised, and weighted:

    nasa_compliance         35
    operational_efficiency  25
    crew_wellbeing          25
    resource_optimization   15
"""
from __future__ import annotations

import logging
from itertools import combinations, product
from typing import Sequence

from pydantic import BaseModel, Field

from habitat.geometry import center_distance, covered_area
from habitat.layout import ResolvedRoom, iter_type, resolve_rooms
from habitat.mission import (
    HABITABLE_FRACTION,
    ensure_crew,
    required_hygiene_stations,
    required_volume_per_person,
)
from habitat.models import CategoryResult, Layout, MissionParameters, Recommendation
from habitat.recommendations import recommend, threshold_for

logger = logging.getLogger(__name__)

CATEGORY_WEIGHTS: dict[str, float] = {
    "nasa_compliance": 35,
    "operational_efficiency": 25,
    "crew_wellbeing": 25,
    "resource_optimization": 15,
}

CATEGORY_LABELS: dict[str, str] = {
    "nasa_compliance": "NASA Standards Compliance",
    "operational_efficiency": "Operational Efficiency",
    "crew_wellbeing": "Crew Wellbeing",
    "resource_optimization": "Resource Optimization",
}

CORE_ROOMS = (
    "crew_quarters", "hygiene", "galley", "diningroom", "exercise", "workstation", "medical",
)
SOCIAL_ROOMS = ("diningroom", "recreation", "galley")
LEISURE_ROOMS = ("recreation", "greenhouse")
SUPPLY_USERS = ("galley", "workstation", "medical")


class HabitatScore(BaseModel):
    percentage: int = Field(ge=0, le=100)
    weighted_total: float
    grade: str
    categories: dict[str, CategoryResult]
    recommendations: list[Recommendation] = Field(default_factory=list)


def grade_letter(percentage: float) -> str:
    if percentage >= 90:
        return "A"
    if percentage >= 80:
        return "B"
    if percentage >= 70:
        return "C"
    if percentage >= 60:
        return "D"
    return "F"


def _nearest(a: Sequence[ResolvedRoom], b: Sequence[ResolvedRoom]) -> float | None:
    return min(
        (center_distance(x.rect, y.rect) for x, y in product(a, b)), default=None
    )


def _category(name: str, factors: dict[str, float], max_score: float,
              details: list[str]) -> CategoryResult:
    raw = sum(factors.values())
    result = CategoryResult(
        name=name,
        label=CATEGORY_LABELS[name],
        current=raw,
        required=max_score,
        raw_score=raw,
        max_score=max_score,
        message=", ".join(f"{k} {v:g}" for k, v in factors.items()),
        details=details,
    )
    result.passed = result.percentage >= threshold_for(name)
    return result


class HabitatScorer:
    """Computes a HabitatScore; stateless, safe to reuse."""

    def score(self, layout: Layout, mission: MissionParameters) -> HabitatScore:
        crew = ensure_crew(mission.crew_size)
        rooms = resolve_rooms(layout)

        categories = {
            "nasa_compliance": self.nasa_compliance(rooms, crew, mission.duration_days),
            "operational_efficiency": self.operational_efficiency(rooms),
            "crew_wellbeing": self.crew_wellbeing(rooms, crew),
            "resource_optimization": self.resource_optimization(rooms, layout),
        }

        weighted_total = sum(
            categories[k].raw_score / categories[k].max_score * w
            for k, w in CATEGORY_WEIGHTS.items()
        )
        percentage = round(100 * weighted_total / sum(CATEGORY_WEIGHTS.values()))
        logger.debug("Habitat score %d%% (%s)", percentage, grade_letter(percentage))

        return HabitatScore(
            percentage=percentage,
            weighted_total=weighted_total,
            grade=grade_letter(percentage),
            categories=categories,
            recommendations=recommend(categories),
        )

    # ---- categories ----------------------------------------------------- #

    def nasa_compliance(
        self, rooms: list[ResolvedRoom], crew: int, duration_days: int
    ) -> CategoryResult:
        factors: dict[str, float] = {}
        details: list[str] = []

        per_person = sum(r.definition.volume for r in rooms) * HABITABLE_FRACTION / crew
        required = required_volume_per_person(duration_days)
        factors["volume"] = min(25.0, 25.0 * per_person / required)
        details.append(f"Volume {per_person:.1f} / {required:g} m³ per person")

        placed = {r.type_id for r in rooms}
        present = [t for t in CORE_ROOMS if t in placed]
        factors["essential_rooms"] = 25.0 * len(present) / len(CORE_ROOMS)
        details.append(f"{len(present)}/{len(CORE_ROOMS)} essential rooms present")

        quarters = sum(1 for _ in iter_type(rooms, "crew_quarters"))
        factors["quarters"] = min(20.0, 20.0 * quarters / crew)
        details.append(f"{quarters}/{crew} crew quarters provided")

        hygiene = sum(1 for _ in iter_type(rooms, "hygiene"))
        needed = required_hygiene_stations(crew)
        factors["hygiene"] = min(15.0, 15.0 * hygiene / needed)
        details.append(f"{hygiene}/{needed} hygiene stations provided")

        if "medical" in placed:
            factors["safety"] = 15.0
        else:
            factors["safety"] = 5.0
            details.append("No medical bay present")

        return _category("nasa_compliance", factors, 100.0, details)

    def operational_efficiency(self, rooms: list[ResolvedRoom]) -> CategoryResult:
        factors: dict[str, float] = {}
        details: list[str] = []

        galleys = list(iter_type(rooms, "galley"))
        dining = list(iter_type(rooms, "diningroom"))
        d = _nearest(galleys, dining)
        if d is None:
            factors["kitchen_dining"] = 0.0
            details.append("Missing galley or dining room")
        elif d <= 3.0:
            factors["kitchen_dining"] = 30.0
        elif d <= 6.0:
            factors["kitchen_dining"] = 20.0
        else:
            factors["kitchen_dining"] = 10.0
            details.append("Galley and dining room are distant")

        d = _nearest(list(iter_type(rooms, "exercise")), list(iter_type(rooms, "hygiene")))
        if d is None:
            factors["exercise_hygiene"] = 0.0
        else:
            factors["exercise_hygiene"] = 25.0 if d <= 4.0 else 15.0

        quarters = list(iter_type(rooms, "crew_quarters"))
        work = list(iter_type(rooms, "workstation"))
        if quarters and work:
            avg = sum(_nearest([q], work) for q in quarters) / len(quarters)
            factors["work_access"] = 25.0 if avg <= 8.0 else 15.0
        else:
            factors["work_access"] = 0.0

        flow = 20.0
        if dining:
            others = [r for r in rooms if r.type_id != "diningroom"]
            if others:
                avg = sum(center_distance(dining[0].rect, r.rect) for r in others) / len(others)
                if avg > 6.0:
                    flow -= 10.0
                    details.append("Dining room not centrally located")
        factors["traffic_flow"] = flow

        return _category("operational_efficiency", factors, 100.0, details)

    def crew_wellbeing(self, rooms: list[ResolvedRoom], crew: int) -> CategoryResult:
        factors: dict[str, float] = {}
        details: list[str] = []

        quarters = list(iter_type(rooms, "crew_quarters"))
        if len(quarters) >= crew:
            factors["privacy"] = 30.0
        else:
            factors["privacy"] = max(5.0, 30.0 * len(quarters) / crew)
            details.append(f"Insufficient private quarters: {len(quarters)}/{crew}")

        close_pairs = sum(
            1
            for ex, q in product(iter_type(rooms, "exercise"), quarters)
            if center_distance(ex.rect, q.rect) < 3.0
        )
        factors["noise_isolation"] = max(0.0, 25.0 - 8.0 * close_pairs)
        if close_pairs:
            details.append("Exercise areas may disturb sleeping quarters")

        leisure = any(r.type_id in LEISURE_ROOMS for r in rooms)
        factors["quality_of_life"] = 25.0 if leisure else 10.0
        if not leisure:
            details.append("Consider adding recreation areas for crew morale")

        social = [r for r in rooms if r.type_id in SOCIAL_ROOMS]
        if len(social) >= 2:
            grouped = any(
                center_distance(a.rect, b.rect) <= 5.0 for a, b in combinations(social, 2)
            )
            factors["social_interaction"] = 20.0 if grouped else 15.0
        else:
            factors["social_interaction"] = 5.0
            details.append("Limited social interaction spaces")

        return _category("crew_wellbeing", factors, 100.0, details)

    def resource_optimization(
        self, rooms: list[ResolvedRoom], layout: Layout
    ) -> CategoryResult:
        factors: dict[str, float] = {}
        details: list[str] = []

        module_area = layout.module.width * layout.module.length
        ratio = covered_area([r.rect for r in rooms]) / module_area
        if 0.6 <= ratio <= 0.75:
            factors["space_utilization"] = 40.0
        elif 0.5 <= ratio < 0.6:
            factors["space_utilization"] = 30.0
        elif 0.75 < ratio <= 0.85:
            factors["space_utilization"] = 35.0
        else:
            factors["space_utilization"] = 20.0
        details.append(f"Space utilization: {ratio * 100:.1f}%")

        storage = list(iter_type(rooms, "storage"))
        if not storage:
            factors["storage_access"] = 0.0
            details.append("No storage areas provided")
        else:
            access = 30.0
            for room in rooms:
                if room.type_id in SUPPLY_USERS and _nearest([room], storage) > 8.0:
                    access -= 5.0
            factors["storage_access"] = max(10.0, access)

        return _category("resource_optimization", factors, 70.0, details)


def compute_habitat_score(layout: Layout, mission: MissionParameters) -> HabitatScore:
    return HabitatScorer().score(layout, mission)
