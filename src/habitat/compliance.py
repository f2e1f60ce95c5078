# src/habitat/compliance.py
"""Weighted compliance battery against simplified NASA habitability rules."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import product

from habitat.catalog import NOISY_ROOM_TYPES, QUIET_ROOM_TYPES, room_name
from habitat.geometry import adjacent, center_distance
from habitat.layout import ResolvedRoom, iter_type, resolve_rooms
from habitat.mission import (
    ensure_crew,
    required_hygiene_stations,
    required_volume_per_person,
)
from habitat.models import CategoryResult, ComplianceReport, Layout, MissionParameters
from habitat.recommendations import recommend

logger = logging.getLogger(__name__)

ESSENTIAL_ROOMS: tuple[str, ...] = (
    "hygiene", "galley", "diningroom", "exercise", "workstation", "medical", "storage",
)

# Pairs that must never share a wall
PROHIBITED_ADJACENCY: frozenset[frozenset[str]] = frozenset({
    frozenset({"galley", "hygiene"}),
    frozenset({"galley", "exercise"}),
    frozenset({"galley", "airlock"}),
})


@dataclass
class ScoringConfig:
    """Weights and thresholds for the compliance battery."""

    habitable_fraction: float = 0.70
    volume_weight: float = 25
    crew_quarters_weight: float = 20
    essential_weight: float = 20
    hygiene_weight: float = 15
    noise_weight: float = 5
    adjacency_weight: float = 5
    access_weight: float = 10
    noise_min_distance: float = 3.0
    adjacency_tolerance: float = 0.1
    access_radius: float = 15.0
    access_pass_fraction: float = 0.9
    essential_rooms: tuple[str, ...] = ESSENTIAL_ROOMS
    prohibited_adjacency: frozenset[frozenset[str]] = PROHIBITED_ADJACENCY


def _ratio_result(
    name: str, label: str, count: int, required: int, weight: float, unit: str
) -> CategoryResult:
    ratio = count / required if required else 1.0
    return CategoryResult(
        name=name,
        label=label,
        current=count,
        required=required,
        passed=count >= required,
        raw_score=min(weight, weight * ratio),
        max_score=weight,
        message=f"{count} / {required} {unit}",
    )


class ComplianceScorer:
    """Scores a full layout; every call recomputes from scratch."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or ScoringConfig()

    def score(self, layout: Layout, mission: MissionParameters) -> ComplianceReport:
        crew = ensure_crew(mission.crew_size)
        rooms = resolve_rooms(layout)

        checks = [
            self.check_volume(rooms, crew, mission.duration_days),
            self.check_crew_quarters(rooms, crew),
            self.check_essential_rooms(rooms),
            self.check_hygiene(rooms, crew),
            self.check_noise(rooms),
            self.check_adjacency(rooms),
            self.check_emergency_access(rooms),
        ]
        categories = {c.name: c for c in checks}

        total_weight = sum(c.max_score for c in checks)
        total_raw = sum(c.raw_score for c in checks)
        overall = round(100 * total_raw / total_weight) if total_weight else 0

        logger.debug(
            "Compliance %d%% over %d rooms (%d passed)",
            overall, len(rooms), sum(c.passed for c in checks),
        )
        return ComplianceReport(
            overall_score=overall,
            categories=categories,
            recommendations=recommend(categories),
        )

    # ------------------------------------------------------------------ #
    # Individual checks
    # ------------------------------------------------------------------ #

    def check_volume(
        self, rooms: list[ResolvedRoom], crew: int, duration_days: int
    ) -> CategoryResult:
        cfg = self.config
        total = sum(r.definition.volume for r in rooms)
        per_person = total * cfg.habitable_fraction / crew
        required = required_volume_per_person(duration_days)
        return CategoryResult(
            name="volume_per_person",
            label="Minimum Volume per Person",
            current=per_person,
            required=required,
            passed=per_person >= required,
            raw_score=min(cfg.volume_weight, cfg.volume_weight * per_person / required),
            max_score=cfg.volume_weight,
            message=f"{per_person:.1f} / {required:g} m³ per person",
            details=[f"Total room volume {total:.1f} m³"],
        )

    def check_crew_quarters(self, rooms: list[ResolvedRoom], crew: int) -> CategoryResult:
        count = sum(1 for _ in iter_type(rooms, "crew_quarters"))
        return _ratio_result(
            "crew_quarters", "Individual Sleeping Quarters",
            count, crew, self.config.crew_quarters_weight, "quarters",
        )

    def check_essential_rooms(self, rooms: list[ResolvedRoom]) -> CategoryResult:
        cfg = self.config
        placed = {r.type_id for r in rooms}
        present = [t for t in cfg.essential_rooms if t in placed]
        missing = [t for t in cfg.essential_rooms if t not in placed]
        total = len(cfg.essential_rooms)
        return CategoryResult(
            name="essential_rooms",
            label="Essential Areas Complete",
            current=len(present),
            required=total,
            passed=not missing,
            raw_score=cfg.essential_weight * len(present) / total if total else 0.0,
            max_score=cfg.essential_weight,
            message=f"{len(present)} / {total} areas",
            details=[f"Missing {room_name(t)}" for t in missing],
        )

    def check_hygiene(self, rooms: list[ResolvedRoom], crew: int) -> CategoryResult:
        count = sum(1 for _ in iter_type(rooms, "hygiene"))
        return _ratio_result(
            "hygiene_stations", "Hygiene Facilities",
            count, required_hygiene_stations(crew), self.config.hygiene_weight,
            "stations",
        )

    def check_noise(self, rooms: list[ResolvedRoom]) -> CategoryResult:
        cfg = self.config
        noisy = [r for r in rooms if r.type_id in NOISY_ROOM_TYPES]
        quiet = [r for r in rooms if r.type_id in QUIET_ROOM_TYPES]

        details = []
        closest = None
        for loud, calm in product(noisy, quiet):
            d = center_distance(loud.rect, calm.rect)
            closest = d if closest is None else min(closest, d)
            if d < cfg.noise_min_distance:
                details.append(
                    f"{loud.definition.name} {loud.room.instance_id} is {d:.1f}m from "
                    f"{calm.definition.name} {calm.room.instance_id}"
                )

        # Nothing to evaluate without both a noise source and a sleeping area
        passed = bool(noisy and quiet) and not details
        if not (noisy and quiet):
            message = "Nothing to evaluate: needs exercise and crew quarters"
        elif details:
            message = f"{len(details)} noisy/quiet pair(s) closer than {cfg.noise_min_distance:g}m"
        else:
            message = "Sleeping areas isolated from noise"
        return CategoryResult(
            name="noise_separation",
            label="Noise Separation",
            current=closest if closest is not None else 0.0,
            required=cfg.noise_min_distance,
            passed=passed,
            raw_score=cfg.noise_weight if passed else 0.0,
            max_score=cfg.noise_weight,
            message=message,
            details=details,
        )

    def check_adjacency(self, rooms: list[ResolvedRoom]) -> CategoryResult:
        cfg = self.config
        candidates = [
            (a, b)
            for i, a in enumerate(rooms)
            for b in rooms[i + 1:]
            if frozenset({a.type_id, b.type_id}) in cfg.prohibited_adjacency
        ]
        details = [
            f"{a.definition.name} {a.room.instance_id} touches "
            f"{b.definition.name} {b.room.instance_id}"
            for a, b in candidates
            if adjacent(a.rect, b.rect, cfg.adjacency_tolerance)
        ]

        passed = bool(candidates) and not details
        if not candidates:
            message = "Nothing to evaluate: no incompatible room types placed"
        elif details:
            message = f"{len(details)} prohibited adjacency(ies)"
        else:
            message = "No incompatible rooms share a wall"
        return CategoryResult(
            name="adjacency_prohibition",
            label="Incompatible Adjacency",
            current=len(details),
            required=0,
            passed=passed,
            raw_score=cfg.adjacency_weight if passed else 0.0,
            max_score=cfg.adjacency_weight,
            message=message,
            details=details,
        )

    def check_emergency_access(self, rooms: list[ResolvedRoom]) -> CategoryResult:
        cfg = self.config
        medical = list(iter_type(rooms, "medical"))
        if not medical:
            return CategoryResult(
                name="emergency_access",
                label="Emergency Access",
                current=0.0,
                required=cfg.access_pass_fraction,
                passed=False,
                raw_score=0.0,
                max_score=cfg.access_weight,
                message="No medical bay",
            )

        details = []
        reachable = 0
        for room in rooms:
            nearest = min(center_distance(room.rect, m.rect) for m in medical)
            if nearest <= cfg.access_radius:
                reachable += 1
            else:
                details.append(
                    f"{room.definition.name} {room.room.instance_id} is "
                    f"{nearest:.1f}m from the nearest medical bay"
                )

        fraction = reachable / len(rooms)
        passed = fraction >= cfg.access_pass_fraction
        return CategoryResult(
            name="emergency_access",
            label="Emergency Access",
            current=fraction,
            required=cfg.access_pass_fraction,
            passed=passed,
            raw_score=cfg.access_weight * fraction,
            max_score=cfg.access_weight,
            message="Good access" if passed else "Limited access",
            details=details,
        )


def compute_compliance(
    layout: Layout,
    mission: MissionParameters,
    config: ScoringConfig | None = None,
) -> ComplianceReport:
    """Score ``layout`` for ``mission``; identical inputs give identical reports."""
    return ComplianceScorer(config).score(layout, mission)
