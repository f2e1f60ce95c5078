# src/habitat/recommendations.py
"""Prioritised improvement advice derived from a category breakdown."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Union

from habitat.models import CategoryResult, Priority, Recommendation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleStyle:
    threshold: float  # percent
    priority: Priority


STYLES: dict[str, RuleStyle] = {
    "compliance":  RuleStyle(80.0, Priority.HIGH),
    "operational": RuleStyle(70.0, Priority.MEDIUM),
    "wellbeing":   RuleStyle(75.0, Priority.MEDIUM),
    "resources":   RuleStyle(70.0, Priority.LOW),
}


@dataclass(frozen=True)
class RecommendationRule:
    category: str
    style: str
    message: str
    actions: tuple[str, ...]

    @property
    def threshold(self) -> float:
        return STYLES[self.style].threshold

    @property
    def priority(self) -> Priority:
        return STYLES[self.style].priority


# Emission order: compliance-critical categories first
RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        "nasa_compliance", "compliance",
        "Focus on meeting essential NASA requirements first",
        ("Add missing essential rooms", "Increase habitable volume",
         "Ensure adequate crew quarters"),
    ),
    RecommendationRule(
        "volume_per_person", "compliance",
        "Habitable volume per crew member is below the mission requirement",
        ("Add larger rooms", "Reduce crew size or mission duration",
         "Choose a larger module"),
    ),
    RecommendationRule(
        "essential_rooms", "compliance",
        "Some essential habitat functions are missing",
        ("Add hygiene, galley, dining, exercise, work, medical and storage areas",),
    ),
    RecommendationRule(
        "emergency_access", "compliance",
        "Medical bay is not reachable quickly from all areas",
        ("Add a medical bay", "Move the medical bay to a central location"),
    ),
    RecommendationRule(
        "operational_efficiency", "operational",
        "Improve workflow efficiency between related areas",
        ("Move kitchen closer to dining", "Position exercise near hygiene",
         "Centralize work areas"),
    ),
    RecommendationRule(
        "hygiene_stations", "operational",
        "Not enough hygiene stations for the crew (max 3 people per station)",
        ("Add hygiene stations",),
    ),
    RecommendationRule(
        "adjacency_prohibition", "operational",
        "Incompatible rooms share a wall",
        ("Separate the galley from hygiene, exercise and airlock areas",),
    ),
    RecommendationRule(
        "crew_wellbeing", "wellbeing",
        "Enhance crew quality of life and privacy",
        ("Ensure private quarters for all crew", "Add recreation areas",
         "Improve noise isolation"),
    ),
    RecommendationRule(
        "crew_quarters", "wellbeing",
        "Not every crew member has private sleeping quarters",
        ("Add crew quarters until there is one per crew member",),
    ),
    RecommendationRule(
        "noise_separation", "wellbeing",
        "Noisy areas are too close to sleeping quarters",
        ("Move exercise areas away from crew quarters",),
    ),
    RecommendationRule(
        "resource_optimization", "resources",
        "Optimize space usage and resource allocation",
        ("Improve space utilization", "Better storage placement",
         "Optimize room sizes"),
    ),
)

_RULES_BY_CATEGORY = {rule.category: rule for rule in RULES}


def threshold_for(category: str) -> float:
    rule = _RULES_BY_CATEGORY.get(category)
    return rule.threshold if rule else STYLES["compliance"].threshold


def _percentage(value: Union[CategoryResult, float]) -> float:
    if isinstance(value, CategoryResult):
        return value.percentage
    return float(value)


def recommend(
    categories: Mapping[str, Union[CategoryResult, float]],
) -> list[Recommendation]:
    """Emit one recommendation per category scoring below its threshold.

    ``categories`` maps category keys to a CategoryResult or a bare
    percentage. Keys without a rule are ignored.
    """
    for key in categories:
        if key not in _RULES_BY_CATEGORY:
            logger.debug("No recommendation rule for category %r", key)

    recommendations = []
    for rule in RULES:
        if rule.category not in categories:
            continue
        if _percentage(categories[rule.category]) < rule.threshold:
            recommendations.append(
                Recommendation(
                    category=rule.category,
                    priority=rule.priority,
                    message=rule.message,
                    actions=list(rule.actions),
                )
            )
    return recommendations
