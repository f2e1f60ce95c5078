# src/habitat/generator.py
"""Seeded habitat layout generator built on the placement validator."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from habitat.models import HabitatDesign, Layout, MissionParameters, ModuleBounds
from habitat.mission import recommend_module_dimensions, required_rooms
from habitat.placement import PlacementConfig, add_room, scan_positions

logger = logging.getLogger(__name__)

# Anchors first so that later rooms can score against them
PLACEMENT_ORDER: tuple[str, ...] = (
    "airlock",
    "storage",
    "galley",
    "diningroom",
    "medical",
    "workstation",
    "hygiene",
    "exercise",
    "crew_quarters",
)

OPTIONAL_ROOMS: tuple[str, ...] = ("recreation", "greenhouse")


@dataclass
class GeneratorConfig:
    """Configuration for the layout generator."""

    seed: int = 42
    grid_size: float = 0.5
    top_k: int = 3
    optional_prob: float = 0.5
    # Sized modules hold exactly the habitable volume; leave room to circulate
    module_scale: float = 1.5


class LayoutGenerator:
    """Places the rooms a mission requires, one validated add at a time."""

    def __init__(self, config: GeneratorConfig | None = None,
                 placement: PlacementConfig | None = None) -> None:
        self.config = config or GeneratorConfig()
        self.placement = placement or PlacementConfig()
        self.rng = np.random.default_rng(self.config.seed)

    def generate(
        self, mission: MissionParameters, module: ModuleBounds | None = None
    ) -> HabitatDesign:
        cfg = self.config
        if module is None:
            dims = recommend_module_dimensions(mission)
            module = ModuleBounds(
                width=round(dims.width * cfg.module_scale, 1),
                length=round(dims.length * cfg.module_scale, 1),
            )

        layout = Layout(module=module)
        for type_id in self._room_queue(mission):
            if not self._place(layout, type_id):
                logger.info(
                    "No valid position for %s in %gx%g module, skipping",
                    type_id, module.width, module.length,
                )

        logger.debug("Generated %d rooms (seed %d)", len(layout.rooms), cfg.seed)
        return HabitatDesign(mission=mission, layout=layout)

    def _room_queue(self, mission: MissionParameters) -> list[str]:
        counts = required_rooms(mission.crew_size)
        queue = [t for t in PLACEMENT_ORDER for _ in range(counts.get(t, 0))]
        for type_id in OPTIONAL_ROOMS:
            if self.rng.random() < self.config.optional_prob:
                queue.append(type_id)
        return queue

    def _place(self, layout: Layout, type_id: str) -> bool:
        cfg = self.config
        candidates = scan_positions(type_id, layout, cfg.grid_size, self.placement)
        if not candidates:
            return False

        # Shuffle first so that ties are broken by the seed, not by scan order
        order = self.rng.permutation(len(candidates))
        ranked = sorted(
            (candidates[i] for i in order), key=lambda s: s.score, reverse=True
        )
        pick = ranked[int(self.rng.integers(min(cfg.top_k, len(ranked))))]

        outcome = add_room(layout, type_id, pick.position, config=self.placement)
        return outcome.placed
