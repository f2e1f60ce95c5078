# src/habitat/renderer.py
"""Layout renderer: draws a module and its rooms into a PIL Image."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from PIL import Image, ImageDraw, ImageFont

from habitat.layout import ResolvedRoom, resolve_rooms
from habitat.models import Layout


@dataclass
class RenderConfig:
    """Configuration for rendering a layout."""

    image_size: int = 512
    margin: float = 0.1
    bg_color: tuple[int, int, int] = (255, 255, 255)
    module_color: tuple[int, int, int] = (236, 239, 241)
    outline_color: tuple[int, int, int] = (38, 50, 56)
    highlight_color: tuple[int, int, int] = (229, 57, 53)
    line_width: int = 2
    show_labels: bool = True


class LayoutRenderer:
    """Renders a Layout top-down, one filled rectangle per room."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    def render(self, layout: Layout, highlight: Iterable[str] = ()) -> Image.Image:
        """Render ``layout`` to an RGB image.

        Args:
            layout: The layout to draw.
            highlight: Instance ids outlined in the highlight colour,
                e.g. rooms named by a failed compliance check.

        Returns:
            A square PIL Image of ``image_size`` pixels.
        """
        cfg = self.config
        img = Image.new("RGB", (cfg.image_size, cfg.image_size), cfg.bg_color)
        draw = ImageDraw.Draw(img)
        transform = self._compute_transform(layout)
        marked = set(highlight)

        # Module outline
        draw.rectangle(
            [self._to_px(0, 0, transform),
             self._to_px(layout.module.width, layout.module.length, transform)],
            fill=cfg.module_color,
            outline=cfg.outline_color,
            width=cfg.line_width,
        )

        rooms = resolve_rooms(layout)
        for room in rooms:
            self._draw_room(draw, room, transform, room.room.instance_id in marked)

        if cfg.show_labels:
            for room in rooms:
                self._draw_label(draw, room, transform)

        return img

    # ------------------------------------------------------------------ #
    # Coordinate transform
    # ------------------------------------------------------------------ #

    def _compute_transform(self, layout: Layout) -> dict:
        size = self.config.image_size
        usable = size * (1 - 2 * self.config.margin)
        width, length = layout.module.width, layout.module.length
        scale = min(usable / width, usable / length)
        return {
            "scale": scale,
            "offset_x": (size - width * scale) / 2,
            "offset_y": (size - length * scale) / 2,
        }

    def _to_px(self, x: float, y: float, transform: dict) -> tuple[float, float]:
        """Convert module metres to pixel coordinates."""
        return (
            x * transform["scale"] + transform["offset_x"],
            y * transform["scale"] + transform["offset_y"],
        )

    # ------------------------------------------------------------------ #
    # Rooms
    # ------------------------------------------------------------------ #

    def _draw_room(
        self,
        draw: ImageDraw.ImageDraw,
        room: ResolvedRoom,
        transform: dict,
        highlighted: bool,
    ) -> None:
        cfg = self.config
        r = room.rect
        outline = cfg.highlight_color if highlighted else cfg.outline_color
        width = cfg.line_width * 2 if highlighted else cfg.line_width
        draw.rectangle(
            [self._to_px(r.left, r.top, transform),
             self._to_px(r.right, r.bottom, transform)],
            fill=room.definition.color,
            outline=outline,
            width=width,
        )

    def _draw_label(
        self, draw: ImageDraw.ImageDraw, room: ResolvedRoom, transform: dict
    ) -> None:
        """Centre the room name inside its rectangle; skip rooms too small for it."""
        r = room.rect
        avail_w = r.width * transform["scale"] - 6
        avail_h = r.length * transform["scale"] - 6
        if avail_w < 20 or avail_h < 8:
            return

        label = room.definition.name.upper()
        try:
            font = ImageFont.truetype("Arial", 10)
        except (OSError, IOError):
            font = ImageFont.load_default()

        bbox = draw.textbbox((0, 0), label, font=font)
        tw, th = bbox[2] - bbox[0], bbox[3] - bbox[1]
        if tw > avail_w or th > avail_h:
            label = room.room.instance_id
            bbox = draw.textbbox((0, 0), label, font=font)
            tw, th = bbox[2] - bbox[0], bbox[3] - bbox[1]
            if tw > avail_w or th > avail_h:
                return

        cx, cy = self._to_px(*r.center, transform)
        draw.text((cx - tw / 2, cy - th / 2), label, fill=self.config.outline_color, font=font)
