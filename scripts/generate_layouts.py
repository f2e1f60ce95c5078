# scripts/generate_layouts.py
"""CLI for batch habitat layout generation."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from habitat.generator import GeneratorConfig, LayoutGenerator
from habitat.models import Destination, MissionParameters
from habitat.renderer import LayoutRenderer, RenderConfig


@click.command()
@click.option("--count", type=int, required=True, help="Number of designs")
@click.option("--seed", type=int, default=42, help="Base random seed")
@click.option("--crew", type=click.IntRange(1, 12), default=4, help="Crew size")
@click.option("--duration", type=click.IntRange(min=1), default=60, help="Mission length in days")
@click.option(
    "--destination",
    type=click.Choice([d.value for d in Destination]),
    default=Destination.MOON.value,
)
@click.option("--output-dir", type=click.Path(), required=True, help="Output directory for JSON files")
@click.option("--render", is_flag=True, help="Also write a PNG per design")
@click.option("--image-size", type=int, default=512)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(count, seed, crew, duration, destination, output_dir, render, image_size, verbose):
    """Generate habitat design JSON files for a mission."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    mission = MissionParameters(
        crew_size=crew, duration_days=duration, destination=Destination(destination)
    )
    renderer = LayoutRenderer(RenderConfig(image_size=image_size)) if render else None

    for i in tqdm(range(count), desc="Generating designs"):
        design = LayoutGenerator(GeneratorConfig(seed=seed + i)).generate(mission)
        stem = f"design_{i:05d}"
        (out / f"{stem}.json").write_text(design.model_dump_json(indent=2))
        if renderer is not None:
            renderer.render(design.layout).save(out / f"{stem}.png")

    click.echo(f"Generated {count} designs in {out}")


if __name__ == "__main__":
    cli()
