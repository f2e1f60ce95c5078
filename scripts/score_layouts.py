# scripts/score_layouts.py
"""CLI for scoring habitat design JSON files."""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from habitat.compliance import compute_compliance
from habitat.habitat_score import compute_habitat_score
from habitat.models import HabitatDesign
from habitat.tips import check_educational_tips

logger = logging.getLogger("score_layouts")


def score_single(json_path: Path) -> dict:
    design = HabitatDesign.model_validate_json(json_path.read_text())
    compliance = compute_compliance(design.layout, design.mission)
    habitat = compute_habitat_score(design.layout, design.mission)
    tips = check_educational_tips(design.layout)

    return {
        "design": json_path.name,
        "mission": design.mission.model_dump(mode="json"),
        "rooms": len(design.layout.rooms),
        "compliance": compliance.model_dump(mode="json"),
        "habitat_score": habitat.model_dump(mode="json"),
        "tips": [
            {
                "title": t.tip.title,
                "points": t.tip.points,
                "distance": round(t.distance, 2),
                "rooms": list(t.rooms),
            }
            for t in tips
        ],
    }


@click.command()
@click.option("--input-dir", type=click.Path(exists=True), required=True)
@click.option("--output-dir", type=click.Path(), required=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(input_dir, output_dir, verbose):
    """Score habitat designs and write one report per design plus a summary."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    inp = Path(input_dir)
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    json_files = sorted(inp.glob("*.json"))
    if not json_files:
        click.echo("No JSON files found.")
        return

    designs: dict[str, dict] = {}
    skipped: list[str] = []
    for jf in tqdm(json_files, desc="Scoring"):
        try:
            report = score_single(jf)
        except ValidationError as e:
            logger.warning("Skipping %s: %d validation error(s)", jf.name, e.error_count())
            click.echo(f"Skipping invalid design {jf.name}", err=True)
            skipped.append(jf.name)
            continue

        (out / f"report_{jf.stem}.json").write_text(json.dumps(report, indent=2))
        designs[jf.stem] = {
            "compliance": report["compliance"]["overall_score"],
            "habitat_score": report["habitat_score"]["percentage"],
            "grade": report["habitat_score"]["grade"],
            "failed": [
                k for k, c in report["compliance"]["categories"].items() if not c["passed"]
            ],
        }

    scores = [d["compliance"] for d in designs.values()]
    summary = {
        "scored": len(designs),
        "skipped": skipped,
        "mean_compliance": round(sum(scores) / len(scores), 1) if scores else None,
        "designs": designs,
    }
    (out / "summary.json").write_text(json.dumps(summary, indent=2))

    click.echo(f"Scored {len(designs)} designs ({len(skipped)} skipped) into {out}")


if __name__ == "__main__":
    cli()
