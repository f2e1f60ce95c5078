# tests/test_cli_score.py
import json
import os
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

# Add scripts to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "scripts"))
from score_layouts import cli

from habitat.generator import GeneratorConfig, LayoutGenerator
from habitat.models import MissionParameters


@pytest.fixture
def design_dir(tmp_path):
    inp = tmp_path / "designs"
    inp.mkdir()
    mission = MissionParameters(crew_size=2, duration_days=30)
    for i in range(2):
        design = LayoutGenerator(GeneratorConfig(seed=i)).generate(mission)
        (inp / f"design_{i:05d}.json").write_text(design.model_dump_json())
    return inp


def test_cli_scores_designs(design_dir, tmp_path):
    out = tmp_path / "reports"
    result = CliRunner().invoke(cli, ["--input-dir", str(design_dir), "--output-dir", str(out)])
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out.iterdir()) == [
        "report_design_00000.json", "report_design_00001.json", "summary.json",
    ]
    report = json.loads((out / "report_design_00000.json").read_text())
    assert 0 <= report["compliance"]["overall_score"] <= 100
    assert len(report["compliance"]["categories"]) == 7
    assert report["habitat_score"]["grade"] in {"A", "B", "C", "D", "F"}

    summary = json.loads((out / "summary.json").read_text())
    assert summary["scored"] == 2
    assert summary["skipped"] == []


def test_cli_skips_invalid_files(design_dir, tmp_path):
    (design_dir / "broken.json").write_text("{not json")
    (design_dir / "empty_crew.json").write_text(json.dumps({
        "mission": {"crew_size": 0, "duration_days": 30},
        "layout": {"module": {"width": 5, "length": 5}},
    }))
    out = tmp_path / "reports"
    result = CliRunner().invoke(cli, ["--input-dir", str(design_dir), "--output-dir", str(out)])
    assert result.exit_code == 0, result.output

    summary = json.loads((out / "summary.json").read_text())
    assert summary["scored"] == 2
    assert sorted(summary["skipped"]) == ["broken.json", "empty_crew.json"]
    assert not (out / "report_broken.json").exists()


def test_cli_empty_input(tmp_path):
    out = tmp_path / "reports"
    result = CliRunner().invoke(cli, ["--input-dir", str(tmp_path), "--output-dir", str(out)])
    assert result.exit_code == 0
    assert "No JSON files found." in result.output
