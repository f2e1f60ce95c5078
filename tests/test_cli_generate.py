# tests/test_cli_generate.py
import json
import os
import sys
import tempfile

from click.testing import CliRunner

# Add scripts to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "scripts"))
from generate_layouts import cli

from habitat.models import HabitatDesign


def test_cli_generates_json_files():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(cli, [
            "--count", "2", "--seed", "42",
            "--crew", "2", "--duration", "30",
            "--output-dir", tmpdir,
        ])
        assert result.exit_code == 0, result.output
        files = sorted(os.listdir(tmpdir))
        assert files == ["design_00000.json", "design_00001.json"]
        with open(os.path.join(tmpdir, files[0])) as f:
            design = HabitatDesign.model_validate(json.load(f))
        assert design.mission.crew_size == 2
        assert design.layout.rooms


def test_cli_reproducible():
    runner = CliRunner()
    args = ["--count", "1", "--seed", "7", "--crew", "2", "--duration", "30"]
    with tempfile.TemporaryDirectory() as d1, \
         tempfile.TemporaryDirectory() as d2:
        runner.invoke(cli, args + ["--output-dir", d1])
        runner.invoke(cli, args + ["--output-dir", d2])
        for fname in os.listdir(d1):
            with open(os.path.join(d1, fname)) as f1, \
                 open(os.path.join(d2, fname)) as f2:
                assert json.load(f1) == json.load(f2)


def test_cli_render_writes_png():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(cli, [
            "--count", "1", "--crew", "2", "--duration", "30",
            "--destination", "mars", "--render", "--image-size", "128",
            "--output-dir", tmpdir,
        ])
        assert result.exit_code == 0, result.output
        assert sorted(os.listdir(tmpdir)) == ["design_00000.json", "design_00000.png"]


def test_cli_rejects_empty_crew():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(cli, ["--count", "1", "--crew", "0", "--output-dir", tmpdir])
        assert result.exit_code != 0
