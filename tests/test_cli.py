"""Tests for the mpsge-runspec command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from mpsge_runspec.cli import build_parser, main
from tests.fixtures import calibration_payload

MODEL = {
    "name": "single",
    "commodities": ["PX"],
    "sectors": ["X"],
    "consumers": ["RA"],
    "productions": [{"sector": "X", "outputs": {"PX": 10}}],
    "demands": [{"consumer": "RA", "final_demand": {"PX": 5}}],
}


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    path = tmp_path / "model.yaml"
    path.write_text(yaml.safe_dump(MODEL), encoding="utf-8")
    return path


def test_parser_defaults():
    args = build_parser().parse_args(["model.yaml"])
    assert args.name == "MPSGEImport"
    assert args.data is None
    assert args.sort_labels is False


def test_prints_summary(model_file: Path, capsys):
    assert main([str(model_file), "--name", "Single"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["name"] == "Single"
    assert summary["closure"]["fixed"] == "PX"


def test_writes_json(model_file: Path, tmp_path: Path):
    out = tmp_path / "specs" / "single.json"
    assert main([str(model_file), "-o", str(out)]) == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["mappings"] == {"X": "PX"}


def test_data_assisted(model_file: Path, tmp_path: Path):
    data_file = tmp_path / "calibration.json"
    data_file.write_text(json.dumps(calibration_payload()), encoding="utf-8")
    out = tmp_path / "camcge.json"
    assert main([str(model_file), "--data", str(data_file), "-o", str(out)]) == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["closure"]["fixed"] == "pwm"


def test_import_error_returns_one(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    broken = dict(MODEL, demands=[{"consumer": "RA", "final_demand": {"PX": 0}}])
    path.write_text(yaml.safe_dump(broken), encoding="utf-8")
    assert main([str(path)]) == 1


def test_missing_file_returns_one(tmp_path: Path):
    assert main([str(tmp_path / "nowhere.yaml")]) == 1
