"""Tests for RunSpec assembly and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mpsge_runspec.blocks import FinalDemandClearing, HouseholdShareDemand, Numeraire
from mpsge_runspec.errors import RunSpecValidationError
from mpsge_runspec.runspec import (
    ClosureSpec,
    Mappings,
    Sets,
    allowed_sections,
    build_spec,
    section,
)

REQUIRED_NONEMPTY = ("households", "markets")


def _sets() -> Sets:
    return Sets.from_labels(["ag", "mfg"], ["ag", "mfg"], ["rural"], ["households"])


def _sections(**extra) -> list:
    blocks = {sym: [] for sym in allowed_sections()}
    blocks["households"].append(HouseholdShareDemand(name="household", sectors=["ag", "mfg"], cles={"ag": 0.5, "mfg": 0.5}))
    blocks["markets"].append(FinalDemandClearing(name="market", sectors=["ag", "mfg"]))
    for sym, more in extra.items():
        blocks[sym].extend(more)
    return [section(sym, blocks[sym]) for sym in allowed_sections()]


def _build(sections, mappings=None, closure="pwm"):
    return build_spec(
        "test",
        _sets(),
        mappings or Mappings(activity_to_output={"ag": "ag", "mfg": "mfg"}),
        sections,
        closure=ClosureSpec(fixed=closure),
        required_sections=allowed_sections(),
        allowed_sections=allowed_sections(),
        required_nonempty=REQUIRED_NONEMPTY,
    )


def test_allowed_sections_order():
    sections = allowed_sections()
    assert sections[0] == "production"
    assert sections[-1] == "closure"
    assert len(set(sections)) == len(sections)


def test_build_valid_spec():
    spec = _build(_sections())
    assert spec.section_names() == list(allowed_sections())
    assert spec.get_block("market").kind == "FinalDemandClearing"
    assert spec.scenario.name == "baseline"
    assert spec.scenario.shocks == {}
    stats = spec.statistics
    assert stats.blocks == 2
    assert stats.nonempty_sections == 2
    assert stats.sections == len(allowed_sections())
    assert stats.equations == 3


def test_missing_section_rejected():
    sections = [s for s in _sections() if s.name != "trade"]
    with pytest.raises(RunSpecValidationError, match="missing sections: trade"):
        _build(sections)


def test_unknown_and_duplicate_sections_rejected():
    sections = _sections() + [section("warp"), section("init")]
    with pytest.raises(RunSpecValidationError) as excinfo:
        _build(sections)
    message = str(excinfo.value)
    assert "unknown sections: warp" in message
    assert "duplicate sections: init" in message


def test_empty_required_section_rejected():
    sections = [section(s.name) if s.name == "markets" else s for s in _sections()]
    with pytest.raises(RunSpecValidationError, match="empty required sections: markets"):
        _build(sections)


def test_duplicate_block_names_rejected():
    extra = FinalDemandClearing(name="market", sectors=["ag"])
    with pytest.raises(RunSpecValidationError, match="duplicate block name 'market'"):
        _build(_sections(trade=[extra]))


def test_block_labels_must_be_in_sets():
    stray = Numeraire(name="numeraire", label="PFX")
    with pytest.raises(RunSpecValidationError, match="outside the spec sets: PFX"):
        _build(_sections(closure=[stray]))


def test_mapping_must_use_set_labels():
    with pytest.raises(RunSpecValidationError, match="mapping output 'svc'"):
        _build(_sections(), mappings=Mappings(activity_to_output={"ag": "svc"}))


def test_empty_closure_rejected():
    with pytest.raises(RunSpecValidationError, match="closure"):
        _build(_sections(), closure="")


def test_missing_section_lookup_raises_key_error():
    spec = _build(_sections())
    with pytest.raises(KeyError):
        spec.section("nowhere")
    with pytest.raises(KeyError):
        spec.get_block("nowhere")


def test_summary_and_json_export(tmp_path: Path):
    spec = _build(_sections())
    summary = spec.summary()
    assert summary["sets"] == {"commodities": 2, "activities": 2, "factors": 1, "institutions": 1}
    assert summary["sections"]["markets"] == ["market"]
    assert summary["closure"] == {"fixed": "pwm", "value": 1.0}

    out = spec.to_json(tmp_path / "out" / "spec.json")
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["name"] == "test"
    assert payload["sets"]["commodities"] == ["ag", "mfg"]
    assert payload["mappings"] == {"ag": "ag", "mfg": "mfg"}
    households = next(s for s in payload["sections"] if s["name"] == "households")
    assert households["blocks"][0]["parameters"]["cles"] == {"ag": 0.5, "mfg": 0.5}
