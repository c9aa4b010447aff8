"""Tests for the data-assisted import path."""

from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from mpsge_runspec import import_mpsge
from mpsge_runspec.blocks import InitialValues, ProductionMultilaborCD
from mpsge_runspec.data import ImportData
from mpsge_runspec.errors import CalibrationSchemaError
from mpsge_runspec.importers import derive_initial_values, import_data
from mpsge_runspec.importers.data import (
    build_blocks,
    capital_demand,
    depreciation,
    private_income,
)
from tests.fixtures import calibration_payload, single_sector_model, two_by_two_model


@pytest.fixture
def data() -> ImportData:
    return ImportData.from_mapping(calibration_payload())


@pytest.fixture
def spec():
    return import_mpsge(two_by_two_model(), data=calibration_payload(), name="Camcge")


class TestAccountingHelpers:
    """Benchmark identities used for start values."""

    def test_capital_demand(self, data):
        assert capital_demand(data) == pytest.approx({"ag": 34.0, "mfg": 31.0})

    def test_private_income(self, data):
        assert private_income(data) == pytest.approx(137.0)

    def test_depreciation(self, data):
        assert depreciation(data) == pytest.approx(32.5)


class TestInitialValues:
    """Start values, lower bounds and fixed values."""

    def test_derived_start_values(self, data):
        start, _, _ = derive_initial_values(data)
        assert start["y"] == pytest.approx(137.0)
        assert start["hhsav"] == pytest.approx(13.7)
        assert start["deprecia"] == pytest.approx(32.5)
        assert start["govsav"] == pytest.approx(15.0)
        assert start["dk_ag"] == pytest.approx(34.0)
        assert start["dk_mfg"] == pytest.approx(31.0)
        assert start["xxd_mfg"] == pytest.approx(150.0)
        assert start["cd_ag"] == pytest.approx(60.0)
        assert start["gd_mfg"] == pytest.approx(28.0)

    def test_benchmark_start_values(self, data):
        start, _, _ = derive_initial_values(data)
        assert start["x_ag"] == 120.0
        assert start["p_mfg"] == start["pd_mfg"] == 1.1
        assert start["l_ag_rural"] == 50.0
        assert start["wa_urban"] == 1.5
        assert start["m_mfg"] == 50.0
        assert "m_ag" not in start
        assert start["er"] == 1.0

    def test_dataset_constants_used(self, data):
        start, _, _ = derive_initial_values(data)
        assert start["tariff"] == 76.548
        assert start["indtax"] == 102.45
        assert start["savings"] == 280.98

    def test_lower_bounds(self, data):
        _, lower, _ = derive_initial_values(data)
        assert lower["x_ag"] == 0.01
        assert lower["cd_mfg"] == 0.0
        assert lower["e_mfg"] == 0.01
        assert "e_ag" not in lower
        assert lower["wa_rural"] == 0.01
        assert lower["l_mfg_urban"] == 0.01
        assert lower["y"] == 0.01

    def test_fixed_values(self, data):
        _, _, fixed = derive_initial_values(data)
        assert fixed["fsav"] == 20.0
        assert fixed["mps"] == 0.1
        assert fixed["gdtot"] == 40.0
        assert fixed["k_mfg"] == 250.0
        assert fixed["pwm_ag"] == 1.0
        assert fixed["ls_rural"] == 55.0
        assert fixed["tm_mfg"] == 0.2
        assert fixed["m_ag"] == 0.0
        assert fixed["e_ag"] == 0.0
        assert fixed["y"] == pytest.approx(137.0)

    def test_absent_zero_labor_pairs_skipped(self, data, caplog):
        with caplog.at_level(logging.DEBUG, logger="mpsge_runspec.importers.data"):
            _, _, fixed = derive_initial_values(data)
        assert not any(key.startswith("l_") for key in fixed)
        assert "Skipping zero labor constraint" in caplog.text

    def test_zero_labor_pairs_override(self):
        payload = calibration_payload(constants={"zero_labor_pairs": [["ag", "urban"]]})
        _, _, fixed = derive_initial_values(ImportData.from_mapping(payload))
        assert fixed["l_ag_urban"] == 0.0

    def test_constants_override(self):
        payload = calibration_payload(constants={"tariff": 1.0, "indtax": 2.0, "savings": 3.0})
        start, _, _ = derive_initial_values(ImportData.from_mapping(payload))
        assert (start["tariff"], start["indtax"], start["savings"]) == (1.0, 2.0, 3.0)


class TestBlocks:
    """Block construction from tables."""

    def test_eighteen_blocks(self, data):
        blocks = build_blocks(data)
        names = [b.name for bs in blocks.values() for b in bs]
        assert len(names) == 18
        assert len(set(names)) == 18
        assert {"production", "cet", "armington", "bop", "market"} <= set(names)

    def test_production_block_tables(self, data):
        block = build_blocks(data)["production"][0]
        assert isinstance(block, ProductionMultilaborCD)
        assert block.alphl[("ag", "rural")] == 0.6
        assert block.index_sets()["labor"] == ("rural", "urban")

    def test_external_balance_gets_foreign_savings(self, data):
        bop = build_blocks(data)["external"][0]
        assert bop.Sf == 20.0


class TestImportData:
    """Assembled RunSpec."""

    def test_sections_and_closure(self, spec):
        assert spec.name == "Camcge"
        assert spec.closure.fixed == "pwm"
        assert len(list(spec.blocks())) == 19
        assert not spec.section("closure").blocks
        assert [b.name for b in spec.section("markets").blocks] == ["inventory", "gdp", "market"]

    def test_sets_and_mapping(self, spec):
        assert spec.sets.commodities.elements == ("ag", "mfg")
        assert spec.sets.activities.elements == ("ag", "mfg")
        assert spec.sets.factors.elements == ("rural", "urban")
        assert spec.sets.institutions.elements == (
            "households",
            "government",
            "foreign",
            "investment",
        )
        assert spec.mappings.activity_to_output == {"ag": "ag", "mfg": "mfg"}

    def test_init_block(self, spec):
        init = spec.get_block("init")
        assert isinstance(init, InitialValues)
        assert init.start["y"] == pytest.approx(137.0)
        assert init.fixed["fsav"] == 20.0

    def test_model_tree_is_not_read(self):
        first = import_mpsge(single_sector_model(), data=calibration_payload())
        second = import_mpsge(two_by_two_model(), data=calibration_payload())
        assert first.get_block("init").start == second.get_block("init").start

    def test_accepts_object_with_attributes(self):
        source = SimpleNamespace(**calibration_payload())
        spec = import_data(two_by_two_model(), source)
        assert spec.get_block("init").start["dk_ag"] == pytest.approx(34.0)

    def test_missing_tables_reported_together(self):
        payload = calibration_payload()
        del payload["cles"]
        del payload["k0"]
        with pytest.raises(CalibrationSchemaError) as excinfo:
            import_mpsge(two_by_two_model(), data=payload)
        assert set(excinfo.value.missing) == {"cles", "k0"}
        assert "cles" in str(excinfo.value)

    def test_absent_sector_entry_raises_key_error(self):
        payload = calibration_payload(k0={"ag": 100.0})
        with pytest.raises(KeyError):
            import_mpsge(two_by_two_model(), data=payload)
