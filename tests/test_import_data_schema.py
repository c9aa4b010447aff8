"""Tests for calibration data validation and loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from mpsge_runspec.data import DatasetConstants, ImportData, load_import_data
from mpsge_runspec.errors import CalibrationSchemaError, MPSGEImportError
from tests.fixtures import calibration_payload


class TestImportDataSchema:
    """Validation of ImportData."""

    def test_valid_payload(self):
        data = ImportData.from_mapping(calibration_payload())
        assert data.sectors == ("ag", "mfg")
        assert data.io[("mfg", "ag")] == 0.15
        assert data.constants == DatasetConstants()

    def test_required_fields(self):
        required = ImportData.required_fields()
        assert "sectors" in required
        assert "xle" in required
        assert "constants" not in required

    def test_empty_payload_lists_every_table(self):
        with pytest.raises(CalibrationSchemaError) as excinfo:
            ImportData.from_mapping({})
        assert set(excinfo.value.missing) == set(ImportData.required_fields())
        assert isinstance(excinfo.value, MPSGEImportError)

    def test_invalid_table_reported(self):
        with pytest.raises(CalibrationSchemaError) as excinfo:
            ImportData.from_mapping(calibration_payload(te="high"))
        assert "te" in excinfo.value.invalid
        assert excinfo.value.missing == []

    def test_string_label_list_rejected(self):
        with pytest.raises(CalibrationSchemaError) as excinfo:
            ImportData.from_mapping(calibration_payload(labor="rural"))
        assert "labor" in excinfo.value.invalid

    def test_traded_must_be_sectors(self):
        with pytest.raises(CalibrationSchemaError, match="traded"):
            ImportData.from_mapping(calibration_payload(traded=["svc"]))

    def test_two_dimensional_key_forms(self):
        nested = ImportData.from_mapping(calibration_payload())
        comma = ImportData.from_mapping(
            calibration_payload(imat={"ag,ag": 0.2, "ag, mfg": 0.3, "mfg,ag": 0.8, "mfg,mfg": 0.7})
        )
        tupled = ImportData.from_mapping(
            calibration_payload(
                imat={("ag", "ag"): 0.2, ("ag", "mfg"): 0.3, ("mfg", "ag"): 0.8, ("mfg", "mfg"): 0.7}
            )
        )
        assert nested.imat == comma.imat == tupled.imat

    def test_unreadable_two_dimensional_key(self):
        with pytest.raises(CalibrationSchemaError) as excinfo:
            ImportData.from_mapping(calibration_payload(io={"agmfg": 0.1}))
        assert "io" in excinfo.value.invalid

    def test_instances_pass_through_coerce(self):
        data = ImportData.from_mapping(calibration_payload())
        assert ImportData.coerce(data) is data


class TestLoadImportData:
    """Loading calibration data from files."""

    def test_load_yaml(self, tmp_path: Path):
        path = tmp_path / "camcge.yaml"
        path.write_text(yaml.safe_dump(calibration_payload()), encoding="utf-8")
        data = load_import_data(path)
        assert data.xle[("ag", "rural")] == 50.0
        assert data.fsav0 == 20.0

    def test_load_json(self, tmp_path: Path):
        path = tmp_path / "camcge.json"
        path.write_text(json.dumps(calibration_payload()), encoding="utf-8")
        assert load_import_data(path).labor == ("rural", "urban")

    def test_non_mapping_file_rejected(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError, match="top-level mapping"):
            load_import_data(path)


def _relabel(value, mapping):
    if isinstance(value, dict):
        return {mapping.get(k, k): _relabel(v, mapping) for k, v in value.items()}
    if isinstance(value, list):
        return [mapping.get(v, v) if isinstance(v, str) else v for v in value]
    return value


def test_numeric_sector_labels():
    payload = {
        key: _relabel(value, {"ag": 10, "mfg": 20})
        for key, value in calibration_payload().items()
    }
    data = ImportData.from_mapping(payload)
    assert data.sectors == ("10", "20")
    assert data.traded == ("20",)
    assert data.te["20"] == 0.05
    assert data.io[("20", "10")] == 0.15
    assert data.xle[("10", "rural")] == 50.0
