"""Calibration data for the data-assisted import.

:class:`ImportData` declares every table the data-assisted importer reads,
with its shape. Validation happens once, up front, and reports every
missing or malformed table together.

Tables are keyed by sector labels (``sectors``), labor category labels
(``labor``), or pairs of them. Two-dimensional tables accept either
tuple-keyed mappings or nested ``{row: {column: value}}`` mappings, the
latter being what YAML and JSON files provide.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from mpsge_runspec.core.sets import Set
from mpsge_runspec.errors import CalibrationSchemaError

logger = logging.getLogger(__name__)

Table1D = dict[str, float]
Table2D = dict[tuple[str, str], float]


class DatasetConstants(BaseModel):
    """Dataset-specific calibration constants.

    The defaults belong to the reference dataset the data-assisted import
    was written for; replace them together with the tables when importing
    a different dataset.

    Attributes:
        tariff: Start value of tariff revenue
        indtax: Start value of indirect tax revenue
        savings: Start value of total savings
        zero_labor_pairs: (sector, labor) pairs whose labor demand is fixed at zero
    """

    tariff: float = 76.548
    indtax: float = 102.45
    savings: float = 280.98
    zero_labor_pairs: tuple[tuple[str, str], ...] = (
        ("publiques", "rural"),
        ("ag-subsist", "urban-skil"),
    )

    model_config = {"frozen": True}


class ImportData(BaseModel):
    """Calibration tables for the data-assisted import.

    Sets:
        sectors, labor, traded, nontraded

    Sector tables (1-D):
        te, itax, ad, at, gamma, rhot, eta, e0, pwe0, delta, ac, rhoc,
        dstr, cles, gles, depr, kio, x0, xd0, id0, dst0, int0, pd0, pm0,
        pe0, pva0, pwm0, tm0, m0, k0

    Labor tables (1-D):
        wa0, ls0

    Sector x sector tables:
        io, imat

    Sector x labor tables:
        alphl, wdist, xle

    Scalars:
        fsav0, cdtot0, gdtot0, er, gr0, mps0
    """

    sectors: tuple[str, ...]
    labor: tuple[str, ...]
    traded: tuple[str, ...]
    nontraded: tuple[str, ...]

    # Trade and tax parameters
    te: Table1D
    itax: Table1D
    tm0: Table1D
    # Production
    ad: Table1D
    alphl: Table2D
    wdist: Table2D
    io: Table2D
    # CET / export demand / Armington
    at: Table1D
    gamma: Table1D
    rhot: Table1D
    eta: Table1D
    delta: Table1D
    ac: Table1D
    rhoc: Table1D
    # Final demand and investment
    dstr: Table1D
    cles: Table1D
    gles: Table1D
    depr: Table1D
    kio: Table1D
    imat: Table2D
    # Benchmark quantities
    x0: Table1D
    xd0: Table1D
    e0: Table1D
    m0: Table1D
    id0: Table1D
    dst0: Table1D
    int0: Table1D
    k0: Table1D
    xle: Table2D
    ls0: Table1D
    # Benchmark prices
    pd0: Table1D
    pm0: Table1D
    pe0: Table1D
    pva0: Table1D
    pwe0: Table1D
    pwm0: Table1D
    wa0: Table1D
    # Scalars
    er: float
    fsav0: float
    cdtot0: float
    gdtot0: float
    gr0: float
    mps0: float

    constants: DatasetConstants = Field(default_factory=DatasetConstants)

    model_config = {"frozen": True}

    @field_validator("sectors", "labor", "traded", "nontraded", mode="before")
    @classmethod
    def coerce_labels(cls, v: Any) -> tuple[str, ...]:  # noqa: N805
        """Accept any sequence of labels."""
        if isinstance(v, (str, bytes)):
            raise ValueError("expected a list of labels, got a string")
        return tuple(str(label) for label in v)

    @field_validator(
        "te", "itax", "tm0", "ad", "at", "gamma", "rhot", "eta", "delta", "ac",
        "rhoc", "dstr", "cles", "gles", "depr", "kio", "x0", "xd0", "e0", "m0",
        "id0", "dst0", "int0", "k0", "ls0", "pd0", "pm0", "pe0", "pva0", "pwe0",
        "pwm0", "wa0",
        mode="before",
    )
    @classmethod
    def label_keys(cls, v: Any) -> Any:  # noqa: N805
        """Key one-dimensional tables by label strings, as the sets are."""
        if not isinstance(v, Mapping):
            return v
        return {str(key): value for key, value in v.items()}

    @field_validator("io", "imat", "alphl", "wdist", "xle", mode="before")
    @classmethod
    def flatten_nested(cls, v: Any) -> Any:  # noqa: N805
        """Turn ``{row: {col: value}}`` into ``{(row, col): value}``."""
        if not isinstance(v, Mapping):
            return v
        flat: dict[tuple[str, str], Any] = {}
        for key, value in v.items():
            if isinstance(value, Mapping):
                for col, cell in value.items():
                    flat[(str(key), str(col))] = cell
            elif isinstance(key, tuple):
                flat[tuple(str(k) for k in key)] = value  # type: ignore[assignment]
            elif isinstance(key, str) and "," in key:
                row, col = (part.strip() for part in key.split(",", 1))
                flat[(row, col)] = value
            else:
                raise ValueError(f"cannot read two-dimensional key {key!r}")
        return flat

    @model_validator(mode="after")
    def validate_subsets(self) -> ImportData:
        """Traded and nontraded sectors must be drawn from ``sectors``."""
        for name in ("traded", "nontraded"):
            subset = Set(name=name, elements=getattr(self, name))
            if not subset.is_subset(self.sectors):
                stray = [s for s in subset if s not in self.sectors]
                raise ValueError(f"{name} sectors not in sectors: {', '.join(stray)}")
        return self

    @classmethod
    def required_fields(cls) -> list[str]:
        """Return the names of all required tables."""
        return [name for name, info in cls.model_fields.items() if info.is_required()]

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> ImportData:
        """Validate a mapping of tables.

        Raises:
            CalibrationSchemaError: Listing every missing or invalid table
        """
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as exc:
            raise _schema_error(exc) from exc

    @classmethod
    def coerce(cls, data: Any) -> ImportData:
        """Turn ``data`` into ImportData.

        ``data`` may already be ImportData, a mapping of tables, or any
        object exposing the tables as attributes.
        """
        if isinstance(data, cls):
            return data
        if isinstance(data, Mapping):
            return cls.from_mapping(data)
        payload = {
            name: getattr(data, name)
            for name in cls.model_fields
            if hasattr(data, name)
        }
        return cls.from_mapping(payload)


def _schema_error(exc: ValidationError) -> CalibrationSchemaError:
    missing: list[str] = []
    invalid: dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"][:1]) or "data"
        if err["type"] == "missing":
            missing.append(field)
        else:
            invalid.setdefault(field, err["msg"])
    return CalibrationSchemaError(missing=missing, invalid=invalid)


def load_import_data(path: Path) -> ImportData:
    """Load calibration tables from a YAML or JSON file.

    Raises:
        ValueError: If the file does not hold a mapping
        CalibrationSchemaError: If tables are missing or invalid
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    payload = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    if not isinstance(payload, dict):
        raise ValueError("Calibration data file must define a top-level mapping")
    logger.info(f"Loading calibration data from {path}")
    return ImportData.from_mapping(payload)
