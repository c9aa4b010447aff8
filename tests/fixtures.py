from __future__ import annotations

from typing import Any

from mpsge_runspec.source.simple import SimpleModel


def single_sector_model(output: float = 10.0, demand: float = 5.0) -> SimpleModel:
    """One sector producing one commodity for one consumer."""
    model = SimpleModel("single")
    good = model.add_commodity("PX")
    sector = model.add_sector("X")
    consumer = model.add_consumer("RA")
    model.add_production(sector, outputs={good: output})
    model.add_demand(consumer, final_demand={good: demand}, endowments={good: 0.0})
    return model


def two_by_two_model() -> SimpleModel:
    """Textbook 2x2 exchange-production economy with one representative agent."""
    model = SimpleModel("two_by_two")
    px = model.add_commodity("PX")
    py = model.add_commodity("PY")
    pl = model.add_commodity("PL")
    pk = model.add_commodity("PK")
    x = model.add_sector("X")
    y = model.add_sector("Y")
    ra = model.add_consumer("RA")
    model.add_production(x, outputs={px: 100.0}, inputs={pl: 25.0, pk: 75.0})
    model.add_production(y, outputs={py: 100.0}, inputs={pl: 75.0, pk: 25.0})
    model.add_demand(
        ra,
        final_demand={px: 100.0, py: 100.0},
        endowments={pl: 100.0, pk: 100.0},
    )
    return model


def calibration_payload(**overrides: Any) -> dict[str, Any]:
    """Two-sector, two-labor calibration tables (ag nontraded, mfg traded)."""
    payload: dict[str, Any] = {
        "sectors": ["ag", "mfg"],
        "labor": ["rural", "urban"],
        "traded": ["mfg"],
        "nontraded": ["ag"],
        "te": {"ag": 0.0, "mfg": 0.05},
        "itax": {"ag": 0.02, "mfg": 0.1},
        "tm0": {"ag": 0.0, "mfg": 0.2},
        "ad": {"ag": 1.5, "mfg": 2.0},
        "alphl": {"ag": {"rural": 0.6, "urban": 0.2}, "mfg": {"rural": 0.1, "urban": 0.5}},
        "wdist": {"ag": {"rural": 1.0, "urban": 1.0}, "mfg": {"rural": 1.0, "urban": 1.0}},
        "io": {"ag": {"ag": 0.1, "mfg": 0.2}, "mfg": {"ag": 0.15, "mfg": 0.3}},
        "at": {"ag": 1.0, "mfg": 1.8},
        "gamma": {"ag": 0.5, "mfg": 0.3},
        "rhot": {"ag": 2.0, "mfg": 1.6},
        "eta": {"ag": 2.0, "mfg": 2.0},
        "delta": {"ag": 0.5, "mfg": 0.4},
        "ac": {"ag": 1.0, "mfg": 1.9},
        "rhoc": {"ag": 0.5, "mfg": 0.6},
        "dstr": {"ag": 0.01, "mfg": 0.011},
        "cles": {"ag": 0.4, "mfg": 0.6},
        "gles": {"ag": 0.3, "mfg": 0.7},
        "depr": {"ag": 0.05, "mfg": 0.1},
        "kio": {"ag": 0.4, "mfg": 0.6},
        "imat": {"ag": {"ag": 0.2, "mfg": 0.3}, "mfg": {"ag": 0.8, "mfg": 0.7}},
        "x0": {"ag": 120.0, "mfg": 200.0},
        "xd0": {"ag": 110.0, "mfg": 180.0},
        "e0": {"ag": 0.0, "mfg": 30.0},
        "m0": {"ag": 0.0, "mfg": 50.0},
        "id0": {"ag": 10.0, "mfg": 40.0},
        "dst0": {"ag": 1.0, "mfg": 2.0},
        "int0": {"ag": 30.0, "mfg": 60.0},
        "k0": {"ag": 100.0, "mfg": 250.0},
        "xle": {"ag": {"rural": 50.0, "urban": 10.0}, "mfg": {"rural": 5.0, "urban": 40.0}},
        "ls0": {"rural": 55.0, "urban": 50.0},
        "pd0": {"ag": 1.0, "mfg": 1.1},
        "pm0": {"ag": 1.0, "mfg": 1.2},
        "pe0": {"ag": 1.0, "mfg": 0.95},
        "pva0": {"ag": 0.7, "mfg": 0.5},
        "pwe0": {"ag": 1.0, "mfg": 1.0},
        "pwm0": {"ag": 1.0, "mfg": 1.0},
        "wa0": {"rural": 1.0, "urban": 1.5},
        "er": 1.0,
        "fsav0": 20.0,
        "cdtot0": 150.0,
        "gdtot0": 40.0,
        "gr0": 55.0,
        "mps0": 0.1,
    }
    payload.update(overrides)
    return payload
