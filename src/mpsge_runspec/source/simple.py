"""In-memory MPSGE-style model.

A small reference implementation of the source protocols, used by the CLI
and the tests. Models can be assembled in code or loaded from a YAML/JSON
description:

.. code-block:: yaml

    name: two_by_two
    commodities: [PX, PY, PL, PK]
    sectors: [X, Y]
    consumers: [RA]
    productions:
      - sector: X
        outputs: {PX: 100}
        inputs: {PL: 50, PK: 50}
    demands:
      - consumer: RA
        final_demand: {PX: 100, PY: 100}
        endowments: {PL: 120, PK: 80}

Quantities may be a single number or a list of numbers (one netput each).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Commodity:
    name: str


@dataclass(frozen=True)
class Sector:
    name: str


@dataclass(frozen=True)
class Consumer:
    name: str


@dataclass(frozen=True)
class Parameter:
    """A named value object; quantities may reference one instead of a number."""

    name: str
    level: float

    def value(self) -> float:
        return self.level


@dataclass(frozen=True)
class Netput:
    commodity: Commodity
    quantity: Any
    sign: int = 1


@dataclass(frozen=True)
class Flow:
    commodity: Commodity
    quantity: Any


@dataclass
class Production:
    sector: Sector
    entries: list[Netput] = field(default_factory=list)

    def netputs(self) -> dict[Commodity, list[Netput]]:
        grouped: dict[Commodity, list[Netput]] = {}
        for netput in self.entries:
            grouped.setdefault(netput.commodity, []).append(netput)
        return grouped


@dataclass
class Demand:
    consumer: Consumer
    demand_flows: list[Flow] = field(default_factory=list)
    endowment_flows: list[Flow] = field(default_factory=list)

    def final_demands(self) -> dict[Commodity, list[Flow]]:
        return _group(self.demand_flows)

    def endowments(self) -> dict[Commodity, list[Flow]]:
        return _group(self.endowment_flows)


def _group(flows: list[Flow]) -> dict[Commodity, list[Flow]]:
    grouped: dict[Commodity, list[Flow]] = {}
    for flow in flows:
        grouped.setdefault(flow.commodity, []).append(flow)
    return grouped


class SimpleModel:
    """Mutable MPSGE-style model built up with ``add_*`` calls.

    Example:
        >>> model = SimpleModel("one_good")
        >>> g = model.add_commodity("PX")
        >>> s = model.add_sector("X")
        >>> ra = model.add_consumer("RA")
        >>> model.add_production(s, outputs={g: 10.0})
        >>> model.add_demand(ra, final_demand={g: 5.0})
    """

    def __init__(self, name: str = "MPSGEModel") -> None:
        self.name = name
        self._commodities: list[Commodity] = []
        self._sectors: list[Sector] = []
        self._consumers: list[Consumer] = []
        self._productions: list[Production] = []
        self._demands: list[Demand] = []

    def commodities(self) -> list[Commodity]:
        return list(self._commodities)

    def sectors(self) -> list[Sector]:
        return list(self._sectors)

    def consumers(self) -> list[Consumer]:
        return list(self._consumers)

    def productions(self) -> list[Production]:
        return list(self._productions)

    def demands(self) -> list[Demand]:
        return list(self._demands)

    def add_commodity(self, name: str) -> Commodity:
        commodity = Commodity(name)
        self._commodities.append(commodity)
        return commodity

    def add_sector(self, name: str) -> Sector:
        sector = Sector(name)
        self._sectors.append(sector)
        return sector

    def add_consumer(self, name: str) -> Consumer:
        consumer = Consumer(name)
        self._consumers.append(consumer)
        return consumer

    def add_production(
        self,
        sector: Sector,
        outputs: Mapping[Commodity, Any] | None = None,
        inputs: Mapping[Commodity, Any] | None = None,
    ) -> Production:
        """Add a production entry; output netputs get sign +1, inputs -1."""
        entries = [
            Netput(commodity, q, 1) for commodity, q in _expand(outputs)
        ] + [Netput(commodity, q, -1) for commodity, q in _expand(inputs)]
        production = Production(sector, entries)
        self._productions.append(production)
        return production

    def add_demand(
        self,
        consumer: Consumer,
        final_demand: Mapping[Commodity, Any] | None = None,
        endowments: Mapping[Commodity, Any] | None = None,
    ) -> Demand:
        demand = Demand(
            consumer,
            [Flow(commodity, q) for commodity, q in _expand(final_demand)],
            [Flow(commodity, q) for commodity, q in _expand(endowments)],
        )
        self._demands.append(demand)
        return demand

    def __repr__(self) -> str:
        return (
            f"SimpleModel '{self.name}': "
            f"{len(self._commodities)} commodities, "
            f"{len(self._sectors)} sectors, "
            f"{len(self._consumers)} consumers"
        )


def _expand(flows: Mapping[Any, Any] | None) -> list[tuple[Any, Any]]:
    """Flatten ``{commodity: q or [q1, q2]}`` into (commodity, q) pairs."""
    pairs: list[tuple[Any, Any]] = []
    for commodity, quantity in (flows or {}).items():
        if isinstance(quantity, (list, tuple)):
            pairs.extend((commodity, q) for q in quantity)
        else:
            pairs.append((commodity, quantity))
    return pairs


def _require_list(payload: Mapping[str, Any], key: str) -> list[Any]:
    value = payload.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list")
    return value


def _resolve(lookup: dict[str, Any], name: Any, kind: str) -> Any:
    try:
        return lookup[str(name)]
    except KeyError as exc:
        raise ValueError(f"Unknown {kind} '{name}'") from exc


def model_from_mapping(payload: Mapping[str, Any]) -> SimpleModel:
    """Build a :class:`SimpleModel` from a parsed YAML/JSON mapping."""
    if not isinstance(payload, Mapping):
        raise ValueError("Model description must be a mapping")

    model = SimpleModel(str(payload.get("name") or "MPSGEModel"))
    parameters = {
        str(k): Parameter(str(k), float(v))
        for k, v in (payload.get("parameters") or {}).items()
    }
    goods = {str(n): model.add_commodity(str(n)) for n in _require_list(payload, "commodities")}
    sectors = {str(n): model.add_sector(str(n)) for n in _require_list(payload, "sectors")}
    consumers = {str(n): model.add_consumer(str(n)) for n in _require_list(payload, "consumers")}

    def _flows(raw: Any, where: str) -> dict[Commodity, Any]:
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise ValueError(f"{where} must be a mapping of commodity to quantity")
        return {
            _resolve(goods, c, "commodity"): _quantity(q, parameters)
            for c, q in raw.items()
        }

    for entry in _require_list(payload, "productions"):
        sector = _resolve(sectors, entry.get("sector"), "sector")
        model.add_production(
            sector,
            outputs=_flows(entry.get("outputs"), "outputs"),
            inputs=_flows(entry.get("inputs"), "inputs"),
        )

    for entry in _require_list(payload, "demands"):
        consumer = _resolve(consumers, entry.get("consumer"), "consumer")
        model.add_demand(
            consumer,
            final_demand=_flows(entry.get("final_demand"), "final_demand"),
            endowments=_flows(entry.get("endowments"), "endowments"),
        )

    logger.debug(f"Loaded {model!r}")
    return model


def _quantity(raw: Any, parameters: dict[str, Parameter]) -> Any:
    """Resolve parameter references (strings) in a quantity or list of quantities."""
    if isinstance(raw, (list, tuple)):
        return [_quantity(q, parameters) for q in raw]
    if isinstance(raw, str):
        return _resolve(parameters, raw, "parameter")
    return raw


def load_model(path: Path) -> SimpleModel:
    """Load a model description from a YAML or JSON file."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        payload = json.loads(text)
    else:
        payload = yaml.safe_load(text)
    return model_from_mapping(payload)
