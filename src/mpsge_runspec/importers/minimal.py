"""Minimal import: RunSpec built from the model's own production and demand trees.

Netputs become output/input coefficient tables, final demands become
Cobb-Douglas budget shares, endowments become consumer income sources.
The result has four blocks: activity analysis, consumers, commodity
markets and a numeraire.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np

from mpsge_runspec.blocks import (
    ActivityAnalysis,
    CommodityMarketClearing,
    ConsumerEndowmentCD,
    Numeraire,
)
from mpsge_runspec.core.labels import scalar_value, strip_index_name
from mpsge_runspec.core.tables import LabeledMatrix
from mpsge_runspec.errors import DegenerateShareError, MissingDemandError, NoOutputError
from mpsge_runspec.runspec import (
    ClosureSpec,
    Mappings,
    RunSpec,
    ScenarioSpec,
    Sets,
    allowed_sections,
    build_spec,
    section,
)
from mpsge_runspec.source.protocols import MPSGEModel

logger = logging.getLogger(__name__)

REQUIRED_NONEMPTY = ("production", "households", "markets")
PREFERRED_NUMERAIRE = "PFX"


def _labels(
    objects: Sequence[Any], kind: str, sort_labels: bool
) -> tuple[dict[Any, str], tuple[str, ...]]:
    """Normalize object names; return object -> label and the ordered labels."""
    by_object = {obj: strip_index_name(obj.name) for obj in objects}
    ordered = [by_object[obj] for obj in objects]
    if len(set(ordered)) != len(ordered):
        dupes = sorted({label for label in ordered if ordered.count(label) > 1})
        logger.warning(f"Distinct {kind} objects share labels: {', '.join(dupes)}")
    if sort_labels:
        ordered = sorted(set(ordered))
    else:
        ordered = list(dict.fromkeys(ordered))
    return by_object, tuple(ordered)


def _accumulate(
    target: np.ndarray,
    column: int,
    flows: Mapping[Any, Iterable[Any]],
    labels: Mapping[Any, str],
    index: Mapping[str, int],
) -> None:
    """Add every flow quantity into ``target[commodity, column]``."""
    for commodity, entries in flows.items():
        row = index[labels[commodity]]
        for flow in entries:
            target[row, column] += scalar_value(flow.quantity)


def _first_output(
    a_out: np.ndarray, commodities: Sequence[str], activities: Sequence[str]
) -> dict[str, str]:
    """Map each activity to its first positively produced commodity."""
    mapping: dict[str, str] = {}
    for col, activity in enumerate(activities):
        positive = np.flatnonzero(a_out[:, col] > 0.0)
        if positive.size == 0:
            raise NoOutputError(activity)
        mapping[activity] = commodities[int(positive[0])]
    return mapping


def import_minimal(
    model: MPSGEModel,
    *,
    name: str = "MPSGEImport",
    sort_labels: bool = False,
) -> RunSpec:
    """Build a minimal RunSpec from production, demand and endowment flows.

    Args:
        model: Source model
        name: RunSpec name
        sort_labels: Order labels lexicographically instead of by enumeration

    Returns:
        Validated RunSpec with production, households, markets and
        closure sections populated

    Raises:
        MissingDemandError: A consumer has no demand entry
        DegenerateShareError: A consumer's final demand does not sum to a positive total
        NoOutputError: An activity has no positive output
        RunSpecValidationError: The assembled spec fails structural checks
    """
    commodity_objs = list(model.commodities())
    sector_objs = list(model.sectors())
    consumer_objs = list(model.consumers())

    commodity_labels, commodities = _labels(commodity_objs, "commodity", sort_labels)
    sector_labels, activities = _labels(sector_objs, "sector", sort_labels)
    consumer_labels, consumers = _labels(consumer_objs, "consumer", sort_labels)

    logger.info(
        f"Minimal import '{name}': {len(commodities)} commodities, "
        f"{len(activities)} activities, {len(consumers)} consumers"
    )

    sets = Sets.from_labels(commodities, activities, commodities, consumers)
    commodity_index = sets.commodities.positions()
    activity_index = sets.activities.positions()
    consumer_index = sets.institutions.positions()

    a_out = np.zeros((len(commodities), len(activities)))
    a_in = np.zeros((len(commodities), len(activities)))
    alpha = np.zeros((len(commodities), len(consumers)))
    endowment = np.zeros((len(commodities), len(consumers)))

    for prod in model.productions():
        col = activity_index[sector_labels[prod.sector]]
        for commodity, netputs in prod.netputs().items():
            row = commodity_index[commodity_labels[commodity]]
            for netput in netputs:
                qty = scalar_value(netput.quantity)
                if netput.sign > 0:
                    a_out[row, col] += qty
                else:
                    a_in[row, col] += qty

    demand_map = {d.consumer: d for d in model.demands()}
    for cons in consumer_objs:
        label = consumer_labels[cons]
        demand = demand_map.get(cons)
        if demand is None:
            raise MissingDemandError(label)
        col = consumer_index[label]
        _accumulate(alpha, col, demand.final_demands(), commodity_labels, commodity_index)
        _accumulate(endowment, col, demand.endowments(), commodity_labels, commodity_index)

    for col, label in enumerate(consumers):
        total = float(alpha[:, col].sum())
        if not total > 0.0:
            raise DegenerateShareError(label, total)
        alpha[:, col] /= total

    a_out_mat = LabeledMatrix(values=a_out, row_labels=commodities, col_labels=activities)
    a_in_mat = LabeledMatrix(values=a_in, row_labels=commodities, col_labels=activities)
    alpha_mat = LabeledMatrix(values=alpha, row_labels=commodities, col_labels=consumers)
    endow_mat = LabeledMatrix(values=endowment, row_labels=commodities, col_labels=consumers)

    activity_to_output = _first_output(a_out, commodities, activities)

    prod_block = ActivityAnalysis(
        name="activity",
        activities=activities,
        commodities=commodities,
        a_out=a_out_mat,
        a_in=a_in_mat,
    )
    cons_block = ConsumerEndowmentCD(
        name="consumers",
        consumers=consumers,
        commodities=commodities,
        alpha=alpha_mat,
        endowment=endow_mat,
    )
    market_block = CommodityMarketClearing(
        name="markets",
        commodities=commodities,
        activities=activities,
        consumers=consumers,
        a_out=a_out_mat,
        a_in=a_in_mat,
        endowment=endow_mat,
    )
    if PREFERRED_NUMERAIRE in commodities:
        numeraire = PREFERRED_NUMERAIRE
    elif commodities:
        numeraire = commodities[0]
    else:
        numeraire = ""

    section_blocks: dict[str, list[Any]] = {sym: [] for sym in allowed_sections()}
    section_blocks["production"].append(prod_block)
    section_blocks["households"].append(cons_block)
    section_blocks["markets"].append(market_block)
    if numeraire:
        section_blocks["closure"].append(
            Numeraire(name="numeraire", target="commodity", label=numeraire, value=1.0)
        )
    logger.debug(f"Numeraire: {numeraire or '<none>'}")

    sections = [section(sym, section_blocks[sym]) for sym in allowed_sections()]
    return build_spec(
        name,
        sets,
        Mappings(activity_to_output=activity_to_output),
        sections,
        closure=ClosureSpec(fixed=numeraire),
        scenario=ScenarioSpec(name="baseline"),
        required_sections=allowed_sections(),
        allowed_sections=allowed_sections(),
        required_nonempty=REQUIRED_NONEMPTY,
    )
