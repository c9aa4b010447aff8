"""Data-assisted import: an open-economy MCP RunSpec from calibration tables.

The model object is only type-checked; every number comes from the
calibration data. Blocks cover trade, pricing, multi-labor production,
government, savings and the external account. Start values, lower bounds
and fixed values for all variables are derived from the tables with the
model's accounting identities and collected into an ``init`` block.
"""

from __future__ import annotations

import logging
from typing import Any

from mpsge_runspec.blocks import (
    AbsorptionSales,
    ActivityPriceIO,
    ArmingtonImports,
    Block,
    CapitalPriceComposition,
    CETTransformation,
    ExportDemand,
    ExternalBalance,
    FinalDemandClearing,
    GDPIncome,
    GovernmentFinance,
    GovernmentShareDemand,
    HouseholdShareDemand,
    InitialValues,
    InventoryDemand,
    LaborMarketClearing,
    NontradedSupply,
    ProductionMultilaborCD,
    SavingsInvestment,
    TradePriceLink,
)
from mpsge_runspec.core.labels import global_var as gv
from mpsge_runspec.data import ImportData
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

INSTITUTIONS = ("households", "government", "foreign", "investment")
REQUIRED_NONEMPTY = ("production", "households", "markets")
CLOSURE_VARIABLE = "pwm"
PRICE_FLOOR = 0.01


def build_blocks(data: ImportData) -> dict[str, list[Block]]:
    """Build the equation blocks, grouped by section."""
    sectors = data.sectors
    traded = data.traded

    return {
        "production": [
            ProductionMultilaborCD(
                name="production",
                sectors=sectors,
                labor=data.labor,
                ad=data.ad,
                alphl=data.alphl,
                wdist=data.wdist,
            ),
        ],
        "factors": [
            LaborMarketClearing(name="labor_market", labor=data.labor, sectors=sectors),
        ],
        "government": [
            GovernmentShareDemand(name="government_demand", sectors=sectors, gles=data.gles),
            GovernmentFinance(
                name="government_finance",
                sectors=sectors,
                traded=traded,
                itax=data.itax,
                te=data.te,
            ),
        ],
        "savings": [
            SavingsInvestment(
                name="savings",
                sectors=sectors,
                goods=sectors,
                depr=data.depr,
                kio=data.kio,
                imat=data.imat,
            ),
        ],
        "households": [
            HouseholdShareDemand(name="household", sectors=sectors, cles=data.cles),
        ],
        "prices": [
            TradePriceLink(name="trade_prices", sectors=sectors, traded=traded, te=data.te),
            AbsorptionSales(name="absorption", sectors=sectors, traded=traded),
            ActivityPriceIO(
                name="activity_price",
                sectors=sectors,
                inputs=sectors,
                io=data.io,
                itax=data.itax,
            ),
            CapitalPriceComposition(
                name="capital_price", sectors=sectors, goods=sectors, imat=data.imat
            ),
        ],
        "external": [
            ExternalBalance(name="bop", sectors=sectors, Sf=data.fsav0),
        ],
        "trade": [
            CETTransformation(
                name="cet",
                sectors=sectors,
                traded=traded,
                at=data.at,
                gamma=data.gamma,
                rhot=data.rhot,
            ),
            ExportDemand(
                name="export",
                sectors=sectors,
                traded=traded,
                eta=data.eta,
                e0=data.e0,
                pwe0=data.pwe0,
            ),
            ArmingtonImports(
                name="armington",
                sectors=sectors,
                traded=traded,
                delta=data.delta,
                ac=data.ac,
                rhoc=data.rhoc,
            ),
            NontradedSupply(name="nontraded", sectors=sectors, nontraded=data.nontraded),
        ],
        "markets": [
            InventoryDemand(name="inventory", sectors=sectors, dstr=data.dstr),
            GDPIncome(name="gdp", sectors=sectors),
            FinalDemandClearing(name="market", sectors=sectors),
        ],
    }


def capital_demand(data: ImportData) -> dict[str, float]:
    """Investment by sector of destination: dk[j] = sum_i id0[i] * imat[i, j]."""
    return {
        j: sum(data.id0[i] * data.imat[(i, j)] for i in data.sectors)
        for j in data.sectors
    }


def private_income(data: ImportData) -> float:
    """Value added at benchmark prices net of depreciation."""
    value_added = sum(data.pva0[i] * data.xd0[i] for i in data.sectors)
    depreciation = sum(data.depr[i] * data.k0[i] for i in data.sectors)
    return value_added - depreciation


def depreciation(data: ImportData) -> float:
    """Depreciation valued at domestic prices: sum_i depr[i] * pd0[i] * k0[i]."""
    return sum(data.depr[i] * data.pd0[i] * data.k0[i] for i in data.sectors)


def derive_initial_values(
    data: ImportData,
) -> tuple[dict[str, float], dict[str, float], dict[str, float]]:
    """Derive start values, lower bounds and fixed values from the tables.

    Returns:
        (start, lower, fixed) keyed by compound variable names
    """
    start: dict[str, float] = {}
    lower: dict[str, float] = {}
    fixed: dict[str, float] = {}

    dk0 = capital_demand(data)

    for i in data.sectors:
        start[gv("x", i)] = data.x0[i]
        start[gv("xd", i)] = data.xd0[i]
        start[gv("xxd", i)] = data.xd0[i] - data.e0[i]
        start[gv("cd", i)] = data.cles[i] * data.cdtot0
        start[gv("gd", i)] = data.gles[i] * data.gdtot0
        start[gv("id", i)] = data.id0[i]
        start[gv("dk", i)] = dk0[i]
        start[gv("dst", i)] = data.dst0[i]
        start[gv("int", i)] = data.int0[i]
        start[gv("pd", i)] = data.pd0[i]
        start[gv("pm", i)] = data.pm0[i]
        start[gv("pe", i)] = data.pe0[i]
        start[gv("p", i)] = data.pd0[i]
        start[gv("px", i)] = data.pd0[i]
        start[gv("pk", i)] = data.pd0[i]
        start[gv("pva", i)] = data.pva0[i]
        start[gv("pwe", i)] = data.pwe0[i]
        start[gv("pwm", i)] = data.pwm0[i]
        start[gv("tm", i)] = data.tm0[i]

        for var in ("x", "xd", "pd", "p", "px", "pk", "int"):
            lower[gv(var, i)] = PRICE_FLOOR
        for var in ("cd", "gd", "id", "dst"):
            lower[gv(var, i)] = 0.0

    for i in data.traded:
        start[gv("m", i)] = data.m0[i]
        start[gv("e", i)] = data.e0[i]
        for var in ("pm", "xxd", "m", "e", "pwe"):
            lower[gv(var, i)] = PRICE_FLOOR

    for lc in data.labor:
        start[gv("wa", lc)] = data.wa0[lc]
        start[gv("ls", lc)] = data.ls0[lc]
        lower[gv("wa", lc)] = PRICE_FLOOR

    for i in data.sectors:
        for lc in data.labor:
            start[gv("l", i, lc)] = data.xle[(i, lc)]
            lower[gv("l", i, lc)] = PRICE_FLOOR

    start["er"] = data.er
    start["gr"] = data.gr0
    start["fsav"] = data.fsav0
    start["mps"] = data.mps0
    start["gdtot"] = data.gdtot0

    start["tariff"] = data.constants.tariff
    start["indtax"] = data.constants.indtax
    start["savings"] = data.constants.savings

    y0 = private_income(data)
    start["y"] = y0
    start["hhsav"] = data.mps0 * y0
    start["deprecia"] = depreciation(data)
    start["govsav"] = data.gr0 - data.gdtot0
    lower["y"] = PRICE_FLOOR

    fixed["fsav"] = data.fsav0
    fixed["mps"] = data.mps0
    fixed["gdtot"] = data.gdtot0

    for i in data.sectors:
        fixed[gv("k", i)] = data.k0[i]
        fixed[gv("pwm", i)] = data.pwm0[i]

    for lc in data.labor:
        fixed[gv("ls", lc)] = data.ls0[lc]

    for i in data.traded:
        fixed[gv("tm", i)] = data.tm0[i]

    for i in data.nontraded:
        fixed[gv("m", i)] = 0.0
        fixed[gv("e", i)] = 0.0

    for sector, lc in data.constants.zero_labor_pairs:
        if sector in data.sectors and lc in data.labor:
            fixed[gv("l", sector, lc)] = 0.0
        else:
            logger.debug(f"Skipping zero labor constraint ({sector}, {lc}): labels not in data")

    fixed["y"] = y0

    return start, lower, fixed


def import_data(
    model: MPSGEModel,
    data: Any,
    *,
    name: str = "MPSGEImport",
) -> RunSpec:
    """Build a detailed MCP RunSpec from calibration tables.

    Args:
        model: Source model (not read; the tables carry all values)
        data: ImportData, a mapping of tables, or an object with table attributes
        name: RunSpec name

    Returns:
        Validated RunSpec closed on the world import price ``pwm``

    Raises:
        CalibrationSchemaError: Tables are missing or malformed
        KeyError: A table lacks an entry for a sector or labor label
        RunSpecValidationError: The assembled spec fails structural checks
    """
    data = ImportData.coerce(data)
    logger.info(
        f"Data-assisted import '{name}': {len(data.sectors)} sectors "
        f"({len(data.traded)} traded), {len(data.labor)} labor categories"
    )

    section_blocks: dict[str, list[Block]] = {sym: [] for sym in allowed_sections()}
    for sym, blocks in build_blocks(data).items():
        section_blocks[sym].extend(blocks)

    start, lower, fixed = derive_initial_values(data)
    logger.debug(
        f"Initial values: {len(start)} start, {len(lower)} lower, {len(fixed)} fixed"
    )
    section_blocks["init"].append(
        InitialValues(name="init", start=start, lower=lower, fixed=fixed)
    )

    sections = [section(sym, section_blocks[sym]) for sym in allowed_sections()]
    return build_spec(
        name,
        Sets.from_labels(data.sectors, data.sectors, data.labor, INSTITUTIONS),
        Mappings(activity_to_output={i: i for i in data.sectors}),
        sections,
        closure=ClosureSpec(fixed=CLOSURE_VARIABLE),
        scenario=ScenarioSpec(name="baseline"),
        required_sections=allowed_sections(),
        allowed_sections=allowed_sections(),
        required_nonempty=REQUIRED_NONEMPTY,
    )
