"""Blocks module for mpsge_runspec.

Blocks are the typed units a RunSpec is assembled from. Each block is a
Pydantic model holding its index sets and parameter values, and declaring
the variables and equations it contributes to the equilibrium system.
"""

from mpsge_runspec.blocks.base import (
    Block,
    BlockRegistry,
    EquationSpec,
    ParameterSpec,
    VariableSpec,
    get_registry,
    register_block,
)
from mpsge_runspec.blocks.demand import (
    ConsumerEndowmentCD,
    GovernmentShareDemand,
    HouseholdShareDemand,
    InventoryDemand,
)
from mpsge_runspec.blocks.equilibrium import (
    CommodityMarketClearing,
    FinalDemandClearing,
    InitialValues,
    LaborMarketClearing,
    Numeraire,
)
from mpsge_runspec.blocks.institutions import (
    ExternalBalance,
    GDPIncome,
    GovernmentFinance,
    SavingsInvestment,
)
from mpsge_runspec.blocks.production import (
    ActivityAnalysis,
    ActivityPriceIO,
    CapitalPriceComposition,
    ProductionMultilaborCD,
)
from mpsge_runspec.blocks.trade import (
    AbsorptionSales,
    ArmingtonImports,
    CETTransformation,
    ExportDemand,
    NontradedSupply,
    TradePriceLink,
)

__all__ = [
    "Block",
    "BlockRegistry",
    "ParameterSpec",
    "VariableSpec",
    "EquationSpec",
    "get_registry",
    "register_block",
    # Production blocks
    "ActivityAnalysis",
    "ProductionMultilaborCD",
    "ActivityPriceIO",
    "CapitalPriceComposition",
    # Demand blocks
    "ConsumerEndowmentCD",
    "HouseholdShareDemand",
    "GovernmentShareDemand",
    "InventoryDemand",
    # Trade blocks
    "TradePriceLink",
    "AbsorptionSales",
    "CETTransformation",
    "ExportDemand",
    "ArmingtonImports",
    "NontradedSupply",
    # Institution blocks
    "GovernmentFinance",
    "GDPIncome",
    "SavingsInvestment",
    "ExternalBalance",
    # Equilibrium blocks
    "CommodityMarketClearing",
    "LaborMarketClearing",
    "FinalDemandClearing",
    "Numeraire",
    "InitialValues",
]
