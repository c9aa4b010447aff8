"""Production blocks.

This module provides production-side blocks:
- Activity analysis (fixed-coefficient netput activities)
- Multi-labor Cobb-Douglas production
- Value-added and capital-goods pricing
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from mpsge_runspec.blocks.base import Block, eq, param, register_block, var
from mpsge_runspec.core.tables import LabeledMatrix


@register_block
class ActivityAnalysis(Block):
    """Fixed-coefficient activity analysis block.

    Each activity a turns inputs a_in[g, a] into outputs a_out[g, a] at
    activity level Y[a]. Zero profit pairs with Y[a]:

    sum_g P[g] * a_in[g, a] >= sum_g P[g] * a_out[g, a]   perp Y[a] >= 0
    """

    description: str = Field(default="Fixed-coefficient activity analysis")
    activities: tuple[str, ...]
    commodities: tuple[str, ...]
    a_out: LabeledMatrix
    a_in: LabeledMatrix

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "a_out": param("a_out", "commodities", "activities", description="Output coefficients"),
            "a_in": param("a_in", "commodities", "activities", description="Input coefficients"),
        }
        self.variables = {
            "Y": var("Y", "activities", description="Activity level"),
            "P": var("P", "commodities", description="Commodity price"),
        }
        self.equations = [eq("zero_profit", "activities", description="Zero profit per activity")]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"activities": self.activities, "commodities": self.commodities}


@register_block
class ProductionMultilaborCD(Block):
    """Cobb-Douglas production with several labor categories.

    xd[i] = ad[i] * prod_lc l[i, lc] ** alphl[i, lc]
    wa[lc] * wdist[i, lc] * l[i, lc] = xd[i] * pva[i] * alphl[i, lc]
    """

    description: str = Field(default="Multi-labor Cobb-Douglas production")
    sectors: tuple[str, ...]
    labor: tuple[str, ...]
    ad: dict[str, float]
    alphl: dict[tuple[str, str], float]
    wdist: dict[tuple[str, str], float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "ad": param("ad", "sectors", description="Production shift"),
            "alphl": param("alphl", "sectors", "labor", description="Labor share"),
            "wdist": param("wdist", "sectors", "labor", description="Wage differential"),
        }
        self.variables = {
            "xd": var("xd", "sectors", description="Domestic output"),
            "l": var("l", "sectors", "labor", description="Labor demand"),
            "wa": var("wa", "labor", description="Average wage"),
            "pva": var("pva", "sectors", description="Value-added price"),
        }
        self.equations = [
            eq("activity", "sectors", description="Production function"),
            eq("profitmax", "sectors", "labor", description="Labor first-order condition"),
        ]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors, "labor": self.labor}


@register_block
class ActivityPriceIO(Block):
    """Value-added price net of intermediate inputs and indirect taxes.

    pva[i] = px[i] * (1 - itax[i]) - sum_j io[j, i] * p[j]
    """

    description: str = Field(default="Value-added price from input-output costs")
    sectors: tuple[str, ...]
    inputs: tuple[str, ...]
    io: dict[tuple[str, str], float]
    itax: dict[str, float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "io": param("io", "inputs", "sectors", description="Input-output coefficients"),
            "itax": param("itax", "sectors", description="Indirect tax rate"),
        }
        self.variables = {
            "pva": var("pva", "sectors", description="Value-added price"),
            "px": var("px", "sectors", description="Output price"),
            "p": var("p", "inputs", description="Composite good price"),
        }
        self.equations = [eq("actp", "sectors", description="Activity price")]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors, "inputs": self.inputs}


@register_block
class CapitalPriceComposition(Block):
    """Price of capital goods from the investment composition matrix.

    pk[j] = sum_i p[i] * imat[i, j]
    """

    description: str = Field(default="Capital goods price composition")
    sectors: tuple[str, ...]
    goods: tuple[str, ...]
    imat: dict[tuple[str, str], float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "imat": param("imat", "goods", "sectors", description="Capital composition matrix"),
        }
        self.variables = {
            "pk": var("pk", "sectors", description="Capital goods price"),
            "p": var("p", "goods", description="Composite good price"),
        }
        self.equations = [eq("pkdef", "sectors", description="Capital goods price")]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors, "goods": self.goods}


__all__ = [
    "ActivityAnalysis",
    "ProductionMultilaborCD",
    "ActivityPriceIO",
    "CapitalPriceComposition",
]
