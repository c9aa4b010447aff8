"""Demand blocks.

This module provides final-demand blocks:
- Cobb-Douglas consumers with endowment income
- Fixed-share household and government demand
- Inventory demand
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from mpsge_runspec.blocks.base import Block, eq, param, register_block, var
from mpsge_runspec.core.tables import LabeledMatrix


@register_block
class ConsumerEndowmentCD(Block):
    """Cobb-Douglas consumers financed by the value of their endowments.

    INC[h] = sum_g P[g] * endowment[g, h]
    P[g] * D[g, h] = alpha[g, h] * INC[h]

    Columns of alpha sum to one.
    """

    description: str = Field(default="Cobb-Douglas consumers with endowments")
    consumers: tuple[str, ...]
    commodities: tuple[str, ...]
    alpha: LabeledMatrix
    endowment: LabeledMatrix

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "alpha": param("alpha", "commodities", "consumers", description="Budget shares"),
            "endowment": param("endowment", "commodities", "consumers", description="Endowments"),
        }
        self.variables = {
            "INC": var("INC", "consumers", description="Consumer income"),
            "D": var("D", "commodities", "consumers", description="Final demand"),
            "P": var("P", "commodities", description="Commodity price"),
        }
        self.equations = [
            eq("income", "consumers", description="Income from endowments"),
            eq("demand", "commodities", "consumers", description="Cobb-Douglas demand"),
        ]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"consumers": self.consumers, "commodities": self.commodities}


@register_block
class HouseholdShareDemand(Block):
    """Household consumption as fixed expenditure shares.

    p[i] * cd[i] = cles[i] * (1 - mps) * y
    """

    description: str = Field(default="Household fixed-share demand")
    sectors: tuple[str, ...]
    cles: dict[str, float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "cles": param("cles", "sectors", description="Household expenditure shares"),
        }
        self.variables = {
            "cd": var("cd", "sectors", description="Household consumption"),
            "p": var("p", "sectors", description="Composite good price"),
            "y": var("y", description="Private income"),
            "mps": var("mps", description="Marginal propensity to save"),
        }
        self.equations = [eq("cdeq", "sectors", description="Household demand")]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors}


@register_block
class GovernmentShareDemand(Block):
    """Government consumption as fixed shares of total spending.

    gd[i] = gles[i] * gdtot
    """

    description: str = Field(default="Government fixed-share demand")
    sectors: tuple[str, ...]
    gles: dict[str, float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "gles": param("gles", "sectors", description="Government expenditure shares"),
        }
        self.variables = {
            "gd": var("gd", "sectors", description="Government consumption"),
            "gdtot": var("gdtot", description="Total government consumption"),
        }
        self.equations = [eq("gdeq", "sectors", description="Government demand")]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors}


@register_block
class InventoryDemand(Block):
    """Inventory accumulation proportional to output: dst[i] = dstr[i] * xd[i]."""

    description: str = Field(default="Inventory demand")
    sectors: tuple[str, ...]
    dstr: dict[str, float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "dstr": param("dstr", "sectors", description="Inventory-output ratio"),
        }
        self.variables = {
            "dst": var("dst", "sectors", description="Inventory investment"),
            "xd": var("xd", "sectors", description="Domestic output"),
        }
        self.equations = [eq("inventory", "sectors", description="Inventory demand")]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors}


__all__ = [
    "ConsumerEndowmentCD",
    "HouseholdShareDemand",
    "GovernmentShareDemand",
    "InventoryDemand",
]
