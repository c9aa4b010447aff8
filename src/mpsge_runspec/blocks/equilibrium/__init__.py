"""Equilibrium blocks.

This module provides market equilibrium and closure blocks:
- Commodity, labor and final-demand market clearing
- Numeraire fixing
- Initial values (start levels, lower bounds, fixed values)
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator

from mpsge_runspec.blocks.base import Block, eq, param, register_block, var
from mpsge_runspec.core.tables import LabeledMatrix


@register_block
class CommodityMarketClearing(Block):
    """Market clearing for every commodity, paired with its price.

    sum_a a_out[g, a] * Y[a] + sum_h endowment[g, h]
        >= sum_a a_in[g, a] * Y[a] + sum_h D[g, h]     perp P[g] >= 0
    """

    description: str = Field(default="Commodity market clearing")
    commodities: tuple[str, ...]
    activities: tuple[str, ...]
    consumers: tuple[str, ...]
    a_out: LabeledMatrix
    a_in: LabeledMatrix
    endowment: LabeledMatrix

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "a_out": param("a_out", "commodities", "activities", description="Output coefficients"),
            "a_in": param("a_in", "commodities", "activities", description="Input coefficients"),
            "endowment": param("endowment", "commodities", "consumers", description="Endowments"),
        }
        self.variables = {
            "P": var("P", "commodities", description="Commodity price"),
        }
        self.equations = [eq("market", "commodities", description="Commodity market clearing")]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {
            "commodities": self.commodities,
            "activities": self.activities,
            "consumers": self.consumers,
        }


@register_block
class LaborMarketClearing(Block):
    """Labor demand equals supply by category: sum_i l[i, lc] = ls[lc]."""

    description: str = Field(default="Labor market clearing")
    labor: tuple[str, ...]
    sectors: tuple[str, ...]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.variables = {
            "l": var("l", "sectors", "labor", description="Labor demand"),
            "ls": var("ls", "labor", description="Labor supply"),
            "wa": var("wa", "labor", description="Average wage"),
        }
        self.equations = [eq("lmequil", "labor", description="Labor market equilibrium")]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"labor": self.labor, "sectors": self.sectors}


@register_block
class FinalDemandClearing(Block):
    """Composite goods market: x[i] = int[i] + cd[i] + gd[i] + id[i] + dst[i]."""

    description: str = Field(default="Final demand market clearing")
    sectors: tuple[str, ...]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.variables = {
            "x": var("x", "sectors", description="Composite good supply"),
            "int": var("int", "sectors", description="Intermediate demand"),
            "cd": var("cd", "sectors", description="Household consumption"),
            "gd": var("gd", "sectors", description="Government consumption"),
            "id": var("id", "sectors", description="Investment demand"),
            "dst": var("dst", "sectors", description="Inventory investment"),
        }
        self.equations = [
            eq("inteq", "sectors", description="Intermediate demand"),
            eq("equil", "sectors", description="Goods market equilibrium"),
        ]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors}


@register_block
class Numeraire(Block):
    """Fixes one price to pin down the price level.

    Attributes:
        target: What the fixed label names ("commodity" price or a "variable")
        label: Label of the fixed price
        value: Level the price is fixed at
    """

    description: str = Field(default="Numeraire")
    target: Literal["commodity", "variable"] = Field(default="commodity")
    label: str = Field(..., min_length=1)
    value: float = Field(default=1.0)

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "value": param("value", description="Numeraire level"),
        }

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        if self.target == "commodity":
            return {"commodities": (self.label,)}
        return {}


@register_block
class InitialValues(Block):
    """Start levels, lower bounds and fixed values of model variables.

    Keys are compound variable names (see :func:`global_var`).
    """

    description: str = Field(default="Initial values")
    start: dict[str, float] = Field(default_factory=dict)
    lower: dict[str, float] = Field(default_factory=dict)
    fixed: dict[str, float] = Field(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "start": param("start", description="Start values"),
            "lower": param("lower", description="Lower bounds"),
            "fixed": param("fixed", description="Fixed values"),
        }

    @field_validator("start", "lower", "fixed", mode="before")
    @classmethod
    def copy_table(cls, v: dict[str, Any]) -> dict[str, float]:  # noqa: N805
        """Store a private float copy of each table."""
        return {str(k): float(x) for k, x in dict(v).items()}

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {}


__all__ = [
    "CommodityMarketClearing",
    "LaborMarketClearing",
    "FinalDemandClearing",
    "Numeraire",
    "InitialValues",
]
