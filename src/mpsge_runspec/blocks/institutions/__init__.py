"""Institution blocks for CGE models.

This module provides blocks for the accounts of institutions:
- Government revenue and savings
- GDP and private income
- Savings-investment balance
- External (balance-of-payments) account
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from mpsge_runspec.blocks.base import Block, eq, param, register_block, var


@register_block
class GovernmentFinance(Block):
    """Government revenue and savings.

    tariff = sum_i pwm[i] * m[i] * tm[i] * er
    indtax = sum_i itax[i] * px[i] * xd[i]
    duty   = sum_i te[i] * pe[i] * e[i]
    gr     = tariff + indtax + duty
    govsav = gr - sum_i p[i] * gd[i]
    """

    description: str = Field(default="Government revenue and savings")
    sectors: tuple[str, ...]
    traded: tuple[str, ...]
    itax: dict[str, float]
    te: dict[str, float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "traded": param("traded", "sectors", description="Traded sectors"),
            "itax": param("itax", "sectors", description="Indirect tax rate"),
            "te": param("te", "sectors", description="Export tax rate"),
        }
        self.variables = {
            "tariff": var("tariff", description="Tariff revenue"),
            "indtax": var("indtax", description="Indirect tax revenue"),
            "duty": var("duty", description="Export duty revenue"),
            "gr": var("gr", description="Government revenue"),
            "govsav": var("govsav", lower=float("-inf"), description="Government savings"),
            "gd": var("gd", "sectors", description="Government consumption"),
        }
        self.equations = [
            eq("tariffdef", description="Tariff revenue"),
            eq("indtaxdef", description="Indirect tax revenue"),
            eq("dutydef", description="Export duty revenue"),
            eq("gruse", description="Government revenue"),
            eq("gsav", description="Government savings"),
        ]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors, "traded": self.traded}


@register_block
class GDPIncome(Block):
    """Private income from value added net of depreciation.

    y = sum_i pva[i] * xd[i] - deprecia
    """

    description: str = Field(default="GDP and private income")
    sectors: tuple[str, ...]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.variables = {
            "y": var("y", description="Private income"),
            "deprecia": var("deprecia", description="Depreciation"),
            "pva": var("pva", "sectors", description="Value-added price"),
            "xd": var("xd", "sectors", description="Domestic output"),
        }
        self.equations = [eq("totinc", description="Total income")]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors}


@register_block
class SavingsInvestment(Block):
    """Savings and allocation of investment by sector of destination.

    deprecia = sum_i depr[i] * pk[i] * k[i]
    hhsav    = mps * y
    savings  = hhsav + govsav + deprecia + fsav * er
    pk[i] * dk[i] = kio[i] * savings - kio[i] * sum_j p[j] * dst[j]
    id[i]    = sum_j imat[i, j] * dk[j]
    """

    description: str = Field(default="Savings-investment balance")
    sectors: tuple[str, ...]
    goods: tuple[str, ...]
    depr: dict[str, float]
    kio: dict[str, float]
    imat: dict[tuple[str, str], float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "depr": param("depr", "sectors", description="Depreciation rate"),
            "kio": param("kio", "sectors", description="Investment shares by destination"),
            "imat": param("imat", "goods", "sectors", description="Capital composition matrix"),
        }
        self.variables = {
            "savings": var("savings", description="Total savings"),
            "hhsav": var("hhsav", description="Household savings"),
            "govsav": var("govsav", lower=float("-inf"), description="Government savings"),
            "deprecia": var("deprecia", description="Depreciation"),
            "fsav": var("fsav", lower=float("-inf"), description="Foreign savings"),
            "dk": var("dk", "sectors", description="Investment by destination"),
            "id": var("id", "goods", description="Investment demand by origin"),
            "k": var("k", "sectors", description="Capital stock"),
        }
        self.equations = [
            eq("depreq", description="Depreciation"),
            eq("hhsaveq", description="Household savings"),
            eq("totsav", description="Total savings"),
            eq("prodinv", "sectors", description="Investment by destination"),
            eq("ieq", "goods", description="Investment by origin"),
        ]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors, "goods": self.goods}


@register_block
class ExternalBalance(Block):
    """Balance of payments with world prices as variables.

    sum_i pwm[i] * m[i] = sum_i pwe[i] * e[i] + fsav
    """

    description: str = Field(default="External balance")
    sectors: tuple[str, ...]
    Sf: float = Field(..., description="Benchmark foreign savings")

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "Sf": param("Sf", description="Benchmark foreign savings"),
        }
        self.variables = {
            "pwm": var("pwm", "sectors", description="World import price"),
            "pwe": var("pwe", "sectors", description="World export price"),
            "m": var("m", "sectors", description="Imports"),
            "e": var("e", "sectors", description="Exports"),
            "fsav": var("fsav", lower=float("-inf"), description="Foreign savings"),
        }
        self.equations = [eq("caeq", description="Current account")]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors}


__all__ = [
    "GovernmentFinance",
    "GDPIncome",
    "SavingsInvestment",
    "ExternalBalance",
]
