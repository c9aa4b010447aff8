"""Trade blocks.

This module provides foreign-trade blocks for open-economy models:
- World-to-domestic price links
- Absorption and sales value identities
- CET export transformation and export demand
- Armington import aggregation
- Supply of nontraded goods
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from mpsge_runspec.blocks.base import Block, eq, param, register_block, var


class _TradeBlock(Block):
    """Trade block indexed over all sectors with a traded subset."""

    sectors: tuple[str, ...]
    traded: tuple[str, ...]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors, "traded": self.traded}


@register_block
class TradePriceLink(_TradeBlock):
    """Domestic prices of imports and exports.

    pm[i] = pwm[i] * er * (1 + tm[i])
    pe[i] * (1 + te[i]) = pwe[i] * er
    """

    description: str = Field(default="World-to-domestic trade price link")
    te: dict[str, float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "traded": param("traded", "sectors", description="Traded sectors"),
            "te": param("te", "sectors", description="Export tax rate"),
        }
        self.variables = {
            "pm": var("pm", "traded", description="Domestic import price"),
            "pe": var("pe", "traded", description="Domestic export price"),
            "pwm": var("pwm", "traded", description="World import price"),
            "pwe": var("pwe", "traded", description="World export price"),
            "tm": var("tm", "traded", description="Tariff rate"),
            "er": var("er", description="Exchange rate"),
        }
        self.equations = [
            eq("pmdef", "traded", description="Import price"),
            eq("pedef", "traded", description="Export price"),
        ]


@register_block
class AbsorptionSales(_TradeBlock):
    """Value identities for absorption and sales.

    p[i] * x[i] = pd[i] * xxd[i] + pm[i] * m[i]
    px[i] * xd[i] = pd[i] * xxd[i] + pe[i] * e[i]
    """

    description: str = Field(default="Absorption and sales identities")

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "traded": param("traded", "sectors", description="Traded sectors"),
        }
        self.variables = {
            "p": var("p", "sectors", description="Composite good price"),
            "x": var("x", "sectors", description="Composite good supply"),
            "pd": var("pd", "sectors", description="Domestic sales price"),
            "xxd": var("xxd", "sectors", description="Domestic sales"),
            "pm": var("pm", "traded", description="Domestic import price"),
            "m": var("m", "traded", description="Imports"),
            "px": var("px", "sectors", description="Output price"),
            "xd": var("xd", "sectors", description="Domestic output"),
            "pe": var("pe", "traded", description="Domestic export price"),
            "e": var("e", "traded", description="Exports"),
        }
        self.equations = [
            eq("absorption", "sectors", description="Absorption value"),
            eq("sales", "sectors", description="Sales value"),
        ]


@register_block
class CETTransformation(_TradeBlock):
    """CET split of output between exports and domestic sales.

    xd[i] = at[i] * (gamma[i] * e[i]**rhot[i] + (1 - gamma[i]) * xxd[i]**rhot[i])**(1/rhot[i])
    e[i] / xxd[i] = (pe[i] / pd[i] * (1 - gamma[i]) / gamma[i])**(1 / (rhot[i] - 1))
    """

    description: str = Field(default="CET export transformation")
    at: dict[str, float]
    gamma: dict[str, float]
    rhot: dict[str, float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "traded": param("traded", "sectors", description="Traded sectors"),
            "at": param("at", "sectors", description="CET shift"),
            "gamma": param("gamma", "sectors", description="CET share"),
            "rhot": param("rhot", "sectors", description="CET exponent"),
        }
        self.variables = {
            "xd": var("xd", "traded", description="Domestic output"),
            "e": var("e", "traded", description="Exports"),
            "xxd": var("xxd", "traded", description="Domestic sales"),
            "pe": var("pe", "traded", description="Domestic export price"),
            "pd": var("pd", "traded", description="Domestic sales price"),
        }
        self.equations = [
            eq("cet", "traded", description="CET function"),
            eq("esupply", "traded", description="Export supply"),
        ]


@register_block
class ExportDemand(_TradeBlock):
    """Constant-elasticity world demand for exports: e[i] = e0[i] * (pwe0[i] / pwe[i])**eta[i]."""

    description: str = Field(default="Export demand")
    eta: dict[str, float]
    e0: dict[str, float]
    pwe0: dict[str, float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "traded": param("traded", "sectors", description="Traded sectors"),
            "eta": param("eta", "sectors", description="Export demand elasticity"),
            "e0": param("e0", "sectors", description="Benchmark exports"),
            "pwe0": param("pwe0", "sectors", description="Benchmark world export price"),
        }
        self.variables = {
            "e": var("e", "traded", description="Exports"),
            "pwe": var("pwe", "traded", description="World export price"),
        }
        self.equations = [eq("edemand", "traded", description="Export demand")]


@register_block
class ArmingtonImports(_TradeBlock):
    """Armington aggregation of imports and domestic sales.

    x[i] = ac[i] * (delta[i] * m[i]**(-rhoc[i]) + (1 - delta[i]) * xxd[i]**(-rhoc[i]))**(-1/rhoc[i])
    m[i] / xxd[i] = (pd[i] / pm[i] * delta[i] / (1 - delta[i]))**(1 / (1 + rhoc[i]))
    """

    description: str = Field(default="Armington import aggregation")
    delta: dict[str, float]
    ac: dict[str, float]
    rhoc: dict[str, float]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "traded": param("traded", "sectors", description="Traded sectors"),
            "delta": param("delta", "sectors", description="Armington share"),
            "ac": param("ac", "sectors", description="Armington shift"),
            "rhoc": param("rhoc", "sectors", description="Armington exponent"),
        }
        self.variables = {
            "x": var("x", "traded", description="Composite good supply"),
            "m": var("m", "traded", description="Imports"),
            "xxd": var("xxd", "traded", description="Domestic sales"),
            "pm": var("pm", "traded", description="Domestic import price"),
            "pd": var("pd", "traded", description="Domestic sales price"),
        }
        self.equations = [
            eq("armington", "traded", description="Armington function"),
            eq("costmin", "traded", description="Import demand"),
        ]


@register_block
class NontradedSupply(Block):
    """Nontraded goods are sold at home only: x[i] = xxd[i] and xd[i] = xxd[i]."""

    description: str = Field(default="Nontraded goods supply")
    sectors: tuple[str, ...]
    nontraded: tuple[str, ...]

    def model_post_init(self, __context: Any) -> None:
        """Initialize block specifications."""
        self.parameters = {
            "nontraded": param("nontraded", "sectors", description="Nontraded sectors"),
        }
        self.variables = {
            "x": var("x", "nontraded", description="Composite good supply"),
            "xd": var("xd", "nontraded", description="Domestic output"),
            "xxd": var("xxd", "nontraded", description="Domestic sales"),
        }
        self.equations = [
            eq("armington_nt", "nontraded", description="Composite equals domestic sales"),
            eq("cet_nt", "nontraded", description="Output equals domestic sales"),
        ]

    def index_sets(self) -> dict[str, tuple[str, ...]]:
        return {"sectors": self.sectors, "nontraded": self.nontraded}


__all__ = [
    "TradePriceLink",
    "AbsorptionSales",
    "CETTransformation",
    "ExportDemand",
    "ArmingtonImports",
    "NontradedSupply",
]
