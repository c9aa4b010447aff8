"""Capability interface of MPSGE-style source models.

The importers only need to enumerate a model's commodities, sectors,
consumers, production entries and demand entries, and to read names and
quantities. Anything satisfying these protocols can be imported: the
in-memory :mod:`mpsge_runspec.source.simple` model, or an adapter around a
different modeling front-end.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Named(Protocol):
    """A model object (commodity, sector, consumer) identified by name."""

    @property
    def name(self) -> str: ...


class Netput(Protocol):
    """A signed commodity flow of a production entry.

    ``sign`` is positive for outputs and negative for inputs; ``quantity``
    is a number or a value object (see :func:`scalar_value`).
    """

    @property
    def quantity(self) -> Any: ...

    @property
    def sign(self) -> int: ...


class Flow(Protocol):
    """A final-demand or endowment flow of a demand entry."""

    @property
    def quantity(self) -> Any: ...


class Production(Protocol):
    """Production entry: the sector and its netputs by commodity."""

    @property
    def sector(self) -> Hashable: ...

    def netputs(self) -> Mapping[Hashable, Sequence[Netput]]: ...


class Demand(Protocol):
    """Demand entry of one consumer."""

    @property
    def consumer(self) -> Hashable: ...

    def final_demands(self) -> Mapping[Hashable, Sequence[Flow]]: ...

    def endowments(self) -> Mapping[Hashable, Sequence[Flow]]: ...


@runtime_checkable
class MPSGEModel(Protocol):
    """Source model accepted by :func:`mpsge_runspec.import_mpsge`."""

    def commodities(self) -> Iterable[Named]: ...

    def sectors(self) -> Iterable[Named]: ...

    def consumers(self) -> Iterable[Named]: ...

    def productions(self) -> Iterable[Production]: ...

    def demands(self) -> Iterable[Demand]: ...
