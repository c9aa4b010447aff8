"""Import MPSGE-style models into RunSpecs.

Two paths produce the same RunSpec shape:

- minimal: built from the model's production and demand trees
- data-assisted: built from precomputed calibration tables
"""

from __future__ import annotations

import logging
from typing import Any

from mpsge_runspec.importers.data import derive_initial_values, import_data
from mpsge_runspec.importers.minimal import import_minimal
from mpsge_runspec.runspec import RunSpec
from mpsge_runspec.source.protocols import MPSGEModel

logger = logging.getLogger(__name__)


def import_mpsge(
    model: MPSGEModel,
    *,
    name: str = "MPSGEImport",
    data: Any = None,
    sort_labels: bool = False,
) -> RunSpec:
    """Import an MPSGE-style model object into a RunSpec.

    When ``data`` is given, a detailed MCP specification is built from the
    calibration tables. Otherwise a minimal structure is derived from the
    model's production and demand trees.

    Args:
        model: Source model (see :class:`MPSGEModel`)
        name: RunSpec name
        data: Optional calibration data for the data-assisted path
        sort_labels: Minimal path only: order labels lexicographically

    Raises:
        TypeError: If ``model`` does not provide the MPSGE model interface
    """
    if not isinstance(model, MPSGEModel):
        msg = f"{type(model).__name__} does not provide the MPSGE model interface"
        raise TypeError(msg)

    if data is not None:
        logger.debug(f"Importing '{name}' from calibration data")
        return import_data(model, data, name=name)
    return import_minimal(model, name=name, sort_labels=sort_labels)


__all__ = ["import_mpsge", "import_minimal", "import_data", "derive_initial_values"]
