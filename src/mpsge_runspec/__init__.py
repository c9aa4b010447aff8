"""mpsge_runspec - Convert MPSGE-style CGE models into block RunSpecs."""

from mpsge_runspec.blocks import Block, register_block
from mpsge_runspec.core import LabeledMatrix, Set, strip_index_name
from mpsge_runspec.data import DatasetConstants, ImportData, load_import_data
from mpsge_runspec.errors import (
    CalibrationSchemaError,
    DegenerateShareError,
    MissingDemandError,
    MPSGEImportError,
    NoOutputError,
    RunSpecValidationError,
)
from mpsge_runspec.importers import import_mpsge
from mpsge_runspec.runspec import RunSpec, build_spec
from mpsge_runspec.source import MPSGEModel, SimpleModel, load_model
from mpsge_runspec.version import __version__

__all__ = [
    "__version__",
    "import_mpsge",
    "RunSpec",
    "build_spec",
    "Block",
    "register_block",
    "Set",
    "LabeledMatrix",
    "strip_index_name",
    "ImportData",
    "DatasetConstants",
    "load_import_data",
    "MPSGEModel",
    "SimpleModel",
    "load_model",
    "MPSGEImportError",
    "MissingDemandError",
    "DegenerateShareError",
    "NoOutputError",
    "CalibrationSchemaError",
    "RunSpecValidationError",
]
