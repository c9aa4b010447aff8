"""Source-side model interface and the in-memory reference model."""

from mpsge_runspec.source.protocols import MPSGEModel
from mpsge_runspec.source.simple import (
    Commodity,
    Consumer,
    Parameter,
    Sector,
    SimpleModel,
    load_model,
    model_from_mapping,
)

__all__ = [
    "MPSGEModel",
    "SimpleModel",
    "Commodity",
    "Sector",
    "Consumer",
    "Parameter",
    "load_model",
    "model_from_mapping",
]
