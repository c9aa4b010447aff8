"""Core data structures for mpsge_runspec.

- Labels: normalization of MPSGE names and compound variable keys
- Sets: ordered label collections
- Tables: labeled numeric matrices
"""

from mpsge_runspec.core.labels import global_var, scalar_value, strip_index_name
from mpsge_runspec.core.sets import Set
from mpsge_runspec.core.tables import LabeledMatrix

__all__ = [
    "Set",
    "LabeledMatrix",
    "global_var",
    "scalar_value",
    "strip_index_name",
]
