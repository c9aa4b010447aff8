"""Label normalization for MPSGE object names.

MPSGE names indexed objects with a bracketed suffix (``Y[ag]``,
``PL[urban,skilled]``). RunSpecs key everything by flat labels, so the
index is pulled out of the brackets and comma-separated components are
joined with underscores.
"""

from __future__ import annotations

import numbers
from typing import Any

import numpy as np


def strip_index_name(name: Any) -> str:
    """Normalize an MPSGE object name into a flat label.

    The interior of the first ``[`` and the last ``]`` becomes the label,
    with commas replaced by underscores. Names without a well-ordered
    bracket pair are returned unchanged.

    Args:
        name: Object name (anything convertible with ``str``)

    Returns:
        Normalized label

    Example:
        >>> strip_index_name("X[a,b]")
        'a_b'
        >>> strip_index_name("PX")
        'PX'
    """
    text = str(name)
    open_idx = text.find("[")
    close_idx = text.rfind("]")
    if open_idx < 0 or close_idx < 0 or close_idx <= open_idx:
        return text
    inner = text[open_idx + 1 : close_idx]
    return inner.replace(",", "_")


def scalar_value(value: Any) -> float:
    """Coerce a raw number or an MPSGE value object to ``float``.

    Value objects expose their number through a ``value`` accessor, either
    as a method or as a plain attribute.

    Raises:
        TypeError: If ``value`` is neither a real number nor a value object
    """
    if isinstance(value, bool):
        raise TypeError("Boolean values are not valid quantities")
    if isinstance(value, (numbers.Real, np.number)):
        return float(value)

    try:
        accessor = value.value
    except AttributeError as exc:
        msg = f"Cannot coerce {type(value).__name__} to a scalar quantity"
        raise TypeError(msg) from exc
    return float(accessor() if callable(accessor) else accessor)


def global_var(base: str, *indices: str) -> str:
    """Build the compound key of an indexed model variable.

    >>> global_var("x", "ag")
    'x_ag'
    >>> global_var("l", "ag", "rural")
    'l_ag_rural'
    """
    return "_".join((str(base), *(str(i) for i in indices)))
