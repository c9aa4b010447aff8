"""Labeled numeric tables.

A LabeledMatrix couples a two-dimensional numpy array with the labels of
its rows and columns, so blocks can look values up by label instead of by
position.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field, field_validator, model_validator


class LabeledMatrix(BaseModel):
    """A 2-D table indexed by row and column labels.

    Attributes:
        values: Numpy array of shape (len(row_labels), len(col_labels))
        row_labels: Labels of the rows, in array order
        col_labels: Labels of the columns, in array order

    Example:
        >>> m = LabeledMatrix(
        ...     values=np.array([[10.0], [0.0]]),
        ...     row_labels=("PX", "PY"),
        ...     col_labels=("X",),
        ... )
        >>> m["PX", "X"]
        10.0
    """

    values: np.ndarray = Field(..., description="Table values")
    row_labels: tuple[str, ...] = Field(default_factory=tuple, description="Row labels")
    col_labels: tuple[str, ...] = Field(default_factory=tuple, description="Column labels")

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @field_validator("values", mode="before")
    @classmethod
    def ensure_numpy_array(cls, v: Any) -> np.ndarray:  # noqa: N805
        """Convert input to a float array (copied)."""
        return np.array(v, dtype=float)

    @field_validator("row_labels", "col_labels", mode="before")
    @classmethod
    def coerce_labels(cls, v: Any) -> tuple[str, ...]:  # noqa: N805
        """Accept any iterable of labels."""
        return tuple(str(label) for label in v)

    @model_validator(mode="after")
    def validate_shape(self) -> LabeledMatrix:
        """Check that the array shape matches the label counts."""
        expected = (len(self.row_labels), len(self.col_labels))
        if self.values.ndim != 2 or self.values.shape != expected:
            msg = (
                f"LabeledMatrix values have shape {self.values.shape}, "
                f"labels imply {expected}"
            )
            raise ValueError(msg)
        return self

    @property
    def shape(self) -> tuple[int, int]:
        """Return (rows, columns)."""
        return tuple(self.values.shape)  # type: ignore[return-value]

    def __getitem__(self, key: tuple[str, str]) -> float:
        """Get a value by (row label, column label)."""
        row, col = key
        return float(self.values[self._row_pos(row), self._col_pos(col)])

    def _row_pos(self, label: str) -> int:
        try:
            return self.row_labels.index(label)
        except ValueError as exc:
            raise KeyError(f"Row '{label}' not in table") from exc

    def _col_pos(self, label: str) -> int:
        try:
            return self.col_labels.index(label)
        except ValueError as exc:
            raise KeyError(f"Column '{label}' not in table") from exc

    def column(self, label: str) -> dict[str, float]:
        """Return one column as a row label -> value mapping."""
        j = self._col_pos(label)
        return {r: float(self.values[i, j]) for i, r in enumerate(self.row_labels)}

    def column_sums(self) -> dict[str, float]:
        """Return the sum of each column keyed by column label."""
        sums = self.values.sum(axis=0)
        return {c: float(sums[j]) for j, c in enumerate(self.col_labels)}

    def to_frame(self) -> pd.DataFrame:
        """Return the table as a pandas DataFrame."""
        return pd.DataFrame(
            self.values.copy(),
            index=list(self.row_labels),
            columns=list(self.col_labels),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "row_labels": list(self.row_labels),
            "col_labels": list(self.col_labels),
            "values": self.values.tolist(),
        }

    def __repr__(self) -> str:
        """String representation."""
        return f"LabeledMatrix {self.shape[0]}x{self.shape[1]}"
