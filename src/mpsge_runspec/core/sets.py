"""Ordered label sets.

Sets hold the labels that index RunSpec tables and blocks (commodities,
activities, factors, institutions). Element order is canonical: it fixes
the row/column order of every table built from the set.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, Field, field_validator


class Set(BaseModel):
    """An ordered, immutable collection of labels.

    Attributes:
        name: Set identifier
        elements: Labels in canonical order
        description: Human-readable description

    Example:
        >>> goods = Set(name="commodities", elements=("PX", "PY"))
        >>> goods.index("PY")
        1
    """

    name: str = Field(..., min_length=1, description="Set identifier")
    elements: tuple[str, ...] = Field(default_factory=tuple, description="Set elements")
    description: str = Field(default="", description="Human-readable description")

    model_config = {"frozen": True}

    @field_validator("elements", mode="before")
    @classmethod
    def coerce_elements(cls, v: Iterable[str]) -> tuple[str, ...]:  # noqa: N805
        """Accept any iterable of labels."""
        return tuple(str(e) for e in v)

    def __len__(self) -> int:
        """Return number of elements in the set."""
        return len(self.elements)

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        """Iterate over set elements."""
        return iter(self.elements)

    def __contains__(self, item: str) -> bool:
        """Check if element is in set."""
        return item in self.elements

    def __getitem__(self, index: int) -> str:
        """Get element by position."""
        return self.elements[index]

    def __repr__(self) -> str:
        """String representation of the set."""
        elems = ", ".join(self.elements[:5])
        if len(self.elements) > 5:
            elems += f", ... ({len(self.elements) - 5} more)"
        return f"Set {self.name} ({len(self.elements)} elements): {elems}"

    def index(self, element: str) -> int:
        """Get position of element in set.

        Raises:
            ValueError: If element not in set
        """
        try:
            return self.elements.index(element)
        except ValueError as exc:
            msg = f"Element '{element}' not in set '{self.name}'"
            raise ValueError(msg) from exc

    def positions(self) -> dict[str, int]:
        """Return a label -> position lookup."""
        return {label: i for i, label in enumerate(self.elements)}

    def is_subset(self, other: Iterable[str]) -> bool:
        """Check whether every element appears in ``other``."""
        pool = set(other)
        return all(e in pool for e in self.elements)

    def to_list(self) -> list[str]:
        """Return elements as a list."""
        return list(self.elements)
