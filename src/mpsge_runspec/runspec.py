"""RunSpec assembly and structural validation.

A RunSpec is the declarative description a block-based equilibrium solver
consumes: index sets, the activity-to-output mapping, blocks grouped into
named sections, the closure (the fixed price) and a scenario.
:func:`build_spec` is the single place where a RunSpec is created; it
checks the sections and blocks against the schema before returning.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from mpsge_runspec.blocks.base import Block, get_registry
from mpsge_runspec.core.serialization import to_jsonable
from mpsge_runspec.core.sets import Set
from mpsge_runspec.errors import RunSpecValidationError

logger = logging.getLogger(__name__)

ALLOWED_SECTIONS: tuple[str, ...] = (
    "production",
    "factors",
    "households",
    "government",
    "savings",
    "prices",
    "trade",
    "external",
    "markets",
    "init",
    "closure",
)


def allowed_sections() -> tuple[str, ...]:
    """Return the section names a RunSpec may contain, in canonical order."""
    return ALLOWED_SECTIONS


class Sets(BaseModel):
    """The four index sets of a RunSpec.

    Attributes:
        commodities: Commodity (price) labels
        activities: Activity (sector) labels
        factors: Factor labels
        institutions: Institution (consumer) labels
    """

    commodities: Set
    activities: Set
    factors: Set
    institutions: Set

    model_config = {"frozen": True}

    @classmethod
    def from_labels(
        cls,
        commodities: Iterable[str],
        activities: Iterable[str],
        factors: Iterable[str],
        institutions: Iterable[str],
    ) -> Sets:
        """Build the four sets from label sequences."""
        return cls(
            commodities=Set(name="commodities", elements=commodities),
            activities=Set(name="activities", elements=activities),
            factors=Set(name="factors", elements=factors),
            institutions=Set(name="institutions", elements=institutions),
        )

    def __iter__(self) -> Iterator[Set]:  # type: ignore[override]
        """Iterate over the four sets."""
        return iter((self.commodities, self.activities, self.factors, self.institutions))

    def all_labels(self) -> set[str]:
        """Return the union of all set elements."""
        labels: set[str] = set()
        for s in self:
            labels.update(s.elements)
        return labels

    def to_dict(self) -> dict[str, list[str]]:
        """Convert to a name -> labels dictionary."""
        return {s.name: s.to_list() for s in self}


class Mappings(BaseModel):
    """Activity-to-output mapping: the commodity each activity is priced by."""

    activity_to_output: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}


class ClosureSpec(BaseModel):
    """Closure: the variable fixed to pin down the price level."""

    fixed: str = Field(..., description="Numeraire or fixed price variable")
    value: float = Field(default=1.0, description="Level the variable is fixed at")

    model_config = {"frozen": True}


class ScenarioSpec(BaseModel):
    """Scenario applied on top of the baseline."""

    name: str = Field(default="baseline", min_length=1)
    shocks: dict[str, Any] = Field(default_factory=dict)


class Section(BaseModel):
    """A named group of blocks."""

    name: str = Field(..., min_length=1)
    blocks: list[Block] = Field(default_factory=list)

    model_config = {"arbitrary_types_allowed": True}

    def __len__(self) -> int:
        return len(self.blocks)


def section(name: str, blocks: Sequence[Block] = ()) -> Section:
    """Create a section holding ``blocks``."""
    return Section(name=name, blocks=list(blocks))


class RunSpecStatistics(BaseModel):
    """Counts describing a RunSpec.

    Attributes:
        blocks: Number of blocks
        sections: Number of sections
        nonempty_sections: Number of sections holding at least one block
        variables: Number of distinct declared variable names
        equations: Number of declared equations
    """

    blocks: int = Field(default=0, description="Number of blocks")
    sections: int = Field(default=0, description="Number of sections")
    nonempty_sections: int = Field(default=0, description="Sections with blocks")
    variables: int = Field(default=0, description="Distinct declared variables")
    equations: int = Field(default=0, description="Declared equations")

    model_config = {"frozen": True}


class RunSpec(BaseModel):
    """Declarative specification of an equilibrium model.

    Create instances with :func:`build_spec`, which validates them.

    Attributes:
        name: Model name
        sets: Index sets
        mappings: Activity-to-output mapping
        sections: Sections in canonical order
        closure: Closure specification
        scenario: Scenario specification
    """

    name: str = Field(..., min_length=1, description="Model name")
    sets: Sets
    mappings: Mappings
    sections: list[Section] = Field(default_factory=list)
    closure: ClosureSpec
    scenario: ScenarioSpec = Field(default_factory=ScenarioSpec)

    model_config = {"arbitrary_types_allowed": True}

    def section(self, name: str) -> Section:
        """Get a section by name.

        Raises:
            KeyError: If the section is not in the spec
        """
        for sec in self.sections:
            if sec.name == name:
                return sec
        msg = f"Section '{name}' not found"
        raise KeyError(msg)

    def section_names(self) -> list[str]:
        """Return section names in order."""
        return [sec.name for sec in self.sections]

    def blocks(self) -> Iterator[Block]:
        """Iterate over all blocks in section order."""
        for sec in self.sections:
            yield from sec.blocks

    def get_block(self, name: str) -> Block:
        """Get a block by name.

        Raises:
            KeyError: If no block has that name
        """
        for block in self.blocks():
            if block.name == name:
                return block
        msg = f"Block '{name}' not found"
        raise KeyError(msg)

    @property
    def statistics(self) -> RunSpecStatistics:
        """Calculate RunSpec statistics."""
        blocks = list(self.blocks())
        variables = {v for block in blocks for v in block.variables}
        return RunSpecStatistics(
            blocks=len(blocks),
            sections=len(self.sections),
            nonempty_sections=sum(1 for sec in self.sections if sec.blocks),
            variables=len(variables),
            equations=sum(len(block.equations) for block in blocks),
        )

    def summary(self) -> dict[str, Any]:
        """Return a compact summary of the spec."""
        return {
            "name": self.name,
            "statistics": self.statistics.model_dump(),
            "sets": {s.name: len(s) for s in self.sets},
            "sections": {sec.name: [b.name for b in sec.blocks] for sec in self.sections},
            "closure": self.closure.model_dump(),
            "scenario": self.scenario.name,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert the full spec to JSON-safe data."""
        return {
            "name": self.name,
            "sets": self.sets.to_dict(),
            "mappings": dict(self.mappings.activity_to_output),
            "sections": [
                {"name": sec.name, "blocks": [b.get_info() for b in sec.blocks]}
                for sec in self.sections
            ],
            "closure": self.closure.model_dump(),
            "scenario": to_jsonable(self.scenario.model_dump()),
        }

    def to_json(self, path: Path, indent: int = 2) -> Path:
        """Write the spec to a JSON file and return the path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=indent), encoding="utf-8")
        logger.info(f"RunSpec '{self.name}' written to {path}")
        return path

    def __repr__(self) -> str:
        """String representation."""
        stats = self.statistics
        return (
            f"RunSpec '{self.name}': "
            f"{stats.blocks} blocks in {stats.nonempty_sections} sections, "
            f"closure={self.closure.fixed}"
        )


def _check_sections(
    sections: Sequence[Section],
    required_sections: Sequence[str],
    allowed: Sequence[str],
    required_nonempty: Sequence[str],
) -> list[str]:
    problems: list[str] = []
    names = [sec.name for sec in sections]

    unknown = [n for n in names if n not in allowed]
    if unknown:
        problems.append(f"unknown sections: {', '.join(unknown)}")

    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        problems.append(f"duplicate sections: {', '.join(duplicates)}")

    missing = [n for n in required_sections if n not in names]
    if missing:
        problems.append(f"missing sections: {', '.join(missing)}")

    by_name = {sec.name: sec for sec in sections}
    empty = [n for n in required_nonempty if n in by_name and not by_name[n].blocks]
    if empty:
        problems.append(f"empty required sections: {', '.join(empty)}")
    return problems


def _check_blocks(sections: Sequence[Section], sets: Sets) -> list[str]:
    problems: list[str] = []
    registry = get_registry()
    labels = sets.all_labels()
    seen: set[str] = set()

    for sec in sections:
        for block in sec.blocks:
            if block.kind not in registry:
                problems.append(f"block '{block.name}' has unregistered kind {block.kind}")
            if block.name in seen:
                problems.append(f"duplicate block name '{block.name}'")
            seen.add(block.name)
            unknown = sorted(block.labels() - labels)
            if unknown:
                problems.append(
                    f"block '{block.name}' uses labels outside the spec sets: "
                    f"{', '.join(unknown)}"
                )
    return problems


def _check_mappings(mappings: Mappings, sets: Sets) -> list[str]:
    problems: list[str] = []
    for activity, output in mappings.activity_to_output.items():
        if activity not in sets.activities:
            problems.append(f"mapping activity '{activity}' is not in the activities set")
        if output not in sets.commodities:
            problems.append(f"mapping output '{output}' is not in the commodities set")
    return problems


def build_spec(
    name: str,
    sets: Sets,
    mappings: Mappings,
    sections: Sequence[Section],
    *,
    closure: ClosureSpec,
    scenario: ScenarioSpec | None = None,
    required_sections: Sequence[str] = (),
    allowed_sections: Sequence[str] = ALLOWED_SECTIONS,
    required_nonempty: Sequence[str] = (),
) -> RunSpec:
    """Validate and assemble a RunSpec.

    Args:
        name: Model name
        sets: Index sets
        mappings: Activity-to-output mapping
        sections: Sections with their blocks
        closure: Fixed price variable
        scenario: Scenario (defaults to an empty baseline)
        required_sections: Sections that must be present
        allowed_sections: Sections that may be present
        required_nonempty: Sections that must hold at least one block

    Returns:
        The assembled RunSpec

    Raises:
        RunSpecValidationError: Listing every structural problem found
    """
    problems = _check_sections(sections, required_sections, allowed_sections, required_nonempty)
    problems += _check_blocks(sections, sets)
    problems += _check_mappings(mappings, sets)
    if not closure.fixed.strip():
        problems.append("closure names no fixed variable")

    if problems:
        msg = f"Invalid RunSpec '{name}': " + "; ".join(problems)
        raise RunSpecValidationError(msg)

    spec = RunSpec(
        name=name,
        sets=sets,
        mappings=mappings,
        sections=list(sections),
        closure=closure,
        scenario=scenario or ScenarioSpec(),
    )
    logger.debug(f"Built {spec!r}")
    return spec
