"""Block base classes for RunSpecs.

Blocks are the units a RunSpec is made of. Each block records the label
sets it is indexed over, the parameter values it was built with, and the
variables and equations it contributes to the equilibrium system. The
equations themselves are formulated by the solver framework; a block here
only declares them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from mpsge_runspec.core.serialization import to_jsonable


class ParameterSpec(BaseModel):
    """Specification for a block parameter.

    The parameter value is held in the block field of the same name.

    Attributes:
        name: Parameter identifier (matches a block field)
        domains: Tuple of set names defining dimensions
        description: Human-readable description
    """

    name: str = Field(..., description="Parameter identifier")
    domains: tuple[str, ...] = Field(
        default_factory=tuple, description="Dimension set names"
    )
    description: str = Field(default="", description="Parameter description")

    model_config = {"frozen": True}


class VariableSpec(BaseModel):
    """Specification for a variable a block declares.

    Attributes:
        name: Variable identifier
        domains: Tuple of set names defining dimensions
        lower: Lower bound (default: 0)
        upper: Upper bound (default: inf)
        description: Human-readable description
    """

    name: str = Field(..., description="Variable identifier")
    domains: tuple[str, ...] = Field(
        default_factory=tuple, description="Dimension set names"
    )
    lower: float = Field(default=0.0, description="Lower bound")
    upper: float = Field(default=float("inf"), description="Upper bound")
    description: str = Field(default="", description="Variable description")

    model_config = {"frozen": True}


class EquationSpec(BaseModel):
    """Specification for an equation a block contributes.

    Attributes:
        name: Equation identifier
        domains: Tuple of set names defining equation indices
        description: Human-readable description
    """

    name: str = Field(..., description="Equation identifier")
    domains: tuple[str, ...] = Field(
        default_factory=tuple, description="Dimension set names"
    )
    description: str = Field(default="", description="Equation description")

    model_config = {"frozen": True}


class Block(BaseModel, ABC):
    """Base class for RunSpec blocks.

    Subclasses add fields for their index sets and parameter values, and
    fill ``parameters``, ``variables`` and ``equations`` in
    ``model_post_init``.

    Attributes:
        name: Block identifier, unique within a RunSpec
        description: Human-readable description
        mcp: Whether equations are paired with variables as a mixed
            complementarity problem
        parameters: Parameter specifications
        variables: Variable specifications
        equations: Equation specifications

    Example:
        >>> class InventoryDemand(Block):
        ...     sectors: tuple[str, ...]
        ...     dstr: dict[str, float]
        ...
        ...     def index_sets(self):
        ...         return {"sectors": self.sectors}
    """

    name: str = Field(..., min_length=1, description="Block identifier")
    description: str = Field(default="", description="Block description")
    mcp: bool = Field(default=True, description="MCP formulation flag")
    parameters: dict[str, ParameterSpec] = Field(
        default_factory=dict, description="Parameter specifications"
    )
    variables: dict[str, VariableSpec] = Field(
        default_factory=dict, description="Variable specifications"
    )
    equations: list[EquationSpec] = Field(
        default_factory=list, description="Equation specifications"
    )

    model_config = {"frozen": False, "arbitrary_types_allowed": True}

    @abstractmethod
    def index_sets(self) -> dict[str, tuple[str, ...]]:
        """Return the label sets this block is indexed over, by set name."""
        ...

    @property
    def kind(self) -> str:
        """Block type name."""
        return type(self).__name__

    def labels(self) -> set[str]:
        """Return every label the block is indexed over."""
        found: set[str] = set()
        for elements in self.index_sets().values():
            found.update(elements)
        return found

    def parameter_values(self) -> dict[str, Any]:
        """Return the value of every declared parameter."""
        return {name: getattr(self, name) for name in self.parameters}

    def get_info(self) -> dict[str, Any]:
        """Get block metadata and parameter values as a JSON-safe dictionary."""
        return {
            "name": self.name,
            "kind": self.kind,
            "description": self.description,
            "mcp": self.mcp,
            "sets": to_jsonable(self.index_sets()),
            "parameters": to_jsonable(self.parameter_values()),
            "variables": {k: v.model_dump() for k, v in self.variables.items()},
            "equations": [eq.model_dump() for eq in self.equations],
        }

    def __repr__(self) -> str:
        """String representation."""
        sets_str = f"[{', '.join(self.index_sets())}]"
        return (
            f"Block {self.name} ({self.kind}){sets_str}: "
            f"{len(self.parameters)} params, "
            f"{len(self.variables)} vars, "
            f"{len(self.equations)} eqs"
        )


def var(name: str, *domains: str, lower: float = 0.0, description: str = "") -> VariableSpec:
    """Shorthand for a VariableSpec."""
    return VariableSpec(name=name, domains=domains, lower=lower, description=description)


def eq(name: str, *domains: str, description: str = "") -> EquationSpec:
    """Shorthand for an EquationSpec."""
    return EquationSpec(name=name, domains=domains, description=description)


def param(name: str, *domains: str, description: str = "") -> ParameterSpec:
    """Shorthand for a ParameterSpec."""
    return ParameterSpec(name=name, domains=domains, description=description)


class BlockRegistry:
    """Registry of block classes a RunSpec may contain.

    Example:
        >>> registry = BlockRegistry()
        >>> registry.register(Numeraire)
        >>> "Numeraire" in registry
        True
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._blocks: dict[str, type[Block]] = {}

    def register(self, block_class: type[Block]) -> None:
        """Register a block class.

        Raises:
            ValueError: If block with same name already registered
        """
        name = block_class.__name__

        if name in self._blocks:
            msg = f"Block '{name}' is already registered"
            raise ValueError(msg)

        self._blocks[name] = block_class

    def get(self, name: str) -> type[Block]:
        """Get a block class by name.

        Raises:
            KeyError: If block not found
        """
        if name not in self._blocks:
            msg = f"Block '{name}' not found in registry"
            raise KeyError(msg)
        return self._blocks[name]

    def list_blocks(self) -> list[str]:
        """Return list of registered block names."""
        return list(self._blocks.keys())

    def create(self, kind: str, **kwargs: Any) -> Block:
        """Create a block instance of the registered class ``kind``."""
        block_class = self.get(kind)
        return block_class(**kwargs)

    def __contains__(self, name: str) -> bool:
        """Check if block is registered."""
        return name in self._blocks


# Global registry instance
_global_registry: BlockRegistry | None = None


def get_registry() -> BlockRegistry:
    """Get the global block registry."""
    global _global_registry
    if _global_registry is None:
        _global_registry = BlockRegistry()
    return _global_registry


def register_block(block_class: type[Block]) -> type[Block]:
    """Decorator to register a block class.

    Example:
        >>> @register_block
        ... class Numeraire(Block):
        ...     pass
    """
    registry = get_registry()
    registry.register(block_class)
    return block_class
