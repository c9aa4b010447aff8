"""Exceptions raised while importing MPSGE models into RunSpecs."""

from __future__ import annotations


class MPSGEImportError(ValueError):
    """Raised when a source model cannot be converted into a RunSpec."""

    pass


class MissingDemandError(MPSGEImportError):
    """Raised when a consumer has no demand entry in the source model."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Missing demand for consumer {label}")


class DegenerateShareError(MPSGEImportError):
    """Raised when a consumer's final demand does not sum to a positive total."""

    def __init__(self, label: str, total: float):
        self.label = label
        self.total = total
        super().__init__(
            f"Final demand quantities for consumer {label} sum to {total:g}; "
            "demand shares are undefined"
        )


class NoOutputError(MPSGEImportError):
    """Raised when an activity produces no commodity with positive output."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"No positive output for activity {label}")


class CalibrationSchemaError(MPSGEImportError):
    """Raised when calibration data is missing tables or holds invalid ones.

    All problems found are reported together.

    Attributes:
        missing: Names of required tables that were not supplied
        invalid: Mapping of table name to validation message
    """

    def __init__(
        self,
        missing: list[str] | None = None,
        invalid: dict[str, str] | None = None,
    ):
        self.missing = list(missing or [])
        self.invalid = dict(invalid or {})
        parts = []
        if self.missing:
            parts.append(f"missing tables: {', '.join(self.missing)}")
        if self.invalid:
            details = "; ".join(f"{k}: {v}" for k, v in self.invalid.items())
            parts.append(f"invalid tables: {details}")
        super().__init__("Calibration data is incomplete (" + " | ".join(parts) + ")")


class RunSpecValidationError(ValueError):
    """Raised when assembled sections, blocks, or closure violate the RunSpec schema."""

    pass
