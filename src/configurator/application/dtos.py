"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from configurator.domain import ConstraintViolation, ProductConfiguration


@dataclass
class LayoutOutput:
    """Output DTO of a configure run.

    Attributes:
        configuration: The configuration with its derived layout, or None
            when the request was rejected.
        violations: Constraint violations reported by the validator.
        errors: Human-readable error messages, one per violation or
            request problem.
    """

    configuration: ProductConfiguration | None
    violations: list[ConstraintViolation] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the layout was computed successfully."""
        return len(self.errors) == 0 and self.configuration is not None
