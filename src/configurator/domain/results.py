"""Result types for validation and compartment building."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .configuration import ValidatedConfig
    from .entities import Compartment


def field_path(*segments: str | int) -> str:
    """Join field names and indices into a violation path.

    Examples:
        >>> field_path("compartments", 1, 2)
        'compartments[1][2]'
        >>> field_path("materials", "body", "color")
        'materials.body.color'
    """
    path = ""
    for segment in segments:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


@dataclass(frozen=True)
class ConstraintViolation:
    """A requested value that breaks a manufacturing rule.

    Violations are returned as data and never raised.

    Attributes:
        field: Path of the offending field (e.g. "width",
            "row_heights", "compartments[1][2]").
        rule: Short name of the rule broken ("min", "max", "increment",
            "row_sum", "span", "drawer_depth", ...).
        limit: The limit that was violated.
        actual: The value that was requested or derived.
        message: Human-readable description.
    """

    field: str
    rule: str
    limit: Any
    actual: Any
    message: str = ""

    def __str__(self) -> str:
        if self.message:
            return f"{self.field}: {self.message}"
        return f"{self.field}: {self.rule} {self.limit!r} violated (got {self.actual!r})"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a configuration request.

    Either ``config`` is set and ``violations`` is empty, or ``config`` is
    None and there is at least one violation. Validation never partially
    applies.
    """

    config: ValidatedConfig | None = None
    violations: tuple[ConstraintViolation, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if (self.config is None) == (not self.violations):
            raise ValueError(
                "ValidationOutcome needs either a config or violations, not both"
            )

    @property
    def is_valid(self) -> bool:
        """Check if validation passed."""
        return self.config is not None

    @property
    def fields(self) -> tuple[str, ...]:
        """Names of the offending fields, in report order."""
        return tuple(v.field for v in self.violations)

    @classmethod
    def ok(cls, config: ValidatedConfig) -> ValidationOutcome:
        """Create a successful outcome."""
        return cls(config=config)

    @classmethod
    def fail(cls, violations: list[ConstraintViolation]) -> ValidationOutcome:
        """Create a failed outcome from a non-empty list of violations."""
        return cls(violations=tuple(violations))


@dataclass(frozen=True)
class CompartmentOutcome:
    """Result of building the compartment grid."""

    compartments: tuple[Compartment, ...] = field(default_factory=tuple)
    violations: tuple[ConstraintViolation, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        """Check if every requested cell could be built."""
        return len(self.violations) == 0
