"""Reading product configuration files.

``load_config`` reads a JSON file and validates it against
``ProductConfigSchema``. Every failure is raised as a ``ConfigError``. Schema
errors come back as ``ConstraintViolation`` records whose ``field`` uses the
same paths as the layout validator (``row_heights[1]``,
``compartments[0][2]``), so the CLI reports both kinds the same way.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from configurator.application.config.schema import ProductConfigSchema
from configurator.domain import ConstraintViolation, field_path

# pydantic error context keys that carry the broken limit
LIMIT_KEYS = ("gt", "ge", "lt", "le", "max_length", "expected", "pattern")


class ConfigError(Exception):
    """A configuration that could not be read or does not match the schema.

    Attributes:
        kind: "not_found", "unreadable", "json" or "schema".
        path: The configuration file, when loading from disk.
        line: Line of a JSON syntax error.
        column: Column of a JSON syntax error.
        violations: One record per offending field for schema errors.
    """

    def __init__(
        self,
        message: str,
        kind: str,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
        violations: tuple[ConstraintViolation, ...] = (),
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.path = path
        self.line = line
        self.column = column
        self.violations = violations


def schema_violations(error: ValidationError) -> tuple[ConstraintViolation, ...]:
    """Convert pydantic errors into violations keyed by field path."""
    violations: list[ConstraintViolation] = []
    for err in error.errors():
        ctx = err.get("ctx") or {}
        # a missing field's input is the enclosing object
        actual = None if err["type"] == "missing" else err.get("input")
        violations.append(
            ConstraintViolation(
                field=field_path(*err["loc"]) or "config",
                rule=err["type"],
                limit=next((ctx[key] for key in LIMIT_KEYS if key in ctx), None),
                actual=actual,
                message=err["msg"],
            )
        )
    return tuple(violations)


def _validate(data: Any, path: Path | None = None) -> ProductConfigSchema:
    try:
        return ProductConfigSchema.model_validate(data)
    except ValidationError as e:
        violations = schema_violations(e)
        source = f" in {path}" if path else ""
        lines = [f"Configuration validation failed{source}:"]
        lines.extend(f"  - {violation}" for violation in violations)
        raise ConfigError("\n".join(lines), "schema", path=path, violations=violations) from None


def load_config(path: Path) -> ProductConfigSchema:
    """Load and validate a product configuration from a JSON file.

    Raises:
        ConfigError: If the file is missing or unreadable, is not valid
            JSON, or does not match the schema.

    Example:
        >>> try:
        ...     config = load_config(Path("my-cabinet.json"))
        ... except ConfigError as e:
        ...     for violation in e.violations:
        ...         print(violation)
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}", "not_found", path=path) from None
    except OSError as e:
        raise ConfigError(
            f"Cannot read config file {path}: {e.strerror or e}", "unreadable", path=path
        ) from None

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}",
            "json",
            path=path,
            line=e.lineno,
            column=e.colno,
        ) from None

    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> ProductConfigSchema:
    """Validate a product configuration held in memory.

    Raises:
        ConfigError: If the data does not match the schema.
    """
    return _validate(data)
