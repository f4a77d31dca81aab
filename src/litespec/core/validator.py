"""
Check data objects against a compiled LiteSpec schema.

Validation itself is delegated to ``jsonschema``; LiteSpec's extension
keywords (``permissions``, ``ui``, ``sort``, ``breadcrumb``, ``bsonType``)
are unknown to draft-07 and therefore ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError, UnknownType

from .errors import InvalidSchemaError


@dataclass(frozen=True)
class ValidationIssue:
    """One failed check: where in the data, and why."""

    path: str
    message: str
    keyword: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of ``validate_data``.

    Attributes:
        valid: True when the data satisfies the schema
        errors: Issues sorted by data path, or None when valid
    """

    valid: bool
    errors: list[ValidationIssue] | None = None


def validate_data(schema: dict[str, Any], data: Any) -> ValidationResult:
    """
    Validate ``data`` against a compiled schema.

    Args:
        schema: Output of ``compile_dsl``
        data: Candidate object (already decoded from JSON)

    Returns:
        ValidationResult

    Raises:
        InvalidSchemaError: If the schema itself is not valid draft-07
    """
    try:
        Draft7Validator.check_schema(schema)
        validator = Draft7Validator(schema)
        errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    except SchemaError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "root"
        raise InvalidSchemaError(f"Compiled schema is not valid draft-07 at {location}: {e.message}") from e
    except UnknownType as e:
        raise InvalidSchemaError(f"Compiled schema uses unknown type {e.type!r}") from e

    issues = [
        ValidationIssue(
            path=".".join(str(p) for p in error.absolute_path) or "root",
            message=error.message,
            keyword=str(error.validator),
        )
        for error in errors
    ]
    if issues:
        return ValidationResult(valid=False, errors=issues)
    return ValidationResult(valid=True)
