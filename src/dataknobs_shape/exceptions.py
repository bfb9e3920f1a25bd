"""Custom exceptions for the dataknobs_shape package.

This module defines exception types for the shape package, built on the
common exception framework from dataknobs_common.

Two families are kept apart:

- ``SchemaError`` and its subclasses signal a malformed schema. They abort a
  validation call and are never part of a result list.
- ``ShapeValidationError`` is only raised by the opt-in ``ensure_valid`` gate.
  ``validate`` itself reports data problems as its return value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dataknobs_common import ConfigurationError, DataknobsError, ValidationError

if TYPE_CHECKING:
    from .result import FieldError

WILDCARD_CONFLICT_MESSAGE = "Schema wildcard conflict. A wildcard can not have sibling keys"


class ShapeError(DataknobsError):
    """Base exception for the shape package."""

    pass


class SchemaError(ShapeError, ConfigurationError):
    """Raised when a schema definition is invalid."""

    pass


class WildcardConflictError(SchemaError):
    """Raised when a wildcard key is declared next to other keys."""

    def __init__(self, path: str, keys: list[str]):
        self.path = path
        self.keys = keys
        super().__init__(WILDCARD_CONFLICT_MESSAGE, context={"path": path, "keys": keys})


class InvalidSchemaNodeError(SchemaError):
    """Raised when a schema node does not resolve to a usable value."""

    def __init__(self, path: str, value: Any):
        self.path = path
        self.value = value
        super().__init__(
            f"incorrect schema value for {path}",
            context={"path": path, "value_type": type(value).__name__},
        )


class ShapeValidationError(ShapeError, ValidationError):
    """Raised by ``ensure_valid`` when data does not conform to its schema."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        summary = ", ".join(f"{e.key or '<root>'}: {e.error}" for e in errors[:3])
        if len(errors) > 3:
            summary += f" (+{len(errors) - 3} more)"
        super().__init__(
            f"Data failed validation: {summary}",
            context={"errors": {e.key: e.error for e in errors}},
        )


__all__ = [
    "ShapeError",
    "SchemaError",
    "WildcardConflictError",
    "InvalidSchemaNodeError",
    "ShapeValidationError",
    "WILDCARD_CONFLICT_MESSAGE",
]
