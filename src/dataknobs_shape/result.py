"""Validation result types.

A validation call yields either the literal ``True`` or a non-empty list of
``FieldError`` entries, each addressing one violation by its dotted path.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Union

PATH_SEPARATOR = "."
CHECK_FAILED_MESSAGE = "value failed validation"
UNEXPECTED_RESULT_MESSAGE = "custom check returned unexpected type: {type_name}"


class _Undefined:
    """Marker for a value that is absent, as opposed to present and ``None``."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __copy__(self) -> _Undefined:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Undefined:
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()


@dataclass(frozen=True)
class FieldError:
    """One nonconformity found in the data.

    Attributes:
        key: Dotted path to the failing value (array indices as decimal strings).
            Empty when the failure is at the root.
        error: Human-readable message
    """

    key: str
    error: str

    def to_dict(self) -> dict[str, str]:
        """Convert to a plain ``{"key": ..., "error": ...}`` dictionary."""
        return {"key": self.key, "error": self.error}


ValidationResult = Union[bool, list[FieldError]]

# What a leaf validator may hand back before the traversal attaches a path
LeafResult = Union[bool, str, list[FieldError]]


def join_path(prefix: str, key: Any) -> str:
    """Append ``key`` to a dotted ``prefix``."""
    return f"{prefix}{PATH_SEPARATOR}{key}" if prefix else str(key)


def collect(results: list[FieldError], outcome: LeafResult, key: str) -> None:
    """Fold a node outcome into ``results``.

    A message string becomes a single entry at ``key``; a list of entries is
    appended as-is; ``True`` adds nothing.
    """
    if isinstance(outcome, str):
        results.append(FieldError(key=key, error=outcome))
    elif isinstance(outcome, list):
        results.extend(outcome)


def finalize(results: list[FieldError]) -> ValidationResult:
    """Normalize an accumulated list: empty becomes ``True``."""
    return results if results else True


async def resolve(outcome: Any) -> Any:
    """Await ``outcome`` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(outcome):
        outcome = await outcome
    return outcome


async def resolve_check(outcome: Any) -> LeafResult:
    """Resolve a user check result into ``True``, a message or an error list.

    A bare ``False`` gets a generic message. Any other value that is not
    ``True``, a string or a list (``None``, ``0``, a dict) is a failure too.
    An empty list counts as success.
    """
    outcome = await resolve(outcome)
    if outcome is True or isinstance(outcome, str):
        return outcome
    if isinstance(outcome, list):
        return finalize(outcome)
    if outcome is False:
        return CHECK_FAILED_MESSAGE
    return UNEXPECTED_RESULT_MESSAGE.format(type_name=type(outcome).__name__)


def is_valid(result: LeafResult) -> bool:
    """Check whether a validation outcome signals success."""
    return result is True


def to_error_map(errors: ValidationResult) -> dict[str, str]:
    """Transform an error list into a ``{dotted_path: message}`` mapping.

    Args:
        errors: Result of ``validate``. ``True`` maps to an empty dict.

    Returns:
        Dictionary keyed by path, in the order the errors were reported
    """
    if errors is True:
        return {}
    return {item.key: item.error for item in errors}  # type: ignore[union-attr]
