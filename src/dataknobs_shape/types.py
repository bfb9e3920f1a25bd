"""Type predicates.

Each predicate is a ``Validator`` with no conditions attached. Absent values
always pass; a present value of the wrong kind yields a fixed message with no
path information (the traversal attaches the path).
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from numbers import Integral, Real
from typing import Any

from .validator import Validator, compose_type

STRING_MESSAGE = "value is not a string"
BOOLEAN_MESSAGE = "value is not a boolean"
NUMBER_MESSAGE = "value is not a number"
INTEGER_MESSAGE = "value is not an integer"
FUNCTION_MESSAGE = "value is not a function"
ARRAY_MESSAGE = "value is not an array"
OBJECT_MESSAGE = "value is not an object"


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a number here
    return isinstance(value, Real) and not isinstance(value, bool)


def is_plain_object(value: Any) -> bool:
    """Check for a keyed record (rejects ``None``, arrays and scalars)."""
    return isinstance(value, Mapping)


@compose_type
def is_string(value: Any) -> bool | str:
    return True if isinstance(value, str) else STRING_MESSAGE


@compose_type
def is_boolean(value: Any) -> bool | str:
    return True if isinstance(value, bool) else BOOLEAN_MESSAGE


@compose_type
def is_number(value: Any) -> bool | str:
    return True if _is_number(value) else NUMBER_MESSAGE


@compose_type
def is_integer(value: Any) -> bool | str:
    if isinstance(value, Integral) and not isinstance(value, bool):
        return True
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return True
    return INTEGER_MESSAGE


@compose_type
def is_function(value: Any) -> bool | str:
    return True if callable(value) else FUNCTION_MESSAGE


@compose_type
def is_array(value: Any) -> bool | str:
    return True if isinstance(value, (list, tuple)) else ARRAY_MESSAGE


@compose_type
def is_object(value: Any) -> bool | str:
    return True if is_plain_object(value) else OBJECT_MESSAGE


def is_custom(check: Callable[[Any], Any]) -> Validator:
    """Wrap a user ``(value) -> True | message`` function as a type predicate.

    The function may be a coroutine function; its result is awaited before
    being compared to ``True``.

    Example:
        ```python
        async def known_user(value):
            return True if await users.exists(value) else "unknown user"

        schema = {"owner": is_custom(known_user).and_(required)}
        ```
    """
    return compose_type(check, name=f"custom:{getattr(check, '__name__', 'check')}")
