"""Conditions that refine a type predicate.

Each condition carries an integer priority. Higher priorities run first, so
``required`` (3) always reports before refinements such as ``not_empty`` or
``in_range`` (2), custom checks (1), and the structural conditions
``of_type``/``of_shape`` (0) that recurse into the value.

Every condition except ``required`` passes on an absent value.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from numbers import Real
from typing import TYPE_CHECKING, Any

from .exceptions import SchemaError
from .result import UNDEFINED, FieldError, LeafResult, collect, finalize, join_path, resolve_check

if TYPE_CHECKING:
    from .schema import SchemaNode

PRIORITY_REQUIRED = 3
PRIORITY_REFINEMENT = 2
PRIORITY_CUSTOM = 1
PRIORITY_STRUCTURAL = 0

REQUIRED_MESSAGE = "value is required but missing"
EMPTY_STRING_MESSAGE = "string value can not be empty"


class Condition(ABC):
    """Base class for all conditions."""

    priority: int = PRIORITY_CUSTOM
    # Only ``Required`` inspects absent values
    skips_undefined: bool = True

    @abstractmethod
    async def check(self, value: Any, prefix: str = "") -> LeafResult:
        """Check a present value.

        Args:
            value: Value that already passed the type predicate
            prefix: Dotted path of the value, for conditions that recurse

        Returns:
            ``True``, a message, or a list of path-addressed errors
        """
        pass

    async def __call__(self, value: Any = UNDEFINED, prefix: str = "") -> LeafResult:
        if value is UNDEFINED and self.skips_undefined:
            return True
        return await self.check(value, prefix)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Required(Condition):
    """Value must be present."""

    priority = PRIORITY_REQUIRED
    skips_undefined = False

    async def check(self, value: Any, prefix: str = "") -> LeafResult:
        if value is UNDEFINED:
            return REQUIRED_MESSAGE
        return True


class NotEmpty(Condition):
    """String value must not be empty."""

    priority = PRIORITY_REFINEMENT

    async def check(self, value: Any, prefix: str = "") -> LeafResult:
        if isinstance(value, str) and value == "":
            return EMPTY_STRING_MESSAGE
        return True


class InList(Condition):
    """Value must be one of an enumerated set.

    Members are rendered with ``str()`` in the message, so ``True`` and
    ``None`` appear as ``True`` and ``None`` rather than ``true`` and ``null``.
    """

    priority = PRIORITY_REFINEMENT

    def __init__(self, allowed: Iterable[Any]):
        self.allowed = tuple(allowed)
        self.message = (
            f"value does not match accepted values: [{','.join(str(v) for v in self.allowed)}]"
        )

    async def check(self, value: Any, prefix: str = "") -> LeafResult:
        if value in self.allowed:
            return True
        return self.message

    def __repr__(self) -> str:
        return f"InList({list(self.allowed)!r})"


class Range(Condition):
    """Number, or array length, must fall within bounds.

    Either bound may be omitted. Bounds are inclusive. Any other value,
    including booleans and NaN, fails as not a number.
    """

    priority = PRIORITY_REFINEMENT

    def __init__(self, lower: Real | None = None, upper: Real | None = None):
        """Initialize range condition.

        Args:
            lower: Minimum value or length, ``None`` for unbounded
            upper: Maximum value or length, ``None`` for unbounded

        Raises:
            SchemaError: If ``lower`` is greater than ``upper``
        """
        if lower is not None and upper is not None and lower > upper:
            raise SchemaError(
                f"range lower bound ({lower}) cannot be greater than upper bound ({upper})",
                context={"lower": lower, "upper": upper},
            )
        self.lower = lower
        self.upper = upper

    async def check(self, value: Any, prefix: str = "") -> LeafResult:
        from .types import NUMBER_MESSAGE

        if isinstance(value, (list, tuple)):
            measured, subject = len(value), "array size"
        elif isinstance(value, Real) and not isinstance(value, bool) and not math.isnan(value):
            measured, subject = value, "value"
        else:
            # Reachable through unions and custom predicates
            return NUMBER_MESSAGE

        if self.lower is not None and self.upper is not None:
            if self.lower <= measured <= self.upper:
                return True
            return f"{subject} falls outside of range ({self.lower}, {self.upper})"
        if self.upper is not None and measured > self.upper:
            return f"{subject} must be less than or equal to {self.upper}"
        if self.lower is not None and measured < self.lower:
            return f"{subject} must be greater than or equal to {self.lower}"
        return True

    def __repr__(self) -> str:
        return f"Range({self.lower!r}, {self.upper!r})"


class OfType(Condition):
    """Every element of an array must match a schema node.

    All element failures are reported, each under its index. An empty array
    passes.
    """

    priority = PRIORITY_STRUCTURAL

    def __init__(self, element: Any):
        from .schema import compile_schema

        self.element: SchemaNode = compile_schema(element)

    async def check(self, value: Any, prefix: str = "") -> LeafResult:
        from .types import ARRAY_MESSAGE
        from .validation import walk

        if not isinstance(value, (list, tuple)):
            return ARRAY_MESSAGE

        results: list[FieldError] = []
        for index, item in enumerate(value):
            path = join_path(prefix, index)
            collect(results, await walk(self.element, item, path), path)
        return finalize(results)

    def __repr__(self) -> str:
        return f"OfType({self.element!r})"


class OfShape(Condition):
    """Object value must match a nested schema."""

    priority = PRIORITY_STRUCTURAL

    def __init__(self, shape: Any):
        from .schema import compile_schema

        self.shape: SchemaNode = compile_schema(shape)

    async def check(self, value: Any, prefix: str = "") -> LeafResult:
        from .validation import walk

        return await walk(self.shape, value, prefix)

    def __repr__(self) -> str:
        return f"OfShape({self.shape!r})"


class Custom(Condition):
    """Condition backed by a user function returning ``True`` or a message.

    The function may be sync or async.
    """

    def __init__(
        self,
        check_func: Callable[[Any], Any],
        priority: int = PRIORITY_CUSTOM,
    ):
        self.check_func = check_func
        self.priority = priority

    async def check(self, value: Any, prefix: str = "") -> LeafResult:
        return await resolve_check(self.check_func(value))

    def __repr__(self) -> str:
        name = getattr(self.check_func, "__name__", repr(self.check_func))
        return f"Custom({name}, priority={self.priority})"


required = Required()
not_empty = NotEmpty()


def in_list(allowed: Iterable[Any]) -> InList:
    """Restrict a value to the members of ``allowed``."""
    return InList(allowed)


def in_range(lower: Real | None = None, upper: Real | None = None) -> Range:
    """Bound a number, or the length of an array."""
    return Range(lower, upper)


def of_type(element: Any) -> OfType:
    """Apply ``element`` (any schema node) to every item of an array."""
    return OfType(element)


def of_shape(shape: Any) -> OfShape:
    """Validate an object against a nested schema."""
    return OfShape(shape)


def condition(priority: int = PRIORITY_CUSTOM) -> Callable[[Callable[[Any], Any]], Custom]:
    """Decorator turning a check function into a ``Custom`` condition.

    Example:
        ```python
        @condition(priority=2)
        def lowercase(value):
            return True if value == value.lower() else "value must be lowercase"

        handle = is_string.and_(lowercase, required)
        ```
    """

    def decorator(func: Callable[[Any], Any]) -> Custom:
        return Custom(func, priority=priority)

    return decorator
