"""Composed validators: a type predicate plus ordered conditions.

A ``Validator`` is immutable. ``and_`` returns a new validator with the extra
conditions appended and the whole set re-sorted by priority (highest first,
ties keep the order they were supplied in). Sorting happens once, when the
validator is built, not on every call.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from .conditions import Condition, Custom
from .exceptions import SchemaError
from .result import UNDEFINED, LeafResult, resolve_check

logger = logging.getLogger(__name__)

PredicateFunc = Callable[[Any], "bool | str | Awaitable[bool | str]"]


def _as_condition(candidate: Any) -> Condition:
    if isinstance(candidate, Condition):
        return candidate
    if isinstance(candidate, Validator):
        message = f"validator {candidate!r} cannot be used as a condition"
    elif not callable(candidate):
        message = f"condition is not callable: {candidate!r}"
    else:
        return Custom(candidate)

    logger.debug("Rejected condition %r", candidate)
    raise SchemaError(message, context={"condition_type": type(candidate).__name__})


class Validator:
    """A type predicate bound to an ordered list of conditions.

    Calling a validator evaluates the predicate first. If the predicate fails
    its message is returned and no condition runs. Otherwise the conditions
    run in priority order and the first failure is returned.

    Example:
        ```python
        from dataknobs_shape import is_string, required, not_empty

        name = is_string.and_(not_empty, required)
        await name("")         # 'string value can not be empty'
        await name(UNDEFINED)  # 'value is required but missing'
        ```
    """

    __slots__ = ("_predicate", "_conditions", "_name")

    def __init__(
        self,
        predicate: Callable[[Any], Awaitable[bool | str]],
        conditions: Iterable[Condition] = (),
        name: str | None = None,
    ):
        """Initialize a validator.

        Args:
            predicate: Async type check returning ``True`` or a message
            conditions: Conditions to run after the predicate passes
            name: Display name used in ``repr``
        """
        self._predicate = predicate
        self._conditions = tuple(
            sorted(conditions, key=lambda condition: condition.priority, reverse=True)
        )
        self._name = name or getattr(predicate, "__name__", "validator")

    @property
    def name(self) -> str:
        return self._name

    @property
    def conditions(self) -> tuple[Condition, ...]:
        """Attached conditions, in execution order."""
        return self._conditions

    def and_(self, *conditions: Condition | Callable[[Any], Any]) -> Validator:
        """Return a new validator with ``conditions`` attached.

        Plain callables are wrapped as ``Custom`` conditions.

        Raises:
            SchemaError: If a condition is neither a Condition nor callable
        """
        added = tuple(_as_condition(condition) for condition in conditions)
        return Validator(self._predicate, self._conditions + added, self._name)

    def __and__(self, other: Condition | Callable[[Any], Any]) -> Validator:
        return self.and_(other)

    async def __call__(self, value: Any = UNDEFINED, prefix: str = "") -> LeafResult:
        outcome = await self._predicate(value)
        if outcome is not True:
            return outcome

        for condition in self._conditions:
            outcome = await condition(value, prefix)
            if outcome is not True:
                return outcome
        return True

    def __repr__(self) -> str:
        if not self._conditions:
            return f"Validator({self._name})"
        return f"Validator({self._name}, conditions={list(self._conditions)!r})"


def compose_type(base: PredicateFunc | Validator, name: str | None = None) -> Validator:
    """Adapt a ``(value) -> True | message`` function into a ``Validator``.

    The function may be sync or async. Absent values (``UNDEFINED``) pass
    without calling it; forbidding absence is the job of ``required``.
    Usable as a decorator.

    Args:
        base: Check function, or an existing validator (returned unchanged)
        name: Optional display name, defaults to the function name

    Returns:
        Validator with no conditions attached
    """
    if isinstance(base, Validator):
        return base

    async def predicate(value: Any) -> bool | str:
        if value is UNDEFINED:
            return True
        return await resolve_check(base(value))

    predicate.__name__ = name or getattr(base, "__name__", "predicate")
    return Validator(predicate)
