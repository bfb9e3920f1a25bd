"""Union combinator: accept a value matching any of several alternatives."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .exceptions import InvalidSchemaNodeError
from .schema import compile_schema
from .validator import Validator, compose_type


def is_any_of(alternatives: Iterable[Any]) -> Validator:
    """Build a validator accepting the first alternative that succeeds.

    Alternatives are tried in order and evaluation stops at the first
    success. Mapping alternatives are checked through the traversal, so an
    object literal behaves like ``is_object.and_(of_shape(...))`` here. An
    absent value passes; attach ``required`` to forbid that.

    Args:
        alternatives: Schema nodes to try, in order

    Returns:
        Validator that accepts further conditions via ``and_``

    Raises:
        InvalidSchemaNodeError: If ``alternatives`` is empty
    """
    from .validation import match_any

    alternatives = list(alternatives)
    if not alternatives:
        raise InvalidSchemaNodeError("<union>", alternatives)
    node = compile_schema(alternatives)

    async def any_of(value: Any) -> bool | str:
        return await match_any(node, value)

    return compose_type(any_of)
