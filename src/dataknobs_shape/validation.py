"""Recursive traversal of a schema against data.

The traversal walks schema and data in lock-step, depth first, in schema-key
order (data-key order under a wildcard), and flattens every reported error
into one ordered list keyed by dotted path. Evaluation is strictly
sequential: each key, element and condition completes before the next one
starts, so identical inputs always give identical error lists.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from .exceptions import ShapeValidationError
from .result import (
    UNDEFINED,
    FieldError,
    LeafResult,
    ValidationResult,
    collect,
    finalize,
    join_path,
)
from .schema import BranchNode, LeafNode, SchemaNode, UnionNode, WildcardNode, compile_schema
from .types import OBJECT_MESSAGE, is_plain_object

logger = logging.getLogger(__name__)

EXTRANEOUS_KEY_MESSAGE = "extraneous key found"
UNION_MISMATCH_MESSAGE = "value failed to match one of the the allowed types"


async def walk(node: SchemaNode, data: Any, prefix: str = "") -> LeafResult:
    """Validate ``data`` against a compiled node.

    Args:
        node: Compiled schema node
        data: Value at this position, ``UNDEFINED`` if absent
        prefix: Dotted path of ``data``

    Returns:
        ``True``, a message for the caller to place at ``prefix``, or a
        list of path-addressed errors
    """
    if isinstance(node, LeafNode):
        return await node.validator(data, prefix)
    if isinstance(node, UnionNode):
        return await match_any(node, data, prefix)

    if data is not UNDEFINED and not is_plain_object(data):
        return OBJECT_MESSAGE
    if isinstance(node, WildcardNode):
        return await _walk_wildcard(node, data, prefix)
    return await _walk_branch(node, data, prefix)  # type: ignore[arg-type]


async def _walk_branch(node: BranchNode, data: Any, prefix: str) -> ValidationResult:
    results: list[FieldError] = []
    present = data if data is not UNDEFINED else {}

    for key, child in node.children:
        value = present.get(key, UNDEFINED)
        # Nested mappings are optional: skip them when there is no data
        if value is UNDEFINED and isinstance(child, (BranchNode, WildcardNode)):
            continue
        path = join_path(prefix, key)
        collect(results, await walk(child, value, path), path)

    declared = set(node.keys)
    for key in present:
        if key not in declared:
            results.append(FieldError(key=join_path(prefix, key), error=EXTRANEOUS_KEY_MESSAGE))

    return finalize(results)


async def _walk_wildcard(node: WildcardNode, data: Any, prefix: str) -> ValidationResult:
    results: list[FieldError] = []
    if data is UNDEFINED:
        return True

    logger.debug("Expanding wildcard at '%s' over %d keys", prefix, len(data))
    for key, value in data.items():
        path = join_path(prefix, key)
        collect(results, await walk(node.node, value, path), path)
    return finalize(results)


async def match_any(node: UnionNode, value: Any, prefix: str = "") -> bool | str:
    """Return ``True`` on the first alternative that accepts ``value``."""
    if value is UNDEFINED:
        return True
    for alternative in node.alternatives:
        if await walk(alternative, value, prefix) is True:
            return True
    return UNION_MISMATCH_MESSAGE


async def validate(schema: Any, data: Any, prefix: str = "") -> ValidationResult:
    """Validate ``data`` against ``schema``.

    Returns ``True`` if the data conforms, otherwise a list of ``FieldError``
    entries in depth-first, declared-key order, with extraneous keys after
    the declared keys at each level.

    A single message produced at the root (a leaf schema that fails, or a
    mapping schema given non-object data) is returned as one entry keyed by
    ``prefix``.

    Example:
        ```python
        schema = {
            "name": is_string.and_(not_empty, required),
            "tags": is_array.and_(of_type(is_string)),
            "address": {"city": is_string.and_(required)},
        }
        result = await validate(schema, {"name": "", "extra": 1})
        # [FieldError(key='name', error='string value can not be empty'),
        #  FieldError(key='extra', error='extraneous key found')]
        ```

    Args:
        schema: Schema literal or compiled node
        data: Data to check
        prefix: Dotted path under which ``data`` lives, usually empty

    Returns:
        ``True`` or a non-empty list of errors

    Raises:
        SchemaError: If the schema itself is malformed
    """
    node = compile_schema(schema)
    outcome = await walk(node, data, prefix)

    results: list[FieldError] = []
    collect(results, outcome, prefix)
    logger.debug("Validation at '%s' found %d error(s)", prefix, len(results))
    return finalize(results)


def validate_sync(schema: Any, data: Any, prefix: str = "") -> ValidationResult:
    """Run ``validate`` to completion from synchronous code.

    Must not be called while an event loop is running in this thread.
    """
    return asyncio.run(validate(schema, data, prefix))


async def ensure_valid(schema: Any, data: Any, prefix: str = "") -> Any:
    """Return ``data`` unchanged if it conforms, otherwise raise.

    Raises:
        ShapeValidationError: With the full error list attached
        SchemaError: If the schema itself is malformed
    """
    result = await validate(schema, data, prefix)
    if result is not True:
        raise ShapeValidationError(result)
    return data
