"""Schema nodes and schema compilation.

Schemas are written as nested literals. ``compile_schema`` turns such a
literal into a tree of tagged nodes that the traversal dispatches on:

- ``LeafNode``: a validator (composed validator, bare predicate or union)
- ``BranchNode``: a mapping of declared keys to child nodes; optional
- ``WildcardNode``: a mapping whose only key is ``"*"``; its child applies to
  every key present in the data
- ``UnionNode``: ordered alternatives, first match wins (written as a list)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .conditions import Condition
from .exceptions import InvalidSchemaNodeError, SchemaError, WildcardConflictError
from .result import UNDEFINED, join_path
from .types import is_custom
from .validator import Validator

logger = logging.getLogger(__name__)

WILDCARD_KEY = "*"


class SchemaNode:
    """Base class for compiled schema nodes."""

    __slots__ = ()


@dataclass(frozen=True)
class LeafNode(SchemaNode):
    validator: Validator


@dataclass(frozen=True)
class BranchNode(SchemaNode):
    """Declared keys in declaration order."""

    children: tuple[tuple[Any, SchemaNode], ...]

    @property
    def keys(self) -> list[Any]:
        return [key for key, _ in self.children]


@dataclass(frozen=True)
class WildcardNode(SchemaNode):
    node: SchemaNode


@dataclass(frozen=True)
class UnionNode(SchemaNode):
    alternatives: tuple[SchemaNode, ...]


def compile_schema(raw: Any, path: str = "") -> SchemaNode:
    """Compile a schema literal into tagged nodes.

    Args:
        raw: Schema literal. Validators become leaves, mappings become
            branches (or wildcards), lists and tuples become unions, and
            other callables are wrapped with ``is_custom``. Already compiled
            nodes are returned unchanged.
        path: Dotted path of ``raw`` within the enclosing schema, for errors

    Returns:
        Compiled schema node

    Raises:
        WildcardConflictError: If ``"*"`` is declared alongside other keys
        InvalidSchemaNodeError: If a node is missing or of an unusable kind
        SchemaError: If a bare condition is used where a node is expected
    """
    if isinstance(raw, SchemaNode):
        return raw
    if isinstance(raw, Validator):
        return LeafNode(raw)

    if isinstance(raw, Mapping):
        if WILDCARD_KEY in raw:
            if len(raw) > 1:
                keys = [str(key) for key in raw]
                logger.debug("Wildcard with siblings at '%s': %s", path, keys)
                raise WildcardConflictError(path, keys)
            return WildcardNode(compile_schema(raw[WILDCARD_KEY], join_path(path, WILDCARD_KEY)))
        return BranchNode(
            tuple((key, compile_schema(value, join_path(path, key))) for key, value in raw.items())
        )

    if isinstance(raw, (list, tuple)) and raw:
        return UnionNode(
            tuple(compile_schema(alt, join_path(path, index)) for index, alt in enumerate(raw))
        )

    if isinstance(raw, Condition):
        raise SchemaError(
            f"condition {raw!r} at {path or '<root>'} must be attached to a type with and_()",
            context={"path": path},
        )

    # Classes are callable but are not predicates
    if raw is not None and raw is not UNDEFINED and callable(raw) and not isinstance(raw, type):
        return LeafNode(is_custom(raw))

    logger.debug("Unusable schema value at '%s': %r", path, raw)
    raise InvalidSchemaNodeError(path or "<root>", raw)
