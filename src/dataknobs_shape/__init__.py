"""DataKnobs Shape package - recursive schema validation for nested data.

Schemas are nested literals whose leaves are validators built from type
predicates and conditions. ``validate`` walks a schema and a data value in
lock-step and reports every violation in one pass, each keyed by its dotted
path.

Example:
    ```python
    from dataknobs_shape import (
        is_any_of, is_array, is_integer, is_object, is_string,
        in_list, in_range, not_empty, of_shape, of_type, required,
        to_error_map, validate,
    )

    schema = {
        "name": is_string.and_(not_empty, required),
        "role": is_string.and_(in_list(["admin", "user"])),
        "age": is_integer.and_(in_range(0, 150)),
        "tags": is_array.and_(of_type(is_string), in_range(upper=10)),
        "owner": is_any_of([is_string, {"id": is_integer.and_(required)}]),
        "address": {"city": is_string.and_(required)},
        "labels": {"*": is_string},
    }

    result = await validate(schema, payload)
    if result is not True:
        return to_error_map(result)   # {"name": "value is required but missing", ...}
    ```
"""

from .conditions import (
    PRIORITY_CUSTOM,
    PRIORITY_REFINEMENT,
    PRIORITY_REQUIRED,
    PRIORITY_STRUCTURAL,
    Condition,
    Custom,
    InList,
    NotEmpty,
    OfShape,
    OfType,
    Range,
    Required,
    condition,
    in_list,
    in_range,
    not_empty,
    of_shape,
    of_type,
    required,
)
from .exceptions import (
    InvalidSchemaNodeError,
    SchemaError,
    ShapeError,
    ShapeValidationError,
    WildcardConflictError,
)
from .result import UNDEFINED, FieldError, ValidationResult, is_valid, to_error_map
from .schema import (
    WILDCARD_KEY,
    BranchNode,
    LeafNode,
    SchemaNode,
    UnionNode,
    WildcardNode,
    compile_schema,
)
from .types import (
    is_array,
    is_boolean,
    is_custom,
    is_function,
    is_integer,
    is_number,
    is_object,
    is_string,
)
from .union import is_any_of
from .validation import ensure_valid, validate, validate_sync, walk
from .validator import Validator, compose_type

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Entry points
    "validate",
    "validate_sync",
    "ensure_valid",
    "walk",
    # Results
    "UNDEFINED",
    "FieldError",
    "ValidationResult",
    "is_valid",
    "to_error_map",
    # Validators and type predicates
    "Validator",
    "compose_type",
    "is_string",
    "is_boolean",
    "is_number",
    "is_integer",
    "is_function",
    "is_array",
    "is_object",
    "is_custom",
    "is_any_of",
    # Conditions
    "Condition",
    "Required",
    "NotEmpty",
    "InList",
    "Range",
    "OfType",
    "OfShape",
    "Custom",
    "required",
    "not_empty",
    "in_list",
    "in_range",
    "of_type",
    "of_shape",
    "condition",
    "PRIORITY_REQUIRED",
    "PRIORITY_REFINEMENT",
    "PRIORITY_CUSTOM",
    "PRIORITY_STRUCTURAL",
    # Schema nodes
    "SchemaNode",
    "LeafNode",
    "BranchNode",
    "WildcardNode",
    "UnionNode",
    "compile_schema",
    "WILDCARD_KEY",
    # Exceptions
    "ShapeError",
    "SchemaError",
    "WildcardConflictError",
    "InvalidSchemaNodeError",
    "ShapeValidationError",
]
