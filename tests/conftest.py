"""Pytest configuration for dataknobs_shape tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_shape import (  # noqa: E402
    is_array,
    is_boolean,
    is_integer,
    is_number,
    is_object,
    is_string,
    not_empty,
    of_shape,
    required,
)


@pytest.fixture
def nested_schema():
    """Three-level schema of optional booleans."""
    return {
        "varA": is_boolean,
        "b": {
            "varB": is_boolean,
            "c": {
                "varC": is_boolean,
            },
        },
    }


@pytest.fixture
def item_shape():
    """Element shape used by array-of-objects tests."""
    return {
        "foo": is_string.and_(required),
        "bar": is_string.and_(required),
        "cool": is_object.and_(
            of_shape({
                "hot": is_string.and_(required),
                "warm": is_string.and_(not_empty),
            }),
            required,
        ),
    }


@pytest.fixture
def all_types():
    """Every built-in type predicate, keyed by kind."""
    return {
        "string": is_string,
        "boolean": is_boolean,
        "number": is_number,
        "integer": is_integer,
        "array": is_array,
        "object": is_object,
    }
