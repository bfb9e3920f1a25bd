"""Tests for the recursive traversal."""

import asyncio

import pytest

from dataknobs_shape import (
    FieldError,
    SchemaError,
    ShapeValidationError,
    WildcardConflictError,
    ensure_valid,
    in_range,
    is_any_of,
    is_array,
    is_boolean,
    is_custom,
    is_integer,
    is_number,
    is_object,
    is_string,
    of_shape,
    of_type,
    required,
    to_error_map,
    validate,
    validate_sync,
)


def errors(*pairs):
    return [FieldError(key=key, error=error) for key, error in pairs]


class TestNestedSchema:
    """Test optional nested branches."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", [
        {},
        {"varA": True},
        {"varA": True, "b": {}},
        {"varA": True, "b": {"varB": True}},
        {"b": {"c": {"varC": True}}},
    ])
    async def test_valid_data(self, nested_schema, data):
        assert await validate(nested_schema, data) is True

    @pytest.mark.asyncio
    async def test_deep_type_error(self, nested_schema):
        result = await validate(nested_schema, {"b": {"c": {"varC": "true"}}})
        assert result == errors(("b.c.varC", "value is not a boolean"))

    @pytest.mark.asyncio
    async def test_errors_in_depth_first_order(self, nested_schema):
        data = {"varA": "true", "b": {"varB": "true", "c": {"varC": "true"}}}
        assert await validate(nested_schema, data) == errors(
            ("varA", "value is not a boolean"),
            ("b.varB", "value is not a boolean"),
            ("b.c.varC", "value is not a boolean"),
        )

    @pytest.mark.asyncio
    async def test_absent_branch_is_not_an_error(self):
        schema = {"a": is_boolean, "b": {"c": is_boolean}}
        assert await validate(schema, {"a": True}) is True


class TestRequiredInBranches:
    schema = {
        "varA": is_boolean,
        "b": {
            "varB": is_boolean,
            "c": {"varC": is_boolean.and_(required)},
        },
    }

    @pytest.mark.asyncio
    async def test_not_required_if_parent_absent(self):
        assert await validate(self.schema, {"varA": True, "b": {"varB": True}}) is True

    @pytest.mark.asyncio
    async def test_required_if_parent_present(self):
        schema = {"b": {"c": {"varC": is_boolean.and_(required)}}}
        assert await validate(schema, {"b": {"c": {}}}) == errors(
            ("b.c.varC", "value is required but missing"),
        )

    @pytest.mark.asyncio
    async def test_required_object_validator(self):
        schema = {"owner": is_object.and_(of_shape({"id": is_integer}), required)}
        assert await validate(schema, {}) == errors(("owner", "value is required but missing"))


class TestEdgeCases:
    @pytest.mark.asyncio
    async def test_array_where_object_expected(self):
        schema = {"b": {"c": {}}}
        assert await validate(schema, {"b": {"c": []}}) == errors(
            ("b.c", "value is not an object"),
        )

    @pytest.mark.asyncio
    async def test_null_where_object_expected(self):
        assert await validate({"b": {"c": is_string}}, {"b": None}) == errors(
            ("b", "value is not an object"),
        )

    @pytest.mark.asyncio
    async def test_root_data_not_an_object(self):
        assert await validate({"a": is_string}, 5) == errors(("", "value is not an object"))

    @pytest.mark.asyncio
    async def test_validator_as_whole_schema(self):
        schema = is_object.and_(
            of_shape({"b": {"c": {"varC": is_boolean.and_(required)}}}),
            required,
        )
        assert await validate(schema, {"b": {"c": {}}}) == errors(
            ("b.c.varC", "value is required but missing"),
        )

    @pytest.mark.asyncio
    async def test_single_predicate_schema(self):
        assert await validate(is_string, "5") is True

    @pytest.mark.asyncio
    async def test_single_custom_schema_failure(self):
        async def reject(value):
            return "test fail"

        assert await validate(is_custom(reject), {}) == errors(("", "test fail"))

    @pytest.mark.asyncio
    async def test_union_as_whole_schema(self):
        result = await validate(is_any_of([is_string, is_integer]), 4.5)
        assert result == errors(("", "value failed to match one of the the allowed types"))

    @pytest.mark.asyncio
    async def test_prefix_roots_the_paths(self):
        result = await validate({"a": is_string}, {"a": 1, "z": 0}, prefix="body")
        assert result == errors(
            ("body.a", "value is not a string"),
            ("body.z", "extraneous key found"),
        )

    @pytest.mark.asyncio
    async def test_list_in_schema_is_a_union(self):
        schema = {"id": [is_string, is_integer]}
        assert await validate(schema, {"id": 3}) is True
        assert await validate(schema, {"id": 3.5}) == errors(
            ("id", "value failed to match one of the the allowed types"),
        )

    @pytest.mark.asyncio
    async def test_plain_function_leaf(self):
        schema = {"code": lambda value: True if len(value) == 3 else "code must have 3 characters"}
        assert await validate(schema, {"code": "abc"}) is True
        assert await validate(schema, {"code": "ab"}) == errors(
            ("code", "code must have 3 characters"),
        )

    @pytest.mark.asyncio
    async def test_range_after_union_rejects_strings(self):
        schema = {"v": is_any_of([is_string, is_integer]).and_(in_range(0, 10))}
        assert await validate(schema, {"v": 4}) is True
        assert await validate(schema, {"v": "abc"}) == errors(("v", "value is not a number"))

    @pytest.mark.asyncio
    async def test_custom_returning_none_fails_in_every_position(self):
        check = is_custom(lambda value: None if value != "ok" else True)
        message = "custom check returned unexpected type: NoneType"
        assert await validate({"v": check}, {"v": "ok"}) is True
        assert await validate({"v": check}, {"v": "bad"}) == errors(("v", message))
        assert await validate(check, "bad") == errors(("", message))
        assert await validate({"v": [check]}, {"v": "bad"}) == errors(
            ("v", "value failed to match one of the the allowed types"),
        )

    @pytest.mark.asyncio
    async def test_non_string_keys_in_paths(self):
        schema = {"*": is_string}
        assert await validate(schema, {1: "a", 2: 3}) == errors(("2", "value is not a string"))

    @pytest.mark.asyncio
    async def test_idempotent(self, item_shape):
        schema = {"items": is_array.and_(of_type(item_shape))}
        data = {"items": [{"foo": 1}, {}], "extra": True}
        first = await validate(schema, data)
        second = await validate(schema, data)
        assert first == second
        assert first is not True


class TestExtraneousKeys:
    @pytest.mark.asyncio
    async def test_single_extraneous_key(self):
        assert await validate({"a": is_boolean}, {"a": True, "b": 1}) == errors(
            ("b", "extraneous key found"),
        )

    @pytest.mark.asyncio
    async def test_extraneous_against_nested_schema(self, nested_schema):
        assert await validate(nested_schema, {"extraneous": "hello"}) == errors(
            ("extraneous", "extraneous key found"),
        )

    @pytest.mark.asyncio
    async def test_extraneous_after_declared_keys(self):
        schema = {"myObject": {"bar": is_boolean}}
        data = {
            "myValue": True,
            "myArray": [],
            "myObject": {"foo": False, "bar": True},
        }
        assert await validate(schema, data) == errors(
            ("myObject.foo", "extraneous key found"),
            ("myValue", "extraneous key found"),
            ("myArray", "extraneous key found"),
        )


class TestWildcard:
    @pytest.mark.asyncio
    async def test_wildcard_applies_to_every_key(self):
        schema = {"a": {"*": {"c": is_number}}}
        data = {"a": {"101": {}, "102": {}}}
        assert await validate(schema, data) is True

    @pytest.mark.asyncio
    async def test_wildcard_errors_in_data_order(self):
        schema = {"scores": {"*": is_integer.and_(required)}}
        data = {"scores": {"bob": 1.5, "amy": 3, "cy": "x"}}
        assert await validate(schema, data) == errors(
            ("scores.bob", "value is not an integer"),
            ("scores.cy", "value is not an integer"),
        )

    @pytest.mark.asyncio
    async def test_wildcard_never_reports_extraneous(self):
        assert await validate({"*": is_string}, {"x": "1", "y": "2"}) is True

    @pytest.mark.asyncio
    async def test_wildcard_requires_object(self):
        assert await validate({"a": {"*": is_string}}, {"a": [1]}) == errors(
            ("a", "value is not an object"),
        )

    @pytest.mark.asyncio
    async def test_wildcard_with_siblings_aborts(self):
        schema = {"a": {"c": {}, "*": {"c": is_number}}}
        with pytest.raises(WildcardConflictError) as exc_info:
            await validate(schema, {"a": {"1234": {}}})
        assert str(exc_info.value) == "Schema wildcard conflict. A wildcard can not have sibling keys"
        assert exc_info.value.context["path"] == "a"

    def test_wildcard_conflict_inside_shape(self):
        with pytest.raises(SchemaError, match="wildcard conflict"):
            of_shape({"x": is_string, "*": is_string})


class TestComplexExample:
    @pytest.mark.asyncio
    async def test_zoo(self):
        schema = {
            "zoo": {
                "hours": is_any_of([is_string, is_integer]),
                "animals": is_array.and_(
                    of_type({
                        "age": is_integer.and_(required),
                        "snake": is_any_of([
                            is_string,
                            is_boolean,
                            {"food": is_object.and_(of_shape({"rat": is_boolean}), required)},
                        ]).and_(required),
                    })
                ),
            },
        }
        data = {
            "zoo": {
                "hours": 4.5,
                "animals": [
                    {"snake": {"food": {"rat": True}}},
                    {"age": 4, "snake": "happy"},
                    {"age": 4, "snake": 50},
                ],
            },
        }
        assert await validate(schema, data) == errors(
            ("zoo.hours", "value failed to match one of the the allowed types"),
            ("zoo.animals.0.age", "value is required but missing"),
            ("zoo.animals.2.snake", "value failed to match one of the the allowed types"),
        )


class TestAsyncPredicates:
    @pytest.mark.asyncio
    async def test_sequential_evaluation_order(self):
        seen = []

        async def record(value):
            await asyncio.sleep(0.01 if value == "slow" else 0)
            seen.append(value)
            return True

        schema = {"a": is_custom(record), "b": is_array.and_(of_type(is_custom(record)))}
        assert await validate(schema, {"a": "slow", "b": ["x", "slow", "y"]}) is True
        assert seen == ["slow", "x", "slow", "y"]


class TestHelpers:
    def test_validate_sync(self):
        assert validate_sync({"a": is_boolean}, {"a": 1}) == errors(
            ("a", "value is not a boolean"),
        )

    @pytest.mark.asyncio
    async def test_ensure_valid_returns_data(self):
        data = {"a": True}
        assert await ensure_valid({"a": is_boolean}, data) is data

    @pytest.mark.asyncio
    async def test_ensure_valid_raises_with_errors(self):
        with pytest.raises(ShapeValidationError) as exc_info:
            await ensure_valid({"a": is_boolean.and_(required)}, {"b": 1})
        error = exc_info.value
        assert error.errors == errors(
            ("a", "value is required but missing"),
            ("b", "extraneous key found"),
        )
        assert error.context["errors"] == {
            "a": "value is required but missing",
            "b": "extraneous key found",
        }

    @pytest.mark.asyncio
    async def test_error_map_from_result(self):
        result = await validate({"a": is_string, "b": {"c": is_string}}, {"a": 1, "b": {"c": 2}})
        assert to_error_map(result) == {
            "a": "value is not a string",
            "b.c": "value is not a string",
        }
