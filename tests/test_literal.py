"""
Tests for literal conversion of Python values.
"""

import ast
import datetime
import enum
from decimal import Decimal

import pytest

from astquery.exceptions import LiteralConversionError
from astquery.literal import LiteralResult, stringify

pytestmark = pytest.mark.fast


def module_level_helper(x):
    return x + 1


class ModuleLevelClass:
    value = 1


class Color(enum.IntEnum):
    RED = 1


class Label(str):
    pass


class TestScalars:
    def test_reprs(self):
        assert stringify(1).source == "1"
        assert stringify(True).source == "True"
        assert stringify(None).source == "None"
        assert stringify("it's").source == '"it\'s"'
        assert stringify(b"\x00").source == "b'\\x00'"

    def test_special_floats(self):
        assert stringify(float("nan")).source == "float('nan')"
        assert stringify(float("inf")).source == "float('inf')"
        assert stringify(float("-inf")).source == "float('-inf')"
        assert stringify(1.5).source == "1.5"


class TestContainers:
    def test_default_indent_is_two(self):
        assert stringify({"a": 1}).source == "{\n  'a': 1,\n}"

    def test_nested_indent(self):
        source = stringify({"a": [1]}, indent=4).source
        assert source == "{\n    'a': [\n        1,\n    ],\n}"

    def test_zero_indent_is_single_line(self):
        assert stringify({"a": 1, "b": [1, 2]}, indent=0).source == "{'a': 1, 'b': [1, 2]}"

    def test_empty_containers(self):
        assert stringify({}).source == "{}"
        assert stringify([]).source == "[]"
        assert stringify(()).source == "()"
        assert stringify(set()).source == "set()"
        assert stringify(frozenset()).source == "frozenset()"

    def test_single_element_tuple(self):
        assert stringify((1,), indent=0).source == "(1,)"
        assert eval(stringify((1,)).source) == (1,)

    def test_nested_value_evaluates_back(self):
        value = {"users": [{"name": "ada", "tags": ("x", "y")}], "ids": {1, 2}, "frozen": frozenset({3})}
        assert eval(stringify(value).source) == value

    def test_circular_reference(self):
        loop = []
        loop.append(loop)
        result = stringify(loop)
        assert not result.ok
        assert "circular" in result.error


class TestCallablesAndObjects:
    def test_top_level_function_source(self):
        source = stringify(module_level_helper).source
        assert source.startswith("def module_level_helper(x):")
        assert isinstance(ast.parse(source).body[0], ast.FunctionDef)

    def test_top_level_class_source(self):
        source = stringify(ModuleLevelClass).source
        assert source.startswith("class ModuleLevelClass:")

    def test_named_function_inside_container_fails(self):
        result = stringify({"f": module_level_helper})
        assert not result.ok
        assert result.value_type == "dict"

    def test_lambda_inside_container(self):
        double = lambda x: x * 2
        source = stringify({"double": double}).source
        assert "lambda x: x * 2" in source
        assert eval(source)["double"](4) == 8

    def test_repr_that_is_an_expression(self):
        moment = datetime.datetime(2020, 5, 17, 12, 30)
        source = stringify(moment).source
        assert eval(source, {"datetime": datetime}) == moment
        assert stringify(Decimal("1.5")).source == "Decimal('1.5')"

    def test_enum_members_have_no_literal_form(self):
        result = stringify(Color.RED)
        assert not result.ok
        assert result.value_type == "Color"
        assert not stringify({"color": Color.RED}).ok

    def test_builtin_subclass_with_expression_repr(self):
        assert stringify(Label("x")).source == "'x'"

    def test_repr_that_is_not_an_expression(self):
        class Opaque:
            pass

        result = stringify(Opaque())
        assert not result.ok
        assert result.value_type == "Opaque"
        with pytest.raises(LiteralConversionError):
            result.unwrap()


class TestReplacer:
    def test_replacer_overrides_values(self):
        def shout(value, indent, next_):
            if isinstance(value, str):
                return repr(value.upper())
            return next_(value)

        assert eval(stringify({"a": "b", "c": ["d"]}, replacer=shout).source) == {"a": "B", "c": ["D"]}

    def test_replacer_receives_indent(self):
        seen = []

        def record(value, indent, next_):
            seen.append(indent)
            return next_(value)

        stringify([1], replacer=record, indent=3)
        assert seen == ["   ", "   "]

    def test_replacer_none_omits(self):
        def drop_ints(value, indent, next_):
            if isinstance(value, int):
                return None
            return next_(value)

        assert eval(stringify([1, "x", {"n": 2, "s": "t"}], replacer=drop_ints).source) == ["x", {"s": "t"}]
        assert stringify(5, replacer=drop_ints).source == ""

    def test_result_unwrap(self):
        assert LiteralResult(source="1").unwrap() == "1"
        assert LiteralResult(source="1").ok
