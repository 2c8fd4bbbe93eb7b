"""
Tests for Collection and Node handles: parsing, search chaining, body splices,
printing and injected services.
"""

import ast
import enum

import pytest

from astquery import Collection, Node
from astquery.exceptions import LiteralConversionError, NoTreeError
from astquery.schemas import PrintOptions
from astquery.services import Printer, Services

pytestmark = pytest.mark.fast


def you_know_the_rules():
    pass


def never_gonna_give():
    pass


def tell_a_lie():
    pass


class CountingParser:
    def __init__(self):
        self.calls = 0

    def parse(self, source):
        self.calls += 1
        return ast.parse(source)


def _is_dict_keyed(entry, key):
    return entry.type == "Dict" and entry.keys[0].value == key


class TestParse:
    """Collection.parse / from_string / from_value."""

    def test_parses_source_text(self):
        tree = Collection.from_string("GottaMakeYouUnderstand()")
        assert isinstance(tree.tree, ast.Module)
        assert len(tree) == 1
        assert tree.body

    def test_parses_a_function_value(self):
        tree = Collection.parse(you_know_the_rules)
        assert isinstance(tree.body[0], ast.FunctionDef)
        assert tree.body[0].name == "you_know_the_rules"

    def test_parses_a_nested_function_value(self):
        def inner(x):
            return x

        tree = Collection.parse(inner)
        assert tree.body[0].name == "inner"

    def test_from_value_dict(self):
        tree = Collection.from_value({"never": {"gonna": "give you up"}})
        code = tree.to_source()
        assert "never" in code
        assert "gonna" in code
        assert "give you up" in code

    def test_from_value_none_is_empty_module(self):
        tree = Collection.from_value()
        assert tree.body == []
        assert tree.to_source() == ""

    def test_from_value_without_literal_form(self):
        class Opaque:
            pass

        with pytest.raises(LiteralConversionError):
            Collection.from_value(Opaque())

    def test_from_value_enum_member(self):
        class Level(enum.IntEnum):
            HIGH = 3

        with pytest.raises(LiteralConversionError):
            Collection.from_value(Level.HIGH)
        with pytest.raises(LiteralConversionError):
            Collection.from_string("x = 1").append_value(Level.HIGH)

    def test_indented_expression_is_recovered(self):
        tree = Collection.from_string("    1 + 2")
        assert isinstance(tree.body[0], ast.Expr)
        assert isinstance(tree.body[0].value, ast.BinOp)

    def test_multiline_expression_is_recovered(self):
        tree = Collection.from_string("1 +\n2")
        assert len(tree.body) == 1
        assert isinstance(tree.body[0], ast.Expr)
        assert isinstance(tree.body[0].value, ast.BinOp)

    def test_recovered_lines_match_the_input(self):
        tree = Collection.from_string("    {'a': 1}")
        found = tree.search(lambda e: e.type == "Dict" and e.lineno == 1)
        assert len(found) == 1
        tree = Collection.from_string("[1,\n 2] +\n[3]")
        assert tree.body[0].lineno == 1
        assert tree.body[0].end_lineno == 3

    def test_unindented_block_is_not_retried(self):
        parser = CountingParser()
        with pytest.raises(IndentationError):
            Collection.from_string("if ready:\npass", services=Services(parser=parser))
        assert parser.calls == 1

    def test_unexpected_indent_is_retried_once(self):
        parser = CountingParser()
        with pytest.raises(IndentationError):
            Collection.from_string("x = 1\n    y = 2", services=Services(parser=parser))
        assert parser.calls == 2

    def test_failed_recovery_raises_original_error(self):
        with pytest.raises(IndentationError):
            Collection.from_string("    def f(): pass")

    def test_other_syntax_errors_propagate(self):
        with pytest.raises(SyntaxError):
            Collection.from_string("x = (")

    def test_constructor_keeps_only_nodes(self):
        module = ast.parse("a = 1\nb = 2")
        collection = Collection(module.body, "text", 3, None)
        assert len(collection) == 2
        assert collection.tree is None
        assert collection.body is None


class TestSearch:
    """Search through handles."""

    def test_finds_nested_node(self):
        tree = Collection.from_value({"never": {"gonna": "let you down"}})
        found = tree.search(lambda e: _is_dict_keyed(e, "gonna"))
        assert len(found) == 1
        assert found[0].tree.values[0].value == "let you down"

    def test_predicate_errors_are_swallowed(self):
        tree = Collection.from_value({})
        assert len(tree.search(lambda e: e.gave.up == e.and_let.you.down)) == 0

    def test_predicate_errors_can_be_raised(self):
        tree = Collection.from_value({})
        with pytest.raises(AttributeError):
            tree.search(lambda e: e.still_wrong, throw_errors=True)

    def test_chained_search(self):
        tree = Collection.from_value({"never": {"gonna": "run around"}, "gonna": 1})
        outer = tree.search(lambda e: _is_dict_keyed(e, "never"))
        inner = outer.search(lambda e: _is_dict_keyed(e, "gonna"))
        assert len(inner) == 1
        assert inner[0].tree.values[0].value == "run around"

    def test_search_by_parent(self):
        tree = Collection.from_value({"you_know_the_rules": {"and_so": {"do": "i"}}})
        found = tree.search(
            lambda e, parent: e.type == "Dict"
            and parent.type == "Dict"
            and parent.values[0] is e.node
            and parent.keys[0].value == "and_so"
        )
        assert found[0].tree.keys[0].value == "do"

    def test_fan_out_keeps_root_order(self):
        first = ast.parse("a = 1")
        second = ast.parse("b = 2\nc = 3")
        found = Collection(first, second).search(lambda e: e.type == "Name")
        assert [node.tree.id for node in found] == ["a", "b", "c"]

    def test_search_without_tree(self):
        with pytest.raises(NoTreeError):
            Node(None).search(lambda e: True)

    def test_search_sees_mutations(self):
        tree = Collection.from_string("x = 1")
        tree.append("def added(): pass")
        assert len(tree.search(lambda e: e.type == "FunctionDef")) == 1


class TestAppendPrepend:
    """Body splices."""

    def test_append_string_to_empty_module(self):
        tree = Collection.from_value()
        assert tree.body == []
        tree.append("def give_you_up(): pass")
        assert tree.body
        assert "def give_you_up():" in tree.to_source()

    def test_append_function_value(self):
        tree = Collection.from_value()
        tree.append(never_gonna_give)
        assert "def never_gonna_give():" in tree.to_source()

    def test_append_at_index(self):
        tree = Collection.from_string("{}; {}")
        tree.append(never_gonna_give, 1)
        assert [type(s).__name__ for s in tree.body] == ["Expr", "FunctionDef", "Expr"]
        assert tree.body[1].name == "never_gonna_give"

    def test_prepend_defaults_to_start(self):
        tree = Collection.from_string("x = 1")
        tree.prepend("import os")
        assert isinstance(tree.body[0], ast.Import)

    def test_prepend_at_index(self):
        tree = Collection.from_string("{}; {}")
        tree.prepend(tell_a_lie, 1)
        assert isinstance(tree.body[1], ast.FunctionDef)
        assert tree.body[1].name == "tell_a_lie"

    def test_multiple_statements_keep_their_order(self):
        tree = Collection.from_string("first = 0")
        tree.append_string("a = 1\nb = 2", 0)
        assert [s.targets[0].id for s in tree.body] == ["a", "b", "first"]

    def test_append_value_literal(self):
        tree = Collection.from_string("x = 1")
        tree.append_value({"k": [1, 2]})
        assert ast.literal_eval(tree.body[-1].value) == {"k": [1, 2]}

    def test_append_into_function_body(self):
        tree = Collection.from_string("def f():\n    pass")
        func = tree.search(lambda e: e.type == "FunctionDef")
        func.append("return 1")
        assert isinstance(tree.body[0].body[-1], ast.Return)

    def test_node_without_body_is_refused(self):
        tree = Collection.from_string("x = {'a': 1}")
        dict_node = tree.search(lambda e: e.type == "Dict")
        before = tree.to_source()
        assert dict_node.append("y = 2") == [False]
        assert dict_node.prepend_value(3) == [False]
        assert tree.to_source() == before


class TestPrinting:
    """to_source and print services."""

    def test_round_trip_keeps_structure(self, sample_source):
        tree = Collection.from_string(sample_source)
        reparsed = ast.parse(tree.to_source())
        assert ast.dump(reparsed) == ast.dump(ast.parse(sample_source))

    def test_search_results_print_each_node(self):
        tree = Collection.from_string("a = 1\nb = 2")
        names = tree.search(lambda e: e.type == "Name")
        assert names.to_source() == "a\nb"
        assert str(names[1]) == "b"

    def test_node_without_tree_cannot_print(self):
        with pytest.raises(NoTreeError):
            Node(None).to_source()

    def test_format_without_black_returns_plain_source(self, monkeypatch):
        monkeypatch.setattr("astquery.formatter.shutil.which", lambda cmd: None)
        tree = Collection.from_string("x=[1,2]")
        assert tree.to_source(PrintOptions(format=True)) == "x = [1, 2]"
        assert tree.to_source({"format": True}) == "x = [1, 2]"

    def test_injected_printer(self):
        class FakePrinter:
            def print(self, tree, options):
                return f"<{type(tree).__name__}>"

        assert isinstance(FakePrinter(), Printer)
        tree = Collection.from_string("x = 1", services=Services(printer=FakePrinter()))
        assert tree.to_source() == "<Module>"
        found = tree.search(lambda e: e.type == "Assign")
        assert found.to_source() == "<Assign>"
