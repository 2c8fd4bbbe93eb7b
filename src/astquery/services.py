"""
Parser, printer and literal-stringifier ports.

Tree handles never call ast.parse/ast.unparse directly; they go through a
Services bundle so tests can swap in fakes with the same three methods.
"""

import ast
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from astquery.config import PARSE_CONFIG
from astquery.formatter import format_source
from astquery.literal import LiteralResult, stringify
from astquery.schemas import PrintOptions, StringifyOptions


@runtime_checkable
class Parser(Protocol):
    def parse(self, source: str) -> ast.Module: ...


@runtime_checkable
class Printer(Protocol):
    def print(self, tree: Any, options: PrintOptions) -> str: ...


@runtime_checkable
class Stringifier(Protocol):
    def stringify(self, value: Any, options: StringifyOptions) -> LiteralResult: ...


class PythonParser:
    """Parses Python source with the standard library parser."""

    def parse(self, source: str) -> ast.Module:
        return ast.parse(source, filename=PARSE_CONFIG["filename"])


class PythonPrinter:
    """Emits source with ast.unparse, optionally formatted with black."""

    def print(self, tree: Any, options: PrintOptions) -> str:
        if not isinstance(tree, ast.AST):
            raise TypeError(f"Cannot print {type(tree).__name__}: not an ast node")
        code = ast.unparse(tree)
        if options.format:
            code, _ = format_source(code, options.line_length)
        return code


class LiteralStringifier:
    def stringify(self, value: Any, options: StringifyOptions) -> LiteralResult:
        return stringify(value, replacer=options.replacer, indent=options.indent)


@dataclass
class Services:
    parser: Parser = field(default_factory=PythonParser)
    printer: Printer = field(default_factory=PythonPrinter)
    stringifier: Stringifier = field(default_factory=LiteralStringifier)


def default_services() -> Services:
    return Services()
