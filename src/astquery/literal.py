"""
Literal conversion: turn a Python value into source text.

The text is an expression that evaluates to an equivalent value, or, for a
top-level function or class, its definition. Conversion never raises; a value
without a literal form yields a failed LiteralResult so callers can tell that
case apart from parse errors.
"""

import ast
import inspect
import math
import textwrap
from dataclasses import dataclass
from typing import Any, Callable, Optional

from astquery.config import LITERAL_CONFIG
from astquery.exceptions import LiteralConversionError
from astquery.logging_config import logger

Replacer = Callable[[Any, str, Callable[[Any], Optional[str]]], Optional[str]]


@dataclass(frozen=True)
class LiteralResult:
    """
    Outcome of a literal conversion.

    Attributes:
        source: Source text when the conversion succeeded
        error: Why the conversion failed, None on success
        value_type: Name of the converted value's type
    """
    source: Optional[str] = None
    error: Optional[str] = None
    value_type: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Return the source text or raise LiteralConversionError."""
        if self.error is not None:
            raise LiteralConversionError(self.value_type, self.error)
        return self.source


class _NoLiteral(Exception):
    """Internal signal: the value being converted has no literal form."""


def _parses_as_expression(source: str) -> bool:
    try:
        ast.parse(source, mode="eval")
    except SyntaxError:
        return False
    return True


def _lambda_source(func) -> str:
    """Cut the lambda expression for func out of its defining source."""
    try:
        source = textwrap.dedent(inspect.getsource(func))
    except (OSError, TypeError) as e:
        raise _NoLiteral(f"source unavailable ({e})")

    tree = None
    for candidate in (source, f"({source.strip().rstrip(',')})"):
        try:
            tree = ast.parse(candidate)
        except SyntaxError:
            continue
        source = candidate
        break
    if tree is None:
        raise _NoLiteral("lambda source could not be isolated")

    code = func.__code__
    arg_names = list(code.co_varnames[:code.co_argcount + code.co_kwonlyargcount])
    lambdas = [n for n in ast.walk(tree) if isinstance(n, ast.Lambda)]
    for node in lambdas:
        names = [a.arg for a in node.args.posonlyargs + node.args.args + node.args.kwonlyargs]
        if names == arg_names:
            return ast.get_source_segment(source, node)
    if lambdas:
        return ast.get_source_segment(source, lambdas[0])
    raise _NoLiteral("lambda source could not be isolated")


class _Stringifier:
    def __init__(self, replacer: Optional[Replacer], indent: int):
        self.replacer = replacer
        self.unit = " " * indent
        self._active = set()

    def convert(self, value: Any, level: int = 0) -> Optional[str]:
        if self.replacer is not None:
            return self.replacer(value, self.unit, lambda v: self.default(v, level))
        return self.default(value, level)

    def default(self, value: Any, level: int) -> Optional[str]:
        # subclasses (IntEnum, StrEnum, ...) take the checked repr path below
        if value is None or type(value) in (bool, int, str, bytes, complex):
            return repr(value)
        if type(value) is float:
            if math.isnan(value):
                return "float('nan')"
            if math.isinf(value):
                return "float('inf')" if value > 0 else "float('-inf')"
            return repr(value)

        if isinstance(value, (dict, list, tuple, set, frozenset)):
            if id(value) in self._active:
                raise _NoLiteral("circular reference")
            self._active.add(id(value))
            try:
                return self._container(value, level)
            finally:
                self._active.discard(id(value))

        if inspect.isfunction(value) and value.__name__ == "<lambda>":
            return _lambda_source(value)
        if inspect.isfunction(value) or inspect.isclass(value):
            if level > 0:
                raise _NoLiteral(f"'{value.__name__}' is a definition, not an expression")
            try:
                return textwrap.dedent(inspect.getsource(value)).strip()
            except (OSError, TypeError) as e:
                raise _NoLiteral(f"source unavailable ({e})")

        source = repr(value)
        if _parses_as_expression(source):
            return source
        raise _NoLiteral(f"repr {source!r} is not an expression")

    def _container(self, value, level: int) -> str:
        items = []
        if isinstance(value, dict):
            for key, item in value.items():
                converted = self.convert(item, level + 1)
                if converted is None:
                    continue
                items.append(f"{self.default(key, level + 1)}: {converted}")
        else:
            for item in value:
                converted = self.convert(item, level + 1)
                if converted is not None:
                    items.append(converted)

        if isinstance(value, dict):
            return self._wrap("{", items, "}", level)
        if isinstance(value, list):
            return self._wrap("[", items, "]", level)
        if isinstance(value, tuple):
            if len(items) == 1 and not self.unit:
                return f"({items[0]},)"
            return self._wrap("(", items, ")", level)
        if isinstance(value, frozenset):
            if not items:
                return "frozenset()"
            return "frozenset(" + self._wrap("{", items, "}", level) + ")"
        if not items:
            return "set()"
        return self._wrap("{", items, "}", level)

    def _wrap(self, opener: str, items, closer: str, level: int) -> str:
        if not items:
            return opener + closer
        if not self.unit:
            return opener + ", ".join(items) + closer
        inner = self.unit * (level + 1)
        lines = "".join(f"{inner}{item},\n" for item in items)
        return f"{opener}\n{lines}{self.unit * level}{closer}"


def stringify(
    value: Any,
    replacer: Optional[Replacer] = None,
    indent: int = LITERAL_CONFIG["default_indent"],
) -> LiteralResult:
    """
    Convert a value to the source text of an equivalent literal.

    Args:
        value: Any Python value
        replacer: Optional hook called as replacer(value, indent, next) for every
            value. A string return is used verbatim, None omits the value and
            next(value) runs the default conversion.
        indent: Spaces per nesting level; 0 renders containers on one line

    Returns:
        LiteralResult with the source text, or the reason conversion failed
    """
    value_type = type(value).__name__
    try:
        source = _Stringifier(replacer, indent).convert(value)
    except _NoLiteral as e:
        logger.warning(f"No literal form for {value_type}: {e}")
        return LiteralResult(error=str(e), value_type=value_type)
    return LiteralResult(source=source or "", value_type=value_type)
