"""
Shared helpers for CLI commands.
"""

import ast
from pathlib import Path
from typing import Any, Optional

import typer

from astquery.logging_config import logger
from astquery.tree import Collection, Node
from .output import print_error


def load_tree_or_exit(path: Path) -> Collection:
    """Parse a source file, exiting with a structured error when it does not parse."""
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        print_error("READ_ERROR", f"Cannot read {path}: {e}", input_value=str(path))
        raise typer.Exit(code=1)

    try:
        return Collection.from_string(source)
    except SyntaxError as e:
        print_error(
            "PARSE_ERROR",
            f"{path}:{e.lineno}: {e.msg}",
            input_value=str(path),
        )
        raise typer.Exit(code=1)


def find_property_target(tree: Collection, line: Optional[int]) -> Optional[Node]:
    """First dict display, call or class (optionally starting on line) in the tree."""
    def has_properties(entry):
        if entry.type not in ("Dict", "Call", "ClassDef"):
            return False
        return line is None or entry.lineno == line

    matches = tree.search(has_properties)
    return matches[0] if len(matches) else None


def parse_cli_value(text: str) -> Any:
    """Interpret a command-line value as a Python literal, falling back to the raw string."""
    try:
        return ast.literal_eval(text)
    except (ValueError, SyntaxError):
        logger.debug(f"Value {text!r} is not a literal, using it as a string")
        return text


def emit_source(tree: Collection, path: Path, write: bool) -> None:
    """Write the re-emitted source back to path, or print it."""
    code = tree.to_source()
    if write:
        path.write_text(code + "\n", encoding="utf-8")
        logger.info(f"Wrote {path}")
    else:
        typer.echo(code)
