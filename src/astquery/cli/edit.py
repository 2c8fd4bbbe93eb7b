"""
CLI Edit Commands

append, prepend, set-prop, remove-prop
"""

from pathlib import Path
from typing import Optional

import typer

from astquery.logging_config import logger
from .common import emit_source, find_property_target, load_tree_or_exit, parse_cli_value
from .output import print_error

app = typer.Typer()


def _splice(file: Path, code: str, at: Optional[int], write: bool, prepend: bool) -> None:
    tree = load_tree_or_exit(file)
    try:
        if prepend:
            tree.prepend_string(code, at)
        else:
            tree.append_string(code, at)
    except SyntaxError as e:
        print_error("PARSE_ERROR", f"Cannot parse code: {e.msg}", input_value=code)
        raise typer.Exit(code=1)
    emit_source(tree, file, write)


@app.command("append")
def append_cmd(
    file: Path = typer.Argument(..., help="Python source file", exists=True, dir_okay=False),
    code: str = typer.Argument(..., help="Statements to insert"),
    at: Optional[int] = typer.Option(None, "--at", help="Insert position in the module body (default: end)"),
    write: bool = typer.Option(False, "--write", "-w", help="Write the result back to FILE"),
):
    """
    Insert statements at the end of the module (or at --at).
    """
    _splice(file, code, at, write, prepend=False)


@app.command("prepend")
def prepend_cmd(
    file: Path = typer.Argument(..., help="Python source file", exists=True, dir_okay=False),
    code: str = typer.Argument(..., help="Statements to insert"),
    at: Optional[int] = typer.Option(None, "--at", help="Insert position in the module body (default: start)"),
    write: bool = typer.Option(False, "--write", "-w", help="Write the result back to FILE"),
):
    """
    Insert statements at the start of the module (or at --at).
    """
    _splice(file, code, at, write, prepend=True)


@app.command("set-prop")
def set_prop_cmd(
    file: Path = typer.Argument(..., help="Python source file", exists=True, dir_okay=False),
    name: str = typer.Argument(..., help="Key or keyword name"),
    value: str = typer.Argument(..., help="Python literal (anything else is taken as a string)"),
    line: Optional[int] = typer.Option(None, "--line", "-l", help="Only consider targets starting on this line"),
    write: bool = typer.Option(False, "--write", "-w", help="Write the result back to FILE"),
):
    """
    Set a key of the first dict display (or keyword of the first call/class).
    """
    tree = load_tree_or_exit(file)
    target = find_property_target(tree, line)
    if target is None:
        print_error("NO_TARGET", "No dict, call or class found", input_value=str(file))
        raise typer.Exit(code=1)

    if not target.prop(name, parse_cli_value(value)):
        print_error("PROP_REJECTED", f"Cannot set '{name}' on {target.type}", input_value=name)
        raise typer.Exit(code=1)
    logger.debug(f"Set '{name}' on {target.type}")
    emit_source(tree, file, write)


@app.command("remove-prop")
def remove_prop_cmd(
    file: Path = typer.Argument(..., help="Python source file", exists=True, dir_okay=False),
    name: str = typer.Argument(..., help="Key or keyword name"),
    line: Optional[int] = typer.Option(None, "--line", "-l", help="Only consider targets starting on this line"),
    write: bool = typer.Option(False, "--write", "-w", help="Write the result back to FILE"),
):
    """
    Remove a key from the first dict display (or keyword of the first call/class).
    """
    tree = load_tree_or_exit(file)
    target = find_property_target(tree, line)
    if target is None:
        print_error("NO_TARGET", "No dict, call or class found", input_value=str(file))
        raise typer.Exit(code=1)

    target.remove_prop(name)
    emit_source(tree, file, write)
