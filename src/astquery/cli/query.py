"""
CLI Query Commands

search, show
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from astquery.cli.config import CLIConfig
from astquery.config import PRINT_DEFAULTS
from astquery.nodes import location_of
from astquery.schemas import NodeMatch, PrintOptions
from .common import load_tree_or_exit
from .output import get_console, print_json

app = typer.Typer()
console = get_console()

NAME_FIELDS = ("name", "id", "arg", "attr", "module")


def _snippet(node, width: int) -> Optional[str]:
    try:
        text = node.to_source()
    except (TypeError, ValueError, AttributeError):
        return None
    first_line = text.splitlines()[0] if text else ""
    return first_line if len(first_line) <= width else first_line[:width - 3] + "..."


@app.command("search")
def search_cmd(
    file: Path = typer.Argument(..., help="Python source file to search", exists=True, dir_okay=False),
    node_type: Optional[str] = typer.Option(None, "--type", "-t", help="Node type, e.g. FunctionDef, Dict, Call"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Match name/id/arg/attr/module fields"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List nodes of a given type and/or name.
    """
    if node_type is None and name is None:
        raise typer.BadParameter("Give --type, --name or both")

    tree = load_tree_or_exit(file)

    def predicate(entry):
        if node_type is not None and entry.type != node_type:
            return False
        if name is not None:
            return any(entry.get(field) == name for field in NAME_FIELDS)
        return True

    matches: List[NodeMatch] = []
    for node in tree.search(predicate):
        line, col, end_line = location_of(node.tree)
        matches.append(NodeMatch(
            type=node.type,
            line=line,
            col=col,
            end_line=end_line,
            source=_snippet(node, CLIConfig.DEFAULT_SNIPPET_WIDTH),
        ))

    if json_output:
        print_json([m.model_dump() for m in matches])
        return

    if CLIConfig.is_machine_mode():
        for m in matches:
            typer.echo(f"{m.type}\t{m.line}:{m.col}\t{m.source or ''}")
        return

    table = Table(title=f"{len(matches)} match(es) in {file.name}")
    table.add_column("Type", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Source", style="green")
    for m in matches:
        table.add_row(m.type, str(m.line or ""), m.source or "")
    console.print(table)


@app.command("show")
def show_cmd(
    file: Path = typer.Argument(..., help="Python source file", exists=True, dir_okay=False),
    format_output: bool = typer.Option(False, "--format", help="Run the result through black"),
    line_length: int = typer.Option(PRINT_DEFAULTS["line_length"], "--line-length", help="Line length for --format"),
):
    """
    Print the file as re-emitted from its syntax tree.
    """
    tree = load_tree_or_exit(file)
    typer.echo(tree.to_source(PrintOptions(format=format_output, line_length=line_length)))
