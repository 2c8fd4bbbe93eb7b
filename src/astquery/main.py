import typer

from astquery import __version__
from astquery.cli import edit, query
from astquery.cli.config import CLIConfig
from astquery.logging_config import logger, setup_logging

app = typer.Typer()


@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: tables and colors (also via ASTQUERY_HUMAN_MODE env var)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
):
    """
    astquery: search and splice Python syntax trees.

    Machine mode is the default (plain data, no formatting).
    Use --human/-H for pretty output.
    """
    if human:
        CLIConfig.set_machine_mode(False)
    if verbose:
        setup_logging(level="DEBUG", suppress_console=False, force=True)
    elif not human:
        setup_logging(suppress_console=True, force=True)


app.add_typer(query.app, name="query", help="Query commands (search, show)")
app.add_typer(edit.app, name="edit", help="Edit commands (append, prepend, set-prop, remove-prop)")


@app.command()
def version():
    """
    Prints the current version of astquery.
    """
    logger.debug("version requested")
    typer.echo(f"astquery v{__version__}")


if __name__ == "__main__":
    app()
