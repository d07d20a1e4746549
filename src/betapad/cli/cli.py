"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated

import typer

from betapad.cli.commands import (
    export_cmd, import_cmd, init_cmd, list_cmd, parse_cmd, result_cmd, results_cmd, serve_cmd,
)
from betapad.config import load_config
from betapad.logging import configure_logging


app = typer.Typer(name="betapad", no_args_is_help=True, help="Testpad parsing, export and result tracking")


@app.callback()
def main(
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Debug logging")] = 0,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log warnings and errors")] = False,
    ):
    """Configure logging before any command runs."""
    try:
        level = load_config().log_level
    except ValueError:
        level = "INFO"
    configure_logging(verbosity=verbose, quiet=quiet, default_level=level)


app.command(name="init")(init_cmd)
app.command(name="parse")(parse_cmd)
app.command(name="export")(export_cmd)
app.command(name="import")(import_cmd)
app.command(name="list")(list_cmd)
app.command(name="result")(result_cmd)
app.command(name="results")(results_cmd)
app.command(name="serve")(serve_cmd)
