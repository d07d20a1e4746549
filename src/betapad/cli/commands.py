"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from betapad.config import Settings, load_config
from betapad.core.linkify import segments_to_dicts, segments_to_text
from betapad.core.pipeline import TestpadView, load_view, run_export, run_import, run_parse
from betapad.core.results import ResultTracker
from betapad.crud.database import init_db, make_engine, reset_db
from betapad.crud.models import ResourceTypeEnum, ResultEnum
from betapad.crud.resources import ResourceNotFoundError, list_resources
from betapad.crud.results import get_stored_results, make_persist


console = Console()


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _engine(settings: Settings):
    engine = make_engine(settings.db_url)
    init_db(engine)
    return engine


def _rows_table(view: TestpadView, results: dict[int, ResultEnum] = None) -> Table:
    """Rich table of classified rows, with a result column when results are given."""
    table = Table(title=view.title, show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Step")
    table.add_column("Text")
    table.add_column("Kind")
    if results is not None:
        table.add_column("Result")
    for i, row in enumerate(view.rows):
        text = "  " * row.indent + row.text
        cells = [str(i), row.step or "-", text, row.kind.value]
        if results is not None:
            cells.append(results[i].value if i in results else "")
        table.add_row(*cells)
    return table


def _view_json(view: TestpadView) -> dict:
    return {
        "name": view.parsed.name,
        "description": view.parsed.description,
        "description_segments": segments_to_dicts(view.description),
        "rows": [row.model_dump(mode="json") for row in view.rows],
    }


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def parse_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Testpad export file")],
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON instead of a table")] = False,
    ):
    """Parse a testpad file and show its name, description and classified rows."""
    try:
        view = run_parse(path)
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Could not read {path}", e)

    if as_json:
        typer.echo(json.dumps(_view_json(view), indent=2, ensure_ascii=False))
        return
    if view.parsed.description:
        console.print(segments_to_text(view.description), markup=False, highlight=False)
    if not view.rows:
        typer.echo("No testpad steps found.")
        return
    console.print(_rows_table(view))


def export_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Testpad export file")],
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Output file; defaults to <stem>.tsv")] = None,
    indent_unit: Annotated[Optional[str], typer.Option("--indent-unit", help="Text per indent level")] = None,
    ):
    """Write a tab-separated template for pasting into a spreadsheet."""
    settings = _settings(overrides={"indent_unit": indent_unit})
    dest = out or path.with_suffix(".tsv")
    try:
        view, written = run_export(path, dest, settings.indent_unit)
    except (OSError, UnicodeDecodeError) as e:
        _fail("Export failed", e)
    typer.echo(f"Exported {len(view.rows)} row(s) to {written}")


def import_cmd(
    path: Annotated[Path, typer.Argument(exists=True, help="File or directory of resources")],
    name: Annotated[Optional[str], typer.Option("--name", help="Resource name (single file only)")] = None,
    type: Annotated[ResourceTypeEnum, typer.Option("--type", help="Resource type")] = ResourceTypeEnum.testpad,
    ):
    """Upsert resource files into the database."""
    settings = _settings()
    engine = _engine(settings)
    try:
        with Session(engine) as session:
            counts, changes = run_import(
                session, path, set(settings.resource_extensions), type=type, name=name,
            )
            session.commit()
    except RuntimeError as e:
        _fail(str(e))
    except SQLAlchemyError as e:
        _fail("Import failed", e)
    if not counts or not sum(counts.values()):
        typer.echo("No resource files found.")
        raise typer.Exit(1)
    for status, slug in changes:
        typer.echo(f"  {status}: {slug}")
    typer.echo(
        f"Import complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged"
    )


def list_cmd():
    """List stored resources."""
    settings = _settings()
    engine = _engine(settings)
    with Session(engine) as session:
        resources = list_resources(session)
        if not resources:
            typer.echo("No resources found in database.")
            raise typer.Exit(1)
        for r in resources:
            typer.echo(f"{r.slug}\t{r.type.value}\t{r.name}\t{r.id}")


def result_cmd(
    slug: Annotated[str, typer.Argument(help="Resource slug")],
    index: Annotated[int, typer.Argument(help="0-based step index as shown by 'results'")],
    value: Annotated[ResultEnum, typer.Argument(help="pass, fail or blocked")],
    user: Annotated[str, typer.Option("--user", "-u", help="User id")],
    ):
    """Toggle a step result; repeating the current value clears it."""
    settings = _settings()
    engine = _engine(settings)
    with Session(engine) as session:
        try:
            view = load_view(session, slug)
        except (ResourceNotFoundError, ValueError) as e:
            _fail(str(e))
        resource_id = view.resource.id
        tracker = ResultTracker(
            view.rows,
            persist=make_persist(session, user, resource_id),
            initial=get_stored_results(session, user, resource_id),
        )
        try:
            next_value = tracker.toggle(index, value)
        except ValueError as e:
            _fail(str(e))
    typer.echo(f"Step {index}: {next_value.value if next_value else 'cleared'}")


def results_cmd(
    slug: Annotated[str, typer.Argument(help="Resource slug")],
    user: Annotated[str, typer.Option("--user", "-u", help="User id")],
    ):
    """Show a testpad with the user's stored results."""
    settings = _settings()
    engine = _engine(settings)
    with Session(engine) as session:
        try:
            view = load_view(session, slug)
        except (ResourceNotFoundError, ValueError) as e:
            _fail(str(e))
        results = get_stored_results(session, user, view.resource.id)
        tracker = ResultTracker(view.rows, persist=lambda i, v: None, initial=results)
    console.print(_rows_table(view, tracker.results))
    summary = tracker.summary()
    typer.echo(", ".join(f"{k}={v}" for k, v in summary.items()))


def serve_cmd(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind host")] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Bind port")] = None,
    ):
    """Run the HTTP API."""
    import uvicorn

    from betapad.api.app import create_app

    settings = _settings(overrides={"host": host, "port": port})
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
