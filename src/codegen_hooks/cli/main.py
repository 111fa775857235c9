"""codegen-hooks CLI.

This module provides the command-line interface for inspecting which
contributions the built-in visitors produce for a schema.
"""

from __future__ import annotations

import json
import logging
import traceback
from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="codegen-hooks",
    help="Run annotation visitors over an interface schema",
    no_args_is_help=True,
)

# Rich console for formatted output
console = Console()
err_console = Console(stderr=True)

# Global verbose flag
_verbose: bool = False


def set_verbose(verbose: bool) -> None:
    """Set global verbose mode."""
    global _verbose
    _verbose = verbose


def print_exception(e: Exception) -> None:
    """Print exception details in verbose mode."""
    if _verbose:
        err_console.print("\n[dim]--- Traceback (verbose mode) ---[/dim]")
        err_console.print(f"[dim]{traceback.format_exc()}[/dim]")


def configure_logging(level: str) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with full tracebacks"),
    ] = False,
) -> None:
    """codegen-hooks CLI - annotation visitors for generated bindings."""
    from codegen_hooks.core.config import get_config

    set_verbose(verbose)
    configure_logging("DEBUG" if verbose else get_config().log_level)


@app.command()
def inspect(
    schema_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the schema JSON file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    backend: Annotated[
        Optional[str],
        typer.Option("--backend", "-b", help="Contribution family (rust, python)"),
    ] = None,
    output_json: Annotated[
        bool,
        typer.Option("--json", help="Print results as JSON"),
    ] = False,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", "-w", min=1, max=64, help="Worker threads"),
    ] = None,
    include_empty: Annotated[
        bool,
        typer.Option("--all", help="Also show nodes without contributions"),
    ] = False,
) -> None:
    """Show the contributions built-in visitors produce for a schema.

    Example:
        codegen-hooks inspect schema.json
        codegen-hooks inspect schema.json --backend python --json
    """
    from codegen_hooks.core.config import get_config
    from codegen_hooks.core.errors import ConfigurationError
    from codegen_hooks.core.serializer import SerializationError, load_schema_file, report_to_dict
    from codegen_hooks.services import TraversalService
    from codegen_hooks.visitors import build_registry, get_default_visitors
    from codegen_hooks.cli._tables import build_diagnostics_table, build_result_table

    config = get_config()
    backend = backend or config.default_backend

    try:
        schema = load_schema_file(schema_path)
    except SerializationError as e:
        err_console.print(f"[red]Error:[/red] {e.message}")
        if e.details:
            err_console.print(f"[dim]{e.details}[/dim]")
        print_exception(e)
        raise typer.Exit(1)

    try:
        registry = build_registry(
            get_default_visitors(backend),
            duplicate_policy=config.duplicate_policy,
        )
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        print_exception(e)
        raise typer.Exit(1)

    service = TraversalService(registry, config=config, max_workers=workers)
    report = service.traverse(schema)

    if output_json:
        console.print_json(json.dumps(report_to_dict(report, include_empty=include_empty)))
        return

    console.print(
        f"[bold]{report.package}[/bold]: {report.nodes_visited} nodes, "
        f"{report.hooks_invoked} hook calls ([cyan]{backend}[/cyan] backend)"
    )
    for result in report.results:
        if result.is_empty() and not include_empty:
            continue
        console.print(build_result_table(result.consume()))

    if report.diagnostics:
        console.print(build_diagnostics_table(report.diagnostics))


@app.command()
def visitors(
    backend: Annotated[
        Optional[str],
        typer.Option("--backend", "-b", help="Contribution family (rust, python)"),
    ] = None,
) -> None:
    """List the built-in visitors for a backend."""
    from codegen_hooks.core.config import get_config
    from codegen_hooks.core.errors import UnknownBackendError
    from codegen_hooks.visitors import get_default_visitors
    from codegen_hooks.cli._tables import build_visitors_table

    backend = backend or get_config().default_backend
    try:
        default_visitors = get_default_visitors(backend)
    except UnknownBackendError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(build_visitors_table(default_visitors))


if __name__ == "__main__":
    app()
