"""CLI entry point using Typer.

stdout carries the resource protocol response only; logs and errors go to stderr.
"""

import sys
from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.markup import escape

from sonarresource.commands.check import run_check
from sonarresource.commands.get import run_in
from sonarresource.commands.put import run_out
from sonarresource.config import settings
from sonarresource.errors import ResourceError

app = typer.Typer(
    name="sonar-resource",
    help="Pipeline resource for SonarQube analysis reports (check / in / out).",
    add_completion=False,
)
err_console = Console(stderr=True)

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer() if settings.log_json else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
)

logger = structlog.get_logger()


def _fail(command: str, exc: ResourceError) -> None:
    logger.error("resource.failed", command=command, error_type=type(exc).__name__, error=str(exc))
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", soft_wrap=True)
    raise typer.Exit(1)


@app.command()
def check() -> None:
    """Print all known versions, oldest first."""
    try:
        run_check(sys.stdin, sys.stdout)
    except ResourceError as e:
        _fail("check", e)


@app.command("in")
def in_(
    dest_dir: Path = typer.Argument(..., help="Existing directory that receives result.json"),
) -> None:
    """Fetch the current measurements into DEST_DIR and echo the requested version."""
    try:
        run_in(sys.stdin, sys.stdout, dest_dir)
    except ResourceError as e:
        _fail("in", e)


@app.command()
def out(
    source_dir: str | None = typer.Argument(None, help="Build sources directory (unused)"),
) -> None:
    """No-op publish."""
    raise typer.Exit(run_out(sys.stdout))


def check_main() -> None:
    app(args=["check", *sys.argv[1:]], prog_name="check")


def in_main() -> None:
    app(args=["in", *sys.argv[1:]], prog_name="in")


def out_main() -> None:
    app(args=["out", *sys.argv[1:]], prog_name="out")
