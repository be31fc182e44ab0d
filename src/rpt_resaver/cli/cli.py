#!/usr/bin/env python3
"""
rpt_resaver.cli.cli

Typer-based CLI for resaving legacy report files with embedded data.

Every run input can be passed as an option; anything left out is prompted
for interactively, in the order the options are declared.

Examples
--------
Install core + Crystal Reports binding:

    uv pip install -e ".[crystal]"

Run interactively:

    rpt-resaver resave

Run unattended:

    RPT_RESAVER_PASSWORD=secret rpt-resaver resave \\
        --source-dir ./legacy --destination-dir ./resaved \\
        --server-name SQL01 --database-name Sales --user-id report_user
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer

from rpt_resaver.errors import ResaverError

app = typer.Typer(
    name="rpt-resaver",
    help="Resave legacy report files with rebound logins and embedded data.",
    no_args_is_help=True,
)

PASSWORD_ENVVAR = "RPT_RESAVER_PASSWORD"


class _ConsoleHandler(logging.Handler):
    """Echo log records to whichever console streams are active."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            typer.echo(self.format(record), err=record.levelno >= logging.ERROR)
        except Exception:
            self.handleError(record)


def _configure_logging(verbose: bool) -> None:
    """Send package log records to the console."""
    package_logger = logging.getLogger("rpt_resaver")
    for handler in list(package_logger.handlers):
        if isinstance(handler, _ConsoleHandler):
            package_logger.removeHandler(handler)
    handler = _ConsoleHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception that stopped the run.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Initialize shared CLI state."""
    ctx.obj = {"debug": debug, "verbose": verbose}


# -----------------------------
# Commands
# -----------------------------
@app.command("resave")
def resave_cmd(
    ctx: typer.Context,
    source_dir: Path = typer.Option(
        ...,
        "--source-dir",
        prompt="Enter the directory path for .rpt files",
        help="Directory scanned recursively for .rpt files.",
    ),
    destination_dir: Path = typer.Option(
        ...,
        "--destination-dir",
        prompt="Enter the directory path to save updated .rpt files",
        help="Directory receiving resaved reports and run logs.",
    ),
    server_name: str = typer.Option(
        ..., "--server-name", prompt="Enter server name", help="Database server."
    ),
    database_name: str = typer.Option(
        ..., "--database-name", prompt="Enter database name", help="Database name."
    ),
    user_id: str = typer.Option(
        ..., "--user-id", prompt="Enter user ID", help="Database user."
    ),
    password: str = typer.Option(
        ...,
        "--password",
        prompt="Enter password",
        hide_input=True,
        envvar=PASSWORD_ENVVAR,
        help=f"Database password (or set {PASSWORD_ENVVAR}).",
    ),
    engine: str = typer.Option("crystal", "--engine", help="Registered engine name."),
    engine_module: list[str] | None = typer.Option(
        None,
        "--engine-module",
        help="Engine plugin module import path or file path (repeatable).",
    ),
) -> None:
    """Resave every .rpt file under a directory.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    source_dir : Path
        Directory scanned recursively for ``.rpt`` files.
    destination_dir : Path
        Output directory; created when missing.
    engine : str, default="crystal"
        Engine used to load and save reports.

    Notes
    -----
    - The ``crystal`` engine requires the `crystal` extra (pythonnet) and a
      Crystal Reports runtime on the host.
    - Per-file failures are logged and do not change the exit code.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    _configure_logging(bool(ctx.obj.get("verbose", False)))

    try:
        from rpt_resaver.api import resave_directory

        report = resave_directory(
            source_dir=source_dir,
            destination_dir=destination_dir,
            server_name=server_name,
            database_name=database_name,
            user_id=user_id,
            password=password,
            engine_name=engine,
            engine_modules=engine_module,
        )
    except ResaverError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    typer.echo(report.summary.render())


@app.command("doctor")
def doctor_cmd(
    engine_module: list[str] | None = typer.Option(
        None,
        "--engine-module",
        help="Engine plugin module import path or file path (repeatable).",
    ),
) -> None:
    """Print installed runtime versions and registered engines."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ("pythonnet", "pydantic", "typer"):
        try:
            typer.echo(f"{module}: {metadata.version(module)}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    try:
        from rpt_resaver.plugins.registry import create_default_registry

        registry = create_default_registry(extra_modules=engine_module)
        typer.echo(f"engines: {', '.join(registry.names())}")
    except ResaverError as exc:
        typer.echo(f"engines: <unavailable> ({exc})")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
