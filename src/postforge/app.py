"""Typer application factory and CLI entry point for postforge.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``generate``, ``inspect``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
:class:`~postforge.exceptions.PostforgeError` exits with the error's code;
any other exception is written to a crash log under the data directory.

See Also:
    :mod:`postforge.config`: Configuration resolution.
    :mod:`postforge.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from postforge import __version__
from postforge.exit_codes import EXIT_CANCELLED, EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="postforge",
    help="Generate Postman request collections from declared API operations.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# ------------------------------------------------------------------ #
# Built-in commands
# ------------------------------------------------------------------ #

from postforge.commands.config import config_app  # noqa: E402
from postforge.commands.generate import generate_command  # noqa: E402
from postforge.commands.inspect import inspect_app  # noqa: E402

app.command("generate")(generate_command)
app.add_typer(inspect_app, name="inspect", help="Inspect declared operations.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"postforge {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~postforge.output.OutputManager` from
    CLI flags, configures logging, and stores shared options in the Typer
    context (``ctx.obj``).
    """
    from postforge.output import OutputFormat, OutputManager, set_output

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = _configured_format()

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )
    _configure_logging(verbose, no_color)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _configured_format() -> OutputFormat:
    """Return the ``output.format`` from config, or AUTO if it cannot be resolved."""
    from postforge.config import resolve_config
    from postforge.exceptions import PostforgeError
    from postforge.output import OutputFormat

    try:
        return OutputFormat(resolve_config().output.format)
    except PostforgeError:
        # The sub-command resolves the config again and reports the error.
        return OutputFormat.AUTO


def _configure_logging(verbose: bool, no_color: bool) -> None:
    """Route ``postforge.*`` log records to stderr; DEBUG with ``--verbose``."""
    logger = logging.getLogger("postforge")
    logger.handlers.clear()
    handler = RichHandler(
        console=Console(file=sys.stderr, no_color=no_color, stderr=True),
        show_time=False,
        show_path=False,
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from postforge.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``postforge`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)
    except Exception as exc:
        from postforge.exceptions import PostforgeError
        from postforge.output import error

        if isinstance(exc, PostforgeError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
