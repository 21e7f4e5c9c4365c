"""Terminal output for postforge: collection data on stdout, everything else on stderr.

``postforge generate ops.json > collection.json`` must always produce a
valid Postman file, so only the collection JSON and ``inspect`` tables are
written to stdout.  Status lines, warnings, errors and next-step hints go to
stderr (see `clig.dev <https://clig.dev/>`_).

Tables and ``config show`` adapt to where stdout goes: Rich styling on an
interactive terminal, tab-separated text when piped, JSON with ``--json``.
``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` turn styling off.

Commands call the module-level helpers (:func:`success`, :func:`error`,
:func:`print_table`, ...), which forward to the :class:`OutputManager`
installed by :func:`~postforge.app.main_callback`.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Values of ``--json`` / ``--plain`` and the ``output.format`` config key.

    ``AUTO`` picks ``RICH`` for a colour-capable terminal and ``PLAIN`` for
    pipes.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Holds the resolved format, the two Rich consoles and the quiet/verbose flags.

    Args:
        format: Requested format; ``AUTO`` is resolved here, once.
        no_color: Plain stderr lines and no styling on stdout.
        quiet: Drop info, success and suggestion lines.
        verbose: Show ``debug`` lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            self._format = (
                OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
            )
        else:
            self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
        )
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def format(self) -> OutputFormat:
        """The resolved output format."""
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def format_response(self, data: Any) -> None:
        """Output structured data (a dict or list) to stdout in the active format."""
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        elif self._format == OutputFormat.PLAIN:
            if isinstance(data, dict):
                for key, value in data.items():
                    self.print_data(f"{key}\t{value}")
            elif isinstance(data, list):
                for item in data:
                    self.print_data(str(item))
            else:
                self.print_data(str(data))
        else:
            json_str = json.dumps(data, indent=2, ensure_ascii=False, default=str)
            self._stdout.print(Syntax(json_str, "json", theme="monokai", word_wrap=True))

    def print_data(self, text: str) -> None:
        """Print raw text to stdout, unformatted."""
        print(text, file=sys.stdout, flush=True)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print tabular data to stdout in the active format.

        * **Rich mode** -- styled :class:`~rich.table.Table` with column
          headers.
        * **JSON mode** -- array of objects keyed by header names.
        * **Plain mode** -- tab-separated values, one row per line.
        """
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))

        elif self._format == OutputFormat.PLAIN:
            self.print_data("\t".join(headers))
            for row in rows:
                self.print_data("\t".join(row))

        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for h in headers:
                table.add_column(h)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        """Print an informational message to stderr. Suppressed by ``--quiet``."""
        self._diagnostic(message, quiet_ok=False)

    def success(self, message: str) -> None:
        """Print a green success message to stderr. Suppressed by ``--quiet``."""
        self._diagnostic(message, quiet_ok=False, style="green")

    def warning(self, message: str) -> None:
        """Print a yellow warning to stderr. NOT suppressed by ``--quiet``."""
        self._diagnostic(message, label="Warning:", label_style="yellow")

    def error(self, message: str) -> None:
        """Print a bold-red error to stderr. Never suppressed."""
        self._diagnostic(message, label="Error:", label_style="bold red")

    def suggest(self, message: str) -> None:
        """Print a dimmed next-step suggestion to stderr. Suppressed by ``--quiet``."""
        self._diagnostic(f"→ {message}", quiet_ok=False, style="dim")

    def debug(self, message: str) -> None:
        """Print a debug message to stderr. Only shown when ``--verbose`` is active."""
        if self._verbose:
            self._diagnostic(f"[debug] {message}", style="dim")

    def _diagnostic(
        self,
        message: str,
        *,
        quiet_ok: bool = True,
        style: Optional[str] = None,
        label: Optional[str] = None,
        label_style: Optional[str] = None,
    ) -> None:
        """Write one stderr line, plain with ``--no-color`` and Rich-styled otherwise.

        Lines with ``quiet_ok=False`` are dropped under ``--quiet``.
        """
        if self._quiet and not quiet_ok:
            return
        if self._no_color:
            text = f"{label} {message}" if label else message
            print(text, file=sys.stderr, flush=True)
            return
        markup = escape(message)
        if style:
            markup = f"[{style}]{markup}[/{style}]"
        if label:
            markup = f"[{label_style}]{label}[/{label_style}] {markup}"
        self._stderr.print(markup)


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _is_tty() -> bool:
    """Check if stdout is a TTY."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


# ------------------------------------------------------------------ #
# Convenience functions that use the global instance
# ------------------------------------------------------------------ #


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
