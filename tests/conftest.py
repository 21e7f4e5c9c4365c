"""Shared test fixtures for postforge.

Provides reusable fixtures for loading operation fixtures, creating isolated
config environments, managing output and logging state, and running CLI
commands.  These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from postforge.models import Operation, OperationKind
from postforge.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _reset_postforge_logger() -> None:
    """Undo the handler the CLI callback installs on the ``postforge`` logger.

    Otherwise records from later tests would go to a closed CliRunner stream
    and never reach ``caplog``.
    """
    yield
    logger = logging.getLogger("postforge")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ---------------------------------------------------------------------------
# Operation fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def operations_raw() -> dict[str, Any]:
    """Load the raw operations.json manifest."""
    with open(FIXTURES_DIR / "operations.json") as f:
        return json.load(f)


@pytest.fixture
def operations(operations_raw: dict[str, Any]) -> list[Operation]:
    """Validated operations from operations.json."""
    from postforge.parser.extractor import extract_operations

    return extract_operations(operations_raw)


def make_operation(
    name: str,
    path: str,
    kind: OperationKind = OperationKind.QUERY,
    schema: Any = None,
) -> Operation:
    """Build an Operation, defaulting to an object schema with one string ``id``."""
    if schema is None:
        schema = {"type": "object", "properties": {"id": {"type": "string"}}}
    return Operation(name=name, path=path, kind=kind, variables_schema=schema)


@pytest.fixture
def operation_factory():
    """Factory fixture wrapping :func:`make_operation`."""
    return make_operation


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch real user config, forces the XDG code path,
    clears all POSTFORGE_* environment variables and changes the working
    directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("postforge.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in [
        "POSTFORGE_BASE_URL",
        "POSTFORGE_FOLDER_STRATEGY",
        "POSTFORGE_COLLECTION_NAME",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for the test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
