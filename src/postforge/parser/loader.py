"""Load operation manifests from a URL, local file, or stdin.

This module handles all I/O for fetching the raw document that declares the
API operations and converting it into Python data.  It supports both JSON
and YAML with automatic format detection.

The public function is :func:`load_document`.  After loading, the raw data
should be passed to :func:`~postforge.parser.extractor.extract_operations`
which validates each entry into an :class:`~postforge.models.Operation`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Union

import httpx
import yaml

from postforge.exceptions import OperationsLoadError

logger = logging.getLogger(__name__)

RawDocument = Union[dict[str, Any], list[Any]]


def load_document(source: str) -> RawDocument:
    """Load an operations document from URL, file path, or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The parsed document: a mapping (``{"operations": [...]}``) or a bare
        list of operation entries.

    Raises:
        OperationsLoadError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> RawDocument:
    """Read the document from stdin.

    Raises:
        OperationsLoadError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise OperationsLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise OperationsLoadError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> RawDocument:
    """Fetch the document from URL. Supports JSON and YAML responses.

    Raises:
        OperationsLoadError: If the URL cannot be fetched or content cannot
            be parsed.
    """
    logger.debug("Fetching operations from %s", url)
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise OperationsLoadError(
            f"HTTP {exc.response.status_code} fetching operations from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise OperationsLoadError(
            f"Failed to fetch operations from {url}: {exc}"
        ) from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> RawDocument:
    """Load the document from a local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.

    Raises:
        OperationsLoadError: If the file cannot be read or parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise OperationsLoadError(f"Operations file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise OperationsLoadError(
            f"Failed to read operations file {path}: {exc}"
        ) from exc

    if not content.strip():
        raise OperationsLoadError(f"Operations file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> RawDocument:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.

    Raises:
        OperationsLoadError: If the content cannot be parsed as either
            format, or does not hold a mapping or list.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            return _check_shape(json.loads(content))
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise OperationsLoadError(f"Invalid JSON: {exc}") from exc

    try:
        return _check_shape(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse operations as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise OperationsLoadError(msg)


def _check_shape(result: Any) -> RawDocument:
    if not isinstance(result, (dict, list)):
        got = type(result).__name__ if result is not None else "empty document"
        raise OperationsLoadError(
            f"Operations document must be an object or a list (got {got})"
        )
    return result
