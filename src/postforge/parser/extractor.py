"""Extract :class:`~postforge.models.Operation` records from a loaded document.

Two document shapes are accepted::

    # A mapping with an ``operations`` list
    {"operations": [{"name": "GetUser", "path": "users/get", ...}, ...]}

    # A bare list of entries
    [{"name": "GetUser", "path": "users/get", ...}, ...]

Each entry is validated with :meth:`Operation.model_validate`, so the
camelCase / PascalCase spellings listed on :class:`~postforge.models.Operation`
are accepted (``pathName``, ``OperationType``, ``VariablesSchema``, ...).
Input order is preserved; the collection assembler relies on it.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError

from postforge.exceptions import InvalidUsageError, OperationsLoadError
from postforge.models import Operation


def extract_operations(raw: Any) -> list[Operation]:
    """Validate every entry of *raw* into an :class:`Operation`.

    Args:
        raw: The document returned by
            :func:`~postforge.parser.loader.load_document`.

    Returns:
        The operations in document order.

    Raises:
        OperationsLoadError: If the document has no operation list, or an
            entry is not a mapping or fails validation.  The message names
            the index of the offending entry.
    """
    entries = _operation_entries(raw)
    operations: list[Operation] = []

    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise OperationsLoadError(
                f"Operation #{index} must be an object (got {type(entry).__name__})"
            )
        try:
            operations.append(Operation.model_validate(entry))
        except ValidationError as exc:
            label = entry.get("name") or entry.get("Name") or f"#{index}"
            raise OperationsLoadError(
                f"Invalid operation {label}: {_summarise(exc)}"
            ) from exc

    return operations


def find_operation(operations: list[Operation], name: str) -> Operation:
    """Return the operation called *name* (or whose path is *name*).

    Raises:
        InvalidUsageError: If no operation matches.
    """
    match: Optional[Operation] = None
    for operation in operations:
        if operation.name == name or operation.path == name:
            match = operation
            break
    if match is None:
        raise InvalidUsageError(f"Unknown operation: {name}")
    return match


def _operation_entries(raw: Any) -> list[Any]:
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        entries = raw.get("operations")
        if isinstance(entries, list):
            return entries
        raise OperationsLoadError(
            "Operations document must contain an 'operations' list"
        )
    raise OperationsLoadError(
        f"Operations document must be an object or a list (got {type(raw).__name__})"
    )


def _summarise(exc: ValidationError) -> str:
    """Render a validation error as ``field: message`` pairs on one line."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "entry"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)
