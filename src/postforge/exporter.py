"""Serialise a :class:`~postforge.models.Collection` to Postman Collection v2.1.

:func:`collection_to_postman` maps the abstract collection tree onto the
Postman v2.1 JSON layout::

    {
      "info": {"_postman_id": ..., "name": ..., "description": ..., "schema": ...},
      "item": [{"name": "Queries", "item": [...]}, {"name": "Mutations", "item": [...]}],
      "variable": [{"key": "apiBaseUrl", "value": "...", "type": "string"}]
    }

:func:`write_collection` writes that document to disk atomically.
"""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import Any, Union

from postforge.config import atomic_write
from postforge.exceptions import ExportError
from postforge.models import (
    Collection,
    FolderNode,
    RequestDescriptor,
    RequestItem,
)

POSTMAN_SCHEMA_URL = (
    "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
)


def collection_to_postman(collection: Collection) -> dict[str, Any]:
    """Return *collection* as a Postman v2.1 collection dict.

    The ``_postman_id`` is derived from the collection name so that
    re-exporting the same collection keeps its identity on re-import.
    """
    info: dict[str, Any] = {
        "_postman_id": str(uuid.uuid5(uuid.NAMESPACE_URL, f"postforge:{collection.id}")),
        "name": collection.name,
        "schema": POSTMAN_SCHEMA_URL,
    }
    if collection.description:
        info["description"] = collection.description

    return {
        "info": info,
        "item": [_folder_to_postman(folder) for folder in collection.items],
        "variable": [v.model_dump() for v in collection.variables],
    }


def render_collection(collection: Collection) -> str:
    """Return the Postman JSON text of *collection* (2-space indent)."""
    return json.dumps(collection_to_postman(collection), indent=2, ensure_ascii=False) + "\n"


def write_collection(collection: Collection, path: Union[str, Path]) -> Path:
    """Write *collection* as Postman JSON to *path*.

    Returns:
        The path written to.

    Raises:
        ExportError: If the file cannot be written.
    """
    target = Path(path)
    try:
        atomic_write(target, render_collection(collection))
    except OSError as exc:
        raise ExportError(f"Failed to write collection to {target}: {exc}") from exc
    return target


def _folder_to_postman(folder: FolderNode) -> dict[str, Any]:
    return {
        "name": folder.name,
        "item": [_entry_to_postman(entry) for entry in folder.items],
    }


def _entry_to_postman(entry: Union[RequestItem, FolderNode]) -> dict[str, Any]:
    if isinstance(entry, FolderNode):
        return _folder_to_postman(entry)
    return {
        "id": entry.id,
        "name": entry.name,
        "request": _request_to_postman(entry.request),
        "response": [],
    }


def _request_to_postman(request: RequestDescriptor) -> dict[str, Any]:
    host, _, rest = request.url.partition("/")
    url: dict[str, Any] = {
        "raw": request.url,
        "host": [host],
        "path": rest.split("/") if rest else [],
    }
    if request.query:
        url["query"] = [p.model_dump(exclude_none=True) for p in request.query]
        # Postman leaves disabled parameters out of the raw URL.
        enabled = [p for p in request.query if not p.disabled]
        if enabled:
            url["raw"] = request.url + "?" + "&".join(f"{p.key}={p.value}" for p in enabled)

    result: dict[str, Any] = {
        "method": request.method.value,
        "header": [h.model_dump() for h in request.headers],
        "url": url,
    }
    if request.body is not None:
        result["body"] = request.body.model_dump(exclude_none=True)
    return result
