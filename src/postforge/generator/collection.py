"""Assemble a request collection from a list of operations.

This is the core algorithm of postforge.  It takes the declared operations
and produces a :class:`~postforge.models.Collection` whose folders mirror the
operations' path hierarchy, split into reads and writes.

**Algorithm summary**

1. Flatten each operation's variables schema with
   :func:`~postforge.parser.schema_paths.extract_paths`.
2. Build a :class:`~postforge.models.RequestItem` (GET + query string for
   queries, POST + url-encoded body for mutations).
3. Split the operation path on ``/``.  The last segment names the request.
   A single-segment path lands directly in the ``Queries`` / ``Mutations``
   root.  Otherwise the item is appended to a folder derived from each
   non-final segment (``users`` -> ``usersQueries``), created on first use
   and shared by every later operation that derives the same name.

Folders derived from segments sit directly under their kind root; the tree
is never deeper than two levels.  Path strings are not validated: an empty
segment (``"/get"``, ``"a//b"``) produces a folder named after the suffix
alone.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from postforge.generator.requests import build_request
from postforge.models import (
    BASE_URL_VARIABLE,
    Collection,
    CollectionVariable,
    FolderNode,
    FolderStrategy,
    Operation,
    OperationKind,
    RequestItem,
)
from postforge.parser.schema_paths import extract_paths

logger = logging.getLogger(__name__)

QUERIES_FOLDER = "Queries"
MUTATIONS_FOLDER = "Mutations"

# Root folder name per kind, doubling as the suffix of derived folder names.
KIND_FOLDERS: dict[OperationKind, str] = {
    OperationKind.QUERY: QUERIES_FOLDER,
    OperationKind.MUTATION: MUTATIONS_FOLDER,
}


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def assemble(
    operations: Sequence[Operation],
    base_url: str,
    *,
    name: str = "Operations",
    description: Optional[str] = "Your operations collection",
    folder_strategy: FolderStrategy = FolderStrategy.EVERY_SEGMENT,
) -> Collection:
    """Build a :class:`~postforge.models.Collection` from *operations*.

    Operations are processed in input order.  The returned collection holds
    the ``Queries`` root followed by the ``Mutations`` root, whatever the
    interleaving of kinds in the input, and a single ``apiBaseUrl``
    variable bound to *base_url*.

    Args:
        operations: The operations to file, in the order items should
            appear inside their folders.
        base_url: Value of the ``apiBaseUrl`` collection variable.
        name: Collection name (also used as its id).
        description: Collection description.
        folder_strategy: ``EVERY_SEGMENT`` files an item under a folder for
            each non-final path segment; a segment repeated in the path
            (``a/a/op``) appends the item to its folder once per occurrence.
            ``PARENT_ONLY`` only under the segment right before the
            operation name.

    Returns:
        A freshly built collection.  Nothing is shared with previous runs.

    Example::

        collection = assemble(operations, "http://localhost:9991")
        users = collection.queries.find_folder("usersQueries")
    """
    roots = {kind: FolderNode(name=folder) for kind, folder in KIND_FOLDERS.items()}
    lookup: dict[tuple[OperationKind, str], FolderNode] = {}

    for operation in operations:
        display_name, folder_segments = split_path(operation.path, folder_strategy)
        item = build_item(operation, display_name)
        root = roots[operation.kind]

        if not folder_segments:
            root.items.append(item)
            continue

        if len(folder_segments) > 1:
            logger.debug(
                "Operation %s is filed under %d folders: %s",
                operation.name,
                len(folder_segments),
                ", ".join(folder_segments),
            )

        for segment in folder_segments:
            folder_name = folder_name_for(segment, operation.kind)
            folder = lookup.get((operation.kind, folder_name))
            if folder is None:
                logger.debug("Creating folder %s under %s", folder_name, root.name)
                folder = FolderNode(name=folder_name, items=[item])
                lookup[(operation.kind, folder_name)] = folder
                root.items.append(folder)
            else:
                folder.items.append(item)

    return Collection(
        id=name,
        name=name,
        description=description,
        items=[roots[OperationKind.QUERY], roots[OperationKind.MUTATION]],
        variables=[CollectionVariable(key=BASE_URL_VARIABLE, value=base_url)],
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def build_item(operation: Operation, display_name: str) -> RequestItem:
    """Build the request item for *operation*, named *display_name*."""
    paths = extract_paths(operation.variables_schema)
    return RequestItem(
        id=operation.name,
        name=display_name,
        request=build_request(operation, paths),
    )


def split_path(
    path: str,
    folder_strategy: FolderStrategy = FolderStrategy.EVERY_SEGMENT,
) -> tuple[str, list[str]]:
    """Split an operation path into its display name and folder segments.

    Example::

        >>> split_path("admin/users/create")
        ('create', ['admin', 'users'])
        >>> split_path("admin/users/create", FolderStrategy.PARENT_ONLY)
        ('create', ['users'])
        >>> split_path("health")
        ('health', [])
    """
    *folders, display_name = path.split("/")
    if folder_strategy == FolderStrategy.PARENT_ONLY:
        folders = folders[-1:]
    return display_name, folders


def folder_name_for(segment: str, kind: OperationKind) -> str:
    """Return the folder name derived from *segment* (``users`` -> ``usersQueries``)."""
    return f"{segment}{KIND_FOLDERS[kind]}"
