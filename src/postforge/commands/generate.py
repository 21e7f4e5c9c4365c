"""Generate command -- build a request collection from an operations document.

``postforge generate`` runs the whole pipeline: load the document, validate
the operations, assemble the Queries/Mutations folder tree, and write it as a
Postman v2.1 collection to ``--output`` (or stdout when omitted).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from postforge.exceptions import PostforgeError
from postforge.models import FolderStrategy
from postforge.output import debug, error, print_data, success, suggest, warning


def generate_command(
    source: str = typer.Argument(
        ..., help="Operations document: file path, URL, or '-' for stdin."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the collection to this file instead of stdout."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", "-u", help="Value of the apiBaseUrl collection variable."
    ),
    name: Optional[str] = typer.Option(
        None, "--name", help="Collection name."
    ),
    folder_strategy: Optional[FolderStrategy] = typer.Option(
        None,
        "--folder-strategy",
        case_sensitive=False,
        help="File requests under every path segment folder or only the parent one.",
    ),
) -> None:
    """Generate a Postman collection from declared operations.

    Example::

        postforge generate operations.json -o collection.json
        postforge generate - --base-url https://api.example.com < operations.yaml
    """
    from postforge.config import resolve_config
    from postforge.exporter import render_collection, write_collection
    from postforge.generator import assemble
    from postforge.parser import extract_operations, load_document

    try:
        config = resolve_config(
            cli_base_url=base_url,
            cli_name=name,
            cli_folder_strategy=folder_strategy.value if folder_strategy else None,
        )
        debug(f"Loading operations from {source}")
        operations = extract_operations(load_document(source))
        if not operations:
            warning(f"No operations declared in {source}; the collection will be empty")
        debug(
            f"Assembling {len(operations)} operations "
            f"(folder strategy: {config.folder_strategy.value})"
        )
        collection = assemble(
            operations,
            config.base_url,
            name=config.collection_name,
            description=config.collection_description,
            folder_strategy=config.folder_strategy,
        )

        if output is None:
            print_data(render_collection(collection).rstrip("\n"))
            return

        written = write_collection(collection, output)
    except PostforgeError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    queries = len(collection.queries.items)
    mutations = len(collection.mutations.items)
    success(
        f"Wrote {len(operations)} operations to {written} "
        f"({queries} query entries, {mutations} mutation entries)"
    )
    suggest("Import it in Postman: File > Import > Upload Files")
