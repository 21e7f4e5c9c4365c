"""Inspect commands -- examine declared operations and their parameters.

Provides the ``postforge inspect`` sub-command group with read-only
commands: ``operations`` lists every declared operation with its kind, path
and parameter count; ``params`` shows the flattened parameter paths of one
operation; ``tree`` prints the folder layout a collection would get.
"""

from __future__ import annotations

from typing import Optional

import typer

from postforge.exceptions import PostforgeError
from postforge.models import FolderNode, FolderStrategy, Operation, RequestItem
from postforge.output import error, get_output


inspect_app = typer.Typer(no_args_is_help=True)


def _load_operations(source: str) -> list[Operation]:
    """Load and validate the operations of *source*.

    Raises:
        typer.Exit: With the error's exit code when loading fails.
    """
    from postforge.parser import extract_operations, load_document

    try:
        return extract_operations(load_document(source))
    except PostforgeError as exc:
        error(f"Failed to load operations: {exc}")
        raise typer.Exit(code=exc.exit_code) from None


@inspect_app.command("operations")
def inspect_operations(
    source: str = typer.Argument(..., help="Operations document: file path, URL, or '-'."),
) -> None:
    """List all declared operations.

    Example::

        postforge inspect operations operations.json
    """
    from postforge.parser import extract_paths

    operations = _load_operations(source)

    headers = ["Name", "Kind", "Path", "Params"]
    rows = [
        [
            op.name,
            op.kind.value,
            op.path,
            str(len(extract_paths(op.variables_schema))),
        ]
        for op in operations
    ]
    get_output().print_table(headers, rows, title=f"Operations ({len(rows)})")


@inspect_app.command("params")
def inspect_params(
    source: str = typer.Argument(..., help="Operations document: file path, URL, or '-'."),
    operation: str = typer.Argument(..., help="Operation name or path."),
) -> None:
    """Show the flattened parameter paths of one operation.

    Example::

        postforge inspect params operations.json GetUser
    """
    from postforge.parser import extract_paths, find_operation

    operations = _load_operations(source)
    try:
        op = find_operation(operations, operation)
    except PostforgeError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    headers = ["Key", "Type", "Required", "Depth"]
    rows = [
        [p.key, p.type, "Yes" if p.required else "", str(len(p.path))]
        for p in extract_paths(op.variables_schema)
    ]
    get_output().print_table(headers, rows, title=f"{op.name} -- Parameters ({len(rows)})")


@inspect_app.command("tree")
def inspect_tree(
    source: str = typer.Argument(..., help="Operations document: file path, URL, or '-'."),
    folder_strategy: Optional[FolderStrategy] = typer.Option(
        None, "--folder-strategy", case_sensitive=False, help="Folder filing strategy."
    ),
) -> None:
    """Print the folder layout of the collection, one entry per line.

    Example::

        postforge inspect tree operations.json
    """
    from postforge.config import resolve_config
    from postforge.generator import assemble

    operations = _load_operations(source)
    try:
        config = resolve_config(
            cli_folder_strategy=folder_strategy.value if folder_strategy else None,
        )
    except PostforgeError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    collection = assemble(
        operations, config.base_url, folder_strategy=config.folder_strategy
    )
    output = get_output()
    for root in collection.items:
        for line in _tree_lines(root, 0):
            output.print_data(line)


def _tree_lines(node: FolderNode, depth: int) -> list[str]:
    indent = "  " * depth
    lines = [f"{indent}{node.name}/"]
    for entry in node.items:
        if isinstance(entry, RequestItem):
            lines.append(f"{indent}  {entry.name} ({entry.request.method.value} {entry.id})")
        else:
            lines.extend(_tree_lines(entry, depth + 1))
    return lines
