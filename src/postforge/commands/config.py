"""Config commands -- view and modify the global postforge settings.

* ``postforge config show`` prints the effective configuration after the
  full precedence chain (global file, ``./postforge.json``, environment).
* ``postforge config set KEY VALUE`` updates the global config file.
* ``postforge config path`` prints where the global config file lives.
"""

from __future__ import annotations

import typer

from postforge.exceptions import PostforgeError
from postforge.output import error, format_response, print_data, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    from postforge.config import resolve_config

    try:
        config = resolve_config()
    except PostforgeError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        ...,
        help="base_url, collection_name, collection_description, folder_strategy or output.format.",
    ),
    value: str = typer.Argument(..., help="New value."),
) -> None:
    """Set a global configuration value.

    Example::

        postforge config set base_url https://api.example.com
        postforge config set folder_strategy parent-only
    """
    from postforge.config import set_config_value

    try:
        set_config_value(key, value)
    except PostforgeError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success(f"Set {key} = {value}")


@config_app.command("path")
def config_path() -> None:
    """Print the path of the global configuration file."""
    from postforge.config import global_config_path

    print_data(str(global_config_path()))
