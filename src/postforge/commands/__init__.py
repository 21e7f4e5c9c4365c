"""Built-in CLI sub-commands for postforge.

This package groups the Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~postforge.commands.generate` -- build and write a collection.
* :mod:`~postforge.commands.inspect` -- list operations, parameter paths,
  and the folder layout.
* :mod:`~postforge.commands.config` -- view and modify global settings.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``inspect`` and ``config``) or a plain callback
function registered directly on the root app (``generate``).
"""
