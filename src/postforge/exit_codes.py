"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~postforge.exceptions.PostforgeError` subclass.
Build scripts can inspect the exit code to tell a bad operations document
apart from a failed write without parsing stderr.

Example::

    $ postforge generate operations.json -o collection.json
    $ echo $?
    7   # EXIT_OPERATIONS_LOAD_ERROR -- the document could not be parsed
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_OPERATIONS_LOAD_ERROR = 7
"""The operations document could not be loaded, parsed, or validated."""

EXIT_EXPORT_ERROR = 8
"""The generated collection could not be written."""

EXIT_CANCELLED = 130
"""The command was interrupted with Ctrl-C."""
