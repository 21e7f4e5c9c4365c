"""Exception hierarchy for postforge.

All exceptions inherit from :class:`PostforgeError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`postforge.exit_codes`.
The top-level error handler in :func:`postforge.app.main` catches
``PostforgeError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

The collection core (:mod:`postforge.parser.schema_paths` and
:mod:`postforge.generator.collection`) never raises these: malformed schema
nodes and odd path strings are tolerated there.  Errors only come from the
I/O layers around it.

Subclass hierarchy::

    PostforgeError (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- OperationsLoadError   (exit 7)
    +-- ExportError           (exit 8)
    +-- ConfigError           (exit 1)
"""

from postforge.exit_codes import (
    EXIT_EXPORT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_OPERATIONS_LOAD_ERROR,
)


class PostforgeError(Exception):
    """Base exception for all postforge errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`postforge.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(PostforgeError):
    """Raised for invalid CLI arguments (unknown operation, bad option value)."""

    exit_code = EXIT_INVALID_USAGE


class OperationsLoadError(PostforgeError):
    """Raised when the operations document cannot be read, parsed, or validated."""

    exit_code = EXIT_OPERATIONS_LOAD_ERROR


class ExportError(PostforgeError):
    """Raised when a collection cannot be serialised or written to disk."""

    exit_code = EXIT_EXPORT_ERROR


class ConfigError(PostforgeError):
    """Raised for configuration problems (invalid JSON, unknown keys, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
