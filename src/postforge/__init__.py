"""postforge -- Generate Postman request collections from declared API operations.

Each operation declares a name, a slash-delimited path, a kind (query or
mutation) and a JSON-Schema for its input variables.  postforge flattens every
schema into parameter paths, builds one request per operation, and files the
requests into ``Queries`` / ``Mutations`` folders derived from the operation
paths.

Typical workflow::

    postforge generate operations.json -o collection.json

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    parser: Operation loading and JSON-Schema path extraction.
    generator: Request building and collection assembly.
    exporter: Postman v2.1 serialisation.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
