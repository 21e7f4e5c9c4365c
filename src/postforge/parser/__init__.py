"""Operations parser -- load manifests and flatten variable schemas.

This sub-package is responsible for the first half of the postforge pipeline:
turning a raw operations document (JSON or YAML, local file, URL or stdin)
into :class:`~postforge.models.Operation` records, and flattening each
operation's variables schema into parameter paths.

Typical usage::

    from postforge.parser import load_document, extract_operations, extract_paths

    operations = extract_operations(load_document("operations.json"))
    for op in operations:
        print(op.name, [p.key for p in extract_paths(op.variables_schema)])

Sub-modules:

* :mod:`~postforge.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection.
* :mod:`~postforge.parser.extractor` -- validates document entries into
  :class:`~postforge.models.Operation` objects.
* :mod:`~postforge.parser.schema_paths` -- walks a JSON-Schema and produces
  :class:`~postforge.models.ParameterPath` lists.
"""

from postforge.parser.extractor import extract_operations, find_operation
from postforge.parser.loader import load_document
from postforge.parser.schema_paths import extract_paths

__all__ = ["load_document", "extract_operations", "find_operation", "extract_paths"]
