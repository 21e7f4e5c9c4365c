"""Collection generator -- build a request collection from parsed operations.

This sub-package is responsible for the second half of the postforge
pipeline: taking :class:`~postforge.models.Operation` records (produced by the
parser) and filing one request per operation into a folder tree split by
operation kind.

Typical usage::

    from postforge.generator import assemble

    collection = assemble(operations, "http://localhost:9991")

Sub-modules:

* :mod:`~postforge.generator.requests` -- build the GET/POST request
  descriptor of one operation from its parameter paths.
* :mod:`~postforge.generator.collection` -- the core algorithm that derives
  folders from operation paths and merges them by name.
"""

from postforge.generator.collection import assemble
from postforge.generator.requests import build_request

__all__ = ["assemble", "build_request"]
