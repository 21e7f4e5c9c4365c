"""Flatten an operation's JSON-Schema into addressable parameter paths.

The single public entry point is :func:`extract_paths`.  It walks a
``variables`` JSON-Schema (draft-07 subset: ``type``, ``properties``,
``required``, ``items``) and returns one :class:`~postforge.models.ParameterPath`
per scalar leaf, shallowest first.

**Walk rules**

* Boolean schemas (``true`` / ``false``) are opaque and contribute nothing.
* Arrays contribute the paths of their item schema under the index segment
  ``"0"``; only the first element is modelled.  Tuple-style ``items`` lists
  are walked once per index.  Array members are never required.
* Nodes without a ``type`` are skipped, even when they declare
  ``properties``.  Composition keywords (``oneOf``, ``allOf``, ``anyOf``)
  and ``$ref`` are therefore ignored.
* Objects recurse into each property; the object itself is not a leaf.
* Every other typed node is a leaf.  Its ``type`` is reported when it is a
  plain string and as ``"any"`` otherwise (e.g. ``["string", "null"]``).

Leaves are always emitted with ``required=False``.  The inherited required
flag is still computed during the walk but not reported.

Paths use `sjson path syntax <https://github.com/tidwall/sjson#path-syntax>`_
once joined with ``.`` (see :attr:`ParameterPath.key`).
"""

from __future__ import annotations

import logging
from typing import Any

from postforge.models import ParameterPath

logger = logging.getLogger(__name__)

# First (and only) array index modelled for list parameters.
_ARRAY_INDEX = "0"


def extract_paths(schema: Any) -> list[ParameterPath]:
    """Return the parameter paths of *schema*, sorted by segment count.

    The sort is stable, so paths of equal depth keep the order in which the
    walk reached them (property declaration order).

    Args:
        schema: A JSON-Schema node -- usually an operation's variables
            schema.  Anything that is not a mapping contributes nothing.

    Returns:
        A fresh list of :class:`~postforge.models.ParameterPath`.

    Example::

        >>> [p.key for p in extract_paths({
        ...     "type": "object",
        ...     "properties": {
        ...         "filter": {"type": "object", "properties": {"name": {"type": "string"}}},
        ...         "id": {"type": "string"},
        ...     },
        ... })]
        ['id', 'filter.name']
    """
    paths = _walk(schema, [], False)
    return sorted(paths, key=lambda p: len(p.path))


def _walk(node: Any, segments: list[str], required: bool) -> list[ParameterPath]:
    """Collect the leaves below *node* in walk order.

    Each call returns a new list; the caller concatenates the results of
    its children.
    """
    if not isinstance(node, dict):
        # Boolean schemas or garbage -- nothing addressable.
        return []

    node_type = node.get("type")

    if node_type == "array":
        return _walk_array(node.get("items"), segments)

    if not node_type:
        if node:
            logger.debug("Skipping untyped schema node at %r", ".".join(segments))
        return []

    properties = node.get("properties")
    if node_type == "object" or isinstance(properties, dict):
        if not isinstance(properties, dict):
            return []
        required_names = node.get("required")
        if not isinstance(required_names, list):
            # Draft-03 style booleans and other shapes mark nothing required.
            required_names = []
        paths: list[ParameterPath] = []
        for name, child in properties.items():
            child_required = name in required_names or required
            paths.extend(_walk(child, [*segments, name], child_required))
        return paths

    return [
        ParameterPath(
            path=segments,
            # Never required, even below a required property.
            required=False,
            type=node_type if isinstance(node_type, str) else "any",
        )
    ]


def _walk_array(items: Any, segments: list[str]) -> list[ParameterPath]:
    if isinstance(items, bool) or not items:
        return []

    if isinstance(items, list):
        paths: list[ParameterPath] = []
        for index, item in enumerate(items):
            paths.extend(_walk(item, [*segments, str(index)], False))
        return paths

    return _walk(items, [*segments, _ARRAY_INDEX], False)
