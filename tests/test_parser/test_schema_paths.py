"""Tests for postforge.parser.schema_paths.

Covers:
- Flat and nested objects flatten to one path per scalar leaf
- Output is sorted by segment count, stable for equal depth
- Arrays use index segment "0"; tuple items use one index each
- Every emitted path has required=False, even for required properties
- Boolean, untyped, and composition-only nodes contribute nothing
- Empty objects contribute nothing
- Non-string types are reported as "any"
"""

from __future__ import annotations

from typing import Any

import pytest

from postforge.models import ParameterPath
from postforge.parser.schema_paths import _walk, extract_paths


def _obj(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required is not None:
        schema["required"] = required
    return schema


def _keys(paths: list[ParameterPath]) -> list[str]:
    return [p.key for p in paths]


# ---------------------------------------------------------------------------
# Objects
# ---------------------------------------------------------------------------


class TestObjects:
    """Object schemas flatten into their scalar leaves."""

    def test_single_required_string(self) -> None:
        paths = extract_paths(_obj({"id": {"type": "string"}}, required=["id"]))
        assert len(paths) == 1
        assert paths[0].path == ["id"]
        assert paths[0].required is False
        assert paths[0].type == "string"

    def test_leaf_count_matches_scalar_properties(self) -> None:
        schema = _obj({
            "a": {"type": "string"},
            "b": {"type": "integer"},
            "nested": _obj({
                "c": {"type": "boolean"},
                "deeper": _obj({"d": {"type": "number"}}),
            }),
            "empty": _obj({}),
        })
        paths = extract_paths(schema)
        assert len(paths) == 4
        assert sorted(_keys(paths)) == ["a", "b", "nested.c", "nested.deeper.d"]

    def test_object_node_itself_not_emitted(self) -> None:
        paths = extract_paths(_obj({"filter": _obj({"name": {"type": "string"}})}))
        assert _keys(paths) == ["filter.name"]

    def test_empty_properties_emits_nothing(self) -> None:
        assert extract_paths(_obj({})) == []

    def test_object_without_properties_emits_nothing(self) -> None:
        assert extract_paths({"type": "object"}) == []

    def test_properties_without_object_type_still_walked(self) -> None:
        schema = {"type": ["object", "null"], "properties": {"x": {"type": "string"}}}
        assert _keys(extract_paths(schema)) == ["x"]

    def test_types_are_preserved(self) -> None:
        schema = _obj({
            "s": {"type": "string"},
            "i": {"type": "integer"},
            "n": {"type": "number"},
            "b": {"type": "boolean"},
        })
        assert [p.type for p in extract_paths(schema)] == ["string", "integer", "number", "boolean"]

    def test_type_list_reported_as_any(self) -> None:
        paths = extract_paths(_obj({"maybe": {"type": ["string", "null"]}}))
        assert paths[0].type == "any"


# ---------------------------------------------------------------------------
# Required flag
# ---------------------------------------------------------------------------


class TestRequiredFlag:
    """No leaf is ever marked required."""

    def test_top_level_required_is_not_emitted(self) -> None:
        schema = _obj(
            {"id": {"type": "string"}, "name": {"type": "string"}},
            required=["id", "name"],
        )
        assert all(p.required is False for p in extract_paths(schema))

    def test_nested_required_is_not_emitted(self) -> None:
        schema = _obj(
            {"input": _obj({"name": {"type": "string"}}, required=["name"])},
            required=["input"],
        )
        assert [p.required for p in extract_paths(schema)] == [False]

    def test_walk_emits_unrequired_leaves(self) -> None:
        """Leaves under a required parent drop the inherited flag."""
        schema = _obj({"input": _obj({"name": {"type": "string"}})}, required=["input"])
        assert _walk(schema, [], False) == [
            ParameterPath(path=["input", "name"], required=False, type="string")
        ]


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


class TestArrays:
    """Array schemas model only their first element."""

    def test_array_of_scalars_uses_index_zero(self) -> None:
        paths = extract_paths(_obj({"tags": {"type": "array", "items": {"type": "string"}}}))
        assert len(paths) == 1
        assert paths[0].path == ["tags", "0"]
        assert paths[0].type == "string"
        assert paths[0].required is False

    def test_required_array_members_are_not_required(self) -> None:
        schema = _obj(
            {"ids": {"type": "array", "items": {"type": "integer"}}},
            required=["ids"],
        )
        assert extract_paths(schema)[0].required is False

    def test_array_of_objects(self) -> None:
        schema = _obj({
            "users": {
                "type": "array",
                "items": _obj({"name": {"type": "string"}, "age": {"type": "integer"}}),
            }
        })
        assert _keys(extract_paths(schema)) == ["users.0.name", "users.0.age"]

    def test_nested_arrays(self) -> None:
        schema = _obj({
            "matrix": {"type": "array", "items": {"type": "array", "items": {"type": "number"}}}
        })
        assert _keys(extract_paths(schema)) == ["matrix.0.0"]

    def test_top_level_array(self) -> None:
        paths = extract_paths({"type": "array", "items": {"type": "string"}})
        assert paths[0].path == ["0"]

    def test_tuple_items_walked_per_index(self) -> None:
        schema = _obj({
            "pair": {"type": "array", "items": [{"type": "string"}, {"type": "integer"}]}
        })
        paths = extract_paths(schema)
        assert _keys(paths) == ["pair.0", "pair.1"]
        assert [p.type for p in paths] == ["string", "integer"]

    @pytest.mark.parametrize("items", [True, False, None, {}])
    def test_boolean_or_missing_items_contribute_nothing(self, items: Any) -> None:
        array: dict[str, Any] = {"type": "array"}
        if items is not None:
            array["items"] = items
        assert extract_paths(_obj({"list": array})) == []


# ---------------------------------------------------------------------------
# Ignored nodes
# ---------------------------------------------------------------------------


class TestIgnoredNodes:
    """Nodes that are not addressable contribute nothing and never raise."""

    @pytest.mark.parametrize("schema", [True, False, None, "string", 42, []])
    def test_non_mapping_schema(self, schema: Any) -> None:
        assert extract_paths(schema) == []

    def test_untyped_node_is_skipped(self) -> None:
        schema = _obj({"anything": {}, "id": {"type": "string"}})
        assert _keys(extract_paths(schema)) == ["id"]

    def test_untyped_node_with_properties_is_skipped(self) -> None:
        schema = {"properties": {"id": {"type": "string"}}}
        assert extract_paths(schema) == []

    def test_composition_keywords_are_ignored(self) -> None:
        schema = _obj({
            "choice": {"oneOf": [{"type": "string"}, {"type": "integer"}]},
            "ref": {"$ref": "#/definitions/User"},
            "all": {"allOf": [{"type": "string"}]},
            "id": {"type": "string"},
        })
        assert _keys(extract_paths(schema)) == ["id"]

    def test_boolean_property_schema(self) -> None:
        schema = _obj({"flag": True, "id": {"type": "string"}})
        assert _keys(extract_paths(schema)) == ["id"]

    def test_missing_required_list_is_tolerated(self) -> None:
        schema = {"type": "object", "properties": {"id": {"type": "string"}}, "required": None}
        assert _keys(extract_paths(schema)) == ["id"]

    @pytest.mark.parametrize("required", [True, "abc", {}, {"a": True}])
    def test_non_list_required_is_tolerated(self, required: Any) -> None:
        schema = {
            "type": "object",
            "properties": {"a": {"type": "string"}, "input": _obj({"b": {"type": "integer"}})},
            "required": required,
        }
        assert extract_paths(schema) == [
            ParameterPath(path=["a"], required=False, type="string"),
            ParameterPath(path=["input", "b"], required=False, type="integer"),
        ]


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestOrdering:
    """Paths are sorted shallowest first, stable for equal depth."""

    def test_sorted_by_segment_count(self) -> None:
        schema = _obj({
            "deep": _obj({"deeper": _obj({"leaf": {"type": "string"}})}),
            "mid": _obj({"leaf": {"type": "string"}}),
            "top": {"type": "string"},
        })
        paths = extract_paths(schema)
        assert _keys(paths) == ["top", "mid.leaf", "deep.deeper.leaf"]
        lengths = [len(p.path) for p in paths]
        assert lengths == sorted(lengths)

    def test_equal_depth_keeps_declaration_order(self) -> None:
        schema = _obj({
            "b": {"type": "string"},
            "nested": _obj({"z": {"type": "string"}, "a": {"type": "string"}}),
            "a": {"type": "string"},
        })
        assert _keys(extract_paths(schema)) == ["b", "a", "nested.z", "nested.a"]

    def test_returns_fresh_lists(self) -> None:
        schema = _obj({"id": {"type": "string"}})
        first = extract_paths(schema)
        first.append(ParameterPath(path=["extra"]))
        assert _keys(extract_paths(schema)) == ["id"]


# ---------------------------------------------------------------------------
# ParameterPath helpers
# ---------------------------------------------------------------------------


class TestParameterPath:
    def test_key_joins_segments(self) -> None:
        assert ParameterPath(path=["user", "tags", "0"]).key == "user.tags.0"

    def test_description_optional(self) -> None:
        assert ParameterPath(path=["id"], type="string").description == "Type string, Optional"

    def test_description_required(self) -> None:
        path = ParameterPath(path=["id"], required=True, type="integer")
        assert path.description == "Type integer, Required"
