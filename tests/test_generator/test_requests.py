"""Tests for postforge.generator.requests."""

from __future__ import annotations

from postforge.generator.requests import (
    BODY_DESCRIPTION,
    build_request,
    mutation_request,
    operation_url,
    query_request,
)
from postforge.models import HTTPMethod, OperationKind, ParameterPath


class TestOperationUrl:
    def test_templated_with_base_url_variable(self) -> None:
        assert operation_url("users/get") == "{{apiBaseUrl}}/operations/users/get"

    def test_path_is_not_normalised(self) -> None:
        assert operation_url("/get") == "{{apiBaseUrl}}/operations//get"


class TestQueryRequest:
    def test_get_with_json_header(self) -> None:
        req = query_request("u", [])
        assert req.method == HTTPMethod.GET
        assert [(h.key, h.value) for h in req.headers] == [("Content-Type", "application/json")]
        assert req.body is None

    def test_one_param_per_path(self) -> None:
        paths = [
            ParameterPath(path=["id"], type="string"),
            ParameterPath(path=["filter", "name"], type="string"),
        ]
        req = query_request("u", paths)
        assert [q.key for q in req.query] == ["id", "filter.name"]
        assert all(q.value == "" for q in req.query)

    def test_unrequired_params_are_disabled(self) -> None:
        req = query_request("u", [ParameterPath(path=["id"], type="string")])
        assert req.query[0].disabled is True
        assert req.query[0].description == "Type string, Optional"

    def test_required_params_are_enabled(self) -> None:
        req = query_request("u", [ParameterPath(path=["id"], required=True, type="string")])
        assert req.query[0].disabled is False
        assert req.query[0].description == "Type string, Required"


class TestMutationRequest:
    def test_post_with_urlencoded_body(self) -> None:
        req = mutation_request("u", [ParameterPath(path=["input", "tags", "0"], type="string")])
        assert req.method == HTTPMethod.POST
        assert req.query == []
        assert req.headers == []
        assert req.body is not None
        assert req.body.mode == "urlencoded"
        assert req.body.description == BODY_DESCRIPTION
        field = req.body.urlencoded[0]
        assert field.key == "input.tags.0"
        assert field.type == "text"
        assert field.disabled is True

    def test_no_paths_gives_empty_body(self) -> None:
        req = mutation_request("u", [])
        assert req.body is not None
        assert req.body.urlencoded == []


class TestBuildRequest:
    def test_query_dispatch(self, operation_factory) -> None:
        op = operation_factory("GetUser", "users/get")
        req = build_request(op, [ParameterPath(path=["id"], type="string")])
        assert req.method == HTTPMethod.GET
        assert req.url == "{{apiBaseUrl}}/operations/users/get"
        assert [q.key for q in req.query] == ["id"]

    def test_mutation_dispatch(self, operation_factory) -> None:
        op = operation_factory("CreateUser", "admin/create", OperationKind.MUTATION)
        req = build_request(op, [ParameterPath(path=["id"], type="string")])
        assert req.method == HTTPMethod.POST
        assert req.url == "{{apiBaseUrl}}/operations/admin/create"
        assert req.body is not None
        assert [f.key for f in req.body.urlencoded] == ["id"]
