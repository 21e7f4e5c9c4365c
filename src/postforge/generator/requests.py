"""Build request descriptors from an operation and its parameter paths.

Queries become ``GET`` requests with one query-string parameter per path;
mutations become ``POST`` requests with one url-encoded body field per path.
Both target ``{{apiBaseUrl}}/operations/<operation path>``.

Every parameter is rendered with an empty value, disabled unless the path is
required, and described as ``Type <type>, Required|Optional`` so the user
can tick the ones they want to send.
"""

from __future__ import annotations

from postforge.models import (
    BASE_URL_VARIABLE,
    BodyField,
    Header,
    HTTPMethod,
    Operation,
    OperationKind,
    ParameterPath,
    QueryParam,
    RequestBody,
    RequestDescriptor,
)

BODY_DESCRIPTION = "Operation variables, one field per parameter path"


def operation_url(path: str) -> str:
    """Return the templated URL of the operation at *path*.

    Example::

        >>> operation_url("users/get")
        '{{apiBaseUrl}}/operations/users/get'
    """
    return f"{{{{{BASE_URL_VARIABLE}}}}}/operations/{path}"


def build_request(operation: Operation, paths: list[ParameterPath]) -> RequestDescriptor:
    """Build the request for *operation*, dispatching on its kind."""
    url = operation_url(operation.path)
    if operation.kind == OperationKind.MUTATION:
        return mutation_request(url, paths)
    return query_request(url, paths)


def query_request(url: str, paths: list[ParameterPath]) -> RequestDescriptor:
    return RequestDescriptor(
        method=HTTPMethod.GET,
        url=url,
        headers=[Header(key="Content-Type", value="application/json")],
        query=[
            QueryParam(
                key=p.key,
                disabled=not p.required,
                description=p.description,
            )
            for p in paths
        ],
    )


def mutation_request(url: str, paths: list[ParameterPath]) -> RequestDescriptor:
    return RequestDescriptor(
        method=HTTPMethod.POST,
        url=url,
        body=RequestBody(
            mode="urlencoded",
            urlencoded=[
                BodyField(
                    key=p.key,
                    disabled=not p.required,
                    description=p.description,
                )
                for p in paths
            ],
            description=BODY_DESCRIPTION,
        ),
    )
