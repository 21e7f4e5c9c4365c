"""Canonical Pydantic models shared across all postforge modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`OutputConfig`, :class:`FolderStrategy` and :class:`GlobalConfig`.

**Operation models** -- produced by the operations loader and the schema
walker:
    :class:`OperationKind`, :class:`Operation` and :class:`ParameterPath`.

**Collection models** -- produced by the collection assembler and consumed by
the exporter:
    :class:`HTTPMethod`, :class:`Header`, :class:`QueryParam`,
    :class:`BodyField`, :class:`RequestBody`, :class:`RequestDescriptor`,
    :class:`RequestItem`, :class:`FolderNode`, :class:`CollectionVariable`
    and :class:`Collection`.

All models use Pydantic v2 with ``model_config`` where needed.
"""

from __future__ import annotations

import enum
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


BASE_URL_VARIABLE = "apiBaseUrl"
"""Name of the collection variable every request URL is templated with."""

DEFAULT_BASE_URL = "http://localhost:9991"

OUTPUT_FORMATS = ("auto", "json", "plain", "rich")


# --- Config ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )

    @field_validator("format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        if value not in OUTPUT_FORMATS:
            raise ValueError(f"must be one of {', '.join(OUTPUT_FORMATS)}")
        return value


class FolderStrategy(str, enum.Enum):
    """How a request is filed under the folders derived from its path.

    ``EVERY_SEGMENT`` places the request into one folder per non-final path
    segment (``a/b/op`` lands in both ``aQueries`` and ``bQueries``).
    ``PARENT_ONLY`` places it only into the folder of the segment right
    before the operation name (``bQueries``).
    """

    EVERY_SEGMENT = "every-segment"
    PARENT_ONLY = "parent-only"


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/postforge/config.json``.

    Loaded and saved by :func:`~postforge.config.load_global_config` and
    :func:`~postforge.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~postforge.config.resolve_config`
    for the full precedence chain.
    """

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description=f"Value bound to the {BASE_URL_VARIABLE} collection variable",
    )
    collection_name: str = Field(default="Operations")
    collection_description: str = Field(default="Your operations collection")
    folder_strategy: FolderStrategy = FolderStrategy.EVERY_SEGMENT
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Operations ---


class OperationKind(str, enum.Enum):
    """Whether an operation reads (query) or writes (mutation)."""

    QUERY = "query"
    MUTATION = "mutation"


# Numeric operation types of protobuf-generated manifests (0 query, 1 mutation,
# 2 subscription).
_NUMERIC_KINDS: dict[int, OperationKind] = {
    0: OperationKind.QUERY,
    1: OperationKind.MUTATION,
    2: OperationKind.QUERY,
}


class Operation(BaseModel):
    """A single declared API operation.

    Field aliases match the camelCase and PascalCase spellings operation
    manifests commonly use, so a raw manifest entry can be passed to
    :meth:`model_validate` directly.  ``kind`` is case-insensitive and also
    accepts the numeric operation types (``0`` query, ``1`` mutation, ``2``
    subscription).  Subscriptions are filed as queries (everything that is
    not a mutation is a read operation).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(validation_alias=AliasChoices("name", "Name"))
    path: str = Field(
        validation_alias=AliasChoices("path", "pathName", "PathName")
    )
    kind: OperationKind = Field(
        default=OperationKind.QUERY,
        validation_alias=AliasChoices(
            "kind", "operationType", "OperationType"
        ),
    )
    variables_schema: Union[dict[str, Any], bool] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        validation_alias=AliasChoices(
            "variables_schema", "variablesSchema", "VariablesSchema", "schema"
        ),
    )

    @field_validator("kind", mode="before")
    @classmethod
    def _normalise_kind(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return _NUMERIC_KINDS.get(value, value)
        if isinstance(value, str) and not isinstance(value, OperationKind):
            lowered = value.strip().lower()
            if lowered == "subscription":
                return OperationKind.QUERY
            return lowered
        return value


class ParameterPath(BaseModel):
    """One addressable leaf parameter of an operation's variables.

    ``path`` holds the property names leading to the leaf, with array
    indices as stringified integers.
    """

    path: list[str] = Field(default_factory=list)
    required: bool = False
    type: str = "any"

    @property
    def key(self) -> str:
        """Segments joined with ``.`` (sjson path syntax, e.g. ``user.tags.0``)."""
        return ".".join(self.path)

    @property
    def description(self) -> str:
        return f"Type {self.type}, {'Required' if self.required else 'Optional'}"


# --- Collection ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods used by generated requests."""

    GET = "GET"
    POST = "POST"


class Header(BaseModel):
    key: str
    value: str


class QueryParam(BaseModel):
    """A query-string parameter of a query request."""

    key: str
    value: str = ""
    disabled: bool = True
    description: Optional[str] = None


class BodyField(BaseModel):
    """A url-encoded body field of a mutation request."""

    key: str
    value: str = ""
    disabled: bool = True
    description: Optional[str] = None
    type: str = "text"


class RequestBody(BaseModel):
    mode: str = "urlencoded"
    urlencoded: list[BodyField] = Field(default_factory=list)
    description: Optional[str] = None


class RequestDescriptor(BaseModel):
    """Method, target URL and parameters of one generated request."""

    method: HTTPMethod
    url: str
    headers: list[Header] = Field(default_factory=list)
    query: list[QueryParam] = Field(default_factory=list)
    body: Optional[RequestBody] = None


class RequestItem(BaseModel):
    """A request entry in the collection tree.

    ``id`` is the operation name and ``name`` the last segment of the
    operation path.
    """

    id: str
    name: str
    request: RequestDescriptor


class FolderNode(BaseModel):
    """A named container of requests and nested folders, in insertion order."""

    name: str
    items: list[Union[RequestItem, FolderNode]] = Field(default_factory=list)

    def requests(self) -> list[RequestItem]:
        """Return the request items directly inside this folder."""
        return [item for item in self.items if isinstance(item, RequestItem)]

    def folders(self) -> list[FolderNode]:
        """Return the folders directly inside this folder."""
        return [item for item in self.items if isinstance(item, FolderNode)]

    def find_folder(self, name: str) -> Optional[FolderNode]:
        for folder in self.folders():
            if folder.name == name:
                return folder
        return None


FolderNode.model_rebuild()


class CollectionVariable(BaseModel):
    key: str
    value: str
    type: str = "string"


class Collection(BaseModel):
    """Root of a generated request collection.

    ``items`` always holds exactly two folders, ``Queries`` then
    ``Mutations``, and ``variables`` a single ``apiBaseUrl`` entry.
    """

    id: str
    name: str
    description: Optional[str] = None
    items: list[FolderNode] = Field(default_factory=list)
    variables: list[CollectionVariable] = Field(default_factory=list)

    @property
    def queries(self) -> FolderNode:
        return self.items[0]

    @property
    def mutations(self) -> FolderNode:
        return self.items[1]
