"""Data models for documentation metadata attached to handlers.

Every decorator turns its options into one of these records and commits it
to the metadata store. The generator reads them back as a HandlerMetadata
aggregate.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel


class MetadataKind(str, Enum):
    """One category of documentation fragment."""

    OPERATION = "operation"
    RESPONSE = "responses"
    PARAM = "params"
    QUERY = "queries"
    BODY = "body"
    SECURITY = "security"
    TAG = "tags"
    ROUTE = "route"


class Primitive(BaseModel):
    """A primitive type reference such as 'string' or 'integer'."""

    name: str


class NamedStructural(BaseModel):
    """A named object type.

    Only instances with explicit ``properties`` are expanded into a real
    object schema; otherwise the generator emits a placeholder.
    """

    identifier: str
    properties: dict[str, Any] | None = None  # name -> type reference
    required: list[str] = []


class OperationMetadata(BaseModel):
    function_name: str
    summary: str
    description: str | None = None
    tags: list[str] = []
    operation_id: str | None = None
    deprecated: bool | None = None


class HeaderMetadata(BaseModel):
    """A response header declaration."""

    description: str | None = None
    required: bool | None = None
    type_ref: Any = None
    example: Any = None
    deprecated: bool | None = None


class ResponseMetadata(BaseModel):
    status: int
    description: str | None = None
    type_ref: Any = None
    example: Any = None
    headers: dict[str, HeaderMetadata] | None = None
    content: dict | None = None
    sequence_index: int


class ParamMetadata(BaseModel):
    """A path parameter."""

    name: str
    description: str | None = None
    required: bool = True
    type_ref: Any = None
    example: Any = None
    enum: list | None = None
    deprecated: bool | None = None
    location: Literal["path", "query"] = "path"
    sequence_index: int


class QueryMetadata(ParamMetadata):
    """A query-string parameter."""

    required: bool = False
    location: Literal["path", "query"] = "query"
    allow_empty_value: bool | None = None


class BodyMetadata(BaseModel):
    description: str | None = None
    type_ref: Any = None
    required: bool | None = None
    example: Any = None
    content: dict | None = None
    sequence_index: int


class SecurityMetadata(BaseModel):
    scheme_type: Literal["apiKey", "http", "oauth2", "openIdConnect"]
    name: str | None = None
    location: Literal["query", "header", "cookie"] | None = None
    scheme: str | None = None  # basic / bearer / ...
    bearer_format: str | None = None
    scopes: list[str] = []
    open_id_connect_url: str | None = None
    flows: dict | None = None
    description: str | None = None
    key: str | None = None  # name under components.securitySchemes
    sequence_index: int


class TagMetadata(BaseModel):
    name: str
    description: str | None = None
    external_docs_url: str | None = None
    sequence_index: int


class RouteMetadata(BaseModel):
    """Explicit path/method mapping, overriding name-based inference."""

    path: str | None = None
    method: str | None = None


class HandlerMetadata(BaseModel):
    """Everything known about one handler. Built on demand, never stored."""

    operation: OperationMetadata | None = None
    responses: list[ResponseMetadata] = []
    params: list[ParamMetadata] = []
    queries: list[QueryMetadata] = []
    body: BodyMetadata | None = None
    security: list[SecurityMetadata] = []
    tags: list[TagMetadata] = []
    route: RouteMetadata | None = None
