"""Decorators that attach OpenAPI documentation to handler functions.

Each decorator builds one metadata record and commits it to the metadata
store, then returns the handler unchanged::

    @api_operation("Get user by ID", tags=["users"])
    @api_param("userId", type="string")
    @api_response(200, description="User found", type="object")
    def get_user_handler(event, context):
        ...

Python applies stacked decorators bottom-up, and sequence indices follow
the order in which the decorators actually run.
"""

from typing import Any, Callable

from lambda_openapi.metadata.base import (
    BodyMetadata,
    HeaderMetadata,
    MetadataKind,
    OperationMetadata,
    ParamMetadata,
    QueryMetadata,
    ResponseMetadata,
    RouteMetadata,
    SecurityMetadata,
    TagMetadata,
)
from lambda_openapi.metadata.store import MetadataStore, handler_key
from lambda_openapi.metadata.store import store as default_store

Decorator = Callable[[Any], Any]


def _handler_name(handler: Any) -> str:
    return getattr(handler_key(handler), "__name__", None) or "anonymous"


def _build_headers(headers: dict[str, Any] | None) -> dict[str, HeaderMetadata] | None:
    if headers is None:
        return None
    result = {}
    for name, options in headers.items():
        if isinstance(options, HeaderMetadata):
            result[name] = options
            continue
        options = dict(options)
        if "type" in options:
            options["type_ref"] = options.pop("type")
        options.pop("name", None)
        result[name] = HeaderMetadata(**options)
    return result


def api_operation(
    summary: str,
    *,
    description: str | None = None,
    tags: list[str] | None = None,
    operation_id: str | None = None,
    deprecated: bool | None = None,
    store: MetadataStore | None = None,
) -> Decorator:
    """Declare the operation a handler implements. Re-applying overwrites."""
    target_store = store or default_store

    def decorator(handler):
        metadata = OperationMetadata(
            function_name=_handler_name(handler),
            summary=summary,
            description=description,
            tags=list(tags or []),
            operation_id=operation_id,
            deprecated=deprecated,
        )
        target_store.set_operation(handler, metadata)
        return handler

    return decorator


def api_response(
    status: int,
    *,
    description: str | None = None,
    type: Any = None,
    example: Any = None,
    headers: dict[str, Any] | None = None,
    content: dict | None = None,
    store: MetadataStore | None = None,
) -> Decorator:
    """Declare one response. Several responses may share a status code."""
    target_store = store or default_store

    def decorator(handler):
        metadata = ResponseMetadata(
            status=status,
            description=description,
            type_ref=type,
            example=example,
            headers=_build_headers(headers),
            content=content,
            sequence_index=target_store.next_sequence(MetadataKind.RESPONSE),
        )
        target_store.add_response(handler, metadata)
        return handler

    return decorator


def api_param(
    name: str,
    *,
    description: str | None = None,
    required: bool | None = None,
    type: Any = None,
    example: Any = None,
    enum: list | None = None,
    deprecated: bool | None = None,
    store: MetadataStore | None = None,
) -> Decorator:
    """Declare a path parameter. Required unless told otherwise."""
    target_store = store or default_store

    def decorator(handler):
        metadata = ParamMetadata(
            name=name,
            description=description,
            required=True if required is None else required,
            type_ref=type,
            example=example,
            enum=enum,
            deprecated=deprecated,
            sequence_index=target_store.next_sequence(MetadataKind.PARAM),
        )
        target_store.add_param(handler, metadata)
        return handler

    return decorator


def api_query(
    name: str,
    *,
    description: str | None = None,
    required: bool | None = None,
    type: Any = None,
    example: Any = None,
    enum: list | None = None,
    deprecated: bool | None = None,
    allow_empty_value: bool | None = None,
    store: MetadataStore | None = None,
) -> Decorator:
    """Declare a query-string parameter. Optional unless told otherwise."""
    target_store = store or default_store

    def decorator(handler):
        metadata = QueryMetadata(
            name=name,
            description=description,
            required=False if required is None else required,
            type_ref=type,
            example=example,
            enum=enum,
            deprecated=deprecated,
            allow_empty_value=allow_empty_value,
            sequence_index=target_store.next_sequence(MetadataKind.QUERY),
        )
        target_store.add_query(handler, metadata)
        return handler

    return decorator


def api_body(
    *,
    description: str | None = None,
    type: Any = None,
    required: bool | None = None,
    example: Any = None,
    content: dict | None = None,
    store: MetadataStore | None = None,
) -> Decorator:
    """Declare the request body. Re-applying overwrites."""
    target_store = store or default_store

    def decorator(handler):
        metadata = BodyMetadata(
            description=description,
            type_ref=type,
            required=required,
            example=example,
            content=content,
            sequence_index=target_store.next_sequence(MetadataKind.BODY),
        )
        target_store.set_body(handler, metadata)
        return handler

    return decorator


def api_security(
    type: str,
    *,
    name: str | None = None,
    location: str | None = None,
    scheme: str | None = None,
    bearer_format: str | None = None,
    scopes: list[str] | None = None,
    open_id_connect_url: str | None = None,
    flows: dict | None = None,
    description: str | None = None,
    key: str | None = None,
    store: MetadataStore | None = None,
) -> Decorator:
    """Declare a security requirement (apiKey, http, oauth2 or openIdConnect)."""
    target_store = store or default_store

    def decorator(handler):
        metadata = SecurityMetadata(
            scheme_type=type,
            name=name,
            location=location,
            scheme=scheme,
            bearer_format=bearer_format,
            scopes=list(scopes or []),
            open_id_connect_url=open_id_connect_url,
            flows=flows,
            description=description,
            key=key,
            sequence_index=target_store.next_sequence(MetadataKind.SECURITY),
        )
        target_store.add_security(handler, metadata)
        return handler

    return decorator


def api_tag(
    name: str,
    *,
    description: str | None = None,
    external_docs_url: str | None = None,
    store: MetadataStore | None = None,
) -> Decorator:
    target_store = store or default_store

    def decorator(handler):
        metadata = TagMetadata(
            name=name,
            description=description,
            external_docs_url=external_docs_url,
            sequence_index=target_store.next_sequence(MetadataKind.TAG),
        )
        target_store.add_tag(handler, metadata)
        return handler

    return decorator


def api_route(
    path: str | None = None,
    method: str | None = None,
    *,
    store: MetadataStore | None = None,
) -> Decorator:
    """Pin a handler's path and/or HTTP method instead of inferring them from its name."""
    target_store = store or default_store

    def decorator(handler):
        metadata = RouteMetadata(path=path, method=method.lower() if method else None)
        target_store.set_route(handler, metadata)
        return handler

    return decorator


# -- lookups ---------------------------------------------------------------


def has_api_operation(handler: Any) -> bool:
    return default_store.get_operation(handler) is not None


def get_api_operation(handler: Any) -> OperationMetadata | None:
    return default_store.get_operation(handler)


def has_api_response(handler: Any) -> bool:
    return bool(default_store.get_responses(handler))


def get_api_responses(handler: Any) -> list[ResponseMetadata]:
    return default_store.get_responses(handler)


def get_api_response(handler: Any, status: int) -> ResponseMetadata | None:
    return default_store.get_response(handler, status)


def has_api_param(handler: Any) -> bool:
    return bool(default_store.get_params(handler))


def get_api_params(handler: Any) -> list[ParamMetadata]:
    return default_store.get_params(handler)


def get_api_param(handler: Any, name: str) -> ParamMetadata | None:
    for param in default_store.get_params(handler):
        if param.name == name:
            return param
    return None


def get_api_queries(handler: Any) -> list[QueryMetadata]:
    return default_store.get_queries(handler)


# -- counter resets (for deterministic tests) ------------------------------


def reset_response_order() -> None:
    default_store.reset_sequence(MetadataKind.RESPONSE)


def reset_param_order() -> None:
    default_store.reset_sequence(MetadataKind.PARAM)


def reset_query_order() -> None:
    default_store.reset_sequence(MetadataKind.QUERY)


def reset_body_order() -> None:
    default_store.reset_sequence(MetadataKind.BODY)


def reset_security_order() -> None:
    default_store.reset_sequence(MetadataKind.SECURITY)


def reset_tag_order() -> None:
    default_store.reset_sequence(MetadataKind.TAG)


def reset_all_orders() -> None:
    default_store.reset_sequence()
