"""OpenAPI 3.0 document assembly from annotated handlers.

The generator reads each handler's aggregated metadata from the store,
resolves its route (explicit or inferred from its name), maps declared types
to schemas and writes one operation per handler into ``paths``.

Assembly is lenient: undocumented handlers are skipped, unknown types fall
back to strings, and a handler landing on an already-used path+method
replaces the earlier operation.
"""

import copy
import logging
from typing import Any, Iterable

from lambda_openapi.generator.config import GenerationConfig, coerce_config
from lambda_openapi.generator.naming import join_base_path, method_from_name, path_from_name
from lambda_openapi.generator.schema import SchemaMapper, merge_enum
from lambda_openapi.generator.validator import validate_document
from lambda_openapi.metadata.base import (
    BodyMetadata,
    HandlerMetadata,
    HeaderMetadata,
    ParamMetadata,
    ResponseMetadata,
    SecurityMetadata,
    TagMetadata,
)
from lambda_openapi.metadata.store import MetadataStore
from lambda_openapi.metadata.store import store as default_store

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.0"
HTTP_METHODS = ("get", "post", "put", "delete", "patch")
JSON_CONTENT_TYPE = "application/json"


def _dump(model: Any) -> Any:
    return model.model_dump(by_alias=True, exclude_none=True)


class OpenApiGenerator:
    """Builds an OpenAPI document from a configuration and a handler list."""

    def __init__(self, config: GenerationConfig | dict, store: MetadataStore | None = None):
        self.config = coerce_config(config)
        self.store = store or default_store
        self.options = self.config.options
        self._mapper = SchemaMapper()
        self._security_schemes: dict[str, dict] = {}
        self._handler_tags: list[TagMetadata] = []

    def generate(self, handlers: Iterable[Any]) -> dict:
        """Return the assembled OpenAPI document as a plain dict."""
        self._mapper = SchemaMapper(hoist=self.options.hoist_schemas)
        self._security_schemes = {}
        self._handler_tags = []

        spec: dict[str, Any] = {
            "openapi": OPENAPI_VERSION,
            "info": _dump(self.config.info),
        }
        if self.config.servers:
            spec["servers"] = [_dump(s) for s in self.config.servers]

        spec["paths"] = self._generate_paths(handlers)
        spec["components"] = self._generate_components()

        if self.config.security:
            spec["security"] = [dict(req) for req in self.config.security]

        tags = self._generate_tags()
        if tags:
            spec["tags"] = tags

        if self.config.external_docs:
            spec["externalDocs"] = _dump(self.config.external_docs)

        if self.options.validate_schema:
            for location, message in validate_document(spec).items():
                logger.warning("OpenAPI validation: %s: %s", location, message)

        return spec

    # -- paths ---------------------------------------------------------------

    def _generate_paths(self, handlers: Iterable[Any]) -> dict[str, dict]:
        paths: dict[str, dict] = {}

        for handler in handlers:
            metadata = self.store.get_aggregate(handler)
            if metadata.operation is None:
                logger.debug("Skipping %r: no operation metadata", handler)
                continue

            path, method = self._resolve_route(metadata)
            path_item = paths.setdefault(path, {})
            if method in path_item:
                logger.debug("%s %s redefined by %s", method.upper(), path, metadata.operation.function_name)
            path_item[method] = self._generate_operation(metadata)

        if self.options.sort_operations:
            paths = {path: self._sort_methods(item) for path, item in paths.items()}
        if self.options.sort_paths:
            paths = dict(sorted(paths.items()))
        return paths

    def _resolve_route(self, metadata: HandlerMetadata) -> tuple[str, str]:
        function_name = metadata.operation.function_name
        route = metadata.route

        path = route.path if route and route.path else path_from_name(function_name)
        method = route.method if route and route.method else method_from_name(function_name)
        return join_base_path(self.config.base_path, path), method.lower()

    def _sort_methods(self, path_item: dict) -> dict:
        def rank(method: str) -> int:
            return HTTP_METHODS.index(method) if method in HTTP_METHODS else len(HTTP_METHODS)

        return {m: path_item[m] for m in sorted(path_item, key=rank)}

    # -- operations ----------------------------------------------------------

    def _generate_operation(self, metadata: HandlerMetadata) -> dict:
        op_meta = metadata.operation
        operation: dict[str, Any] = {}

        tags = list(op_meta.tags)
        for tag in metadata.tags:
            if tag.name not in tags:
                tags.append(tag.name)
        self._handler_tags.extend(metadata.tags)

        operation_id = op_meta.operation_id
        if operation_id is None and self.options.include_operation_ids:
            operation_id = op_meta.function_name

        for key, value in (
            ("summary", op_meta.summary),
            ("description", op_meta.description),
            ("tags", tags or None),
            ("operationId", operation_id),
            ("deprecated", op_meta.deprecated),
        ):
            if value is not None:
                operation[key] = value

        parameters = [self._generate_parameter(p) for p in [*metadata.params, *metadata.queries]]
        if parameters:
            operation["parameters"] = parameters

        if metadata.body is not None:
            operation["requestBody"] = self._generate_request_body(metadata.body)

        operation["responses"] = self._generate_responses(metadata.responses)

        if metadata.security:
            operation["security"] = [self._register_security(s) for s in metadata.security]

        if self.options.include_lambda_extensions:
            operation["x-lambda-handler"] = op_meta.function_name

        return operation

    def _generate_parameter(self, param: ParamMetadata) -> dict:
        parameter: dict[str, Any] = {
            "name": param.name,
            "in": param.location,
            "required": param.required,
        }
        if param.description:
            parameter["description"] = param.description
        if param.deprecated:
            parameter["deprecated"] = param.deprecated
        if getattr(param, "allow_empty_value", None):
            parameter["allowEmptyValue"] = True
        if param.example is not None:
            parameter["example"] = copy.deepcopy(param.example)

        schema = merge_enum(self._mapper.map(param.type_ref), param.enum)
        if schema is not None:
            parameter["schema"] = schema
        return parameter

    def _generate_request_body(self, body: BodyMetadata) -> dict:
        request_body: dict[str, Any] = {}
        if body.description:
            request_body["description"] = body.description

        if body.content:
            request_body["content"] = copy.deepcopy(body.content)
        else:
            media: dict[str, Any] = {}
            schema = self._mapper.map(body.type_ref)
            if schema is not None:
                media["schema"] = schema
            if body.example is not None:
                media["example"] = copy.deepcopy(body.example)
            request_body["content"] = {JSON_CONTENT_TYPE: media}

        if body.required is not None:
            request_body["required"] = body.required
        return request_body

    def _generate_responses(self, responses: list[ResponseMetadata]) -> dict[str, dict]:
        result: dict[str, dict] = {}

        for response_meta in responses:
            status_code = str(response_meta.status)
            response: dict[str, Any] = {
                "description": response_meta.description or f"Response {status_code}",
            }

            if response_meta.headers:
                response["headers"] = {
                    name: self._generate_header(header) for name, header in response_meta.headers.items()
                }

            schema = self._mapper.map(response_meta.type_ref)
            if schema is not None:
                response["content"] = {JSON_CONTENT_TYPE: {"schema": schema}}
            if response_meta.content:
                response["content"] = copy.deepcopy(response_meta.content)

            if response_meta.example is not None and JSON_CONTENT_TYPE in response.get("content", {}):
                response["content"][JSON_CONTENT_TYPE] = {
                    **response["content"][JSON_CONTENT_TYPE],
                    "example": copy.deepcopy(response_meta.example),
                }

            result[status_code] = response

        if not result:
            result["200"] = {"description": "Successful response"}
        return result

    def _generate_header(self, header: HeaderMetadata) -> dict:
        result: dict[str, Any] = {}
        if header.description:
            result["description"] = header.description
        if header.required is not None:
            result["required"] = header.required
        if header.deprecated:
            result["deprecated"] = header.deprecated
        schema = self._mapper.map(header.type_ref)
        result["schema"] = schema if schema is not None else {"type": "string"}
        if header.example is not None:
            result["example"] = copy.deepcopy(header.example)
        return result

    # -- security ------------------------------------------------------------

    def _register_security(self, security: SecurityMetadata) -> dict[str, list[str]]:
        """Record the scheme for components and return the operation's requirement."""
        scheme = _security_scheme(security)
        if security.key:
            key = security.key
            if self._security_schemes.get(key, scheme) != scheme:
                logger.warning("Security scheme %r redefined", key)
        else:
            key = self._unique_scheme_key(_default_scheme_key(security), scheme)
        self._security_schemes[key] = scheme
        return {key: list(security.scopes)}

    def _unique_scheme_key(self, base: str, scheme: dict) -> str:
        # Same derived name for a different scheme gets a numeric suffix.
        key, n = base, 1
        while key in self._security_schemes and self._security_schemes[key] != scheme:
            n += 1
            key = f"{base}{n}"
        if key != base:
            logger.debug("Security scheme %r renamed to %r", base, key)
        return key

    # -- components and tags -------------------------------------------------

    def _generate_components(self) -> dict:
        # Schemas stay inline unless hoisting was asked for.
        components: dict[str, Any] = {}
        if self._mapper.schemas:
            components["schemas"] = dict(self._mapper.schemas)
        if self._security_schemes:
            components["securitySchemes"] = dict(self._security_schemes)
        return components

    def _generate_tags(self) -> list[dict]:
        tags = [_dump(tag) for tag in self.config.tags or []]
        known = {tag["name"] for tag in tags}
        for tag_meta in self._handler_tags:
            if tag_meta.name in known:
                continue
            known.add(tag_meta.name)
            tag: dict[str, Any] = {"name": tag_meta.name}
            if tag_meta.description:
                tag["description"] = tag_meta.description
            if tag_meta.external_docs_url:
                tag["externalDocs"] = {"url": tag_meta.external_docs_url}
            tags.append(tag)
        return tags


def _default_scheme_key(security: SecurityMetadata) -> str:
    if security.scheme_type == "http" and security.scheme:
        return f"{security.scheme}Auth"
    return f"{security.scheme_type}Auth"


def _security_scheme(security: SecurityMetadata) -> dict:
    scheme: dict[str, Any] = {"type": security.scheme_type}
    if security.scheme_type == "apiKey":
        scheme["name"] = security.name or "Authorization"
        scheme["in"] = security.location or "header"
    elif security.scheme_type == "http":
        scheme["scheme"] = security.scheme or "bearer"
        if security.bearer_format:
            scheme["bearerFormat"] = security.bearer_format
    elif security.scheme_type == "oauth2":
        scheme["flows"] = copy.deepcopy(security.flows or {})
    elif security.scheme_type == "openIdConnect":
        scheme["openIdConnectUrl"] = security.open_id_connect_url or ""
    if security.description:
        scheme["description"] = security.description
    return scheme


def generate_openapi_spec(
    config: GenerationConfig | dict,
    handlers: Iterable[Any],
    store: MetadataStore | None = None,
) -> dict:
    """Generate an OpenAPI document for the given handlers, in order."""
    generator = OpenApiGenerator(config, store=store)
    return generator.generate(handlers)
