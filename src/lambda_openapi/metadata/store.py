"""Process-wide side-table of documentation metadata, keyed by handler.

Handlers carry no metadata themselves: decorators write records here and
the generator reads them back. Absence is always reported as None or an
empty list, never as an error, so the generator can simply skip handlers
that were never documented.
"""

import logging
import threading
from typing import Any, Callable

from .base import (
    BodyMetadata,
    HandlerMetadata,
    MetadataKind,
    OperationMetadata,
    ParamMetadata,
    QueryMetadata,
    ResponseMetadata,
    RouteMetadata,
    SecurityMetadata,
    TagMetadata,
)

logger = logging.getLogger(__name__)

SINGULAR_KINDS = (MetadataKind.OPERATION, MetadataKind.BODY, MetadataKind.ROUTE)
COLLECTION_KINDS = (
    MetadataKind.RESPONSE,
    MetadataKind.PARAM,
    MetadataKind.QUERY,
    MetadataKind.SECURITY,
    MetadataKind.TAG,
)


def handler_key(handler: Any) -> Any:
    """Resolve bound methods, staticmethods and classmethods to their function."""
    while hasattr(handler, "__func__"):
        handler = handler.__func__
    return handler


class MetadataStore:
    """Keyed accumulation of metadata records plus per-kind sequence counters."""

    def __init__(self):
        self._lock = threading.RLock()
        self._records: dict[Any, dict[MetadataKind, Any]] = {}
        self._sequences: dict[MetadataKind, int] = {}

    # -- sequence counters -------------------------------------------------

    def next_sequence(self, kind: MetadataKind) -> int:
        """Return the next sequence index for a kind and advance its counter."""
        with self._lock:
            value = self._sequences.get(kind, 0)
            self._sequences[kind] = value + 1
            return value

    def reset_sequence(self, kind: MetadataKind | None = None) -> None:
        """Reset one kind's counter (or all of them). Stored records are kept."""
        with self._lock:
            if kind is None:
                self._sequences.clear()
            else:
                self._sequences.pop(kind, None)

    # -- internals ---------------------------------------------------------

    def _set(self, handler: Any, kind: MetadataKind, value: Any) -> None:
        with self._lock:
            self._records.setdefault(handler_key(handler), {})[kind] = value

    def _get(self, handler: Any, kind: MetadataKind) -> Any:
        with self._lock:
            return self._records.get(handler_key(handler), {}).get(kind)

    def _append(self, handler: Any, kind: MetadataKind, metadata: Any) -> None:
        with self._lock:
            kinds = self._records.setdefault(handler_key(handler), {})
            existing = kinds.get(kind, [])
            kinds[kind] = sorted([*existing, metadata], key=lambda m: m.sequence_index)

    def _list(self, handler: Any, kind: MetadataKind) -> list:
        with self._lock:
            return list(self._records.get(handler_key(handler), {}).get(kind, []))

    # -- singular kinds ----------------------------------------------------

    def set_operation(self, handler: Any, metadata: OperationMetadata) -> None:
        self._set(handler, MetadataKind.OPERATION, metadata)

    def get_operation(self, handler: Any) -> OperationMetadata | None:
        return self._get(handler, MetadataKind.OPERATION)

    def set_body(self, handler: Any, metadata: BodyMetadata) -> None:
        self._set(handler, MetadataKind.BODY, metadata)

    def get_body(self, handler: Any) -> BodyMetadata | None:
        return self._get(handler, MetadataKind.BODY)

    def set_route(self, handler: Any, metadata: RouteMetadata) -> None:
        self._set(handler, MetadataKind.ROUTE, metadata)

    def get_route(self, handler: Any) -> RouteMetadata | None:
        return self._get(handler, MetadataKind.ROUTE)

    # -- collection kinds --------------------------------------------------

    def add_response(self, handler: Any, metadata: ResponseMetadata) -> None:
        self._append(handler, MetadataKind.RESPONSE, metadata)

    def get_responses(self, handler: Any) -> list[ResponseMetadata]:
        return self._list(handler, MetadataKind.RESPONSE)

    def get_response(self, handler: Any, status: int) -> ResponseMetadata | None:
        """Return the first-created response declared for a status code."""
        for response in self.get_responses(handler):
            if response.status == status:
                return response
        return None

    def add_param(self, handler: Any, metadata: ParamMetadata) -> None:
        self._append(handler, MetadataKind.PARAM, metadata)

    def get_params(self, handler: Any) -> list[ParamMetadata]:
        return self._list(handler, MetadataKind.PARAM)

    def add_query(self, handler: Any, metadata: QueryMetadata) -> None:
        self._append(handler, MetadataKind.QUERY, metadata)

    def get_queries(self, handler: Any) -> list[QueryMetadata]:
        return self._list(handler, MetadataKind.QUERY)

    def add_security(self, handler: Any, metadata: SecurityMetadata) -> None:
        self._append(handler, MetadataKind.SECURITY, metadata)

    def get_security(self, handler: Any) -> list[SecurityMetadata]:
        return self._list(handler, MetadataKind.SECURITY)

    def add_tag(self, handler: Any, metadata: TagMetadata) -> None:
        self._append(handler, MetadataKind.TAG, metadata)

    def get_tags(self, handler: Any) -> list[TagMetadata]:
        return self._list(handler, MetadataKind.TAG)

    # -- whole-handler views -----------------------------------------------

    def get_aggregate(self, handler: Any) -> HandlerMetadata:
        """Collect every kind for a handler. Missing kinds come back empty."""
        with self._lock:
            return HandlerMetadata(
                operation=self.get_operation(handler),
                responses=self.get_responses(handler),
                params=self.get_params(handler),
                queries=self.get_queries(handler),
                body=self.get_body(handler),
                security=self.get_security(handler),
                tags=self.get_tags(handler),
                route=self.get_route(handler),
            )

    def existing_kinds(self, handler: Any) -> list[MetadataKind]:
        with self._lock:
            kinds = self._records.get(handler_key(handler), {})
            return [kind for kind in MetadataKind if kinds.get(kind)]

    def has_any_metadata(self, handler: Any) -> bool:
        return bool(self.existing_kinds(handler))

    def handlers(self) -> list[Callable]:
        """Every handler with at least one record, in first-annotation order."""
        with self._lock:
            return [h for h, kinds in self._records.items() if any(kinds.values())]

    def clear(self, handler: Any) -> None:
        """Drop all metadata kinds for one handler."""
        with self._lock:
            self._records.pop(handler_key(handler), None)

    def clear_all(self) -> None:
        with self._lock:
            logger.debug("Clearing metadata for %d handlers", len(self._records))
            self._records.clear()


store = MetadataStore()
