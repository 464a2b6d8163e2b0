"""Type reference -> OpenAPI schema mapping.

Lenient by policy: unknown primitive names become string schemas and
nothing here raises.

Known limitation: Python classes are not introspected. A class reference
yields a placeholder object schema carrying only its name. To get real
``properties``, declare the type as a NamedStructural with explicit
properties.
"""

from typing import Any

from lambda_openapi.metadata.base import NamedStructural, Primitive

PRIMITIVE_SCHEMAS = {
    "string": {"type": "string"},
    "number": {"type": "number"},
    "integer": {"type": "integer"},
    "boolean": {"type": "boolean"},
    "array": {"type": "array", "items": {"type": "string"}},
    "object": {"type": "object"},
}


def primitive_schema(name: str) -> dict:
    """Schema for a primitive name; unrecognized names fall back to string."""
    schema = PRIMITIVE_SCHEMAS.get(name, PRIMITIVE_SCHEMAS["string"])
    # nested dicts are shared with the table, copy them too
    return {k: dict(v) if isinstance(v, dict) else v for k, v in schema.items()}


def placeholder_schema(name: str) -> dict:
    return {"type": "object", "description": f"Schema for {name}"}


def merge_enum(schema: dict | None, values: list | None) -> dict | None:
    """Attach enum values to an already-resolved schema."""
    if values is None:
        return schema
    return {**(schema or {}), "enum": list(values)}


class SchemaMapper:
    """Maps type references to schemas.

    With ``hoist=True`` expanded NamedStructural schemas are collected in
    ``schemas`` (for ``components.schemas``) and referenced by ``$ref``.
    Inline schemas are the default.
    """

    def __init__(self, hoist: bool = False):
        self.hoist = hoist
        self.schemas: dict[str, dict] = {}

    def map(self, type_ref: Any) -> dict | None:
        if type_ref is None:
            return None
        if isinstance(type_ref, str):
            return primitive_schema(type_ref)
        if isinstance(type_ref, Primitive):
            return primitive_schema(type_ref.name)
        if isinstance(type_ref, NamedStructural):
            return self._map_structural(type_ref)
        if isinstance(type_ref, type):
            return placeholder_schema(type_ref.__name__)
        return {"type": "object"}

    def _map_structural(self, ref: NamedStructural) -> dict:
        if ref.properties is None:
            return placeholder_schema(ref.identifier)

        schema: dict[str, Any] = {"type": "object", "properties": {}}
        for name, prop_ref in ref.properties.items():
            schema["properties"][name] = self.map(prop_ref) or {}
        if ref.required:
            schema["required"] = list(ref.required)

        if not self.hoist:
            return schema
        self.schemas[ref.identifier] = schema
        return {"$ref": f"#/components/schemas/{ref.identifier}"}


def schema_for(type_ref: Any) -> dict | None:
    """Map a type reference to an inline schema."""
    return SchemaMapper().map(type_ref)
