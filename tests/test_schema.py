from lambda_openapi.generator.schema import SchemaMapper, merge_enum, schema_for
from lambda_openapi.metadata.base import NamedStructural, Primitive


class User:
    pass


class TestPrimitives:
    def test_direct_mappings(self):
        for name in ("string", "number", "integer", "boolean", "object"):
            assert schema_for(name) == {"type": name}

    def test_array_defaults_items_to_string(self):
        assert schema_for("array") == {"type": "array", "items": {"type": "string"}}

    def test_unknown_name_falls_back_to_string(self):
        assert schema_for("uuid") == {"type": "string"}

    def test_primitive_model(self):
        assert schema_for(Primitive(name="integer")) == {"type": "integer"}

    def test_none_has_no_schema(self):
        assert schema_for(None) is None

    def test_results_are_independent_copies(self):
        first = schema_for("array")
        first["items"]["type"] = "integer"
        assert schema_for("array")["items"] == {"type": "string"}


class TestStructural:
    def test_class_gets_placeholder(self):
        assert schema_for(User) == {"type": "object", "description": "Schema for User"}

    def test_structural_without_properties_gets_placeholder(self):
        assert schema_for(NamedStructural(identifier="Order")) == {
            "type": "object",
            "description": "Schema for Order",
        }

    def test_structural_with_properties_is_expanded(self):
        ref = NamedStructural(
            identifier="User",
            properties={"id": "string", "age": "integer", "address": NamedStructural(identifier="Address")},
            required=["id"],
        )
        assert schema_for(ref) == {
            "type": "object",
            "properties": {
                "id": {"type": "string"},
                "age": {"type": "integer"},
                "address": {"type": "object", "description": "Schema for Address"},
            },
            "required": ["id"],
        }

    def test_other_values_map_to_object(self):
        assert schema_for(42) == {"type": "object"}


class TestHoisting:
    def test_hoisted_schema_is_referenced(self):
        mapper = SchemaMapper(hoist=True)
        ref = NamedStructural(identifier="User", properties={"id": "string"})
        assert mapper.map(ref) == {"$ref": "#/components/schemas/User"}
        assert mapper.schemas["User"] == {"type": "object", "properties": {"id": {"type": "string"}}}

    def test_placeholders_are_not_hoisted(self):
        mapper = SchemaMapper(hoist=True)
        mapper.map(User)
        assert mapper.schemas == {}


class TestMergeEnum:
    def test_enum_added_after_base_schema(self):
        assert merge_enum({"type": "string"}, ["a", "b"]) == {"type": "string", "enum": ["a", "b"]}

    def test_enum_without_schema(self):
        assert merge_enum(None, [1, 2]) == {"enum": [1, 2]}

    def test_no_enum_keeps_schema(self):
        schema = {"type": "string"}
        assert merge_enum(schema, None) is schema
