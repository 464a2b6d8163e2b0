"""End-to-end: decorate handlers, assemble, serialize, validate."""

import json

from lambda_openapi.decorators import api_operation, api_param, api_response
from lambda_openapi.formatter import to_json, to_yaml
from lambda_openapi.generator.openapi import generate_openapi_spec
from lambda_openapi.generator.validator import validate_document, validate_yaml_text


def getUserHandler(event, context):
    return {"statusCode": 200, "body": json.dumps({"id": "1", "name": "John"})}


def createUserHandler(event, context):
    return {"statusCode": 201, "body": json.dumps({"id": "2", "name": "Jane"})}


CONFIG = {
    "inputPaths": ["./handlers"],
    "info": {
        "title": "User Management API",
        "version": "1.0.0",
        "description": "API for managing users",
    },
    "servers": [{"url": "https://api.example.com/v1", "description": "Production server"}],
    "tags": [{"name": "users", "description": "User management operations"}],
}


def _decorate():
    api_operation(
        "Get user by ID",
        description="Retrieve a user by their unique identifier",
        tags=["users"],
        operation_id="getUser",
    )(getUserHandler)
    api_param("userId", description="User ID", type="string", required=True)(getUserHandler)
    api_response(200, description="User found successfully", type="object")(getUserHandler)
    api_response(404, description="User not found")(getUserHandler)

    api_operation(
        "Create new user",
        description="Create a new user in the system",
        tags=["users"],
        operation_id="createUser",
    )(createUserHandler)
    api_response(201, description="User created successfully", type="object")(createUserHandler)


class TestEndToEnd:
    def test_complete_document(self):
        _decorate()
        spec = generate_openapi_spec(CONFIG, [getUserHandler, createUserHandler])

        assert spec["openapi"] == "3.0.0"
        assert spec["info"]["description"] == "API for managing users"
        assert spec["servers"][0]["url"] == "https://api.example.com/v1"
        assert spec["tags"][0]["name"] == "users"
        assert len(spec["paths"]) == 2

        get_user = spec["paths"]["/get-user"]["get"]
        assert get_user["operationId"] == "getUser"
        assert get_user["tags"] == ["users"]
        assert len(get_user["parameters"]) == 1
        assert set(get_user["responses"]) == {"200", "404"}

        create_user = spec["paths"]["/create-user"]["post"]
        assert create_user["summary"] == "Create new user"
        assert "201" in create_user["responses"]

        assert validate_document(spec) == {}

    def test_serialized_outputs_round_trip(self):
        _decorate()
        spec = generate_openapi_spec(CONFIG, [getUserHandler, createUserHandler])

        text = to_json(spec)
        assert '"openapi": "3.0.0"' in text
        assert '"/get-user"' in text
        assert json.loads(text) == spec

        assert validate_yaml_text(to_yaml(spec)) == {}
