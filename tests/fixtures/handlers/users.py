"""Sample Lambda handlers used by the scanner and CLI tests."""

import json

from lambda_openapi.decorators import api_body, api_operation, api_param, api_query, api_response


@api_response(404, description="User not found")
@api_response(200, description="User found", type="object")
@api_param("userId", description="User ID", type="string")
@api_operation("Get user by ID", tags=["users"], operation_id="getUser")
def getUserHandler(event, context):
    user_id = event["pathParameters"]["userId"]
    return {"statusCode": 200, "body": json.dumps({"id": user_id})}


@api_response(200, description="Users", type="array")
@api_query("limit", type="integer")
@api_operation("List users", tags=["users"])
def listUsersHandler(event, context):
    return {"statusCode": 200, "body": "[]"}


@api_response(201, description="User created", type="object")
@api_body(description="New user", type="object", required=True)
@api_operation("Create user", tags=["users"])
def createUserHandler(event, context):
    return {"statusCode": 201, "body": event["body"]}


@api_operation("Internal helper")
def _private_handler(event, context):
    return {"statusCode": 204}


def health_check(event, context):
    return {"statusCode": 200, "body": "ok"}
