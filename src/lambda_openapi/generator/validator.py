"""Basic shape checks for generated OpenAPI documents.

Runs after assembly and only reports; the generator never rejects a
document. This is not OpenAPI meta-schema validation.
"""

import re

import yaml

HTTP_METHODS = {"get", "post", "put", "delete", "patch", "head", "options", "trace"}
PATH_ITEM_KEYS = {"summary", "description", "servers", "parameters", "$ref"}

PATH_TEMPLATE_PARAM = re.compile(r"{([^}/]+)}")


def validate_info(doc: dict) -> dict[str, str]:
    """Check the version tag and the info object.

    Returns dict of {location: error_message}.
    """
    errors = {}
    version = doc.get("openapi")
    if not isinstance(version, str) or not version.startswith("3."):
        errors["/openapi"] = f"Expected an OpenAPI 3.x version tag, got {version!r}"

    info = doc.get("info")
    if not isinstance(info, dict):
        errors["/info"] = "Missing info object"
        return errors
    for key in ("title", "version"):
        if not info.get(key):
            errors[f"/info/{key}"] = f"info.{key} is required"
    return errors


def validate_paths(doc: dict) -> dict[str, str]:
    """Check path keys, methods, responses and path template parameters.

    Returns dict of {location: error_message}.
    """
    errors = {}
    paths = doc.get("paths")
    if not isinstance(paths, dict):
        return {"/paths": "Missing paths object"}

    for path, path_item in paths.items():
        location = f"/paths/{path}"
        if not path.startswith("/"):
            errors[location] = "Path must start with '/'"
        if not isinstance(path_item, dict):
            errors[location] = "Path item must be an object"
            continue

        template_params = set(PATH_TEMPLATE_PARAM.findall(path))
        for method, operation in path_item.items():
            if method in PATH_ITEM_KEYS or method.startswith("x-"):
                continue
            op_location = f"{location}/{method}"
            if method not in HTTP_METHODS:
                errors[op_location] = f"Unknown HTTP method '{method}'"
                continue
            errors.update(_validate_operation(op_location, operation, template_params))
    return errors


def _validate_operation(location: str, operation: dict, template_params: set[str]) -> dict[str, str]:
    if not isinstance(operation, dict):
        return {location: "Operation must be an object"}

    errors = {}
    responses = operation.get("responses")
    if not responses:
        errors[f"{location}/responses"] = "Operation must declare at least one response"
    elif not isinstance(responses, dict):
        errors[f"{location}/responses"] = "Responses must be an object"
    else:
        for status, response in responses.items():
            if not isinstance(response, dict) or "description" not in response:
                errors[f"{location}/responses/{status}"] = "Response must have a description"

    parameters = operation.get("parameters") or []
    if not isinstance(parameters, list):
        errors[f"{location}/parameters"] = "Parameters must be a list"
        parameters = []
    declared = set()
    for i, p in enumerate(parameters):
        if not isinstance(p, dict):
            errors[f"{location}/parameters/{i}"] = "Parameter must be an object"
        elif p.get("in") == "path":
            declared.add(p.get("name"))
    for name in sorted(template_params - declared):
        errors[f"{location}/parameters/{name}"] = f"Path parameter '{name}' is not declared"
    return errors


def validate_document(doc: dict) -> dict[str, str]:
    """Run all shape checks on an assembled document.

    Returns dict of {location: error_message}; empty when nothing was found.
    """
    errors = {}
    errors.update(validate_info(doc))
    errors.update(validate_paths(doc))
    if "components" in doc and not isinstance(doc["components"], dict):
        errors["/components"] = "components must be an object"
    return errors


def validate_yaml_text(text: str) -> dict[str, str]:
    """Check that serialized YAML output parses back into a mapping."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        return {"_yaml": f"YAMLError: {e}"}
    if not isinstance(data, dict):
        return {"_yaml": "Document must be a mapping"}
    return {}
