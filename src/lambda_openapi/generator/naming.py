"""Route inference from handler names.

Used only when a handler has no explicit route. Both functions look at the
name alone, never at the handler's code or parameters.
"""

import re

# Checked in order; the first rule with a matching keyword wins.
METHOD_RULES = [
    (("get", "list", "find"), "get"),
    (("post", "create"), "post"),
    (("put", "update"), "put"),
    (("delete", "remove"), "delete"),
    (("patch",), "patch"),
]

DEFAULT_METHOD = "get"


def path_from_name(function_name: str) -> str:
    """Turn a handler name into a URL path.

    getUserHandler -> /get-user. Names without capitals are read as
    snake_case: get_user_handler -> /get-user.
    """
    if function_name.islower():
        name = re.sub(r"_handler$", "", function_name).replace("_", "-")
    else:
        name = re.sub(r"Handler$", "", function_name)
        name = re.sub(r"([A-Z])", r"-\1", name).lower()
    name = re.sub(r"^-+", "", name)
    return f"/{name}"


def method_from_name(function_name: str) -> str:
    """Guess the HTTP method (lower-case) from keywords in a handler name."""
    lower_name = function_name.lower()
    for keywords, method in METHOD_RULES:
        if any(keyword in lower_name for keyword in keywords):
            return method
    return DEFAULT_METHOD


def join_base_path(base_path: str | None, path: str) -> str:
    """Prefix a path with a base path, avoiding doubled slashes."""
    if not path.startswith("/"):
        path = "/" + path
    if not base_path:
        return path
    base = "/" + base_path.strip("/")
    if base == "/":
        return path
    return base + path if path != "/" else base
