import pytest

from lambda_openapi.generator.naming import join_base_path, method_from_name, path_from_name


class TestPathFromName:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("getUserHandler", "/get-user"),
            ("createUserHandler", "/create-user"),
            ("listItemsHandler", "/list-items"),
            ("simpleHandler", "/simple"),
            ("handlerWithMetadata", "/handler-with-metadata"),
            ("GetUserHandler", "/get-user"),
            ("get_user_handler", "/get-user"),
            ("health", "/health"),
        ],
    )
    def test_examples(self, name, expected):
        assert path_from_name(name) == expected

    def test_only_trailing_suffix_is_stripped(self):
        assert path_from_name("HandlerRegistry") == "/handler-registry"

    def test_snake_case_only_without_capitals(self):
        assert path_from_name("list_order_items_handler") == "/list-order-items"
        # mixed names keep their underscores
        assert path_from_name("get_UserHandler") == "/get_-user"


class TestMethodFromName:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("getUserHandler", "get"),
            ("listItemsHandler", "get"),
            ("findOrder", "get"),
            ("createUserHandler", "post"),
            ("postComment", "post"),
            ("updateUser", "put"),
            ("putObject", "put"),
            ("deleteUser", "delete"),
            ("removeItem", "delete"),
            ("patchProfile", "patch"),
            ("health", "get"),
        ],
    )
    def test_examples(self, name, expected):
        assert method_from_name(name) == expected

    def test_precedence_get_before_create(self):
        # "target" contains "get", which outranks "create"
        assert method_from_name("createTargetHandler") == "get"

    def test_precedence_create_before_update(self):
        assert method_from_name("createOrUpdate") == "post"

    def test_case_insensitive(self):
        assert method_from_name("DELETE_ACCOUNT") == "delete"


class TestJoinBasePath:
    def test_no_base(self):
        assert join_base_path(None, "/users") == "/users"

    def test_slashes_normalized(self):
        assert join_base_path("/v1/", "/users") == "/v1/users"
        assert join_base_path("v1", "/users") == "/v1/users"

    def test_root_path(self):
        assert join_base_path("/v1", "/") == "/v1"

    def test_path_without_leading_slash(self):
        assert join_base_path("/v1", "users") == "/v1/users"
        assert join_base_path(None, "users") == "/users"
