"""Tests for the naming module."""

from backendgen.naming import (
    derive_operation_id,
    entity_name,
    entity_prefix,
    handler_name,
    normalize_identifier,
    ref_to_type_name,
    request_schema_name,
    response_schema_name,
)


class TestNormalizeIdentifier:
    """Test identifier normalization."""

    def test_capitalizes_first_character(self):
        assert normalize_identifier("userId") == "UserId"

    def test_removes_dashes_and_spaces(self):
        assert normalize_identifier("user-profile data") == "Userprofiledata"

    def test_only_first_character_changes(self):
        """Internal words are not title-cased."""
        assert normalize_identifier("create_user_v2") == "Create_user_v2"

    def test_empty(self):
        assert normalize_identifier("") == ""

    def test_only_separators(self):
        assert normalize_identifier("- -") == ""

    def test_leading_digit_kept(self):
        assert normalize_identifier("9lives") == "9lives"

    def test_idempotent(self):
        for name in ("userId", "user-profile", " spaced name", "POSTusers", "9lives", "", "x"):
            once = normalize_identifier(name)
            assert normalize_identifier(once) == once


class TestOperationIdentity:
    """Test operation id derivation and handler naming."""

    def test_derived_from_method_and_path(self):
        assert derive_operation_id("post", "/users") == "POSTusers"

    def test_derived_keeps_path_braces(self):
        assert derive_operation_id("get", "/users/{id}") == "GETusers{id}"

    def test_explicit_operation_id_wins(self):
        assert derive_operation_id("get", "/users/{id}", "getUser") == "getUser"

    def test_empty_operation_id_is_derived(self):
        assert derive_operation_id("delete", "/a/b", "") == "DELETEab"

    def test_handler_name(self):
        assert handler_name("create user") == "Createuser"

    def test_placeholder_names(self):
        assert request_schema_name("POSTusers") == "POSTusersRequest"
        assert response_schema_name("CreateUser", "200") == "CreateUserResponse200"

    def test_placeholder_normalizes_like_handler(self):
        """normalize(<opId>Request) must equal <handler>Request."""
        op_id = "create-user"
        assert normalize_identifier(request_schema_name(op_id)) == handler_name(op_id) + "Request"


class TestEntityName:
    """Test entity naming from paths."""

    def test_first_segment(self):
        assert entity_name("/users/{id}") == "Users"

    def test_skips_empty_segments(self):
        assert entity_name("//orders//items") == "Orders"

    def test_root_path(self):
        assert entity_name("/") == ""

    def test_prefix(self):
        assert entity_prefix("/users") == "Users:"

    def test_prefix_shared_by_unrelated_paths(self):
        assert entity_prefix("/users/{id}/posts") == entity_prefix("/users")


class TestRefToTypeName:
    """Test $ref -> Go type name resolution."""

    def test_component_ref(self):
        assert ref_to_type_name("#/components/schemas/User") == "User"

    def test_component_ref_normalized(self):
        assert ref_to_type_name("#/components/schemas/pet-food") == "Petfood"

    def test_non_local_ref_uses_last_segment(self, caplog):
        assert ref_to_type_name("#/definitions/thing") == "Thing"
        assert "Non-local schema reference" in caplog.text
