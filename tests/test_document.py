import pytest

from route_openapi.config import DocumentSettings
from route_openapi.errors import ExampleSanitizationError
from route_openapi.framework.base import (
    Backend,
    BackendType,
    FieldSchema,
    FieldType,
    Operation,
    PathOperation,
    RequestExample,
    Response,
    ResponseExample,
    Route,
    SpecialPaths,
)
from route_openapi.openapi.document import (
    document_path,
    document_paths,
    generate_document,
    resolve_operations,
    special_path_match,
)
from route_openapi.openapi.models import new_document


def _document(route: Route, backend_type=BackendType.LOGICAL, special_paths=None) -> dict:
    doc = new_document(DocumentSettings())
    document_path(route, special_paths, backend_type, doc)
    return doc.to_dict()


class TestSpecialPathMatch:
    def test_exact_match(self):
        assert special_path_match("login", ["login"]) is True

    def test_wildcard_prefix(self):
        assert special_path_match("config/ttl", ["config/*"]) is True

    def test_no_match_without_wildcard(self):
        assert special_path_match("config/ttl", ["config/"]) is False

    def test_empty_list(self):
        assert special_path_match("login", []) is False


class TestResolveOperations:
    def test_explicit_operations_win(self):
        route = Route(
            pattern="x",
            help_synopsis="help",
            operations={Operation.READ: PathOperation(summary="Read it")},
            callbacks={Operation.DELETE: lambda req: None},
        )
        resolved = resolve_operations(route)
        assert list(resolved) == [Operation.READ]
        assert resolved[Operation.READ].summary == "Read it"

    def test_legacy_callbacks_use_help_synopsis(self):
        route = Route(
            pattern="x",
            help_synopsis="Manage x",
            callbacks={Operation.DELETE: lambda req: None, Operation.READ: lambda req: None},
        )
        resolved = resolve_operations(route)
        assert list(resolved) == [Operation.READ, Operation.DELETE]
        assert all(props.summary == "Manage x" for props in resolved.values())


class TestPathItems:
    def test_one_path_item_per_expansion(self):
        route = Route(pattern="(leases/)?renew", help_synopsis="Renew", callbacks={Operation.UPDATE: print})
        paths = _document(route)["paths"]
        assert set(paths) == {"/renew", "/leases/renew"}

    def test_description_is_cleaned(self):
        route = Route(pattern="renew", help_synopsis="  Renew\n  a   lease ")
        assert _document(route)["paths"]["/renew"]["description"] == "Renew a lease"

    def test_special_path_flags(self):
        route = Route(pattern="config/(?P<key>\\w+)", fields={"key": FieldSchema(type=FieldType.STRING)})
        special = SpecialPaths(root=["config/*"], unauthenticated=["config/{key}"])
        item = _document(route, special_paths=special)["paths"]["/config/{key}"]
        assert item["x-vault-sudo"] is True
        assert item["x-vault-unauthenticated"] is True

    def test_parameters_sorted_case_insensitively(self):
        route = Route(
            pattern="items/(?P<Zeta>\\w+)/(?P<alpha>\\w+)",
            fields={
                "Zeta": FieldSchema(type=FieldType.STRING),
                "alpha": FieldSchema(type=FieldType.INT),
            },
        )
        params = _document(route)["paths"]["/items/{Zeta}/{alpha}"]["parameters"]
        assert [p["name"] for p in params] == ["alpha", "Zeta"]
        assert params[0]["schema"] == {"type": "number"}
        assert all(p["in"] == "path" and p["required"] is True for p in params)

    def test_header_parameter(self):
        route = Route(pattern="data", fields={"X-Token": FieldSchema(type=FieldType.HEADER, description="token")})
        param = _document(route)["paths"]["/data"]["parameters"][0]
        assert param == {"name": "X-Token", "description": "token", "in": "header", "schema": {"type": "string"}}

    def test_undeclared_placeholder_has_no_schema(self):
        route = Route(pattern="keys/(?P<name>\\w+)")
        params = _document(route)["paths"]["/keys/{name}"]["parameters"]
        assert params == [{"name": "name", "in": "path", "required": True}]

    def test_unknown_type_parameter_keeps_schema(self):
        route = Route(pattern="keys/(?P<id>\\w+)", fields={"id": FieldSchema(type="uuid")})
        params = _document(route)["paths"]["/keys/{id}"]["parameters"]
        assert params == [{"name": "id", "in": "path", "schema": {}, "required": True}]


class TestMergeRules:
    def test_create_and_update_document_update_only(self):
        route = Route(
            pattern="roles",
            operations={
                Operation.CREATE: PathOperation(summary="Create"),
                Operation.UPDATE: PathOperation(summary="Update"),
            },
        )
        item = _document(route)["paths"]["/roles"]
        assert item["x-vault-create-supported"] is True
        assert item["post"]["summary"] == "Update"

    def test_create_only(self):
        route = Route(pattern="roles", operations={Operation.CREATE: PathOperation(summary="Create")})
        item = _document(route)["paths"]["/roles"]
        assert item["x-vault-create-supported"] is True
        assert item["post"]["summary"] == "Create"

    def test_list_and_read_document_read_with_list_param(self):
        route = Route(
            pattern="keys",
            operations={
                Operation.LIST: PathOperation(summary="List"),
                Operation.READ: PathOperation(summary="Read"),
            },
        )
        item = _document(route)["paths"]["/keys"]
        assert item["get"]["summary"] == "Read"
        assert item["get"]["parameters"] == [
            {"name": "list", "description": "Return a list if `true`", "in": "query", "schema": {"type": "string"}}
        ]
        assert set(item) == {"get"}

    def test_list_only_gets_list_param(self):
        route = Route(pattern="keys", operations={Operation.LIST: PathOperation(summary="List")})
        get = _document(route)["paths"]["/keys"]["get"]
        assert get["summary"] == "List"
        assert get["parameters"][0]["name"] == "list"

    def test_read_only_has_no_list_param(self):
        route = Route(pattern="keys", operations={Operation.READ: PathOperation(summary="Read")})
        assert "parameters" not in _document(route)["paths"]["/keys"]["get"]

    def test_unpublished_is_skipped(self):
        route = Route(
            pattern="login",
            operations={
                Operation.READ: PathOperation(summary="Hidden", unpublished=True),
                Operation.UPDATE: PathOperation(summary="Log in"),
            },
        )
        item = _document(route)["paths"]["/login"]
        assert "get" not in item
        assert item["post"]["summary"] == "Log in"

    def test_unpublished_create_does_not_flag_support(self):
        route = Route(pattern="roles", operations={Operation.CREATE: PathOperation(unpublished=True)})
        assert _document(route)["paths"]["/roles"] == {}

    def test_unpublished_update_still_hides_create(self):
        route = Route(
            pattern="roles",
            operations={
                Operation.CREATE: PathOperation(summary="Create"),
                Operation.UPDATE: PathOperation(summary="Update", unpublished=True),
            },
        )
        item = _document(route)["paths"]["/roles"]
        assert item == {"x-vault-create-supported": True}

    def test_unpublished_read_still_hides_list(self):
        route = Route(
            pattern="keys",
            operations={
                Operation.LIST: PathOperation(summary="List"),
                Operation.READ: PathOperation(summary="Read", unpublished=True),
            },
        )
        assert "get" not in _document(route)["paths"]["/keys"]


class TestOperations:
    def test_tags_by_backend_type(self):
        route = Route(pattern="x", operations={Operation.READ: PathOperation()})
        assert _document(route, BackendType.LOGICAL)["paths"]["/x"]["get"]["tags"] == ["secrets"]
        assert _document(route, BackendType.CREDENTIAL)["paths"]["/x"]["get"]["tags"] == ["auth"]
        assert "tags" not in _document(route, BackendType.UNKNOWN)["paths"]["/x"]["get"]

    def test_default_responses(self):
        route = Route(
            pattern="x",
            operations={Operation.READ: PathOperation(), Operation.DELETE: PathOperation()},
        )
        item = _document(route)["paths"]["/x"]
        assert item["get"]["responses"] == {"200": {"description": "OK"}}
        assert item["delete"]["responses"] == {"204": {"description": "empty body"}}

    def test_request_body_from_body_fields(self):
        route = Route(
            pattern="roles/(?P<name>\\w+)",
            fields={
                "name": FieldSchema(type=FieldType.STRING),
                "policies": FieldSchema(type=FieldType.COMMA_STRING_SLICE, description="Policies"),
                "ttl": FieldSchema(type=FieldType.DURATION_SECOND, deprecated=True),
            },
            operations={
                Operation.UPDATE: PathOperation(
                    examples=[
                        RequestExample(data={"policies": ["a"]}),
                        RequestExample(data={"policies": ["b"]}),
                    ]
                )
            },
        )
        schema = _document(route)["paths"]["/roles/{name}"]["post"]["requestBody"]["content"]["application/json"]["schema"]
        assert schema == {
            "type": "object",
            "properties": {
                "policies": {"type": "array", "description": "Policies", "items": {"type": "string"}},
                "ttl": {"type": "number", "format": "seconds", "deprecated": True},
            },
            "example": {"policies": ["a"]},
        }

    def test_request_body_omitted_when_empty(self):
        route = Route(
            pattern="roles/(?P<name>\\w+)",
            fields={"name": FieldSchema(type=FieldType.STRING)},
            operations={Operation.UPDATE: PathOperation()},
        )
        assert "requestBody" not in _document(route)["paths"]["/roles/{name}"]["post"]

    def test_example_without_data_adds_no_body(self):
        route = Route(pattern="rotate", operations={Operation.UPDATE: PathOperation(examples=[RequestExample()])})
        assert "requestBody" not in _document(route)["paths"]["/rotate"]["post"]

    def test_read_has_no_request_body(self):
        route = Route(
            pattern="roles",
            fields={"ttl": FieldSchema(type=FieldType.INT)},
            operations={Operation.READ: PathOperation()},
        )
        assert "requestBody" not in _document(route)["paths"]["/roles"]["get"]

    def test_declared_responses(self):
        route = Route(
            pattern="x",
            operations={
                Operation.READ: PathOperation(
                    responses={
                        200: [
                            ResponseExample(description="First", example=Response(data={"n": 1})),
                            ResponseExample(description="Second", example=Response(data={"n": 2})),
                            ResponseExample(media_type="text/plain", example={"data": {"raw": True}}),
                        ],
                        404: [ResponseExample(description="Not found")],
                    }
                )
            },
        )
        responses = _document(route)["paths"]["/x"]["get"]["responses"]
        assert responses["200"] == {
            "description": "First",
            "content": {
                "application/json": {"schema": {"example": {"data": {"n": 1}}}},
                "text/plain": {"schema": {"example": {"data": {"raw": True}}}},
            },
        }
        assert responses["404"] == {"description": "Not found"}

    def test_deprecated_operation(self):
        route = Route(pattern="x", operations={Operation.READ: PathOperation(summary="Old", deprecated=True)})
        assert _document(route)["paths"]["/x"]["get"]["deprecated"] is True

    def test_bad_example_aborts(self):
        route = Route(
            pattern="x",
            operations={Operation.READ: PathOperation(responses={200: [ResponseExample(example="oops")]})},
        )
        with pytest.raises(ExampleSanitizationError) as exc_info:
            _document(route)
        assert exc_info.value.status_code == "200"
        assert str(exc_info.value).startswith("response 200: ")


class TestDocumentPaths:
    def test_backend(self):
        backend = Backend(
            backend_type=BackendType.CREDENTIAL,
            special_paths=SpecialPaths(unauthenticated=["login"]),
            paths=[
                Route(pattern="login", operations={Operation.UPDATE: PathOperation(summary="Log in")}),
                Route(pattern="role/?$", operations={Operation.LIST: PathOperation(summary="List roles")}),
            ],
        )
        doc = new_document(DocumentSettings())
        document_paths(backend, doc)
        assert set(doc.paths) == {"/login", "/role"}
        assert doc.paths["/login"].unauthenticated is True
        assert doc.paths["/login"].post.tags == ["auth"]

    def test_generate_document(self):
        backend = Backend(paths=[Route(pattern="sys/health", operations={Operation.READ: PathOperation()})])
        doc = generate_document(backend, DocumentSettings(title="Health"))
        assert doc.info.title == "Health"
        assert "/sys/health" in doc.paths

    def test_inputs_not_mutated(self):
        route = Route(
            pattern="roles",
            operations={Operation.UPDATE: PathOperation(examples=[RequestExample(data={"a": 1})])},
        )
        before = route.model_dump(exclude={"callbacks"})
        _document(route)
        assert route.model_dump(exclude={"callbacks"}) == before
