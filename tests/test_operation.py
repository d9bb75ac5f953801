"""
Тесты типов и метаданных операций
"""

import logging

import pytest

from openapi_tsgen.errors import (
    DuplicateOperationIdError,
    MissingOperationIdError,
    UnresolvedPathParameterError,
    UnsupportedReferenceError,
)
from openapi_tsgen.internal.generator.operation import OperationBinder, is_error, is_ok
from openapi_tsgen.internal.types.models import GenerationOptions
from openapi_tsgen.internal.types.schema_resolver import TypeResolver

PET_REF = {"$ref": "#/components/schemas/Pet"}


def json_content(schema):
    return {"content": {"application/json": {"schema": schema}}}


def make_binder(components=None, bindings=False, **options):
    return OperationBinder(
        TypeResolver(),
        components=components,
        options=GenerationOptions(bindings=bindings, **options),
    )


def pet_id_param(schema=None):
    return {
        "name": "petId",
        "in": "path",
        "required": True,
        "schema": schema or {"type": "string"},
    }


class TestStatusCodes:
    """Тесты классификации кодов ответа"""

    def test_success(self):
        assert is_ok("200")
        assert is_ok(201)
        assert not is_ok("default")

    def test_error(self):
        assert is_error("404")
        assert is_error("500")
        assert is_error("default")
        assert not is_error("302")


class TestOperationIds:
    """Тесты operationId"""

    def test_missing_operation_id(self):
        with pytest.raises(MissingOperationIdError):
            make_binder().bind({"responses": {}}, "get", "/pets")

    def test_duplicate_operation_id(self):
        binder = make_binder()
        binder.bind({"operationId": "listPets"}, "get", "/pets")

        with pytest.raises(DuplicateOperationIdError) as exc_info:
            binder.bind({"operationId": "listPets"}, "post", "/pets")
        assert '"listPets" дублируется в описании схемы' in str(exc_info.value)

    def test_controller_is_stripped(self):
        bound = make_binder().bind({"operationId": "petsControllerList"}, "get", "/pets")
        assert bound.metadata.component_name == "PetsList"


class TestGetOperations:
    """Тесты GET операций"""

    def test_query_params(self):
        operation = {
            "operationId": "listPets",
            "parameters": [
                {
                    "name": "limit",
                    "in": "query",
                    "description": "Лимит",
                    "schema": {"type": "integer"},
                }
            ],
            "responses": {
                "200": json_content({"type": "array", "items": PET_REF}),
                "default": json_content({"$ref": "#/components/schemas/Error"}),
            },
        }
        bound = make_binder().bind(operation, "get", "/pets")

        assert bound.metadata.generics == (
            "Pet[]",
            "Error",
            "ListPetsQueryParams",
            "void",
            "void",
        )
        assert bound.declarations == (
            "\nexport interface ListPetsQueryParams {\n"
            "  /**\n"
            "   * Лимит\n"
            "   */\n"
            "  limit?: number;\n"
            "}\n\n"
        )
        assert bound.bindings == ""

    def test_no_query_params_no_declaration(self):
        operation = {"operationId": "listPets", "responses": {"200": json_content(PET_REF)}}
        bound = make_binder().bind(operation, "get", "/pets")

        assert "QueryParams" not in bound.declarations
        assert bound.metadata.query_params_type is None
        assert bound.metadata.generics[2] == "void"

    def test_path_params(self):
        operation = {
            "operationId": "showPetById",
            "parameters": [pet_id_param()],
            "responses": {"200": json_content(PET_REF)},
        }
        bound = make_binder().bind(operation, "get", "/pets/{petId}")

        assert bound.metadata.route == "/pets/${petId}"
        assert bound.metadata.params_in_path == ["petId"]
        assert bound.metadata.params_types == "petId: string"
        assert bound.metadata.generics[4] == "ShowPetByIdPathParams"
        assert (
            "\nexport interface ShowPetByIdPathParams {\n  petId: string;\n}\n"
            in bound.declarations
        )

    def test_undeclared_path_param_falls_back_to_string(self, caplog):
        operation = {"operationId": "showPetById"}

        with caplog.at_level(logging.WARNING):
            bound = make_binder().bind(operation, "get", "/pets/{petId}")

        assert bound.metadata.params_types == "petId: string"
        assert "petId" in caplog.text

    def test_inline_response_is_declared(self):
        operation = {
            "operationId": "countPets",
            "responses": {
                "200": json_content({"properties": {"total": {"type": "integer"}}})
            },
        }
        bound = make_binder().bind(operation, "get", "/pets/count")

        assert bound.metadata.generics[0] == "CountPetsResponse"
        assert bound.declarations.startswith(
            "\nexport interface CountPetsResponse {\n  total?: number;\n}\n"
        )

    def test_inline_array_response_is_alias(self):
        operation = {
            "operationId": "listItems",
            "responses": {
                "200": json_content(
                    {"type": "array", "items": {"properties": {"id": {"type": "integer"}}}}
                )
            },
        }
        bound = make_binder().bind(operation, "get", "/items")

        assert (
            "export type ListItemsResponse = {\n  id?: number;\n}[];"
            in bound.declarations
        )

    def test_response_union_without_duplicates(self):
        operation = {
            "operationId": "getPet",
            "responses": {
                "200": json_content(PET_REF),
                "201": json_content(PET_REF),
                "202": {"description": "accepted"},
            },
        }
        bound = make_binder().bind(operation, "get", "/pet")

        assert bound.metadata.response_type == "Pet | void"

    def test_defaults_without_responses(self):
        bound = make_binder().bind({"operationId": "ping"}, "get", "/ping")

        assert bound.metadata.generics == ("void", "unknown", "void", "void", "void")
        assert bound.declarations == "\n"

    def test_description(self):
        operation = {
            "operationId": "listPets",
            "summary": "Список",
            "description": "Подробно",
        }
        bound = make_binder().bind(operation, "get", "/pets")

        assert bound.metadata.description == "Список\n\nПодробно"


class TestRequestBody:
    """Тесты тела запроса"""

    def test_request_body_declaration(self):
        operation = {
            "operationId": "createPet",
            "requestBody": json_content({"$ref": "#/components/schemas/NewPet"}),
            "responses": {"201": json_content(PET_REF)},
        }
        bound = make_binder().bind(operation, "post", "/pets")

        assert bound.metadata.generics == (
            "Pet",
            "unknown",
            "void",
            "CreatePetRequestBody",
            "void",
        )
        assert "\nexport type CreatePetRequestBody = NewPet;\n" in bound.declarations

    def test_request_body_reference(self):
        operation = {
            "operationId": "createPet",
            "requestBody": {"$ref": "#/components/requestBodies/newPet"},
        }
        bound = make_binder().bind(operation, "post", "/pets")

        assert (
            "export type CreatePetRequestBody = NewPetRequestBody;" in bound.declarations
        )

    def test_content_type_priority(self):
        operation = {
            "operationId": "createPet",
            "requestBody": {
                "content": {
                    "application/xml": {"schema": {"type": "string"}},
                    "application/json": {"schema": PET_REF},
                }
            },
        }
        bound = make_binder().bind(operation, "post", "/pets")
        assert "export type CreatePetRequestBody = Pet;" in bound.declarations

        operation = {
            "operationId": "uploadPet",
            "requestBody": {
                "content": {
                    "application/json": {"schema": PET_REF},
                    "*/*": {"schema": {"type": "string"}},
                }
            },
        }
        bound = make_binder().bind(operation, "post", "/pets/upload")
        assert "export type UploadPetRequestBody = string;" in bound.declarations

    def test_unsupported_content_type(self):
        operation = {
            "operationId": "createPet",
            "requestBody": {"content": {"application/xml": {"schema": PET_REF}}},
        }
        bound = make_binder().bind(operation, "post", "/pets")

        assert "RequestBody" not in bound.declarations
        assert bound.metadata.generics[3] == "void"


class TestDeleteOperations:
    """Тесты выноса последнего параметра пути для DELETE"""

    def test_last_param_is_extracted(self):
        operation = {
            "operationId": "deletePet",
            "parameters": [pet_id_param()],
            "responses": {"204": {"description": "deleted"}},
        }
        bound = make_binder(bindings=True).bind(operation, "delete", "/pets/{petId}")

        assert bound.metadata.route == "/pets"
        assert bound.metadata.id_param == "petId"
        assert bound.metadata.id_type == "string"
        assert bound.metadata.params_in_path == []
        assert bound.metadata.generics == ("void", "unknown", "void", "string", "void")
        assert "PathParams" not in bound.declarations
        assert "axios.delete<void>(`/pets/${id}`)" in bound.bindings

    def test_nested_route(self):
        operation = {
            "operationId": "deleteOwnerPet",
            "parameters": [
                {"name": "ownerId", "in": "path", "required": True, "schema": {"type": "string"}},
                pet_id_param({"type": "integer"}),
            ],
        }
        bound = make_binder(bindings=True).bind(
            operation, "delete", "/owners/{ownerId}/pets/{petId}"
        )

        assert bound.metadata.route == "/owners/${ownerId}/pets"
        assert bound.metadata.params_in_path == ["ownerId"]
        assert bound.metadata.generics[3] == "number"
        assert bound.metadata.generics[4] == "DeleteOwnerPetPathParams"

    def test_path_param_named_id(self):
        operation = {
            "operationId": "deleteUserPost",
            "parameters": [
                {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}},
                {"name": "postId", "in": "path", "required": True, "schema": {"type": "integer"}},
            ],
        }
        bound = make_binder(bindings=True).bind(
            operation, "delete", "/users/{id}/posts/{postId}"
        )

        assert bound.metadata.route == "/users/${id}/posts"
        assert bound.metadata.params_in_path == ["id"]
        assert "({ id, postId }) =>" in bound.bindings
        assert "`/users/${id}/posts/${postId}`" in bound.bindings
        assert "{ id, id }" not in bound.bindings

    def test_trailing_slash(self):
        operation = {"operationId": "deletePet", "parameters": [pet_id_param()]}
        bound = make_binder(bindings=True).bind(operation, "delete", "/pets/{petId}/")

        assert bound.metadata.route == "/pets"

    def test_reference_schema(self):
        operation = {
            "operationId": "deletePet",
            "parameters": [pet_id_param({"$ref": "#/components/schemas/PetId"})],
        }
        bound = make_binder(bindings=True).bind(operation, "delete", "/pets/{petId}")

        assert bound.metadata.id_type == "PetId"

    def test_no_parameters_defaults_to_string(self):
        bound = make_binder(bindings=True).bind(
            {"operationId": "deletePet"}, "delete", "/pets/{petId}"
        )
        assert bound.metadata.id_type == "string"

    def test_unresolved_parameter(self):
        operation = {
            "operationId": "deletePet",
            "parameters": [{"name": "force", "in": "query", "schema": {"type": "boolean"}}],
        }
        with pytest.raises(UnresolvedPathParameterError):
            make_binder(bindings=True).bind(operation, "delete", "/pets/{petId}")

    def test_route_parameters_are_used(self):
        binder = make_binder(bindings=True)
        bound = binder.bind(
            {"operationId": "deletePet"},
            "delete",
            "/pets/{petId}",
            route_parameters=[pet_id_param({"type": "integer"})],
        )
        assert bound.metadata.id_type == "number"

    def test_not_extracted_without_bindings(self):
        operation = {"operationId": "deletePet", "parameters": [pet_id_param()]}
        bound = make_binder(bindings=False).bind(operation, "delete", "/pets/{petId}")

        assert bound.metadata.route == "/pets/${petId}"
        assert bound.metadata.id_param is None
        assert bound.metadata.params_in_path == ["petId"]
        assert bound.metadata.generics[3] == "void"
        assert bound.metadata.generics[4] == "DeletePetPathParams"

    def test_other_verbs_keep_last_param(self):
        operation = {"operationId": "updatePet", "parameters": [pet_id_param()]}
        bound = make_binder(bindings=True).bind(operation, "put", "/pets/{petId}")

        assert bound.metadata.route == "/pets/${petId}"
        assert bound.metadata.id_param is None


class TestParameters:
    """Тесты параметров операции"""

    def test_operation_overrides_route_parameter(self):
        operation = {
            "operationId": "listPets",
            "parameters": [
                {"name": "limit", "in": "query", "required": True, "schema": {"type": "integer"}}
            ],
        }
        route_parameters = [{"name": "limit", "in": "query", "schema": {"type": "string"}}]
        bound = make_binder().bind(operation, "get", "/pets", route_parameters)

        assert "limit: number;" in bound.declarations
        assert "limit?: string" not in bound.declarations

    def test_parameter_reference(self):
        components = {
            "parameters": {
                "limit": {"name": "limit", "in": "query", "schema": {"type": "integer"}}
            }
        }
        operation = {
            "operationId": "listPets",
            "parameters": [{"$ref": "#/components/parameters/limit"}],
        }
        bound = make_binder(components).bind(operation, "get", "/pets")

        assert "limit?: number;" in bound.declarations

    def test_missing_parameter_reference(self, caplog):
        operation = {
            "operationId": "listPets",
            "parameters": [{"$ref": "#/components/parameters/missing"}],
        }
        with caplog.at_level(logging.WARNING):
            bound = make_binder().bind(operation, "get", "/pets")

        assert bound.metadata.query_params_type is None
        assert "#/components/parameters/missing" in caplog.text

    def test_unsupported_parameter_reference(self):
        operation = {
            "operationId": "listPets",
            "parameters": [{"$ref": "#/components/schemas/Limit"}],
        }
        with pytest.raises(UnsupportedReferenceError):
            make_binder().bind(operation, "get", "/pets")

    def test_quoted_query_keys(self):
        operation = {
            "operationId": "listPets",
            "parameters": [{"name": "page[size]", "in": "query", "schema": {"type": "integer"}}],
        }
        bound = make_binder().bind(operation, "get", "/pets")

        assert '"page[size]"?: number;' in bound.declarations


class TestCustomGenerator:
    """Тесты пользовательского генератора"""

    def test_custom_output_is_appended(self):
        binder = make_binder(
            custom_generator=lambda metadata: f"// {metadata.component_name} {metadata.generics_types}\n"
        )
        bound = binder.bind({"operationId": "listPets"}, "get", "/pets")

        assert bound.bindings == "// ListPets void, unknown, void, void, void\n"
