"""
Tests for the request decorators and the constant property primitive.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from discovery_to_code.pipeline import CodeGeneratorConfig, DecoratorPipeline, PipelineGenerator
from discovery_to_code.pipeline.code_model import (
    AccessModifier,
    AssignStatement,
    AttributeDecl,
    ClassDecl,
    CodeModel,
    MemberModifier,
    MethodDecl,
    ObjectCreateExpression,
    ParameterDecl,
    PrimitiveExpression,
    PropertyDecl,
    ReturnStatement,
    SnippetExpression,
)
from discovery_to_code.pipeline.decorators import ServiceRequestFieldDecorator, generate_constant_property
from discovery_to_code.pipeline.discovery import MethodDef, ResourceDef
from discovery_to_code.pipeline.errors import MalformedDocumentError

TEST_DATA = Path(__file__).parent / "test_data" / "discovery"


def load(name: str) -> dict:
    with open(TEST_DATA / name) as f:
        return json.load(f)


def find_class(model: CodeModel, *path: str) -> int:
    """Index of the class reached by following class names from the top level."""
    candidates = model.top_level()
    index = None
    for name in path:
        index = next(i for i in candidates if model.get(i).name == name)
        candidates = model.get_class(index).members
    return index


def member(model: CodeModel, owner: int, name: str):
    return model.get(model.find_member(owner, name))


class TestGenerateConstantProperty:
    """Tests for generate_constant_property."""

    def test_shape(self):
        prop = generate_constant_property("Name", "Value")

        assert prop.name == "Name"
        assert prop.access == AccessModifier.PUBLIC
        assert prop.has_get
        assert not prop.has_set
        assert prop.type_name == "string"
        assert prop.get_statements == [ReturnStatement(PrimitiveExpression("Value"))]
        assert prop.set_statements == []

    @pytest.mark.parametrize("value,type_name", [(3, "int"), (2.5, "double"), (True, "bool"), ("x", "string")])
    def test_type_inferred_from_literal(self, value, type_name):
        assert generate_constant_property("P", value).type_name == type_name

    def test_modifiers_and_comment(self):
        prop = generate_constant_property("Name", "books", modifiers=[MemberModifier.OVERRIDE], comment="Gets the service name.")
        assert prop.modifiers == [MemberModifier.OVERRIDE]
        assert prop.comment == "Gets the service name."


class TestServiceRequestFieldDecorator:
    """Tests for the MethodName / HttpMethod / RestPath decorator."""

    def test_adds_three_constant_properties(self):
        model = CodeModel()
        resource_decl = model.add_class(ClassDecl(name="ThingsResource"))
        request_decl = model.add_class(ClassDecl(name="MethodRequest"), parent=resource_decl)
        method = MethodDef(name="Method", http_method="GET", path="/x")

        ServiceRequestFieldDecorator().decorate_class(model, ResourceDef(name="things", path="things"), method, request_decl, resource_decl)

        members = model.members(request_decl)
        assert [m.name for m in members] == ["MethodName", "HttpMethod", "RestPath"]
        for prop, value in zip(members, ["Method", "GET", "/x"]):
            assert isinstance(prop, PropertyDecl)
            assert prop.access == AccessModifier.PUBLIC
            assert prop.has_get
            assert not prop.has_set
            assert prop.get_statements == [ReturnStatement(PrimitiveExpression(value))]
            assert MemberModifier.OVERRIDE in prop.modifiers

        # The resource class is not touched
        assert model.members(resource_decl) == [model.get(request_decl)]


class TestRequestPipeline:
    """Tests for the request decorators running through the generator."""

    def test_request_class_members(self):
        model = PipelineGenerator(load("books.json")).build_model()
        request = find_class(model, "VolumesResource", "ListRequest")

        assert model.get_class(request).base_types == ["ClientServiceRequest<Volumes>"]
        assert model.get(request).comment == "Performs a book search."
        assert [m.name for m in model.members(request)] == [
            "MethodName",
            "HttpMethod",
            "RestPath",
            "Q",
            "MaxResults",
            "ShowPreorders",
            "ListRequest",
        ]

    def test_parameter_properties(self):
        model = PipelineGenerator(load("books.json")).build_model()
        request = find_class(model, "VolumesResource", "GetRequest")

        volume_id = member(model, request, "VolumeId")
        assert volume_id.type_name == "string"
        assert volume_id.has_get and volume_id.has_set
        assert volume_id.comment == "ID of volume to retrieve."
        assert volume_id.attributes == [
            AttributeDecl(
                name="RequestParameter",
                arguments=[PrimitiveExpression("volumeId"), SnippetExpression("RequestParameterType.Path")],
            )
        ]
        assert member(model, request, "Projection").attributes[0].arguments[1] == SnippetExpression("RequestParameterType.Query")

        list_request = find_class(model, "VolumesResource", "ListRequest")
        assert member(model, list_request, "MaxResults").type_name == "long?"
        assert member(model, list_request, "ShowPreorders").type_name == "bool?"

    def test_constructor(self):
        model = PipelineGenerator(load("books.json")).build_model()
        request = find_class(model, "VolumesResource", "ListRequest")
        constructor = member(model, request, "ListRequest")

        assert constructor.is_constructor
        assert constructor.parameters == [
            ParameterDecl(name="service", type_name="IClientService"),
            ParameterDecl(name="q", type_name="string"),
        ]
        assert constructor.base_call_args == [SnippetExpression("service")]
        assert constructor.statements == [
            AssignStatement(target="Q", value=SnippetExpression("q")),
            AssignStatement(target="MaxResults", value=PrimitiveExpression(10)),
            AssignStatement(target="ShowPreorders", value=PrimitiveExpression(False)),
        ]

    def test_body(self):
        model = PipelineGenerator(load("books.json")).build_model()
        request = find_class(model, "VolumesResource", "InsertRequest")

        assert [m.name for m in model.members(request)] == ["MethodName", "HttpMethod", "RestPath", "Body", "GetBody", "InsertRequest"]
        assert member(model, request, "Body").type_name == "Volume"
        get_body = member(model, request, "GetBody")
        assert get_body.access == AccessModifier.PROTECTED
        assert get_body.modifiers == [MemberModifier.OVERRIDE]
        assert member(model, request, "InsertRequest").parameters[-1] == ParameterDecl(name="body", type_name="Volume")

    def test_resource_method(self):
        model = PipelineGenerator(load("books.json")).build_model()
        resource = find_class(model, "VolumesResource")
        method = member(model, resource, "List")

        assert isinstance(method, MethodDecl)
        assert method.return_type == "ListRequest"
        assert method.parameters == [ParameterDecl(name="q", type_name="string")]
        assert method.statements == [
            ReturnStatement(
                ObjectCreateExpression(type_name="ListRequest", arguments=(SnippetExpression("Service"), SnippetExpression("q"))),
            )
        ]

    def test_void_response_uses_string(self):
        model = PipelineGenerator(load("books.json")).build_model()
        request = find_class(model, "MylibraryResource", "BookshelvesResource", "ClearVolumesRequest")
        assert model.get_class(request).base_types == ["ClientServiceRequest<string>"]


class TestDecoratorConfiguration:
    """Decorators are independent and run in the configured order."""

    def test_single_decorator(self):
        config = CodeGeneratorConfig(request_decorators=["request_fields"])
        model = PipelineGenerator(load("books.json"), config).build_model()

        request = find_class(model, "VolumesResource", "GetRequest")
        assert [m.name for m in model.members(request)] == ["MethodName", "HttpMethod", "RestPath"]
        assert model.find_member(find_class(model, "VolumesResource"), "Get") is None

    def test_order_follows_config(self):
        config = CodeGeneratorConfig(request_decorators=["request_parameters", "request_fields"])
        model = PipelineGenerator(load("books.json"), config).build_model()

        request = find_class(model, "VolumesResource", "GetRequest")
        assert [m.name for m in model.members(request)] == ["VolumeId", "Projection", "MethodName", "HttpMethod", "RestPath"]

    def test_constructor_without_parameter_properties(self):
        config = CodeGeneratorConfig(request_decorators=["request_constructor"])
        model = PipelineGenerator(load("books.json"), config).build_model()

        request = find_class(model, "VolumesResource", "GetRequest")
        constructor = member(model, request, "GetRequest")
        assert constructor.parameters == [ParameterDecl(name="service", type_name="IClientService")]
        assert constructor.statements == []

    def test_unknown_decorator(self):
        with pytest.raises(ValueError, match="request_magic"):
            DecoratorPipeline.from_config(CodeGeneratorConfig(request_decorators=["request_magic"]))


class TestParameterDefaults:
    """Default values become literals of the property type; a bad one skips the method."""

    def test_bad_default_is_reported(self):
        document = {
            "name": "shop",
            "version": "v1",
            "resources": {
                "items": {
                    "methods": {
                        "list": {
                            "httpMethod": "GET",
                            "path": "items",
                            "parameters": {"limit": {"type": "integer", "default": "many", "location": "query"}},
                        },
                        "get": {"httpMethod": "GET", "path": "items/{id}"},
                    }
                }
            },
        }
        generator = PipelineGenerator(document)
        model = generator.build_model()

        resource = find_class(model, "ItemsResource")
        names = [m.name for m in model.members(resource)]
        assert "ListRequest" not in names
        assert "List" not in names
        assert "GetRequest" in names
        assert "Get" in names

        assert len(generator.report.errors) == 1
        error = generator.report.errors[0]
        assert isinstance(error, MalformedDocumentError)
        assert error.location == "items.list.limit"

    @staticmethod
    def _items_document(parameters: dict, **method) -> dict:
        list_method = {"httpMethod": "GET", "path": "items", "parameters": parameters}
        list_method.update(method)
        return {"name": "shop", "version": "v1", "resources": {"items": {"methods": {"list": list_method}}}}

    def test_default_follows_mapped_type(self):
        document = self._items_document(
            {
                "maxResults": {"type": "string", "format": "int64", "default": "20", "location": "query"},
                "startIndex": {"type": "integer", "format": "uint32", "default": "0", "location": "query"},
                "ratio": {"type": "number", "format": "float", "default": "0.5", "location": "query"},
                "order": {"type": "string", "default": "20", "location": "query"},
            }
        )
        generator = PipelineGenerator(document)
        model = generator.build_model()

        request = find_class(model, "ItemsResource", "ListRequest")
        assert member(model, request, "MaxResults").type_name == "long?"
        assert member(model, request, "ListRequest").statements == [
            AssignStatement(target="MaxResults", value=PrimitiveExpression(20)),
            AssignStatement(target="StartIndex", value=PrimitiveExpression(0)),
            AssignStatement(target="Ratio", value=PrimitiveExpression(0.5)),
            AssignStatement(target="Order", value=PrimitiveExpression("20")),
        ]
        assert generator.report.errors == []

    def test_bad_int64_string_default_is_reported(self):
        document = self._items_document({"maxResults": {"type": "string", "format": "int64", "default": "lots", "location": "query"}})
        generator = PipelineGenerator(document)
        generator.build_model()

        assert len(generator.report.errors) == 1
        assert generator.report.errors[0].location == "items.list.maxResults"

    def test_repeated_default_is_not_assigned(self):
        document = self._items_document(
            {
                "tags": {"type": "string", "repeated": True, "default": "a", "location": "query"},
                "limit": {"type": "integer", "default": "5", "location": "query"},
            }
        )
        generator = PipelineGenerator(document)
        model = generator.build_model()

        request = find_class(model, "ItemsResource", "ListRequest")
        assert member(model, request, "Tags").type_name == "IList<string>"
        assert member(model, request, "ListRequest").statements == [
            AssignStatement(target="Limit", value=PrimitiveExpression(5)),
        ]
        assert generator.report.errors == []


class TestConstructorParameterOrder:
    """Required constructor parameters follow parameterOrder."""

    def test_parameter_order_wins_over_declaration_order(self):
        document = {
            "name": "shop",
            "version": "v1",
            "resources": {
                "items": {
                    "methods": {
                        "get": {
                            "httpMethod": "GET",
                            "path": "stores/{storeId}/items/{itemId}",
                            "parameters": {
                                "itemId": {"type": "string", "required": True, "location": "path"},
                                "verbose": {"type": "boolean", "default": "true", "location": "query"},
                                "storeId": {"type": "string", "required": True, "location": "path"},
                                "region": {"type": "string", "required": True, "location": "query"},
                            },
                            "parameterOrder": ["storeId", "itemId"],
                        }
                    }
                }
            },
        }
        model = PipelineGenerator(document).build_model()

        request = find_class(model, "ItemsResource", "GetRequest")
        constructor = member(model, request, "GetRequest")
        assert [p.name for p in constructor.parameters] == ["service", "storeId", "itemId", "region"]
        assert constructor.statements == [
            AssignStatement(target="StoreId", value=SnippetExpression("storeId")),
            AssignStatement(target="ItemId", value=SnippetExpression("itemId")),
            AssignStatement(target="Region", value=SnippetExpression("region")),
            AssignStatement(target="Verbose", value=PrimitiveExpression(True)),
        ]

        method = member(model, find_class(model, "ItemsResource"), "Get")
        assert [p.name for p in method.parameters] == ["storeId", "itemId", "region"]
