"""
Base classes for decorators.

A decorator receives a Schema Model node and the arena index of the
declaration generated for it, and appends members to that declaration.
Decorators never remove or rename members, and never call each other:
when one needs what another produced, it reads the declaration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ..analyzer import CSharpTypeMapper, NameMapping, SchemaResolver
from ..code_model import (
    AccessModifier,
    AttributeDecl,
    CodeModel,
    MemberModifier,
    PrimitiveExpression,
    PropertyDecl,
    ReturnStatement,
)
from ..config import CodeGeneratorConfig
from ..discovery import MethodDef, ResourceDef, SchemaDef, Service

# Client runtime names the generated code refers to
CLIENT_SERVICE_INTERFACE = "IClientService"
SERVICE_MEMBER = "Service"
REQUEST_PARAMETER_ATTRIBUTE = "RequestParameter"
REQUEST_PARAMETER_TYPE = "RequestParameterType"
JSON_PROPERTY_ATTRIBUTE = "JsonProperty"

# Members of the runtime base classes; generated members must not shadow them
SERVICE_BASE_MEMBERS = frozenset({"Name", "BaseUri", "BasePath", "Features", "Initializer", "HttpClient", "Serializer", "ApiKey"})
REQUEST_BASE_MEMBERS = frozenset({"MethodName", "HttpMethod", "RestPath", "Service", "Body", "GetBody", "RequestParameters", "Execute", "ExecuteAsync", "ExecuteAsStream", "CreateRequest"})
SCHEMA_BASE_MEMBERS = frozenset({"ETag"})


@dataclass(frozen=True)
class GenerationContext:
    """Read-only data shared by the decorators of one generation session."""

    service: Service
    config: CodeGeneratorConfig
    names: NameMapping
    resolver: SchemaResolver
    types: CSharpTypeMapper

    @property
    def unique_suffix(self) -> str:
        return self.config.unique_suffix


def literal_type_name(value: Any) -> str:
    """C# type name of a literal value."""
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "double"
    if isinstance(value, str):
        return "string"
    return "object"


def generate_constant_property(
    name: str,
    value: Any,
    type_name: str | None = None,
    modifiers: list[MemberModifier] | None = None,
    comment: str | None = None,
) -> PropertyDecl:
    """
    Build a public read-only property whose getter returns a literal.

    This is the one place literal-valued properties are made, so they all
    have the same shape: public, a getter with a single return statement,
    no setter.

    Args:
        name: Property name
        value: Literal returned by the getter
        type_name: Property type (inferred from the value if omitted)
        modifiers: Extra modifiers such as override
        comment: Documentation summary

    Returns:
        The property declaration
    """
    return PropertyDecl(
        name=name,
        type_name=type_name or literal_type_name(value),
        access=AccessModifier.PUBLIC,
        modifiers=list(modifiers or []),
        has_get=True,
        has_set=False,
        get_statements=[ReturnStatement(PrimitiveExpression(value))],
        comment=comment,
    )


def find_attribute(decl, attribute_name: str) -> AttributeDecl | None:
    """First attribute of a declaration with that name."""
    return next((a for a in decl.attributes if a.name == attribute_name), None)


class ServiceDecorator(ABC):
    """Decorates the service class."""

    @abstractmethod
    def decorate_service(
        self,
        model: CodeModel,
        service: Service,
        service_decl: int,
        context: GenerationContext,
    ) -> None:
        """Append members to the service class."""


class ResourceDecorator(ABC):
    """Decorates a resource class."""

    @abstractmethod
    def decorate_resource(
        self,
        model: CodeModel,
        resource: ResourceDef,
        resource_decl: int,
        context: GenerationContext,
    ) -> None:
        """Append members to a resource class."""


class RequestDecorator(ABC):
    """Decorates the request class generated for one method."""

    @abstractmethod
    def decorate_class(
        self,
        model: CodeModel,
        resource: ResourceDef,
        method: MethodDef,
        request_decl: int,
        resource_decl: int,
        context: GenerationContext | None = None,
    ) -> None:
        """Append members to the request class (or to its resource class)."""


class SchemaDecorator(ABC):
    """Decorates a schema class."""

    @abstractmethod
    def decorate_schema(
        self,
        model: CodeModel,
        schema: SchemaDef,
        schema_decl: int,
        context: GenerationContext,
    ) -> None:
        """Append members to a schema class."""
