"""
Decorators for the request class generated for each method.
"""

from __future__ import annotations

import logging
from typing import Any

from ...utils import snake_to_pascal_case, to_local_name
from ..code_model import (
    AccessModifier,
    AssignStatement,
    AttributeDecl,
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
from ..discovery import MethodDef, ParameterDef, ResourceDef, TypeKind
from ..errors import MalformedDocumentError
from .base import (
    CLIENT_SERVICE_INTERFACE,
    REQUEST_BASE_MEMBERS,
    REQUEST_PARAMETER_ATTRIBUTE,
    REQUEST_PARAMETER_TYPE,
    SERVICE_MEMBER,
    GenerationContext,
    RequestDecorator,
    find_attribute,
    generate_constant_property,
)

logger = logging.getLogger("discovery_to_code")


class ServiceRequestFieldDecorator(RequestDecorator):
    """Adds the MethodName, HttpMethod and RestPath properties, in that order."""

    def decorate_class(
        self,
        model: CodeModel,
        resource: ResourceDef,
        method: MethodDef,
        request_decl: int,
        resource_decl: int,
        context: GenerationContext | None = None,
    ) -> None:
        model.add_member(request_decl, self.generate_string_constant_property_override("MethodName", method.name))
        model.add_member(request_decl, self.generate_string_constant_property_override("HttpMethod", method.http_method))
        model.add_member(request_decl, self.generate_string_constant_property_override("RestPath", method.path))

    @staticmethod
    def generate_string_constant_property_override(name: str, value: str) -> PropertyDecl:
        """A read-only string property overriding the request base class member."""
        return generate_constant_property(name, value, type_name="string", modifiers=[MemberModifier.OVERRIDE])


class RequestDocumentationDecorator(RequestDecorator):
    """Documents the request class with the method description."""

    def decorate_class(self, model, resource, method, request_decl, resource_decl, context=None) -> None:
        decl = model.get(request_decl)
        if method.description and not decl.comment:
            decl.comment = method.description


class RequestParameterPropertyDecorator(RequestDecorator):
    """Adds one settable property per parameter, in declaration order."""

    def decorate_class(self, model, resource, method, request_decl, resource_decl, context=None) -> None:
        for param in method.parameters:
            location = f"{resource.path}.{method.name}.{param.name}"
            name = model.safe_member_name(
                request_decl,
                snake_to_pascal_case(param.name),
                context.unique_suffix,
                extra_reserved=REQUEST_BASE_MEMBERS,
            )
            model.add_member(
                request_decl,
                PropertyDecl(
                    name=name,
                    type_name=self._parameter_type(param, context, location),
                    modifiers=[MemberModifier.VIRTUAL],
                    attributes=[
                        AttributeDecl(
                            name=REQUEST_PARAMETER_ATTRIBUTE,
                            arguments=[
                                PrimitiveExpression(param.name),
                                SnippetExpression(f"{REQUEST_PARAMETER_TYPE}.{param.location.value.capitalize()}"),
                            ],
                        )
                    ],
                    comment=param.description,
                ),
            )

    def _parameter_type(self, param: ParameterDef, context: GenerationContext, location: str) -> str:
        type_name = context.types.translate_type(param.type_ref, location)
        if param.repeated:
            return f"IList<{type_name}>"
        return type_name


class RequestBodyDecorator(RequestDecorator):
    """Adds the Body property and the GetBody override for methods with a request schema."""

    def decorate_class(self, model, resource, method, request_decl, resource_decl, context=None) -> None:
        if not method.request:
            return

        body_type = context.resolver.class_name(method.request, f"{resource.path}.{method.name}")
        model.add_member(
            request_decl,
            PropertyDecl(
                name="Body",
                type_name=body_type,
                modifiers=[MemberModifier.VIRTUAL],
                comment="Gets or sets the body of this request.",
            ),
        )
        model.add_member(
            request_decl,
            MethodDecl(
                name="GetBody",
                return_type="object",
                access=AccessModifier.PROTECTED,
                modifiers=[MemberModifier.OVERRIDE],
                statements=[ReturnStatement(SnippetExpression("Body"))],
                comment="Returns the body of the request.",
            ),
        )


class RequestConstructorDecorator(RequestDecorator):
    """Adds a constructor taking the service, the required parameters and the body.

    Parameter properties are found through their RequestParameter attribute,
    so this decorator works with whatever properties the class holds.
    """

    def decorate_class(self, model, resource, method, request_decl, resource_decl, context=None) -> None:
        decl = model.get_class(request_decl)
        location = f"{resource.path}.{method.name}"

        properties = {}
        for member in model.members(request_decl):
            attribute = find_attribute(member, REQUEST_PARAMETER_ATTRIBUTE)
            if isinstance(member, PropertyDecl) and attribute and attribute.arguments:
                properties[attribute.arguments[0].value] = member

        parameters = [ParameterDecl(name="service", type_name=CLIENT_SERVICE_INTERFACE)]
        statements = []
        used_locals = {"service"}

        for param in self._required_parameters(method):
            prop = properties.get(param.name)
            if prop is None:
                continue
            local = self._local_name(param.name, context.unique_suffix, used_locals)
            parameters.append(ParameterDecl(name=local, type_name=prop.type_name))
            statements.append(AssignStatement(target=prop.name, value=SnippetExpression(local)))

        for param in method.parameters:
            prop = properties.get(param.name)
            if prop is None or param.required or not param.has_default:
                continue
            if param.repeated:
                logger.warning(f"{location}.{param.name}: default of a repeated parameter is ignored")
                continue
            literal = self._default_literal(param, context, f"{location}.{param.name}")
            statements.append(AssignStatement(target=prop.name, value=PrimitiveExpression(literal)))

        body = model.find_member(request_decl, "Body")
        if body is not None:
            local = self._local_name("body", context.unique_suffix, used_locals)
            parameters.append(ParameterDecl(name=local, type_name=model.get(body).type_name))
            statements.append(AssignStatement(target="Body", value=SnippetExpression(local)))

        model.add_member(
            request_decl,
            MethodDecl(
                name=decl.name,
                is_constructor=True,
                parameters=parameters,
                statements=statements,
                base_call_args=[SnippetExpression("service")],
                comment=f"Constructs a new {snake_to_pascal_case(method.name)} request.",
            ),
        )

    def _local_name(self, name: str, unique_suffix: str, used: set[str]) -> str:
        local = to_local_name(name, unique_suffix)
        while local in used:
            local = local + unique_suffix
        used.add(local)
        return local

    @staticmethod
    def _required_parameters(method: MethodDef) -> list[ParameterDef]:
        """Required parameters, those named by parameterOrder first."""
        by_name = {param.name: param for param in method.parameters}
        ordered = [by_name[name] for name in method.parameter_order if by_name[name].required]
        ordered += [param for param in method.parameters if param.required and param.name not in method.parameter_order]
        return ordered

    def _default_literal(self, param: ParameterDef, context: GenerationContext, location: str) -> Any:
        """Convert a discovery default (always written as a string) to a literal of the property's C# type."""
        value = param.default_value
        if param.type_ref.kind != TypeKind.PRIMITIVE or not isinstance(value, str):
            return value
        kind = context.types.literal_kind(param.type_ref)
        try:
            if kind == "integer":
                return int(value)
            if kind == "number":
                return float(value)
        except ValueError:
            raise MalformedDocumentError(f"Default {value!r} is not a valid {kind}", location=location) from None
        if kind == "boolean":
            if value not in ("true", "false"):
                raise MalformedDocumentError(f"Default {value!r} is not a valid boolean", location=location)
            return value == "true"
        return value


class ResourceMethodDecorator(RequestDecorator):
    """Adds to the resource class a method creating the request.

    The method mirrors the request constructor, passing the resource's
    service in place of the service parameter.
    """

    def decorate_class(self, model, resource, method, request_decl, resource_decl, context=None) -> None:
        request = model.get_class(request_decl)
        constructor = next(
            (m for m in model.members(request_decl) if isinstance(m, MethodDecl) and m.is_constructor),
            None,
        )

        parameters = []
        arguments = []
        if constructor is not None:
            parameters = [ParameterDecl(name=p.name, type_name=p.type_name) for p in constructor.parameters[1:]]
            arguments = [SnippetExpression(SERVICE_MEMBER)] + [SnippetExpression(p.name) for p in parameters]

        name = model.safe_member_name(resource_decl, snake_to_pascal_case(method.name), context.unique_suffix)
        model.add_member(
            resource_decl,
            MethodDecl(
                name=name,
                return_type=request.name,
                modifiers=[MemberModifier.VIRTUAL],
                parameters=parameters,
                statements=[ReturnStatement(ObjectCreateExpression(type_name=request.name, arguments=tuple(arguments)))],
                comment=method.description,
            ),
        )
        logger.debug(f"Added {resource.path}.{method.name} as {model.get(resource_decl).name}.{name}")
