"""
Decorators for the service class.
"""

from __future__ import annotations

from ...utils import snake_to_pascal_case
from ..code_model import (
    ClassDecl,
    CodeModel,
    ConstantDecl,
    MemberModifier,
    MethodDecl,
    ParameterDecl,
    PropertyDecl,
    SnippetExpression,
)
from ..discovery import Service
from .base import SERVICE_BASE_MEMBERS, GenerationContext, ServiceDecorator, generate_constant_property
from .resource import sub_resource_assignments


class ServiceConstantsDecorator(ServiceDecorator):
    """Adds the Version constant and the Name and BaseUri properties."""

    def decorate_service(
        self,
        model: CodeModel,
        service: Service,
        service_decl: int,
        context: GenerationContext,
    ) -> None:
        model.add_member(
            service_decl,
            ConstantDecl(
                name="Version",
                type_name="string",
                value=service.version,
                comment="The API version.",
            ),
        )
        model.add_member(
            service_decl,
            generate_constant_property("Name", service.name, modifiers=[MemberModifier.OVERRIDE], comment="Gets the service name."),
        )
        if service.base_uri:
            model.add_member(
                service_decl,
                generate_constant_property("BaseUri", service.base_uri, modifiers=[MemberModifier.OVERRIDE], comment="Gets the service base URI."),
            )


class ServiceScopesDecorator(ServiceDecorator):
    """Adds a nested Scope class with one constant per OAuth2 scope.

    Only the scope identifiers are generated; the authorization flow that
    consumes them belongs to the client runtime.
    """

    def decorate_service(self, model, service, service_decl, context) -> None:
        if not service.scopes:
            return

        class_name = model.safe_member_name(service_decl, "Scope", context.unique_suffix, extra_reserved=SERVICE_BASE_MEMBERS)
        scope_decl = model.add_class(
            ClassDecl(name=class_name, comment=f"Available OAuth 2.0 scopes for use with the {service.title or service.name}."),
            parent=service_decl,
        )
        for uri, description in service.scopes:
            name = model.safe_member_name(scope_decl, snake_to_pascal_case(self._scope_word(uri)), context.unique_suffix)
            model.add_member(
                scope_decl,
                ConstantDecl(name=name, type_name="string", value=uri, comment=description or None),
            )

    @staticmethod
    def _scope_word(uri: str) -> str:
        """Last path segment of a scope URI, or its host when there is no path."""
        return uri.rstrip("/").rsplit("/", 1)[-1]


class ServiceResourcesDecorator(ServiceDecorator):
    """Adds a getter-only property for each top-level resource."""

    def decorate_service(self, model, service, service_decl, context) -> None:
        for resource in service.resources:
            if resource.path in context.config.ignore_resources:
                continue
            # Resources that failed to generate were rolled back
            if context.names.resource_names[resource.path] not in model.member_names(None):
                continue
            name = model.safe_member_name(
                service_decl,
                snake_to_pascal_case(resource.name),
                context.unique_suffix,
                extra_reserved=SERVICE_BASE_MEMBERS,
            )
            model.add_member(
                service_decl,
                PropertyDecl(
                    name=name,
                    type_name=context.names.resource_names[resource.path],
                    modifiers=[MemberModifier.VIRTUAL],
                    has_set=False,
                    comment=f"Gets the {resource.name} resource.",
                ),
            )


class ServiceConstructorDecorator(ServiceDecorator):
    """Adds the constructor creating every resource exposed as a property."""

    def decorate_service(self, model, service, service_decl, context) -> None:
        decl = model.get_class(service_decl)
        model.add_member(
            service_decl,
            MethodDecl(
                name=decl.name,
                is_constructor=True,
                parameters=[ParameterDecl(name="initializer", type_name=f"{context.config.service_base_class}.Initializer")],
                statements=sub_resource_assignments(model, service_decl, service.resources, context, "this"),
                base_call_args=[SnippetExpression("initializer")],
                comment="Constructs a new service.",
            ),
        )
