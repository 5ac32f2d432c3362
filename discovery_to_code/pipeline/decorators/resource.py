"""
Decorators for resource classes.
"""

from __future__ import annotations

from ...utils import snake_to_pascal_case
from ..code_model import (
    AccessModifier,
    AssignStatement,
    CodeModel,
    ConstantDecl,
    MemberModifier,
    MethodDecl,
    ObjectCreateExpression,
    ParameterDecl,
    PropertyDecl,
    SnippetExpression,
)
from ..discovery import ResourceDef
from .base import CLIENT_SERVICE_INTERFACE, SERVICE_MEMBER, GenerationContext, ResourceDecorator


class ResourceNameDecorator(ResourceDecorator):
    """Adds a private constant holding the resource's wire name."""

    def decorate_resource(
        self,
        model: CodeModel,
        resource: ResourceDef,
        resource_decl: int,
        context: GenerationContext,
    ) -> None:
        model.add_member(
            resource_decl,
            ConstantDecl(
                name="Resource",
                type_name="string",
                value=resource.name,
                access=AccessModifier.PRIVATE,
            ),
        )


class SubresourceDecorator(ResourceDecorator):
    """Adds a getter-only property for each nested resource."""

    def decorate_resource(self, model, resource, resource_decl, context) -> None:
        for sub_resource in resource.resources:
            if sub_resource.path in context.config.ignore_resources:
                continue
            # Sub-resources that failed to generate were rolled back
            if context.names.resource_names[sub_resource.path] not in model.member_names(resource_decl):
                continue
            name = model.safe_member_name(
                resource_decl,
                snake_to_pascal_case(sub_resource.name),
                context.unique_suffix,
                extra_reserved=[SERVICE_MEMBER] + list(context.names.resource_names.values()),
            )
            model.add_member(
                resource_decl,
                PropertyDecl(
                    name=name,
                    type_name=context.names.resource_names[sub_resource.path],
                    modifiers=[MemberModifier.VIRTUAL],
                    has_set=False,
                    comment=f"Gets the {sub_resource.name} resource.",
                ),
            )


class ResourceServiceDecorator(ResourceDecorator):
    """Adds the Service property and the constructor.

    The constructor stores the service and creates every nested resource
    already exposed as a property of the class.
    """

    def decorate_resource(self, model, resource, resource_decl, context) -> None:
        decl = model.get_class(resource_decl)
        model.add_member(
            resource_decl,
            PropertyDecl(
                name=SERVICE_MEMBER,
                type_name=CLIENT_SERVICE_INTERFACE,
                has_set=False,
                comment="The service which this resource belongs to.",
            ),
        )

        statements = [AssignStatement(target=SERVICE_MEMBER, value=SnippetExpression("service"))]
        statements.extend(sub_resource_assignments(model, resource_decl, resource, context, "service"))

        model.add_member(
            resource_decl,
            MethodDecl(
                name=decl.name,
                is_constructor=True,
                parameters=[ParameterDecl(name="service", type_name=CLIENT_SERVICE_INTERFACE)],
                statements=statements,
                comment="Constructs a new resource.",
            ),
        )


def sub_resource_assignments(
    model: CodeModel,
    owner: int,
    resources: ResourceDef | tuple[ResourceDef, ...],
    context: GenerationContext,
    service_expression: str,
) -> list[AssignStatement]:
    """Assignments creating each resource already exposed as a property of `owner`."""
    children = resources.resources if isinstance(resources, ResourceDef) else resources
    class_names = {context.names.resource_names[r.path] for r in children if r.path in context.names.resource_names}
    statements = []
    for member in model.members(owner):
        if isinstance(member, PropertyDecl) and member.type_name in class_names:
            statements.append(
                AssignStatement(
                    target=member.name,
                    value=ObjectCreateExpression(member.type_name, (SnippetExpression(service_expression),)),
                )
            )
    return statements
