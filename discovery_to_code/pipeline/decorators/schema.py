"""
Decorators for schema classes.
"""

from __future__ import annotations

from ...utils import snake_to_pascal_case
from ..code_model import AttributeDecl, ClassDecl, CodeModel, MemberModifier, PrimitiveExpression, PropertyDecl
from ..discovery import SchemaDef
from .base import JSON_PROPERTY_ATTRIBUTE, SCHEMA_BASE_MEMBERS, GenerationContext, SchemaDecorator


class SchemaDocumentationDecorator(SchemaDecorator):
    """Documents the schema class with the schema description."""

    def decorate_schema(self, model, schema, schema_decl, context) -> None:
        decl = model.get(schema_decl)
        if schema.description and not decl.comment:
            decl.comment = schema.description


class SchemaPropertyDecorator(SchemaDecorator):
    """Adds one JSON property per schema field.

    Referenced schemas appear only by class name. Inline objects become
    nested <Field>Data classes decorated the same way.
    """

    def decorate_schema(
        self,
        model: CodeModel,
        schema: SchemaDef,
        schema_decl: int,
        context: GenerationContext,
    ) -> None:
        reserved = SCHEMA_BASE_MEMBERS if context.config.schema_base_interface else frozenset()
        self._add_properties(model, schema, schema_decl, context, reserved)

    def _add_properties(
        self,
        model: CodeModel,
        schema: SchemaDef,
        decl: int,
        context: GenerationContext,
        reserved: frozenset[str],
    ) -> None:
        for field in schema.fields:
            name = model.safe_member_name(decl, snake_to_pascal_case(field.name), context.unique_suffix, extra_reserved=reserved)

            inline_types = context.types.inline_schemas(field.type_ref)
            inline_class = None
            if inline_types:
                inline_class = model.safe_member_name(
                    decl,
                    context.types.inline_class_name(inline_types[0]),
                    context.unique_suffix,
                    extra_reserved=reserved | {name},
                )

            model.add_member(
                decl,
                PropertyDecl(
                    name=name,
                    type_name=context.types.translate_type(field.type_ref, field.source_path, inline_class),
                    modifiers=[MemberModifier.VIRTUAL],
                    attributes=[AttributeDecl(name=JSON_PROPERTY_ATTRIBUTE, arguments=[PrimitiveExpression(field.name)])],
                    comment=field.description,
                ),
            )

            if inline_class:
                inline = inline_types[0].inline
                nested = model.add_class(ClassDecl(name=inline_class, comment=inline.description), parent=decl)
                self._add_properties(model, inline, nested, context, frozenset())


class SchemaETagDecorator(SchemaDecorator):
    """Adds the ETag property required by the schema base interface."""

    def decorate_schema(self, model, schema, schema_decl, context) -> None:
        if not context.config.schema_base_interface:
            return
        if model.find_member(schema_decl, "ETag") is not None:
            return
        model.add_member(
            schema_decl,
            PropertyDecl(
                name="ETag",
                type_name="string",
                modifiers=[MemberModifier.VIRTUAL],
                comment="The ETag of the item.",
            ),
        )
