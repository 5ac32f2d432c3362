"""
Translation of discovery types to C# type names.
"""

from __future__ import annotations

from ...utils import snake_to_pascal_case
from ..discovery.nodes import TypeKind, TypeRef
from .reference_resolver import SchemaResolver


class CSharpTypeMapper:
    """Translates TypeRefs into C# type strings."""

    TYPE_MAP = {
        "string": "string",
        "integer": "int?",
        "number": "double?",
        "boolean": "bool?",
        "any": "object",
        "object": "object",
    }

    # (type, format) overrides
    FORMAT_MAP = {
        ("string", "int64"): "long?",
        ("string", "uint64"): "ulong?",
        ("integer", "int32"): "int?",
        ("integer", "uint32"): "long?",
        ("number", "double"): "double?",
        ("number", "float"): "float?",
    }

    # C# value types grouped by the kind of literal they accept
    LITERAL_KINDS = {
        "int?": "integer",
        "long?": "integer",
        "ulong?": "integer",
        "double?": "number",
        "float?": "number",
        "bool?": "boolean",
    }

    def __init__(self, resolver: SchemaResolver):
        self.resolver = resolver

    def literal_kind(self, type_ref: TypeRef) -> str:
        """Kind of literal ("integer", "number", "boolean" or "string") a primitive's C# type accepts."""
        return self.LITERAL_KINDS.get(self.translate_type(type_ref), "string")

    def translate_type(self, type_ref: TypeRef, location: str = "", inline_class: str | None = None) -> str:
        """
        Translate a type to a C# type string.

        References are translated by name only; the referenced schema is
        looked up but never expanded.

        Args:
            type_ref: The type to translate
            location: Where the type is used (for error messages)
            inline_class: Class name to use for an inline object type

        Returns:
            C# type string

        Raises:
            MalformedDocumentError: If the type references an unknown schema
        """
        if type_ref.kind == TypeKind.PRIMITIVE:
            return self.FORMAT_MAP.get((type_ref.name, type_ref.format), self.TYPE_MAP.get(type_ref.name, "object"))

        if type_ref.kind == TypeKind.REF:
            return self.resolver.class_name(type_ref.name, location)

        if type_ref.kind == TypeKind.ARRAY:
            item_type = self.translate_type(type_ref.items, location, inline_class) if type_ref.items else "object"
            return f"IList<{item_type}>"

        if type_ref.kind == TypeKind.MAP:
            value_type = self.translate_type(type_ref.items, location, inline_class) if type_ref.items else "object"
            return f"IDictionary<string, {value_type}>"

        if type_ref.kind == TypeKind.OBJECT:
            return inline_class or self.inline_class_name(type_ref)

        return "object"

    @staticmethod
    def inline_class_name(type_ref: TypeRef) -> str:
        """Name of the nested class generated for an inline object."""
        return f"{snake_to_pascal_case(type_ref.name)}Data"

    @staticmethod
    def inline_schemas(type_ref: TypeRef) -> list[TypeRef]:
        """Inline object types reachable through arrays and maps."""
        if type_ref.kind == TypeKind.OBJECT:
            return [type_ref]
        if type_ref.kind in (TypeKind.ARRAY, TypeKind.MAP) and type_ref.items:
            return CSharpTypeMapper.inline_schemas(type_ref.items)
        return []
