"""
Schema Model node definitions for discovery documents.

These nodes represent a parsed discovery document: the service, its
resource tree, methods, parameters, and schemas. Schema references are
kept as names; they are resolved later through the SchemaResolver.

All nodes are frozen: the model is built once per document and never
mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeKind(str, Enum):
    """Kind of a discovery type."""

    PRIMITIVE = "primitive"  # string, integer, number, boolean
    REF = "ref"  # {"$ref": "SchemaName"}
    ARRAY = "array"  # {"type": "array", "items": ...}
    MAP = "map"  # {"type": "object", "additionalProperties": ...}
    OBJECT = "object"  # inline {"type": "object", "properties": ...}
    ANY = "any"  # {"type": "any"} or an object without properties


class ParameterLocation(str, Enum):
    """Where a request parameter travels."""

    PATH = "path"
    QUERY = "query"
    BODY = "body"


@dataclass(frozen=True)
class TypeRef:
    """An unresolved type as written in the document."""

    kind: TypeKind = TypeKind.ANY
    name: str = ""  # Primitive type name, or referenced schema name for REF
    format: str | None = None  # "int64", "date-time", ...

    # For ARRAY and MAP
    items: TypeRef | None = None

    # For inline OBJECT
    inline: SchemaDef | None = None

    enum_values: tuple[Any, ...] = ()


@dataclass(frozen=True)
class FieldDef:
    """A named field of a schema."""

    name: str = ""
    type_ref: TypeRef = field(default_factory=TypeRef)
    description: str | None = None
    required: bool = False
    source_path: str = ""


@dataclass(frozen=True)
class SchemaDef:
    """A schema: a named, ordered set of typed fields."""

    name: str = ""
    description: str | None = None
    fields: tuple[FieldDef, ...] = ()
    source_path: str = ""


@dataclass(frozen=True)
class ParameterDef:
    """A method parameter."""

    name: str = ""
    type_ref: TypeRef = field(default_factory=TypeRef)
    required: bool = False
    location: ParameterLocation = ParameterLocation.QUERY
    default_value: Any = None
    has_default: bool = False
    description: str | None = None
    repeated: bool = False


@dataclass(frozen=True)
class MethodDef:
    """A REST method of a resource."""

    name: str = ""
    id: str = ""
    http_method: str = ""
    path: str = ""
    description: str | None = None
    parameters: tuple[ParameterDef, ...] = ()
    parameter_order: tuple[str, ...] = ()
    request: str | None = None  # Request schema name
    response: str | None = None  # Response schema name
    scopes: tuple[str, ...] = ()

    def parameter(self, name: str) -> ParameterDef | None:
        """Get a parameter by name."""
        return next((p for p in self.parameters if p.name == name), None)


@dataclass(frozen=True)
class ResourceDef:
    """A resource: a named group of methods, possibly with sub-resources."""

    name: str = ""
    methods: tuple[MethodDef, ...] = ()
    resources: tuple[ResourceDef, ...] = ()
    path: str = ""  # Dotted path from the service root, e.g. "mylibrary.bookshelves"

    def method(self, name: str) -> MethodDef | None:
        """Get a method by name (case-sensitive)."""
        return next((m for m in self.methods if m.name == name), None)


@dataclass(frozen=True)
class Service:
    """A parsed discovery document."""

    name: str = ""
    version: str = ""
    title: str | None = None
    description: str | None = None
    base_uri: str = ""
    resources: tuple[ResourceDef, ...] = ()
    schemas: tuple[SchemaDef, ...] = ()
    scopes: tuple[tuple[str, str], ...] = ()  # (scope uri, description)

    def schema(self, name: str) -> SchemaDef | None:
        """Get a schema by name."""
        return next((s for s in self.schemas if s.name == name), None)

    def resource(self, name: str) -> ResourceDef | None:
        """Get a top-level resource by name."""
        return next((r for r in self.resources if r.name == name), None)
