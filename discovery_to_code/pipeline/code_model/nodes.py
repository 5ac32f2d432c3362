"""
Code Model node definitions.

These nodes describe the declarations the decorators build: classes,
properties, methods and constants, plus the small statement and expression
vocabulary their bodies need. They carry no target-language syntax; the
renderer decides how each one is written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DeclarationKind(str, Enum):
    """Kind of a declaration."""

    CLASS = "class"
    PROPERTY = "property"
    METHOD = "method"
    CONSTANT = "constant"


class AccessModifier(str, Enum):
    """Member visibility."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    INTERNAL = "internal"


class MemberModifier(str, Enum):
    """Member modifiers."""

    STATIC = "static"
    READONLY = "readonly"
    ABSTRACT = "abstract"
    VIRTUAL = "virtual"
    OVERRIDE = "override"
    SEALED = "sealed"


# Expressions


@dataclass(frozen=True)
class Expression:
    """Base class for expressions."""


@dataclass(frozen=True)
class PrimitiveExpression(Expression):
    """A literal value (str, int, float, bool or None)."""

    value: Any = None


@dataclass(frozen=True)
class SnippetExpression(Expression):
    """Verbatim target code, e.g. a variable or member reference."""

    text: str = ""


@dataclass(frozen=True)
class ObjectCreateExpression(Expression):
    """Instantiation of a type: new T(args)."""

    type_name: str = ""
    arguments: tuple[Expression, ...] = ()


# Statements


@dataclass(frozen=True)
class Statement:
    """Base class for statements."""


@dataclass(frozen=True)
class ReturnStatement(Statement):
    """return <expression>"""

    expression: Expression | None = None


@dataclass(frozen=True)
class AssignStatement(Statement):
    """<target> = <value>"""

    target: str = ""
    value: Expression = field(default_factory=Expression)


@dataclass(frozen=True)
class SnippetStatement(Statement):
    """Verbatim target statement."""

    text: str = ""


# Declarations


@dataclass
class AttributeDecl:
    """An attribute attached to a declaration (e.g. JsonProperty("name"))."""

    name: str = ""
    arguments: list[Expression] = field(default_factory=list)


@dataclass
class ParameterDecl:
    """A method or constructor parameter."""

    name: str = ""
    type_name: str = ""
    default_value: Expression | None = None


@dataclass
class Declaration:
    """Base class for declarations stored in the CodeModel arena."""

    name: str = ""
    access: AccessModifier = AccessModifier.PUBLIC
    modifiers: list[MemberModifier] = field(default_factory=list)
    attributes: list[AttributeDecl] = field(default_factory=list)
    comment: str | None = None  # Documentation summary

    # Arena index of the owning class, None for top-level declarations
    parent: int | None = None

    kind: DeclarationKind = field(init=False, default=DeclarationKind.CLASS)


@dataclass
class ClassDecl(Declaration):
    """A class: a named, ordered collection of members."""

    base_types: list[str] = field(default_factory=list)

    # Arena indices of the members, in insertion order
    members: list[int] = field(default_factory=list)

    def __post_init__(self):
        self.kind = DeclarationKind.CLASS


@dataclass
class PropertyDecl(Declaration):
    """A property with optional getter and setter.

    Without statements an accessor is automatic; with statements it is
    computed from them.
    """

    type_name: str = ""
    has_get: bool = True
    has_set: bool = True
    get_statements: list[Statement] = field(default_factory=list)
    set_statements: list[Statement] = field(default_factory=list)

    def __post_init__(self):
        self.kind = DeclarationKind.PROPERTY


@dataclass
class MethodDecl(Declaration):
    """A method or constructor."""

    return_type: str = "void"
    parameters: list[ParameterDecl] = field(default_factory=list)
    statements: list[Statement] = field(default_factory=list)
    is_constructor: bool = False
    base_call_args: list[Expression] | None = None  # Constructor ": base(...)"

    def __post_init__(self):
        self.kind = DeclarationKind.METHOD


@dataclass
class ConstantDecl(Declaration):
    """A compile-time constant field."""

    type_name: str = "string"
    value: Any = None

    def __post_init__(self):
        self.kind = DeclarationKind.CONSTANT
