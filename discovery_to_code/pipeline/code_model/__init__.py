"""
Code Model module.

Language-agnostic declaration tree built by the decorators and consumed
by the renderers.
"""

from __future__ import annotations

from .arena import CodeModel
from .nodes import (
    AccessModifier,
    AssignStatement,
    AttributeDecl,
    ClassDecl,
    ConstantDecl,
    Declaration,
    DeclarationKind,
    Expression,
    MemberModifier,
    MethodDecl,
    ObjectCreateExpression,
    ParameterDecl,
    PrimitiveExpression,
    PropertyDecl,
    ReturnStatement,
    SnippetExpression,
    SnippetStatement,
    Statement,
)

__all__ = [
    "CodeModel",
    "AccessModifier",
    "MemberModifier",
    "DeclarationKind",
    "Declaration",
    "ClassDecl",
    "PropertyDecl",
    "MethodDecl",
    "ConstantDecl",
    "AttributeDecl",
    "ParameterDecl",
    "Expression",
    "PrimitiveExpression",
    "SnippetExpression",
    "ObjectCreateExpression",
    "Statement",
    "ReturnStatement",
    "AssignStatement",
    "SnippetStatement",
]
