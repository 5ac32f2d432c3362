"""
C# renderer.

Converts Code Model declarations to properly-formatted C# source code.
Follows C# style guidelines:
- Braces on new lines (Allman style)
- 4-space indentation
- Blank line between members
- Attributes on separate lines above declarations
- Documentation as /// <summary> comments
"""

from __future__ import annotations

import html
import math
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import jinja2

from ..code_model import (
    AssignStatement,
    AttributeDecl,
    ClassDecl,
    CodeModel,
    ConstantDecl,
    Declaration,
    Expression,
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
from ..errors import UnsupportedConstructError
from .base import Renderer

TEMPLATES_DIR = Path(__file__).parent.parent.parent.resolve().absolute() / "templates"

# Smallest and largest integers a C# literal can hold (long / ulong)
MIN_INTEGER_LITERAL = -(2**63)
MAX_INTEGER_LITERAL = 2**64 - 1

STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_string(value: str) -> str:
    """Escape a string for a C# regular string literal (without the quotes)."""
    out = []
    for c in value:
        if c in STRING_ESCAPES:
            out.append(STRING_ESCAPES[c])
        elif ord(c) < 0x20 or c in "\x7f\x85\u2028\u2029":
            out.append(f"\\u{ord(c):04x}")
        else:
            out.append(c)
    return "".join(out)


class CSharpRenderer(Renderer):
    """Renders Code Model declarations to C# source code."""

    FILE_EXTENSION = "cs"
    INDENT = "    "  # 4 spaces

    def __init__(self):
        self.jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True)
        self.prefix = self.jinja_env.from_string((TEMPLATES_DIR / "cs" / "prefix.cs.jinja2").read_text(encoding="utf-8"))
        self.suffix = self.jinja_env.from_string((TEMPLATES_DIR / "cs" / "suffix.cs.jinja2").read_text(encoding="utf-8"))

    def render(self, model: CodeModel, class_index: int) -> str:
        return "\n".join(self._render_declaration(model, class_index)) + "\n"

    def assemble(
        self,
        declarations: Sequence[str],
        namespace: str = "",
        usings: Sequence[str] = (),
        generation_comment: str = "",
    ) -> str:
        body: list[str] = []
        for i, text in enumerate(declarations):
            if i:
                body.append("")
            body.extend(text.rstrip("\n").split("\n"))

        if namespace:
            body = self._indent_lines(body, 1)

        out = self.prefix.render(
            generation_comment=generation_comment,
            usings=list(usings),
            namespace=namespace,
        )
        if body:
            out += "\n".join(body) + "\n"
        out += self.suffix.render(namespace=namespace)
        return out

    def _indent_lines(self, lines: list[str], level: int) -> list[str]:
        """Add indentation to a list of lines."""
        if level == 0:
            return lines
        prefix = self.INDENT * level
        return [prefix + line if line.strip() else line for line in lines]

    # Declarations

    def _render_declaration(self, model: CodeModel, index: int) -> list[str]:
        decl = model.get(index)
        location = self._qualified_name(model, index)

        if isinstance(decl, ClassDecl):
            body = self._render_class(model, decl)
        elif isinstance(decl, PropertyDecl):
            body = self._render_property(decl, location)
        elif isinstance(decl, MethodDecl):
            body = self._render_method(decl, location)
        elif isinstance(decl, ConstantDecl):
            body = self._render_constant(decl, location)
        else:
            raise UnsupportedConstructError(f"Cannot render declaration of type {type(decl).__name__}", location=location)

        return self._comment_lines(decl.comment) + self._attribute_lines(decl.attributes, location) + body

    def _render_class(self, model: CodeModel, cls: ClassDecl) -> list[str]:
        declaration = f"{self._access(cls)} class {cls.name}"
        if cls.base_types:
            declaration += f" : {', '.join(cls.base_types)}"

        lines = [declaration, "{"]
        for i, member in enumerate(cls.members):
            if i:
                lines.append("")
            lines.extend(self._indent_lines(self._render_declaration(model, member), 1))
        lines.append("}")
        return lines

    def _render_property(self, prop: PropertyDecl, location: str) -> list[str]:
        if not prop.has_get:
            if prop.has_set:
                raise UnsupportedConstructError("Setter-only properties are not supported, a getter is required", location=location)
            raise UnsupportedConstructError("Property has neither a getter nor a setter", location=location)
        if prop.set_statements and not prop.has_set:
            raise UnsupportedConstructError("Property has a setter body but no setter", location=location)

        get_auto = not prop.get_statements
        if prop.has_set and get_auto != (not prop.set_statements):
            raise UnsupportedConstructError("Property mixes an automatic accessor with an explicit one", location=location)

        declaration = f"{self._access(prop)} {prop.type_name} {prop.name}"
        if get_auto:
            accessors = "get; set;" if prop.has_set else "get;"
            return [f"{declaration} {{ {accessors} }}"]

        lines = [declaration, "{"]
        lines.extend(self._indent_lines(self._accessor_lines("get", prop.get_statements, location), 1))
        if prop.has_set:
            lines.extend(self._indent_lines(self._accessor_lines("set", prop.set_statements, location), 1))
        lines.append("}")
        return lines

    def _accessor_lines(self, keyword: str, statements: list[Statement], location: str) -> list[str]:
        body = [self._render_statement(s, location) for s in statements]
        if len(body) == 1:
            return [f"{keyword} {{ {body[0]} }}"]
        return [keyword, "{"] + self._indent_lines(body, 1) + ["}"]

    def _render_method(self, method: MethodDecl, location: str) -> list[str]:
        params = ", ".join(self._render_parameter(p, location) for p in method.parameters)

        if method.is_constructor:
            declaration = f"{self._access(method)} {method.name}({params})"
            if method.base_call_args is not None:
                args = ", ".join(self._render_expression(a, location) for a in method.base_call_args)
                declaration += f" : base({args})"
        else:
            declaration = f"{self._access(method)} {method.return_type} {method.name}({params})"

        lines = [declaration, "{"]
        lines.extend(self._indent_lines([self._render_statement(s, location) for s in method.statements], 1))
        lines.append("}")
        return lines

    def _render_constant(self, const: ConstantDecl, location: str) -> list[str]:
        if const.modifiers:
            raise UnsupportedConstructError(
                f"Constants cannot be {', '.join(m.value for m in const.modifiers)}",
                location=location,
            )
        literal = self.format_literal(const.value, location)
        return [f"{const.access.value} const {const.type_name} {const.name} = {literal};"]

    def _render_parameter(self, param: ParameterDecl, location: str) -> str:
        text = f"{param.type_name} {param.name}"
        if param.default_value is not None:
            text += f" = {self._render_expression(param.default_value, location)}"
        return text

    # Statements and expressions

    def _render_statement(self, stmt: Statement, location: str) -> str:
        if isinstance(stmt, ReturnStatement):
            if stmt.expression is None:
                return "return;"
            return f"return {self._render_expression(stmt.expression, location)};"
        if isinstance(stmt, AssignStatement):
            return f"{stmt.target} = {self._render_expression(stmt.value, location)};"
        if isinstance(stmt, SnippetStatement):
            return stmt.text
        raise UnsupportedConstructError(f"Cannot render statement of type {type(stmt).__name__}", location=location)

    def _render_expression(self, expr: Expression, location: str) -> str:
        if isinstance(expr, PrimitiveExpression):
            return self.format_literal(expr.value, location)
        if isinstance(expr, SnippetExpression):
            return expr.text
        if isinstance(expr, ObjectCreateExpression):
            args = ", ".join(self._render_expression(a, location) for a in expr.arguments)
            return f"new {expr.type_name}({args})"
        raise UnsupportedConstructError(f"Cannot render expression of type {type(expr).__name__}", location=location)

    def format_literal(self, value: Any, location: str = "") -> str:
        """Format a Python value as a C# literal."""
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            if not MIN_INTEGER_LITERAL <= value <= MAX_INTEGER_LITERAL:
                raise UnsupportedConstructError(f"Integer literal {value} is out of range", location=location)
            return str(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise UnsupportedConstructError(f"Number literal {value} cannot be expressed", location=location)
            return repr(value)
        if isinstance(value, str):
            return f'"{escape_string(value)}"'
        raise UnsupportedConstructError(f"Literal of type {type(value).__name__} cannot be expressed", location=location)

    # Helpers

    def _access(self, decl: Declaration) -> str:
        """Access modifier followed by the other modifiers."""
        return " ".join([decl.access.value] + [m.value for m in decl.modifiers])

    def _attribute_lines(self, attributes: list[AttributeDecl], location: str) -> list[str]:
        lines = []
        for attr in attributes:
            if attr.arguments:
                args = ", ".join(self._render_expression(a, location) for a in attr.arguments)
                lines.append(f"[{attr.name}({args})]")
            else:
                lines.append(f"[{attr.name}]")
        return lines

    def _comment_lines(self, comment: str | None) -> list[str]:
        if not comment or not comment.strip():
            return []
        text = [html.escape(line.strip(), quote=False) for line in comment.strip().splitlines()]
        if len(text) == 1:
            return [f"/// <summary>{text[0]}</summary>"]
        return ["/// <summary>"] + [f"/// {line}".rstrip() for line in text] + ["/// </summary>"]

    def _qualified_name(self, model: CodeModel, index: int) -> str:
        names = []
        current: int | None = index
        while current is not None:
            decl = model.get(current)
            names.append(decl.name)
            current = decl.parent
        return ".".join(reversed(names))
