"""
Identifier utilities for the discovery to code generator.

Turns arbitrary discovery document names into valid, non-reserved C#
identifiers.
"""

import re
from collections.abc import Iterable

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")

# C# reserved keywords
CS_RESERVED_KEYWORDS = frozenset(
    {
        "abstract",
        "as",
        "base",
        "bool",
        "break",
        "byte",
        "case",
        "catch",
        "char",
        "checked",
        "class",
        "const",
        "continue",
        "decimal",
        "default",
        "delegate",
        "do",
        "double",
        "else",
        "enum",
        "event",
        "explicit",
        "extern",
        "false",
        "finally",
        "fixed",
        "float",
        "for",
        "foreach",
        "goto",
        "if",
        "implicit",
        "in",
        "int",
        "interface",
        "internal",
        "is",
        "lock",
        "long",
        "namespace",
        "new",
        "null",
        "object",
        "operator",
        "out",
        "override",
        "params",
        "private",
        "protected",
        "public",
        "readonly",
        "ref",
        "return",
        "sbyte",
        "sealed",
        "short",
        "sizeof",
        "stackalloc",
        "static",
        "string",
        "struct",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "uint",
        "ulong",
        "unchecked",
        "unsafe",
        "ushort",
        "using",
        "virtual",
        "void",
        "volatile",
        "while",
    }
)


def upper_first(text: str | None) -> str | None:
    """Upper-case the first character only. None and "" pass through unchanged."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def lower_first(text: str | None) -> str | None:
    """Lower-case the first character only. None and "" pass through unchanged."""
    if not text:
        return text
    return text[0].lower() + text[1:]


def is_valid_first_char(c: str) -> bool:
    """Whether c may start an identifier (ASCII letters only)."""
    return "A" <= c <= "Z" or "a" <= c <= "z"


def is_valid_body_char(c: str) -> bool:
    """Whether c may appear inside an identifier (ASCII letters and digits)."""
    return is_valid_first_char(c) or "0" <= c <= "9"


def make_safe_identifier(candidate: str | None, unique_suffix: str, reserved_words: Iterable[str]) -> str:
    """Map an arbitrary name to a valid identifier that is not a reserved word.

    Examples:
        ("fishBurger", "X", {"unsafe"}) -> "fishBurger"
        ("unsafe", "X", {"unsafe"}) -> "unsafeX"
        ("!@#$", "X", {"unsafe"}) -> "X"
        ("1abc", "X", {"unsafe"}) -> "X1abc"

    Args:
        candidate: The name to sanitize
        unique_suffix: Fallback identifier, appended to reserved words and
            prepended to names starting with a digit
        reserved_words: Words the result must not collide with (case-insensitive)

    Returns:
        A valid identifier
    """
    if candidate is None:
        return unique_suffix

    name = "".join(c for c in candidate if is_valid_body_char(c))
    if name and not is_valid_first_char(name[0]):
        name = unique_suffix + name
    if not name:
        return unique_suffix

    lowered = name.lower()
    if any(lowered == word.lower() for word in reserved_words):
        return name + unique_suffix
    return name


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots, slashes) to spaces."""
    return re.sub(r"[_\-./]", " ", text)


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize the first letter of each word and join them together."""
    return "".join(upper_first(word) for word in words if word)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case, camelCase or dotted text to PascalCase.

    Examples:
        "max-results" -> "MaxResults"
        "volumeId" -> "VolumeId"
        "books.volumes.list" -> "BooksVolumesList"
        "ETag" -> "ETag"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def to_local_name(name: str, unique_suffix: str, reserved_words: Iterable[str] = CS_RESERVED_KEYWORDS) -> str:
    """camelCase parameter/local name that is safe to emit."""
    return make_safe_identifier(lower_first(snake_to_pascal_case(name)), unique_suffix, reserved_words)
