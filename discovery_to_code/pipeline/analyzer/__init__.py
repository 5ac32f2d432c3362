"""
Analyzer module.

Resolves type names and schema references for a parsed service.
"""

from __future__ import annotations

from .name_resolver import NameMapping, NameResolver
from .reference_resolver import SchemaResolver
from .type_mapper import CSharpTypeMapper

__all__ = [
    "NameMapping",
    "NameResolver",
    "SchemaResolver",
    "CSharpTypeMapper",
]
