"""
Schema Model module.

Contains the discovery document node definitions and their parser.
"""

from __future__ import annotations

from .nodes import (
    FieldDef,
    MethodDef,
    ParameterDef,
    ParameterLocation,
    ResourceDef,
    SchemaDef,
    Service,
    TypeKind,
    TypeRef,
)
from .parser import DiscoveryParser

__all__ = [
    "Service",
    "ResourceDef",
    "MethodDef",
    "ParameterDef",
    "ParameterLocation",
    "SchemaDef",
    "FieldDef",
    "TypeKind",
    "TypeRef",
    "DiscoveryParser",
]
