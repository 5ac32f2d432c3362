"""
Schema reference resolver.

Resolves schema references by name through a lookup table built once per
service. References are never expanded recursively, so forward references
and reference cycles resolve like any other name.
"""

from __future__ import annotations

from ..discovery.nodes import SchemaDef, Service
from ..errors import MalformedDocumentError


class SchemaResolver:
    """Resolves schema names to schema definitions and class names."""

    def __init__(self, service: Service, name_mapping: dict[str, str]):
        """
        Initialize the resolver.

        Args:
            service: The parsed service
            name_mapping: Mapping from schema names to C# class names
        """
        self.name_mapping = name_mapping
        self._definition_cache: dict[str, SchemaDef] = {}
        self._build_cache(service)

    def _build_cache(self, service: Service) -> None:
        """Build a cache of schemas by name."""
        for schema in service.schemas:
            self._definition_cache[schema.name] = schema

    def class_name(self, schema_name: str, location: str = "") -> str:
        """
        Get the C# class name of a referenced schema.

        Raises:
            MalformedDocumentError: If no schema has that name
        """
        if schema_name not in self._definition_cache:
            raise MalformedDocumentError(f"Reference to unknown schema '{schema_name}'", location=location)
        return self.name_mapping.get(schema_name, schema_name)

