"""
Name resolver for top-level type names.

Converts discovery names to PascalCase C# type names and resolves
collisions between schemas, resources and the service class, which
all live in the same namespace.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...utils import CS_RESERVED_KEYWORDS, make_safe_identifier, snake_to_pascal_case, upper_first
from ..discovery.nodes import ResourceDef, Service


@dataclass
class NameMapping:
    """Result of name resolution."""

    service_class: str = ""

    # Schema name -> class name
    schema_names: dict[str, str] = field(default_factory=dict)

    # Resource path ("a.b") -> class name
    resource_names: dict[str, str] = field(default_factory=dict)


class NameResolver:
    """Resolves type names and handles collisions."""

    def __init__(self, unique_suffix: str = "Value"):
        """
        Initialize the resolver.

        Args:
            unique_suffix: Suffix used to disambiguate colliding names
        """
        self.unique_suffix = unique_suffix

    def resolve_names(self, service: Service) -> NameMapping:
        """
        Resolve all type names of a service.

        Args:
            service: The parsed service

        Returns:
            NameMapping with resolved names
        """
        mapping = NameMapping()
        used: set[str] = set()

        mapping.service_class = self._claim(f"{snake_to_pascal_case(service.name)}Service", used)

        for schema in service.schemas:
            mapping.schema_names[schema.name] = self._claim(upper_first(snake_to_pascal_case(schema.name)), used)

        # Top-level resources share the namespace; nested ones are nested classes
        for resource in service.resources:
            mapping.resource_names[resource.path] = self._claim(self.resource_class_name(resource), used)
            self._resolve_nested(resource, mapping)

        return mapping

    def resource_class_name(self, resource: ResourceDef) -> str:
        """Class name for a resource, before collision handling."""
        return f"{snake_to_pascal_case(resource.name)}Resource"

    def _resolve_nested(self, resource: ResourceDef, mapping: NameMapping) -> None:
        """Name sub-resources; siblings inside one parent must be distinct."""
        used = {mapping.resource_names[resource.path]}
        for sub_resource in resource.resources:
            mapping.resource_names[sub_resource.path] = self._claim(self.resource_class_name(sub_resource), used)
            self._resolve_nested(sub_resource, mapping)

    def _claim(self, candidate: str, used: set[str]) -> str:
        """Make a name safe and unique within `used`, then record it."""
        name = make_safe_identifier(candidate, self.unique_suffix, CS_RESERVED_KEYWORDS | used)
        while name in used:
            name = name + self.unique_suffix
        used.add(name)
        return name
