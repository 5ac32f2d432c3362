"""
Discovery document parser that builds the Schema Model.

Phase 1 of the pipeline: parse a discovery document into Service,
Resource, Method, Parameter and Schema nodes without resolving schema
references or doing any C#-specific processing.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import GenerationReport, MalformedDocumentError
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

logger = logging.getLogger("discovery_to_code")


class DiscoveryParser:
    """Parses a discovery document into a Service."""

    # Primitive type names
    PRIMITIVE_TYPES = {"string", "integer", "number", "boolean"}

    def __init__(self, report: GenerationReport | None = None):
        """
        Initialize the parser.

        Args:
            report: Report collecting per-method and per-schema errors
        """
        self.report = report if report is not None else GenerationReport()

    def parse(self, document: dict[str, Any]) -> Service:
        """
        Parse a discovery document.

        Args:
            document: The parsed discovery document

        Returns:
            The Service model. Methods and schemas that failed to parse are
            missing from it and their errors are in self.report.

        Raises:
            MalformedDocumentError: If the document itself is unusable
        """
        if not isinstance(document, dict):
            raise MalformedDocumentError("Discovery document must be a JSON object")
        name = document.get("name")
        if not name or not isinstance(name, str):
            raise MalformedDocumentError("Discovery document has no service name")

        self.report.service_name = name
        logger.debug(f"Parsing discovery document for {name}")

        schema_names = set((document.get("schemas") or {}).keys())

        schemas = []
        for schema_name, schema in (document.get("schemas") or {}).items():
            try:
                schemas.append(self._parse_schema(schema_name, schema, f"schemas.{schema_name}"))
            except MalformedDocumentError as e:
                self.report.add(e)

        resources = []
        for resource_name, resource in (document.get("resources") or {}).items():
            parsed = self._parse_resource(resource_name, resource, resource_name, schema_names)
            if parsed is not None:
                resources.append(parsed)

        return Service(
            name=name,
            version=str(document.get("version", "")),
            title=document.get("title"),
            description=document.get("description"),
            base_uri=self._base_uri(document),
            resources=tuple(resources),
            schemas=tuple(schemas),
            scopes=self._parse_scopes(document),
        )

    def _base_uri(self, document: dict[str, Any]) -> str:
        """baseUrl if present, otherwise rootUrl + servicePath."""
        if document.get("baseUrl"):
            return document["baseUrl"]
        return document.get("rootUrl", "") + document.get("servicePath", "")

    def _parse_scopes(self, document: dict[str, Any]) -> tuple[tuple[str, str], ...]:
        """Parse the OAuth2 scopes declared by the document."""
        scopes = ((document.get("auth") or {}).get("oauth2") or {}).get("scopes") or {}
        return tuple((uri, (info or {}).get("description", "")) for uri, info in scopes.items())

    def _parse_resource(
        self,
        name: str,
        resource: Any,
        path: str,
        schema_names: set[str],
    ) -> ResourceDef | None:
        """Parse a resource and its sub-resources, reporting broken methods."""
        if not isinstance(resource, dict):
            self.report.add(MalformedDocumentError("Resource must be a JSON object", location=path))
            return None

        methods = []
        for method_name, method in (resource.get("methods") or {}).items():
            try:
                methods.append(self._parse_method(method_name, method, f"{path}.{method_name}", schema_names))
            except MalformedDocumentError as e:
                self.report.add(e)

        sub_resources = []
        for sub_name, sub_resource in (resource.get("resources") or {}).items():
            parsed = self._parse_resource(sub_name, sub_resource, f"{path}.{sub_name}", schema_names)
            if parsed is not None:
                sub_resources.append(parsed)

        return ResourceDef(
            name=name,
            methods=tuple(methods),
            resources=tuple(sub_resources),
            path=path,
        )

    def _parse_method(
        self,
        name: str,
        method: Any,
        path: str,
        schema_names: set[str],
    ) -> MethodDef:
        """Parse a single method."""
        if not isinstance(method, dict):
            raise MalformedDocumentError("Method must be a JSON object", location=path)

        http_method = method.get("httpMethod")
        if not http_method:
            raise MalformedDocumentError("Method has no httpMethod", location=path)

        rest_path = method.get("path")
        if rest_path is None:
            raise MalformedDocumentError("Method has no path", location=path)

        request = self._schema_reference(method.get("request"), "request", path, schema_names)
        response = self._schema_reference(method.get("response"), "response", path, schema_names)

        parameters = tuple(self._parse_parameter(param_name, param, f"{path}.{param_name}") for param_name, param in (method.get("parameters") or {}).items())

        parameter_names = {p.name for p in parameters}
        parameter_order = tuple(method.get("parameterOrder") or ())
        for param_name in parameter_order:
            if param_name not in parameter_names:
                raise MalformedDocumentError(f"parameterOrder lists unknown parameter '{param_name}'", location=path)

        return MethodDef(
            name=name,
            id=method.get("id", ""),
            http_method=http_method,
            path=rest_path,
            description=method.get("description"),
            parameters=parameters,
            parameter_order=parameter_order,
            request=request,
            response=response,
            scopes=tuple(method.get("scopes") or ()),
        )

    def _schema_reference(self, value: Any, role: str, path: str, schema_names: set[str]) -> str | None:
        """Validate a request/response schema reference and return its name."""
        if value is None:
            return None
        ref = value.get("$ref") if isinstance(value, dict) else None
        if not ref:
            raise MalformedDocumentError(f"Method {role} has no $ref", location=path)
        if ref not in schema_names:
            raise MalformedDocumentError(f"Method {role} references unknown schema '{ref}'", location=path)
        return ref

    def _parse_parameter(self, name: str, param: Any, path: str) -> ParameterDef:
        """Parse a method parameter. Location and required flag are taken verbatim."""
        if not isinstance(param, dict):
            raise MalformedDocumentError("Parameter must be a JSON object", location=path)

        location = param.get("location")
        try:
            location = ParameterLocation(location)
        except ValueError:
            raise MalformedDocumentError(f"Parameter has invalid location {location!r}", location=path) from None

        return ParameterDef(
            name=name,
            type_ref=self._parse_type(param, path),
            required=bool(param.get("required", False)),
            location=location,
            default_value=param.get("default"),
            has_default="default" in param,
            description=param.get("description"),
            repeated=bool(param.get("repeated", False)),
        )

    def _parse_schema(self, name: str, schema: Any, path: str) -> SchemaDef:
        """Parse a top-level or inline schema."""
        if not isinstance(schema, dict):
            raise MalformedDocumentError("Schema must be a JSON object", location=path)

        fields = []
        for field_name, field_schema in (schema.get("properties") or {}).items():
            field_path = f"{path}.{field_name}"
            if not isinstance(field_schema, dict):
                raise MalformedDocumentError("Property must be a JSON object", location=field_path)
            fields.append(
                FieldDef(
                    name=field_name,
                    type_ref=self._parse_type(field_schema, field_path, inline_name=field_name),
                    description=field_schema.get("description"),
                    required=bool(field_schema.get("required", False)),
                    source_path=field_path,
                )
            )

        return SchemaDef(
            name=name,
            description=schema.get("description"),
            fields=tuple(fields),
            source_path=path,
        )

    def _parse_type(self, schema: dict[str, Any], path: str, inline_name: str = "") -> TypeRef:
        """
        Parse a type description.

        Args:
            schema: The property/parameter/items dictionary
            path: Current path in the document (for error messages)
            inline_name: Name given to an inline object schema

        Returns:
            The unresolved TypeRef
        """
        if "$ref" in schema:
            return TypeRef(kind=TypeKind.REF, name=schema["$ref"])

        type_name = schema.get("type")
        enum_values = tuple(schema.get("enum") or ())

        if type_name == "array":
            items = schema.get("items")
            item_type = self._parse_type(items, f"{path}.items", inline_name) if isinstance(items, dict) else TypeRef(kind=TypeKind.ANY)
            return TypeRef(kind=TypeKind.ARRAY, name="array", items=item_type)

        if type_name == "object" or (type_name is None and "properties" in schema):
            if schema.get("properties"):
                inline = self._parse_schema(inline_name, schema, path)
                return TypeRef(kind=TypeKind.OBJECT, name=inline_name, inline=inline)
            additional = schema.get("additionalProperties")
            if isinstance(additional, dict):
                value_type = self._parse_type(additional, f"{path}.additionalProperties", inline_name)
                return TypeRef(kind=TypeKind.MAP, name="object", items=value_type)
            return TypeRef(kind=TypeKind.ANY, name="object")

        if type_name == "any":
            return TypeRef(kind=TypeKind.ANY, name="any")

        if type_name in self.PRIMITIVE_TYPES:
            return TypeRef(
                kind=TypeKind.PRIMITIVE,
                name=type_name,
                format=schema.get("format"),
                enum_values=enum_values,
            )

        raise MalformedDocumentError(f"Unknown type {type_name!r}", location=path)
