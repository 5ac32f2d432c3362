"""
Decorator pipeline: the configured, ordered decorators of each capability.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..code_model import CodeModel
from ..config import CodeGeneratorConfig
from ..discovery import MethodDef, ResourceDef, SchemaDef, Service
from .base import GenerationContext, RequestDecorator, ResourceDecorator, SchemaDecorator, ServiceDecorator
from .request import (
    RequestBodyDecorator,
    RequestConstructorDecorator,
    RequestDocumentationDecorator,
    RequestParameterPropertyDecorator,
    ResourceMethodDecorator,
    ServiceRequestFieldDecorator,
)
from .resource import ResourceNameDecorator, ResourceServiceDecorator, SubresourceDecorator
from .schema import SchemaDocumentationDecorator, SchemaETagDecorator, SchemaPropertyDecorator
from .service import (
    ServiceConstantsDecorator,
    ServiceConstructorDecorator,
    ServiceResourcesDecorator,
    ServiceScopesDecorator,
)

SERVICE_DECORATORS: dict[str, type[ServiceDecorator]] = {
    "service_constants": ServiceConstantsDecorator,
    "service_scopes": ServiceScopesDecorator,
    "service_resources": ServiceResourcesDecorator,
    "service_constructor": ServiceConstructorDecorator,
}

RESOURCE_DECORATORS: dict[str, type[ResourceDecorator]] = {
    "resource_name": ResourceNameDecorator,
    "subresources": SubresourceDecorator,
    "resource_service": ResourceServiceDecorator,
}

REQUEST_DECORATORS: dict[str, type[RequestDecorator]] = {
    "request_documentation": RequestDocumentationDecorator,
    "request_fields": ServiceRequestFieldDecorator,
    "request_parameters": RequestParameterPropertyDecorator,
    "request_body": RequestBodyDecorator,
    "request_constructor": RequestConstructorDecorator,
    "resource_method": ResourceMethodDecorator,
}

SCHEMA_DECORATORS: dict[str, type[SchemaDecorator]] = {
    "schema_documentation": SchemaDocumentationDecorator,
    "schema_properties": SchemaPropertyDecorator,
    "schema_etag": SchemaETagDecorator,
}


def _instantiate(names: list[str], registry: dict[str, type], kind: str) -> list:
    decorators = []
    for name in names:
        if name not in registry:
            raise ValueError(f"Unknown {kind} decorator '{name}'. Available: {', '.join(registry)}")
        decorators.append(registry[name]())
    return decorators


@dataclass
class DecoratorPipeline:
    """Ordered decorators for services, resources, requests and schemas."""

    service_decorators: list[ServiceDecorator] = field(default_factory=list)
    resource_decorators: list[ResourceDecorator] = field(default_factory=list)
    request_decorators: list[RequestDecorator] = field(default_factory=list)
    schema_decorators: list[SchemaDecorator] = field(default_factory=list)

    @staticmethod
    def from_config(config: CodeGeneratorConfig) -> DecoratorPipeline:
        """Build the pipeline from the decorator names listed in the config."""
        return DecoratorPipeline(
            service_decorators=_instantiate(config.service_decorators, SERVICE_DECORATORS, "service"),
            resource_decorators=_instantiate(config.resource_decorators, RESOURCE_DECORATORS, "resource"),
            request_decorators=_instantiate(config.request_decorators, REQUEST_DECORATORS, "request"),
            schema_decorators=_instantiate(config.schema_decorators, SCHEMA_DECORATORS, "schema"),
        )

    def decorate_service(self, model: CodeModel, service: Service, service_decl: int, context: GenerationContext) -> None:
        for decorator in self.service_decorators:
            decorator.decorate_service(model, service, service_decl, context)

    def decorate_resource(self, model: CodeModel, resource: ResourceDef, resource_decl: int, context: GenerationContext) -> None:
        for decorator in self.resource_decorators:
            decorator.decorate_resource(model, resource, resource_decl, context)

    def decorate_request(
        self,
        model: CodeModel,
        resource: ResourceDef,
        method: MethodDef,
        request_decl: int,
        resource_decl: int,
        context: GenerationContext,
    ) -> None:
        for decorator in self.request_decorators:
            decorator.decorate_class(model, resource, method, request_decl, resource_decl, context)

    def decorate_schema(self, model: CodeModel, schema: SchemaDef, schema_decl: int, context: GenerationContext) -> None:
        for decorator in self.schema_decorators:
            decorator.decorate_schema(model, schema, schema_decl, context)
