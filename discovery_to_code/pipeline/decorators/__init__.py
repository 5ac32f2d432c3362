"""
Decorator module.

Independent transformation units that add members to the declarations
generated for services, resources, methods and schemas.
"""

from __future__ import annotations

from .base import (
    GenerationContext,
    RequestDecorator,
    ResourceDecorator,
    SchemaDecorator,
    ServiceDecorator,
    generate_constant_property,
)
from .pipeline import (
    REQUEST_DECORATORS,
    RESOURCE_DECORATORS,
    SCHEMA_DECORATORS,
    SERVICE_DECORATORS,
    DecoratorPipeline,
)
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

__all__ = [
    "GenerationContext",
    "ServiceDecorator",
    "ResourceDecorator",
    "RequestDecorator",
    "SchemaDecorator",
    "generate_constant_property",
    "DecoratorPipeline",
    "SERVICE_DECORATORS",
    "RESOURCE_DECORATORS",
    "REQUEST_DECORATORS",
    "SCHEMA_DECORATORS",
    "ServiceRequestFieldDecorator",
    "RequestDocumentationDecorator",
    "RequestParameterPropertyDecorator",
    "RequestBodyDecorator",
    "RequestConstructorDecorator",
    "ResourceMethodDecorator",
    "ResourceNameDecorator",
    "SubresourceDecorator",
    "ResourceServiceDecorator",
    "ServiceConstantsDecorator",
    "ServiceScopesDecorator",
    "ServiceResourcesDecorator",
    "ServiceConstructorDecorator",
    "SchemaDocumentationDecorator",
    "SchemaPropertyDecorator",
    "SchemaETagDecorator",
]
