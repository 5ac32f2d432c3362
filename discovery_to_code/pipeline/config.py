"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when an output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


DEFAULT_SERVICE_DECORATORS = [
    "service_constants",
    "service_scopes",
    "service_resources",
    "service_constructor",
]

DEFAULT_RESOURCE_DECORATORS = [
    "resource_name",
    "subresources",
    "resource_service",
]

DEFAULT_REQUEST_DECORATORS = [
    "request_documentation",
    "request_fields",
    "request_parameters",
    "request_body",
    "request_constructor",
    "resource_method",
]

DEFAULT_SCHEMA_DECORATORS = [
    "schema_documentation",
    "schema_properties",
    "schema_etag",
]


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Namespace for all generated types (empty = "<root_namespace>.<Service>.<version>")
    namespace: str = ""
    root_namespace: str = "Google.Apis"

    # Using directives added after the default ones
    additional_usings: list[str] = field(default_factory=list)

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Appended to names that collide with keywords or existing members
    unique_suffix: str = "Value"

    # Client runtime types the generated code builds on
    service_base_class: str = "BaseClientService"
    request_base_class: str = "ClientServiceRequest"
    schema_base_interface: str = "IDirectResponseSchema"

    # One source unit per top-level type instead of one per service
    one_file_per_type: bool = False

    # Schemas and resources (dotted path) to skip
    ignore_schemas: list[str] = field(default_factory=list)
    ignore_resources: list[str] = field(default_factory=list)

    # Decorators to run, in order
    service_decorators: list[str] = field(default_factory=lambda: list(DEFAULT_SERVICE_DECORATORS))
    resource_decorators: list[str] = field(default_factory=lambda: list(DEFAULT_RESOURCE_DECORATORS))
    request_decorators: list[str] = field(default_factory=lambda: list(DEFAULT_REQUEST_DECORATORS))
    schema_decorators: list[str] = field(default_factory=lambda: list(DEFAULT_SCHEMA_DECORATORS))

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "namespace": self.namespace,
            "root_namespace": self.root_namespace,
            "additional_usings": self.additional_usings,
            "add_generation_comment": self.add_generation_comment,
            "unique_suffix": self.unique_suffix,
            "service_base_class": self.service_base_class,
            "request_base_class": self.request_base_class,
            "schema_base_interface": self.schema_base_interface,
            "one_file_per_type": self.one_file_per_type,
            "ignore_schemas": self.ignore_schemas,
            "ignore_resources": self.ignore_resources,
            "service_decorators": self.service_decorators,
            "resource_decorators": self.resource_decorators,
            "request_decorators": self.request_decorators,
            "schema_decorators": self.schema_decorators,
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
