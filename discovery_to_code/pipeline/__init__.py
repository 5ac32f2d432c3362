"""
Pipeline - discovery document to C# client code generator.

This module provides a multi-phase architecture for generating client
code from discovery documents:

1. Phase 1 (Parser): Parse the discovery document into the Schema Model
2. Phase 2 (Analyzer): Resolve type names and schema references
3. Phase 3 (Decorators): Populate the Code Model through the decorator pipeline
4. Phase 4 (Renderer): Convert the frozen Code Model to source units
5. Phase 5 (Writer): Optionally write the units atomically to disk
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig, OutputMode
from .decorators import DecoratorPipeline, generate_constant_property
from .errors import (
    GenerationReport,
    GeneratorError,
    IdentifierCollisionError,
    MalformedDocumentError,
    OutputValidationError,
    UnsupportedConstructError,
)
from .generator import GenerationResult, PipelineGenerator, SourceUnit, generate_services
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "SourceUnit",
    "generate_services",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "DecoratorPipeline",
    "generate_constant_property",
    "GenerationReport",
    "GeneratorError",
    "MalformedDocumentError",
    "IdentifierCollisionError",
    "UnsupportedConstructError",
    "OutputValidationError",
    "AtomicWriter",
]
