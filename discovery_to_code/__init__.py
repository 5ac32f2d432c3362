"""Discovery to Code Generator

A Python package for generating typed C# client libraries from API
discovery documents, through a composable pipeline of decorators that
populate a language-agnostic code model.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    GenerationReport,
    GenerationResult,
    GeneratorError,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    SourceUnit,
    generate_services,
)

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "SourceUnit",
    "generate_services",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "GenerationReport",
    "GeneratorError",
    "AtomicWriter",
]
