"""
Errors raised while generating code, and the per-service report collecting them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger("discovery_to_code")


class GeneratorError(Exception):
    """Base class for generation errors.

    Attributes:
        location: Dotted path of the failing unit (e.g. "volumes.list", "schema Volume")
    """

    def __init__(self, message: str, location: str = ""):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class MalformedDocumentError(GeneratorError):
    """Raised when a discovery document lacks required data or references unknown names.

    The affected method or schema is skipped; siblings are still generated.
    """


class IdentifierCollisionError(GeneratorError):
    """Raised when a member name still collides after disambiguation."""


class UnsupportedConstructError(GeneratorError):
    """Raised when the renderer cannot express a Code Model construct in C#."""


class OutputValidationError(GeneratorError):
    """Raised when rendered output fails structural validation before writing."""


@dataclass
class GenerationReport:
    """Errors collected while generating one service."""

    service_name: str = ""
    errors: list[GeneratorError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, error: GeneratorError) -> None:
        """Record an error and log it."""
        self.errors.append(error)
        logger.warning(f"[{self.service_name or '?'}] {type(error).__name__}: {error}")

    def summary(self) -> str:
        """One line per error, prefixed by the error type."""
        if not self.errors:
            return f"{self.service_name}: no errors"
        lines = [f"{self.service_name}: {len(self.errors)} error(s)"]
        for error in self.errors:
            lines.append(f"  {type(error).__name__}: {error}")
        return "\n".join(lines)
