"""
Atomic file writer for generated source units.

Ensures that file writes are atomic so that an interrupted run never
leaves a partially written source file behind.
"""

from __future__ import annotations

import logging
import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..config import OutputConfig, OutputMode
from ..errors import OutputValidationError

logger = logging.getLogger("discovery_to_code")

# String literals and line comments, which may contain unbalanced braces
LITERALS_AND_COMMENTS = re.compile(r'"(?:\\.|[^"\\\n])*"|//[^\n]*')


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(
        self,
        output: OutputConfig | None = None,
        validate_csharp: Callable[[str], None] | None = None,
        require_namespace: bool = False,
    ):
        """Initialize the atomic writer.

        Args:
            output: Output handling configuration
            validate_csharp: Optional validation function for C# code
            require_namespace: Whether to require a namespace declaration
        """
        self.output = output or OutputConfig()
        self._validate_csharp = validate_csharp or self._default_validate_csharp
        self._require_namespace = require_namespace

    def write_unit(self, output_dir: Path, file_name: str, content: str) -> Path:
        """Write one source unit into `output_dir` according to the output mode.

        Raises:
            FileExistsError: If the file exists and the mode is ERROR_IF_EXISTS
            OutputValidationError: If validation fails
        """
        path = Path(output_dir) / file_name
        if self.output.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        validate = self.output.validate_before_write
        if self.output.atomic_write:
            self.write(path, content, validate)
        else:
            if validate:
                self._validate_csharp(content)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

        logger.debug(f"Wrote {path}")
        return path

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)

            if validate:
                self._validate_csharp(content)

            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    def _default_validate_csharp(self, content: str) -> None:
        """Basic structural checks on generated C# code.

        Raises:
            OutputValidationError: If validation fails
        """
        if self._require_namespace and "namespace " not in content:
            raise OutputValidationError("Generated C# code is missing namespace declaration")

        if "class " not in content:
            raise OutputValidationError("Generated C# code has no type definitions")

        code = LITERALS_AND_COMMENTS.sub("", content)
        open_braces = code.count("{")
        close_braces = code.count("}")
        if open_braces != close_braces:
            raise OutputValidationError(f"Generated C# code has unbalanced braces: {open_braces} open, {close_braces} close")

        if "using " not in content:
            raise OutputValidationError("Generated C# code is missing using statements")
