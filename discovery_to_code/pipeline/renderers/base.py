"""
Base class for renderers.

Defines the interface that all target-language renderers must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..code_model import CodeModel


class Renderer(ABC):
    """Abstract base class for renderers turning the Code Model into source text."""

    # File extension of the rendered source units
    FILE_EXTENSION: str = ""

    @abstractmethod
    def render(self, model: CodeModel, class_index: int) -> str:
        """
        Render one declaration and everything nested in it.

        Args:
            model: The code model
            class_index: Arena index of the declaration

        Returns:
            Source text, without indentation, ending with a newline

        Raises:
            UnsupportedConstructError: If the target grammar cannot express a member
        """

    @abstractmethod
    def assemble(
        self,
        declarations: Sequence[str],
        namespace: str = "",
        usings: Sequence[str] = (),
        generation_comment: str = "",
    ) -> str:
        """
        Wrap rendered declarations into a complete source unit.

        Args:
            declarations: Output of render(), in order
            namespace: Enclosing namespace, if any
            usings: Imported namespaces
            generation_comment: Comment line placed at the top of the unit

        Returns:
            Source text of the unit
        """

    def render_unit(
        self,
        model: CodeModel,
        class_indices: Sequence[int],
        namespace: str = "",
        usings: Sequence[str] = (),
        generation_comment: str = "",
    ) -> str:
        """Render several top-level declarations into one source unit."""
        return self.assemble(
            [self.render(model, index) for index in class_indices],
            namespace=namespace,
            usings=usings,
            generation_comment=generation_comment,
        )

    def file_name(self, type_name: str) -> str:
        """Suggested file name for a unit holding `type_name`."""
        return f"{type_name}.{self.FILE_EXTENSION}"
