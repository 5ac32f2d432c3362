"""
Renderers turning the Code Model into target-language source text.
"""

from __future__ import annotations

from .base import Renderer
from .csharp_renderer import CSharpRenderer, escape_string

__all__ = ["Renderer", "CSharpRenderer", "escape_string"]
