"""document tree builder and width-aware renderer."""
from .nodes import build_document
from .renderer import render
from .formatter import format_lines, format_formula

__all__ = [
    "build_document",
    "render",
    "format_lines",
    "format_formula",
]
