"""Converters from Heptabase records to Obsidian files."""

from .sanitize import sanitize_filename
from .markdown import MarkdownConverter
from .canvas import CanvasBuilder, IdGenerator, classify_angle, detect_direction

__all__ = [
    "sanitize_filename",
    "MarkdownConverter",
    "CanvasBuilder",
    "IdGenerator",
    "classify_angle",
    "detect_direction",
]
