"""Data models for Heptavault."""

from .dataset import (
    CARD_INSTANCE_KIND,
    Card,
    CardInstance,
    Connection,
    HeptabaseExport,
    InvalidExportError,
    Section,
    Whiteboard,
)
from .document import DocNode, Mark
from .canvas import CanvasDocument, CanvasEdge, CanvasNode, ExportArtifact

__all__ = [
    "CARD_INSTANCE_KIND",
    "Card",
    "CardInstance",
    "Connection",
    "HeptabaseExport",
    "InvalidExportError",
    "Section",
    "Whiteboard",
    "DocNode",
    "Mark",
    "CanvasDocument",
    "CanvasEdge",
    "CanvasNode",
    "ExportArtifact",
]
