"""
Heptavault: Heptabase to Obsidian exporter.

Converts a Heptabase JSON export into Markdown cards and JSON Canvas whiteboards.
"""

__version__ = "0.1.0"
__author__ = "Heptavault Project"

# Import main components
from .models import HeptabaseExport, InvalidExportError, ExportArtifact
from .index import EntityIndex
from .converters import CanvasBuilder, MarkdownConverter, sanitize_filename
from .importers import BaseImporter, HeptabaseJSONImporter, SampleImporter
from .writers import DirectoryWriter, ZipArchiveWriter
from .exporter import Exporter

__all__ = [
    "HeptabaseExport",
    "InvalidExportError",
    "ExportArtifact",
    "EntityIndex",
    "CanvasBuilder",
    "MarkdownConverter",
    "sanitize_filename",
    "BaseImporter",
    "HeptabaseJSONImporter",
    "SampleImporter",
    "DirectoryWriter",
    "ZipArchiveWriter",
    "Exporter",
]
