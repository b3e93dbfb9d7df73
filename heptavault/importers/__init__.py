"""Dataset importers for Heptavault."""

from .base import BaseImporter
from .heptabase_json import HeptabaseJSONImporter
from .sample import SampleImporter

__all__ = ["BaseImporter", "HeptabaseJSONImporter", "SampleImporter"]
