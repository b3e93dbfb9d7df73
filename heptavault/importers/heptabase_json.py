"""
Heptabase JSON importer for Heptavault.

Reads the `All-Data.json` style export produced by Heptabase's backup feature.
"""

import json
import logging
from pathlib import Path
from typing import Union

from ..models import HeptabaseExport, InvalidExportError
from .base import BaseImporter


class HeptabaseJSONImporter(BaseImporter):
    """
    Importer for Heptabase JSON export files.
    """

    def __init__(self, export_path: Union[str, Path]):
        """
        Initialize the importer.

        Args:
            export_path: Path to the exported JSON file
        """
        self.export_path = Path(export_path)
        logging.info(f"Initialized Heptabase JSON importer for: {self.export_path}")

    def load(self) -> HeptabaseExport:
        if self.export_path.suffix.lower() != ".json":
            raise InvalidExportError(f"Please provide a valid JSON file: {self.export_path.name}")

        try:
            with open(self.export_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise InvalidExportError(f"Error reading file {self.export_path}: {e}") from e
        except ValueError as e:
            raise InvalidExportError(f"Error parsing JSON in {self.export_path}: {e}") from e

        export = HeptabaseExport.from_raw(data)
        logging.info(
            f"Successfully loaded {len(export.cards)} cards and "
            f"{len(export.whiteboards)} whiteboards"
        )
        return export
