"""
Export orchestration for Heptavault.

Drives the Markdown converter over every card and the canvas builder over
every whiteboard. The two artifact sets are independent of each other.
"""

import logging
from typing import List, Optional

from .converters import CanvasBuilder, MarkdownConverter, sanitize_filename
from .converters.canvas import DEFAULT_CARDS_PATH, IdGenerator
from .index import EntityIndex
from .models import ExportArtifact, HeptabaseExport


class Exporter:
    """
    Produces the Markdown and Canvas artifact sets for one dataset.
    """

    def __init__(self, export: HeptabaseExport):
        """
        Initialize the exporter and build the entity index.

        Args:
            export: The validated dataset
        """
        self.export = export
        self.index = EntityIndex(export)

    def export_cards(self) -> List[ExportArtifact]:
        """
        Convert every exportable card into a Markdown artifact.

        Trashed and untitled cards are skipped. When two cards sanitize to
        the same file name the first one wins.

        Returns:
            List of ExportArtifact named "<title>.md"
        """
        converter = MarkdownConverter(self.index)
        artifacts = []
        used_names = set()

        for card in self.export.cards:
            if not card.is_exportable:
                continue

            filename = f"{sanitize_filename(card.title)}.md"
            if filename in used_names:
                logging.warning(f"Skipping card {card.id}: file name '{filename}' is already taken")
                continue

            try:
                content = converter.convert(card.content)
            except Exception as e:
                logging.error(f"Error converting card {card.id}: {e}")
                continue

            used_names.add(filename)
            artifacts.append(ExportArtifact(filename=filename, content=content))

        if not artifacts:
            logging.warning("No cards to export")
        else:
            logging.info(f"Converted {len(artifacts)} cards to Markdown")
        return artifacts

    def export_canvases(self, cards_path: Optional[str] = None) -> List[ExportArtifact]:
        """
        Rebuild every whiteboard as a canvas artifact.

        When two whiteboards share a name the first one wins.

        Args:
            cards_path: Prefix for card file paths inside the vault (default "Cards/")

        Returns:
            List of ExportArtifact named "<whiteboard name>.canvas"
        """
        builder = CanvasBuilder(
            self.index,
            cards_path=DEFAULT_CARDS_PATH if cards_path is None else cards_path,
            id_generator=IdGenerator(),
        )
        artifacts = []
        used_names = set()

        for whiteboard in self.export.whiteboards:
            filename = f"{whiteboard.name}.canvas"
            if filename in used_names:
                logging.warning(f"Skipping whiteboard {whiteboard.id}: file name '{filename}' is already taken")
                continue

            try:
                canvas = builder.build(whiteboard)
            except Exception as e:
                logging.error(f"Error building canvas for whiteboard {whiteboard.id}: {e}")
                continue

            used_names.add(filename)
            artifacts.append(ExportArtifact(
                filename=filename,
                content=canvas.to_json(),
            ))

        if not artifacts:
            logging.warning("No whiteboards to export")
        else:
            logging.info(f"Built {len(artifacts)} canvas files")
        return artifacts
