"""
Sample importer for trying out Heptavault.

This module provides a small hardcoded dataset that exercises every output:
rich-text cards, a legacy reference, a trashed card and a whiteboard with a
section and connections.
"""

import json
from typing import Any, Dict

from ..models import HeptabaseExport
from .base import BaseImporter


WHITEBOARD_ID = "5b7f3c1e-0000-4000-8000-00000000b001"
PROJECT_CARD_ID = "0c6f1d2a-3b4c-4d5e-8f90-a1b2c3d4e5f6"
MEETING_CARD_ID = "1d7e2f3a-4b5c-4d6e-9f01-b2c3d4e5f6a7"
ARCHIVE_CARD_ID = "2e8f3a4b-5c6d-4e7f-a012-c3d4e5f6a7b8"


class SampleImporter(BaseImporter):
    """
    Importer that returns a hardcoded dataset.

    Used for demos and for exercising the pipeline without a real export.
    """

    def load(self) -> HeptabaseExport:
        return HeptabaseExport.from_raw(self.raw_data())

    @staticmethod
    def raw_data() -> Dict[str, Any]:
        """The sample export as it would appear in a JSON file."""
        project_doc = {
            "type": "doc",
            "content": [
                {"type": "heading", "attrs": {"level": 1},
                 "content": [{"type": "text", "text": "Project Phoenix"}]},
                {"type": "paragraph", "content": [
                    {"type": "text", "text": "Kickoff notes are in "},
                    {"type": "card", "attrs": {"cardId": MEETING_CARD_ID}},
                    {"type": "text", "text": "."},
                ]},
                {"type": "bullet_list", "content": [
                    {"type": "list_item", "content": [
                        {"type": "paragraph", "content": [
                            {"type": "text", "text": "Migrate the ", "marks": []},
                            {"type": "text", "text": "database", "marks": [{"type": "bold"}]},
                        ]},
                    ]},
                    {"type": "list_item", "content": [
                        {"type": "paragraph", "content": [{"type": "text", "text": "Ship v2"}]},
                    ]},
                ]},
            ],
        }
        meeting_doc = {
            "type": "doc",
            "content": [
                {"type": "paragraph", "content": [
                    {"type": "text", "text": "Met with Sarah", "marks": [{"type": "italic"}]},
                ]},
                {"type": "code_block", "attrs": {"params": "sql"},
                 "content": [{"type": "text", "text": "SELECT 1;"}]},
            ],
        }

        return {
            "cardList": [
                {"id": PROJECT_CARD_ID, "title": "Project Phoenix",
                 "content": json.dumps(project_doc), "isTrashed": False},
                {"id": MEETING_CARD_ID, "title": "Meeting 2024/05/22",
                 "content": meeting_doc, "isTrashed": False},
                {"id": ARCHIVE_CARD_ID, "title": "Old notes",
                 "content": f"See {{{{card {PROJECT_CARD_ID}}}}}", "isTrashed": True},
            ],
            "whiteBoardList": [
                {"id": WHITEBOARD_ID, "name": "Roadmap"},
            ],
            "cardInstances": [
                {"id": "ci-1", "cardId": PROJECT_CARD_ID, "whiteboardId": WHITEBOARD_ID,
                 "x": 0, "y": 0, "width": 400, "height": 230},
                {"id": "ci-2", "cardId": MEETING_CARD_ID, "whiteboardId": WHITEBOARD_ID,
                 "x": 600, "y": 0, "width": 400, "height": 230},
            ],
            "connections": [
                {"id": "conn-1", "whiteboardId": WHITEBOARD_ID,
                 "beginId": "ci-1", "beginObjectType": "cardInstance",
                 "endId": "ci-2", "endObjectType": "cardInstance"},
            ],
            "sections": [
                {"id": "sec-1", "whiteboardId": WHITEBOARD_ID, "title": "Q3",
                 "x": -50, "y": -50, "width": 1100, "height": 400},
            ],
        }
