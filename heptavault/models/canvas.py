"""
Output models for Heptavault.

Canvas models mirror the JSON Canvas format read by Obsidian. Field order
here is the field order of the serialized file.
"""

import json
from typing import List, Optional, Union

from pydantic import BaseModel, Field


Number = Union[int, float]


class CanvasNode(BaseModel):
    """A `file` node (card) or `group` node (section) on a canvas."""

    id: str
    x: Number
    y: Number
    width: Number
    height: Number
    type: str
    file: Optional[str] = None
    label: Optional[str] = None


class CanvasEdge(BaseModel):
    """A connector between two canvas nodes."""

    id: str
    fromNode: str
    toNode: str
    fromSide: str
    toSide: str


class CanvasDocument(BaseModel):
    """The graph of one whiteboard."""

    nodes: List[CanvasNode] = Field(default_factory=list)
    edges: List[CanvasEdge] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialize with stable field order and 2-space indentation."""
        return json.dumps(self.model_dump(exclude_none=True), indent=2, ensure_ascii=False)


class ExportArtifact(BaseModel):
    """A named text output, ready to be written or archived."""

    filename: str = Field(..., description="File name inside the output archive")
    content: str = Field(..., description="File body")
