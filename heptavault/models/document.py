"""
Rich-text document models for Heptavault.

Heptabase stores card content as a tree of tagged nodes (kind + attributes +
children). Text leaves carry raw text and an ordered list of formatting marks.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Mark(BaseModel):
    """An inline formatting mark applied to a text node."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str = ""
    attrs: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("attrs", mode="before")
    @classmethod
    def _attrs_or_empty(cls, value: Any) -> Dict[str, Any]:
        return value if isinstance(value, dict) else {}


class DocNode(BaseModel):
    """
    One node of the rich-text tree.

    Block and inline nodes share this shape; `text` and `marks` are only
    meaningful on `text` leaves.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str = Field(default="", description="Node kind tag")

    attrs: Dict[str, Any] = Field(
        default_factory=dict,
        description="Kind-specific attributes"
    )

    content: List["DocNode"] = Field(
        default_factory=list,
        description="Ordered child nodes"
    )

    text: Optional[str] = Field(
        default=None,
        description="Raw text of a text leaf"
    )

    marks: List[Mark] = Field(
        default_factory=list,
        description="Formatting marks of a text leaf, innermost first"
    )

    @field_validator("type", mode="before")
    @classmethod
    def _type_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("attrs", mode="before")
    @classmethod
    def _attrs_or_empty(cls, value: Any) -> Dict[str, Any]:
        return value if isinstance(value, dict) else {}

    @field_validator("content", "marks", mode="before")
    @classmethod
    def _objects_only(cls, value: Any) -> List[Any]:
        # Editors occasionally leave nulls or stray strings in child lists
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]

    @field_validator("text", mode="before")
    @classmethod
    def _text_as_string(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)

    def attr(self, name: str, default: Any = None) -> Any:
        """Return attribute `name`, treating explicit nulls as missing."""
        value = self.attrs.get(name)
        return default if value is None else value

    @property
    def raw_text(self) -> str:
        """Concatenated text of this node and all of its descendants, marks ignored."""
        if self.type == "text":
            return self.text or ""
        return "".join(child.raw_text for child in self.content)


# Enable forward references for self-referencing model
DocNode.model_rebuild()
