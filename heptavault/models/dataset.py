"""
Dataset models for Heptavault.

This module defines the records found in a Heptabase JSON export. All of them
are read-only snapshots: the converters derive output artifacts from them and
never write back.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


# Endpoint kind tag used by connections between two card instances
CARD_INSTANCE_KIND = "cardInstance"

Number = Union[int, float]


class InvalidExportError(ValueError):
    """Raised when an export cannot be used at all (missing required collections)."""


class _Record(BaseModel):
    """Base for export records: accepts camelCase aliases and ignores unknown fields."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Card(_Record):
    """
    A single knowledge note with a title and rich-text content.
    """

    id: str = Field(..., description="Unique card identifier")

    title: str = Field(
        default="",
        description="Card title, possibly empty"
    )

    content: Any = Field(
        default=None,
        description="Rich-text document (object or JSON string) or legacy plain markdown"
    )

    is_trashed: bool = Field(
        default=False,
        alias="isTrashed",
        description="Whether the card is in the trash"
    )

    @field_validator("title", mode="before")
    @classmethod
    def _title_or_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("is_trashed", mode="before")
    @classmethod
    def _trashed_flag(cls, value: Any) -> bool:
        return bool(value)

    @property
    def is_exportable(self) -> bool:
        """Trashed cards and cards without a usable title never produce output."""
        return not self.is_trashed and bool(self.title.strip())


class Whiteboard(_Record):
    """
    A named spatial canvas.
    """

    id: str = Field(..., description="Unique whiteboard identifier")

    name: str = Field(default="", description="Display name")

    @field_validator("name", mode="before")
    @classmethod
    def _name_or_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)


class CardInstance(_Record):
    """
    A positioned placement of a card on a specific whiteboard.
    """

    id: str
    card_id: str = Field(..., alias="cardId")
    whiteboard_id: str = Field(..., alias="whiteboardId")
    x: Number = 0
    y: Number = 0
    width: Number = 0
    height: Number = 0


class Connection(_Record):
    """
    A link between two whiteboard objects.
    """

    id: str
    whiteboard_id: str = Field(..., alias="whiteboardId")
    begin_id: str = Field(..., alias="beginId")
    begin_object_type: str = Field(default="", alias="beginObjectType")
    end_id: str = Field(..., alias="endId")
    end_object_type: str = Field(default="", alias="endObjectType")

    @property
    def links_card_instances(self) -> bool:
        return (self.begin_object_type == CARD_INSTANCE_KIND
                and self.end_object_type == CARD_INSTANCE_KIND)


class Section(_Record):
    """
    A labeled rectangular grouping region on a whiteboard.
    """

    id: str
    whiteboard_id: str = Field(..., alias="whiteboardId")
    x: Number = 0
    y: Number = 0
    width: Number = 0
    height: Number = 0
    title: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def _title_or_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)


class HeptabaseExport(BaseModel):
    """
    One imported Heptabase dataset.

    Build it with `from_raw`, which enforces the required collections and
    skips individual records that fail validation.
    """

    model_config = ConfigDict(frozen=True)

    cards: List[Card] = Field(default_factory=list)
    whiteboards: List[Whiteboard] = Field(default_factory=list)
    card_instances: List[CardInstance] = Field(default_factory=list)
    connections: List[Connection] = Field(default_factory=list)
    sections: List[Section] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, data: Any) -> "HeptabaseExport":
        """
        Validate a decoded export object.

        Args:
            data: The decoded JSON object

        Returns:
            A HeptabaseExport

        Raises:
            InvalidExportError: If `cardList` or `whiteBoardList` is missing
        """
        if not isinstance(data, dict):
            raise InvalidExportError(
                f"Invalid Heptabase data format: expected an object, got {type(data).__name__}"
            )

        missing = [key for key in ("cardList", "whiteBoardList") if data.get(key) is None]
        if missing:
            raise InvalidExportError(
                f"Invalid Heptabase data format: missing {', '.join(missing)}"
            )

        return cls(
            cards=_parse_records(Card, data.get("cardList"), "cardList"),
            whiteboards=_parse_records(Whiteboard, data.get("whiteBoardList"), "whiteBoardList"),
            card_instances=_parse_records(CardInstance, data.get("cardInstances"), "cardInstances"),
            connections=_parse_records(Connection, data.get("connections"), "connections"),
            sections=_parse_records(Section, data.get("sections"), "sections"),
        )


def _parse_records(model: type, items: Optional[List[Dict[str, Any]]], field_name: str) -> list:
    """Validate each record on its own so one bad record never sinks the dataset."""
    if items is None:
        return []
    if not isinstance(items, list):
        raise InvalidExportError(f"Invalid Heptabase data format: '{field_name}' is not a list")

    records = []
    for position, item in enumerate(items):
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            logging.warning(f"Skipping invalid record {position} in {field_name}: {e.error_count()} error(s)")
    return records
