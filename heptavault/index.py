"""
Entity lookups for Heptavault.

The index is built once per export run and never mutated afterwards, so the
converters can share it freely.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, TypeVar

from .models import Card, CardInstance, Connection, HeptabaseExport, Section, Whiteboard


T = TypeVar("T")


def _first_by_id(records: List[T]) -> Dict[str, T]:
    """Map id -> record, keeping the first record when ids repeat."""
    table: Dict[str, T] = {}
    for record in records:
        table.setdefault(record.id, record)
    return table


class EntityIndex:
    """
    Identifier lookups over one HeptabaseExport.

    Lookups return None when nothing matches so callers can skip the item.
    Duplicate identifiers resolve to the first record in dataset order.
    """

    def __init__(self, export: HeptabaseExport):
        """
        Build all lookup tables.

        Args:
            export: The validated dataset
        """
        self.export = export
        self._cards = _first_by_id(export.cards)
        self._whiteboards = _first_by_id(export.whiteboards)
        self._card_instances = _first_by_id(export.card_instances)

        self._instances_by_board: Dict[str, List[CardInstance]] = defaultdict(list)
        self._connections_by_board: Dict[str, List[Connection]] = defaultdict(list)
        self._sections_by_board: Dict[str, List[Section]] = defaultdict(list)

        # Records pointing at an unknown whiteboard are left ungrouped
        for instance in export.card_instances:
            if instance.whiteboard_id in self._whiteboards:
                self._instances_by_board[instance.whiteboard_id].append(instance)
        for connection in export.connections:
            if connection.whiteboard_id in self._whiteboards:
                self._connections_by_board[connection.whiteboard_id].append(connection)
        for section in export.sections:
            if section.whiteboard_id in self._whiteboards:
                self._sections_by_board[section.whiteboard_id].append(section)

        logging.debug(
            f"Indexed {len(self._cards)} cards, {len(self._whiteboards)} whiteboards "
            f"and {len(self._card_instances)} card instances"
        )

    def find_card(self, card_id: str) -> Optional[Card]:
        return self._cards.get(card_id)

    def find_whiteboard(self, whiteboard_id: str) -> Optional[Whiteboard]:
        return self._whiteboards.get(whiteboard_id)

    def find_card_instance(self, instance_id: str) -> Optional[CardInstance]:
        return self._card_instances.get(instance_id)

    def card_instances_on(self, whiteboard_id: str) -> List[CardInstance]:
        """Card instances placed on a whiteboard, in dataset order."""
        return list(self._instances_by_board.get(whiteboard_id, []))

    def connections_on(self, whiteboard_id: str) -> List[Connection]:
        """Connections drawn on a whiteboard, in dataset order."""
        return list(self._connections_by_board.get(whiteboard_id, []))

    def sections_on(self, whiteboard_id: str) -> List[Section]:
        """Sections drawn on a whiteboard, in dataset order."""
        return list(self._sections_by_board.get(whiteboard_id, []))
