"""
Canvas reconstruction for Heptabase whiteboards.

Whiteboards are exported as flat records (card instances, connections,
sections). This module groups them back into one node/edge graph per
whiteboard in the JSON Canvas format.
"""

import logging
import math
import secrets
from typing import List, Optional, Set, Tuple

from ..index import EntityIndex
from ..models import CanvasDocument, CanvasEdge, CanvasNode, CardInstance, Whiteboard
from .sanitize import sanitize_filename


DEFAULT_CARDS_PATH = "Cards/"
CARD_FILE_EXTENSION = ".md"

# Vertical space the canvas viewer reserves for a card's title bar
TITLE_BAR_HEIGHT = 30


class IdGenerator:
    """
    Random hex identifiers, unique within one export run.
    """

    def __init__(self, nbytes: int = 8):
        self.nbytes = nbytes
        self._issued: Set[str] = set()

    def __call__(self) -> str:
        while True:
            token = secrets.token_hex(self.nbytes)
            if token not in self._issued:
                self._issued.add(token)
                return token


def detect_direction(begin: CardInstance, end: CardInstance) -> Tuple[str, str]:
    """
    Pick the connector sides for an edge from `begin` to `end`.

    The angle of (begin - end) is bucketed into four open ranges. Exact
    boundary angles (+-45, +-135) fall through to right/left.

    Returns:
        (fromSide, toSide)
    """
    angle = math.degrees(math.atan2(begin.y - end.y, begin.x - end.x))
    return classify_angle(angle)


def classify_angle(angle: float) -> Tuple[str, str]:
    """Map an angle in degrees to (fromSide, toSide)."""
    if 45 < angle < 135:
        return "bottom", "top"
    if angle > 135 or angle < -135:
        return "left", "right"
    if -135 < angle < -45:
        return "top", "bottom"
    return "right", "left"


def find_node_at(instance: CardInstance, nodes: List[CanvasNode]) -> Optional[CanvasNode]:
    """First node placed at exactly the instance's position."""
    for node in nodes:
        if node.x == instance.x and node.y == instance.y:
            return node
    return None


class CanvasBuilder:
    """
    Builds CanvasDocuments for whiteboards.

    One builder is meant to serve one export run: every node and edge it
    emits gets an identifier from the same IdGenerator.
    """

    def __init__(self, index: EntityIndex, cards_path: str = DEFAULT_CARDS_PATH,
                 id_generator: Optional[IdGenerator] = None):
        """
        Initialize the canvas builder.

        Args:
            index: Lookups over the loaded dataset
            cards_path: Prefix for every file node's path inside the vault
            id_generator: Identifier source (a fresh one per builder by default)
        """
        self.index = index
        self.cards_path = cards_path
        self.generate_id = id_generator or IdGenerator()

    def build(self, whiteboard: Whiteboard) -> CanvasDocument:
        """
        Reconstruct the graph of a whiteboard.

        Args:
            whiteboard: The whiteboard to rebuild

        Returns:
            CanvasDocument with file nodes, group nodes and edges
        """
        file_nodes = self._build_file_nodes(whiteboard)
        group_nodes = self._build_group_nodes(whiteboard)
        edges = self._build_edges(whiteboard, file_nodes)

        logging.debug(
            f"Whiteboard '{whiteboard.name}': {len(file_nodes)} cards, "
            f"{len(group_nodes)} sections, {len(edges)} connections"
        )
        return CanvasDocument(nodes=file_nodes + group_nodes, edges=edges)

    def _build_file_nodes(self, whiteboard: Whiteboard) -> List[CanvasNode]:
        nodes = []
        for instance in self.index.card_instances_on(whiteboard.id):
            card = self.index.find_card(instance.card_id)
            if card is None:
                logging.debug(f"Skipping card instance {instance.id}: card {instance.card_id} not found")
                continue

            nodes.append(CanvasNode(
                id=self.generate_id(),
                x=instance.x,
                y=instance.y,
                width=instance.width,
                height=instance.height - TITLE_BAR_HEIGHT,
                type="file",
                file=f"{self.cards_path}{sanitize_filename(card.title)}{CARD_FILE_EXTENSION}",
            ))
        return nodes

    def _build_group_nodes(self, whiteboard: Whiteboard) -> List[CanvasNode]:
        return [
            CanvasNode(
                id=self.generate_id(),
                x=section.x,
                y=section.y,
                width=section.width,
                height=section.height,
                type="group",
                label=section.title,
            )
            for section in self.index.sections_on(whiteboard.id)
        ]

    def _build_edges(self, whiteboard: Whiteboard, file_nodes: List[CanvasNode]) -> List[CanvasEdge]:
        edges = []
        for connection in self.index.connections_on(whiteboard.id):
            if not connection.links_card_instances:
                continue

            begin = self.index.find_card_instance(connection.begin_id)
            end = self.index.find_card_instance(connection.end_id)
            if begin is None or end is None:
                logging.debug(f"Skipping connection {connection.id}: endpoint instance not found")
                continue

            # Endpoints are matched by position, not by id
            from_node = find_node_at(begin, file_nodes)
            to_node = find_node_at(end, file_nodes)
            if from_node is None or to_node is None:
                logging.debug(f"Skipping connection {connection.id}: endpoint node not found")
                continue

            from_side, to_side = detect_direction(begin, end)
            edges.append(CanvasEdge(
                id=self.generate_id(),
                fromNode=from_node.id,
                toNode=to_node.id,
                fromSide=from_side,
                toSide=to_side,
            ))
        return edges
