"""
Markdown conversion for Heptabase cards.

This module walks the rich-text tree stored in a card and renders it as
Obsidian-flavoured Markdown. Card references are resolved through the
EntityIndex into [[wiki links]].
"""

import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from ..index import EntityIndex
from ..models import DocNode, Mark


# Legacy reference syntax left in older card bodies: {{card <uuid>}}
LEGACY_CARD_PATTERN = re.compile(
    r"\{\{card\s([a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12})\}\}"
)

BLOCK_SEPARATOR = "\n\n"
HORIZONTAL_RULE = "---"
HARD_BREAK = "  \n"
INDENT = "  "
PDF_PLACEHOLDER = "PDF Document"
EMBED_PLACEHOLDER = "[Embedded content]"


class MarkdownConverter:
    """
    Converts card content into Markdown text.

    Each node kind has a renderer in a dispatch table. Kinds without a
    renderer fall back to rendering their children back to back, so any
    input produces a string.
    """

    def __init__(self, index: EntityIndex):
        """
        Initialize the converter.

        Args:
            index: Lookups used to resolve card references
        """
        self.index = index
        self._renderers: Dict[str, Callable[[DocNode], str]] = {
            "doc": self._render_doc,
            "heading": self._render_heading,
            "paragraph": self._render_inline_block,
            "list_item": self._render_inline_block,
            "table_cell": self._render_inline_block,
            "table_header": self._render_inline_block,
            "bullet_list": self._render_bullet_list,
            "toggle_list": self._render_bullet_list,
            "todo_list": self._render_bullet_list,
            "bullet_list_item": self._render_bullet_item,
            "toggle_list_item": self._render_bullet_item,
            "todo_list_item": self._render_todo_item,
            "check_list_item": self._render_todo_item,
            "ordered_list": self._render_ordered_list,
            "ordered_list_item": self._render_ordered_item,
            "code_block": self._render_code_block,
            "blockquote": self._render_blockquote,
            "horizontal_rule": self._render_horizontal_rule,
            "hard_break": self._render_hard_break,
            "image": self._render_image,
            "math_display": self._render_math_display,
            "math_inline": self._render_math_inline,
            "table": self._render_table,
            "table_row": self._render_table_row,
            "card": self._render_card_reference,
            "pdf_card": self._render_pdf_reference,
            "embed": self._render_embed,
            "section": self._render_section,
            "text": self._render_text_block,
        }

    def convert(self, content: Any) -> str:
        """
        Convert card content to Markdown.

        Args:
            content: A document object, its JSON string, or legacy plain markdown

        Returns:
            The Markdown text; empty when the content cannot be interpreted
        """
        document = self._load_document(content)
        if isinstance(document, str):
            markdown = document
        elif document is None:
            markdown = ""
        else:
            try:
                markdown = self.render(document)
            except RecursionError:
                logging.warning("Card document is nested too deeply to convert")
                markdown = ""
        return self.resolve_legacy_references(markdown)

    def render(self, node: DocNode) -> str:
        """Render one node with the renderer registered for its kind."""
        renderer = self._renderers.get(node.type)
        if renderer is None:
            return "".join(self.render(child) for child in node.content)
        return renderer(node)

    def render_inline(self, nodes: List[DocNode]) -> str:
        """Render a run of inline nodes, applying marks to text leaves."""
        parts = []
        for node in nodes:
            if node.type == "text":
                parts.append(self._apply_marks(node.text or "", node.marks))
            else:
                parts.append(self.render(node))
        return "".join(parts)

    def resolve_legacy_references(self, markdown: str) -> str:
        """Replace {{card <uuid>}} with [[Title]]; unknown cards stay as written."""

        def replace_match(match: "re.Match[str]") -> str:
            card = self.index.find_card(match.group(1))
            if card is None:
                return match.group(0)
            return f"[[{card.title}]]"

        return LEGACY_CARD_PATTERN.sub(replace_match, markdown)

    def _load_document(self, content: Any) -> Optional[Any]:
        """Return a DocNode, a legacy markdown string, or None when unusable."""
        if isinstance(content, str):
            stripped = content.strip()
            # Legacy bodies may open with a {{card ...}} reference
            if not stripped.startswith("{") or stripped.startswith("{{"):
                return content
            try:
                content = json.loads(stripped)
            except (ValueError, RecursionError) as e:
                logging.warning(f"Could not decode card document: {e}")
                return None

        if not isinstance(content, dict):
            if content is not None:
                logging.warning(f"Unsupported card content of type {type(content).__name__}")
            return None

        try:
            return DocNode.model_validate(content)
        except ValidationError as e:
            logging.warning(f"Could not interpret card document: {e.error_count()} error(s)")
            return None
        except RecursionError:
            logging.warning("Card document is nested too deeply to convert")
            return None

    # Block renderers

    def _render_blocks(self, nodes: List[DocNode]) -> str:
        return BLOCK_SEPARATOR.join(self.render(node) for node in nodes)

    def _render_doc(self, node: DocNode) -> str:
        return self._render_blocks(node.content)

    def _render_section(self, node: DocNode) -> str:
        return self._render_blocks(node.content)

    def _render_heading(self, node: DocNode) -> str:
        try:
            level = int(node.attr("level", 1))
        except (TypeError, ValueError):
            level = 1
        level = max(level, 1)
        return f"{'#' * level} {self.render_inline(node.content)}"

    def _render_inline_block(self, node: DocNode) -> str:
        return self.render_inline(node.content)

    def _render_text_block(self, node: DocNode) -> str:
        return self.render_inline([node])

    def _render_bullet_list(self, node: DocNode) -> str:
        items = []
        for item in node.content:
            if item.type in ("todo_list_item", "check_list_item"):
                items.append(self._render_todo_item(item))
            else:
                items.append(self._render_list_item(item, "- "))
        return "\n".join(items)

    def _render_ordered_list(self, node: DocNode) -> str:
        return "\n".join(
            self._render_list_item(item, f"{position}. ")
            for position, item in enumerate(node.content, start=1)
        )

    def _render_bullet_item(self, node: DocNode) -> str:
        return self._render_list_item(node, "- ")

    def _render_ordered_item(self, node: DocNode) -> str:
        # Outside of a list there is no numbering context
        return self._render_list_item(node, "1. ")

    def _render_todo_item(self, node: DocNode) -> str:
        marker = "- [x] " if node.attr("checked", False) else "- [ ] "
        return self._render_list_item(node, marker)

    def _render_list_item(self, item: DocNode, marker: str) -> str:
        """
        Render `marker` + the first paragraph, with nested blocks indented below.

        Only non-paragraph children are nested.
        """
        first_paragraph = next((child for child in item.content if child.type == "paragraph"), None)
        head = self.render_inline(first_paragraph.content) if first_paragraph else ""

        lines = [marker + head]
        for child in item.content:
            if child.type == "paragraph":
                continue
            nested = self.render(child)
            if nested:
                lines.append(_indent(nested, INDENT))
        return "\n".join(lines)

    def _render_code_block(self, node: DocNode) -> str:
        language = node.attr("params") or node.attr("language") or ""
        return f"```{language}\n{node.raw_text}\n```"

    def _render_blockquote(self, node: DocNode) -> str:
        quoted = self._render_blocks(node.content)
        return "\n".join(f"> {line}" for line in quoted.split("\n"))

    def _render_horizontal_rule(self, node: DocNode) -> str:
        return HORIZONTAL_RULE

    def _render_hard_break(self, node: DocNode) -> str:
        return HARD_BREAK

    def _render_image(self, node: DocNode) -> str:
        alt = node.attr("alt", "")
        src = node.attr("src", "")
        title = node.attr("title")
        if title:
            return f'![{alt}]({src} "{title}")'
        return f"![{alt}]({src})"

    def _render_math_display(self, node: DocNode) -> str:
        return f"$${self._math_source(node)}$$"

    def _render_math_inline(self, node: DocNode) -> str:
        return f"${self._math_source(node)}$"

    def _math_source(self, node: DocNode) -> str:
        return node.raw_text or str(node.attr("content", ""))

    def _render_table(self, node: DocNode) -> str:
        rows = [self._render_table_row(row) for row in node.content]
        if not rows:
            return ""
        header_cells = max(len(node.content[0].content), 1)
        separator = "| " + " | ".join(["---"] * header_cells) + " |"
        return "\n".join([rows[0], separator] + rows[1:])

    def _render_table_row(self, node: DocNode) -> str:
        cells = [self.render(cell) for cell in node.content]
        return "| " + " | ".join(cells) + " |"

    def _render_card_reference(self, node: DocNode) -> str:
        card_id = node.attr("cardId")
        card = self.index.find_card(str(card_id)) if card_id else None
        if card is None:
            logging.debug(f"Unresolved card reference: {card_id}")
            return ""
        return f"[[{card.title}]]"

    def _render_pdf_reference(self, node: DocNode) -> str:
        return f"[{node.attr('title') or PDF_PLACEHOLDER}]"

    def _render_embed(self, node: DocNode) -> str:
        url = node.attr("src") or node.attr("url")
        if not url:
            return EMBED_PLACEHOLDER
        return f"[{url}]({url})"

    # Inline marks

    def _apply_marks(self, text: str, marks: List[Mark]) -> str:
        """Wrap text in each mark in order; later marks end up outermost."""
        for mark in marks:
            text = _wrap_mark(text, mark)
        return text


def _wrap_mark(text: str, mark: Mark) -> str:
    kind = mark.type
    if kind in ("bold", "strong"):
        return f"**{text}**"
    if kind in ("italic", "em"):
        return f"*{text}*"
    if kind == "code":
        return f"`{text}`"
    if kind == "strike":
        return f"~~{text}~~"
    if kind == "link":
        return f"[{text}]({mark.attrs.get('href') or ''})"
    if kind == "underline":
        return f"<u>{text}</u>"
    if kind == "color":
        color = mark.attrs.get("color") or ""
        if mark.attrs.get("type") == "background":
            return f'<mark style="background: {color}">{text}</mark>'
        return f'<span style="color: {color}">{text}</span>'
    if kind == "highlight":
        return f"=={text}=="
    # date and unknown marks leave the text untouched
    return text


def _indent(text: str, prefix: str) -> str:
    return "\n".join(prefix + line for line in text.split("\n"))
