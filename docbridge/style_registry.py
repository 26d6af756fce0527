"""In-memory collection of the styles found in one DOCX package."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .style_parser import StyleDefinition

logger = logging.getLogger(__name__)

ELEMENT_TYPES = ("paragraph", "run", "table")

# Word character styles that read better as semantic tags
_BOLD_HINTS = ("strong", "bold")
_ITALIC_HINTS = ("emphasis", "italic")


@dataclass(frozen=True)
class DocumentStyleEntry:
    """Direct formatting on one paragraph, run or table of the body."""

    element_type: str
    style_id: str | None = None
    css: dict[str, str] = field(default_factory=dict)


class StyleRegistry:
    """Named styles by id plus the body's direct formatting, in document order.

    One registry belongs to one conversion; build a new one per document.
    """

    def __init__(self):
        self.styles: dict[str, StyleDefinition] = {}
        self.document_styles: list[DocumentStyleEntry] = []

    def __len__(self):
        return len(self.styles)

    def __contains__(self, style_id):
        return style_id in self.styles

    def add_style(self, definition: StyleDefinition):
        if definition.style_id in self.styles:
            logger.debug("Duplicate style id %s, keeping the last one", definition.style_id)
        self.styles[definition.style_id] = definition

    def get(self, style_id: str) -> StyleDefinition | None:
        return self.styles.get(style_id)

    def add_document_style(self, entry: DocumentStyleEntry) -> bool:
        """Record *entry* unless it carries neither CSS nor a style reference."""
        if not entry.css and not entry.style_id:
            return False
        self.document_styles.append(entry)
        return True

    def styled_definitions(self) -> list[StyleDefinition]:
        return [s for s in self.styles.values() if s.css]

    def style_map(self) -> list[str]:
        """mammoth style-map rules for every mappable style.

        List paragraph styles are left to mammoth's own list handling, and
        character styles named like Strong/Emphasis become ``strong``/``em``.
        """
        rules = []
        for definition in self.styles.values():
            mapping = definition.mapping
            if mapping is None or not mapping.selector:
                continue
            if mapping.target_element == "li":
                continue
            if definition.type == "character":
                lowered = definition.name.lower()
                if any(hint in lowered for hint in _BOLD_HINTS):
                    rules.append(f"{mapping.selector} => strong")
                    continue
                if any(hint in lowered for hint in _ITALIC_HINTS):
                    rules.append(f"{mapping.selector} => em")
                    continue
            line = mapping.style_map_line()
            if line:
                rules.append(line)
        return rules
