"""
DOCX style extraction: package -> StyleRegistry -> CSS.

Usage:
    from docbridge.extractor import extract_styles
    result = extract_styles("report.docx")
    print(result.css)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from lxml import etree

from .css_generator import generate_css
from .document_walker import walk_document
from .ooxml import DocxPackage, MediaPart, Relationship
from .style_parser import StyleDefinition, parse_style
from .style_registry import DocumentStyleEntry, StyleRegistry

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    styles: dict[str, StyleDefinition]
    document_styles: list[DocumentStyleEntry]
    css: str
    style_map: list[str] = field(default_factory=list)
    fonts: dict[str, dict[str, str]] = field(default_factory=dict)
    theme_colors: dict[str, str] = field(default_factory=dict)
    relationships: dict[str, Relationship] = field(default_factory=dict)
    media: dict[str, MediaPart] = field(default_factory=dict)

    def summary(self) -> dict:
        """JSON-friendly view (no media bytes)."""
        return {
            "styles": {
                style_id: {
                    "name": s.name,
                    "type": s.type,
                    "className": s.class_name,
                    "element": s.mapping.target_element if s.mapping else None,
                    "basedOn": s.based_on,
                    "isDefault": s.is_default,
                    "css": s.css,
                }
                for style_id, s in self.styles.items()
            },
            "documentStyles": [
                {"elementType": e.element_type, "styleId": e.style_id, "css": e.css}
                for e in self.document_styles
            ],
            "fonts": sorted(self.fonts),
            "themeColors": self.theme_colors,
            "media": {rel_id: m.name for rel_id, m in self.media.items()},
            "styleMap": self.style_map,
            "css": self.css,
        }


def load_styles(package: DocxPackage, registry: StyleRegistry) -> int:
    """Parse every ``w:style``; a broken definition is logged and skipped."""
    count = 0
    for style_el in package.style_elements():
        try:
            definition = parse_style(style_el)
        except (ValueError, TypeError, etree.LxmlError) as e:
            logger.warning("Skipping unreadable style definition: %s", e)
            continue
        if not definition.style_id:
            logger.debug("Skipping style without styleId (%s)", definition.name)
            continue
        registry.add_style(definition)
        count += 1
    return count


def extract_styles(source, include_inline: bool = True,
                   include_print: bool = False) -> ExtractionResult:
    """Read styles and direct formatting from a DOCX path, file object or bytes.

    Raises DocxFormatError when the package is not a ZIP and OOXMLError when
    the main document part is missing; every other part is optional.
    """
    registry = StyleRegistry()
    with DocxPackage(source) as package:
        body = package.document_body()
        loaded = load_styles(package, registry)
        walk_document(body, registry)
        relationships = package.relationships()
        media = package.media(relationships)
        fonts = package.fonts()
        theme_colors = package.theme_colors()

    logger.info(
        "Extracted %d styles, %d direct-formatting entries, %d media parts",
        loaded, len(registry.document_styles), len(media),
    )
    css = generate_css(registry, include_inline=include_inline, include_print=include_print)
    return ExtractionResult(
        styles=dict(registry.styles),
        document_styles=list(registry.document_styles),
        css=css,
        style_map=registry.style_map(),
        fonts=fonts,
        theme_colors=theme_colors,
        relationships=relationships,
        media=media,
    )
