"""
Collect direct formatting from ``word/document.xml``.

The walk visits every paragraph, run and table in document order, including
those nested in table cells, hyperlinks, content controls and text boxes.
"""

from __future__ import annotations

from .ooxml import MC, W, w_child, w_val
from .style_parser import apply_paragraph_properties, apply_run_properties, apply_table_properties
from .style_registry import DocumentStyleEntry, StyleRegistry

_P = f"{{{W}}}p"
_R = f"{{{W}}}r"
_TBL = f"{{{W}}}tbl"
_PROPERTY_BLOCKS = {f"{{{W}}}pPr", f"{{{W}}}rPr", f"{{{W}}}tblPr", f"{{{W}}}sectPr"}
_FALLBACK = f"{{{MC}}}Fallback"


def paragraph_entry(p) -> DocumentStyleEntry:
    ppr = w_child(p, "pPr")
    css: dict[str, str] = {}
    apply_paragraph_properties(ppr, css)
    # paragraph mark run properties
    apply_run_properties(w_child(ppr, "rPr"), css)
    return DocumentStyleEntry("paragraph", w_val(ppr, "pStyle"), css)


def run_entry(r) -> DocumentStyleEntry:
    rpr = w_child(r, "rPr")
    css: dict[str, str] = {}
    apply_run_properties(rpr, css)
    return DocumentStyleEntry("run", w_val(rpr, "rStyle"), css)


def table_entry(tbl) -> DocumentStyleEntry:
    tblpr = w_child(tbl, "tblPr")
    css: dict[str, str] = {}
    apply_table_properties(tblpr, css)
    return DocumentStyleEntry("table", w_val(tblpr, "tblStyle"), css)


def walk_document(node, registry: StyleRegistry) -> StyleRegistry:
    """Append a DocumentStyleEntry for each formatted element under *node*."""
    for child in node:
        tag = child.tag
        if not isinstance(tag, str) or tag in _PROPERTY_BLOCKS or tag == _FALLBACK:
            continue
        if tag == _P:
            registry.add_document_style(paragraph_entry(child))
        elif tag == _R:
            registry.add_document_style(run_entry(child))
        elif tag == _TBL:
            registry.add_document_style(table_entry(child))
        walk_document(child, registry)
    return registry
