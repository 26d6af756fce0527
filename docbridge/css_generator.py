"""Serialize a StyleRegistry into a stylesheet."""

from __future__ import annotations

from .style_registry import StyleRegistry

BASE_CSS = """\
body {
  font-family: "Calibri", "Microsoft YaHei", Arial, sans-serif;
  font-size: 11pt;
  line-height: 1.15;
  color: #000000;
  margin: 0;
  padding: 20pt;
}
p {
  margin: 0 0 8pt 0;
}
table {
  border-collapse: collapse;
  width: 100%;
}
td, th {
  border: 0.5pt solid #000000;
  padding: 4pt;
  vertical-align: top;
}
img {
  max-width: 100%;
  height: auto;
}"""

PRINT_CSS = """\
@media print {
  body {
    padding: 0;
  }
  h1, h2, h3, h4, h5, h6 {
    page-break-after: avoid;
  }
  table, img {
    page-break-inside: avoid;
  }
}"""


def css_rule(selector: str, declarations: dict[str, str]) -> str | None:
    """``selector { prop: value; ... }`` or None when there is nothing to declare."""
    lines = [f"  {prop}: {value};" for prop, value in declarations.items() if value]
    if not lines:
        return None
    return selector + " {\n" + "\n".join(lines) + "\n}"


def style_rules(registry: StyleRegistry) -> list[str]:
    rules = []
    for definition in registry.styled_definitions():
        rule = css_rule(f".{definition.class_name}", definition.css)
        if rule:
            rules.append(rule)
    return rules


def inline_style_rules(registry: StyleRegistry) -> list[str]:
    """One ``.docx-inline-N`` rule per distinct block of direct formatting."""
    seen: dict[tuple, str] = {}
    rules = []
    for entry in registry.document_styles:
        if not entry.css:
            continue
        key = (entry.element_type, tuple(entry.css.items()))
        if key in seen:
            continue
        class_name = f"docx-inline-{len(seen) + 1}"
        seen[key] = class_name
        rule = css_rule(f".{class_name}", entry.css)
        if rule:
            rules.append(rule)
    return rules


def generate_css(registry: StyleRegistry, include_inline: bool = True,
                 include_print: bool = False) -> str:
    """Base rules first, then one class per named style with declarations."""
    blocks = [BASE_CSS]
    blocks.extend(style_rules(registry))
    if include_inline:
        blocks.extend(inline_style_rules(registry))
    if include_print:
        blocks.append(PRINT_CSS)
    return "\n\n".join(blocks) + "\n"
