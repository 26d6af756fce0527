"""
Translate WordprocessingML property blocks into CSS declarations.

``parse_style`` turns one ``<w:style>`` element into a ``StyleDefinition``.
The ``apply_*_properties`` helpers are shared with the document walker, which
runs the same rules over direct formatting found in the body.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .ooxml import w_attr, w_child, w_val
from .units import (
    alignment,
    border_style,
    eighth_points_to_points,
    format_number,
    half_points_to_points,
    highlight_color,
    in_range,
    line_spacing,
    named_or_hex_color,
    parse_number,
    theme_color,
    twips_to_points,
)

STYLE_TYPES = ("paragraph", "character", "table", "numbering")

# Accepted ranges, in points
SPACING_RANGE = (0, 144)
INDENT_RANGE = (0, 720)
FIRST_LINE_RANGE = (-360, 360)
HANGING_RANGE = (0, 360)

BORDER_SIDES = ("top", "right", "bottom", "left")
_SIDE_ALIASES = {"left": "start", "right": "end"}

_TOGGLE_OFF = {"0", "false", "off"}

# Characters that would end the quoted font-family string or the style block
_UNSAFE_FONT_CHARS = re.compile(r'["\\<>;{}\x00-\x1f\x7f]')


@dataclass(frozen=True)
class StyleMapping:
    """How content carrying a Word style becomes HTML."""

    selector: str | None
    target_element: str
    class_name: str

    def style_map_line(self) -> str | None:
        """mammoth style-map rule, e.g. ``p[style-name='Title'] => h1.title:fresh``."""
        if not self.selector:
            return None
        target = f"{self.target_element}.{self.class_name}"
        if self.selector.startswith("p["):
            target += ":fresh"
        return f"{self.selector} => {target}"


@dataclass(frozen=True)
class StyleDefinition:
    style_id: str
    name: str
    type: str
    css: dict[str, str] = field(default_factory=dict)
    mapping: StyleMapping | None = None
    based_on: str | None = None
    next: str | None = None
    is_default: bool = False

    @property
    def class_name(self) -> str:
        return self.mapping.class_name if self.mapping else sanitize_class_name(self.style_id)


# ---------------------------------------------------------------------------
# Class names & mappings
# ---------------------------------------------------------------------------
_INVALID_CLASS_CHARS = re.compile(r"[^a-z0-9_-]+")
_DASH_RUN = re.compile(r"-{2,}")
_DIGITS = re.compile(r"\d+")


def sanitize_class_name(value: str) -> str:
    """A CSS class name for a style id or name.

    Lowercased, anything outside ``[a-z0-9_-]`` becomes ``-``, and names that
    would start with a digit get a ``style-`` prefix.  Applying it twice gives
    the same result.
    """
    name = _INVALID_CLASS_CHARS.sub("-", (value or "").lower())
    name = _DASH_RUN.sub("-", name).strip("-")
    if not name:
        return "style"
    if name[0].isdigit():
        name = "style-" + name
    return name


def heading_level(name: str) -> int:
    match = _DIGITS.search(name or "")
    if not match:
        return 1
    return max(1, min(6, int(match.group(0))))


def derive_mapping(style_id: str, name: str, style_type: str) -> StyleMapping:
    class_name = sanitize_class_name(style_id)
    selector_name = None if "'" in name else name
    lowered = (name or "").lower()

    if style_type == "paragraph":
        if "heading" in lowered:
            element = f"h{heading_level(name)}"
        elif "list" in lowered:
            element = "li"
        else:
            element = "p"
        selector = f"p[style-name='{selector_name}']" if selector_name else None
    elif style_type == "character":
        element = "span"
        selector = f"r[style-name='{selector_name}']" if selector_name else None
    elif style_type == "table":
        element = "table"
        selector = f"table[style-name='{selector_name}']" if selector_name else None
    else:
        element = "span"
        selector = None
    return StyleMapping(selector, element, class_name)


# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------
def border_value(border) -> str:
    """``"{width}pt {style} {color}"`` for one ``w:top``/``w:left``/... element."""
    style = border_style(w_attr(border, "val"))
    if style == "none":
        return "none"
    width = eighth_points_to_points(w_attr(border, "sz"))
    if width is None:
        width = 1
    color = named_or_hex_color(w_attr(border, "color")) or "#000000"
    return f"{format_number(width)}pt {style} {color}"


def apply_borders(container, css: dict[str, str]):
    if container is None:
        return
    for side in BORDER_SIDES:
        border = w_child(container, side)
        if border is None and side in _SIDE_ALIASES:
            border = w_child(container, _SIDE_ALIASES[side])
        if border is not None:
            css[f"border-{side}"] = border_value(border)


# ---------------------------------------------------------------------------
# Paragraph properties (w:pPr)
# ---------------------------------------------------------------------------
def _points_in(value, bounds) -> float | None:
    points = twips_to_points(value)
    return points if in_range(points, *bounds) else None


def apply_paragraph_properties(ppr, css: dict[str, str]):
    if ppr is None:
        return

    jc = w_val(ppr, "jc")
    if jc:
        css["text-align"] = alignment(jc)

    spacing = w_child(ppr, "spacing")
    if spacing is not None:
        before = _points_in(w_attr(spacing, "before"), SPACING_RANGE)
        if before is not None:
            css["margin-top"] = f"{format_number(before)}pt"
        after = _points_in(w_attr(spacing, "after"), SPACING_RANGE)
        if after is not None:
            css["margin-bottom"] = f"{format_number(after)}pt"
        line = w_attr(spacing, "line")
        if line is not None:
            height = line_spacing(line, w_attr(spacing, "lineRule"))
            if height is not None and (parse_number(height) or 0) > 0:
                css["line-height"] = height

    ind = w_child(ppr, "ind")
    if ind is not None:
        left = _points_in(w_attr(ind, "left") or w_attr(ind, "start"), INDENT_RANGE)
        if left is not None:
            css["margin-left"] = f"{format_number(left)}pt"
        right = _points_in(w_attr(ind, "right") or w_attr(ind, "end"), INDENT_RANGE)
        if right is not None:
            css["margin-right"] = f"{format_number(right)}pt"
        first_line = _points_in(w_attr(ind, "firstLine"), FIRST_LINE_RANGE)
        if first_line is not None:
            css["text-indent"] = f"{format_number(first_line)}pt"
        hanging = _points_in(w_attr(ind, "hanging"), HANGING_RANGE)
        if hanging is not None:
            css["text-indent"] = f"{format_number(-hanging)}pt"

    apply_borders(w_child(ppr, "pBdr"), css)

    shd = w_child(ppr, "shd")
    if shd is not None:
        fill = w_attr(shd, "fill")
        if fill and fill.lower() != "auto":
            color = named_or_hex_color(fill)
            if color:
                css["background-color"] = color


# ---------------------------------------------------------------------------
# Run properties (w:rPr)
# ---------------------------------------------------------------------------
def _toggle_on(rpr, name: str) -> bool:
    el = w_child(rpr, name)
    if el is None:
        return False
    value = w_attr(el, "val")
    return value is None or value.lower() not in _TOGGLE_OFF


def _first_font(rfonts) -> str | None:
    for attr in ("ascii", "eastAsia", "hAnsi", "cs"):
        font = (w_attr(rfonts, attr) or "").strip()
        if font and not _UNSAFE_FONT_CHARS.search(font):
            return font
    return None


def apply_run_properties(rpr, css: dict[str, str]):
    if rpr is None:
        return

    font = _first_font(w_child(rpr, "rFonts"))
    if font:
        css["font-family"] = f'"{font}", sans-serif'

    # East-Asian size parsed last so it wins when both are present
    for tag in ("sz", "szCs"):
        points = half_points_to_points(w_val(rpr, tag))
        if points is not None:
            css["font-size"] = f"{format_number(points)}pt"

    color_el = w_child(rpr, "color")
    if color_el is not None:
        theme = w_attr(color_el, "themeColor")
        if theme:
            css["color"] = theme_color(theme)
        else:
            color = named_or_hex_color(w_attr(color_el, "val"))
            if color:
                css["color"] = color

    highlight = w_val(rpr, "highlight")
    if highlight and highlight != "none":
        css["background-color"] = highlight_color(highlight)

    shd = w_child(rpr, "shd")
    if shd is not None:
        fill = w_attr(shd, "fill")
        if fill and fill.lower() not in ("auto", "000000"):
            color = named_or_hex_color(fill)
            if color:
                css["background-color"] = color
        if "color" not in css:
            color = named_or_hex_color(w_attr(shd, "color"))
            if color:
                css["color"] = color

    if _toggle_on(rpr, "b"):
        css["font-weight"] = "bold"
    if _toggle_on(rpr, "i"):
        css["font-style"] = "italic"

    underline = w_child(rpr, "u")
    if underline is not None:
        if w_attr(underline, "val") == "none":
            css["text-decoration"] = "none"
        else:
            css["text-decoration"] = "underline"

    if _toggle_on(rpr, "strike") or _toggle_on(rpr, "dstrike"):
        css["text-decoration"] = "line-through"

    vert_align = w_val(rpr, "vertAlign")
    if vert_align == "superscript":
        css["vertical-align"] = "super"
        css["font-size"] = "0.8em"
    elif vert_align == "subscript":
        css["vertical-align"] = "sub"
        css["font-size"] = "0.8em"

    letter_spacing = twips_to_points(w_val(rpr, "spacing"))
    if letter_spacing is not None:
        css["letter-spacing"] = f"{format_number(letter_spacing)}pt"


# ---------------------------------------------------------------------------
# Table properties (w:tblPr)
# ---------------------------------------------------------------------------
def apply_table_properties(tblpr, css: dict[str, str]):
    if tblpr is None:
        return

    width = w_child(tblpr, "tblW")
    if width is not None:
        width_type = w_attr(width, "type")
        raw = w_attr(width, "w")
        if width_type == "pct" and raw:
            if raw.strip().endswith("%"):
                percent = parse_number(raw)
            else:
                fiftieths = parse_number(raw)
                percent = None if fiftieths is None else fiftieths / 50
            if percent is not None and percent > 0:
                css["width"] = f"{format_number(percent)}%"
        elif width_type == "dxa":
            points = twips_to_points(raw)
            if points is not None and points > 0:
                css["width"] = f"{format_number(points)}pt"

    apply_borders(w_child(tblpr, "tblBorders"), css)

    jc = w_val(tblpr, "jc")
    if jc:
        margin = "auto" if jc == "center" else "0"
        css["margin-left"] = margin
        css["margin-right"] = margin

    cell_spacing = w_child(tblpr, "tblCellSpacing")
    if cell_spacing is not None:
        points = twips_to_points(w_attr(cell_spacing, "w"))
        if points is not None and points >= 0:
            css["border-spacing"] = f"{format_number(points)}pt"


# ---------------------------------------------------------------------------
# w:style
# ---------------------------------------------------------------------------
def parse_style(style_el) -> StyleDefinition:
    """Build a StyleDefinition from one ``<w:style>`` element."""
    style_id = w_attr(style_el, "styleId") or ""
    name = w_val(style_el, "name") or style_id
    style_type = w_attr(style_el, "type")
    if style_type not in STYLE_TYPES:
        style_type = "paragraph"

    css: dict[str, str] = {}
    apply_paragraph_properties(w_child(style_el, "pPr"), css)
    apply_run_properties(w_child(style_el, "rPr"), css)
    apply_table_properties(w_child(style_el, "tblPr"), css)

    default = w_attr(style_el, "default")
    return StyleDefinition(
        style_id=style_id,
        name=name,
        type=style_type,
        css=css,
        mapping=derive_mapping(style_id, name, style_type),
        based_on=w_val(style_el, "basedOn"),
        next=w_val(style_el, "next"),
        is_default=default in ("1", "true", "on"),
    )
