"""
Word measurement and color conversions.

WordprocessingML stores lengths in twips (1/20 pt), font sizes in half-points
and border widths in eighths of a point.  Every helper here returns ``None``
when the input cannot be turned into a valid CSS value, so callers simply skip
the property.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Numeric parsing & formatting
# ---------------------------------------------------------------------------
_INT_RE = re.compile(r"^\s*([-+]?\d+)")
_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+))")


def parse_int(value) -> int | None:
    """Leading integer of *value* ("240", "240twips", 240), else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else None
    match = _INT_RE.match(str(value))
    return int(match.group(1)) if match else None


def parse_number(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value == value else None
    match = _NUMBER_RE.match(str(value))
    return float(match.group(1)) if match else None


def format_number(value: float) -> str:
    """Render a number the way CSS authors write it: 12, 12.5, -10, 0.8."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def in_range(value: float | None, low: float, high: float) -> bool:
    return value is not None and low <= value <= high


# ---------------------------------------------------------------------------
# Lengths
# ---------------------------------------------------------------------------
def twips_to_points(value) -> float | None:
    twips = parse_number(value)
    if twips is None:
        return None
    return round(twips / 20 * 100) / 100


def half_points_to_points(value) -> float | None:
    """Font size in points; None outside (0, 72]."""
    half_points = parse_number(value)
    if half_points is None:
        return None
    points = half_points / 2
    if points <= 0 or points > 72:
        return None
    return points


def eighth_points_to_points(value) -> float | None:
    eighths = parse_number(value)
    if eighths is None or eighths < 0:
        return None
    return round(eighths / 8 * 100) / 100


def line_spacing(line, line_rule: str | None = None) -> str | None:
    """CSS line-height for ``w:spacing/@w:line``.

    ``exact`` rules are absolute (twips -> pt); everything else is a multiple
    of a single line (240 twips).  Non-positive values yield None.
    """
    if line_rule == "exact":
        points = twips_to_points(line)
        return None if points is None or points <= 0 else f"{format_number(points)}pt"
    twips = parse_number(line)
    if twips is None or twips <= 0:
        return None
    return f"{twips / 240:.2f}"


# ---------------------------------------------------------------------------
# Keyword mappings
# ---------------------------------------------------------------------------
_ALIGNMENT = {
    "center": "center",
    "right": "right",
    "end": "right",
    "justify": "justify",
    "both": "justify",
    "distribute": "justify",
}

_BORDER_STYLES = {
    "single": "solid",
    "thick": "solid",
    "double": "double",
    "dotted": "dotted",
    "dashed": "dashed",
    "none": "none",
    "nil": "none",
}


def alignment(value: str | None) -> str:
    return _ALIGNMENT.get(value or "", "left")


def border_style(value: str | None) -> str:
    return _BORDER_STYLES.get(value or "", "solid")


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------
THEME_COLORS = {
    "hyperlink": "#0563C1",
    "followedHyperlink": "#954F72",
    "accent1": "#4F81BD",
    "accent2": "#F79646",
    "accent3": "#9BBB59",
    "accent4": "#8064A2",
    "accent5": "#4BACC6",
    "accent6": "#F596AA",
    "dark1": "#000000",
    "dark2": "#1F497D",
    "light1": "#FFFFFF",
    "light2": "#EEECE1",
    "text1": "#000000",
    "text2": "#1F497D",
    "background1": "#FFFFFF",
    "background2": "#EEECE1",
}

HIGHLIGHT_COLORS = {
    "yellow": "#FFFF00",
    "green": "#00FF00",
    "cyan": "#00FFFF",
    "magenta": "#FF00FF",
    "blue": "#0000FF",
    "red": "#FF0000",
    "darkBlue": "#000080",
    "darkCyan": "#008080",
    "darkGreen": "#008000",
    "darkMagenta": "#800080",
    "darkRed": "#800000",
    "darkYellow": "#808000",
    "darkGray": "#808080",
    "lightGray": "#C0C0C0",
    "black": "#000000",
    "white": "#FFFFFF",
}

_NAMED_COLORS = {
    "black": "#000000",
    "white": "#FFFFFF",
    "red": "#FF0000",
    "green": "#008000",
    "blue": "#0000FF",
    "yellow": "#FFFF00",
    "gray": "#808080",
    "grey": "#808080",
}

_NON_HEX_RE = re.compile(r"[^0-9A-Fa-f]")


def theme_color(name: str | None) -> str:
    return THEME_COLORS.get(name or "", "#000000")


def highlight_color(name: str | None) -> str:
    return HIGHLIGHT_COLORS.get(name or "", "#FFFF00")


def named_or_hex_color(value: str | None) -> str | None:
    """``#RRGGBB`` for a hex (or basic named) color; None for auto/invalid."""
    if not value:
        return None
    value = value.strip()
    if value.lower() == "auto":
        return None
    named = _NAMED_COLORS.get(value.lower())
    if named:
        return named
    digits = _NON_HEX_RE.sub("", value)
    if len(digits) != 6:
        return None
    return "#" + digits.upper()
