#!/usr/bin/env python3
"""
Markdown to DOCX without Pandoc.

Markdown is parsed to an AST with mistune and rendered into a python-docx
Document by ``DocxBuilder``.  Look and feel comes from a ``DocxTheme``
preset, optionally adjusted by a ``<!-- docx-style -->`` comment in the
Markdown or a style file:

    <!-- docx-style
    font_body: Georgia
    color_heading: 1F3864
    table_banded_rows: false
    -->

Usage:
    python -m docbridge.md_to_docx input.md output.docx [--theme academic] [--toc]
"""

from __future__ import annotations

import argparse
import dataclasses
import hashlib
import logging
import re
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path

import mistune
import requests
from docx import Document
from docx.enum.style import WD_STYLE_TYPE
from docx.enum.table import WD_CELL_VERTICAL_ALIGNMENT, WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.image.exceptions import UnrecognizedImageError
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls
from docx.shared import Inches, Pt, RGBColor
from PIL import Image

from .md_to_html import front_matter_title, strip_front_matter

logger = logging.getLogger(__name__)

HYPERLINK_REL = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink"
_HEX_RE = re.compile(r"^[0-9A-Fa-f]{6}$")


# ---------------------------------------------------------------------------
# Themes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DocxTheme:
    font_body: str = "Calibri"
    font_heading: str = "Calibri"
    font_code: str = "Consolas"
    font_size: float = 11.0
    color_heading: str = "2F5496"
    color_body: str = "000000"
    color_link: str = "0563C1"
    table_header_bg: str = "D9E2F3"
    table_header_text: str = "000000"
    table_alt_row: str = "F2F2F2"
    table_border: str = "BFBFBF"
    table_border_size: int = 4
    table_cell_margin: int = 28
    table_font_size: float = 10.0
    table_banded_rows: bool = True
    code_bg: str = "F5F5F5"
    code_font_size: float = 9.5
    heading_sizes: tuple = (18, 16, 14, 12, 11, 10)

    def heading_size(self, level: int) -> float:
        return self.heading_sizes[min(max(level, 1), 6) - 1]

    def with_overrides(self, overrides: dict | None) -> "DocxTheme":
        """Copy with string overrides (``key: value`` pairs) coerced to field types."""
        if not overrides:
            return self
        types = {f.name: f.type for f in dataclasses.fields(self) if f.name != "heading_sizes"}
        changes = {}
        for key, value in overrides.items():
            if key not in types or value is None:
                continue
            kind = types[key]
            try:
                if kind == "bool":
                    changes[key] = str(value).strip().lower() in ("true", "yes", "1", "on")
                elif kind == "int":
                    changes[key] = int(value)
                elif kind == "float":
                    changes[key] = float(value)
                elif key.startswith("font_"):
                    changes[key] = str(value)
                else:
                    color = str(value).strip().lstrip("#")
                    if not _HEX_RE.match(color):
                        raise ValueError(color)
                    changes[key] = color.upper()
            except ValueError:
                logger.warning("Ignoring invalid docx style value %s=%r", key, value)
        return dataclasses.replace(self, **changes)


DOCX_THEMES = {
    "default": DocxTheme(),
    "professional": DocxTheme(
        font_body="Arial", font_heading="Arial", font_size=10.5,
        color_heading="2D3B4D", color_body="333333",
        table_header_bg="D5E8F0", table_header_text="2D3B4D", table_border="CCCCCC",
        table_font_size=9.5, code_font_size=9.0,
        heading_sizes=(20, 16, 14, 12, 11, 10.5),
    ),
    "academic": DocxTheme(
        font_body="Times New Roman", font_heading="Times New Roman", font_code="Courier New",
        font_size=12.0, color_heading="000000", color_link="000000",
        table_header_bg="FFFFFF", table_border="000000", table_banded_rows=False,
        table_font_size=11.0, code_bg="FFFFFF", code_font_size=10.0,
        heading_sizes=(16, 14, 13, 12, 12, 12),
    ),
    "modern": DocxTheme(
        font_body="Segoe UI", font_heading="Segoe UI Semibold", font_size=10.5,
        color_heading="4F46E5", color_body="1F2937", color_link="4F46E5",
        table_header_bg="EEF2FF", table_header_text="312E81", table_alt_row="F9FAFB",
        table_border="E5E7EB", code_bg="F3F4F6",
        heading_sizes=(24, 18, 15, 13, 11, 10.5),
    ),
}

DEFAULT_DOCX_THEME = "professional"
STYLE_KEYS = tuple(f.name for f in dataclasses.fields(DocxTheme) if f.name != "heading_sizes")


def get_theme(name: str | None) -> DocxTheme:
    if name and name not in DOCX_THEMES:
        logger.warning("Unknown DOCX theme %r, using %s", name, DEFAULT_DOCX_THEME)
    return DOCX_THEMES.get(name or DEFAULT_DOCX_THEME, DOCX_THEMES[DEFAULT_DOCX_THEME])


def _rgb(hex_str: str) -> RGBColor:
    return RGBColor.from_string(hex_str.lstrip("#").upper())


_DOCX_STYLE_RE = re.compile(r"<!--\s*docx-style\s*\n(.*?)-->", re.DOTALL)


def _parse_style_lines(text: str) -> dict:
    config = {}
    for line in text.strip().split("\n"):
        line = line.strip()
        if not line or line.startswith("#") or ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip().lower()
        if key in STYLE_KEYS:
            config[key] = value.strip().strip('"').strip("'")
    return config


def parse_docx_style(text: str) -> dict:
    """Style overrides from a ``<!-- docx-style ... -->`` comment in Markdown."""
    match = _DOCX_STYLE_RE.search(text)
    return _parse_style_lines(match.group(1)) if match else {}


def strip_docx_style_comment(text: str) -> str:
    return _DOCX_STYLE_RE.sub("", text)


def parse_style_file(path) -> dict:
    return _parse_style_lines(Path(path).read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# Document builder
# ---------------------------------------------------------------------------
class DocxBuilder:
    """Accumulates python-docx elements from mistune AST tokens."""

    def __init__(self, doc, theme: DocxTheme, base_dir, temp_dir):
        self.doc = doc
        self.theme = theme
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.temp_dir = Path(temp_dir)
        self.image_count = 0
        self._setup_styles()

    # -- style helpers -------------------------------------------------------
    def _setup_styles(self):
        t = self.theme
        styles = self.doc.styles
        normal = styles["Normal"]
        normal.font.name = t.font_body
        normal.font.size = Pt(t.font_size)
        normal.font.color.rgb = _rgb(t.color_body)
        pf = normal.paragraph_format
        pf.space_before = Pt(0)
        pf.space_after = Pt(6)
        pf.line_spacing = 1.15

        for level in range(1, 7):
            name = f"Heading {level}"
            try:
                h = styles[name]
            except KeyError:
                h = styles.add_style(name, WD_STYLE_TYPE.PARAGRAPH)
            h.font.name = t.font_heading
            h.font.size = Pt(t.heading_size(level))
            h.font.bold = True
            h.font.color.rgb = _rgb(t.color_heading)
            h.paragraph_format.space_before = Pt(12 if level <= 2 else 8)
            h.paragraph_format.space_after = Pt(6)
            h.paragraph_format.keep_with_next = True

    @staticmethod
    def _set_shading(element, color: str):
        element.append(parse_xml(f'<w:shd {nsdecls("w")} w:fill="{color}" w:val="clear"/>'))

    # -- inline rendering ----------------------------------------------------
    def _add_run(self, paragraph, text: str, fmt: dict):
        run = paragraph.add_run(text)
        if fmt.get("bold"):
            run.bold = True
        if fmt.get("italic"):
            run.italic = True
        if fmt.get("strike"):
            run.font.strike = True
        return run

    def _add_inline(self, paragraph, tokens, fmt: dict | None = None):
        """Render inline tokens into *paragraph*, nesting bold/italic/strike."""
        fmt = fmt or {}
        if isinstance(tokens, str):
            self._add_run(paragraph, tokens, fmt)
            return
        if isinstance(tokens, dict):
            tokens = [tokens]
        for tok in tokens or []:
            tp = tok.get("type", "")
            children = tok.get("children", [])
            attrs = tok.get("attrs") or {}

            if tp == "text":
                self._add_run(paragraph, tok.get("raw", ""), fmt)
            elif tp == "softbreak":
                self._add_run(paragraph, " ", fmt)
            elif tp == "linebreak":
                paragraph.add_run().add_break()
            elif tp == "strong":
                self._add_inline(paragraph, children, {**fmt, "bold": True})
            elif tp == "emphasis":
                self._add_inline(paragraph, children, {**fmt, "italic": True})
            elif tp == "strikethrough":
                self._add_inline(paragraph, children, {**fmt, "strike": True})
            elif tp == "codespan":
                run = self._add_run(paragraph, tok.get("raw", ""), fmt)
                run.font.name = self.theme.font_code
                run.font.size = Pt(self.theme.code_font_size)
                self._set_shading(run._element.get_or_add_rPr(), self.theme.code_bg)
            elif tp == "link":
                self._add_hyperlink(paragraph, attrs.get("url", ""), flatten_text(children))
            elif tp == "image":
                self._add_image(paragraph, attrs.get("url", ""), flatten_text(children))
            elif tp == "inline_html":
                continue
            else:
                self._add_run(paragraph, flatten_text(children) if children else tok.get("raw", ""), fmt)

    def _add_hyperlink(self, paragraph, url: str, text: str):
        if not url:
            paragraph.add_run(text)
            return
        r_id = paragraph.part.relate_to(url, HYPERLINK_REL, is_external=True)
        hyperlink = parse_xml(
            f'<w:hyperlink {nsdecls("w", "r")} r:id="{r_id}">'
            f'<w:r><w:rPr><w:rStyle w:val="Hyperlink"/><w:color w:val="{self.theme.color_link}"/>'
            f'<w:u w:val="single"/></w:rPr>'
            f'<w:t xml:space="preserve">{escape_xml(text or url)}</w:t></w:r></w:hyperlink>'
        )
        paragraph._element.append(hyperlink)

    # -- images --------------------------------------------------------------
    def _add_image(self, paragraph, src: str, alt: str = ""):
        path = self._resolve_image(src)
        if path is None:
            paragraph.add_run(f"[Image: {alt or src}]").italic = True
            return
        try:
            width, height = image_fit(path)
            paragraph.add_run().add_picture(str(path), width=width, height=height)
            self.image_count += 1
        except (OSError, UnrecognizedImageError, ValueError) as e:
            logger.warning("Could not embed image %s: %s", src, e)
            paragraph.add_run(f"[Image: {alt or src}]").italic = True

    def _resolve_image(self, src: str) -> Path | None:
        if src.startswith(("http://", "https://")):
            try:
                resp = requests.get(src, timeout=15)
                resp.raise_for_status()
            except requests.RequestException as e:
                logger.warning("Image download failed for %s: %s", src, e)
                return None
            digest = hashlib.sha1(src.encode("utf-8")).hexdigest()[:16]
            target = self.temp_dir / f"img_{digest}{Path(src.split('?')[0]).suffix or '.png'}"
            target.write_bytes(resp.content)
            return target
        path = Path(src)
        if not path.is_absolute():
            path = self.base_dir / path
        return path if path.is_file() else None

    # -- tables --------------------------------------------------------------
    def _add_table(self, header: list, rows: list[list], aligns: list):
        t = self.theme
        ncols = len(header)
        table = self.doc.add_table(rows=1 + len(rows), cols=ncols)
        try:
            table.style = "Table Grid"
        except KeyError:
            pass
        table.alignment = WD_TABLE_ALIGNMENT.CENTER
        for col in table.columns:
            col.width = Inches(6.0 / ncols)
        self._set_table_cell_margins(table)

        def fill(cell, tokens, align, header_cell=False, shade=None):
            cell.text = ""
            cell.vertical_alignment = WD_CELL_VERTICAL_ALIGNMENT.CENTER
            p = cell.paragraphs[0]
            p.paragraph_format.space_before = Pt(0)
            p.paragraph_format.space_after = Pt(0)
            p.alignment = align
            self._add_inline(p, tokens, {"bold": True} if header_cell else None)
            for run in p.runs:
                run.font.size = Pt(t.table_font_size)
                if header_cell:
                    run.font.color.rgb = _rgb(t.table_header_text)
            if shade:
                self._set_shading(cell._element.get_or_add_tcPr(), shade)

        for i, cell in enumerate(table.rows[0].cells):
            fill(cell, header[i], table_align(aligns, i), header_cell=True, shade=t.table_header_bg)
        for r, row_tokens in enumerate(rows):
            shade = t.table_alt_row if t.table_banded_rows and r % 2 == 1 else None
            for c, cell in enumerate(table.rows[r + 1].cells):
                fill(cell, row_tokens[c] if c < len(row_tokens) else [], table_align(aligns, c),
                     shade=shade)

        self._set_table_borders(table)
        self.doc.add_paragraph()

    def _set_table_borders(self, table):
        size, color = self.theme.table_border_size, self.theme.table_border
        edges = "".join(
            f'<w:{edge} w:val="single" w:sz="{size}" w:space="0" w:color="{color}"/>'
            for edge in ("top", "left", "bottom", "right", "insideH", "insideV")
        )
        table._tbl.tblPr.append(parse_xml(f'<w:tblBorders {nsdecls("w")}>{edges}</w:tblBorders>'))

    def _set_table_cell_margins(self, table):
        m = self.theme.table_cell_margin
        sides = "".join(f'<w:{side} w:w="{m}" w:type="dxa"/>'
                        for side in ("top", "left", "bottom", "right"))
        table._tbl.tblPr.append(parse_xml(f'<w:tblCellMar {nsdecls("w")}>{sides}</w:tblCellMar>'))

    def _handle_table(self, tok: dict):
        """mistune 3: table -> [table_head -> cells, table_body -> rows -> cells]."""
        header, rows, aligns = [], [], []
        for part in tok.get("children", []):
            if part.get("type") == "table_head":
                for cell in part.get("children", []):
                    header.append(cell.get("children", []))
                    aligns.append((cell.get("attrs") or {}).get("align"))
            elif part.get("type") == "table_body":
                for row in part.get("children", []):
                    rows.append([cell.get("children", []) for cell in row.get("children", [])])
        if header:
            self._add_table(header, rows, aligns)

    # -- blocks --------------------------------------------------------------
    def _add_code_block(self, code: str):
        p = self.doc.add_paragraph()
        pf = p.paragraph_format
        pf.space_before = Pt(4)
        pf.space_after = Pt(4)
        pf.left_indent = Inches(0.25)
        self._set_shading(p._element.get_or_add_pPr(), self.theme.code_bg)
        for i, line in enumerate(code.rstrip("\n").split("\n")):
            if i > 0:
                p.add_run().add_break()
            run = p.add_run(line)
            run.font.name = self.theme.font_code
            run.font.size = Pt(self.theme.code_font_size)

    def _add_blockquote(self, children: list):
        for tok in children:
            if tok.get("type") != "paragraph":
                self._render_token(tok)
                continue
            p = self.doc.add_paragraph()
            p.paragraph_format.left_indent = Inches(0.5)
            p.paragraph_format.space_before = Pt(2)
            p.paragraph_format.space_after = Pt(2)
            p._element.get_or_add_pPr().append(parse_xml(
                f'<w:pBdr {nsdecls("w")}>'
                f'<w:left w:val="single" w:sz="12" w:space="8" w:color="AAAAAA"/></w:pBdr>'
            ))
            self._add_inline(p, tok.get("children", []), {"italic": True})
            for run in p.runs:
                run.font.color.rgb = RGBColor(0x66, 0x66, 0x66)

    def _add_list(self, token: dict, level: int = 0):
        attrs = token.get("attrs") or {}
        ordered = attrs.get("ordered", False)
        counter = attrs.get("start") or 1
        bullets = ["•", "◦", "▪"]

        for item in token.get("children", []):
            if item.get("type") not in ("list_item", "task_list_item"):
                continue
            first = True
            for child in item.get("children", []):
                tp = child.get("type", "")
                # block_text for tight lists, paragraph for loose ones
                if tp in ("paragraph", "block_text"):
                    p = self.doc.add_paragraph()
                    hanging = Inches(0.25)
                    p.paragraph_format.left_indent = Inches(0.25 + level * 0.25) + hanging
                    p.paragraph_format.first_line_indent = -hanging
                    p.paragraph_format.space_before = Pt(1)
                    p.paragraph_format.space_after = Pt(1)
                    if first:
                        if item.get("type") == "task_list_item":
                            prefix = "☑ " if (item.get("attrs") or {}).get("checked") else "☐ "
                        elif ordered:
                            prefix = f"{counter}. "
                            counter += 1
                        else:
                            prefix = bullets[min(level, len(bullets) - 1)] + " "
                        p.add_run(prefix)
                        first = False
                    self._add_inline(p, child.get("children", []))
                elif tp == "list":
                    self._add_list(child, level + 1)
                elif tp == "block_code":
                    self._add_code_block(child.get("raw", ""))

    # -- dispatch ------------------------------------------------------------
    def render_tokens(self, tokens: list):
        for tok in tokens:
            self._render_token(tok)

    def _render_token(self, tok: dict):
        tp = tok.get("type", "")
        attrs = tok.get("attrs") or {}

        if tp == "heading":
            self.doc.add_heading(flatten_text(tok.get("children", [])), level=min(attrs.get("level", 1), 6))
        elif tp == "paragraph":
            p = self.doc.add_paragraph()
            self._add_inline(p, tok.get("children", []))
        elif tp == "block_code":
            self._add_code_block(tok.get("raw", ""))
        elif tp == "table":
            self._handle_table(tok)
        elif tp == "list":
            self._add_list(tok)
        elif tp == "block_quote":
            self._add_blockquote(tok.get("children", []))
        elif tp == "thematic_break":
            self.doc.add_page_break()
        elif tp in ("blank_line", "block_html"):
            pass
        elif isinstance(tok.get("children"), list):
            self.render_tokens(tok["children"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def flatten_text(tokens) -> str:
    """Plain text of a token tree."""
    if isinstance(tokens, str):
        return tokens
    if isinstance(tokens, dict):
        if "children" in tokens:
            return flatten_text(tokens["children"])
        return tokens.get("raw", "")
    if isinstance(tokens, list):
        return "".join(flatten_text(t) for t in tokens)
    return ""


def escape_xml(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def table_align(aligns: list, idx: int):
    value = (aligns[idx] if idx < len(aligns) else None) or ""
    if value == "center":
        return WD_ALIGN_PARAGRAPH.CENTER
    if value == "right":
        return WD_ALIGN_PARAGRAPH.RIGHT
    return WD_ALIGN_PARAGRAPH.LEFT


def image_fit(path):
    """(width, height) constrained to the A4 content area (1in margins, 85% height)."""
    max_w, max_h = 6.27, 9.69 * 0.85
    with Image.open(path) as img:
        w_px, h_px = img.size
        dpi = img.info.get("dpi", (96, 96))[0] or 96
    w_in, h_in = w_px / dpi, h_px / dpi
    scale = min(1.0, max_w / w_in, max_h / h_in)
    return Inches(w_in * scale), Inches(h_in * scale)


def add_toc(doc, theme: DocxTheme):
    """Insert a TOC field that Word fills in when the document is opened."""
    doc.settings.element.append(parse_xml(f'<w:updateFields {nsdecls("w")} w:val="true"/>'))

    heading = doc.add_paragraph()
    run = heading.add_run("Table of Contents")
    run.bold = True
    run.font.size = Pt(16)
    run.font.name = theme.font_heading
    run.font.color.rgb = _rgb(theme.color_heading)

    p = doc.add_paragraph()
    for fragment in (
        '<w:fldChar w:fldCharType="begin"/>',
        '<w:instrText xml:space="preserve"> TOC \\o "1-3" \\h \\z \\u </w:instrText>',
        '<w:fldChar w:fldCharType="separate"/>',
        '<w:t>Right-click and select "Update Field" to generate the table of contents.</w:t>',
        '<w:fldChar w:fldCharType="end"/>',
    ):
        p._element.append(parse_xml(f'<w:r {nsdecls("w")}>{fragment}</w:r>'))
    doc.add_page_break()


def new_document():
    doc = Document()
    for section in doc.sections:
        section.top_margin = section.bottom_margin = Inches(1)
        section.left_margin = section.right_margin = Inches(1)
    return doc


# ---------------------------------------------------------------------------
# Conversion entry points
# ---------------------------------------------------------------------------
def markdown_to_docx(text: str, output_path, theme: str | None = DEFAULT_DOCX_THEME,
                     toc: bool = False, base_dir=None, style_overrides: dict | None = None,
                     title: str | None = None) -> Path:
    """Render Markdown *text* into a .docx at *output_path*.

    Style precedence: theme preset < *style_overrides* < inline docx-style comment.
    Relative image paths resolve against *base_dir*.
    """
    title = title or front_matter_title(text)
    content = strip_front_matter(text)
    inline_style = parse_docx_style(content)
    content = strip_docx_style_comment(content)
    docx_theme = get_theme(theme).with_overrides({**(style_overrides or {}), **inline_style})

    tokens = mistune.create_markdown(
        renderer="ast", plugins=["table", "strikethrough", "task_lists"]
    )(content)

    doc = new_document()
    with tempfile.TemporaryDirectory() as temp_dir:
        builder = DocxBuilder(doc, docx_theme, base_dir, temp_dir)
        if title is None:
            for tok in tokens:
                if tok.get("type") == "heading" and (tok.get("attrs") or {}).get("level") == 1:
                    title = flatten_text(tok.get("children", []))
                    break
        if title:
            doc.core_properties.title = title
        if toc:
            add_toc(doc, docx_theme)
        builder.render_tokens(tokens)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        doc.save(str(output_path))
    logger.info("Wrote DOCX %s (%d images)", output_path, builder.image_count)
    return output_path


def text_to_docx(text: str, output_path, theme: str | None = DEFAULT_DOCX_THEME) -> Path:
    """Plain text: one paragraph per blank-line separated block."""
    doc = new_document()
    DocxBuilder(doc, get_theme(theme), None, tempfile.gettempdir())
    for block in re.split(r"\n\s*\n", text.replace("\r\n", "\n")):
        if not block.strip():
            continue
        p = doc.add_paragraph()
        for i, line in enumerate(block.strip().split("\n")):
            if i:
                p.add_run().add_break()
            p.add_run(line)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    doc.save(str(output_path))
    return output_path


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------
def main():
    parser = argparse.ArgumentParser(description="Convert Markdown to DOCX (no Pandoc required)")
    parser.add_argument("input", help="Input Markdown file")
    parser.add_argument("output", help="Output DOCX file")
    parser.add_argument("--theme", choices=sorted(DOCX_THEMES), default=DEFAULT_DOCX_THEME)
    parser.add_argument("--toc", action="store_true", help="Insert Table of Contents")
    parser.add_argument("--title", default=None, help="Document title property")
    parser.add_argument("--style", dest="style_file", default=None,
                        help="Style file (key: value lines, same keys as the docx-style comment)")
    for key in ("font_body", "font_heading", "font_code", "font_size", "color_heading",
                "color_body", "table_header_bg", "table_border", "code_bg"):
        parser.add_argument("--" + key.replace("_", "-"), dest=key, default=None)
    parser.add_argument("--no-banded-rows", dest="table_banded_rows",
                        action="store_const", const="false", default=None,
                        help="Disable alternating row shading")
    args = parser.parse_args()

    source = Path(args.input)
    if not source.is_file():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    overrides = parse_style_file(args.style_file) if args.style_file else {}
    overrides.update({k: getattr(args, k) for k in STYLE_KEYS if getattr(args, k, None) is not None})

    print(f"Reading: {source}")
    out = markdown_to_docx(source.read_text(encoding="utf-8"), args.output, theme=args.theme,
                           toc=args.toc, base_dir=source.parent, style_overrides=overrides,
                           title=args.title)
    print(f"Saved: {out}")


if __name__ == "__main__":
    main()
