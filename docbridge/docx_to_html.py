#!/usr/bin/env python3
"""
DOCX to styled HTML, Markdown and plain text.

HTML conversion runs mammoth with a style map built from the document's own
styles, then injects the CSS extracted from styles.xml and direct formatting
so the result renders like the Word original.

Usage:
    python -m docbridge.docx_to_html input.docx output.html
    python -m docbridge.docx_to_html input.docx output.md --format md
    python -m docbridge.docx_to_html input.docx output.txt --format txt
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
import zipfile
from dataclasses import dataclass, field
from pathlib import Path

import mammoth
from bs4 import BeautifulSoup
from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table

from .errors import DocxFormatError
from .extractor import ExtractionResult, extract_styles
from .html_inject import inject_styles
from .html_to_md import html_to_markdown

logger = logging.getLogger(__name__)

# Word built-ins that deserve semantic elements; tried before the document map.
WORD_STYLE_MAP = [
    "p[style-name='Title'] => h1.title:fresh",
    "p[style-name='Subtitle'] => p.subtitle:fresh",
    "p[style-name='Quote'] => blockquote > p:fresh",
    "p[style-name='Intense Quote'] => blockquote.intense > p:fresh",
    "r[style-name='Strong'] => strong",
    "r[style-name='Emphasis'] => em",
    "r[style-name='Hyperlink'] => span.hyperlink",
    "p[style-name='Code'] => pre.code:separator('\\n')",
    "r[style-name='Code Char'] => code",
    "u => u",
    "strike => del",
]


@dataclass
class DocxHtmlResult:
    html: str
    extraction: ExtractionResult
    messages: list[str] = field(default_factory=list)


def build_style_map(extraction: ExtractionResult) -> str:
    return "\n".join(WORD_STYLE_MAP + extraction.style_map)


def _drop_images(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for img in soup.find_all("img"):
        img.decompose()
    return str(soup)


def _mammoth_html(source: Path, style_map: str) -> tuple[str, list[str]]:
    with open(source, "rb") as f:
        result = mammoth.convert_to_html(f, style_map=style_map)
    messages = []
    for msg in result.messages:
        logger.warning("mammoth: %s", msg.message)
        messages.append(f"{msg.type}: {msg.message}")
    return result.value, messages


def docx_to_html(source, include_images: bool = True, title: str | None = None,
                 east_asian_font: str = "Microsoft YaHei") -> DocxHtmlResult:
    """Convert *source* to a complete, style-injected HTML document."""
    source = Path(source)
    extraction = extract_styles(source, include_inline=True, include_print=True)
    body, messages = _mammoth_html(source, build_style_map(extraction))
    if not include_images:
        body = _drop_images(body)
    html = inject_styles(body, extraction.css, title=title or source.stem,
                         east_asian_font=east_asian_font)
    return DocxHtmlResult(html=html, extraction=extraction, messages=messages)


def docx_to_markdown(source) -> str:
    source = Path(source)
    with open(source, "rb") as f:
        result = mammoth.convert_to_html(f, style_map="\n".join(WORD_STYLE_MAP))
    for msg in result.messages:
        logger.debug("mammoth: %s", msg.message)
    return html_to_markdown(result.value)


def open_document(source):
    try:
        return Document(str(source))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError) as e:
        raise DocxFormatError(f"Not a readable DOCX file: {Path(source).name}") from e


def docx_to_text(source) -> str:
    """Paragraph and table text in body order; table cells are tab-separated."""
    doc = open_document(source)
    lines = []
    for block in doc.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                lines.append("\t".join(cell.text.strip() for cell in row.cells))
            lines.append("")
        else:
            lines.append(block.text)
    text = re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()
    return text + "\n" if text else ""


def docx_metadata(source) -> dict:
    props = open_document(source).core_properties
    meta = {
        "title": props.title,
        "author": props.author,
        "subject": props.subject,
        "keywords": props.keywords,
        "created": props.created.isoformat() if props.created else None,
        "modified": props.modified.isoformat() if props.modified else None,
        "lastModifiedBy": props.last_modified_by,
        "revision": props.revision,
    }
    return {k: v for k, v in meta.items() if v not in (None, "")}


def main():
    parser = argparse.ArgumentParser(description="Convert DOCX to styled HTML, Markdown or text")
    parser.add_argument("input", help="Input .docx file")
    parser.add_argument("output", help="Output file")
    parser.add_argument("--format", choices=["html", "md", "txt"], default="html")
    parser.add_argument("--no-images", action="store_true", help="Drop embedded images")
    args = parser.parse_args()

    source = Path(args.input)
    if not source.is_file():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    print(f"Reading: {source}")
    if args.format == "html":
        result = docx_to_html(source, include_images=not args.no_images)
        content = result.html
        print(f"Styles: {len(result.extraction.styles)}, messages: {len(result.messages)}")
    elif args.format == "md":
        content = docx_to_markdown(source)
    else:
        content = docx_to_text(source)
    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    print(f"Saved: {out}")


if __name__ == "__main__":
    main()
