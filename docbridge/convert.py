"""
File-level conversions between DOCX, Markdown, HTML, TXT and (planned) PDF.

``Converter`` ties the individual converters to the configured directories:
inputs are validated through a ``PathGuard``, outputs default to OUTPUT_DIR,
and PDF targets produce print-ready HTML plus browser instructions.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from bs4 import BeautifulSoup

from .config import get_settings
from .docx_to_html import docx_metadata, docx_to_html, docx_to_markdown, docx_to_text
from .errors import UnsupportedConversionError
from .html_inject import inject_styles
from .html_to_md import html_to_markdown, text_to_html_fragment
from .md_to_docx import markdown_to_docx, text_to_docx
from .md_to_html import markdown_to_html, render_markdown, theme_css
from .paths import PathGuard
from .planner import SOURCE_FORMATS, format_of, normalize_format, pdf_instructions

logger = logging.getLogger(__name__)

EXTENSIONS = {"markdown": "md", "html": "html", "txt": "txt", "docx": "docx", "pdf": "pdf"}

PAGE_CSS = "@page {\n  size: A4;\n  margin: 0.75in;\n}"


@dataclass
class ConversionResult:
    source_format: str
    target_format: str
    output_path: Path
    messages: list[str] = field(default_factory=list)
    html_path: Path | None = None
    instructions: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = {
            "success": True,
            "sourceFormat": self.source_format,
            "targetFormat": self.target_format,
            "outputPath": str(self.output_path),
        }
        if self.messages:
            data["messages"] = self.messages
        if self.html_path is not None:
            data["htmlPath"] = str(self.html_path)
            data["instructions"] = self.instructions
        return data


def html_to_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "head"]):
        tag.decompose()
    lines = [line.strip() for line in soup.get_text("\n").splitlines()]
    return "\n".join(line for line in lines if line) + "\n"


def looks_like_html(text: str) -> bool:
    return bool(BeautifulSoup(text, "html.parser").find())


class Converter:
    def __init__(self, settings=None, guard: PathGuard | None = None):
        self.settings = settings or get_settings()
        self.guard = guard or PathGuard.from_settings(self.settings)

    # -- reading / writing ---------------------------------------------------
    def read_document(self, path, preserve_formatting: bool = False,
                      extract_metadata: bool = False) -> dict:
        source = self.guard.validate_existing(path)
        fmt = format_of(source)
        metadata = None
        if fmt == "docx":
            if preserve_formatting:
                content = docx_to_html(source, east_asian_font=self.settings.EAST_ASIAN_FONT).html
            else:
                content = docx_to_text(source)
            if extract_metadata:
                metadata = docx_metadata(source)
        elif fmt in ("markdown", "html", "txt"):
            content = source.read_text(encoding="utf-8")
        else:
            raise UnsupportedConversionError(f"Cannot read {fmt or 'unknown'} files")

        result = {"path": str(source), "format": fmt, "content": content}
        if extract_metadata:
            stat = source.stat()
            result["metadata"] = {"size": stat.st_size, **(metadata or {})}
        return result

    def write_document(self, content: str, output_path, fmt: str | None = None,
                       theme: str | None = None) -> Path:
        target = self.guard.validate(output_path)
        fmt = normalize_format(fmt) if fmt else format_of(target)
        if fmt == "docx":
            target.parent.mkdir(parents=True, exist_ok=True)
            return text_to_docx(content, target, theme or self.settings.DEFAULT_DOCX_THEME)
        if fmt == "html":
            body = content if looks_like_html(content) else text_to_html_fragment(content)
            html = inject_styles(body, theme_css(theme or self.settings.DEFAULT_HTML_THEME),
                                 important=False, font_markers=())
            return self.guard.write_text(target, html)
        if fmt in ("markdown", "txt"):
            return self.guard.write_text(target, content)
        raise UnsupportedConversionError(f"Cannot write {fmt or 'unknown'} files")

    # -- conversion ----------------------------------------------------------
    def convert(self, input_path, target_format: str, output_path=None, *,
                theme: str | None = None, include_images: bool = True, toc: bool = False,
                include_css: bool = False, title: str | None = None) -> ConversionResult:
        """Convert *input_path* into *target_format*.

        PDF targets are not rendered here: the styled HTML is written to a
        private temp file and the result carries the browser calls to run.
        """
        source = self.guard.validate_existing(input_path)
        src = format_of(source)
        dst = normalize_format(target_format)
        if src not in SOURCE_FORMATS:
            raise UnsupportedConversionError(f"Unsupported source format: {src or 'unknown'}")
        if dst not in EXTENSIONS:
            raise UnsupportedConversionError(f"Unsupported target format: {dst or 'unknown'}")
        if src == dst:
            raise UnsupportedConversionError(f"{source.name} is already {dst}")

        target = self.guard.resolve_output(output_path, source.stem, EXTENSIONS[dst])
        logger.info("Converting %s (%s) -> %s", source.name, src, dst)
        opts = {"theme": theme, "include_images": include_images, "toc": toc,
                "include_css": include_css, "title": title}

        if dst == "pdf":
            html, messages = self.to_html(source, src, page_css=True, **opts)
            return self.stage_pdf(html, source.stem, target, src, messages)
        if dst == "html":
            html, messages = self.to_html(source, src, **opts)
            self.guard.write_text(target, html)
            return ConversionResult(src, dst, target, messages)
        if dst == "docx":
            self._to_docx(source, src, target, theme)
        elif dst == "markdown":
            self.guard.write_text(target, self._to_markdown(source, src, include_css))
        else:
            self.guard.write_text(target, self._to_text(source, src))
        return ConversionResult(src, dst, target)

    def to_html(self, source: Path, src: str, page_css: bool = False, *, theme=None,
                include_images=True, toc=False, include_css=False, title=None):
        extra_css = PAGE_CSS if page_css else ""
        if src == "docx":
            result = docx_to_html(source, include_images=include_images, title=title,
                                  east_asian_font=self.settings.EAST_ASIAN_FONT)
            html = inject_styles(result.html, extra_css) if extra_css else result.html
            return html, result.messages
        theme = theme or self.settings.DEFAULT_HTML_THEME
        text = source.read_text(encoding="utf-8")
        if src == "markdown":
            return markdown_to_html(text, theme=theme, toc=toc, custom_css=extra_css or None,
                                    title=title), []
        if src == "txt":
            return inject_styles(text_to_html_fragment(text), theme_css(theme) + extra_css,
                                 title=title or source.stem, important=False,
                                 font_markers=()), []
        return inject_styles(text, extra_css, title=title, important=False, font_markers=()), []

    def _to_docx(self, source: Path, src: str, target: Path, theme: str | None):
        theme = theme or self.settings.DEFAULT_DOCX_THEME
        text = source.read_text(encoding="utf-8")
        if src == "markdown":
            markdown_to_docx(text, target, theme=theme, base_dir=source.parent)
        elif src == "html":
            markdown_to_docx(html_to_markdown(text), target, theme=theme, base_dir=source.parent)
        else:
            text_to_docx(text, target, theme)

    def _to_markdown(self, source: Path, src: str, include_css: bool) -> str:
        if src == "docx":
            return docx_to_markdown(source)
        text = source.read_text(encoding="utf-8")
        if src == "html":
            return html_to_markdown(text, include_css=include_css)
        return text

    def _to_text(self, source: Path, src: str) -> str:
        if src == "docx":
            return docx_to_text(source)
        text = source.read_text(encoding="utf-8")
        if src == "markdown":
            return html_to_text(render_markdown(text))
        return html_to_text(text)

    # -- PDF -----------------------------------------------------------------
    def stage_pdf(self, html: str, stem: str, pdf_path: Path, src: str,
                  messages=None) -> ConversionResult:
        html_path = self.guard.secure_temp_path(stem, ".html")
        self.guard.write_text(html_path, html)
        return ConversionResult(src, "pdf", pdf_path, list(messages or []), html_path=html_path,
                                instructions=pdf_instructions(html_path, pdf_path))

    def finalize_pdf(self, rendered_pdf_path, target_path=None) -> Path:
        """Move a PDF produced by the browser into its final place."""
        rendered = self.guard.validate_existing(rendered_pdf_path)
        if target_path:
            target = self.guard.resolve_output(target_path, rendered.stem, "pdf")
        else:
            target = self.guard.resolve_output(None, rendered.stem.removesuffix("_render"), "pdf")
        if target == rendered:
            return target
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(rendered), str(target))
        logger.info("Moved rendered PDF to %s", target)
        return target
