"""
MCP server exposing the converters as tools.

Every tool returns a JSON string; failures come back as ``{"error": ...}``
with absolute paths masked.  Run with ``docbridge serve`` (stdio transport).
"""

from __future__ import annotations

import json
import logging

from fastmcp import FastMCP

from .config import configure_logging, get_settings
from .convert import Converter
from .errors import DocBridgeError
from .extractor import extract_styles
from .paths import sanitize_error_message
from .planner import plan_conversion as build_plan

logger = logging.getLogger(__name__)

mcp = FastMCP("docbridge")


def _converter() -> Converter:
    return Converter(get_settings())


def _error(tool: str, exc: Exception) -> str:
    if isinstance(exc, (DocBridgeError, OSError)):
        logger.warning("%s failed: %s", tool, exc)
    else:
        logger.exception("%s failed unexpectedly", tool)
    return json.dumps({
        "success": False,
        "error": sanitize_error_message(str(exc)),
        "type": type(exc).__name__,
    })


def _ok(payload: dict) -> str:
    return json.dumps(payload, ensure_ascii=False, default=str)


def read_document(file_path: str, preserve_formatting: bool = False,
                  extract_metadata: bool = False) -> str:
    """Read a DOCX, Markdown, HTML or text file.

    Args:
        file_path: File to read
        preserve_formatting: For DOCX, return styled HTML instead of plain text
        extract_metadata: Include size and core document properties
    """
    try:
        return _ok(_converter().read_document(file_path, preserve_formatting, extract_metadata))
    except Exception as e:
        return _error("read_document", e)


def write_document(content: str, output_path: str, format: str | None = None,
                   theme: str | None = None) -> str:
    """Write text content as DOCX, HTML, Markdown or plain text.

    Args:
        content: Text (or HTML) to write
        output_path: Destination file; relative paths go under OUTPUT_DIR
        format: Output format, taken from the extension when omitted
        theme: HTML or DOCX theme name
    """
    try:
        conv = _converter()
        target = conv.guard.resolve_output(output_path, "document", format or "txt")
        path = conv.write_document(content, target, format, theme)
        return _ok({"success": True, "outputPath": str(path)})
    except Exception as e:
        return _error("write_document", e)


def convert_document(input_path: str, target_format: str, output_path: str | None = None,
                     theme: str | None = None, include_images: bool = True,
                     preserve_formatting: bool = True) -> str:
    """Convert between docx, markdown, html and txt (pdf yields render instructions).

    Args:
        input_path: Source file
        target_format: docx | markdown | html | txt | pdf
        output_path: Destination; auto-named in OUTPUT_DIR when omitted
        theme: Theme for Markdown/text rendering
        include_images: Keep embedded DOCX images
        preserve_formatting: Keep page CSS when converting HTML to Markdown
    """
    try:
        result = _converter().convert(input_path, target_format, output_path, theme=theme,
                                      include_images=include_images,
                                      include_css=preserve_formatting and target_format != "txt")
        return _ok(result.to_dict())
    except Exception as e:
        return _error("convert_document", e)


def convert_docx_to_pdf(docx_path: str, output_path: str | None = None,
                        include_images: bool = True) -> str:
    """Prepare a DOCX for PDF rendering.

    Writes the fully styled HTML to a private temp file and returns the
    browser_navigate / browser_pdf_save / process_pdf_post_conversion calls
    that finish the job.
    """
    try:
        result = _converter().convert(docx_path, "pdf", output_path,
                                      include_images=include_images)
        return _ok(result.to_dict())
    except Exception as e:
        return _error("convert_docx_to_pdf", e)


def convert_markdown_to_html(markdown_path: str, output_path: str | None = None,
                             theme: str | None = None, include_toc: bool = False,
                             title: str | None = None) -> str:
    """Render Markdown to a themed HTML page (default, github, academic, modern)."""
    try:
        result = _converter().convert(markdown_path, "html", output_path, theme=theme,
                                      toc=include_toc, title=title)
        return _ok(result.to_dict())
    except Exception as e:
        return _error("convert_markdown_to_html", e)


def convert_markdown_to_docx(markdown_path: str, output_path: str | None = None,
                             theme: str | None = None) -> str:
    """Build a Word document from Markdown (default, professional, academic, modern)."""
    try:
        result = _converter().convert(markdown_path, "docx", output_path, theme=theme)
        return _ok(result.to_dict())
    except Exception as e:
        return _error("convert_markdown_to_docx", e)


def convert_markdown_to_pdf(markdown_path: str, output_path: str | None = None,
                            theme: str | None = None, include_toc: bool = False) -> str:
    """Prepare Markdown for PDF rendering; see convert_docx_to_pdf."""
    try:
        result = _converter().convert(markdown_path, "pdf", output_path, theme=theme,
                                      toc=include_toc)
        return _ok(result.to_dict())
    except Exception as e:
        return _error("convert_markdown_to_pdf", e)


def convert_html_to_markdown(html_path: str, output_path: str | None = None,
                             include_css: bool = False) -> str:
    """Convert HTML to Markdown, optionally keeping the page CSS in a comment."""
    try:
        result = _converter().convert(html_path, "markdown", output_path,
                                      include_css=include_css)
        return _ok(result.to_dict())
    except Exception as e:
        return _error("convert_html_to_markdown", e)


def plan_conversion(source_format: str, target_format: str, source_file: str | None = None,
                    preserve_styles: bool = True, include_images: bool = True,
                    theme: str | None = None) -> str:
    """Plan the tool calls for a conversion without running it."""
    try:
        plan = build_plan(source_format, target_format, source_file, preserve_styles,
                          include_images, theme)
        return _ok(plan.to_dict())
    except Exception as e:
        return _error("plan_conversion", e)


def process_pdf_post_conversion(rendered_pdf_path: str, target_path: str | None = None) -> str:
    """Move the PDF saved by the browser to its final location."""
    try:
        path = _converter().finalize_pdf(rendered_pdf_path, target_path)
        return _ok({"success": True, "outputPath": str(path)})
    except Exception as e:
        return _error("process_pdf_post_conversion", e)


def extract_docx_styles(docx_path: str, include_inline: bool = True) -> str:
    """Styles, direct formatting, fonts, theme colours and the generated CSS of a DOCX."""
    try:
        conv = _converter()
        source = conv.guard.validate_existing(docx_path)
        return _ok(extract_styles(source, include_inline=include_inline).summary())
    except Exception as e:
        return _error("extract_docx_styles", e)


TOOLS = [
    read_document,
    write_document,
    convert_document,
    convert_docx_to_pdf,
    convert_markdown_to_html,
    convert_markdown_to_docx,
    convert_markdown_to_pdf,
    convert_html_to_markdown,
    plan_conversion,
    process_pdf_post_conversion,
    extract_docx_styles,
]

for _tool in TOOLS:
    mcp.tool()(_tool)


def run():
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting docbridge MCP server (output dir %s)", settings.output_dir)
    mcp.run(transport="stdio")
