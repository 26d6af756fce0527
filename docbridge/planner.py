"""
Conversion routing: which tool(s) turn format A into format B.

``plan_conversion`` answers with an ordered list of tool calls (including the
external browser steps a PDF target needs) instead of converting anything.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

SOURCE_FORMATS = ("docx", "markdown", "html", "txt")
TARGET_FORMATS = ("docx", "markdown", "html", "txt", "pdf")
KNOWN_FORMATS = ("docx", "doc", "markdown", "html", "txt", "pdf")

_ALIASES = {"md": "markdown", "htm": "html", "text": "txt"}

DIRECT_CONVERSIONS = {
    "docx": {
        "pdf": "convert_docx_to_pdf",
        "html": "convert_document",
        "markdown": "convert_document",
        "txt": "convert_document",
    },
    "markdown": {
        "html": "convert_markdown_to_html",
        "docx": "convert_markdown_to_docx",
        "pdf": "convert_markdown_to_pdf",
        "txt": "convert_document",
    },
    "html": {
        "markdown": "convert_html_to_markdown",
        "docx": "convert_document",
        "txt": "convert_document",
        "pdf": "convert_document",
    },
    "txt": {
        "html": "convert_document",
        "markdown": "convert_document",
        "docx": "convert_document",
    },
}

MULTI_STEP_PATHS = {
    "txt": {"pdf": ["txt", "html", "pdf"]},
}

INPUT_PARAMS = {
    "convert_docx_to_pdf": "docx_path",
    "convert_markdown_to_html": "markdown_path",
    "convert_markdown_to_docx": "markdown_path",
    "convert_markdown_to_pdf": "markdown_path",
    "convert_html_to_markdown": "html_path",
    "convert_document": "input_path",
}

PDF_PAGE_OPTIONS = {
    "format": "A4",
    "printBackground": True,
    "margin": {"top": "0.75in", "right": "0.75in", "bottom": "0.75in", "left": "0.75in"},
}


def normalize_format(value: str) -> str:
    fmt = (value or "").strip().lower().lstrip(".")
    return _ALIASES.get(fmt, fmt)


def format_of(path) -> str:
    return normalize_format(Path(str(path)).suffix)


def pdf_instructions(html_path, pdf_path) -> list[dict]:
    """Calls for an external headless browser to print *html_path* to *pdf_path*."""
    html_path, pdf_path = Path(html_path), Path(pdf_path)
    rendered = pdf_path.with_name(pdf_path.stem + "_render.pdf")
    return [
        {"tool": "browser_navigate", "arguments": {"url": html_path.resolve().as_uri()}},
        {"tool": "browser_pdf_save",
         "arguments": {"filename": str(rendered), **PDF_PAGE_OPTIONS}},
        {"tool": "process_pdf_post_conversion",
         "arguments": {"rendered_pdf_path": str(rendered), "target_path": str(pdf_path)}},
    ]


@dataclass
class PlanStep:
    step_number: int
    tool: str
    description: str
    input_format: str
    output_format: str
    input_param: str | None = None
    parameters: dict = field(default_factory=dict)
    notes: str | None = None
    external: bool = False


@dataclass
class ConversionPlan:
    success: bool
    source_format: str
    target_format: str
    path: list[str] = field(default_factory=list)
    steps: list[PlanStep] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total_steps"] = self.total_steps
        return data


def find_path(source: str, target: str) -> list[str]:
    if target in DIRECT_CONVERSIONS.get(source, {}):
        return [source, target]
    if target in MULTI_STEP_PATHS.get(source, {}):
        return list(MULTI_STEP_PATHS[source][target])
    if "html" not in (source, target):
        if "html" in DIRECT_CONVERSIONS.get(source, {}) and target in DIRECT_CONVERSIONS["html"]:
            return [source, "html", target]
    return []


def _step_parameters(tool: str, target: str, preserve_styles: bool, include_images: bool,
                     theme: str | None) -> dict:
    if tool == "convert_markdown_to_html":
        return {"theme": theme or "github", "include_toc": False}
    if tool == "convert_markdown_to_docx":
        return {"theme": theme or "professional"}
    if tool == "convert_markdown_to_pdf":
        return {"theme": theme or "github"}
    if tool == "convert_html_to_markdown":
        return {"include_css": preserve_styles}
    if tool == "convert_docx_to_pdf":
        return {"include_images": include_images}
    return {"target_format": target, "preserve_formatting": preserve_styles,
            "include_images": include_images}


def _describe(source: str, target: str) -> str:
    if source == "docx" and target == "html":
        return "DOCX to HTML with styles extracted from the document and enforced in CSS"
    if target == "pdf":
        return f"{source.upper()} to print-ready HTML, rendered to PDF by a headless browser"
    return f"{source.upper()} to {target.upper()}"


def _browser_steps(first_number: int) -> list[PlanStep]:
    note = "Use the html_path and instructions returned by the previous step"
    return [
        PlanStep(first_number, "browser_navigate", "Open the generated HTML file",
                 "html", "html", parameters={"url": "file://<html_path>"}, notes=note,
                 external=True),
        PlanStep(first_number + 1, "browser_pdf_save", "Print the page to PDF",
                 "html", "pdf", parameters=dict(PDF_PAGE_OPTIONS), notes=note, external=True),
        PlanStep(first_number + 2, "process_pdf_post_conversion",
                 "Move the rendered PDF to its final location", "pdf", "pdf",
                 input_param="rendered_pdf_path", notes=note),
    ]


def _recommendations(source: str, target: str, path: list[str]) -> tuple[list[str], list[str]]:
    recs, warnings = [], []
    if source == "docx" and target in ("html", "pdf"):
        recs.append("Document styles are extracted from styles.xml and forced with !important")
    if source == "markdown" and target in ("html", "pdf"):
        recs.append("Themes: default, github, academic, modern")
    if source == "docx" and target == "markdown":
        recs.append("Complex Word formatting is simplified to what Markdown can express")
    if target == "pdf":
        recs.append("PDF output needs a browser automation server for the final render")
        warnings.append("PDF rendering depends on an external headless browser")
    if len(path) > 2:
        warnings.append("Multi-step conversion; some formatting may be lost between steps")
    if source == "html" and target == "docx":
        warnings.append("Not every CSS rule has a Word equivalent")
    return recs, warnings


def plan_conversion(source_format: str, target_format: str, source_file=None,
                    preserve_styles: bool = True, include_images: bool = True,
                    theme: str | None = None) -> ConversionPlan:
    """Plan the tool calls needed to convert *source_format* into *target_format*."""
    source = normalize_format(source_format)
    target = normalize_format(target_format)

    if source not in SOURCE_FORMATS:
        reason = "unsupported source format" if source in KNOWN_FORMATS else "unknown format"
        return ConversionPlan(False, source, target, error=f"{reason}: {source or '(empty)'}")
    if target not in TARGET_FORMATS:
        return ConversionPlan(False, source, target, error=f"unsupported target format: {target}")
    if source == target:
        return ConversionPlan(True, source, target, path=[source],
                              recommendations=["The file is already in the requested format"])

    path = find_path(source, target)
    if not path:
        return ConversionPlan(False, source, target,
                              error=f"no conversion path from {source} to {target}")

    steps: list[PlanStep] = []
    for i, (src, dst) in enumerate(zip(path, path[1:]), start=1):
        tool = DIRECT_CONVERSIONS[src][dst]
        params = _step_parameters(tool, dst, preserve_styles, include_images, theme)
        input_param = INPUT_PARAMS.get(tool, "input_path")
        if i == 1 and source_file:
            params[input_param] = str(source_file)
        elif i > 1:
            params[input_param] = "<output_path of step %d>" % (i - 1)
        steps.append(PlanStep(i, tool, _describe(src, dst), src, dst, input_param, params))

    if target == "pdf":
        steps.extend(_browser_steps(len(steps) + 1))

    recs, warnings = _recommendations(source, target, path)
    logger.debug("Planned %s -> %s via %s (%d steps)", source, target, path, len(steps))
    return ConversionPlan(True, source, target, path, steps, recs, warnings)
