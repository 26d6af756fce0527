"""
Merge CSS into an HTML document and make every declaration win.

``inject_styles`` takes the HTML produced by a converter (a fragment or a
full document) plus generated CSS and returns one complete HTML5 document:

    RAW_HTML -> STYLES_EXTRACTED -> STYLES_MERGED -> IMPORTANT_FORCED
             -> VALIDATED -> OK | FORCE_INJECTED -> FINAL

All existing ``<style>`` blocks are lifted out and merged with the new CSS
into a single ``<style>`` in ``<head>``.  Each declaration, in the stylesheet
and in ``style=""`` attributes, gets ``!important`` so that browser defaults
and leftover Word inline styles cannot override the document styles.  If the
result does not look styled, the built-in Word stylesheet is forced in.
"""

from __future__ import annotations

import logging
import re
from enum import Enum

from bs4 import BeautifulSoup, Doctype

logger = logging.getLogger(__name__)

WORD_FONT_MARKERS = ("Calibri", "Microsoft YaHei")

_SKELETON = (
    "<!DOCTYPE html>\n"
    '<html lang="en">\n<head>\n<meta charset="utf-8"/>\n'
    '<meta name="viewport" content="width=device-width, initial-scale=1"/>\n'
    "</head>\n<body>\n</body>\n</html>\n"
)

ULTIMATE_WORD_CSS = """\
@page {
  size: A4;
  margin: 2.54cm 3.18cm;
}
html, body {
  font-family: "Calibri", "__EAST_ASIAN_FONT__", "SimSun", Arial, sans-serif;
  font-size: 11pt;
  line-height: 1.15;
  color: #000000;
  background: #FFFFFF;
}
body {
  margin: 0;
  padding: 20pt;
}
p {
  margin: 0 0 8pt 0;
}
h1, h2, h3, h4, h5, h6 {
  font-family: "Calibri Light", "Calibri", "__EAST_ASIAN_FONT__", Arial, sans-serif;
  font-weight: bold;
  color: #2F5496;
  margin: 12pt 0 6pt 0;
  page-break-after: avoid;
}
h1 { font-size: 18pt; }
h2 { font-size: 16pt; }
h3 { font-size: 14pt; }
h4 { font-size: 12pt; }
h5 { font-size: 11pt; }
h6 { font-size: 10pt; }
.title {
  font-size: 28pt;
  color: #000000;
  margin-bottom: 12pt;
}
.subtitle {
  font-size: 15pt;
  color: #5A5A5A;
}
strong, b {
  font-weight: bold;
}
em, i {
  font-style: italic;
}
a {
  color: #0563C1;
  text-decoration: underline;
}
ul, ol {
  margin: 0 0 8pt 0;
  padding-left: 36pt;
}
li {
  margin: 0;
}
table {
  border-collapse: collapse;
  width: 100%;
  margin: 0 0 8pt 0;
}
td, th {
  border: 0.5pt solid #000000;
  padding: 4pt 5.4pt;
  vertical-align: top;
}
th {
  font-weight: bold;
}
blockquote {
  margin: 10pt 36pt;
  font-style: italic;
  color: #404040;
}
code, pre {
  font-family: "Consolas", "Courier New", monospace;
  font-size: 10pt;
}
img {
  max-width: 100%;
  height: auto;
}"""


class InjectionState(Enum):
    RAW_HTML = "RAW_HTML"
    STYLES_EXTRACTED = "STYLES_EXTRACTED"
    STYLES_MERGED = "STYLES_MERGED"
    IMPORTANT_FORCED = "IMPORTANT_FORCED"
    VALIDATED = "VALIDATED"
    OK = "OK"
    FORCE_INJECTED = "FORCE_INJECTED"
    FINAL = "FINAL"


# ---------------------------------------------------------------------------
# !important forcing
# ---------------------------------------------------------------------------
_IMPORTANT_RE = re.compile(r"!\s*important\s*$", re.IGNORECASE)
_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
# at-rules whose descriptors become invalid with !important
_NO_IMPORTANT_AT_RULES = ("@font-face", "@keyframes", "@-webkit-keyframes", "@counter-style",
                          "@property")


def _mark_important(declaration: str) -> str:
    stripped = declaration.rstrip()
    bare = _COMMENT_RE.sub("", stripped).strip()
    if not bare or ":" not in bare or _IMPORTANT_RE.search(bare):
        return declaration
    _, _, value = bare.partition(":")
    if not value.strip():
        return declaration
    return stripped + " !important" + declaration[len(stripped):]


def _force(css: str, inline: bool) -> str:
    out: list[str] = []
    segment: list[str] = []
    # one entry per open block: True when its declarations may be forced
    blocks: list[bool] = [True] if inline else []
    quote = None
    parens = 0
    i, n = 0, len(css)

    def flush(forced: bool):
        text = "".join(segment)
        segment.clear()
        out.append(_mark_important(text) if forced else text)

    while i < n:
        ch = css[i]
        if quote:
            segment.append(ch)
            if ch == "\\" and i + 1 < n:
                segment.append(css[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue
        if ch == "/" and css.startswith("/*", i):
            end = css.find("*/", i + 2)
            end = n if end == -1 else end + 2
            segment.append(css[i:end])
            i = end
            continue
        if ch in "\"'":
            quote = ch
        elif ch == "(":
            parens += 1
        elif ch == ")":
            parens = max(0, parens - 1)
        elif parens == 0 and ch == "{":
            prelude = _COMMENT_RE.sub("", "".join(segment)).strip().lower()
            parent_ok = blocks[-1] if blocks else True
            blocks.append(parent_ok and not prelude.startswith(_NO_IMPORTANT_AT_RULES))
            flush(False)
            out.append(ch)
            i += 1
            continue
        elif parens == 0 and ch in ";}":
            flush(bool(blocks) and blocks[-1])
            out.append(ch)
            if ch == "}" and blocks and not (inline and len(blocks) == 1):
                blocks.pop()
            i += 1
            continue
        segment.append(ch)
        i += 1
    flush(bool(blocks) and blocks[-1])
    return "".join(out)


def force_important(css: str) -> str:
    """Append ``!important`` to every declaration of a stylesheet (idempotent)."""
    return _force(css or "", inline=False)


def force_important_inline(style: str) -> str:
    """Same as force_important for the body of a ``style=""`` attribute."""
    return _force(style or "", inline=True)


# ---------------------------------------------------------------------------
# Document skeleton
# ---------------------------------------------------------------------------
def _has_doctype(soup) -> bool:
    return any(isinstance(node, Doctype) for node in soup.contents)


def _extract_style_blocks(soup) -> list[str]:
    blocks = []
    for tag in soup.find_all("style"):
        text = tag.get_text()
        if text.strip():
            blocks.append(text.strip())
        tag.decompose()
    return blocks


def _force_inline_styles(soup) -> int:
    count = 0
    for el in soup.find_all(style=True):
        el["style"] = force_important_inline(el["style"])
        count += 1
    return count


def _set_title(doc, title: str | None):
    head = doc.head
    existing = head.find("title")
    if existing is not None:
        if title and not existing.get_text(strip=True):
            existing.string = title
        return
    tag = doc.new_tag("title")
    tag.string = title or "Document"
    head.append(tag)


def _wrap_fragment(soup, title: str | None):
    doc = BeautifulSoup(_SKELETON, "html.parser")
    for node in list(soup.contents):
        if isinstance(node, Doctype):
            continue
        node = node.extract()
        if getattr(node, "name", None) == "head":
            for child in list(node.contents):
                doc.head.append(child.extract())
        else:
            doc.body.append(node)
    _set_title(doc, title)
    return doc


def ensure_skeleton(soup, title: str | None = None):
    """Return a soup with DOCTYPE, html, head (charset meta, title) and body."""
    html_tag = soup.find("html")
    if html_tag is None:
        return _wrap_fragment(soup, title)

    head = soup.find("head")
    if head is None:
        head = soup.new_tag("head")
        html_tag.insert(0, head)
    if soup.find("body") is None:
        body = soup.new_tag("body")
        for node in list(html_tag.contents):
            if node is not head:
                body.append(node.extract())
        html_tag.append(body)
    if head.find("meta", charset=True) is None:
        meta = soup.new_tag("meta", charset="utf-8")
        head.insert(0, meta)
    _set_title(soup, title)
    if not _has_doctype(soup):
        soup.insert(0, Doctype("html"))
    return soup


def _install_style(doc, css: str):
    if not css.strip():
        return
    tag = doc.new_tag("style")
    tag.string = "\n" + css.strip() + "\n"
    doc.head.append(tag)


# ---------------------------------------------------------------------------
# Validation & fallback
# ---------------------------------------------------------------------------
_STYLE_BLOCK_RE = re.compile(r"<style[^>]*>\s*[^<\s]", re.IGNORECASE)
_DOCTYPE_RE = re.compile(r"^\s*<!DOCTYPE\s+html", re.IGNORECASE)


def validate_html(html: str, font_markers=WORD_FONT_MARKERS) -> list[str]:
    """Problems that make *html* look unstyled; empty when it passes."""
    problems = []
    if not _STYLE_BLOCK_RE.search(html):
        problems.append("no style block")
    if not _DOCTYPE_RE.search(html):
        problems.append("no DOCTYPE")
    if font_markers and not any(marker in html for marker in font_markers):
        problems.append("no Word font")
    return problems


def word_stylesheet(east_asian_font: str = "Microsoft YaHei") -> str:
    return ULTIMATE_WORD_CSS.replace("__EAST_ASIAN_FONT__", east_asian_font)


def _rebuild_with_word_css(doc, merged_css: str, title: str | None,
                           east_asian_font: str, important: bool) -> str:
    fresh = BeautifulSoup(_SKELETON, "html.parser")
    old_title = doc.head.find("title") if doc.head else None
    _set_title(fresh, title or (old_title.get_text() if old_title else None))
    source = doc.body if doc.body is not None else doc
    for node in list(source.contents):
        fresh.body.append(node.extract())
    base = word_stylesheet(east_asian_font)
    if important:
        base = force_important(base)
    _install_style(fresh, base + ("\n\n" + merged_css if merged_css.strip() else ""))
    return str(fresh)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
def inject_styles_traced(html: str, css: str = "", *, title: str | None = None,
                         important: bool = True, font_markers=WORD_FONT_MARKERS,
                         east_asian_font: str = "Microsoft YaHei"):
    """inject_styles plus the list of states the document passed through."""
    trace = [InjectionState.RAW_HTML]
    soup = BeautifulSoup(html or "", "html.parser")

    existing = _extract_style_blocks(soup)
    trace.append(InjectionState.STYLES_EXTRACTED)

    merged = "\n\n".join(block for block in existing + [(css or "").strip()] if block)
    trace.append(InjectionState.STYLES_MERGED)

    if important:
        merged = force_important(merged)
        forced = _force_inline_styles(soup)
        logger.debug("Forced !important on %d inline style attributes", forced)
    trace.append(InjectionState.IMPORTANT_FORCED)

    doc = ensure_skeleton(soup, title)
    _install_style(doc, merged)
    output = str(doc)
    problems = validate_html(output, font_markers)
    trace.append(InjectionState.VALIDATED)

    if problems:
        logger.info("Styled HTML failed validation (%s), forcing Word stylesheet",
                    ", ".join(problems))
        output = _rebuild_with_word_css(doc, merged, title, east_asian_font, important)
        trace.append(InjectionState.FORCE_INJECTED)
    else:
        trace.append(InjectionState.OK)
    trace.append(InjectionState.FINAL)
    return output, trace


def inject_styles(html: str, css: str = "", **kwargs) -> str:
    """Return a complete HTML document with *css* merged and enforced."""
    output, _ = inject_styles_traced(html, css, **kwargs)
    return output
