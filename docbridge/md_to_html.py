#!/usr/bin/env python3
"""
Markdown to themed, self-contained HTML.

Uses mistune for parsing and the style-injection engine to assemble a full
HTML5 document around the rendered fragment.

Usage:
    python -m docbridge.md_to_html input.md output.html [--theme github] [--toc]
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path

import mistune
from bs4 import BeautifulSoup

from .html_inject import inject_styles

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Themes
# ---------------------------------------------------------------------------
_COMMON_CSS = """\
img { max-width: 100%; height: auto; }
table { border-collapse: collapse; margin: 1em 0; }
pre { overflow-x: auto; }
nav.toc ul { list-style: none; padding-left: 0; }
nav.toc li.toc-level-2 { padding-left: 1.5em; }
nav.toc li.toc-level-3 { padding-left: 3em; }
"""

THEMES = {
    "default": """\
body { font-family: Arial, Helvetica, sans-serif; font-size: 16px; line-height: 1.6;
       color: #333333; max-width: 860px; margin: 0 auto; padding: 2em; }
h1, h2, h3, h4, h5, h6 { color: #222222; margin-top: 1.4em; }
code { background: #F4F4F4; padding: 0.1em 0.3em; font-family: Consolas, monospace; }
pre { background: #F4F4F4; padding: 1em; }
th, td { border: 1px solid #CCCCCC; padding: 6px 10px; }
blockquote { border-left: 4px solid #CCCCCC; margin-left: 0; padding-left: 1em; color: #666666; }
a { color: #0066CC; }
""",
    "github": """\
body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
       font-size: 16px; line-height: 1.5; color: #24292F; max-width: 980px; margin: 0 auto;
       padding: 45px; }
h1, h2 { border-bottom: 1px solid #D0D7DE; padding-bottom: 0.3em; }
h1, h2, h3, h4, h5, h6 { margin-top: 24px; margin-bottom: 16px; font-weight: 600; }
code { background: rgba(175, 184, 193, 0.2); padding: 0.2em 0.4em; border-radius: 6px;
       font-family: ui-monospace, SFMono-Regular, Consolas, monospace; font-size: 85%; }
pre { background: #F6F8FA; padding: 16px; border-radius: 6px; }
pre code { background: transparent; padding: 0; }
th, td { border: 1px solid #D0D7DE; padding: 6px 13px; }
tr:nth-child(2n) { background: #F6F8FA; }
blockquote { border-left: 0.25em solid #D0D7DE; margin-left: 0; padding: 0 1em; color: #57606A; }
a { color: #0969DA; text-decoration: none; }
""",
    "academic": """\
body { font-family: "Times New Roman", Times, serif; font-size: 12pt; line-height: 1.8;
       color: #000000; max-width: 800px; margin: 0 auto; padding: 2.5em; text-align: justify; }
h1 { text-align: center; font-size: 18pt; }
h1, h2, h3, h4, h5, h6 { font-family: "Times New Roman", Times, serif; margin-top: 1.5em; }
code, pre { font-family: "Courier New", Courier, monospace; font-size: 10pt; }
pre { border: 1px solid #999999; padding: 0.8em; }
th, td { border-top: 1px solid #000000; border-bottom: 1px solid #000000; padding: 4px 8px; }
blockquote { margin: 1em 3em; font-style: italic; }
a { color: #000000; }
""",
    "modern": """\
body { font-family: "Inter", "Segoe UI", Roboto, sans-serif; font-size: 17px; line-height: 1.7;
       color: #1F2937; background: #FAFAFA; max-width: 820px; margin: 0 auto; padding: 3em 2em; }
h1, h2, h3, h4, h5, h6 { color: #111827; letter-spacing: -0.01em; margin-top: 1.6em; }
h1 { font-size: 2.4em; }
code { background: #EEF2FF; color: #4338CA; padding: 0.15em 0.4em; border-radius: 4px; }
pre { background: #111827; color: #F9FAFB; padding: 1.2em; border-radius: 8px; }
pre code { background: transparent; color: inherit; }
th { background: #F3F4F6; }
th, td { border-bottom: 1px solid #E5E7EB; padding: 10px 14px; text-align: left; }
blockquote { border-left: 4px solid #6366F1; margin-left: 0; padding: 0.5em 1.2em;
             background: #EEF2FF; }
a { color: #4F46E5; }
""",
}

DEFAULT_THEME = "github"


def theme_css(name: str | None) -> str:
    if name and name not in THEMES:
        logger.warning("Unknown theme %r, using %s", name, DEFAULT_THEME)
    return THEMES.get(name or DEFAULT_THEME, THEMES[DEFAULT_THEME]) + _COMMON_CSS


# ---------------------------------------------------------------------------
# Front matter
# ---------------------------------------------------------------------------
_FRONT_MATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)
_TITLE_LINE_RE = re.compile(r"^title:\s*(.+?)\s*$", re.MULTILINE)


def strip_front_matter(text: str) -> str:
    return _FRONT_MATTER_RE.sub("", text, count=1)


def front_matter_title(text: str) -> str | None:
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        return None
    title = _TITLE_LINE_RE.search(match.group(1))
    return title.group(1).strip("\"'") if title else None


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------
_SLUG_STRIP = re.compile(r"[^\w\- ]+", re.UNICODE)


def slugify(text: str) -> str:
    slug = _SLUG_STRIP.sub("", text.strip().lower())
    slug = re.sub(r"[\s_]+", "-", slug).strip("-")
    return slug or "section"


def add_heading_ids(soup, max_level: int = 3) -> list[tuple[int, str, str]]:
    """Give every heading an id; return (level, id, text) for the TOC."""
    seen: dict[str, int] = {}
    entries = []
    for heading in soup.find_all(re.compile(r"^h[1-6]$")):
        level = int(heading.name[1])
        text = heading.get_text(" ", strip=True)
        anchor = heading.get("id")
        if not anchor:
            base = slugify(text)
            count = seen.get(base, 0)
            seen[base] = count + 1
            anchor = base if count == 0 else f"{base}-{count}"
            heading["id"] = anchor
        if level <= max_level:
            entries.append((level, anchor, text))
    return entries


def build_toc(soup, entries) -> None:
    if not entries:
        return
    nav = soup.new_tag("nav", attrs={"class": "toc"})
    title = soup.new_tag("h2")
    title.string = "Table of Contents"
    nav.append(title)
    ul = soup.new_tag("ul")
    for level, anchor, text in entries:
        li = soup.new_tag("li", attrs={"class": f"toc-level-{level}"})
        link = soup.new_tag("a", href=f"#{anchor}")
        link.string = text
        li.append(link)
        ul.append(li)
    nav.append(ul)
    soup.insert(0, nav)


def render_markdown(text: str) -> str:
    md = mistune.create_markdown(
        escape=False,
        plugins=["table", "strikethrough", "task_lists", "footnotes"],
    )
    return md(text)


def markdown_to_html(text: str, theme: str | None = DEFAULT_THEME, toc: bool = False,
                     custom_css: str | None = None, title: str | None = None) -> str:
    """Render Markdown into a complete HTML document with the chosen theme."""
    title = title or front_matter_title(text)
    body = strip_front_matter(text)
    fragment = BeautifulSoup(render_markdown(body), "html.parser")
    entries = add_heading_ids(fragment)
    if title is None:
        first_h1 = fragment.find("h1")
        title = first_h1.get_text(" ", strip=True) if first_h1 else None
    if toc:
        build_toc(fragment, entries)

    css = theme_css(theme)
    if custom_css:
        css += "\n" + custom_css
    return inject_styles(str(fragment), css, title=title, important=False, font_markers=())


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------
def main():
    parser = argparse.ArgumentParser(description="Convert Markdown to themed HTML")
    parser.add_argument("input", help="Input Markdown file")
    parser.add_argument("output", help="Output HTML file")
    parser.add_argument("--theme", choices=sorted(THEMES), default=DEFAULT_THEME)
    parser.add_argument("--toc", action="store_true", help="Insert a table of contents")
    parser.add_argument("--css", dest="css_file", default=None, help="Extra CSS file to append")
    args = parser.parse_args()

    source = Path(args.input)
    if not source.is_file():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    print(f"Reading: {source}")
    custom_css = Path(args.css_file).read_text(encoding="utf-8") if args.css_file else None
    html = markdown_to_html(source.read_text(encoding="utf-8"), args.theme, args.toc, custom_css)
    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(html, encoding="utf-8")
    print(f"Saved: {out}")


if __name__ == "__main__":
    main()
