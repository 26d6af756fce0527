"""HTML (and plain text) to Markdown, plus the small text -> HTML helper."""

from __future__ import annotations

import html as html_lib
import re

from bs4 import BeautifulSoup, Comment
from markdownify import markdownify as md

NOISE_TAGS = ["script", "style", "nav", "form", "noscript", "iframe", "button"]


def collect_css(soup) -> str:
    return "\n\n".join(s.get_text().strip() for s in soup.find_all("style") if s.get_text().strip())


def clean_html(soup):
    for tag in soup.find_all(NOISE_TAGS):
        tag.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    # Empty paragraphs become stray blank lines
    for p in soup.find_all("p"):
        if not p.get_text(strip=True) and not p.find("img"):
            p.decompose()
    return soup


def html_to_markdown(html: str, include_css: bool = False) -> str:
    """Markdown for *html*; with *include_css* the page CSS is kept in a comment."""
    soup = BeautifulSoup(html or "", "html.parser")
    css = collect_css(soup) if include_css else ""
    clean_html(soup)
    root = soup.body or soup
    text = md(str(root), heading_style="atx", bullets="-", strip=["span"])
    text = re.sub(r"\n{3,}", "\n\n", text).strip()
    if css:
        text = "<!--\n" + css.replace("-->", "-- >") + "\n-->\n\n" + text
    return text + "\n" if text else ""


def text_to_html_fragment(text: str) -> str:
    """Blank-line separated blocks become paragraphs, single newlines become <br>."""
    blocks = [b for b in re.split(r"\n\s*\n", text.replace("\r\n", "\n")) if b.strip()]
    return "\n".join(
        "<p>" + "<br/>".join(html_lib.escape(line) for line in block.strip().split("\n")) + "</p>"
        for block in blocks
    )
