"""
Read-only access to the parts of a DOCX package.

A DOCX file is a ZIP of XML parts.  Only ``word/document.xml`` is required;
styles, fonts, theme and relationships degrade to empty results when they are
missing or malformed.
"""

from __future__ import annotations

import logging
import mimetypes
import posixpath
import zipfile
import zlib
from dataclasses import dataclass
from io import BytesIO

from lxml import etree

from .errors import DocxFormatError, OOXMLError
from .units import named_or_hex_color

logger = logging.getLogger(__name__)

# OOXML namespaces
W = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
R = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
A = "http://schemas.openxmlformats.org/drawingml/2006/main"
MC = "http://schemas.openxmlformats.org/markup-compatibility/2006"
PKG_REL = "http://schemas.openxmlformats.org/package/2006/relationships"

IMAGE_REL_TYPE = R + "/image"

PART_DOCUMENT = "word/document.xml"
PART_STYLES = "word/styles.xml"
PART_FONT_TABLE = "word/fontTable.xml"
PART_THEME = "word/theme/theme1.xml"
PART_DOCUMENT_RELS = "word/_rels/document.xml.rels"


def qn(tag: str) -> str:
    """``"w:jc"`` -> ``"{http://...main}jc"``."""
    prefix, _, local = tag.partition(":")
    ns = {"w": W, "r": R, "a": A, "mc": MC}[prefix]
    return f"{{{ns}}}{local}"


def w_attr(el, name: str) -> str | None:
    """Value of the ``w:``-qualified attribute *name* on *el*, or None."""
    if el is None:
        return None
    return el.get(f"{{{W}}}{name}")


def w_child(el, name: str):
    if el is None:
        return None
    return el.find(f"{{{W}}}{name}")


def w_val(el, child: str) -> str | None:
    """``w:val`` of the direct child *child*."""
    return w_attr(w_child(el, child), "val")


@dataclass(frozen=True)
class Relationship:
    rel_id: str
    rel_type: str
    target: str
    external: bool = False


@dataclass(frozen=True)
class MediaPart:
    rel_id: str
    name: str
    content_type: str
    data: bytes


class DocxPackage:
    """Opens a DOCX package and hands out parsed XML parts."""

    def __init__(self, source):
        self._source = source
        self._parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            huge_tree=False,
            recover=False,
        )
        if isinstance(source, (bytes, bytearray)):
            source = BytesIO(source)
        try:
            self._zip = zipfile.ZipFile(source, "r")
        except zipfile.BadZipFile as e:
            raise DocxFormatError(f"Not a valid DOCX (ZIP) file: {e}") from e
        except FileNotFoundError as e:
            raise DocxFormatError(f"File not found: {self._source}") from e
        self._names = set(self._zip.namelist())

    # -- context manager -----------------------------------------------------
    def close(self):
        self._zip.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # -- raw access ----------------------------------------------------------
    def has_part(self, name: str) -> bool:
        return name in self._names

    def read_part(self, name: str) -> bytes | None:
        if name not in self._names:
            return None
        try:
            return self._zip.read(name)
        except (zipfile.BadZipFile, zlib.error) as e:
            raise DocxFormatError(f"Corrupt part '{name}' in package: {e}") from e

    def read_xml(self, name: str):
        """Parse an optional part; None (with a warning) when absent or broken."""
        try:
            data = self.read_part(name)
        except DocxFormatError as e:
            logger.warning("Skipping unreadable part %s: %s", name, e)
            return None
        if data is None:
            logger.debug("Part %s not present, skipping", name)
            return None
        try:
            return etree.fromstring(data, parser=self._parser)
        except etree.XMLSyntaxError as e:
            logger.warning("Skipping malformed part %s: %s", name, e)
            return None

    # -- required parts ------------------------------------------------------
    def document_body(self):
        """``w:body`` of the main document; raises OOXMLError when unusable."""
        data = self.read_part(PART_DOCUMENT)
        if data is None:
            raise OOXMLError(f"Required part '{PART_DOCUMENT}' is missing from the package")
        try:
            root = etree.fromstring(data, parser=self._parser)
        except etree.XMLSyntaxError as e:
            raise OOXMLError(f"XML syntax error in '{PART_DOCUMENT}': {e}") from e
        body = root.find(qn("w:body"))
        if body is None:
            raise OOXMLError(f"'{PART_DOCUMENT}' has no w:body element")
        return body

    # -- optional parts ------------------------------------------------------
    def style_elements(self) -> list:
        root = self.read_xml(PART_STYLES)
        if root is None:
            return []
        return root.findall(qn("w:style"))

    def relationships(self) -> dict[str, Relationship]:
        root = self.read_xml(PART_DOCUMENT_RELS)
        rels: dict[str, Relationship] = {}
        if root is None:
            return rels
        for rel in root.findall(f"{{{PKG_REL}}}Relationship"):
            rel_id = rel.get("Id")
            if not rel_id:
                continue
            rels[rel_id] = Relationship(
                rel_id=rel_id,
                rel_type=rel.get("Type", ""),
                target=rel.get("Target", ""),
                external=rel.get("TargetMode") == "External",
            )
        return rels

    def media(self, rels: dict[str, Relationship] | None = None) -> dict[str, MediaPart]:
        """Load every embedded image up front, keyed by relationship id."""
        if rels is None:
            rels = self.relationships()
        media: dict[str, MediaPart] = {}
        for rel in rels.values():
            if rel.rel_type != IMAGE_REL_TYPE or rel.external:
                continue
            name = posixpath.normpath(posixpath.join("word", rel.target)).lstrip("/")
            if rel.target.startswith("/"):
                name = rel.target.lstrip("/")
            try:
                data = self.read_part(name)
            except DocxFormatError as e:
                logger.warning("Skipping image %s: %s", name, e)
                continue
            if data is None:
                logger.warning("Image %s referenced by %s is missing", name, rel.rel_id)
                continue
            content_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
            media[rel.rel_id] = MediaPart(rel.rel_id, name, content_type, data)
        return media

    def fonts(self) -> dict[str, dict[str, str]]:
        root = self.read_xml(PART_FONT_TABLE)
        fonts: dict[str, dict[str, str]] = {}
        if root is None:
            return fonts
        for font in root.findall(qn("w:font")):
            name = w_attr(font, "name")
            if not name:
                continue
            info = {}
            for key in ("family", "charset", "pitch", "altName"):
                value = w_val(font, key)
                if value:
                    info[key] = value
            fonts[name] = info
        return fonts

    def theme_colors(self) -> dict[str, str]:
        """Theme palette as ``{role: "#RRGGBB"}`` (dk1, lt1, accent1, ...)."""
        root = self.read_xml(PART_THEME)
        colors: dict[str, str] = {}
        if root is None:
            return colors
        scheme = root.find(f".//{{{A}}}clrScheme")
        if scheme is None:
            return colors
        for role in scheme:
            if not isinstance(role.tag, str):
                continue
            for value_el in role:
                value = value_el.get("lastClr") or value_el.get("val")
                color = named_or_hex_color(value)
                if color:
                    colors[etree.QName(role).localname] = color
                break
        return colors
