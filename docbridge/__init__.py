"""Style-preserving document conversion between DOCX, Markdown, HTML and text."""

from .errors import (
    DocBridgeError,
    DocxFormatError,
    OOXMLError,
    UnsafePathError,
    UnsupportedConversionError,
)
from .extractor import ExtractionResult, extract_styles
from .html_inject import force_important, inject_styles

__version__ = "0.3.0"

__all__ = [
    "DocBridgeError",
    "DocxFormatError",
    "ExtractionResult",
    "OOXMLError",
    "UnsafePathError",
    "UnsupportedConversionError",
    "extract_styles",
    "force_important",
    "inject_styles",
]
