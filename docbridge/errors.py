"""Exceptions raised by the conversion pipeline."""


class DocBridgeError(Exception):
    """Base error for every docbridge failure."""


class DocxFormatError(DocBridgeError):
    """The file is not a readable ZIP container."""


class OOXMLError(DocBridgeError):
    """The package is a ZIP but lacks the required WordprocessingML parts."""


class UnsafePathError(DocBridgeError):
    """A path escapes the allowed directories or is malformed."""


class UnsupportedConversionError(DocBridgeError):
    """No converter exists for the requested format pair."""
