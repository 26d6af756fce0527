"""
File-system access restricted to a set of allowed directories.

Tools receive paths from a model, so every read and write goes through
``PathGuard``: control characters and ``..`` components are rejected and the
resolved path must sit under one of the allowed roots.
"""

from __future__ import annotations

import logging
import re
import secrets
from datetime import datetime
from pathlib import Path

from .errors import UnsafePathError

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_ABS_PATH_RE = re.compile(r"(?:[A-Za-z]:\\|/)(?:[^\s/\\:*?\"<>|]+[/\\])+[^\s/\\:*?\"<>|]*")


def sanitize_error_message(message: str) -> str:
    """Mask absolute paths so error payloads do not leak the directory layout."""

    def _mask(match):
        name = re.split(r"[/\\]", match.group(0).rstrip("/\\"))[-1]
        return f"<path>/{name}" if name else "<path>"

    return _ABS_PATH_RE.sub(_mask, str(message))


class PathGuard:
    """Validates paths against *allowed_dirs* and performs the actual I/O."""

    def __init__(self, allowed_dirs, output_dir, temp_dir):
        self.allowed_dirs = [Path(d).expanduser().resolve() for d in allowed_dirs]
        self.output_dir = Path(output_dir).expanduser().resolve()
        self.temp_dir = Path(temp_dir).expanduser().resolve()
        for extra in (self.output_dir, self.temp_dir):
            if extra not in self.allowed_dirs:
                self.allowed_dirs.append(extra)

    @classmethod
    def from_settings(cls, settings) -> "PathGuard":
        return cls(settings.allowed_dirs, settings.output_dir, settings.temp_dir)

    # -- validation ----------------------------------------------------------
    def is_allowed(self, path: Path) -> bool:
        return any(path == root or root in path.parents for root in self.allowed_dirs)

    def validate(self, path) -> Path:
        raw = str(path)
        if not raw.strip():
            raise UnsafePathError("Empty path")
        if _CONTROL_CHARS.search(raw):
            raise UnsafePathError("Path contains control characters")
        if ".." in Path(raw).parts:
            raise UnsafePathError(f"Path traversal is not allowed: {raw}")
        resolved = Path(raw).expanduser().resolve()
        if not self.is_allowed(resolved):
            raise UnsafePathError(f"Path is outside the allowed directories: {raw}")
        return resolved

    def validate_existing(self, path) -> Path:
        resolved = self.validate(path)
        if not resolved.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return resolved

    # -- output naming -------------------------------------------------------
    def resolve_output(self, output_path, stem: str, extension: str) -> Path:
        """Absolute output path.

        ``None`` gives ``OUTPUT_DIR/{stem}_{timestamp}.{extension}``; relative
        paths are taken relative to OUTPUT_DIR.
        """
        if output_path:
            candidate = Path(str(output_path)).expanduser()
            if not candidate.is_absolute():
                candidate = self.output_dir / candidate
        else:
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            candidate = self.output_dir / f"{stem}_{stamp}.{extension.lstrip('.')}"
        return self.validate(candidate)

    def secure_temp_path(self, prefix: str, suffix: str) -> Path:
        """A fresh, unguessable file name inside the temp directory."""
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        return self.temp_dir / f"{prefix}_{secrets.token_hex(16)}{suffix}"

    # -- I/O -----------------------------------------------------------------
    def read_bytes(self, path) -> bytes:
        return self.validate_existing(path).read_bytes()

    def read_text(self, path, encoding: str = "utf-8") -> str:
        return self.validate_existing(path).read_text(encoding=encoding)

    def write_bytes(self, path, data: bytes) -> Path:
        target = self.validate(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.info("Wrote %d bytes to %s", len(data), target)
        return target

    def write_text(self, path, text: str, encoding: str = "utf-8") -> Path:
        return self.write_bytes(path, text.encode(encoding))
