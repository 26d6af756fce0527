"""
Runtime configuration and logging.

Every setting can be overridden through environment variables (or a ``.env``
file in the working directory):

    OUTPUT_DIR          where converted files are written (default ~/Documents)
    CACHE_DIR           scratch data kept between runs (default ~/.cache/docbridge)
    TEMP_DIR            intermediate HTML for PDF rendering (default: system temp)
    ALLOWED_DIRS        os.pathsep-separated roots that tools may read/write
    LOG_LEVEL           DEBUG, INFO, WARNING, ...
    EAST_ASIAN_FONT     CJK font used by the Word stylesheet
    DEFAULT_HTML_THEME  Markdown -> HTML theme
    DEFAULT_DOCX_THEME  Markdown -> DOCX theme
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    OUTPUT_DIR: str = str(Path.home() / "Documents")
    CACHE_DIR: str = str(Path.home() / ".cache" / "docbridge")
    TEMP_DIR: str = tempfile.gettempdir()
    ALLOWED_DIRS: str = ""
    LOG_LEVEL: str = "INFO"
    EAST_ASIAN_FONT: str = "Microsoft YaHei"
    DEFAULT_HTML_THEME: str = "github"
    DEFAULT_DOCX_THEME: str = "professional"

    @property
    def output_dir(self) -> Path:
        return Path(self.OUTPUT_DIR).expanduser()

    @property
    def cache_dir(self) -> Path:
        return Path(self.CACHE_DIR).expanduser()

    @property
    def temp_dir(self) -> Path:
        return Path(self.TEMP_DIR).expanduser()

    @property
    def allowed_dirs(self) -> list[Path]:
        """Explicit ALLOWED_DIRS, or the output/cache/temp dirs, home and cwd."""
        if self.ALLOWED_DIRS.strip():
            return [Path(p).expanduser() for p in self.ALLOWED_DIRS.split(os.pathsep) if p.strip()]
        return [self.output_dir, self.cache_dir, self.temp_dir, Path.home(), Path.cwd()]


def get_settings(**overrides) -> Settings:
    """A fresh Settings instance; keyword overrides win over the environment."""
    return Settings(**overrides)


def configure_logging(level: str | int = "INFO"):
    """Send log records to stderr; stdout belongs to the MCP stdio transport."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger("docbridge")
    root.setLevel(level)
    if not any(getattr(h, "_docbridge", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._docbridge = True
        root.addHandler(handler)
    return root
