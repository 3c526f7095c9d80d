"""Environment settings for docs-inline.

Process-level knobs (log level and format, which config file to load) come
from ``DOCS_INLINE_*`` environment variables or a ``.env`` file. Everything
about the sample repository lives in :class:`docs_inline.config.InlineConfig`.

Examples:
    >>> import os
    >>> os.environ["DOCS_INLINE_LOG_LEVEL"] = "DEBUG"
    >>> DocsInlineSettings().log_level
    'DEBUG'
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocsInlineSettings(BaseSettings):
    """Settings read from the environment.

    Fields
    ──────
    log_level    : Structlog log level
    log_format   : ``console`` or ``json``
    config_file  : Optional YAML file for :class:`InlineConfig`
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCS_INLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"
    config_file: Path | None = Field(
        default=None,
        description="YAML file with InlineConfig fields",
    )
