"""Unified configuration loaded from .folio.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".folio.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "folio" / "config.toml"


class ContentSectionConfig(BaseModel):
    """[content] section."""

    source: Literal["files", "sql"] = "files"
    directory: str = "./content"
    db_url: str = ""
    table: str = "content"


class SitemapSectionConfig(BaseModel):
    """[sitemap] section."""

    route_prefix: str = "content"
    priority: float = Field(default=0.7, ge=0.0, le=1.0)


class StoreSectionConfig(BaseModel):
    """[store] section."""

    path: str = "./.folio-slots.json"


class ServerSectionConfig(BaseModel):
    """[server] section."""

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"


class FolioConfig(BaseModel):
    """Top-level configuration model."""

    content: ContentSectionConfig = Field(default_factory=ContentSectionConfig)
    sitemap: SitemapSectionConfig = Field(default_factory=SitemapSectionConfig)
    store: StoreSectionConfig = Field(default_factory=StoreSectionConfig)
    server: ServerSectionConfig = Field(default_factory=ServerSectionConfig)


def load_config(path: str | Path | None = None) -> FolioConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .folio.toml in CWD
    3. ~/.config/folio/config.toml

    Then overlay environment variables.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = FolioConfig.model_validate(data) if data else FolioConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: FolioConfig, **cli_kwargs: object) -> FolioConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "content_source": ("content", "source"),
        "content_dir": ("content", "directory"),
        "db_url": ("content", "db_url"),
        "store_path": ("store", "path"),
        "host": ("server", "host"),
        "port": ("server", "port"),
        "log_level": ("server", "log_level"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value

    return FolioConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: FolioConfig) -> FolioConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "FOLIO_CONTENT_SOURCE": ("content", "source"),
        "FOLIO_CONTENT_DIR": ("content", "directory"),
        "FOLIO_DATABASE_URL": ("content", "db_url"),
        "FOLIO_CONTENT_TABLE": ("content", "table"),
        "FOLIO_STORE_PATH": ("store", "path"),
        "FOLIO_LOG_LEVEL": ("server", "log_level"),
        "FOLIO_LOG_FORMAT": ("server", "log_format"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    port_raw = os.environ.get("FOLIO_PORT")
    if port_raw is not None:
        data["server"]["port"] = int(port_raw)

    return FolioConfig.model_validate(data)
