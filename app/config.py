"""Configuration utilities for the asset store service.

This module loads application configuration with the following rules:
- Primary source: `asset_store_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("asset_store_config.json")
logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: log and ignore unreadable override
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class RetrievalConfig(BaseModel):
    default_document: str = Field(default="/index.html")

    @field_validator("default_document")
    @classmethod
    def default_document_must_be_path(cls, v: str) -> str:
        if not isinstance(v, str) or not v.startswith("/"):
            raise ValueError("retrieval.default_document must be a path starting with '/'")
        return v


class ServerConfig(BaseModel):
    enable_test_support: bool = Field(default=False)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def level_must_be_known(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {sorted(_LOG_LEVELS)}")
        return level


class AppConfig(BaseModel):
    retrieval: RetrievalConfig
    server: ServerConfig
    logging: LoggingConfig


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def _truthy(text: Optional[str]) -> bool:
    return str(text).strip().lower() in {"1", "true", "yes", "on"}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) asset_store_config.json at project root
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    default_document = (
        _env("ASSET_DEFAULT_DOCUMENT")
        or _read_config_file("retrieval.default_document")
        or _base("retrieval.default_document", "/index.html")
    )
    test_support_text = (
        _env("ASSET_ENABLE_TEST_SUPPORT")
        or _read_config_file("server.enable_test_support")
        or _base("server.enable_test_support", "false")
    )
    log_level = _env("ASSET_LOG_LEVEL") or _read_config_file("logging.level") or _base("logging.level", "INFO")

    try:
        return AppConfig(
            retrieval=RetrievalConfig(default_document=str(default_document).strip()),
            server=ServerConfig(enable_test_support=_truthy(test_support_text)),
            logging=LoggingConfig(level=log_level),
        )
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "RetrievalConfig",
    "ServerConfig",
    "LoggingConfig",
    "load_config",
]
