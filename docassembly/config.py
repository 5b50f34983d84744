"""Configuration loading for the assembly adapter.

This module loads application configuration with the following rules:
- Primary source: `docassembly_config.json` at the project root.
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
ROOT_CONFIG = Path("docassembly_config.json")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: an unreadable override falls through to the next source
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class EngineConfig(BaseModel):
    base_url: str
    timeout_seconds: float = Field(default=60.0, gt=0)
    retries: int = Field(default=0, ge=0)

    @field_validator("base_url")
    @classmethod
    def base_url_must_be_http(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip().lower().startswith(("http://", "https://")):
            raise ValueError("engine.base_url must be an http(s) URL")
        return v.strip()


class TemplateStoreConfig(BaseModel):
    base_path: str

    @field_validator("base_path")
    @classmethod
    def base_path_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("templates.base_path must be a non-empty string")
        return v


class InterviewConfig(BaseModel):
    image_url: str = "/api/v1/interviews/images"


class AppConfig(BaseModel):
    engine: EngineConfig
    templates: TemplateStoreConfig
    interview: InterviewConfig = Field(default_factory=InterviewConfig)


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) docassembly_config.json at project root (primary base)
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

    def _setting(env_key: str, dotted: str, default: str) -> str:
        return _env(env_key) or _read_config_file(dotted) or _base(dotted, default)

    base_url = _setting("ENGINE_BASE_URL", "engine.base_url", "http://localhost:8080/api")
    timeout_text = _setting("ENGINE_TIMEOUT_SECONDS", "engine.timeout_seconds", "60")
    retries_text = _setting("ENGINE_RETRIES", "engine.retries", "0")
    template_base = _setting("TEMPLATE_BASE_PATH", "templates.base_path", "templates")
    image_url = _setting("INTERVIEW_IMAGE_URL", "interview.image_url", "/api/v1/interviews/images")

    try:
        return AppConfig(
            engine=EngineConfig(
                base_url=base_url,
                timeout_seconds=float(str(timeout_text).strip()),
                retries=int(str(retries_text).strip()),
            ),
            templates=TemplateStoreConfig(base_path=template_base),
            interview=InterviewConfig(image_url=image_url),
        )
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "EngineConfig",
    "TemplateStoreConfig",
    "InterviewConfig",
    "load_config",
]
