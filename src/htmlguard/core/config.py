"""Configuration loader: YAML files + environment variables."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from htmlguard.core.errors import ConfigError
from htmlguard.core.models import AppConfig, SanitizerConfig, SanitizerEngine, WebConfig

logger = logging.getLogger(__name__)


def _find_project_root() -> Path:
    """Walk up from cwd to find a directory containing pyproject.toml."""
    cwd = Path.cwd()
    for p in [cwd, *cwd.parents]:
        if (p / "pyproject.toml").exists():
            return p
    return cwd


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _section(yaml_data: dict, key: str, yaml_path: Path) -> dict:
    data = yaml_data.get(key) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"\"{key}\" in {yaml_path} must be a mapping")
    return data


def _log_level(value) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"log_level must be a level name, got {value!r}")
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown log_level: {value!r}")
    return level


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load configuration from YAML + environment variables.

    Priority: env vars > .env file > YAML defaults.
    """
    root = _find_project_root()
    load_dotenv(root / ".env")

    # Load YAML
    yaml_path = Path(config_path) if config_path else root / "config" / "default.yaml"
    yaml_data: dict = {}
    if yaml_path.exists():
        try:
            with open(yaml_path) as f:
                yaml_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {yaml_path}: {exc}") from exc
    elif config_path:
        raise ConfigError(f"Config file not found: {yaml_path}")

    if not isinstance(yaml_data, dict):
        raise ConfigError(f"Config file {yaml_path} must contain a mapping")

    # Sanitizer config with env overrides
    san_data = _section(yaml_data, "sanitizer", yaml_path)
    engine_str = os.getenv("HTMLGUARD_ENGINE", san_data.get("engine", SanitizerEngine.LEXICAL.value))
    extra_tags = san_data.get("extra_tags", [])
    env_tags = os.getenv("HTMLGUARD_EXTRA_TAGS")
    if env_tags is not None:
        extra_tags = _split_csv(env_tags)

    # Web config with env overrides
    web_data = _section(yaml_data, "web", yaml_path)

    try:
        sanitizer = SanitizerConfig(
            engine=SanitizerEngine(str(engine_str).lower()),
            extra_tags=extra_tags,
            extra_attributes=san_data.get("extra_attributes", {}),
            extra_dangerous_protocols=san_data.get("extra_dangerous_protocols", []),
        )
        web = WebConfig(
            host=os.getenv("HTMLGUARD_HOST", web_data.get("host", "127.0.0.1")),
            port=int(os.getenv("HTMLGUARD_PORT", web_data.get("port", 8000))),
            max_input_bytes=int(os.getenv("HTMLGUARD_MAX_INPUT_BYTES", web_data.get("max_input_bytes", 1_000_000))),
        )
    except (ValueError, ValidationError) as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

    log_level = _log_level(os.getenv("HTMLGUARD_LOG_LEVEL", yaml_data.get("log_level", "INFO")))

    logger.debug("Loaded config from %s (engine=%s)", yaml_path, sanitizer.engine.value)
    return AppConfig(sanitizer=sanitizer, web=web, log_level=log_level)
