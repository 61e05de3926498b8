"""Pydantic models for htmlguard configuration."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SanitizerEngine(str, Enum):
    LEXICAL = "lexical"
    BLEACH = "bleach"


class SanitizerConfig(BaseModel):
    engine: SanitizerEngine = SanitizerEngine.LEXICAL
    extra_tags: list[str] = Field(default_factory=list)
    extra_attributes: dict[str, list[str]] = Field(default_factory=dict)
    extra_dangerous_protocols: list[str] = Field(default_factory=list)


class WebConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000
    max_input_bytes: int = 1_000_000


class AppConfig(BaseModel):
    sanitizer: SanitizerConfig = Field(default_factory=SanitizerConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    log_level: str = "INFO"
