"""Build a sanitizer from application configuration."""

from __future__ import annotations

import logging
from typing import Optional, Union

from htmlguard.core.models import AppConfig, SanitizerEngine
from htmlguard.core.policy import DEFAULT_POLICY, HtmlPolicy
from htmlguard.sanitizer.lexical import HtmlSanitizer
from htmlguard.sanitizer.tree import BleachSanitizer

logger = logging.getLogger(__name__)

Sanitizer = Union[HtmlSanitizer, BleachSanitizer]


def build_policy(config: AppConfig) -> HtmlPolicy:
    """Extend the built-in policy with the configured extras."""
    san = config.sanitizer
    if not (san.extra_tags or san.extra_attributes or san.extra_dangerous_protocols):
        return DEFAULT_POLICY
    return DEFAULT_POLICY.extend(
        tags=san.extra_tags,
        attributes=san.extra_attributes,
        dangerous_protocols=san.extra_dangerous_protocols,
    )


def build_sanitizer(config: AppConfig, engine: Optional[SanitizerEngine] = None) -> Sanitizer:
    """Construct the configured engine; ``engine`` overrides the config choice."""
    engine = engine or config.sanitizer.engine
    policy = build_policy(config)
    logger.debug("Using %s sanitizer (%d allowed tags)", engine.value, len(policy.tags))
    if engine == SanitizerEngine.BLEACH:
        return BleachSanitizer(policy)
    return HtmlSanitizer(policy)
