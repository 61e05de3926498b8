"""Exception types raised outside the sanitizer core."""

from __future__ import annotations


class HtmlGuardError(Exception):
    """Base class for htmlguard errors."""


class ConfigError(HtmlGuardError):
    """Configuration could not be loaded or validated."""
