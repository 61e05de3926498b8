"""Markdown rendering with sanitized output."""

from __future__ import annotations

from typing import Optional

import markdown

from htmlguard.sanitizer.factory import Sanitizer
from htmlguard.sanitizer.lexical import sanitize_html


def render_markdown(text: str, sanitizer: Optional[Sanitizer] = None) -> str:
    """Convert markdown to HTML, then strip anything outside the allow-list."""
    if not text:
        return ""
    html = markdown.markdown(text, extensions=["extra"])
    if sanitizer is None:
        return sanitize_html(html)
    return sanitizer.sanitize(html)
