"""Jinja2 template filters for sanitized and escaped output."""

from __future__ import annotations

from typing import Optional

from jinja2 import Environment
from markupsafe import Markup

from htmlguard.content.rendering import render_markdown
from htmlguard.sanitizer.escape import escape_html
from htmlguard.sanitizer.factory import Sanitizer
from htmlguard.sanitizer.lexical import sanitize_html


def register_filters(env: Environment, sanitizer: Optional[Sanitizer] = None) -> Environment:
    """Install ``sanitize``, ``escape_html`` and ``markdown`` filters on env.

    Filters return Markup so an autoescaping environment does not escape the
    output a second time.
    """
    clean = sanitizer.sanitize if sanitizer is not None else sanitize_html

    env.filters["sanitize"] = lambda s: Markup(clean(s or ""))
    env.filters["escape_html"] = lambda s: Markup(escape_html(s or ""))
    env.filters["markdown"] = lambda s: Markup(render_markdown(s or "", sanitizer))
    return env
