"""Entity escaping for plain text."""

from __future__ import annotations

import re

from htmlguard.core.policy import ENTITY_MAP

_RESERVED_RE = re.compile(r"[&<>\"']")


def escape_html(text: str) -> str:
    """Escape the five reserved characters so no markup survives.

    Not idempotent: ``&amp;`` becomes ``&amp;amp;``.
    """
    if not text:
        return ""
    return _RESERVED_RE.sub(lambda m: ENTITY_MAP[m.group(0)], text)


def escape_attribute_value(value: str) -> str:
    """Escape quote characters in a value re-emitted inside double quotes."""
    return value.replace('"', ENTITY_MAP['"']).replace("'", ENTITY_MAP["'"])
