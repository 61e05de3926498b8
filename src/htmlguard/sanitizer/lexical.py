"""Lexical allow-list sanitizer for HTML fragments.

Tags are recognized with a regular expression rather than a parser. Each tag
occurrence is handled on its own: disallowed tags are removed (their inner
text stays), allowed tags are rebuilt from a filtered attribute list. Text
between rebuilt tags is scrubbed of inline event-handler attributes. Passes
repeat until the output is stable, so text joined by a removal is scanned
again.
"""

from __future__ import annotations

import logging
import re
from collections import Counter

from htmlguard.core.policy import DEFAULT_POLICY, FORCED_REL, URL_ATTRIBUTES, HtmlPolicy
from htmlguard.sanitizer.escape import escape_attribute_value

logger = logging.getLogger(__name__)

# <name ...>, </name>, <name ... />; the name runs to whitespace, / or >
_TAG_RE = re.compile(r"</?([a-zA-Z][^\s/>]*)[^>]*/?>", re.ASCII)
_TAG_PREFIX_RE = re.compile(r"^<[a-zA-Z][^\s/>]*\s*", re.ASCII)
_TAG_SUFFIX_RE = re.compile(r"/?>$")

# name, name=value, name="value", name='value'
_ATTR_RE = re.compile(r"""([a-zA-Z][a-zA-Z0-9-]*)\s*(?:=\s*(?:"([^"]*)"|'([^']*)'|(\S+)))?""")

# on*="..." / on*='...', or a handler left with an unterminated quote
_EVENT_HANDLER_RE = re.compile(
    r"""on[a-zA-Z]+\s*=\s*(?:"[^"]*"|'[^']*'|(?=["']))""", re.IGNORECASE | re.ASCII
)

# handler-shaped text inside a retained attribute value
_HANDLER_IN_VALUE_RE = re.compile(r"(on[a-zA-Z]+\s*)=", re.IGNORECASE | re.ASCII)


class HtmlSanitizer:
    """Regex-driven sanitizer bound to one immutable policy."""

    def __init__(self, policy: HtmlPolicy = DEFAULT_POLICY) -> None:
        self.policy = policy

    def is_safe_url(self, url: str) -> bool:
        """False if the trimmed, lowercased value starts with a dangerous scheme."""
        lowered = (url or "").strip().lower()
        return not any(lowered.startswith(proto) for proto in self.policy.dangerous_protocols)

    def sanitize(self, html: str) -> str:
        if not html:
            return ""

        counts: Counter = Counter()
        result = self._sanitize_once(html, counts)
        # Each changing pass removes a "<" or shortens the text; rebuilt tags
        # are stable, so this reaches a fixed point.
        while True:
            again = self._sanitize_once(result, counts)
            if again == result:
                break
            result = again

        if counts:
            logger.debug(
                "Stripped %d tag(s), %d attribute(s), %d unsafe URL(s), %d stray handler(s)",
                counts["tags"], counts["attributes"], counts["urls"], counts["handlers"],
            )
        return result

    def _sanitize_once(self, html: str, counts: Counter) -> str:
        pieces: list[str] = []
        text: list[str] = []
        pos = 0
        for m in _TAG_RE.finditer(html):
            text.append(html[pos:m.start()])
            pos = m.end()
            tag = self._rebuild_tag(m, counts)
            if tag:
                # Text on both sides of a removed tag is joined before scrubbing
                pieces.append(_strip_handlers("".join(text), counts))
                pieces.append(tag)
                text = []
        text.append(html[pos:])
        pieces.append(_strip_handlers("".join(text), counts))
        return "".join(pieces)

    def _filter_attributes(self, tag: str, attr_string: str, counts: Counter) -> list[tuple[str, str]]:
        allowed = self.policy.allowed_attributes_for(tag)
        kept: list[tuple[str, str]] = []
        for m in _ATTR_RE.finditer(attr_string):
            name = m.group(1).lower()
            value = next((g for g in m.group(2, 3, 4) if g is not None), "")
            if name not in allowed:
                counts["attributes"] += 1
                continue
            if name in URL_ATTRIBUTES and not self.is_safe_url(value):
                counts["urls"] += 1
                continue
            kept.append((name, value))
        return kept

    def _rebuild_tag(self, match: re.Match, counts: Counter) -> str:
        tag = match.group(1).lower()
        if not self.policy.allows_tag(tag):
            counts["tags"] += 1
            return ""

        raw = match.group(0)
        if raw.startswith("</"):
            return f"</{tag}>"

        attr_string = _TAG_SUFFIX_RE.sub("", _TAG_PREFIX_RE.sub("", raw, count=1), count=1)
        kept = self._filter_attributes(tag, attr_string, counts)
        if tag == "a" and any(name == "href" for name, _ in kept):
            kept = _force_rel(kept)

        attrs = "".join(f' {name}="{_quote_value(value)}"' for name, value in kept)
        if raw.endswith("/>"):
            return f"<{tag}{attrs} />"
        return f"<{tag}{attrs}>"


def _force_rel(attrs: list[tuple[str, str]]) -> list[tuple[str, str]]:
    """Fold any rel values into a single rel placed right after href."""
    tokens: list[str] = []
    for name, value in attrs:
        if name == "rel":
            for token in value.lower().split():
                if token not in tokens:
                    tokens.append(token)
    for token in FORCED_REL:
        if token not in tokens:
            tokens.append(token)

    merged: list[tuple[str, str]] = []
    placed = False
    for name, value in attrs:
        if name == "rel":
            continue
        merged.append((name, value))
        if name == "href" and not placed:
            merged.append(("rel", " ".join(tokens)))
            placed = True
    return merged


def _strip_handlers(text: str, counts: Counter) -> str:
    """Remove handler attributes from text, repeating while removals join new ones."""
    while True:
        text, n = _EVENT_HANDLER_RE.subn("", text)
        if not n:
            return text
        counts["handlers"] += n


def _quote_value(value: str) -> str:
    """Prepare a value for re-emission inside double quotes."""
    return escape_attribute_value(_HANDLER_IN_VALUE_RE.sub(r"\1&#61;", value))


_default = HtmlSanitizer()


def sanitize_html(html: str) -> str:
    """Sanitize an HTML fragment with the built-in policy."""
    return _default.sanitize(html)


def is_safe_url(url: str) -> bool:
    """Check a URL attribute value against the built-in protocol denylist."""
    return _default.is_safe_url(url)
