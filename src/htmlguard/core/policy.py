"""Allow-list policy tables for HTML sanitization."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

logger = logging.getLogger(__name__)

# Tags safe for rendering document-derived fragments
ALLOWED_TAGS: frozenset[str] = frozenset([
    "p", "br", "b", "i", "u", "strong", "em", "span", "div",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li",
    "a", "img",
    "table", "thead", "tbody", "tr", "th", "td",
    "blockquote", "pre", "code",
    "hr", "sub", "sup", "mark",
])

# "*" applies to every tag
ALLOWED_ATTRIBUTES: Mapping[str, frozenset[str]] = MappingProxyType({
    "*": frozenset(["class", "id", "style"]),
    "a": frozenset(["href", "title", "target", "rel"]),
    "img": frozenset(["src", "alt", "width", "height"]),
    "td": frozenset(["colspan", "rowspan"]),
    "th": frozenset(["colspan", "rowspan", "scope"]),
})

# Checked in order against the trimmed, lowercased value
DANGEROUS_PROTOCOLS: tuple[str, ...] = ("javascript:", "data:", "vbscript:")

URL_ATTRIBUTES: frozenset[str] = frozenset(["href", "src"])

ENTITY_MAP: Mapping[str, str] = MappingProxyType({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
})

FORCED_REL: tuple[str, ...] = ("noopener", "noreferrer")


@dataclass(frozen=True)
class HtmlPolicy:
    """Immutable bundle of the tag, attribute and protocol tables."""

    tags: frozenset[str] = ALLOWED_TAGS
    attributes: Mapping[str, frozenset[str]] = field(default_factory=lambda: ALLOWED_ATTRIBUTES)
    dangerous_protocols: tuple[str, ...] = DANGEROUS_PROTOCOLS

    def allows_tag(self, tag: str) -> bool:
        return tag.lower() in self.tags

    def allowed_attributes_for(self, tag: str) -> frozenset[str]:
        """Wildcard attributes plus the tag's own set."""
        wildcard = self.attributes.get("*", frozenset())
        return wildcard | self.attributes.get(tag.lower(), frozenset())

    def extend(
        self,
        tags: Iterable[str] = (),
        attributes: Optional[Mapping[str, Iterable[str]]] = None,
        dangerous_protocols: Iterable[str] = (),
    ) -> HtmlPolicy:
        """Return a new policy with extra entries added.

        Entries are lowercased. Nothing is ever removed, so an extended policy
        rejects at least what the receiver rejects in terms of protocols.
        Attribute names starting with "on" are never added.
        """
        merged: dict[str, frozenset[str]] = dict(self.attributes)
        for tag, names in (attributes or {}).items():
            key = tag.lower()
            added = {n.lower() for n in names}
            handlers = {n for n in added if n.startswith("on")}
            if handlers:
                logger.warning("Ignoring event-handler attribute(s) %s on <%s>", sorted(handlers), key)
            merged[key] = merged.get(key, frozenset()) | (added - handlers)

        protocols = list(self.dangerous_protocols)
        for proto in dangerous_protocols:
            proto = proto.strip().lower()
            if proto and not proto.endswith(":"):
                proto += ":"
            if proto and proto not in protocols:
                protocols.append(proto)

        return HtmlPolicy(
            tags=self.tags | {t.lower() for t in tags},
            attributes=MappingProxyType(merged),
            dangerous_protocols=tuple(protocols),
        )

    def as_dict(self) -> dict:
        """Plain, sorted representation for display and JSON output."""
        return {
            "tags": sorted(self.tags),
            "attributes": {tag: sorted(names) for tag, names in sorted(self.attributes.items())},
            "dangerous_protocols": list(self.dangerous_protocols),
        }


DEFAULT_POLICY = HtmlPolicy()
