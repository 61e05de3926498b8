"""Shared dependencies for web routes."""

from __future__ import annotations

from functools import lru_cache

from jinja2 import DictLoader, Environment

from htmlguard.core.config import load_config
from htmlguard.core.models import AppConfig
from htmlguard.sanitizer.factory import Sanitizer
from htmlguard.web.filters import register_filters

_PREVIEW_TEMPLATE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>{{ title | escape_html }}</title></head>
<body>
<main>{{ body | sanitize }}</main>
</body>
</html>
"""


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return load_config()


def build_environment(sanitizer: Sanitizer) -> Environment:
    env = Environment(loader=DictLoader({"preview.html": _PREVIEW_TEMPLATE}), autoescape=True)
    return register_filters(env, sanitizer)


def render(env: Environment, template_name: str, **ctx) -> str:
    tpl = env.get_template(template_name)
    return tpl.render(**ctx)
