"""FastAPI application serving the sanitizer over HTTP."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from htmlguard.core.models import AppConfig
from htmlguard.sanitizer.factory import build_sanitizer
from htmlguard.web.deps import build_environment, get_config
from htmlguard.web.security import BodySizeLimitMiddleware, SecurityHeadersMiddleware

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    config = config or get_config()
    app = FastAPI(title="htmlguard", docs_url=None, redoc_url=None)

    # Outermost runs first
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=config.web.max_input_bytes)
    app.add_middleware(SecurityHeadersMiddleware)

    sanitizer = build_sanitizer(config)
    app.state.config = config
    app.state.sanitizer = sanitizer
    app.state.templates = build_environment(sanitizer)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled server error")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # Health check
    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Import routes here to avoid circular imports at module level
    from htmlguard.web.routes import api

    app.include_router(api.router)

    return app
