"""JSON API exposing the sanitizer, escaper and markdown renderer."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from htmlguard.content.rendering import render_markdown
from htmlguard.sanitizer.escape import escape_html
from htmlguard.web.deps import render

router = APIRouter()


class SanitizeRequest(BaseModel):
    html: str


class EscapeRequest(BaseModel):
    text: str


class RenderRequest(BaseModel):
    markdown: str


class PreviewRequest(BaseModel):
    title: str = ""
    html: str


@router.post("/api/sanitize")
def sanitize(body: SanitizeRequest, request: Request):
    return {"html": request.app.state.sanitizer.sanitize(body.html)}


@router.post("/api/escape")
def escape(body: EscapeRequest):
    return {"text": escape_html(body.text)}


@router.post("/api/render")
def render_md(body: RenderRequest, request: Request):
    return {"html": render_markdown(body.markdown, request.app.state.sanitizer)}


@router.get("/api/policy")
def policy(request: Request):
    return request.app.state.sanitizer.policy.as_dict()


@router.post("/preview", response_class=HTMLResponse)
def preview(body: PreviewRequest, request: Request):
    """Render a sanitized fragment inside a minimal page."""
    return render(request.app.state.templates, "preview.html", title=body.title, body=body.html)
