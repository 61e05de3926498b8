"""Root CLI application: sanitize, escape, render and serve."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from htmlguard.cli.common import console, load_or_exit, read_input
from htmlguard.cli.policy_cmd import policy_app
from htmlguard.content.rendering import render_markdown
from htmlguard.core.models import SanitizerEngine
from htmlguard.sanitizer.escape import escape_html
from htmlguard.sanitizer.factory import build_sanitizer

app = typer.Typer(
    name="htmlguard",
    help="Allow-list HTML sanitizer and escaper for untrusted fragments.",
    no_args_is_help=True,
)

app.add_typer(policy_app)

_FILE_ARG = typer.Argument(None, help="Input file (reads stdin when omitted)")
_CONFIG_OPT = typer.Option(None, "--config", "-c", help="Path to a YAML config file")
_ENGINE_OPT = typer.Option(None, "--engine", "-e", help="Override the configured engine")


@app.command()
def sanitize(
    file: Optional[Path] = _FILE_ARG,
    engine: Optional[SanitizerEngine] = _ENGINE_OPT,
    config: Optional[str] = _CONFIG_OPT,
) -> None:
    """Strip disallowed tags, attributes and URLs from HTML."""
    cfg = load_or_exit(config)
    sanitizer = build_sanitizer(cfg, engine)
    typer.echo(sanitizer.sanitize(read_input(file)), nl=False)


@app.command()
def escape(file: Optional[Path] = _FILE_ARG) -> None:
    """Escape text so that no markup survives."""
    typer.echo(escape_html(read_input(file)), nl=False)


@app.command()
def render(
    file: Optional[Path] = _FILE_ARG,
    engine: Optional[SanitizerEngine] = _ENGINE_OPT,
    config: Optional[str] = _CONFIG_OPT,
) -> None:
    """Render markdown to sanitized HTML."""
    cfg = load_or_exit(config)
    sanitizer = build_sanitizer(cfg, engine)
    typer.echo(render_markdown(read_input(file), sanitizer), nl=False)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, help="Port (default from config)"),
    config: Optional[str] = _CONFIG_OPT,
) -> None:
    """Run the HTTP service with uvicorn."""
    import uvicorn

    from htmlguard.web.app import create_app

    cfg = load_or_exit(config)
    host = host or cfg.web.host
    port = port or cfg.web.port
    console.print(f"[bold]Serving htmlguard[/bold] on [cyan]http://{host}:{port}[/cyan]")
    uvicorn.run(create_app(cfg), host=host, port=port, log_level=cfg.log_level.lower())
