"""Policy inspection CLI commands."""

from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from htmlguard.cli.common import console, load_or_exit
from htmlguard.sanitizer.factory import build_policy
from htmlguard.sanitizer.lexical import HtmlSanitizer

policy_app = typer.Typer(name="policy", help="Inspect the effective allow-list policy.")


@policy_app.command("show")
def show_policy(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to a YAML config file"),
) -> None:
    """Print allowed tags, attributes and denied URL schemes."""
    cfg = load_or_exit(config)
    policy = build_policy(cfg).as_dict()

    console.print(f"[bold]Engine:[/bold] [cyan]{cfg.sanitizer.engine.value}[/cyan]\n")

    tags = Table(title="Allowed Tags")
    tags.add_column("Tag", style="cyan")
    tags.add_column("Attributes", style="white")
    wildcard = ", ".join(policy["attributes"].get("*", []))
    for tag in policy["tags"]:
        own = ", ".join(policy["attributes"].get(tag, []))
        tags.add_row(tag, own or "[dim]-[/dim]")
    console.print(tags)
    console.print(f"Attributes on every tag: [cyan]{wildcard}[/cyan]")

    console.print("\n[bold]Denied URL schemes[/bold] (href/src)")
    for proto in policy["dangerous_protocols"]:
        console.print(f"  [red]{proto}[/red]")


@policy_app.command("check-url")
def check_url(
    url: str = typer.Argument(..., help="URL attribute value to test"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to a YAML config file"),
) -> None:
    """Report whether a URL would survive in href/src. Exits 1 when unsafe."""
    cfg = load_or_exit(config)
    if HtmlSanitizer(build_policy(cfg)).is_safe_url(url):
        console.print(f"[green]safe[/green] {url}")
        return
    console.print(f"[red]unsafe[/red] {url}")
    raise typer.Exit(1)
