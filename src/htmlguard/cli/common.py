"""Helpers shared by CLI commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from htmlguard.core.config import load_config
from htmlguard.core.errors import ConfigError
from htmlguard.core.models import AppConfig

console = Console()
err_console = Console(stderr=True)


def load_or_exit(config_path: Optional[str] = None) -> AppConfig:
    """Load config, printing the error and exiting 1 when it is invalid."""
    try:
        cfg = load_config(config_path)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(1)
    logging.basicConfig(level=getattr(logging, cfg.log_level, logging.INFO))
    return cfg


def read_input(path: Optional[Path]) -> str:
    """Read a file, or stdin when no path is given."""
    if path is None:
        return sys.stdin.read()
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        err_console.print(f"[red]Cannot read {path}:[/red] {exc}")
        raise typer.Exit(1)
