"""Shared CLI helpers."""

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import AnalysisConfig, load_config

console = Console()

SEVERITY_STYLES = {
    "critical": "bold red",
    "warning": "yellow",
    "info": "cyan",
}


def resolve_config(ctx: typer.Context) -> AnalysisConfig:
    """Build config from the options stored by the main callback."""
    obj = ctx.obj or {}
    config_file: Optional[Path] = obj.get("config")
    return load_config(
        config_file=config_file,
        verbose=obj.get("verbose", False),
        quiet=obj.get("quiet", False),
    )


def fail(error: Exception) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)
