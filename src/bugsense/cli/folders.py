"""Folders CLI command -- per-folder risk heatmap."""

import json
from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from ..api import load_metrics
from ..exceptions import BugSenseError
from ..scoring import score_files
from ..summary import folder_heatmap, risk_label
from . import app
from ._common import console, fail, resolve_config


@app.command()
def folders(
    ctx: typer.Context,
    metrics_file: Path = typer.Argument(
        ...,
        help="JSON file with per-file metrics",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    limit: int = typer.Option(
        20,
        "--limit",
        "-n",
        help="Maximum number of folders to list",
        min=1,
        max=1000,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Rank folders by the average risk of the files beneath them.

    A file counts toward every ancestor folder, so [bold]src[/bold] includes
    everything under [bold]src/api[/bold].

    [bold cyan]Examples:[/bold cyan]

      bugsense folders metrics.json

      bugsense folders metrics.json --json
    """
    try:
        config = resolve_config(ctx)
        files = score_files(load_metrics(metrics_file), config.thresholds)
    except BugSenseError as e:
        fail(e)

    stats = folder_heatmap(files)[:limit]

    if json_output:
        print(json.dumps([s.to_dict() for s in stats], indent=2))
        return

    if not stats:
        console.print("[yellow]No folders found.[/yellow] All files sit at the repository root.")
        return

    table = Table(title="Folder Risk", show_lines=False, pad_edge=True)
    table.add_column("Folder", style="bold cyan")
    table.add_column("Files", justify="right")
    table.add_column("Avg Risk", justify="right")
    table.add_column("Max Risk", justify="right")
    table.add_column("Level")

    for s in stats:
        table.add_row(
            escape(s.path),
            str(s.file_count),
            f"{s.avg_risk:.2f}",
            f"{s.max_risk:.2f}",
            risk_label(s.avg_risk, config.thresholds),
        )

    console.print()
    console.print(table)
    console.print()
