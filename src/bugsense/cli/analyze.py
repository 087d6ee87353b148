"""Analyze command -- score files and print insights."""

import json
from pathlib import Path
from typing import Optional

import click
import typer
from rich.markup import escape
from rich.table import Table

from ..api import AnalysisResult, analyze as run_analysis, load_metrics
from ..exceptions import BugSenseError
from ..insights import sort_by_severity
from ..logging_config import get_logger
from ..models import Severity
from ..summary import complexity_label, risk_label
from . import app
from ._common import SEVERITY_STYLES, console, fail, resolve_config

logger = get_logger(__name__)


@app.command()
def analyze(
    ctx: typer.Context,
    metrics_file: Path = typer.Argument(
        ...,
        help="JSON file with per-file metrics",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    by_severity: bool = typer.Option(
        False,
        "--by-severity",
        help="List critical insights first, then warnings, then info",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-n",
        help="Number of riskiest files to show (default: from config)",
        min=1,
    ),
    fail_on: Optional[str] = typer.Option(
        None,
        "--fail-on",
        help="Exit 1 if insights meet threshold: critical | warning",
        click_type=click.Choice(["critical", "warning"], case_sensitive=False),
    ),
):
    """
    Score every file and report the insights for the whole snapshot.

    [bold cyan]Examples:[/bold cyan]

      bugsense analyze metrics.json

      bugsense analyze metrics.json --top 5 --by-severity

      bugsense analyze metrics.json --json --fail-on critical
    """
    try:
        config = resolve_config(ctx)
        result = run_analysis(load_metrics(metrics_file), config)
    except BugSenseError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        fail(e)

    insights = sort_by_severity(result.insights) if by_severity else result.insights
    limit = top or config.top_files

    if json_output:
        _output_json(result, insights)
    else:
        _output_rich(result, insights, limit, config)

    if fail_on is not None and _should_fail(fail_on.lower(), result):
        raise typer.Exit(1)


def _should_fail(fail_on: str, result: AnalysisResult) -> bool:
    blocking = {Severity.CRITICAL}
    if fail_on == "warning":
        blocking.add(Severity.WARNING)
    return any(i.severity in blocking for i in result.insights)


def _output_json(result: AnalysisResult, insights) -> None:
    """Machine-readable JSON output."""
    payload = result.to_dict()
    payload["insights"] = [i.to_dict() for i in insights]
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _output_rich(result: AnalysisResult, insights, limit: int, config) -> None:
    """Human-readable Rich output: riskiest files, summary, insights."""
    t = config.thresholds

    if not result.files:
        console.print("[yellow]No files in metrics file.[/yellow] Nothing to analyze.")
        return

    riskiest = sorted(result.files, key=lambda f: f.risk_score, reverse=True)[:limit]

    table = Table(title="Riskiest Files", show_lines=False, pad_edge=True)
    table.add_column("File", style="bold")
    table.add_column("Risk", justify="right")
    table.add_column("Level")
    table.add_column("Complexity", justify="right")
    table.add_column("LOC", justify="right")
    table.add_column("Churn", justify="right")

    for f in riskiest:
        level = risk_label(f.risk_score, t)
        table.add_row(
            escape(f.path),
            f"{f.risk_score:.2f}",
            level,
            f"{f.cyclomatic_complexity} ({complexity_label(f.cyclomatic_complexity, t)})",
            str(f.lines_of_code),
            str(f.churn),
        )

    s = result.summary
    console.print()
    console.print(table)
    console.print(
        f"[bold]{s.total_files}[/bold] files  "
        f"avg risk [bold]{s.avg_risk:.2f}[/bold]  "
        f"max risk [bold]{s.max_risk:.2f}[/bold]  "
        f"high-risk [bold]{s.high_risk_count}[/bold]  "
        f"avg complexity [bold]{s.avg_complexity:.1f}[/bold]"
    )
    console.print()
    console.print("[bold]Insights[/bold]")

    for insight in insights:
        style = SEVERITY_STYLES.get(insight.severity.value, "")
        console.print(
            f"[{style}]{insight.severity.value.upper():<8}[/{style}] "
            f"{escape(insight.message)} "
            f"[dim]({insight.category.value}, confidence {insight.confidence:.0%})[/dim]"
        )
    console.print()
