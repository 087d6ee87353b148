"""LOC CLI command -- count lines of code in local files."""

import json
from pathlib import Path
from typing import List

import typer
from rich.markup import escape
from rich.table import Table

from ..analyzer import count_lines_of_code, detect_language
from . import app
from ._common import console


@app.command()
def loc(
    files: List[Path] = typer.Argument(
        ...,
        help="Source files to measure",
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
):
    """
    Count non-blank, non-comment lines and detect the language of each file.

    Lines starting with [bold]//[/bold] or [bold]#[/bold] are comments.
    """
    rows = []
    for path in files:
        content = path.read_text(encoding="utf-8", errors="replace")
        rows.append(
            {
                "path": path.as_posix(),
                "language": detect_language(path.name),
                "lines_of_code": count_lines_of_code(content),
            }
        )

    if json_output:
        print(json.dumps(rows, indent=2))
        return

    table = Table(title="Lines of Code", show_lines=False, pad_edge=True)
    table.add_column("File", style="bold")
    table.add_column("Language", style="cyan")
    table.add_column("LOC", justify="right")
    for row in rows:
        table.add_row(escape(row["path"]), row["language"], str(row["lines_of_code"]))

    console.print()
    console.print(table)
    console.print()
