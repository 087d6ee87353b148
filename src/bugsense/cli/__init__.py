"""CLI entry point -- registers all subcommands."""

import typer

app = typer.Typer(
    name="bugsense",
    help="BugSense - Bug-proneness scoring for repository files",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .analyze import analyze as _analyze  # noqa: F401, E402
from .folders import folders as _folders  # noqa: F401, E402
from .loc import loc as _loc  # noqa: F401, E402
