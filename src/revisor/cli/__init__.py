"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="revisor",
    help="Revisor - JavaScript / TypeScript code quality analyzer",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .detectors import detectors as _detectors  # noqa: F401, E402


def main() -> None:
    app()
