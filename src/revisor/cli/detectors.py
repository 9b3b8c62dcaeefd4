"""Detectors command: list the detectors available for a language."""

from pathlib import Path
from typing import Optional

import click
import typer
from rich.table import Table

from ..config import load_config
from ..detectors.registry import get_available_detectors
from ..exceptions import RevisorError
from . import app
from ._common import LANGUAGE_CHOICES, console


@app.command()
def detectors(
    language: str = typer.Option(
        "javascript",
        "-l",
        "--language",
        help="Language to list detectors for",
        click_type=click.Choice(LANGUAGE_CHOICES, case_sensitive=False),
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        file_okay=True,
        dir_okay=False,
    ),
):
    """Show each detector, whether it is enabled, and its thresholds."""
    try:
        settings = load_config(config_file=config)
    except RevisorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"Detectors for {language.lower()}")
    table.add_column("Detector", style="cyan")
    table.add_column("Enabled", justify="center")
    table.add_column("Thresholds")

    for name in get_available_detectors(language.lower()):
        detector_config = settings.detector_config(name)
        thresholds = ", ".join(f"{k}={v:g}" for k, v in detector_config.thresholds.items())
        enabled = "[green]yes[/green]" if detector_config.enabled else "[red]no[/red]"
        table.add_row(name, enabled, thresholds)

    console.print(table)
