"""Analyze command: run every enabled detector and print the report."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..core.analyzer import CodebaseAnalyzer
from ..exceptions import RevisorError
from ..formatters import JsonFormatter, RichFormatter
from ..logging_config import setup_logging
from . import app
from ._common import LANGUAGE_CHOICES, console, resolve_config


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="File or directory to analyze",
    ),
    language: Optional[str] = typer.Option(
        None,
        "-l",
        "--language",
        help="Language to analyze (default: from config, else javascript)",
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
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "-o",
        "--output",
        help="Write the JSON report to this file instead of stdout",
        dir_okay=False,
    ),
    max_concurrency: Optional[int] = typer.Option(
        None,
        "--max-concurrency",
        help="Files loaded per batch (default: 10)",
        min=1,
        max=50,
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds allowed to read and parse one file (default: 30)",
        min=1,
    ),
    max_issues: Optional[int] = typer.Option(
        10,
        "--max-issues",
        help="Issues shown per file in terminal output",
        min=1,
    ),
    snippets: bool = typer.Option(
        True,
        "--snippets/--no-snippets",
        help="Show code snippets in terminal output",
    ),
    fail_under: Optional[float] = typer.Option(
        None,
        "--fail-under",
        help="Exit 1 if the overall score is below this value",
        min=0,
        max=100,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Analyze JavaScript / TypeScript sources for complexity, naming, size and
    duplication issues.

    [bold cyan]Examples:[/bold cyan]

      revisor analyze src

      revisor analyze src --json -o report.json

      revisor analyze app.ts --language typescript --fail-under 80
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            path,
            config=config,
            language=language.lower() if language else None,
            max_concurrency=max_concurrency,
            timeout=timeout,
        )
        analyzer = CodebaseAnalyzer(settings)
        report = analyzer.analyze(path)

        if json_output or output is not None:
            text = JsonFormatter().format(report)
            if output is not None:
                output.write_text(text + "\n", encoding="utf-8")
                console.print(f"[green]Report written to[/green] {output}")
            else:
                typer.echo(text)
        else:
            RichFormatter(
                console, show_snippets=snippets, max_issues_per_file=max_issues
            ).render(report)

        if fail_under is not None and report.summary.overall_score < fail_under:
            raise typer.Exit(1)

    except typer.Exit:
        raise

    except RevisorError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during analysis")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)
