"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()

LANGUAGE_CHOICES = ["javascript", "typescript"]


def resolve_config(
    target: Path,
    config: Optional[Path] = None,
    language: Optional[str] = None,
    max_concurrency: Optional[int] = None,
    timeout: Optional[float] = None,
) -> AnalysisConfig:
    """Build configuration from CLI options.

    The project config is looked up in the target directory (or the
    directory containing a single target file).
    """
    project_dir = target if target.is_dir() else target.parent
    return load_config(
        config_file=config,
        project_dir=project_dir,
        language=language,
        max_concurrent_files=max_concurrency,
        timeout_seconds=timeout,
    )
