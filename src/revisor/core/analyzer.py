"""Analysis engine: discovery, batched loading, detection and scoring.

Files are processed in batches of ``max_concurrent_files``. Within a batch,
reading and parsing run concurrently on a thread pool owned by that batch,
each bounded by ``timeout_seconds``; the engine waits for the whole batch to
settle. The pool is shut down without joining its threads, so a parse that
never returns costs one abandoned thread and not the whole run. Detection
then runs on the event loop thread, one file at a time in discovery order, so
the shared duplication state is never observed mid-update and the report's
file order is deterministic.
"""

from __future__ import annotations

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Sequence

from ..config import AnalysisConfig
from ..detectors.base import Detector
from ..detectors.registry import (
    LANGUAGE_DETECTORS,
    create_detectors_for_language,
    get_supported_languages,
)
from ..exceptions import InvalidPathError, NoDetectorsError, UnsupportedLanguageError
from ..logging_config import get_logger
from ..models.issue import Issue
from ..models.report import AnalysisOptions, FileAnalysis, Report, ReportBuilder
from ..scanning.discovery import discover_files
from ..scanning.parser import SourceParser
from ..scanning.syntax import ParsedFile
from .scoring import calculate_file_score

logger = get_logger(__name__)


class CodebaseAnalyzer:
    """Runs every enabled detector over a file or directory.

    The analyzer owns its detector instances, including the stateful
    duplication detector, and resets stateful ones at the start of each run.

    Usage:
        analyzer = CodebaseAnalyzer(load_config())
        report = analyzer.analyze(Path("src"))
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        detectors: Optional[Sequence[Detector]] = None,
    ):
        self.config = config or AnalysisConfig()
        self.parser = SourceParser(max_file_size=self.config.max_file_size_bytes)
        self._fixed_detectors = list(detectors) if detectors is not None else None
        self._detectors_by_language: dict[str, list[Detector]] = {}

    def default_options(self) -> AnalysisOptions:
        return AnalysisOptions(
            language=self.config.language,
            include_patterns=self.config.include_patterns,
            exclude_patterns=self.config.exclude_patterns,
        )

    def detectors_for(self, language: str) -> list[Detector]:
        """Detector instances for ``language``, created once per analyzer.

        Raises:
            UnsupportedLanguageError: If no detectors exist for the language
            NoDetectorsError: If every detector for the language is disabled
        """
        if self._fixed_detectors is not None:
            detectors = self._fixed_detectors
        else:
            if language not in LANGUAGE_DETECTORS:
                raise UnsupportedLanguageError(language, get_supported_languages())
            if language not in self._detectors_by_language:
                self._detectors_by_language[language] = create_detectors_for_language(
                    language, self.config.detectors
                )
            detectors = self._detectors_by_language[language]

        if not detectors:
            raise NoDetectorsError(language)
        return detectors

    def analyze(self, target: Path, options: Optional[AnalysisOptions] = None) -> Report:
        """Synchronous entry point; see ``analyze_async``."""
        return asyncio.run(self.analyze_async(target, options))

    async def analyze_async(
        self, target: Path, options: Optional[AnalysisOptions] = None
    ) -> Report:
        """Analyze a file or directory and build the report.

        Raises:
            InvalidPathError: If ``target`` does not exist
            UnsupportedLanguageError: If the language has no detectors
            NoDetectorsError: If every detector is disabled
        """
        started = time.perf_counter()
        target = Path(target)
        if not target.exists():
            raise InvalidPathError(target, "path does not exist")

        options = options or self.default_options()
        detectors = self.detectors_for(options.language)
        for detector in detectors:
            if getattr(detector, "stateful", False):
                detector.reset()

        logger.info(f"Analyzing {target}")
        files = discover_files(
            target, options.include_patterns, options.exclude_patterns, options.language
        )
        builder = ReportBuilder.create().with_options(options)

        if not files:
            logger.warning(f"No files to analyze under {target}")
            return builder.build()

        logger.info(f"Found {len(files)} files to analyze")
        logger.info(f"Using {len(detectors)} detectors: {', '.join(d.name for d in detectors)}")

        batch_size = self.config.max_concurrent_files
        for start in range(0, len(files), batch_size):
            batch = files[start : start + batch_size]
            executor = ThreadPoolExecutor(
                max_workers=len(batch), thread_name_prefix="revisor-load"
            )
            try:
                loaded = await asyncio.gather(
                    *(self._load(executor, path, target) for path in batch),
                    return_exceptions=True,
                )
            finally:
                executor.shutdown(wait=False, cancel_futures=True)
            for path, result in zip(batch, loaded):
                if isinstance(result, asyncio.TimeoutError):
                    logger.warning(
                        f"Skipping {path}: parsing exceeded {self.config.timeout_seconds:g}s"
                    )
                elif isinstance(result, BaseException):
                    logger.warning(f"Skipping {path}: {result}")
                else:
                    builder.add_file(self.analyze_parsed_file(result, detectors))
            logger.info(f"Analyzed {min(start + batch_size, len(files))}/{len(files)} files")

        report = builder.build()
        elapsed = time.perf_counter() - started
        logger.info(
            f"Analysis finished in {elapsed:.2f}s: score {report.summary.overall_score}/100, "
            f"{report.summary.total_issues} issues"
        )
        return report

    def analyze_parsed_file(
        self, parsed_file: ParsedFile, detectors: Sequence[Detector]
    ) -> FileAnalysis:
        """Run ``detectors`` over one file and score the result."""
        issues: list[Issue] = []
        for detector in detectors:
            try:
                issues.extend(detector.detect(parsed_file))
            except Exception as e:
                logger.warning(f"Detector {detector.name} failed on {parsed_file.path}: {e}")

        return FileAnalysis(
            path=parsed_file.path,
            lines_of_code=parsed_file.lines_of_code,
            issues=issues,
            score=calculate_file_score(issues, parsed_file.lines_of_code),
        )

    async def _load(
        self, executor: ThreadPoolExecutor, path: Path, target: Path
    ) -> ParsedFile:
        display_path = _display_path(path, target)
        loop = asyncio.get_running_loop()
        return await asyncio.wait_for(
            loop.run_in_executor(executor, self.parser.parse_file, path, display_path),
            timeout=self.config.timeout_seconds,
        )


def _display_path(path: Path, target: Path) -> str:
    if target.is_file():
        return path.name
    return path.relative_to(target).as_posix()
