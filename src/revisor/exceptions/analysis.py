"""Analysis-related exceptions: file access, parsing, issue and report building."""

from pathlib import Path
from typing import List, Sequence

from .base import RevisorError


class AnalysisError(RevisorError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""

    def __init__(self, filepath: Path, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class UnsupportedLanguageError(AnalysisError):
    """Raised when attempting to analyze an unsupported language."""

    def __init__(self, language: str, supported_languages: List[str]):
        super().__init__(
            f"Unsupported language: {language}",
            details={"language": language, "supported": ", ".join(supported_languages)},
        )
        self.language = language
        self.supported_languages = supported_languages


class IssueBuildError(AnalysisError):
    """Raised when an issue is finalized with required fields missing."""

    def __init__(self, missing: Sequence[str]):
        super().__init__(
            "Issue is missing required fields",
            details={"missing": ", ".join(missing)},
        )
        self.missing = list(missing)


class ReportError(AnalysisError):
    """Raised when a report would be built from inconsistent data."""

    def __init__(self, reason: str, filepath: str = ""):
        details = {"reason": reason}
        if filepath:
            details["filepath"] = filepath
        super().__init__(f"Invalid report data: {reason}", details=details)
        self.reason = reason
        self.filepath = filepath
