"""
Revisor - JavaScript / TypeScript code quality analysis

Walks tree-sitter syntax trees with a set of detectors (complexity, naming,
size, cross-file duplication) and folds their issues into a scored report.
"""

__version__ = "0.1.0"

from .config import AnalysisConfig, DetectorConfig, load_config
from .core.analyzer import CodebaseAnalyzer
from .models import Category, Issue, Report, Severity

__all__ = [
    "CodebaseAnalyzer",
    "AnalysisConfig",
    "DetectorConfig",
    "load_config",
    "Category",
    "Issue",
    "Report",
    "Severity",
]
