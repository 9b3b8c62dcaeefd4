"""Detectors: each turns one parsed file into a list of issues."""

from .base import BaseDetector, Detector
from .complexity import ComplexityDetector
from .duplication import DuplicationDetector, DuplicationStats
from .naming import NamingDetector
from .registry import (
    DETECTORS,
    LANGUAGE_DETECTORS,
    create_detector,
    create_detectors_for_language,
    get_available_detectors,
    get_supported_languages,
)
from .size import SizeDetector

__all__ = [
    "BaseDetector",
    "Detector",
    "ComplexityDetector",
    "DuplicationDetector",
    "DuplicationStats",
    "NamingDetector",
    "SizeDetector",
    "DETECTORS",
    "LANGUAGE_DETECTORS",
    "create_detector",
    "create_detectors_for_language",
    "get_available_detectors",
    "get_supported_languages",
]
