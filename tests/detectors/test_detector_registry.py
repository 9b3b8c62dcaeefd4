"""Tests for detectors/registry.py and the BaseDetector template."""

import logging

import pytest

from revisor.config import DetectorConfig, default_detector_configs
from revisor.detectors import (
    BaseDetector,
    ComplexityDetector,
    Detector,
    DuplicationDetector,
    NamingDetector,
    SizeDetector,
    create_detector,
    create_detectors_for_language,
    get_available_detectors,
    get_supported_languages,
)
from revisor.exceptions import UnsupportedLanguageError
from revisor.models.issue import IssueLocation
from revisor.scanning.syntax import ParsedFile, SyntaxNode


class ExplodingDetector(BaseDetector):
    name = "exploding"
    DEFAULT_THRESHOLDS = {"limit": 5}

    def _detect(self, parsed_file):
        raise RuntimeError("boom")


def _parsed(content="a\nb\nc\nd\n"):
    return ParsedFile(path="x.js", content=content, ast=SyntaxNode("program"), lines_of_code=4)


class TestRegistry:
    """Test detector lookup and instantiation."""

    def test_supported_languages(self):
        assert get_supported_languages() == ["javascript", "typescript"]

    def test_available_detectors(self):
        assert get_available_detectors("typescript") == [
            "complexity",
            "naming",
            "size",
            "duplication",
        ]
        assert get_available_detectors("cobol") == []

    def test_create_detector(self):
        assert isinstance(create_detector("naming"), NamingDetector)
        with pytest.raises(ValueError, match="Unknown detector"):
            create_detector("spelling")

    def test_create_for_language(self):
        detectors = create_detectors_for_language("javascript", default_detector_configs())
        assert [type(d) for d in detectors] == [
            ComplexityDetector,
            NamingDetector,
            SizeDetector,
            DuplicationDetector,
        ]

    def test_disabled_detectors_are_skipped(self):
        configs = default_detector_configs()
        configs["naming"] = DetectorConfig(enabled=False)
        names = [d.name for d in create_detectors_for_language("javascript", configs)]
        assert names == ["complexity", "size", "duplication"]

    def test_fresh_instances_per_call(self):
        first = create_detectors_for_language("javascript")
        second = create_detectors_for_language("javascript")
        assert first[-1] is not second[-1]

    def test_unknown_language(self):
        with pytest.raises(UnsupportedLanguageError) as excinfo:
            create_detectors_for_language("ruby")
        assert excinfo.value.supported_languages == ["javascript", "typescript"]

    def test_only_duplication_is_stateful(self):
        stateful = [d.name for d in create_detectors_for_language("javascript") if d.stateful]
        assert stateful == ["duplication"]

    def test_protocol(self):
        for detector in create_detectors_for_language("javascript"):
            assert isinstance(detector, Detector)


class TestBaseDetector:
    """Test behavior every detector inherits."""

    def test_failures_degrade_to_no_issues(self, caplog):
        caplog.set_level(logging.WARNING, logger="revisor")
        assert ExplodingDetector().detect(_parsed()) == []
        assert "boom" in caplog.text

    def test_disabled_detector_is_not_run(self):
        assert ExplodingDetector(DetectorConfig(enabled=False)).detect(_parsed()) == []

    @pytest.mark.parametrize("value", ["ten", True, float("nan"), None])
    def test_malformed_threshold_uses_default(self, value):
        thresholds = {} if value is None else {"limit": value}
        detector = ExplodingDetector(DetectorConfig(thresholds=thresholds))
        assert detector.get_threshold("limit") == 5

    def test_configured_threshold(self):
        detector = ExplodingDetector(DetectorConfig(thresholds={"limit": 7.5}))
        assert detector.get_threshold("limit") == 7.5

    def test_update_config(self):
        detector = ExplodingDetector()
        detector.update_config(DetectorConfig(enabled=False))
        assert not detector.enabled

    def test_location_without_source_position(self):
        location = ExplodingDetector().create_location(_parsed(), SyntaxNode("program"))
        assert (location.line, location.column) == (1, 0)

    def test_code_snippet(self):
        location = IssueLocation(file="x.js", line=2, column=0, end_line=3)
        snippet = ExplodingDetector().extract_code_snippet(_parsed(), location)
        assert snippet.split("\n") == [
            "    1: a",
            "→   2: b",
            "    3: c",
            "    4: d",
        ]

    def test_code_snippet_at_file_start(self):
        location = IssueLocation(file="x.js", line=1, column=0)
        snippet = ExplodingDetector().extract_code_snippet(_parsed(), location)
        assert snippet.split("\n") == ["→   1: a", "    2: b"]

    def test_issue_ids_are_unique(self):
        detector = ExplodingDetector()
        ids = {detector.generate_issue_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(i.startswith("exploding_") for i in ids)
