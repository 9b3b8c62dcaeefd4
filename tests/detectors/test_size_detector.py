"""Tests for detectors/size.py."""

import pytest

from revisor.config import DetectorConfig
from revisor.detectors.size import SizeDetector, severity_for_ratio
from revisor.models.issue import Category, Severity


def _long_function(total_lines, name="process"):
    """A function spanning exactly ``total_lines`` lines."""
    body = "  step();\n" * (total_lines - 2)
    return f"function {name}() {{\n{body}}}\n"


def _long_class(method_lines):
    body = "    step();\n" * (method_lines - 2)
    return f"class Worker {{\n  run() {{\n{body}  }}\n}}\n"


class TestSeverityForRatio:
    """Test the overshoot -> severity mapping."""

    @pytest.mark.parametrize(
        "actual,threshold,expected",
        [
            (51, 50, Severity.LOW),
            (75, 50, Severity.MEDIUM),
            (100, 50, Severity.HIGH),
            (150, 50, Severity.CRITICAL),
            (1, 0, Severity.CRITICAL),
        ],
    )
    def test_ratio_bands(self, actual, threshold, expected):
        assert severity_for_ratio(actual, threshold) == expected


class TestFunctionSize:
    """Test function length and parameter checks."""

    def test_short_function_passes(self, parse_js):
        assert SizeDetector().detect(parse_js(_long_function(50))) == []

    def test_function_twice_the_limit(self, parse_js):
        issues = SizeDetector().detect(parse_js(_long_function(100)))

        assert len(issues) == 1
        issue = issues[0]
        assert issue.category == Category.SIZE
        assert issue.rule == "function-length"
        assert issue.severity == Severity.HIGH
        assert issue.title == "Large function: 100 lines"
        assert '"process"' in issue.description

    def test_function_three_times_the_limit(self, parse_js):
        issues = SizeDetector().detect(parse_js(_long_function(150)))
        assert [i.severity for i in issues] == [Severity.CRITICAL]

    def test_too_many_parameters(self, parse_js):
        issues = SizeDetector().detect(parse_js("function configure(a, b, c, d, e, f) {}\n"))

        assert len(issues) == 1
        assert issues[0].rule == "function-parameters"
        assert issues[0].title == "Too many parameters: 6"
        assert issues[0].severity == Severity.LOW

    def test_arrow_parameters(self, parse_js):
        detector = SizeDetector(DetectorConfig(thresholds={"functionParameters": 2}))
        issues = detector.detect(parse_js("const join = (a, b, c) => a + b + c;\n"))
        assert [i.title for i in issues] == ["Too many parameters: 3"]
        assert '"join"' in issues[0].description

    def test_single_bare_arrow_parameter(self, parse_js):
        detector = SizeDetector(DetectorConfig(thresholds={"functionParameters": 0}))
        issues = detector.detect(parse_js("const twice = x => x * 2;\n"))
        assert [i.title for i in issues] == ["Too many parameters: 1"]


class TestMethodAndClassSize:
    """Test methods and classes."""

    def test_method_uses_method_limit_only(self, parse_js):
        issues = SizeDetector().detect(parse_js(_long_class(40)))

        assert len(issues) == 1
        assert issues[0].rule == "method-length"
        assert issues[0].location.line == 2

    def test_method_parameters(self, parse_js):
        code = "class Worker {\n  run(a, b, c, d, e, f) {}\n}\n"
        issues = SizeDetector().detect(parse_js(code))
        assert [i.rule for i in issues] == ["method-parameters"]

    def test_large_class(self, parse_js):
        detector = SizeDetector(DetectorConfig(thresholds={"classLines": 10}))
        issues = detector.detect(parse_js(_long_class(20)))

        rules = [i.rule for i in issues]
        assert rules == ["class-size"]
        assert issues[0].severity == Severity.HIGH
        assert '"Worker"' in issues[0].description

    def test_large_abstract_class(self, parse_js):
        detector = SizeDetector(DetectorConfig(thresholds={"classLines": 10}))
        issues = detector.detect(parse_js("abstract " + _long_class(20), "worker.ts"))

        assert [i.rule for i in issues] == ["class-size"]
        assert '"Worker"' in issues[0].description


class TestFileSize:
    """Test the file length check."""

    def test_long_file(self, parse_js):
        code = "".join(f"const value{i} = {i};\n" for i in range(25))
        detector = SizeDetector(DetectorConfig(thresholds={"fileLines": 10}))
        issues = detector.detect(parse_js(code))

        assert len(issues) == 1
        issue = issues[0]
        assert issue.rule == "file-size"
        assert issue.severity == Severity.HIGH
        assert issue.location.line == 1
        assert issue.code_snippet is None

    def test_comments_do_not_count(self, parse_js):
        code = "// note\n" * 40 + "const value = 1;\n"
        detector = SizeDetector(DetectorConfig(thresholds={"fileLines": 10}))
        assert detector.detect(parse_js(code)) == []
