"""Tests for config.py - TOML loading, sanitizing and overrides."""

import logging

import pytest

from revisor.config import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_THRESHOLDS,
    AnalysisConfig,
    DetectorConfig,
    load_config,
)
from revisor.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point HOME at an empty directory and clear REVISOR_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in (
        "REVISOR_LANGUAGE",
        "REVISOR_MAX_CONCURRENT_FILES",
        "REVISOR_TIMEOUT_SECONDS",
        "REVISOR_MAX_FILE_SIZE_BYTES",
    ):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    return root


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    """Test the configuration used when nothing is set."""

    def test_defaults(self, project):
        config = load_config(project_dir=project)

        assert config.language == "javascript"
        assert config.max_concurrent_files == 10
        assert config.timeout_seconds == 30.0
        assert config.exclude_patterns == DEFAULT_EXCLUDE_PATTERNS
        for name, thresholds in DEFAULT_THRESHOLDS.items():
            assert config.detector_config(name).enabled
            assert dict(config.detector_config(name).thresholds) == thresholds

    def test_invalid_direct_values(self):
        with pytest.raises(ValueError):
            AnalysisConfig(max_concurrent_files=0)
        with pytest.raises(ValueError):
            AnalysisConfig(timeout_seconds=0)

    def test_detector_config_is_read_only(self):
        config = DetectorConfig(thresholds={"function": 10})
        with pytest.raises(TypeError):
            config.thresholds["function"] = 1


class TestConfigFiles:
    """Test discovery and merging of TOML files."""

    def test_project_file(self, project):
        _write(
            project / "revisor.toml",
            """
[detectors.complexity]
thresholds = { function = 12 }

[detectors.naming]
enabled = false

[analysis]
exclude_patterns = ["vendor/**"]

[performance]
max_concurrent_files = 4
timeout_seconds = 5
""",
        )
        config = load_config(project_dir=project)

        complexity = config.detector_config("complexity")
        assert complexity.thresholds["function"] == 12
        assert complexity.thresholds["file"] == 20
        assert not config.detector_config("naming").enabled
        assert config.exclude_patterns == ("vendor/**",)
        assert config.max_concurrent_files == 4
        assert config.timeout_seconds == 5.0

    def test_hidden_project_file(self, project):
        _write(project / ".revisor.toml", "[analysis]\nlanguage = 'typescript'\n")
        assert load_config(project_dir=project).language == "typescript"

    def test_global_then_project(self, project, isolated_env):
        _write(isolated_env / ".revisor.toml", "[performance]\nmax_concurrent_files = 3\ntimeout_seconds = 7\n")
        _write(project / "revisor.toml", "[performance]\nmax_concurrent_files = 6\n")
        config = load_config(project_dir=project)

        assert config.max_concurrent_files == 6
        assert config.timeout_seconds == 7.0

    def test_explicit_file_wins(self, project, tmp_path):
        _write(project / "revisor.toml", "[performance]\nmax_concurrent_files = 6\n")
        explicit = _write(tmp_path / "ci.toml", "[performance]\nmax_concurrent_files = 2\n")
        assert load_config(config_file=explicit, project_dir=project).max_concurrent_files == 2

    def test_missing_explicit_file(self, project, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(config_file=tmp_path / "missing.toml", project_dir=project)

    def test_invalid_toml_falls_back_to_defaults(self, project, caplog):
        caplog.set_level(logging.WARNING, logger="revisor")
        _write(project / "revisor.toml", "[detectors\nbroken = ")
        config = load_config(project_dir=project)

        assert config.max_concurrent_files == 10
        assert config.detector_config("size").thresholds["fileLines"] == 300
        assert "Invalid config file" in caplog.text


class TestSanitizing:
    """Malformed values fall back one field at a time."""

    def test_out_of_range_threshold(self, project, caplog):
        caplog.set_level(logging.WARNING, logger="revisor")
        _write(
            project / "revisor.toml",
            "[detectors.size]\nthresholds = { fileLines = 10, functionLines = 80 }\n",
        )
        size = load_config(project_dir=project).detector_config("size")

        assert size.thresholds["fileLines"] == 300
        assert size.thresholds["functionLines"] == 80
        assert "fileLines" in caplog.text

    def test_non_numeric_threshold(self, project):
        _write(project / "revisor.toml", '[detectors.duplication]\nthresholds = { minLines = "six" }\n')
        duplication = load_config(project_dir=project).detector_config("duplication")
        assert duplication.thresholds["minLines"] == 6

    def test_bad_performance_value(self, project):
        _write(project / "revisor.toml", "[performance]\nmax_concurrent_files = 500\n")
        assert load_config(project_dir=project).max_concurrent_files == 10

    def test_unknown_detector_is_ignored(self, project, caplog):
        caplog.set_level(logging.WARNING, logger="revisor")
        _write(project / "revisor.toml", "[detectors.spelling]\nenabled = true\n")
        config = load_config(project_dir=project)

        assert "spelling" not in config.detectors
        assert "spelling" in caplog.text

    def test_unsupported_language(self, project):
        _write(project / "revisor.toml", "[analysis]\nlanguage = 'ruby'\n")
        assert load_config(project_dir=project).language == "javascript"

    def test_naming_options(self, project):
        _write(
            project / "revisor.toml",
            """
[detectors.naming]
patterns = { constants = false, unknown = true, camelCase = "no" }
generic_words = ["stuff"]
abbreviations = "btn"
""",
        )
        options = load_config(project_dir=project).detector_config("naming").options

        assert options["patterns"] == {"constants": False}
        assert options["generic_words"] == ["stuff"]
        assert "abbreviations" not in options


class TestOverrides:
    """Test environment variables and keyword overrides."""

    def test_environment(self, project, monkeypatch):
        monkeypatch.setenv("REVISOR_MAX_CONCURRENT_FILES", "3")
        monkeypatch.setenv("REVISOR_LANGUAGE", "typescript")
        config = load_config(project_dir=project)

        assert config.max_concurrent_files == 3
        assert config.language == "typescript"

    def test_bad_environment_value(self, project, monkeypatch):
        monkeypatch.setenv("REVISOR_TIMEOUT_SECONDS", "soon")
        assert load_config(project_dir=project).timeout_seconds == 30.0

    def test_keyword_overrides(self, project, monkeypatch):
        monkeypatch.setenv("REVISOR_MAX_CONCURRENT_FILES", "3")
        config = load_config(project_dir=project, max_concurrent_files=8, language=None)

        assert config.max_concurrent_files == 8
        assert config.language == "javascript"

    def test_invalid_override(self, project):
        with pytest.raises(InvalidConfigError) as excinfo:
            load_config(project_dir=project, max_concurrent_files=0)
        assert excinfo.value.key == "max_concurrent_files"

    def test_unsupported_language_override(self, project):
        with pytest.raises(InvalidConfigError):
            load_config(project_dir=project, language="ruby")
