"""Tests for the revisor command line interface."""

import json

import pytest
from typer.testing import CliRunner

from revisor.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))


@pytest.fixture
def project(write_files, summarize_source):
    return write_files(
        {
            "src/orders.js": summarize_source,
            "src/copy.js": summarize_source,
            "src/util.js": "function x() {}\n",
        }
    )


class TestAnalyzeCommand:
    """Test `revisor analyze`."""

    def test_json_output(self, project):
        result = runner.invoke(app, ["analyze", str(project), "--json", "--quiet"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["summary"]["total_files"] == 3
        assert [f["path"] for f in data["files"]] == ["src/copy.js", "src/orders.js", "src/util.js"]
        categories = {c["category"] for c in data["categories"]}
        assert {"duplication", "naming"} <= categories

    def test_terminal_output(self, project):
        result = runner.invoke(app, ["analyze", str(project), "--quiet", "--no-snippets"])

        assert result.exit_code == 0, result.output
        assert "Summary" in result.stdout
        assert "src/util.js" in result.stdout
        assert 'Poor function name: "x"' in result.stdout

    def test_output_file(self, project, tmp_path):
        target = tmp_path / "report.json"
        result = runner.invoke(app, ["analyze", str(project), "-o", str(target), "--quiet"])

        assert result.exit_code == 0, result.output
        assert json.loads(target.read_text(encoding="utf-8"))["summary"]["total_files"] == 3

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing"), "--quiet"])

        assert result.exit_code == 1
        assert "Error:" in result.stdout

    def test_fail_under(self, project):
        failing = runner.invoke(app, ["analyze", str(project), "--json", "--quiet", "--fail-under", "100"])
        passing = runner.invoke(app, ["analyze", str(project), "--json", "--quiet", "--fail-under", "0"])

        assert failing.exit_code == 1
        assert passing.exit_code == 0

    def test_project_config_is_used(self, project):
        (project / "revisor.toml").write_text("[detectors.naming]\nenabled = false\n", encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(project), "--json", "--quiet"])

        assert result.exit_code == 0, result.output
        categories = {c["category"] for c in json.loads(result.stdout)["categories"]}
        assert "naming" not in categories

    def test_unknown_language(self, project):
        result = runner.invoke(app, ["analyze", str(project), "--language", "ruby"])
        assert result.exit_code != 0
        assert "ruby" in result.output


class TestDetectorsCommand:
    """Test `revisor detectors`."""

    def test_lists_detectors(self):
        result = runner.invoke(app, ["detectors"])

        assert result.exit_code == 0, result.output
        for name in ("complexity", "naming", "size", "duplication"):
            assert name in result.stdout
        assert "function=10" in result.stdout

    def test_missing_config_file(self, tmp_path):
        result = runner.invoke(app, ["detectors", "--config", str(tmp_path / "nope.toml")])

        assert result.exit_code == 1
        assert "Config file not found" in result.stdout
