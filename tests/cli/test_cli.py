"""Tests for the bugsense CLI commands."""

import json
import logging

import pytest
from typer.testing import CliRunner

from bugsense import __version__
from bugsense.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user/project config files out of CLI runs."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def healthy_metrics_file(tmp_path):
    path = tmp_path / "healthy.json"
    path.write_text(
        json.dumps([{"path": "src/a.py", "cyclomatic": 2, "loc": 40, "churn": 1}]),
        encoding="utf-8",
    )
    return path


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestLogFile:
    def test_log_file_collects_debug_records(self, metrics_file, tmp_path):
        log_file = tmp_path / "run.log"
        result = runner.invoke(
            app, ["--log-file", str(log_file), "analyze", str(metrics_file), "--json"]
        )
        assert result.exit_code == 0, result.output
        # stdout stays pure JSON
        json.loads(result.stdout)

        root = logging.getLogger()
        for handler in root.handlers[:]:
            if isinstance(handler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()
        text = log_file.read_text(encoding="utf-8")
        assert "Scored 4 files" in text
        assert "Analyzed 4 files" in text


class TestAnalyzeCommand:
    def test_json_output(self, metrics_file):
        result = runner.invoke(app, ["analyze", str(metrics_file), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [f["risk_score"] for f in data["files"]] == [15.3, 7.0, 1.15, 0.39]
        assert data["insights"][0]["rule"] == "critical_complexity"
        assert data["summary"]["total_files"] == 4

    def test_json_by_severity(self, metrics_file):
        result = runner.invoke(app, ["analyze", str(metrics_file), "--json", "--by-severity"])
        assert result.exit_code == 0, result.output
        severities = [i["severity"] for i in json.loads(result.stdout)["insights"]]
        assert severities == sorted(
            severities, key=lambda s: {"critical": 0, "warning": 1, "info": 2}[s]
        )
        assert severities[:3] == ["critical", "critical", "critical"]

    def test_rich_output(self, metrics_file):
        result = runner.invoke(app, ["analyze", str(metrics_file), "--top", "2"])
        assert result.exit_code == 0, result.output
        assert "Riskiest Files" in result.output
        assert "Insights" in result.output
        assert "CRITICAL" in result.output

    def test_fail_on_critical(self, metrics_file):
        result = runner.invoke(app, ["analyze", str(metrics_file), "--json", "--fail-on", "critical"])
        assert result.exit_code == 1

    def test_fail_on_passes_when_healthy(self, healthy_metrics_file):
        result = runner.invoke(
            app, ["analyze", str(healthy_metrics_file), "--json", "--fail-on", "warning"]
        )
        assert result.exit_code == 0, result.output
        rules = [i["rule"] for i in json.loads(result.stdout)["insights"]]
        assert rules == ["all_clear"]

    def test_invalid_metrics_exit_1(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps([{"path": "a.py", "cyclomatic": -3, "loc": 1, "churn": 1}]),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_null_path_exit_1(self, tmp_path):
        path = tmp_path / "nopath.json"
        path.write_text(
            json.dumps([{"path": None, "cyclomatic": 1, "loc": 1, "churn": 1}]),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 1
        assert not isinstance(result.exception, TypeError)
        assert "Invalid metric 'path'" in result.output

    def test_missing_file_is_usage_error(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "absent.json")])
        assert result.exit_code == 2

    def test_empty_snapshot(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]", encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 0
        assert "Nothing to analyze" in result.output

    def test_config_file_changes_thresholds(self, metrics_file, tmp_path):
        config = tmp_path / "strict.toml"
        config.write_text("[thresholds]\nlarge_file_loc = 700\n", encoding="utf-8")
        result = runner.invoke(app, ["--config", str(config), "analyze", str(metrics_file), "--json"])
        assert result.exit_code == 0, result.output
        rules = [i["rule"] for i in json.loads(result.stdout)["insights"]]
        assert "large_file" not in rules


class TestFoldersCommand:
    def test_json_output(self, metrics_file):
        result = runner.invoke(app, ["folders", str(metrics_file), "--json"])
        assert result.exit_code == 0, result.output
        folders = json.loads(result.stdout)
        assert [f["path"] for f in folders] == ["src/api", "src"]
        assert folders[0]["file_count"] == 2

    def test_rich_output(self, metrics_file):
        result = runner.invoke(app, ["folders", str(metrics_file)])
        assert result.exit_code == 0, result.output
        assert "Folder Risk" in result.output

    def test_non_string_path_exit_1(self, tmp_path):
        path = tmp_path / "intpath.json"
        path.write_text(
            json.dumps([{"path": 5, "cyclomatic": 1, "loc": 1, "churn": 1}]),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["folders", str(path)])
        assert result.exit_code == 1
        assert not isinstance(result.exception, AttributeError)
        assert "Invalid metric 'path'" in result.output

    def test_root_only(self, tmp_path):
        path = tmp_path / "root.json"
        path.write_text(
            json.dumps([{"path": "setup.py", "cyclomatic": 1, "loc": 1, "churn": 1}]),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["folders", str(path)])
        assert result.exit_code == 0
        assert "No folders found" in result.output


class TestLocCommand:
    def test_json_output(self, tmp_path):
        source = tmp_path / "app.py"
        source.write_text("# comment\nimport os\n\nprint(os.name)\n", encoding="utf-8")
        result = runner.invoke(app, ["loc", str(source), "--json"])
        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert rows[0]["lines_of_code"] == 2
        assert rows[0]["language"] == "Python"
