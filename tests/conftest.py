"""Shared test fixtures for BugSense tests."""

import json

import pytest

from bugsense.models import FileMetric, ScoredFileMetric
from bugsense.scoring import score_file


def make_scored(path, cyclomatic=0, loc=0, churn=0, risk=None):
    """Build a ScoredFileMetric; risk defaults to the formula's value."""
    metric = FileMetric(path, cyclomatic, loc, churn)
    if risk is None:
        return score_file(metric)
    return ScoredFileMetric(
        path=path,
        cyclomatic_complexity=cyclomatic,
        lines_of_code=loc,
        churn=churn,
        risk_score=risk,
    )


@pytest.fixture
def scored():
    """Factory fixture for ScoredFileMetric."""
    return make_scored


@pytest.fixture
def healthy_files():
    """Small, stable files: nothing crosses a warning threshold."""
    return [
        make_scored("src/a.py", cyclomatic=2, loc=40, churn=1),
        make_scored("src/b.py", cyclomatic=3, loc=80, churn=2),
        make_scored("README.py", cyclomatic=1, loc=10, churn=0),
    ]


@pytest.fixture
def pathological_file():
    """One file that is complex, churned and large (risk 15.3)."""
    return make_scored("src/engine.py", cyclomatic=25, loc=600, churn=15)


@pytest.fixture
def metrics_payload():
    """Raw JSON metrics in the collector's camelCase shape."""
    return [
        {"path": "src/api/routes.py", "cyclomatic": 25, "loc": 600, "churn": 15},
        {"path": "src/api/auth.py", "cyclomaticComplexity": 12, "linesOfCode": 200, "churn": 7},
        {"path": "src/util.py", "cyclomatic_complexity": 2, "lines_of_code": 50, "churn": 1},
        {"path": "setup.py", "cyclomatic": 1, "loc": 30, "churn": 0},
    ]


@pytest.fixture
def metrics_file(tmp_path, metrics_payload):
    path = tmp_path / "metrics.json"
    path.write_text(json.dumps(metrics_payload), encoding="utf-8")
    return path
