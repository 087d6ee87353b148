"""Tests for the BugSense exception hierarchy."""

import pytest

from bugsense.exceptions import (
    AnalysisError,
    BugSenseError,
    ConfigurationError,
    InvalidConfigError,
    InvalidMetricError,
)


class TestBugSenseError:
    def test_plain_message(self):
        assert str(BugSenseError("boom")) == "boom"

    def test_details_appended(self):
        error = BugSenseError("boom", details={"path": "a.py", "reason": "bad"})
        assert str(error) == "boom (path=a.py, reason=bad)"
        assert error.message == "boom"


class TestInvalidMetricError:
    def test_fields(self):
        error = InvalidMetricError("churn", -1, "negative", path="src/a.py")
        assert error.field == "churn"
        assert error.value == -1
        assert error.reason == "negative"
        assert error.path == "src/a.py"
        assert str(error).startswith("Invalid metric 'churn' for src/a.py")

    def test_without_path(self):
        error = InvalidMetricError("churn", -1, "negative")
        assert "path" not in error.details
        assert str(error).startswith("Invalid metric 'churn' (")

    @pytest.mark.parametrize("base", [AnalysisError, BugSenseError, Exception])
    def test_hierarchy(self, base):
        assert isinstance(InvalidMetricError("churn", -1, "negative"), base)


class TestInvalidConfigError:
    def test_fields(self):
        error = InvalidConfigError("weights", "1.500", "risk weights must sum to 1.0")
        assert isinstance(error, ConfigurationError)
        assert error.key == "weights"
        assert "weights" in str(error)
