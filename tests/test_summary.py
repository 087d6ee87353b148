"""Tests for snapshot summaries, folder heatmap and display labels."""

import pytest

from bugsense.config import ThresholdConfig
from bugsense.summary import (
    SnapshotSummary,
    complexity_label,
    folder_heatmap,
    risk_label,
    summarize,
)


class TestSummarize:
    def test_empty_is_zeros(self):
        assert summarize([]) == SnapshotSummary()

    def test_aggregates(self, scored):
        files = [
            scored("src/api/routes.py", risk=15.3, cyclomatic=25),
            scored("src/api/auth.py", risk=7.0, cyclomatic=12),
            scored("src/util.py", risk=1.15, cyclomatic=2),
            scored("setup.py", risk=0.39, cyclomatic=1),
        ]
        summary = summarize(files)
        assert summary.total_files == 4
        assert summary.avg_risk == pytest.approx(5.96)
        assert summary.max_risk == 15.3
        assert summary.avg_complexity == pytest.approx(10.0)
        # Risk exactly at the high-risk threshold counts
        assert summary.high_risk_count == 2

    def test_custom_high_risk_threshold(self, scored):
        files = [scored("a.py", risk=5.0), scored("b.py", risk=3.0)]
        summary = summarize(files, ThresholdConfig(high_risk_threshold=4.0))
        assert summary.high_risk_count == 1

    def test_to_dict(self, scored):
        data = summarize([scored("a.py", risk=2.0, cyclomatic=4)]).to_dict()
        assert data == {
            "total_files": 1,
            "avg_complexity": 4.0,
            "avg_risk": 2.0,
            "max_risk": 2.0,
            "high_risk_count": 0,
        }


class TestFolderHeatmap:
    def test_every_ancestor_folder(self, scored):
        files = [
            scored("src/api/routes.py", risk=15.3),
            scored("src/api/auth.py", risk=7.0),
            scored("src/util.py", risk=1.15),
            scored("setup.py", risk=0.39),
        ]
        stats = folder_heatmap(files)
        assert [s.path for s in stats] == ["src/api", "src"]

        api, src = stats
        assert api.file_count == 2
        assert api.avg_risk == pytest.approx(11.15)
        assert api.max_risk == 15.3
        assert api.files == ["src/api/routes.py", "src/api/auth.py"]

        assert src.file_count == 3
        assert src.avg_risk == pytest.approx((15.3 + 7.0 + 1.15) / 3)

    def test_root_files_have_no_folder(self, scored):
        assert folder_heatmap([scored("setup.py", risk=3.0)]) == []

    def test_ties_keep_first_seen_order(self, scored):
        files = [scored("b/x.py", risk=2.0), scored("a/y.py", risk=2.0)]
        assert [s.path for s in folder_heatmap(files)] == ["b", "a"]

    def test_empty(self):
        assert folder_heatmap([]) == []


class TestLabels:
    @pytest.mark.parametrize(
        "score,label",
        [(0.0, "Low"), (2.99, "Low"), (3.0, "Medium"), (6.99, "Medium"), (7.0, "High"), (10.0, "Critical")],
    )
    def test_risk_label(self, score, label):
        assert risk_label(score) == label

    @pytest.mark.parametrize(
        "complexity,label",
        [(0, "Simple"), (5, "Simple"), (6, "Moderate"), (10, "Moderate"), (15, "High"), (16, "Very High")],
    )
    def test_complexity_label(self, complexity, label):
        assert complexity_label(complexity) == label
