"""Public API for BugSense.

Example:
    >>> from bugsense import FileMetric, analyze
    >>> result = analyze([FileMetric("src/app.py", 25, 600, 15)])
    >>> result.files[0].risk_score
    15.3
    >>> [i.rule for i in result.insights]
    ['critical_complexity', 'critical_churn', 'critical_risk', 'large_file', 'complexity_churn_coupling', 'average_complexity']
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from .config import AnalysisConfig
from .exceptions import AnalysisError, BugSenseError, InvalidMetricError
from .insights import generate_insights
from .logging_config import get_logger
from .models import FileMetric, Insight, ScoredFileMetric
from .scoring import score_files
from .summary import SnapshotSummary, summarize

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    files: list[ScoredFileMetric]
    insights: list[Insight]
    summary: SnapshotSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [f.to_dict() for f in self.files],
            "insights": [i.to_dict() for i in self.insights],
            "summary": self.summary.to_dict(),
        }


def analyze(
    metrics: Iterable[FileMetric], config: Optional[AnalysisConfig] = None
) -> AnalysisResult:
    """Score a snapshot, generate its insights and summarize it.

    Args:
        metrics: One FileMetric per analyzed file, paths unique
        config: Analysis configuration; defaults to AnalysisConfig()

    Returns:
        AnalysisResult with files in input order and insights in rule order.

    Raises:
        InvalidMetricError: If any metric is malformed
        AnalysisError: If the snapshot exceeds config.max_files
    """
    config = config or AnalysisConfig()
    metrics = list(metrics)

    if len(metrics) > config.max_files:
        raise AnalysisError(
            f"Snapshot has {len(metrics)} files, limit is {config.max_files}",
            details={"files": str(len(metrics)), "max_files": str(config.max_files)},
        )

    # Churn above the collector cap means the input didn't come from it
    for m in metrics:
        if isinstance(m.churn, (int, float)) and m.churn > config.max_churn:
            logger.warning(
                f"{m.path}: churn {m.churn} exceeds the collector cap of {config.max_churn}"
            )

    files = score_files(metrics, config.thresholds)
    insights = generate_insights(files, config.thresholds)
    summary = summarize(files, config.thresholds)

    logger.info(f"Analyzed {len(files)} files: {len(insights)} insights")
    return AnalysisResult(files=files, insights=insights, summary=summary)


def load_metrics(path: Path) -> list[FileMetric]:
    """Read file metrics from JSON.

    Accepts a top-level array of metric objects, or an object with a
    ``files`` array (the shape ``AnalysisResult.to_dict()`` writes).

    Raises:
        BugSenseError: If the file can't be read or has the wrong shape
        InvalidMetricError: If an entry misses a required key
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise BugSenseError(f"Cannot read metrics file: {path}", details={"reason": str(e)})

    if isinstance(data, dict):
        data = data.get("files")
    if not isinstance(data, list):
        raise BugSenseError(
            f"Metrics file must hold a JSON array of files: {path}",
            details={"found": type(data).__name__},
        )

    metrics = []
    for entry in data:
        if not isinstance(entry, dict):
            raise InvalidMetricError("entry", entry, "expected a JSON object")
        metrics.append(FileMetric.from_dict(entry))
    return metrics
