"""
BugSense - Bug-proneness scoring for repository files

Blends cyclomatic complexity, commit churn and size into a per-file risk
score, then runs threshold rules over the whole snapshot to produce
human-readable insights.
"""

__version__ = "0.1.0"

from .api import AnalysisResult, analyze, load_metrics
from .config import DEFAULT_THRESHOLDS, AnalysisConfig, ThresholdConfig, load_config
from .exceptions import BugSenseError, InvalidMetricError
from .insights import generate_insights, sort_by_severity
from .models import Category, FileMetric, Insight, ScoredFileMetric, Severity
from .scoring import score, score_file, score_files

__all__ = [
    "analyze",  # Main entry point
    "load_metrics",
    "AnalysisResult",
    "score",
    "score_file",
    "score_files",
    "generate_insights",
    "sort_by_severity",
    "FileMetric",
    "ScoredFileMetric",
    "Insight",
    "Severity",
    "Category",
    "ThresholdConfig",
    "AnalysisConfig",
    "DEFAULT_THRESHOLDS",
    "load_config",
    "BugSenseError",
    "InvalidMetricError",
]
