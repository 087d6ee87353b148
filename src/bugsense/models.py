"""Data models for risk scoring and insight generation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .exceptions import InvalidMetricError

# Accepted keys per field: snake_case first, then the collector's camelCase
# and short forms.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "cyclomatic_complexity": ("cyclomatic_complexity", "cyclomaticComplexity", "cyclomatic"),
    "lines_of_code": ("lines_of_code", "linesOfCode", "loc"),
    "churn": ("churn",),
    "risk_score": ("risk_score", "riskScore", "risk"),
}


class Severity(Enum):
    """Insight severity. Ordinal for display only, see ``insights.ordering``."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class Category(Enum):
    """Classification tag for an insight. Purely informational.

    COUPLING here means a single file that is both complex and frequently
    changed, not cross-file co-change coupling.
    """

    COMPLEXITY = "complexity"
    CHURN = "churn"
    COUPLING = "coupling"
    SIZE = "size"


@dataclass(frozen=True)
class FileMetric:
    """Raw metrics for one file of an analysis snapshot."""

    path: str
    cyclomatic_complexity: int
    lines_of_code: int
    churn: int
    language: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "cyclomatic_complexity": self.cyclomatic_complexity,
            "lines_of_code": self.lines_of_code,
            "churn": self.churn,
            "language": self.language,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileMetric:
        return cls(
            path=_require(data, "path", ("path",)),
            cyclomatic_complexity=_metric(data, "cyclomatic_complexity"),
            lines_of_code=_metric(data, "lines_of_code"),
            churn=_metric(data, "churn"),
            language=data.get("language"),
        )


@dataclass(frozen=True)
class ScoredFileMetric(FileMetric):
    """A FileMetric with its computed risk score (2-decimal rounded)."""

    risk_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["risk_score"] = self.risk_score
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScoredFileMetric:
        base = FileMetric.from_dict(data)
        return cls(
            path=base.path,
            cyclomatic_complexity=base.cyclomatic_complexity,
            lines_of_code=base.lines_of_code,
            churn=base.churn,
            language=base.language,
            risk_score=_metric(data, "risk_score"),
        )


@dataclass(frozen=True)
class Insight:
    """One detected pattern across the whole file population.

    ``file_path`` and ``metric_value`` are set only by rules that cite the
    worst offending file.
    """

    message: str
    severity: Severity
    confidence: float  # 0.0-1.0, fixed per rule
    category: Category
    rule: str  # "critical_complexity", "large_file", etc.
    affected_files: int = 0
    file_path: Optional[str] = None
    metric_value: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "message": self.message,
            "severity": self.severity.value,
            "confidence": self.confidence,
            "category": self.category.value,
            "affected_files": self.affected_files,
            "file_path": self.file_path,
            "metric_value": self.metric_value,
        }


def _require(data: dict[str, Any], field: str, keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    raise InvalidMetricError(field, None, "missing", path=data.get("path"))


def _metric(data: dict[str, Any], field: str) -> Any:
    # Stored rows use null for "not measured"; treat it as zero.
    value = _require(data, field, _FIELD_ALIASES[field])
    return 0 if value is None else value
