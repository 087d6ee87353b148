"""Snapshot aggregates for trend and heatmap displays.

These are the numbers a persistence layer stores next to the per-file rows:
average/max risk, how many files are high-risk, and per-folder risk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from .config import DEFAULT_THRESHOLDS, ThresholdConfig
from .models import ScoredFileMetric


@dataclass(frozen=True)
class SnapshotSummary:
    total_files: int = 0
    avg_complexity: float = 0.0
    avg_risk: float = 0.0
    max_risk: float = 0.0
    high_risk_count: int = 0

    def to_dict(self) -> dict:
        return {
            "total_files": self.total_files,
            "avg_complexity": self.avg_complexity,
            "avg_risk": self.avg_risk,
            "max_risk": self.max_risk,
            "high_risk_count": self.high_risk_count,
        }


@dataclass
class FolderStats:
    path: str  # "src", "src/api", ...
    avg_risk: float
    max_risk: float
    file_count: int
    files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "avg_risk": self.avg_risk,
            "max_risk": self.max_risk,
            "file_count": self.file_count,
            "files": list(self.files),
        }


def summarize(
    files: Sequence[ScoredFileMetric], thresholds: Optional[ThresholdConfig] = None
) -> SnapshotSummary:
    """Aggregate a scored snapshot. An empty snapshot summarizes to zeros."""
    if not files:
        return SnapshotSummary()

    t = thresholds or DEFAULT_THRESHOLDS
    risks = np.array([f.risk_score for f in files], dtype=float)
    complexities = np.array([f.cyclomatic_complexity for f in files], dtype=float)

    return SnapshotSummary(
        total_files=len(files),
        avg_complexity=float(np.mean(complexities)),
        avg_risk=float(np.mean(risks)),
        max_risk=float(np.max(risks)),
        high_risk_count=int(np.count_nonzero(risks >= t.high_risk_threshold)),
    )


def folder_heatmap(files: Sequence[ScoredFileMetric]) -> list[FolderStats]:
    """Risk statistics for every ancestor folder of every file.

    ``a/b/c.py`` counts toward both ``a`` and ``a/b``. Files at the
    repository root belong to no folder. Sorted by average risk, highest first.
    """
    risks_by_folder: dict[str, list[float]] = {}
    files_by_folder: dict[str, list[str]] = {}

    for f in files:
        parts = f.path.split("/")
        for depth in range(1, len(parts)):
            folder = "/".join(parts[:depth])
            risks_by_folder.setdefault(folder, []).append(f.risk_score)
            files_by_folder.setdefault(folder, []).append(f.path)

    folders = []
    for folder, risks in risks_by_folder.items():
        values = np.asarray(risks, dtype=float)
        folders.append(
            FolderStats(
                path=folder,
                avg_risk=float(values.mean()),
                max_risk=float(values.max()),
                file_count=len(files_by_folder[folder]),
                files=files_by_folder[folder],
            )
        )

    # sorted() is stable: equal averages keep first-seen folder order
    return sorted(folders, key=lambda s: s.avg_risk, reverse=True)


def risk_label(score: float, thresholds: Optional[ThresholdConfig] = None) -> str:
    t = thresholds or DEFAULT_THRESHOLDS
    if score < t.risk_low_band:
        return "Low"
    if score < t.risk_medium_band:
        return "Medium"
    if score < t.risk_high_band:
        return "High"
    return "Critical"


def complexity_label(complexity: float, thresholds: Optional[ThresholdConfig] = None) -> str:
    t = thresholds or DEFAULT_THRESHOLDS
    if complexity <= t.complexity_simple:
        return "Simple"
    if complexity <= t.complexity_moderate:
        return "Moderate"
    if complexity <= t.complexity_high_band:
        return "High"
    return "Very High"
