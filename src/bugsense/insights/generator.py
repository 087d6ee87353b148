"""Insight generation over a scored snapshot.

Each rule filters the whole file population against a threshold and emits at
most one Insight. Rules are independent and additive: one pathological file
can trip critical complexity, critical risk and the coupling rule at once.
Output follows rule order, not severity; use ``ordering.sort_by_severity``
for display.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from ..models import Category, Insight, ScoredFileMetric, Severity
from ..scoring import format1
from ..validation import validate_scored_snapshot

logger = get_logger(__name__)

Files = Sequence[ScoredFileMetric]
Rule = Callable[[Files, ThresholdConfig], Optional[Insight]]


def _fmt(value: float) -> str:
    """Render thresholds without a trailing .0 (7.0 -> '7')."""
    return f"{value:g}"


def _worst(files: Files, key: Callable[[ScoredFileMetric], float]) -> ScoredFileMetric:
    # max() keeps the first of equal maxima, so ties go to input order
    return max(files, key=key)


# ── Subsets shared by more than one rule ──────────────────────────────


def critical_complexity_files(files: Files, t: ThresholdConfig) -> list[ScoredFileMetric]:
    return [f for f in files if f.cyclomatic_complexity > t.complexity_critical]


def critical_risk_files(files: Files, t: ThresholdConfig) -> list[ScoredFileMetric]:
    return [f for f in files if f.risk_score > t.risk_critical]


# ── Rules, in execution order ─────────────────────────────────────────


def critical_complexity(files: Files, t: ThresholdConfig) -> Optional[Insight]:
    matched = critical_complexity_files(files, t)
    if not matched:
        return None
    top = _worst(matched, lambda f: f.cyclomatic_complexity)
    return Insight(
        message=(
            f"🔴 {len(matched)} files with critical complexity "
            f"(>{_fmt(t.complexity_critical)}). Worst: {top.path} "
            f"({top.cyclomatic_complexity}). Urgent refactoring needed."
        ),
        severity=Severity.CRITICAL,
        confidence=t.confidence_critical_complexity,
        category=Category.COMPLEXITY,
        rule="critical_complexity",
        affected_files=len(matched),
        file_path=top.path,
        metric_value=top.cyclomatic_complexity,
    )


def high_complexity(files: Files, t: ThresholdConfig) -> Optional[Insight]:
    matched = [
        f
        for f in files
        if t.complexity_high < f.cyclomatic_complexity <= t.complexity_critical
    ]
    if not matched:
        return None
    return Insight(
        message=(
            f"⚠️ {len(matched)} files with high complexity "
            f"({_fmt(t.complexity_high)}-{_fmt(t.complexity_critical)}). "
            f"Consider splitting complex functions into smaller modules."
        ),
        severity=Severity.WARNING,
        confidence=t.confidence_high_complexity,
        category=Category.COMPLEXITY,
        rule="high_complexity",
        affected_files=len(matched),
    )


def critical_churn(files: Files, t: ThresholdConfig) -> Optional[Insight]:
    matched = [f for f in files if f.churn > t.churn_critical]
    if not matched:
        return None
    top = _worst(matched, lambda f: f.churn)
    return Insight(
        message=(
            f"🔴 {len(matched)} files changed very frequently "
            f"(>{_fmt(t.churn_critical)} commits). {top.path} has {top.churn} "
            f"changes. Possible code instability."
        ),
        severity=Severity.CRITICAL,
        confidence=t.confidence_critical_churn,
        category=Category.CHURN,
        rule="critical_churn",
        affected_files=len(matched),
        file_path=top.path,
        metric_value=top.churn,
    )


def high_churn(files: Files, t: ThresholdConfig) -> Optional[Insight]:
    matched = [f for f in files if t.churn_high < f.churn <= t.churn_critical]
    if not matched:
        return None
    return Insight(
        message=(
            f"⚠️ {len(matched)} files with a high change rate "
            f"({_fmt(t.churn_high)}-{_fmt(t.churn_critical)} commits). "
            f"Add tests to prevent regressions."
        ),
        severity=Severity.WARNING,
        confidence=t.confidence_high_churn,
        category=Category.CHURN,
        rule="high_churn",
        affected_files=len(matched),
    )


def critical_risk(files: Files, t: ThresholdConfig) -> Optional[Insight]:
    matched = critical_risk_files(files, t)
    if not matched:
        return None
    top = _worst(matched, lambda f: f.risk_score)
    return Insight(
        message=(
            f"🔴 {len(matched)} files at very high risk (>{_fmt(t.risk_critical)}). "
            f"{top.path} has risk score {format1(top.risk_score)}. "
            f"Top refactoring priority."
        ),
        severity=Severity.CRITICAL,
        confidence=t.confidence_critical_risk,
        # Risk blends all three inputs but is driven mostly by complexity
        category=Category.COMPLEXITY,
        rule="critical_risk",
        affected_files=len(matched),
        file_path=top.path,
        metric_value=top.risk_score,
    )


def medium_risk(files: Files, t: ThresholdConfig) -> Optional[Insight]:
    matched = [f for f in files if t.risk_medium < f.risk_score <= t.risk_critical]
    if not matched:
        return None
    return Insight(
        message=(
            f"⚠️ {len(matched)} files at medium risk "
            f"({_fmt(t.risk_medium)}-{_fmt(t.risk_critical)}). "
            f"Plan gradual refactoring."
        ),
        severity=Severity.WARNING,
        confidence=t.confidence_medium_risk,
        category=Category.COMPLEXITY,
        rule="medium_risk",
        affected_files=len(matched),
    )


def large_file(files: Files, t: ThresholdConfig) -> Optional[Insight]:
    matched = [f for f in files if f.lines_of_code > t.large_file_loc]
    if not matched:
        return None
    top = _worst(matched, lambda f: f.lines_of_code)
    return Insight(
        message=(
            f"⚠️ {len(matched)} very large files (>{_fmt(t.large_file_loc)} LOC). "
            f"{top.path} has {top.lines_of_code} lines. "
            f"Consider splitting into smaller modules."
        ),
        severity=Severity.WARNING,
        confidence=t.confidence_large_file,
        category=Category.SIZE,
        rule="large_file",
        affected_files=len(matched),
        file_path=top.path,
        metric_value=top.lines_of_code,
    )


def complexity_churn_coupling(files: Files, t: ThresholdConfig) -> Optional[Insight]:
    matched = [
        f
        for f in files
        if f.cyclomatic_complexity > t.coupling_complexity and f.churn > t.coupling_churn
    ]
    if not matched:
        return None
    return Insight(
        message=(
            f"⚠️ {len(matched)} files have both high complexity and high churn. "
            f"These files are particularly fragile and need attention."
        ),
        severity=Severity.WARNING,
        confidence=t.confidence_coupling,
        category=Category.COUPLING,
        rule="complexity_churn_coupling",
        affected_files=len(matched),
    )


def all_clear(files: Files, t: ThresholdConfig) -> Optional[Insight]:
    if critical_risk_files(files, t) or critical_complexity_files(files, t):
        return None
    return Insight(
        message=(
            "✅ No critical files detected. The codebase is in good shape. "
            "Keep following best practices!"
        ),
        severity=Severity.INFO,
        # Absence of problems doesn't guarantee quality
        confidence=t.confidence_all_clear,
        category=Category.COMPLEXITY,
        rule="all_clear",
        affected_files=0,
    )


def average_complexity(files: Files, t: ThresholdConfig) -> Optional[Insight]:
    mean = sum(f.cyclomatic_complexity for f in files) / len(files)
    if mean <= t.average_complexity_target:
        return None
    return Insight(
        message=(
            f"💡 Average complexity is {format1(mean)}. "
            f"Ideal target: <{_fmt(t.average_complexity_target)}. "
            f"Apply SOLID principles and design patterns."
        ),
        severity=Severity.INFO,
        confidence=t.confidence_average_complexity,
        category=Category.COMPLEXITY,
        rule="average_complexity",
        affected_files=len(files),
        metric_value=mean,
    )


RULES: tuple[Rule, ...] = (
    critical_complexity,
    high_complexity,
    critical_churn,
    high_churn,
    critical_risk,
    medium_risk,
    large_file,
    complexity_churn_coupling,
    all_clear,
    average_complexity,
)


def generate_insights(
    files: Iterable[ScoredFileMetric], thresholds: Optional[ThresholdConfig] = None
) -> list[Insight]:
    """Run every rule over a scored snapshot.

    An empty snapshot means "no data", not "all healthy": it returns [] and
    the all-clear insight is not emitted.

    Raises:
        InvalidMetricError: If any file carries a malformed metric or risk score.
    """
    files = list(files)
    if not files:
        return []

    t = thresholds or DEFAULT_THRESHOLDS
    validate_scored_snapshot(files)

    insights = []
    for rule in RULES:
        insight = rule(files, t)
        if insight is not None:
            insights.append(insight)

    logger.debug(f"Generated {len(insights)} insights for {len(files)} files")
    return insights
