"""Risk scoring: one scalar bug-proneness estimate per file.

    risk = round2(cyclomatic * 0.30 + churn * 0.40 + (loc / 100) * 0.30)

A heuristic linear blend, not a statistically fitted model. The inputs sit on
different natural scales (branch counts, commit counts, LOC/100) and the
weights are applied to them as-is.
"""

from __future__ import annotations

import decimal
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

from .config import DEFAULT_THRESHOLDS, ThresholdConfig
from .exceptions import InvalidMetricError
from .logging_config import get_logger
from .models import FileMetric, ScoredFileMetric
from .validation import validate_metric, validate_snapshot

logger = get_logger(__name__)

_CENTS = Decimal("0.01")
_TENTHS = Decimal("0.1")


def _round_half_up(value: float, exponent: Decimal) -> Decimal:
    # Decimal(float) is the exact binary value, so 1.005 (really
    # 1.00499999...) stays below the half and rounds down
    with decimal.localcontext() as ctx:
        # Wide enough for any finite float's integer part
        ctx.prec = 400
        return Decimal(float(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero.

    Same result as JavaScript ``parseFloat(x.toFixed(2))``, so scores agree
    with rows written by the collector. 0.015 -> 0.01 and 7.005 -> 7.0,
    since neither is exactly representable and both sit just below the half.
    """
    return float(_round_half_up(value, _CENTS))


def format1(value: float) -> str:
    """Render with one decimal, halves away from zero (``x.toFixed(1)``)."""
    return str(_round_half_up(value, _TENTHS))


def score(metrics: Any, thresholds: Optional[ThresholdConfig] = None) -> float:
    """Compute the risk score for one file.

    Args:
        metrics: FileMetric, or any object with cyclomatic_complexity,
            churn and lines_of_code attributes
        thresholds: Weight table; defaults to DEFAULT_THRESHOLDS

    Returns:
        Non-negative risk score rounded to 2 decimals.

    Raises:
        InvalidMetricError: If any input is negative, non-finite or not a number.
    """
    t = thresholds or DEFAULT_THRESHOLDS
    validate_metric(metrics)

    complexity_score = metrics.cyclomatic_complexity * t.weight_complexity
    churn_score = metrics.churn * t.weight_churn
    size_score = (metrics.lines_of_code / t.loc_normalizer) * t.weight_size

    raw = complexity_score + churn_score + size_score
    if math.isinf(raw):
        raise InvalidMetricError(
            "metrics", raw, "risk score overflows", path=getattr(metrics, "path", None)
        )
    return round2(raw)


def score_file(metric: FileMetric, thresholds: Optional[ThresholdConfig] = None) -> ScoredFileMetric:
    """Attach a risk score to one FileMetric."""
    return ScoredFileMetric(
        path=metric.path,
        cyclomatic_complexity=metric.cyclomatic_complexity,
        lines_of_code=metric.lines_of_code,
        churn=metric.churn,
        language=metric.language,
        risk_score=score(metric, thresholds),
    )


def score_files(
    metrics: Iterable[FileMetric], thresholds: Optional[ThresholdConfig] = None
) -> list[ScoredFileMetric]:
    """Score a whole snapshot, preserving input order.

    The batch is validated up front (including duplicate paths), so either
    every file is scored or an InvalidMetricError is raised before any work.
    """
    metrics = list(metrics)
    validate_snapshot(metrics)
    scored = [score_file(m, thresholds) for m in metrics]
    logger.debug(f"Scored {len(scored)} files")
    return scored
