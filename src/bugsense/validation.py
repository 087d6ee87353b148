"""Boundary checks for file metrics.

Run before scoring and before insight generation so malformed numbers never
reach the formula or the rule filters. A NaN compared against any threshold is
False, which would drop the file from every bucket without a trace.

Validators are O(n) and reject the whole input before any partial work.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import TYPE_CHECKING, Any, Iterable, Optional

from .exceptions import InvalidMetricError
from .logging_config import get_logger

if TYPE_CHECKING:
    from .models import FileMetric, ScoredFileMetric

logger = get_logger(__name__)

# Raw inputs every metric carries, in formula order.
METRIC_FIELDS = ("cyclomatic_complexity", "churn", "lines_of_code")


def validate_number(field: str, value: Any, path: Optional[str] = None) -> None:
    """Reject anything that isn't a finite, non-negative real number.

    Raises:
        InvalidMetricError: For bools, non-numbers, NaN, infinities and negatives.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidMetricError(field, value, "not a number", path=path)
    try:
        value = float(value)
    except OverflowError:
        raise InvalidMetricError(field, value, "too large to score", path=path)
    if math.isnan(value):
        raise InvalidMetricError(field, value, "NaN", path=path)
    if math.isinf(value):
        raise InvalidMetricError(field, value, "infinite", path=path)
    if value < 0:
        raise InvalidMetricError(field, value, "negative", path=path)


def validate_metric(metric: Any) -> None:
    """Validate the path and the three raw inputs of one file.

    Accepts a FileMetric or anything exposing the same attributes.
    """
    path = getattr(metric, "path", None)
    if not isinstance(path, str) or not path:
        raise InvalidMetricError("path", path, "must be a non-empty string")
    for field in METRIC_FIELDS:
        if not hasattr(metric, field):
            raise InvalidMetricError(field, None, "missing", path=path)
        validate_number(field, getattr(metric, field), path=path)


def validate_snapshot(metrics: Iterable[FileMetric]) -> None:
    """Validate every file of a snapshot and reject duplicate paths.

    Raises:
        InvalidMetricError: On the first malformed file.
    """
    seen: set[str] = set()
    count = 0
    for metric in metrics:
        validate_metric(metric)
        if metric.path in seen:
            raise InvalidMetricError("path", metric.path, "duplicate path", path=metric.path)
        seen.add(metric.path)
        count += 1
    logger.debug(f"Validated {count} file metrics")


def validate_scored_snapshot(files: Iterable[ScoredFileMetric]) -> None:
    """Like validate_snapshot, plus the precomputed risk score."""
    files = list(files)
    validate_snapshot(files)
    for f in files:
        validate_number("risk_score", getattr(f, "risk_score", None), path=f.path)
