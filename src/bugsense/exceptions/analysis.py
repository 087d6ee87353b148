"""Analysis-related exceptions: malformed per-file metrics."""

from typing import Any, Optional

from .base import BugSenseError


class AnalysisError(BugSenseError):
    """Base class for analysis-related errors."""

    pass


class InvalidMetricError(AnalysisError):
    """Raised when a file metric is negative, non-finite, or not a number.

    NaN in particular must never reach the rule filters: every comparison
    against NaN is False, so the file would silently fall out of every bucket.
    """

    def __init__(
        self,
        field: str,
        value: Any,
        reason: str,
        path: Optional[str] = None,
    ):
        where = f" for {path}" if path else ""
        details = {"field": field, "value": repr(value), "reason": reason}
        if path:
            details["path"] = path
        super().__init__(f"Invalid metric '{field}'{where}", details=details)
        self.field = field
        self.value = value
        self.reason = reason
        self.path = path
