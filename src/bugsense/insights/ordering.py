"""Severity ordering for display consumers.

The generator never sorts its own output; callers that want the most severe
insights first use ``sort_by_severity``.
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar, Union

from ..models import Severity

T = TypeVar("T")

SEVERITY_ORDER: dict[Severity, int] = {
    Severity.CRITICAL: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
}

# Rank for anything that isn't a known severity
UNKNOWN_RANK = 3


def severity_rank(severity: Union[Severity, str, None]) -> int:
    """critical=0, warning=1, info=2, anything else=3."""
    if isinstance(severity, Severity):
        return SEVERITY_ORDER[severity]
    try:
        return SEVERITY_ORDER[Severity(severity)]
    except ValueError:
        return UNKNOWN_RANK


def _severity_of(item: Any) -> Any:
    if isinstance(item, dict):
        return item.get("severity")
    return getattr(item, "severity", None)


def sort_by_severity(insights: Iterable[T]) -> list[T]:
    """Return a new list, most severe first; equal severities keep their order.

    Accepts Insight objects or their ``to_dict()`` form.
    """
    return sorted(insights, key=lambda i: severity_rank(_severity_of(i)))
