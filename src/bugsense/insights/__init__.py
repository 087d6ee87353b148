"""Insight engine: threshold rules over a scored snapshot."""

from .generator import RULES, generate_insights
from .ordering import SEVERITY_ORDER, severity_rank, sort_by_severity

__all__ = [
    "RULES",
    "generate_insights",
    "SEVERITY_ORDER",
    "severity_rank",
    "sort_by_severity",
]
