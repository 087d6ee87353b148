"""Exception hierarchy for BugSense."""

from .analysis import AnalysisError, InvalidMetricError
from .base import BugSenseError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "BugSenseError",
    "AnalysisError",
    "InvalidMetricError",
    "ConfigurationError",
    "InvalidConfigError",
]
