"""Configuration loading and management for BugSense.

Every threshold, weight and confidence used by the risk scorer, the insight
rules and the display labels lives in one ``ThresholdConfig`` value object.
Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig / ThresholdConfig)
    2. Global config (~/.bugsense.toml)
    3. Project config (./bugsense.toml)
    4. Explicit config file
    5. Environment variables (BUGSENSE_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, top_files=5)
    >>> config.verbosity
    'verbose'
    >>> config.thresholds.risk_critical
    7.0
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import BugSenseError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]


@dataclass(frozen=True)
class ThresholdConfig:
    """Rule thresholds, risk-formula weights and rule confidences.

    The risk score is a heuristic linear blend, not a fitted model: the three
    inputs live on different natural scales (complexity ~0-50, churn ~0-100,
    LOC/100 ~0-10) and the weights are applied as-is.

    Attributes:
        Complexity:
            complexity_critical: cyclomatic above this is critical (R1)
            complexity_high: cyclomatic above this (up to critical) is high (R2)

        Churn:
            churn_critical: commits above this are critical churn (R3)
            churn_high: commits above this (up to critical) are high churn (R4)

        Risk:
            risk_critical: risk score above this is critical (R5)
            risk_medium: risk score above this (up to critical) is medium (R6)
            high_risk_threshold: risk at or above this counts as high-risk in
                snapshot summaries

        Size and coupling:
            large_file_loc: LOC above this is a large file (R7)
            coupling_complexity / coupling_churn: both exceeded means the file
                is complex and unstable at once (R8)
            average_complexity_target: mean complexity above this adds an
                advisory (R10)

        Risk formula (weights must sum to 1.0):
            weight_complexity, weight_churn, weight_size, loc_normalizer

        Display bands:
            risk_low_band, risk_medium_band, risk_high_band
            complexity_simple, complexity_moderate, complexity_high_band
    """

    # === Complexity ===
    complexity_critical: int = 20
    complexity_high: int = 10

    # === Churn ===
    churn_critical: int = 10
    churn_high: int = 5

    # === Risk ===
    risk_critical: float = 7.0
    risk_medium: float = 4.0
    high_risk_threshold: float = 7.0

    # === Size / coupling / averages ===
    large_file_loc: int = 500
    coupling_complexity: int = 8
    coupling_churn: int = 5
    average_complexity_target: float = 5.0

    # === Risk Score Weights (sum = 1.0) ===
    weight_complexity: float = 0.30
    weight_churn: float = 0.40
    weight_size: float = 0.30
    loc_normalizer: float = 100.0

    # === Rule confidences ===
    # Authored beliefs about each signal, not computed.
    confidence_critical_complexity: float = 0.90
    confidence_high_complexity: float = 0.85
    confidence_critical_churn: float = 0.80
    confidence_high_churn: float = 0.75
    confidence_critical_risk: float = 0.95
    confidence_medium_risk: float = 0.80
    confidence_large_file: float = 0.70
    confidence_coupling: float = 0.90
    confidence_all_clear: float = 0.60
    confidence_average_complexity: float = 0.65

    # === Display bands ===
    risk_low_band: float = 3.0
    risk_medium_band: float = 7.0
    risk_high_band: float = 10.0
    complexity_simple: int = 5
    complexity_moderate: int = 10
    complexity_high_band: int = 15

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        for name, value in self.__dict__.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidConfigError(name, value, "must be a number")
            if not math.isfinite(value) or value < 0:
                raise InvalidConfigError(name, value, "must be a finite non-negative number")

        for name, value in self.__dict__.items():
            if name.startswith("confidence_") and value > 1.0:
                raise InvalidConfigError(name, value, "must be between 0.0 and 1.0")

        weight_sum = self.weight_complexity + self.weight_churn + self.weight_size
        if not 0.99 <= weight_sum <= 1.01:
            raise InvalidConfigError(
                "weights", f"{weight_sum:.3f}", "risk weights must sum to 1.0"
            )

        if self.loc_normalizer <= 0:
            raise InvalidConfigError("loc_normalizer", self.loc_normalizer, "must be positive")

        # Warning bands sit strictly below their critical counterparts
        ordered_pairs = [
            ("complexity_high", "complexity_critical"),
            ("churn_high", "churn_critical"),
            ("risk_medium", "risk_critical"),
            ("risk_low_band", "risk_medium_band"),
            ("risk_medium_band", "risk_high_band"),
            ("complexity_simple", "complexity_moderate"),
            ("complexity_moderate", "complexity_high_band"),
        ]
        for low_name, high_name in ordered_pairs:
            if getattr(self, low_name) >= getattr(self, high_name):
                raise InvalidConfigError(
                    low_name, getattr(self, low_name), f"must be below {high_name}"
                )


# Default threshold configuration (immutable, shared)
DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for an analysis run.

    Attributes:
        max_files: Maximum number of files accepted in one snapshot
        max_churn: Commit cap applied by the churn collector
        top_files: Number of riskiest files shown by the CLI
        verbosity: Logging verbosity level
        thresholds: Rule thresholds and risk weights
    """

    max_files: int = 10000
    max_churn: int = 100
    top_files: int = 10
    verbosity: Verbosity = "normal"

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")
        if self.max_churn < 1:
            raise InvalidConfigError("max_churn", self.max_churn, "must be at least 1")
        if self.top_files < 1:
            raise InvalidConfigError("top_files", self.top_files, "must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        BugSenseError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".bugsense.toml"
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global config"))

    project_config = Path.cwd() / "bugsense.toml"
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise BugSenseError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    # Verbosity boolean flags become the string field
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    thresholds = merged.pop("thresholds", None)
    if isinstance(thresholds, dict):
        try:
            merged["thresholds"] = ThresholdConfig(**thresholds)
        except TypeError as e:
            raise BugSenseError(f"Invalid [thresholds] config: {e}")
    elif isinstance(thresholds, ThresholdConfig):
        merged["thresholds"] = thresholds

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise BugSenseError(f"Invalid configuration: {e}")


def _read_config_file(path: Path, label: str) -> dict:
    try:
        return _load_toml_file(path)
    except BugSenseError:
        raise
    except Exception as e:
        raise BugSenseError(f"Invalid {label} '{path}': {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from BUGSENSE_* environment variables.

    Supported environment variables:
        BUGSENSE_MAX_FILES: int
        BUGSENSE_MAX_CHURN: int
        BUGSENSE_TOP_FILES: int
        BUGSENSE_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}
    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"BUGSENSE_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise BugSenseError(f"Invalid {env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that can't be set from the environment
    (nested threshold tables).
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is int:
        return int(value)
    if type_hint is float:
        return float(value)
    if type_hint is str or origin is Literal:
        return value
    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise BugSenseError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
