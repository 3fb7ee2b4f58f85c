"""
Scoring Engine Configuration

Defines the validated scoring configuration (criterion weights and grade thresholds)
and the service configuration loaded from environment variables and default values.
"""

import logging
import math
import os
from dataclasses import dataclass, field, asdict, replace

from prompt_gauge.domain.constants import (
    DEFAULT_EXCELLENT_THRESHOLD,
    DEFAULT_GOOD_THRESHOLD,
    DEFAULT_MIN_CONFIDENCE_THRESHOLD,
    DEFAULT_MODERATE_THRESHOLD,
    DEFAULT_WEIGHTS,
    HISTORY_LIMIT,
    WEIGHT_SUM_TOLERANCE,
)
from prompt_gauge.domain.errors import ScoringError, ScoringErrorCode
from prompt_gauge.domain.value_objects import Criterion

# Wire (camelCase) names of the ScoringConfig fields
_CONFIG_FIELD_ALIASES = {
    "minConfidenceThreshold": "min_confidence_threshold",
    "excellentThreshold": "excellent_threshold",
    "goodThreshold": "good_threshold",
    "moderateThreshold": "moderate_threshold",
}


def _env_int(key: str, default: int) -> int:
    """Convert an environment variable to int"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to an integer.")


def _env_float(key: str, default: float) -> float:
    """Convert an environment variable to float"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to a number.")


def _env_str(key: str, default: str) -> str:
    """Get an environment variable as a string"""
    return os.environ.get(key, default)


def parse_weights(spec: str) -> dict[str, float]:
    """
    Parse a comma-separated weight specification

    Args:
        spec: e.g. "clarity=0.5,specificity=0.3,structure=0.1,completeness=0.05,actionability=0.05"

    Returns:
        Mapping of criterion value to weight

    Raises:
        ValueError: When an item is not of the form name=number
    """
    weights: dict[str, float] = {}
    for item in spec.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, value = item.partition("=")
        if not sep:
            raise ValueError(f"Invalid weight '{item}' (expected name=value)")
        try:
            weights[name.strip().lower()] = float(value)
        except ValueError:
            raise ValueError(f"Invalid weight value for '{name.strip()}': '{value}'")
    return weights


def _env_weights(key: str, default: dict[str, float]) -> dict[str, float]:
    """Convert an environment variable to a weight mapping"""
    val = os.environ.get(key)
    if val is None:
        return dict(default)
    try:
        return parse_weights(val)
    except ValueError as e:
        raise ValueError(f"The value '{val}' of environment variable '{key}' is not a valid weight list: {e}")


def _to_finite_float(value, field_name: str) -> float:
    """Convert a config value to a finite float (CONFIG_ERROR otherwise)"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = math.nan
    if isinstance(value, bool) or not math.isfinite(number):
        raise ScoringError(
            f"설정 값은 유한한 숫자여야 합니다. {field_name}: {value!r}",
            ScoringErrorCode.CONFIG_ERROR,
            {"field": field_name},
        )
    return number


def _normalize_weights(weights: dict) -> dict[Criterion, float]:
    """Convert weight keys to Criterion, rejecting unknown criteria and non-numeric weights"""
    if not isinstance(weights, dict):
        raise ScoringError(
            "가중치는 객체여야 합니다.",
            ScoringErrorCode.CONFIG_ERROR,
            {"field": "weights"},
        )
    normalized: dict[Criterion, float] = {}
    for key, weight in weights.items():
        try:
            criterion = Criterion(key)
        except ValueError:
            raise ScoringError(
                f"알 수 없는 평가 기준입니다: {key}",
                ScoringErrorCode.CONFIG_ERROR,
                {"criterion": str(key)},
            )
        normalized[criterion] = _to_finite_float(weight, f"weights.{criterion.value}")
    return normalized


def validate_weights(weights: dict[Criterion, float]) -> None:
    """
    Validate a weight mapping

    Raises:
        ScoringError(CONFIG_ERROR): When the weights do not sum to 1.0 within the
            tolerance, or a weight is not a number in [0, 1]
    """
    weight_sum = sum(weights.values())
    # Small epsilon so that a sum exactly at the tolerance boundary is accepted
    if not math.isfinite(weight_sum) or abs(weight_sum - 1.0) > WEIGHT_SUM_TOLERANCE + 1e-9:
        raise ScoringError(
            f"가중치의 합은 1.0이어야 합니다. 현재: {weight_sum}",
            ScoringErrorCode.CONFIG_ERROR,
            {"weight_sum": weight_sum},
        )
    for criterion, weight in weights.items():
        if not 0 <= weight <= 1:
            raise ScoringError(
                f"가중치는 0-1 범위여야 합니다. {criterion.value}: {weight}",
                ScoringErrorCode.CONFIG_ERROR,
                {"criterion": criterion.value, "weight": weight},
            )


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring algorithm configuration (validated on construction)"""
    weights: dict = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    min_confidence_threshold: float = DEFAULT_MIN_CONFIDENCE_THRESHOLD
    excellent_threshold: float = DEFAULT_EXCELLENT_THRESHOLD
    good_threshold: float = DEFAULT_GOOD_THRESHOLD
    moderate_threshold: float = DEFAULT_MODERATE_THRESHOLD

    def __post_init__(self):
        """Normalize weight keys and validate"""
        weights = _normalize_weights(self.weights)
        validate_weights(weights)
        object.__setattr__(self, "weights", weights)
        for name in _CONFIG_FIELD_ALIASES.values():
            object.__setattr__(self, name, _to_finite_float(getattr(self, name), name))

    def weight_for(self, criterion: Criterion) -> float:
        """Weight of a criterion (0.0 when not configured)"""
        return self.weights.get(criterion, 0.0)

    def merged(self, override: "dict | ScoringConfig | None") -> "ScoringConfig":
        """
        Create a new config with the override applied

        The merge is shallow: an overriding weights mapping replaces the whole mapping.

        Args:
            override: Partial config as a dictionary (snake_case or camelCase keys),
                a full ScoringConfig, or None

        Returns:
            A new validated ScoringConfig (self when override is None)

        Raises:
            ScoringError(CONFIG_ERROR): When the merged configuration is invalid
        """
        if override is None:
            return self
        if isinstance(override, ScoringConfig):
            return override
        return replace(self, **_config_kwargs(override))

    def to_dict(self) -> dict:
        """Convert to dictionary format (camelCase wire names)"""
        return {
            "weights": {c.value: w for c, w in self.weights.items()},
            "minConfidenceThreshold": self.min_confidence_threshold,
            "excellentThreshold": self.excellent_threshold,
            "goodThreshold": self.good_threshold,
            "moderateThreshold": self.moderate_threshold,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScoringConfig":
        """Create from dictionary (missing fields use defaults)"""
        return cls(**_config_kwargs(data))


def _config_kwargs(data: dict) -> dict:
    """Map a (possibly camelCase) partial config dictionary to ScoringConfig kwargs"""
    kwargs = {}
    for key, value in data.items():
        name = _CONFIG_FIELD_ALIASES.get(key, key)
        if name not in ScoringConfig.__dataclass_fields__:
            raise ScoringError(
                f"알 수 없는 설정 항목입니다: {key}",
                ScoringErrorCode.CONFIG_ERROR,
                {"field": key},
            )
        if value is None:
            continue
        if name == "weights":
            kwargs[name] = dict(_normalize_weights(value))
        else:
            kwargs[name] = _to_finite_float(value, key)
    return kwargs


@dataclass
class StorageConfig:
    """History / config store configuration"""
    backend: str = "json"  # json / memory
    directory: str = ".prompt_gauge"
    history_limit: int = HISTORY_LIMIT


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "WARNING"

    def apply(self) -> None:
        """Configure the root logger"""
        logging.basicConfig(
            level=getattr(logging, self.level.upper(), logging.WARNING),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@dataclass
class EngineConfig:
    """Overall engine configuration"""
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    log: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary format"""
        return {
            "engine_config": {
                "scoring": self.scoring.to_dict(),
                "storage": asdict(self.storage),
                "log": asdict(self.log),
            }
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        """Create from dictionary (handles presence/absence of engine_config key)"""
        config_data = data.get("engine_config", data)
        return cls(
            scoring=ScoringConfig.from_dict(config_data.get("scoring", {})),
            storage=StorageConfig(**config_data.get("storage", {})),
            log=LoggingConfig(**config_data.get("log", {})),
        )


def load_config() -> EngineConfig:
    """
    Load configuration from environment variables

    Uses default values when environment variables are not set.

    Returns:
        EngineConfig

    Raises:
        ValueError: When an environment variable cannot be parsed
        ScoringError(CONFIG_ERROR): When the configured weights are invalid
    """
    scoring = ScoringConfig(
        weights=_env_weights("SCORING_WEIGHTS", DEFAULT_WEIGHTS),
        min_confidence_threshold=_env_float("SCORING_MIN_CONFIDENCE_THRESHOLD", DEFAULT_MIN_CONFIDENCE_THRESHOLD),
        excellent_threshold=_env_float("SCORING_EXCELLENT_THRESHOLD", DEFAULT_EXCELLENT_THRESHOLD),
        good_threshold=_env_float("SCORING_GOOD_THRESHOLD", DEFAULT_GOOD_THRESHOLD),
        moderate_threshold=_env_float("SCORING_MODERATE_THRESHOLD", DEFAULT_MODERATE_THRESHOLD),
    )
    storage = StorageConfig(
        backend=_env_str("PROMPT_GAUGE_STORAGE_BACKEND", "json"),
        directory=_env_str("PROMPT_GAUGE_STORAGE_DIR", ".prompt_gauge"),
        history_limit=_env_int("PROMPT_GAUGE_HISTORY_LIMIT", HISTORY_LIMIT),
    )
    log = LoggingConfig(
        level=_env_str("PROMPT_GAUGE_LOG_LEVEL", "WARNING"),
    )
    return EngineConfig(scoring=scoring, storage=storage, log=log)
