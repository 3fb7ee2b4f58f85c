"""
Domain Layer

Defines constants, errors, entities, and value objects that form the core of the scoring engine.
Has no dependencies on external libraries.
"""

from prompt_gauge.domain.constants import (
    DEFAULT_WEIGHTS,
    HISTORY_LIMIT,
    MAX_PROMPT_LENGTH,
    WEIGHT_SUM_TOLERANCE,
)
from prompt_gauge.domain.entities import (
    ScoringHistoryEntry,
    UserFeedback,
)
from prompt_gauge.domain.errors import (
    ScoringError,
    ScoringErrorCode,
)
from prompt_gauge.domain.value_objects import (
    ComparisonResult,
    ComplexityAnalysis,
    Criterion,
    CriterionDiff,
    CriterionScore,
    Grade,
    ImprovementScore,
    LengthAnalysis,
    PromptComparisonAnalysis,
)

__all__ = [
    # constants
    "DEFAULT_WEIGHTS",
    "HISTORY_LIMIT",
    "MAX_PROMPT_LENGTH",
    "WEIGHT_SUM_TOLERANCE",
    # entities
    "ScoringHistoryEntry",
    "UserFeedback",
    # errors
    "ScoringError",
    "ScoringErrorCode",
    # value objects
    "ComparisonResult",
    "ComplexityAnalysis",
    "Criterion",
    "CriterionDiff",
    "CriterionScore",
    "Grade",
    "ImprovementScore",
    "LengthAnalysis",
    "PromptComparisonAnalysis",
]
