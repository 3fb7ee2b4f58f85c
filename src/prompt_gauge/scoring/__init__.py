"""
Scoring sub-package

Provides the criterion analyzers, text signals, and score aggregation.
"""

from prompt_gauge.scoring.aggregator import (
    aggregate,
    calculate_grade,
    calculate_overall_score,
    collect_suggestions,
    grade_table,
    round_score,
)
from prompt_gauge.scoring.criteria import (
    CriterionAnalyzer,
    analyze_criteria,
    get_analyzers,
    register_analyzer,
    score_actionability,
    score_clarity,
    score_completeness,
    score_specificity,
    score_structure,
)
from prompt_gauge.scoring.text_signals import (
    analyze_complexity,
    analyze_lengths,
    calculate_complexity,
)

__all__ = [
    # aggregation
    "aggregate",
    "calculate_grade",
    "calculate_overall_score",
    "collect_suggestions",
    "grade_table",
    "round_score",
    # analyzers
    "CriterionAnalyzer",
    "analyze_criteria",
    "get_analyzers",
    "register_analyzer",
    "score_actionability",
    "score_clarity",
    "score_completeness",
    "score_specificity",
    "score_structure",
    # text signals
    "analyze_complexity",
    "analyze_lengths",
    "calculate_complexity",
]
