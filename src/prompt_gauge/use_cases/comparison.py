"""
A/B Comparison

Scores two candidate improvements of the same original prompt and reduces the
two analyses to a winner, an overall score difference and per-criterion diffs.
"""

from __future__ import annotations

from prompt_gauge.domain.value_objects import (
    ComparisonResult,
    CriterionDiff,
    PromptComparisonAnalysis,
)
from prompt_gauge.scoring.aggregator import round_score
from prompt_gauge.scoring_config import ScoringConfig
from prompt_gauge.use_cases.analysis import ScoringService


def criteria_diffs(
    analysis_a: PromptComparisonAnalysis,
    analysis_b: PromptComparisonAnalysis,
) -> list[CriterionDiff]:
    """Per-criterion diffs (A - B), matched by criterion; a missing B side counts as 0"""
    diffs = []
    for score_a in analysis_a.improvement_score.criteria_scores:
        score_b = analysis_b.improvement_score.score_for(score_a.criterion)
        b_value = score_b.score if score_b is not None else 0.0
        diffs.append(CriterionDiff(
            criterion=score_a.criterion,
            score_a=score_a.score,
            score_b=b_value,
            diff=round_score(score_a.score - b_value),
        ))
    return diffs


def pick_better(score_a: float, score_b: float) -> str:
    if score_a > score_b:
        return "A"
    if score_b > score_a:
        return "B"
    return "equal"


def compare_improvements(
    service: ScoringService,
    original: str,
    improved_a: str,
    improved_b: str,
    config_override: dict | ScoringConfig | None = None,
) -> ComparisonResult:
    """
    Compare two improvements of the same original prompt

    Args:
        service: ScoringService used for both analyses
        original: Original prompt
        improved_a: Candidate A
        improved_b: Candidate B
        config_override: Partial config applied to both analyses

    Returns:
        ComparisonResult

    Raises:
        ScoringError: When either analysis fails validation
    """
    analysis_a = service.analyze_improvement(original, improved_a, config_override)
    analysis_b = service.analyze_improvement(original, improved_b, config_override)

    score_a = analysis_a.improvement_score.overall_score
    score_b = analysis_b.improvement_score.overall_score

    return ComparisonResult(
        analysis_a=analysis_a,
        analysis_b=analysis_b,
        better=pick_better(score_a, score_b),
        score_diff=round_score(abs(score_a - score_b)),
        criteria_diffs=criteria_diffs(analysis_a, analysis_b),
    )
