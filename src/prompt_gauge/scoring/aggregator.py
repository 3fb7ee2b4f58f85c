"""
Score aggregation and grading

Combines criterion scores into a weighted overall score, assigns a grade from an
ordered threshold table, and builds the summary texts.
"""

from __future__ import annotations

import math
from datetime import datetime

from prompt_gauge.domain.constants import STRONG_CRITERION_SCORE, WEAK_CRITERION_SCORE
from prompt_gauge.domain.value_objects import CriterionScore, Grade, ImprovementScore
from prompt_gauge.scoring_config import ScoringConfig


def round_score(value: float) -> float:
    """Round to 2 decimals, halves rounded up"""
    return math.floor(value * 100 + 0.5) / 100


def grade_table(config: ScoringConfig) -> list[tuple[float, Grade]]:
    """Ordered (threshold, grade) pairs, evaluated top-down"""
    return [
        (config.excellent_threshold, Grade.EXCELLENT),
        (config.good_threshold, Grade.GOOD),
        (config.moderate_threshold, Grade.MODERATE),
    ]


def calculate_grade(score: float, config: ScoringConfig) -> Grade:
    """
    Assign a grade (first matching threshold wins)

    Args:
        score: Overall score
        config: Scoring configuration supplying the thresholds

    Returns:
        Grade (POOR when no threshold is reached)
    """
    for threshold, grade in grade_table(config):
        if score >= threshold:
            return grade
    return Grade.POOR


def calculate_overall_score(scores: list[CriterionScore], config: ScoringConfig) -> float:
    """Weighted sum of criterion scores, rounded to 2 decimals"""
    weighted_sum = sum(s.score * config.weight_for(s.criterion) for s in scores)
    return round_score(weighted_sum)


def generate_summary(scores: list[CriterionScore], overall_score: float, grade: Grade) -> str:
    """Summary listing strong (>= 0.7) and weak (< 0.5) criteria"""
    strong = [s.criterion.display_name for s in scores if s.score >= STRONG_CRITERION_SCORE]
    weak = [s.criterion.display_name for s in scores if s.score < WEAK_CRITERION_SCORE]

    summary = f"전체 점수 {overall_score * 100:.0f}점 ({grade.value})"
    if strong:
        summary += f". 우수한 부분: {', '.join(strong)}"
    if weak:
        summary += f". 개선 필요: {', '.join(weak)}"
    return summary


def identify_key_improvements(scores: list[CriterionScore]) -> list[str]:
    return [
        f"{s.criterion.display_name} 향상"
        for s in scores
        if s.score >= STRONG_CRITERION_SCORE
    ]


def collect_suggestions(scores: list[CriterionScore]) -> list[str]:
    """Union of every criterion's suggestions, duplicates removed (order kept)"""
    return list(dict.fromkeys(s for score in scores for s in score.suggestions))


def aggregate(scores: list[CriterionScore], config: ScoringConfig) -> ImprovementScore:
    """
    Build the ImprovementScore from criterion scores

    Args:
        scores: Criterion scores
        config: Active scoring configuration

    Returns:
        ImprovementScore
    """
    overall_score = calculate_overall_score(scores, config)
    grade = calculate_grade(overall_score, config)
    return ImprovementScore(
        criteria_scores=list(scores),
        overall_score=overall_score,
        grade=grade,
        summary=generate_summary(scores, overall_score, grade),
        key_improvements=identify_key_improvements(scores),
        next_step_suggestions=collect_suggestions(scores),
        timestamp=datetime.now().isoformat(),
    )
