"""
Tests for score aggregation and grading
"""

import pytest

from prompt_gauge.domain.value_objects import Criterion, CriterionScore, Grade
from prompt_gauge.scoring.aggregator import (
    aggregate,
    calculate_grade,
    calculate_overall_score,
    collect_suggestions,
    generate_summary,
    grade_table,
    identify_key_improvements,
    round_score,
)
from prompt_gauge.scoring_config import ScoringConfig


def _scores(values: dict, suggestions: dict | None = None) -> list[CriterionScore]:
    suggestions = suggestions or {}
    return [
        CriterionScore(
            criterion=criterion,
            score=values.get(criterion, 0.3),
            reasoning="",
            suggestions=suggestions.get(criterion, []),
            confidence=0.8,
        )
        for criterion in Criterion
    ]


class TestRoundScore:
    """round_score"""

    def test_half_rounds_up(self):
        assert round_score(0.125) == 0.13

    def test_rounds_down(self):
        assert round_score(0.9225) == 0.92

    def test_exact(self):
        assert round_score(0.5) == 0.5


class TestCalculateGrade:
    """calculate_grade with the default thresholds"""

    @pytest.mark.parametrize("score,expected", [
        (0.9, Grade.EXCELLENT),
        (0.85, Grade.EXCELLENT),
        (0.8, Grade.GOOD),
        (0.7, Grade.GOOD),
        (0.6, Grade.MODERATE),
        (0.5, Grade.MODERATE),
        (0.49, Grade.POOR),
        (0.3, Grade.POOR),
        (0.0, Grade.POOR),
    ])
    def test_default_thresholds(self, score, expected):
        assert calculate_grade(score, ScoringConfig()) == expected

    def test_custom_thresholds(self):
        config = ScoringConfig(excellent_threshold=0.95)
        assert calculate_grade(0.9, config) == Grade.GOOD

    def test_grade_table_order(self):
        table = grade_table(ScoringConfig())
        assert [grade for _, grade in table] == [Grade.EXCELLENT, Grade.GOOD, Grade.MODERATE]
        assert [threshold for threshold, _ in table] == [0.85, 0.70, 0.50]


class TestOverallScore:
    """calculate_overall_score"""

    def test_all_perfect(self):
        scores = _scores({c: 1.0 for c in Criterion})
        assert calculate_overall_score(scores, ScoringConfig()) == 1.0

    def test_all_floor(self):
        scores = _scores({c: 0.05 for c in Criterion})
        assert calculate_overall_score(scores, ScoringConfig()) == 0.05

    def test_weighted(self):
        scores = _scores({Criterion.CLARITY: 1.0, Criterion.SPECIFICITY: 0.0})
        # 1.0*0.25 + 0*0.25 + 0.3*(0.2+0.15+0.15)
        assert calculate_overall_score(scores, ScoringConfig()) == 0.4

    def test_criterion_without_weight_contributes_nothing(self):
        config = ScoringConfig(weights={"clarity": 1.0})
        scores = _scores({Criterion.CLARITY: 0.4, Criterion.SPECIFICITY: 1.0})
        assert calculate_overall_score(scores, config) == 0.4


class TestSummary:
    """generate_summary / identify_key_improvements"""

    def test_strong_and_weak(self):
        scores = _scores({
            Criterion.CLARITY: 0.9,
            Criterion.SPECIFICITY: 0.3,
            Criterion.STRUCTURE: 0.6,
            Criterion.COMPLETENESS: 0.6,
            Criterion.ACTIONABILITY: 0.6,
        })
        assert generate_summary(scores, 0.6, Grade.MODERATE) == (
            "전체 점수 60점 (MODERATE). 우수한 부분: 명확성. 개선 필요: 구체성"
        )

    def test_no_strong_or_weak(self):
        scores = _scores({c: 0.6 for c in Criterion})
        assert generate_summary(scores, 0.6, Grade.MODERATE) == "전체 점수 60점 (MODERATE)"

    def test_key_improvements(self):
        scores = _scores({Criterion.CLARITY: 0.7, Criterion.ACTIONABILITY: 0.95})
        assert identify_key_improvements(scores) == ["명확성 향상", "실행가능성 향상"]


class TestSuggestions:
    """collect_suggestions"""

    def test_dedup_keeps_order(self):
        scores = _scores({}, {
            Criterion.CLARITY: ["a", "b"],
            Criterion.STRUCTURE: ["b", "c"],
            Criterion.ACTIONABILITY: ["a"],
        })
        assert collect_suggestions(scores) == ["a", "b", "c"]

    def test_empty(self):
        assert collect_suggestions(_scores({})) == []


class TestAggregate:
    """aggregate"""

    def test_builds_improvement_score(self):
        scores = _scores({c: 0.9 for c in Criterion}, {Criterion.CLARITY: ["x"]})
        result = aggregate(scores, ScoringConfig())
        assert result.overall_score == 0.9
        assert result.grade == Grade.EXCELLENT
        assert result.criteria_scores == scores
        assert len(result.key_improvements) == 5
        assert result.next_step_suggestions == ["x"]
        assert result.summary.startswith("전체 점수 90점 (EXCELLENT)")
        assert result.timestamp

    def test_uses_config_thresholds(self):
        scores = _scores({c: 0.9 for c in Criterion})
        result = aggregate(scores, ScoringConfig(excellent_threshold=0.95))
        assert result.grade == Grade.GOOD
