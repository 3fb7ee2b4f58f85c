"""
Domain Value Objects

Defines immutable data structures representing criterion scores, improvement scores
and prompt comparison analyses.

Dictionary conversion uses the camelCase wire names shared with the HTTP API and
the persisted history.
"""

from dataclasses import dataclass, field
from enum import Enum


class Criterion(str, Enum):
    """Scoring criteria"""
    CLARITY = "clarity"
    SPECIFICITY = "specificity"
    STRUCTURE = "structure"
    COMPLETENESS = "completeness"
    ACTIONABILITY = "actionability"

    @property
    def display_name(self) -> str:
        """Korean display name"""
        return _CRITERION_NAMES[self]


_CRITERION_NAMES = {
    Criterion.CLARITY: "명확성",
    Criterion.SPECIFICITY: "구체성",
    Criterion.STRUCTURE: "구조화",
    Criterion.COMPLETENESS: "완성도",
    Criterion.ACTIONABILITY: "실행가능성",
}


class Grade(str, Enum):
    """Improvement grade"""
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    MODERATE = "MODERATE"
    POOR = "POOR"


@dataclass(frozen=True)
class CriterionScore:
    """Score for a single criterion (0-1)"""
    criterion: Criterion
    score: float
    reasoning: str
    suggestions: list[str] = field(default_factory=list)
    confidence: float = 0.0

    def to_dict(self) -> dict:
        return {
            "criterion": self.criterion.value,
            "score": self.score,
            "reasoning": self.reasoning,
            "suggestions": list(self.suggestions),
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CriterionScore":
        return cls(
            criterion=Criterion(data["criterion"]),
            score=data["score"],
            reasoning=data.get("reasoning", ""),
            suggestions=list(data.get("suggestions", [])),
            confidence=data.get("confidence", 0.0),
        )


@dataclass(frozen=True)
class ImprovementScore:
    """Overall improvement score"""
    criteria_scores: list[CriterionScore]
    overall_score: float
    grade: Grade
    summary: str
    key_improvements: list[str]
    next_step_suggestions: list[str]
    timestamp: str

    def score_for(self, criterion: Criterion) -> CriterionScore | None:
        """Look up the score of a criterion (None when absent)"""
        for criterion_score in self.criteria_scores:
            if criterion_score.criterion == criterion:
                return criterion_score
        return None

    def to_dict(self) -> dict:
        return {
            "criteriaScores": [s.to_dict() for s in self.criteria_scores],
            "overallScore": self.overall_score,
            "grade": self.grade.value,
            "summary": self.summary,
            "keyImprovements": list(self.key_improvements),
            "nextStepSuggestions": list(self.next_step_suggestions),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ImprovementScore":
        return cls(
            criteria_scores=[CriterionScore.from_dict(s) for s in data["criteriaScores"]],
            overall_score=data["overallScore"],
            grade=Grade(data["grade"]),
            summary=data.get("summary", ""),
            key_improvements=list(data.get("keyImprovements", [])),
            next_step_suggestions=list(data.get("nextStepSuggestions", [])),
            timestamp=data.get("timestamp", ""),
        )


@dataclass(frozen=True)
class LengthAnalysis:
    """Length comparison"""
    original_length: int
    improved_length: int
    length_increase: int
    length_increase_ratio: float

    def to_dict(self) -> dict:
        return {
            "originalLength": self.original_length,
            "improvedLength": self.improved_length,
            "lengthIncrease": self.length_increase,
            "lengthIncreaseRatio": self.length_increase_ratio,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LengthAnalysis":
        return cls(
            original_length=data["originalLength"],
            improved_length=data["improvedLength"],
            length_increase=data["lengthIncrease"],
            length_increase_ratio=data["lengthIncreaseRatio"],
        )


@dataclass(frozen=True)
class ComplexityAnalysis:
    """Lexical complexity comparison"""
    original_complexity: float
    improved_complexity: float
    complexity_increase: float

    def to_dict(self) -> dict:
        return {
            "originalComplexity": self.original_complexity,
            "improvedComplexity": self.improved_complexity,
            "complexityIncrease": self.complexity_increase,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ComplexityAnalysis":
        return cls(
            original_complexity=data["originalComplexity"],
            improved_complexity=data["improvedComplexity"],
            complexity_increase=data["complexityIncrease"],
        )


@dataclass(frozen=True)
class PromptComparisonAnalysis:
    """Result of comparing an original prompt with its improvement"""
    original_prompt: str
    improved_prompt: str
    improvement_score: ImprovementScore
    length_analysis: LengthAnalysis
    complexity_analysis: ComplexityAnalysis

    def to_dict(self) -> dict:
        return {
            "originalPrompt": self.original_prompt,
            "improvedPrompt": self.improved_prompt,
            "improvementScore": self.improvement_score.to_dict(),
            "lengthAnalysis": self.length_analysis.to_dict(),
            "complexityAnalysis": self.complexity_analysis.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PromptComparisonAnalysis":
        return cls(
            original_prompt=data["originalPrompt"],
            improved_prompt=data["improvedPrompt"],
            improvement_score=ImprovementScore.from_dict(data["improvementScore"]),
            length_analysis=LengthAnalysis.from_dict(data["lengthAnalysis"]),
            complexity_analysis=ComplexityAnalysis.from_dict(data["complexityAnalysis"]),
        )


@dataclass(frozen=True)
class CriterionDiff:
    """Per-criterion difference between two candidates"""
    criterion: Criterion
    score_a: float
    score_b: float
    diff: float

    def to_dict(self) -> dict:
        return {
            "criterion": self.criterion.value,
            "scoreA": self.score_a,
            "scoreB": self.score_b,
            "diff": self.diff,
        }


@dataclass(frozen=True)
class ComparisonResult:
    """A/B comparison result"""
    analysis_a: PromptComparisonAnalysis
    analysis_b: PromptComparisonAnalysis
    better: str  # "A" / "B" / "equal"
    score_diff: float
    criteria_diffs: list[CriterionDiff]

    def to_dict(self) -> dict:
        return {
            "analysisA": self.analysis_a.to_dict(),
            "analysisB": self.analysis_b.to_dict(),
            "better": self.better,
            "scoreDiff": self.score_diff,
            "criteriaDiffs": [d.to_dict() for d in self.criteria_diffs],
        }
