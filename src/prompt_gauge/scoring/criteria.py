"""
Criterion analyzers

Each analyzer is a pure function (original, improved) -> CriterionScore.
Analyzers are registered in order; the aggregator and the service iterate the
registry, so adding a criterion only requires a new registration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from prompt_gauge.domain.constants import (
    ACTION_VERBS,
    BASE_SCORE,
    CLARIFYING_PHRASES,
    EXAMPLE_KEYWORDS,
    IMPORTANT_ASPECTS,
    SPECIFIC_ELEMENTS,
    STRUCTURE_KEYWORDS,
    SUGGESTION_SCORE_CEILING,
    TECH_KEYWORDS,
    UNCHANGED_CONFIDENCE,
    UNCHANGED_SCORE,
    VAGUE_WORDS,
)
from prompt_gauge.domain.value_objects import Criterion, CriterionScore
from prompt_gauge.scoring.text_signals import (
    HIERARCHY_RE,
    LIST_ITEM_RE,
    NUMBER_RE,
    NUMBERED_STEP_RE,
    SECTION_RE,
    count_keywords,
    count_matches,
    count_new_keywords,
    count_paragraphs,
    introduces_pattern,
    length_ratio,
    trim,
)

logger = logging.getLogger(__name__)

UNCHANGED_REASONING = "원본과 개선된 프롬프트가 동일함"

AnalyzeFn = Callable[[str, str], CriterionScore]


def _clamp(score: float) -> float:
    return max(0.0, min(1.0, score))


def _suggest(score: float, hint: str) -> list[str]:
    """Return the remediation hint only for low scores"""
    return [hint] if score <= SUGGESTION_SCORE_CEILING else []


@dataclass(frozen=True)
class CriterionAnalyzer:
    """
    Registered analyzer for one criterion

    Calling the analyzer applies the shared unchanged-prompt floor before
    delegating to the criterion-specific function.
    """
    criterion: Criterion
    analyze: AnalyzeFn
    unchanged_suggestion: str

    def __call__(self, original: str, improved: str) -> CriterionScore:
        if trim(original) == trim(improved):
            return CriterionScore(
                criterion=self.criterion,
                score=UNCHANGED_SCORE,
                reasoning=UNCHANGED_REASONING,
                suggestions=[self.unchanged_suggestion],
                confidence=UNCHANGED_CONFIDENCE,
            )
        return self.analyze(original, improved)


_REGISTRY: list[CriterionAnalyzer] = []


def register_analyzer(criterion: Criterion, *, unchanged_suggestion: str):
    """
    Decorator that registers an analyzer function for a criterion

    Raises:
        ValueError: When the criterion already has an analyzer
    """
    def decorator(fn: AnalyzeFn) -> AnalyzeFn:
        if any(a.criterion == criterion for a in _REGISTRY):
            raise ValueError(f"Analyzer already registered for criterion: {criterion.value}")
        _REGISTRY.append(CriterionAnalyzer(criterion, fn, unchanged_suggestion))
        return fn
    return decorator


def get_analyzers() -> list[CriterionAnalyzer]:
    """Registered analyzers in registration order"""
    return list(_REGISTRY)


def analyze_criteria(original: str, improved: str) -> list[CriterionScore]:
    """Run every registered analyzer on the prompt pair"""
    scores = [analyzer(original, improved) for analyzer in _REGISTRY]
    logger.debug(
        "Criterion scores: %s",
        ", ".join(f"{s.criterion.value}={s.score:.2f}" for s in scores),
    )
    return scores


@register_analyzer(Criterion.CLARITY, unchanged_suggestion="프롬프트에 변화가 없습니다")
def score_clarity(original: str, improved: str) -> CriterionScore:
    """Clarity: fewer vague words, added clarifying phrases, structured growth"""
    score = BASE_SCORE

    original_vague = count_keywords(original, VAGUE_WORDS)
    improved_vague = count_keywords(improved, VAGUE_WORDS)
    if improved_vague < original_vague:
        score += 0.3
    elif improved_vague > original_vague:
        score -= 0.2

    phrases_added = count_new_keywords(original, improved, CLARIFYING_PHRASES)
    score += phrases_added * 0.15

    ratio = length_ratio(original, improved)
    if ratio > 3 and "\n" in improved:
        score += 0.4
    elif ratio > 2:
        score += 0.2

    score = _clamp(score)
    return CriterionScore(
        criterion=Criterion.CLARITY,
        score=score,
        reasoning=(
            f"명확성 분석: 모호한 표현 {original_vague} → {improved_vague}개, "
            f"구체적 용어 {phrases_added}개 추가"
        ),
        suggestions=_suggest(score, "모호한 표현을 구체적인 표현으로 바꿔보세요"),
        confidence=0.8,
    )


@register_analyzer(Criterion.SPECIFICITY, unchanged_suggestion="프롬프트에 구체적인 정보를 추가해보세요")
def score_specificity(original: str, improved: str) -> CriterionScore:
    """Specificity: technology names, numbers, list items, concrete elements"""
    score = BASE_SCORE

    original_tech = count_keywords(original, TECH_KEYWORDS)
    improved_tech = count_keywords(improved, TECH_KEYWORDS)
    if improved_tech > original_tech:
        score += min(0.4, improved_tech * 0.1)

    original_numbers = count_matches(NUMBER_RE, original)
    improved_numbers = count_matches(NUMBER_RE, improved)
    if improved_numbers > original_numbers:
        score += min(0.3, (improved_numbers - original_numbers) * 0.1)

    original_lists = count_matches(LIST_ITEM_RE, original)
    improved_lists = count_matches(LIST_ITEM_RE, improved)
    if improved_lists > original_lists:
        score += min(0.3, (improved_lists - original_lists) * 0.05)

    score += count_new_keywords(original, improved, SPECIFIC_ELEMENTS) * 0.1

    score = _clamp(score)
    return CriterionScore(
        criterion=Criterion.SPECIFICITY,
        score=score,
        reasoning=(
            f"구체성 분석: 기술 용어 {original_tech} → {improved_tech}개, "
            f"숫자 {original_numbers} → {improved_numbers}개, "
            f"리스트 항목 {original_lists} → {improved_lists}개"
        ),
        suggestions=_suggest(score, "구체적인 기술 스택이나 요구사항을 명시해보세요"),
        confidence=0.85,
    )


@register_analyzer(Criterion.STRUCTURE, unchanged_suggestion="프롬프트를 구조화해보세요")
def score_structure(original: str, improved: str) -> CriterionScore:
    """Structure: sections, paragraphs, structural keywords, nested lists"""
    score = BASE_SCORE

    original_sections = count_matches(SECTION_RE, original)
    improved_sections = count_matches(SECTION_RE, improved)
    if improved_sections > original_sections:
        score += min(0.4, (improved_sections - original_sections) * 0.1)

    original_paragraphs = count_paragraphs(original)
    improved_paragraphs = count_paragraphs(improved)
    if improved_paragraphs > original_paragraphs:
        if 3 <= improved_paragraphs <= 8:
            score += 0.25
        elif improved_paragraphs > 1:
            score += 0.1

    keywords_added = count_new_keywords(original, improved, STRUCTURE_KEYWORDS)
    score += keywords_added * 0.1

    if introduces_pattern(HIERARCHY_RE, original, improved):
        score += 0.2

    score = _clamp(score)
    return CriterionScore(
        criterion=Criterion.STRUCTURE,
        score=score,
        reasoning=(
            f"구조화 분석: 섹션 {original_sections} → {improved_sections}개, "
            f"단락 {original_paragraphs} → {improved_paragraphs}개, "
            f"구조 키워드 {keywords_added}개 추가"
        ),
        suggestions=_suggest(score, "내용을 섹션별로 구조화하고 단계를 명시해보세요"),
        confidence=0.75,
    )


@register_analyzer(Criterion.COMPLETENESS, unchanged_suggestion="누락된 정보를 추가해보세요")
def score_completeness(original: str, improved: str) -> CriterionScore:
    """Completeness: important aspects and examples"""
    score = BASE_SCORE

    original_aspects = count_keywords(original, IMPORTANT_ASPECTS)
    improved_aspects = count_keywords(improved, IMPORTANT_ASPECTS)
    if improved_aspects > original_aspects:
        score += 0.4

    if count_new_keywords(original, improved, EXAMPLE_KEYWORDS) > 0:
        score += 0.2

    score = _clamp(score)
    return CriterionScore(
        criterion=Criterion.COMPLETENESS,
        score=score,
        reasoning=f"완성도 분석: 중요 정보 {original_aspects} → {improved_aspects}개",
        suggestions=_suggest(score, "입력/출력 형식이나 예시를 추가해보세요"),
        confidence=0.8,
    )


@register_analyzer(Criterion.ACTIONABILITY, unchanged_suggestion="구체적인 실행 단계를 추가해보세요")
def score_actionability(original: str, improved: str) -> CriterionScore:
    """Actionability: action verbs and numbered steps"""
    score = BASE_SCORE

    original_actions = count_keywords(original, ACTION_VERBS)
    improved_actions = count_keywords(improved, ACTION_VERBS)
    if improved_actions > original_actions:
        score += 0.3

    if introduces_pattern(NUMBERED_STEP_RE, original, improved):
        score += 0.3

    score = _clamp(score)
    return CriterionScore(
        criterion=Criterion.ACTIONABILITY,
        score=score,
        reasoning=f"실행가능성 분석: 실행 동사 {original_actions} → {improved_actions}개",
        suggestions=_suggest(score, "구체적인 실행 단계를 명시해보세요"),
        confidence=0.8,
    )
