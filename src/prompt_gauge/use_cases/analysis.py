"""
Prompt Improvement Analysis

ScoringService validates a prompt pair, runs the criterion and length/complexity
analyzers, aggregates the result, and keeps a best-effort history of saved analyses.
"""

from __future__ import annotations

import logging
import random
import string
import time
from dataclasses import replace
from datetime import datetime

from prompt_gauge.domain.constants import HISTORY_LIMIT, MAX_PROMPT_LENGTH
from prompt_gauge.domain.entities import ScoringHistoryEntry, UserFeedback
from prompt_gauge.domain.errors import ScoringError, ScoringErrorCode
from prompt_gauge.domain.value_objects import Grade, PromptComparisonAnalysis
from prompt_gauge.infrastructure.stores.base import HistoryStore, StoreError
from prompt_gauge.scoring.aggregator import aggregate, calculate_grade
from prompt_gauge.scoring.criteria import analyze_criteria
from prompt_gauge.scoring.text_signals import analyze_complexity, analyze_lengths, trim
from prompt_gauge.scoring_config import ScoringConfig

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def validate_prompts(original: str | None, improved: str | None) -> None:
    """
    Validate a prompt pair

    Raises:
        ScoringError(INVALID_PROMPT): When either prompt is empty / whitespace-only,
            or longer than MAX_PROMPT_LENGTH characters
    """
    if not original or not trim(original):
        raise ScoringError("원본 프롬프트가 비어있습니다.", ScoringErrorCode.INVALID_PROMPT)
    if not improved or not trim(improved):
        raise ScoringError("개선된 프롬프트가 비어있습니다.", ScoringErrorCode.INVALID_PROMPT)
    if len(original) > MAX_PROMPT_LENGTH or len(improved) > MAX_PROMPT_LENGTH:
        raise ScoringError(
            f"프롬프트가 너무 깁니다. (최대 {MAX_PROMPT_LENGTH:,}자)",
            ScoringErrorCode.INVALID_PROMPT,
            {
                "original_length": len(original),
                "improved_length": len(improved),
                "max_length": MAX_PROMPT_LENGTH,
            },
        )


def _generate_id() -> str:
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"score_{int(time.time() * 1000)}_{suffix}"


def _generate_session_id() -> str:
    return f"session_{int(time.time() * 1000)}"


class ScoringService:
    """
    Prompt improvement scoring service

    Args:
        config: Default scoring configuration (validated on construction)
        history_store: Persisted history store (None keeps history in process only)
        history_limit: Maximum number of entries kept in the in-process history
    """

    def __init__(
        self,
        config: ScoringConfig | None = None,
        history_store: HistoryStore | None = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        self.config = config if config is not None else ScoringConfig()
        self._history_store = history_store
        self._history: list[ScoringHistoryEntry] = []
        self._history_limit = history_limit

    def analyze_improvement(
        self,
        original: str,
        improved: str,
        config_override: dict | ScoringConfig | None = None,
    ) -> PromptComparisonAnalysis:
        """
        Analyze and score a prompt improvement

        Args:
            original: Original prompt
            improved: Improved prompt
            config_override: Partial config applied on top of the service config

        Returns:
            PromptComparisonAnalysis

        Raises:
            ScoringError(INVALID_PROMPT): Invalid prompt pair
            ScoringError(CONFIG_ERROR): Invalid config override
        """
        validate_prompts(original, improved)
        active_config = self.config.merged(config_override)

        criteria_scores = analyze_criteria(original, improved)
        improvement_score = aggregate(criteria_scores, active_config)

        for criterion_score in criteria_scores:
            if criterion_score.confidence < active_config.min_confidence_threshold:
                logger.debug(
                    "Low confidence for %s: %.2f",
                    criterion_score.criterion.value, criterion_score.confidence,
                )

        logger.debug(
            "Analyzed improvement: overall=%.2f grade=%s",
            improvement_score.overall_score, improvement_score.grade.value,
        )
        return PromptComparisonAnalysis(
            original_prompt=original,
            improved_prompt=improved,
            improvement_score=improvement_score,
            length_analysis=analyze_lengths(original, improved),
            complexity_analysis=analyze_complexity(original, improved),
        )

    def calculate_grade(self, score: float) -> Grade:
        """Grade a score against the service config thresholds"""
        return calculate_grade(score, self.config)

    def save_score(self, analysis: PromptComparisonAnalysis) -> str:
        """
        Save an analysis to the history

        Persistence failures are logged and not raised.

        Returns:
            The generated entry ID
        """
        entry = ScoringHistoryEntry(
            id=_generate_id(),
            session_id=_generate_session_id(),
            analysis=analysis,
            created_at=datetime.now().isoformat(),
        )
        self._history.append(entry)
        self._history = self._history[-self._history_limit:]

        if self._history_store is not None:
            try:
                self._history_store.append(entry)
            except StoreError as e:
                logger.warning("Failed to save scoring history: %s", e)

        return entry.id

    def get_score_history(self, limit: int | None = None) -> list[ScoringHistoryEntry]:
        """
        Return the most recent history entries

        Reads the persisted store when available, otherwise the in-process history.

        Args:
            limit: Number of most recent entries (all when None or 0)
        """
        if self._history_store is not None:
            try:
                return self._history_store.list(limit)
            except StoreError as e:
                logger.warning("Failed to load scoring history: %s", e)

        return list(self._history[-limit:]) if limit else list(self._history)

    def submit_feedback(self, entry_id: str, feedback: UserFeedback) -> bool:
        """
        Attach user feedback to a history entry

        Returns:
            True if the entry was found in either store
        """
        found = False
        for i, entry in enumerate(self._history):
            if entry.id == entry_id:
                self._history[i] = replace(entry, user_feedback=feedback)
                found = True
                break

        if self._history_store is not None:
            try:
                found = self._history_store.update(entry_id, {"user_feedback": feedback}) or found
            except StoreError as e:
                logger.warning("Failed to save feedback: %s", e)

        if not found:
            logger.info("History entry not found for feedback: %s", entry_id)
        return found
