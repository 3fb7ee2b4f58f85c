"""
History Reporting

Flattens scoring history entries into a pandas DataFrame for CSV export and the viewer.
"""

import pandas as pd

from prompt_gauge.domain.entities import ScoringHistoryEntry
from prompt_gauge.domain.value_objects import Criterion

HISTORY_COLUMNS = [
    "id",
    "session_id",
    "created_at",
    "overall_score",
    "grade",
    *[f"score_{c.value}" for c in Criterion],
    "original_length",
    "improved_length",
    "length_increase_ratio",
    "complexity_increase",
    "feedback_is_accurate",
    "feedback_comments",
    "feedback_suggested_score",
    "original_prompt",
    "improved_prompt",
]


def _entry_row(entry: ScoringHistoryEntry) -> dict:
    analysis = entry.analysis
    improvement = analysis.improvement_score
    feedback = entry.user_feedback

    row = {
        "id": entry.id,
        "session_id": entry.session_id,
        "created_at": entry.created_at,
        "overall_score": improvement.overall_score,
        "grade": improvement.grade.value,
    }
    for criterion in Criterion:
        criterion_score = improvement.score_for(criterion)
        row[f"score_{criterion.value}"] = criterion_score.score if criterion_score else None
    row.update({
        "original_length": analysis.length_analysis.original_length,
        "improved_length": analysis.length_analysis.improved_length,
        "length_increase_ratio": analysis.length_analysis.length_increase_ratio,
        "complexity_increase": analysis.complexity_analysis.complexity_increase,
        "feedback_is_accurate": feedback.is_accurate if feedback else None,
        "feedback_comments": feedback.comments if feedback else None,
        "feedback_suggested_score": feedback.suggested_score if feedback else None,
        "original_prompt": analysis.original_prompt,
        "improved_prompt": analysis.improved_prompt,
    })
    return row


def history_to_frame(entries: list[ScoringHistoryEntry]) -> pd.DataFrame:
    """
    Convert history entries to a DataFrame (one row per entry, append order)

    Args:
        entries: History entries

    Returns:
        DataFrame with HISTORY_COLUMNS (empty with those columns when there are no entries)
    """
    return pd.DataFrame([_entry_row(e) for e in entries], columns=HISTORY_COLUMNS)
