"""
prompt-gauge History Viewer

Minimal Streamlit dashboard for viewing saved scoring analyses.
Displays the score trend, grade distribution and per-criterion breakdown.

Usage:
    pip install -e ".[viewer]"
    streamlit run src/prompt_gauge/viewer.py
    streamlit run src/prompt_gauge/viewer.py -- --storage-dir .prompt_gauge

Requires the package to be installed (e.g. via ``pip install -e .``).
"""

from __future__ import annotations

import argparse
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from prompt_gauge.domain.entities import ScoringHistoryEntry
from prompt_gauge.domain.value_objects import Criterion, Grade
from prompt_gauge.infrastructure.stores.base import StoreError
from prompt_gauge.infrastructure.stores.json_file import JsonFileHistoryStore
from prompt_gauge.scoring.aggregator import grade_table
from prompt_gauge.scoring_config import ScoringConfig, load_config
from prompt_gauge.use_cases.reporting import history_to_frame

# -- Colors --
GRADE_COLORS = {
    Grade.EXCELLENT.value: "#34a853",
    Grade.GOOD.value: "#1a73e8",
    Grade.MODERATE.value: "#e8710a",
    Grade.POOR.value: "#ea4335",
}
CRITERION_COLOR = "#9334e6"


def _render_score_trend(df: pd.DataFrame, config: ScoringConfig) -> None:
    """Render the overall score of each saved analysis in save order."""
    st.header("Score Trend")

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=list(range(1, len(df) + 1)),
        y=df["overall_score"],
        mode="lines+markers",
        name="Overall score",
        text=df["id"],
        line=dict(color="#1a73e8", width=2),
        marker=dict(color=[GRADE_COLORS[g] for g in df["grade"]], size=9),
    ))

    for threshold, grade in grade_table(config):
        fig.add_hline(
            y=threshold,
            line_dash="dash",
            line_color=GRADE_COLORS[grade.value],
            line_width=1,
            annotation_text=grade.value,
            annotation_position="top left",
            annotation_font=dict(size=11, color=GRADE_COLORS[grade.value]),
        )

    fig.update_layout(
        xaxis_title="Analysis #",
        yaxis_title="Overall score",
        yaxis_range=[0, 1.05],
        template="plotly_white",
        height=400,
    )
    st.plotly_chart(fig, use_container_width=True)


def _render_grade_distribution(df: pd.DataFrame) -> None:
    """Render the number of analyses per grade."""
    st.header("Grade Distribution")

    counts = df["grade"].value_counts()
    grades = [g.value for g in Grade]
    fig = go.Figure(go.Bar(
        x=grades,
        y=[int(counts.get(g, 0)) for g in grades],
        marker_color=[GRADE_COLORS[g] for g in grades],
    ))
    fig.update_layout(template="plotly_white", height=300, yaxis_title="Analyses")
    st.plotly_chart(fig, use_container_width=True)


def _render_entry_detail(entry: ScoringHistoryEntry) -> None:
    """Render the criterion breakdown of a single analysis."""
    improvement = entry.analysis.improvement_score
    st.header("Analysis Detail")

    color = GRADE_COLORS[improvement.grade.value]
    st.markdown(
        f"**Overall** {improvement.overall_score:.2f} "
        f"<span style='color:{color};font-weight:bold'>{improvement.grade.value}</span>",
        unsafe_allow_html=True,
    )
    st.caption(improvement.summary)

    criteria = [s.criterion for s in improvement.criteria_scores]
    fig = go.Figure(go.Bar(
        x=[c.display_name for c in criteria],
        y=[s.score for s in improvement.criteria_scores],
        marker_color=CRITERION_COLOR,
        text=[f"{s.score:.2f}" for s in improvement.criteria_scores],
        textposition="outside",
    ))
    fig.update_layout(yaxis_range=[0, 1.1], template="plotly_white", height=350)
    st.plotly_chart(fig, use_container_width=True)

    st.dataframe(
        pd.DataFrame([
            {
                "Criterion": s.criterion.display_name,
                "Score": f"{s.score:.2f}",
                "Confidence": f"{s.confidence:.2f}",
                "Reasoning": s.reasoning,
            }
            for s in improvement.criteria_scores
        ]),
        use_container_width=True,
        hide_index=True,
    )

    col_original, col_improved = st.columns(2)
    with col_original:
        st.subheader("Original")
        st.text(entry.analysis.original_prompt)
    with col_improved:
        st.subheader("Improved")
        st.text(entry.analysis.improved_prompt)

    if improvement.next_step_suggestions:
        st.subheader("Next Steps")
        for suggestion in improvement.next_step_suggestions:
            st.markdown(f"- {suggestion}")

    if entry.user_feedback is not None:
        feedback = entry.user_feedback
        fn = st.success if feedback.is_accurate else st.warning
        suggested = (
            f" (suggested score {feedback.suggested_score:.2f})"
            if feedback.suggested_score is not None else ""
        )
        fn(f"User feedback: {'accurate' if feedback.is_accurate else 'inaccurate'}{suggested}. {feedback.comments}")


def main() -> None:
    # Parse --storage-dir from Streamlit args (after --)
    parser = argparse.ArgumentParser()
    parser.add_argument("--storage-dir", default=None)
    args, _ = parser.parse_known_args()

    engine_config = load_config()
    storage_dir = Path(args.storage_dir or engine_config.storage.directory)

    st.set_page_config(page_title="prompt-gauge", layout="wide")
    st.title("prompt-gauge History")

    store = JsonFileHistoryStore(storage_dir)
    if not store.path.exists():
        st.warning(f"No scoring history found in `{storage_dir}/`")
        st.info("Save an analysis first:\n```\npython -m prompt_gauge.runner analyze --original ... --improved ... --save\n```")
        return

    try:
        entries = store.list()
    except StoreError as e:
        st.error(f"Failed to load scoring history: {e}")
        return

    if not entries:
        st.warning("The scoring history is empty.")
        return

    df = history_to_frame(entries)

    # Sidebar: entry selector
    entry_ids = [e.id for e in reversed(entries)]
    selected_id = st.sidebar.selectbox("Analysis", entry_ids, index=0)
    selected_entry = next(e for e in entries if e.id == selected_id)

    st.sidebar.markdown("---")
    st.sidebar.markdown(f"**Analyses**: {len(df)}")
    st.sidebar.markdown(f"**Mean score**: {df['overall_score'].mean():.2f}")
    for criterion in Criterion:
        col = f"score_{criterion.value}"
        st.sidebar.markdown(f"**{criterion.display_name}**: {df[col].mean():.2f}")

    _render_score_trend(df, engine_config.scoring)
    _render_grade_distribution(df)
    _render_entry_detail(selected_entry)


if __name__ == "__main__":
    main()
