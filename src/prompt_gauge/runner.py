"""
prompt-gauge CLI Runner

Score prompt improvements, compare two candidates, and manage the scoring history.

Usage:
    python -m prompt_gauge.runner analyze --original "코드를 작성해줘" --improved-file improved.txt --save
    python -m prompt_gauge.runner compare --original-file orig.txt --improved-a-file a.txt --improved-b-file b.txt
    python -m prompt_gauge.runner history --limit 10 --export history.csv
    python -m prompt_gauge.runner feedback score_1700000000000_abc123xyz --accurate --comments "정확함"
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from prompt_gauge.domain.entities import UserFeedback
from prompt_gauge.domain.errors import ScoringError
from prompt_gauge.domain.value_objects import ComparisonResult, PromptComparisonAnalysis
from prompt_gauge.infrastructure.stores.factory import create_history_store
from prompt_gauge.scoring_config import load_config, parse_weights
from prompt_gauge.use_cases.analysis import ScoringService
from prompt_gauge.use_cases.comparison import compare_improvements
from prompt_gauge.use_cases.reporting import history_to_frame


def _add_prompt_args(parser: argparse.ArgumentParser, name: str, label: str) -> None:
    """Add mutually exclusive --<name> / --<name>-file options"""
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(f"--{name}", help=f"{label} text")
    group.add_argument(f"--{name}-file", help=f"Path to a file containing the {label.lower()}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="prompt-gauge: Score prompt improvements",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Score an improved prompt against the original")
    _add_prompt_args(analyze, "original", "Original prompt")
    _add_prompt_args(analyze, "improved", "Improved prompt")
    analyze.add_argument("--weights", default=None, help="Weight override, e.g. clarity=0.5,specificity=0.3,...")
    analyze.add_argument("--save", action="store_true", help="Save the analysis to the history")
    analyze.add_argument("--json", action="store_true", help="Print the analysis as JSON")

    compare = subparsers.add_parser("compare", help="Compare two improved prompts")
    _add_prompt_args(compare, "original", "Original prompt")
    _add_prompt_args(compare, "improved-a", "Improved prompt A")
    _add_prompt_args(compare, "improved-b", "Improved prompt B")
    compare.add_argument("--weights", default=None, help="Weight override, e.g. clarity=0.5,specificity=0.3,...")
    compare.add_argument("--json", action="store_true", help="Print the comparison as JSON")

    history = subparsers.add_parser("history", help="Show saved analyses")
    history.add_argument("--limit", type=int, default=None, help="Number of most recent entries")
    history.add_argument("--export", default=None, help="Write the history to a CSV file")

    feedback = subparsers.add_parser("feedback", help="Attach feedback to a saved analysis")
    feedback.add_argument("entry_id", help="History entry ID")
    accuracy = feedback.add_mutually_exclusive_group(required=True)
    accuracy.add_argument("--accurate", dest="is_accurate", action="store_true")
    accuracy.add_argument("--inaccurate", dest="is_accurate", action="store_false")
    feedback.add_argument("--comments", default="", help="Free-form comments")
    feedback.add_argument("--suggested-score", type=float, default=None, help="Score the user would expect (0-1)")

    return parser.parse_args(argv)


def _read_prompt(args: argparse.Namespace, name: str) -> str:
    """Read a prompt from --<name> or --<name>-file"""
    attr = name.replace("-", "_")
    text = getattr(args, attr)
    if text is not None:
        return text
    return Path(getattr(args, f"{attr}_file")).read_text(encoding="utf-8")


def _config_override(args: argparse.Namespace) -> dict | None:
    if not args.weights:
        return None
    return {"weights": parse_weights(args.weights)}


def _print_analysis(analysis: PromptComparisonAnalysis) -> None:
    improvement = analysis.improvement_score
    length = analysis.length_analysis
    complexity = analysis.complexity_analysis

    print(f"\n=== Improvement Score: {improvement.overall_score:.2f} ({improvement.grade.value}) ===\n")
    print(f"  {improvement.summary}\n")
    print(f"  {'Criterion':<16} {'Score':>6} {'Conf.':>6}  Reasoning")
    print(f"  {'-'*16} {'-'*6} {'-'*6}  {'-'*40}")
    for s in improvement.criteria_scores:
        print(f"  {s.criterion.value:<16} {s.score:>6.2f} {s.confidence:>6.2f}  {s.reasoning}")
    print()
    print(
        f"  Length:     {length.original_length} -> {length.improved_length} "
        f"({length.length_increase:+d}, x{length.length_increase_ratio:.2f})"
    )
    print(
        f"  Complexity: {complexity.original_complexity:.1f} -> {complexity.improved_complexity:.1f} "
        f"({complexity.complexity_increase:+.1f})"
    )
    if improvement.key_improvements:
        print(f"\n  Key improvements: {', '.join(improvement.key_improvements)}")
    if improvement.next_step_suggestions:
        print("\n  Next steps:")
        for suggestion in improvement.next_step_suggestions:
            print(f"    - {suggestion}")
    print()


def _print_comparison(result: ComparisonResult) -> None:
    score_a = result.analysis_a.improvement_score
    score_b = result.analysis_b.improvement_score
    print("\n=== A/B Comparison ===\n")
    print(f"  A: {score_a.overall_score:.2f} ({score_a.grade.value})")
    print(f"  B: {score_b.overall_score:.2f} ({score_b.grade.value})")
    print(f"  Better: {result.better} (diff {result.score_diff:.2f})\n")
    print(f"  {'Criterion':<16} {'A':>6} {'B':>6} {'A-B':>6}")
    print(f"  {'-'*16} {'-'*6} {'-'*6} {'-'*6}")
    for d in result.criteria_diffs:
        print(f"  {d.criterion.value:<16} {d.score_a:>6.2f} {d.score_b:>6.2f} {d.diff:>+6.2f}")
    print()


def _run_analyze(args: argparse.Namespace, service: ScoringService) -> None:
    analysis = service.analyze_improvement(
        _read_prompt(args, "original"),
        _read_prompt(args, "improved"),
        _config_override(args),
    )
    if args.json:
        print(json.dumps(analysis.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_analysis(analysis)
    if args.save:
        entry_id = service.save_score(analysis)
        print(f"Saved: {entry_id}")


def _run_compare(args: argparse.Namespace, service: ScoringService) -> None:
    result = compare_improvements(
        service,
        _read_prompt(args, "original"),
        _read_prompt(args, "improved-a"),
        _read_prompt(args, "improved-b"),
        _config_override(args),
    )
    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_comparison(result)


def _run_history(args: argparse.Namespace, service: ScoringService) -> None:
    entries = service.get_score_history(args.limit)
    if not entries:
        print("No scoring history found.")
        return

    df = history_to_frame(entries)
    print(f"\n=== Scoring History ({len(df)} entries) ===\n")
    print(f"  {'ID':<32} {'Created':<26} {'Score':>6} {'Grade':<10} Feedback")
    print(f"  {'-'*32} {'-'*26} {'-'*6} {'-'*10} {'-'*8}")
    for _, row in df.iterrows():
        feedback = "-"
        if row["feedback_is_accurate"] is not None:
            feedback = "accurate" if row["feedback_is_accurate"] else "inaccurate"
        print(
            f"  {row['id']:<32} {row['created_at']:<26} "
            f"{row['overall_score']:>6.2f} {row['grade']:<10} {feedback}"
        )
    print()

    if args.export:
        export_path = Path(args.export)
        export_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(export_path, index=False)
        print(f"Exported: {export_path}")


def _run_feedback(args: argparse.Namespace, service: ScoringService) -> bool:
    feedback = UserFeedback(
        is_accurate=args.is_accurate,
        comments=args.comments,
        suggested_score=args.suggested_score,
    )
    if not service.submit_feedback(args.entry_id, feedback):
        print(f"ERROR: History entry not found: {args.entry_id}")
        return False
    print(f"Feedback saved: {args.entry_id}")
    return True


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = parse_args(argv)

    try:
        config = load_config()
        config.log.apply()
        service = ScoringService(
            config=config.scoring,
            history_store=create_history_store(config),
            history_limit=config.storage.history_limit,
        )

        if args.command == "analyze":
            _run_analyze(args, service)
        elif args.command == "compare":
            _run_compare(args, service)
        elif args.command == "history":
            _run_history(args, service)
        elif args.command == "feedback":
            if not _run_feedback(args, service):
                sys.exit(1)
    except ScoringError as e:
        print(f"ERROR [{e.code.value}]: {e.message}")
        sys.exit(1)
    except (ValueError, OSError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
