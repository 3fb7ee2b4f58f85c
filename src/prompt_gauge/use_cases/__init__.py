"""
Use Cases Layer

Aggregates business logic and provides use cases called from the runner, the API and the viewer.
"""

from prompt_gauge.use_cases.analysis import (
    ScoringService,
    validate_prompts,
)
from prompt_gauge.use_cases.comparison import (
    compare_improvements,
    criteria_diffs,
    pick_better,
)
from prompt_gauge.use_cases.reporting import (
    history_to_frame,
)

__all__ = [
    # analysis
    "ScoringService",
    "validate_prompts",
    # comparison
    "compare_improvements",
    "criteria_diffs",
    "pick_better",
    # reporting
    "history_to_frame",
]
