"""Run statistics and the completion badge derived from them."""

from .badge import BadgeTier, CompletionBadge, badge_for_percentage, render_completion_badge
from .stats import (
    Assignee,
    AssigneeStats,
    DerivedMetrics,
    RunItem,
    RunStats,
    compute_assignee_stats,
    compute_derived_metrics,
)

__all__ = [
    "Assignee",
    "AssigneeStats",
    "BadgeTier",
    "CompletionBadge",
    "DerivedMetrics",
    "RunItem",
    "RunStats",
    "badge_for_percentage",
    "compute_assignee_stats",
    "compute_derived_metrics",
    "render_completion_badge",
]
