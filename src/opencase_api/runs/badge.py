"""Completion badge shown next to a run in the web UI."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .stats import RunStats, compute_derived_metrics

__all__ = [
    "BadgeTier",
    "CompletionBadge",
    "round_percentage",
    "badge_for_percentage",
    "render_completion_badge",
]


class BadgeTier(str, Enum):
    COMPLETE = "complete"
    IN_PROGRESS = "in_progress"
    NOT_STARTED = "not_started"


BADGE_CLASSES: dict[BadgeTier, str] = {
    BadgeTier.COMPLETE: "bg-green-100 text-green-700",
    BadgeTier.IN_PROGRESS: "bg-blue-100 text-blue-700",
    BadgeTier.NOT_STARTED: "bg-gray-100 text-gray-500",
}

BASE_CLASS = "text-xs font-medium px-1.5 py-0.5 rounded"


@dataclass(frozen=True, slots=True)
class CompletionBadge:
    percent: int
    tier: BadgeTier

    @property
    def label(self) -> str:
        return f"{self.percent}%"

    @property
    def css_class(self) -> str:
        return f"{BASE_CLASS} {BADGE_CLASSES[self.tier]}"


def round_percentage(value: float) -> int:
    # half-up: 42.5 -> 43
    return int(math.floor(value + 0.5))


def badge_for_percentage(completion_pct: float) -> CompletionBadge:
    pct = round_percentage(completion_pct)
    if pct == 100:
        tier = BadgeTier.COMPLETE
    elif pct > 0:
        tier = BadgeTier.IN_PROGRESS
    else:
        tier = BadgeTier.NOT_STARTED
    return CompletionBadge(percent=pct, tier=tier)


def render_completion_badge(stats: RunStats) -> CompletionBadge:
    """Badge for a run: rounded completion percentage and its display tier."""
    return badge_for_percentage(compute_derived_metrics(stats).completion_pct)
