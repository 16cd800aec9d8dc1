"""Run statistics and the metrics derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

__all__ = [
    "RESULT_STATUSES",
    "RunStats",
    "DerivedMetrics",
    "Assignee",
    "RunItem",
    "AssigneeStats",
    "compute_derived_metrics",
    "compute_assignee_stats",
]

RESULT_STATUSES = ("passed", "failed", "blocked", "skipped", "retest", "untested")

UNASSIGNED_NAME = "Unassigned"


@dataclass(frozen=True, slots=True)
class RunStats:
    total: int = 0
    passed: int = 0
    failed: int = 0
    blocked: int = 0
    skipped: int = 0
    retest: int = 0
    untested: int = 0


@dataclass(frozen=True, slots=True)
class DerivedMetrics:
    tested: int
    completion_pct: float
    pass_rate: float
    fail_rate: float


def compute_derived_metrics(stats: RunStats) -> DerivedMetrics:
    """Completion is measured against all items; pass/fail rates against tested ones."""

    tested = stats.total - stats.untested
    return DerivedMetrics(
        tested=tested,
        completion_pct=(tested / stats.total) * 100 if stats.total > 0 else 0.0,
        pass_rate=(stats.passed / tested) * 100 if tested > 0 else 0.0,
        fail_rate=(stats.failed / tested) * 100 if tested > 0 else 0.0,
    )


@dataclass(frozen=True, slots=True)
class Assignee:
    id: str
    name: str
    email: str
    avatar_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RunItem:
    """A run item reduced to what the breakdown needs.

    ``result_status`` is ``None`` when no result has been recorded yet.
    """

    assigned_to: Optional[Assignee] = None
    result_status: Optional[str] = None


@dataclass(slots=True)
class AssigneeStats:
    user_id: Optional[str]
    name: str
    email: str = ""
    avatar_url: Optional[str] = None
    total: int = 0
    tested: int = 0
    counts: dict[str, int] = field(
        default_factory=lambda: {status: 0 for status in RESULT_STATUSES}
    )

    @property
    def untested(self) -> int:
        return self.counts["untested"]


def compute_assignee_stats(items: Iterable[RunItem]) -> list[AssigneeStats]:
    """Group run items per assignee; the unassigned bucket sorts last."""

    buckets: dict[Optional[str], AssigneeStats] = {}
    for item in items:
        assignee = item.assigned_to
        key = assignee.id if assignee else None
        entry = buckets.get(key)
        if entry is None:
            entry = AssigneeStats(
                user_id=key,
                name=assignee.name if assignee else UNASSIGNED_NAME,
                email=assignee.email if assignee else "",
                avatar_url=assignee.avatar_url if assignee else None,
            )
            buckets[key] = entry

        entry.total += 1
        if item.result_status is None:
            entry.counts["untested"] += 1
            continue
        # a recorded result counts as tested even when its status is "untested"
        if item.result_status in entry.counts and item.result_status != "untested":
            entry.counts[item.result_status] += 1
        entry.tested += 1

    return sorted(
        buckets.values(),
        key=lambda entry: (entry.user_id is None, entry.name.casefold()),
    )
