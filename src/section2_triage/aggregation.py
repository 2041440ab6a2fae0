"""
Aggregation Engine

Derives dashboard counts and distributions from a snapshot of tracked
threats. Read-only: never mutates the threats it is given. Every
category is always present, with zero counts where nothing matches, so
charts keep a stable shape between snapshots.
"""

from collections import Counter
from typing import Iterable

from .config import AnalystRoster
from .schemas import (
    DashboardData,
    DashboardSummary,
    DistributionEntry,
    ThreatStatus,
    TrackedThreat,
)

# DashboardSummary field per status. Every ThreatStatus needs an entry.
_SUMMARY_FIELDS: dict[ThreatStatus, str] = {
    ThreatStatus.PENDING: "pending",
    ThreatStatus.TRIAGED: "triaged",
    ThreatStatus.IN_PROGRESS: "in_progress",
    ThreatStatus.RESOLVED: "resolved",
}

_missing = set(ThreatStatus) - set(_SUMMARY_FIELDS)
if _missing:
    raise RuntimeError(f"No summary field for statuses: {sorted(s.value for s in _missing)}")


def _share(count: int, total: int) -> float:
    return count / total if total else 0.0


class AggregationEngine:
    """Dashboard statistics over a TriageStore snapshot."""

    def __init__(self, roster: AnalystRoster):
        self.roster = roster

    def _status_counts(self, threats: Iterable[TrackedThreat]) -> Counter:
        counts: Counter = Counter({status: 0 for status in ThreatStatus})
        counts.update(threat.status for threat in threats)
        return counts

    def summary(self, threats: Iterable[TrackedThreat]) -> DashboardSummary:
        """Counts per status plus total; the parts always sum to the total."""
        threats = list(threats)
        counts = self._status_counts(threats)
        fields = {_SUMMARY_FIELDS[status]: counts[status] for status in ThreatStatus}
        return DashboardSummary(total=len(threats), **fields)

    def status_distribution(self, threats: Iterable[TrackedThreat]) -> list[DistributionEntry]:
        """One entry per status in canonical order, zero counts included."""
        threats = list(threats)
        counts = self._status_counts(threats)
        return [
            DistributionEntry(
                category=status.value,
                count=counts[status],
                share=_share(counts[status], len(threats)),
            )
            for status in ThreatStatus
        ]

    def assignee_distribution(self, threats: Iterable[TrackedThreat]) -> list[DistributionEntry]:
        """
        One entry per roster analyst, then the unassigned label.

        Assignees that are no longer on the roster are appended after the
        configured categories so no threat goes uncounted.
        """
        threats = list(threats)
        counts: Counter = Counter(
            threat.assignee if threat.assignee is not None else self.roster.unassigned_label
            for threat in threats
        )

        categories = list(self.roster.categories)
        categories.extend(sorted(name for name in counts if name not in self.roster.categories))

        return [
            DistributionEntry(
                category=category,
                count=counts[category],
                share=_share(counts[category], len(threats)),
            )
            for category in categories
        ]

    def dashboard(self, threats: Iterable[TrackedThreat]) -> DashboardData:
        """Summary and both distributions from the same snapshot."""
        threats = list(threats)
        return DashboardData(
            summary=self.summary(threats),
            status_distribution=self.status_distribution(threats),
            assignee_distribution=self.assignee_distribution(threats),
        )
