import random

import pytest

from src.section1_suggestion.schemas import BaseThreat
from src.section2_triage.aggregation import AggregationEngine
from src.section2_triage.config import AnalystRoster
from src.section2_triage.factory import materialize
from src.section2_triage.schemas import ThreatStatus, TrackedThreat
from src.section2_triage.store import TriageStore


ROSTER = AnalystRoster(analysts=("Alice", "Bob"), unassigned_label="Unassigned")


def _store_with(count: int) -> TriageStore:
    store = TriageStore(ROSTER)
    store.replace_all(
        materialize([BaseThreat(name=f"Threat {i}", description=f"Description {i}.") for i in range(count)])
    )
    return store


def test_empty_store_distributions_keep_every_category():
    engine = AggregationEngine(ROSTER)

    assert [(e.category, e.count) for e in engine.assignee_distribution([])] == [
        ("Alice", 0),
        ("Bob", 0),
        ("Unassigned", 0),
    ]
    assert [(e.category, e.count) for e in engine.status_distribution([])] == [
        ("Pending", 0),
        ("Triaged", 0),
        ("In Progress", 0),
        ("Resolved", 0),
    ]
    assert engine.summary([]).total == 0
    assert all(entry.share == 0.0 for entry in engine.status_distribution([]))


def test_summary_counts_each_status():
    store = _store_with(5)
    ids = [threat.id for threat in store.snapshot()]
    store.set_status(ids[0], ThreatStatus.TRIAGED)
    store.set_status(ids[1], ThreatStatus.IN_PROGRESS)
    store.set_status(ids[2], ThreatStatus.IN_PROGRESS)
    store.set_status(ids[3], ThreatStatus.RESOLVED)

    summary = AggregationEngine(ROSTER).summary(store.snapshot())

    assert summary.total == 5
    assert summary.pending == 1
    assert summary.triaged == 1
    assert summary.in_progress == 2
    assert summary.resolved == 1
    assert summary.model_dump(by_alias=True)["inProgress"] == 2


def test_summary_invariant_holds_across_random_status_changes():
    store = _store_with(8)
    engine = AggregationEngine(ROSTER)
    ids = [threat.id for threat in store.snapshot()]
    rng = random.Random(1234)

    for _ in range(200):
        store.set_status(rng.choice(ids), rng.choice(list(ThreatStatus)))
        summary = engine.summary(store.snapshot())
        assert summary.total == 8
        assert summary.pending + summary.triaged + summary.in_progress + summary.resolved == summary.total


def test_status_distribution_order_and_shares():
    store = _store_with(4)
    ids = [threat.id for threat in store.snapshot()]
    store.set_status(ids[0], ThreatStatus.RESOLVED)

    distribution = AggregationEngine(ROSTER).status_distribution(store.snapshot())

    assert [entry.category for entry in distribution] == [status.value for status in ThreatStatus]
    assert [entry.count for entry in distribution] == [3, 0, 0, 1]
    assert distribution[0].share == pytest.approx(0.75)
    assert distribution[3].share == pytest.approx(0.25)


def test_assignee_distribution_folds_over_threats():
    store = _store_with(4)
    ids = [threat.id for threat in store.snapshot()]
    store.set_assignee(ids[0], "Alice")
    store.set_assignee(ids[1], "Alice")
    store.set_assignee(ids[2], "Unassigned")

    distribution = AggregationEngine(ROSTER).assignee_distribution(store.snapshot())

    assert [(e.category, e.count) for e in distribution] == [
        ("Alice", 2),
        ("Bob", 0),
        ("Unassigned", 2),
    ]


def test_assignee_off_roster_is_counted_after_configured_categories():
    threats = [
        TrackedThreat(id="threat-1", name="DoS", description="Flooding.", assignee="Eve"),
        TrackedThreat(id="threat-2", name="Phishing", description="Lures.", assignee="Bob"),
    ]

    distribution = AggregationEngine(ROSTER).assignee_distribution(threats)

    assert [(e.category, e.count) for e in distribution] == [
        ("Alice", 0),
        ("Bob", 1),
        ("Unassigned", 0),
        ("Eve", 1),
    ]


def test_dashboard_does_not_mutate_snapshot():
    store = _store_with(3)
    snapshot = store.snapshot()
    before = [threat.model_dump() for threat in snapshot]

    data = AggregationEngine(ROSTER).dashboard(snapshot)

    assert [threat.model_dump() for threat in snapshot] == before
    assert data.summary.total == 3
    assert len(data.status_distribution) == 4
    assert len(data.assignee_distribution) == 3
    assert set(data.model_dump(by_alias=True)) == {"summary", "statusDistribution", "assigneeDistribution"}
