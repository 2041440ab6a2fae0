import pytest
from pydantic import ValidationError

from src.section1_suggestion.errors import GenerationError
from src.section1_suggestion.intelligence import ThreatIntelligenceService
from src.section1_suggestion.orchestrator import SuggestionOrchestrator
from src.section1_suggestion.schemas import BaseThreat
from src.section2_triage.config import AnalystRoster
from src.section2_triage.schemas import ThreatStatus
from src.section2_triage.session import TriageSession


ROSTER = AnalystRoster(analysts=("Alice", "Bob"), unassigned_label="Unassigned")


class ScriptedIntelligence:
    """Returns queued results; an Exception in the queue is raised."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def get_threats(self, details):
        self.calls += 1
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class ScriptedAdvisor:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def suggest(self, details):
        self.calls += 1
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _session(intelligence, advisor) -> TriageSession:
    return TriageSession(orchestrator=SuggestionOrchestrator(intelligence, advisor), roster=ROSTER)


@pytest.mark.asyncio
async def test_service_failure_then_advisor_dos_is_tracked_as_pending():
    advisor = ScriptedAdvisor([BaseThreat(name="DoS", description="Flooding the public API.")])
    session = _session(ScriptedIntelligence(RuntimeError("intel down")), advisor)

    tracked = await session.analyze("A public API gateway in front of microservices.")

    assert [threat.name for threat in tracked] == ["DoS"]
    assert tracked[0].status == ThreatStatus.PENDING
    assert tracked[0].assignee is None
    assert advisor.calls == 1
    assert session.dashboard().summary.pending == 1


@pytest.mark.asyncio
async def test_database_scenario_populates_store_from_service():
    advisor = ScriptedAdvisor()
    session = _session(ThreatIntelligenceService(latency_seconds=0), advisor)

    await session.analyze("An analytics platform writing events to a database.")

    names = [threat.name for threat in session.threats()]
    assert len(names) == 3
    assert "SQL Injection" in names
    assert advisor.calls == 0


@pytest.mark.asyncio
async def test_failed_analysis_keeps_previous_threats():
    first = [BaseThreat(name="Phishing", description="Credential lures.")]
    intelligence = ScriptedIntelligence(first, [])
    advisor = ScriptedAdvisor(GenerationError("invalid output"))
    session = _session(intelligence, advisor)

    await session.analyze("An email gateway for a 200 person company.")
    threat_id = session.threats()[0].id
    session.set_status(threat_id, ThreatStatus.TRIAGED)
    before = session.threats()

    with pytest.raises(GenerationError):
        await session.analyze("An email gateway for a 300 person company.")

    assert session.threats() == before
    assert session.last_error.startswith("Failed to retrieve threat suggestions.")
    assert session.dashboard().summary.triaged == 1


@pytest.mark.asyncio
async def test_new_analysis_replaces_previous_threats():
    intelligence = ScriptedIntelligence(
        [BaseThreat(name="Phishing", description="Credential lures.")],
        [BaseThreat(name="DoS", description="Flooding."), BaseThreat(name="Malware", description="Droppers.")],
    )
    session = _session(intelligence, ScriptedAdvisor())

    await session.analyze("First system description.")
    await session.analyze("Second system description.")

    assert [threat.name for threat in session.threats()] == ["DoS", "Malware"]
    assert session.analysis_count == 2
    assert session.last_error is None


@pytest.mark.asyncio
async def test_invalid_description_never_reaches_sources():
    intelligence = ScriptedIntelligence()
    session = _session(intelligence, ScriptedAdvisor())

    with pytest.raises(ValidationError):
        await session.analyze("short")

    assert intelligence.calls == 0


@pytest.mark.asyncio
async def test_invalid_description_clears_previous_error():
    session = _session(ScriptedIntelligence([]), ScriptedAdvisor(GenerationError("invalid output")))

    with pytest.raises(GenerationError):
        await session.analyze("A ticketing system for the service desk.")
    assert session.last_error is not None

    with pytest.raises(ValidationError):
        await session.analyze("short")

    assert session.last_error is None


@pytest.mark.asyncio
async def test_session_mutations_feed_dashboard():
    threats = [
        BaseThreat(name="SQL Injection", description="Injected SQL."),
        BaseThreat(name="Data Exfiltration", description="Data leaves the network."),
    ]
    session = _session(ScriptedIntelligence(threats), ScriptedAdvisor())
    tracked = await session.analyze("A reporting service on a shared database.")

    assert session.set_assignee(tracked[0].id, "Bob") is True
    assert session.set_status(tracked[1].id, "In Progress") is True
    assert session.set_status("threat-unknown", ThreatStatus.RESOLVED) is False
    assert session.set_assignee("threat-unknown", "Alice") is False

    dashboard = session.dashboard()
    assert dashboard.summary.in_progress == 1
    assert [(e.category, e.count) for e in dashboard.assignee_distribution] == [
        ("Alice", 0),
        ("Bob", 1),
        ("Unassigned", 1),
    ]
