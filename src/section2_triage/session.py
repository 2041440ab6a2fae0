"""
Triage Session

Wires the suggestion pipeline to triage state for one analyst session:
description -> orchestrator -> materialize -> store -> dashboard.

A failed analysis leaves the previous threats in place so the caller can
show an error next to the last good dashboard.

Known limitation: requests are not tokened or cancellable. If two
analyses overlap, whichever resolves last replaces the store, even when
it was started first.
"""

import logging
from typing import Optional

from ..section1_suggestion.errors import GenerationError
from ..section1_suggestion.orchestrator import SuggestionOrchestrator, build_default_orchestrator
from ..section1_suggestion.schemas import SystemDetails
from .aggregation import AggregationEngine
from .config import AnalystRoster, TriageConfig
from .factory import materialize
from .schemas import DashboardData, ThreatStatus, TrackedThreat
from .store import TriageStore

logger = logging.getLogger(__name__)


class TriageSession:
    """
    In-memory triage session.

    Args:
        orchestrator: Suggestion orchestrator; defaults to the placeholder
            service with the Gemini advisor as fallback
        roster: Analyst roster; defaults to TriageConfig.roster()
    """

    def __init__(
        self,
        orchestrator: Optional[SuggestionOrchestrator] = None,
        roster: Optional[AnalystRoster] = None,
    ):
        self.orchestrator = build_default_orchestrator() if orchestrator is None else orchestrator
        self.roster = TriageConfig.roster() if roster is None else roster
        self.store = TriageStore(self.roster)
        self.aggregation = AggregationEngine(self.roster)
        self.last_error: Optional[str] = None
        self.analysis_count = 0

    async def analyze(self, description: str) -> list[TrackedThreat]:
        """
        Run one analysis and replace the store's contents with its result.

        Args:
            description: Free-text system description (10-5000 characters)

        Returns:
            The newly tracked threats, in suggestion order

        Raises:
            pydantic.ValidationError: If the description is out of bounds
            GenerationError: If no threats could be produced; the store
                keeps its previous contents
        """
        self.last_error = None
        details = SystemDetails(description=description)

        try:
            threats = await self.orchestrator.suggest_threats(details)
        except GenerationError as exc:
            self.last_error = f"Failed to retrieve threat suggestions. {exc}"
            logger.error(f"Error fetching threats: {exc}")
            raise

        tracked = materialize(threats)
        self.store.replace_all(tracked)
        self.analysis_count += 1
        logger.info(f"Analysis complete: {len(tracked)} potential threats identified.")
        return tracked

    def set_status(self, threat_id: str, status: ThreatStatus | str) -> bool:
        """Change a threat's status; False if the id is unknown."""
        updated = self.store.set_status(threat_id, status)
        if updated:
            logger.info(f"Threat status changed to {ThreatStatus(status).value}.")
        return updated

    def set_assignee(self, threat_id: str, analyst: Optional[str]) -> bool:
        """Change a threat's assignee; False if the id is unknown."""
        updated = self.store.set_assignee(threat_id, analyst)
        if updated:
            assignee = self.store.get(threat_id).assignee
            logger.info(f"Threat assigned to {assignee or self.roster.unassigned_label}.")
        return updated

    def threats(self) -> tuple[TrackedThreat, ...]:
        return self.store.snapshot()

    def dashboard(self) -> DashboardData:
        """Dashboard data for the store's current contents."""
        return self.aggregation.dashboard(self.store.snapshot())
