"""
Suggestion Orchestrator

Composes the intelligence service and the language-model advisor under
a fixed fallback policy:

1. Ask the intelligence service. A non-empty answer is authoritative and
   is returned without consulting the advisor.
2. If the service fails or answers with no threats, ask the advisor once.
3. If the advisor also fails, raise GenerationError. The service's own
   failure detail is logged, never propagated.

The two sources are awaited one after the other, never concurrently.
"""

import logging
from typing import Optional

from .advisor import ThreatAdvisor
from .errors import GenerationError, SourceUnavailableError
from .intelligence import ThreatIntelligenceService
from .schemas import BaseThreat, SuggestThreatsInput, SuggestThreatsOutput, SystemDetails

logger = logging.getLogger(__name__)


class SuggestionOrchestrator:
    """
    Single authoritative threat list per request.

    Args:
        intelligence: Object with ``async get_threats(details)``
        advisor: Object with ``async suggest(details)``
    """

    SOURCE_INTELLIGENCE = "intelligence"
    SOURCE_ADVISOR = "advisor"

    def __init__(self, intelligence, advisor):
        self.intelligence = intelligence
        self.advisor = advisor
        self.last_source: Optional[str] = None

    async def _query_intelligence(self, details: SystemDetails) -> list[BaseThreat]:
        """Return service threats or raise SourceUnavailableError."""
        try:
            threats = await self.intelligence.get_threats(details)
        except Exception as exc:
            raise SourceUnavailableError(f"Threat intelligence service call failed: {exc}") from exc

        if not threats:
            raise SourceUnavailableError("Threat intelligence service returned no results.")
        return list(threats)

    async def suggest_threats(self, details: SystemDetails) -> list[BaseThreat]:
        """
        Produce the threat list for a request.

        Args:
            details: Validated system description

        Returns:
            Non-empty list of base threats

        Raises:
            GenerationError: If neither source produced a usable list
        """
        self.last_source = None

        try:
            threats = await self._query_intelligence(details)
        except SourceUnavailableError as exc:
            logger.warning(f"{exc} Falling back to LLM.")
        else:
            logger.info("Using threats from external service.")
            self.last_source = self.SOURCE_INTELLIGENCE
            return threats

        logger.info("Using LLM to suggest threats.")
        try:
            threats = await self.advisor.suggest(details)
        except Exception as exc:
            logger.error(f"Advisor failed: {exc}")
            raise GenerationError("AI failed to generate threat suggestions.") from exc

        if not threats:
            raise GenerationError("AI failed to generate threat suggestions.")

        self.last_source = self.SOURCE_ADVISOR
        return list(threats)


def build_default_orchestrator() -> SuggestionOrchestrator:
    """Wire the placeholder service and the Gemini advisor from SuggestionConfig."""

    return SuggestionOrchestrator(ThreatIntelligenceService(), ThreatAdvisor())


async def suggest_threats(
    payload: SuggestThreatsInput | dict,
    orchestrator: Optional[SuggestionOrchestrator] = None,
) -> SuggestThreatsOutput:
    """
    Entry point for presentation layers.

    Args:
        payload: SuggestThreatsInput or its JSON form
            ``{"systemDetails": {"description": "..."}}``
        orchestrator: Defaults to the placeholder service + Gemini advisor

    Returns:
        SuggestThreatsOutput with the authoritative threat list

    Raises:
        pydantic.ValidationError: If the description is out of bounds
        GenerationError: If both sources failed
    """
    request = SuggestThreatsInput.model_validate(payload)
    if orchestrator is None:
        orchestrator = build_default_orchestrator()

    threats = await orchestrator.suggest_threats(request.system_details)
    return SuggestThreatsOutput(threats=threats)
