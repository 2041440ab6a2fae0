"""
Section 1: Threat Suggestion

Turns a free-text system description into a list of candidate threats.
Two sources are combined under a fixed fallback policy:
- ThreatIntelligenceService: curated (placeholder) intelligence, authoritative when it answers
- ThreatAdvisor: Gemini, prompted against a strict JSON schema, used only as fallback

Example:
    >>> from src.section1_suggestion import suggest_threats
    >>>
    >>> output = await suggest_threats(
    ...     {"systemDetails": {"description": "A web app backed by a database."}}
    ... )
    >>> [threat.name for threat in output.threats]
"""

from dotenv import load_dotenv

load_dotenv()

from .schemas import (
    BaseThreat,
    SuggestThreatsInput,
    SuggestThreatsOutput,
    SystemDetails,
)
from .errors import GenerationError, SourceUnavailableError, SuggestionError
from .intelligence import ThreatIntelligenceService
from .advisor import ThreatAdvisor
from .orchestrator import SuggestionOrchestrator, build_default_orchestrator, suggest_threats

__all__ = [
    # Schemas
    "BaseThreat",
    "SuggestThreatsInput",
    "SuggestThreatsOutput",
    "SystemDetails",
    # Errors
    "GenerationError",
    "SourceUnavailableError",
    "SuggestionError",
    # Sources
    "ThreatIntelligenceService",
    "ThreatAdvisor",
    # Orchestrator
    "SuggestionOrchestrator",
    "build_default_orchestrator",
    "suggest_threats",
]
