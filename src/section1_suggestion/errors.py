"""
Exceptions raised by the threat suggestion pipeline.
"""


class SuggestionError(Exception):
    """Base class for threat suggestion failures."""


class SourceUnavailableError(SuggestionError):
    """The intelligence service failed or returned no usable result.

    Recovered inside the orchestrator; never surfaced to callers.
    """


class GenerationError(SuggestionError):
    """The language-model advisor produced no valid threat list."""
