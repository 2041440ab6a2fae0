"""
Pydantic schemas for Section 1: Threat Suggestion

These models define the request and response shapes exchanged with the
threat sources. The JSON wire format uses camelCase keys
(``{"systemDetails": {"description": ...}}``), Python code uses
snake_case attributes.
"""

from pydantic import BaseModel, ConfigDict, Field

from .config import SuggestionConfig


class SystemDetails(BaseModel):
    """Free-text description of the system to analyze. Length is checked on the raw text."""

    description: str = Field(
        ...,
        min_length=SuggestionConfig.DESCRIPTION_MIN_LENGTH,
        max_length=SuggestionConfig.DESCRIPTION_MAX_LENGTH,
        description=(
            "A detailed description of the system, including architecture, "
            "technologies, data flow, and user types."
        ),
    )


class BaseThreat(BaseModel):
    """
    A source-agnostic threat suggestion.

    Immutable and strict: both fields must be non-empty and no other
    fields are accepted, so generator output carrying status or assignee
    keys fails validation instead of leaking into triage state.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        description="The concise name of the potential threat (e.g., SQL Injection, Cross-Site Scripting).",
    )
    description: str = Field(
        ...,
        min_length=1,
        description="A brief explanation of the threat and how it might apply to the described system.",
    )


class SuggestThreatsInput(BaseModel):
    """Input of the suggest_threats boundary."""
    model_config = ConfigDict(populate_by_name=True)

    system_details: SystemDetails = Field(..., alias="systemDetails")


class SuggestThreatsOutput(BaseModel):
    """Output of the suggest_threats boundary and of the advisor's generation call."""
    model_config = ConfigDict(extra="forbid")

    threats: list[BaseThreat] = Field(
        ...,
        description="A list of potential threats relevant to the provided system details.",
    )
