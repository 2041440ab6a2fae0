"""
Configuration for Section 2: Triage

Holds the analyst roster used by the triage store and the dashboard
aggregation. The roster is read from the environment once and then
passed around explicitly as an AnalystRoster value.
"""

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class AnalystRoster(BaseModel):
    """The SOC analysts a threat may be assigned to, plus the unassigned sentinel."""
    model_config = ConfigDict(frozen=True)

    analysts: tuple[str, ...] = Field(default_factory=tuple)
    unassigned_label: str = Field(default="Unassigned", min_length=1)

    @field_validator("analysts", mode="before")
    @classmethod
    def _clean_analysts(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        cleaned: list[str] = []
        for name in value or ():
            name = str(name).strip()
            if name and name not in cleaned:
                cleaned.append(name)
        return tuple(cleaned)

    @model_validator(mode="after")
    def _sentinel_not_an_analyst(self):
        if self.unassigned_label in self.analysts:
            raise ValueError(f"'{self.unassigned_label}' is reserved for unassigned threats")
        return self

    @property
    def categories(self) -> tuple[str, ...]:
        """Analysts followed by the unassigned label, in display order."""
        return self.analysts + (self.unassigned_label,)

    def is_known(self, analyst: str) -> bool:
        return analyst in self.analysts

    def normalize(self, selection: str | None) -> str | None:
        """
        Map a UI selection to a stored assignee.

        The unassigned label and None both mean "nobody"; any other value
        must be a configured analyst.

        Raises:
            ValueError: If the selection is not on the roster
        """
        if selection is None:
            return None
        selection = selection.strip()
        if selection == self.unassigned_label:
            return None
        if not self.is_known(selection):
            raise ValueError(
                f"Unknown analyst '{selection}'. Configured: {', '.join(self.categories)}"
            )
        return selection


class TriageConfig:
    """Configuration for the triage store and dashboard."""

    DEFAULT_ANALYSTS: str = "Alice,Bob,Charlie,Dana"

    ANALYSTS: str = os.getenv("THREATWISE_ANALYSTS", DEFAULT_ANALYSTS)
    UNASSIGNED_LABEL: str = os.getenv("THREATWISE_UNASSIGNED_LABEL", "Unassigned")

    # Prefix for generated threat ids
    THREAT_ID_PREFIX: str = "threat"

    @classmethod
    def roster(cls) -> AnalystRoster:
        """Build the roster value from the current settings."""
        return AnalystRoster(analysts=cls.ANALYSTS, unassigned_label=cls.UNASSIGNED_LABEL)
