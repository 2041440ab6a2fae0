"""
Pydantic schemas for Section 2: Triage

TrackedThreat is the unit held by the triage store. The dashboard models
are derived values, recomputed from the store on every read.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ThreatStatus(str, Enum):
    """Triage status of a tracked threat. Declaration order is the canonical display order."""
    PENDING = "Pending"
    TRIAGED = "Triaged"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"


class TrackedThreat(BaseModel):
    """
    A base threat enriched with identity, status and assignee.

    ``id`` is fixed at creation. Status and assignee are changed only
    through the TriageStore.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(..., min_length=1, frozen=True, description="Unique identifier within a triage session")
    name: str = Field(..., min_length=1, description="The name of the threat")
    description: str = Field(..., min_length=1, description="A description of the threat")
    status: ThreatStatus = Field(default=ThreatStatus.PENDING, description="Current triage status")
    assignee: Optional[str] = Field(None, description="Assigned SOC analyst, or None if unassigned")


class DashboardSummary(BaseModel):
    """Counts per status plus the total."""
    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    pending: int = 0
    triaged: int = 0
    in_progress: int = Field(default=0, alias="inProgress")
    resolved: int = 0


class DistributionEntry(BaseModel):
    """One bar or slice of a dashboard chart."""
    category: str
    count: int = Field(default=0, ge=0)
    share: float = Field(default=0.0, ge=0.0, le=1.0, description="count / total, 0.0 for an empty store")


class DashboardData(BaseModel):
    """Everything the dashboard renders, derived from a single snapshot."""
    model_config = ConfigDict(populate_by_name=True)

    summary: DashboardSummary
    status_distribution: list[DistributionEntry] = Field(default_factory=list, alias="statusDistribution")
    assignee_distribution: list[DistributionEntry] = Field(default_factory=list, alias="assigneeDistribution")
