"""
Section 2: Triage

Takes the threat lists produced by Section 1 and tracks them through
analyst triage:
1. Record factory: identity, Pending status, no assignee
2. Triage store: status and assignee changes for the current session
3. Aggregation: summary counts and status/assignee distributions for the dashboard
"""

from dotenv import load_dotenv

load_dotenv()

from .config import AnalystRoster, TriageConfig
from .schemas import (
    DashboardData,
    DashboardSummary,
    DistributionEntry,
    ThreatStatus,
    TrackedThreat,
)
from .factory import materialize
from .store import TriageStore, transition
from .aggregation import AggregationEngine
from .session import TriageSession

__version__ = "1.0.0"

__all__ = [
    # Config
    "AnalystRoster",
    "TriageConfig",
    # Schemas
    "DashboardData",
    "DashboardSummary",
    "DistributionEntry",
    "ThreatStatus",
    "TrackedThreat",
    # Core
    "materialize",
    "TriageStore",
    "transition",
    "AggregationEngine",
    "TriageSession",
]
