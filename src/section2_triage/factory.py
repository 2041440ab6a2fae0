"""
Triage Record Factory: lifts base threats into tracked threats.
"""

from uuid import uuid4

from ..section1_suggestion.schemas import BaseThreat
from .config import TriageConfig
from .schemas import ThreatStatus, TrackedThreat


def new_threat_id() -> str:
    """Generate a process-unique threat id."""
    return f"{TriageConfig.THREAT_ID_PREFIX}-{uuid4().hex}"


def materialize(threats: list[BaseThreat]) -> list[TrackedThreat]:
    """
    Create one Pending, unassigned TrackedThreat per base threat.

    Output order mirrors input order.

    Args:
        threats: Base threats from the suggestion pipeline

    Returns:
        Freshly identified tracked threats
    """
    return [
        TrackedThreat(
            id=new_threat_id(),
            name=threat.name,
            description=threat.description,
            status=ThreatStatus.PENDING,
            assignee=None,
        )
        for threat in threats
    ]
