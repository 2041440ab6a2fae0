"""
Triage Store

Holds the tracked threats of the current session, keyed by id. A new
analysis replaces the whole set; individual threats change only through
set_status and set_assignee. Mutations that name an unknown id are
no-ops.

Single writer, synchronous: no locking.
"""

import logging
from typing import Iterator, Optional

from .config import AnalystRoster
from .schemas import ThreatStatus, TrackedThreat

logger = logging.getLogger(__name__)


# Allowed targets per status. Triage is non-linear, so every edge is legal.
# Every ThreatStatus needs an entry here; see the check below.
_TRANSITIONS: dict[ThreatStatus, frozenset[ThreatStatus]] = {
    ThreatStatus.PENDING: frozenset(ThreatStatus),
    ThreatStatus.TRIAGED: frozenset(ThreatStatus),
    ThreatStatus.IN_PROGRESS: frozenset(ThreatStatus),
    ThreatStatus.RESOLVED: frozenset(ThreatStatus),
}

_missing = set(ThreatStatus) - set(_TRANSITIONS)
if _missing:
    raise RuntimeError(f"No transition rules for statuses: {sorted(s.value for s in _missing)}")


def transition(current: ThreatStatus, new: ThreatStatus) -> ThreatStatus:
    """
    Apply a status change.

    Raises:
        ValueError: If the edge is not allowed
    """
    if new not in _TRANSITIONS[current]:
        raise ValueError(f"Illegal status transition: {current.value} -> {new.value}")
    return new


class TriageStore:
    """In-memory, single-session set of tracked threats."""

    def __init__(self, roster: AnalystRoster):
        self.roster = roster
        self._threats: dict[str, TrackedThreat] = {}

    def replace_all(self, threats: list[TrackedThreat]) -> None:
        """Discard the current set and install ``threats`` in order."""
        replacement: dict[str, TrackedThreat] = {}
        for threat in threats:
            if threat.id in replacement:
                raise ValueError(f"Duplicate threat id: {threat.id}")
            replacement[threat.id] = threat.model_copy()
        self._threats = replacement
        logger.info(f"Triage store replaced with {len(replacement)} threats")

    def set_status(self, threat_id: str, status: ThreatStatus | str) -> bool:
        """
        Change the status of one threat.

        Args:
            threat_id: Id of the threat
            status: A ThreatStatus or its value, e.g. "In Progress"

        Returns:
            True if a threat was updated, False if the id is unknown

        Raises:
            ValueError: If ``status`` is not a valid status
        """
        new_status = ThreatStatus(status)
        threat = self._threats.get(threat_id)
        if threat is None:
            logger.debug(f"set_status ignored for unknown id {threat_id}")
            return False

        threat.status = transition(threat.status, new_status)
        return True

    def set_assignee(self, threat_id: str, analyst: Optional[str]) -> bool:
        """
        Change the assignee of one threat.

        Args:
            threat_id: Id of the threat
            analyst: A roster analyst, the unassigned label, or None

        Returns:
            True if a threat was updated, False if the id is unknown

        Raises:
            ValueError: If ``analyst`` is not on the roster
        """
        assignee = self.roster.normalize(analyst)
        threat = self._threats.get(threat_id)
        if threat is None:
            logger.debug(f"set_assignee ignored for unknown id {threat_id}")
            return False

        threat.assignee = assignee
        return True

    def get(self, threat_id: str) -> Optional[TrackedThreat]:
        """Return a copy of one threat, or None."""
        threat = self._threats.get(threat_id)
        return threat.model_copy() if threat is not None else None

    def snapshot(self) -> tuple[TrackedThreat, ...]:
        """Copies of all threats in insertion order."""
        return tuple(threat.model_copy() for threat in self._threats.values())

    def __len__(self) -> int:
        return len(self._threats)

    def __contains__(self, threat_id: object) -> bool:
        return threat_id in self._threats

    def __iter__(self) -> Iterator[TrackedThreat]:
        return iter(self.snapshot())
