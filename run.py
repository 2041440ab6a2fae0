#!/usr/bin/env python3
"""
ThreatWise - Simple CLI Runner

Analyzes a system description, then prints the triage table and the
dashboard for the resulting threats.

Usage:
    python run.py "<system description>"
    python run.py --file <description.txt> [--json]
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from src.section1_suggestion import GenerationError
from src.section2_triage import TriageSession


def _read_description(argv: list[str]) -> str | None:
    """Return the description from argv, or None if missing."""
    if "--file" in argv:
        idx = argv.index("--file")
        if idx + 1 >= len(argv):
            return None
        path = Path(argv[idx + 1])
        if not path.exists():
            print(f"Error: File not found: {path}")
            sys.exit(1)
        return path.read_text(encoding="utf-8")

    positional = [arg for arg in argv[1:] if not arg.startswith("--")]
    return positional[0] if positional else None


def _print_report(session: TriageSession) -> None:
    threats = session.threats()
    dashboard = session.dashboard()

    print(f"Threats: {len(threats)}")
    print("-" * 50)
    for index, threat in enumerate(threats, 1):
        assignee = threat.assignee or session.roster.unassigned_label
        print(f"[{index}] {threat.name}")
        print(f"    {threat.description}")
        print(f"    id={threat.id}  status={threat.status.value}  assignee={assignee}")

    summary = dashboard.summary
    print("-" * 50)
    print(f"Total: {summary.total}")
    print(f"  Pending: {summary.pending}")
    print(f"  Triaged: {summary.triaged}")
    print(f"  In Progress: {summary.in_progress}")
    print(f"  Resolved: {summary.resolved}")

    print("Assignees:")
    for entry in dashboard.assignee_distribution:
        print(f"  {entry.category}: {entry.count}")


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    description = _read_description(sys.argv)
    if description is None:
        print(__doc__)
        sys.exit(1)

    session = TriageSession()

    try:
        asyncio.run(session.analyze(description))
    except ValidationError as exc:
        print(f"Error: invalid system description: {exc.errors()[0]['msg']}")
        sys.exit(1)
    except GenerationError:
        print(f"Error: {session.last_error}")
        sys.exit(1)

    if "--json" in sys.argv:
        payload = {
            "threats": [threat.model_dump(mode="json") for threat in session.threats()],
            "dashboard": session.dashboard().model_dump(mode="json", by_alias=True),
        }
        print(json.dumps(payload, indent=2))
    else:
        _print_report(session)


if __name__ == "__main__":
    main()
