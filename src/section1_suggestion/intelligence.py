"""
Threat Intelligence Service (Source A)

Placeholder for an external threat intelligence API. Returns canned
threats chosen by keywords in the system description after a simulated
network delay. The keyword rules are illustrative only; a real backend
would replace this class behind the same ``get_threats`` coroutine.
"""

import asyncio
import logging
from typing import Optional

from .config import SuggestionConfig
from .schemas import BaseThreat, SystemDetails

logger = logging.getLogger(__name__)


# (keywords, threats) rules, checked in order; first match wins.
DEFAULT_CATALOG: list[tuple[tuple[str, ...], list[BaseThreat]]] = [
    (
        ("database",),
        [
            BaseThreat(
                name="SQL Injection",
                description="A code injection technique that might exploit security vulnerabilities in a database layer.",
            ),
            BaseThreat(
                name="Data Exfiltration",
                description="Unauthorized transfer of data from a computer or other device.",
            ),
            BaseThreat(
                name="Insecure Database Configuration",
                description="Misconfigurations in the database settings that could expose data or allow unauthorized access.",
            ),
        ],
    ),
    (
        ("web app", "frontend"),
        [
            BaseThreat(
                name="Cross-Site Scripting (XSS)",
                description=(
                    "A type of security vulnerability typically found in web applications, allowing attackers "
                    "to inject client-side scripts into web pages viewed by other users."
                ),
            ),
            BaseThreat(
                name="Cross-Site Request Forgery (CSRF)",
                description=(
                    "An attack that forces an end user to execute unwanted actions on a web application "
                    "in which they are currently authenticated."
                ),
            ),
            BaseThreat(
                name="Insecure Direct Object References (IDOR)",
                description="Occurs when an application provides direct access to objects based on user-supplied input.",
            ),
        ],
    ),
]

DEFAULT_THREATS: list[BaseThreat] = [
    BaseThreat(
        name="Denial of Service (DoS)",
        description="An attack meant to shut down a machine or network, making it inaccessible to its intended users.",
    ),
    BaseThreat(
        name="Phishing",
        description=(
            "Attempting to acquire sensitive information such as usernames, passwords, and credit card "
            "details by masquerading as a trustworthy entity."
        ),
    ),
    BaseThreat(
        name="Malware Infection",
        description="Software intentionally designed to cause damage to a computer, server, client, or computer network.",
    ),
]


class ThreatIntelligenceService:
    """
    Keyword-driven stand-in for a curated threat intelligence backend.

    Args:
        catalog: Ordered ``(keywords, threats)`` rules; the first rule with a
            keyword contained in the lowercased description wins.
        default_threats: Returned when no rule matches. Pass an empty list
            to simulate a backend with no data for unmatched systems.
        latency_seconds: Simulated network delay before answering.
    """

    def __init__(
        self,
        catalog: Optional[list[tuple[tuple[str, ...], list[BaseThreat]]]] = None,
        default_threats: Optional[list[BaseThreat]] = None,
        latency_seconds: Optional[float] = None,
    ):
        self.catalog = DEFAULT_CATALOG if catalog is None else catalog
        self.default_threats = DEFAULT_THREATS if default_threats is None else default_threats
        self.latency_seconds = (
            SuggestionConfig.INTELLIGENCE_LATENCY_SECONDS if latency_seconds is None else latency_seconds
        )
        self.call_count = 0

    def match(self, description: str) -> list[BaseThreat]:
        """Return the canned threats for a description without any delay."""
        lowered = description.lower()
        for keywords, threats in self.catalog:
            if any(keyword in lowered for keyword in keywords):
                return list(threats)
        return list(self.default_threats)

    async def get_threats(self, details: SystemDetails) -> list[BaseThreat]:
        """
        Retrieve potential threats for the given system details.

        Args:
            details: Validated system description

        Returns:
            Zero or more base threats
        """
        self.call_count += 1
        logger.debug(f"Fetching threats for system: {details.description[:50]}...")

        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)

        return self.match(details.description)
