"""
Configuration for Section 1: Threat Suggestion

Handles API credentials, model settings, retry policy and the
simulated latency of the placeholder intelligence service.
"""

import logging
import os
from typing import Optional

# Load environment variables from .env file
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class SuggestionConfig:
    """Configuration for the threat sources and the orchestrator."""

    # Gemini/Google AI settings
    GEMINI_API_KEY: Optional[str] = os.getenv("GOOGLE_API_KEY")
    GEMINI_MODEL: str = os.getenv("THREATWISE_GEMINI_MODEL", "gemini-2.5-flash")

    # Bump this whenever the advisor prompt or output schema changes.
    PROMPT_VERSION: str = "suggest_threats_v1"

    # Generation parameters
    SUGGESTION_MAX_TOKENS: int = 2048
    SUGGESTION_TEMPERATURE: float = 0.4
    SUGGESTION_TOP_P: float = 0.9

    # Advisor transport retries (schema failures are never retried)
    RETRY_ATTEMPTS: int = 2
    RETRY_DELAY_SECONDS: float = 2.0

    # Placeholder intelligence service
    INTELLIGENCE_LATENCY_SECONDS: float = float(
        os.getenv("THREATWISE_INTELLIGENCE_LATENCY", "1.5")
    )

    # Input bounds for SystemDetails.description
    DESCRIPTION_MIN_LENGTH: int = 10
    DESCRIPTION_MAX_LENGTH: int = 5000

    @classmethod
    def validate(cls) -> bool:
        """Validate configuration is properly set up."""
        if not cls.GEMINI_API_KEY:
            logger.warning(
                "GOOGLE_API_KEY not set. Gemini advisor will fail. "
                "Set via: export GOOGLE_API_KEY='your-key-here'"
            )
            return False
        return True
