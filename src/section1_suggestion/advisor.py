"""
Language-Model Advisor (Source B)

Prompts Gemini against a strict JSON output schema and returns the
validated threat list. Anything short of a response that validates
against SuggestThreatsOutput is a GenerationError.
"""

import asyncio
import logging
import re
from typing import Optional

import google.genai
from pydantic import ValidationError

from .config import SuggestionConfig
from .errors import GenerationError
from .prompts import ThreatPrompts
from .schemas import BaseThreat, SuggestThreatsOutput, SystemDetails

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class ThreatAdvisor:
    """
    Gemini-backed threat advisor.

    Args:
        client: A google.genai.Client or a test double exposing
            ``client.aio.models.generate_content``. Built from
            SuggestionConfig on first use when omitted.
        model: Gemini model id, defaults to SuggestionConfig.GEMINI_MODEL
        retry_attempts: Attempts per request on transport errors
        retry_delay_seconds: Pause between attempts
    """

    def __init__(
        self,
        client=None,
        model: Optional[str] = None,
        retry_attempts: Optional[int] = None,
        retry_delay_seconds: Optional[float] = None,
    ):
        self.model = model or SuggestionConfig.GEMINI_MODEL
        self.retry_attempts = max(1, SuggestionConfig.RETRY_ATTEMPTS if retry_attempts is None else retry_attempts)
        self.retry_delay_seconds = (
            SuggestionConfig.RETRY_DELAY_SECONDS if retry_delay_seconds is None else retry_delay_seconds
        )

        self.client = client
        self.call_count = 0
        self.failure_count = 0

    def _get_client(self):
        """Lazily build the Gemini client so the advisor costs nothing until a fallback happens."""
        if self.client is not None:
            return self.client

        if not SuggestionConfig.validate():
            raise GenerationError("Advisor configuration validation failed: GOOGLE_API_KEY is not set")
        self.client = google.genai.Client(api_key=SuggestionConfig.GEMINI_API_KEY)
        return self.client

    def _build_prompt(self, details: SystemDetails) -> str:
        return ThreatPrompts.USER_PROMPT_TEMPLATE.format(description=details.description)

    def _generation_config(self) -> dict:
        return {
            "system_instruction": ThreatPrompts.SYSTEM_PROMPT,
            "temperature": SuggestionConfig.SUGGESTION_TEMPERATURE,
            "top_p": SuggestionConfig.SUGGESTION_TOP_P,
            "max_output_tokens": SuggestionConfig.SUGGESTION_MAX_TOKENS,
            "response_mime_type": "application/json",
            "response_schema": SuggestThreatsOutput,
        }

    async def _generate(self, prompt: str):
        """Call the model, retrying transport errors."""
        client = self._get_client()
        for attempt in range(self.retry_attempts):
            try:
                return await client.aio.models.generate_content(
                    model=self.model,
                    contents=prompt,
                    config=self._generation_config(),
                )
            except Exception as exc:
                if attempt < self.retry_attempts - 1:
                    logger.warning(
                        f"Advisor attempt {attempt + 1} failed: {exc}. "
                        f"Retrying in {self.retry_delay_seconds}s..."
                    )
                    await asyncio.sleep(self.retry_delay_seconds)
                else:
                    raise GenerationError(f"LLM request failed after retries: {exc}") from exc

    def parse_response_text(self, text: Optional[str]) -> list[BaseThreat]:
        """
        Validate raw model text against the threat list schema.

        Raises:
            GenerationError: If the text is absent or does not validate
        """
        cleaned = (text or "").strip()
        if not cleaned:
            raise GenerationError("AI returned no threat suggestions.")

        fenced = _FENCE_RE.match(cleaned)
        if fenced:
            cleaned = fenced.group(1)

        try:
            output = SuggestThreatsOutput.model_validate_json(cleaned)
        except ValidationError as exc:
            raise GenerationError(
                f"AI output failed schema validation ({exc.error_count()} errors)."
            ) from exc

        return list(output.threats)

    async def suggest(self, details: SystemDetails) -> list[BaseThreat]:
        """
        Generate threat suggestions for the given system details.

        Args:
            details: Validated system description

        Returns:
            Threats parsed from a schema-valid model response

        Raises:
            GenerationError: On transport failure, absent output or
                schema validation failure
        """
        self.call_count += 1
        try:
            response = await self._generate(self._build_prompt(details))
            if response is None:
                raise GenerationError("AI returned no response.")
            threats = self.parse_response_text(getattr(response, "text", None))
        except GenerationError:
            self.failure_count += 1
            raise

        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            logger.info(f"LLM usage: {usage}")

        return threats

    def get_stats(self) -> dict:
        """Get advisor call statistics."""
        return {
            "model": self.model,
            "prompt_version": SuggestionConfig.PROMPT_VERSION,
            "calls": self.call_count,
            "failures": self.failure_count,
        }
