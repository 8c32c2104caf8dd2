"""JSON guidance requests sent to an OpenAI-compatible chat model."""

import logging
import os
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from services.ai.prompts import guidance_system_prompt
from services.ai.response_parser import extract_text, parse_json_object

LOGGER = logging.getLogger(__name__)
DEFAULT_GUIDANCE_MODEL = os.getenv("GUIDANCE_MODEL", "deepseek/deepseek-r1:free")


def fallback_guidance(content: str) -> Dict[str, Any]:
    """Return the structured stand-in used when the model does not answer in JSON."""
    return {
        "strengthScore": 75,
        "universityMatches": [
            {"name": "Sample University", "program": "Your Field", "cost": 30000, "matchScore": 85}
        ],
        "professorMatches": [
            {
                "name": "Dr. Sample",
                "university": "Research University",
                "specialization": "Your Area",
                "matchScore": 80,
            }
        ],
        "proposalEnhancement": (
            "Your research proposal looks promising. Consider adding more specific methodology details."
        ),
        "error": "AI response format issue",
        "content": content,
    }


class GuidanceClient:
    """Send a guidance prompt and return the model's JSON object."""

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        model: str = DEFAULT_GUIDANCE_MODEL,
        max_tokens: int = 1500,
    ) -> None:
        """Initialize the guidance client.

        Args:
            client: Async OpenAI client; may also be passed per call.
            model: Chat model name understood by the configured endpoint.
            max_tokens: Upper bound on generated tokens per request.
        """
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    def _resolve_client(self, client: Optional[AsyncOpenAI]) -> AsyncOpenAI:
        """Return a usable OpenAI client or raise if missing."""
        resolved = client or self.client
        if resolved is None:
            raise ValueError("OpenAI client is not configured.")
        return resolved

    async def request_json(self, prompt: str, client: Optional[AsyncOpenAI] = None) -> Dict[str, Any]:
        """Ask the model for a JSON answer to `prompt`.

        Args:
            prompt: Feature-specific prompt describing the expected JSON keys.
            client: Optional async OpenAI client overriding the configured one.

        Returns:
            The parsed JSON object, or `fallback_guidance(content)` when the
            model's answer is not a JSON object.

        Raises:
            ValueError: If no client is configured.
        """
        openai_client = self._resolve_client(client)
        response = await openai_client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": guidance_system_prompt()},
                {"role": "user", "content": prompt},
            ],
            max_tokens=self.max_tokens,
        )
        content = extract_text(response)
        parsed = parse_json_object(content)
        if parsed is None:
            LOGGER.warning("Guidance model returned non-JSON content; using fallback guidance")
            return fallback_guidance(content)
        return parsed
