"""
Boundary to the generative AI service.

One call: content parts + output schema + sampling config in, raw response
text out. No business logic lives here; the response normalizer is the only
validation layer.
"""

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Optional, Union

import anthropic
import httpx
from anthropic import AsyncAnthropic

from nutriscan.config import settings
from nutriscan.services.errors import (
    OracleError,
    RateLimitError,
    ServiceUnavailableError,
    TransportError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class InlineImagePart:
    data: bytes = field(repr=False)
    media_type: str = "image/jpeg"


ContentPart = Union[TextPart, InlineImagePart]


@dataclass(frozen=True)
class SamplingConfig:
    temperature: float
    max_tokens: int


# Low temperature keeps analyses reproducible; plans may vary creatively
ANALYSIS_SAMPLING = SamplingConfig(
    temperature=settings.analysis_temperature,
    max_tokens=settings.analysis_max_tokens,
)
MEAL_PLAN_SAMPLING = SamplingConfig(
    temperature=settings.meal_plan_temperature,
    max_tokens=settings.meal_plan_max_tokens,
)

SCHEMA_SYSTEM_PROMPT = """You answer with a single JSON object and nothing else.
The object MUST conform to this JSON schema:
{schema}"""


class OracleClient:
    """Thin async wrapper around the Anthropic Messages API."""

    def __init__(self, client: Optional[AsyncAnthropic] = None, model: Optional[str] = None):
        if client is None:
            timeout = httpx.Timeout(
                timeout=settings.anthropic_timeout,
                connect=settings.anthropic_connect_timeout,
            )
            # Failures are surfaced to the user, never retried here
            client = AsyncAnthropic(
                api_key=settings.anthropic_api_key, timeout=timeout, max_retries=0
            )
        self.client = client
        self.model = model or settings.oracle_model

    async def submit(
        self,
        parts: list[ContentPart],
        output_schema: dict,
        sampling: SamplingConfig,
        prefill: Optional[str] = "{",
    ) -> str:
        """
        Send one request and return the raw response text.

        Args:
            parts: Text and inline image parts, in order
            output_schema: JSON schema the response must follow
            sampling: Temperature and token limit
            prefill: Assistant prefill string, or None for no prefill

        Returns:
            Raw text (prefill included) expected to be a JSON object

        Raises:
            ServiceUnavailableError: Service unreachable, timed out or failing
            RateLimitError: Too many requests
            TransportError: Request rejected by the service
            OracleError: The service refused, truncated or sent no text
        """
        messages = [{"role": "user", "content": [self._to_block(part) for part in parts]}]
        if prefill:
            messages.append({"role": "assistant", "content": prefill})

        logger.info(
            "Submitting %d part(s) to %s (temperature=%.1f)",
            len(parts),
            self.model,
            sampling.temperature,
        )

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=sampling.max_tokens,
                temperature=sampling.temperature,
                system=SCHEMA_SYSTEM_PROMPT.format(schema=json.dumps(output_schema)),
                messages=messages,
            )
        except anthropic.APIConnectionError as e:
            raise ServiceUnavailableError("AI service temporarily unavailable") from e
        except anthropic.RateLimitError as e:
            raise RateLimitError(
                "Too many requests, please try again in 1 minute"
            ) from e
        except anthropic.APIStatusError as e:
            if e.status_code >= 500:
                raise ServiceUnavailableError("AI service error") from e
            raise TransportError(f"Request error: {e.message}") from e

        if response.stop_reason == "refusal":
            raise OracleError("AI service declined to answer")
        if response.stop_reason == "max_tokens":
            raise OracleError("AI response was truncated")

        # Extract text from response (handle multi-block responses)
        response_text = ""
        for block in response.content:
            if hasattr(block, "text"):
                response_text += block.text

        if not response_text:
            raise OracleError("AI service returned no text content")

        return (prefill or "") + response_text

    def _to_block(self, part: ContentPart) -> dict:
        if isinstance(part, InlineImagePart):
            return {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": part.media_type,
                    "data": base64.standard_b64encode(part.data).decode("utf-8"),
                },
            }
        return {"type": "text", "text": part.text}
