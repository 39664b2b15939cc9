"""LLM helpers for TripCraft.

Generates itineraries via OpenAI Chat Completions using structured
outputs, then validates the returned document against the itinerary
models before anything reaches the caller.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError as PydanticValidationError

from tripcraft.api.config import (
    get_chat_model_name,
    get_openai_api_key,
    get_request_timeout,
)
from tripcraft.api.errors import SchemaViolationError, TransportError
from tripcraft.api.models import Itinerary, Language, TripPreferences
from tripcraft.api.prompts import build_itinerary_prompt
from tripcraft.api.schema import response_format

logger = logging.getLogger(__name__)

SYSTEM_MESSAGE = "You are a travel planner that only answers with JSON."


def create_async_client() -> AsyncOpenAI:
    """Build an AsyncOpenAI client; raises ConfigurationError without a key."""
    return AsyncOpenAI(api_key=get_openai_api_key(), timeout=get_request_timeout())


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

def parse_itinerary(content: Optional[str]) -> Itinerary:
    """Turn the model's raw text into a validated Itinerary.

    Fails closed: empty text, invalid JSON, or any missing/mistyped field
    raises SchemaViolationError and nothing partial is returned.
    """
    text = (content or "").strip()
    if not text:
        raise SchemaViolationError("The model returned an empty response.")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse LLM response as JSON: %s", exc)
        raise SchemaViolationError("The model response was not valid JSON.") from exc

    if not isinstance(payload, dict):
        raise SchemaViolationError("The model response was not a JSON object.")

    try:
        return Itinerary.model_validate(payload)
    except PydanticValidationError as exc:
        logger.error("LLM response does not match the itinerary schema: %s", exc)
        raise SchemaViolationError(
            "The model response did not match the itinerary format."
        ) from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class ItineraryRequestClient:
    """Sends one schema-constrained request per call. Never retries."""

    def __init__(self, client: Optional[AsyncOpenAI] = None, model: Optional[str] = None,
                 temperature: float = 0.2):
        self._client = client
        self.model = model or get_chat_model_name()
        self.temperature = temperature

    async def request_itinerary(self, prefs: TripPreferences, language: Language) -> Itinerary:
        prompt = build_itinerary_prompt(prefs, language)
        if self._client is not None:
            return await self._request(self._client, prompt, prefs, language)

        # A client built here lives for this call only.
        client = create_async_client()
        try:
            return await self._request(client, prompt, prefs, language)
        finally:
            await client.close()

    async def _request(self, client: AsyncOpenAI, prompt: str, prefs: TripPreferences,
                       language: Language) -> Itinerary:
        logger.debug(
            "Calling OpenAI ChatCompletion: model=%s destination=%s days=%d language=%s",
            self.model,
            prefs.destination,
            prefs.duration,
            language.value,
        )

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_MESSAGE},
                    {"role": "user", "content": prompt},
                ],
                response_format=response_format(),
                temperature=self.temperature,
            )
        except (OpenAIError, asyncio.TimeoutError) as exc:
            logger.error("Itinerary request failed: %s", exc)
            raise TransportError("Could not reach the itinerary model.") from exc

        if not response.choices:
            raise SchemaViolationError("The model returned no choices.")

        message = response.choices[0].message
        if getattr(message, "refusal", None):
            logger.warning("Model refused the itinerary request: %s", message.refusal)
            raise SchemaViolationError("The model declined to produce an itinerary.")

        itinerary = parse_itinerary(message.content)
        logger.info(
            "Generated %d-day itinerary for %s", len(itinerary.itinerary), prefs.destination
        )
        return itinerary

