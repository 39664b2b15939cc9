# tripcraft/api/grounding.py
"""Grounded look-ups for a single itinerary stop.

The answer text comes from the OpenAI Responses API with web search
enabled; its URL citations become ``web`` grounding chunks. The best
Google Maps Places match for the stop, biased toward the traveller's
position when known, becomes a ``maps`` chunk.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Tuple
from urllib.parse import quote

import googlemaps
from googlemaps import exceptions as maps_exceptions
from openai import AsyncOpenAI, OpenAIError

from tripcraft.api.config import get_google_maps_api_key, get_info_model_name
from tripcraft.api.errors import LocationInfoError
from tripcraft.api.llm import create_async_client
from tripcraft.api.models import (
    Coordinates,
    GroundingChunk,
    Language,
    LocationInfo,
    MapsSource,
    WebSource,
)
from tripcraft.api.prompts import build_location_prompt

logger = logging.getLogger(__name__)

WEB_SEARCH_TOOL = {"type": "web_search_preview"}
MAPS_SEARCH_RADIUS_M = 50000
MAPS_ERRORS = (
    maps_exceptions.ApiError,
    maps_exceptions.TransportError,
    maps_exceptions.Timeout,
)

_gmaps: googlemaps.Client | None = None


def _get_maps_client() -> googlemaps.Client | None:
    """Return a cached googlemaps.Client, or None when Maps is not configured."""
    global _gmaps
    if _gmaps is None:
        api_key = get_google_maps_api_key()
        if not api_key:
            logger.warning("No Google Maps API key configured; skipping map grounding")
            return None
        try:
            # retry_timeout=0 disables the library's own retry loop
            _gmaps = googlemaps.Client(key=api_key, retry_timeout=0,
                                       retry_over_query_limit=False)
        except ValueError as e:
            logger.error(f"Failed to initialize Google Maps client: {e}")
            return None
    return _gmaps


def maps_place_uri(name: str, place_id: str) -> str:
    return (
        "https://www.google.com/maps/search/?api=1"
        f"&query={quote(name)}&query_place_id={quote(place_id)}"
    )


def extract_web_chunks(response: Any) -> List[GroundingChunk]:
    """Collect ``url_citation`` annotations, first occurrence wins."""
    chunks: List[GroundingChunk] = []
    seen = set()
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            for note in getattr(part, "annotations", None) or []:
                if getattr(note, "type", None) != "url_citation":
                    continue
                url = getattr(note, "url", "")
                if not url or url in seen:
                    continue
                seen.add(url)
                chunks.append(GroundingChunk(web=WebSource(uri=url, title=getattr(note, "title", "") or "")))
    return chunks


def extract_maps_chunk(results: dict) -> Optional[GroundingChunk]:
    places = (results or {}).get("results") or []
    if not places:
        return None
    top = places[0]
    name = top.get("name", "")
    place_id = top.get("place_id")
    if not place_id:
        return None
    title = name
    if top.get("formatted_address"):
        title = f"{name} ({top['formatted_address']})"
    return GroundingChunk(maps=MapsSource(uri=maps_place_uri(name, place_id), title=title))


class LocationInfoClient:
    """Issues one grounded query per call; failures become LocationInfoError."""

    def __init__(self, client: Optional[AsyncOpenAI] = None,
                 maps_client: Optional[googlemaps.Client] = None,
                 model: Optional[str] = None):
        self._client = client
        self._maps_client = maps_client
        self.model = model or get_info_model_name()

    @property
    def maps_client(self) -> Optional[googlemaps.Client]:
        if self._maps_client is None:
            self._maps_client = _get_maps_client()
        return self._maps_client

    async def _web_answer(self, client: AsyncOpenAI, prompt: str) -> Tuple[str, List[GroundingChunk]]:
        response = await client.responses.create(
            model=self.model,
            input=prompt,
            tools=[WEB_SEARCH_TOOL],
        )
        return (response.output_text or "").strip(), extract_web_chunks(response)

    async def _maps_answer(self, place_name: str, destination: str,
                           coords: Optional[Coordinates], language: Language) -> List[GroundingChunk]:
        gmaps = self.maps_client
        if gmaps is None:
            return []

        kwargs = {"query": f"{place_name}, {destination}", "language": language.value}
        if coords is not None:
            kwargs["location"] = (coords.lat, coords.lon)
            kwargs["radius"] = MAPS_SEARCH_RADIUS_M

        results = await asyncio.to_thread(gmaps.places, **kwargs)
        chunk = extract_maps_chunk(results)
        return [chunk] if chunk else []

    async def request_location_info(self, place_name: str, destination: str,
                                    user_coords: Optional[Coordinates],
                                    language: Language) -> LocationInfo:
        prompt = build_location_prompt(place_name, destination, language, user_coords)
        if self._client is not None:
            return await self._lookup(self._client, prompt, place_name, destination,
                                      user_coords, language)

        # A client built here lives for this call only.
        client = create_async_client()
        try:
            return await self._lookup(client, prompt, place_name, destination,
                                      user_coords, language)
        finally:
            await client.close()

    async def _lookup(self, client: AsyncOpenAI, prompt: str, place_name: str,
                      destination: str, user_coords: Optional[Coordinates],
                      language: Language) -> LocationInfo:
        logger.info(f"Fetching grounded info for '{place_name}' in {destination}")
        web, maps = await asyncio.gather(
            self._web_answer(client, prompt),
            self._maps_answer(place_name, destination, user_coords, language),
            return_exceptions=True,
        )

        if isinstance(web, (OpenAIError, asyncio.TimeoutError)):
            logger.error(f"Location info request failed for '{place_name}': {web}")
            raise LocationInfoError("Error getting location info with grounding.") from web
        if isinstance(web, BaseException):
            raise web

        # Maps is a best-effort citation source.
        if isinstance(maps, MAPS_ERRORS):
            logger.warning(f"Maps lookup failed for '{place_name}': {maps}")
            maps = []
        elif isinstance(maps, BaseException):
            raise maps

        text, web_chunks = web
        if not text:
            raise LocationInfoError("The model returned no information for this place.")

        return LocationInfo(text=text, chunks=web_chunks + maps)
