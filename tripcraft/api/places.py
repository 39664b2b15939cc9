# tripcraft/api/places.py
from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, Iterable, List, Sequence

import requests

from tripcraft.api.config import get_cities_source, get_suggestion_limit
from tripcraft.api.models import PlaceRecord

logger = logging.getLogger(__name__)


def match(query: str, places: Sequence[PlaceRecord], limit: int | None = None) -> List[str]:
    """Return up to ``limit`` display labels containing ``query``.

    Matching is a case-insensitive substring test on the formatted label.
    Source order is kept; there is no ranking and no fuzzy matching.
    Queries of one character or less never match anything.
    """
    if limit is None:
        limit = get_suggestion_limit()
    if len(query) <= 1 or not places or limit <= 0:
        return []

    needle = query.lower()
    results: List[str] = []
    for place in places:
        label = place.label
        if needle in label.lower():
            results.append(label)
            if len(results) >= limit:
                break
    return results


def parse_places(records: Iterable[Any]) -> List[PlaceRecord]:
    """Turn raw dataset rows into PlaceRecords, skipping malformed rows."""
    places: List[PlaceRecord] = []
    skipped = 0
    for row in records:
        if not isinstance(row, dict) or not row.get("name") or not row.get("country"):
            skipped += 1
            continue
        places.append(
            PlaceRecord(
                name=str(row["name"]),
                country=str(row["country"]),
                subcountry=str(row["subcountry"]) if row.get("subcountry") else None,
            )
        )
    if skipped:
        logger.warning(f"Skipped {skipped} malformed city records")
    return places


def _read_source(source: dict) -> List[Any]:
    if source["path"]:
        logger.info(f"Loading city data from {source['path']}")
        with open(source["path"], encoding="utf-8") as fh:
            return json.load(fh)
    if source["url"]:
        logger.info(f"Fetching city data from {source['url']}")
        response = requests.get(source["url"], timeout=source["timeout"])
        response.raise_for_status()
        return response.json()
    logger.warning("No city dataset configured; suggestions are disabled")
    return []


@lru_cache(maxsize=1)
def load_places() -> tuple[PlaceRecord, ...]:
    """Load the city reference list once per process.

    A failed load is logged and yields an empty list so the form keeps
    working without suggestions.
    """
    try:
        raw = _read_source(get_cities_source())
    except (OSError, ValueError, requests.RequestException) as e:
        logger.error(f"Could not load city data: {e}")
        return ()
    if not isinstance(raw, list):
        logger.error("City data must be a JSON array of records")
        return ()
    places = tuple(parse_places(raw))
    logger.info(f"Loaded {len(places)} cities")
    return places


__all__ = ["match", "parse_places", "load_places"]
