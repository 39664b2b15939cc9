"""Canonical JSON schema for itinerary responses.

Both the prompt text and the structured-output request are generated
from ``ITINERARY_SCHEMA`` so they can never drift apart. The pydantic
models in ``tripcraft.api.models`` mirror the same field names.
"""

from __future__ import annotations

import json


def _object(properties: dict) -> dict:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


LOCATION_SCHEMA = _object({
    "name": {"type": "string"},
    "latitude": {"type": "number"},
    "longitude": {"type": "number"},
})

ACTIVITY_SCHEMA = _object({
    "time": {"type": "string"},
    "description": {"type": "string"},
    "estimatedCost": {"type": "string"},
    "location": LOCATION_SCHEMA,
})

DAY_PLAN_SCHEMA = _object({
    "day": {"type": "integer"},
    "title": {"type": "string"},
    "activities": {"type": "array", "items": ACTIVITY_SCHEMA},
})

JUSTIFICATION_SCHEMA = _object({
    "interestsAlignment": {"type": "string"},
    "budgetAlignment": {"type": "string"},
    "restrictionsAlignment": {"type": "string"},
})

ITINERARY_SCHEMA = _object({
    "itinerary": {"type": "array", "items": DAY_PLAN_SCHEMA},
    "justification": JUSTIFICATION_SCHEMA,
})

SCHEMA_NAME = "trip_itinerary"


def response_format() -> dict:
    """``response_format`` argument for a strict structured-output call."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": SCHEMA_NAME,
            "strict": True,
            "schema": ITINERARY_SCHEMA,
        },
    }


def schema_text() -> str:
    """Schema rendered for embedding in a prompt."""
    return json.dumps(ITINERARY_SCHEMA, indent=2)
