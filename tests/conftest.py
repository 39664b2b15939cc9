import copy
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from tripcraft.api.models import PlaceRecord, TripPreferences

SAMPLE_ITINERARY = {
    "itinerary": [
        {
            "day": 1,
            "title": "Old Town",
            "activities": [
                {
                    "time": "09:00",
                    "description": "Walk the \"Royal Mile\"",
                    "estimatedCost": "Free",
                    "location": {"name": "Royal Mile", "latitude": 55.9500, "longitude": -3.1900},
                },
                {
                    "time": "13:00",
                    "description": "Castle tour",
                    "estimatedCost": "£20",
                    "location": {"name": "Edinburgh Castle", "latitude": 55.9486, "longitude": -3.1999},
                },
            ],
        },
        {
            "day": 2,
            "title": "Hills",
            "activities": [
                {
                    "time": "10:00",
                    "description": "Hike up Arthur's Seat",
                    "estimatedCost": "Free",
                    "location": {"name": "Arthur's Seat", "latitude": 55.9441, "longitude": -3.1618},
                },
            ],
        },
    ],
    "justification": {
        "interestsAlignment": "History first.",
        "budgetAlignment": "Mostly free.",
        "restrictionsAlignment": "No restrictions given.",
    },
}


@pytest.fixture
def itinerary_payload():
    return copy.deepcopy(SAMPLE_ITINERARY)


@pytest.fixture
def places():
    return [
        PlaceRecord("Paris", "France", "Île-de-France"),
        PlaceRecord("Parramatta", "Australia", "New South Wales"),
        PlaceRecord("Lima", "Peru", "Lima region"),
        PlaceRecord("Monaco", "Monaco"),
        PlaceRecord("Paradise", "United States", "Nevada"),
    ]


@pytest.fixture
def prefs():
    return TripPreferences(
        destination="Edinburgh, Scotland, United Kingdom",
        duration=2,
        budget="500",
        interests=["History", "Nature & Outdoors"],
        restrictions="",
    )


def chat_response(content, refusal=None):
    message = SimpleNamespace(content=content, refusal=refusal)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai(content=None, error=None):
    """MagicMock shaped like AsyncOpenAI for chat completions."""
    client = MagicMock()
    if error is not None:
        client.chat.completions.create = AsyncMock(side_effect=error)
    else:
        if not isinstance(content, str):
            content = json.dumps(content)
        client.chat.completions.create = AsyncMock(return_value=chat_response(content))
    return client


def web_response(text, citations=()):
    annotations = [
        SimpleNamespace(type="url_citation", url=url, title=title) for url, title in citations
    ]
    part = SimpleNamespace(type="output_text", text=text, annotations=annotations)
    return SimpleNamespace(
        output_text=text,
        output=[
            SimpleNamespace(type="web_search_call"),
            SimpleNamespace(type="message", content=[part]),
        ],
    )
