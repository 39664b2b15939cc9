# api/config.py
"""Configuration management for the trip planner API."""
import os
from dotenv import load_dotenv

from tripcraft.api.errors import ConfigurationError

load_dotenv()

# Sentinel interest tag that requires a free-text follow-up.
OTHER_INTEREST = "Other"

INTEREST_OPTIONS = [
    "History",
    "Art & Culture",
    "Food & Gastronomy",
    "Nature & Outdoors",
    "Adventure",
    "Nightlife",
    "Shopping",
    "Relaxation",
    OTHER_INTEREST,
]


def get_openai_api_key():
    """Get OpenAI API key from environment."""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ConfigurationError("OPENAI_API_KEY not set")
    return api_key


def get_chat_model_name():
    """Model used for schema-constrained itinerary generation."""
    return os.getenv("OPENAI_CHAT_MODEL", "gpt-4.1")


def get_info_model_name():
    """Model used for grounded location lookups."""
    return os.getenv("OPENAI_INFO_MODEL", "gpt-4.1-mini")


def get_google_maps_api_key():
    return os.getenv("GOOGLE_MAPS_API_KEY", "")


def get_cities_source():
    """Get the city dataset location (local path wins over URL)."""
    return {
        "path": os.getenv("CITIES_DATA_PATH", ""),
        "url": os.getenv("CITIES_DATA_URL", ""),
        "timeout": float(os.getenv("CITIES_DATA_TIMEOUT", "10")),
    }


def get_suggestion_limit():
    return int(os.getenv("SUGGESTION_LIMIT", "7"))


def get_budget_min():
    """Budgets must be strictly greater than this value."""
    return float(os.getenv("BUDGET_MIN", "10"))


def get_request_timeout():
    """Timeout in seconds for model calls."""
    return float(os.getenv("OPENAI_TIMEOUT", "120"))


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 5000))
