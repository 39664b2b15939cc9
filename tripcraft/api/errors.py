"""Exception types raised by the planner core.

Routes catch these at the point of invocation and turn them into
user-facing messages; the raw detail only goes to the log.
"""

from __future__ import annotations

from typing import Dict


class TravelPlannerError(Exception):
    """Base class for every error the planner raises on purpose."""


class ConfigurationError(TravelPlannerError):
    """A required setting (usually a credential) is missing."""


class ValidationError(TravelPlannerError):
    """User preferences failed one or more field rules."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid preferences: {fields}")


class ItineraryGenerationError(TravelPlannerError):
    """The itinerary could not be produced."""


class TransportError(ItineraryGenerationError):
    """Network, DNS, timeout or API failure while talking to the model."""


class SchemaViolationError(ItineraryGenerationError):
    """The model answered, but not with a valid itinerary document."""


class LocationInfoError(TravelPlannerError):
    """Grounded lookup for a single itinerary stop failed."""


__all__ = [
    "TravelPlannerError",
    "ConfigurationError",
    "ValidationError",
    "ItineraryGenerationError",
    "TransportError",
    "SchemaViolationError",
    "LocationInfoError",
]
