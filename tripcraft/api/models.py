"""Shared data structures for trip planning.

Request-side records (preferences, places, coordinates) are plain
dataclasses. The itinerary returned by the model is a tree of frozen
pydantic models so that a response either validates completely or is
rejected; nothing is trusted on structural luck.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tripcraft.api.config import OTHER_INTEREST

logger = logging.getLogger(__name__)


class Language(str, enum.Enum):
    """Output language for prompts, messages and exports."""

    EN = "en"
    ES = "es"

    @property
    def display_name(self) -> str:
        return "Spanish" if self is Language.ES else "English"

    @classmethod
    def parse(cls, value: Any) -> "Language":
        """Return the matching language, falling back to English."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.EN


@dataclass(frozen=True)
class PlaceRecord:
    """One entry of the static city reference list."""

    name: str
    country: str
    subcountry: Optional[str] = None

    @property
    def label(self) -> str:
        """Display label: ``name[, subcountry], country``."""
        parts = [self.name]
        if self.subcountry:
            parts.append(self.subcountry)
        parts.append(self.country)
        return ", ".join(parts)


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float

    @classmethod
    def parse(cls, raw: Any) -> Optional["Coordinates"]:
        """Best-effort parse of a ``{lat, lon}`` mapping.

        Anything missing, non-numeric or out of range means "no bias
        available": a warning is logged and None is returned.
        """
        if not raw:
            return None
        try:
            lat = float(raw["lat"])
            lon = float(raw.get("lon", raw.get("lng")))
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning(f"Ignoring unusable user coordinates: {raw!r}")
            return None
        if not (math.isfinite(lat) and math.isfinite(lon)):
            logger.warning(f"Ignoring non-finite user coordinates: {raw!r}")
            return None
        if not (-90 <= lat <= 90 and -180 <= lon <= 180):
            logger.warning(f"Ignoring out-of-range user coordinates: {raw!r}")
            return None
        return cls(lat=lat, lon=lon)


@dataclass
class TripPreferences:
    """Everything the user typed into the planning form."""

    destination: str = ""
    duration: int = 7
    budget: str = ""
    interests: List[str] = field(default_factory=list)
    restrictions: str = ""
    other_interest: Optional[str] = None

    def __post_init__(self):
        # Keep first occurrence, drop repeats.
        self.interests = list(dict.fromkeys(self.interests))

    def add_interest(self, interest: str) -> None:
        if interest not in self.interests:
            self.interests.append(interest)

    def toggle_interest(self, interest: str) -> None:
        if interest in self.interests:
            self.interests.remove(interest)
        else:
            self.interests.append(interest)

    @property
    def has_other_interest(self) -> bool:
        return OTHER_INTEREST in self.interests

    def resolved_interests(self) -> List[str]:
        """Interests with the sentinel tag replaced by the free text."""
        resolved = []
        for interest in self.interests:
            if interest == OTHER_INTEREST:
                text = (self.other_interest or "").strip()
                if text:
                    resolved.append(text)
            else:
                resolved.append(interest)
        return resolved

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TripPreferences":
        """Build preferences from the JSON body sent by the form."""
        if not isinstance(data, dict):
            data = {}
        try:
            duration = int(data.get("duration") or 0)
        except (TypeError, ValueError):
            duration = 0
        interests = data.get("interests") or []
        if isinstance(interests, str):
            interests = [interests]
        elif not isinstance(interests, (list, tuple)):
            interests = []
        other = data.get("otherInterest", data.get("other_interest"))
        return cls(
            destination=str(data.get("destination") or ""),
            duration=duration,
            budget=str(data.get("budget") if data.get("budget") is not None else ""),
            interests=[str(i) for i in interests],
            restrictions=str(data.get("restrictions") or ""),
            other_interest=None if other is None else str(other),
        )


# ---------------------------------------------------------------------------
# Itinerary document returned by the model
# ---------------------------------------------------------------------------

class _Document(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Location(_Document):
    name: str = Field(strict=True)
    latitude: float = Field(strict=True, ge=-90, le=90)
    longitude: float = Field(strict=True, ge=-180, le=180)


class Activity(_Document):
    time: str = Field(strict=True)
    description: str = Field(strict=True)
    estimated_cost: str = Field(alias="estimatedCost", strict=True)
    location: Location


class DayPlan(_Document):
    day: int = Field(strict=True, ge=1)
    title: str = Field(strict=True)
    activities: List[Activity]


class Justification(_Document):
    interests_alignment: str = Field(alias="interestsAlignment", strict=True)
    budget_alignment: str = Field(alias="budgetAlignment", strict=True)
    restrictions_alignment: str = Field(alias="restrictionsAlignment", strict=True)


class Itinerary(_Document):
    itinerary: List[DayPlan]
    justification: Justification

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Grounded location info
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WebSource:
    uri: str
    title: str = ""


@dataclass(frozen=True)
class MapsSource:
    uri: str
    title: str = ""


@dataclass(frozen=True)
class GroundingChunk:
    """A single citation: either a web page or a map place."""

    web: Optional[WebSource] = None
    maps: Optional[MapsSource] = None

    def to_dict(self) -> dict:
        out: Dict[str, Any] = {}
        if self.web:
            out["web"] = {"uri": self.web.uri, "title": self.web.title}
        if self.maps:
            out["maps"] = {"uri": self.maps.uri, "title": self.maps.title}
        return out


@dataclass(frozen=True)
class LocationInfo:
    text: str
    chunks: List[GroundingChunk] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"text": self.text, "chunks": [c.to_dict() for c in self.chunks]}
