# tripcraft/api/services/itinerary_service.py
"""Service layer for itinerary generation."""

import logging
from typing import Dict, Optional, Tuple

from tripcraft.api.errors import ItineraryGenerationError
from tripcraft.api.grounding import LocationInfoClient
from tripcraft.api.llm import ItineraryRequestClient
from tripcraft.api.messages import translate, translate_errors
from tripcraft.api.models import Coordinates, Itinerary, Language, TripPreferences
from tripcraft.api.services.location_service import InfoPanel
from tripcraft.api.validation import validate

logger = logging.getLogger(__name__)


class ItineraryService:
    """Holds the state of one planning form: submit, display, reset."""

    def __init__(self, client: Optional[ItineraryRequestClient] = None,
                 info_client: Optional[LocationInfoClient] = None):
        self.client = client or ItineraryRequestClient()
        self.info_client = info_client
        self.is_loading = False
        self.itinerary: Optional[Itinerary] = None
        self.destination = ""
        self.language = Language.EN
        self.error: Optional[str] = None
        self.field_errors: Dict[str, str] = {}
        self.panels: Dict[Tuple[int, int], InfoPanel] = {}

    async def submit(self, prefs: TripPreferences, language: Language) -> Optional[Itinerary]:
        """Validate and request a new itinerary.

        Returns the itinerary, or None when validation fails, generation
        fails, or a request is already in flight. Failures are recorded
        on ``field_errors``/``error`` as display-ready text.

        Raises:
            ConfigurationError: If the model credentials are missing.
        """
        if self.is_loading:
            logger.debug("Ignoring submit while a request is in flight")
            return None

        errors = validate(prefs)
        self.field_errors = translate_errors(errors, language)
        if errors:
            logger.info(f"Rejected preferences: {sorted(errors)}")
            return None

        self.is_loading = True
        self.error = None
        self.itinerary = None
        self.panels.clear()
        try:
            logger.info(f"Generating itinerary for {prefs.destination}, {prefs.duration} days")
            self.itinerary = await self.client.request_itinerary(prefs, language)
            self.destination = prefs.destination
            self.language = language
        except ItineraryGenerationError as e:
            logger.error(f"Failed to generate itinerary: {e}")
            self.error = translate("itineraryError", language)
        finally:
            self.is_loading = False
        return self.itinerary

    def info_panel(self, day_index: int, activity_index: int,
                   user_coords: Optional[Coordinates] = None) -> InfoPanel:
        """Return the panel for one activity of the current itinerary."""
        if self.itinerary is None:
            raise LookupError("No itinerary has been generated")
        key = (day_index, activity_index)
        if key not in self.panels:
            activity = self.itinerary.itinerary[day_index].activities[activity_index]
            if self.info_client is None:
                self.info_client = LocationInfoClient()
            self.panels[key] = InfoPanel(
                self.info_client,
                activity.location.name,
                self.destination,
                user_coords,
                self.language,
            )
        return self.panels[key]

    def reset(self) -> None:
        """Discard the itinerary and every info panel ("new plan")."""
        self.itinerary = None
        self.error = None
        self.field_errors = {}
        self.destination = ""
        for panel in self.panels.values():
            panel.reset()
        self.panels.clear()
        logger.debug("Cleared itinerary state")
