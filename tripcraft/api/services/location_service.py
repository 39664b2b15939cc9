# tripcraft/api/services/location_service.py
"""Per-activity "More Info" panel state."""

import logging
from dataclasses import dataclass
from typing import Optional

from tripcraft.api.errors import LocationInfoError
from tripcraft.api.grounding import LocationInfoClient
from tripcraft.api.messages import translate
from tripcraft.api.models import Coordinates, Language, LocationInfo

logger = logging.getLogger(__name__)


class Idle:
    def __repr__(self):
        return "Idle"


class Loading:
    def __repr__(self):
        return "Loading"


@dataclass(frozen=True)
class Loaded:
    info: LocationInfo


@dataclass(frozen=True)
class Failed:
    message: str


IDLE = Idle()
LOADING = Loading()


class InfoPanel:
    """Info panel for one activity.

    Each panel owns its own state; panels never share anything, so
    several can be loading at once. Hiding loaded content is purely
    local and never touches the network.
    """

    def __init__(self, client: LocationInfoClient, place_name: str, destination: str,
                 user_coords: Optional[Coordinates] = None, language: Language = Language.EN):
        self.client = client
        self.place_name = place_name
        self.destination = destination
        self.user_coords = user_coords
        self.language = language
        self.state = IDLE

    @property
    def is_loading(self) -> bool:
        return self.state is LOADING

    @property
    def is_open(self) -> bool:
        return isinstance(self.state, Loaded)

    async def toggle(self):
        """Show or hide the panel.

        Returns the new state. While a request is in flight further
        toggles are ignored.
        """
        if isinstance(self.state, Loaded):
            self.state = IDLE
            return self.state
        if self.is_loading:
            return self.state

        self.state = LOADING
        try:
            info = await self.client.request_location_info(
                self.place_name, self.destination, self.user_coords, self.language
            )
            self.state = Loaded(info)
        except LocationInfoError as e:
            logger.error(f"More info failed for '{self.place_name}': {e}")
            self.state = Failed(translate("locationInfoError", self.language))
        finally:
            if self.state is LOADING:
                self.state = IDLE
        return self.state

    def reset(self) -> None:
        self.state = IDLE
