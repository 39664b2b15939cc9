"""Suggestion list state for the destination field."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from tripcraft.api.models import PlaceRecord
from tripcraft.api.places import match

logger = logging.getLogger(__name__)

ARROW_DOWN = "ArrowDown"
ARROW_UP = "ArrowUp"
ENTER = "Enter"
ESCAPE = "Escape"


class KeyboardNavController:
    """Tracks which suggestion is highlighted and what has been committed.

    The list is either closed (no candidates) or open with a highlighted
    ``active_index``. While open the index always points into
    ``candidates``; arrow keys wrap around instead of clamping.
    """

    def __init__(self, places: Sequence[PlaceRecord],
                 matcher: Callable[[str, Sequence[PlaceRecord]], List[str]] = match):
        self.places = places
        self.matcher = matcher
        self.query = ""
        self.value = ""
        self.candidates: List[str] = []
        self.active_index: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return bool(self.candidates)

    def close(self) -> None:
        self.candidates = []
        self.active_index = None

    def update_query(self, query: str) -> List[str]:
        """Recompute candidates for a new query.

        Typing also changes the field value, like an ordinary text input.
        """
        self.query = query
        self.value = query
        candidates = self.matcher(query, self.places)
        if candidates:
            self.candidates = list(candidates)
            self.active_index = 0
        else:
            self.close()
        return self.candidates

    def handle_key(self, key: str) -> bool:
        """Apply a key press. Returns True if the key was consumed."""
        if not self.is_open:
            return False

        count = len(self.candidates)
        if key == ARROW_DOWN:
            self.active_index = (self.active_index + 1) % count
        elif key == ARROW_UP:
            self.active_index = (self.active_index - 1 + count) % count
        elif key == ENTER:
            self.select(self.active_index)
        elif key == ESCAPE:
            self.close()
        else:
            return False
        return True

    def hover(self, index: int) -> None:
        if self.is_open and 0 <= index < len(self.candidates):
            self.active_index = index

    def select(self, index: int) -> Optional[str]:
        """Commit the candidate at ``index`` and close the list."""
        if not self.is_open or not 0 <= index < len(self.candidates):
            return None
        self.value = self.candidates[index]
        logger.debug(f"Committed suggestion: {self.value}")
        self.close()
        return self.value

    def click_outside(self) -> None:
        self.close()
