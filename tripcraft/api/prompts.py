"""Prompt construction for the planner's model calls."""

from __future__ import annotations

from typing import Optional

from tripcraft.api.models import Coordinates, Language, TripPreferences
from tripcraft.api.schema import schema_text

INTEREST_DELIMITER = ", "
NO_RESTRICTIONS = "None"


def build_itinerary_prompt(prefs: TripPreferences, language: Language) -> str:
    """Render the user's preferences into the itinerary instruction."""
    interests = INTEREST_DELIMITER.join(prefs.resolved_interests())
    restrictions = prefs.restrictions.strip() or NO_RESTRICTIONS

    return f"""
You are an expert travel planning AI. Your task is to create a personalized, detailed, and realistic travel itinerary based on user preferences.

**Output Language:** Generate the entire response, including all descriptions, titles, and justifications, in {language.display_name}.

**User Preferences:**
- Destination: {prefs.destination}
- Duration: {prefs.duration} days
- Budget: Approximately {prefs.budget}
- Key Interests: {interests}
- Specific Restrictions/Requirements: {restrictions}

**Instructions:**
1.  **Generate a Day-by-Day Itinerary:** Create a plan for each day of the trip, numbering the days from 1.
2.  **Be Realistic:** The schedule must be feasible. Consider travel time between locations, opening hours, and a realistic pace. Do not suggest places that would be closed.
3.  **Respect the Budget:** Suggest activities and dining options that align with the provided budget. Provide estimated costs for activities where possible.
4.  **Align with Interests:** The activities should reflect the user's key interests.
5.  **Provide a Justification:** After the itinerary, include a section explaining how the plan accommodates the user's interests, budget, and restrictions.
6.  **Location Data:** For each suggested place/activity, provide its name and approximate latitude and longitude.

**Output Format:**
Respond ONLY with a single, valid JSON object. Do not include any text, code blocks (like ```json), or explanations before or after the JSON object. The JSON object must adhere to this schema:
{schema_text()}
""".strip()


def build_location_prompt(place_name: str, destination: str, language: Language,
                          coords: Optional[Coordinates] = None) -> str:
    """Grounded question about a single itinerary stop."""
    prompt = (
        f'Provide up-to-date information for a traveler about "{place_name}" in {destination}. '
        "Search the web and map listings, and include details like opening hours, "
        "typical visitor reviews, and any recent news or tips. "
        f"Respond entirely in {language.display_name}."
    )
    if coords is not None:
        prompt += (
            f" The traveler is currently near latitude {coords.lat:.4f}, "
            f"longitude {coords.lon:.4f}; prefer sources relevant to that area."
        )
    return prompt
