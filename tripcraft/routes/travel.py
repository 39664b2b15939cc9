# tripcraft/routes/travel.py
"""Travel routes and blueprint configuration."""

import logging
from typing import Callable, Optional, Sequence

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from tripcraft.api.config import (
    INTEREST_OPTIONS,
    OTHER_INTEREST,
    get_budget_min,
    get_suggestion_limit,
)
from tripcraft.api.errors import ConfigurationError, LocationInfoError
from tripcraft.api.export import itinerary_to_csv
from tripcraft.api.grounding import LocationInfoClient
from tripcraft.api.llm import ItineraryRequestClient
from tripcraft.api.messages import translate, translate_errors
from tripcraft.api.models import Coordinates, Itinerary, Language, PlaceRecord, TripPreferences
from tripcraft.api.places import load_places, match
from tripcraft.api.services.itinerary_service import ItineraryService
from tripcraft.api.validation import validate

logger = logging.getLogger(__name__)


def _request_json() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _request_language(data: Optional[dict] = None) -> Language:
    raw = (data or {}).get("language") or request.args.get("lang")
    return Language.parse(raw)


def create_travel_blueprint(itinerary_client: Optional[ItineraryRequestClient] = None,
                            location_client: Optional[LocationInfoClient] = None,
                            places_provider: Callable[[], Sequence[PlaceRecord]] = load_places):
    """Create and configure the travel blueprint.

    Args:
        itinerary_client: Client used for itinerary generation; built from
            the environment on first use when omitted.
        location_client: Client used for grounded "More Info" look-ups.
        places_provider: Returns the city reference list for suggestions.

    Returns:
        Configured Flask Blueprint
    """
    travel_bp = Blueprint("travel", __name__, url_prefix="/travel")

    # Async views run on a fresh event loop per request, so default clients
    # are built per request instead of being shared.
    def get_itinerary_client() -> ItineraryRequestClient:
        return itinerary_client or ItineraryRequestClient()

    def get_location_client() -> LocationInfoClient:
        return location_client or LocationInfoClient()

    @travel_bp.route("/api/config")
    def api_config():
        """Static form options for the front-end."""
        return jsonify({
            "interests": INTEREST_OPTIONS,
            "other_interest": OTHER_INTEREST,
            "languages": [lang.value for lang in Language],
            "suggestion_limit": get_suggestion_limit(),
            "budget_min": get_budget_min(),
        })

    @travel_bp.route("/api/suggestions")
    def api_suggestions():
        """Destination autocomplete."""
        query = request.args.get("q", "")
        return jsonify({"suggestions": match(query, places_provider())})

    @travel_bp.route("/api/validate", methods=["POST"])
    def api_validate():
        data = _request_json()
        language = _request_language(data)
        prefs = TripPreferences.from_dict(data.get("preferences", data))
        errors = validate(prefs)
        return jsonify({
            "valid": not errors,
            "errors": errors,
            "messages": translate_errors(errors, language),
        })

    @travel_bp.route("/api/itinerary", methods=["POST"])
    async def api_itinerary():
        """Validate preferences and generate a new itinerary."""
        data = _request_json()
        language = _request_language(data)
        prefs = TripPreferences.from_dict(data.get("preferences", data))

        service = ItineraryService(get_itinerary_client())
        try:
            itinerary = await service.submit(prefs, language)
        except ConfigurationError as e:
            logger.error(f"Itinerary generation is not configured: {e}")
            return jsonify({"error": translate("configError", language)}), 500

        if service.field_errors:
            return jsonify({"errors": service.field_errors}), 400
        if itinerary is None:
            return jsonify({"error": service.error or translate("unknownError", language)}), 502
        return jsonify(itinerary.to_dict())

    @travel_bp.route("/api/itinerary/csv", methods=["POST"])
    def api_itinerary_csv():
        """Export an itinerary (as returned by /api/itinerary) to CSV."""
        data = _request_json()
        language = _request_language(data)
        try:
            document = data.get("itinerary")
            if not isinstance(document, dict):
                document = data
            itinerary = Itinerary.model_validate(document)
        except PydanticValidationError as e:
            logger.warning(f"Rejected CSV export payload: {e.error_count()} errors")
            return jsonify({"error": "Invalid itinerary"}), 400
        return Response(
            itinerary_to_csv(itinerary, language),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=itinerary.csv"},
        )

    @travel_bp.route("/api/location-info", methods=["POST"])
    async def api_location_info():
        """Grounded details for a single itinerary stop."""
        data = _request_json()
        language = _request_language(data)
        place_name = str(data.get("placeName") or "").strip()
        destination = str(data.get("destination") or "").strip()
        if not place_name:
            return jsonify({"error": translate("required", language)}), 400

        coords = Coordinates.parse(data.get("userCoords"))
        try:
            info = await get_location_client().request_location_info(
                place_name, destination, coords, language
            )
        except ConfigurationError as e:
            logger.error(f"Location info is not configured: {e}")
            return jsonify({"error": translate("configError", language)}), 500
        except LocationInfoError:
            return jsonify({"error": translate("locationInfoError", language)}), 502
        return jsonify(info.to_dict())

    @travel_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "travel"})

    return travel_bp


__all__ = ['create_travel_blueprint']
