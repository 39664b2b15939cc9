"""
TripCraft – main application entry point

* Flask app serving the trip planner JSON API under `/travel`.
* Itinerary and location-info views are `async` Flask views; the model
  calls run on the asyncio loop Flask starts for each such request.
"""

import os
import logging

from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Flask initialisation
# --------------------------------------------------------------------------- #
app = Flask(__name__)

flask_secret_key = os.getenv("FLASK_SECRET_KEY") or os.urandom(32).hex()
if "FLASK_SECRET_KEY" not in os.environ:
    logger.warning("No FLASK_SECRET_KEY found. Generated a temporary key.")
app.secret_key = flask_secret_key

# CORS for local dev / cross‑origin front‑end requests
CORS(app, origins="*")

# --------------------------------------------------------------------------- #
# Blueprints
# --------------------------------------------------------------------------- #
from tripcraft.api.config import get_openai_api_key, get_port  # noqa: E402
from tripcraft.api.errors import ConfigurationError  # noqa: E402
from tripcraft.routes.travel import create_travel_blueprint  # noqa: E402

app.register_blueprint(create_travel_blueprint())

try:
    get_openai_api_key()
except ConfigurationError as e:
    logger.error("%s – itinerary and location requests will fail until it is set", e)


@app.route("/debug")
def debug():
    """Simple JSON health endpoint."""
    return {
        "status": "ok",
        "endpoints": {
            "suggestions": "/travel/api/suggestions?q=",
            "itinerary": "/travel/api/itinerary",
            "location_info": "/travel/api/location-info",
            "csv": "/travel/api/itinerary/csv",
        },
    }

# --------------------------------------------------------------------------- #
# Local development runner ( `python main.py` )
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    port = get_port()
    logger.info("Starting travel app on http://localhost:%d", port)
    app.run(host="0.0.0.0", port=port, debug=False)

__all__ = ["app"]
