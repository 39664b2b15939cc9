"""CSV export of a generated itinerary."""

from __future__ import annotations

import csv
import io

from tripcraft.api.messages import translate
from tripcraft.api.models import Itinerary, Language


def itinerary_to_csv(itinerary: Itinerary, language: Language = Language.EN) -> str:
    """One row per activity; day numbers bare, every text field quoted."""
    buffer = io.StringIO()
    buffer.write(translate("csvHeader", language) + "\n")

    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for day_plan in itinerary.itinerary:
        for activity in day_plan.activities:
            writer.writerow([
                day_plan.day,
                activity.time,
                activity.description,
                activity.estimated_cost,
                activity.location.name,
            ])
    return buffer.getvalue()
