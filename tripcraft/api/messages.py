"""User-facing strings for validation errors and error banners."""

from __future__ import annotations

from typing import Dict

from tripcraft.api.config import get_budget_min
from tripcraft.api.models import Language

MESSAGES: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        "required": "This field is required",
        "positiveNumber": "Please enter a positive number",
        "budgetMin": "Budget must be a plain number greater than {minimum:g}, without currency symbols or units",
        "itineraryError": "Error generating itinerary. The model may have returned an invalid format.",
        "locationInfoError": "Could not fetch details. Please try again.",
        "configError": "The planner is not configured. Please contact the site owner.",
        "unknownError": "An unknown error occurred.",
        "csvHeader": "Day,Time,Activity,Cost,Location",
    },
    Language.ES: {
        "required": "Este campo es obligatorio",
        "positiveNumber": "Por favor, introduce un número positivo",
        "budgetMin": "El presupuesto debe ser un número mayor que {minimum:g}, sin símbolos de moneda ni unidades",
        "itineraryError": "Error al generar el itinerario. Es posible que el modelo haya devuelto un formato no válido.",
        "locationInfoError": "No se pudieron obtener los detalles. Por favor, inténtalo de nuevo.",
        "configError": "El planificador no está configurado. Contacta con el administrador del sitio.",
        "unknownError": "Ocurrió un error desconocido.",
        "csvHeader": "Día,Hora,Actividad,Costo,Ubicación",
    },
}


def translate(key: str, language: Language = Language.EN, **params) -> str:
    """Look up ``key``; unknown keys fall back to English, then to the key."""
    table = MESSAGES.get(language, MESSAGES[Language.EN])
    text = table.get(key) or MESSAGES[Language.EN].get(key, key)
    return text.format(**params) if params else text


def translate_errors(errors: Dict[str, str], language: Language = Language.EN) -> Dict[str, str]:
    """Render validator error keys for display next to each field."""
    minimum = get_budget_min()
    return {
        field: translate(key, language, minimum=minimum)
        for field, key in errors.items()
    }
