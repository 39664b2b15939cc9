"""Field rules for the trip planning form."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

from tripcraft.api.config import get_budget_min
from tripcraft.api.errors import ValidationError
from tripcraft.api.models import TripPreferences

REQUIRED = "required"
POSITIVE_NUMBER = "positiveNumber"
BUDGET_MIN = "budgetMin"


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def _parse_budget(budget: str) -> Optional[Decimal]:
    try:
        amount = Decimal(budget.strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def validate(prefs: TripPreferences, budget_min: Optional[float] = None) -> Dict[str, str]:
    """Return a mapping of field name to error key.

    Every rule runs; an empty mapping means the preferences can be sent.
    """
    if budget_min is None:
        budget_min = get_budget_min()

    errors: Dict[str, str] = {}

    if _blank(prefs.destination):
        errors["destination"] = REQUIRED

    if not prefs.duration or prefs.duration <= 0:
        errors["duration"] = POSITIVE_NUMBER

    if _blank(prefs.budget):
        errors["budget"] = REQUIRED
    else:
        amount = _parse_budget(prefs.budget)
        if amount is None or amount <= Decimal(str(budget_min)):
            errors["budget"] = BUDGET_MIN

    if prefs.has_other_interest and _blank(prefs.other_interest):
        errors["otherInterest"] = REQUIRED

    return errors


def ensure_valid(prefs: TripPreferences) -> TripPreferences:
    """Raise ValidationError unless every rule passes."""
    errors = validate(prefs)
    if errors:
        raise ValidationError(errors)
    return prefs
