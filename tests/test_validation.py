import pytest

from tripcraft.api.errors import ValidationError
from tripcraft.api.messages import translate, translate_errors
from tripcraft.api.models import Language, TripPreferences
from tripcraft.api.validation import ensure_valid, validate


def test_valid_preferences(prefs):
    assert validate(prefs) == {}
    assert ensure_valid(prefs) is prefs


def test_all_errors_collected():
    prefs = TripPreferences(destination="", duration=0, budget="", interests=[], restrictions="")
    assert validate(prefs) == {
        "destination": "required",
        "duration": "positiveNumber",
        "budget": "required",
    }


def test_whitespace_destination_is_required(prefs):
    prefs.destination = "   "
    assert validate(prefs) == {"destination": "required"}


@pytest.mark.parametrize("duration", [0, -3, None])
def test_duration_must_be_positive(prefs, duration):
    prefs.duration = duration
    assert validate(prefs) == {"duration": "positiveNumber"}


@pytest.mark.parametrize("budget, expected", [
    ("15", {}),
    ("10.5", {}),
    (" 2000 ", {}),
    ("10", {"budget": "budgetMin"}),
    ("-50", {"budget": "budgetMin"}),
    ("abc", {"budget": "budgetMin"}),
    ("15 EUR", {"budget": "budgetMin"}),
    ("15abc", {"budget": "budgetMin"}),
    ("NaN", {"budget": "budgetMin"}),
    ("$2000", {"budget": "budgetMin"}),
    ("  ", {"budget": "required"}),
])
def test_budget_rules(prefs, budget, expected):
    prefs.budget = budget
    assert validate(prefs) == expected


def test_budget_threshold_configurable(prefs, monkeypatch):
    prefs.budget = "50"
    assert validate(prefs, budget_min=100) == {"budget": "budgetMin"}
    monkeypatch.setenv("BUDGET_MIN", "49")
    assert validate(prefs) == {}


def test_other_interest_needs_text(prefs):
    prefs.add_interest("Other")
    assert validate(prefs) == {"otherInterest": "required"}
    prefs.other_interest = "   "
    assert validate(prefs) == {"otherInterest": "required"}
    prefs.other_interest = "Bird watching"
    assert validate(prefs) == {}


def test_ensure_valid_raises(prefs):
    prefs.destination = ""
    with pytest.raises(ValidationError) as excinfo:
        ensure_valid(prefs)
    assert excinfo.value.errors == {"destination": "required"}


def test_interests_have_no_duplicates():
    prefs = TripPreferences(interests=["History", "History", "Nightlife"])
    assert prefs.interests == ["History", "Nightlife"]
    prefs.add_interest("History")
    assert prefs.interests == ["History", "Nightlife"]
    prefs.toggle_interest("History")
    assert prefs.interests == ["Nightlife"]


def test_from_dict_reads_wire_format():
    prefs = TripPreferences.from_dict({
        "destination": "Lima",
        "duration": "abc",
        "budget": 300,
        "interests": ["Other"],
        "otherInterest": "Surfing",
    })
    assert prefs.duration == 0
    assert prefs.budget == "300"
    assert prefs.other_interest == "Surfing"
    assert validate(prefs) == {"duration": "positiveNumber"}


def test_messages_in_both_languages():
    errors = {"destination": "required", "budget": "budgetMin"}
    assert translate_errors(errors, Language.EN) == {
        "destination": "This field is required",
        "budget": "Budget must be a plain number greater than 10, without currency symbols or units",
    }
    assert translate_errors(errors, Language.ES)["destination"] == "Este campo es obligatorio"
    assert "sin símbolos de moneda" in translate_errors(errors, Language.ES)["budget"]


def test_unknown_message_key_falls_back():
    assert translate("noSuchKey", Language.ES) == "noSuchKey"


@pytest.mark.parametrize("interests", [5, {"History": True}, None])
def test_from_dict_ignores_malformed_interests(interests):
    prefs = TripPreferences.from_dict({"destination": "Lima", "interests": interests})
    assert prefs.interests == []
