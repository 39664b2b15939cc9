from tripcraft.api.export import itinerary_to_csv
from tripcraft.api.models import Itinerary, Language


def test_csv_rows_and_quoting(itinerary_payload):
    itinerary = Itinerary.model_validate(itinerary_payload)
    lines = itinerary_to_csv(itinerary).splitlines()

    assert lines[0] == "Day,Time,Activity,Cost,Location"
    assert lines[1] == '1,"09:00","Walk the ""Royal Mile""","Free","Royal Mile"'
    assert lines[2] == '1,"13:00","Castle tour","£20","Edinburgh Castle"'
    assert lines[3] == '2,"10:00","Hike up Arthur\'s Seat","Free","Arthur\'s Seat"'
    assert len(lines) == 4


def test_spanish_header(itinerary_payload):
    itinerary = Itinerary.model_validate(itinerary_payload)
    assert itinerary_to_csv(itinerary, Language.ES).startswith("Día,Hora,Actividad,Costo,Ubicación\n")


def test_commas_and_newlines_stay_inside_quotes(itinerary_payload):
    activity = itinerary_payload["itinerary"][0]["activities"][0]
    activity["description"] = "Coffee, then\na walk"
    itinerary = Itinerary.model_validate(itinerary_payload)
    assert '"Coffee, then\na walk"' in itinerary_to_csv(itinerary)
