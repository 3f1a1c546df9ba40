from nearby_search.schemas.search import ResolvedPlace
from nearby_search.utils.formatters import (
    format_geocoded_place,
    format_location_description,
    format_text_search_place,
)


def _component(name: str, *types: str) -> dict:
    return {"long_name": name, "types": list(types)}


def test_location_description_prefers_area_city_state():
    components = [
        _component("Koregaon Park", "sublocality_level_1", "sublocality", "political"),
        _component("Pune", "locality", "political"),
        _component("Maharashtra", "administrative_area_level_1", "political"),
        _component("India", "country", "political"),
    ]
    assert format_location_description(components, "India") == "Koregaon Park, Pune, Maharashtra"


def test_location_description_skips_ward_and_division_areas():
    components = [
        _component("Ward 12", "sublocality"),
        _component("Panjim", "locality"),
        _component("Goa", "administrative_area_level_1"),
    ]
    assert format_location_description(components, "India") == "Panjim, Goa"


def test_location_description_keeps_foreign_country():
    components = [
        _component("Kathmandu", "locality"),
        _component("Bagmati Province", "administrative_area_level_1"),
        _component("Nepal", "country"),
    ]
    assert format_location_description(components, "India") == "Kathmandu, Bagmati Province, Nepal"


def test_location_description_empty_when_nothing_usable():
    assert format_location_description([_component("India", "country")], "India") == ""
    assert format_location_description([], "India") == ""


def test_geocoded_place_uses_candidate_name_and_address_fallback():
    result = {"geometry": {"location": {"lat": 15.5, "lng": 73.8}}, "place_id": "g-1"}
    place = format_geocoded_place("Cafe Bodega", result)
    assert place.name == "Cafe Bodega"
    assert place.formatted_address == "Cafe Bodega"
    assert place.rating is None
    assert place.provider_id == "g-1"


def test_text_search_place_keeps_rating():
    result = {
        "geometry": {"location": {"lat": 15.49, "lng": 73.82}},
        "place_id": "p-1",
        "formatted_address": "Altinho, Panjim",
        "rating": 4.6,
        "name": "Cafe Bodega (Sunaparanta)",
    }
    place = format_text_search_place("Cafe Bodega", result)
    assert place.name == "Cafe Bodega"
    assert place.formatted_address == "Altinho, Panjim"
    assert place.rating == 4.6


def test_resolved_place_serializes_with_widget_keys():
    place = ResolvedPlace(
        name="Ruta", latitude=15.0, longitude=74.0,
        formatted_address="Calangute", rating=None, provider_id="x",
    )
    assert place.model_dump(by_alias=True) == {
        "name": "Ruta",
        "lat": 15.0,
        "lng": 74.0,
        "address": "Calangute",
        "rating": None,
        "place_id": "x",
    }
