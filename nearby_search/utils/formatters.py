"""Formatting helpers for Google Maps API responses."""

from nearby_search.schemas.search import ResolvedPlace

_SUBLOCALITY_TYPES = ("sublocality_level_1", "sublocality")
_ADMINISTRATIVE_NOISE = ("ward", "division")


def format_location_description(
    address_components: list[dict],
    default_country: str,
) -> str:
    """Build a readable "area, city, state" phrase from address components.

    The country is appended only when it differs from ``default_country``.
    Returns an empty string when nothing usable is present.
    """
    area = city = state = country = ""
    for component in address_components:
        types = component.get("types", [])
        name = component.get("long_name", "")
        if "locality" in types:
            city = name
        elif any(t in types for t in _SUBLOCALITY_TYPES):
            area = name
        elif "administrative_area_level_1" in types:
            state = name
        elif "country" in types:
            country = name

    parts = []
    if area and not any(noise in area.lower() for noise in _ADMINISTRATIVE_NOISE):
        parts.append(area)
    if city:
        parts.append(city)
    if state:
        parts.append(state)
    if country and country != default_country:
        parts.append(country)
    return ", ".join(parts)


def _coordinates(result: dict) -> tuple[float, float]:
    location = result["geometry"]["location"]
    return float(location["lat"]), float(location["lng"])


def _place_id(result: dict) -> str:
    place_id = result.get("place_id")
    if not place_id:
        raise KeyError("place_id")
    return str(place_id)


def format_geocoded_place(name: str, result: dict) -> ResolvedPlace:
    """Turn a Geocoding API result into a marker named after the candidate."""
    lat, lng = _coordinates(result)
    return ResolvedPlace(
        name=name,
        latitude=lat,
        longitude=lng,
        formatted_address=result.get("formatted_address") or name,
        rating=None,
        provider_id=_place_id(result),
    )


def format_text_search_place(name: str, result: dict) -> ResolvedPlace:
    """Turn a Places Text Search result into a marker named after the candidate."""
    lat, lng = _coordinates(result)
    return ResolvedPlace(
        name=name,
        latitude=lat,
        longitude=lng,
        formatted_address=result.get("formatted_address") or "",
        rating=result.get("rating") or None,
        provider_id=_place_id(result),
    )

