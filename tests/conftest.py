import httpx
import pytest

from nearby_search.schemas.search import BoundingRegion, Coordinates

PANJIM = Coordinates(latitude=15.3838, longitude=73.8578)

INDIA = BoundingRegion(north=37.6, south=6.4, east=97.25, west=68.7)


def geocode_result(lat: float, lng: float, place_id: str, address: str | None = None) -> dict:
    result = {
        "geometry": {"location": {"lat": lat, "lng": lng}},
        "place_id": place_id,
    }
    if address is not None:
        result["formatted_address"] = address
    return result


class FakeMapsClient:
    """In-memory stand-in for GoogleMapsClient.

    Each mapping value is either a list of results or an exception to raise.
    """

    def __init__(self, geocode=None, text_search=None, reverse=None):
        self.geocode_results = geocode or {}
        self.text_search_results = text_search or {}
        self.reverse_results = reverse
        self.geocode_calls: list[str] = []
        self.text_search_calls: list[str] = []
        self.closed = False

    @staticmethod
    def _answer(value):
        if isinstance(value, Exception):
            raise value
        return value or []

    async def geocode(self, address: str) -> list[dict]:
        self.geocode_calls.append(address)
        return self._answer(self.geocode_results.get(address))

    async def text_search(self, query: str) -> list[dict]:
        self.text_search_calls.append(query)
        return self._answer(self.text_search_results.get(query))

    async def reverse_geocode(self, latitude: float, longitude: float) -> list[dict]:
        return self._answer(self.reverse_results)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def origin() -> Coordinates:
    return PANJIM


@pytest.fixture
def region() -> BoundingRegion:
    return INDIA


def json_transport(handler) -> httpx.MockTransport:
    """MockTransport whose handler returns (status, json_body)."""

    def _handle(request: httpx.Request) -> httpx.Response:
        status, body = handler(request)
        return httpx.Response(status, json=body)

    return httpx.MockTransport(_handle)
