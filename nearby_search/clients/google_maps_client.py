"""
Google Maps Platform HTTP client.

Wraps the lookups the search pipeline needs:
- GET /maps/api/geocode/json?latlng=...          — reverse geocoding
- GET /maps/api/geocode/json?address=...         — forward geocoding
- GET /maps/api/place/textsearch/json?query=...  — place text search
"""

import httpx
from loguru import logger

BASE_URL = "https://maps.googleapis.com/maps/api"


def _results(response: httpx.Response) -> list[dict]:
    payload = response.json()
    if not isinstance(payload, dict):
        raise ValueError(f"Unexpected payload type: {type(payload).__name__}")
    results = payload.get("results") or []
    if not isinstance(results, list):
        raise ValueError(f"Unexpected results type: {type(results).__name__}")
    return results


class GoogleMapsClient:
    """Async client for the Google Geocoding and Places Text Search APIs."""

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("GOOGLE_MAPS_API_KEY is not set.")
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def reverse_geocode(self, latitude: float, longitude: float) -> list[dict]:
        """Reverse geocode — convert coordinates to address results."""
        params = {
            "latlng": f"{latitude},{longitude}",
            "key": self._api_key,
        }

        logger.debug(f"Reverse geocode: lat={latitude}, lng={longitude}")
        response = await self._client.get("/geocode/json", params=params)
        response.raise_for_status()
        return _results(response)

    async def geocode(self, address: str) -> list[dict]:
        """Forward geocode — convert an address or place name to coordinates."""
        params = {
            "address": address,
            "key": self._api_key,
        }

        logger.debug(f"Geocode: address={address!r}")
        response = await self._client.get("/geocode/json", params=params)
        response.raise_for_status()
        return _results(response)

    async def text_search(self, query: str) -> list[dict]:
        """Text Search — find places matching a free-text query."""
        params = {
            "query": query,
            "key": self._api_key,
        }

        logger.debug(f"Text search: query={query!r}")
        response = await self._client.get("/place/textsearch/json", params=params)
        response.raise_for_status()
        return _results(response)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
