"""
Query gateway: turns a user query into AI text answers.

Anchors the system instruction to the user's surroundings (best-effort
reverse geocoding) and forwards the conversation to the completion provider.
"""

from __future__ import annotations

import httpx
from loguru import logger

from nearby_search.clients.google_maps_client import GoogleMapsClient
from nearby_search.clients.perplexity_client import PerplexityClient
from nearby_search.errors import InvalidInput, UpstreamError
from nearby_search.infrastructure.trace_decorator import traced
from nearby_search.prompts.local_search_system import render_system_prompt
from nearby_search.schemas.search import Coordinates, SearchQuery
from nearby_search.utils.formatters import format_location_description


def validate_query(query: str | None) -> str:
    """Return the trimmed query or raise InvalidInput."""
    if query is None or not query.strip():
        raise InvalidInput("Query is empty.")
    return query.strip()


def coordinates_fallback(coordinates: Coordinates) -> str:
    return f"coordinates {coordinates.latitude}, {coordinates.longitude}"


class QueryGateway:
    """Builds the augmented prompt and collects completion answers."""

    def __init__(
        self,
        completion_client: PerplexityClient,
        maps_client: GoogleMapsClient | None,
        default_country: str,
    ) -> None:
        self._completion_client = completion_client
        self._maps_client = maps_client
        self._default_country = default_country

    async def describe_location(self, coordinates: Coordinates) -> str:
        """Human-readable description of where the user is.

        Never fails: any lookup problem yields "coordinates lat, lng".
        """
        fallback = coordinates_fallback(coordinates)
        if self._maps_client is None:
            return fallback

        try:
            results = await self._maps_client.reverse_geocode(
                coordinates.latitude, coordinates.longitude
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Reverse geocoding failed for {coordinates.as_query()}: {e}")
            return fallback

        if not results:
            return fallback

        try:
            description = format_location_description(
                results[0].get("address_components") or [],
                default_country=self._default_country,
            )
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(
                f"Malformed reverse geocoding result for {coordinates.as_query()}: {e}"
            )
            return fallback
        return description or fallback

    def build_messages(self, query: str, location_description: str | None) -> list[dict]:
        return [
            {"role": "system", "content": render_system_prompt(location_description)},
            {"role": "user", "content": query},
        ]

    @traced(span_name="search.gateway", handler_type="stage")
    async def answer(self, search_query: SearchQuery) -> list[str]:
        """Return one answer string per completion choice."""
        query = validate_query(search_query.query)

        location_description = None
        if search_query.coordinates is not None:
            location_description = await self.describe_location(search_query.coordinates)
            logger.info(f"Search anchored at: {location_description}")

        messages = self.build_messages(query, location_description)
        try:
            answers = await self._completion_client.chat_completion(messages)
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Completion API error: {e.response.status_code} - {e.response.text}"
            )
            raise UpstreamError(f"Completion provider returned {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Completion request failed: {e}")
            raise UpstreamError(str(e)) from e

        logger.info(f"Received {len(answers)} answer(s)")
        return answers
