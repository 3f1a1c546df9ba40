"""
Geocoding resolver: candidate place names -> in-region map markers.

Each candidate moves through a small decision sequence:

    unresolved -> geocoded     (forward geocoding hit, inside region)
               -> place_found  (text search hit, inside region)
               -> rejected     (winning hit lies outside region)
               -> unresolved   (neither lookup returned anything)

Lookup failures count as "no result"; they never fail the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

import httpx
from loguru import logger

from nearby_search.clients.google_maps_client import GoogleMapsClient
from nearby_search.infrastructure.trace_decorator import traced
from nearby_search.schemas.search import BoundingRegion, Coordinates, ResolvedPlace
from nearby_search.services.location_extractor import candidate_key
from nearby_search.utils.formatters import (
    format_geocoded_place,
    format_text_search_place,
)


class ResolutionStatus(str, Enum):
    GEOCODED = "geocoded"
    PLACE_FOUND = "place_found"
    REJECTED = "rejected"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one candidate; ``place`` is set only on success."""

    candidate: str
    status: ResolutionStatus
    place: ResolvedPlace | None = None

    @property
    def succeeded(self) -> bool:
        return self.place is not None


class GeocodingResolver:
    """Resolves candidate names through geocoding, then place search."""

    def __init__(self, maps_client: GoogleMapsClient, region: BoundingRegion) -> None:
        self._maps_client = maps_client
        self._region = region

    async def _first_result(self, lookup: str, coro) -> dict | None:
        try:
            results = await coro
        except httpx.HTTPStatusError as e:
            logger.warning(f"{lookup} error: {e.response.status_code}")
            return None
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"{lookup} request failed: {e}")
            return None
        if not results or not isinstance(results[0], dict):
            return None
        return results[0]

    def _in_region(self, place: ResolvedPlace) -> bool:
        return self._region.contains(place.latitude, place.longitude)

    async def resolve_candidate(self, candidate: str, origin: Coordinates) -> Resolution:
        """Run the geocode -> place-search sequence for a single name."""
        status = ResolutionStatus.GEOCODED
        result = await self._first_result(
            f"Geocoding {candidate!r}",
            self._maps_client.geocode(candidate),
        )
        if result is None:
            status = ResolutionStatus.PLACE_FOUND
            result = await self._first_result(
                f"Place search {candidate!r}",
                self._maps_client.text_search(f"{candidate} near {origin.as_query()}"),
            )
        if result is None:
            return Resolution(candidate, ResolutionStatus.UNRESOLVED)

        try:
            if status is ResolutionStatus.GEOCODED:
                place = format_geocoded_place(candidate, result)
            else:
                place = format_text_search_place(candidate, result)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Malformed lookup result for {candidate!r}: {e}")
            return Resolution(candidate, ResolutionStatus.UNRESOLVED)

        if not self._in_region(place):
            logger.debug(
                f"Rejected {candidate!r} at {place.latitude},{place.longitude}: outside region"
            )
            return Resolution(candidate, ResolutionStatus.REJECTED)
        return Resolution(candidate, status, place)

    @traced(span_name="search.resolver", handler_type="stage")
    async def resolve(
        self,
        candidates: Iterable[str],
        origin: Coordinates,
    ) -> list[ResolvedPlace]:
        """Resolve pooled candidates; places are unique by provider id."""
        seen_candidates: set[str] = set()
        seen_places: set[str] = set()
        places: list[ResolvedPlace] = []

        for candidate in candidates:
            key = candidate_key(candidate)
            if key in seen_candidates:
                continue
            seen_candidates.add(key)

            resolution = await self.resolve_candidate(candidate.strip(), origin)
            logger.debug(f"{candidate!r}: {resolution.status.value}")
            if not resolution.succeeded:
                continue
            if resolution.place.provider_id in seen_places:
                continue
            seen_places.add(resolution.place.provider_id)
            places.append(resolution.place)

        logger.info(f"Resolved {len(places)} place(s) from {len(seen_candidates)} candidate(s)")
        return places
