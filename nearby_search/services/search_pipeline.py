"""
Search pipeline: gateway -> extractor -> resolver -> composer.

One pipeline is built per request from explicit SearchOptions; it owns its
HTTP clients and must be closed when the request is done.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from nearby_search.clients.google_maps_client import GoogleMapsClient
from nearby_search.clients.perplexity_client import PerplexityClient
from nearby_search.config import Settings
from nearby_search.errors import ConfigurationError, EnrichmentDegraded
from nearby_search.schemas.search import (
    BoundingRegion,
    Coordinates,
    ResolvedPlace,
    SearchQuery,
    SearchResponse,
)
from nearby_search.services.geocoding_resolver import GeocodingResolver
from nearby_search.services.location_extractor import extract_candidates
from nearby_search.services.query_gateway import QueryGateway, validate_query


@dataclass(frozen=True)
class SearchOptions:
    """Request-scoped configuration values for one pipeline run."""

    perplexity_api_key: str
    perplexity_model: str
    perplexity_base_url: str
    google_maps_api_key: str
    region: BoundingRegion
    default_country: str
    max_candidates_per_answer: int = 10
    timeout: float = 15.0

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchOptions:
        return cls(
            perplexity_api_key=settings.PERPLEXITY_API_KEY,
            perplexity_model=settings.PERPLEXITY_MODEL,
            perplexity_base_url=settings.PERPLEXITY_BASE_URL,
            google_maps_api_key=settings.GOOGLE_MAPS_API_KEY,
            region=BoundingRegion(
                north=settings.BOUNDS_NORTH,
                south=settings.BOUNDS_SOUTH,
                east=settings.BOUNDS_EAST,
                west=settings.BOUNDS_WEST,
            ),
            default_country=settings.DEFAULT_COUNTRY,
            max_candidates_per_answer=settings.MAX_CANDIDATES_PER_ANSWER,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )


def compose_response(answers: list[str], places: list[ResolvedPlace] | None) -> SearchResponse:
    """Combine answers and markers; ``places`` is always a list."""
    return SearchResponse(results=list(answers), places=list(places or []))


class SearchPipeline:
    def __init__(
        self,
        gateway: QueryGateway,
        resolver: GeocodingResolver | None,
        max_candidates_per_answer: int = 10,
        clients: tuple = (),
    ) -> None:
        self._gateway = gateway
        self._resolver = resolver
        self._max_candidates = max_candidates_per_answer
        self._clients = clients

    @classmethod
    def from_options(cls, options: SearchOptions) -> SearchPipeline:
        """Wire clients for one request.

        Raises ConfigurationError when the completion key is missing. A
        missing maps key only disables enrichment.
        """
        if not options.perplexity_api_key:
            logger.error("Perplexity API key not provided")
            raise ConfigurationError("PERPLEXITY_API_KEY is not set.")

        completion_client = PerplexityClient(
            api_key=options.perplexity_api_key,
            model=options.perplexity_model,
            base_url=options.perplexity_base_url,
            timeout=options.timeout,
        )
        maps_client = None
        resolver = None
        if options.google_maps_api_key:
            maps_client = GoogleMapsClient(
                api_key=options.google_maps_api_key,
                timeout=options.timeout,
            )
            resolver = GeocodingResolver(maps_client, options.region)
        else:
            logger.warning("Google Maps API key not found; map markers disabled")

        gateway = QueryGateway(
            completion_client=completion_client,
            maps_client=maps_client,
            default_country=options.default_country,
        )
        clients = tuple(c for c in (completion_client, maps_client) if c is not None)
        return cls(gateway, resolver, options.max_candidates_per_answer, clients)

    async def enrich(self, answers: list[str], origin: Coordinates) -> list[ResolvedPlace]:
        """Turn answers into markers; never raises for enrichment problems."""
        candidates: list[str] = []
        for answer in answers:
            candidates.extend(extract_candidates(answer, limit=self._max_candidates))

        try:
            if self._resolver is None:
                raise EnrichmentDegraded("No geocoding resolver configured.")
            return await self._resolver.resolve(candidates, origin)
        except EnrichmentDegraded as e:
            logger.warning(f"Map enrichment skipped: {e}")
        except Exception:
            logger.exception("Map enrichment failed")
        return []

    async def run(self, search_query: SearchQuery) -> SearchResponse:
        answers = await self._gateway.answer(search_query)

        places: list[ResolvedPlace] = []
        if search_query.coordinates is not None and answers:
            places = await self.enrich(answers, search_query.coordinates)
        return compose_response(answers, places)

    async def close(self) -> None:
        for client in self._clients:
            await client.close()


async def run_search(search_query: SearchQuery, options: SearchOptions) -> SearchResponse:
    """Validate, build a pipeline, run it and release its clients."""
    validate_query(search_query.query)
    pipeline = SearchPipeline.from_options(options)
    try:
        return await pipeline.run(search_query)
    finally:
        await pipeline.close()
