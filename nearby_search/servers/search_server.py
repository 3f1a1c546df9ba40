"""
Nearby Search MCP Server.

Self-contained FastMCP instance exposing the search pipeline as a tool.
Mounted into the registry via tool_registry.py.
"""

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from nearby_search.config import settings
from nearby_search.errors import SearchError
from nearby_search.infrastructure.trace_decorator import traced
from nearby_search.schemas.search import Coordinates, SearchQuery, SearchResponse
from nearby_search.services.search_pipeline import SearchOptions, run_search

search_mcp = FastMCP("nearby_search")


def parse_location(location: str) -> Coordinates:
    """Parse "lat,lng"; an empty string means the configured default centre."""
    if not location:
        return Coordinates(
            latitude=settings.DEFAULT_LATITUDE,
            longitude=settings.DEFAULT_LONGITUDE,
        )
    parts = [p.strip() for p in location.split(",")]
    if len(parts) != 2:
        raise ToolError(f"Location must be 'latitude,longitude', got {location!r}.")
    try:
        return Coordinates(latitude=float(parts[0]), longitude=float(parts[1]))
    except ValueError as e:
        raise ToolError(f"Location must be 'latitude,longitude', got {location!r}.") from e


# ---------------------------------------------------------------------------
# MCP Tools
# ---------------------------------------------------------------------------


@search_mcp.tool(
    title="Search Places Near Me",
    description=(
        "Answer a natural-language question about places near a location "
        "(e.g. 'best coffee near me'). Returns the AI-written answers plus "
        "geocoded map markers for every business named in them. Markers "
        "outside the configured region are dropped."
    ),
    tags={"places", "search", "nearby"},
    annotations={
        "title": "Search Places Near Me",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
@traced(span_name="mcp.tool.search_places_near_me", handler_type="tool")
async def search_places_near_me(
    query: str,
    location: str = "",
) -> SearchResponse:
    """Search for places near a location.

    Args:
        query: What to look for (e.g. "best biryani near me").
        location: Optional "latitude,longitude" (e.g. "15.3838,73.8578").
    """
    search_query = SearchQuery(query=query, coordinates=parse_location(location))
    try:
        return await run_search(search_query, SearchOptions.from_settings(settings))
    except SearchError as e:
        raise ToolError(e.public_message) from e
