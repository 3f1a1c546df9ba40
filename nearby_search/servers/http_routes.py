"""
Plain HTTP routes served next to the MCP endpoint.

GET /api/search is the contract with the map front end:
    200 {"results": [...], "places": [...]}
    400 / 500 {"error": "..."}
"""

from fastmcp import FastMCP
from loguru import logger
from starlette.requests import Request
from starlette.responses import JSONResponse

from nearby_search.config import settings
from nearby_search.errors import SearchError
from nearby_search.schemas.search import Coordinates, ErrorResponse, SearchQuery
from nearby_search.services.search_pipeline import SearchOptions, run_search

INTERNAL_ERROR_MESSAGE = "Internal server error."


def parse_coordinates(lat: str | None, lng: str | None) -> Coordinates | None:
    """Both values must be present and numeric, otherwise there is no location."""
    if not lat or not lng:
        return None
    try:
        return Coordinates(latitude=float(lat), longitude=float(lng))
    except ValueError:
        logger.warning(f"Ignoring unparseable coordinates lat={lat!r} lng={lng!r}")
        return None


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


async def search_endpoint(request: Request) -> JSONResponse:
    params = request.query_params
    search_query = SearchQuery(
        query=params.get("query") or "",
        coordinates=parse_coordinates(params.get("lat"), params.get("lng")),
    )

    try:
        response = await run_search(search_query, SearchOptions.from_settings(settings))
    except SearchError as e:
        logger.warning(f"Search rejected ({e.status_code}): {e}")
        return error_response(e.public_message, e.status_code)
    except Exception:
        logger.exception("Error in /api/search")
        return error_response(INTERNAL_ERROR_MESSAGE, 500)

    return JSONResponse(response.model_dump(by_alias=True))


async def health_endpoint(request: Request) -> JSONResponse:
    return JSONResponse({"status": "healthy", "service": settings.OTEL_SERVICE_NAME})


def register_http_routes(mcp: FastMCP) -> None:
    """Attach the HTTP routes to a FastMCP server's Starlette app."""
    mcp.custom_route("/api/search", methods=["GET"])(search_endpoint)
    mcp.custom_route("/health", methods=["GET"])(health_endpoint)
