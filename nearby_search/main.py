"""Container entrypoint for the search service (MCP + /api/search)."""

import uvicorn

from nearby_search.config import settings
from nearby_search.servers.tool_registry import McpServersRegistry

registry = McpServersRegistry()
_inner_app = registry.get_registry().http_app(stateless_http=True)


async def app(scope, receive, send):
    """ASGI app that forwards lifespan and lazily initializes the registry."""
    if scope["type"] == "lifespan":
        await _inner_app(scope, receive, send)
        return
    if not registry._is_initialized:
        await registry.initialize()
    await _inner_app(scope, receive, send)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
