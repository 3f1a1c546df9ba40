"""
Single FastMCP app for the service.

The /api/search and /health routes are attached at construction so the
Starlette app serves them right away; the search tool and prompt servers
are mounted under their namespaces on first request.
"""

from loguru import logger
from fastmcp import FastMCP

from nearby_search.config import settings
from nearby_search.infrastructure.observability import initialize_observability
from nearby_search.servers.http_routes import register_http_routes
from nearby_search.servers.prompt_server import prompt_mcp
from nearby_search.servers.search_server import search_mcp


class McpServersRegistry:
    def __init__(self) -> None:
        self.registry = FastMCP("nearby_search_registry")
        register_http_routes(self.registry)
        self._is_initialized = False

    async def initialize(self) -> None:
        """Set up tracing and mount the MCP servers; later calls do nothing."""
        if self._is_initialized:
            return

        initialize_observability(
            service_name=settings.OTEL_SERVICE_NAME,
            enabled=settings.AGENT_OBSERVABILITY_ENABLED,
        )

        self.registry.mount(search_mcp, namespace="search")
        self.registry.mount(prompt_mcp, namespace="prompts")
        self._is_initialized = True

        tools = [t.name for t in await self.registry.list_tools()]
        prompts = [p.name for p in await self.registry.list_prompts()]
        logger.info(f"Serving tools {tools} and prompts {prompts}")

    def get_registry(self) -> FastMCP:
        return self.registry
