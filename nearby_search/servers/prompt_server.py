"""
Search Prompt MCP Server.

Self-contained FastMCP instance that serves the local search system
instruction, rendered for an optional location description.
Mounted into the registry via tool_registry.py.
"""

from fastmcp import FastMCP

from nearby_search.infrastructure.trace_decorator import traced
from nearby_search.prompts.local_search_system import (
    LOCAL_SEARCH_SYSTEM_PROMPT,
    render_system_prompt,
)

prompt_mcp = FastMCP("search_prompts")


# ---------------------------------------------------------------------------
# MCP Prompt
# ---------------------------------------------------------------------------


@prompt_mcp.prompt(
    name=LOCAL_SEARCH_SYSTEM_PROMPT.name,
    title=LOCAL_SEARCH_SYSTEM_PROMPT.title,
    description=LOCAL_SEARCH_SYSTEM_PROMPT.description,
    tags=set(LOCAL_SEARCH_SYSTEM_PROMPT.tags),
)
@traced(span_name="mcp.prompt.local_search_system", handler_type="prompt")
async def local_search_system(
    location_description: str = "",
) -> str:
    """Return the system instruction used for place searches.

    Args:
        location_description: Optional place the user is at (e.g. "Panjim, Goa").
    """
    return render_system_prompt(location_description or None)
