"""
System instruction sent with every search query.

The answer format it asks for (bold business names, full address on its own
line) is what the location extractor relies on.
"""

from nearby_search.prompts import PromptDefinition, register_prompt

_LOCAL_SEARCH_SYSTEM_PROMPT = """\
Be precise and concise. When providing location-based recommendations, \
always include complete addresses with specific details like building \
numbers, street names, area names, and city. Format business names in bold \
using **Business Name** format. For each location mentioned, provide the full \
address on a separate line. Focus on practical, actionable \
information.{{location_context}}\
"""

LOCATION_CONTEXT_TEMPLATE = (
    " The user is currently located at {description}. "
    "Please provide location-specific results based on this location."
)

LOCAL_SEARCH_SYSTEM_PROMPT = register_prompt(
    PromptDefinition(
        name="local_search_system",
        template_text=_LOCAL_SEARCH_SYSTEM_PROMPT,
        title="Local Search System Instruction",
        description=(
            "System instruction for location-aware place search. Asks for "
            "bold business names followed by complete postal addresses. "
            "Supports variable: location_context."
        ),
        tags=frozenset({"search", "places", "system"}),
    )
)


def render_system_prompt(location_description: str | None = None) -> str:
    """Render the system instruction, optionally anchored to a location."""
    location_context = ""
    if location_description:
        location_context = LOCATION_CONTEXT_TEMPLATE.format(
            description=location_description
        )
    return LOCAL_SEARCH_SYSTEM_PROMPT.render(location_context=location_context)
