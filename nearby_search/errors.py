"""
Error taxonomy for the search pipeline.

Only request-level failures derive from SearchError; each carries the HTTP
status and the message that may be shown to the caller. EnrichmentDegraded
never reaches the caller: the pipeline turns it into an empty place list.
"""


class SearchError(Exception):
    """Base class for failures that abort a search request."""

    status_code: int = 500
    public_message: str = "Internal server error."

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail


class InvalidInput(SearchError):
    """The caller sent an empty or missing query."""

    status_code = 400
    public_message = "No query provided."


class ConfigurationError(SearchError):
    """A provider credential is missing from the environment."""

    status_code = 500
    public_message = "Server configuration error."


class UpstreamError(SearchError):
    """The completion provider call failed."""

    status_code = 500
    public_message = "Failed to fetch results."


class EnrichmentDegraded(Exception):
    """Map markers cannot be produced for this request."""
