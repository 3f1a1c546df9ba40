from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Perplexity (chat completions) ---
    PERPLEXITY_API_KEY: str = Field(
        default="",
        description="API key for the Perplexity chat completions endpoint.",
    )
    PERPLEXITY_BASE_URL: str = Field(
        default="https://api.perplexity.ai",
        description="Base URL of the completion provider.",
    )
    PERPLEXITY_MODEL: str = Field(
        default="llama-3.1-sonar-small-128k-online",
        description="Model used to answer search queries.",
    )

    # --- Google Maps Platform ---
    GOOGLE_MAPS_API_KEY: str = Field(
        default="",
        description="API key shared by the Geocoding and Places Text Search APIs.",
    )

    # --- Search region ---
    BOUNDS_NORTH: float = Field(default=37.6, description="Northern latitude edge of the search region.")
    BOUNDS_SOUTH: float = Field(default=6.4, description="Southern latitude edge of the search region.")
    BOUNDS_EAST: float = Field(default=97.25, description="Eastern longitude edge of the search region.")
    BOUNDS_WEST: float = Field(default=68.7, description="Western longitude edge of the search region.")
    DEFAULT_COUNTRY: str = Field(
        default="India",
        description="Country left out of location descriptions because it is implied.",
    )
    DEFAULT_LATITUDE: float = Field(
        default=15.3838,
        description="Latitude used by the MCP tool when the caller gives no location.",
    )
    DEFAULT_LONGITUDE: float = Field(
        default=73.8578,
        description="Longitude used by the MCP tool when the caller gives no location.",
    )
    MAX_CANDIDATES_PER_ANSWER: int = Field(
        default=10,
        description="Maximum number of place names taken from a single answer.",
    )

    # --- HTTP ---
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=15.0,
        description="Timeout applied to every outbound provider request.",
    )
    HOST: str = Field(default="0.0.0.0", description="Bind address for uvicorn.")
    PORT: int = Field(default=8000, description="Bind port for uvicorn.")

    # --- Observability ---
    OTEL_SERVICE_NAME: str = Field(
        default="nearby-search",
        description="Service name reported on traces and the health route.",
    )
    AGENT_OBSERVABILITY_ENABLED: bool = Field(
        default=True,
        description="Create OpenTelemetry spans around pipeline stages.",
    )


settings = Settings()
