"""Pydantic models for search requests, map markers and responses."""

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    latitude: float = Field(description="Latitude in decimal degrees.")
    longitude: float = Field(description="Longitude in decimal degrees.")

    def as_query(self) -> str:
        """Render as "lat,lng" for proximity-biased text queries."""
        return f"{self.latitude},{self.longitude}"


class BoundingRegion(BaseModel):
    """Rectangular lat/lng envelope; results outside it are discarded."""

    north: float
    south: float
    east: float
    west: float

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.south <= latitude <= self.north
            and self.west <= longitude <= self.east
        )


class SearchQuery(BaseModel):
    query: str = Field(description="Free-text question from the user.")
    coordinates: Coordinates | None = Field(
        None, description="Where the user currently is, when known."
    )


class ResolvedPlace(BaseModel):
    """A geocoded map marker.

    Serialized with the short keys the map widget reads
    (lat, lng, address, place_id).
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="Place name as it appeared in the answer.")
    latitude: float = Field(serialization_alias="lat", validation_alias="lat")
    longitude: float = Field(serialization_alias="lng", validation_alias="lng")
    formatted_address: str = Field(
        "", serialization_alias="address", validation_alias="address"
    )
    rating: float | None = Field(None, description="Average user rating (1-5).")
    provider_id: str = Field(
        serialization_alias="place_id", validation_alias="place_id"
    )


class SearchResponse(BaseModel):
    results: list[str] = Field(default_factory=list, description="Text answers in provider order.")
    places: list[ResolvedPlace] = Field(default_factory=list, description="In-region map markers.")


class ErrorResponse(BaseModel):
    error: str
