"""
Data model for the geo module.

All models use snake_case attributes and serialize to the camelCase
convention (``model_dump(by_alias=True)``). Input accepts either form.
Geometry is carried through opaquely: no coordinate range checks and no
projection happen here.
"""

from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


Longitude = float
Latitude = float
Coordinates = Tuple[Longitude, Latitude]
# (south-west longitude, south-west latitude, north-east longitude, north-east latitude)
BoundingBox = Tuple[Longitude, Latitude, Longitude, Latitude]
LinearRing = List[Coordinates]
GeofencePolygon = List[LinearRing]
GeofenceId = str

T = TypeVar("T")


class GeoModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to camelCase keys, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ==================== SEARCH OPTIONS ====================

class SearchByTextOptions(GeoModel):
    """Optional parameters for text and suggestion searches."""
    countries: Optional[List[str]] = None
    max_results: Optional[int] = None
    search_index_name: Optional[str] = None
    provider_name: Optional[str] = None
    language: Optional[str] = None
    categories: Optional[List[str]] = None
    bias_position: Optional[Coordinates] = None
    search_area_constraints: Optional[BoundingBox] = None


class SearchByCoordinatesOptions(GeoModel):
    max_results: Optional[int] = None
    search_index_name: Optional[str] = None
    provider_name: Optional[str] = None


class SearchByPlaceIdOptions(GeoModel):
    search_index_name: Optional[str] = None


class GeofenceOptions(GeoModel):
    collection_name: Optional[str] = None
    provider_name: Optional[str] = None


class ListGeofenceOptions(GeofenceOptions):
    next_token: Optional[str] = None


# ==================== SEARCH RESULTS ====================

class MapStyle(GeoModel):
    """A map resource available through the provider."""
    map_name: str
    style: str
    region: str


class PlaceGeometry(GeoModel):
    point: Optional[Coordinates] = None


class Place(GeoModel):
    """
    A search result.

    Fields the provider returns beyond the common ones below (time zone,
    categories, unit number, ...) are kept as extra camelCase attributes.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow", frozen=True
    )

    address_number: Optional[str] = None
    country: Optional[str] = None
    geometry: Optional[PlaceGeometry] = None
    label: Optional[str] = None
    municipality: Optional[str] = None
    neighborhood: Optional[str] = None
    postal_code: Optional[str] = None
    region: Optional[str] = None
    street: Optional[str] = None
    sub_region: Optional[str] = None


class SearchForSuggestionsResult(GeoModel):
    text: str
    place_id: Optional[str] = None


# ==================== GEOFENCES ====================

class PolygonGeometry(GeoModel):
    polygon: GeofencePolygon


class GeofenceInput(GeoModel):
    """A geofence to create or replace."""
    geofence_id: GeofenceId
    geometry: PolygonGeometry


class GeofenceBase(GeoModel):
    geofence_id: GeofenceId
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None


class Geofence(GeofenceBase):
    """A stored geofence. ``status`` is provider-defined (ACTIVE, PENDING, ...)."""
    geometry: PolygonGeometry
    status: Optional[str] = None


class GeofenceErrorDetail(GeoModel):
    code: str
    message: str


class GeofenceError(GeoModel):
    """Per-item failure of a batch mutation."""
    geofence_id: GeofenceId
    error: GeofenceErrorDetail


class BatchResult(GeoModel, Generic[T]):
    """
    Aggregate outcome of a batched mutation.

    Every submitted item appears in exactly one of ``successes`` or
    ``errors``.
    """
    successes: List[T] = Field(default_factory=list)
    errors: List[GeofenceError] = Field(default_factory=list)

    def extend(self, other: "BatchResult[T]") -> None:
        """Append another partial result, keeping order."""
        self.successes.extend(other.successes)
        self.errors.extend(other.errors)


SaveGeofencesResults = BatchResult[GeofenceBase]
DeleteGeofencesResults = BatchResult[GeofenceId]


class ListGeofenceResults(GeoModel):
    entries: List[Geofence] = Field(default_factory=list)
    next_token: Optional[str] = None
