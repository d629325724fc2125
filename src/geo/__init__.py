"""
Geo module: Amazon Location Service adapter.

This module provides functionality for:
- Place search by text, suggestion, place id and coordinates
- Geofence create, get, list and delete
- Splitting bulk geofence mutations into provider-sized batches sent
  concurrently, with per-geofence success/error aggregation
- camelCase <-> PascalCase field transcoding at the provider boundary

Main classes:
- GeoServiceClient: One method per provider operation
- BatchExecutor: Concurrent batched dispatch with partial-failure merging
- CaseMapper: Recursive key casing conversion
- OptionMapper: Search options to provider request fields
- ConfigResolver / EnvGeoConfigProvider: Geo resource configuration
- CredentialGate / Boto3SessionProvider: Credential checks
- Boto3LocationTransport: boto3-backed provider transport

Errors:
- GeoError: Base exception for the geo module
- AuthFailure, MissingConfiguration, InvalidOptions, EmptyInput,
  InvalidGeofenceId, InvalidPolygon, InvalidPlaceId, TransportError
"""

from .geo_batch import BatchExecutor, PROVIDER_BATCH_LIMIT
from .geo_casing import CaseMapper
from .geo_client import GeoServiceClient
from .geo_config import ConfigResolver, EnvGeoConfigProvider, GeoConfig
from .geo_credentials import AuthSession, AuthSessionProvider, Boto3SessionProvider, Credentials, CredentialGate
from .geo_errors import (
    API_CONNECTION_ERROR,
    AuthFailure,
    EmptyInput,
    GeoError,
    InvalidGeofenceId,
    InvalidOptions,
    InvalidPlaceId,
    InvalidPolygon,
    MissingConfiguration,
    TransportError,
)
from .geo_models import (
    BatchResult,
    DeleteGeofencesResults,
    Geofence,
    GeofenceInput,
    ListGeofenceResults,
    MapStyle,
    Place,
    SaveGeofencesResults,
    SearchByCoordinatesOptions,
    SearchByTextOptions,
    SearchForSuggestionsResult,
)
from .geo_options import OptionMapper
from .geo_transport import Boto3LocationTransport, LocationTransport

__all__ = [
    # Main classes
    "GeoServiceClient",
    "BatchExecutor",
    "CaseMapper",
    "OptionMapper",
    "ConfigResolver",
    "EnvGeoConfigProvider",
    "GeoConfig",
    "CredentialGate",

    # Collaborators
    "AuthSession",
    "AuthSessionProvider",
    "Boto3SessionProvider",
    "Credentials",
    "LocationTransport",
    "Boto3LocationTransport",

    # Models
    "BatchResult",
    "DeleteGeofencesResults",
    "Geofence",
    "GeofenceInput",
    "ListGeofenceResults",
    "MapStyle",
    "Place",
    "SaveGeofencesResults",
    "SearchByCoordinatesOptions",
    "SearchByTextOptions",
    "SearchForSuggestionsResult",

    # Errors
    "GeoError",
    "AuthFailure",
    "MissingConfiguration",
    "InvalidOptions",
    "EmptyInput",
    "InvalidGeofenceId",
    "InvalidPolygon",
    "InvalidPlaceId",
    "TransportError",
    "API_CONNECTION_ERROR",
    "PROVIDER_BATCH_LIMIT",
]

__version__ = "1.0.0"
