"""
Transport to the Amazon Location Service API.

The provider adapter talks to the service only through LocationTransport,
so a fake transport can stand in during tests. Boto3LocationTransport is
the production implementation. It reuses one boto3 client per
(region, client tag, credentials) and never retries on its own; retry
behaviour is whatever botocore is configured with.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config.logger_module import log_debug
from .geo_credentials import Credentials
from .geo_errors import TransportError


USER_AGENT_PREFIX = "geo"


class GeoAction(Enum):
    """Public operations, used to tag outbound requests."""
    SEARCH_BY_TEXT = "SearchByText"
    SEARCH_FOR_SUGGESTIONS = "SearchForSuggestions"
    SEARCH_BY_PLACE_ID = "SearchByPlaceId"
    SEARCH_BY_COORDINATES = "SearchByCoordinates"
    SAVE_GEOFENCES = "SaveGeofences"
    GET_GEOFENCE = "GetGeofence"
    LIST_GEOFENCES = "ListGeofences"
    DELETE_GEOFENCES = "DeleteGeofences"

    @property
    def client_tag(self) -> str:
        return f"{USER_AGENT_PREFIX}/{self.value}"


class LocationCommand(Enum):
    """Provider API calls and the boto3 client method implementing each."""
    SEARCH_PLACE_INDEX_FOR_TEXT = "search_place_index_for_text"
    SEARCH_PLACE_INDEX_FOR_SUGGESTIONS = "search_place_index_for_suggestions"
    GET_PLACE = "get_place"
    SEARCH_PLACE_INDEX_FOR_POSITION = "search_place_index_for_position"
    GET_GEOFENCE = "get_geofence"
    LIST_GEOFENCES = "list_geofences"
    BATCH_PUT_GEOFENCE = "batch_put_geofence"
    BATCH_DELETE_GEOFENCE = "batch_delete_geofence"


@dataclass(frozen=True)
class TransportContext:
    """Per-call settings a transport request is made with."""
    credentials: Credentials
    region: str
    client_tag: str


class LocationTransport(ABC):
    """Sends one provider command and returns its PascalCase response."""

    @abstractmethod
    def send(self,
             command: LocationCommand,
             request: Dict[str, Any],
             context: TransportContext) -> Dict[str, Any]:
        """
        Args:
            command: Provider API call to make
            request: PascalCase request body
            context: Credentials, region and client tag for the call

        Returns:
            PascalCase response body

        Raises:
            TransportError: If the call fails for any reason
        """
        pass


class Boto3LocationTransport(LocationTransport):
    """LocationTransport backed by boto3's ``location`` client."""

    SERVICE_NAME = "location"

    def __init__(self):
        self._clients: Dict[Tuple[str, str, str, Any], Any] = {}
        self._lock = threading.Lock()

    def _client_for(self, context: TransportContext):
        credentials = context.credentials
        key = (
            context.region,
            context.client_tag,
            credentials.access_key_id,
            credentials.session_token,
        )
        with self._lock:
            client = self._clients.get(key)
            if client is None:
                client = boto3.client(
                    self.SERVICE_NAME,
                    region_name=context.region,
                    aws_access_key_id=credentials.access_key_id,
                    aws_secret_access_key=credentials.secret_access_key,
                    aws_session_token=credentials.session_token,
                    config=Config(user_agent_extra=context.client_tag),
                )
                self._clients[key] = client
                log_debug(
                    f"Created {self.SERVICE_NAME} client for {context.region} ({context.client_tag})"
                )
            return client

    def send(self,
             command: LocationCommand,
             request: Dict[str, Any],
             context: TransportContext) -> Dict[str, Any]:
        try:
            # Client construction fails on e.g. a malformed region
            client = self._client_for(context)
            response = getattr(client, command.value)(**request)
        except ClientError as e:
            error = e.response.get("Error", {})
            raise TransportError(
                error.get("Message", str(e)),
                provider_code=error.get("Code"),
            ) from e
        except BotoCoreError as e:
            raise TransportError(str(e)) from e

        response.pop("ResponseMetadata", None)
        return response
