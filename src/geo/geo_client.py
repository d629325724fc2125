"""
Amazon Location Service client for place search and geofence management.

Every operation resolves its Geo resource, ensures credentials, validates
its input, sends one provider request (or one per batch for bulk geofence
mutations) and returns camelCase-serializable models. Provider PascalCase
never leaves this module's boundary.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..config.logger_module import log_debug, log_info
from .geo_batch import BatchExecutor
from .geo_casing import CaseMapper
from .geo_config import ConfigProvider, ConfigResolver, EnvGeoConfigProvider
from .geo_credentials import AuthSessionProvider, Boto3SessionProvider, Credentials, CredentialGate
from .geo_errors import EmptyInput, InvalidGeofenceId, InvalidPlaceId, MissingConfiguration, TransportError
from .geo_models import (
    BatchResult,
    Coordinates,
    DeleteGeofencesResults,
    Geofence,
    GeofenceBase,
    GeofenceError,
    GeofenceInput,
    GeofenceOptions,
    ListGeofenceOptions,
    ListGeofenceResults,
    MapStyle,
    Place,
    SaveGeofencesResults,
    SearchByCoordinatesOptions,
    SearchByPlaceIdOptions,
    SearchByTextOptions,
    SearchForSuggestionsResult,
)
from .geo_options import OptionMapper, coerce_options
from .geo_transport import (
    Boto3LocationTransport,
    GeoAction,
    LocationCommand,
    LocationTransport,
    TransportContext,
)
from .geo_validation import find_invalid_geofence_ids, validate_geofence_id, validate_geofences_input


OptionsArg = Union[Mapping[str, Any], None]


class GeoServiceClient:
    """
    One method per provider operation.

    Collaborators are injected so tests can run without network access:
    - config_provider: callable returning the current GeoConfig
    - session_provider: source of credentials
    - transport: sends PascalCase commands to the provider
    - batch_executor: splits bulk geofence mutations into provider-sized batches
    """

    CATEGORY = "Geo"
    PROVIDER_NAME = "AmazonLocationService"

    def __init__(self,
                 config_provider: ConfigProvider = None,
                 session_provider: AuthSessionProvider = None,
                 transport: LocationTransport = None,
                 batch_executor: BatchExecutor = None):
        self._config = ConfigResolver(config_provider or EnvGeoConfigProvider())
        self._credentials = CredentialGate(session_provider or Boto3SessionProvider())
        self._transport = transport or Boto3LocationTransport()
        self._batches = batch_executor or BatchExecutor()

        log_info(
            f"GeoServiceClient initialized (transport={type(self._transport).__name__}, "
            f"batch_size={self._batches.batch_size})"
        )

    def get_category(self) -> str:
        return self.CATEGORY

    def get_provider_name(self) -> str:
        return self.PROVIDER_NAME

    # ==================== MAPS ====================

    def get_available_maps(self) -> List[MapStyle]:
        """
        List the map resources in the Geo configuration.

        Raises:
            MissingConfiguration: If no maps or no default map are configured
        """
        config = self._config.map_config()
        return [
            MapStyle(map_name=map_name, style=item.style, region=config.region)
            for map_name, item in config.maps.items.items()
        ]

    def get_default_map(self) -> MapStyle:
        """
        Get the map resource configured as default.

        Raises:
            MissingConfiguration: If the default map is not configured
        """
        config = self._config.map_config()
        map_name = config.maps.default
        item = config.maps.items.get(map_name)
        if item is None:
            error_msg = f"Default map '{map_name}' is not among the configured map resources"
            log_debug(error_msg)
            raise MissingConfiguration(error_msg)
        return MapStyle(map_name=map_name, style=item.style, region=config.region)

    # ==================== SEARCH ====================

    def search_by_text(self,
                       text: str,
                       options: Union[SearchByTextOptions, OptionsArg] = None) -> List[Place]:
        """
        Search places matching free text.

        Args:
            text: Text to search for
            options: SearchByTextOptions or an equivalent mapping; bias_position
                and search_area_constraints are mutually exclusive

        Returns:
            Matching places, in provider order

        Raises:
            MissingConfiguration: If no search index is configured or given
            AuthFailure: If no credentials are available
            EmptyInput: If text is empty
            InvalidOptions: If bias_position and search_area_constraints are both set
            TransportError: If the provider call fails
        """
        options = coerce_options(options, SearchByTextOptions)
        resource = self._config.search_index(options.search_index_name if options else None)
        credentials = self._credentials.ensure()
        self._require_text(text)

        request = {"Text": text, "IndexName": resource.name}
        request.update(OptionMapper.map_text_options(options))

        response = self._send(GeoAction.SEARCH_BY_TEXT, LocationCommand.SEARCH_PLACE_INDEX_FOR_TEXT,
                              request, credentials, resource.region)

        # Each result wraps a single Place
        return [
            Place.model_validate(CaseMapper.to_camel(result["Place"]))
            for result in response.get("Results", [])
        ]

    def search_for_suggestions(self,
                               text: str,
                               options: Union[SearchByTextOptions, OptionsArg] = None
                               ) -> List[SearchForSuggestionsResult]:
        """
        Get autocomplete suggestions for partial text.

        Takes the same options as search_by_text.

        Raises:
            MissingConfiguration, AuthFailure, EmptyInput, InvalidOptions, TransportError
        """
        options = coerce_options(options, SearchByTextOptions)
        resource = self._config.search_index(options.search_index_name if options else None)
        credentials = self._credentials.ensure()
        self._require_text(text)

        request = {"Text": text, "IndexName": resource.name}
        request.update(OptionMapper.map_text_options(options))

        response = self._send(GeoAction.SEARCH_FOR_SUGGESTIONS,
                              LocationCommand.SEARCH_PLACE_INDEX_FOR_SUGGESTIONS,
                              request, credentials, resource.region)

        return [
            SearchForSuggestionsResult.model_validate(CaseMapper.to_camel(result))
            for result in response.get("Results", [])
        ]

    def search_by_place_id(self,
                           place_id: str,
                           options: Union[SearchByPlaceIdOptions, OptionsArg] = None) -> Optional[Place]:
        """
        Look up a place by the id returned from a suggestion search.

        Returns:
            The place, or None if the provider returned none

        Raises:
            MissingConfiguration, AuthFailure, TransportError
            InvalidPlaceId: If place_id is empty
        """
        options = coerce_options(options, SearchByPlaceIdOptions)
        resource = self._config.search_index(options.search_index_name if options else None)
        credentials = self._credentials.ensure()

        if not place_id:
            error_msg = "PlaceId cannot be an empty string."
            log_debug(error_msg)
            raise InvalidPlaceId(error_msg)

        request = {"PlaceId": place_id, "IndexName": resource.name}
        response = self._send(GeoAction.SEARCH_BY_PLACE_ID, LocationCommand.GET_PLACE,
                              request, credentials, resource.region)

        place = response.get("Place")
        if not place:
            return None
        return Place.model_validate(CaseMapper.to_camel(place))

    def search_by_coordinates(self,
                              coordinates: Coordinates,
                              options: Union[SearchByCoordinatesOptions, OptionsArg] = None
                              ) -> Optional[Place]:
        """
        Reverse geocode a (longitude, latitude) position.

        The provider answers a position lookup with one place, so only the
        first result is returned.

        Returns:
            The place at the position, or None if the provider found nothing

        Raises:
            MissingConfiguration, AuthFailure, TransportError
        """
        options = coerce_options(options, SearchByCoordinatesOptions)
        resource = self._config.search_index(options.search_index_name if options else None)
        credentials = self._credentials.ensure()

        request = {"Position": list(coordinates), "IndexName": resource.name}
        request.update(OptionMapper.map_coordinates_options(options))

        response = self._send(GeoAction.SEARCH_BY_COORDINATES,
                              LocationCommand.SEARCH_PLACE_INDEX_FOR_POSITION,
                              request, credentials, resource.region)

        results = response.get("Results", [])
        if not results:
            return None
        return Place.model_validate(CaseMapper.to_camel(results[0]["Place"]))

    # ==================== GEOFENCES ====================

    def save_geofences(self,
                       geofences: Sequence[Union[GeofenceInput, Mapping[str, Any]]],
                       options: Union[GeofenceOptions, OptionsArg] = None) -> SaveGeofencesResults:
        """
        Create or replace geofences in a collection.

        Geofences are sent in batches of the provider's limit, all batches at
        once. A batch the provider rejects as a whole shows up as
        APIConnectionError entries for each of its geofences.

        Args:
            geofences: GeofenceInput models or camelCase mappings
            options: GeofenceOptions or an equivalent mapping

        Returns:
            successes (id and timestamps) and per-geofence errors

        Raises:
            EmptyInput: If geofences is empty
            MissingConfiguration, AuthFailure
            InvalidGeofenceId, InvalidPolygon: On local validation failure
        """
        if not geofences:
            raise EmptyInput("Geofence input array is empty")

        options = coerce_options(options, GeofenceOptions)
        resource = self._config.geofence_collection(options.collection_name if options else None)
        credentials = self._credentials.ensure()
        validated = validate_geofences_input(geofences)

        entries = [CaseMapper.to_pascal(geofence.model_dump(by_alias=True, mode="json"))
                   for geofence in validated]

        def send_batch(batch: List[Dict[str, Any]]) -> Dict[str, Any]:
            request = {"CollectionName": resource.name, "Entries": batch}
            return self._send(GeoAction.SAVE_GEOFENCES, LocationCommand.BATCH_PUT_GEOFENCE,
                              request, credentials, resource.region)

        return self._batches.execute(
            entries,
            send_batch,
            self._fold_put_response,
            lambda entry: entry["GeofenceId"],
            result_type=SaveGeofencesResults,
        )

    def get_geofence(self,
                     geofence_id: str,
                     options: Union[GeofenceOptions, OptionsArg] = None) -> Geofence:
        """
        Fetch one geofence.

        Raises:
            MissingConfiguration, AuthFailure, InvalidGeofenceId, TransportError
        """
        options = coerce_options(options, GeofenceOptions)
        resource = self._config.geofence_collection(options.collection_name if options else None)
        credentials = self._credentials.ensure()
        validate_geofence_id(geofence_id)

        request = {"GeofenceId": geofence_id, "CollectionName": resource.name}
        response = self._send(GeoAction.GET_GEOFENCE, LocationCommand.GET_GEOFENCE,
                              request, credentials, resource.region)

        return Geofence.model_validate(CaseMapper.to_camel(response))

    def list_geofences(self,
                       options: Union[ListGeofenceOptions, OptionsArg] = None) -> ListGeofenceResults:
        """
        List one page of geofences.

        Pass the returned next_token back as options.next_token for the
        following page.

        Raises:
            MissingConfiguration, AuthFailure, TransportError
        """
        options = coerce_options(options, ListGeofenceOptions)
        resource = self._config.geofence_collection(options.collection_name if options else None)
        credentials = self._credentials.ensure()

        request = {"CollectionName": resource.name}
        if options and options.next_token:
            request["NextToken"] = options.next_token

        response = CaseMapper.to_camel(
            self._send(GeoAction.LIST_GEOFENCES, LocationCommand.LIST_GEOFENCES,
                       request, credentials, resource.region)
        )

        return ListGeofenceResults(
            entries=[Geofence.model_validate(entry) for entry in response.get("entries", [])],
            next_token=response.get("nextToken"),
        )

    def delete_geofences(self,
                         geofence_ids: Union[str, Sequence[str]],
                         options: Union[GeofenceOptions, OptionsArg] = None) -> DeleteGeofencesResults:
        """
        Delete geofences from a collection.

        The provider only reports failed ids; every other id of a batch
        that was accepted counts as deleted.

        Args:
            geofence_ids: One id or a sequence of ids
            options: GeofenceOptions or an equivalent mapping

        Returns:
            successes (deleted ids) and per-id errors

        Raises:
            EmptyInput: If no ids are given
            MissingConfiguration, AuthFailure
            InvalidGeofenceId: Listing every invalid id
        """
        if isinstance(geofence_ids, str):
            geofence_ids = [geofence_ids]
        if not geofence_ids:
            raise EmptyInput("GeofenceId input array is empty")

        options = coerce_options(options, GeofenceOptions)
        resource = self._config.geofence_collection(options.collection_name if options else None)
        credentials = self._credentials.ensure()

        bad_ids = find_invalid_geofence_ids(geofence_ids)
        if bad_ids:
            error_msg = f"Invalid geofence ids: {', '.join(str(geofence_id) for geofence_id in bad_ids)}"
            log_debug(error_msg)
            raise InvalidGeofenceId(error_msg)

        def send_batch(batch: List[str]) -> Dict[str, Any]:
            request = {"CollectionName": resource.name, "GeofenceIds": batch}
            return self._send(GeoAction.DELETE_GEOFENCES, LocationCommand.BATCH_DELETE_GEOFENCE,
                              request, credentials, resource.region)

        return self._batches.execute(
            list(geofence_ids),
            send_batch,
            self._fold_delete_response,
            lambda geofence_id: geofence_id,
            result_type=DeleteGeofencesResults,
        )

    # ==================== HELPERS ====================

    def _send(self,
              action: GeoAction,
              command: LocationCommand,
              request: Dict[str, Any],
              credentials: Credentials,
              region: str) -> Dict[str, Any]:
        context = TransportContext(credentials=credentials, region=region, client_tag=action.client_tag)
        resource = request.get("IndexName") or request.get("CollectionName")
        log_debug(f"{action.client_tag}: {command.name} on {resource} in {region}")
        try:
            return self._transport.send(command, request, context)
        except TransportError as e:
            log_debug(f"{action.value} failed: {e.message}")
            raise

    @staticmethod
    def _require_text(text: str) -> None:
        if not text or not text.strip():
            error_msg = "Search text cannot be empty."
            log_debug(error_msg)
            raise EmptyInput(error_msg)

    @staticmethod
    def _fold_put_response(batch: List[Dict[str, Any]], response: Dict[str, Any]) -> BatchResult:
        response = CaseMapper.to_camel(response)
        return BatchResult(
            successes=[GeofenceBase.model_validate(success) for success in response.get("successes") or []],
            errors=[GeofenceError.model_validate(error) for error in response.get("errors") or []],
        )

    @staticmethod
    def _fold_delete_response(batch: List[str], response: Dict[str, Any]) -> BatchResult:
        errors = [
            GeofenceError.model_validate(error)
            for error in CaseMapper.to_camel(response).get("errors") or []
        ]
        failed_ids = {error.geofence_id for error in errors}
        return BatchResult(
            successes=[geofence_id for geofence_id in batch if geofence_id not in failed_ids],
            errors=errors,
        )
