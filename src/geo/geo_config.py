"""
Geo resource configuration.

A config provider is any zero-argument callable returning a GeoConfig
(or None when nothing is configured). ConfigResolver calls it on every
resolution so configuration changed between calls is honoured.
"""

from typing import Callable, Dict, NamedTuple, Optional

from pydantic import ValidationError

from ..config.config_module import ConfigError, get_config, get_json_config
from ..config.logger_module import log_debug
from .geo_errors import MissingConfiguration
from .geo_models import GeoModel


class MapItem(GeoModel):
    style: str


class MapsConfig(GeoModel):
    default: Optional[str] = None
    items: Dict[str, MapItem] = {}


class DefaultResource(GeoModel):
    default: Optional[str] = None


class GeoConfig(GeoModel):
    """Process-wide Geo configuration."""
    region: str
    maps: Optional[MapsConfig] = None
    search_indices: Optional[DefaultResource] = None
    geofence_collections: Optional[DefaultResource] = None


ConfigProvider = Callable[[], Optional[GeoConfig]]


class ResolvedResource(NamedTuple):
    region: str
    name: str


class EnvGeoConfigProvider:
    """
    Builds a GeoConfig from environment variables on every call.

    Variables:
        GEO_REGION: Provider region (required)
        GEO_SEARCH_INDEX: Default search index name
        GEO_GEOFENCE_COLLECTION: Default geofence collection name
        GEO_MAPS: JSON object {"default": name, "items": {name: {"style": ...}}}
    """

    def __call__(self) -> Optional[GeoConfig]:
        region = get_config("GEO_REGION")
        if not region:
            return None

        try:
            maps = get_json_config("GEO_MAPS")
            return GeoConfig(
                region=region,
                maps=maps,
                search_indices=DefaultResource(default=get_config("GEO_SEARCH_INDEX")),
                geofence_collections=DefaultResource(default=get_config("GEO_GEOFENCE_COLLECTION")),
            )
        except (ConfigError, ValidationError) as e:
            raise MissingConfiguration(f"Geo configuration is malformed: {e}") from e


_NO_CONFIG_MSG = "No Geo configuration found, set GEO_REGION and the Geo resource variables"


class ConfigResolver:
    """Resolves region and resource names from overrides or configured defaults."""

    def __init__(self, config_provider: ConfigProvider):
        self._config_provider = config_provider

    def current(self) -> GeoConfig:
        """
        Read the configuration fresh.

        Raises:
            MissingConfiguration: If the provider returns nothing
        """
        config = self._config_provider()
        if config is None:
            log_debug(_NO_CONFIG_MSG)
            raise MissingConfiguration(_NO_CONFIG_MSG)
        return config

    def search_index(self, override: Optional[str] = None) -> ResolvedResource:
        """
        Args:
            override: Per-call search index name

        Returns:
            Region and search index name

        Raises:
            MissingConfiguration: If there is no override and no default index
        """
        config = self.current()
        if override:
            return ResolvedResource(region=config.region, name=override)
        if config.search_indices and config.search_indices.default:
            return ResolvedResource(region=config.region, name=config.search_indices.default)

        error_msg = "No Search Index found in Geo configuration and no searchIndexName given"
        log_debug(error_msg)
        raise MissingConfiguration(error_msg)

    def geofence_collection(self, override: Optional[str] = None) -> ResolvedResource:
        """
        Args:
            override: Per-call geofence collection name

        Returns:
            Region and geofence collection name

        Raises:
            MissingConfiguration: If there is no override and no default collection
        """
        config = self.current()
        if override:
            return ResolvedResource(region=config.region, name=override)
        if config.geofence_collections and config.geofence_collections.default:
            return ResolvedResource(region=config.region, name=config.geofence_collections.default)

        error_msg = "No Geofence Collection found in Geo configuration and no collectionName given"
        log_debug(error_msg)
        raise MissingConfiguration(error_msg)

    def map_config(self) -> GeoConfig:
        """
        Read the configuration, requiring map resources with a default.

        Raises:
            MissingConfiguration: If no maps or no default map are configured
        """
        config = self.current()
        if not config.maps or not config.maps.items:
            error_msg = "No map resources found in Geo configuration"
            log_debug(error_msg)
            raise MissingConfiguration(error_msg)
        if not config.maps.default:
            error_msg = "No default map resource found in Geo configuration"
            log_debug(error_msg)
            raise MissingConfiguration(error_msg)
        return config
