"""
Translation of search options into the provider's request fields.
"""

from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from ..config.logger_module import log_debug
from .geo_errors import InvalidOptions
from .geo_models import GeoModel, SearchByCoordinatesOptions, SearchByTextOptions


OptionsT = TypeVar("OptionsT", bound=GeoModel)

# Option attribute -> provider request field
_TEXT_OPTION_FIELDS = {
    "countries": "FilterCountries",
    "max_results": "MaxResults",
    "language": "Language",
    "categories": "FilterCategories",
    "bias_position": "BiasPosition",
    "search_area_constraints": "FilterBBox",
}


def coerce_options(options: Union[OptionsT, Mapping[str, Any], None],
                   model: Type[OptionsT]) -> Optional[OptionsT]:
    """Accept an options model, a camelCase/snake_case mapping or None."""
    if options is None or isinstance(options, model):
        return options
    return model.model_validate(dict(options))


class OptionMapper:
    """Builds the optional part of search requests."""

    @staticmethod
    def map_text_options(options: Optional[SearchByTextOptions]) -> Dict[str, Any]:
        """
        Map text/suggestion search options to provider fields.

        Args:
            options: Search options, may be None

        Returns:
            Provider request fields; unset options are left out

        Raises:
            InvalidOptions: If both bias_position and search_area_constraints are set
        """
        if options is None:
            return {}

        if options.bias_position is not None and options.search_area_constraints is not None:
            error_msg = (
                "BiasPosition and SearchAreaConstraints are mutually exclusive, "
                "please remove one or the other from the options object"
            )
            log_debug(error_msg)
            raise InvalidOptions(error_msg)

        request = {}
        for attribute, provider_field in _TEXT_OPTION_FIELDS.items():
            value = getattr(options, attribute)
            if value is not None:
                request[provider_field] = list(value) if isinstance(value, tuple) else value
        return request

    @staticmethod
    def map_coordinates_options(options: Optional[SearchByCoordinatesOptions]) -> Dict[str, Any]:
        """Map reverse-geocoding options; only max_results is sent."""
        if options is None or options.max_results is None:
            return {}
        return {"MaxResults": options.max_results}
