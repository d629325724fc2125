"""
Local validation of geofence input, run before any provider call.
"""

import math
import re
from collections import Counter
from typing import Any, List, Mapping, Sequence, Union

from pydantic import ValidationError

from ..config.logger_module import log_debug, log_warning
from .geo_errors import InvalidGeofenceId, InvalidPolygon
from .geo_models import GeofenceInput

# Unicode letters and digits, hyphen, period and underscore
_GEOFENCE_ID_PATTERN = re.compile(r"[\w.\-]+")

MIN_RING_POSITIONS = 4


def is_valid_geofence_id(geofence_id: Any) -> bool:
    return isinstance(geofence_id, str) and bool(_GEOFENCE_ID_PATTERN.fullmatch(geofence_id))


def validate_geofence_id(geofence_id: Any) -> None:
    """
    Raises:
        InvalidGeofenceId: If the id is empty or has unsupported characters
    """
    if not is_valid_geofence_id(geofence_id):
        error_msg = (
            f"Invalid geofenceId: '{geofence_id}' - IDs can only contain "
            "alphanumeric characters, hyphens, underscores and periods."
        )
        log_debug(error_msg)
        raise InvalidGeofenceId(error_msg, geofence_id=geofence_id if isinstance(geofence_id, str) else None)


def _is_position(position: Any) -> bool:
    if not isinstance(position, (list, tuple)) or len(position) != 2:
        return False
    return all(
        isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
        for value in position
    )


def _polygon_error(geofence_id: str, reason: str) -> InvalidPolygon:
    error_msg = f"Geofence '{geofence_id}' has an invalid polygon: {reason}"
    log_debug(error_msg)
    return InvalidPolygon(error_msg, geofence_id=geofence_id)


def validate_polygon(polygon: Any, geofence_id: str) -> None:
    """
    Check the ring structure of a polygon.

    Each linear ring needs at least four positions, every position must be
    a pair of finite numbers and the ring must be closed (first position
    equals last). Coordinate ranges are not checked.

    Raises:
        InvalidPolygon: On the first violation found
    """
    if not isinstance(polygon, (list, tuple)):
        raise _polygon_error(geofence_id, "polygon must be a sequence of linear rings")
    if len(polygon) < 1:
        raise _polygon_error(geofence_id, "polygon is empty")

    for index, ring in enumerate(polygon):
        if not isinstance(ring, (list, tuple)):
            raise _polygon_error(geofence_id, f"linear ring {index} is not a sequence")
        if len(ring) < MIN_RING_POSITIONS:
            raise _polygon_error(
                geofence_id,
                f"linear ring {index} must contain {MIN_RING_POSITIONS} or more coordinates"
            )
        for position in ring:
            if not _is_position(position):
                raise _polygon_error(
                    geofence_id,
                    f"linear ring {index} has a malformed coordinate {position!r}"
                )
        if list(ring[0]) != list(ring[-1]):
            raise _polygon_error(
                geofence_id,
                f"linear ring {index} first and last coordinates are not the same"
            )


def _as_geofence_input(geofence: Union[GeofenceInput, Mapping[str, Any]]) -> GeofenceInput:
    if isinstance(geofence, GeofenceInput):
        validate_geofence_id(geofence.geofence_id)
        validate_polygon(geofence.geometry.polygon, geofence.geofence_id)
        return geofence

    if not isinstance(geofence, Mapping):
        error_msg = f"Invalid geofence input: {geofence!r} is not a geofence mapping"
        log_debug(error_msg)
        raise InvalidGeofenceId(error_msg)

    geofence_id = geofence.get("geofenceId", geofence.get("geofence_id"))
    validate_geofence_id(geofence_id)

    geometry = geofence.get("geometry")
    if not geometry:
        raise _polygon_error(geofence_id, "geometry is missing")
    if not isinstance(geometry, Mapping):
        raise _polygon_error(geofence_id, "geometry must be a mapping with a polygon")
    polygon = geometry.get("polygon")
    if polygon is None:
        raise _polygon_error(geofence_id, "geometry.polygon is missing")
    validate_polygon(polygon, geofence_id)

    try:
        return GeofenceInput.model_validate(
            {"geofenceId": geofence_id, "geometry": {"polygon": polygon}}
        )
    except ValidationError as e:
        raise _polygon_error(geofence_id, str(e)) from e


def validate_geofences_input(
        geofences: Sequence[Union[GeofenceInput, Mapping[str, Any]]]) -> List[GeofenceInput]:
    """
    Validate every geofence of a save request.

    Duplicate ids are submitted as given; they are only reported in the
    log.

    Returns:
        The geofences as GeofenceInput models, in input order

    Raises:
        InvalidGeofenceId: On a bad id
        InvalidPolygon: On missing or malformed geometry
    """
    validated = [_as_geofence_input(geofence) for geofence in geofences]

    duplicates = sorted(
        geofence_id
        for geofence_id, count in Counter(g.geofence_id for g in validated).items()
        if count > 1
    )
    if duplicates:
        log_warning(f"Duplicate geofence ids in one request: {', '.join(duplicates)}")

    return validated


def find_invalid_geofence_ids(geofence_ids: Sequence[Any]) -> List[Any]:
    """Return the ids that fail validate_geofence_id, in input order."""
    return [geofence_id for geofence_id in geofence_ids if not is_valid_geofence_id(geofence_id)]
