"""
Example usage of the geo module.

Searches a place, then saves, reads, lists and deletes a geofence around
it. Needs AWS credentials and the GEO_* variables described in
src/geo/geo_config.py (a .env file works).
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config.config_module import load_config, validate_config
from src.config.logger_module import initialize_logger, log_info, log_error
from src.geo import GeoError, GeoServiceClient


def _square_around(longitude: float, latitude: float, size: float = 0.01):
    """Closed square linear ring centred on a position."""
    half = size / 2
    return [[
        [longitude - half, latitude - half],
        [longitude + half, latitude - half],
        [longitude + half, latitude + half],
        [longitude - half, latitude + half],
        [longitude - half, latitude - half],
    ]]


def run_example(text: str, geofence_id: str) -> None:
    client = GeoServiceClient()

    places = client.search_by_text(text, {"maxResults": 1})
    if not places or not places[0].geometry:
        log_info(f"No place found for '{text}'")
        return

    place = places[0]
    longitude, latitude = place.geometry.point
    log_info(f"Found {place.label} at ({longitude}, {latitude})")

    saved = client.save_geofences([
        {"geofenceId": geofence_id, "geometry": {"polygon": _square_around(longitude, latitude)}}
    ])
    log_info(f"Saved geofences: {saved.to_dict()}")

    geofence = client.get_geofence(geofence_id)
    log_info(f"Geofence {geofence.geofence_id} status: {geofence.status}")

    page = client.list_geofences()
    log_info(f"Collection holds {len(page.entries)} geofences on the first page")

    deleted = client.delete_geofences([geofence_id])
    log_info(f"Deleted geofences: {deleted.to_dict()}")


def main():
    parser = argparse.ArgumentParser(description="Geo module example")
    parser.add_argument("text", help="Text to search for")
    parser.add_argument("--geofence-id", default="geo-example", help="Id of the temporary geofence")
    parser.add_argument("--env", default=".env", help="Path to the .env file")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args()

    load_config(args.env)
    initialize_logger(log_level=args.log_level)

    try:
        validate_config(["GEO_REGION", "GEO_SEARCH_INDEX", "GEO_GEOFENCE_COLLECTION"])
        run_example(args.text, args.geofence_id)
    except GeoError as e:
        log_error(f"{e.code}: {e.message}")
        sys.exit(1)
    except Exception as e:
        log_error(f"Example failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
