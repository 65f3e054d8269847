"""Export services."""

from .geojson import GeoJSONRenderer, itinerary_to_geojson, save_geojson

__all__ = [
    "GeoJSONRenderer",
    "itinerary_to_geojson",
    "save_geojson",
]
