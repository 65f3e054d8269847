"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import MultiPoint

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in kilometres."""

    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def path_bounds(points: Sequence[Coordinate]) -> tuple[tuple[float, float], tuple[float, float]] | None:
    """Return ``((south, west), (north, east))`` enclosing the points, or None when empty.

    Map clients use this to fit the viewport around a route.
    """

    if not points:
        return None
    min_lon, min_lat, max_lon, max_lat = MultiPoint([(p.longitude, p.latitude) for p in points]).bounds
    return (min_lat, min_lon), (max_lat, max_lon)
