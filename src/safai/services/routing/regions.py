"""City centroid table and coordinate resolution for report locations."""

from __future__ import annotations

from ...models.domain import Coordinate, ReportLocation

CITY_COORDINATES: dict[str, Coordinate] = {
    "Mumbai": Coordinate(19.0760, 72.8777),
    "Delhi": Coordinate(28.7041, 77.1025),
    "Bengaluru": Coordinate(12.9716, 77.5946),
    "Hyderabad": Coordinate(17.3850, 78.4867),
    "Ahmedabad": Coordinate(23.0225, 72.5714),
    "Chennai": Coordinate(13.0827, 80.2707),
    "Kolkata": Coordinate(22.5726, 88.3639),
    "Surat": Coordinate(21.1702, 72.8311),
    "Pune": Coordinate(18.5204, 73.8567),
    "Jaipur": Coordinate(26.9124, 75.7873),
    "Lucknow": Coordinate(26.8467, 80.9462),
    "Kanpur": Coordinate(26.4499, 80.3319),
    "Nagpur": Coordinate(21.1458, 79.0882),
    "Indore": Coordinate(22.7196, 75.8577),
    "Thane": Coordinate(19.2183, 72.9781),
    "Bhopal": Coordinate(23.2599, 77.4126),
    "Visakhapatnam": Coordinate(17.6868, 83.2185),
    "Patna": Coordinate(25.5941, 85.1376),
    "Vadodara": Coordinate(22.3072, 73.1812),
    "Ghaziabad": Coordinate(28.6692, 77.4538),
    "Ludhiana": Coordinate(30.9010, 75.8573),
    "Agra": Coordinate(27.1767, 78.0081),
    "Nashik": Coordinate(19.9975, 73.7898),
    "Faridabad": Coordinate(28.4089, 77.3178),
    "Rajkot": Coordinate(22.3039, 70.8022),
    "Roorkee": Coordinate(29.8543, 77.8880),
}

CITIES: tuple[str, ...] = tuple(sorted(CITY_COORDINATES))

# Sentinel for locations with neither a GPS fix nor a known city.
UNRESOLVED = Coordinate(0.0, 0.0)


def resolve_coordinate(location: ReportLocation) -> Coordinate:
    """Return a usable coordinate for a report location.

    Precise coordinates win, then the city table. Unknown cities collapse to
    ``(0, 0)`` instead of raising, so routing never fails on a missing fix;
    such stops will produce very long legs.
    """

    if location.coordinate is not None:
        return location.coordinate
    return CITY_COORDINATES.get(location.fallback_region, UNRESOLVED)


def is_unresolved(location: ReportLocation) -> bool:
    return location.coordinate is None and location.fallback_region not in CITY_COORDINATES
