"""Greedy nearest-neighbour visiting order for selected report locations.

The tour is an open path built one stop at a time: start at the first
selected location, then always move to the closest location not yet visited.
This is an O(n^2) heuristic and does not find the shortest possible path;
the start is simply the first element of the selection.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Sequence

from ...config import settings
from ...models.domain import Coordinate, ReportLocation
from ..geospatial import distance_km
from .regions import UNRESOLVED, resolve_coordinate

logger = logging.getLogger(__name__)

MIN_ROUTE_STOPS = 2

Resolver = Callable[[ReportLocation], Coordinate]


class InsufficientSelection(ValueError):
    """Raised when fewer than two distinct locations are selected."""


class SelectionTooLarge(ValueError):
    """Raised when a selection exceeds the configured stop limit."""


def _distinct(selection: Sequence[ReportLocation]) -> list[ReportLocation]:
    seen: set[str] = set()
    unique: list[ReportLocation] = []
    for location in selection:
        if location.id in seen:
            continue
        seen.add(location.id)
        unique.append(location)
    return unique


def optimize_route(
    selection: Sequence[ReportLocation],
    *,
    resolver: Resolver = resolve_coordinate,
    max_stops: int | None = None,
) -> list[ReportLocation]:
    """Order ``selection`` by greedy nearest neighbour.

    Args:
        selection: Locations in the order the caller selected them. Repeated
            ids are ignored after their first occurrence.
        resolver: Maps a location to a coordinate; must be total.
        max_stops: Upper bound on distinct locations (defaults to settings).

    Returns:
        A new list holding every distinct location exactly once, starting
        with the first one selected.

    Raises:
        InsufficientSelection: fewer than two distinct locations.
        SelectionTooLarge: more than ``max_stops`` distinct locations.
    """
    locations = _distinct(selection)
    if len(locations) < MIN_ROUTE_STOPS:
        raise InsufficientSelection(
            f"At least {MIN_ROUTE_STOPS} distinct reports are required to build a route; got {len(locations)}."
        )
    limit = max_stops if max_stops is not None else settings.route_max_stops
    if len(locations) > limit:
        raise SelectionTooLarge(f"Route requests are limited to {limit} reports; got {len(locations)}.")

    coordinates = {location.id: resolver(location) for location in locations}
    for location in locations:
        if location.coordinate is None and coordinates[location.id] == UNRESOLVED:
            logger.warning(
                f"Report {location.id} has no coordinate and unknown region '{location.fallback_region}'; "
                "routing it at (0, 0)"
            )

    current = locations[0]
    route = [current]
    # list keeps insertion order so ties resolve to the earliest selected candidate
    unvisited = locations[1:]

    while unvisited:
        origin = coordinates[current.id]
        nearest_index = 0
        min_dist = math.inf
        for index, candidate in enumerate(unvisited):
            dist = distance_km(origin, coordinates[candidate.id])
            if dist < min_dist:
                min_dist = dist
                nearest_index = index
        current = unvisited.pop(nearest_index)
        route.append(current)

    logger.debug(f"Ordered {len(route)} stops: {[location.id for location in route]}")
    return route
