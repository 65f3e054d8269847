"""Turn an ordered route into a renderable itinerary."""

from __future__ import annotations

from typing import Protocol, Sequence

from ...models.domain import Coordinate, ReportLocation
from ..geospatial import distance_km
from .models import Itinerary, ItineraryStop, RouteLeg
from .optimizer import Resolver
from .regions import resolve_coordinate


class MapRenderer(Protocol):
    """Drawing capability of a map backend."""

    def draw_path(self, points: Sequence[Coordinate]) -> None: ...

    def place_marker(self, point: Coordinate, label: str, is_origin: bool) -> None: ...


def build_itinerary(route: Sequence[ReportLocation], *, resolver: Resolver = resolve_coordinate) -> Itinerary:
    """Compute per-leg distances and the stop list for an ordered route.

    Empty and single-stop routes produce an itinerary without legs.
    """

    path = [resolver(location) for location in route]
    legs = [
        RouteLeg(origin=route[i], destination=route[i + 1], distance_km=distance_km(path[i], path[i + 1]))
        for i in range(len(route) - 1)
    ]
    stops = [
        ItineraryStop(
            location=location,
            index=index,
            coordinate=path[index],
            is_origin=index == 0,
            distance_to_next_km=legs[index].distance_km if index < len(legs) else None,
        )
        for index, location in enumerate(route)
    ]
    return Itinerary(stops=stops, legs=legs, path=path)


def marker_label(stop: ItineraryStop) -> str:
    return f"Stop #{stop.sequence}: {stop.location.label}"


def render_itinerary(itinerary: Itinerary, renderer: MapRenderer) -> None:
    """Place a marker per stop and connect them when there is more than one."""

    for stop in itinerary.stops:
        renderer.place_marker(stop.coordinate, marker_label(stop), stop.is_origin)
    if len(itinerary.path) > 1:
        renderer.draw_path(list(itinerary.path))
