"""GeoJSON export of route itineraries."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from shapely.geometry import LineString, Point, mapping

from ...models.domain import Coordinate
from ..routing.models import Itinerary
from ..routing.presentation import render_itinerary

ORIGIN_COLOR = "#10b981"
WAYPOINT_COLOR = "#3b82f6"
PATH_COLOR = "#6366f1"


class GeoJSONRenderer:
    """Map renderer that collects markers and the route path as GeoJSON features.

    GeoJSON positions are ``[longitude, latitude]``.
    """

    def __init__(self) -> None:
        self.features: List[Dict[str, Any]] = []

    def place_marker(self, point: Coordinate, label: str, is_origin: bool) -> None:
        self.features.append(
            {
                "type": "Feature",
                "geometry": mapping(Point(point.longitude, point.latitude)),
                "properties": {
                    "label": label,
                    "marker": "origin" if is_origin else "waypoint",
                    "color": ORIGIN_COLOR if is_origin else WAYPOINT_COLOR,
                },
            }
        )

    def draw_path(self, points: Sequence[Coordinate]) -> None:
        line = LineString([(p.longitude, p.latitude) for p in points])
        self.features.append(
            {
                "type": "Feature",
                "geometry": mapping(line),
                "properties": {
                    "label": "route",
                    "color": PATH_COLOR,
                    "wkt": line.wkt,
                },
            }
        )

    def feature_collection(self) -> Dict[str, Any]:
        return {"type": "FeatureCollection", "features": self.features}


def itinerary_to_geojson(itinerary: Itinerary) -> Dict[str, Any]:
    """Render an itinerary into a GeoJSON FeatureCollection."""

    renderer = GeoJSONRenderer()
    render_itinerary(itinerary, renderer)
    collection = renderer.feature_collection()
    collection["properties"] = {
        "stopCount": itinerary.stop_count,
        "totalDistanceKm": round(itinerary.total_distance_km, 3),
    }
    return collection


def save_geojson(collection: Dict[str, Any], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(collection, f, indent=2, ensure_ascii=False)
