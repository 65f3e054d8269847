"""Serializers for route itineraries."""

from __future__ import annotations

import csv
import io

from ..geospatial import path_bounds
from ..routing.models import Itinerary, ItineraryStop


def _stop_to_json(stop: ItineraryStop) -> dict:
    return {
        "report_id": stop.location.id,
        "sequence": stop.sequence,
        "label": stop.location.label,
        "category": stop.location.category,
        "latitude": stop.coordinate.latitude,
        "longitude": stop.coordinate.longitude,
        "is_origin": stop.is_origin,
        "distance_to_next_km": stop.distance_to_next_km,
    }


def itinerary_to_json(itinerary: Itinerary) -> dict:
    bounds = path_bounds(itinerary.path)
    return {
        "stop_count": itinerary.stop_count,
        "total_distance_km": itinerary.total_distance_km,
        "stops": [_stop_to_json(stop) for stop in itinerary.stops],
        "legs": [
            {
                "from_report_id": leg.origin.id,
                "to_report_id": leg.destination.id,
                "distance_km": leg.distance_km,
            }
            for leg in itinerary.legs
        ],
        "path": [list(point.as_tuple()) for point in itinerary.path],
        "bounds": [list(corner) for corner in bounds] if bounds else None,
    }


def itinerary_to_csv(itinerary: Itinerary) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "report_id",
        "label",
        "category",
        "latitude",
        "longitude",
        "distance_to_next_km",
        "total_distance_km",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for stop in itinerary.stops:
        writer.writerow(
            {
                "sequence": stop.sequence,
                "report_id": stop.location.id,
                "label": stop.location.label,
                "category": stop.location.category,
                "latitude": stop.coordinate.latitude,
                "longitude": stop.coordinate.longitude,
                "distance_to_next_km": "" if stop.distance_to_next_km is None else round(stop.distance_to_next_km, 3),
                "total_distance_km": round(itinerary.total_distance_km, 3),
            }
        )
    return buffer.getvalue()
