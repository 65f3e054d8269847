"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class RouteRequest(BaseModel):
    report_ids: List[str] = Field(..., description="Selected report ids, in selection order.")
    persist: bool = Field(default=False, description="Write JSON/CSV/GeoJSON outputs to the data root.")
    requested_by: Optional[str] = Field(default=None, description="Volunteer requesting the route.")
    run_label: Optional[str] = Field(default=None, description="Friendly name for persisted outputs.")


class RouteStopModel(BaseModel):
    report_id: str
    sequence: int
    label: str
    category: str
    latitude: float
    longitude: float
    is_origin: bool
    distance_to_next_km: Optional[float] = None


class RouteLegModel(BaseModel):
    from_report_id: str
    to_report_id: str
    distance_km: float


class RouteResponse(BaseModel):
    stop_count: int
    total_distance_km: float
    stops: List[RouteStopModel]
    legs: List[RouteLegModel]
    path: List[List[float]]
    bounds: Optional[List[List[float]]] = None
    geojson: dict
    metadata: dict
