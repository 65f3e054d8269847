"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ...models.domain import Coordinate, ReportLocation


@dataclass(slots=True)
class RouteLeg:
    origin: ReportLocation
    destination: ReportLocation
    distance_km: float


@dataclass(slots=True)
class ItineraryStop:
    location: ReportLocation
    index: int
    coordinate: Coordinate
    is_origin: bool
    distance_to_next_km: Optional[float]

    @property
    def sequence(self) -> int:
        """One-based stop number as shown on map markers."""
        return self.index + 1


@dataclass(slots=True)
class Itinerary:
    stops: List[ItineraryStop] = field(default_factory=list)
    legs: List[RouteLeg] = field(default_factory=list)
    path: List[Coordinate] = field(default_factory=list)

    @property
    def total_distance_km(self) -> float:
        return sum(leg.distance_km for leg in self.legs)

    @property
    def stop_count(self) -> int:
        return len(self.stops)
