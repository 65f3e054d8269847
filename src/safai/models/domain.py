"""Domain models for waste reports and routable report locations."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ReportStatus(str, Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"
    COLLECTED = "COLLECTED"


class UserRole(str, Enum):
    CITIZEN = "Citizen"
    VOLUNTEER = "Volunteer"
    ADMIN = "Admin"


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class ReportLocation:
    """A report reduced to what the routing core needs.

    ``coordinate`` is the precise GPS fix when the reporter shared one;
    otherwise ``fallback_region`` (a city name) is used to place the stop.
    """

    id: str
    coordinate: Optional[Coordinate]
    fallback_region: str
    label: str
    category: str = "Unspecified"
