from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

FuelType = Literal["petrol", "diesel"]
AlertAction = Literal["fill", "wait", "neutral"]
RefuelAction = Literal["fill", "wait", "destination"]
NotificationType = Literal["initial", "upcoming", "arrived", "alert"]

FUEL_TYPES: tuple[str, ...] = ("petrol", "diesel")


@dataclass(slots=True, frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class GeocodeResult:
    point: GeoPoint
    country_code: str


@dataclass(slots=True, frozen=True)
class PathData:
    """Raw driving path as returned by the routing backend, in path order."""

    points: list[GeoPoint]
    distance_km: float
    duration_seconds: float


@dataclass(slots=True, frozen=True)
class RoutePoint:
    latitude: float
    longitude: float
    state: str
    distance_from_start_km: float


@dataclass(slots=True, frozen=True)
class RouteSegment:
    start_state: str
    end_state: str
    distance_km: float
    fuel_needed_liters: float


@dataclass(slots=True, frozen=True)
class Route:
    points: tuple[RoutePoint, ...]
    segments: tuple[RouteSegment, ...]
    states: tuple[str, ...]
    total_distance_km: float
    total_fuel_needed_liters: float


@dataclass(slots=True, frozen=True)
class StateFuelPrice:
    state: str
    petrol_price_per_liter: float
    diesel_price_per_liter: float
    reference_center: GeoPoint

    def price_for(self, fuel_type: FuelType) -> float:
        if fuel_type == "diesel":
            return self.diesel_price_per_liter
        return self.petrol_price_per_liter


@dataclass(slots=True, frozen=True)
class Station:
    station_id: str
    name: str
    brand: str
    state: str
    address: str
    hours: str
    phone: str
    coords: GeoPoint


@dataclass(slots=True, frozen=True)
class RefuelPoint:
    state: str
    amount_liters: float
    price_per_liter: float
    total_cost: float
    candidate_stations: tuple[Station, ...]
    action: RefuelAction
    fuel_before_liters: float
    fuel_after_liters: float


@dataclass(slots=True, frozen=True)
class StateAlert:
    from_state: str
    to_state: str
    message: str
    action: AlertAction
    savings: float


@dataclass(slots=True, frozen=True)
class FuelPlan:
    refuel_points: tuple[RefuelPoint, ...]
    alerts: tuple[StateAlert, ...]
    total_cost: float
    is_feasible: bool
    error_message: str | None = None


@dataclass(slots=True, frozen=True)
class JourneyPosition:
    latitude: float
    longitude: float
    state: str
    distance_from_start_km: float
    index: int


@dataclass(slots=True, frozen=True)
class JourneyNotification:
    notification_id: str
    type: NotificationType
    title: str
    message: str
    timestamp: datetime
