from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TripPlanRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start_location: str = Field(min_length=2, max_length=300)
    finish_location: str = Field(min_length=2, max_length=300)
    fuel_type: Literal["petrol", "diesel"] | None = None
    mileage_km_per_liter: float | None = Field(default=None, gt=0.0, le=100.0)
    tank_capacity_liters: float | None = Field(default=None, gt=0.0, le=2000.0)
    current_fuel_liters: float | None = Field(default=None, ge=0.0, le=2000.0)


class Coordinate(BaseModel):
    latitude: float
    longitude: float


class RoutePointResponse(BaseModel):
    latitude: float
    longitude: float
    state: str
    distance_from_start_km: float


class RouteSegmentResponse(BaseModel):
    start_state: str
    end_state: str
    distance_km: float
    fuel_needed_liters: float


class RouteResponse(BaseModel):
    points: list[RoutePointResponse]
    segments: list[RouteSegmentResponse]
    states: list[str]
    total_distance_km: float
    total_fuel_needed_liters: float


class StationResponse(BaseModel):
    station_id: str
    name: str
    brand: str
    state: str
    address: str
    hours: str
    phone: str
    latitude: float
    longitude: float


class RefuelPointResponse(BaseModel):
    state: str
    action: Literal["fill", "wait", "destination"]
    amount_liters: float
    price_per_liter: float
    total_cost: float
    fuel_before_liters: float
    fuel_after_liters: float
    stations: list[StationResponse]


class StateAlertResponse(BaseModel):
    from_state: str
    to_state: str
    message: str
    action: Literal["fill", "wait", "neutral"]
    savings: float


class FuelPlanResponse(BaseModel):
    is_feasible: bool
    error_message: str | None = None
    total_cost: float
    refuel_points: list[RefuelPointResponse]
    alerts: list[StateAlertResponse]


class TripPlanResponse(BaseModel):
    start: Coordinate
    finish: Coordinate
    fuel_type: Literal["petrol", "diesel"]
    route: RouteResponse
    fuel_plan: FuelPlanResponse
    route_geojson: dict
    assumptions: dict[str, float]


class StatePriceResponse(BaseModel):
    state: str
    fuel_type: Literal["petrol", "diesel"]
    price_per_liter: float
    station_count: int
