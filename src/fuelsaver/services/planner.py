from __future__ import annotations

import logging
from dataclasses import dataclass

from django.conf import settings

from fuelsaver.schemas import (
    Coordinate,
    FuelPlanResponse,
    RefuelPointResponse,
    RoutePointResponse,
    RouteResponse,
    RouteSegmentResponse,
    StateAlertResponse,
    StationResponse,
    TripPlanRequest,
    TripPlanResponse,
)
from fuelsaver.services.fuel_planning import plan_fuel
from fuelsaver.services.geocoding import GeocodingClient
from fuelsaver.services.osrm import OsrmClient
from fuelsaver.services.reference import ReferenceTables
from fuelsaver.services.segmentation import segment_route
from fuelsaver.services.types import FuelPlan, FuelType, GeocodeResult, Route, Station

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class PlannedTrip:
    start: GeocodeResult
    finish: GeocodeResult
    fuel_type: FuelType
    mileage: float
    tank_capacity: float
    current_fuel: float
    route: Route
    fuel_plan: FuelPlan


class TripPlannerService:
    def __init__(
        self,
        geocoding_client: GeocodingClient | None = None,
        osrm_client: OsrmClient | None = None,
        reference_tables: ReferenceTables | None = None,
    ) -> None:
        self.geocoding_client = geocoding_client or GeocodingClient()
        self.osrm_client = osrm_client or OsrmClient()
        self.reference_tables = reference_tables

    def build_trip(self, request: TripPlanRequest) -> PlannedTrip:
        fuel_type: FuelType = request.fuel_type or settings.DEFAULT_FUEL_TYPE
        mileage = request.mileage_km_per_liter or float(settings.DEFAULT_MILEAGE_KM_PER_LITER)
        tank_capacity = request.tank_capacity_liters or float(settings.DEFAULT_TANK_CAPACITY_LITERS)
        current_fuel = (
            request.current_fuel_liters
            if request.current_fuel_liters is not None
            else float(settings.DEFAULT_CURRENT_FUEL_LITERS)
        )

        # Reloaded per request unless injected, so admin edits apply immediately.
        tables = self.reference_tables or ReferenceTables.from_database()

        start = self.geocoding_client.geocode(request.start_location)
        finish = self.geocoding_client.geocode(request.finish_location)
        path = self.osrm_client.route(start.point, finish.point)

        route = segment_route(
            path.points,
            path.distance_km,
            mileage,
            tables.classifier,
            sample_distance_km=float(settings.SEGMENT_SAMPLE_DISTANCE_KM),
            min_samples=int(settings.SEGMENT_MIN_SAMPLES),
        )
        fuel_plan = plan_fuel(
            route,
            fuel_type,
            tank_capacity,
            current_fuel,
            tables.prices,
            tables.stations,
            safety_buffer_liters=float(settings.REFUEL_SAFETY_BUFFER_LITERS),
            currency_symbol=settings.CURRENCY_SYMBOL,
        )
        logger.info(
            "Planned %s -> %s: %.1f km across %d states, feasible=%s, cost %.2f",
            request.start_location,
            request.finish_location,
            route.total_distance_km,
            len(route.states),
            fuel_plan.is_feasible,
            fuel_plan.total_cost,
        )
        return PlannedTrip(
            start=start,
            finish=finish,
            fuel_type=fuel_type,
            mileage=mileage,
            tank_capacity=tank_capacity,
            current_fuel=current_fuel,
            route=route,
            fuel_plan=fuel_plan,
        )

    def plan(self, request: TripPlanRequest) -> TripPlanResponse:
        trip = self.build_trip(request)
        route = trip.route
        fuel_plan = trip.fuel_plan

        route_response = RouteResponse(
            points=[
                RoutePointResponse(
                    latitude=round(point.latitude, 6),
                    longitude=round(point.longitude, 6),
                    state=point.state,
                    distance_from_start_km=round(point.distance_from_start_km, 3),
                )
                for point in route.points
            ],
            segments=[
                RouteSegmentResponse(
                    start_state=segment.start_state,
                    end_state=segment.end_state,
                    distance_km=round(segment.distance_km, 3),
                    fuel_needed_liters=round(segment.fuel_needed_liters, 3),
                )
                for segment in route.segments
            ],
            states=list(route.states),
            total_distance_km=round(route.total_distance_km, 3),
            total_fuel_needed_liters=round(route.total_fuel_needed_liters, 3),
        )

        plan_response = FuelPlanResponse(
            is_feasible=fuel_plan.is_feasible,
            error_message=fuel_plan.error_message,
            total_cost=round(fuel_plan.total_cost, 2),
            refuel_points=[
                RefuelPointResponse(
                    state=point.state,
                    action=point.action,
                    amount_liters=round(point.amount_liters, 3),
                    price_per_liter=round(point.price_per_liter, 2),
                    total_cost=round(point.total_cost, 2),
                    fuel_before_liters=round(point.fuel_before_liters, 3),
                    fuel_after_liters=round(point.fuel_after_liters, 3),
                    stations=[_station_response(station) for station in point.candidate_stations],
                )
                for point in fuel_plan.refuel_points
            ],
            alerts=[
                StateAlertResponse(
                    from_state=alert.from_state,
                    to_state=alert.to_state,
                    message=alert.message,
                    action=alert.action,
                    savings=round(alert.savings, 2),
                )
                for alert in fuel_plan.alerts
            ],
        )

        return TripPlanResponse(
            start=Coordinate(
                latitude=round(trip.start.point.latitude, 6),
                longitude=round(trip.start.point.longitude, 6),
            ),
            finish=Coordinate(
                latitude=round(trip.finish.point.latitude, 6),
                longitude=round(trip.finish.point.longitude, 6),
            ),
            fuel_type=trip.fuel_type,
            route=route_response,
            fuel_plan=plan_response,
            route_geojson={
                "type": "LineString",
                "coordinates": [[point.longitude, point.latitude] for point in route.points],
            },
            assumptions={
                "mileage_km_per_liter": trip.mileage,
                "tank_capacity_liters": trip.tank_capacity,
                "current_fuel_liters": trip.current_fuel,
                "safety_buffer_liters": float(settings.REFUEL_SAFETY_BUFFER_LITERS),
            },
        )


def _station_response(station: Station) -> StationResponse:
    return StationResponse(
        station_id=station.station_id,
        name=station.name,
        brand=station.brand,
        state=station.state,
        address=station.address,
        hours=station.hours,
        phone=station.phone,
        latitude=station.coords.latitude,
        longitude=station.coords.longitude,
    )
