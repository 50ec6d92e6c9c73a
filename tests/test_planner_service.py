from __future__ import annotations

import pytest

from fuelsaver.schemas import TripPlanRequest
from fuelsaver.services.planner import TripPlannerService
from fuelsaver.services.types import GeocodeResult, GeoPoint, PathData

HYDERABAD = GeoPoint(latitude=17.385044, longitude=78.486671)
BHOPAL = GeoPoint(latitude=23.2599, longitude=77.4126)


def _straight_path(start: GeoPoint, finish: GeoPoint, count: int = 200) -> list[GeoPoint]:
    return [
        GeoPoint(
            latitude=start.latitude + (finish.latitude - start.latitude) * index / (count - 1),
            longitude=start.longitude + (finish.longitude - start.longitude) * index / (count - 1),
        )
        for index in range(count)
    ]


@pytest.fixture
def planner(mocker, reference_tables) -> TripPlannerService:
    geocoder = mocker.Mock()
    geocoder.geocode.side_effect = lambda query: {
        "Hyderabad": GeocodeResult(point=HYDERABAD, country_code="in"),
        "Bhopal": GeocodeResult(point=BHOPAL, country_code="in"),
    }[query]
    osrm = mocker.Mock()
    osrm.route.return_value = PathData(
        points=_straight_path(HYDERABAD, BHOPAL),
        distance_km=780.0,
        duration_seconds=36000.0,
    )
    return TripPlannerService(
        geocoding_client=geocoder, osrm_client=osrm, reference_tables=reference_tables
    )


def test_trip_runs_from_start_state_to_destination_state(planner) -> None:
    trip = planner.build_trip(
        TripPlanRequest(start_location="Hyderabad", finish_location="Bhopal")
    )

    route = trip.route
    assert route.points[0].state == "Telangana"
    assert route.points[-1].state == "Madhya Pradesh"
    assert route.states[0] == "Telangana"
    assert route.total_distance_km == pytest.approx(780.0)
    assert sum(segment.distance_km for segment in route.segments) == pytest.approx(780.0)
    planner.osrm_client.route.assert_called_once_with(HYDERABAD, BHOPAL)


def test_missing_vehicle_values_use_configured_defaults(planner, settings) -> None:
    settings.DEFAULT_FUEL_TYPE = "diesel"
    settings.DEFAULT_MILEAGE_KM_PER_LITER = 4
    settings.DEFAULT_TANK_CAPACITY_LITERS = 200
    settings.DEFAULT_CURRENT_FUEL_LITERS = 50

    trip = planner.build_trip(
        TripPlanRequest(start_location="Hyderabad", finish_location="Bhopal")
    )

    assert (trip.fuel_type, trip.mileage, trip.tank_capacity, trip.current_fuel) == (
        "diesel",
        4.0,
        200.0,
        50.0,
    )
    assert trip.route.total_fuel_needed_liters == pytest.approx(195.0)


def test_empty_tank_is_not_replaced_by_default(planner) -> None:
    trip = planner.build_trip(
        TripPlanRequest(
            start_location="Hyderabad", finish_location="Bhopal", current_fuel_liters=0
        )
    )

    assert trip.current_fuel == 0.0


def test_plan_response_is_consistent(planner) -> None:
    response = planner.plan(
        TripPlanRequest(
            start_location="Hyderabad",
            finish_location="Bhopal",
            fuel_type="diesel",
            mileage_km_per_liter=4,
            tank_capacity_liters=200,
            current_fuel_liters=50,
        )
    )

    fuel_plan = response.fuel_plan
    assert fuel_plan.is_feasible is True
    assert fuel_plan.error_message is None
    assert fuel_plan.total_cost == pytest.approx(
        sum(point.total_cost for point in fuel_plan.refuel_points), abs=0.05
    )
    for point in fuel_plan.refuel_points:
        assert point.fuel_after_liters <= 200.0
        assert all(station.state == point.state for station in point.stations)

    assert response.start.latitude == pytest.approx(HYDERABAD.latitude)
    assert response.route_geojson["type"] == "LineString"
    assert response.route_geojson["coordinates"][0] == [
        HYDERABAD.longitude,
        HYDERABAD.latitude,
    ]
    assert len(response.route_geojson["coordinates"]) == len(response.route.points)
    assert response.assumptions["tank_capacity_liters"] == 200.0
    assert response.assumptions["safety_buffer_liters"] == 5.0


def test_small_tank_reports_infeasible_plan(planner) -> None:
    response = planner.plan(
        TripPlanRequest(
            start_location="Hyderabad",
            finish_location="Bhopal",
            mileage_km_per_liter=2,
            tank_capacity_liters=20,
            current_fuel_liters=20,
        )
    )

    assert response.fuel_plan.is_feasible is False
    assert "tank capacity is only 20 liters" in response.fuel_plan.error_message
    assert response.fuel_plan.refuel_points == []
    assert response.route.states[0] == "Telangana"
