from __future__ import annotations

import pytest

from fuelsaver.exceptions import InvalidInputError
from fuelsaver.services.segmentation import segment_route
from fuelsaver.services.types import GeoPoint


def _path(count: int, lon_step: float = 0.2) -> list[GeoPoint]:
    return [GeoPoint(latitude=20.0, longitude=index * lon_step) for index in range(count)]


def _west_east(point: GeoPoint) -> str:
    return "West" if point.longitude < 9.0 else "East"


def test_state_change_splits_route_at_last_point_in_old_state() -> None:
    route = segment_route(_path(100), total_distance_km=500.0, mileage=5.0, classify=_west_east)

    assert route.states == ("West", "East")
    assert len(route.segments) == 2

    border, tail = route.segments
    assert (border.start_state, border.end_state) == ("West", "East")
    assert border.distance_km == pytest.approx(200.0)
    assert border.fuel_needed_liters == pytest.approx(40.0)
    assert (tail.start_state, tail.end_state) == ("East", "East")
    assert tail.distance_km == pytest.approx(300.0)
    assert route.total_fuel_needed_liters == pytest.approx(100.0)


def test_destination_point_is_always_included() -> None:
    path = _path(100)
    route = segment_route(path, total_distance_km=500.0, mileage=5.0, classify=_west_east)

    last = route.points[-1]
    assert (last.latitude, last.longitude) == (path[-1].latitude, path[-1].longitude)
    assert last.distance_from_start_km == 500.0


def test_distance_from_start_never_decreases() -> None:
    route = segment_route(_path(357), total_distance_km=731.0, mileage=3.5, classify=_west_east)

    distances = [point.distance_from_start_km for point in route.points]
    assert distances == sorted(distances)
    assert distances[0] == 0.0


def test_sample_count_grows_with_trip_distance() -> None:
    path = _path(1000, lon_step=0.01)

    short = segment_route(path, total_distance_km=100.0, mileage=4.0, classify=_west_east)
    long = segment_route(path, total_distance_km=2000.0, mileage=4.0, classify=_west_east)

    # 10 minimum samples vs one sample per 50 km, plus the destination.
    assert len(short.points) == 11
    assert len(long.points) == 41


def test_single_state_route_has_one_closing_segment() -> None:
    route = segment_route(_path(30), total_distance_km=120.0, mileage=4.0, classify=lambda _: "Goa")

    assert route.states == ("Goa",)
    assert len(route.segments) == 1
    assert route.segments[0].start_state == route.segments[0].end_state == "Goa"
    assert route.segments[0].distance_km == pytest.approx(120.0)


@pytest.mark.parametrize(
    ("count", "total_distance_km", "band"),
    [(50, 80.0, 1.0), (400, 1234.5, 2.5), (999, 2500.0, 0.7), (12, 900.0, 0.3)],
)
def test_segments_tile_total_distance(count: int, total_distance_km: float, band: float) -> None:
    def striped(point: GeoPoint) -> str:
        return f"Zone {int(point.longitude // band) % 3}"

    route = segment_route(
        _path(count), total_distance_km=total_distance_km, mileage=4.0, classify=striped
    )

    assert sum(segment.distance_km for segment in route.segments) == pytest.approx(
        total_distance_km
    )
    for segment in route.segments:
        assert segment.start_state in route.states
        assert segment.end_state in route.states
        assert segment.fuel_needed_liters == pytest.approx(segment.distance_km / 4.0)


def test_states_keep_first_seen_order() -> None:
    labels = iter(["B", "A", "A", "B", "C", "A", "C", "C", "C", "C", "C", "C"])
    path = _path(11)

    route = segment_route(
        path, total_distance_km=10.0, mileage=1.0, classify=lambda _: next(labels)
    )

    assert route.states == ("B", "A", "C")


def test_nearest_state_classifier_labels_known_cities(reference_tables) -> None:
    classify = reference_tables.classifier

    assert classify(GeoPoint(latitude=17.385044, longitude=78.486671)) == "Telangana"
    assert classify(GeoPoint(latitude=23.2599, longitude=77.4126)) == "Madhya Pradesh"
    assert classify(GeoPoint(latitude=28.7041, longitude=77.1925)) == "Delhi"


def test_non_positive_mileage_is_rejected() -> None:
    with pytest.raises(InvalidInputError, match="Mileage"):
        segment_route(_path(10), total_distance_km=100.0, mileage=0.0, classify=_west_east)


def test_path_needs_two_points() -> None:
    with pytest.raises(InvalidInputError, match="at least two"):
        segment_route(_path(1), total_distance_km=100.0, mileage=4.0, classify=_west_east)
