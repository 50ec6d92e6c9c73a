from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence

from fuelsaver.exceptions import InvalidInputError
from fuelsaver.services.types import GeoPoint, Route, RoutePoint, RouteSegment

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_DISTANCE_KM = 50.0
DEFAULT_MIN_SAMPLES = 10

StateClassifier = Callable[[GeoPoint], str]


def segment_route(
    path: Sequence[GeoPoint],
    total_distance_km: float,
    mileage: float,
    classify: StateClassifier,
    *,
    sample_distance_km: float = DEFAULT_SAMPLE_DISTANCE_KM,
    min_samples: int = DEFAULT_MIN_SAMPLES,
) -> Route:
    """Label a driving path with states and split it at every state change.

    ``mileage`` is km per liter. Distances along the path are interpolated from
    the raw point index against ``total_distance_km``, so the segments always
    add up to the reported trip distance.
    """
    if mileage <= 0:
        raise InvalidInputError(f"Mileage must be positive, got {mileage:g} km/L")
    if len(path) < 2:
        raise InvalidInputError(
            f"A route needs at least two path points, got {len(path)}"
        )
    if total_distance_km < 0:
        raise InvalidInputError(
            f"Total distance cannot be negative, got {total_distance_km:g} km"
        )

    points = _sample_points(path, total_distance_km, classify, sample_distance_km, min_samples)
    segments = _build_segments(points, total_distance_km, mileage)

    states: list[str] = []
    for point in points:
        if point.state not in states:
            states.append(point.state)

    logger.debug(
        "Segmented %.1f km path into %d sampled points, %d segments across %d states",
        total_distance_km,
        len(points),
        len(segments),
        len(states),
    )
    return Route(
        points=tuple(points),
        segments=tuple(segments),
        states=tuple(states),
        total_distance_km=total_distance_km,
        total_fuel_needed_liters=total_distance_km / mileage,
    )


def sampling_step(
    path_length: int, total_distance_km: float, sample_distance_km: float, min_samples: int
) -> int:
    target_samples = max(min_samples, math.ceil(total_distance_km / sample_distance_km))
    return max(1, path_length // target_samples)


def _sample_points(
    path: Sequence[GeoPoint],
    total_distance_km: float,
    classify: StateClassifier,
    sample_distance_km: float,
    min_samples: int,
) -> list[RoutePoint]:
    step = sampling_step(len(path), total_distance_km, sample_distance_km, min_samples)

    points: list[RoutePoint] = []
    for index in range(0, len(path), step):
        point = path[index]
        points.append(
            RoutePoint(
                latitude=point.latitude,
                longitude=point.longitude,
                state=classify(point),
                distance_from_start_km=(index / len(path)) * total_distance_km,
            )
        )

    destination = path[-1]
    points.append(
        RoutePoint(
            latitude=destination.latitude,
            longitude=destination.longitude,
            state=classify(destination),
            distance_from_start_km=total_distance_km,
        )
    )
    return points


def _build_segments(
    points: list[RoutePoint], total_distance_km: float, mileage: float
) -> list[RouteSegment]:
    segments: list[RouteSegment] = []
    previous_state = points[0].state
    segment_start_km = 0.0

    for index in range(1, len(points)):
        current_state = points[index].state
        if current_state == previous_state:
            continue

        # The border is placed at the last point still inside the old state.
        boundary_km = points[index - 1].distance_from_start_km
        distance = boundary_km - segment_start_km
        segments.append(
            RouteSegment(
                start_state=previous_state,
                end_state=current_state,
                distance_km=distance,
                fuel_needed_liters=distance / mileage,
            )
        )
        segment_start_km = boundary_km
        previous_state = current_state

    final_distance = total_distance_km - segment_start_km
    if final_distance > 0:
        segments.append(
            RouteSegment(
                start_state=previous_state,
                end_state=points[-1].state,
                distance_km=final_distance,
                fuel_needed_liters=final_distance / mileage,
            )
        )
    return segments
