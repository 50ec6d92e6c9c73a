from __future__ import annotations

import hashlib
import logging
import time
from typing import Any

import httpx
from django.conf import settings
from django.core.cache import cache

from fuelsaver.exceptions import ExternalServiceError, NoRouteFoundError
from fuelsaver.services.types import GeoPoint, PathData

logger = logging.getLogger(__name__)

METERS_TO_KM = 0.001


class OsrmClient:
    def __init__(self) -> None:
        self.base_url = settings.OSRM_BASE_URL.rstrip("/")
        self.timeout = settings.OSRM_TIMEOUT_SECONDS
        self.retry_count = settings.OSRM_RETRY_COUNT

    def route(self, start: GeoPoint, finish: GeoPoint) -> PathData:
        return self.route_through([start, finish])

    def route_through(self, waypoints: list[GeoPoint]) -> PathData:
        if len(waypoints) < 2:
            raise NoRouteFoundError("At least two route waypoints are required")

        cache_key = self._cache_key(waypoints)
        cached = cache.get(cache_key)
        if cached:
            return PathData(
                points=[
                    GeoPoint(latitude=lat, longitude=lon) for lon, lat in cached["coordinates"]
                ],
                distance_km=cached["distance_km"],
                duration_seconds=cached["duration_seconds"],
            )

        coordinates = ";".join(f"{point.longitude:.6f},{point.latitude:.6f}" for point in waypoints)
        endpoint = f"{self.base_url}/route/v1/driving/{coordinates}"
        params = {
            "overview": "full",
            "geometries": "geojson",
            "steps": "false",
            "annotations": "false",
        }

        for attempt in range(self.retry_count + 1):
            try:
                response = httpx.get(endpoint, params=params, timeout=self.timeout)
                response.raise_for_status()
                path = self._parse_response(response.json())
                cache.set(
                    cache_key,
                    {
                        "coordinates": [(point.longitude, point.latitude) for point in path.points],
                        "distance_km": path.distance_km,
                        "duration_seconds": path.duration_seconds,
                    },
                    timeout=settings.ROUTE_CACHE_TTL_SECONDS,
                )
                logger.debug(
                    "OSRM returned %d path points over %.1f km", len(path.points), path.distance_km
                )
                return path
            except NoRouteFoundError:
                raise
            except httpx.HTTPError as exc:
                if attempt >= self.retry_count:
                    raise ExternalServiceError("OSRM request failed") from exc
                logger.warning("OSRM attempt %d failed: %s; retrying", attempt + 1, exc)
                time.sleep(0.3 * (attempt + 1))

        raise ExternalServiceError("OSRM request failed")

    @staticmethod
    def _cache_key(waypoints: list[GeoPoint]) -> str:
        encoded = "|".join(
            f"{point.latitude:.5f}:{point.longitude:.5f}" for point in waypoints
        ).encode()
        digest = hashlib.sha256(encoded).hexdigest()
        return f"route:{digest}"

    @staticmethod
    def _parse_response(payload: Any) -> PathData:
        if payload.get("code") != "Ok":
            raise NoRouteFoundError("Could not compute route")

        routes = payload.get("routes") or []
        if not routes:
            raise NoRouteFoundError("Could not compute route")

        first = routes[0]
        # GeoJSON coordinates are [longitude, latitude]
        coordinates = first.get("geometry", {}).get("coordinates", [])
        if len(coordinates) < 2:
            raise NoRouteFoundError("Route geometry unavailable")

        return PathData(
            points=[
                GeoPoint(latitude=float(lat), longitude=float(lon)) for lon, lat in coordinates
            ],
            distance_km=float(first.get("distance", 0.0)) * METERS_TO_KM,
            duration_seconds=float(first.get("duration", 0.0)),
        )
