from __future__ import annotations

import httpx
import pytest
from django.core.cache import cache

from fuelsaver.exceptions import ExternalServiceError, InvalidLocationError, NoRouteFoundError
from fuelsaver.services.geocoding import GeocodingClient
from fuelsaver.services.osrm import OsrmClient
from fuelsaver.services.types import GeoPoint


@pytest.fixture(autouse=True)
def _clear_cache(settings):
    settings.GEOCODING_RETRY_COUNT = 0
    settings.OSRM_RETRY_COUNT = 0
    cache.clear()
    yield
    cache.clear()


def _response(payload, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code, json=payload, request=httpx.Request("GET", "https://example.test")
    )


def test_geocode_returns_first_match_and_caches_it(mocker) -> None:
    get = mocker.patch(
        "fuelsaver.services.geocoding.httpx.get",
        return_value=_response(
            [{"lat": "17.3850", "lon": "78.4867", "address": {"country_code": "in"}}]
        ),
    )
    client = GeocodingClient()

    first = client.geocode("Hyderabad")
    second = client.geocode("hyderabad")

    assert first.point == GeoPoint(latitude=17.385, longitude=78.4867)
    assert first.country_code == "in"
    assert second == first
    get.assert_called_once()
    assert get.call_args.kwargs["params"]["countrycodes"] == "in"


def test_geocode_without_match_is_invalid_location(mocker) -> None:
    mocker.patch("fuelsaver.services.geocoding.httpx.get", return_value=_response([]))

    with pytest.raises(InvalidLocationError, match="Atlantis"):
        GeocodingClient().geocode("Atlantis")


def test_geocode_outside_country_is_rejected(mocker) -> None:
    mocker.patch(
        "fuelsaver.services.geocoding.httpx.get",
        return_value=_response(
            [{"lat": "51.5", "lon": "-0.12", "address": {"country_code": "gb"}}]
        ),
    )

    with pytest.raises(InvalidLocationError, match="within country IN"):
        GeocodingClient().geocode("London")


def test_geocode_transport_failure_is_upstream_error(mocker) -> None:
    mocker.patch(
        "fuelsaver.services.geocoding.httpx.get", side_effect=httpx.ConnectError("refused")
    )

    with pytest.raises(ExternalServiceError):
        GeocodingClient().geocode("Hyderabad")


def test_osrm_route_converts_geometry_and_distance(mocker) -> None:
    get = mocker.patch(
        "fuelsaver.services.osrm.httpx.get",
        return_value=_response(
            {
                "code": "Ok",
                "routes": [
                    {
                        "distance": 781250.0,
                        "duration": 36000.0,
                        "geometry": {"coordinates": [[78.4867, 17.385], [77.4126, 23.2599]]},
                    }
                ],
            }
        ),
    )
    start = GeoPoint(latitude=17.385, longitude=78.4867)
    finish = GeoPoint(latitude=23.2599, longitude=77.4126)

    path = OsrmClient().route(start, finish)

    assert path.points == [start, finish]
    assert path.distance_km == pytest.approx(781.25)
    assert path.duration_seconds == 36000.0
    assert "78.486700,17.385000;77.412600,23.259900" in get.call_args.args[0]


def test_osrm_without_route_raises(mocker) -> None:
    mocker.patch(
        "fuelsaver.services.osrm.httpx.get",
        return_value=_response({"code": "NoRoute", "routes": []}),
    )

    with pytest.raises(NoRouteFoundError):
        OsrmClient().route(
            GeoPoint(latitude=17.385, longitude=78.4867),
            GeoPoint(latitude=6.9271, longitude=79.8612),
        )


def test_osrm_server_error_is_upstream_error(mocker) -> None:
    mocker.patch("fuelsaver.services.osrm.httpx.get", return_value=_response({}, status_code=503))

    with pytest.raises(ExternalServiceError):
        OsrmClient().route(
            GeoPoint(latitude=17.385, longitude=78.4867),
            GeoPoint(latitude=23.2599, longitude=77.4126),
        )
