from __future__ import annotations

import json
import logging
from typing import Any

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from pydantic import ValidationError

from fuelsaver.exceptions import (
    ExternalServiceError,
    InvalidInputError,
    InvalidLocationError,
    NoRouteFoundError,
    ReferenceDataError,
)
from fuelsaver.models import FuelStation, StateFuelPrice
from fuelsaver.schemas import StatePriceResponse, TripPlanRequest
from fuelsaver.services.planner import TripPlannerService
from fuelsaver.services.reference import ReferenceTables
from fuelsaver.services.types import FUEL_TYPES

logger = logging.getLogger(__name__)

_planner_service: TripPlannerService | None = None


def get_trip_planner() -> TripPlannerService:
    global _planner_service
    if _planner_service is None:
        _planner_service = TripPlannerService()
    return _planner_service


@require_GET
def health_view(_: HttpRequest) -> HttpResponse:
    return JsonResponse(
        {
            "status": "ok",
            "reference_data": {
                "states": StateFuelPrice.objects.count(),
                "stations": FuelStation.objects.count(),
            },
        }
    )


@require_GET
def fuel_prices_view(request: HttpRequest) -> HttpResponse:
    fuel_type = request.GET.get("fuel_type", settings.DEFAULT_FUEL_TYPE)
    if fuel_type not in FUEL_TYPES:
        return _error_response(
            "invalid_input", f"fuel_type must be one of {', '.join(FUEL_TYPES)}", status=400
        )

    try:
        tables = ReferenceTables.from_database()
    except ReferenceDataError as exc:
        return _error_response("reference_data_unavailable", str(exc), status=503)

    prices = [
        StatePriceResponse(
            state=price.state,
            fuel_type=fuel_type,
            price_per_liter=price.price_for(fuel_type),
            station_count=len(tables.stations_in(price.state)),
        ).model_dump(mode="json")
        for price in tables.prices.values()
    ]
    return JsonResponse({"fuel_type": fuel_type, "prices": prices})


@csrf_exempt
@require_POST
def trip_plan_view(request: HttpRequest) -> HttpResponse:
    payload = _parse_json_payload(request)
    if isinstance(payload, JsonResponse):
        return payload

    try:
        trip_request = TripPlanRequest.model_validate(payload)
    except ValidationError as exc:
        return JsonResponse(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Invalid request payload",
                    "details": exc.errors(include_url=False, include_context=False),
                }
            },
            status=400,
        )

    planner = get_trip_planner()
    try:
        response = planner.plan(trip_request)
    except InvalidLocationError as exc:
        return _error_response("invalid_location", str(exc), status=400)
    except InvalidInputError as exc:
        return _error_response("invalid_input", str(exc), status=400)
    except NoRouteFoundError as exc:
        return _error_response("no_route", str(exc), status=502)
    except ExternalServiceError as exc:
        logger.warning("Trip plan failed upstream: %s", exc)
        return _error_response("upstream_error", str(exc), status=502)
    except ReferenceDataError as exc:
        logger.error("Trip plan failed: %s", exc)
        return _error_response("reference_data_unavailable", str(exc), status=503)

    return JsonResponse(response.model_dump(mode="json"), status=200)


def _parse_json_payload(request: HttpRequest) -> dict[str, Any] | JsonResponse:
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except json.JSONDecodeError:
        return _error_response("invalid_json", "Request body must be valid JSON", status=400)

    if not isinstance(payload, dict):
        return _error_response("invalid_json", "JSON body must be an object", status=400)

    return payload


def _error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)
