from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from fuelsaver.exceptions import FuelSaverError
from fuelsaver.schemas import TripPlanRequest
from fuelsaver.services.planner import PlannedTrip, TripPlannerService
from fuelsaver.services.simulation import (
    AsyncioScheduler,
    JourneySimulator,
    SimulationSettings,
    SimulationStatus,
)
from fuelsaver.services.types import JourneyNotification, JourneyPosition


class Command(BaseCommand):
    help = "Plan a trip and replay it as a fast-forwarded journey with station alerts."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument("start_location", type=str)
        parser.add_argument("finish_location", type=str)
        parser.add_argument("--fuel-type", choices=["petrol", "diesel"], default=None)
        parser.add_argument("--mileage", type=float, default=None, help="Fuel economy in km/L")
        parser.add_argument("--tank-capacity", type=float, default=None, help="Liters")
        parser.add_argument("--current-fuel", type=float, default=None, help="Liters")
        parser.add_argument(
            "--speed",
            type=float,
            default=settings.SIMULATION_SPEED_KMH,
            help="Average simulated speed in km/h",
        )

    def handle(self, *_: Any, **options: Any) -> None:
        try:
            request = TripPlanRequest(
                start_location=options["start_location"],
                finish_location=options["finish_location"],
                fuel_type=options["fuel_type"],
                mileage_km_per_liter=options["mileage"],
                tank_capacity_liters=options["tank_capacity"],
                current_fuel_liters=options["current_fuel"],
            )
            trip = TripPlannerService().build_trip(request)
        except (FuelSaverError, ValueError) as exc:
            raise CommandError(str(exc)) from exc

        self._write_summary(trip)
        if not trip.fuel_plan.is_feasible:
            raise CommandError(trip.fuel_plan.error_message or "Journey not feasible")

        simulation_settings = SimulationSettings(
            speed_kmh=options["speed"],
            acceleration=settings.SIMULATION_ACCELERATION,
            min_tick_seconds=settings.SIMULATION_MIN_TICK_SECONDS,
            max_tick_seconds=settings.SIMULATION_MAX_TICK_SECONDS,
            upcoming_radius_km=settings.UPCOMING_STATION_RADIUS_KM,
            arrival_radius_km=settings.ARRIVAL_STATION_RADIUS_KM,
        )
        try:
            asyncio.run(self._replay(trip, simulation_settings))
        except FuelSaverError as exc:
            raise CommandError(str(exc)) from exc

    async def _replay(self, trip: PlannedTrip, simulation_settings: SimulationSettings) -> None:
        finished = asyncio.get_running_loop().create_future()

        def fail_on_error(callback: Callable[[Any], None]) -> Callable[[Any], None]:
            def wrapper(payload: Any) -> None:
                try:
                    callback(payload)
                except Exception as exc:
                    if not finished.done():
                        finished.set_exception(exc)
                    raise

            return wrapper

        def on_position(position: JourneyPosition) -> None:
            self.stdout.write(
                f"[{position.index:>4}] {position.distance_from_start_km:8.1f} km  "
                f"{position.state:<18} ({position.latitude:.4f}, {position.longitude:.4f})"
            )

        def on_notification(notification: JourneyNotification) -> None:
            urgent = notification.type in ("arrived", "alert")
            style = self.style.WARNING if urgent else self.style.NOTICE
            self.stdout.write(style(f"  >> {notification.title}: {notification.message}"))
            if simulator.status is SimulationStatus.COMPLETED and not finished.done():
                finished.set_result(None)

        simulator = JourneySimulator(
            trip.route,
            trip.fuel_plan,
            fail_on_error(on_position),
            fail_on_error(on_notification),
            scheduler=AsyncioScheduler(),
            settings=simulation_settings,
        )
        simulator.start()
        try:
            await finished
        except Exception as exc:
            raise CommandError(f"Journey replay failed: {exc}") from exc
        finally:
            simulator.stop()
        self.stdout.write(self.style.SUCCESS("Journey replay complete"))

    def _write_summary(self, trip: PlannedTrip) -> None:
        route = trip.route
        plan = trip.fuel_plan
        symbol = settings.CURRENCY_SYMBOL
        self.stdout.write(
            f"Route: {route.total_distance_km:.1f} km, {route.total_fuel_needed_liters:.1f} L "
            f"of {trip.fuel_type}, states: {', '.join(route.states)}"
        )
        for point in plan.refuel_points:
            self.stdout.write(
                f"  {point.action:<11} {point.state:<18} {point.amount_liters:7.1f} L "
                f"@ {symbol}{point.price_per_liter:.2f} = {symbol}{point.total_cost:.2f}"
            )
        for alert in plan.alerts:
            self.stdout.write(f"  ! {alert.message}")
        if plan.is_feasible:
            self.stdout.write(f"Total fuel cost: {symbol}{plan.total_cost:.2f}")
