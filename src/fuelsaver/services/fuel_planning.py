from __future__ import annotations

import logging
from collections.abc import Mapping

from fuelsaver.exceptions import InvalidInputError
from fuelsaver.services.types import (
    FUEL_TYPES,
    AlertAction,
    FuelPlan,
    FuelType,
    RefuelPoint,
    Route,
    StateAlert,
    StateFuelPrice,
    Station,
)

logger = logging.getLogger(__name__)

SAFETY_BUFFER_LITERS = 5.0
CURRENCY_SYMBOL = "₹"


def plan_fuel(
    route: Route,
    fuel_type: FuelType,
    tank_capacity: float,
    current_fuel: float,
    prices: Mapping[str, StateFuelPrice],
    stations: Mapping[str, tuple[Station, ...]],
    *,
    safety_buffer_liters: float = SAFETY_BUFFER_LITERS,
    currency_symbol: str = CURRENCY_SYMBOL,
) -> FuelPlan:
    """Decide where to refuel along ``route`` by comparing prices across borders.

    Before every segment the tank cannot cover, the price in the state being left
    is compared with the price in the state being entered. When the current state
    is at least as cheap the tank is filled; otherwise only enough fuel to clear
    the segment (plus ``safety_buffer_liters``) is bought and the rest is
    deferred to the cheaper state.

    An infeasible trip is returned as a plan with ``is_feasible=False`` rather
    than raised.
    """
    if fuel_type not in FUEL_TYPES:
        raise InvalidInputError(f"Unknown fuel type {fuel_type!r}; expected one of {FUEL_TYPES}")
    if tank_capacity <= 0:
        raise InvalidInputError(f"Tank capacity must be positive, got {tank_capacity:g} liters")
    if current_fuel < 0:
        raise InvalidInputError(f"Current fuel cannot be negative, got {current_fuel:g} liters")

    if route.segments:
        longest = max(route.segments, key=lambda segment: segment.fuel_needed_liters)
        if longest.fuel_needed_liters > tank_capacity:
            message = (
                f"Journey not feasible. Longest segment ({longest.start_state} to "
                f"{longest.end_state}) requires {longest.fuel_needed_liters:.1f} liters, "
                f"but tank capacity is only {tank_capacity:g} liters."
            )
            logger.info(message)
            return FuelPlan(
                refuel_points=(),
                alerts=(),
                total_cost=0.0,
                is_feasible=False,
                error_message=message,
            )

    refuel_points: list[RefuelPoint] = []
    alerts: list[StateAlert] = []
    total_cost = 0.0
    running_fuel = current_fuel
    current_state = route.points[0].state if route.points else ""

    for segment in route.segments:
        current_state = segment.start_state
        fuel_needed = segment.fuel_needed_liters

        if running_fuel < fuel_needed:
            current_price = prices.get(segment.start_state)
            next_price = prices.get(segment.end_state)
            if current_price is None or next_price is None:
                logger.warning(
                    "Skipping refuel decision %s -> %s: no %s price on record",
                    segment.start_state,
                    segment.end_state,
                    fuel_type,
                )
            else:
                price_now = current_price.price_for(fuel_type)
                price_next = next_price.price_for(fuel_type)
                action: AlertAction = "neutral"
                savings = 0.0
                message = ""

                if price_now <= price_next:
                    amount = tank_capacity - running_fuel
                    action = "fill"
                    savings = (price_next - price_now) * amount
                    message = (
                        f"Fill tank in {segment.start_state} before entering {segment.end_state}"
                    )
                else:
                    amount = max(0.0, fuel_needed - running_fuel + safety_buffer_liters)
                    if amount > 0:
                        action = "wait"
                        savings = (price_now - price_next) * (tank_capacity - fuel_needed)
                        message = (
                            f"Refuel minimally in {segment.start_state} ({amount:.1f}L) and "
                            f"wait for cheaper fuel in {segment.end_state}"
                        )

                if amount > 0:
                    refuel = RefuelPoint(
                        state=segment.start_state,
                        amount_liters=amount,
                        price_per_liter=price_now,
                        total_cost=amount * price_now,
                        candidate_stations=tuple(stations.get(segment.start_state, ())),
                        action="fill" if action == "fill" else "wait",
                        fuel_before_liters=running_fuel,
                        fuel_after_liters=running_fuel + amount,
                    )
                    refuel_points.append(refuel)
                    total_cost += refuel.total_cost
                    running_fuel = refuel.fuel_after_liters

                if action != "neutral" and savings > 0:
                    alerts.append(
                        StateAlert(
                            from_state=segment.start_state,
                            to_state=segment.end_state,
                            message=f"{message} to save {currency_symbol}{savings:.2f}",
                            action=action,
                            savings=savings,
                        )
                    )

        running_fuel -= fuel_needed

    destination = _destination_entry(
        route, current_state, running_fuel, fuel_type, prices, stations
    )
    if destination is not None:
        refuel_points.append(destination)

    logger.debug(
        "Planned %d refuel points and %d alerts, total cost %.2f",
        len(refuel_points),
        len(alerts),
        total_cost,
    )
    return FuelPlan(
        refuel_points=tuple(refuel_points),
        alerts=tuple(alerts),
        total_cost=total_cost,
        is_feasible=True,
    )


def _destination_entry(
    route: Route,
    last_state: str,
    arrival_fuel: float,
    fuel_type: FuelType,
    prices: Mapping[str, StateFuelPrice],
    stations: Mapping[str, tuple[Station, ...]],
) -> RefuelPoint | None:
    if not route.points:
        return None

    final_state = route.points[-1].state
    if final_state == last_state:
        return None

    final_price = prices.get(final_state)
    final_stations = tuple(stations.get(final_state, ()))
    if final_price is None or not final_stations:
        return None

    return RefuelPoint(
        state=final_state,
        amount_liters=0.0,
        price_per_liter=final_price.price_for(fuel_type),
        total_cost=0.0,
        candidate_stations=final_stations,
        action="destination",
        fuel_before_liters=arrival_fuel,
        fuel_after_liters=arrival_fuel,
    )
