"""Fast-forwarded playback of a planned trip.

The simulator walks the sampled route points one tick at a time, reporting each
position and raising notifications when the truck nears a station from the fuel
plan. Ticks are scheduled through an injected :class:`Scheduler`, so the same
code runs on an asyncio loop in production and on a manual fake in tests.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol, TypeVar

from fuelsaver.exceptions import SimulationError
from fuelsaver.services.geo import haversine_km
from fuelsaver.services.types import (
    FuelPlan,
    JourneyNotification,
    JourneyPosition,
    NotificationType,
    Route,
    StateAlert,
    Station,
)

logger = logging.getLogger(__name__)

PositionCallback = Callable[[JourneyPosition], None]
NotificationCallback = Callable[[JourneyNotification], None]
Clock = Callable[[], datetime]
_Payload = TypeVar("_Payload")


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledCall: ...


class AsyncioScheduler:
    """Schedules ticks on an asyncio event loop (the running loop by default)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledCall:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_seconds, callback)


class SimulationStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    STOPPED = "stopped"


@dataclass(slots=True, frozen=True)
class SimulationSettings:
    speed_kmh: float = 50.0
    # Playback runs this many times faster than real driving time.
    acceleration: float = 100.0
    min_tick_seconds: float = 0.5
    max_tick_seconds: float = 2.0
    upcoming_radius_km: float = 5.0
    arrival_radius_km: float = 1.0
    border_alerts: bool = True


@dataclass(slots=True)
class SimulationState:
    status: SimulationStatus = SimulationStatus.IDLE
    index: int = 0
    position: JourneyPosition | None = None
    fired_notifications: set[str] = field(default_factory=set)
    seen_states: set[str] = field(default_factory=set)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JourneySimulator:
    def __init__(
        self,
        route: Route,
        fuel_plan: FuelPlan,
        on_position: PositionCallback,
        on_notification: NotificationCallback,
        *,
        scheduler: Scheduler | None = None,
        settings: SimulationSettings | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.route = route
        self.on_position = on_position
        self.on_notification = on_notification
        self.settings = settings or SimulationSettings()
        if self.settings.speed_kmh <= 0:
            raise SimulationError(
                f"Simulation speed must be positive, got {self.settings.speed_kmh:g} km/h"
            )

        self._scheduler = scheduler or AsyncioScheduler()
        self._clock = clock
        self._stations = _distinct_stations(fuel_plan)
        self._alerts_by_state: dict[str, list[StateAlert]] = {}
        for alert in fuel_plan.alerts:
            self._alerts_by_state.setdefault(alert.from_state, []).append(alert)

        self._state = SimulationState()
        self._pending: ScheduledCall | None = None
        # Bumped whenever pending ticks must be discarded.
        self._generation = 0

    @property
    def status(self) -> SimulationStatus:
        return self._state.status

    @property
    def is_running(self) -> bool:
        return self._state.status is SimulationStatus.RUNNING

    @property
    def current_position(self) -> JourneyPosition | None:
        return self._state.position

    def start(self) -> None:
        if self.is_running:
            return
        if len(self.route.points) < 2:
            raise SimulationError(
                f"Cannot simulate a route with {len(self.route.points)} point(s); "
                "at least 2 are required"
            )

        self._invalidate_pending()
        self._state = SimulationState(status=SimulationStatus.RUNNING)
        generation = self._generation
        logger.info(
            "Journey simulation started: %d points, %.1f km",
            len(self.route.points),
            self.route.total_distance_km,
        )
        self._notify(
            generation,
            kind="initial",
            notification_id=f"journey-start-{self._epoch_millis()}",
            title="Journey Started",
            message="FuelSaver will travel with you",
        )
        self._step(generation)

    def pause(self) -> None:
        if not self.is_running:
            return
        self._invalidate_pending()
        self._state.status = SimulationStatus.PAUSED
        logger.info("Journey simulation paused at point %d", self._state.index)

    def resume(self) -> None:
        if self._state.status is not SimulationStatus.PAUSED or self._state.position is None:
            return
        self._state.status = SimulationStatus.RUNNING
        logger.info("Journey simulation resumed at point %d", self._state.index)
        self._step(self._generation)

    def stop(self) -> None:
        self._invalidate_pending()
        if self._state.status in (SimulationStatus.RUNNING, SimulationStatus.PAUSED):
            self._state.status = SimulationStatus.STOPPED
            logger.info("Journey simulation stopped")
        self._state.index = 0
        self._state.position = None

    def _invalidate_pending(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _tick(self, generation: int) -> None:
        if generation != self._generation or not self.is_running:
            return
        self._pending = None
        self._step(generation)

    def _step(self, generation: int) -> None:
        if generation != self._generation:
            return
        points = self.route.points
        index = self._state.index

        if index >= len(points) - 1:
            self._state.status = SimulationStatus.COMPLETED
            logger.info("Journey simulation completed")
            self._notify(
                generation,
                kind="initial",
                notification_id=f"journey-complete-{self._epoch_millis()}",
                title="Journey Completed",
                message="You have reached your destination!",
            )
            return

        point = points[index]
        position = JourneyPosition(
            latitude=point.latitude,
            longitude=point.longitude,
            state=point.state,
            distance_from_start_km=point.distance_from_start_km,
            index=index,
        )
        self._state.position = position

        self._check_border_alerts(generation, position)
        if generation != self._generation:
            return
        self._check_station_proximity(generation, position)
        if generation != self._generation:
            return

        # Advanced before delivery so a pause from on_position resumes at the next point.
        delay = self._tick_delay(index)
        self._state.index = index + 1
        self._deliver(self.on_position, position)
        if generation != self._generation or not self.is_running:
            return
        self._pending = self._scheduler.call_later(delay, lambda: self._tick(generation))

    def _tick_delay(self, index: int) -> float:
        current = self.route.points[index]
        following = self.route.points[index + 1]
        distance = haversine_km(
            current.latitude, current.longitude, following.latitude, following.longitude
        )
        seconds = distance / self.settings.speed_kmh * 3600.0 / self.settings.acceleration
        return max(self.settings.min_tick_seconds, min(seconds, self.settings.max_tick_seconds))

    def _check_station_proximity(self, generation: int, position: JourneyPosition) -> None:
        for station in self._stations:
            if generation != self._generation:
                return
            try:
                distance = haversine_km(
                    position.latitude,
                    position.longitude,
                    station.coords.latitude,
                    station.coords.longitude,
                )
            except Exception:
                logger.exception("Proximity check failed for station %s", station.station_id)
                continue
            self._check_station(generation, station, distance)

    def _check_station(self, generation: int, station: Station, distance: float) -> None:
        if distance <= self.settings.arrival_radius_km:
            kind: NotificationType = "arrived"
            title = "Fill fuel, as station is arrived"
        elif distance <= self.settings.upcoming_radius_km:
            kind = "upcoming"
            title = "Fill fuel, station coming soon"
        else:
            return

        notification_id = f"{kind}-{station.station_id}"
        if notification_id in self._state.fired_notifications:
            return
        if self._notify(
            generation,
            kind=kind,
            notification_id=notification_id,
            title=title,
            message=f"{station.name}, {station.address}",
        ):
            self._state.fired_notifications.add(notification_id)

    def _check_border_alerts(self, generation: int, position: JourneyPosition) -> None:
        if not self.settings.border_alerts or position.state in self._state.seen_states:
            return

        for alert in self._alerts_by_state.get(position.state, []):
            alert_id = f"alert-{alert.from_state}-{alert.to_state}"
            if alert_id in self._state.fired_notifications:
                continue
            if not self._notify(
                generation,
                kind="alert",
                notification_id=alert_id,
                title=f"Fuel price change ahead: {alert.to_state}",
                message=alert.message,
            ):
                return
            self._state.fired_notifications.add(alert_id)
            if generation != self._generation:
                return
        self._state.seen_states.add(position.state)

    def _notify(
        self,
        generation: int,
        *,
        kind: NotificationType,
        notification_id: str,
        title: str,
        message: str,
    ) -> bool:
        """Deliver a notification; False when it was not received."""
        if generation != self._generation:
            return False
        return self._deliver(
            self.on_notification,
            JourneyNotification(
                notification_id=notification_id,
                type=kind,
                title=title,
                message=message,
                timestamp=self._clock(),
            ),
        )

    def _deliver(self, callback: Callable[[_Payload], None], payload: _Payload) -> bool:
        try:
            callback(payload)
        except Exception:
            logger.exception("Journey simulation callback failed; stopping the run")
            if self._state.status in (SimulationStatus.RUNNING, SimulationStatus.PAUSED):
                self._invalidate_pending()
                self._state.status = SimulationStatus.STOPPED
            return False
        return True

    def _epoch_millis(self) -> int:
        return int(self._clock().timestamp() * 1000)


def _distinct_stations(fuel_plan: FuelPlan) -> list[Station]:
    seen: set[str] = set()
    stations: list[Station] = []
    for refuel_point in fuel_plan.refuel_points:
        for station in refuel_point.candidate_stations:
            if station.station_id in seen:
                continue
            seen.add(station.station_id)
            stations.append(station)
    return stations
