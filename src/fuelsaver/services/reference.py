from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from fuelsaver import reference_data
from fuelsaver.exceptions import ReferenceDataError
from fuelsaver.services.geo import planar_distance_degrees
from fuelsaver.services.types import GeoPoint, StateFuelPrice, Station

logger = logging.getLogger(__name__)


class NearestStateClassifier:
    """Labels a coordinate with the state whose reference center is closest.

    Closeness is measured on the flat lat/lng plane. Ties go to the state listed
    first.
    """

    def __init__(self, prices: Iterable[StateFuelPrice]) -> None:
        self._centers = [(price.state, price.reference_center) for price in prices]
        if not self._centers:
            raise ReferenceDataError("Cannot classify states without reference centers")

    def __call__(self, point: GeoPoint) -> str:
        nearest_state, _ = min(
            self._centers,
            key=lambda entry: planar_distance_degrees(
                point.latitude, point.longitude, entry[1].latitude, entry[1].longitude
            ),
        )
        return nearest_state


@dataclass(slots=True, frozen=True)
class ReferenceTables:
    prices: Mapping[str, StateFuelPrice]
    stations: Mapping[str, tuple[Station, ...]]

    @property
    def classifier(self) -> NearestStateClassifier:
        return NearestStateClassifier(self.prices.values())

    def stations_in(self, state: str) -> tuple[Station, ...]:
        return self.stations.get(state, ())

    @classmethod
    def build(
        cls, prices: Iterable[StateFuelPrice], stations: Iterable[Station]
    ) -> ReferenceTables:
        price_table = {price.state: price for price in prices}
        if not price_table:
            raise ReferenceDataError(
                "No state fuel prices are loaded; run `manage.py load_reference_data`"
            )

        grouped: dict[str, list[Station]] = defaultdict(list)
        for station in stations:
            grouped[station.state].append(station)

        return cls(
            prices=price_table,
            stations={state: tuple(items) for state, items in grouped.items()},
        )

    @classmethod
    def from_seed(cls) -> ReferenceTables:
        return cls.build(
            prices=(
                StateFuelPrice(
                    state=row["state"],
                    petrol_price_per_liter=row["petrol"],
                    diesel_price_per_liter=row["diesel"],
                    reference_center=GeoPoint(
                        latitude=row["center"][0], longitude=row["center"][1]
                    ),
                )
                for row in reference_data.STATE_FUEL_PRICES
            ),
            stations=(
                Station(
                    station_id=row["station_id"],
                    name=row["name"],
                    brand=row["brand"],
                    state=row["state"],
                    address=row["address"],
                    hours=row["hours"],
                    phone=row["phone"],
                    coords=GeoPoint(latitude=row["coords"][0], longitude=row["coords"][1]),
                )
                for row in reference_data.FUEL_STATIONS
            ),
        )

    @classmethod
    def from_database(cls) -> ReferenceTables:
        from fuelsaver.models import FuelStation
        from fuelsaver.models import StateFuelPrice as StateFuelPriceRow

        prices = [
            StateFuelPrice(
                state=row.state,
                petrol_price_per_liter=float(row.petrol_price),
                diesel_price_per_liter=float(row.diesel_price),
                reference_center=GeoPoint(
                    latitude=row.center_latitude, longitude=row.center_longitude
                ),
            )
            for row in StateFuelPriceRow.objects.order_by("id")
        ]
        stations = [
            Station(
                station_id=row.station_code,
                name=row.name,
                brand=row.brand,
                state=row.state,
                address=row.address,
                hours=row.hours,
                phone=row.phone,
                coords=GeoPoint(latitude=row.latitude, longitude=row.longitude),
            )
            for row in FuelStation.objects.order_by("state", "station_code")
        ]
        logger.debug("Loaded %d state prices and %d stations", len(prices), len(stations))
        return cls.build(prices=prices, stations=stations)
