from __future__ import annotations

from typing import Any

from django.core.management.base import BaseCommand
from django.db import transaction

from fuelsaver import reference_data
from fuelsaver.models import FuelStation, StateFuelPrice


class Command(BaseCommand):
    help = "Load the bundled state fuel prices and station directory."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "--replace",
            action="store_true",
            help="Delete existing prices and stations before loading",
        )

    @transaction.atomic
    def handle(self, *_: Any, **options: Any) -> None:
        if options["replace"]:
            FuelStation.objects.all().delete()
            StateFuelPrice.objects.all().delete()

        prices_created = 0
        for row in reference_data.STATE_FUEL_PRICES:
            _, created = StateFuelPrice.objects.update_or_create(
                state=row["state"],
                defaults={
                    "petrol_price": row["petrol"],
                    "diesel_price": row["diesel"],
                    "center_latitude": row["center"][0],
                    "center_longitude": row["center"][1],
                },
            )
            prices_created += int(created)

        stations_created = 0
        for row in reference_data.FUEL_STATIONS:
            _, created = FuelStation.objects.update_or_create(
                station_code=row["station_id"],
                defaults={
                    "name": row["name"],
                    "brand": row["brand"],
                    "state": row["state"],
                    "address": row["address"],
                    "hours": row["hours"],
                    "phone": row["phone"],
                    "latitude": row["coords"][0],
                    "longitude": row["coords"][1],
                },
            )
            stations_created += int(created)

        self.stdout.write(
            self.style.SUCCESS(
                f"Reference data loaded: {len(reference_data.STATE_FUEL_PRICES)} states "
                f"({prices_created} new), {len(reference_data.FUEL_STATIONS)} stations "
                f"({stations_created} new)"
            )
        )
