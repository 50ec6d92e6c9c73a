from __future__ import annotations

from pathlib import Path
from typing import Any

import polars as pl
from django.core.management.base import BaseCommand, CommandError

from fuelsaver.models import StateFuelPrice

CENTER_COLUMNS = ("Center Latitude", "Center Longitude")


class Command(BaseCommand):
    help = "Update per-state petrol and diesel prices from a CSV using Polars."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "--csv-path",
            type=str,
            required=True,
            help="CSV with State, Petrol, Diesel and optional Center Latitude/Longitude columns",
        )

    def handle(self, *_: Any, **options: Any) -> None:
        csv_path = Path(options["csv_path"])
        if not csv_path.exists():
            raise CommandError(f"CSV file does not exist: {csv_path}")

        records = self._load_and_transform(csv_path).to_dicts()

        existing = {
            price.state: price
            for price in StateFuelPrice.objects.filter(state__in=[row["state"] for row in records])
        }

        to_create: list[StateFuelPrice] = []
        to_update: list[StateFuelPrice] = []
        skipped = 0

        for row in records:
            price = existing.get(row["state"])
            if price is None:
                if row["center_latitude"] is None or row["center_longitude"] is None:
                    skipped += 1
                    continue
                to_create.append(
                    StateFuelPrice(
                        state=row["state"],
                        petrol_price=row["petrol_price"],
                        diesel_price=row["diesel_price"],
                        center_latitude=row["center_latitude"],
                        center_longitude=row["center_longitude"],
                    )
                )
                continue

            price.petrol_price = row["petrol_price"]
            price.diesel_price = row["diesel_price"]
            if row["center_latitude"] is not None and row["center_longitude"] is not None:
                price.center_latitude = row["center_latitude"]
                price.center_longitude = row["center_longitude"]
            to_update.append(price)

        if to_create:
            StateFuelPrice.objects.bulk_create(to_create)
        if to_update:
            StateFuelPrice.objects.bulk_update(
                to_update,
                ["petrol_price", "diesel_price", "center_latitude", "center_longitude"],
            )

        self.stdout.write(
            self.style.SUCCESS(
                "Imported state fuel prices: "
                + (
                    f"{len(records)} rows normalized, {len(to_create)} created, "
                    f"{len(to_update)} updated, {skipped} skipped without a reference center"
                )
            )
        )

    @staticmethod
    def _load_and_transform(csv_path: Path) -> pl.DataFrame:
        frame = pl.read_csv(csv_path, infer_schema_length=1000)
        required_columns = {"State", "Petrol", "Diesel"}
        missing_columns = required_columns.difference(frame.columns)
        if missing_columns:
            raise CommandError(f"Missing expected columns: {sorted(missing_columns)}")

        for column in CENTER_COLUMNS:
            if column not in frame.columns:
                frame = frame.with_columns(pl.lit(None, dtype=pl.Float64).alias(column))

        return (
            frame.select(
                pl.col("State")
                .cast(pl.Utf8, strict=False)
                .str.strip_chars()
                .fill_null("")
                .alias("state"),
                pl.col("Petrol").cast(pl.Float64, strict=False).alias("petrol_price"),
                pl.col("Diesel").cast(pl.Float64, strict=False).alias("diesel_price"),
                pl.col("Center Latitude").cast(pl.Float64, strict=False).alias("center_latitude"),
                pl.col("Center Longitude")
                .cast(pl.Float64, strict=False)
                .alias("center_longitude"),
            )
            .filter(
                (pl.col("state").str.len_chars() > 0)
                & pl.col("petrol_price").is_not_null()
                & pl.col("diesel_price").is_not_null()
                & (pl.col("petrol_price") > 0)
                & (pl.col("diesel_price") > 0)
            )
            .unique(subset=["state"], keep="last", maintain_order=True)
        )
