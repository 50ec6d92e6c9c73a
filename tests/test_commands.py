from __future__ import annotations

from decimal import Decimal
from io import StringIO
from pathlib import Path

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from fuelsaver import reference_data
from fuelsaver.models import FuelStation, StateFuelPrice
from fuelsaver.services.planner import TripPlannerService
from fuelsaver.services.reference import ReferenceTables
from fuelsaver.services.types import GeocodeResult, GeoPoint, PathData


def _write_csv(tmp_path: Path, *lines: str) -> Path:
    csv_path = tmp_path / "prices.csv"
    csv_path.write_text("\n".join(lines), encoding="utf-8")
    return csv_path


@pytest.mark.django_db
def test_load_reference_data_is_idempotent() -> None:
    call_command("load_reference_data")
    call_command("load_reference_data")

    assert StateFuelPrice.objects.count() == len(reference_data.STATE_FUEL_PRICES)
    assert FuelStation.objects.count() == len(reference_data.FUEL_STATIONS)
    telangana = StateFuelPrice.objects.get(state="Telangana")
    assert telangana.diesel_price == Decimal("95.70")
    assert (telangana.center_latitude, telangana.center_longitude) == (17.1232, 79.2089)


@pytest.mark.django_db
def test_database_tables_match_bundled_tables() -> None:
    call_command("load_reference_data")

    from_db = ReferenceTables.from_database()
    seeded = ReferenceTables.from_seed()

    assert set(from_db.prices) == set(seeded.prices)
    assert from_db.prices["Delhi"].price_for("diesel") == pytest.approx(86.67)
    assert [station.station_id for station in from_db.stations_in("Delhi")] == [
        "del-001",
        "del-002",
    ]


@pytest.mark.django_db
def test_load_reference_data_replace_drops_custom_rows() -> None:
    call_command("load_reference_data")
    FuelStation.objects.create(
        station_code="custom-001",
        name="Depot Pump",
        brand="IOCL",
        state="Goa",
        address="Depot",
        latitude=15.4,
        longitude=73.9,
    )

    call_command("load_reference_data", replace=True)

    assert not FuelStation.objects.filter(station_code="custom-001").exists()


@pytest.mark.django_db
def test_import_fuel_prices_updates_and_creates(tmp_path: Path) -> None:
    call_command("load_reference_data")
    csv_path = _write_csv(
        tmp_path,
        "State,Petrol,Diesel,Center Latitude,Center Longitude",
        "Telangana,108.10,96.05,,",
        "Sikkim,101.50,88.20,27.533,88.5122",
        "Ladakh,99.00,85.00,,",
    )

    call_command("import_fuel_prices", csv_path=str(csv_path))

    telangana = StateFuelPrice.objects.get(state="Telangana")
    assert telangana.diesel_price == Decimal("96.05")
    assert telangana.center_latitude == 17.1232
    sikkim = StateFuelPrice.objects.get(state="Sikkim")
    assert sikkim.petrol_price == Decimal("101.50")
    assert not StateFuelPrice.objects.filter(state="Ladakh").exists()


@pytest.mark.django_db
def test_import_fuel_prices_keeps_last_row_and_drops_bad_prices(tmp_path: Path) -> None:
    call_command("load_reference_data")
    csv_path = _write_csv(
        tmp_path,
        "State,Petrol,Diesel",
        "Goa,97.00,89.00",
        " Goa ,98.25,90.10",
        "Kerala,0,95.00",
        ",100.00,90.00",
    )

    call_command("import_fuel_prices", csv_path=str(csv_path))

    goa = StateFuelPrice.objects.get(state="Goa")
    assert goa.petrol_price == Decimal("98.25")
    assert goa.diesel_price == Decimal("90.10")
    assert StateFuelPrice.objects.get(state="Kerala").petrol_price == Decimal("107.54")


@pytest.mark.django_db
def test_import_fuel_prices_requires_price_columns(tmp_path: Path) -> None:
    csv_path = _write_csv(tmp_path, "State,Petrol", "Goa,97.00")

    with pytest.raises(CommandError, match="Diesel"):
        call_command("import_fuel_prices", csv_path=str(csv_path))


def test_import_fuel_prices_requires_existing_file(tmp_path: Path) -> None:
    with pytest.raises(CommandError, match="does not exist"):
        call_command("import_fuel_prices", csv_path=str(tmp_path / "missing.csv"))


@pytest.fixture
def offline_planner(mocker) -> TripPlannerService:
    hyderabad = GeoPoint(latitude=17.385044, longitude=78.486671)
    bhopal = GeoPoint(latitude=23.2599, longitude=77.4126)
    dlat, dlon = bhopal.latitude - hyderabad.latitude, bhopal.longitude - hyderabad.longitude
    geocoder = mocker.Mock()
    geocoder.geocode.side_effect = lambda query: GeocodeResult(
        point=hyderabad if query == "Hyderabad" else bhopal, country_code="in"
    )
    osrm = mocker.Mock()
    osrm.route.return_value = PathData(
        points=[
            GeoPoint(
                latitude=hyderabad.latitude + dlat * step / 99,
                longitude=hyderabad.longitude + dlon * step / 99,
            )
            for step in range(100)
        ],
        distance_km=780.0,
        duration_seconds=36000.0,
    )
    service = TripPlannerService(
        geocoding_client=geocoder, osrm_client=osrm, reference_tables=ReferenceTables.from_seed()
    )
    mocker.patch(
        "fuelsaver.management.commands.simulate_journey.TripPlannerService", return_value=service
    )
    return service


def test_simulate_journey_replays_route(offline_planner, settings) -> None:
    settings.SIMULATION_MIN_TICK_SECONDS = 0.001
    settings.SIMULATION_MAX_TICK_SECONDS = 0.002
    out = StringIO()

    call_command("simulate_journey", "Hyderabad", "Bhopal", "--current-fuel", "50", stdout=out)

    output = out.getvalue()
    assert "states: Telangana" in output
    assert "Journey Started" in output
    assert "Journey Completed" in output
    assert output.rstrip().endswith("Journey replay complete")


def test_simulate_journey_rejects_infeasible_plan(offline_planner) -> None:
    out = StringIO()

    with pytest.raises(CommandError, match="tank capacity is only 20 liters"):
        call_command(
            "simulate_journey",
            "Hyderabad",
            "Bhopal",
            "--mileage",
            "2",
            "--tank-capacity",
            "20",
            stdout=out,
        )

    assert "Journey Started" not in out.getvalue()


class _ClosedAfterSummary(StringIO):
    def write(self, text: str) -> int:
        if text.startswith("[   0]"):
            raise OSError("terminal closed")
        return super().write(text)


def test_simulate_journey_fails_when_output_breaks(offline_planner, settings) -> None:
    settings.SIMULATION_MIN_TICK_SECONDS = 0.001
    settings.SIMULATION_MAX_TICK_SECONDS = 0.002

    with pytest.raises(CommandError, match="Journey replay failed: terminal closed"):
        call_command("simulate_journey", "Hyderabad", "Bhopal", stdout=_ClosedAfterSummary())
