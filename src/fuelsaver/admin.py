from django.contrib import admin

from fuelsaver.models import FuelStation, StateFuelPrice


@admin.register(StateFuelPrice)
class StateFuelPriceAdmin(admin.ModelAdmin):
    list_display = (
        "state",
        "petrol_price",
        "diesel_price",
        "center_latitude",
        "center_longitude",
        "updated_at",
    )
    search_fields = ("state",)
    ordering = ("state",)


@admin.register(FuelStation)
class FuelStationAdmin(admin.ModelAdmin):
    list_display = (
        "station_code",
        "name",
        "brand",
        "state",
        "hours",
        "latitude",
        "longitude",
    )
    list_filter = ("state", "brand")
    search_fields = ("station_code", "name", "address", "state")
    ordering = ("state", "station_code")
