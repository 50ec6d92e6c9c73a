from __future__ import annotations

from django.db import models


class StateFuelPrice(models.Model):
    objects = models.Manager["StateFuelPrice"]()

    state = models.CharField(max_length=64, unique=True)
    petrol_price = models.DecimalField(max_digits=7, decimal_places=2)
    diesel_price = models.DecimalField(max_digits=7, decimal_places=2)

    # Reference center used by the nearest-state lookup
    center_latitude = models.FloatField()
    center_longitude = models.FloatField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("state",)

    def __str__(self) -> str:
        return f"{self.state} (petrol {self.petrol_price}, diesel {self.diesel_price})"


class FuelStation(models.Model):
    objects = models.Manager["FuelStation"]()

    station_code = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=255)
    brand = models.CharField(max_length=32)
    state = models.CharField(max_length=64)
    address = models.CharField(max_length=255)
    hours = models.CharField(max_length=64, blank=True, default="")
    phone = models.CharField(max_length=32, blank=True, default="")
    latitude = models.FloatField()
    longitude = models.FloatField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("state", "station_code")
        indexes = (
            models.Index(fields=["state"]),
            models.Index(fields=["latitude", "longitude"]),
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.brand}, {self.state})"
