from django.urls import path

from fuelsaver import views

urlpatterns = [
    path("api/v1/health", views.health_view, name="health"),
    path("api/v1/fuel-prices", views.fuel_prices_view, name="fuel-prices"),
    path("api/v1/trip-plan", views.trip_plan_view, name="trip-plan"),
]
