# apps/bookingapp/urls.py
from django.urls import path

from apps.bookingapp.views import (
    AvailabilityAPIView,
    ConflictCheckAPIView,
    NextAvailableSlotAPIView,
)

urlpatterns = [
    path("availability/", AvailabilityAPIView.as_view(), name="availability"),
    path("availability/check/", ConflictCheckAPIView.as_view(), name="availability-check"),
    path("availability/next/", NextAvailableSlotAPIView.as_view(), name="availability-next"),
]
