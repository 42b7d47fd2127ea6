# api/v1/urls.py
from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from apps.bookingapp.views import AppointmentViewSet, BlockViewSet, BookingItemViewSet
from apps.storeapp.views import (
    BookableResourceViewSet,
    StaffViewSet,
    StoreClosureViewSet,
    StoreHoursViewSet,
)

# Create a router for v1 API endpoints
router = DefaultRouter()

# Register routes
router.register(r"appointments", AppointmentViewSet, basename="appointment")
router.register(r"booking-items", BookingItemViewSet, basename="booking-item")
router.register(r"blocks", BlockViewSet, basename="block")
router.register(r"staff", StaffViewSet, basename="staff")
router.register(r"resources", BookableResourceViewSet, basename="resource")
router.register(r"store-hours", StoreHoursViewSet, basename="store-hours")
router.register(r"store-closures", StoreClosureViewSet, basename="store-closure")

# API URLs
urlpatterns = [
    # Authentication
    path("auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    # Availability and calendar endpoints
    path("", include("apps.bookingapp.urls")),
    path("", include("apps.storeapp.urls")),
    # Include router URLs
    path("", include(router.urls)),
]
