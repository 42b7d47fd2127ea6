"""
Store app views for StoreOps platform
Handles the tenant's staff, resources, weekly hours, closures and calendar
"""

from django.core.exceptions import ValidationError
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import permissions, status, viewsets
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.response import Response
from rest_framework.views import APIView

from api.documentation.parameters import DATE_PARAM, DAYS_PARAM, ERROR_SCHEMA
from apps.storeapp.models import BookableResource, Staff, StoreClosure, StoreHours
from apps.storeapp.serializers import (
    BookableResourceSerializer,
    StaffSerializer,
    StoreClosureSerializer,
    StoreHoursSerializer,
)
from apps.storeapp.services.calendar_service import CalendarService
from core.mixins import StoreContextMixin, StoreScopedMixin
from core.utils.validators import parse_iso_date, parse_positive_int

MAX_CALENDAR_DAYS = 31


class StaffViewSet(StoreScopedMixin, viewsets.ModelViewSet):
    """Staff members of the requesting user's store"""

    queryset = Staff.objects.all()
    serializer_class = StaffSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ["is_active"]
    search_fields = ["name", "role"]
    ordering_fields = ["name", "created_at"]


class BookableResourceViewSet(StoreScopedMixin, viewsets.ModelViewSet):
    """Rooms, racks, tables and equipment of the requesting user's store"""

    queryset = BookableResource.objects.all()
    serializer_class = BookableResourceSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ["resource_type", "is_active"]
    search_fields = ["name"]
    ordering_fields = ["name", "capacity", "created_at"]


class StoreHoursViewSet(StoreScopedMixin, viewsets.ModelViewSet):
    """Weekly opening hours, one row per weekday"""

    queryset = StoreHours.objects.all()
    serializer_class = StoreHoursSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_fields = ["weekday", "is_closed"]
    ordering = ["weekday"]


class StoreClosureViewSet(StoreScopedMixin, viewsets.ModelViewSet):
    """Full-day closures overriding the weekly hours"""

    queryset = StoreClosure.objects.all()
    serializer_class = StoreClosureSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_fields = ["date"]
    ordering = ["date"]


class CalendarAPIView(StoreContextMixin, APIView):
    """
    API endpoint for the store's effective opening windows
    """

    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        manual_parameters=[DATE_PARAM, DAYS_PARAM],
        responses={
            200: openapi.Response(
                description="Opening window of each day",
                schema=openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        "start_date": openapi.Schema(type=openapi.TYPE_STRING),
                        "days": openapi.Schema(
                            type=openapi.TYPE_ARRAY,
                            items=openapi.Schema(
                                type=openapi.TYPE_OBJECT,
                                properties={
                                    "date": openapi.Schema(type=openapi.TYPE_STRING),
                                    "open_time": openapi.Schema(type=openapi.TYPE_STRING),
                                    "close_time": openapi.Schema(type=openapi.TYPE_STRING),
                                    "is_closed": openapi.Schema(type=openapi.TYPE_BOOLEAN),
                                    "reason": openapi.Schema(type=openapi.TYPE_STRING),
                                },
                            ),
                        ),
                    },
                ),
            ),
            400: ERROR_SCHEMA,
            403: ERROR_SCHEMA,
        },
    )
    def get(self, request):
        """
        Resolve the opening window for ``days`` consecutive dates
        """
        store = self.get_store()

        try:
            start_date = parse_iso_date(request.query_params.get("date"))
            days = parse_positive_int(
                request.query_params.get("days"), default=7, field_name="days"
            )
        except ValidationError as e:
            return Response({"error": e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)

        if days > MAX_CALENDAR_DAYS:
            return Response(
                {"error": f"days must be at most {MAX_CALENDAR_DAYS}"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        windows = CalendarService.resolve_range(store.id, start_date, days)
        return Response(
            {
                "start_date": start_date.isoformat(),
                "days": [window.to_dict() for window in windows],
            }
        )
