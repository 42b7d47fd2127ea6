"""
Booking app views for StoreOps platform
Handles availability, conflict checks, appointments, booking items and blocks
"""

from django.conf import settings
from django.core.exceptions import ValidationError
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.response import Response
from rest_framework.views import APIView

from api.documentation.parameters import (
    CONFLICT_REF_SCHEMA,
    DATE_PARAM,
    DAYS_PARAM,
    DURATION_PARAM,
    ERROR_SCHEMA,
    EXCLUDE_BOOKING_ID_PARAM,
    RESOURCE_ID_PARAM,
    STAFF_ID_PARAM,
)
from apps.bookingapp.filters import AppointmentFilter, BlockFilter
from apps.bookingapp.models import Appointment, Block, BookingItem
from apps.bookingapp.serializers import (
    AppointmentCancelSerializer,
    AppointmentSerializer,
    BlockSerializer,
    BookingItemSerializer,
    ConflictCheckSerializer,
    SlotSerializer,
)
from apps.bookingapp.services.availability_service import AvailabilityService
from apps.bookingapp.services.booking_service import BookingService
from apps.bookingapp.services.conflict_service import ConflictService
from apps.bookingapp.services.intervals import STAFF, BookingTarget
from apps.storeapp.models import BookableResource, Staff
from core.exceptions import InvalidDataException, ResourceNotFoundException
from core.mixins import StoreContextMixin, StoreScopedMixin
from core.utils.formatters import format_hm
from core.utils.validators import parse_iso_date, parse_positive_int, validate_uuid

MAX_SEARCH_DAYS = 31


def ensure_target_in_store(store, target: BookingTarget):
    """Raise a 404 unless the staff member/resource exists in ``store``"""
    model, label = (Staff, "Staff") if target.kind == STAFF else (BookableResource, "Resource")
    try:
        target_id = validate_uuid(target.id)
    except ValidationError:
        raise ResourceNotFoundException(f"{label} not found")

    if not model.objects.filter(pk=target_id, store=store).exists():
        raise ResourceNotFoundException(f"{label} not found")


# --------------------------------------------------------------------------
# API: Availability
# --------------------------------------------------------------------------
class AvailabilityAPIView(StoreContextMixin, APIView):
    """
    API endpoint for the bookable slots of a staff member or resource on one date
    """

    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        manual_parameters=[
            STAFF_ID_PARAM,
            RESOURCE_ID_PARAM,
            DATE_PARAM,
            DURATION_PARAM,
            EXCLUDE_BOOKING_ID_PARAM,
        ],
        responses={
            200: openapi.Response(
                description="Candidate slots of the day",
                schema=openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        "date": openapi.Schema(type=openapi.TYPE_STRING),
                        "duration_minutes": openapi.Schema(type=openapi.TYPE_INTEGER),
                        "open_time": openapi.Schema(type=openapi.TYPE_STRING),
                        "close_time": openapi.Schema(type=openapi.TYPE_STRING),
                        "message": openapi.Schema(type=openapi.TYPE_STRING),
                        "slots": openapi.Schema(
                            type=openapi.TYPE_ARRAY,
                            items=openapi.Schema(
                                type=openapi.TYPE_OBJECT,
                                properties={
                                    "start": openapi.Schema(type=openapi.TYPE_STRING, description="Start time (HH:MM)"),
                                    "end": openapi.Schema(type=openapi.TYPE_STRING, description="End time (HH:MM)"),
                                    "available": openapi.Schema(type=openapi.TYPE_BOOLEAN),
                                },
                            ),
                        ),
                    },
                ),
            ),
            400: ERROR_SCHEMA,
            403: ERROR_SCHEMA,
            404: ERROR_SCHEMA,
            503: ERROR_SCHEMA,
        },
    )
    def get(self, request):
        """
        Get the time slots of a staff member or resource on a specific date
        """
        store = self.get_store()
        params = request.query_params

        try:
            target = BookingTarget.from_ids(params.get("staff_id"), params.get("resource_id"))
        except InvalidDataException as e:
            return Response({"error": str(e.message)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            target_date = parse_iso_date(params.get("date"))
            duration_minutes = parse_positive_int(
                params.get("duration_minutes"),
                default=settings.STOREOPS["DEFAULT_DURATION_MINUTES"],
                field_name="duration_minutes",
            )
        except ValidationError as e:
            return Response({"error": e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)

        exclude_booking_id = params.get("exclude_booking_id") or None
        if exclude_booking_id:
            try:
                exclude_booking_id = validate_uuid(exclude_booking_id)
            except ValidationError:
                return Response(
                    {"error": "exclude_booking_id must be a valid UUID"},
                    status=status.HTTP_400_BAD_REQUEST,
                )

        ensure_target_in_store(store, target)

        result = AvailabilityService.generate_slots(
            store.id,
            target,
            target_date,
            duration_minutes=duration_minutes,
            exclude_booking_id=exclude_booking_id,
        )

        data = {
            "date": target_date.isoformat(),
            target.field_name: str(target.id),
            "duration_minutes": duration_minutes,
        }
        if result["is_closed"]:
            data["slots"] = []
            data["message"] = result["message"]
            return Response(data)

        data["open_time"] = format_hm(result["open_time"])
        data["close_time"] = format_hm(result["close_time"])
        data["slots"] = SlotSerializer(result["slots"], many=True).data
        return Response(data)


# --------------------------------------------------------------------------
# API: Conflict check
# --------------------------------------------------------------------------
class ConflictCheckAPIView(StoreContextMixin, APIView):
    """
    API endpoint to check a proposed range against existing bookings and blocks
    """

    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        request_body=ConflictCheckSerializer,
        responses={
            200: openapi.Response(
                description="Conflict check result",
                schema=openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        "has_conflict": openapi.Schema(type=openapi.TYPE_BOOLEAN),
                        "conflicts": openapi.Schema(
                            type=openapi.TYPE_ARRAY, items=CONFLICT_REF_SCHEMA
                        ),
                    },
                ),
            ),
            400: ERROR_SCHEMA,
            403: ERROR_SCHEMA,
            404: ERROR_SCHEMA,
        },
    )
    def post(self, request):
        store = self.get_store()

        serializer = ConflictCheckSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        target = BookingTarget.from_ids(data.get("staff_id"), data.get("resource_id"))
        ensure_target_in_store(store, target)

        result = ConflictService.check_conflicts(
            store.id,
            target,
            data["start_at"],
            data["end_at"],
            exclude_booking_id=data.get("exclude_booking_id"),
        )
        return Response(result)


class NextAvailableSlotAPIView(StoreContextMixin, APIView):
    """
    API endpoint for the earliest free slot of a staff member or resource,
    scanning forward from a date
    """

    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        manual_parameters=[
            STAFF_ID_PARAM,
            RESOURCE_ID_PARAM,
            DATE_PARAM,
            DURATION_PARAM,
            DAYS_PARAM,
        ],
        responses={
            200: openapi.Response(
                description="First available slot, or null with a message",
                schema=openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        "duration_minutes": openapi.Schema(type=openapi.TYPE_INTEGER),
                        "slot": openapi.Schema(
                            type=openapi.TYPE_OBJECT,
                            x_nullable=True,
                            properties={
                                "date": openapi.Schema(type=openapi.TYPE_STRING),
                                "start": openapi.Schema(type=openapi.TYPE_STRING, description="Start time (HH:MM)"),
                                "end": openapi.Schema(type=openapi.TYPE_STRING, description="End time (HH:MM)"),
                            },
                        ),
                        "message": openapi.Schema(type=openapi.TYPE_STRING),
                    },
                ),
            ),
            400: ERROR_SCHEMA,
            403: ERROR_SCHEMA,
            404: ERROR_SCHEMA,
            503: ERROR_SCHEMA,
        },
    )
    def get(self, request):
        store = self.get_store()
        params = request.query_params

        try:
            target = BookingTarget.from_ids(params.get("staff_id"), params.get("resource_id"))
        except InvalidDataException as e:
            return Response({"error": str(e.message)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            start_date = parse_iso_date(params.get("date"))
            duration_minutes = parse_positive_int(
                params.get("duration_minutes"),
                default=settings.STOREOPS["DEFAULT_DURATION_MINUTES"],
                field_name="duration_minutes",
            )
            days = parse_positive_int(params.get("days"), default=7, field_name="days")
        except ValidationError as e:
            return Response({"error": e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)

        if days > MAX_SEARCH_DAYS:
            return Response(
                {"error": f"days must be at most {MAX_SEARCH_DAYS}"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        ensure_target_in_store(store, target)

        slot = AvailabilityService.find_next_available_slot(
            store.id,
            target,
            start_date,
            duration_minutes=duration_minutes,
            days_to_check=days,
        )

        data = {target.field_name: str(target.id), "duration_minutes": duration_minutes}
        if slot is None:
            data["slot"] = None
            data["message"] = f"No available slot in the next {days} days"
            return Response(data)

        data["slot"] = {
            "date": slot["start"].date().isoformat(),
            "start": format_hm(slot["start"]),
            "end": format_hm(slot["end"]),
        }
        return Response(data)


# --------------------------------------------------------------------------
# ViewSets
# --------------------------------------------------------------------------
class AppointmentViewSet(StoreScopedMixin, viewsets.ModelViewSet):
    """
    API endpoint for managing appointments

    Writes go through ``BookingService`` which re-checks conflicts under a
    row lock and answers 409 when the target is already busy.
    """

    queryset = Appointment.objects.select_related("staff", "resource")
    serializer_class = AppointmentSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = AppointmentFilter
    search_fields = ["customer_name", "customer_phone"]
    ordering_fields = ["start_at", "created_at", "status"]
    ordering = ["-start_at"]
    http_method_names = ["get", "post", "put", "patch", "head", "options"]

    def perform_create(self, serializer):
        serializer.instance = BookingService.create_appointment(
            self.get_store(), serializer.validated_data
        )

    def perform_update(self, serializer):
        serializer.instance = BookingService.reschedule_appointment(
            serializer.instance, serializer.validated_data
        )

    @swagger_auto_schema(request_body=AppointmentCancelSerializer)
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        """Cancel an appointment"""
        appointment = self.get_object()

        serializer = AppointmentCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cancelled = BookingService.cancel_appointment(
            appointment, serializer.validated_data.get("reason", "")
        )
        return Response(self.get_serializer(cancelled).data)


class BookingItemViewSet(
    StoreScopedMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """
    API endpoint for the items of appointments
    """

    queryset = BookingItem.objects.select_related("appointment", "staff", "resource")
    serializer_class = BookingItemSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_fields = ["appointment", "staff", "resource", "status"]
    ordering = ["start_at"]

    def perform_create(self, serializer):
        serializer.instance = BookingService.create_booking_item(
            self.get_store(), serializer.validated_data
        )


class BlockViewSet(StoreScopedMixin, viewsets.ModelViewSet):
    """
    API endpoint for blocked time of staff members and resources
    """

    queryset = Block.objects.select_related("staff", "resource")
    serializer_class = BlockSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = BlockFilter
    ordering_fields = ["start_at", "created_at"]
    ordering = ["-start_at"]
