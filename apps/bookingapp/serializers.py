# apps/bookingapp/serializers.py
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from apps.bookingapp.models import Appointment, Block, BookingItem
from core.fields import WallClockDateTimeField, WallClockModelSerializer


class AppointmentSerializer(WallClockModelSerializer):
    """Serializer for appointments"""

    status_display = serializers.CharField(source="get_status_display", read_only=True)
    duration_minutes = serializers.IntegerField(read_only=True)

    class Meta:
        model = Appointment
        fields = [
            "id",
            "store",
            "staff",
            "resource",
            "start_at",
            "end_at",
            "duration_minutes",
            "customer_name",
            "customer_phone",
            "status",
            "status_display",
            "notes",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "store",
            "status_display",
            "duration_minutes",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]

    def validate(self, data):
        """Validate the time range and that a target is given"""
        start_at = data.get("start_at", getattr(self.instance, "start_at", None))
        end_at = data.get("end_at", getattr(self.instance, "end_at", None))
        staff = data.get("staff", getattr(self.instance, "staff", None))
        resource = data.get("resource", getattr(self.instance, "resource", None))

        if start_at and end_at and end_at <= start_at:
            raise serializers.ValidationError({"end_at": _("end_at must be after start_at")})

        if staff is None and resource is None:
            raise serializers.ValidationError(_("staff_id or resource_id is required"))

        return data


class AppointmentCancelSerializer(serializers.Serializer):
    """Serializer for cancelling an appointment"""

    reason = serializers.CharField(required=False, allow_blank=True, default="")


class BookingItemSerializer(WallClockModelSerializer):
    """Serializer for booking items"""

    class Meta:
        model = BookingItem
        fields = [
            "id",
            "store",
            "appointment",
            "staff",
            "resource",
            "start_at",
            "end_at",
            "price",
            "status",
            "notes",
            "created_at",
        ]
        read_only_fields = ["id", "store", "created_at"]

    def validate(self, data):
        start_at = data.get("start_at")
        end_at = data.get("end_at")
        if start_at and end_at and end_at <= start_at:
            raise serializers.ValidationError({"end_at": _("end_at must be after start_at")})
        return data


class BlockSerializer(WallClockModelSerializer):
    """Serializer for blocked time"""

    block_type_display = serializers.CharField(
        source="get_block_type_display", read_only=True
    )

    class Meta:
        model = Block
        fields = [
            "id",
            "store",
            "staff",
            "resource",
            "start_at",
            "end_at",
            "reason",
            "block_type",
            "block_type_display",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "store", "block_type_display", "created_at", "updated_at"]

    def validate(self, data):
        """Validate the range, the target, and that the target belongs to the store"""
        start_at = data.get("start_at", getattr(self.instance, "start_at", None))
        end_at = data.get("end_at", getattr(self.instance, "end_at", None))
        staff = data.get("staff", getattr(self.instance, "staff", None))
        resource = data.get("resource", getattr(self.instance, "resource", None))

        if start_at and end_at and end_at <= start_at:
            raise serializers.ValidationError({"end_at": _("end_at must be after start_at")})

        if staff is None and resource is None:
            raise serializers.ValidationError(_("staff_id or resource_id is required"))

        store = self.context.get("store")
        if store is not None:
            if staff is not None and staff.store_id != store.id:
                raise serializers.ValidationError({"staff": _("Staff not found")})
            if resource is not None and resource.store_id != store.id:
                raise serializers.ValidationError({"resource": _("Resource not found")})

        return data


class ConflictCheckSerializer(serializers.Serializer):
    """Input of the conflict check endpoint"""

    staff_id = serializers.UUIDField(required=False, allow_null=True)
    resource_id = serializers.UUIDField(required=False, allow_null=True)
    start_at = WallClockDateTimeField()
    end_at = WallClockDateTimeField()
    exclude_booking_id = serializers.UUIDField(required=False, allow_null=True)

    def validate(self, data):
        if data["end_at"] <= data["start_at"]:
            raise serializers.ValidationError({"end_at": _("end_at must be after start_at")})
        return data


class SlotSerializer(serializers.Serializer):
    """Serializer for a candidate slot (times as HH:MM)"""

    start = serializers.DateTimeField(format="%H:%M")
    end = serializers.DateTimeField(format="%H:%M")
    available = serializers.BooleanField()
