# apps/storeapp/serializers.py
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from apps.storeapp.models import BookableResource, Staff, StoreClosure, StoreHours


class StaffSerializer(serializers.ModelSerializer):
    """Serializer for staff members"""

    class Meta:
        model = Staff
        fields = ["id", "store", "name", "role", "is_active", "created_at"]
        read_only_fields = ["id", "store", "created_at"]


class BookableResourceSerializer(serializers.ModelSerializer):
    """Serializer for bookable resources"""

    resource_type_display = serializers.CharField(
        source="get_resource_type_display", read_only=True
    )

    class Meta:
        model = BookableResource
        fields = [
            "id",
            "store",
            "name",
            "resource_type",
            "resource_type_display",
            "capacity",
            "is_active",
            "created_at",
        ]
        read_only_fields = ["id", "store", "resource_type_display", "created_at"]


class StoreHoursSerializer(serializers.ModelSerializer):
    """Serializer for weekly store hours (weekday 0 = Sunday)"""

    weekday_display = serializers.CharField(source="get_weekday_display", read_only=True)

    class Meta:
        model = StoreHours
        fields = [
            "id",
            "store",
            "weekday",
            "weekday_display",
            "open_time",
            "close_time",
            "is_closed",
        ]
        read_only_fields = ["id", "store", "weekday_display"]

    def validate(self, data):
        """Check the time range and that each weekday is defined once per store"""
        open_time = data.get("open_time", getattr(self.instance, "open_time", None))
        close_time = data.get("close_time", getattr(self.instance, "close_time", None))
        is_closed = data.get("is_closed", getattr(self.instance, "is_closed", False))

        if not is_closed and open_time and close_time and close_time <= open_time:
            raise serializers.ValidationError(
                {"close_time": _("Close time must be after open time")}
            )

        store = self.context.get("store")
        weekday = data.get("weekday")
        if store is not None and weekday is not None:
            existing = StoreHours.objects.filter(store=store, weekday=weekday)
            if self.instance:
                existing = existing.exclude(pk=self.instance.pk)
            if existing.exists():
                raise serializers.ValidationError(
                    {"weekday": _("Hours for this weekday already exist")}
                )

        return data


class StoreClosureSerializer(serializers.ModelSerializer):
    """Serializer for one-off store closures"""

    class Meta:
        model = StoreClosure
        fields = ["id", "store", "date", "reason", "created_at"]
        read_only_fields = ["id", "store", "created_at"]

    def validate_date(self, value):
        store = self.context.get("store")
        if store is not None:
            existing = StoreClosure.objects.filter(store=store, date=value)
            if self.instance:
                existing = existing.exclude(pk=self.instance.pk)
            if existing.exists():
                raise serializers.ValidationError(_("Store is already closed on this date"))
        return value
