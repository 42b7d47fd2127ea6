# apps/bookingapp/filters.py
from django_filters import rest_framework as filters

from apps.bookingapp.models import Appointment, Block


class AppointmentFilter(filters.FilterSet):
    """Filter for appointments by target, status and day"""

    staff_id = filters.UUIDFilter(field_name="staff_id")
    resource_id = filters.UUIDFilter(field_name="resource_id")
    statuses = filters.MultipleChoiceFilter(
        field_name="status", choices=Appointment.STATUS_CHOICES
    )

    # Date filtering
    start_date = filters.DateFilter(field_name="start_at", lookup_expr="date__gte")
    end_date = filters.DateFilter(field_name="start_at", lookup_expr="date__lte")

    class Meta:
        model = Appointment
        fields = ["status", "staff_id", "resource_id", "start_date", "end_date"]


class BlockFilter(filters.FilterSet):
    """Filter for blocked time"""

    staff_id = filters.UUIDFilter(field_name="staff_id")
    resource_id = filters.UUIDFilter(field_name="resource_id")
    block_type = filters.ChoiceFilter(choices=Block.BLOCK_TYPE_CHOICES)
    start_date = filters.DateFilter(field_name="start_at", lookup_expr="date__gte")
    end_date = filters.DateFilter(field_name="start_at", lookup_expr="date__lte")

    class Meta:
        model = Block
        fields = ["staff_id", "resource_id", "block_type", "start_date", "end_date"]
