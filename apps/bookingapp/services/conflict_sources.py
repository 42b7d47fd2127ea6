# apps/bookingapp/services/conflict_sources.py
"""
Sources of busy time for the conflict checker.

Each source reads one kind of record for a single store and target. The
checker unions whatever sources are configured in
``settings.STOREOPS["CONFLICT_SOURCES"]``.
"""

import logging
from datetime import datetime
from typing import List

from apps.bookingapp.models import Appointment, Block, BookingItem
from apps.bookingapp.services.intervals import BookingTarget, BusyInterval

logger = logging.getLogger(__name__)


class ConflictSource:
    """Base class: fetch live intervals of one record type overlapping a window"""

    conflict_type = None
    model = None
    inactive_statuses = ()
    # Field compared with exclude_booking_id in the query pre-filter
    exclude_field = None
    # Field holding the owning appointment id, copied onto the interval
    booking_field = None
    reason_field = None

    def get_queryset(self, store_id, target: BookingTarget):
        queryset = self.model.objects.filter(store_id=store_id, **target.filter_kwargs())
        if self.inactive_statuses:
            queryset = queryset.exclude(status__in=self.inactive_statuses)
        return queryset

    def fetch(
        self,
        store_id,
        target: BookingTarget,
        window_start: datetime,
        window_end: datetime,
        exclude_booking_id=None,
    ) -> List[BusyInterval]:
        """
        Live intervals for ``store_id`` + ``target`` that may overlap the window.

        The date range filter is only a pre-filter; callers still run the
        overlap predicate on the result.
        """
        queryset = self.get_queryset(store_id, target).filter(
            start_at__lt=window_end, end_at__gt=window_start
        )
        if exclude_booking_id and self.exclude_field:
            queryset = queryset.exclude(**{self.exclude_field: exclude_booking_id})

        fields = ["id", "start_at", "end_at"]
        if self.booking_field and self.booking_field != "id":
            fields.append(self.booking_field)
        if self.reason_field:
            fields.append(self.reason_field)

        return [
            BusyInterval.from_row(
                self.conflict_type,
                row,
                booking_field=self.booking_field,
                reason_field=self.reason_field,
            )
            for row in queryset.values(*fields)
        ]


class AppointmentConflictSource(ConflictSource):
    conflict_type = "appointment"
    model = Appointment
    inactive_statuses = Appointment.INACTIVE_STATUSES
    exclude_field = "id"
    booking_field = "id"


class BookingItemConflictSource(ConflictSource):
    conflict_type = "booking_item"
    model = BookingItem
    inactive_statuses = BookingItem.INACTIVE_STATUSES
    exclude_field = "appointment_id"
    booking_field = "appointment_id"


class BlockConflictSource(ConflictSource):
    conflict_type = "block"
    model = Block
    reason_field = "reason"
