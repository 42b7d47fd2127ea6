# apps/bookingapp/services/availability_service.py
import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from django.conf import settings

from apps.bookingapp.services.conflict_service import ConflictService
from apps.bookingapp.services.intervals import BookingTarget
from apps.storeapp.services.calendar_service import (
    REASON_DATE_CLOSURE,
    REASON_WEEKDAY_CLOSED,
    CalendarService,
)
from core.exceptions import InvalidDataException

logger = logging.getLogger(__name__)

CLOSED_MESSAGES = {
    REASON_WEEKDAY_CLOSED: "Store is closed on this day",
    REASON_DATE_CLOSURE: "Store is closed on this date",
}


class AvailabilityService:
    """
    Generates bookable slots for a staff member or resource on one date.

    Slots are fixed-size candidates laid out every ``SLOT_STEP_MINUTES`` across
    the store's open window. Each is tagged available or not; nothing is cached,
    so every call reflects the current bookings.
    """

    @staticmethod
    def slot_step_minutes() -> int:
        return settings.STOREOPS["SLOT_STEP_MINUTES"]

    @staticmethod
    def default_duration_minutes() -> int:
        return settings.STOREOPS["DEFAULT_DURATION_MINUTES"]

    @staticmethod
    def candidate_starts(
        day_start: datetime, day_end: datetime, duration: timedelta, step: timedelta
    ) -> List[datetime]:
        """Every start time whose slot fits entirely inside ``[day_start, day_end]``"""
        starts = []
        current = day_start
        while current + duration <= day_end:
            starts.append(current)
            current += step
        return starts

    @classmethod
    def generate_slots(
        cls,
        store_id,
        target: BookingTarget,
        target_date: date,
        duration_minutes: Optional[int] = None,
        exclude_booking_id=None,
    ) -> Dict[str, Any]:
        """
        Calculate the slots of ``target`` on ``target_date``.

        Args:
            store_id: ID of the store (tenant)
            target: Staff member or resource
            target_date: Naive local date
            duration_minutes: Slot length, defaults to ``DEFAULT_DURATION_MINUTES``
            exclude_booking_id: Appointment to ignore (when rescheduling it)

        Returns:
            Dict with ``date``, ``open_time``, ``close_time``, ``is_closed``,
            ``slots`` (list of ``{start, end, available, conflicts}``) and, when
            closed, ``message``

        Raises:
            InvalidDataException: on a non-positive duration
            AvailabilityLookupException: if calendar or booking data can't be read;
                no partial slot list is ever returned
        """
        if duration_minutes is None:
            duration_minutes = cls.default_duration_minutes()
        if duration_minutes <= 0:
            raise InvalidDataException("duration_minutes must be a positive integer")

        window = CalendarService.resolve_day(store_id, target_date)
        result = {
            "date": target_date,
            "open_time": window.open_time,
            "close_time": window.close_time,
            "is_closed": window.is_closed,
            "slots": [],
        }

        if window.is_closed:
            logger.info(f"Store {store_id} is closed on {target_date} ({window.reason})")
            result["message"] = CLOSED_MESSAGES.get(window.reason, "Store is closed")
            return result

        duration = timedelta(minutes=duration_minutes)
        step = timedelta(minutes=cls.slot_step_minutes())
        starts = cls.candidate_starts(window.starts_at, window.ends_at, duration, step)
        if not starts:
            return result

        # One read for the whole open window, then every candidate in memory
        intervals = ConflictService.collect_intervals(
            store_id,
            target,
            window.starts_at,
            window.ends_at,
            exclude_booking_id=exclude_booking_id,
        )

        for start in starts:
            end = start + duration
            conflicts = ConflictService.find_conflicts(
                intervals, start, end, exclude_booking_id
            )
            result["slots"].append(
                {
                    "start": start,
                    "end": end,
                    "available": not conflicts,
                    "conflicts": [interval.to_conflict_ref() for interval in conflicts],
                }
            )

        return result

    @classmethod
    def find_next_available_slot(
        cls,
        store_id,
        target: BookingTarget,
        start_date: date,
        duration_minutes: Optional[int] = None,
        days_to_check: int = 7,
    ) -> Optional[Dict[str, Any]]:
        """
        Find the earliest available slot within a date range.

        Returns:
            The first available slot dict, or None if none is free
        """
        current_date = start_date

        for _ in range(days_to_check):
            generated = cls.generate_slots(
                store_id, target, current_date, duration_minutes=duration_minutes
            )
            for slot in generated["slots"]:
                if slot["available"]:
                    return slot

            current_date += timedelta(days=1)

        return None
