# apps/storeapp/services/calendar_service.py
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from django.conf import settings
from django.db import DatabaseError

from apps.storeapp.models import StoreClosure, StoreHours
from core.exceptions import AvailabilityLookupException, BookingRecordException

logger = logging.getLogger(__name__)

REASON_DATE_CLOSURE = "date_closure"
REASON_WEEKDAY_CLOSED = "weekday_closed"


class DayWindow:
    """Effective opening window of one store on one date."""

    def __init__(
        self,
        day: date,
        open_time: time,
        close_time: time,
        is_closed: bool = False,
        reason: Optional[str] = None,
    ):
        self.date = day
        self.open_time = open_time
        self.close_time = close_time
        self.is_closed = is_closed
        self.reason = reason

    def __repr__(self):
        state = f"closed:{self.reason}" if self.is_closed else "open"
        return (
            f"<DayWindow {self.date.isoformat()} "
            f"{self.open_time.strftime('%H:%M')}-{self.close_time.strftime('%H:%M')} {state}>"
        )

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.date, self.open_time)

    @property
    def ends_at(self) -> datetime:
        return datetime.combine(self.date, self.close_time)

    def to_dict(self):
        data = {
            "date": self.date.isoformat(),
            "open_time": self.open_time.strftime("%H:%M"),
            "close_time": self.close_time.strftime("%H:%M"),
            "is_closed": self.is_closed,
        }
        if self.reason:
            data["reason"] = self.reason
        return data


class CalendarService:
    """
    Resolves a store's effective opening window for a date.

    Precedence, highest first:
    1. a ``StoreClosure`` for that exact date closes the whole day;
    2. the ``StoreHours`` row for the date's weekday;
    3. the platform default window (``STOREOPS["DEFAULT_OPEN_TIME"/"DEFAULT_CLOSE_TIME"]``).
    """

    @staticmethod
    def default_window():
        policy = settings.STOREOPS
        open_time = datetime.strptime(policy["DEFAULT_OPEN_TIME"], "%H:%M").time()
        close_time = datetime.strptime(policy["DEFAULT_CLOSE_TIME"], "%H:%M").time()
        return open_time, close_time

    @classmethod
    def resolve_day(cls, store_id, day: date) -> DayWindow:
        """
        Resolve the opening window of ``store_id`` on ``day``.

        Args:
            store_id: ID of the store (tenant)
            day: Naive local date

        Returns:
            DayWindow with ``is_closed`` and ``reason`` set when the store is closed

        Raises:
            AvailabilityLookupException: if hours or closures can't be read
        """
        default_open, default_close = cls.default_window()

        try:
            has_closure = StoreClosure.objects.filter(
                store_id=store_id, date=day
            ).exists()
            if has_closure:
                logger.info(f"Store {store_id} has a closure on {day}")
                return DayWindow(
                    day, default_open, default_close, True, REASON_DATE_CLOSURE
                )

            hours = (
                StoreHours.objects.filter(
                    store_id=store_id, weekday=StoreHours.weekday_for(day)
                )
                .values("open_time", "close_time", "is_closed")
                .first()
            )
        except DatabaseError as e:
            logger.exception(f"Error reading calendar for store {store_id} on {day}")
            raise AvailabilityLookupException(
                f"Could not read store hours: {str(e)}"
            ) from e

        if hours is None:
            return DayWindow(day, default_open, default_close)

        open_time = hours["open_time"]
        close_time = hours["close_time"]
        if not isinstance(open_time, time) or not isinstance(close_time, time):
            raise BookingRecordException(
                f"Store hours for store {store_id} on weekday "
                f"{StoreHours.weekday_for(day)} have no valid times"
            )

        if hours["is_closed"]:
            return DayWindow(day, open_time, close_time, True, REASON_WEEKDAY_CLOSED)

        return DayWindow(day, open_time, close_time)

    @classmethod
    def resolve_range(cls, store_id, start_date: date, days: int) -> List[DayWindow]:
        """Resolve ``days`` consecutive dates starting at ``start_date``."""
        return [
            cls.resolve_day(store_id, start_date + timedelta(days=offset))
            for offset in range(days)
        ]
