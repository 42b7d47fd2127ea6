# apps/storeapp/tests/test_services.py
from datetime import date, datetime, time
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase, override_settings

from apps.storeapp.models import StoreClosure, StoreHours
from apps.storeapp.services.calendar_service import (
    REASON_DATE_CLOSURE,
    REASON_WEEKDAY_CLOSED,
    CalendarService,
    DayWindow,
)
from core.exceptions import AvailabilityLookupException, BookingRecordException

from .helpers import create_test_store

SUNDAY = date(2026, 3, 15)


class CalendarServiceTest(TestCase):
    """Test cases for the CalendarService"""

    def setUp(self):
        self.store = create_test_store()

    def test_default_window_when_no_hours(self):
        window = CalendarService.resolve_day(self.store.id, SUNDAY)

        self.assertFalse(window.is_closed)
        self.assertIsNone(window.reason)
        self.assertEqual(window.open_time, time(9, 0))
        self.assertEqual(window.close_time, time(18, 0))

    @override_settings(
        STOREOPS={
            "DEFAULT_OPEN_TIME": "08:00",
            "DEFAULT_CLOSE_TIME": "12:00",
            "SLOT_STEP_MINUTES": 30,
            "DEFAULT_DURATION_MINUTES": 30,
            "CONFLICT_SOURCES": [],
        }
    )
    def test_default_window_comes_from_settings(self):
        window = CalendarService.resolve_day(self.store.id, SUNDAY)

        self.assertEqual(window.open_time, time(8, 0))
        self.assertEqual(window.close_time, time(12, 0))

    def test_weekday_hours(self):
        StoreHours.objects.create(
            store=self.store, weekday=0, open_time=time(10, 0), close_time=time(14, 0)
        )

        window = CalendarService.resolve_day(self.store.id, SUNDAY)

        self.assertFalse(window.is_closed)
        self.assertEqual(window.starts_at, datetime(2026, 3, 15, 10, 0))
        self.assertEqual(window.ends_at, datetime(2026, 3, 15, 14, 0))

    def test_hours_of_other_weekday_are_ignored(self):
        StoreHours.objects.create(
            store=self.store, weekday=1, open_time=time(10, 0), close_time=time(14, 0)
        )

        window = CalendarService.resolve_day(self.store.id, SUNDAY)

        self.assertEqual(window.open_time, time(9, 0))

    def test_weekday_closed(self):
        StoreHours.objects.create(
            store=self.store,
            weekday=0,
            open_time=time(9, 0),
            close_time=time(18, 0),
            is_closed=True,
        )

        window = CalendarService.resolve_day(self.store.id, SUNDAY)

        self.assertTrue(window.is_closed)
        self.assertEqual(window.reason, REASON_WEEKDAY_CLOSED)

    def test_closure_beats_open_hours(self):
        StoreHours.objects.create(
            store=self.store, weekday=0, open_time=time(9, 0), close_time=time(18, 0)
        )
        StoreClosure.objects.create(store=self.store, date=SUNDAY, reason="Holiday")

        window = CalendarService.resolve_day(self.store.id, SUNDAY)

        self.assertTrue(window.is_closed)
        self.assertEqual(window.reason, REASON_DATE_CLOSURE)

    def test_closure_of_other_store_is_ignored(self):
        other = create_test_store(name="Other", username="otherowner")
        StoreClosure.objects.create(store=other, date=SUNDAY)

        window = CalendarService.resolve_day(self.store.id, SUNDAY)

        self.assertFalse(window.is_closed)

    def test_lookup_error_is_raised(self):
        with patch(
            "apps.storeapp.services.calendar_service.StoreClosure.objects.filter",
            side_effect=DatabaseError("connection lost"),
        ):
            with self.assertRaises(AvailabilityLookupException):
                CalendarService.resolve_day(self.store.id, SUNDAY)

    def test_malformed_hours_row_is_rejected(self):
        row = {"open_time": "09:00", "close_time": None, "is_closed": False}
        with patch(
            "apps.storeapp.services.calendar_service.StoreHours.objects.filter"
        ) as mock_filter:
            mock_filter.return_value.values.return_value.first.return_value = row
            with self.assertRaises(BookingRecordException):
                CalendarService.resolve_day(self.store.id, SUNDAY)

    def test_resolve_range(self):
        StoreClosure.objects.create(store=self.store, date=date(2026, 3, 16))

        windows = CalendarService.resolve_range(self.store.id, SUNDAY, 3)

        self.assertEqual([w.date for w in windows], [SUNDAY, date(2026, 3, 16), date(2026, 3, 17)])
        self.assertEqual([w.is_closed for w in windows], [False, True, False])


class DayWindowTest(TestCase):
    """Test cases for DayWindow"""

    def test_bounds(self):
        window = DayWindow(SUNDAY, time(9, 0), time(18, 0))

        self.assertEqual(window.starts_at, datetime(2026, 3, 15, 9, 0))
        self.assertEqual(window.ends_at, datetime(2026, 3, 15, 18, 0))

    def test_to_dict(self):
        window = DayWindow(SUNDAY, time(9, 0), time(18, 0), True, REASON_WEEKDAY_CLOSED)

        self.assertEqual(
            window.to_dict(),
            {
                "date": "2026-03-15",
                "open_time": "09:00",
                "close_time": "18:00",
                "is_closed": True,
                "reason": REASON_WEEKDAY_CLOSED,
            },
        )
