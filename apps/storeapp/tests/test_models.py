# apps/storeapp/tests/test_models.py
from datetime import date, time

from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.test import TestCase

from apps.storeapp.models import StoreClosure, StoreHours

from .helpers import create_resource, create_staff, create_test_store


class StoreHoursModelTest(TestCase):
    """Test cases for the StoreHours model"""

    def setUp(self):
        self.store = create_test_store()

    def test_weekday_for_uses_sunday_as_zero(self):
        # 2026-03-15 is a Sunday, 2026-03-16 a Monday, 2026-03-21 a Saturday
        self.assertEqual(StoreHours.weekday_for(date(2026, 3, 15)), 0)
        self.assertEqual(StoreHours.weekday_for(date(2026, 3, 16)), 1)
        self.assertEqual(StoreHours.weekday_for(date(2026, 3, 21)), 6)

    def test_clean_rejects_close_before_open(self):
        hours = StoreHours(
            store=self.store, weekday=1, open_time=time(18, 0), close_time=time(9, 0)
        )
        with self.assertRaises(ValidationError):
            hours.clean()

    def test_clean_allows_any_times_when_closed(self):
        hours = StoreHours(
            store=self.store,
            weekday=1,
            open_time=time(18, 0),
            close_time=time(9, 0),
            is_closed=True,
        )
        hours.clean()

    def test_one_row_per_weekday(self):
        StoreHours.objects.create(
            store=self.store, weekday=2, open_time=time(9, 0), close_time=time(17, 0)
        )
        with self.assertRaises(IntegrityError):
            StoreHours.objects.create(
                store=self.store, weekday=2, open_time=time(10, 0), close_time=time(16, 0)
            )

    def test_str(self):
        hours = StoreHours.objects.create(
            store=self.store, weekday=0, open_time=time(9, 0), close_time=time(17, 0)
        )
        self.assertEqual(str(hours), "Test Store - Sunday: 09:00 - 17:00")


class StoreClosureModelTest(TestCase):
    """Test cases for the StoreClosure model"""

    def test_one_closure_per_date(self):
        store = create_test_store()
        StoreClosure.objects.create(store=store, date=date(2026, 3, 15))
        with self.assertRaises(IntegrityError):
            StoreClosure.objects.create(store=store, date=date(2026, 3, 15))


class TargetModelTest(TestCase):
    """Test cases for staff and resources"""

    def test_str(self):
        store = create_test_store()
        self.assertEqual(str(create_staff(store, name="Lina")), "Lina (Test Store)")
        self.assertEqual(
            str(create_resource(store, name="Rack A", resource_type="rack")),
            "Rack A (Rack)",
        )
