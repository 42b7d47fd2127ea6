# apps/bookingapp/tests/test_services.py
from datetime import date, datetime, time, timedelta
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase

from apps.bookingapp.models import Appointment, Block, BookingItem
from apps.bookingapp.services.availability_service import AvailabilityService
from apps.bookingapp.services.booking_service import BookingService
from apps.bookingapp.services.conflict_service import ConflictService
from apps.bookingapp.services.conflict_sources import AppointmentConflictSource
from apps.bookingapp.services.intervals import BookingTarget
from apps.storeapp.models import StoreClosure, StoreHours
from apps.storeapp.tests.helpers import create_resource, create_staff, create_test_store
from core.exceptions import (
    AvailabilityLookupException,
    BookingRecordException,
    InvalidDataException,
    ResourceNotFoundException,
    SchedulingConflictException,
)

SUNDAY = date(2026, 3, 15)


def at(hour, minute=0, day=SUNDAY):
    return datetime.combine(day, time(hour, minute))


class ConflictServiceTest(TestCase):
    """Test cases for the ConflictService"""

    def setUp(self):
        self.store = create_test_store()
        self.staff = create_staff(self.store)
        self.resource = create_resource(self.store)
        self.target = BookingTarget.staff(self.staff.id)

    def book(self, start, end, **kwargs):
        kwargs.setdefault("staff", self.staff)
        return Appointment.objects.create(
            store=kwargs.pop("store", self.store), start_at=start, end_at=end, **kwargs
        )

    def test_no_conflict(self):
        result = ConflictService.check_conflicts(self.store.id, self.target, at(9), at(10))

        self.assertEqual(result, {"has_conflict": False, "conflicts": []})

    def test_overlapping_appointment(self):
        appointment = self.book(at(9, 30), at(10, 30))

        result = ConflictService.check_conflicts(self.store.id, self.target, at(9), at(10))

        self.assertTrue(result["has_conflict"])
        self.assertEqual(result["conflicts"][0]["type"], "appointment")
        self.assertEqual(result["conflicts"][0]["id"], str(appointment.id))

    def test_adjacent_appointment_is_not_a_conflict(self):
        self.book(at(8), at(9))
        self.book(at(10), at(11))

        result = ConflictService.check_conflicts(self.store.id, self.target, at(9), at(10))

        self.assertFalse(result["has_conflict"])

    def test_inactive_appointments_never_block(self):
        self.book(at(9), at(10), status="cancelled")
        self.book(at(9), at(10), status="no_show")

        result = ConflictService.check_conflicts(self.store.id, self.target, at(9), at(10))

        self.assertFalse(result["has_conflict"])

    def test_excluded_booking_never_conflicts_with_itself(self):
        appointment = self.book(at(9), at(10))

        result = ConflictService.check_conflicts(
            self.store.id, self.target, at(9), at(10), exclude_booking_id=appointment.id
        )

        self.assertFalse(result["has_conflict"])

    def test_other_store_is_invisible(self):
        other = create_test_store(name="Other", username="otherowner")
        self.book(at(9), at(10), store=other)

        result = ConflictService.check_conflicts(self.store.id, self.target, at(9), at(10))

        self.assertFalse(result["has_conflict"])

    def test_other_target_is_ignored(self):
        self.book(at(9), at(10), staff=create_staff(self.store, name="Other"))

        result = ConflictService.check_conflicts(self.store.id, self.target, at(9), at(10))

        self.assertFalse(result["has_conflict"])

    def test_block_is_a_conflict_with_reason(self):
        Block.objects.create(
            store=self.store, staff=self.staff, start_at=at(12), end_at=at(13), reason="Lunch"
        )

        result = ConflictService.check_conflicts(self.store.id, self.target, at(12, 30), at(13, 30))

        self.assertEqual(result["conflicts"][0]["type"], "block")
        self.assertEqual(result["conflicts"][0]["reason"], "Lunch")

    def test_booking_item_is_a_conflict_for_its_resource(self):
        appointment = self.book(at(9), at(11))
        BookingItem.objects.create(
            store=self.store,
            appointment=appointment,
            resource=self.resource,
            start_at=at(9),
            end_at=at(10),
        )
        target = BookingTarget.resource(self.resource.id)

        result = ConflictService.check_conflicts(self.store.id, target, at(9, 30), at(10, 30))
        excluded = ConflictService.check_conflicts(
            self.store.id, target, at(9, 30), at(10, 30), exclude_booking_id=appointment.id
        )

        self.assertEqual([c["type"] for c in result["conflicts"]], ["booking_item"])
        self.assertFalse(excluded["has_conflict"])

    def test_cancelled_item_never_blocks(self):
        appointment = self.book(at(9), at(11))
        BookingItem.objects.create(
            store=self.store,
            appointment=appointment,
            resource=self.resource,
            start_at=at(9),
            end_at=at(10),
            status="cancelled",
        )

        result = ConflictService.check_conflicts(
            self.store.id, BookingTarget.resource(self.resource.id), at(9), at(10)
        )

        self.assertFalse(result["has_conflict"])

    def test_conflicts_are_ordered_by_start(self):
        self.book(at(10), at(11))
        Block.objects.create(store=self.store, staff=self.staff, start_at=at(9), end_at=at(9, 30))

        result = ConflictService.check_conflicts(self.store.id, self.target, at(9), at(12))

        self.assertEqual([c["type"] for c in result["conflicts"]], ["block", "appointment"])

    def test_invalid_range(self):
        with self.assertRaises(InvalidDataException):
            ConflictService.check_conflicts(self.store.id, self.target, at(10), at(10))

    def test_lookup_error_is_raised(self):
        with patch.object(
            AppointmentConflictSource, "fetch", side_effect=DatabaseError("connection lost")
        ):
            with self.assertRaises(AvailabilityLookupException):
                ConflictService.check_conflicts(self.store.id, self.target, at(9), at(10))

    def test_malformed_row_is_rejected(self):
        source = AppointmentConflictSource()
        with patch.object(AppointmentConflictSource, "get_queryset") as mock_queryset:
            queryset = mock_queryset.return_value.filter.return_value
            queryset.values.return_value = [{"id": 1, "start_at": None, "end_at": at(10)}]
            with self.assertRaises(BookingRecordException):
                ConflictService.check_conflicts(
                    self.store.id, self.target, at(9), at(10), sources=[source]
                )

    def test_configured_sources(self):
        with self.settings(
            STOREOPS={
                "DEFAULT_OPEN_TIME": "09:00",
                "DEFAULT_CLOSE_TIME": "18:00",
                "SLOT_STEP_MINUTES": 30,
                "DEFAULT_DURATION_MINUTES": 30,
                "CONFLICT_SOURCES": [
                    "apps.bookingapp.services.conflict_sources.AppointmentConflictSource",
                ],
            }
        ):
            Block.objects.create(store=self.store, staff=self.staff, start_at=at(9), end_at=at(10))

            result = ConflictService.check_conflicts(self.store.id, self.target, at(9), at(10))

        self.assertFalse(result["has_conflict"])


class AvailabilityServiceTest(TestCase):
    """Test cases for the AvailabilityService"""

    def setUp(self):
        self.store = create_test_store()
        self.staff = create_staff(self.store)
        self.target = BookingTarget.staff(self.staff.id)

    def test_full_day_of_default_slots(self):
        result = AvailabilityService.generate_slots(self.store.id, self.target, SUNDAY)

        slots = result["slots"]
        self.assertEqual(len(slots), 18)
        self.assertEqual(slots[0]["start"], at(9))
        self.assertEqual(slots[-1]["start"], at(17, 30))
        self.assertEqual(slots[-1]["end"], at(18))
        self.assertTrue(all(slot["available"] for slot in slots))

    def test_every_slot_fits_the_window(self):
        StoreHours.objects.create(
            store=self.store, weekday=0, open_time=time(10, 0), close_time=time(13, 15)
        )

        result = AvailabilityService.generate_slots(
            self.store.id, self.target, SUNDAY, duration_minutes=45
        )

        # floor((195 - 45) / 30) + 1
        self.assertEqual(len(result["slots"]), 6)
        for slot in result["slots"]:
            self.assertEqual(slot["end"] - slot["start"], timedelta(minutes=45))
            self.assertGreaterEqual(slot["start"], at(10))
            self.assertLessEqual(slot["end"], at(13, 15))

    def test_duration_longer_than_the_day(self):
        StoreHours.objects.create(
            store=self.store, weekday=0, open_time=time(9, 0), close_time=time(10, 0)
        )

        result = AvailabilityService.generate_slots(
            self.store.id, self.target, SUNDAY, duration_minutes=90
        )

        self.assertEqual(result["slots"], [])
        self.assertFalse(result["is_closed"])

    def test_booked_slot_is_unavailable(self):
        Appointment.objects.create(
            store=self.store, staff=self.staff, start_at=at(9), end_at=at(9, 30)
        )

        result = AvailabilityService.generate_slots(self.store.id, self.target, SUNDAY)

        slots = result["slots"]
        self.assertEqual(len(slots), 18)
        self.assertFalse(slots[0]["available"])
        self.assertEqual(slots[0]["conflicts"][0]["type"], "appointment")
        self.assertTrue(all(slot["available"] for slot in slots[1:]))

    def test_excluded_booking_frees_its_slot(self):
        appointment = Appointment.objects.create(
            store=self.store, staff=self.staff, start_at=at(9), end_at=at(9, 30)
        )

        result = AvailabilityService.generate_slots(
            self.store.id, self.target, SUNDAY, exclude_booking_id=appointment.id
        )

        self.assertTrue(all(slot["available"] for slot in result["slots"]))

    def test_intervals_are_fetched_once(self):
        with patch.object(
            ConflictService, "collect_intervals", return_value=[]
        ) as mock_collect:
            AvailabilityService.generate_slots(self.store.id, self.target, SUNDAY)

        mock_collect.assert_called_once_with(
            self.store.id, self.target, at(9), at(18), exclude_booking_id=None
        )

    def test_closed_weekday(self):
        StoreHours.objects.create(
            store=self.store,
            weekday=0,
            open_time=time(9, 0),
            close_time=time(18, 0),
            is_closed=True,
        )

        with patch.object(ConflictService, "collect_intervals") as mock_collect:
            result = AvailabilityService.generate_slots(self.store.id, self.target, SUNDAY)

        self.assertEqual(result["slots"], [])
        self.assertEqual(result["message"], "Store is closed on this day")
        mock_collect.assert_not_called()

    def test_closure_date(self):
        StoreHours.objects.create(
            store=self.store, weekday=0, open_time=time(9, 0), close_time=time(18, 0)
        )
        StoreClosure.objects.create(store=self.store, date=SUNDAY)

        with patch.object(ConflictService, "collect_intervals") as mock_collect:
            result = AvailabilityService.generate_slots(self.store.id, self.target, SUNDAY)

        self.assertEqual(result["slots"], [])
        self.assertEqual(result["message"], "Store is closed on this date")
        mock_collect.assert_not_called()

    def test_lookup_error_aborts_generation(self):
        with patch.object(
            ConflictService,
            "collect_intervals",
            side_effect=AvailabilityLookupException("Could not read appointment data"),
        ):
            with self.assertRaises(AvailabilityLookupException):
                AvailabilityService.generate_slots(self.store.id, self.target, SUNDAY)

    def test_non_positive_duration(self):
        for duration in (0, -30):
            with self.assertRaises(InvalidDataException):
                AvailabilityService.generate_slots(
                    self.store.id, self.target, SUNDAY, duration_minutes=duration
                )

    def test_find_next_available_slot_skips_closed_and_full_days(self):
        StoreClosure.objects.create(store=self.store, date=SUNDAY)
        monday = SUNDAY + timedelta(days=1)
        Block.objects.create(
            store=self.store, staff=self.staff, start_at=at(9, day=monday), end_at=at(18, day=monday)
        )
        tuesday = SUNDAY + timedelta(days=2)
        Appointment.objects.create(
            store=self.store, staff=self.staff, start_at=at(9, day=tuesday), end_at=at(10, day=tuesday)
        )

        slot = AvailabilityService.find_next_available_slot(self.store.id, self.target, SUNDAY)

        self.assertEqual(slot["start"], at(10, day=tuesday))

    def test_find_next_available_slot_none(self):
        StoreClosure.objects.create(store=self.store, date=SUNDAY)

        slot = AvailabilityService.find_next_available_slot(
            self.store.id, self.target, SUNDAY, days_to_check=1
        )

        self.assertIsNone(slot)


class BookingServiceTest(TestCase):
    """Test cases for the BookingService"""

    def setUp(self):
        self.store = create_test_store()
        self.staff = create_staff(self.store)
        self.resource = create_resource(self.store)

    def test_create_appointment(self):
        appointment = BookingService.create_appointment(
            self.store,
            {"staff": self.staff, "start_at": at(9), "end_at": at(10), "customer_name": "Huda"},
        )

        self.assertEqual(appointment.store, self.store)
        self.assertEqual(appointment.status, "pending")

    def test_create_appointment_conflict(self):
        existing = Appointment.objects.create(
            store=self.store, staff=self.staff, start_at=at(9), end_at=at(10)
        )

        with self.assertRaises(SchedulingConflictException) as ctx:
            BookingService.create_appointment(
                self.store, {"staff": self.staff, "start_at": at(9, 30), "end_at": at(10, 30)}
            )

        self.assertEqual(ctx.exception.errors[0]["id"], str(existing.id))
        self.assertEqual(Appointment.objects.count(), 1)

    def test_create_checks_every_target(self):
        Block.objects.create(
            store=self.store, resource=self.resource, start_at=at(9), end_at=at(10)
        )

        with self.assertRaises(SchedulingConflictException):
            BookingService.create_appointment(
                self.store,
                {"staff": self.staff, "resource": self.resource, "start_at": at(9), "end_at": at(10)},
            )

    def test_create_with_target_of_other_store(self):
        other = create_test_store(name="Other", username="otherowner")

        with self.assertRaisesMessage(ResourceNotFoundException, "Staff not found"):
            BookingService.create_appointment(
                self.store, {"staff": create_staff(other), "start_at": at(9), "end_at": at(10)}
            )

    def test_create_without_target(self):
        with self.assertRaises(InvalidDataException):
            BookingService.create_appointment(self.store, {"start_at": at(9), "end_at": at(10)})

    def test_reschedule_over_own_time_is_allowed(self):
        appointment = Appointment.objects.create(
            store=self.store, staff=self.staff, start_at=at(9), end_at=at(10)
        )

        moved = BookingService.reschedule_appointment(
            Appointment.objects.get(pk=appointment.pk), {"start_at": at(9, 30), "end_at": at(10, 30)}
        )

        self.assertEqual(moved.start_at, at(9, 30))

    def test_reschedule_into_conflict(self):
        Appointment.objects.create(store=self.store, staff=self.staff, start_at=at(11), end_at=at(12))
        appointment = Appointment.objects.create(
            store=self.store, staff=self.staff, start_at=at(9), end_at=at(10)
        )

        with self.assertRaises(SchedulingConflictException):
            BookingService.reschedule_appointment(
                Appointment.objects.get(pk=appointment.pk), {"start_at": at(11), "end_at": at(12)}
            )

    def test_notes_change_skips_conflict_check(self):
        appointment = Appointment.objects.create(
            store=self.store, staff=self.staff, start_at=at(9), end_at=at(10)
        )

        with patch.object(ConflictService, "check_conflicts") as mock_check:
            BookingService.reschedule_appointment(
                Appointment.objects.get(pk=appointment.pk), {"notes": "Bring samples"}
            )

        mock_check.assert_not_called()

    def test_cancel_frees_the_slot(self):
        appointment = Appointment.objects.create(
            store=self.store, staff=self.staff, start_at=at(9), end_at=at(10)
        )

        BookingService.cancel_appointment(appointment, "Customer request")

        appointment.refresh_from_db()
        self.assertEqual(appointment.status, "cancelled")
        self.assertEqual(appointment.cancellation_reason, "Customer request")
        result = ConflictService.check_conflicts(
            self.store.id, BookingTarget.staff(self.staff.id), at(9), at(10)
        )
        self.assertFalse(result["has_conflict"])

    def test_cancel_twice(self):
        appointment = Appointment.objects.create(
            store=self.store, staff=self.staff, start_at=at(9), end_at=at(10), status="cancelled"
        )

        with self.assertRaises(InvalidDataException):
            BookingService.cancel_appointment(appointment)

    def test_create_booking_item_ignores_own_appointment(self):
        appointment = Appointment.objects.create(
            store=self.store, resource=self.resource, start_at=at(9), end_at=at(11)
        )

        item = BookingService.create_booking_item(
            self.store,
            {"appointment": appointment, "resource": self.resource, "start_at": at(9), "end_at": at(10)},
        )

        self.assertEqual(item.appointment, appointment)

    def test_create_booking_item_conflict(self):
        Block.objects.create(store=self.store, staff=self.staff, start_at=at(9), end_at=at(10))
        appointment = Appointment.objects.create(
            store=self.store, resource=self.resource, start_at=at(9), end_at=at(11)
        )

        with self.assertRaises(SchedulingConflictException):
            BookingService.create_booking_item(
                self.store,
                {"appointment": appointment, "staff": self.staff, "start_at": at(9), "end_at": at(10)},
            )

    def test_create_booking_item_for_other_store(self):
        other = create_test_store(name="Other", username="otherowner")
        appointment = Appointment.objects.create(
            store=other, staff=create_staff(other), start_at=at(9), end_at=at(10)
        )

        with self.assertRaises(ResourceNotFoundException):
            BookingService.create_booking_item(
                self.store, {"appointment": appointment, "start_at": at(9), "end_at": at(10)}
            )
