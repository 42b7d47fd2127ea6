"""
Booking write path.

The availability endpoints only advise. Every write here locks the booked
staff/resource rows and re-runs the conflict check inside the same
transaction, which is what actually prevents double-booking.
"""

import logging
from typing import Any, Dict, List

from django.db import transaction

from apps.bookingapp.models import Appointment, BookingItem
from apps.bookingapp.services.conflict_service import ConflictService
from apps.bookingapp.services.intervals import BookingTarget
from apps.storeapp.models import BookableResource, Staff
from core.exceptions import (
    InvalidDataException,
    ResourceNotFoundException,
    SchedulingConflictException,
)

logger = logging.getLogger(__name__)

# Changing any of these on an existing appointment requires a new conflict check
RESCHEDULE_FIELDS = ("start_at", "end_at", "staff", "resource", "status")


class BookingService:
    """Creates and changes appointments and booking items without overlaps"""

    @staticmethod
    def validate_range(start_at, end_at):
        if not start_at or not end_at:
            raise InvalidDataException("start_at and end_at are required")
        if end_at <= start_at:
            raise InvalidDataException("end_at must be after start_at")

    @staticmethod
    def lock_targets(store, staff=None, resource=None) -> List[BookingTarget]:
        """
        Lock the staff/resource rows of ``store`` that a booking occupies.

        Concurrent writers for the same target serialize on these locks until
        the surrounding transaction commits.

        Raises:
            ResourceNotFoundException: if a target doesn't belong to the store
        """
        targets = []

        if staff is not None:
            locked = (
                Staff.objects.select_for_update()
                .filter(pk=staff.pk, store_id=store.id)
                .values_list("pk", flat=True)
                .first()
            )
            if locked is None:
                raise ResourceNotFoundException("Staff not found")
            targets.append(BookingTarget.staff(locked))

        if resource is not None:
            locked = (
                BookableResource.objects.select_for_update()
                .filter(pk=resource.pk, store_id=store.id)
                .values_list("pk", flat=True)
                .first()
            )
            if locked is None:
                raise ResourceNotFoundException("Resource not found")
            targets.append(BookingTarget.resource(locked))

        return targets

    @staticmethod
    def ensure_no_conflicts(
        store_id, targets: List[BookingTarget], start_at, end_at, exclude_booking_id=None
    ):
        """Raise SchedulingConflictException if any target is busy in the range"""
        conflicts = []
        for target in targets:
            result = ConflictService.check_conflicts(
                store_id,
                target,
                start_at,
                end_at,
                exclude_booking_id=exclude_booking_id,
            )
            conflicts.extend(result["conflicts"])

        if conflicts:
            logger.info(
                f"Rejected booking in store {store_id} from {start_at} to {end_at}: "
                f"{len(conflicts)} conflict(s)"
            )
            raise SchedulingConflictException(errors=conflicts)

    @classmethod
    @transaction.atomic
    def create_appointment(cls, store, data: Dict[str, Any]) -> Appointment:
        """
        Create an appointment for a staff member and/or a resource.

        Args:
            store: Store (tenant) the appointment belongs to
            data: Validated fields: ``start_at``, ``end_at``, ``staff``,
                ``resource``, optional ``customer_name``, ``customer_phone``,
                ``status``, ``notes``

        Raises:
            InvalidDataException: invalid range or no target
            ResourceNotFoundException: target outside the store
            SchedulingConflictException: target already busy
        """
        staff = data.get("staff")
        resource = data.get("resource")
        cls.validate_range(data.get("start_at"), data.get("end_at"))
        if staff is None and resource is None:
            raise InvalidDataException("staff_id or resource_id is required")

        targets = cls.lock_targets(store, staff=staff, resource=resource)

        appointment = Appointment(store=store, **data)
        if appointment.is_live:
            cls.ensure_no_conflicts(
                store.id, targets, appointment.start_at, appointment.end_at
            )
        appointment.save()

        logger.info(f"Created appointment {appointment.id} in store {store.id}")
        return appointment

    @classmethod
    @transaction.atomic
    def reschedule_appointment(
        cls, appointment: Appointment, data: Dict[str, Any]
    ) -> Appointment:
        """
        Update an appointment, re-checking conflicts only when it moves.

        The appointment itself is excluded from the check so keeping (or
        nudging) its own time never counts as a conflict.
        """
        for field, value in data.items():
            setattr(appointment, field, value)

        if appointment.staff is None and appointment.resource is None:
            raise InvalidDataException("staff_id or resource_id is required")
        cls.validate_range(appointment.start_at, appointment.end_at)

        moved = any(appointment.tracker.has_changed(field) for field in RESCHEDULE_FIELDS)
        if moved and appointment.is_live:
            targets = cls.lock_targets(
                appointment.store,
                staff=appointment.staff,
                resource=appointment.resource,
            )
            cls.ensure_no_conflicts(
                appointment.store_id,
                targets,
                appointment.start_at,
                appointment.end_at,
                exclude_booking_id=appointment.id,
            )

        appointment.save()
        if moved:
            logger.info(f"Rescheduled appointment {appointment.id}")
        return appointment

    @staticmethod
    @transaction.atomic
    def cancel_appointment(appointment: Appointment, reason: str = "") -> Appointment:
        """Cancel an appointment; cancelled appointments never block a slot"""
        if appointment.status == "cancelled":
            raise InvalidDataException("Appointment is already cancelled")
        if appointment.status == "completed":
            raise InvalidDataException("Cannot cancel a completed appointment")

        appointment.status = "cancelled"
        appointment.cancellation_reason = reason or ""
        appointment.save(update_fields=["status", "cancellation_reason", "updated_at"])

        logger.info(f"Cancelled appointment {appointment.id}")
        return appointment

    @classmethod
    @transaction.atomic
    def create_booking_item(cls, store, data: Dict[str, Any]) -> BookingItem:
        """
        Add an item to an appointment of ``store``.

        The item's own target is checked for conflicts, ignoring the parent
        appointment and its other items.
        """
        appointment = data.get("appointment")
        if appointment is None or appointment.store_id != store.id:
            raise ResourceNotFoundException("Appointment not found")

        cls.validate_range(data.get("start_at"), data.get("end_at"))

        targets = cls.lock_targets(
            store, staff=data.get("staff"), resource=data.get("resource")
        )

        item = BookingItem(store=store, **data)
        if item.status not in BookingItem.INACTIVE_STATUSES:
            cls.ensure_no_conflicts(
                store.id,
                targets,
                item.start_at,
                item.end_at,
                exclude_booking_id=appointment.id,
            )
        item.save()

        logger.info(f"Created booking item {item.id} for appointment {appointment.id}")
        return item
