# apps/bookingapp/models.py
import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _
from model_utils import FieldTracker

from apps.storeapp.models import BookableResource, Staff, Store


class TargetedIntervalMixin(models.Model):
    """Fields shared by everything that occupies a staff member or a resource"""

    start_at = models.DateTimeField(_("Start At"), db_index=True)
    end_at = models.DateTimeField(_("End At"), db_index=True)

    class Meta:
        abstract = True

    def clean(self):
        if self.start_at and self.end_at and self.end_at <= self.start_at:
            raise ValidationError({"end_at": _("end_at must be after start_at")})
        if not self.staff_id and not self.resource_id:
            raise ValidationError(_("Either staff or resource is required"))

    @property
    def duration_minutes(self):
        return int((self.end_at - self.start_at).total_seconds() // 60)


class Appointment(TargetedIntervalMixin):
    """Booking of a staff member and/or a resource for a time range"""

    STATUS_CHOICES = (
        ("pending", _("Pending")),
        ("confirmed", _("Confirmed")),
        ("in_progress", _("In Progress")),
        ("completed", _("Completed")),
        ("cancelled", _("Cancelled")),
        ("no_show", _("No Show")),
    )

    # Appointments in these states never block a slot
    INACTIVE_STATUSES = ("cancelled", "no_show")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(
        Store,
        on_delete=models.CASCADE,
        related_name="appointments",
        verbose_name=_("Store"),
    )
    staff = models.ForeignKey(
        Staff,
        on_delete=models.SET_NULL,
        related_name="appointments",
        verbose_name=_("Staff"),
        null=True,
        blank=True,
    )
    resource = models.ForeignKey(
        BookableResource,
        on_delete=models.SET_NULL,
        related_name="appointments",
        verbose_name=_("Resource"),
        null=True,
        blank=True,
    )
    customer_name = models.CharField(_("Customer Name"), max_length=255, blank=True)
    customer_phone = models.CharField(_("Customer Phone"), max_length=20, blank=True)
    status = models.CharField(
        _("Status"),
        max_length=20,
        choices=STATUS_CHOICES,
        default="pending",
        db_index=True,
    )
    notes = models.TextField(_("Notes"), blank=True)
    cancellation_reason = models.TextField(_("Cancellation Reason"), blank=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    # Timing/target changes trigger a conflict re-check on update
    tracker = FieldTracker(fields=["start_at", "end_at", "staff", "resource", "status"])

    class Meta:
        verbose_name = _("Appointment")
        verbose_name_plural = _("Appointments")
        ordering = ["-start_at"]
        indexes = [
            models.Index(fields=["store", "start_at", "status"], name="appt_store_start_status_idx"),
            models.Index(fields=["store", "staff", "start_at"], name="appt_store_staff_start_idx"),
            models.Index(fields=["store", "resource", "start_at"], name="appt_store_res_start_idx"),
        ]

    def __str__(self):
        return f"Appointment {self.id} {self.start_at:%Y-%m-%d %H:%M}-{self.end_at:%H:%M} ({self.status})"

    @property
    def is_live(self):
        return self.status not in self.INACTIVE_STATUSES


class BookingItem(TargetedIntervalMixin):
    """One line of an appointment occupying its own staff member or resource"""

    STATUS_CHOICES = (
        ("pending", _("Pending")),
        ("confirmed", _("Confirmed")),
        ("in_progress", _("In Progress")),
        ("completed", _("Completed")),
        ("cancelled", _("Cancelled")),
    )

    INACTIVE_STATUSES = ("cancelled",)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(
        Store,
        on_delete=models.CASCADE,
        related_name="booking_items",
        verbose_name=_("Store"),
    )
    appointment = models.ForeignKey(
        Appointment,
        on_delete=models.CASCADE,
        related_name="items",
        verbose_name=_("Appointment"),
    )
    staff = models.ForeignKey(
        Staff,
        on_delete=models.SET_NULL,
        related_name="booking_items",
        verbose_name=_("Staff"),
        null=True,
        blank=True,
    )
    resource = models.ForeignKey(
        BookableResource,
        on_delete=models.SET_NULL,
        related_name="booking_items",
        verbose_name=_("Resource"),
        null=True,
        blank=True,
    )
    price = models.DecimalField(_("Price"), max_digits=10, decimal_places=2, default=0)
    status = models.CharField(
        _("Status"), max_length=20, choices=STATUS_CHOICES, default="pending"
    )
    notes = models.TextField(_("Notes"), blank=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Booking Item")
        verbose_name_plural = _("Booking Items")
        ordering = ["start_at"]
        indexes = [
            models.Index(fields=["store", "staff", "start_at"], name="item_store_staff_start_idx"),
            models.Index(fields=["store", "resource", "start_at"], name="item_store_res_start_idx"),
        ]

    def __str__(self):
        return f"Item {self.id} of appointment {self.appointment_id}"

    def clean(self):
        # Staff/resource are optional on an item; only the range is checked
        if self.start_at and self.end_at and self.end_at <= self.start_at:
            raise ValidationError({"end_at": _("end_at must be after start_at")})


class Block(TargetedIntervalMixin):
    """Time a staff member or resource is unavailable (break, holiday, maintenance)"""

    BLOCK_TYPE_CHOICES = (
        ("manual", _("Manual")),
        ("break", _("Break")),
        ("holiday", _("Holiday")),
        ("maintenance", _("Maintenance")),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(
        Store, on_delete=models.CASCADE, related_name="blocks", verbose_name=_("Store")
    )
    staff = models.ForeignKey(
        Staff,
        on_delete=models.CASCADE,
        related_name="blocks",
        verbose_name=_("Staff"),
        null=True,
        blank=True,
    )
    resource = models.ForeignKey(
        BookableResource,
        on_delete=models.CASCADE,
        related_name="blocks",
        verbose_name=_("Resource"),
        null=True,
        blank=True,
    )
    reason = models.CharField(_("Reason"), max_length=1000, blank=True)
    block_type = models.CharField(
        _("Block Type"), max_length=20, choices=BLOCK_TYPE_CHOICES, default="manual"
    )
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Block")
        verbose_name_plural = _("Blocks")
        ordering = ["-start_at"]
        indexes = [
            models.Index(fields=["store", "staff", "start_at"], name="block_store_staff_start_idx"),
            models.Index(fields=["store", "resource", "start_at"], name="block_store_res_start_idx"),
        ]

    def __str__(self):
        return f"{self.get_block_type_display()} {self.start_at:%Y-%m-%d %H:%M}-{self.end_at:%H:%M}"
