import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _


class Store(models.Model):
    """Tenant: one business using the platform"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="stores",
        verbose_name=_("Owner"),
    )
    name = models.CharField(_("Name"), max_length=255)
    slug = models.SlugField(_("Slug"), max_length=80, unique=True)
    business_type = models.CharField(
        _("Business Type"),
        max_length=30,
        choices=(
            ("retail", _("Retail")),
            ("clinic", _("Clinic")),
            ("hospitality", _("Hospitality")),
            ("salon", _("Salon")),
            ("laundry", _("Laundry")),
            ("school", _("School")),
            ("catering", _("Catering")),
        ),
        default="retail",
    )
    is_active = models.BooleanField(_("Active"), default=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Store")
        verbose_name_plural = _("Stores")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["owner"], name="store_owner_idx"),
            models.Index(fields=["is_active"], name="store_active_idx"),
        ]

    def __str__(self):
        return self.name


class Staff(models.Model):
    """Staff member whose calendar can be booked"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(
        Store, on_delete=models.CASCADE, related_name="staff", verbose_name=_("Store")
    )
    name = models.CharField(_("Name"), max_length=255)
    role = models.CharField(_("Role"), max_length=100, blank=True)
    is_active = models.BooleanField(_("Active"), default=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)

    class Meta:
        verbose_name = _("Staff Member")
        verbose_name_plural = _("Staff")
        ordering = ["name"]
        indexes = [models.Index(fields=["store", "is_active"], name="staff_store_active_idx")]

    def __str__(self):
        return f"{self.name} ({self.store.name})"


class BookableResource(models.Model):
    """Physical resource that can be booked: room, rack, table, equipment"""

    RESOURCE_TYPE_CHOICES = (
        ("room", _("Room")),
        ("rack", _("Rack")),
        ("table", _("Table")),
        ("equipment", _("Equipment")),
        ("other", _("Other")),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(
        Store,
        on_delete=models.CASCADE,
        related_name="resources",
        verbose_name=_("Store"),
    )
    name = models.CharField(_("Name"), max_length=255)
    resource_type = models.CharField(
        _("Resource Type"), max_length=20, choices=RESOURCE_TYPE_CHOICES, default="room"
    )
    capacity = models.PositiveIntegerField(_("Capacity"), default=1)
    is_active = models.BooleanField(_("Active"), default=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)

    class Meta:
        verbose_name = _("Bookable Resource")
        verbose_name_plural = _("Bookable Resources")
        ordering = ["name"]
        indexes = [models.Index(fields=["store", "is_active"], name="resource_store_active_idx")]

    def __str__(self):
        return f"{self.name} ({self.get_resource_type_display()})"


class StoreHours(models.Model):
    """Recurring opening hours of a store for one weekday"""

    WEEKDAY_CHOICES = (
        (0, _("Sunday")),
        (1, _("Monday")),
        (2, _("Tuesday")),
        (3, _("Wednesday")),
        (4, _("Thursday")),
        (5, _("Friday")),
        (6, _("Saturday")),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(
        Store, on_delete=models.CASCADE, related_name="hours", verbose_name=_("Store")
    )
    weekday = models.IntegerField(_("Weekday"), choices=WEEKDAY_CHOICES)
    open_time = models.TimeField(_("Open Time"))
    close_time = models.TimeField(_("Close Time"))
    is_closed = models.BooleanField(_("Is Closed"), default=False)

    class Meta:
        verbose_name = _("Store Hours")
        verbose_name_plural = _("Store Hours")
        unique_together = ("store", "weekday")
        ordering = ["weekday"]

    def __str__(self):
        return f"{self.store.name} - {self.get_weekday_display()}: {self.open_time.strftime('%H:%M')} - {self.close_time.strftime('%H:%M')}"

    def clean(self):
        if not self.is_closed and self.open_time and self.close_time:
            if self.close_time <= self.open_time:
                raise ValidationError(
                    {"close_time": _("Close time must be after open time")}
                )

    @staticmethod
    def weekday_for(day):
        """Weekday number of a date in our schema (0 = Sunday)"""
        # Python's weekday() is 0 = Monday ... 6 = Sunday
        return (day.weekday() + 1) % 7


class StoreClosure(models.Model):
    """One-off full-day closure, overriding the weekday hours"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(
        Store,
        on_delete=models.CASCADE,
        related_name="closures",
        verbose_name=_("Store"),
    )
    date = models.DateField(_("Date"))
    reason = models.CharField(_("Reason"), max_length=255, blank=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)

    class Meta:
        verbose_name = _("Store Closure")
        verbose_name_plural = _("Store Closures")
        unique_together = ("store", "date")
        ordering = ["date"]

    def __str__(self):
        return f"{self.store.name} closed on {self.date.isoformat()}"
