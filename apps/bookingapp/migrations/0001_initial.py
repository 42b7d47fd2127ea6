import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("storeapp", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Appointment",
            fields=[
                ("start_at", models.DateTimeField(db_index=True, verbose_name="Start At")),
                ("end_at", models.DateTimeField(db_index=True, verbose_name="End At")),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("customer_name", models.CharField(blank=True, max_length=255, verbose_name="Customer Name")),
                ("customer_phone", models.CharField(blank=True, max_length=20, verbose_name="Customer Phone")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("confirmed", "Confirmed"),
                            ("in_progress", "In Progress"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                            ("no_show", "No Show"),
                        ],
                        db_index=True,
                        default="pending",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                ("cancellation_reason", models.TextField(blank=True, verbose_name="Cancellation Reason")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "resource",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="appointments",
                        to="storeapp.bookableresource",
                        verbose_name="Resource",
                    ),
                ),
                (
                    "staff",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="appointments",
                        to="storeapp.staff",
                        verbose_name="Staff",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="appointments",
                        to="storeapp.store",
                        verbose_name="Store",
                    ),
                ),
            ],
            options={
                "verbose_name": "Appointment",
                "verbose_name_plural": "Appointments",
                "ordering": ["-start_at"],
                "indexes": [
                    models.Index(fields=["store", "start_at", "status"], name="appt_store_start_status_idx"),
                    models.Index(fields=["store", "staff", "start_at"], name="appt_store_staff_start_idx"),
                    models.Index(fields=["store", "resource", "start_at"], name="appt_store_res_start_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BookingItem",
            fields=[
                ("start_at", models.DateTimeField(db_index=True, verbose_name="Start At")),
                ("end_at", models.DateTimeField(db_index=True, verbose_name="End At")),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=10, verbose_name="Price")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("confirmed", "Confirmed"),
                            ("in_progress", "In Progress"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "appointment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="bookingapp.appointment",
                        verbose_name="Appointment",
                    ),
                ),
                (
                    "resource",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="booking_items",
                        to="storeapp.bookableresource",
                        verbose_name="Resource",
                    ),
                ),
                (
                    "staff",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="booking_items",
                        to="storeapp.staff",
                        verbose_name="Staff",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="booking_items",
                        to="storeapp.store",
                        verbose_name="Store",
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking Item",
                "verbose_name_plural": "Booking Items",
                "ordering": ["start_at"],
                "indexes": [
                    models.Index(fields=["store", "staff", "start_at"], name="item_store_staff_start_idx"),
                    models.Index(fields=["store", "resource", "start_at"], name="item_store_res_start_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Block",
            fields=[
                ("start_at", models.DateTimeField(db_index=True, verbose_name="Start At")),
                ("end_at", models.DateTimeField(db_index=True, verbose_name="End At")),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("reason", models.CharField(blank=True, max_length=1000, verbose_name="Reason")),
                (
                    "block_type",
                    models.CharField(
                        choices=[
                            ("manual", "Manual"),
                            ("break", "Break"),
                            ("holiday", "Holiday"),
                            ("maintenance", "Maintenance"),
                        ],
                        default="manual",
                        max_length=20,
                        verbose_name="Block Type",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "resource",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="blocks",
                        to="storeapp.bookableresource",
                        verbose_name="Resource",
                    ),
                ),
                (
                    "staff",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="blocks",
                        to="storeapp.staff",
                        verbose_name="Staff",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="blocks",
                        to="storeapp.store",
                        verbose_name="Store",
                    ),
                ),
            ],
            options={
                "verbose_name": "Block",
                "verbose_name_plural": "Blocks",
                "ordering": ["-start_at"],
                "indexes": [
                    models.Index(fields=["store", "staff", "start_at"], name="block_store_staff_start_idx"),
                    models.Index(fields=["store", "resource", "start_at"], name="block_store_res_start_idx"),
                ],
            },
        ),
    ]
