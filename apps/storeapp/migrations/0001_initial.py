import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Store",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("slug", models.SlugField(max_length=80, unique=True, verbose_name="Slug")),
                (
                    "business_type",
                    models.CharField(
                        choices=[
                            ("retail", "Retail"),
                            ("clinic", "Clinic"),
                            ("hospitality", "Hospitality"),
                            ("salon", "Salon"),
                            ("laundry", "Laundry"),
                            ("school", "School"),
                            ("catering", "Catering"),
                        ],
                        default="retail",
                        max_length=30,
                        verbose_name="Business Type",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="stores",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Owner",
                    ),
                ),
            ],
            options={
                "verbose_name": "Store",
                "verbose_name_plural": "Stores",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["owner"], name="store_owner_idx"),
                    models.Index(fields=["is_active"], name="store_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Staff",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("role", models.CharField(blank=True, max_length=100, verbose_name="Role")),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="staff",
                        to="storeapp.store",
                        verbose_name="Store",
                    ),
                ),
            ],
            options={
                "verbose_name": "Staff Member",
                "verbose_name_plural": "Staff",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["store", "is_active"], name="staff_store_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BookableResource",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                (
                    "resource_type",
                    models.CharField(
                        choices=[
                            ("room", "Room"),
                            ("rack", "Rack"),
                            ("table", "Table"),
                            ("equipment", "Equipment"),
                            ("other", "Other"),
                        ],
                        default="room",
                        max_length=20,
                        verbose_name="Resource Type",
                    ),
                ),
                ("capacity", models.PositiveIntegerField(default=1, verbose_name="Capacity")),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="resources",
                        to="storeapp.store",
                        verbose_name="Store",
                    ),
                ),
            ],
            options={
                "verbose_name": "Bookable Resource",
                "verbose_name_plural": "Bookable Resources",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["store", "is_active"], name="resource_store_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="StoreHours",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "weekday",
                    models.IntegerField(
                        choices=[
                            (0, "Sunday"),
                            (1, "Monday"),
                            (2, "Tuesday"),
                            (3, "Wednesday"),
                            (4, "Thursday"),
                            (5, "Friday"),
                            (6, "Saturday"),
                        ],
                        verbose_name="Weekday",
                    ),
                ),
                ("open_time", models.TimeField(verbose_name="Open Time")),
                ("close_time", models.TimeField(verbose_name="Close Time")),
                ("is_closed", models.BooleanField(default=False, verbose_name="Is Closed")),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="hours",
                        to="storeapp.store",
                        verbose_name="Store",
                    ),
                ),
            ],
            options={
                "verbose_name": "Store Hours",
                "verbose_name_plural": "Store Hours",
                "ordering": ["weekday"],
                "unique_together": {("store", "weekday")},
            },
        ),
        migrations.CreateModel(
            name="StoreClosure",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("date", models.DateField(verbose_name="Date")),
                ("reason", models.CharField(blank=True, max_length=255, verbose_name="Reason")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="closures",
                        to="storeapp.store",
                        verbose_name="Store",
                    ),
                ),
            ],
            options={
                "verbose_name": "Store Closure",
                "verbose_name_plural": "Store Closures",
                "ordering": ["date"],
                "unique_together": {("store", "date")},
            },
        ),
    ]
