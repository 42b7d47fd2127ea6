# apps/bookingapp/admin.py
from django.contrib import admin

from apps.bookingapp.models import Appointment, Block, BookingItem


class BookingItemInline(admin.TabularInline):
    """Inline admin for appointment items"""

    model = BookingItem
    extra = 0
    fk_name = "appointment"
    readonly_fields = ["created_at"]


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    """Admin configuration for appointments"""

    list_display = [
        "id",
        "store",
        "staff",
        "resource",
        "customer_name",
        "start_at",
        "end_at",
        "status",
    ]
    list_filter = ["status", "store", "start_at"]
    search_fields = ["customer_name", "customer_phone", "staff__name", "resource__name"]
    readonly_fields = ["created_at", "updated_at"]
    date_hierarchy = "start_at"
    inlines = [BookingItemInline]


@admin.register(Block)
class BlockAdmin(admin.ModelAdmin):
    """Admin configuration for blocked time"""

    list_display = ["store", "staff", "resource", "block_type", "start_at", "end_at", "reason"]
    list_filter = ["block_type", "store"]
    search_fields = ["reason", "staff__name", "resource__name"]
    date_hierarchy = "start_at"
