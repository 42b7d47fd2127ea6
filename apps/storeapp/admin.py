# apps/storeapp/admin.py
from django.contrib import admin

from apps.storeapp.models import BookableResource, Staff, Store, StoreClosure, StoreHours


class StoreHoursInline(admin.TabularInline):
    """Inline admin for weekly hours"""

    model = StoreHours
    extra = 0


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "owner", "business_type", "is_active", "created_at"]
    list_filter = ["business_type", "is_active"]
    search_fields = ["name", "slug", "owner__username"]
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ["created_at", "updated_at"]
    inlines = [StoreHoursInline]


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ["name", "role", "store", "is_active"]
    list_filter = ["is_active", "store"]
    search_fields = ["name", "role", "store__name"]


@admin.register(BookableResource)
class BookableResourceAdmin(admin.ModelAdmin):
    list_display = ["name", "resource_type", "capacity", "store", "is_active"]
    list_filter = ["resource_type", "is_active", "store"]
    search_fields = ["name", "store__name"]


@admin.register(StoreClosure)
class StoreClosureAdmin(admin.ModelAdmin):
    list_display = ["store", "date", "reason"]
    list_filter = ["store"]
    date_hierarchy = "date"
