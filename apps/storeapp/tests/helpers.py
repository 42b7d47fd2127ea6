# apps/storeapp/tests/helpers.py
from django.contrib.auth import get_user_model

from apps.storeapp.models import BookableResource, Staff, Store, StoreHours


def create_test_store(name="Test Store", username="storeowner", hours=None):
    """
    Create a store with its owner.

    ``hours`` is an optional ``(open_time, close_time)`` pair applied to every
    weekday; without it the store falls back to the default 09:00-18:00 window.
    """
    user = get_user_model().objects.create_user(
        username=username, password="testpass123"
    )
    store = Store.objects.create(owner=user, name=name, slug=username)

    if hours is not None:
        open_time, close_time = hours
        for weekday in range(7):
            StoreHours.objects.create(
                store=store, weekday=weekday, open_time=open_time, close_time=close_time
            )

    return store


def create_staff(store, name="Sara"):
    return Staff.objects.create(store=store, name=name, role="Stylist")


def create_resource(store, name="Room 1", resource_type="room"):
    return BookableResource.objects.create(
        store=store, name=name, resource_type=resource_type
    )
