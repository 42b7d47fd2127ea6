# core/fields.py
from django.db import models
from django.utils import timezone
from rest_framework import serializers


class WallClockDateTimeField(serializers.DateTimeField):
    """
    DateTime field for store-local wall-clock values.

    A UTC offset sent by the client is dropped, never applied: ``09:00+08:00``
    is read as ``09:00``.
    """

    def enforce_timezone(self, value):
        if timezone.is_aware(value):
            return value.replace(tzinfo=None)
        return value


class WallClockModelSerializer(serializers.ModelSerializer):
    """ModelSerializer whose model datetimes are read as wall-clock values"""

    serializer_field_mapping = {
        **serializers.ModelSerializer.serializer_field_mapping,
        models.DateTimeField: WallClockDateTimeField,
    }
