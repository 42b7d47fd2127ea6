"""
StoreOps – centralised custom exceptions.

Import these from `core.exceptions` across the project instead of redefining
ad-hoc `Exception` subclasses in each app.
"""

from __future__ import annotations

from .custom_exceptions import (
    APIException,
    AvailabilityLookupException,
    BookingRecordException,
    InvalidDataException,
    PermissionDeniedException,
    ResourceNotFoundException,
    SchedulingConflictException,
)

__all__ = [
    "APIException",
    "AvailabilityLookupException",
    "BookingRecordException",
    "InvalidDataException",
    "PermissionDeniedException",
    "ResourceNotFoundException",
    "SchedulingConflictException",
]
