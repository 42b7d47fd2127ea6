"""
Custom exceptions for the StoreOps platform.

This module defines a hierarchy of custom exceptions used across the platform
to provide consistent error handling and reporting.
"""

from django.utils.translation import gettext_lazy as _
from rest_framework import status


class APIException(Exception):
    """Base exception for all API-related exceptions."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = _("An unexpected error occurred.")

    def __init__(self, message=None, status_code=None, errors=None):
        self.message = message or self.default_message
        if status_code:
            self.status_code = status_code
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self):
        """Convert exception to dictionary representation."""
        error_dict = {
            "error": str(self.message),
            "status_code": self.status_code,
            "code": self.__class__.__name__,
        }

        if self.errors:
            error_dict["errors"] = self.errors

        return error_dict


class InvalidDataException(APIException):
    """Exception raised when request data is invalid."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = _("Invalid data provided.")


class ResourceNotFoundException(APIException):
    """Exception raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = _("The requested resource was not found.")


class PermissionDeniedException(APIException):
    """Exception raised when user doesn't have permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = _("You do not have permission to perform this action.")


class SchedulingConflictException(APIException):
    """Exception raised when there's a scheduling conflict.

    ``errors`` carries the serialized list of conflicting intervals so the
    caller can show what blocks the requested time.
    """

    status_code = status.HTTP_409_CONFLICT
    default_message = _("Scheduling conflict detected")

    def to_dict(self):
        error_dict = super().to_dict()
        error_dict["conflicts"] = error_dict.pop("errors", [])
        return error_dict


class AvailabilityLookupException(APIException):
    """Calendar or booking data could not be read.

    Never means "free": a failed lookup must not be reported as availability.
    """

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = _("Availability data is currently unavailable.")


class BookingRecordException(APIException):
    """A stored booking, block or hours row does not have the expected shape."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = _("Stored booking data is malformed.")
