"""
Request parameter validation utilities for the StoreOps platform.

Views call these before any calendar or booking lookup so that malformed input
is rejected as a client error instead of being silently defaulted.
"""

import re
import uuid
from datetime import date, datetime

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_uuid(value):
    """
    Validate a UUID.

    Args:
        value (str): UUID to validate

    Returns:
        uuid.UUID: The parsed UUID

    Raises:
        ValidationError: If the UUID is invalid
    """
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise ValidationError(_("Enter a valid UUID"))


def parse_iso_date(value) -> date:
    """
    Parse a strict ``YYYY-MM-DD`` date.

    Anything else (``15-03-2026``, ``2026-3-15``, an impossible day) raises
    ``ValidationError``.
    """
    if not value or not ISO_DATE_RE.match(str(value)):
        raise ValidationError(_("Valid date (YYYY-MM-DD) is required"))

    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(_("Valid date (YYYY-MM-DD) is required"))


def parse_positive_int(value, default=None, field_name="value") -> int:
    """Parse a strictly positive integer, falling back to ``default`` when empty."""
    if value is None or value == "":
        if default is None:
            raise ValidationError(_("%(field)s is required") % {"field": field_name})
        return default

    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(
            _("%(field)s must be a positive integer") % {"field": field_name}
        )

    if number <= 0:
        raise ValidationError(
            _("%(field)s must be a positive integer") % {"field": field_name}
        )
    return number
