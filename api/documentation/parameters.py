"""
Centralized parameter definitions for StoreOps API documentation.

Reusable OpenAPI parameters keep the availability and calendar endpoints
consistent with each other.
"""

from drf_yasg import openapi

# --------------------------------------------------
# Common Query Parameters
# --------------------------------------------------

DATE_PARAM = openapi.Parameter(
    "date",
    openapi.IN_QUERY,
    description="Date in YYYY-MM-DD format",
    type=openapi.TYPE_STRING,
    format=openapi.FORMAT_DATE,
    required=True,
)

DAYS_PARAM = openapi.Parameter(
    "days",
    openapi.IN_QUERY,
    description="Number of consecutive days to resolve",
    type=openapi.TYPE_INTEGER,
    required=False,
    default=7,
)

DURATION_PARAM = openapi.Parameter(
    "duration_minutes",
    openapi.IN_QUERY,
    description="Slot length in minutes",
    type=openapi.TYPE_INTEGER,
    required=False,
    default=30,
)

# --------------------------------------------------
# Common ID Parameters
# --------------------------------------------------

STAFF_ID_PARAM = openapi.Parameter(
    "staff_id",
    openapi.IN_QUERY,
    description="Staff member ID (give this or resource_id)",
    type=openapi.TYPE_STRING,
    format=openapi.FORMAT_UUID,
    required=False,
)

RESOURCE_ID_PARAM = openapi.Parameter(
    "resource_id",
    openapi.IN_QUERY,
    description="Bookable resource ID (give this or staff_id)",
    type=openapi.TYPE_STRING,
    format=openapi.FORMAT_UUID,
    required=False,
)

EXCLUDE_BOOKING_ID_PARAM = openapi.Parameter(
    "exclude_booking_id",
    openapi.IN_QUERY,
    description="Appointment to ignore, e.g. the one being rescheduled",
    type=openapi.TYPE_STRING,
    format=openapi.FORMAT_UUID,
    required=False,
)

# --------------------------------------------------
# Common Response Schemas
# --------------------------------------------------

ERROR_SCHEMA = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "error": openapi.Schema(type=openapi.TYPE_STRING),
        "status_code": openapi.Schema(type=openapi.TYPE_INTEGER),
    },
)

CONFLICT_REF_SCHEMA = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "type": openapi.Schema(
            type=openapi.TYPE_STRING, description="appointment, booking_item or block"
        ),
        "id": openapi.Schema(type=openapi.TYPE_STRING),
        "start_at": openapi.Schema(type=openapi.TYPE_STRING, format=openapi.FORMAT_DATETIME),
        "end_at": openapi.Schema(type=openapi.TYPE_STRING, format=openapi.FORMAT_DATETIME),
        "reason": openapi.Schema(type=openapi.TYPE_STRING),
    },
)
