"""
Interval primitives for the availability engine.

Everything here is pure Python: no ORM access, no settings. Bookings, items and
blocks are converted into ``BusyInterval`` records at the data-store boundary so
the overlap algorithm only ever sees validated, typed values.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from core.exceptions import BookingRecordException, InvalidDataException

STAFF = "staff"
RESOURCE = "resource"


class BookingTarget:
    """The staff member or resource whose calendar is queried. Exactly one kind."""

    KINDS = (STAFF, RESOURCE)

    def __init__(self, kind: str, target_id):
        if kind not in self.KINDS:
            raise InvalidDataException(f"Unknown booking target kind: {kind}")
        if not target_id:
            raise InvalidDataException(f"A {kind} id is required")
        self.kind = kind
        self.id = target_id

    @classmethod
    def staff(cls, staff_id) -> "BookingTarget":
        return cls(STAFF, staff_id)

    @classmethod
    def resource(cls, resource_id) -> "BookingTarget":
        return cls(RESOURCE, resource_id)

    @classmethod
    def from_ids(cls, staff_id=None, resource_id=None) -> "BookingTarget":
        """Build a target from a ``staff_id`` XOR ``resource_id`` pair."""
        if staff_id and resource_id:
            raise InvalidDataException("Provide only one of staff_id or resource_id")
        if staff_id:
            return cls.staff(staff_id)
        if resource_id:
            return cls.resource(resource_id)
        raise InvalidDataException("staff_id or resource_id is required")

    @property
    def field_name(self) -> str:
        """Foreign-key attname matching this target on booking tables."""
        return f"{self.kind}_id"

    def filter_kwargs(self) -> Dict[str, Any]:
        return {self.field_name: self.id}

    def __eq__(self, other):
        return (
            isinstance(other, BookingTarget)
            and self.kind == other.kind
            and str(self.id) == str(other.id)
        )

    def __hash__(self):
        return hash((self.kind, str(self.id)))

    def __repr__(self):
        return f"<BookingTarget {self.kind}:{self.id}>"


class BusyInterval:
    """
    A half-open time range ``[start_at, end_at)`` during which a target is busy.

    ``booking_id`` is the appointment the interval belongs to (the appointment
    itself, or the parent of a booking item); it is ``None`` for blocks.
    """

    __slots__ = ("type", "id", "start_at", "end_at", "booking_id", "reason")

    def __init__(
        self,
        type: str,
        id,
        start_at: datetime,
        end_at: datetime,
        booking_id=None,
        reason: Optional[str] = None,
    ):
        self.type = type
        self.id = id
        self.start_at = start_at
        self.end_at = end_at
        self.booking_id = booking_id
        self.reason = reason

    @classmethod
    def from_row(
        cls,
        type: str,
        row: Dict[str, Any],
        booking_field: Optional[str] = None,
        reason_field: Optional[str] = None,
    ) -> "BusyInterval":
        """
        Validate a fetched row and build an interval from it.

        Raises:
            BookingRecordException: if the row is missing its id, has non-datetime
                bounds, or an empty/negative range
        """
        row_id = row.get("id")
        start_at = row.get("start_at")
        end_at = row.get("end_at")

        if row_id is None:
            raise BookingRecordException(f"{type} row without an id: {row!r}")
        if not isinstance(start_at, datetime) or not isinstance(end_at, datetime):
            raise BookingRecordException(
                f"{type} {row_id} has invalid bounds: {start_at!r} - {end_at!r}"
            )
        if end_at <= start_at:
            raise BookingRecordException(
                f"{type} {row_id} ends at or before it starts"
            )

        booking_id = row.get(booking_field) if booking_field else None
        reason = (row.get(reason_field) or None) if reason_field else None

        return cls(type, row_id, start_at, end_at, booking_id=booking_id, reason=reason)

    def overlaps(self, start_at: datetime, end_at: datetime) -> bool:
        return overlaps(self.start_at, self.end_at, start_at, end_at)

    def is_excluded(self, exclude_booking_id) -> bool:
        if exclude_booking_id is None:
            return False
        excluded = str(exclude_booking_id)
        return str(self.id) == excluded or (
            self.booking_id is not None and str(self.booking_id) == excluded
        )

    def to_conflict_ref(self) -> Dict[str, Any]:
        ref = {
            "type": self.type,
            "id": str(self.id),
            "start_at": self.start_at.isoformat(timespec="seconds"),
            "end_at": self.end_at.isoformat(timespec="seconds"),
        }
        if self.reason:
            ref["reason"] = self.reason
        return ref

    def __repr__(self):
        return (
            f"<BusyInterval {self.type}:{self.id} "
            f"{self.start_at:%Y-%m-%d %H:%M}-{self.end_at:%H:%M}>"
        )


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """
    Half-open overlap test.

    Adjacent ranges (one ends exactly when the other starts) do not overlap.
    """
    return a_start < b_end and b_start < a_end


def find_overlapping(
    intervals: Iterable[BusyInterval],
    start_at: datetime,
    end_at: datetime,
    exclude_booking_id=None,
) -> List[BusyInterval]:
    """Every interval overlapping ``[start_at, end_at)``, ordered by start."""
    found = [
        interval
        for interval in intervals
        if not interval.is_excluded(exclude_booking_id)
        and interval.overlaps(start_at, end_at)
    ]
    found.sort(key=lambda interval: (interval.start_at, interval.end_at))
    return found
