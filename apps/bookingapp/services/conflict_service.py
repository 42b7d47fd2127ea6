# apps/bookingapp/services/conflict_service.py
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings
from django.db import DatabaseError
from django.utils.module_loading import import_string

from apps.bookingapp.services.intervals import (
    BookingTarget,
    BusyInterval,
    find_overlapping,
)
from core.exceptions import AvailabilityLookupException, InvalidDataException

logger = logging.getLogger(__name__)


class ConflictService:
    """Detects scheduling conflicts for one staff member or resource of one store"""

    @staticmethod
    def get_sources(source_paths: Optional[Iterable[str]] = None):
        """Instantiate the configured conflict sources"""
        paths = source_paths or settings.STOREOPS["CONFLICT_SOURCES"]
        return [import_string(path)() for path in paths]

    @classmethod
    def collect_intervals(
        cls,
        store_id,
        target: BookingTarget,
        window_start: datetime,
        window_end: datetime,
        exclude_booking_id=None,
        sources=None,
    ) -> List[BusyInterval]:
        """
        Fetch every live busy interval of ``target`` that may touch the window.

        Raises:
            AvailabilityLookupException: if any source fails to read. A failed
                read is never reported as "nothing booked".
        """
        if sources is None:
            sources = cls.get_sources()

        intervals = []
        for source in sources:
            try:
                intervals.extend(
                    source.fetch(
                        store_id,
                        target,
                        window_start,
                        window_end,
                        exclude_booking_id=exclude_booking_id,
                    )
                )
            except DatabaseError as e:
                logger.exception(
                    f"Error reading {source.conflict_type} intervals for {target} "
                    f"in store {store_id}"
                )
                raise AvailabilityLookupException(
                    f"Could not read {source.conflict_type} data: {str(e)}"
                ) from e

        return intervals

    @staticmethod
    def find_conflicts(
        intervals: Iterable[BusyInterval],
        start_at: datetime,
        end_at: datetime,
        exclude_booking_id=None,
    ) -> List[BusyInterval]:
        """Pure in-memory overlap check against already fetched intervals"""
        return find_overlapping(intervals, start_at, end_at, exclude_booking_id)

    @classmethod
    def check_conflicts(
        cls,
        store_id,
        target: BookingTarget,
        start_at: datetime,
        end_at: datetime,
        exclude_booking_id=None,
        sources=None,
    ) -> Dict[str, Any]:
        """
        Check if a proposed time range conflicts with anything booked for the target

        Args:
            store_id: ID of the store (tenant); nothing outside it is read
            target: Staff member or resource to check
            start_at: Start of the proposed range (inclusive)
            end_at: End of the proposed range (exclusive)
            exclude_booking_id: Optional appointment ID to ignore (for reschedule)
            sources: Optional conflict sources overriding the configured ones

        Returns:
            Dict with ``has_conflict`` and ``conflicts`` (list of conflict refs)
        """
        if start_at >= end_at:
            raise InvalidDataException("end_at must be after start_at")

        intervals = cls.collect_intervals(
            store_id,
            target,
            start_at,
            end_at,
            exclude_booking_id=exclude_booking_id,
            sources=sources,
        )
        conflicts = cls.find_conflicts(intervals, start_at, end_at, exclude_booking_id)

        if conflicts:
            logger.info(
                f"{len(conflicts)} conflict(s) for {target} in store {store_id} "
                f"between {start_at} and {end_at}"
            )

        return {
            "has_conflict": bool(conflicts),
            "conflicts": [interval.to_conflict_ref() for interval in conflicts],
        }
