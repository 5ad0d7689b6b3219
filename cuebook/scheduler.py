# cuebook/scheduler.py
#
# Creates on one calendar are serialized by a per-calendar lock held across the
# conflict check and the insert. The lock is in-process only: several worker
# processes on one database need database-level locking instead.

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, List

from cuebook.core import from_storage, overlaps, utcnow
from cuebook.errors import BadRequest, Conflict, NotFound
from cuebook.models import Booking
from cuebook.registry import ResourceRegistry
from cuebook.schemas import BookingCreate
from cuebook.store import BookingDraft, BookingStore

logger = logging.getLogger(__name__)

MSG_NAIVE_TIME = "start and end must include a UTC offset"
MSG_PAST_START = "Cannot book a time slot in the past"
MSG_END_BEFORE_START = "end must be after start"
MSG_TOO_SHORT = "Bookings must last at least {minutes} minutes"
MSG_SLOT_TAKEN = "Time slot unavailable"


class CalendarLocks:
    """One lock per calendar id, created on first use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}

    def for_calendar(self, calendar_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(calendar_id)
            if lock is None:
                lock = self._locks[calendar_id] = threading.Lock()
            return lock

    def __contains__(self, calendar_id: int) -> bool:
        with self._guard:
            return calendar_id in self._locks


class BookingScheduler:
    def __init__(
        self,
        registry: ResourceRegistry,
        store: BookingStore,
        locks: CalendarLocks,
        min_duration: timedelta = timedelta(minutes=60),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.registry = registry
        self.store = store
        self.locks = locks
        self.min_duration = min_duration
        self.clock = clock

    def create(self, request: BookingCreate) -> Booking:
        # 1) Validate everything before touching storage
        draft = self._validate(request)

        # 2) Calendar must exist before a lock is made for its id
        self.registry.get(draft.calendar_id)

        with self.locks.for_calendar(draft.calendar_id):
            # Read again: it may have been deactivated or deleted meanwhile
            calendar = self.registry.get(draft.calendar_id, fresh=True)
            if not calendar.active:
                raise BadRequest("Calendar is not accepting bookings")

            # 3) + 4) Conflict check and insert as one step per calendar
            for other in self.store.list_by_calendar(draft.calendar_id):
                if overlaps(draft.start, draft.end, from_storage(other.starts_at_utc), from_storage(other.ends_at_utc)):
                    logger.warning(
                        "Rejected booking on calendar %s: %s-%s overlaps booking %s",
                        draft.calendar_id, draft.start.isoformat(), draft.end.isoformat(), other.id,
                    )
                    raise Conflict(MSG_SLOT_TAKEN)

            booking = self.store.insert(draft)

        logger.info("Created booking %s on calendar %s", booking.id, booking.calendar_id)
        return booking

    def list_bookings(self, calendar_id: int) -> List[Booking]:
        self.registry.get(calendar_id)
        return self.store.list_by_calendar(calendar_id)

    def get(self, booking_id: int) -> Booking:
        booking = self.store.get(booking_id)
        if booking is None:
            raise NotFound("Booking not found")
        return booking

    def delete(self, booking_id: int) -> None:
        if not self.store.delete(booking_id):
            raise NotFound("Booking not found")
        logger.info("Deleted booking %s", booking_id)

    def delete_calendar(self, calendar_id: int) -> None:
        """
        Delete a calendar together with its booking history.

        Refused with Conflict while any booking on it has not ended yet;
        deactivate the calendar instead to keep it out of new bookings.
        """
        self.registry.get(calendar_id)

        with self.locks.for_calendar(calendar_id):
            self.registry.get(calendar_id, fresh=True)
            if self.store.has_bookings_ending_after(calendar_id, self.clock()):
                raise Conflict("Calendar has upcoming bookings")

            removed = self.store.delete_for_calendar(calendar_id)
            # registry.delete commits the staged booking deletes with the calendar
            self.registry.delete(calendar_id)

        if removed:
            logger.info("Removed %s past bookings with calendar %s", removed, calendar_id)

    def _validate(self, request: BookingCreate) -> BookingDraft:
        start, end = request.start, request.end
        if start.tzinfo is None or end.tzinfo is None:
            raise BadRequest(MSG_NAIVE_TIME)

        if start <= self.clock():
            raise BadRequest(MSG_PAST_START)
        if end <= start:
            raise BadRequest(MSG_END_BEFORE_START)
        if end - start < self.min_duration:
            minutes = int(self.min_duration.total_seconds() // 60)
            raise BadRequest(MSG_TOO_SHORT.format(minutes=minutes))

        name = request.customer_name.strip()
        email = request.customer_email.strip()
        phone = request.customer_phone.strip()
        if not name:
            raise BadRequest("customer_name is required")
        if not email:
            raise BadRequest("customer_email is required")
        if "@" not in email:
            raise BadRequest("customer_email is not a valid email address")
        if not phone:
            raise BadRequest("customer_phone is required")

        notes = (request.customer_notes or "").strip() or None

        return BookingDraft(
            calendar_id=request.calendar_id,
            start=start,
            end=end,
            customer_name=name,
            customer_email=email,
            customer_phone=phone,
            customer_notes=notes,
        )
