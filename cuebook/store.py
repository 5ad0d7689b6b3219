# cuebook/store.py
#
# BookingStore is the port the scheduler and the overview work against;
# SqlBookingStore is the SQLModel adapter. Callers validate before they insert.

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from cuebook.core import local_day_bounds, to_storage
from cuebook.errors import InternalError
from cuebook.models import Booking

logger = logging.getLogger(__name__)


@dataclass
class BookingDraft:
    calendar_id: int
    start: datetime
    end: datetime
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_notes: Optional[str] = None


class BookingStore(Protocol):
    def list_by_calendar(self, calendar_id: int) -> List[Booking]: ...

    def list_by_date(self, day: date, tz: tzinfo) -> List[Booking]: ...

    def insert(self, draft: BookingDraft) -> Booking: ...

    def get(self, booking_id: int) -> Optional[Booking]: ...

    def delete(self, booking_id: int) -> bool: ...

    def has_bookings_ending_after(self, calendar_id: int, moment: datetime) -> bool: ...

    def delete_for_calendar(self, calendar_id: int) -> int: ...


class SqlBookingStore:
    def __init__(self, session: Session):
        self.session = session

    def list_by_calendar(self, calendar_id: int) -> List[Booking]:
        return list(
            self.session.exec(
                select(Booking)
                .where(Booking.calendar_id == calendar_id)
                .order_by(Booking.starts_at_utc)
            ).all()
        )

    def list_by_date(self, day: date, tz: tzinfo) -> List[Booking]:
        # Any booking whose [start, end) touches the local day, including ones crossing midnight
        day_start, day_end = local_day_bounds(day, tz)
        return list(
            self.session.exec(
                select(Booking)
                .where(Booking.starts_at_utc < to_storage(day_end))
                .where(Booking.ends_at_utc > to_storage(day_start))
                .order_by(Booking.starts_at_utc)
            ).all()
        )

    def insert(self, draft: BookingDraft) -> Booking:
        booking = Booking(
            calendar_id=draft.calendar_id,
            starts_at_utc=to_storage(draft.start),
            ends_at_utc=to_storage(draft.end),
            customer_name=draft.customer_name,
            customer_email=draft.customer_email,
            customer_phone=draft.customer_phone,
            customer_notes=draft.customer_notes,
        )
        self.session.add(booking)
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Could not store booking for calendar %s", draft.calendar_id)
            raise InternalError("Could not store booking") from exc

        self.session.refresh(booking)  # fills booking.id
        return booking

    def get(self, booking_id: int) -> Optional[Booking]:
        return self.session.get(Booking, booking_id)

    def delete(self, booking_id: int) -> bool:
        booking = self.session.get(Booking, booking_id)
        if booking is None:
            return False
        self.session.delete(booking)
        self.session.commit()
        return True

    def has_bookings_ending_after(self, calendar_id: int, moment: datetime) -> bool:
        first = self.session.exec(
            select(Booking)
            .where(Booking.calendar_id == calendar_id)
            .where(Booking.ends_at_utc > to_storage(moment))
        ).first()
        return first is not None

    def delete_for_calendar(self, calendar_id: int) -> int:
        """Stage deletion of every booking on a calendar; the caller commits."""
        bookings = self.list_by_calendar(calendar_id)
        for booking in bookings:
            self.session.delete(booking)
        # Rows go before the calendar row that they reference
        self.session.flush()
        return len(bookings)
