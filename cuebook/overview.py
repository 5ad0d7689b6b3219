# cuebook/overview.py

from datetime import date, tzinfo
from typing import Iterable, Optional

from cuebook.core import TABLE, from_storage, resource_type
from cuebook.models import Booking, Calendar
from cuebook.registry import ResourceRegistry
from cuebook.schemas import DailyOverview, OverviewBooking
from cuebook.store import BookingStore

UNKNOWN_TABLE = "Unknown"


class OverviewAggregator:
    """Daily bookings, revenue and table utilization for staff."""

    def __init__(
        self,
        registry: ResourceRegistry,
        store: BookingStore,
        venue_tz: tzinfo,
        pool_synonyms: Iterable[str] = (),
    ):
        self.registry = registry
        self.store = store
        self.venue_tz = venue_tz
        self.pool_synonyms = tuple(pool_synonyms)

    def daily_overview(self, day: date) -> DailyOverview:
        bookings = self.store.list_by_date(day, self.venue_tz)
        if not bookings:
            return DailyOverview(date=day)

        calendars = {c.id: c for c in self.registry.list()}
        rows = [self._row(b, calendars.get(b.calendar_id)) for b in bookings]

        # Bookings whose calendar row is gone do not count as a table in use
        used_ids = {b.calendar_id for b in bookings if b.calendar_id in calendars}
        active_count = sum(1 for c in calendars.values() if c.active)

        utilization = 0.0
        if active_count:
            utilization = round(len(used_ids) / active_count * 100, 1)

        return DailyOverview(
            date=day,
            total_bookings=len(rows),
            total_revenue=sum(r.price_cents for r in rows if r.price_cents is not None),
            tables_used=len(used_ids),
            utilization_percentage=utilization,
            bookings=rows,
        )

    def _row(self, booking: Booking, calendar: Optional[Calendar]) -> OverviewBooking:
        start = from_storage(booking.starts_at_utc)
        end = from_storage(booking.ends_at_utc)
        duration_hours = (end - start).total_seconds() / 60 / 60.0

        if calendar is None:
            name, kind, price = UNKNOWN_TABLE, TABLE, None
        else:
            name = calendar.name
            kind = resource_type(calendar.name, self.pool_synonyms)
            price = None
            if calendar.hourly_price_cents is not None:
                price = round(calendar.hourly_price_cents * duration_hours)

        return OverviewBooking(
            id=booking.id,
            calendar_id=booking.calendar_id,
            table_name=name,
            table_type=kind,
            customer_name=booking.customer_name,
            customer_email=booking.customer_email,
            customer_phone=booking.customer_phone,
            customer_notes=booking.customer_notes,
            start=start,
            end=end,
            local_start=start.astimezone(self.venue_tz),
            local_end=end.astimezone(self.venue_tz),
            duration_hours=duration_hours,
            price_cents=price,
        )
