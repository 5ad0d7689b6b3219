# cuebook/deps.py

from datetime import timedelta

from fastapi import Depends
from sqlmodel import Session

from cuebook.config import settings
from cuebook.core import venue_timezone
from cuebook.db import get_session
from cuebook.overview import OverviewAggregator
from cuebook.registry import ResourceRegistry
from cuebook.scheduler import BookingScheduler, CalendarLocks
from cuebook.store import SqlBookingStore

# Shared by every request in this process
calendar_locks = CalendarLocks()


def get_registry(session: Session = Depends(get_session)) -> ResourceRegistry:
    return ResourceRegistry(session)


def get_store(session: Session = Depends(get_session)) -> SqlBookingStore:
    return SqlBookingStore(session)


def get_scheduler(
    registry: ResourceRegistry = Depends(get_registry),
    store: SqlBookingStore = Depends(get_store),
) -> BookingScheduler:
    return BookingScheduler(
        registry,
        store,
        calendar_locks,
        min_duration=timedelta(minutes=settings.min_booking_minutes),
    )


def get_aggregator(
    registry: ResourceRegistry = Depends(get_registry),
    store: SqlBookingStore = Depends(get_store),
) -> OverviewAggregator:
    return OverviewAggregator(
        registry,
        store,
        venue_timezone(settings.venue_utc_offset_hours),
        pool_synonyms=settings.pool_synonyms,
    )
