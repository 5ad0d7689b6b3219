# cuebook/routers/calendars_routes.py

from typing import List

from fastapi import APIRouter, Depends, Response

from cuebook.auth import get_current_admin
from cuebook.core import from_storage
from cuebook.deps import get_registry, get_scheduler
from cuebook.models import Calendar
from cuebook.registry import ResourceRegistry
from cuebook.scheduler import BookingScheduler
from cuebook.schemas import CalendarCreate, CalendarPublic, CalendarUpdate

router = APIRouter(
    prefix="/resources",
    tags=["resources"],
)


def _public(calendar: Calendar) -> dict:
    return {
        "id": calendar.id,
        "name": calendar.name,
        "active": calendar.active,
        "hourly_price_cents": calendar.hourly_price_cents,
        "description": calendar.description,
        "thumbnail_ref": calendar.thumbnail_ref,
        "created_at": from_storage(calendar.created_at),
        "updated_at": from_storage(calendar.updated_at),
    }


@router.get("", response_model=List[CalendarPublic])
def list_calendars(registry: ResourceRegistry = Depends(get_registry)):
    return [_public(c) for c in registry.list()]


@router.get("/{calendar_id}", response_model=CalendarPublic)
def get_calendar(calendar_id: int, registry: ResourceRegistry = Depends(get_registry)):
    return _public(registry.get(calendar_id))


@router.post(
    "",
    response_model=CalendarPublic,
    status_code=201,
    dependencies=[Depends(get_current_admin)],
)
def create_calendar(
    calendar: CalendarCreate,
    response: Response,
    registry: ResourceRegistry = Depends(get_registry),
):
    db_calendar = registry.create(
        calendar.name,
        active=calendar.active,
        hourly_price_cents=calendar.hourly_price_cents,
        thumbnail_ref=calendar.thumbnail_ref,
        description=calendar.description,
    )
    response.headers["Location"] = f"/resources/{db_calendar.id}"
    return _public(db_calendar)


@router.patch(
    "/{calendar_id}",
    response_model=CalendarPublic,
    dependencies=[Depends(get_current_admin)],
)
def update_calendar(
    calendar_id: int,
    changes: CalendarUpdate,
    registry: ResourceRegistry = Depends(get_registry),
):
    calendar = registry.update(calendar_id, changes.model_dump(exclude_unset=True))
    return _public(calendar)


@router.delete(
    "/{calendar_id}",
    status_code=204,
    dependencies=[Depends(get_current_admin)],
)
def delete_calendar(calendar_id: int, scheduler: BookingScheduler = Depends(get_scheduler)):
    # Refused while the table still has upcoming bookings
    scheduler.delete_calendar(calendar_id)
    return Response(status_code=204)
