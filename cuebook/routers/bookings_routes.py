# cuebook/routers/bookings_routes.py

from typing import List

from fastapi import APIRouter, Depends, Response

from cuebook.core import from_storage
from cuebook.deps import get_scheduler
from cuebook.models import Booking
from cuebook.scheduler import BookingScheduler
from cuebook.schemas import BookingCreate, BookingPublic

router = APIRouter(
    tags=["bookings"],
)


def _public(booking: Booking) -> dict:
    return {
        "id": booking.id,
        "calendar_id": booking.calendar_id,
        "start": from_storage(booking.starts_at_utc),
        "end": from_storage(booking.ends_at_utc),
        "customer_name": booking.customer_name,
        "customer_email": booking.customer_email,
        "customer_phone": booking.customer_phone,
        "customer_notes": booking.customer_notes,
        "created_at": from_storage(booking.created_at),
    }


@router.get("/resources/{calendar_id}/bookings", response_model=List[BookingPublic])
def list_bookings(calendar_id: int, scheduler: BookingScheduler = Depends(get_scheduler)):
    return [_public(b) for b in scheduler.list_bookings(calendar_id)]


@router.post("/bookings", response_model=BookingPublic, status_code=201)
def create_booking(
    booking: BookingCreate,
    response: Response,
    scheduler: BookingScheduler = Depends(get_scheduler),
):
    db_booking = scheduler.create(booking)
    response.headers["Location"] = f"/bookings/{db_booking.id}"
    return _public(db_booking)


@router.get("/bookings/{booking_id}", response_model=BookingPublic)
def get_booking(booking_id: int, scheduler: BookingScheduler = Depends(get_scheduler)):
    return _public(scheduler.get(booking_id))


@router.delete("/bookings/{booking_id}", status_code=204)
def delete_booking(booking_id: int, scheduler: BookingScheduler = Depends(get_scheduler)):
    scheduler.delete(booking_id)
    return Response(status_code=204)
