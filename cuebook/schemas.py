# cuebook/schemas.py

from pydantic import BaseModel, Field
from datetime import datetime, date
from typing import List, Optional


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenClaims(BaseModel):
    subject: str
    expiry: datetime


class CalendarCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    active: bool = True
    hourly_price_cents: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = None
    thumbnail_ref: Optional[int] = None


class CalendarUpdate(BaseModel):
    # Only the fields sent by the client are applied (exclude_unset)
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    active: Optional[bool] = None
    hourly_price_cents: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = None
    thumbnail_ref: Optional[int] = None


class CalendarPublic(BaseModel):
    id: int
    name: str
    active: bool
    hourly_price_cents: Optional[int]
    description: Optional[str]
    thumbnail_ref: Optional[int]
    created_at: datetime
    updated_at: datetime


class BookingCreate(BaseModel):
    calendar_id: int
    start: datetime
    end: datetime
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_notes: Optional[str] = None


class BookingPublic(BaseModel):
    id: int
    calendar_id: int
    start: datetime
    end: datetime
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_notes: Optional[str]
    created_at: datetime


class OverviewBooking(BaseModel):
    id: int
    calendar_id: int
    table_name: str
    table_type: str
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_notes: Optional[str]
    start: datetime
    end: datetime
    local_start: datetime
    local_end: datetime
    duration_hours: float
    price_cents: Optional[int]


class DailyOverview(BaseModel):
    date: date
    total_bookings: int = 0
    total_revenue: int = 0  # cents
    tables_used: int = 0
    utilization_percentage: float = 0.0
    bookings: List[OverviewBooking] = []
