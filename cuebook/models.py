# cuebook/models.py

from typing import Optional
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


def _utc_now() -> datetime:
    # All timestamps are stored as timezone-aware UTC
    return datetime.now(timezone.utc)


class Calendar(SQLModel, table=True):
    __tablename__ = "calendars"

    id: Optional[int] = Field(default=None, primary_key=True)

    name: str = Field(index=True, unique=True)
    active: bool = True
    hourly_price_cents: Optional[int] = None
    description: Optional[str] = None
    thumbnail_ref: Optional[int] = None  # media id, weak reference

    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"

    id: Optional[int] = Field(default=None, primary_key=True)

    calendar_id: int = Field(foreign_key="calendars.id", index=True)
    starts_at_utc: datetime = Field(index=True)
    ends_at_utc: datetime = Field(index=True)

    customer_name: str
    customer_email: str
    customer_phone: str
    customer_notes: Optional[str] = None

    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)


class AdminUser(SQLModel, table=True):
    __tablename__ = "admin_users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True)
    password_hash: str
    last_login_at: Optional[datetime] = None
