# cuebook/registry.py

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, col

from cuebook.errors import BadRequest, Conflict, NotFound
from cuebook.models import Calendar

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "active", "hourly_price_cents", "description", "thumbnail_ref")


class ResourceRegistry:
    """Calendars (bookable tables): naming rules and CRUD."""

    def __init__(self, session: Session):
        self.session = session

    def list(self) -> List[Calendar]:
        # Newest first; active filtering is up to the caller
        stmt = select(Calendar).order_by(col(Calendar.created_at).desc(), col(Calendar.id).desc())
        return list(self.session.exec(stmt).all())

    def get(self, calendar_id: int, fresh: bool = False) -> Calendar:
        # fresh=True reloads the row even when the session already holds it
        calendar = self.session.get(Calendar, calendar_id, populate_existing=fresh)
        if calendar is None:
            raise NotFound("Calendar not found")
        return calendar

    def create(
        self,
        name: str,
        active: bool = True,
        hourly_price_cents: Optional[int] = None,
        thumbnail_ref: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Calendar:
        name = _clean_name(name)
        if hourly_price_cents is not None and hourly_price_cents < 0:
            raise BadRequest("hourly_price_cents cannot be negative")
        if self._name_taken(name):
            raise Conflict("Calendar name already in use")

        calendar = Calendar(
            name=name,
            active=active,
            hourly_price_cents=hourly_price_cents,
            thumbnail_ref=thumbnail_ref,
            description=description,
        )
        self.session.add(calendar)
        self._commit()
        self.session.refresh(calendar)  # fills calendar.id

        logger.info("Created calendar %s (%r)", calendar.id, calendar.name)
        return calendar

    def update(self, calendar_id: int, changes: dict[str, Any]) -> Calendar:
        changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        if not changes:
            raise BadRequest("No fields to update")

        calendar = self.get(calendar_id)

        if "name" in changes:
            changes["name"] = _clean_name(changes["name"])
            if self._name_taken(changes["name"], exclude_id=calendar_id):
                raise Conflict("Calendar name already in use")
        if "active" in changes and changes["active"] is None:
            raise BadRequest("active cannot be null")
        price = changes.get("hourly_price_cents")
        if price is not None and price < 0:
            raise BadRequest("hourly_price_cents cannot be negative")

        for field, value in changes.items():
            setattr(calendar, field, value)
        calendar.updated_at = datetime.now(timezone.utc)

        self.session.add(calendar)
        self._commit()
        self.session.refresh(calendar)
        return calendar

    def delete(self, calendar_id: int) -> None:
        """Remove the calendar row. Booking policy is enforced by the scheduler."""
        calendar = self.get(calendar_id)
        self.session.delete(calendar)
        self.session.commit()
        logger.info("Deleted calendar %s", calendar_id)

    def _name_taken(self, name: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(Calendar).where(Calendar.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Calendar.id != exclude_id)
        return self.session.exec(stmt).first() is not None

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError:
            # Unique name raced past the pre-check
            self.session.rollback()
            raise Conflict("Calendar name already in use")


def _clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise BadRequest("Calendar name cannot be empty")
    return name
