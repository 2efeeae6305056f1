from sqlalchemy.orm import Session, selectinload
from sqlalchemy import or_
from typing import List, Optional
from datetime import date
import logging

from ..models.event import Event
from ..models.user import User
from ..models.enums import EventPrivacy
from ..schemas.common import Page, PaginationParams
from ..schemas.event import EventCreate, EventUpdate
from ..utils.authorization import ensure_event_manager, ensure_can_view_event
from ..utils.service_helpers import paginate
from ..utils.validation import ValidationHelpers
from .exceptions import EventNotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)


def get_event_or_raise(db: Session, event_id: int) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise EventNotFoundError("The specified event does not exist")
    return event


class EventService:
    def __init__(self, db: Session):
        self.db = db

    def create_event(self, event_data: EventCreate, organizer: User) -> Event:
        """Create a new event owned by the caller"""

        if not organizer.is_organizer:
            raise PermissionDeniedError("Only organizers and admins can create events")

        try:
            event = Event(
                title=event_data.title,
                description=event_data.description,
                date=event_data.date,
                time=event_data.time,
                location=event_data.location,
                category=event_data.category.value,
                privacy=event_data.privacy.value,
                organizer_id=organizer.id,
            )

            self.db.add(event)
            self.db.commit()
            self.db.refresh(event)

        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Event {event.id} created by user {organizer.id}")
        return event

    def list_events(
        self,
        viewer: Optional[User],
        pagination: PaginationParams,
        q: Optional[str] = None,
        category: Optional[str] = None,
        location: Optional[str] = None,
        date_from: Optional[date] = None,
    ) -> Page:
        """
        Search events visible to the viewer.

        Anonymous viewers see public events, signed-in users additionally
        see their own events, admins see everything.
        """
        query = self.db.query(Event).options(
            selectinload(Event.organizer), selectinload(Event.tickets)
        )

        if viewer is None:
            query = query.filter(Event.privacy == EventPrivacy.PUBLIC.value)
        elif not viewer.is_admin:
            query = query.filter(
                or_(
                    Event.privacy == EventPrivacy.PUBLIC.value,
                    Event.organizer_id == viewer.id,
                )
            )

        if q:
            pattern = f"%{ValidationHelpers.escape_like(q)}%"
            query = query.filter(
                or_(
                    Event.title.ilike(pattern, escape="\\"),
                    Event.description.ilike(pattern, escape="\\"),
                    Event.location.ilike(pattern, escape="\\"),
                )
            )

        if category:
            query = query.filter(Event.category == category)

        if location:
            pattern = f"%{ValidationHelpers.escape_like(location)}%"
            query = query.filter(Event.location.ilike(pattern, escape="\\"))

        if date_from:
            query = query.filter(Event.date >= date_from)

        query = query.order_by(Event.date.asc(), Event.time.asc(), Event.id.asc())
        return paginate(query, pagination)

    def get_event(self, event_id: int, viewer: Optional[User]) -> Event:
        event = get_event_or_raise(self.db, event_id)
        ensure_can_view_event(viewer, event)
        return event

    def update_event(
        self, event_id: int, event_updates: EventUpdate, actor: User
    ) -> Event:
        """Update event fields, organizer of record or admin only"""

        event = get_event_or_raise(self.db, event_id)
        ensure_event_manager(actor, event, "You can only update your own events")

        update_data = event_updates.model_dump(exclude_unset=True, exclude_none=True)
        try:
            for field, value in update_data.items():
                setattr(event, field, value.value if hasattr(value, "value") else value)

            self.db.commit()
            self.db.refresh(event)

        except Exception:
            self.db.rollback()
            raise

        return event

    def delete_event(self, event_id: int, actor: User) -> bool:
        """Delete an event and everything attached to it"""

        event = get_event_or_raise(self.db, event_id)
        ensure_event_manager(actor, event, "You can only delete your own events")

        try:
            self.db.delete(event)
            self.db.commit()

        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Event {event_id} deleted by user {actor.id}")
        return True

    def get_my_events(self, user: User) -> List[Event]:
        """Events organized by the user, with their tickets"""
        return (
            self.db.query(Event)
            .options(selectinload(Event.tickets))
            .filter(Event.organizer_id == user.id)
            .order_by(Event.date.asc(), Event.time.asc())
            .all()
        )
