from sqlalchemy.orm import Session
from sqlalchemy import and_, or_, select, update
from typing import List, Optional
from datetime import datetime, timezone
import logging

from ..models.notification import Notification
from ..models.registration import Registration
from ..models.user import User
from ..models.enums import NotificationAudience, ACTIVE_REGISTRATION_STATUSES
from ..schemas.common import Page, PaginationParams
from ..schemas.notification import NotificationCreate
from ..utils.authorization import ensure_event_manager, is_owner_or_admin
from ..utils.service_helpers import paginate
from .event_service import get_event_or_raise
from .exceptions import (
    NotificationNotFoundError,
    PermissionDeniedError,
    BusinessRuleViolationError,
)

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Event notifications.

    A direct notification is addressed to one user. A broadcast notification
    is a single row addressed to everyone holding an active registration for
    the event; its read flag is managed by the event organizer.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_notification(
        self, data: NotificationCreate, sender: User
    ) -> List[Notification]:
        """One direct row per target user, or a single broadcast row"""

        event = get_event_or_raise(self.db, data.event_id)
        ensure_event_manager(
            sender, event, "You can only send notifications for your own events"
        )

        if data.target_users:
            found = {
                user_id
                for (user_id,) in self.db.query(User.id)
                .filter(User.id.in_(data.target_users))
                .all()
            }
            missing = [user_id for user_id in data.target_users if user_id not in found]
            if missing:
                raise BusinessRuleViolationError(
                    f"Unknown target users: {', '.join(str(m) for m in missing)}",
                    error="Invalid target users",
                )

            notifications = [
                Notification(
                    event_id=event.id,
                    user_id=user_id,
                    audience=NotificationAudience.DIRECT.value,
                    title=data.title,
                    message=data.message,
                    type=data.type.value,
                )
                for user_id in data.target_users
            ]
        else:
            notifications = [
                Notification(
                    event_id=event.id,
                    user_id=None,
                    audience=NotificationAudience.BROADCAST.value,
                    title=data.title,
                    message=data.message,
                    type=data.type.value,
                )
            ]

        try:
            self.db.add_all(notifications)
            self.db.commit()
            for notification in notifications:
                self.db.refresh(notification)
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"User {sender.id} sent {len(notifications)} notification(s) for event {event.id}"
        )
        return notifications

    def get_user_notifications(
        self,
        user: User,
        pagination: PaginationParams,
        is_read: Optional[bool] = None,
        notification_type: Optional[str] = None,
    ) -> Page:
        """Direct notifications for the user plus broadcasts of events they attend"""

        attending = select(Registration.event_id).where(
            Registration.user_id == user.id,
            Registration.status.in_(ACTIVE_REGISTRATION_STATUSES),
        )

        query = self.db.query(Notification).filter(
            or_(
                and_(
                    Notification.audience == NotificationAudience.DIRECT.value,
                    Notification.user_id == user.id,
                ),
                and_(
                    Notification.audience == NotificationAudience.BROADCAST.value,
                    Notification.event_id.in_(attending),
                ),
            )
        )

        if is_read is not None:
            query = query.filter(Notification.is_read == is_read)
        if notification_type:
            query = query.filter(Notification.type == notification_type)

        query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
        return paginate(query, pagination)

    def get_notification(self, notification_id: int, actor: User) -> Notification:
        notification = self._get_notification_or_raise(notification_id)

        # Attendees may read a broadcast but not manage it
        if notification.is_broadcast and self._is_attending(actor.id, notification.event_id):
            return notification

        self._ensure_can_manage(notification, actor)
        return notification

    def mark_as_read(self, notification_id: int, actor: User) -> Notification:
        notification = self._get_notification_or_raise(notification_id)
        self._ensure_can_manage(notification, actor)

        # Read is a one-way flag
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = datetime.now(timezone.utc)
            try:
                self.db.commit()
                self.db.refresh(notification)
            except Exception:
                self.db.rollback()
                raise

        return notification

    def mark_all_as_read(self, user: User) -> int:
        """Mark every unread direct notification of the user as read"""
        try:
            result = self.db.execute(
                update(Notification)
                .where(
                    Notification.audience == NotificationAudience.DIRECT.value,
                    Notification.user_id == user.id,
                    Notification.is_read.is_(False),
                )
                .values(is_read=True, read_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return result.rowcount

    def get_unread_count(self, user: User) -> int:
        return (
            self.db.query(Notification)
            .filter(
                Notification.audience == NotificationAudience.DIRECT.value,
                Notification.user_id == user.id,
                Notification.is_read.is_(False),
            )
            .count()
        )

    def delete_notification(self, notification_id: int, actor: User) -> bool:
        notification = self._get_notification_or_raise(notification_id)
        self._ensure_can_manage(notification, actor)

        try:
            self.db.delete(notification)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return True

    def _ensure_can_manage(self, notification: Notification, actor: User) -> None:
        """Direct rows belong to their addressee, broadcasts to the event organizer"""
        if notification.is_broadcast:
            owner_id = notification.event.organizer_id
        else:
            owner_id = notification.user_id

        if not is_owner_or_admin(actor, owner_id):
            raise PermissionDeniedError("You can only access your own notifications")

    def _is_attending(self, user_id: int, event_id: int) -> bool:
        return (
            self.db.query(Registration.id)
            .filter(
                Registration.user_id == user_id,
                Registration.event_id == event_id,
                Registration.status.in_(ACTIVE_REGISTRATION_STATUSES),
            )
            .first()
            is not None
        )

    def _get_notification_or_raise(self, notification_id: int) -> Notification:
        notification = (
            self.db.query(Notification)
            .filter(Notification.id == notification_id)
            .first()
        )
        if not notification:
            raise NotificationNotFoundError("The specified notification does not exist")
        return notification
