from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from typing import List, Optional
import logging

from ..models.event import Event
from ..models.registration import Registration
from ..models.user import User
from ..schemas.common import Page, PaginationParams
from ..schemas.user import UserUpdate
from ..utils.authorization import ensure_owner_or_admin, ensure_admin
from ..utils.service_helpers import paginate
from .auth_service import EMAIL_EXISTS, EMAIL_EXISTS_MESSAGE
from .exceptions import (
    UserNotFoundError,
    PermissionDeniedError,
    BusinessRuleViolationError,
    ConflictError,
)
from .registration_service import RegistrationService

logger = logging.getLogger(__name__)


class UserService:
    """Account administration"""

    def __init__(self, db: Session):
        self.db = db

    def list_users(
        self, actor: User, pagination: PaginationParams, role: Optional[str] = None
    ) -> Page:
        ensure_admin(actor)

        query = self.db.query(User)
        if role:
            query = query.filter(User.role == role)

        query = query.order_by(User.created_at.desc(), User.id.desc())
        return paginate(query, pagination)

    def get_user(self, user_id: int, actor: User) -> User:
        user = self._get_user_or_raise(user_id)
        ensure_owner_or_admin(actor, user.id, "You can only view your own profile")
        return user

    def update_user(self, user_id: int, updates: UserUpdate, actor: User) -> User:
        user = self._get_user_or_raise(user_id)
        ensure_owner_or_admin(actor, user.id, "You can only update your own profile")

        update_data = updates.model_dump(exclude_unset=True, exclude_none=True)

        if "role" in update_data and not actor.is_admin:
            raise PermissionDeniedError("Only administrators can change user roles")

        new_email = update_data.get("email")
        if new_email and new_email != user.email:
            existing = User.find_by_email(self.db, new_email)
            if existing and existing.id != user.id:
                raise ConflictError(EMAIL_EXISTS_MESSAGE, error=EMAIL_EXISTS)

        for field, value in update_data.items():
            setattr(user, field, value.value if hasattr(value, "value") else value)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(EMAIL_EXISTS_MESSAGE, error=EMAIL_EXISTS)

        self.db.refresh(user)
        return user

    def delete_user(self, user_id: int, actor: User) -> bool:
        """
        Delete an account and everything it owns.

        Seats held by the user's active registrations are released first so
        ticket counts stay consistent.
        """
        user = self._get_user_or_raise(user_id)
        ensure_admin(actor, "Only administrators can delete users")

        if user.id == actor.id:
            raise BusinessRuleViolationError(
                "You cannot delete your own account", error="Cannot delete self"
            )

        try:
            RegistrationService(self.db).release_user_registrations(user.id)
            # Statuses were changed with core UPDATEs, reload before cascading
            self.db.expire(user)
            self.db.delete(user)
            self.db.commit()

        except Exception:
            self.db.rollback()
            raise

        logger.info(f"User {user_id} deleted by admin {actor.id}")
        return True

    def get_user_events(self, user_id: int, actor: User) -> List[Event]:
        user = self._get_user_or_raise(user_id)
        ensure_owner_or_admin(actor, user.id, "You can only view your own events")

        return (
            self.db.query(Event)
            .options(selectinload(Event.tickets))
            .filter(Event.organizer_id == user.id)
            .order_by(Event.date.asc(), Event.time.asc())
            .all()
        )

    def get_user_registrations(self, user_id: int, actor: User) -> List[Registration]:
        user = self._get_user_or_raise(user_id)
        ensure_owner_or_admin(
            actor, user.id, "You can only view your own registrations"
        )
        return RegistrationService(self.db).get_user_registrations(user.id)

    def _get_user_or_raise(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise UserNotFoundError("The specified user does not exist")
        return user
