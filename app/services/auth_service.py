from typing import Tuple
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.enums import UserRole
from ..models.user import User
from ..schemas.auth import RegisterRequest, GoogleLoginRequest, ProfileUpdate
from ..utils.constants import Messages
from ..utils.security import hash_password, verify_password, create_access_token
from .exceptions import AuthenticationError, ConflictError

logger = logging.getLogger(__name__)

EMAIL_EXISTS = "Email already exists"
EMAIL_EXISTS_MESSAGE = "A user with this email address already exists"


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def register(self, data: RegisterRequest) -> Tuple[User, str]:
        """Create a local account and issue a token"""

        if User.find_by_email(self.db, data.email):
            raise ConflictError(EMAIL_EXISTS_MESSAGE, error=EMAIL_EXISTS)

        user = User(
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
            role=(data.role or UserRole.USER).value,
        )

        self._save_new_user(user)
        logger.info(f"Registered user {user.id} ({user.role})")
        return user, create_access_token(user)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        """Authenticate with email and password.

        Unknown email, wrong password and OAuth-only accounts all fail with
        the same message.
        """
        user = User.find_by_email(self.db, email)

        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError(
                Messages.INVALID_CREDENTIALS, error="Invalid credentials"
            )

        return user, create_access_token(user)

    def google_login(self, data: GoogleLoginRequest) -> Tuple[User, str, bool]:
        """
        Sign in with a Google account id.

        Looks up the linked account first, then links the id to an existing
        account with the same email, and only then creates a new account.
        Returns (user, token, created).
        """
        user = User.find_by_google_id(self.db, data.google_id)
        if user:
            return user, create_access_token(user), False

        user = User.find_by_email(self.db, data.email)
        if user:
            user.google_id = data.google_id
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise ConflictError(
                    "This Google account is already linked", error="Conflict"
                )
            self.db.refresh(user)
            logger.info(f"Linked Google account to user {user.id}")
            return user, create_access_token(user), False

        user = User(
            name=data.name,
            email=data.email,
            google_id=data.google_id,
            role=UserRole.USER.value,
        )
        self._save_new_user(user)
        logger.info(f"Created user {user.id} from Google login")
        return user, create_access_token(user), True

    def update_profile(self, user: User, data: ProfileUpdate) -> User:
        updates = data.model_dump(exclude_unset=True, exclude_none=True)

        new_email = updates.get("email")
        if new_email and new_email != user.email:
            existing = User.find_by_email(self.db, new_email)
            if existing and existing.id != user.id:
                raise ConflictError(EMAIL_EXISTS_MESSAGE, error=EMAIL_EXISTS)

        for field, value in updates.items():
            setattr(user, field, value)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(EMAIL_EXISTS_MESSAGE, error=EMAIL_EXISTS)

        self.db.refresh(user)
        return user

    def _save_new_user(self, user: User) -> None:
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup using the same email
            self.db.rollback()
            raise ConflictError(EMAIL_EXISTS_MESSAGE, error=EMAIL_EXISTS)
        self.db.refresh(user)
