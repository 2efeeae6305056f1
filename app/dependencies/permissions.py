from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from ..database import get_db
from ..models.user import User
from ..services.exceptions import AuthenticationError
from ..utils.router_helpers import error_detail
from ..utils.security import decode_access_token
import logging

security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)


def _unauthorized(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error_detail(error, message),
        headers={"WWW-Authenticate": "Bearer"},
    )


def _load_user(token: str, db: Session) -> User:
    try:
        payload = decode_access_token(token)
    except AuthenticationError as e:
        raise _unauthorized(e.error, e.message)

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token", "Invalid token")

    # Always re-read the row so deleted users and role changes take effect
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.warning(f"Token presented for missing user {user_id}")
        raise _unauthorized("Invalid token", "User no longer exists")

    return user


# Auth Helper Functions
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current authenticated user from the bearer token"""
    if credentials is None:
        raise _unauthorized("Access denied", "No token provided")

    return _load_user(credentials.credentials, db)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Resolve the caller when a token is present, anonymous otherwise"""
    if credentials is None:
        return None

    return _load_user(credentials.credentials, db)


async def require_organizer(
    current_user: User = Depends(get_current_user),
) -> User:
    """Ensure user is an organizer or admin"""
    if not current_user.is_organizer:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error_detail("Forbidden", "Organizer or admin role required"),
        )
    return current_user


async def require_admin(
    current_user: User = Depends(get_current_user),
) -> User:
    """Ensure user is an admin"""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error_detail("Forbidden", "Admin access required"),
        )
    return current_user
