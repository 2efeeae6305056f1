from datetime import datetime, timedelta, timezone
from typing import Any, Dict
import logging

from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext

from ..config import JWT_SECRET, JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_HOURS
from ..services.exceptions import AuthenticationError
from .constants import Messages

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(plain_password, password_hash)


def create_access_token(user, expires_delta: timedelta = None) -> str:
    """Issue a signed token carrying the user's id, email and role"""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)
    )
    claims = {
        "sub": str(user.id),
        "userId": user.id,
        "email": user.email,
        "role": user.role,
        "exp": expire,
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify a token and return its claims.

    Raises AuthenticationError for expired, tampered or malformed tokens.
    """
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationError(Messages.TOKEN_EXPIRED, error="Token expired")
    except JWTError as e:
        logger.warning(f"Rejected token: {e}")
        raise AuthenticationError("Invalid token", error="Invalid token")

    if payload.get("sub") is None:
        raise AuthenticationError("Invalid token", error="Invalid token")

    return payload
