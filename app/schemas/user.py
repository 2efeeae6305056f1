from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime
from ..models.enums import UserRole
from .common import CamelModel


class UserSummary(CamelModel):
    """Public user information embedded in other resources"""

    id: int
    name: str
    email: str


class UserResponse(UserSummary):
    """User information for API responses"""

    role: UserRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdate(CamelModel):
    """Update a user account. Only admins may change `role`."""

    name: Optional[str] = Field(None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
