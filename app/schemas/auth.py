from pydantic import EmailStr, Field, validator
from typing import Optional
from ..models.enums import UserRole
from ..utils.constants import AppConstants
from .common import CamelModel
from .user import UserResponse


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=AppConstants.MIN_PASSWORD_LENGTH)
    role: Optional[UserRole] = None

    @validator("name")
    def strip_name(cls, v):
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be between 2 and 50 characters")
        return v

    @validator("role")
    def no_self_assigned_admin(cls, v):
        if v == UserRole.ADMIN:
            raise ValueError("Role must be either user or organizer")
        return v


class GoogleLoginRequest(CamelModel):
    google_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None


class AuthResponse(CamelModel):
    user: UserResponse
    token: str
