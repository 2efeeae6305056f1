from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..models.user import User
from ..services.auth_service import AuthService
from ..schemas.user import UserResponse
from ..schemas.auth import (
    RegisterRequest,
    LoginRequest,
    GoogleLoginRequest,
    ProfileUpdate,
    AuthResponse,
)
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.permissions import get_current_user

router = APIRouter(tags=["authentication"])


# Auth Endpoints
@router.post("/register", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
def register_user(
    user_data: RegisterRequest,
    db: Session = Depends(get_db),
):
    """Register a new local account"""
    user, token = AuthService(db).register(user_data)

    return RouterResponse.created(
        data=AuthResponse(user=UserResponse.model_validate(user), token=token),
        message="User registered successfully",
    )


@router.post("/login", response_model=Dict[str, Any])
@handle_service_errors
def login_user(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
):
    """Login with email and password"""
    user, token = AuthService(db).login(credentials.email, credentials.password)

    return RouterResponse.success(
        data=AuthResponse(user=UserResponse.model_validate(user), token=token),
        message="Login successful",
    )


@router.post("/google", response_model=Dict[str, Any])
@handle_service_errors
async def google_login(
    google_data: GoogleLoginRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """Login with a Google account, creating the account on first use"""
    user, token, created = AuthService(db).google_login(google_data)

    if created:
        response.status_code = status.HTTP_201_CREATED

    return RouterResponse.success(
        data=AuthResponse(user=UserResponse.model_validate(user), token=token),
        message="Google login successful",
    )


@router.get("/profile", response_model=Dict[str, Any])
@handle_service_errors
async def get_profile(current_user: User = Depends(get_current_user)):
    """Get the caller's profile"""
    return RouterResponse.success(
        data={"user": UserResponse.model_validate(current_user)},
        message="Profile retrieved successfully",
    )


@router.put("/profile", response_model=Dict[str, Any])
@handle_service_errors
async def update_profile(
    profile_data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update the caller's name or email"""
    user = AuthService(db).update_profile(current_user, profile_data)

    return RouterResponse.updated(
        data={"user": UserResponse.model_validate(user)},
        message="Profile updated successfully",
    )
