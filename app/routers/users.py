from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional
from ..database import get_db
from ..models.user import User
from ..models.enums import UserRole
from ..services.user_service import UserService
from ..schemas.common import PaginationParams
from ..schemas.event import EventResponse
from ..schemas.registration import RegistrationResponse
from ..schemas.user import UserResponse, UserUpdate
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.pagination import pagination_params
from ..dependencies.permissions import get_current_user, require_admin

router = APIRouter(tags=["users"])


@router.get("", response_model=Dict[str, Any])
@handle_service_errors
async def list_users(
    role: Optional[UserRole] = Query(None, description="Filter by role"),
    pagination: PaginationParams = Depends(pagination_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """List all users (admin only)"""
    page = UserService(db).list_users(
        current_user, pagination, role.value if role else None
    )

    return RouterResponse.success(
        data={
            "users": [UserResponse.model_validate(u) for u in page.items],
            "pagination": page.pagination,
        },
        message="Users retrieved successfully",
    )


@router.get("/{user_id}/events", response_model=Dict[str, Any])
@handle_service_errors
async def get_user_events(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    events = UserService(db).get_user_events(user_id, current_user)

    return RouterResponse.success(
        data={"events": [EventResponse.model_validate(e) for e in events]},
        message="User events retrieved successfully",
    )


@router.get("/{user_id}/registrations", response_model=Dict[str, Any])
@handle_service_errors
async def get_user_registrations(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    registrations = UserService(db).get_user_registrations(user_id, current_user)

    return RouterResponse.success(
        data={
            "registrations": [
                RegistrationResponse.model_validate(r) for r in registrations
            ]
        },
        message="User registrations retrieved successfully",
    )


@router.get("/{user_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = UserService(db).get_user(user_id, current_user)

    return RouterResponse.success(
        data={"user": UserResponse.model_validate(user)},
        message="User retrieved successfully",
    )


@router.put("/{user_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update a user (self or admin; only admins may change roles)"""
    user = UserService(db).update_user(user_id, user_data, current_user)

    return RouterResponse.updated(
        data={"user": UserResponse.model_validate(user)},
        message="User updated successfully",
    )


@router.delete("/{user_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a user (admin only)"""
    UserService(db).delete_user(user_id, current_user)

    return RouterResponse.deleted(message="User deleted successfully")
