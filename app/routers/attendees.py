from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..models.user import User
from ..services.registration_service import RegistrationService
from ..schemas.registration import (
    RegistrationCreate,
    RegistrationUpdate,
    RegistrationResponse,
    AttendeeResponse,
)
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.permissions import get_current_user

router = APIRouter(tags=["attendees"])


@router.post("/register", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def register_for_event(
    registration_data: RegistrationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Register the caller for an event"""
    registration = RegistrationService(db).register(current_user, registration_data)

    return RouterResponse.created(
        data={"registration": RegistrationResponse.model_validate(registration)},
        message="Successfully registered for event",
    )


@router.get("/my-registrations", response_model=Dict[str, Any])
@handle_service_errors
async def get_my_registrations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    registrations = RegistrationService(db).get_user_registrations(current_user.id)

    return RouterResponse.success(
        data={
            "registrations": [
                RegistrationResponse.model_validate(r) for r in registrations
            ]
        },
        message="Registrations retrieved successfully",
    )


@router.get("/event/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_event_attendees(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Registrations of an event (organizer or admin)"""
    attendees = RegistrationService(db).get_event_attendees(event_id, current_user)

    return RouterResponse.success(
        data={"attendees": [AttendeeResponse.model_validate(a) for a in attendees]},
        message="Attendees retrieved successfully",
    )


@router.get("/{registration_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_registration(
    registration_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    registration = RegistrationService(db).get_registration(
        registration_id, current_user
    )

    return RouterResponse.success(
        data={"registration": RegistrationResponse.model_validate(registration)},
        message="Registration retrieved successfully",
    )


@router.put("/{registration_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_registration(
    registration_id: int,
    registration_data: RegistrationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    registration = RegistrationService(db).update_registration(
        registration_id, registration_data, current_user
    )

    return RouterResponse.updated(
        data={"registration": RegistrationResponse.model_validate(registration)},
        message="Registration updated successfully",
    )


@router.delete("/{registration_id}", response_model=Dict[str, Any])
@handle_service_errors
async def cancel_registration(
    registration_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Cancel a registration and release its tickets"""
    registration = RegistrationService(db).cancel_registration(
        registration_id, current_user
    )

    return RouterResponse.updated(
        data={"registration": RegistrationResponse.model_validate(registration)},
        message="Registration cancelled successfully",
    )
