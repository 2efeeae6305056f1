from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional
from datetime import date
from ..database import get_db
from ..models.user import User
from ..models.enums import EventCategory
from ..services.event_service import EventService
from ..services.registration_service import RegistrationService
from ..schemas.common import PaginationParams
from ..schemas.event import EventCreate, EventUpdate, EventResponse
from ..schemas.registration import AttendeeResponse
from ..utils.constants import AppConstants
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.pagination import pagination_params
from ..dependencies.permissions import (
    get_current_user,
    get_optional_user,
    require_organizer,
)

router = APIRouter(tags=["events"])


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organizer),
):
    """Create a new event (organizers and admins)"""
    event = EventService(db).create_event(event_data, current_user)

    return RouterResponse.created(
        data={"event": EventResponse.model_validate(event)},
        message="Event created successfully",
    )


@router.get("", response_model=Dict[str, Any])
@handle_service_errors
async def get_events(
    q: Optional[str] = Query(
        None, min_length=AppConstants.MIN_SEARCH_LENGTH, description="Search text"
    ),
    category: Optional[EventCategory] = Query(None),
    location: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None, alias="date", description="On or after"),
    pagination: PaginationParams = Depends(pagination_params),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """Search events visible to the caller"""
    page = EventService(db).list_events(
        viewer=current_user,
        pagination=pagination,
        q=q,
        category=category.value if category else None,
        location=location,
        date_from=date_from,
    )

    return RouterResponse.success(
        data={
            "events": [EventResponse.model_validate(e) for e in page.items],
            "pagination": page.pagination,
        },
        message="Events retrieved successfully",
    )


@router.get("/my-events", response_model=Dict[str, Any])
@handle_service_errors
async def get_my_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Events organized by the caller"""
    events = EventService(db).get_my_events(current_user)

    return RouterResponse.success(
        data={"events": [EventResponse.model_validate(e) for e in events]},
        message="Your events retrieved successfully",
    )


@router.get("/{event_id}/attendees", response_model=Dict[str, Any])
@handle_service_errors
async def get_event_attendees(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    attendees = RegistrationService(db).get_event_attendees(event_id, current_user)

    return RouterResponse.success(
        data={"attendees": [AttendeeResponse.model_validate(a) for a in attendees]},
        message="Attendees retrieved successfully",
    )


@router.get("/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    event = EventService(db).get_event(event_id, current_user)

    return RouterResponse.success(
        data={"event": EventResponse.model_validate(event)},
        message="Event retrieved successfully",
    )


@router.put("/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_event(
    event_id: int,
    event_data: EventUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    event = EventService(db).update_event(event_id, event_data, current_user)

    return RouterResponse.updated(
        data={"event": EventResponse.model_validate(event)},
        message="Event updated successfully",
    )


@router.delete("/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    EventService(db).delete_event(event_id, current_user)

    return RouterResponse.deleted(message="Event deleted successfully")
