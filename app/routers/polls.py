from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional
from ..database import get_db
from ..models.user import User
from ..services.poll_service import PollService
from ..schemas.poll import PollCreate, PollUpdate, PollVoteCreate
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.permissions import (
    get_current_user,
    get_optional_user,
    require_organizer,
)

router = APIRouter(tags=["polls"])


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_poll(
    poll_data: PollCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organizer),
):
    service = PollService(db)
    poll = service.create_poll(poll_data, current_user)

    return RouterResponse.created(
        data={"poll": service.to_response(poll, current_user)},
        message="Poll created successfully",
    )


@router.get("/event/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_event_polls(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    service = PollService(db)
    polls = service.get_event_polls(event_id, current_user)

    return RouterResponse.success(
        data={"polls": [service.to_response(p, current_user) for p in polls]},
        message="Polls retrieved successfully",
    )


@router.get("/{poll_id}/results", response_model=Dict[str, Any])
@handle_service_errors
async def get_poll_results(
    poll_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """Vote count for every option"""
    results = PollService(db).get_results(poll_id, current_user)

    return RouterResponse.success(
        data=results, message="Poll results retrieved successfully"
    )


@router.get("/{poll_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_poll(
    poll_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    service = PollService(db)
    poll = service.get_poll(poll_id, current_user)

    return RouterResponse.success(
        data={"poll": service.to_response(poll, current_user)},
        message="Poll retrieved successfully",
    )


@router.put("/{poll_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_poll(
    poll_id: int,
    poll_data: PollUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = PollService(db)
    poll = service.update_poll(poll_id, poll_data, current_user)

    return RouterResponse.updated(
        data={"poll": service.to_response(poll, current_user)},
        message="Poll updated successfully",
    )


@router.delete("/{poll_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_poll(
    poll_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    PollService(db).delete_poll(poll_id, current_user)

    return RouterResponse.deleted(message="Poll deleted successfully")


@router.post("/{poll_id}/vote", response_model=Dict[str, Any])
@handle_service_errors
async def vote_on_poll(
    poll_id: int,
    vote_data: PollVoteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = PollService(db)
    poll = service.vote(poll_id, vote_data.selected_option, current_user)

    return RouterResponse.success(
        data={"poll": service.to_response(poll, current_user)},
        message="Vote recorded successfully",
    )
