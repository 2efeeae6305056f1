from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..models.user import User
from ..services.ticket_service import TicketService
from ..schemas.ticket import TicketCreate, TicketUpdate, TicketResponse
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.permissions import get_current_user, require_organizer

router = APIRouter(tags=["tickets"])


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_ticket(
    ticket_data: TicketCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organizer),
):
    ticket = TicketService(db).create_ticket(ticket_data, current_user)

    return RouterResponse.created(
        data={"ticket": TicketResponse.model_validate(ticket)},
        message="Ticket created successfully",
    )


@router.get("/event/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_event_tickets(event_id: int, db: Session = Depends(get_db)):
    tickets = TicketService(db).get_event_tickets(event_id)

    return RouterResponse.success(
        data={"tickets": [TicketResponse.model_validate(t) for t in tickets]},
        message="Tickets retrieved successfully",
    )


@router.get("/check-availability/{ticket_id}", response_model=Dict[str, Any])
@handle_service_errors
async def check_ticket_availability(ticket_id: int, db: Session = Depends(get_db)):
    availability = TicketService(db).check_availability(ticket_id)

    return RouterResponse.success(
        data=availability, message="Ticket availability retrieved successfully"
    )


@router.get("/{ticket_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_ticket(ticket_id: int, db: Session = Depends(get_db)):
    ticket = TicketService(db).get_ticket(ticket_id)

    return RouterResponse.success(
        data={"ticket": TicketResponse.model_validate(ticket)},
        message="Ticket retrieved successfully",
    )


@router.put("/{ticket_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_ticket(
    ticket_id: int,
    ticket_data: TicketUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ticket = TicketService(db).update_ticket(ticket_id, ticket_data, current_user)

    return RouterResponse.updated(
        data={"ticket": TicketResponse.model_validate(ticket)},
        message="Ticket updated successfully",
    )


@router.delete("/{ticket_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_ticket(
    ticket_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    TicketService(db).delete_ticket(ticket_id, current_user)

    return RouterResponse.deleted(message="Ticket deleted successfully")
