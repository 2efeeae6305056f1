from sqlalchemy.orm import Session
from sqlalchemy import delete, update
from typing import List
import logging

from ..models.ticket import Ticket
from ..models.registration import Registration
from ..models.user import User
from ..models.enums import ACTIVE_REGISTRATION_STATUSES
from ..schemas.ticket import TicketCreate, TicketUpdate, TicketAvailability
from ..utils.authorization import ensure_event_manager
from .event_service import get_event_or_raise
from .exceptions import (
    TicketNotFoundError,
    BusinessRuleViolationError,
    ConflictError,
)

logger = logging.getLogger(__name__)


class TicketService:
    def __init__(self, db: Session):
        self.db = db

    def create_ticket(self, ticket_data: TicketCreate, actor: User) -> Ticket:
        event = get_event_or_raise(self.db, ticket_data.event_id)
        ensure_event_manager(
            actor, event, "You can only create tickets for your own events"
        )

        try:
            ticket = Ticket(
                event_id=event.id,
                name=ticket_data.name,
                description=ticket_data.description,
                price=ticket_data.price,
                quantity=ticket_data.quantity,
                type=ticket_data.type.value,
                sold_quantity=0,
            )
            self.db.add(ticket)
            self.db.commit()
            self.db.refresh(ticket)

        except Exception:
            self.db.rollback()
            raise

        return ticket

    def get_event_tickets(self, event_id: int) -> List[Ticket]:
        """Tickets of an event, cheapest first"""
        get_event_or_raise(self.db, event_id)
        return (
            self.db.query(Ticket)
            .filter(Ticket.event_id == event_id)
            .order_by(Ticket.price.asc(), Ticket.id.asc())
            .all()
        )

    def get_ticket(self, ticket_id: int) -> Ticket:
        ticket = self.db.query(Ticket).filter(Ticket.id == ticket_id).first()
        if not ticket:
            raise TicketNotFoundError("The specified ticket does not exist")
        return ticket

    def update_ticket(
        self, ticket_id: int, ticket_updates: TicketUpdate, actor: User
    ) -> Ticket:
        ticket = self.get_ticket(ticket_id)
        ensure_event_manager(
            actor, ticket.event, "You can only update tickets for your own events"
        )

        update_data = ticket_updates.model_dump(exclude_unset=True, exclude_none=True)
        new_quantity = update_data.pop("quantity", None)

        try:
            if new_quantity is not None:
                # Guarded against reservations committed since the row was read
                result = self.db.execute(
                    update(Ticket)
                    .where(Ticket.id == ticket.id, Ticket.sold_quantity <= new_quantity)
                    .values(quantity=new_quantity)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    self.db.rollback()
                    self.db.refresh(ticket)
                    raise BusinessRuleViolationError(
                        f"Quantity cannot be lower than the {ticket.sold_quantity} "
                        "tickets already sold",
                        error="Invalid quantity",
                    )

            for field, value in update_data.items():
                setattr(ticket, field, value.value if hasattr(value, "value") else value)

            self.db.commit()

        except BusinessRuleViolationError:
            raise
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(ticket)
        return ticket

    def delete_ticket(self, ticket_id: int, actor: User) -> bool:
        ticket = self.get_ticket(ticket_id)
        ensure_event_manager(
            actor, ticket.event, "You can only delete tickets for your own events"
        )

        try:
            # Cancelled and refunded registrations go with the ticket
            self.db.execute(
                delete(Registration)
                .where(
                    Registration.ticket_id == ticket.id,
                    Registration.status.not_in(ACTIVE_REGISTRATION_STATUSES),
                )
                .execution_options(synchronize_session=False)
            )
            result = self.db.execute(
                delete(Ticket)
                .where(Ticket.id == ticket.id, Ticket.sold_quantity == 0)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise ConflictError(
                    "Tickets with active registrations cannot be deleted",
                    error="Ticket in use",
                )
            self.db.commit()

        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Ticket {ticket_id} deleted by user {actor.id}")
        return True

    def check_availability(self, ticket_id: int) -> TicketAvailability:
        """
        Availability as seen by the registration path.

        `sold_quantity` is kept equal to the summed quantity of active
        registrations, so both figures agree.
        """
        ticket = self.get_ticket(ticket_id)
        available = ticket.quantity - ticket.sold_quantity

        return TicketAvailability(
            ticket_id=ticket.id,
            total_quantity=ticket.quantity,
            sold_tickets=ticket.sold_quantity,
            available_tickets=available,
            is_available=available > 0,
        )
