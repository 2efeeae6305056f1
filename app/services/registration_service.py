from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import update
from typing import List, Optional
from datetime import datetime, timezone
import logging

from ..models.registration import Registration
from ..models.ticket import Ticket
from ..models.user import User
from ..models.enums import RegistrationStatus, ACTIVE_REGISTRATION_STATUSES
from ..schemas.common import Page, PaginationParams
from ..schemas.registration import RegistrationCreate, RegistrationUpdate
from ..utils.authorization import ensure_owner_or_admin, ensure_event_manager
from ..utils.constants import Messages
from ..utils.service_helpers import paginate, round_currency
from .event_service import get_event_or_raise
from .exceptions import (
    RegistrationNotFoundError,
    TicketNotFoundError,
    BusinessRuleViolationError,
    ConflictError,
)

logger = logging.getLogger(__name__)


class RegistrationService:
    """
    Attendee registrations and the ticket inventory they hold.

    Capacity is tracked in `Ticket.sold_quantity` and every change to it is a
    conditional UPDATE evaluated by the database, so two requests can never
    both take the last seat. Status changes that release capacity are
    conditional on the previous status for the same reason.
    """

    def __init__(self, db: Session):
        self.db = db

    # Inventory primitives. Callers own the transaction.

    def reserve_tickets(self, ticket_id: int, quantity: int) -> bool:
        result = self.db.execute(
            update(Ticket)
            .where(
                Ticket.id == ticket_id,
                Ticket.sold_quantity + quantity <= Ticket.quantity,
            )
            .values(sold_quantity=Ticket.sold_quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def release_tickets(self, ticket_id: int, quantity: int) -> None:
        self.db.execute(
            update(Ticket)
            .where(Ticket.id == ticket_id, Ticket.sold_quantity >= quantity)
            .values(sold_quantity=Ticket.sold_quantity - quantity)
            .execution_options(synchronize_session=False)
        )

    def transition_status(
        self,
        registration: Registration,
        from_statuses,
        to_status: RegistrationStatus,
        **values,
    ) -> bool:
        """Move a registration out of `from_statuses` if nobody beat us to it"""
        result = self.db.execute(
            update(Registration)
            .where(
                Registration.id == registration.id,
                Registration.status.in_(list(from_statuses)),
                Registration.quantity == registration.quantity,
            )
            .values(status=to_status.value, **values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    # Registration flow

    def open_registration(
        self,
        user: User,
        event_id: int,
        ticket_id: int,
        quantity: int,
        status: RegistrationStatus = RegistrationStatus.CONFIRMED,
        payment_method: Optional[str] = None,
    ) -> Registration:
        """
        Validate, reserve capacity and insert the registration row.

        Leaves the transaction open: the caller commits, or rolls back to
        undo both the reservation and the row.
        """
        event = get_event_or_raise(self.db, event_id)

        ticket = (
            self.db.query(Ticket)
            .filter(Ticket.id == ticket_id, Ticket.event_id == event.id)
            .first()
        )
        if not ticket:
            raise TicketNotFoundError(
                "The specified ticket does not exist for this event"
            )

        if self._find_open_registration(user.id, event.id):
            raise ConflictError(
                "You are already registered for this event",
                error=Messages.ALREADY_REGISTERED,
            )

        if not self.reserve_tickets(ticket.id, quantity):
            self.db.rollback()
            self.db.refresh(ticket)
            raise ConflictError(
                f"Only {ticket.available_quantity} tickets available",
                error=Messages.INSUFFICIENT_TICKETS,
            )

        registration = Registration(
            user_id=user.id,
            event_id=event.id,
            ticket_id=ticket.id,
            quantity=quantity,
            total_amount=round_currency(ticket.price * quantity),
            status=status.value,
            payment_method=payment_method,
        )
        self.db.add(registration)

        try:
            self.db.flush()
        except IntegrityError:
            # A concurrent request registered the same user for this event
            self.db.rollback()
            raise ConflictError(
                "You are already registered for this event",
                error=Messages.ALREADY_REGISTERED,
            )

        return registration

    def register(self, user: User, data: RegistrationCreate) -> Registration:
        """Register the user for an event with the chosen ticket"""

        try:
            registration = self.open_registration(
                user, data.event_id, data.ticket_id, data.quantity
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(registration)
        logger.info(
            f"User {user.id} registered for event {registration.event_id} "
            f"({registration.quantity} x ticket {registration.ticket_id})"
        )
        return registration

    def get_registration(self, registration_id: int, actor: User) -> Registration:
        registration = self.get_registration_or_raise(registration_id)
        ensure_owner_or_admin(
            actor, registration.user_id, "You can only view your own registrations"
        )
        return registration

    def update_registration(
        self, registration_id: int, updates: RegistrationUpdate, actor: User
    ) -> Registration:
        """
        Change the quantity of a registration or cancel it.

        A quantity change reserves or releases only the difference, so the
        registration's own seats count as available to it.
        """
        registration = self.get_registration_or_raise(registration_id)
        ensure_owner_or_admin(
            actor, registration.user_id, "You can only update your own registrations"
        )

        if updates.status == RegistrationStatus.CANCELLED:
            return self.cancel_registration(registration_id, actor)

        if updates.quantity is None or updates.quantity == registration.quantity:
            return registration

        if not registration.is_active:
            raise BusinessRuleViolationError(
                "Only active registrations can be modified",
                error="Registration not active",
            )

        old_quantity = registration.quantity
        new_quantity = updates.quantity
        delta = new_quantity - old_quantity
        ticket = registration.ticket

        try:
            if delta > 0:
                if not self.reserve_tickets(ticket.id, delta):
                    self.db.rollback()
                    self.db.refresh(ticket)
                    raise ConflictError(
                        f"Only {ticket.available_quantity + old_quantity} "
                        "tickets available",
                        error=Messages.INSUFFICIENT_TICKETS,
                    )
            else:
                self.release_tickets(ticket.id, -delta)

            result = self.db.execute(
                update(Registration)
                .where(
                    Registration.id == registration.id,
                    Registration.quantity == old_quantity,
                    Registration.status.in_(ACTIVE_REGISTRATION_STATUSES),
                )
                .values(
                    quantity=new_quantity,
                    total_amount=round_currency(ticket.price * new_quantity),
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise ConflictError(
                    "The registration was changed by another request, please retry"
                )

            self.db.commit()

        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(registration)
        logger.info(
            f"Registration {registration.id} quantity {old_quantity} -> {new_quantity}"
        )
        return registration

    def cancel_registration(self, registration_id: int, actor: User) -> Registration:
        """Cancel an active registration and give its seats back"""

        registration = self.get_registration_or_raise(registration_id)
        ensure_owner_or_admin(
            actor, registration.user_id, "You can only cancel your own registrations"
        )

        if not registration.is_active:
            raise BusinessRuleViolationError(
                "Only active registrations can be cancelled",
                error="Registration not active",
            )

        try:
            if not self.transition_status(
                registration, ACTIVE_REGISTRATION_STATUSES, RegistrationStatus.CANCELLED
            ):
                raise ConflictError(
                    "The registration was changed by another request, please retry"
                )

            self.release_tickets(registration.ticket_id, registration.quantity)
            self.db.commit()

        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(registration)
        logger.info(f"Registration {registration.id} cancelled by user {actor.id}")
        return registration

    def release_user_registrations(self, user_id: int) -> None:
        """Give back the seats held by a user's active registrations.

        Runs inside the caller's transaction.
        """
        registrations = (
            self.db.query(Registration)
            .filter(
                Registration.user_id == user_id,
                Registration.status.in_(ACTIVE_REGISTRATION_STATUSES),
            )
            .all()
        )
        for registration in registrations:
            if self.transition_status(
                registration, ACTIVE_REGISTRATION_STATUSES, RegistrationStatus.CANCELLED
            ):
                self.release_tickets(registration.ticket_id, registration.quantity)

    def get_user_registrations(self, user_id: int) -> List[Registration]:
        return (
            self.db.query(Registration)
            .options(selectinload(Registration.event), selectinload(Registration.ticket))
            .filter(Registration.user_id == user_id)
            .order_by(Registration.created_at.desc(), Registration.id.desc())
            .all()
        )

    def get_event_attendees(self, event_id: int, actor: User) -> List[Registration]:
        """All registrations of an event, organizer of record or admin only"""

        event = get_event_or_raise(self.db, event_id)
        ensure_event_manager(
            actor, event, "You can only view attendees for your own events"
        )

        return (
            self.db.query(Registration)
            .options(selectinload(Registration.user), selectinload(Registration.ticket))
            .filter(Registration.event_id == event.id)
            .order_by(Registration.created_at.asc(), Registration.id.asc())
            .all()
        )

    def get_payment_history(
        self,
        user: User,
        pagination: PaginationParams,
        status: Optional[str] = None,
    ) -> Page:
        query = (
            self.db.query(Registration)
            .options(selectinload(Registration.event), selectinload(Registration.ticket))
            .filter(Registration.user_id == user.id)
        )
        if status:
            query = query.filter(Registration.status == status)

        query = query.order_by(Registration.created_at.desc(), Registration.id.desc())
        return paginate(query, pagination)

    def mark_refunded(self, registration: Registration, reason: Optional[str]) -> None:
        """Flip a confirmed registration to refunded and release its seats.

        Runs inside the caller's transaction.
        """
        if not self.transition_status(
            registration,
            [RegistrationStatus.CONFIRMED.value],
            RegistrationStatus.REFUNDED,
            refund_reason=reason,
            refunded_at=datetime.now(timezone.utc),
        ):
            raise ConflictError(
                "The registration was changed by another request, please retry"
            )

        self.release_tickets(registration.ticket_id, registration.quantity)

    def get_registration_or_raise(self, registration_id: int) -> Registration:
        registration = (
            self.db.query(Registration)
            .filter(Registration.id == registration_id)
            .first()
        )
        if not registration:
            raise RegistrationNotFoundError(
                "The specified registration does not exist"
            )
        return registration

    def _find_open_registration(
        self, user_id: int, event_id: int
    ) -> Optional[Registration]:
        return (
            self.db.query(Registration)
            .filter(
                Registration.user_id == user_id,
                Registration.event_id == event_id,
                Registration.status != RegistrationStatus.CANCELLED.value,
            )
            .first()
        )
