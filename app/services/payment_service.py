from sqlalchemy.orm import Session
from typing import Any, Dict, Optional
import logging

from ..models.registration import Registration
from ..models.user import User
from ..models.enums import RegistrationStatus
from ..schemas.common import Page, PaginationParams
from ..schemas.payment import PaymentRequest
from ..utils.authorization import ensure_owner_or_admin
from ..utils.constants import Messages
from ..utils.payment_gateway import PaymentGateway
from .exceptions import BusinessRuleViolationError
from .registration_service import RegistrationService

logger = logging.getLogger(__name__)


class PaymentService:
    """Paid registrations and refunds through a pluggable gateway"""

    def __init__(self, db: Session, gateway: PaymentGateway):
        self.db = db
        self.gateway = gateway
        self.registrations = RegistrationService(db)

    def process_payment(self, user: User, data: PaymentRequest) -> Registration:
        """
        Reserve seats, charge the gateway, then confirm.

        The reservation and the pending registration live in one transaction
        which is rolled back if the charge fails, so a declined payment
        leaves no registration and no held capacity behind.
        """
        try:
            registration = self.registrations.open_registration(
                user,
                data.event_id,
                data.ticket_id,
                data.quantity,
                status=RegistrationStatus.PENDING,
                payment_method=data.payment_method.value,
            )

            result = self.gateway.charge(
                data.payment_method.value, data.payment_token, registration.total_amount
            )
            if not result.success:
                raise BusinessRuleViolationError(
                    result.message or "The payment could not be processed",
                    error=Messages.PAYMENT_FAILED,
                )

            registration.status = RegistrationStatus.CONFIRMED.value
            registration.payment_id = result.payment_id
            self.db.commit()

        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(registration)
        logger.info(
            f"Payment {registration.payment_id} confirmed registration "
            f"{registration.id} for user {user.id}"
        )
        return registration

    def process_refund(
        self, registration_id: int, actor: User, reason: Optional[str] = None
    ) -> Dict[str, Any]:
        """Refund a confirmed registration and release its seats"""

        registration = self.registrations.get_registration_or_raise(registration_id)
        ensure_owner_or_admin(
            actor,
            registration.user_id,
            "You can only request refunds for your own registrations",
        )

        if registration.status != RegistrationStatus.CONFIRMED.value:
            raise BusinessRuleViolationError(
                "This registration is not eligible for refund",
                error=Messages.REFUND_NOT_ELIGIBLE,
            )

        amount = registration.total_amount
        try:
            self.registrations.mark_refunded(registration, reason)

            success, refund_id = self.gateway.refund(registration.payment_id, amount)
            if not success:
                raise BusinessRuleViolationError(
                    "The refund could not be processed", error="Refund failed"
                )

            self.db.commit()

        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(registration)
        logger.info(f"Refund {refund_id} issued for registration {registration.id}")

        return {
            "refund": {
                "id": refund_id,
                "amount": float(amount),
                "reason": reason,
                "status": "completed",
            },
            "registration": registration,
        }

    def get_payment_history(
        self, user: User, pagination: PaginationParams, status: Optional[str] = None
    ) -> Page:
        return self.registrations.get_payment_history(user, pagination, status)

    def get_payment_details(self, registration_id: int, actor: User) -> Registration:
        registration = self.registrations.get_registration_or_raise(registration_id)
        ensure_owner_or_admin(
            actor, registration.user_id, "You can only view your own payment details"
        )
        return registration
