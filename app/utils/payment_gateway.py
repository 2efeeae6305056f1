from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple
import logging
import uuid

from ..config import PAYMENT_GATEWAY

logger = logging.getLogger(__name__)


@dataclass
class ChargeResult:
    success: bool
    payment_id: Optional[str] = None
    message: str = ""


class PaymentGateway:
    """Simulated payment provider. Every charge and refund succeeds."""

    name = "simulated"

    def charge(self, method: str, token: Optional[str], amount: Decimal) -> ChargeResult:
        """Charge `amount` using the given payment method"""
        payment_id = f"pay_{uuid.uuid4().hex[:24]}"
        logger.info(f"Charged {amount} via {method} ({payment_id})")
        return ChargeResult(success=True, payment_id=payment_id, message="Payment successful")

    def refund(self, payment_id: Optional[str], amount: Decimal) -> Tuple[bool, Optional[str]]:
        """Refund a previous charge, returns (success, refund_id)"""
        refund_id = f"ref_{uuid.uuid4().hex[:24]}"
        logger.info(f"Refunded {amount} for {payment_id} ({refund_id})")
        return True, refund_id


class DecliningPaymentGateway(PaymentGateway):
    """Provider that declines every charge and refund"""

    name = "declining"

    def charge(self, method: str, token: Optional[str], amount: Decimal) -> ChargeResult:
        logger.info(f"Declined charge of {amount} via {method}")
        return ChargeResult(success=False, message="Card declined")

    def refund(self, payment_id: Optional[str], amount: Decimal) -> Tuple[bool, Optional[str]]:
        logger.info(f"Declined refund for {payment_id}")
        return False, None


GATEWAYS = {
    PaymentGateway.name: PaymentGateway,
    DecliningPaymentGateway.name: DecliningPaymentGateway,
}


def get_payment_gateway() -> PaymentGateway:
    """FastAPI dependency returning the configured gateway"""
    gateway_cls = GATEWAYS.get(PAYMENT_GATEWAY)
    if gateway_cls is None:
        raise ValueError(f"Unknown payment gateway: {PAYMENT_GATEWAY}")
    return gateway_cls()
