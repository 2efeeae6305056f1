from pydantic import Field
from typing import Optional
from ..models.enums import PaymentMethod
from ..utils.constants import AppConstants
from .common import CamelModel


class PaymentRequest(CamelModel):
    event_id: int
    ticket_id: int
    quantity: int = Field(1, ge=1, le=AppConstants.MAX_REGISTRATION_QUANTITY)
    payment_method: PaymentMethod
    payment_token: Optional[str] = Field(None, max_length=500)


class RefundRequest(CamelModel):
    reason: Optional[str] = Field(None, max_length=500)
