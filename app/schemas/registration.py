from pydantic import Field, validator
from typing import Optional
from datetime import datetime
from ..models.enums import RegistrationStatus, PaymentMethod
from ..utils.constants import AppConstants
from .common import CamelModel
from .event import EventSummary
from .ticket import TicketSummary
from .user import UserSummary


class RegistrationCreate(CamelModel):
    event_id: int
    ticket_id: int
    quantity: int = Field(1, ge=1, le=AppConstants.MAX_REGISTRATION_QUANTITY)


class RegistrationUpdate(CamelModel):
    quantity: Optional[int] = Field(
        None, ge=1, le=AppConstants.MAX_REGISTRATION_QUANTITY
    )
    status: Optional[RegistrationStatus] = None

    @validator("status")
    def only_cancellation(cls, v):
        if v is not None and v != RegistrationStatus.CANCELLED:
            raise ValueError("Status can only be changed to cancelled")
        return v


class RegistrationResponse(CamelModel):
    id: int
    user_id: int
    event_id: int
    ticket_id: int
    quantity: int
    total_amount: float
    status: RegistrationStatus
    payment_method: Optional[PaymentMethod] = None
    payment_id: Optional[str] = None
    refund_reason: Optional[str] = None
    refunded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    event: Optional[EventSummary] = None
    ticket: Optional[TicketSummary] = None


class AttendeeResponse(RegistrationResponse):
    """Registration as seen by the event organizer"""

    user: Optional[UserSummary] = None
