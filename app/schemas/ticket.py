from pydantic import Field
from typing import Optional
from datetime import datetime
from ..models.enums import TicketType
from .common import CamelModel


class TicketBase(CamelModel):
    name: str = Field(..., min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    type: TicketType = TicketType.REGULAR


class TicketCreate(TicketBase):
    event_id: int


class TicketUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    price: Optional[float] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, ge=1)
    type: Optional[TicketType] = None


class TicketResponse(TicketBase):
    id: int
    event_id: int
    sold_quantity: int
    available_quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TicketSummary(CamelModel):
    id: int
    name: str
    price: float
    type: TicketType


class TicketAvailability(CamelModel):
    ticket_id: int
    total_quantity: int
    sold_tickets: int
    available_tickets: int
    is_available: bool
