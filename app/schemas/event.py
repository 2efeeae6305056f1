from pydantic import Field, validator
from typing import List, Optional
from datetime import date as date_type, datetime
from ..models.enums import EventCategory, EventPrivacy
from ..utils.validation import ValidationHelpers
from .common import CamelModel
from .ticket import TicketResponse
from .user import UserSummary


def _check_time(v):
    if v is None:
        return v
    if not ValidationHelpers.validate_time(v):
        raise ValueError("Time must be in HH:MM format")
    return ValidationHelpers.normalize_time(v)


class EventBase(CamelModel):
    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    date: date_type
    time: str
    location: str = Field(..., min_length=3, max_length=200)
    category: EventCategory
    privacy: EventPrivacy = EventPrivacy.PUBLIC


class EventCreate(EventBase):
    @validator("time")
    def validate_time(cls, v):
        return _check_time(v)

    @validator("title", "description", "location")
    def strip_text(cls, v):
        return v.strip()


class EventUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    date: Optional[date_type] = None
    time: Optional[str] = None
    location: Optional[str] = Field(None, min_length=3, max_length=200)
    category: Optional[EventCategory] = None
    privacy: Optional[EventPrivacy] = None

    @validator("time")
    def validate_time(cls, v):
        return _check_time(v)


class EventSummary(CamelModel):
    id: int
    title: str
    date: date_type
    time: str
    location: str


class EventResponse(EventBase):
    id: int
    organizer_id: int
    organizer: Optional[UserSummary] = None
    tickets: List[TicketResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
