from pydantic import Field, validator
from typing import List, Optional
from datetime import datetime
from ..models.enums import NotificationType, NotificationAudience
from .common import CamelModel


class NotificationCreate(CamelModel):
    event_id: int
    title: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=1000)
    type: NotificationType = NotificationType.INFO
    target_users: Optional[List[int]] = None

    @validator("target_users")
    def dedupe_targets(cls, v):
        if v is None:
            return v
        # Keep first-seen order
        return list(dict.fromkeys(v))


class NotificationResponse(CamelModel):
    id: int
    event_id: int
    user_id: Optional[int] = None
    audience: NotificationAudience
    title: str
    message: str
    type: NotificationType
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
