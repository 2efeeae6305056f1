from pydantic import Field, validator
from typing import List, Optional
from datetime import datetime
from .common import CamelModel
from .user import UserSummary


class ForumPostCreate(CamelModel):
    event_id: int
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    content: str = Field(..., min_length=1, max_length=2000)

    @validator("content")
    def content_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Content cannot be empty")
        return v.strip()


class ForumReplyCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=2000)

    @validator("content")
    def content_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Content cannot be empty")
        return v.strip()


class ForumPostUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    content: Optional[str] = Field(None, min_length=1, max_length=2000)

    @validator("content")
    def content_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Content cannot be empty")
        return v.strip() if v is not None else v


class ForumPostResponse(CamelModel):
    id: int
    event_id: int
    user_id: int
    parent_id: Optional[int] = None
    title: Optional[str] = None
    content: str
    user: Optional[UserSummary] = None
    reply_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ForumThreadResponse(ForumPostResponse):
    """A post with its full reply tree"""

    replies: List["ForumThreadResponse"] = []


ForumThreadResponse.model_rebuild()
